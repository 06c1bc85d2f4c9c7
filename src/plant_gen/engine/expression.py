"""Arithmetic and condition expressions used by parametric rules.

Rule conditions (``thick > 0.05``) and the arguments inside rule outputs
(``F(len*0.62,thick)``) are compiled once into a small AST and evaluated
against the parameter values bound from the symbol being rewritten.
"""

import logging
import warnings
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Mapping

import numpy as np
from lark import Lark, Transformer, v_args
from lark.exceptions import LarkError

from .symbol import format_number
from .tokenizer import find_closing, split_arguments

logger = logging.getLogger(__name__)

EXPRESSION_GRAMMAR = r"""
    ?condition: disjunction

    ?disjunction: conjunction
                | disjunction "||" conjunction  -> or_
    ?conjunction: negation
                | conjunction "&&" negation     -> and_
    ?negation: "!" negation                     -> not_
             | comparison
    ?comparison: sum
               | sum COMPARATOR sum             -> compare

    ?sum: product
        | sum "+" product                       -> add
        | sum "-" product                       -> sub
    ?product: unary
            | product "*" unary                 -> mul
            | product "/" unary                 -> div
    ?unary: "-" unary                           -> neg
          | "+" unary
          | atom
    ?atom: NUMBER                               -> number
         | NAME                                 -> variable
         | "(" disjunction ")"

    COMPARATOR: ">=" | "<=" | "==" | "!=" | ">" | "<"

    %import common.NUMBER
    %import common.CNAME -> NAME
    %import common.WS
    %ignore WS
"""


class ExpressionError(ValueError):
    """Expression text that cannot be parsed or evaluated."""


class ConditionWarning(UserWarning):
    """A rule condition could not be evaluated; the rule is skipped."""


class Node:
    def evaluate(self, values: Mapping[str, float]) -> float:
        raise NotImplementedError


@dataclass(frozen=True)
class Number(Node):
    value: float

    def evaluate(self, values: Mapping[str, float]) -> float:
        return self.value


@dataclass(frozen=True)
class Variable(Node):
    name: str

    def evaluate(self, values: Mapping[str, float]) -> float:
        try:
            return float(values[self.name])
        except KeyError:
            raise ExpressionError(f"Unknown parameter '{self.name}'") from None


@dataclass(frozen=True)
class UnaryOp(Node):
    operand: Node

    def evaluate(self, values: Mapping[str, float]) -> float:
        return -self.operand.evaluate(values)


@dataclass(frozen=True)
class BinaryOp(Node):
    op: str
    left: Node
    right: Node

    def evaluate(self, values: Mapping[str, float]) -> float:
        a = self.left.evaluate(values)
        b = self.right.evaluate(values)
        if self.op == "+":
            return a + b
        if self.op == "-":
            return a - b
        if self.op == "*":
            return a * b
        # x/0 gives inf or nan, like the renderer's float math
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.divide(np.float64(a), np.float64(b)))


@dataclass(frozen=True)
class Compare(Node):
    op: str
    left: Node
    right: Node

    def evaluate(self, values: Mapping[str, float]) -> float:
        a = self.left.evaluate(values)
        b = self.right.evaluate(values)
        result = {
            ">=": a >= b,
            "<=": a <= b,
            "==": a == b,
            "!=": a != b,
            ">": a > b,
            "<": a < b,
        }[self.op]
        return 1.0 if result else 0.0


@dataclass(frozen=True)
class BoolOp(Node):
    op: str
    left: Node
    right: Node

    def evaluate(self, values: Mapping[str, float]) -> float:
        left = bool(self.left.evaluate(values))
        if self.op == "&&":
            result = left and bool(self.right.evaluate(values))
        else:
            result = left or bool(self.right.evaluate(values))
        return 1.0 if result else 0.0


@dataclass(frozen=True)
class Not(Node):
    operand: Node

    def evaluate(self, values: Mapping[str, float]) -> float:
        return 0.0 if self.operand.evaluate(values) else 1.0


@v_args(inline=True)
class AstBuilder(Transformer):
    def number(self, token):
        return Number(float(token))

    def variable(self, token):
        return Variable(str(token))

    def neg(self, operand):
        return UnaryOp(operand)

    def add(self, left, right):
        return BinaryOp("+", left, right)

    def sub(self, left, right):
        return BinaryOp("-", left, right)

    def mul(self, left, right):
        return BinaryOp("*", left, right)

    def div(self, left, right):
        return BinaryOp("/", left, right)

    def compare(self, left, op, right):
        return Compare(str(op), left, right)

    def and_(self, left, right):
        return BoolOp("&&", left, right)

    def or_(self, left, right):
        return BoolOp("||", left, right)

    def not_(self, operand):
        return Not(operand)


_parser = Lark(
    EXPRESSION_GRAMMAR,
    start="condition",
    parser="lalr",
    transformer=AstBuilder(),
)


@lru_cache(maxsize=1024)
def compile_expression(text: str) -> Node:
    try:
        return _parser.parse(text)
    except LarkError as e:
        raise ExpressionError(f"Invalid expression {text!r}: {e}") from e


def evaluate_expression(text: str, values: Mapping[str, float]) -> float:
    return compile_expression(text.strip()).evaluate(values)


def evaluate_condition(condition: str, values: Mapping[str, float]) -> bool:
    """Evaluate a rule condition.

    A blank condition always holds. A condition without a comparison holds
    when its value is non-zero. Conditions that cannot be evaluated warn
    with :class:`ConditionWarning` and do not hold.
    """
    if not condition or not condition.strip():
        return True
    try:
        return bool(evaluate_expression(condition, values))
    except ExpressionError as e:
        warnings.warn(
            f"Ignoring rule with condition {condition!r}: {e}",
            ConditionWarning,
            stacklevel=2,
        )
        return False


def substitute_parameters(template: str, values: Mapping[str, float]) -> str:
    """Evaluate every parenthesised argument list in a rule output.

    ``F(len*0.5,thick)`` with ``len=2, thick=0.1`` becomes ``F(1.0,0.1)``.
    """
    pieces: List[str] = []
    index = 0
    while index < len(template):
        open_index = template.find("(", index)
        if open_index < 0:
            pieces.append(template[index:])
            break
        closing = find_closing(template, open_index)
        if closing is None:
            pieces.append(template[index:])
            break

        pieces.append(template[index:open_index])
        inner = template[open_index + 1 : closing]
        if inner.strip():
            args = [_evaluate_argument(arg, values) for arg in split_arguments(inner)]
            pieces.append(f"({','.join(args)})")
        else:
            pieces.append("()")
        index = closing + 1
    return "".join(pieces)


def _evaluate_argument(text: str, values: Mapping[str, float]) -> str:
    try:
        return format_number(evaluate_expression(text, values))
    except ExpressionError as e:
        logger.warning("Substituting 0.0 for argument %r: %s", text, e)
        return format_number(0.0)
