from .symbol import Symbol, format_number, serialize
from .tokenizer import tokenize
from .expression import (
    ConditionWarning,
    ExpressionError,
    compile_expression,
    evaluate_condition,
    evaluate_expression,
    substitute_parameters,
)
from .rule import Rule, apply_rules, candidate_rules, make_rng, select_rule
from .grammar import Grammar, PrimitiveType
from .l_systems import LSystem, expand

__all__ = [
    "Symbol",
    "format_number",
    "serialize",
    "tokenize",
    "ConditionWarning",
    "ExpressionError",
    "compile_expression",
    "evaluate_condition",
    "evaluate_expression",
    "substitute_parameters",
    "Rule",
    "apply_rules",
    "candidate_rules",
    "make_rng",
    "select_rule",
    "Grammar",
    "PrimitiveType",
    "LSystem",
    "expand",
]
