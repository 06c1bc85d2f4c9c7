import logging
import math

import pytest

from plant_gen.engine import (
    ConditionWarning,
    ExpressionError,
    compile_expression,
    evaluate_condition,
    evaluate_expression,
    substitute_parameters,
)


class TestArithmetic:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1+2*3", 7.0),
            ("(1+2)*3", 9.0),
            ("8/2/2", 2.0),
            ("10-2-3", 5.0),
            ("-1+4", 3.0),
            ("2*-3", -6.0),
            ("1e-3*1000", 1.0),
            (" 4.5 ", 4.5),
        ],
    )
    def test_literals(self, text: str, expected: float) -> None:
        assert evaluate_expression(text, {}) == pytest.approx(expected)

    def test_parameters(self) -> None:
        values = {"len": 10.0, "thick": 3.0}
        assert evaluate_expression("len*0.62", values) == pytest.approx(6.2)
        assert evaluate_expression("thick*0.4+len/5", values) == pytest.approx(3.2)

    def test_division_by_zero_follows_ieee(self) -> None:
        assert evaluate_expression("1/0", {}) == math.inf
        assert evaluate_expression("-1/0", {}) == -math.inf
        assert math.isnan(evaluate_expression("0/0", {}))

    def test_unknown_parameter(self) -> None:
        with pytest.raises(ExpressionError):
            evaluate_expression("len*2", {})

    def test_syntax_error(self) -> None:
        with pytest.raises(ExpressionError):
            evaluate_expression("1+*2", {})

    def test_compiled_ast_is_reused(self) -> None:
        assert compile_expression("x*2") is compile_expression("x*2")


class TestCondition:
    def test_blank_condition_holds(self) -> None:
        assert evaluate_condition("", {}) is True
        assert evaluate_condition("   ", {}) is True

    def test_comparisons(self) -> None:
        assert evaluate_condition("thick > 0.05", {"thick": 0.1}) is True
        assert evaluate_condition("thick > 0.05", {"thick": 0.05}) is False
        assert evaluate_condition("thick <= 0.05", {"thick": 0.05}) is True
        assert evaluate_condition("x == 2", {"x": 2.0}) is True
        assert evaluate_condition("x != 2", {"x": 2.0}) is False
        assert evaluate_condition("x >= 2", {"x": 1.5}) is False
        assert evaluate_condition("x < 2", {"x": 1.5}) is True

    def test_arithmetic_inside_comparison(self) -> None:
        assert evaluate_condition("len*2 > thick+1", {"len": 1.0, "thick": 0.5}) is True

    def test_boolean_connectives(self) -> None:
        values = {"a": 1.0, "b": 3.0}
        assert evaluate_condition("a >= 1 && b < 2", values) is False
        assert evaluate_condition("a == 1 || b < 2", values) is True
        assert evaluate_condition("!(a > 1)", values) is True

    def test_bare_value_is_truthy_when_non_zero(self) -> None:
        assert evaluate_condition("x", {"x": 2.0}) is True
        assert evaluate_condition("x", {"x": 0.0}) is False

    def test_unparseable_condition_warns_and_fails(self) -> None:
        with pytest.warns(ConditionWarning):
            assert evaluate_condition("thick >> 0.05", {"thick": 1.0}) is False

    def test_unbound_name_warns_and_fails(self) -> None:
        with pytest.warns(ConditionWarning):
            assert evaluate_condition("age > 2", {"thick": 1.0}) is False


class TestSubstitution:
    def test_substitutes_each_argument(self) -> None:
        values = {"len": 2.0, "thick": 0.1, "angle": 30.0}
        result = substitute_parameters("F(len*0.5,thick)[+(angle)]", values)
        assert result == "F(1.0,0.1)[+(30.0)]"

    def test_whole_word_names(self) -> None:
        assert substitute_parameters("F(len,l)", {"len": 2.0, "l": 3.0}) == "F(2.0,3.0)"

    def test_nested_parentheses(self) -> None:
        result = substitute_parameters("F((len+1)*2,thick)", {"len": 1.0, "thick": 0.5})
        assert result == "F(4.0,0.5)"

    def test_literal_arguments_without_parameters(self) -> None:
        assert substitute_parameters("[&&K]L(1.2)", {}) == "[&&K]L(1.2)"

    def test_text_without_arguments_is_unchanged(self) -> None:
        assert substitute_parameters("F+F-[X]", {"x": 1.0}) == "F+F-[X]"

    def test_empty_and_unterminated_lists(self) -> None:
        assert substitute_parameters("F()A", {}) == "F()A"
        assert substitute_parameters("F(len", {"len": 1.0}) == "F(len"

    def test_unresolvable_argument_becomes_zero(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            result = substitute_parameters("F(size,2)", {})
        assert result == "F(0.0,2.0)"
        assert "size" in caplog.text
