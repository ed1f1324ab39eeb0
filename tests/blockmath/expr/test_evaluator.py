"""
Tests for the postfix evaluator and operations.
"""

import math

import pytest

from blockmath.expr import (
    EvaluationError,
    Evaluator,
    Operation,
    OperationError,
    apply_operation,
    evaluate,
    evaluate_as_boolean,
    parse,
)


def eval_expr(expression: str, bindings=None) -> float:
    """Helper to evaluate an expression and return the value."""
    bindings = bindings or {}
    result = evaluate(parse(expression, bindings.keys()), bindings)
    if not result.success:
        raise RuntimeError(result.error)
    return result.value


class TestOperations:
    """Tests for individual operations."""

    def test_arities(self):
        assert Operation.ADD.arity == 2
        assert Operation.LOG.arity == 2
        assert Operation.NEGATE.arity == 1
        assert Operation.SQRT.arity == 1

    def test_comparisons_return_numbers(self):
        assert apply_operation(Operation.GREATER, [2, 1]) == 1.0
        assert apply_operation(Operation.LESS, [2, 1]) == 0.0
        assert apply_operation(Operation.EQUAL, [2, 2]) == 1.0

    def test_logic_treats_nonzero_as_true(self):
        assert apply_operation(Operation.AND, [2, -1]) == 1.0
        assert apply_operation(Operation.AND, [2, 0]) == 0.0
        assert apply_operation(Operation.NOT, [0]) == 1.0
        assert apply_operation(Operation.NOT, [5]) == 0.0

    def test_sign(self):
        assert apply_operation(Operation.SIGN, [-2.5]) == -1.0
        assert apply_operation(Operation.SIGN, [0]) == 0.0
        assert apply_operation(Operation.SIGN, [7]) == 1.0

    def test_logarithms(self):
        assert apply_operation(Operation.LG, [100]) == pytest.approx(2)
        assert apply_operation(Operation.LN, [math.e]) == pytest.approx(1)
        assert apply_operation(Operation.LOG, [8, 2]) == pytest.approx(3)

    def test_division_by_zero(self):
        with pytest.raises(OperationError, match="div: division by zero"):
            apply_operation(Operation.DIV, [1, 0])

    def test_domain_error(self):
        with pytest.raises(OperationError) as exc_info:
            apply_operation(Operation.SQRT, [-1])
        assert exc_info.value.operation_name == "sqrt"

    def test_overflow(self):
        with pytest.raises(OperationError, match="out of range"):
            apply_operation(Operation.EXP, [1000])

    def test_float_overflow(self):
        with pytest.raises(OperationError, match="mul: result out of range"):
            apply_operation(Operation.MUL, [1e308, 10])

    def test_infinite_difference(self):
        with pytest.raises(OperationError, match="sub: result out of range"):
            apply_operation(Operation.SUB, [math.inf, math.inf])

    def test_wrong_argument_count(self):
        with pytest.raises(OperationError):
            apply_operation(Operation.ADD, [1])


class TestEvaluation:
    """Tests for expression evaluation."""

    def test_arithmetic(self):
        assert eval_expr("1 + 2 * 3 - 4 / 2") == 5

    def test_functions(self):
        assert eval_expr("exp(0) + lg(1000) + ln(e)") == pytest.approx(5)
        assert eval_expr("tanh(0) + cosh(0) + sinh(0)") == 1
        assert eval_expr("tan(pi / 4)") == pytest.approx(1)

    def test_log_takes_value_then_base(self):
        assert eval_expr("log(8, 2)") == pytest.approx(3)

    def test_bindings(self):
        assert eval_expr("x * y", {"x": 3, "y": 4}) == 12

    def test_slot_values(self):
        expression = parse("x * 2", ["x"])
        expression.variables["x"].value = 5
        assert expression.evaluate() == 10
        assert expression.evaluate({"x": 4}) == 8
        assert expression.variables["x"].value == 5

    def test_bindings_are_case_folded(self):
        expression = parse("x + 1", ["X"])
        assert expression.evaluate({"X": 1}) == 2

    def test_unknown_binding(self):
        expression = parse("x", ["x"])
        with pytest.raises(EvaluationError, match="Unknown variable 'y'"):
            expression.evaluate({"y": 1})

    def test_not_enough_operands(self):
        result = evaluate(parse("log(2)"))
        assert not result.success
        assert "Not enough operands for 'log'" in result.error

    def test_leftover_operands(self):
        with pytest.raises(EvaluationError, match="2 values left"):
            Evaluator(parse("2 3")).evaluate()

    def test_empty_expression(self):
        result = evaluate(parse(""))
        assert not result.success

    def test_overflow_is_reported(self):
        expression = parse("x * x", ["x"])
        with pytest.raises(OperationError, match="out of range"):
            expression.evaluate({"x": 1e200})
        result = evaluate(expression, {"x": 1e200})
        assert not result.success

    def test_operation_error_is_reported(self):
        result = evaluate(parse("sqrt(-1)"))
        assert result.value is None
        assert result.error.startswith("sqrt:")


class TestEvaluateAsBoolean:
    def test_true(self):
        assert evaluate_as_boolean(parse("2 > 1")) == (True, None)

    def test_false(self):
        assert evaluate_as_boolean(parse("1 > 2")) == (False, None)

    def test_error(self):
        value, error = evaluate_as_boolean(parse("1 / 0"))
        assert value is False
        assert "division by zero" in error
