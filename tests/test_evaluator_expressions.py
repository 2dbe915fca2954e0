import math

import pytest

from pylox import (
    NIL,
    BoolVal,
    ErrorCodes,
    LoxRuntimeError,
    NumberVal,
    StringVal,
)

from helpers import (
    assign, binary, call, expr_stmt, fun, get, group, lit, logical,
    print_, ret, set_, unary, var, var_decl,
)


class TestArithmetic:

    @pytest.mark.parametrize("a, op, b, expected", [
        (1, "+", 2, 3.0),
        (0.1, "+", 0.2, 0.1 + 0.2),
        (7, "-", 10, -3.0),
        (6, "*", 7, 42.0),
        (1, "/", 4, 0.25),
    ])
    def test_numeric_operators(self, evaluator, a, op, b, expected):
        assert evaluator.evaluate(binary(lit(a), op, lit(b))) == NumberVal(expected)

    def test_division_by_zero_is_infinite(self, evaluator):
        assert evaluator.evaluate(binary(lit(1), "/", lit(0))).value == math.inf
        assert evaluator.evaluate(binary(lit(-1), "/", lit(0))).value == -math.inf

    def test_zero_over_zero_is_nan(self, evaluator):
        assert math.isnan(evaluator.evaluate(binary(lit(0), "/", lit(0))).value)

    def test_grouping(self, evaluator):
        expr = binary(group(binary(lit(1), "+", lit(2))), "*", lit(3))
        assert evaluator.evaluate(expr) == NumberVal(9.0)

    @pytest.mark.parametrize("a, op, b, expected", [
        (2, ">", 2, False),
        (2, ">=", 2, True),
        (2, "<", 2, False),
        (2, "<=", 2, True),
        (1, ">", 2, False),
        (1, "<", 2, True),
    ])
    def test_comparisons(self, evaluator, a, op, b, expected):
        assert evaluator.evaluate(binary(lit(a), op, lit(b))) == BoolVal(expected)

    def test_unary_minus(self, evaluator):
        assert evaluator.evaluate(unary("-", lit(4))) == NumberVal(-4.0)

    def test_unary_minus_requires_number(self, evaluator):
        with pytest.raises(LoxRuntimeError) as exc:
            evaluator.evaluate(unary("-", lit("x"), line=3))
        assert exc.value.code == ErrorCodes.TYPE_MISMATCH
        assert exc.value.message == "Operand must be a number."
        assert exc.value.token.lexeme == "-"
        assert exc.value.line == 3

    def test_comparison_requires_numbers(self, evaluator):
        with pytest.raises(LoxRuntimeError) as exc:
            evaluator.evaluate(binary(lit("a"), "<", lit("b")))
        assert exc.value.code == ErrorCodes.TYPE_MISMATCH
        assert exc.value.message == "Operands must be numbers."


class TestPlus:

    def test_string_concatenation(self, evaluator):
        assert evaluator.evaluate(binary(lit("a"), "+", lit("b"))) == StringVal("ab")

    @pytest.mark.parametrize("left, right", [("a", 1), (1, "a"), (True, 1), (None, None)])
    def test_mixed_operands_fail(self, evaluator, left, right):
        with pytest.raises(LoxRuntimeError) as exc:
            evaluator.evaluate(binary(lit(left), "+", lit(right)))
        assert exc.value.code == ErrorCodes.TYPE_MISMATCH
        assert exc.value.message == "Operands must be two numbers or two strings."
        assert exc.value.token.lexeme == "+"


class TestEqualityAndNot:

    def test_nil_equality(self, evaluator):
        assert evaluator.evaluate(binary(lit(None), "==", lit(None))) == BoolVal(True)
        assert evaluator.evaluate(binary(lit(None), "==", lit(False))) == BoolVal(False)

    def test_not_equal(self, evaluator):
        assert evaluator.evaluate(binary(lit(1), "!=", lit("1"))) == BoolVal(True)
        assert evaluator.evaluate(binary(lit("x"), "!=", lit("x"))) == BoolVal(False)

    def test_nan_equals_itself(self, evaluator):
        nan = binary(lit(0), "/", lit(0))
        assert evaluator.evaluate(binary(nan, "==", nan)) == BoolVal(True)
        assert evaluator.evaluate(binary(nan, "!=", nan)) == BoolVal(False)

    def test_zero_and_negative_zero_differ(self, evaluator):
        neg_zero = unary("-", lit(0))
        assert evaluator.evaluate(binary(lit(0), "==", neg_zero)) == BoolVal(False)
        assert evaluator.evaluate(binary(lit(0), "<=", neg_zero)) == BoolVal(True)

    def test_bang(self, evaluator):
        assert evaluator.evaluate(unary("!", lit(None))) == BoolVal(True)
        assert evaluator.evaluate(unary("!", lit(0))) == BoolVal(False)
        assert evaluator.evaluate(unary("!", lit(""))) == BoolVal(False)


class TestLogical:

    def test_and_short_circuits(self, evaluator):
        expr = logical(lit(False), "and", call(var("undefined_call")))
        assert evaluator.evaluate(expr) == BoolVal(False)

    def test_or_short_circuits(self, evaluator):
        expr = logical(lit("yes"), "or", var("undefined"))
        assert evaluator.evaluate(expr) == StringVal("yes")

    def test_operands_are_returned_as_is(self, evaluator):
        assert evaluator.evaluate(logical(lit(1), "and", lit(2))) == NumberVal(2.0)
        assert evaluator.evaluate(logical(lit(None), "or", lit("x"))) == StringVal("x")
        assert evaluator.evaluate(logical(lit(None), "and", lit("x"))) is NIL

    def test_right_side_evaluated_when_needed(self, evaluator):
        with pytest.raises(LoxRuntimeError) as exc:
            evaluator.evaluate(logical(lit(True), "and", var("missing")))
        assert exc.value.code == ErrorCodes.UNDEFINED_VARIABLE


class TestVariables:

    def test_assignment_is_an_expression(self, run):
        out = run(
            var_decl("a"),
            print_(assign("a", lit(3))),
            print_(var("a")),
        )
        assert out == ["3", "3"]

    def test_operands_evaluate_left_to_right(self, run):
        log = var("log")
        out = run(
            var_decl("log", lit("")),
            expr_stmt(binary(
                group(assign("log", binary(log, "+", lit("a")))),
                "+",
                group(assign("log", binary(log, "+", lit("b")))),
            )),
            print_(log),
        )
        assert out == ["ab"]

    def test_undeclared_read(self, evaluator):
        with pytest.raises(LoxRuntimeError) as exc:
            evaluator.evaluate(var("nope"))
        assert exc.value.code == ErrorCodes.UNDEFINED_VARIABLE

    def test_undeclared_assignment(self, evaluator):
        with pytest.raises(LoxRuntimeError) as exc:
            evaluator.evaluate(assign("nope", lit(1)))
        assert exc.value.code == ErrorCodes.UNDEFINED_VARIABLE
        assert "nope" not in evaluator.globals


class TestCalls:

    def test_calling_undeclared_name(self, evaluator):
        with pytest.raises(LoxRuntimeError) as exc:
            evaluator.evaluate(call(var("ghost")))
        assert exc.value.code == ErrorCodes.UNDEFINED_VARIABLE
        assert exc.value.message == "Undefined variable 'ghost'."

    def test_calling_non_callable(self, evaluator):
        with pytest.raises(LoxRuntimeError) as exc:
            evaluator.evaluate(call(lit("not a function"), line=4))
        assert exc.value.code == ErrorCodes.NOT_CALLABLE
        assert exc.value.message == "Can only call functions and classes."
        assert exc.value.line == 4

    def test_callee_checked_before_arguments(self, evaluator):
        with pytest.raises(LoxRuntimeError) as exc:
            evaluator.evaluate(call(lit(1), var("missing")))
        assert exc.value.code == ErrorCodes.NOT_CALLABLE

    def test_arity_mismatch(self, run):
        with pytest.raises(LoxRuntimeError) as exc:
            run(
                fun("add", ["a", "b"], ret(binary(var("a"), "+", var("b")))),
                expr_stmt(call(var("add"), lit(1))),
            )
        assert exc.value.code == ErrorCodes.ARITY_MISMATCH
        assert exc.value.message == "Expected 2 arguments but got 1."

    def test_arguments_evaluate_left_to_right(self, run):
        out = run(
            fun("pair", ["a", "b"], ret(binary(var("a"), "+", var("b")))),
            var_decl("n", lit(0)),
            print_(call(
                var("pair"),
                assign("n", binary(var("n"), "+", lit(1))),
                binary(var("n"), "*", lit(10)),
            )),
        )
        assert out == ["11"]

    def test_clock_is_a_native(self, evaluator):
        value = evaluator.evaluate(call(var("clock")))
        assert value.kind == "number"
        assert value.value > 0


class TestPropertyAccessOnNonInstances:

    def test_get(self, evaluator):
        with pytest.raises(LoxRuntimeError) as exc:
            evaluator.evaluate(get(lit("str"), "length"))
        assert exc.value.code == ErrorCodes.NOT_AN_INSTANCE
        assert exc.value.message == "Only instances have properties."
        assert exc.value.token.lexeme == "length"

    def test_set(self, evaluator):
        with pytest.raises(LoxRuntimeError) as exc:
            evaluator.evaluate(set_(lit(1), "x", lit(2)))
        assert exc.value.code == ErrorCodes.NOT_AN_INSTANCE
