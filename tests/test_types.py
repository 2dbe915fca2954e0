import math

import pytest

from pylox import (
    NIL,
    BoolVal,
    NumberVal,
    StringVal,
    bool_val,
    from_python,
    is_truthy,
    number_val,
    string_val,
    stringify,
    values_equal,
)
from pylox.classes import LoxClass, LoxInstance


class TestTruthiness:

    def test_nil_and_false_are_falsy(self):
        assert not is_truthy(NIL)
        assert not is_truthy(bool_val(False))

    @pytest.mark.parametrize("value", [
        bool_val(True),
        number_val(0),
        string_val(""),
    ])
    def test_everything_else_is_truthy(self, value):
        assert is_truthy(value)


class TestEquality:

    def test_nil_equals_nil(self):
        assert values_equal(NIL, NIL)

    def test_no_cross_kind_equality(self):
        assert not values_equal(NIL, bool_val(False))
        assert not values_equal(number_val(1), string_val("1"))
        assert not values_equal(bool_val(True), number_val(1))
        assert not values_equal(number_val(0), bool_val(False))

    def test_value_equality_within_kind(self):
        assert values_equal(number_val(2), number_val(2.0))
        assert values_equal(string_val("ab"), string_val("a" + "b"))
        assert not values_equal(string_val("a"), string_val("b"))

    def test_nan_equals_nan(self):
        assert values_equal(number_val(math.nan), number_val(math.nan))
        assert not values_equal(number_val(math.nan), number_val(1))

    def test_signed_zeros_differ(self):
        assert not values_equal(number_val(0.0), number_val(-0.0))
        assert values_equal(number_val(-0.0), number_val(-0.0))

    def test_instances_compare_by_identity(self):
        klass = LoxClass("Point", None, {})
        a, b = LoxInstance(klass), LoxInstance(klass)
        assert values_equal(a, a)
        assert not values_equal(a, b)
        assert values_equal(klass, klass)


class TestStringify:

    @pytest.mark.parametrize("value, text", [
        (NIL, "nil"),
        (bool_val(True), "true"),
        (bool_val(False), "false"),
        (number_val(3), "3"),
        (number_val(2.5), "2.5"),
        (number_val(-0.0), "-0"),
        (number_val(math.inf), "Infinity"),
        (number_val(-math.inf), "-Infinity"),
        (number_val(math.nan), "NaN"),
        (string_val("hi there"), "hi there"),
    ])
    def test_primitives(self, value, text):
        assert stringify(value) == text

    def test_class_and_instance(self):
        klass = LoxClass("Bagel", None, {})
        assert stringify(klass) == "Bagel"
        assert stringify(LoxInstance(klass)) == "Bagel instance"


class TestFromPython:

    def test_literals(self):
        assert from_python(None) is NIL
        assert from_python(True) == BoolVal(True)
        assert from_python(3) == NumberVal(3.0)
        assert from_python(1.5) == NumberVal(1.5)
        assert from_python("s") == StringVal("s")

    def test_bool_is_not_a_number(self):
        assert from_python(False).kind == "bool"

    def test_unsupported_literal(self):
        with pytest.raises(TypeError):
            from_python([1, 2])
