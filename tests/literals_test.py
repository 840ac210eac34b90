import math

import pytest

from errors import InvalidOperation
from literals import binary_op, format_literal, kind_of, to_f32


@pytest.mark.parametrize("op, a, b, expected", [
    ("+", 2.0, 3.0, 5.0),
    ("-", 2.0, 3.0, -1.0),
    ("*", 4.0, 2.5, 10.0),
    ("/", 7.0, 2.0, 3.5),
    ("%", 7.0, 3.0, 1.0),
    ("%", -7.0, 3.0, -1.0),
])
def test_number_arithmetic(op, a, b, expected):
    assert binary_op(op, a, b) == expected


def test_results_are_single_precision():
    result = binary_op("+", to_f32(0.1), to_f32(0.2))
    assert result == to_f32(result)
    assert format_literal(result) == "0.3"


def test_division_by_zero_is_not_an_error():
    assert binary_op("/", 1.0, 0.0) == math.inf
    assert binary_op("/", -1.0, 0.0) == -math.inf
    assert math.isnan(binary_op("/", 0.0, 0.0))
    assert math.isnan(binary_op("%", 1.0, 0.0))


def test_overflow_becomes_infinity():
    assert binary_op("*", 3e38, 10.0) == math.inf


def test_string_rules():
    assert binary_op("+", "ab", "cd") == "abcd"
    assert binary_op("*", "ab", 3.0) == "ababab"
    assert binary_op("*", "ab", 2.9) == "abab"
    assert binary_op("*", "ab", -1.0) == ""
    assert binary_op("*", "ab", math.nan) == ""


@pytest.mark.parametrize("op, a, b, message", [
    ("+", 1.0, "x", "Can only add numbers to numbers"),
    ("+", "x", 1.0, "Can only add strings to strings"),
    ("+", True, True, "Cannot add booleans"),
    ("-", "a", "b", "Cannot subtract strings"),
    ("*", 2.0, "ab", "Can only multiply numbers with numbers"),
    ("/", False, 1.0, "Cannot divide with booleans"),
    ("%", "a", 1.0, "Cannot mod with strings"),
])
def test_invalid_arithmetic(op, a, b, message):
    with pytest.raises(InvalidOperation) as info:
        binary_op(op, a, b)
    assert info.value.description == message


def test_comparisons():
    assert binary_op(">", 2.0, 1.0) is True
    assert binary_op("<=", 2.0, 2.0) is True
    assert binary_op("<", "abc", "abd") is True
    assert binary_op(">", True, False) is True
    assert binary_op("==", "a", "a") is True
    assert binary_op("!=", 1.0, 2.0) is True


def test_cross_kind_equality_is_defined():
    assert binary_op("==", 1.0, True) is False
    assert binary_op("!=", 1.0, True) is True
    assert binary_op("==", "1", 1.0) is False


def test_cross_kind_ordering_is_an_error():
    with pytest.raises(InvalidOperation) as info:
        binary_op(">", 1.0, "1")
    assert "Cannot compare Number with String" in str(info.value)


def test_logic_requires_bools():
    assert binary_op("and", True, False) is False
    assert binary_op("or", True, False) is True
    with pytest.raises(InvalidOperation):
        binary_op("and", 1.0, True)


def test_format_literal():
    assert format_literal(5.0) == "5"
    assert format_literal(2.5) == "2.5"
    assert format_literal(to_f32(0.1)) == "0.1"
    assert format_literal(-0.0) == "-0"
    assert format_literal(to_f32(1e20)) == "100000000000000000000"
    assert format_literal(math.inf) == "inf"
    assert format_literal(-math.inf) == "-inf"
    assert format_literal(math.nan) == "NaN"
    assert format_literal(True) == "true"
    assert format_literal("hi there") == "hi there"


def test_kind_of():
    assert kind_of(1.0) == "Number"
    assert kind_of(True) == "Bool"
    assert kind_of("") == "String"


def test_repeat_count_too_large():
    with pytest.raises(InvalidOperation) as info:
        binary_op("*", "ab", 1e20)
    assert info.value.description == "String repetition count is too large"
    with pytest.raises(InvalidOperation):
        binary_op("*", "", 1e20)
