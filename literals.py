import math
import struct
import sys
from decimal import Decimal

from errors import InvalidOperation


# Runtime values are plain Python objects:
#   Number -> float (kept at 32-bit precision)
#   String -> str
#   Bool   -> bool


def to_f32(value) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def kind_of(value) -> str:
    # bool first: bool is an int subclass
    if isinstance(value, bool):
        return "Bool"
    if isinstance(value, float):
        return "Number"
    if isinstance(value, str):
        return "String"
    raise TypeError(f"not a literal: {value!r}")


def is_number(value) -> bool:
    return isinstance(value, float) and not isinstance(value, bool)


def is_bool(value) -> bool:
    return isinstance(value, bool)


def same_literal(a, b) -> bool:
    return kind_of(a) == kind_of(b) and a == b


def format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"

    # shortest decimal that reads back as the same 32-bit float
    text = repr(value)
    for precision in range(1, 10):
        candidate = f"{value:.{precision}g}"
        if to_f32(float(candidate)) == value:
            text = candidate
            break

    # no exponent notation: 1e+20 -> 100000000000000000000
    return format(Decimal(text), "f")


def format_literal(value) -> str:
    kind = kind_of(value)
    if kind == "Bool":
        return "true" if value else "false"
    if kind == "Number":
        return format_number(value)
    return value


# ---------- arithmetic ----------

def _divide(n: float, m: float) -> float:
    if m == 0:
        if n == 0 or math.isnan(n):
            return math.nan
        # sign of a zero divisor matters: 1 / -0 is -inf
        return math.copysign(math.inf, n) * math.copysign(1.0, m)
    return n / m


def _modulo(n: float, m: float) -> float:
    if m == 0 or math.isinf(n):
        return math.nan
    return math.fmod(n, m)


def _repeat(text: str, times: float) -> str:
    if not math.isfinite(times) or times <= 0:
        return ""
    count = math.floor(times)
    if count > sys.maxsize or len(text) * count > sys.maxsize:
        raise InvalidOperation("String repetition count is too large")
    try:
        return text * count
    except MemoryError:
        raise InvalidOperation("String repetition count is too large") from None


def add(first, second):
    kind = kind_of(first)
    if kind == "Number":
        if is_number(second):
            return to_f32(first + second)
        raise InvalidOperation("Can only add numbers to numbers")
    if kind == "String":
        if isinstance(second, str):
            return first + second
        raise InvalidOperation("Can only add strings to strings")
    raise InvalidOperation("Cannot add booleans")


def subtract(first, second):
    kind = kind_of(first)
    if kind == "Number":
        if is_number(second):
            return to_f32(first - second)
        raise InvalidOperation("Can only subtract numbers from numbers")
    if kind == "String":
        raise InvalidOperation("Cannot subtract strings")
    raise InvalidOperation("Cannot subtract booleans")


def multiply(first, second):
    kind = kind_of(first)
    if kind == "Number":
        if is_number(second):
            return to_f32(first * second)
        raise InvalidOperation("Can only multiply numbers with numbers")
    if kind == "String":
        if is_number(second):
            return _repeat(first, second)
        raise InvalidOperation("Can only multiply strings with numbers")
    raise InvalidOperation("Cannot multiply booleans")


def divide(first, second):
    kind = kind_of(first)
    if kind == "Number":
        if is_number(second):
            return to_f32(_divide(first, second))
        raise InvalidOperation("Can only divide numbers with numbers")
    if kind == "String":
        raise InvalidOperation("Cannot divide with strings")
    raise InvalidOperation("Cannot divide with booleans")


def modulo(first, second):
    kind = kind_of(first)
    if kind == "Number":
        if is_number(second):
            return to_f32(_modulo(first, second))
        raise InvalidOperation("Can only mod numbers with numbers")
    if kind == "String":
        raise InvalidOperation("Cannot mod with strings")
    raise InvalidOperation("Cannot mod with booleans")


# ---------- comparison / logic ----------

def equals(first, second) -> bool:
    # different kinds are never equal
    return same_literal(first, second)


def not_equals(first, second) -> bool:
    return not same_literal(first, second)


def _check_ordered(first, second):
    a, b = kind_of(first), kind_of(second)
    if a != b:
        raise InvalidOperation(f"Cannot compare {a} with {b}")


def greater(first, second) -> bool:
    _check_ordered(first, second)
    return first > second


def greater_equal(first, second) -> bool:
    _check_ordered(first, second)
    return first >= second


def less(first, second) -> bool:
    _check_ordered(first, second)
    return first < second


def less_equal(first, second) -> bool:
    _check_ordered(first, second)
    return first <= second


def logical_and(first, second) -> bool:
    if is_bool(first) and is_bool(second):
        return first and second
    raise InvalidOperation(f"Can only use 'and' on booleans, got {kind_of(first)} and {kind_of(second)}")


def logical_or(first, second) -> bool:
    if is_bool(first) and is_bool(second):
        return first or second
    raise InvalidOperation(f"Can only use 'or' on booleans, got {kind_of(first)} and {kind_of(second)}")


BINARY_FUNCS = {
    "+": add,
    "-": subtract,
    "*": multiply,
    "/": divide,
    "%": modulo,
    ">": greater,
    ">=": greater_equal,
    "<": less,
    "<=": less_equal,
    "==": equals,
    "!=": not_equals,
    "and": logical_and,
    "or": logical_or,
}


def binary_op(op: str, first, second):
    """Apply a binary operator to two literals.

    `first` is the deeper stack value, `second` the one that was on top.
    Raises InvalidOperation when the operand kinds do not support `op`.
    """
    func = BINARY_FUNCS.get(op)
    if func is None:
        raise InvalidOperation(f"Unknown operator: {op}")
    return func(first, second)
