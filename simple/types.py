"""Runtime values for the Simple executor.

Every value the executor computes is a `Value`: a kind tag from
`ValueKind` plus the Python object holding the data. Integers and reals
are the program's numbers; booleans come out of relational and logical
operators; text comes from string and character literals.

The helpers in this module implement the language's operators over
values. Numeric promotion is the same everywhere: if either operand is
real, the other is converted to real first.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from .errors import SimpleRuntimeError


class ValueKind(Enum):
    INTEGER = 'integer'
    REAL = 'real'
    BOOLEAN = 'boolean'
    TEXT = 'text'


NUMERIC_KINDS = frozenset({ValueKind.INTEGER, ValueKind.REAL})


@dataclass(frozen=True)
class Value:
    kind: ValueKind
    data: Any

    @staticmethod
    def integer(data: int) -> 'Value':
        return Value(ValueKind.INTEGER, int(data))

    @staticmethod
    def real(data: float) -> 'Value':
        return Value(ValueKind.REAL, float(data))

    @staticmethod
    def boolean(data: bool) -> 'Value':
        return Value(ValueKind.BOOLEAN, bool(data))

    @staticmethod
    def text(data: str) -> 'Value':
        return Value(ValueKind.TEXT, str(data))

    @property
    def is_numeric(self) -> bool:
        return self.kind in NUMERIC_KINDS

    def __repr__(self) -> str:
        return f"{self.kind.value}({self.data!r})"


def promote(a: Value, b: Value, line_number: int = 0) -> Tuple[Value, Value]:
    """Bring two numeric values to a common kind."""
    if not (a.is_numeric and b.is_numeric):
        raise SimpleRuntimeError(
            f"numeric operands required, got {a.kind.value} and {b.kind.value}", line_number)
    if a.kind == b.kind:
        return a, b
    return Value.real(a.data), Value.real(b.data)


def arithmetic(op: str, a: Value, b: Value, line_number: int = 0) -> Value:
    """Apply one of ``+ - * / DIV`` to two numeric values."""
    a, b = promote(a, b, line_number)
    is_integer = a.kind == ValueKind.INTEGER

    if op == '+':
        result = a.data + b.data
    elif op == '-':
        result = a.data - b.data
    elif op == '*':
        result = a.data * b.data
    elif op == '/':
        if b.data == 0:
            raise SimpleRuntimeError('division by zero', line_number)
        return Value.real(a.data / b.data)
    elif op == 'DIV':
        if not is_integer:
            raise SimpleRuntimeError('DIV requires integer operands', line_number)
        if b.data == 0:
            raise SimpleRuntimeError('division by zero', line_number)
        return Value.integer(_truncating_div(a.data, b.data))
    else:
        raise SimpleRuntimeError(f"unknown arithmetic operator {op}", line_number)

    return Value.integer(result) if is_integer else Value.real(result)


def _truncating_div(a: int, b: int) -> int:
    # Pascal DIV truncates toward zero; Python's // floors.
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def equals(a: Value, b: Value) -> bool:
    if a.is_numeric and b.is_numeric:
        a, b = promote(a, b)
        return a.data == b.data
    if a.kind != b.kind:
        return False
    return a.data == b.data


def compare(op: str, a: Value, b: Value, line_number: int = 0) -> Value:
    """Apply one of ``= <> < > <= >=`` and return a boolean value."""
    if op == '=':
        return Value.boolean(equals(a, b))
    if op == '<>':
        return Value.boolean(not equals(a, b))

    if a.is_numeric and b.is_numeric:
        a, b = promote(a, b, line_number)
    elif a.kind != b.kind:
        raise SimpleRuntimeError(
            f"cannot compare {a.kind.value} with {b.kind.value}", line_number)

    if op == '<':
        return Value.boolean(a.data < b.data)
    if op == '>':
        return Value.boolean(a.data > b.data)
    if op == '<=':
        return Value.boolean(a.data <= b.data)
    if op == '>=':
        return Value.boolean(a.data >= b.data)
    raise SimpleRuntimeError(f"unknown relational operator {op}", line_number)


def truth(value: Value) -> bool:
    """The truth value used by IF, WHILE, REPEAT, AND, OR and NOT."""
    if value.kind == ValueKind.BOOLEAN:
        return value.data
    if value.is_numeric:
        return value.data != 0
    return len(value.data) > 0


def to_string(value: Value) -> str:
    """Natural, minimal rendering of a value."""
    if value.kind == ValueKind.BOOLEAN:
        return 'TRUE' if value.data else 'FALSE'
    if value.kind == ValueKind.REAL:
        return repr(value.data)
    return str(value.data)


def format_value(value: Value, width: Optional[int] = None, places: Optional[int] = None) -> str:
    """Render a value for WRITE/WRITELN.

    ``places`` renders a number in fixed point with exactly that many
    fractional digits (a negative count means none). ``width`` pads the
    result to at least that many columns: right-justified when positive,
    left-justified when negative. Output is never truncated.
    """
    if places is not None and value.is_numeric:
        text = f"{float(value.data):.{max(places, 0)}f}"
    else:
        text = to_string(value)

    if width is not None:
        if width >= 0:
            text = text.rjust(width)
        else:
            text = text.ljust(-width)
    return text
