import pytest

from simple.errors import SimpleRuntimeError
from simple.types import Value, ValueKind, arithmetic, compare, equals, format_value, truth


def test_slash_always_yields_a_real():
    result = arithmetic('/', Value.integer(3), Value.integer(2))
    assert result == Value.real(1.5)
    assert arithmetic('/', Value.integer(4), Value.integer(2)).kind == ValueKind.REAL


def test_div_truncates_toward_zero():
    assert arithmetic('DIV', Value.integer(3), Value.integer(2)) == Value.integer(1)
    assert arithmetic('DIV', Value.integer(-7), Value.integer(2)) == Value.integer(-3)
    assert arithmetic('DIV', Value.integer(7), Value.integer(-2)) == Value.integer(-3)


def test_div_rejects_reals():
    with pytest.raises(SimpleRuntimeError):
        arithmetic('DIV', Value.real(3.0), Value.integer(2))


@pytest.mark.parametrize('op', ['/', 'DIV'])
def test_division_by_zero(op):
    with pytest.raises(SimpleRuntimeError) as excinfo:
        arithmetic(op, Value.integer(1), Value.integer(0), 7)
    assert excinfo.value.line_number == 7
    assert str(excinfo.value) == 'line 7: division by zero'


def test_mixed_arithmetic_is_promoted():
    assert arithmetic('+', Value.integer(1), Value.real(0.5)) == Value.real(1.5)
    assert arithmetic('*', Value.integer(2), Value.integer(3)) == Value.integer(6)


def test_text_is_not_a_number():
    with pytest.raises(SimpleRuntimeError):
        arithmetic('+', Value.text('a'), Value.integer(1))


def test_comparisons():
    assert compare('<', Value.integer(1), Value.real(1.5)).data is True
    assert compare('>=', Value.text('b'), Value.text('a')).data is True
    assert compare('=', Value.text('a'), Value.integer(1)).data is False
    assert compare('<>', Value.text('a'), Value.integer(1)).data is True
    with pytest.raises(SimpleRuntimeError):
        compare('<', Value.text('a'), Value.integer(1))


def test_equals_promotes_numbers():
    assert equals(Value.integer(2), Value.real(2.0))
    assert not equals(Value.boolean(True), Value.integer(1))


def test_truth():
    assert truth(Value.boolean(True))
    assert not truth(Value.integer(0))
    assert truth(Value.real(0.5))


def test_format_width_and_places():
    assert format_value(Value.integer(1), 3) == '  1'
    assert format_value(Value.integer(-5), 5, 2) == '-5.00'
    assert format_value(Value.real(2.5), 8, 3) == '   2.500'
    assert format_value(Value.integer(1), -4) == '1   '
    assert format_value(Value.real(1.25), None, -1) == '1'


def test_format_never_truncates():
    assert format_value(Value.integer(12345), 2) == '12345'
    assert format_value(Value.text('hello'), 3, 1) == 'hello'


def test_format_natural_rendering():
    assert format_value(Value.real(1.5)) == '1.5'
    assert format_value(Value.boolean(False)) == 'FALSE'
    assert format_value(Value.text("it's")) == "it's"
