import math

import pytest

from blocklang.builtin_function import Builtin
from blocklang.environment import Context, SymbolTable
from blocklang.errors import DivisionByZeroError, RTError
from blocklang.values import (
    NULL, BuiltinFunction, ListValue, NumberValue, StringValue, format_number,
)


def test_format_number():
    assert format_number(5.0) == '5'
    assert format_number(-2.0) == '-2'
    assert format_number(2.5) == '2.5'
    assert format_number(math.inf) == 'Infinity'
    assert format_number(-math.inf) == '-Infinity'
    assert format_number(math.nan) == 'NaN'


def test_number_arithmetic():
    assert NumberValue(7).div(NumberValue(2)).value == 3.5
    assert NumberValue(2).pow(NumberValue(10)).value == 1024
    assert NumberValue(3).sub(NumberValue(5)).value == -2


def test_comparisons_return_zero_or_one():
    assert NumberValue(5).eq(NumberValue(5)).value == 1
    assert NumberValue(5).lt(NumberValue(5)).value == 0
    assert NumberValue(5).lte(NumberValue(5)).value == 1
    assert NumberValue(0).not_().value == 1
    assert NumberValue(3).and_(NumberValue(4)).value == 1
    assert NumberValue(0).or_(NumberValue(0)).value == 0


def test_division_by_zero():
    with pytest.raises(DivisionByZeroError) as excinfo:
        NumberValue(1).div(NumberValue(0))
    assert excinfo.value.details == 'Dividing by zero is illegal'


@pytest.mark.parametrize('base, exponent, expected', [
    (10, 400, 'Infinity'),
    (-10, 401, '-Infinity'),
    (0, -1, 'Infinity'),
    (-8, 0.5, 'NaN'),
    (1, math.inf, 'NaN'),
    (4, 0.5, '2'),
])
def test_power_follows_float_arithmetic(base, exponent, expected):
    assert str(NumberValue(base).pow(NumberValue(exponent))) == expected


def test_huge_string_repeat_is_a_runtime_error():
    with pytest.raises(RTError) as excinfo:
        StringValue('ab').mul(NumberValue(1e20))
    assert excinfo.value.details.startswith('cannot repeat a string')


def test_string_operations():
    assert StringValue('ab').add(StringValue('cd')).value == 'abcd'
    assert StringValue('ab').mul(NumberValue(2)).value == 'abab'
    assert NumberValue(3).mul(StringValue('x')).value == 'xxx'
    with pytest.raises(RTError):
        StringValue('ab').mul(NumberValue(-1))


def test_mismatched_operands_are_illegal():
    with pytest.raises(RTError) as excinfo:
        NumberValue(1).add(StringValue('a'))
    assert excinfo.value.details == 'operation done is illegal'
    with pytest.raises(RTError):
        StringValue('a').sub(StringValue('b'))
    with pytest.raises(RTError):
        NumberValue(1).execute([])


def test_list_concatenation_leaves_operands_alone():
    left = ListValue([NumberValue(1)])
    right = ListValue([NumberValue(2)])
    result = left.add(right)
    assert [e.value for e in result.elements] == [1, 2]
    assert len(left.elements) == 1
    assert len(right.elements) == 1


def test_list_add_requires_a_list():
    with pytest.raises(RTError) as excinfo:
        ListValue([]).add(NumberValue(1))
    assert excinfo.value.details == 'To concatenate, must add a list'


def test_clone_keeps_the_original_position():
    value = NumberValue(4)
    original = value.start_pos
    clone = value.clone()
    clone.set_position(None, None)
    assert value.start_pos is original
    assert NULL.clone() is not NULL


def test_string_display():
    nested = ListValue([NumberValue(1), StringValue('a'), ListValue([NumberValue(2.5)])])
    assert str(nested) == '[1, a, [2.5]]'


def test_builtin_arity():
    echo = BuiltinFunction(Builtin('echo', ('value',), lambda context, fn: context.symbol_table.get('value')))
    with pytest.raises(RTError) as excinfo:
        echo.execute([])
    assert excinfo.value.details == 'not enough arguments passed into [function echo]'
    with pytest.raises(RTError) as excinfo:
        echo.execute([NumberValue(1), NumberValue(2)])
    assert excinfo.value.details == 'too many arguments passed into [function echo]'


def test_builtin_call_frame():
    seen = []

    def record(context, fn):
        seen.append(context)
        return NULL

    caller = Context('<program>', SymbolTable())
    function = BuiltinFunction(Builtin('record', ('value',), record), context=caller)
    argument = NumberValue(1)
    function.execute([argument])
    (frame,) = seen
    assert frame.name == 'record'
    assert frame.parent is caller
    assert frame.symbol_table is caller.symbol_table
    bound = caller.symbol_table.get('value')
    assert bound is not argument
    assert bound.context is frame
