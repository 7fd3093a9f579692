"""The builtins every blocklang program starts with."""

from __future__ import annotations

from blocklang.builtin_function import Builtin
from blocklang.environment import Context
from blocklang.errors import RTError
from blocklang.values import NULL, BuiltinFunction, ListValue, NumberValue, Value


def std_print(context: Context, function: BuiltinFunction) -> Value:
    print(str(context.symbol_table.get('value')))
    return NULL


def std_get(context: Context, function: BuiltinFunction) -> Value:
    items = context.symbol_table.get('list')
    if not isinstance(items, ListValue):
        raise RTError(function.start_pos, function.end_pos, 'Argument #1 must be list', context)
    index = context.symbol_table.get('index')
    if not isinstance(index, NumberValue):
        raise RTError(function.start_pos, function.end_pos, 'Argument #2 must be number', context)
    if not index.value.is_integer() or not 0 <= index.value < len(items.elements):
        raise RTError(function.start_pos, function.end_pos,
                      f'Failed to index: list index {index} out of range', context)
    return items.elements[int(index.value)]


def std_append(context: Context, function: BuiltinFunction) -> Value:
    items = context.symbol_table.get('list')
    if not isinstance(items, ListValue):
        raise RTError(function.start_pos, function.end_pos, 'Argument #1 must be list', context)
    result = items.clone()
    result.elements.append(context.symbol_table.get('value'))
    return result


PRINT = Builtin('print', ('value',), std_print)
GET = Builtin('get', ('list', 'index'), std_get)
APPEND = Builtin('append', ('list', 'value'), std_append)

CORE_BUILTINS = (PRINT, GET, APPEND)
