"""Runtime values for blocklang.

Every value carries the span of source that produced it and the context it
was produced in, which is what runtime errors report. Operators are methods
on the left operand; an operator a value does not support raises an
"operation done is illegal" `RTError` spanning both operands.

Values are shared freely between variables, so the interpreter clones one
before giving it a new position or context.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional

from .builtin_function import Builtin
from .environment import Context
from .errors import DivisionByZeroError, RTError
from .position import Position

logger = logging.getLogger(__name__)


def format_number(value: float) -> str:
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def power(base: float, exponent: float) -> float:
    """`base ** exponent` with IEEE results instead of exceptions.

    Overflow gives a signed infinity, zero to a negative power gives an
    infinity and any other domain error gives NaN.
    """
    odd = exponent.is_integer() and exponent % 2 == 1
    if math.isnan(exponent) or (abs(base) == 1 and math.isinf(exponent)):
        return math.nan
    try:
        return math.pow(base, exponent)
    except OverflowError:
        return -math.inf if base < 0 and odd else math.inf
    except ValueError:
        if base == 0:
            return math.copysign(math.inf, base) if odd else math.inf
        return math.nan


class Value:
    def __init__(self, start_pos: Optional[Position] = None, end_pos: Optional[Position] = None,
                 context: Optional[Context] = None):
        self.start_pos = start_pos or Position.default()
        self.end_pos = end_pos or Position.default()
        self.context = context or Context.default()

    def set_position(self, start_pos: Position, end_pos: Position) -> 'Value':
        self.start_pos = start_pos
        self.end_pos = end_pos
        return self

    def set_context(self, context: Context) -> 'Value':
        self.context = context
        return self

    def add(self, other: 'Value') -> 'Value':
        raise self.illegal(other)

    def sub(self, other: 'Value') -> 'Value':
        raise self.illegal(other)

    def mul(self, other: 'Value') -> 'Value':
        raise self.illegal(other)

    def div(self, other: 'Value') -> 'Value':
        raise self.illegal(other)

    def pow(self, other: 'Value') -> 'Value':
        raise self.illegal(other)

    def not_(self) -> 'Value':
        raise self.illegal()

    def eq(self, other: 'Value') -> 'Value':
        raise self.illegal(other)

    def ne(self, other: 'Value') -> 'Value':
        raise self.illegal(other)

    def lt(self, other: 'Value') -> 'Value':
        raise self.illegal(other)

    def lte(self, other: 'Value') -> 'Value':
        raise self.illegal(other)

    def gt(self, other: 'Value') -> 'Value':
        raise self.illegal(other)

    def gte(self, other: 'Value') -> 'Value':
        raise self.illegal(other)

    def and_(self, other: 'Value') -> 'Value':
        raise self.illegal(other)

    def or_(self, other: 'Value') -> 'Value':
        raise self.illegal(other)

    def execute(self, args: List['Value']) -> 'Value':
        raise self.illegal()

    def clone(self) -> 'Value':
        raise NotImplementedError

    def illegal(self, other: Optional['Value'] = None) -> RTError:
        if other is None:
            other = self
        return RTError(self.start_pos, other.end_pos, 'operation done is illegal', self.context)


class NumberValue(Value):
    def __init__(self, value: float, start_pos: Optional[Position] = None, end_pos: Optional[Position] = None,
                 context: Optional[Context] = None):
        super().__init__(start_pos, end_pos, context)
        self.value = float(value)

    def __repr__(self) -> str:
        return f"NumberValue({format_number(self.value)})"

    def __str__(self) -> str:
        return format_number(self.value)

    def _number(self, other: Value) -> float:
        if not isinstance(other, NumberValue):
            raise self.illegal(other)
        return other.value

    def _result(self, value: float) -> 'NumberValue':
        return NumberValue(value, context=self.context)

    def _truth(self, flag: bool) -> 'NumberValue':
        return self._result(1 if flag else 0)

    def add(self, other: Value) -> Value:
        return self._result(self.value + self._number(other))

    def sub(self, other: Value) -> Value:
        return self._result(self.value - self._number(other))

    def mul(self, other: Value) -> Value:
        if isinstance(other, StringValue):
            return other.repeat(self)
        return self._result(self.value * self._number(other))

    def div(self, other: Value) -> Value:
        divisor = self._number(other)
        if divisor == 0:
            raise DivisionByZeroError(other.start_pos, other.end_pos, 'Dividing by zero is illegal', self.context)
        return self._result(self.value / divisor)

    def pow(self, other: Value) -> Value:
        return self._result(power(self.value, self._number(other)))

    def not_(self) -> Value:
        return self._truth(self.value == 0)

    def eq(self, other: Value) -> Value:
        return self._truth(self.value == self._number(other))

    def ne(self, other: Value) -> Value:
        return self._truth(self.value != self._number(other))

    def lt(self, other: Value) -> Value:
        return self._truth(self.value < self._number(other))

    def lte(self, other: Value) -> Value:
        return self._truth(self.value <= self._number(other))

    def gt(self, other: Value) -> Value:
        return self._truth(self.value > self._number(other))

    def gte(self, other: Value) -> Value:
        return self._truth(self.value >= self._number(other))

    def and_(self, other: Value) -> Value:
        right = self._number(other)
        return self._truth(self.value != 0 and right != 0)

    def or_(self, other: Value) -> Value:
        right = self._number(other)
        return self._truth(self.value != 0 or right != 0)

    def clone(self) -> 'NumberValue':
        return NumberValue(self.value, self.start_pos, self.end_pos, self.context)


class StringValue(Value):
    def __init__(self, value: str, start_pos: Optional[Position] = None, end_pos: Optional[Position] = None,
                 context: Optional[Context] = None):
        super().__init__(start_pos, end_pos, context)
        self.value = value

    def __repr__(self) -> str:
        return f"StringValue({self.value!r})"

    def __str__(self) -> str:
        return self.value

    def add(self, other: Value) -> Value:
        if not isinstance(other, StringValue):
            raise self.illegal(other)
        return StringValue(self.value + other.value, context=self.context)

    def mul(self, other: Value) -> Value:
        if not isinstance(other, NumberValue):
            raise self.illegal(other)
        return self.repeat(other)

    def repeat(self, count: 'NumberValue') -> 'StringValue':
        if not math.isfinite(count.value) or count.value < 0:
            raise RTError(self.start_pos, count.end_pos,
                          f'cannot repeat a string {format_number(count.value)} times', self.context)
        try:
            return StringValue(self.value * int(count.value), context=self.context)
        except (OverflowError, MemoryError) as e:
            raise RTError(self.start_pos, count.end_pos,
                          f'cannot repeat a string {format_number(count.value)} times: {e}', self.context)

    def clone(self) -> 'StringValue':
        return StringValue(self.value, self.start_pos, self.end_pos, self.context)


class ListValue(Value):
    def __init__(self, elements: List[Value], start_pos: Optional[Position] = None,
                 end_pos: Optional[Position] = None, context: Optional[Context] = None):
        super().__init__(start_pos, end_pos, context)
        self.elements = elements

    def __repr__(self) -> str:
        return f"ListValue({self.elements!r})"

    def __str__(self) -> str:
        return '[' + ', '.join(str(element) for element in self.elements) + ']'

    def add(self, other: Value) -> Value:
        if not isinstance(other, ListValue):
            raise RTError(other.start_pos, other.end_pos, 'To concatenate, must add a list', self.context)
        result = self.clone()
        result.elements.extend(other.elements)
        return result

    def clone(self) -> 'ListValue':
        # the element list is copied, the elements themselves are shared
        return ListValue(list(self.elements), self.start_pos, self.end_pos, self.context)


class BuiltinFunction(Value):
    """A callable value backed by a host `Builtin`."""
    def __init__(self, definition: Builtin, start_pos: Optional[Position] = None,
                 end_pos: Optional[Position] = None, context: Optional[Context] = None):
        super().__init__(start_pos, end_pos, context)
        self.definition = definition

    @property
    def name(self) -> str:
        return self.definition.name

    def __repr__(self) -> str:
        return f"BuiltinFunction({self.name!r})"

    def __str__(self) -> str:
        return f"[function {self.name}]"

    def execute(self, args: List[Value]) -> Value:
        params = self.definition.params
        if len(args) < len(params):
            raise RTError(self.start_pos, self.end_pos, f'not enough arguments passed into {self}', self.context)
        if len(args) > len(params):
            raise RTError(self.start_pos, self.end_pos, f'too many arguments passed into {self}', self.context)

        # the call frame shares the caller's symbol table
        context = Context(self.name, self.context.symbol_table, self.context, self.start_pos)
        for param, arg in zip(params, args):
            context.symbol_table.set(param, arg.clone().set_context(context))
        logger.debug("calling %s with %d argument(s)", self.name, len(args))
        return self.definition.fn(context, self)

    def clone(self) -> 'BuiltinFunction':
        return BuiltinFunction(self.definition, self.start_pos, self.end_pos, self.context)


NULL = NumberValue(0)
FALSE = NumberValue(0)
TRUE = NumberValue(1)
