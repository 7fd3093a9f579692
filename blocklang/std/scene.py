"""Scene builtins: the operations an embedding application exposes to scripts.

blocklang itself knows nothing about rendering. The application hands a
`SceneHost` to `scene_builtins`, and the returned builtins validate their
arguments and forward plain numbers and strings to the host. Host failures
are reported as runtime errors at the call site.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from blocklang.builtin_function import Builtin
from blocklang.environment import Context
from blocklang.errors import RTError
from blocklang.values import NULL, BuiltinFunction, ListValue, NumberValue, StringValue, Value

logger = logging.getLogger(__name__)

Triple = Tuple[float, float, float]

COLOR_PATTERN = re.compile(r'^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$|^[a-zA-Z]+$')


class SceneHost(ABC):
    """What a scene must offer to back the scene builtins."""

    @abstractmethod
    def set_background(self, color: str) -> None:
        ...

    @abstractmethod
    def add_block(self, size: Triple, position: Triple, color: str) -> None:
        ...

    @abstractmethod
    def add_pyramid(self, dimensions: Triple, position: Triple, color: str) -> None:
        ...


@dataclass
class SceneObject:
    kind: str
    dimensions: Triple
    position: Triple
    color: str


@dataclass
class RecordingScene(SceneHost):
    """A headless scene that only records what scripts put into it."""
    background: Optional[str] = None
    objects: List[SceneObject] = field(default_factory=list)

    @staticmethod
    def check_color(color: str) -> str:
        if not COLOR_PATTERN.match(color):
            raise ValueError(f'invalid color {color!r}')
        return color

    def set_background(self, color: str) -> None:
        self.background = self.check_color(color)
        logger.info("background set to %s", color)

    def add_block(self, size: Triple, position: Triple, color: str) -> None:
        self._add(SceneObject('block', size, position, self.check_color(color)))

    def add_pyramid(self, dimensions: Triple, position: Triple, color: str) -> None:
        self._add(SceneObject('pyramid', dimensions, position, self.check_color(color)))

    def _add(self, obj: SceneObject):
        self.objects.append(obj)
        logger.info("added %s", obj)

    def to_obj(self) -> Dict[str, Any]:
        return {
            'background': self.background,
            'objects': [asdict(obj) for obj in self.objects],
        }


def _list_arg(context: Context, function: BuiltinFunction, name: str, number: int) -> Triple:
    value = context.symbol_table.get(name)
    if not isinstance(value, ListValue):
        raise RTError(function.start_pos, function.end_pos, f'Argument #{number} must be a list', context)
    numbers = []
    for index in range(3):
        element = value.elements[index] if index < len(value.elements) else None
        if not isinstance(element, NumberValue):
            raise RTError(function.start_pos, function.end_pos,
                          f'Argument #{number} index {index} must be number', context)
        numbers.append(element.value)
    return numbers[0], numbers[1], numbers[2]


def _string_arg(context: Context, function: BuiltinFunction, name: str, number: int) -> str:
    value = context.symbol_table.get(name)
    if not isinstance(value, StringValue):
        raise RTError(function.start_pos, function.end_pos, f'Argument #{number} must be string', context)
    return value.value


def scene_builtins(host: SceneHost) -> Tuple[Builtin, ...]:
    """Return the scene builtins bound to `host`."""

    def set_background_color(context: Context, function: BuiltinFunction) -> Value:
        color = _string_arg(context, function, 'color', 1)
        try:
            host.set_background(color)
        except Exception as e:
            raise RTError(function.start_pos, function.end_pos, f'Failed to set background color: {e}', context)
        return NULL

    def block(context: Context, function: BuiltinFunction) -> Value:
        size = _list_arg(context, function, 'listWidthHeightDepth', 1)
        position = _list_arg(context, function, 'listXYZ', 2)
        color = _string_arg(context, function, 'color', 3)
        try:
            host.add_block(size, position, color)
        except Exception as e:
            raise RTError(function.start_pos, function.end_pos, f'Failed to create block: {e}', context)
        return NULL

    def pyramid(context: Context, function: BuiltinFunction) -> Value:
        dimensions = _list_arg(context, function, 'listRadiusHeightRadialSegments', 1)
        position = _list_arg(context, function, 'listXYZ', 2)
        color = _string_arg(context, function, 'color', 3)
        try:
            host.add_pyramid(dimensions, position, color)
        except Exception as e:
            raise RTError(function.start_pos, function.end_pos, f'Failed to create pyramid: {e}', context)
        return NULL

    return (
        Builtin('setBackgroundColor', ('color',), set_background_color),
        Builtin('block', ('listWidthHeightDepth', 'listXYZ', 'color'), block),
        Builtin('pyramid', ('listRadiusHeightRadialSegments', 'listXYZ', 'color'), pyramid),
    )
