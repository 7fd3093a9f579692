from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Tuple

if TYPE_CHECKING:
    from .environment import Context
    from .values import BuiltinFunction as BuiltinValue, Value


@dataclass(frozen=True)
class Builtin:
    """A host operation callable from blocklang.

    `params` names the arguments in order; on a call each argument is bound
    under its name in the call context, and `fn(context, function)` reads
    them back from `context.symbol_table`. `function` is the called value,
    whose span is the call site.
    """
    name: str
    params: Tuple[str, ...]
    fn: Callable[['Context', 'BuiltinValue'], 'Value']

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
