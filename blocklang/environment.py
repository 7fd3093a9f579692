from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterator, Optional, Tuple

from .position import Position

if TYPE_CHECKING:
    from .values import Value


class SymbolTable:
    """Maps names to values; lookups fall through to the parent table."""
    def __init__(self, parent: Optional['SymbolTable'] = None):
        self.parent = parent
        self.symbols: Dict[str, 'Value'] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.symbols

    def get(self, name: str) -> Optional['Value']:
        if name in self.symbols:
            return self.symbols[name]
        if self.parent is not None:
            return self.parent.get(name)
        return None

    def set(self, name: str, value: 'Value'):
        # always this table, never a parent
        self.symbols[name] = value


class Context:
    """An interpreter frame: a label, a symbol table and the frame that called it."""
    def __init__(self, name: str, symbol_table: SymbolTable, parent: Optional['Context'] = None,
                 parent_pos: Optional[Position] = None):
        self.name = name
        self.symbol_table = symbol_table
        self.parent = parent
        self.parent_pos = parent_pos

    def __repr__(self) -> str:
        return f"<Context {self.name}>"

    @staticmethod
    def default() -> 'Context':
        return Context('', SymbolTable())

    def frames(self, pos: Position) -> Iterator[Tuple[Position, 'Context']]:
        """Yield (position, context) pairs from this frame outwards."""
        ctx: Optional[Context] = self
        current: Optional[Position] = pos
        while ctx is not None and current is not None:
            yield current, ctx
            current = ctx.parent_pos
            ctx = ctx.parent
