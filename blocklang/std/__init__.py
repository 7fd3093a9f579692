from typing import Iterable

from blocklang.builtin_function import Builtin
from blocklang.environment import SymbolTable
from blocklang.values import FALSE, NULL, TRUE, BuiltinFunction
from .core import CORE_BUILTINS


def populate_core_environment(table: SymbolTable, builtins: Iterable[Builtin] = ()) -> SymbolTable:
    """Bind the constants, the core builtins and any host builtins into `table`."""
    table.set('null', NULL)
    table.set('true', TRUE)
    table.set('false', FALSE)
    for builtin in (*CORE_BUILTINS, *builtins):
        table.set(builtin.name, BuiltinFunction(builtin))
    return table
