"""Source positions for blocklang.

A `Position` identifies one character of a source text. Positions are
immutable: advancing returns a new position, so a position attached to a
token or AST node can never be changed by the scanner moving on.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    filename: str
    source: str
    index: int
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Position({self.filename!r}, {self.line}:{self.column})"

    @staticmethod
    def start(filename: str, source: str) -> 'Position':
        return Position(filename, source, 0, 0, 0)

    @staticmethod
    def default() -> 'Position':
        return Position('', '', 0, 0, 0)

    def advance(self, char: str | None = None) -> 'Position':
        return advance(self, char)


def advance(pos: Position, char: str | None = None) -> Position:
    """Return the position one character after `pos`.

    `char` is the character being stepped over; stepping over a newline
    moves to column 0 of the next line.
    """
    if char == '\n':
        return Position(pos.filename, pos.source, pos.index + 1, pos.line + 1, 0)
    return Position(pos.filename, pos.source, pos.index + 1, pos.line, pos.column + 1)
