"""Error types raised by the blocklang scanner, parser and interpreter.

Every error carries the span of source it refers to and renders itself as
the file/line header, the error name, the details and an excerpt of the
offending source with a caret underline. Runtime errors also keep the
context they were raised in and prepend a traceback.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .position import Position

if TYPE_CHECKING:
    from .environment import Context


def render_excerpt(source: str, start_pos: Position, end_pos: Position) -> str:
    """Reproduce the source lines between two positions, underlined with carets."""
    lines = source.split('\n')
    first = start_pos.line
    last = max(end_pos.line, first)
    result = []
    for line_no in range(first, last + 1):
        text = lines[line_no] if line_no < len(lines) else ''
        col_start = start_pos.column if line_no == first else 0
        col_end = end_pos.column if line_no == last else len(text)
        if col_end <= col_start:
            col_end = col_start + 1
        result.append(text)
        result.append(' ' * col_start + '^' * (col_end - col_start))
    return '\n'.join(result)


class LanguageError(Exception):
    """Base class of every error reported against blocklang source."""
    error_name = 'Error'

    def __init__(self, start_pos: Position, end_pos: Position, details: str):
        super().__init__(f"{self.error_name}: {details}")
        self.start_pos = start_pos
        self.end_pos = end_pos
        self.details = details

    def as_string(self) -> str:
        result = f"File '{self.start_pos.filename}', line {self.start_pos.line + 1}"
        result += f"\n\nError name: {self.error_name}\nDetails: {self.details}"
        result += f"\n\n{render_excerpt(self.start_pos.source, self.start_pos, self.end_pos)}"
        return result

    def __str__(self) -> str:
        return self.as_string()


class IllegalCharacterError(LanguageError):
    error_name = 'Illegal character'


class ExpectedCharacterError(LanguageError):
    error_name = 'Expected character'


class IllegalSyntaxError(LanguageError):
    error_name = 'Illegal syntax'


class InvalidSyntaxError(LanguageError):
    error_name = 'Invalid syntax'


class RTError(LanguageError):
    """Error raised while evaluating a program."""
    error_name = 'Runtime error'

    def __init__(self, start_pos: Position, end_pos: Position, details: str, context: Optional['Context']):
        super().__init__(start_pos, end_pos, details)
        self.context = context

    def generate_traceback(self) -> str:
        # innermost frame first
        result = 'traceback on:\n'
        if self.context is None:
            return result
        for pos, ctx in self.context.frames(self.start_pos):
            result += f"\tFile '{pos.filename}' -> line {pos.line + 1} -> {ctx.name}\n\n"
        return result

    def as_string(self) -> str:
        return self.generate_traceback() + super().as_string()


class DivisionByZeroError(RTError):
    error_name = 'Division by zero'
