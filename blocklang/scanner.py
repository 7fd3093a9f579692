"""Scanner for the blocklang language.

`tokenize` turns source text into a lazy stream of `Token` objects. The
stream is a `Scanner` instance: it is pulled one token at a time by the
parser, runs forward only and cannot be restarted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Optional

from .errors import ExpectedCharacterError, IllegalCharacterError
from .position import Position


class TokenKind(Enum):
    # Identifiers & values
    NUMBER = auto()
    STRING = auto()
    IDENTIFIER = auto()
    KEYWORD = auto()

    # Single operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    BANG = auto()
    EQUAL = auto()
    COMMA = auto()
    LESS_THAN = auto()
    GREATER_THAN = auto()
    POWER = auto()
    SEMICOLON = auto()

    # Double operators
    EQUAL_EQUAL = auto()
    NOT_EQUAL = auto()
    LESS_THAN_EQUAL = auto()
    GREATER_THAN_EQUAL = auto()

    # Brackets
    LPAREN = auto()
    RPAREN = auto()
    LSQUARE = auto()
    RSQUARE = auto()

    EOF = auto()


KEYWORDS = ('let', 'and', 'or')

OPERATORS: Dict[str, TokenKind] = {
    '+': TokenKind.PLUS,
    '-': TokenKind.MINUS,
    '*': TokenKind.STAR,
    '/': TokenKind.SLASH,
    '!': TokenKind.BANG,
    '=': TokenKind.EQUAL,
    ',': TokenKind.COMMA,
    '<': TokenKind.LESS_THAN,
    '>': TokenKind.GREATER_THAN,
    '^': TokenKind.POWER,
    ';': TokenKind.SEMICOLON,

    '==': TokenKind.EQUAL_EQUAL,
    '!=': TokenKind.NOT_EQUAL,
    '<=': TokenKind.LESS_THAN_EQUAL,
    '>=': TokenKind.GREATER_THAN_EQUAL,

    '(': TokenKind.LPAREN,
    ')': TokenKind.RPAREN,
    '[': TokenKind.LSQUARE,
    ']': TokenKind.RSQUARE,
}

ESCAPES = {'t': '\t', 'n': '\n'}


@dataclass(frozen=True)
class Token:
    """A classified lexeme.

    Equality only looks at `kind` and `value`; the span is diagnostic
    metadata. `end_pos` defaults to one character past `start_pos`.
    """
    kind: TokenKind
    value: Optional[str] = None
    start_pos: Position = field(default_factory=Position.default, compare=False)
    end_pos: Optional[Position] = field(default=None, compare=False)

    def __post_init__(self):
        if self.end_pos is None:
            object.__setattr__(self, 'end_pos', self.start_pos.advance())

    def matches(self, kind: TokenKind, value: Optional[str] = None) -> bool:
        return self.kind == kind and (value is None or self.value == value)

    def __repr__(self) -> str:
        if self.value is None:
            return f"Token({self.kind.name})"
        return f"Token({self.kind.name}, {self.value!r})"


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_alpha(c: str) -> bool:
    return 'a' <= c <= 'z' or 'A' <= c <= 'Z'


def is_identifier_start(c: str) -> bool:
    return is_alpha(c) or c == '_'


def is_identifier_char(c: str) -> bool:
    return is_alpha(c) or is_digit(c) or c == '_'


def normalize_number(text: str) -> str:
    """Give a numeral a digit on both sides of a leading or trailing dot."""
    if text.startswith('.'):
        text = '0' + text
    if text.endswith('.'):
        text += '0'
    return text


def unescape(body: str) -> str:
    """Resolve backslash escapes in the body of a string literal."""
    result = []
    escape = False
    for ch in body:
        if escape:
            result.append(ESCAPES.get(ch, ch))
            escape = False
        elif ch == '\\':
            escape = True
        else:
            result.append(ch)
    return ''.join(result)


class Scanner:
    """Forward-only token iterator over one source text."""

    def __init__(self, filename: str, text: str):
        self.filename = filename
        self.text = text
        self.pos = Position.start(filename, text)
        self.current: Optional[str] = text[0] if text else None

    def __iter__(self) -> 'Scanner':
        return self

    def advance(self):
        self.pos = self.pos.advance(self.current)
        index = self.pos.index
        self.current = self.text[index] if index < len(self.text) else None

    def __next__(self) -> Token:
        while self.current is not None:
            c = self.current
            if c.isspace():
                self.advance()
            elif c == '#':
                self.skip_comment()
            elif c in OPERATORS:
                return self.make_operator()
            elif is_digit(c) or c == '.':
                return self.make_number()
            elif is_identifier_start(c):
                return self.make_identifier()
            elif c in ('"', "'"):
                return self.make_string()
            else:
                start_pos = self.pos
                self.advance()
                raise IllegalCharacterError(start_pos, self.pos, f"'{c}'")
        raise StopIteration

    def skip_comment(self):
        self.advance()
        while self.current is not None and self.current != '\n':
            self.advance()
        if self.current is not None:
            self.advance()

    def make_operator(self) -> Token:
        start_pos = self.pos
        lexeme = self.current
        self.advance()
        if self.current is not None and lexeme + self.current in OPERATORS:
            lexeme += self.current
            self.advance()
        return Token(OPERATORS[lexeme], None, start_pos, self.pos)

    def make_number(self) -> Token:
        start_pos = self.pos
        dot_count = 0
        digits = ''
        while self.current is not None and (is_digit(self.current) or self.current == '.'):
            if self.current == '.':
                dot_count += 1
                if dot_count > 1:
                    break
            digits += self.current
            self.advance()
        return Token(TokenKind.NUMBER, normalize_number(digits), start_pos, self.pos)

    def make_identifier(self) -> Token:
        start_pos = self.pos
        name = ''
        while self.current is not None and is_identifier_char(self.current):
            name += self.current
            self.advance()
        kind = TokenKind.KEYWORD if name in KEYWORDS else TokenKind.IDENTIFIER
        return Token(kind, name, start_pos, self.pos)

    def make_string(self) -> Token:
        start_pos = self.pos
        quote = self.current
        self.advance()
        chars = []
        escape = False
        while self.current is not None and (self.current != quote or escape):
            if escape:
                chars.append(ESCAPES.get(self.current, self.current))
                escape = False
            elif self.current == '\\':
                escape = True
            else:
                chars.append(self.current)
            self.advance()
        if self.current is None:
            raise ExpectedCharacterError(start_pos, self.pos, f"Expected closing {quote}")
        self.advance()
        return Token(TokenKind.STRING, ''.join(chars), start_pos, self.pos)


def tokenize(filename: str, text: str) -> Scanner:
    """Return a lazy, single-pass token stream over `text`."""
    return Scanner(filename, text)
