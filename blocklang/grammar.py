"""Grammar-driven parser for the blocklang language.

This module describes the same language as `blocklang.parser` declaratively
and parses it with a Lark LALR parser. The parse tree is transformed into
the very same AST classes, with the same token kinds and values and the same
node spans, so the two front-ends are interchangeable. Lark's own errors are
translated into the blocklang error family.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import Dict, List

from lark import Lark, Token as LarkToken, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedToken

from .ast import (
    AssignExpression, BinaryExpression, CallExpression, Identifier,
    ListExpression, NumberLiteral, Program, StringLiteral, UnaryExpression,
)
from .errors import ExpectedCharacterError, IllegalCharacterError, InvalidSyntaxError
from .position import Position
from .scanner import Token, TokenKind, normalize_number, unescape


BLOCKLANG_GRAMMAR = r"""
    start: (expr? SEMICOLON)*

    ?expr: assign
         | logic
    assign: LET IDENTIFIER EQUAL expr

    ?logic: comparison ((AND | OR) comparison)*
    ?comparison: negation
               | relation
    negation: BANG comparison
    ?relation: arithmetic ((EQUAL_EQUAL | NOT_EQUAL | LESS_THAN_EQUAL | GREATER_THAN_EQUAL | LESS_THAN | GREATER_THAN) arithmetic)*
    ?arithmetic: term ((PLUS | MINUS) term)*
    ?term: factor ((STAR | SLASH) factor)*
    ?factor: sign
           | power
    sign: (PLUS | MINUS) factor
    ?power: call (POWER factor)?
    ?call: atom
         | invocation
    invocation: atom LPAREN (expr (COMMA expr)*)? RPAREN

    ?atom: NUMBER -> number
         | STRING -> string
         | IDENTIFIER -> identifier
         | group
         | list
    group: LPAREN expr RPAREN
    list: LSQUARE (expr (COMMA expr)*)? RSQUARE

    LET: "let"
    AND: "and"
    OR: "or"
    IDENTIFIER: /[a-zA-Z_][a-zA-Z0-9_]*/
    NUMBER: /[0-9]+(\.[0-9]*)?|\.[0-9]*/
    STRING: /"(\\[\s\S]|[^"\\])*"/
          | /'(\\[\s\S]|[^'\\])*'/

    EQUAL_EQUAL: "=="
    NOT_EQUAL: "!="
    LESS_THAN_EQUAL: "<="
    GREATER_THAN_EQUAL: ">="
    LESS_THAN: "<"
    GREATER_THAN: ">"
    EQUAL: "="
    BANG: "!"
    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    POWER: "^"
    COMMA: ","
    SEMICOLON: ";"
    LPAREN: "("
    RPAREN: ")"
    LSQUARE: "["
    RSQUARE: "]"

    COMMENT: /#[^\n]*/
    WHITESPACE: /\s+/
    %ignore COMMENT
    %ignore WHITESPACE
"""


BLOCKLANG_PARSER = Lark(
    BLOCKLANG_GRAMMAR,
    parser='lalr',
    lexer='basic',
    maybe_placeholders=False,
)

# Lark terminal names -> blocklang token kinds; keywords are handled apart
TERMINAL_KINDS: Dict[str, TokenKind] = {
    name: TokenKind[name]
    for name in (
        'EQUAL_EQUAL', 'NOT_EQUAL', 'LESS_THAN_EQUAL', 'GREATER_THAN_EQUAL',
        'LESS_THAN', 'GREATER_THAN', 'EQUAL', 'BANG', 'PLUS', 'MINUS', 'STAR',
        'SLASH', 'POWER', 'COMMA', 'SEMICOLON', 'LPAREN', 'RPAREN', 'LSQUARE',
        'RSQUARE',
    )
}
KEYWORD_TERMINALS = ('LET', 'AND', 'OR')


class SourceIndex:
    """Maps absolute offsets of one source text to `Position`s."""

    def __init__(self, filename: str, text: str):
        self.filename = filename
        self.text = text
        self.line_starts = [0]
        for i, ch in enumerate(text):
            if ch == '\n':
                self.line_starts.append(i + 1)

    def position(self, index: int) -> Position:
        line = bisect_right(self.line_starts, index) - 1
        return Position(self.filename, self.text, index, line, index - self.line_starts[line])


class ASTTransformer(Transformer):
    """Transforms the Lark parse tree into blocklang AST nodes."""

    def __init__(self, source: SourceIndex):
        super().__init__()
        self.source = source

    def token(self, lark_token: LarkToken) -> Token:
        start_pos = self.source.position(lark_token.start_pos)
        end_pos = self.source.position(lark_token.end_pos)
        if lark_token.type in KEYWORD_TERMINALS:
            return Token(TokenKind.KEYWORD, str(lark_token), start_pos, end_pos)
        if lark_token.type == 'IDENTIFIER':
            return Token(TokenKind.IDENTIFIER, str(lark_token), start_pos, end_pos)
        if lark_token.type == 'NUMBER':
            return Token(TokenKind.NUMBER, normalize_number(str(lark_token)), start_pos, end_pos)
        if lark_token.type == 'STRING':
            return Token(TokenKind.STRING, unescape(str(lark_token)[1:-1]), start_pos, end_pos)
        return Token(TERMINAL_KINDS[lark_token.type], None, start_pos, end_pos)

    def _nodes(self, items) -> List:
        return [item for item in items if not isinstance(item, LarkToken)]

    def _fold(self, items):
        left = items[0]
        for i in range(1, len(items), 2):
            left = BinaryExpression(left, self.token(items[i]), items[i + 1])
        return left

    def start(self, items):
        body = self._nodes(items)
        if body:
            return Program(tuple(body))
        start = self.source.position(0)
        return Program((), start_pos=start, end_pos=start)

    def assign(self, items):
        _let, name, _equal, value = items
        return AssignExpression(self.token(name), value)

    # every binary level has the shape: operand (op operand)*
    logic = _fold
    relation = _fold
    arithmetic = _fold
    term = _fold
    power = _fold

    def negation(self, items):
        op, operand = items
        return UnaryExpression(self.token(op), operand)

    sign = negation

    def invocation(self, items):
        callee = items[0]
        args = self._nodes(items[1:])
        return CallExpression(callee, tuple(args), end_pos=self.token(items[-1]).end_pos)

    def number(self, items):
        return NumberLiteral(self.token(items[0]))

    def string(self, items):
        return StringLiteral(self.token(items[0]))

    def identifier(self, items):
        return Identifier(self.token(items[0]))

    def group(self, items):
        return items[1]

    def list(self, items):
        elements = self._nodes(items)
        return ListExpression(
            tuple(elements),
            start_pos=self.token(items[0]).start_pos,
            end_pos=self.token(items[-1]).end_pos,
        )


def parse_with_grammar(filename: str, text: str) -> Program:
    """Parse blocklang source text with the Lark grammar into a `Program` AST."""
    source = SourceIndex(filename, text)
    try:
        tree = BLOCKLANG_PARSER.parse(text)
    except UnexpectedCharacters as e:
        start_pos = source.position(e.pos_in_stream)
        char = text[e.pos_in_stream]
        if char in ('"', "'"):
            # no STRING match from a quote means the literal is never closed
            raise ExpectedCharacterError(start_pos, source.position(len(text)), f"Expected closing {char}") from None
        raise IllegalCharacterError(start_pos, start_pos.advance(), f"'{text[e.pos_in_stream]}'") from None
    except UnexpectedToken as e:
        if e.token.type == '$END':
            start_pos = source.position(len(text))
            end_pos = start_pos.advance()
        else:
            start_pos = source.position(e.token.start_pos)
            end_pos = source.position(e.token.end_pos)
        raise InvalidSyntaxError(start_pos, end_pos, 'Expected ' + ', '.join(sorted(e.expected))) from None
    except UnexpectedEOF as e:
        start_pos = source.position(len(text))
        raise InvalidSyntaxError(start_pos, start_pos.advance(), 'Expected ' + ', '.join(sorted(e.expected))) from None
    return ASTTransformer(source).transform(tree)
