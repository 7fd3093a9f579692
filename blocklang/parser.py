"""Recursive-descent parser for the blocklang language.

The parser pulls tokens one at a time from the scanner and builds a
`Program` AST. Each precedence level is a method; the binary levels share
`_binary_op`, a left-associative loop over the next level down. Parsing
stops at the first error, which is raised as `InvalidSyntaxError` or
`IllegalSyntaxError`.

Grammar, lowest precedence first::

    statements := (statement ';' | ';')*
    expr       := 'let' IDENTIFIER '=' expr | logic
    logic      := comparison (('and' | 'or') comparison)*
    comparison := '!' comparison | arithmetic (('==' | '!=' | '<' | '<=' | '>' | '>=') arithmetic)*
    arithmetic := term (('+' | '-') term)*
    term       := factor (('*' | '/') factor)*
    factor     := ('+' | '-') factor | power
    power      := call ('^' factor)*
    call       := atom ('(' (expr (',' expr)*)? ')')?
    atom       := NUMBER | STRING | IDENTIFIER | '(' expr ')' | list
    list       := '[' (expr (',' expr)*)? ']'
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from .ast import (
    AssignExpression, BinaryExpression, CallExpression, Identifier,
    ListExpression, Node, NumberLiteral, Program, StringLiteral, UnaryExpression,
)
from .errors import IllegalSyntaxError, InvalidSyntaxError
from .position import Position
from .scanner import Token, TokenKind, tokenize

logger = logging.getLogger(__name__)

COMPARISON_OPS = (
    (TokenKind.EQUAL_EQUAL,),
    (TokenKind.NOT_EQUAL,),
    (TokenKind.LESS_THAN,),
    (TokenKind.LESS_THAN_EQUAL,),
    (TokenKind.GREATER_THAN,),
    (TokenKind.GREATER_THAN_EQUAL,),
)
LOGIC_OPS = ((TokenKind.KEYWORD, 'and'), (TokenKind.KEYWORD, 'or'))


def expected(*expects: str) -> str:
    return 'Expected ' + ', '.join(expects)


def quote(*values: str) -> str:
    return ', '.join(f"'{value}'" for value in values)


class Parser:
    def __init__(self, filename: str, text: str):
        self.filename = filename
        self.text = text
        self.tokens = tokenize(filename, text)
        self.current: Optional[Token] = None
        # closing tokens of the brackets currently open, innermost last
        self.closers: List[Tuple[str, ...]] = []
        self.advance()

    def advance(self):
        token = next(self.tokens, None)
        if token is None:
            token = Token(TokenKind.EOF, None, self.tokens.pos)
        self.current = token

    def current_is_eof(self) -> bool:
        return self.current.kind == TokenKind.EOF

    def _check_eof(self, *operators: str):
        if self.current_is_eof():
            terminators = self.closers[-1] if self.closers else (';',)
            raise InvalidSyntaxError(
                self.current.start_pos, self.current.end_pos,
                expected(quote(*operators, *terminators)),
            )

    def _binary_op(self, operand: Callable[[], Node], ops: Sequence[tuple],
                   right_operand: Optional[Callable[[], Node]] = None) -> Node:
        if right_operand is None:
            right_operand = operand
        left = operand()
        while any(self.current.matches(*op) for op in ops):
            op_token = self.current
            self.advance()
            left = BinaryExpression(left, op_token, right_operand())
        return left

    def parse(self) -> Program:
        statements = self.statements()
        logger.debug("parsed %d statement(s) from %s", len(statements), self.filename)
        if statements:
            return Program(tuple(statements))
        start = Position.start(self.filename, self.text)
        return Program((), start_pos=start, end_pos=start)

    def statements(self) -> List[Node]:
        statements: List[Node] = []
        while not self.current_is_eof():
            if self.current.kind == TokenKind.SEMICOLON:
                self.advance()
                continue
            statement = self.expr()
            statements.append(statement)
            if self.current.kind == TokenKind.SEMICOLON:
                self.advance()
            else:
                raise InvalidSyntaxError(
                    statement.start_pos, statement.end_pos,
                    expected('statement to end with semicolon'),
                )
        return statements

    def expr(self) -> Node:
        if self.current.matches(TokenKind.KEYWORD, 'let'):
            self.advance()
            if self.current.kind != TokenKind.IDENTIFIER:
                raise InvalidSyntaxError(self.current.start_pos, self.current.end_pos, expected('identifier'))
            name = self.current
            self.advance()
            if self.current.kind != TokenKind.EQUAL:
                raise InvalidSyntaxError(self.current.start_pos, self.current.end_pos, expected(quote('=')))
            self.advance()
            return AssignExpression(name, self.expr())

        result = self._binary_op(self.comparison, LOGIC_OPS)
        self._check_eof('and', 'or')
        return result

    def comparison(self) -> Node:
        if self.current.kind == TokenKind.BANG:
            op_token = self.current
            self.advance()
            return UnaryExpression(op_token, self.comparison())

        node = self._binary_op(self.arithmetic, COMPARISON_OPS)
        self._check_eof('==', '!=', '<', '<=', '>', '>=', 'and', 'or')
        return node

    def arithmetic(self) -> Node:
        return self._binary_op(self.term, ((TokenKind.PLUS,), (TokenKind.MINUS,)))

    def term(self) -> Node:
        return self._binary_op(self.factor, ((TokenKind.STAR,), (TokenKind.SLASH,)))

    def factor(self) -> Node:
        if self.current.kind in (TokenKind.PLUS, TokenKind.MINUS):
            op_token = self.current
            self.advance()
            return UnaryExpression(op_token, self.factor())
        return self.power()

    def power(self) -> Node:
        # right operand is a factor, which makes '^' right-associative
        return self._binary_op(self.call, ((TokenKind.POWER,),), self.factor)

    def call(self) -> Node:
        atom = self.atom()
        if self.current.kind != TokenKind.LPAREN:
            return atom

        self.advance()
        args: List[Node] = []
        self.closers.append((')', ','))
        if self.current.kind != TokenKind.RPAREN:
            args.append(self.expr())
            while self.current.kind == TokenKind.COMMA:
                self.advance()
                args.append(self.expr())
            if self.current.kind != TokenKind.RPAREN:
                raise InvalidSyntaxError(self.current.start_pos, self.current.end_pos, expected(quote(')', ',')))
        self.closers.pop()
        end_pos = self.current.end_pos
        self.advance()
        return CallExpression(atom, tuple(args), end_pos=end_pos)

    def atom(self) -> Node:
        token = self.current
        if token.kind == TokenKind.NUMBER:
            self.advance()
            return NumberLiteral(token)
        if token.kind == TokenKind.STRING:
            self.advance()
            return StringLiteral(token)
        if token.kind == TokenKind.IDENTIFIER:
            self.advance()
            return Identifier(token)
        if token.kind == TokenKind.LPAREN:
            self.advance()
            self.closers.append((')',))
            result = self.expr()
            if self.current.kind != TokenKind.RPAREN:
                raise InvalidSyntaxError(self.current.start_pos, self.current.end_pos, expected(quote(')')))
            self.closers.pop()
            self.advance()
            return result
        if token.kind == TokenKind.LSQUARE:
            return self.list_expr()
        raise IllegalSyntaxError(
            token.start_pos, token.end_pos,
            expected('number', 'identifier', 'string', quote('(', '[')),
        )

    def list_expr(self) -> Node:
        start_pos = self.current.start_pos
        self.advance()
        elements: List[Node] = []
        self.closers.append((']', ','))
        if self.current.kind != TokenKind.RSQUARE:
            elements.append(self.expr())
            while self.current.kind == TokenKind.COMMA:
                self.advance()
                elements.append(self.expr())
            if self.current.kind != TokenKind.RSQUARE:
                raise InvalidSyntaxError(self.current.start_pos, self.current.end_pos, expected(quote(']', ',')))
        self.closers.pop()
        end_pos = self.current.end_pos
        self.advance()
        return ListExpression(tuple(elements), start_pos=start_pos, end_pos=end_pos)


def parse(filename: str, text: str) -> Program:
    """Parse blocklang source text into a `Program` AST."""
    return Parser(filename, text).parse()
