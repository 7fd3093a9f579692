"""Tree-walking interpreter for the blocklang language.

`Interpreter.visit` evaluates one AST node in a `Context` and returns a
`Value`, raising `RTError` on failure. `run` is the usual entry point: it
parses source text, binds the builtins into a fresh top-level symbol table
and evaluates the program under a `<program>` context.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .ast import (
    AssignExpression, BinaryExpression, CallExpression, Identifier,
    ListExpression, Node, NumberLiteral, Program, StringLiteral, UnaryExpression,
)
from .builtin_function import Builtin
from .environment import Context, SymbolTable
from .errors import RTError
from .grammar import parse_with_grammar
from .parser import parse
from .scanner import Token, TokenKind
from .std import populate_core_environment
from .values import NULL, ListValue, NumberValue, StringValue, Value

logger = logging.getLogger(__name__)

BINARY_OPERATIONS = {
    TokenKind.PLUS: 'add',
    TokenKind.MINUS: 'sub',
    TokenKind.STAR: 'mul',
    TokenKind.SLASH: 'div',
    TokenKind.POWER: 'pow',
    TokenKind.EQUAL_EQUAL: 'eq',
    TokenKind.NOT_EQUAL: 'ne',
    TokenKind.LESS_THAN: 'lt',
    TokenKind.LESS_THAN_EQUAL: 'lte',
    TokenKind.GREATER_THAN: 'gt',
    TokenKind.GREATER_THAN_EQUAL: 'gte',
}
KEYWORD_OPERATIONS = {
    'and': 'and_',
    'or': 'or_',
}

FRONTENDS = {
    'descent': parse,
    'grammar': parse_with_grammar,
}


class Interpreter:
    """Evaluates blocklang ASTs."""

    def visit(self, node: Node, context: Context) -> Value:
        logger.debug("visit %s at %r", type(node).__name__, getattr(node, "start_pos", None))
        if isinstance(node, Program):
            for statement in node.body:
                self.visit(statement, context)
            return NULL.clone()
        if isinstance(node, Identifier):
            value = context.symbol_table.get(node.name)
            if value is None:
                raise RTError(node.start_pos, node.end_pos, f'{node.name} is not defined', context)
            return value.clone().set_context(context).set_position(node.start_pos, node.end_pos)
        if isinstance(node, BinaryExpression):
            left = self.visit(node.left, context)
            right = self.visit(node.right, context)
            method = self.binary_operation(node.op)
            if method is None:
                raise RTError(node.start_pos, node.end_pos, 'binary expression nonexistent on operator', context)
            return getattr(left, method)(right).set_position(node.start_pos, node.end_pos)
        if isinstance(node, UnaryExpression):
            number = self.visit(node.operand, context)
            if not isinstance(number, NumberValue):
                raise RTError(node.start_pos, node.end_pos, 'unary expression must be on number', context)
            if node.op.kind == TokenKind.MINUS:
                number = number.mul(NumberValue(-1))
            elif node.op.kind == TokenKind.BANG:
                number = number.not_()
            return number.set_position(node.start_pos, node.end_pos)
        if isinstance(node, ListExpression):
            elements = [self.visit(element, context) for element in node.elements]
            return ListValue(elements, node.start_pos, node.end_pos, context)
        if isinstance(node, CallExpression):
            callee = self.visit(node.callee, context)
            callee = callee.clone().set_position(node.start_pos, node.end_pos)
            args = [self.visit(arg, context) for arg in node.args]
            result = callee.execute(args)
            return result.clone().set_position(node.start_pos, node.end_pos).set_context(context)
        if isinstance(node, AssignExpression):
            value = self.visit(node.value, context)
            context.symbol_table.set(node.name.value, value)
            return value
        if isinstance(node, NumberLiteral):
            return NumberValue(node.value, node.start_pos, node.end_pos, context)
        if isinstance(node, StringLiteral):
            return StringValue(node.value, node.start_pos, node.end_pos, context)
        raise TypeError(f"visit: unexpected node type {type(node).__name__}")

    @staticmethod
    def binary_operation(op: Token) -> Optional[str]:
        if op.kind == TokenKind.KEYWORD:
            return KEYWORD_OPERATIONS.get(op.value)
        return BINARY_OPERATIONS.get(op.kind)


def global_context(builtins: Iterable[Builtin] = ()) -> Context:
    """Create the top-level context with the core and host builtins bound."""
    table = populate_core_environment(SymbolTable(), builtins)
    return Context('<program>', table)


def run_program(program: Program, builtins: Iterable[Builtin] = (),
                context: Optional[Context] = None) -> Context:
    """Evaluate an already parsed program and return its top-level context."""
    if context is None:
        context = global_context(builtins)
    logger.info("running %s (%d statement(s))", program.start_pos.filename, len(program.body))
    Interpreter().visit(program, context)
    return context


def run(text: str, filename: str = '<stdin>', builtins: Iterable[Builtin] = (),
        frontend: str = 'descent') -> Context:
    """Parse and evaluate blocklang source text.

    `builtins` are host operations made available to the script next to the
    core ones. `frontend` picks the parser: the hand-written recursive descent
    parser (`'descent'`) or the Lark grammar (`'grammar'`). Returns the
    top-level context, so callers can inspect the variables the script set.
    """
    program = FRONTENDS[frontend](filename, text)
    return run_program(program, builtins)
