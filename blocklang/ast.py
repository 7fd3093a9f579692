"""Abstract Syntax Tree (AST) definitions for the blocklang language.

Nodes are frozen dataclasses. Each one spans the full source extent of the
construct it represents; when a span is not passed explicitly it is derived
from the children (leftmost start to rightmost end). Spans are excluded
from equality, so two trees compare equal when they have the same shape and
token values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .position import Position
from .scanner import Token


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    start_pos: Optional[Position] = field(default=None, compare=False, repr=False, kw_only=True)
    end_pos: Optional[Position] = field(default=None, compare=False, repr=False, kw_only=True)

    def _span(self, start_pos: Optional[Position], end_pos: Optional[Position]):
        if self.start_pos is None:
            object.__setattr__(self, 'start_pos', start_pos or Position.default())
        if self.end_pos is None:
            object.__setattr__(self, 'end_pos', end_pos or Position.default())


@dataclass(frozen=True)
class Program(Node):
    body: Tuple[Node, ...]

    def __post_init__(self):
        if self.body:
            self._span(self.body[0].start_pos, self.body[-1].end_pos)
        else:
            self._span(None, None)


@dataclass(frozen=True)
class Identifier(Node):
    token: Token

    def __post_init__(self):
        self._span(self.token.start_pos, self.token.end_pos)

    @property
    def name(self) -> str:
        return self.token.value


@dataclass(frozen=True)
class BinaryExpression(Node):
    left: Node
    op: Token
    right: Node

    def __post_init__(self):
        self._span(self.left.start_pos, self.right.end_pos)


@dataclass(frozen=True)
class UnaryExpression(Node):
    op: Token
    operand: Node

    def __post_init__(self):
        self._span(self.op.start_pos, self.operand.end_pos)


@dataclass(frozen=True)
class ListExpression(Node):
    elements: Tuple[Node, ...]

    def __post_init__(self):
        self._span(None, None)


@dataclass(frozen=True)
class CallExpression(Node):
    callee: Node
    args: Tuple[Node, ...]

    def __post_init__(self):
        end_pos = self.args[-1].end_pos if self.args else self.callee.end_pos
        self._span(self.callee.start_pos, end_pos)


@dataclass(frozen=True)
class AssignExpression(Node):
    name: Token
    value: Node

    def __post_init__(self):
        self._span(self.name.start_pos, self.value.end_pos)


@dataclass(frozen=True)
class NumberLiteral(Node):
    token: Token

    def __post_init__(self):
        self._span(self.token.start_pos, self.token.end_pos)

    @property
    def value(self) -> float:
        return float(self.token.value)


@dataclass(frozen=True)
class StringLiteral(Node):
    token: Token

    def __post_init__(self):
        self._span(self.token.start_pos, self.token.end_pos)

    @property
    def value(self) -> str:
        return self.token.value
