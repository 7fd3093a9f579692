"""JSON serialization/deserialization for blocklang ASTs.

This module converts between the AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Positions are stored as
`[index, line, column]` triples; the file name and source text they refer
to are stored once, at the top level of a dumped program.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import (
    AssignExpression,
    BinaryExpression,
    CallExpression,
    Identifier,
    ListExpression,
    NumberLiteral,
    Program,
    StringLiteral,
    UnaryExpression,
)
from .position import Position
from .scanner import Token, TokenKind


def position_to_obj(pos: Position) -> List[int]:
    return [pos.index, pos.line, pos.column]


def position_from_obj(o: List[int], filename: str, source: str) -> Position:
    index, line, column = o
    return Position(filename, source, index, line, column)


def token_to_obj(token: Token) -> Dict[str, Any]:
    return {
        "kind": token.kind.name,
        "value": token.value,
        "start": position_to_obj(token.start_pos),
        "end": position_to_obj(token.end_pos),
    }


def token_from_obj(o: Dict[str, Any], filename: str, source: str) -> Token:
    return Token(
        TokenKind[o["kind"]],
        o.get("value"),
        position_from_obj(o["start"], filename, source),
        position_from_obj(o["end"], filename, source),
    )


def ast_to_obj(node: Any) -> Dict[str, Any]:
    obj: Dict[str, Any] = {
        "type": type(node).__name__,
        "start": position_to_obj(node.start_pos),
        "end": position_to_obj(node.end_pos),
    }
    if isinstance(node, Program):
        obj["body"] = [ast_to_obj(n) for n in node.body]
    elif isinstance(node, (Identifier, NumberLiteral, StringLiteral)):
        obj["token"] = token_to_obj(node.token)
    elif isinstance(node, BinaryExpression):
        obj["left"] = ast_to_obj(node.left)
        obj["op"] = token_to_obj(node.op)
        obj["right"] = ast_to_obj(node.right)
    elif isinstance(node, UnaryExpression):
        obj["op"] = token_to_obj(node.op)
        obj["operand"] = ast_to_obj(node.operand)
    elif isinstance(node, ListExpression):
        obj["elements"] = [ast_to_obj(e) for e in node.elements]
    elif isinstance(node, CallExpression):
        obj["callee"] = ast_to_obj(node.callee)
        obj["args"] = [ast_to_obj(a) for a in node.args]
    elif isinstance(node, AssignExpression):
        obj["name"] = token_to_obj(node.name)
        obj["value"] = ast_to_obj(node.value)
    else:
        raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")
    return obj


def ast_from_obj(obj: Dict[str, Any], filename: str, source: str) -> Any:
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")

    def node(o):
        return ast_from_obj(o, filename, source)

    def token(o):
        return token_from_obj(o, filename, source)

    span = {
        "start_pos": position_from_obj(obj["start"], filename, source),
        "end_pos": position_from_obj(obj["end"], filename, source),
    }
    t = obj.get("type")
    if t == "Program":
        return Program(tuple(node(n) for n in obj["body"]), **span)
    if t == "Identifier":
        return Identifier(token(obj["token"]), **span)
    if t == "NumberLiteral":
        return NumberLiteral(token(obj["token"]), **span)
    if t == "StringLiteral":
        return StringLiteral(token(obj["token"]), **span)
    if t == "BinaryExpression":
        return BinaryExpression(node(obj["left"]), token(obj["op"]), node(obj["right"]), **span)
    if t == "UnaryExpression":
        return UnaryExpression(token(obj["op"]), node(obj["operand"]), **span)
    if t == "ListExpression":
        return ListExpression(tuple(node(e) for e in obj["elements"]), **span)
    if t == "CallExpression":
        return CallExpression(node(obj["callee"]), tuple(node(a) for a in obj["args"]), **span)
    if t == "AssignExpression":
        return AssignExpression(token(obj["name"]), node(obj["value"]), **span)

    raise ValueError(f"Unknown AST node type: {t}")


def dump_program(program: Program) -> Dict[str, Any]:
    """Serialize a parsed program together with the source it came from."""
    origin = program.start_pos
    return {
        "filename": origin.filename,
        "source": origin.source,
        "program": ast_to_obj(program),
    }


def load_program(obj: Dict[str, Any]) -> Program:
    program = ast_from_obj(obj["program"], obj["filename"], obj["source"])
    if not isinstance(program, Program):
        raise ValueError("AST file does not contain a Program")
    return program
