import pytest

from blocklang.ast import (
    AssignExpression, BinaryExpression, CallExpression, Identifier,
    ListExpression, NumberLiteral, StringLiteral, UnaryExpression,
)
from blocklang.errors import IllegalSyntaxError, InvalidSyntaxError
from blocklang.parser import parse
from blocklang.scanner import Token, TokenKind

FILENAME = 'testingfile'


def ident(name):
    return Identifier(Token(TokenKind.IDENTIFIER, name))


def num(value):
    return NumberLiteral(Token(TokenKind.NUMBER, value))


def binary(left, kind, right, value=None):
    return BinaryExpression(left, Token(kind, value), right)


def test_call_with_arguments():
    program = parse(FILENAME, "send(10, 'Hello there', RedBlock);")
    assert program.body == (
        CallExpression(ident('send'), (
            num('10'),
            StringLiteral(Token(TokenKind.STRING, 'Hello there')),
            ident('RedBlock'),
        )),
    )


def test_stray_semicolons_and_lists():
    program = parse(FILENAME, """
    ; ; ;
    let x = [2, 5, 'hello'];
    print(x);
    ;;;
    """)
    assert program.body == (
        AssignExpression(
            Token(TokenKind.IDENTIFIER, 'x'),
            ListExpression((num('2'), num('5'), StringLiteral(Token(TokenKind.STRING, 'hello')))),
        ),
        CallExpression(ident('print'), (ident('x'),)),
    )


def test_empty_program():
    program = parse(FILENAME, '  # only a comment\n')
    assert program.body == ()
    assert program.start_pos.index == 0


def test_precedence():
    (statement,) = parse(FILENAME, '1 + 2 * 3 == 7 and !x;').body
    assert statement == binary(
        binary(
            binary(num('1'), TokenKind.PLUS, binary(num('2'), TokenKind.STAR, num('3'))),
            TokenKind.EQUAL_EQUAL,
            num('7'),
        ),
        TokenKind.KEYWORD,
        UnaryExpression(Token(TokenKind.BANG), ident('x')),
        'and',
    )


def test_power_is_right_associative():
    (statement,) = parse(FILENAME, '2 ^ 3 ^ 2;').body
    assert statement == binary(num('2'), TokenKind.POWER, binary(num('3'), TokenKind.POWER, num('2')))


def test_subtraction_is_left_associative():
    (statement,) = parse(FILENAME, '8 - 4 - 2;').body
    assert statement == binary(binary(num('8'), TokenKind.MINUS, num('4')), TokenKind.MINUS, num('2'))


def test_unary_minus_binds_tighter_than_multiplication():
    (statement,) = parse(FILENAME, '-2 * 3;').body
    assert statement == binary(UnaryExpression(Token(TokenKind.MINUS), num('2')), TokenKind.STAR, num('3'))


def test_nested_assignment():
    (statement,) = parse(FILENAME, 'let a = let b = 1;').body
    assert statement == AssignExpression(
        Token(TokenKind.IDENTIFIER, 'a'),
        AssignExpression(Token(TokenKind.IDENTIFIER, 'b'), num('1')),
    )


def test_node_spans():
    (call,) = parse(FILENAME, 'print( [1, 2] );').body
    assert (call.start_pos.column, call.end_pos.column) == (0, 15)
    (items,) = call.args
    assert (items.start_pos.column, items.end_pos.column) == (7, 13)


def test_missing_semicolon():
    with pytest.raises(InvalidSyntaxError) as excinfo:
        parse(FILENAME, 'print(1) print(2);')
    assert excinfo.value.details == 'Expected statement to end with semicolon'


def test_end_of_input_lists_expected_operators():
    with pytest.raises(InvalidSyntaxError) as excinfo:
        parse(FILENAME, 'let x = 1')
    assert excinfo.value.details == "Expected '==', '!=', '<', '<=', '>', '>=', 'and', 'or', ';'"


def test_end_of_input_inside_call():
    with pytest.raises(InvalidSyntaxError) as excinfo:
        parse(FILENAME, 'print(1')
    assert excinfo.value.details.endswith("')', ','")


def test_let_requires_identifier_and_equals():
    with pytest.raises(InvalidSyntaxError) as excinfo:
        parse(FILENAME, 'let 5 = 1;')
    assert excinfo.value.details == 'Expected identifier'
    with pytest.raises(InvalidSyntaxError) as excinfo:
        parse(FILENAME, 'let x 1;')
    assert excinfo.value.details == "Expected '='"


def test_illegal_syntax():
    with pytest.raises(IllegalSyntaxError) as excinfo:
        parse(FILENAME, 'let x = ;')
    assert excinfo.value.details == "Expected number, identifier, string, '(', '['"


def test_unclosed_list():
    with pytest.raises(InvalidSyntaxError) as excinfo:
        parse(FILENAME, '[1, 2;')
    assert excinfo.value.details == "Expected ']', ','"
