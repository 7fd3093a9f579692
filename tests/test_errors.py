import pytest

from blocklang import run
from blocklang.errors import IllegalCharacterError, InvalidSyntaxError, RTError, render_excerpt
from blocklang.parser import parse
from blocklang.position import Position


def position(source, index):
    pos = Position.start('test.bl', source)
    for char in source[:index]:
        pos = pos.advance(char)
    return pos


def test_position_advance():
    pos = position('ab\ncd', 4)
    assert (pos.index, pos.line, pos.column) == (4, 1, 1)


def test_excerpt_single_line():
    source = 'let x = 1 +;'
    assert render_excerpt(source, position(source, 8), position(source, 11)) == 'let x = 1 +;\n        ^^^'


def test_excerpt_has_at_least_one_caret():
    source = 'abc'
    assert render_excerpt(source, position(source, 1), position(source, 1)) == 'abc\n ^'


def test_excerpt_multiple_lines():
    source = 'let x = [1,\n  2];'
    excerpt = render_excerpt(source, position(source, 8), position(source, 15))
    assert excerpt == 'let x = [1,\n        ^^^\n  2];\n^^^'


def test_error_as_string():
    source = 'let y = 2;\nlet x = α;'
    with pytest.raises(IllegalCharacterError) as excinfo:
        parse('test.bl', source)
    assert str(excinfo.value) == (
        "File 'test.bl', line 2\n"
        "\n"
        "Error name: Illegal character\n"
        "Details: 'α'\n"
        "\n"
        "let x = α;\n"
        "        ^"
    )


def test_syntax_error_name():
    with pytest.raises(InvalidSyntaxError) as excinfo:
        parse('test.bl', 'print(1) print(2);')
    assert 'Error name: Invalid syntax' in excinfo.value.as_string()


def test_runtime_error_traceback_inside_builtin():
    with pytest.raises(RTError) as excinfo:
        run('let xs = [1];\nget(xs, 3);', 'test.bl')
    text = excinfo.value.as_string()
    assert text.startswith(
        "traceback on:\n"
        "\tFile 'test.bl' -> line 2 -> get\n\n"
        "\tFile 'test.bl' -> line 2 -> <program>\n\n"
        "File 'test.bl', line 2\n"
    )
    assert text.endswith('get(xs, 3);\n^^^^^^^^^^')


def test_runtime_error_traceback_at_top_level():
    with pytest.raises(RTError) as excinfo:
        run('1 / 0;', 'test.bl')
    assert excinfo.value.generate_traceback() == "traceback on:\n\tFile 'test.bl' -> line 1 -> <program>\n\n"
    assert 'Error name: Division by zero' in str(excinfo.value)
