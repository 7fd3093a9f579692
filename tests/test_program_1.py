from pathlib import Path

from blocklang import run

EXAMPLES = Path(__file__).parent.parent / 'examples'


def test_program_1(capsys):
    with open(EXAMPLES / 'program_1.bl', 'r', encoding='utf-8') as f:
        source = f.read()
    run(source, 'program_1.bl')
    out = capsys.readouterr().out.strip()
    assert out == '[2, 4, 6]\n[2, 4, 6, 8, 10]\n[2, 4, 6, 8, 10, 12]\n6'
