from pathlib import Path

from blocklang import run
from blocklang.std.scene import RecordingScene, scene_builtins

EXAMPLES = Path(__file__).parent.parent / 'examples'


def test_program_4(capsys):
    with open(EXAMPLES / 'program_4.bl', 'r', encoding='utf-8') as f:
        source = f.read()
    scene = RecordingScene()
    run(source, 'program_4.bl', builtins=scene_builtins(scene))
    out = capsys.readouterr().out.strip()
    assert out == 'scene ready'
    assert scene.background == '#fff'
    assert [obj.kind for obj in scene.objects] == ['block', 'block', 'pyramid']
    assert scene.objects[1].dimensions == (5.0, 2.5, 5.0)
    assert scene.objects[2].position == (5.0, 0.0, 0.0)
    assert scene.objects[2].color == '#239254'
