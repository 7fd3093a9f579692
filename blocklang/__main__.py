"""CLI entry point for the blocklang interpreter.

Usage:
    python -m blocklang [-v|-vv] [--grammar] [--dump-scene] <program_file>
    python -m blocklang [-v...] --emit-ast <program_file>
    python -m blocklang [-v...] --ast <ast_json_file>

Options:
  -v            Increase log verbosity (-v INFO, -vv DEBUG)
  --grammar     Parse with the Lark grammar instead of the hand-written parser
  --dump-scene  Print the recorded scene as JSON after the program ran
  --emit-ast    Parse the given program file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Logs are written to `debug.txt` in the current directory when verbosity is
greater than zero. Programs run against a headless recording scene, so the
scene builtins are always available.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .ast_json import dump_program, load_program
from .errors import LanguageError
from .interpreter import FRONTENDS, run_program
from .std.scene import RecordingScene, scene_builtins

logger = logging.getLogger('blocklang')


def configure_logging(verbosity: int) -> None:
    if verbosity <= 0:
        return
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    handler = logging.FileHandler('debug.txt', mode='w', encoding='utf-8')
    handler.setFormatter(logging.Formatter('%(levelname)s %(name)s: %(message)s'))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO if verbosity == 1 else logging.DEBUG)


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="blocklang interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase log verbosity (can be repeated)')
    parser.add_argument('--grammar', action='store_true', help='parse with the Lark grammar front-end')
    parser.add_argument('--dump-scene', action='store_true', help='print the recorded scene as JSON')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='PROGRAM_FILE', help='emit AST JSON for the given program file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='blocklang program file to execute')
    args = parser.parse_args(argv)

    configure_logging(args.v)
    frontend = FRONTENDS['grammar' if args.grammar else 'descent']

    try:
        # Emit AST mode
        if args.emit_ast:
            program_file = Path(args.emit_ast)
            program = frontend(str(program_file), read_source(program_file))
            out_path = program_file.with_name(program_file.name + '.ast.json')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(dump_program(program), out, ensure_ascii=False, indent=2)
            print(str(out_path))
            return

        # Execute from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            program = load_program(json.loads(read_source(ast_path)))
        else:
            if not args.program:
                parser.error('missing program file; or use --emit-ast/--ast')
            program_file = Path(args.program)
            program = frontend(str(program_file), read_source(program_file))

        scene = RecordingScene()
        run_program(program, scene_builtins(scene))
    except LanguageError as e:
        print(e.as_string(), file=sys.stderr)
        sys.exit(1)

    if args.dump_scene:
        print(json.dumps(scene.to_obj(), indent=2))


if __name__ == '__main__':
    main()
