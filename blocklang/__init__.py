# blocklang package
# This package provides a scanner, two parsers and a tree-walking interpreter
# for blocklang, the small scripting language used to describe block scenes.
from .errors import LanguageError, RTError
from .grammar import parse_with_grammar
from .interpreter import Interpreter, run, run_program
from .parser import parse
from .scanner import tokenize

__all__ = [
    'run',
    'run_program',
    'parse',
    'parse_with_grammar',
    'tokenize',
    'Interpreter',
    'LanguageError',
    'RTError',
]
