# ALGOL 60 language package
# This package provides a parser and a tree-walking interpreter for a small ALGOL 60 dialect.
from .errors import Algol60Error
from .interpreter import run_program, run_file, Interpreter
from .parser import parse_program

__all__ = [
    'run_program',
    'run_file',
    'parse_program',
    'Interpreter',
    'Algol60Error',
]
