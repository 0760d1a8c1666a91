# FlannelScript language package
# This package provides a parser and a tree-walking interpreter for FlannelScript.
from .errors import FlannelError
from .interpreter import run_program, parse_program, Interpreter, Outcome

__all__ = [
    'run_program',
    'parse_program',
    'Interpreter',
    'Outcome',
    'FlannelError',
]
