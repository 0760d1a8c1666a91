import json
from pathlib import Path

import pytest

from flannel.ast import Literal
from flannel.ast_json import ast_from_obj, ast_to_obj
from flannel.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_node_layout():
    assert ast_to_obj(Literal('int', '1')) == {'type': 'Literal', 'kind': 'int', 'raw': '1'}


def test_stored_program_runs_like_the_source(capsys):
    with open(EXAMPLES / 'classes.fln', 'r', encoding='utf-8') as f:
        program = parse_program(f.read())
    stored = ast_from_obj(json.loads(json.dumps(ast_to_obj(program))))
    assert stored == program

    Interpreter().run(program)
    direct = capsys.readouterr().out
    Interpreter().run(stored)
    assert capsys.readouterr().out == direct


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'Teleport', 'target': 'x'})


def test_malformed_object():
    with pytest.raises(TypeError):
        ast_from_obj(('not', 'a', 'node'))
    with pytest.raises(TypeError):
        ast_to_obj(object())
