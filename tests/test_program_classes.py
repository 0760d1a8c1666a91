from pathlib import Path

from flannel.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_classes_inheritance(capsys):
    """Dog inherits `speak` and `name` from Animal and overrides `sound`."""
    with open(EXAMPLES / 'classes.fln', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['animal says woof', '4', 'animal']
