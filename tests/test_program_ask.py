import builtins
from pathlib import Path

from flannel.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_ask_reads_lines(monkeypatch, capsys):
    """Each ask prints its prompt on its own line and reads one line.

    We simulate a user typing a name and then a count, and check that
    the program greets them and echoes that many lines.
    """
    answers = iter(['Ada', '3'])
    monkeypatch.setattr(builtins, 'input', lambda prompt='': next(answers))
    with open(EXAMPLES / 'ask.fln', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == [
        'What is your name?',
        'Hello, Ada!',
        'How many?',
        'echo 0',
        'echo 1',
        'echo 2',
    ]
