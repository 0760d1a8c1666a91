from pathlib import Path

from flannel.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_hello(capsys):
    with open(EXAMPLES / 'hello.fln', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    outcome = interp.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == 'Hello World!!'
    assert outcome.status == 0
    assert outcome.value is None
