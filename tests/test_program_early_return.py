from pathlib import Path

from flannel.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_early_return_stops_program(capsys):
    with open(EXAMPLES / 'early_return.fln', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    outcome = interp.run(ast)
    out = capsys.readouterr().out.strip()
    # The echo after the return never runs
    assert out == 'returned: 10'
    assert outcome.status == 0
    assert outcome.value.value == 10
    assert outcome.value.cls is interp.runtime.int_class
