from pathlib import Path

from flannel.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_return_inside_if_only_ends_the_if(capsys):
    with open(EXAMPLES / 'return_quirk.fln', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    # The function keeps going after the if and falls off the end
    assert out_lines == ['after if', 'und']
