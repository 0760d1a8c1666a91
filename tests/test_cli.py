import json

import pytest

from flannel.__main__ import main


def write_program(tmp_path, source, name='program.fln'):
    path = tmp_path / name
    path.write_text(source, encoding='utf-8')
    return path


def run_main(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


def test_runs_program_file(tmp_path, capsys):
    path = write_program(tmp_path, "echo 'hi'; echo 1 + 1;")
    assert run_main([str(path)]) == 0
    assert capsys.readouterr().out == 'hi\n2\n'


def test_top_level_return_exits_cleanly(tmp_path, capsys):
    path = write_program(tmp_path, "return 3; echo 'never';")
    assert run_main([str(path)]) == 0
    assert capsys.readouterr().out == 'returned: 3\n'


def test_runtime_error_is_reported(tmp_path, capsys):
    path = write_program(tmp_path, "echo 'start'; echo 1 / 0;")
    assert run_main([str(path)]) == 1
    captured = capsys.readouterr()
    assert captured.out == 'start\n'
    assert captured.err.startswith('Runtime error: DivisionByZero:')


def test_runaway_recursion_is_reported(tmp_path, capsys):
    path = write_program(tmp_path, "fn f(Int n) -> Int { return f(n + 1); } f(0);")
    assert run_main([str(path)]) == 1
    captured = capsys.readouterr()
    assert captured.err.startswith('Runtime error:')
    assert 'recursion' in captured.err
    assert 'Traceback' not in captured.err


def test_syntax_error_is_reported(tmp_path, capsys):
    path = write_program(tmp_path, "Int x = ;")
    assert run_main([str(path)]) == 1
    assert capsys.readouterr().err.startswith('Syntax error:')


def test_missing_file(tmp_path, capsys):
    assert run_main([str(tmp_path / 'absent.fln')]) == 1
    assert 'not found' in capsys.readouterr().err


def test_missing_program_argument():
    assert run_main([]) == 2


def test_emit_ast_then_run_it(tmp_path, capsys):
    path = write_program(tmp_path, "Int x = 2; echo x * 21;")
    main(['--emit-ast', str(path)])
    out_path = tmp_path / 'program.fln.ast.json'
    assert capsys.readouterr().out.strip() == str(out_path)
    data = json.loads(out_path.read_text(encoding='utf-8'))
    assert data['type'] == 'Program'

    assert run_main(['--ast', str(out_path)]) == 0
    assert capsys.readouterr().out == '42\n'


def test_verbose_flag_writes_debug_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = write_program(tmp_path, "fn f() -> Int { return 1; } echo f();")
    assert run_main(['-v', str(path)]) == 0
    assert 'define function f' in (tmp_path / 'debug.txt').read_text(encoding='utf-8')
