"""CLI entry point for the FlannelScript interpreter.

Usage:
    python -m flannel [-v|-vv|-vvv] <program_file>
    python -m flannel [-v...] --emit-ast <program_file>
    python -m flannel [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .fln file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. A top-level `return` ends the program
with exit status 0; a runtime error is reported on stderr and ends it
with status 1.
"""

import argparse
import json
import sys
from pathlib import Path

from lark.exceptions import LarkError

from .ast_json import ast_to_obj, ast_from_obj
from .interpreter import parse_program, Interpreter


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def parse_or_exit(source: str):
    try:
        return parse_program(source)
    except LarkError as e:
        print(f"Syntax error: {e}", file=sys.stderr)
        sys.exit(1)


def execute(program, debug_level: int) -> None:
    interpreter = Interpreter(debug_level=debug_level)
    try:
        outcome = interpreter.run(program)
    except Exception as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(outcome.status)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="FlannelScript interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='FLN_FILE', help='emit AST JSON for the given .fln file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='FlannelScript program file (.fln) to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        ast_program = parse_or_exit(read_source(program_file))
        obj = ast_to_obj(ast_program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        data = json.loads(read_source(ast_path))
        execute(ast_from_obj(data), args.v)
        return

    # Default: execute source file
    if not args.program:
        parser.error('missing program file; or use --emit-ast/--ast')
    execute(parse_or_exit(read_source(Path(args.program))), args.v)


if __name__ == '__main__':
    main()
