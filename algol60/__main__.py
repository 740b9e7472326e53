"""CLI entry point for the ALGOL 60 interpreter.

Usage:
    python -m algol60 [-v|-vv|-vvv] <program_file>
    python -m algol60 [-v...] --emit-ast <program_file>
    python -m algol60 [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given source file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path

from lark.exceptions import LarkError

from .ast_json import ast_to_obj, ast_from_obj
from .errors import Algol60Error
from .interpreter import Interpreter
from .parser import parse_program


def _read_source(path: Path):
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def _parse(path: Path):
    source = _read_source(path)
    try:
        return parse_program(source)
    except LarkError as e:
        print(f"Syntax error: {e}", file=sys.stderr)
        sys.exit(1)


def _execute(ast_program, debug_level: int):
    interpreter = Interpreter(debug_level=debug_level)
    try:
        interpreter.run(ast_program)
    except Algol60Error as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="ALGOL 60 interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='SOURCE_FILE', help='emit AST JSON for the given source file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='program file to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        obj = ast_to_obj(_parse(program_file))
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        data = json.loads(_read_source(Path(args.ast)))
        _execute(ast_from_obj(data), args.v)
        return

    # Default: execute source file
    if not args.program:
        parser.error('missing program file; or use --emit-ast/--ast')
    _execute(_parse(Path(args.program)), args.v)


if __name__ == '__main__':
    main()
