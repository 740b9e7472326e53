from pathlib import Path

import pytest

from algol60.errors import IndexOutOfBounds
from algol60.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_9_index_out_of_bounds(capsys):
    with open(EXAMPLES / 'program_9.alg', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    with pytest.raises(IndexOutOfBounds) as excinfo:
        interp.run(ast)
    assert excinfo.value.err.context['name'] == 'arr'
    assert excinfo.value.err.context['indices'] == [5]
    # the failing write never printed anything
    assert capsys.readouterr().out == ''
