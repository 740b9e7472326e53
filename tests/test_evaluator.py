import pytest

from algol60.ast import Additive, Assign, Block, Call, Comparison, ExprStmt, Ident, Literal, Program, VarDecl, WhileStmt
from algol60.errors import (
    ArityMismatch, ArraySizeExceeded, DivisionByZero, IndexOutOfBounds, NotABoolean,
    NotCallable, TypeMismatch, UndefinedVariable, UnsupportedOperands,
)
from algol60.interpreter import Interpreter, run_program, truncate_div
from algol60.parser import parse_program
from algol60.types import UNDEFINED, TypeSpec


def output(capsys):
    return capsys.readouterr().out.split('\n')[:-1]


def test_run_accepts_hand_built_tree(capsys):
    program = Program([
        VarDecl(TypeSpec.integer(), 'n', Literal('3', 'int')),
        WhileStmt(
            Comparison('>', Ident('n'), Literal('0', 'int')),
            Block([
                ExprStmt(Call('write', [Ident('n')])),
                Assign('n', Additive('-', Ident('n'), Literal('1', 'int'))),
            ]),
        ),
    ])
    Interpreter().run(program)
    assert output(capsys) == ['3', '2', '1']


def test_integer_division_truncates_toward_zero():
    assert truncate_div(7, 2) == 3
    assert truncate_div(-7, 2) == -3
    assert truncate_div(7, -2) == -3
    assert truncate_div(-7, -2) == 3


def test_real_division_when_either_operand_is_real(capsys):
    run_program('write(7 / 2.0, 1.0 / 4);')
    assert output(capsys) == ['3.5', '0.25']


@pytest.mark.parametrize('source', [
    'write(5 / 0);',
    'write(5.5 / 0);',
    'write(5 / 0.0);',
    'write("text" / 0);',
])
def test_division_by_zero(source):
    with pytest.raises(DivisionByZero):
        run_program(source)


def test_numeric_plus_empty_text_is_textual_form(capsys):
    run_program('write(42 + "", 2.5 + "", 3.0 + "");')
    assert output(capsys) == ['42', '2.5', '3']


def test_text_concatenation_with_any_operand(capsys):
    run_program('bool b = false; write("b=" + b, 1 + "x" + 2);')
    assert output(capsys) == ['b=false', '1x2']


@pytest.mark.parametrize('source', [
    'write("a" - "b");',
    'write(1 - "b");',
    'write("a" * 2);',
    'write(true + 1);',
    'write(true < false);',
    'write("a" < "b");',
])
def test_unsupported_operands(source):
    with pytest.raises(UnsupportedOperands):
        run_program(source)


def test_unsupported_operands_reports_operator_and_types():
    with pytest.raises(UnsupportedOperands) as excinfo:
        run_program('write("a" - 1);')
    assert excinfo.value.err.context == {'op': '-', 'left': 'str', 'right': 'int'}
    assert str(excinfo.value).startswith('UnsupportedOperands:')


@pytest.mark.parametrize('op', ['+', '-', '*', '/', '<'])
def test_huge_integer_mixed_with_double(op):
    huge = '1' + '0' * 400
    with pytest.raises(UnsupportedOperands) as excinfo:
        run_program(f'write({huge} {op} 1.5);')
    assert excinfo.value.err.context['op'] == op


def test_huge_integer_arithmetic_stays_exact(capsys):
    run_program('write(' + '1' + '0' * 30 + ' + 1);')
    assert output(capsys) == ['1' + '0' * 29 + '1']


def test_comparisons_promote_integers(capsys):
    run_program('write(1 < 1.5, 2 >= 2.0, 3 <= 2, 4 > 3);')
    assert output(capsys) == ['true', 'true', 'false', 'true']


def test_equality_is_structural_per_variant(capsys):
    run_program('''
        write(1 == 1, 1 == 1.0, "a" == "a", "a" != "b", true == true, 1 != true);
    ''')
    assert output(capsys) == ['true', 'false', 'true', 'true', 'true', 'true']


def test_arrays_compare_by_identity(capsys):
    run_program('''
        array a: int[2] = [1, 2];
        array b: int[2] = [1, 2];
        write(a == b, a == a);
    ''')
    assert output(capsys) == ['false', 'true']


def test_undefined_variable():
    with pytest.raises(UndefinedVariable) as excinfo:
        run_program('write(missing);')
    assert excinfo.value.err.context['name'] == 'missing'


def test_declaration_without_initializer_is_undefined(capsys):
    interp = Interpreter()
    interp.run(parse_program('int x; write(x); write(x == x);'))
    assert interp.global_env.get('x') is UNDEFINED
    assert output(capsys) == ['', 'true']


@pytest.mark.parametrize('source', [
    'int x = "hello";',
    'int x = true;',
    'int x = 1.5;',
    'double d = 1;',
    'str s = 1;',
    'bool b = 0;',
])
def test_declaration_type_mismatch(source):
    with pytest.raises(TypeMismatch):
        run_program(source)


def test_assignment_does_not_recheck_type(capsys):
    run_program('int x = 5; x := "hello"; write(x);')
    assert output(capsys) == ['hello']


def test_redeclaration_overwrites(capsys):
    run_program('int x = 1; str x = "one"; write(x);')
    assert output(capsys) == ['one']


@pytest.mark.parametrize('source', [
    'if 1 then begin end',
    'while "yes" do begin end',
])
def test_conditions_must_be_boolean(source):
    with pytest.raises(NotABoolean):
        run_program(source)


def test_loop_condition_rechecked_after_each_pass():
    with pytest.raises(NotABoolean):
        run_program('int i = 0; bool go = true; while go do begin go := 1; end')


def test_while_with_true_condition_runs_at_least_once(capsys):
    run_program('bool once = true; while once do begin write("ran"); once := false; end')
    assert output(capsys) == ['ran']


def test_while_with_false_condition_never_runs(capsys):
    run_program('bool go = false; while go do begin write("ran"); end write("done");')
    assert output(capsys) == ['done']


def test_if_without_else_is_noop(capsys):
    run_program('if 1 > 2 then begin write("no"); end write("done");')
    assert output(capsys) == ['done']


def test_two_dimensional_fill_order(capsys):
    run_program('''
        array m: int[2, 3] = [0, 1, 2, 3, 4, 5];
        write(m[0, 0], m[1, 0], m[0, 1], m[1, 1], m[0, 2], m[1, 2]);
    ''')
    assert output(capsys) == ['0', '1', '2', '3', '4', '5']


def test_partial_initializer_leaves_undefined(capsys):
    run_program('array a: int[3] = [7]; write(a[0], a[1]);')
    assert output(capsys) == ['7', '']


def test_array_size_exceeded():
    with pytest.raises(ArraySizeExceeded) as excinfo:
        run_program('array a: int[2] = [1, 2, 3];')
    assert excinfo.value.err.context['capacity'] == 2


def test_array_element_type_checked_at_declaration():
    with pytest.raises(TypeMismatch):
        run_program('array a: int[2] = [1, "two"];')


def test_array_element_assignment(capsys):
    run_program('''
        array g: double[2, 2];
        g[1, 1] := 0.5;
        g[0, 0] := "anything";
        write(g[1, 1], g[0, 0]);
    ''')
    assert output(capsys) == ['0.5', 'anything']


@pytest.mark.parametrize('source', [
    'array a: int[3]; write(a[3]);',
    'array a: int[3]; write(a[0 - 1]);',
    'array a: int[3]; write(a[0, 1]);',
    'array m: int[2, 2]; write(m[1, 2]);',
    'array m: int[2, 2]; write(m[2, 0]);',
    'array a: int[3]; a[3] := 1;',
])
def test_index_out_of_bounds(source):
    with pytest.raises(IndexOutOfBounds):
        run_program(source)


def test_one_dimensional_array_as_single_column(capsys):
    run_program('array a: int[3] = [1, 2, 3]; array m: int[2, 2] = [1, 2, 3, 4]; write(a[2, 0], m[1]);')
    assert output(capsys) == ['3', '2']


def test_index_must_be_integer():
    with pytest.raises(TypeMismatch):
        run_program('array a: int[3]; write(a[1.0]);')


def test_indexing_a_non_array():
    with pytest.raises(UnsupportedOperands):
        run_program('int x = 1; write(x[0]);')


def test_call_undeclared_is_not_callable():
    with pytest.raises(NotCallable) as excinfo:
        run_program('foo(1, 2);')
    assert excinfo.value.err.context['name'] == 'foo'


def test_call_non_callable_binding():
    with pytest.raises(NotCallable):
        run_program('int write = 1; write(2);')


def test_arity_mismatch():
    with pytest.raises(ArityMismatch) as excinfo:
        run_program('function add(a, b) return a + b; add(1);')
    assert excinfo.value.err.context['expected'] == 2
    assert excinfo.value.err.context['actual'] == 1


def test_callee_cannot_see_caller_variables():
    with pytest.raises(UndefinedVariable):
        run_program('int g = 1; function peek() return g; peek();')


def test_builtins_resolvable_inside_calls(capsys):
    run_program('procedure p(x) write(x); p("inside");')
    assert output(capsys) == ['inside']


def test_return_does_not_leave_the_body(capsys):
    run_program('function f() begin return 1; write("after"); return 2; end write(f());')
    assert output(capsys) == ['after', '2']


def test_call_without_return_is_undefined(capsys):
    interp = Interpreter()
    interp.run(parse_program('procedure p() begin int y = 1; end int r = 0; r := p();'))
    assert interp.global_env.get('r') is UNDEFINED


def test_procedure_may_return_a_value(capsys):
    run_program('procedure twice(x) return x * 2; write(twice(21));')
    assert output(capsys) == ['42']


def test_each_call_gets_a_fresh_frame(capsys):
    run_program('''
        function bump(n) begin int local = n + 1; return local; end
        int local = 100;
        write(bump(1), bump(2), local);
    ''')
    assert output(capsys) == ['2', '3', '100']


def test_function_cannot_see_itself_by_name():
    with pytest.raises(NotCallable) as excinfo:
        run_program('function g(n) return g(n); write(g(1));')
    assert excinfo.value.err.context['name'] == 'g'


def test_callables_have_textual_form(capsys):
    run_program('function f() return 1; procedure p() write(1); write(f, p, write);')
    assert output(capsys) == ['<function f>', '<procedure p>', '<builtin write>']


def test_debug_trace_written_to_file(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    interp = Interpreter(debug_level=2, debug_file=str(debug_file))
    interp.run(parse_program('int a = 1; function id(x) return x; a := id(a);'))
    trace = debug_file.read_text(encoding='utf-8')
    assert 'declare a: int = 1' in trace
    assert 'define function id(x)' in trace
    assert 'call function id(1)' in trace
    assert 'return from id -> 1' in trace


def test_second_run_appends_trace_without_printing(tmp_path, capsys):
    debug_file = tmp_path / 'debug.txt'
    interp = Interpreter(debug_level=2, debug_file=str(debug_file))
    interp.run(parse_program('int a = 1;'))
    interp.run(parse_program('int b = 2;'))
    assert capsys.readouterr().out == ''
    trace = debug_file.read_text(encoding='utf-8')
    assert 'declare a: int = 1' in trace
    assert 'declare b: int = 2' in trace
