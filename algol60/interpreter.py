"""Tree-walking evaluator for the ALGOL 60 language.

The interpreter executes a `Program` AST statement by statement against a
single global environment. Calls to user functions and procedures run
their body against a fresh call frame that binds only the parameters, so
a callee never sees the caller's variables. Builtins stay reachable from
inside calls through the builtin registry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from . import arrays
from .ast import (
    Program, Block, VarDecl, ArrayDecl, Assign, IndexAssign, IfStmt, WhileStmt,
    FuncDecl, ProcDecl, ReturnStmt, ExprStmt, Literal, Ident, Additive,
    Multiplicative, Comparison, ArrayAccess, Call, Node,
)
from .builtins import BuiltinFunction, populate_builtins
from .environment import RETURN_SLOT, Environment
from .errors import (
    ArityMismatch, DivisionByZero, NotABoolean, NotCallable, TypeMismatch,
    UnsupportedOperands,
)
from .parser import parse_program
from .types import (
    UNDEFINED, Array1D, Array2D, check_value, is_integer, is_numeric, is_real,
    to_string, type_name,
)


class FunctionValue:
    """A user-defined function or procedure.

    `kind` is 'function' or 'procedure'. Both are called the same way;
    the tag only records which declaration produced the value.
    """
    def __init__(self, name: str, params: List[str], body: List[Node], kind: str):
        self.name = name
        self.params = params
        self.body = body
        self.kind = kind

    def __repr__(self) -> str:
        return f"<{self.kind} {self.name}>"


@dataclass
class CallFrame:
    name: str
    env: Environment


def truncate_div(a: int, b: int) -> int:
    """Integer quotient rounded toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


class Interpreter:
    """Core interpreter that executes an ALGOL 60 AST."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.builtins = populate_builtins()
        self.global_env = Environment(self.builtins.values)
        self.call_stack: List[CallFrame] = []
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp = None
        self.runs = 0

    def debug(self, msg: str):
        # Trace lines only ever go to the debug file, never to stdout
        if self.debug_level > 0 and self.debug_fp:
            line = '  ' * len(self.call_stack) + msg
            self.debug_fp.write(line + '\n')
            self.debug_fp.flush()

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> None:
        if env is None:
            env = self.global_env
        if self.debug_level > 0:
            # The first run truncates the trace; later runs append to it
            self.debug_fp = open(self.debug_file, 'w' if self.runs == 0 else 'a', encoding='utf-8')
        self.runs += 1
        try:
            self.execute_block(program.body, env)
        finally:
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def execute_block(self, statements: List[Node], env: Environment):
        for stmt in statements:
            self.execute(stmt, env)

    def execute(self, node: Node, env: Environment) -> Any:
        if isinstance(node, VarDecl):
            value = self.evaluate(node.expr, env) if node.expr is not None else UNDEFINED
            if node.expr is not None:
                try:
                    check_value(value, node.type_spec)
                except TypeError as e:
                    raise TypeMismatch(
                        f'cannot initialize {node.type_spec!r} {node.name} with {to_string(value)!r}: {e}',
                        name=node.name, expected=node.type_spec.kind, actual=type_name(value),
                    )
            env.declare(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name}: {node.type_spec!r} = {value!r}")
            return None
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.set(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name} := {value!r}")
            return None
        if isinstance(node, ArrayDecl):
            self.declare_array(node, env)
            return None
        if isinstance(node, IndexAssign):
            target = env.get(node.name)
            indices = [self.evaluate(index, env) for index in node.indices]
            value = self.evaluate(node.value, env)
            arrays.write(node.name, target, indices, value)
            if self.debug_level >= 3:
                self.debug(f"store {node.name}{indices} := {value!r}")
            return None
        if isinstance(node, Block):
            self.execute_block(node.statements, env)
            return None
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition, env)
            truthy = self.require_boolean(cond, 'if')
            if self.debug_level >= 3:
                self.debug(f"if condition -> {to_string(cond)}")
            if truthy:
                self.execute(node.then_block, env)
            elif node.else_block is not None:
                self.execute(node.else_block, env)
            return None
        if isinstance(node, WhileStmt):
            # Guarded do-while: the first check decides entry, later
            # checks follow each pass through the body.
            cond = self.evaluate(node.condition, env)
            if self.require_boolean(cond, 'while'):
                while True:
                    self.execute(node.body, env)
                    cond = self.evaluate(node.condition, env)
                    if self.debug_level >= 3:
                        self.debug(f"while condition -> {to_string(cond)}")
                    if not self.require_boolean(cond, 'while'):
                        break
            return None
        if isinstance(node, (FuncDecl, ProcDecl)):
            kind = 'function' if isinstance(node, FuncDecl) else 'procedure'
            env.declare(node.name, FunctionValue(node.name, list(node.params), node.body, kind))
            if self.debug_level >= 2:
                self.debug(f"define {kind} {node.name}({', '.join(node.params)})")
            return None
        if isinstance(node, ReturnStmt):
            value = self.evaluate(node.value, env)
            env.set(RETURN_SLOT, value)
            return value
        if isinstance(node, ExprStmt):
            return self.evaluate(node.expr, env)
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def declare_array(self, node: ArrayDecl, env: Environment):
        array = arrays.allocate(node.elem_type, node.dims)
        env.declare(node.name, array)
        if node.initializer is not None:
            arrays.check_capacity(node.name, array, len(node.initializer))
            for index, element in enumerate(node.initializer):
                value = self.evaluate(element, env)
                arrays.store_initial(node.name, array, index, value)
        if self.debug_level >= 2:
            self.debug(f"declare array {node.name}: {node.elem_type!r}{node.dims}")

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, Literal):
            return self.literal_value(node)
        if isinstance(node, Ident):
            return env.get(node.name)
        if isinstance(node, (Additive, Multiplicative, Comparison)):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.op, left, right)
        if isinstance(node, ArrayAccess):
            target = env.get(node.name)
            indices = [self.evaluate(index, env) for index in node.indices]
            value = arrays.read(node.name, target, indices)
            if self.debug_level >= 3:
                self.debug(f"load {node.name}{indices} -> {value!r}")
            return value
        if isinstance(node, Call):
            args = [self.evaluate(arg, env) for arg in node.args]
            return self.call_function(node.name, args, env)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def literal_value(self, node: Literal) -> Any:
        kind = node.literal_type
        if kind == 'int':
            return int(node.text)
        if kind == 'double':
            return float(node.text)
        if kind == 'str':
            return node.text[1:-1]
        if kind == 'bool':
            return node.text == 'true'
        raise NotImplementedError(f"unknown literal type {kind}")

    def call_function(self, name: str, args: List[Any], env: Environment) -> Any:
        func = env.lookup(name)
        if func is None:
            func = self.builtins.lookup(name)
        if isinstance(func, BuiltinFunction):
            if func.arity is not None and len(args) != func.arity:
                raise ArityMismatch(
                    f"{func.name} expects {func.arity} arguments, got {len(args)}",
                    name=name, expected=func.arity, actual=len(args),
                )
            result = func.fn(args)
            return UNDEFINED if result is None else result
        if isinstance(func, FunctionValue):
            if len(args) != len(func.params):
                raise ArityMismatch(
                    f"{func.kind} {func.name} expects {len(func.params)} arguments, got {len(args)}",
                    name=name, expected=len(func.params), actual=len(args),
                )
            frame = Environment(dict(zip(func.params, args)))
            self.call_stack.append(CallFrame(func.name, frame))
            if self.debug_level >= 1:
                self.debug(f"call {func.kind} {func.name}({', '.join(repr(a) for a in args)})")
            try:
                self.execute_block(func.body, frame)
            finally:
                self.call_stack.pop()
            result = frame.values.get(RETURN_SLOT, UNDEFINED)
            if self.debug_level >= 1:
                self.debug(f"return from {func.name} -> {result!r}")
            return result
        if func is None:
            raise NotCallable(f'function or procedure {name} is not declared', name=name)
        raise NotCallable(f'{name} is not callable ({type_name(func)})', name=name)

    def require_boolean(self, value: Any, construct: str) -> bool:
        if isinstance(value, bool):
            return value
        raise NotABoolean(
            f'{construct} condition must be bool, got {type_name(value)} {to_string(value)!r}',
            construct=construct, value=value,
        )

    def unsupported(self, op: str, a: Any, b: Any) -> UnsupportedOperands:
        return UnsupportedOperands(
            f'unsupported {op} for {type_name(a)} and {type_name(b)}',
            op=op, left=type_name(a), right=type_name(b),
        )

    def promote(self, op: str, a: Any, b: Any):
        # Integers are unbounded; one too large for a double cannot mix with Real
        try:
            return float(a), float(b)
        except OverflowError:
            raise UnsupportedOperands(
                f'{op}: integer operand too large to combine with double',
                op=op, left=type_name(a), right=type_name(b),
            ) from None

    def apply_binary_op(self, op: str, a: Any, b: Any) -> Any:
        if op == '+':
            # Text on either side concatenates natural string forms
            if isinstance(a, str) or isinstance(b, str):
                return to_string(a) + to_string(b)
            if is_integer(a) and is_integer(b):
                return a + b
            if is_numeric(a) and is_numeric(b):
                x, y = self.promote(op, a, b)
                return x + y
            raise self.unsupported(op, a, b)
        if op == '-':
            if is_integer(a) and is_integer(b):
                return a - b
            if is_numeric(a) and is_numeric(b):
                x, y = self.promote(op, a, b)
                return x - y
            raise self.unsupported(op, a, b)
        if op == '*':
            if is_integer(a) and is_integer(b):
                return a * b
            if is_numeric(a) and is_numeric(b):
                x, y = self.promote(op, a, b)
                return x * y
            raise self.unsupported(op, a, b)
        if op == '/':
            if is_numeric(b) and b == 0:
                raise DivisionByZero(f'division of {to_string(a)} by zero', op=op, left=a)
            if is_integer(a) and is_integer(b):
                return truncate_div(a, b)
            if is_numeric(a) and is_numeric(b):
                x, y = self.promote(op, a, b)
                return x / y
            raise self.unsupported(op, a, b)
        if op in ('==', '!='):
            eq = self.equal_values(a, b)
            return eq if op == '==' else not eq
        if op in ('<', '>', '<=', '>='):
            if not (is_numeric(a) and is_numeric(b)):
                raise self.unsupported(op, a, b)
            if is_real(a) or is_real(b):
                a, b = self.promote(op, a, b)
            if op == '<':
                return a < b
            if op == '>':
                return a > b
            if op == '<=':
                return a <= b
            return a >= b
        raise UnsupportedOperands(f'unknown operator {op}', op=op)

    def equal_values(self, a: Any, b: Any) -> bool:
        # Same variant and same payload; no numeric promotion here
        if isinstance(a, (Array1D, Array2D, BuiltinFunction, FunctionValue)):
            return a is b
        if type(a) is not type(b):
            return False
        return a == b


def run_program(source: str, debug_level: int = 0) -> None:
    """Convenience function to parse and run a program from a source string."""
    ast_program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level)
    interpreter.run(ast_program)


def run_file(file_path: str, debug_level: int = 0) -> Interpreter:
    """Parse and run a source file, returning the interpreter instance."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    ast_program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level)
    interpreter.run(ast_program)
    return interpreter
