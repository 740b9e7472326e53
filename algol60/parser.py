"""Parser for the ALGOL 60 language.

The source text is fed into a Lark LALR parser configured with the
grammar below, and the parse tree is transformed into the AST defined in
`algol60.ast`. Statements are terminated by semicolons and grouped with
`begin ... end`; `//` starts a comment that runs to the end of the line.

The `parse_program` function is the public entry point and returns a
`Program` AST node representing the entire source file.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Token, Transformer

from .ast import (
    Program, Block, VarDecl, ArrayDecl, Assign, IndexAssign, IfStmt, WhileStmt,
    FuncDecl, ProcDecl, ReturnStmt, ExprStmt, Literal, Ident, Additive,
    Multiplicative, Comparison, ArrayAccess, Call, Node,
)
from .types import TypeSpec


ALGOL60_GRAMMAR = r"""
    ?start: program
    program: statement*

    // Statements
    ?statement: var_decl
              | array_decl
              | assignment
              | index_assignment
              | if_stmt
              | while_stmt
              | func_decl
              | proc_decl
              | return_stmt
              | expr_stmt
              | block

    var_decl: var_type IDENT ["=" expression] ";"
    !var_type: "int" | "double" | "str" | "bool"

    array_decl: "array" IDENT ":" var_type "[" INT_LIT ["," INT_LIT] "]" ["=" array_init] ";"
    array_init: "[" [expression ("," expression)*] "]"

    assignment: IDENT ":=" expression ";"
    index_assignment: IDENT "[" expression ["," expression] "]" ":=" expression ";"

    if_stmt: "if" expression "then" block ["else" (if_stmt | block)]
    while_stmt: "while" expression "do" block

    func_decl: "function" IDENT "(" [param_list] ")" statement
    proc_decl: "procedure" IDENT "(" [param_list] ")" statement
    param_list: IDENT ("," IDENT)*

    return_stmt: "return" expression ";"
    expr_stmt: expression ";"

    block: "begin" statement* "end"

    // Expressions with precedence
    ?expression: comparison
    ?comparison: additive (COMPARE_OP additive)*
    ?additive: multiplicative (ADD_OP multiplicative)*
    ?multiplicative: primary (MUL_OP primary)*
    ?primary: literal
            | call
            | array_access
            | IDENT -> ident
            | "(" expression ")"
    call: IDENT "(" [arg_list] ")"
    array_access: IDENT "[" expression ["," expression] "]"
    arg_list: expression ("," expression)*
    literal: REAL_LIT | INT_LIT | STRING_LIT | TRUE | FALSE

    // Tokens
    COMPARE_OP: "<=" | ">=" | "==" | "!=" | "<" | ">"
    ADD_OP: "+" | "-"
    MUL_OP: "*" | "/"
    TRUE: "true"
    FALSE: "false"
    REAL_LIT.2: /\d+\.\d+/
    INT_LIT: /\d+/
    STRING_LIT: /"[^"]*"/

    %import common.CNAME -> IDENT
    %import common.WS
    %ignore WS

    // Comments
    LINE_COMMENT: /\/\/[^\n]*/
    %ignore LINE_COMMENT
"""


ALGOL60_PARSER = Lark(
    ALGOL60_GRAMMAR,
    parser='lalr',
    propagate_positions=True,
    maybe_placeholders=False,
    lexer='contextual',
)


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def program(self, items):
        return Program(body=list(items))

    def block(self, items):
        return Block(statements=list(items))

    def var_type(self, items):
        return TypeSpec(str(items[0]))

    def var_decl(self, items):
        type_spec = items[0]
        name = str(items[1])
        expr = items[2] if len(items) > 2 else None
        return VarDecl(type_spec=type_spec, name=name, expr=expr)

    def array_decl(self, items):
        name = str(items[0])
        elem_type = items[1]
        dims = [int(item) for item in items[2:] if isinstance(item, Token)]
        initializer = None
        for item in items[2:]:
            if isinstance(item, list):
                initializer = item
        return ArrayDecl(name=name, elem_type=elem_type, dims=dims, initializer=initializer)

    def array_init(self, items):
        return list(items)

    def assignment(self, items):
        return Assign(name=str(items[0]), value=items[1])

    def index_assignment(self, items):
        # items: name, one or two indices, value
        return IndexAssign(name=str(items[0]), indices=list(items[1:-1]), value=items[-1])

    def if_stmt(self, items):
        condition = items[0]
        then_block = items[1]
        else_block = items[2] if len(items) > 2 else None
        return IfStmt(condition, then_block, else_block)

    def while_stmt(self, items):
        return WhileStmt(items[0], items[1])

    def param_list(self, items):
        return [str(item) for item in items]

    def _routine(self, items):
        name = str(items[0])
        params: List[str] = items[1] if len(items) > 2 else []
        body = items[-1]
        statements = body.statements if isinstance(body, Block) else [body]
        return name, params, statements

    def func_decl(self, items):
        name, params, body = self._routine(items)
        return FuncDecl(name=name, params=params, body=body)

    def proc_decl(self, items):
        name, params, body = self._routine(items)
        return ProcDecl(name=name, params=params, body=body)

    def return_stmt(self, items):
        return ReturnStmt(items[0])

    def expr_stmt(self, items):
        return ExprStmt(items[0])

    # Expressions
    def _fold(self, node_type, items) -> Node:
        # items pattern: expr (op expr)*, folded left-associatively
        left = items[0]
        i = 1
        while i < len(items):
            op = items[i]
            right = items[i + 1]
            left = node_type(op=str(op), left=left, right=right)
            i += 2
        return left

    def comparison(self, items):
        return self._fold(Comparison, items)

    def additive(self, items):
        return self._fold(Additive, items)

    def multiplicative(self, items):
        return self._fold(Multiplicative, items)

    def ident(self, items):
        return Ident(str(items[0]))

    def call(self, items):
        args = items[1] if len(items) > 1 else []
        return Call(name=str(items[0]), args=args)

    def array_access(self, items):
        return ArrayAccess(name=str(items[0]), indices=list(items[1:]))

    def arg_list(self, items):
        return list(items)

    def literal(self, items):
        token = items[0]
        if token.type == 'INT_LIT':
            return Literal(token.value, 'int')
        if token.type == 'REAL_LIT':
            return Literal(token.value, 'double')
        if token.type == 'STRING_LIT':
            return Literal(token.value, 'str')
        if token.type in ('TRUE', 'FALSE'):
            return Literal(token.value, 'bool')
        raise NotImplementedError(f"unknown literal token {token}")


def parse_program(source: str) -> Program:
    """Parse ALGOL 60 source code into an AST Program.

    Any syntax errors will be raised as exceptions from the parser.
    """
    tree = ALGOL60_PARSER.parse(source)
    return ASTTransformer().transform(tree)
