"""Abstract Syntax Tree (AST) definitions for the ALGOL 60 language.

The evaluator consumes these nodes. They are produced by `algol60.parser`
or loaded from JSON by `algol60.ast_json`; either way the evaluator
trusts the shape of the tree but not the dynamic types of the values its
expressions produce.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .types import TypeSpec


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Program(Node):
    body: List[Node]


@dataclass
class Block(Node):
    statements: List[Node]


@dataclass
class VarDecl(Node):
    type_spec: TypeSpec
    name: str
    expr: Optional[Node]  # initial value


@dataclass
class ArrayDecl(Node):
    name: str
    elem_type: TypeSpec
    dims: List[int]  # one extent for 1D, rows and cols for 2D
    initializer: Optional[List[Node]]


@dataclass
class Assign(Node):
    name: str
    value: Node


@dataclass
class IndexAssign(Node):
    name: str
    indices: List[Node]
    value: Node


@dataclass
class IfStmt(Node):
    condition: Node
    then_block: Block
    else_block: Optional[Node]  # Block, or IfStmt for an else-if chain


@dataclass
class WhileStmt(Node):
    condition: Node
    body: Block


@dataclass
class FuncDecl(Node):
    name: str
    params: List[str]
    body: List[Node]


@dataclass
class ProcDecl(Node):
    name: str
    params: List[str]
    body: List[Node]


@dataclass
class ReturnStmt(Node):
    value: Node


@dataclass
class ExprStmt(Node):
    expr: Node


@dataclass
class Literal(Node):
    text: str  # token text as written, quotes included for str
    literal_type: str  # 'int', 'double', 'str', 'bool'


@dataclass
class Ident(Node):
    name: str


@dataclass
class Additive(Node):
    op: str
    left: Node
    right: Node


@dataclass
class Multiplicative(Node):
    op: str
    left: Node
    right: Node


@dataclass
class Comparison(Node):
    op: str
    left: Node
    right: Node


@dataclass
class ArrayAccess(Node):
    name: str
    indices: List[Node]


@dataclass
class Call(Node):
    name: str
    args: List[Node]
