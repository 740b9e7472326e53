"""JSON serialization/deserialization for the ALGOL 60 AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding, so that a tree produced by an
external front end can be handed to the evaluator. Every node is an
object with a "type" key naming its class.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Program,
    Block,
    VarDecl,
    ArrayDecl,
    Assign,
    IndexAssign,
    IfStmt,
    WhileStmt,
    FuncDecl,
    ProcDecl,
    ReturnStmt,
    ExprStmt,
    Literal,
    Ident,
    Additive,
    Multiplicative,
    Comparison,
    ArrayAccess,
    Call,
)
from .types import TYPE_KINDS, TypeSpec


BINARY_NODES = {
    "Additive": Additive,
    "Multiplicative": Multiplicative,
    "Comparison": Comparison,
}


def typespec_from_obj(o: str) -> TypeSpec:
    if o not in TYPE_KINDS:
        raise ValueError(f"Unknown type tag: {o}")
    return TypeSpec(o)


def _nodes(nodes) -> Any:
    return None if nodes is None else [ast_to_obj(n) for n in nodes]


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, Program):
        return {"type": "Program", "body": _nodes(node.body)}
    if isinstance(node, Block):
        return {"type": "Block", "statements": _nodes(node.statements)}
    if isinstance(node, VarDecl):
        return {
            "type": "VarDecl",
            "type_spec": node.type_spec.kind,
            "name": node.name,
            "expr": ast_to_obj(node.expr),
        }
    if isinstance(node, ArrayDecl):
        return {
            "type": "ArrayDecl",
            "name": node.name,
            "elem_type": node.elem_type.kind,
            "dims": list(node.dims),
            "initializer": _nodes(node.initializer),
        }
    if isinstance(node, Assign):
        return {"type": "Assign", "name": node.name, "value": ast_to_obj(node.value)}
    if isinstance(node, IndexAssign):
        return {
            "type": "IndexAssign",
            "name": node.name,
            "indices": _nodes(node.indices),
            "value": ast_to_obj(node.value),
        }
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "then_block": ast_to_obj(node.then_block),
            "else_block": ast_to_obj(node.else_block),
        }
    if isinstance(node, WhileStmt):
        return {"type": "WhileStmt", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, (FuncDecl, ProcDecl)):
        return {
            "type": type(node).__name__,
            "name": node.name,
            "params": list(node.params),
            "body": _nodes(node.body),
        }
    if isinstance(node, ReturnStmt):
        return {"type": "ReturnStmt", "value": ast_to_obj(node.value)}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, Literal):
        return {"type": "Literal", "text": node.text, "literal_type": node.literal_type}
    if isinstance(node, Ident):
        return {"type": "Ident", "name": node.name}
    if isinstance(node, (Additive, Multiplicative, Comparison)):
        return {
            "type": type(node).__name__,
            "op": node.op,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, ArrayAccess):
        return {"type": "ArrayAccess", "name": node.name, "indices": _nodes(node.indices)}
    if isinstance(node, Call):
        return {"type": "Call", "name": node.name, "args": _nodes(node.args)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(body=[ast_from_obj(n) for n in obj["body"]])
    if t == "Block":
        return Block(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "VarDecl":
        return VarDecl(
            type_spec=typespec_from_obj(obj["type_spec"]),
            name=obj["name"],
            expr=ast_from_obj(obj.get("expr")),
        )
    if t == "ArrayDecl":
        initializer = obj.get("initializer")
        return ArrayDecl(
            name=obj["name"],
            elem_type=typespec_from_obj(obj["elem_type"]),
            dims=[int(d) for d in obj["dims"]],
            initializer=None if initializer is None else [ast_from_obj(e) for e in initializer],
        )
    if t == "Assign":
        return Assign(name=obj["name"], value=ast_from_obj(obj["value"]))
    if t == "IndexAssign":
        return IndexAssign(
            name=obj["name"],
            indices=[ast_from_obj(i) for i in obj["indices"]],
            value=ast_from_obj(obj["value"]),
        )
    if t == "IfStmt":
        return IfStmt(
            condition=ast_from_obj(obj["condition"]),
            then_block=ast_from_obj(obj["then_block"]),
            else_block=ast_from_obj(obj.get("else_block")),
        )
    if t == "WhileStmt":
        return WhileStmt(condition=ast_from_obj(obj["condition"]), body=ast_from_obj(obj["body"]))
    if t in ("FuncDecl", "ProcDecl"):
        node_type = FuncDecl if t == "FuncDecl" else ProcDecl
        return node_type(
            name=obj["name"],
            params=list(obj["params"]),
            body=[ast_from_obj(s) for s in obj["body"]],
        )
    if t == "ReturnStmt":
        return ReturnStmt(value=ast_from_obj(obj["value"]))
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]))
    if t == "Literal":
        return Literal(text=obj["text"], literal_type=obj["literal_type"])
    if t == "Ident":
        return Ident(name=obj["name"])
    if t in BINARY_NODES:
        return BINARY_NODES[t](op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]))
    if t == "ArrayAccess":
        return ArrayAccess(name=obj["name"], indices=[ast_from_obj(i) for i in obj["indices"]])
    if t == "Call":
        return Call(name=obj["name"], args=[ast_from_obj(a) for a in obj["args"]])

    raise ValueError(f"Unknown AST node type: {t}")
