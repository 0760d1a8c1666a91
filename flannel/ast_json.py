"""JSON serialization/deserialization for FlannelScript AST.

This module converts between FlannelScript AST dataclasses and plain
Python dict/list structures suitable for JSON encoding, so a program
can be parsed once and the stored tree executed later. Every node is
written as ``{"type": "<NodeClass>", <field>: <value>, ...}``.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Dict, Type

from .ast import (
    Program,
    Block,
    Param,
    VarDecl,
    Assign,
    Echo,
    Return,
    While,
    If,
    FuncDecl,
    Override,
    PropertyDecl,
    ClassDecl,
    Literal,
    Name,
    Negation,
    Ask,
    FunctionCall,
    ClassCall,
    MethodCall,
    PropertyGet,
    Operator,
    Expression,
    Node,
)


NODE_TYPES: Dict[str, Type[Node]] = {
    cls.__name__: cls
    for cls in (
        Program, Block, Param, VarDecl, Assign, Echo, Return, While, If,
        FuncDecl, Override, PropertyDecl, ClassDecl, Literal, Name,
        Negation, Ask, FunctionCall, ClassCall, MethodCall, PropertyGet,
        Operator, Expression,
    )
}


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None or isinstance(node, (int, float, str, bool)):
        return node
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]

    if isinstance(node, Node) and type(node).__name__ in NODE_TYPES:
        obj: Dict[str, Any] = {"type": type(node).__name__}
        for f in fields(node):
            obj[f.name] = ast_to_obj(getattr(node, f.name))
        return obj

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (int, float, str, bool)):
        return obj
    if isinstance(obj, list):
        return [ast_from_obj(o) for o in obj]
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t not in NODE_TYPES:
        raise ValueError(f"Unknown AST node type: {t}")
    cls = NODE_TYPES[t]
    kwargs = {f.name: ast_from_obj(obj[f.name]) for f in fields(cls) if f.name in obj}
    return cls(**kwargs)
