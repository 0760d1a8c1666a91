"""Abstract Syntax Tree (AST) definitions for FlannelScript.

The AST classes defined in this module represent the syntactic structure
of parsed FlannelScript programs. They are produced by the parser (or
loaded from AST JSON) and consumed read-only by the interpreter. Each
node corresponds to a construct in the FlannelScript grammar.

Literal nodes keep the raw source text of the literal; the interpreter
is responsible for turning it into a value. Compound expressions are
kept flat: an `Expression` holds operand nodes and `Operator` nodes in
source order, and precedence is only applied when it is evaluated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


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
class Param(Node):
    type_name: str
    name: str


@dataclass
class VarDecl(Node):
    type_name: str
    name: str
    value: Node


@dataclass
class Assign(Node):
    name: str
    value: Node


@dataclass
class Echo(Node):
    value: Node


@dataclass
class Return(Node):
    value: Node


@dataclass
class While(Node):
    condition: Node
    body: Block


@dataclass
class If(Node):
    condition: Node
    body: Block


@dataclass
class FuncDecl(Node):
    name: str
    params: List[Param]
    return_type: str
    body: Block


@dataclass
class Override(Node):
    name: str
    value: Node


@dataclass
class PropertyDecl(Node):
    type_name: str
    name: str
    value: Node


@dataclass
class ClassDecl(Node):
    name: str
    parent: Optional[str]
    overrides: List[Override] = field(default_factory=list)
    properties: List[PropertyDecl] = field(default_factory=list)
    methods: List[FuncDecl] = field(default_factory=list)


@dataclass
class Literal(Node):
    kind: str  # 'bool', 'int', 'float', 'str'
    raw: str


@dataclass
class Name(Node):
    name: str


@dataclass
class Negation(Node):
    operand: Node


@dataclass
class Ask(Node):
    prompt: Node


@dataclass
class FunctionCall(Node):
    name: str
    args: List[Node]


@dataclass
class ClassCall(Node):
    class_name: str
    args: List[Node]


@dataclass
class MethodCall(Node):
    target: str
    method: str
    args: List[Node]


@dataclass
class PropertyGet(Node):
    target: str
    name: str


@dataclass
class Operator(Node):
    symbol: str


@dataclass
class Expression(Node):
    items: List[Node]  # operand, Operator, operand, ...
