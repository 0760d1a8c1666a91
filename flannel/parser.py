"""Parser for the FlannelScript language.

The source is fed into a Lark LALR parser configured with the grammar
below, and the resulting parse tree is transformed into the AST defined
in `flannel.ast` by `ASTTransformer`.

Binary expressions are deliberately *not* given a precedence ladder in
the grammar. An expression is parsed as a flat run of operands separated
by operators and kept that way in the AST (`Expression.items`);
precedence is applied by the interpreter when the expression is
evaluated (see `flannel.operators`).

The `parse_program` function is the public entry point and returns a
`Program` AST node representing the entire source file.
"""

from __future__ import annotations

from typing import List, Optional

from lark import Lark, Transformer

from .ast import (
    Program, Block, Param, VarDecl, Assign, Echo, Return, While, If,
    FuncDecl, Override, PropertyDecl, ClassDecl, Literal, Name, Negation,
    Ask, FunctionCall, ClassCall, MethodCall, PropertyGet, Operator,
    Expression, Node,
)


FLANNEL_GRAMMAR = r"""
    ?start: program
    program: statement*

    // Statements
    ?statement: var_decl
              | assignment
              | function_call ";"
              | method_call ";"
              | echo_stmt
              | return_stmt
              | if_stmt
              | while_stmt
              | class_decl
              | func_decl

    var_decl: NAME NAME "=" expression ";"
    assignment: NAME "=" expression ";"
    echo_stmt: "echo" expression ";"
    return_stmt: "return" expression ";"
    if_stmt: "if" expression block
    while_stmt: "while" expression block

    block: "{" statement* "}"

    func_decl: "fn" NAME "(" params ")" "->" NAME block
    params: [param ("," param)*]
    param: NAME NAME

    class_decl: "class" NAME parent "{" class_member* "}"
    parent: ["extends" NAME]
    ?class_member: override_decl
                 | property_decl
                 | func_decl
    override_decl: "override" NAME "=" expression ";"
    property_decl: NAME NAME "=" expression ";"

    // Expressions are kept flat; precedence is applied at run time
    expression: operand (binop operand)*
    ?operand: "!" operand -> negation
            | atom
    ?atom: literal
         | NAME -> name
         | function_call
         | method_call
         | property_get
         | class_call
         | ask_expr
         | "(" expression ")"

    ?literal: TRUE -> literal_bool
            | FALSE -> literal_bool
            | FLOAT -> literal_float
            | INT -> literal_int
            | STRING -> literal_string

    function_call: NAME "(" args ")"
    method_call: NAME "." NAME "(" args ")"
    property_get: NAME "." NAME
    class_call: "new" NAME "(" args ")"
    ask_expr: "ask" operand
    args: [expression ("," expression)*]

    binop: OR | AND
         | EQ | NE | GE | LE | GT | LT
         | PLUS | MINUS
         | STAR | SLASH | PERCENT
         | CARET

    // Tokens
    OR: "or"
    AND: "and"
    EQ: "=="
    NE: "!="
    GE: ">="
    LE: "<="
    GT: ">"
    LT: "<"
    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    PERCENT: "%"
    CARET: "^"
    TRUE: "true"
    FALSE: "false"
    FLOAT.2: /\d+\.\d+/
    INT: /\d+/
    STRING: /'[^'\n]*'/

    %import common.CNAME -> NAME
    %import common.WS
    %ignore WS

    // Comments
    COMMENT: /#[^\n]*/
    %ignore COMMENT
"""


FLANNEL_PARSER = Lark(
    FLANNEL_GRAMMAR,
    parser='lalr',
    propagate_positions=True,
    maybe_placeholders=False,
)


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def program(self, items):
        return Program(body=list(items))

    def block(self, items):
        return Block(statements=list(items))

    # Statements
    def var_decl(self, items):
        return VarDecl(type_name=str(items[0]), name=str(items[1]), value=items[2])

    def assignment(self, items):
        return Assign(name=str(items[0]), value=items[1])

    def echo_stmt(self, items):
        return Echo(items[0])

    def return_stmt(self, items):
        return Return(items[0])

    def if_stmt(self, items):
        return If(condition=items[0], body=items[1])

    def while_stmt(self, items):
        return While(condition=items[0], body=items[1])

    def params(self, items):
        return list(items)

    def param(self, items):
        return Param(type_name=str(items[0]), name=str(items[1]))

    def func_decl(self, items):
        return FuncDecl(
            name=str(items[0]),
            params=items[1],
            return_type=str(items[2]),
            body=items[3],
        )

    def parent(self, items) -> Optional[str]:
        return str(items[0]) if items else None

    def override_decl(self, items):
        return Override(name=str(items[0]), value=items[1])

    def property_decl(self, items):
        return PropertyDecl(type_name=str(items[0]), name=str(items[1]), value=items[2])

    def class_decl(self, items):
        members = items[2:]
        return ClassDecl(
            name=str(items[0]),
            parent=items[1],
            overrides=[m for m in members if isinstance(m, Override)],
            properties=[m for m in members if isinstance(m, PropertyDecl)],
            methods=[m for m in members if isinstance(m, FuncDecl)],
        )

    # Expressions
    def expression(self, items):
        # a lone operand is not a compound expression
        if len(items) == 1:
            return items[0]
        return Expression(items=list(items))

    def binop(self, items):
        return Operator(str(items[0]))

    def negation(self, items):
        return Negation(items[0])

    def name(self, items):
        return Name(str(items[0]))

    def literal_bool(self, items):
        return Literal('bool', str(items[0]))

    def literal_int(self, items):
        return Literal('int', str(items[0]))

    def literal_float(self, items):
        return Literal('float', str(items[0]))

    def literal_string(self, items):
        return Literal('str', str(items[0]))

    def function_call(self, items):
        return FunctionCall(name=str(items[0]), args=items[1])

    def method_call(self, items):
        return MethodCall(target=str(items[0]), method=str(items[1]), args=items[2])

    def property_get(self, items):
        return PropertyGet(target=str(items[0]), name=str(items[1]))

    def class_call(self, items):
        return ClassCall(class_name=str(items[0]), args=items[1])

    def ask_expr(self, items):
        return Ask(items[0])

    def args(self, items) -> List[Node]:
        return list(items)


def parse_program(source: str) -> Program:
    """Parse FlannelScript source code into an AST Program.

    Any syntax errors will be raised as exceptions from the parser.
    """
    tree = FLANNEL_PARSER.parse(source)
    return ASTTransformer().transform(tree)
