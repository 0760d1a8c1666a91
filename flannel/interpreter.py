"""Interpreter for the FlannelScript language.

This module walks the AST produced by `flannel.parser` (or loaded with
`flannel.ast_json`) and executes it. It contains three layers:

* the statement executor (`Interpreter.execute` and
  `Interpreter.execute_block`), which runs statements for their effect,
* the expression evaluator (`Interpreter.evaluate`), which turns a single
  node into a value and hands compound expressions to
  `flannel.operators.reduce_expression`,
* the driver (`Interpreter.run`), which runs a whole program and reports
  how it ended.

Return values leave a function body by local scanning rather than by
unwinding: `execute_block` looks at each of its own statements and stops
at the first `return`. `if` and `while` run their bodies through
`execute_block` but drop its result, so a `return` inside them only ends
that inner block and the enclosing function carries on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from .ast import (
    Program, VarDecl, Assign, Echo, Return, While, If, FuncDecl,
    ClassDecl, Literal, Name, Negation, Ask, FunctionCall, ClassCall,
    MethodCall, PropertyGet, Expression, Node,
)
from .environment import Context
from .errors import (
    FlannelError, ProgramExit, ARGUMENT_MISMATCH, END_OF_INPUT,
    INVALID_INHERITANCE, MALFORMED_LITERAL, TYPE_MISMATCH, UNKNOWN_PROPERTY,
)
from .operators import reduce_expression
from .parser import parse_program
from .runtime import Runtime
from .std.numbers import INT_MAX, INT_MIN
from .std.text import FLT_TEXT, INT_TEXT
from .types import FlnClass, FlnObject, FunctionValue


RETURN_PREFIX = 'returned: '


@dataclass
class Outcome:
    """How a program run ended.

    `value` is the value of a top-level `return`, or None when the
    program ran off the end of its statement list.
    """
    status: int
    value: Optional[FlnObject] = None


class Interpreter:
    """Core interpreter that executes FlannelScript ASTs."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.runtime = Runtime()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0 and self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    # Public API
    def run(self, program: Program, context: Optional[Context] = None) -> Outcome:
        if context is None:
            context = Context(self.runtime)
        try:
            self.execute_block(program.body, context, False)
        except ProgramExit as exit_signal:
            return Outcome(0, exit_signal.value)
        finally:
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None
        return Outcome(0)

    def execute_block(self, statements: List[Node], context: Context, in_function: bool) -> Optional[FlnObject]:
        for stmt in statements:
            # Only direct statements are inspected; nested blocks handle their own.
            if in_function and isinstance(stmt, Return):
                return self.evaluate(stmt.value, context)
            self.execute(stmt, context, in_function)
        if in_function:
            return context.get_constant('und')
        return None

    def execute(self, node: Node, context: Context, in_function: bool) -> None:
        if isinstance(node, VarDecl):
            value = self.evaluate(node.value, context)
            if self.runtime.get_class(node.type_name) is not value.cls:
                raise FlannelError(
                    TYPE_MISMATCH,
                    f"Type `{node.type_name}` does not match found type `{value.cls.name}`.",
                )
            context.declare(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name}: {node.type_name} = {value!r}")
            return
        if isinstance(node, Assign):
            value = self.evaluate(node.value, context)
            context.update(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name} = {value!r}")
            return
        if isinstance(node, FunctionCall):
            self.call_named_function(node, context)
            return
        if isinstance(node, MethodCall):
            self.call_named_method(node, context)
            return
        if isinstance(node, Echo):
            print(self.to_text(self.evaluate(node.value, context)))
            return
        if isinstance(node, Return):
            value = self.evaluate(node.value, context)
            print(RETURN_PREFIX + self.to_text(value))
            raise ProgramExit(value)
        if isinstance(node, While):
            while self.check_condition(node.condition, context):
                self.execute_block(node.body.statements, context, in_function)
            return
        if isinstance(node, If):
            if self.check_condition(node.condition, context):
                self.execute_block(node.body.statements, context, in_function)
            return
        if isinstance(node, ClassDecl):
            self.declare_class(node, context)
            return
        if isinstance(node, FuncDecl):
            self.runtime.register_function(self.build_function(node))
            if self.debug_level >= 1:
                self.debug(f"define function {node.name}")
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node).__name__}")

    def evaluate(self, node: Node, context: Context) -> FlnObject:
        if isinstance(node, Literal):
            return self.evaluate_literal(node)
        if isinstance(node, Name):
            return context.resolve(node.name)
        if isinstance(node, Expression):
            return reduce_expression(self, node.items, context)
        if isinstance(node, Negation):
            operand = self.evaluate(node.operand, context)
            if operand.cls is not self.runtime.bln_class:
                raise FlannelError(TYPE_MISMATCH, "Expected `Bln` type, but was not found.")
            return operand.call_method(self, 'equals', [self.runtime.make_bln(False)])
        if isinstance(node, FunctionCall):
            return self.call_named_function(node, context)
        if isinstance(node, MethodCall):
            return self.call_named_method(node, context)
        if isinstance(node, ClassCall):
            args = [self.evaluate(arg, context) for arg in node.args]
            cls = self.runtime.get_class(node.class_name)
            if self.debug_level >= 2:
                self.debug(f"construct {node.class_name} with {len(args)} arguments")
            return cls.create_object(self, args)
        if isinstance(node, PropertyGet):
            return context.resolve(node.target).get_property(node.name)
        if isinstance(node, Ask):
            print(self.to_text(self.evaluate(node.prompt, context)))
            try:
                line = input()
            except EOFError:
                raise FlannelError(END_OF_INPUT, "Expected a line of input, but input was closed.")
            return self.runtime.make_str(line)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node).__name__}")

    def evaluate_literal(self, node: Literal) -> FlnObject:
        raw = node.raw
        if node.kind == 'bool':
            if raw == 'true':
                return self.runtime.make_bln(True)
            if raw == 'false':
                return self.runtime.make_bln(False)
            raise FlannelError(MALFORMED_LITERAL, f"Expected `true` or `false` but found `{raw}`.")
        if node.kind == 'int':
            if not INT_TEXT.fullmatch(raw) or not INT_MIN <= int(raw) <= INT_MAX:
                raise FlannelError(MALFORMED_LITERAL, f"`{raw}` is not a valid `Int` literal.")
            return self.runtime.make_int(int(raw))
        if node.kind == 'float':
            if not FLT_TEXT.fullmatch(raw):
                raise FlannelError(MALFORMED_LITERAL, f"`{raw}` is not a valid `Flt` literal.")
            return self.runtime.make_flt(float(raw))
        if node.kind == 'str':
            if not raw.startswith("'"):
                raise FlannelError(
                    MALFORMED_LITERAL,
                    "Expected string literal beginning with `'`, but none was found.",
                )
            if len(raw) < 2 or not raw.endswith("'"):
                raise FlannelError(
                    MALFORMED_LITERAL,
                    "Expected string literal ending with `'`, but none was found.",
                )
            return self.runtime.make_str(raw[1:-1])
        raise FlannelError(MALFORMED_LITERAL, f"Unknown literal kind `{node.kind}`.")

    def check_condition(self, condition: Node, context: Context) -> bool:
        value = self.evaluate(condition, context)
        if value.cls is not self.runtime.bln_class:
            raise FlannelError(TYPE_MISMATCH, "Expected `Bln` type, but was not found.")
        if self.debug_level >= 3:
            self.debug(f"condition -> {value.value}")
        return value.value

    def to_text(self, value: FlnObject) -> str:
        """Text used by echo, ask prompts and top-level returns."""
        if value.cls is self.runtime.str_class:
            return value.value
        text = value.call_method(self, 'getStr', [])
        if text.cls is not self.runtime.str_class:
            raise FlannelError(
                TYPE_MISMATCH,
                f"`{value.cls.name}.getStr` should return `Str` but returned `{text.cls.name}`.",
            )
        return text.value

    # Calls
    def call_named_function(self, node: FunctionCall, context: Context) -> FlnObject:
        args = [self.evaluate(arg, context) for arg in node.args]
        function = self.runtime.get_function(node.name)
        if self.debug_level >= 2:
            self.debug(f"call {node.name} with {len(args)} arguments")
        return function.call(self, context.receiver, args)

    def call_named_method(self, node: MethodCall, context: Context) -> FlnObject:
        target = context.resolve(node.target)
        args = [self.evaluate(arg, context) for arg in node.args]
        if self.debug_level >= 2:
            self.debug(f"call {node.target}.{node.method} with {len(args)} arguments")
        return target.call_method(self, node.method, args)

    def call_function(self, func: FunctionValue, receiver: Optional[FlnObject], args: List[FlnObject]) -> FlnObject:
        if len(args) != len(func.params):
            raise FlannelError(
                ARGUMENT_MISMATCH,
                f"`{func.name}` expects {len(func.params)} arguments but got {len(args)}.",
            )
        call_context = Context(self.runtime, receiver)
        for (name, cls), arg in zip(func.params, args):
            if arg.cls is not cls:
                raise FlannelError(
                    TYPE_MISMATCH,
                    f"Parameter `{name}` of `{func.name}` expects `{cls.name}` but found `{arg.cls.name}`.",
                )
            call_context.declare(name, arg)
        result = self.execute_block(func.body.statements, call_context, True)
        # `und` stands in for a missing return whatever the declared type
        if result.cls is not self.runtime.und_class and result.cls is not func.return_type:
            raise FlannelError(
                TYPE_MISMATCH,
                f"`{func.name}` should return `{func.return_type.name}` but returned `{result.cls.name}`.",
            )
        return result

    # Declarations
    def build_function(self, node: FuncDecl) -> FunctionValue:
        params = [(param.name, self.runtime.get_class(param.type_name)) for param in node.params]
        return_type = self.runtime.get_class(node.return_type)
        return FunctionValue(node.name, params, return_type, node.body)

    def declare_class(self, node: ClassDecl, context: Context) -> FlnClass:
        if node.parent is None:
            parent = self.runtime.obj_class
        else:
            parent = self.runtime.get_class(node.parent)
        if parent.builtin and parent is not self.runtime.obj_class:
            raise FlannelError(INVALID_INHERITANCE, f"Class `{node.name}` cannot extend built-in `{parent.name}`.")

        inherited = parent.default_properties()
        overrides: Dict[str, FlnObject] = {}
        for override in node.overrides:
            value = self.evaluate(override.value, context)
            if override.name not in inherited:
                raise FlannelError(
                    UNKNOWN_PROPERTY,
                    f"`{node.name}` overrides `{override.name}`, which `{parent.name}` does not have.",
                )
            if inherited[override.name].cls is not value.cls:
                raise FlannelError(
                    TYPE_MISMATCH,
                    f"Override `{override.name}` must be `{inherited[override.name].cls.name}` but found `{value.cls.name}`.",
                )
            overrides[override.name] = value

        defaults: Dict[str, FlnObject] = {}
        for prop in node.properties:
            value = self.evaluate(prop.value, context)
            if self.runtime.get_class(prop.type_name) is not value.cls:
                raise FlannelError(
                    TYPE_MISMATCH,
                    f"Type `{prop.type_name}` does not match found type `{value.cls.name}`.",
                )
            defaults[prop.name] = value

        cls = FlnClass(node.name, parent, overrides, defaults)
        # Registered before the methods are built so they can name their own class.
        self.runtime.register_class(cls)
        for method in node.methods:
            cls.methods[method.name] = self.build_function(method)
        if self.debug_level >= 1:
            self.debug(f"define class {node.name} extends {parent.name}")
        return cls


def run_program(source: str, debug_level: int = 0) -> Outcome:
    """Parse and execute FlannelScript source in a fresh interpreter."""
    interpreter = Interpreter(debug_level=debug_level)
    return interpreter.run(parse_program(source))
