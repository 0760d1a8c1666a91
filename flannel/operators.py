"""Binary operators and the expression reducer.

Expressions reach the interpreter as a flat list alternating operands
and `Operator` nodes, e.g. ``[1, +, 2, *, 3]``. `reduce_expression`
folds such a list into a single value without building a tree first:

1. Look up the precedence of every remaining operator and pick the
   first one with the highest precedence. Picking the leftmost among
   equals makes chains of the same precedence left-associative.
2. Evaluate the operands on both sides of it. Operands that are still
   AST nodes are evaluated now; operands produced by an earlier step are
   reused as they are.
3. Call the operator's method on the left value with the right value as
   its only argument and replace the three elements with the result.

This repeats until one value remains. Every step rescans the whole list,
which is quadratic in the number of operators but keeps the order in
which operands are evaluated and methods are called predictable, and
that order is visible whenever a user-defined operator method has side
effects.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import Node, Operator
from .errors import FlannelError, UNSUPPORTED_OPERATOR
from .types import FlnObject


PRECEDENCE: Dict[str, int] = {
    'or': 10,
    'and': 20,
    '==': 30,
    '!=': 30,
    '>': 30,
    '<': 30,
    '>=': 30,
    '<=': 30,
    '+': 40,
    '-': 40,
    '*': 50,
    '/': 50,
    '%': 50,
    '^': 60,
}

METHOD_NAMES: Dict[str, str] = {
    'or': 'or',
    'and': 'and',
    '==': 'equals',
    '!=': 'doesNotEqual',
    '>': 'isGreater',
    '<': 'isLess',
    '>=': 'isGreaterOrEqual',
    '<=': 'isLessOrEqual',
    '+': 'add',
    '-': 'subtract',
    '*': 'multiply',
    '/': 'divide',
    '%': 'modulo',
    '^': 'exponent',
}


def _symbol(op: Any) -> str:
    if isinstance(op, Operator) and op.symbol in PRECEDENCE:
        return op.symbol
    found = op.symbol if isinstance(op, Operator) else type(op).__name__
    raise FlannelError(UNSUPPORTED_OPERATOR, f"Binary operator `{found}` is unsupported.")


def precedence_for(op: Any) -> int:
    return PRECEDENCE[_symbol(op)]


def method_name_for(op: Any) -> str:
    return METHOD_NAMES[_symbol(op)]


def reduce_expression(interp: Any, items: List[Node], context: Any) -> FlnObject:
    """Fold an operand/operator list into one value."""
    remaining: List[Any] = list(items)
    while len(remaining) > 1:
        highest = -1
        index = -1
        # odd positions always hold operators, even positions operands
        for i in range(1, len(remaining), 2):
            precedence = precedence_for(remaining[i])
            if highest < precedence:
                highest = precedence
                index = i

        op = remaining[index]
        left = _operand(interp, remaining[index - 1], context)
        right = _operand(interp, remaining[index + 1], context)
        method = method_name_for(op)
        if interp.debug_level >= 3:
            interp.debug(f"reduce {left!r} {op.symbol} {right!r} -> {method}")
        result = left.call_method(interp, method, [right])

        remaining[index - 1:index + 2] = [result]

    return _operand(interp, remaining[0], context)


def _operand(interp: Any, term: Any, context: Any) -> FlnObject:
    if isinstance(term, FlnObject):
        return term
    return interp.evaluate(term, context)
