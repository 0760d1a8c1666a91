"""`Int` and `Flt`, the numeric built-in classes.

`Int` behaves like a signed 64-bit integer: results wrap around on
overflow, division truncates toward zero and the remainder takes the
sign of the dividend. `Flt` follows IEEE 754, so dividing by zero gives
an infinity or NaN instead of failing. Neither class accepts the other
as an operand; there is no implicit widening.
"""

import math
import operator
from typing import Any, Callable, List

from flannel.builtin_function import BuiltinFunction
from flannel.errors import FlannelError, DIVISION_BY_ZERO
from flannel.types import FlnClass, FlnObject
from .core import expect_class, payload_equals

INT_MIN = -(1 << 63)
INT_MAX = (1 << 63) - 1


def wrap_int(n: int) -> int:
    """Wrap an arbitrary Python int into the signed 64-bit range."""
    n &= (1 << 64) - 1
    return n - (1 << 64) if n > INT_MAX else n


def int_divide(a: int, b: int) -> int:
    if b == 0:
        raise FlannelError(DIVISION_BY_ZERO, "Integer division by zero.")
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def int_modulo(a: int, b: int) -> int:
    if b == 0:
        raise FlannelError(DIVISION_BY_ZERO, "Integer modulo by zero.")
    r = abs(a) % abs(b)
    return -r if a < 0 else r


def int_power(base: int, exp: int) -> int:
    if exp >= 0:
        return pow(base, exp, 1 << 64)
    # negative exponents truncate toward zero
    if base == 0:
        raise FlannelError(DIVISION_BY_ZERO, "Zero raised to a negative power.")
    if base == 1:
        return 1
    if base == -1:
        return -1 if exp % 2 else 1
    return 0


def float_divide(a: float, b: float) -> float:
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def float_modulo(a: float, b: float) -> float:
    if b == 0.0 or math.isinf(a):
        return math.nan
    return math.fmod(a, b)


def float_power(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except OverflowError:
        if a < 0 and b.is_integer() and int(b) % 2:
            return -math.inf
        return math.inf
    except ValueError:
        if a == 0.0 and b < 0:
            return math.inf
        return math.nan


def float_to_int(x: float) -> int:
    """Truncate toward zero, saturating at the 64-bit bounds; NaN becomes 0."""
    if math.isnan(x):
        return 0
    if x >= INT_MAX:
        return INT_MAX
    if x <= INT_MIN:
        return INT_MIN
    return int(x)


ARITHMETIC = ('add', 'subtract', 'multiply', 'divide', 'modulo', 'exponent')
COMPARISONS = {
    'isGreater': operator.gt,
    'isLess': operator.lt,
    'isGreaterOrEqual': operator.ge,
    'isLessOrEqual': operator.le,
}


def populate_numbers(runtime: Any) -> None:
    """Create and register `Int` and `Flt`."""
    int_class = FlnClass('Int', runtime.obj_class, builtin=True)
    flt_class = FlnClass('Flt', runtime.obj_class, builtin=True)

    int_ops = {
        'add': operator.add,
        'subtract': operator.sub,
        'multiply': operator.mul,
        'divide': int_divide,
        'modulo': int_modulo,
        'exponent': int_power,
    }
    flt_ops = {
        'add': operator.add,
        'subtract': operator.sub,
        'multiply': operator.mul,
        'divide': float_divide,
        'modulo': float_modulo,
        'exponent': float_power,
    }

    def arithmetic(cls: FlnClass, name: str, op: Callable[[Any, Any], Any]) -> BuiltinFunction:
        def method(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
            expect_class(receiver, name, args[0], cls)
            result = op(receiver.value, args[0].value)
            if cls is int_class:
                return interp.runtime.make_int(wrap_int(result))
            return interp.runtime.make_flt(result)
        return BuiltinFunction(name, 1, method)

    def comparison(cls: FlnClass, name: str, op: Callable[[Any, Any], bool]) -> BuiltinFunction:
        def method(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
            expect_class(receiver, name, args[0], cls)
            return interp.runtime.make_bln(op(receiver.value, args[0].value))
        return BuiltinFunction(name, 1, method)

    def equals(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        return interp.runtime.make_bln(payload_equals(receiver, args[0]))

    def does_not_equal(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        return interp.runtime.make_bln(not payload_equals(receiver, args[0]))

    def int_get_str(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        return interp.runtime.make_str(str(receiver.value))

    def int_get_flt(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        return interp.runtime.make_flt(float(receiver.value))

    def flt_get_str(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        return interp.runtime.make_str(repr(receiver.value))

    def flt_get_int(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        return interp.runtime.make_int(float_to_int(receiver.value))

    def identity(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        return receiver

    for cls, ops in ((int_class, int_ops), (flt_class, flt_ops)):
        for name in ARITHMETIC:
            cls.methods[name] = arithmetic(cls, name, ops[name])
        for name, op in COMPARISONS.items():
            cls.methods[name] = comparison(cls, name, op)
        cls.methods['equals'] = BuiltinFunction('equals', 1, equals)
        cls.methods['doesNotEqual'] = BuiltinFunction('doesNotEqual', 1, does_not_equal)

    int_class.methods['getStr'] = BuiltinFunction('getStr', 0, int_get_str)
    int_class.methods['getInt'] = BuiltinFunction('getInt', 0, identity)
    int_class.methods['getFlt'] = BuiltinFunction('getFlt', 0, int_get_flt)
    flt_class.methods['getStr'] = BuiltinFunction('getStr', 0, flt_get_str)
    flt_class.methods['getInt'] = BuiltinFunction('getInt', 0, flt_get_int)
    flt_class.methods['getFlt'] = BuiltinFunction('getFlt', 0, identity)

    runtime.int_class = int_class
    runtime.flt_class = flt_class
    runtime.register_class(int_class)
    runtime.register_class(flt_class)
