import re
from typing import Any, List

from flannel.builtin_function import BuiltinFunction
from flannel.errors import FlannelError, INVALID_CONVERSION
from flannel.types import FlnClass, FlnObject
from .core import expect_class, payload_equals
from .numbers import COMPARISONS, INT_MAX, INT_MIN

INT_TEXT = re.compile(r'[+-]?\d+')
FLT_TEXT = re.compile(r'[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')


def populate_text(runtime: Any) -> None:
    """Create and register `Str`."""
    str_class = FlnClass('Str', runtime.obj_class, builtin=True)

    def str_add(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        expect_class(receiver, 'add', args[0], str_class)
        return interp.runtime.make_str(receiver.value + args[0].value)

    def str_equals(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        return interp.runtime.make_bln(payload_equals(receiver, args[0]))

    def str_does_not_equal(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        return interp.runtime.make_bln(not payload_equals(receiver, args[0]))

    def comparison(name, op):
        def method(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
            expect_class(receiver, name, args[0], str_class)
            return interp.runtime.make_bln(op(receiver.value, args[0].value))
        return BuiltinFunction(name, 1, method)

    def str_get_str(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        return receiver

    def str_get_length(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        return interp.runtime.make_int(len(receiver.value))

    def str_get_int(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        text = receiver.value
        if not INT_TEXT.fullmatch(text):
            raise FlannelError(INVALID_CONVERSION, f"Cannot read `{text}` as an `Int`.")
        value = int(text)
        if not INT_MIN <= value <= INT_MAX:
            raise FlannelError(INVALID_CONVERSION, f"`{text}` does not fit in an `Int`.")
        return interp.runtime.make_int(value)

    def str_get_flt(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        text = receiver.value
        if not FLT_TEXT.fullmatch(text):
            raise FlannelError(INVALID_CONVERSION, f"Cannot read `{text}` as a `Flt`.")
        return interp.runtime.make_flt(float(text))

    str_class.methods['add'] = BuiltinFunction('add', 1, str_add)
    str_class.methods['equals'] = BuiltinFunction('equals', 1, str_equals)
    str_class.methods['doesNotEqual'] = BuiltinFunction('doesNotEqual', 1, str_does_not_equal)
    for name, op in COMPARISONS.items():
        str_class.methods[name] = comparison(name, op)
    str_class.methods['getStr'] = BuiltinFunction('getStr', 0, str_get_str)
    str_class.methods['getLength'] = BuiltinFunction('getLength', 0, str_get_length)
    str_class.methods['getInt'] = BuiltinFunction('getInt', 0, str_get_int)
    str_class.methods['getFlt'] = BuiltinFunction('getFlt', 0, str_get_flt)

    runtime.str_class = str_class
    runtime.register_class(str_class)
