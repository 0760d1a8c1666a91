from typing import Any, List

from flannel.builtin_function import BuiltinFunction
from flannel.errors import FlannelError, TYPE_MISMATCH
from flannel.types import FlnClass, FlnObject


def expect_class(receiver: FlnObject, method: str, arg: FlnObject, cls: FlnClass) -> None:
    """Raise TypeMismatch unless `arg` is exactly an instance of `cls`."""
    if arg.cls is not cls:
        raise FlannelError(
            TYPE_MISMATCH,
            f"`{receiver.cls.name}.{method}` expects `{cls.name}` but found `{arg.cls.name}`.",
        )


def payload_equals(receiver: FlnObject, other: FlnObject) -> bool:
    return other.cls is receiver.cls and other.value == receiver.value


def populate_core(runtime: Any) -> None:
    """Create and register `Obj`, `Und` and `Bln` plus the `und` constant."""
    obj_class = FlnClass('Obj', builtin=True)

    def obj_equals(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        return interp.runtime.make_bln(receiver is args[0])

    def obj_does_not_equal(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        return interp.runtime.make_bln(receiver is not args[0])

    def obj_get_str(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        return interp.runtime.make_str(f"<{receiver.cls.name} object>")

    obj_class.methods['equals'] = BuiltinFunction('equals', 1, obj_equals)
    obj_class.methods['doesNotEqual'] = BuiltinFunction('doesNotEqual', 1, obj_does_not_equal)
    obj_class.methods['getStr'] = BuiltinFunction('getStr', 0, obj_get_str)

    und_class = FlnClass('Und', obj_class, builtin=True)

    def und_get_str(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        return interp.runtime.make_str('und')

    und_class.methods['getStr'] = BuiltinFunction('getStr', 0, und_get_str)

    bln_class = FlnClass('Bln', obj_class, builtin=True)

    def bln_equals(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        return interp.runtime.make_bln(payload_equals(receiver, args[0]))

    def bln_does_not_equal(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        return interp.runtime.make_bln(not payload_equals(receiver, args[0]))

    def bln_and(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        expect_class(receiver, 'and', args[0], bln_class)
        return interp.runtime.make_bln(receiver.value and args[0].value)

    def bln_or(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        expect_class(receiver, 'or', args[0], bln_class)
        return interp.runtime.make_bln(receiver.value or args[0].value)

    def bln_get_str(interp, receiver: FlnObject, args: List[FlnObject]) -> FlnObject:
        return interp.runtime.make_str('true' if receiver.value else 'false')

    bln_class.methods['equals'] = BuiltinFunction('equals', 1, bln_equals)
    bln_class.methods['doesNotEqual'] = BuiltinFunction('doesNotEqual', 1, bln_does_not_equal)
    bln_class.methods['and'] = BuiltinFunction('and', 1, bln_and)
    bln_class.methods['or'] = BuiltinFunction('or', 1, bln_or)
    bln_class.methods['getStr'] = BuiltinFunction('getStr', 0, bln_get_str)

    runtime.obj_class = obj_class
    runtime.und_class = und_class
    runtime.bln_class = bln_class
    for cls in (obj_class, und_class, bln_class):
        runtime.register_class(cls)
    runtime.constants['und'] = FlnObject(und_class)
