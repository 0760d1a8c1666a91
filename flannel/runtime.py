from typing import Any, Dict

from flannel.errors import (
    FlannelError, UNBOUND_VARIABLE, UNKNOWN_FUNCTION, UNKNOWN_TYPE,
)
from flannel.std import populate_builtins
from flannel.types import FlnClass, FlnObject


class Runtime:
    """Registries shared by one interpreter: classes, functions and constants.

    Each `Interpreter` owns its own `Runtime`, so separate interpreters
    never see each other's declarations.
    """
    def __init__(self):
        self.classes: Dict[str, FlnClass] = {}
        self.functions: Dict[str, Any] = {}
        self.constants: Dict[str, FlnObject] = {}
        # Set by populate_builtins
        self.obj_class: FlnClass
        self.und_class: FlnClass
        self.bln_class: FlnClass
        self.int_class: FlnClass
        self.flt_class: FlnClass
        self.str_class: FlnClass
        populate_builtins(self)

    # Classes
    def register_class(self, cls: FlnClass) -> None:
        self.classes[cls.name] = cls

    def get_class(self, name: str) -> FlnClass:
        if name not in self.classes:
            raise FlannelError(UNKNOWN_TYPE, f"Type `{name}` does not exist.")
        return self.classes[name]

    # Functions
    def register_function(self, function: Any) -> None:
        self.functions[function.name] = function

    def get_function(self, name: str) -> Any:
        if name not in self.functions:
            raise FlannelError(UNKNOWN_FUNCTION, f"Function `{name}` does not exist.")
        return self.functions[name]

    def get_constant(self, name: str) -> FlnObject:
        if name not in self.constants:
            raise FlannelError(UNBOUND_VARIABLE, f"Constant `{name}` does not exist.")
        return self.constants[name]

    # Value constructors
    def make_bln(self, value: bool) -> FlnObject:
        return FlnObject(self.bln_class, bool(value))

    def make_int(self, value: int) -> FlnObject:
        return FlnObject(self.int_class, value)

    def make_flt(self, value: float) -> FlnObject:
        return FlnObject(self.flt_class, value)

    def make_str(self, value: str) -> FlnObject:
        return FlnObject(self.str_class, value)
