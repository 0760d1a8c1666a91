from typing import Any, Dict, Optional

from flannel.errors import FlannelError, UNBOUND_VARIABLE
from flannel.types import FlnObject


class Context:
    """Local bindings for one statement list plus an optional receiver.

    A context has no parent: the top-level program gets one, and every
    function or method call gets a fresh one. Names that are not local
    fall back to the receiver's properties and then to the runtime's
    constants (such as `und`).
    """
    def __init__(self, runtime: Any, receiver: Optional[FlnObject] = None):
        self.runtime = runtime
        self.receiver = receiver
        self.values: Dict[str, FlnObject] = {}

    def declare(self, name: str, value: FlnObject) -> None:
        # shadowing is allowed
        self.values[name] = value

    def update(self, name: str, value: FlnObject) -> None:
        if name in self.values:
            self.values[name] = value
            return
        if self.receiver is not None and self.receiver.has_property(name):
            self.receiver.set_property(name, value)
            return
        raise FlannelError(UNBOUND_VARIABLE, f"Variable `{name}` was never declared.")

    def resolve(self, name: str) -> FlnObject:
        if name in self.values:
            return self.values[name]
        if self.receiver is not None:
            if name == 'this':
                return self.receiver
            if self.receiver.has_property(name):
                return self.receiver.get_property(name)
        if name in self.runtime.constants:
            return self.runtime.constants[name]
        raise FlannelError(UNBOUND_VARIABLE, f"Variable `{name}` was never declared.")

    def get_constant(self, name: str) -> FlnObject:
        return self.runtime.get_constant(name)
