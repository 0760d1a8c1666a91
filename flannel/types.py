"""Runtime object model for FlannelScript.

Every FlannelScript value is a `FlnObject`: a reference to the class it
was built from plus either a primitive payload (for the built-in classes
`Bln`, `Int`, `Flt`, `Str` and `Und`) or a property mapping (for
instances of user-defined classes).

Classes are described by `FlnClass`. They are compared by identity, so a
value only satisfies a type annotation when its class *is* the class the
annotation names; a subclass instance does not. Redeclaring a class
creates a new descriptor, so objects built from the old one keep it.

Functions and methods declared in source are `FunctionValue`s; methods
implemented in Python are `BuiltinFunction`s. Both expose
``call(interp, receiver, args)``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .ast import Block
from .errors import (
    FlannelError, ARGUMENT_MISMATCH, INVALID_CONSTRUCTION, UNKNOWN_METHOD,
    UNKNOWN_PROPERTY,
)


class FlnClass:
    """A registered FlannelScript class."""
    def __init__(
        self,
        name: str,
        parent: Optional['FlnClass'] = None,
        overrides: Optional[Dict[str, 'FlnObject']] = None,
        defaults: Optional[Dict[str, 'FlnObject']] = None,
        methods: Optional[Dict[str, Any]] = None,
        builtin: bool = False,
    ):
        self.name = name
        self.parent = parent
        self.overrides: Dict[str, FlnObject] = dict(overrides or {})
        self.defaults: Dict[str, FlnObject] = dict(defaults or {})
        self.methods: Dict[str, Any] = dict(methods or {})
        self.builtin = builtin

    def find_method(self, name: str) -> Any:
        cls: Optional[FlnClass] = self
        while cls is not None:
            if name in cls.methods:
                return cls.methods[name]
            cls = cls.parent
        return None

    def default_properties(self) -> Dict[str, 'FlnObject']:
        """Merge inherited defaults: parent first, then overrides, then own defaults."""
        props = self.parent.default_properties() if self.parent is not None else {}
        props.update(self.overrides)
        props.update(self.defaults)
        return props

    def create_object(self, interp: Any, args: List['FlnObject']) -> 'FlnObject':
        if self.builtin:
            raise FlannelError(
                INVALID_CONSTRUCTION,
                f"Built-in class `{self.name}` cannot be constructed with `new`.",
            )
        obj = FlnObject(self, properties=self.default_properties())
        if self.find_method('construct') is not None:
            obj.call_method(interp, 'construct', args)
        elif args:
            raise FlannelError(
                ARGUMENT_MISMATCH,
                f"`{self.name}` has no `construct` method but was given {len(args)} arguments.",
            )
        return obj

    def __repr__(self) -> str:
        return f"<class {self.name}>"


@dataclass(eq=False)
class FlnObject:
    """A runtime value. Equality in Python is identity."""
    cls: FlnClass
    value: Any = None
    properties: Dict[str, 'FlnObject'] = field(default_factory=dict)

    def get_property(self, name: str) -> 'FlnObject':
        if name not in self.properties:
            raise FlannelError(
                UNKNOWN_PROPERTY,
                f"`{self.cls.name}` has no property `{name}`.",
            )
        return self.properties[name]

    def has_property(self, name: str) -> bool:
        return name in self.properties

    def set_property(self, name: str, value: 'FlnObject') -> None:
        if name not in self.properties:
            raise FlannelError(
                UNKNOWN_PROPERTY,
                f"`{self.cls.name}` has no property `{name}`.",
            )
        self.properties[name] = value

    def call_method(self, interp: Any, name: str, args: List['FlnObject']) -> 'FlnObject':
        method = self.cls.find_method(name)
        if method is None:
            raise FlannelError(
                UNKNOWN_METHOD,
                f"`{self.cls.name}` has no method `{name}`.",
            )
        return method.call(interp, self, args)

    def __repr__(self) -> str:
        if self.cls.builtin:
            return f"{self.cls.name}({self.value!r})"
        return f"{self.cls.name}({self.properties!r})"


class FunctionValue:
    """Represents a user-defined FlannelScript function or method."""
    def __init__(
        self,
        name: str,
        params: List[Tuple[str, FlnClass]],
        return_type: FlnClass,
        body: Block,
    ):
        self.name = name
        self.params = params
        self.return_type = return_type
        self.body = body

    def call(self, interp: Any, receiver: Optional[FlnObject], args: List[FlnObject]) -> FlnObject:
        return interp.call_function(self, receiver, args)

    def __repr__(self) -> str:
        return f"<function {self.name}>"
