from dataclasses import dataclass
from typing import Any, List, Optional

from flannel.errors import FlannelError, ARGUMENT_MISMATCH


@dataclass
class BuiltinFunction:
    """A method implemented in Python and attached to a built-in class.

    `fn` is called as ``fn(interp, receiver, args)`` and must return a
    `FlnObject`. An arity of None means any number of arguments.
    """
    name: str
    arity: Optional[int]
    fn: Any

    def call(self, interp: Any, receiver: Any, args: List[Any]) -> Any:
        if self.arity is not None and len(args) != self.arity:
            raise FlannelError(
                ARGUMENT_MISMATCH,
                f"`{self.name}` expects {self.arity} arguments but got {len(args)}.",
            )
        return self.fn(interp, receiver, args)

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
