from typing import Any

from .core import populate_core
from .numbers import populate_numbers
from .text import populate_text


def populate_builtins(runtime: Any) -> None:
    """Install the built-in classes and constants into `runtime`."""
    populate_core(runtime)
    populate_numbers(runtime)
    populate_text(runtime)
