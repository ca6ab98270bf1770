"""I/O utilities: filesystem operations and saved selections."""

from infrastructure.io.fs import ensure_exists, write_json
from infrastructure.io.selection import read_selection

__all__ = [
    "ensure_exists",
    "write_json",
    "read_selection",
]
