"""I/O utilities: filesystem checks, bundled data and table writing."""

from infrastructure.io.bundled import BUNDLED_DIET_TEXTS, BUNDLED_GROUP_TEXTS
from infrastructure.io.datasets import write_table
from infrastructure.io.fs import ensure_exists, read_text

__all__ = [
    "ensure_exists",
    "read_text",
    "write_table",
    "BUNDLED_GROUP_TEXTS",
    "BUNDLED_DIET_TEXTS",
]
