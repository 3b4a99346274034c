"""Platform abstraction layer."""

from .files import FORMULA_FILE_MODE, atomic_write_text

__all__ = [
    "FORMULA_FILE_MODE",
    "atomic_write_text",
]
