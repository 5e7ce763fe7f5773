"""Data bag access and value semantics."""

from .accessor import NestedAccessor, resolve_path
from .values import MISSING, Value, is_empty, is_numeric, to_text

__all__ = [
    "NestedAccessor",
    "resolve_path",
    "MISSING",
    "Value",
    "is_empty",
    "is_numeric",
    "to_text",
]
