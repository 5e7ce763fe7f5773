"""
Value semantics for data bag entries.

Data bags hold JSON-like values (str, int, float, bool, None, lists and
mappings). Templates treat them with loose-falsy rules: ``0``, ``"0"``, empty
strings and empty collections count as empty.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Union

Value = Union[str, int, float, bool, None, List[Any], Dict[str, Any]]

_NUMERIC_RE = re.compile(r"^[ \t\n\r\v\f]*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?[ \t\n\r\v\f]*$")


class _Missing:
    """Marker for a path that does not resolve."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def is_empty(value: Any) -> bool:
    """Return True for absent, None, False, 0, "0", "" and empty collections."""
    if value is MISSING or value is None or value is False:
        return True
    if isinstance(value, str):
        return value == "" or value == "0"
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    try:
        return len(value) == 0
    except TypeError:
        return not value


def is_numeric(value: Any) -> bool:
    """True for ints, floats and numeric strings; booleans are not numeric."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        return bool(_NUMERIC_RE.match(value))
    return False


def to_text(value: Any) -> str:
    """
    Stringify a scalar the way templates print it.

    ``True`` becomes ``"1"``, ``False``/``None``/missing become ``""`` and
    integral floats lose their fraction part. Collections have no text form
    and become ``""``.
    """
    if value is MISSING or value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (list, tuple, dict, set)):
        return ""
    return str(value)
