"""
Dotted-path access to a nested data bag.

A path such as ``"hero.image.url"`` is split on the separator and applied
segment by segment. Lookups never raise: a missing segment, or a value that
cannot be indexed, resolves to ``MISSING``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Dict, Optional

from ..exceptions import UnsupportedOperationError
from .values import MISSING, is_empty

logger = logging.getLogger(__name__)


def resolve_path(data: Any, path: str, separator: str = ".") -> Any:
    """
    Walk ``data`` along a dotted path.

    Args:
        data: Root mapping
        path: Dotted path; an empty path never resolves
        separator: Segment separator

    Returns:
        Resolved value or ``MISSING``
    """
    if not isinstance(path, str) or path == "":
        return MISSING

    current = data
    for segment in path.split(separator):
        if isinstance(current, Mapping):
            if segment not in current:
                return MISSING
            current = current[segment]
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            # str.isdigit() also accepts non-ASCII digits that int() rejects
            if not (segment.isascii() and segment.isdigit()):
                return MISSING
            index = int(segment)
            if index >= len(current):
                return MISSING
            current = current[index]
        else:
            return MISSING

    return current


class NestedAccessor:
    """
    Owns a data bag and reads it through dotted paths.

    Writes are limited to top-level keys.
    """

    separator = "."

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(data) if data else {}

    @property
    def data(self) -> Dict[str, Any]:
        return self._data

    @data.setter
    def data(self, value: Dict[str, Any]) -> None:
        self.set_data(value)

    def set_data(self, data: Dict[str, Any]) -> None:
        """Replace the whole data bag."""
        if not isinstance(data, Mapping):
            raise TypeError(f"Data bag must be a mapping, got {type(data).__name__}")
        self._data = dict(data)
        logger.debug(f"Data bag replaced: {len(self._data)} top-level keys")

    def to_dict(self) -> Dict[str, Any]:
        """Return a shallow copy of the data bag."""
        return dict(self._data)

    def get_nested(self, path: str, separator: Optional[str] = None) -> Any:
        """Resolve ``path``, returning ``MISSING`` when it does not exist."""
        return resolve_path(self._data, path, separator or self.separator)

    def get(self, path: str, separator: Optional[str] = None) -> Any:
        """
        Get a value by dotted path.

        Args:
            path: Dotted path, e.g. ``"parent.child"``
            separator: Overrides the accessor separator

        Returns:
            The resolved value, or ``""`` when it is absent or None
        """
        value = self.get_nested(path, separator)
        if value is MISSING or value is None:
            return ""
        return value

    def has(self, path: str, separator: Optional[str] = None) -> bool:
        """True if every segment of ``path`` exists, whatever the final value is."""
        return self.get_nested(path, separator) is not MISSING

    def empty(self, path: str, separator: Optional[str] = None) -> bool:
        return is_empty(self.get_nested(path, separator))

    def not_empty(self, path: str, separator: Optional[str] = None) -> bool:
        return not self.empty(path, separator)

    def set(self, key: str, value: Any) -> None:
        """
        Set a top-level value.

        Raises:
            UnsupportedOperationError: if ``key`` is a nested path
        """
        if self.separator in key:
            raise UnsupportedOperationError("Setting a nested key is not supported", key)
        self._data[key] = value

    # Mapping-style access
    def __getitem__(self, path: str) -> Any:
        value = self.get_nested(path)
        return None if value is MISSING else value

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        return self.not_empty(path)
