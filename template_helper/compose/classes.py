"""
Class, style and attribute string composition.

``class_list`` follows the usual "classnames" rules::

    class_list("card", {"card--active": True, "card--muted": False}, ["a", ["b"]])
    # -> "card card--active a b"
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from ..data.values import is_empty, to_text
from ..escaping.escapers import EscapeFunc, esc_attr


def _class_names(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        # keys are taken literally, never expanded
        names = [str(name) for name, enabled in value.items() if not is_empty(enabled)]
        return " ".join(name for name in names if name)
    if isinstance(value, (list, tuple)):
        return " ".join(part for part in map(_class_names, value) if part)
    return ""


def class_list(*args: Any) -> str:
    """
    Join class names from strings, lists and ``{name: condition}`` mappings.

    Lists are resolved recursively; mapping keys are kept when their value is
    truthy. Empty parts are dropped before joining.
    """
    return " ".join(part for part in map(_class_names, args) if part)


def style_string(styles: Optional[Mapping[str, Any]], escape: EscapeFunc = esc_attr) -> str:
    """
    Serialize ``{property: value}`` into an inline style attribute value.

    Entries whose value is ``""`` or ``False`` are skipped; ``0`` and other
    values are kept. The result is attribute-escaped.
    """
    if not styles:
        return ""

    declarations = []
    for prop, value in styles.items():
        if value is False or (isinstance(value, str) and value == ""):
            continue
        declarations.append(f"{prop}: {to_text(value)};")

    return escape(" ".join(declarations))


def attributes_string(attributes: Optional[Mapping[str, Any]], escape: EscapeFunc = esc_attr) -> str:
    """
    Serialize ``{name: value}`` into ``name="value"`` pairs.

    Every entry is emitted, falsy values included: ``True`` becomes ``"1"``,
    ``False`` and ``None`` become ``""``.
    """
    if not attributes:
        return ""

    return " ".join(f'{name}="{escape(to_text(value))}"' for name, value in attributes.items())
