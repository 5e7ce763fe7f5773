"""Markup composition helpers."""

from .classes import attributes_string, class_list, style_string
from .elements import AnchorElement, Element, TagElement, heading, maybe_anchor
from .text import join_non_empty

__all__ = [
    "attributes_string",
    "class_list",
    "style_string",
    "AnchorElement",
    "Element",
    "TagElement",
    "heading",
    "maybe_anchor",
    "join_non_empty",
]
