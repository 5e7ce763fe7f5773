"""
Wrapper elements and headings.

``maybe_anchor`` returns an element that opens and closes either an ``<a>``
(when a link is given) or a fallback tag, so templates can wrap content
without branching twice::

    element = maybe_anchor(card_url, {"class": "card"})
    element.open(out)
    ...
    element.close(out)
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, Optional, TextIO, Union

from ..config import DEFAULT_HEADING_TAGS
from ..data.values import to_text
from ..escaping.escapers import DEFAULT_ESCAPERS, Escapers
from .classes import attributes_string

Attributes = Union[str, Mapping, None]


def _attributes_fragment(attributes: Attributes, escapers: Escapers = DEFAULT_ESCAPERS) -> str:
    if isinstance(attributes, Mapping):
        return attributes_string(attributes, escapers.attr)
    if isinstance(attributes, str):
        return attributes.strip()
    return ""


def _sink(out: Optional[TextIO]) -> TextIO:
    return sys.stdout if out is None else out


def _opening_tag(tag: str, attributes: str) -> str:
    if attributes:
        return f"<{tag} {attributes}>"
    return f"<{tag}>"


@dataclass(frozen=True)
class AnchorElement:
    """Link wrapper: ``<a href="...">`` ... ``</a>``."""

    href: str
    attributes: str = ""

    @property
    def opening(self) -> str:
        return _opening_tag(f'a href="{self.href}"', self.attributes)

    @property
    def closing(self) -> str:
        return "</a>"

    def open(self, out: Optional[TextIO] = None) -> None:
        _sink(out).write(self.opening)

    def close(self, out: Optional[TextIO] = None) -> None:
        _sink(out).write(self.closing)


@dataclass(frozen=True)
class TagElement:
    """Plain wrapper used when there is no link."""

    tag: str = "div"
    attributes: str = ""

    @property
    def opening(self) -> str:
        return _opening_tag(self.tag, self.attributes)

    @property
    def closing(self) -> str:
        return f"</{self.tag}>"

    def open(self, out: Optional[TextIO] = None) -> None:
        _sink(out).write(self.opening)

    def close(self, out: Optional[TextIO] = None) -> None:
        _sink(out).write(self.closing)


Element = Union[AnchorElement, TagElement]


def maybe_anchor(link: Any, attributes: Attributes = "", fallback_tag: str = "div",
                 escapers: Optional[Escapers] = None) -> Element:
    """
    Build an anchor element when ``link`` is non-empty, else a ``fallback_tag`` element.

    Args:
        link: Link target; non-string values count as no link
        attributes: Attribute string or ``{name: value}`` mapping
        fallback_tag: Tag used without a link
        escapers: Escapers for the href and mapping attributes (defaults to the built-in set)

    Returns:
        ``AnchorElement`` or ``TagElement``
    """
    escapers = escapers or DEFAULT_ESCAPERS
    fragment = _attributes_fragment(attributes, escapers)

    if isinstance(link, str) and link:
        return AnchorElement(href=escapers.url(link), attributes=fragment)

    return TagElement(tag=fallback_tag, attributes=fragment)


def heading(tag: str, content: Any, attributes: Attributes = None,
            allowed_tags: Iterable[str] = DEFAULT_HEADING_TAGS,
            escapers: Optional[Escapers] = None) -> str:
    """
    Render ``content`` inside a heading-like tag.

    Tags outside ``allowed_tags`` fall back to ``div``. Content is emitted
    as given (it is not escaped).
    """
    if tag not in allowed_tags:
        tag = "div"

    opening = _opening_tag(tag, _attributes_fragment(attributes, escapers or DEFAULT_ESCAPERS))
    return f"{opening}{to_text(content)}</{tag}>"
