"""
Template helper facade.

``TemplateHelper`` wraps one data bag and gives templates everything they
need to print it: dotted-path lookups, escaping per output context, class
and attribute composition, wrapper elements and image markup.

Every string-producing method has an ``echo_*`` twin that writes the same
string to the helper's output sink (``sys.stdout`` unless another stream is
given).

Example:
    helper = TemplateHelper({"card": {"title": "Hello", "link": "/hello"}})
    helper.html("card.title")               # 'Hello'
    TemplateHelper.class_list("card", {"card--linked": helper.not_empty("card.link")})
"""

from __future__ import annotations

import sys
import uuid
from collections.abc import Mapping
from pprint import pformat
from typing import Any, Dict, Iterable, Optional, TextIO, Union

from .compose import classes, elements
from .compose.text import join_non_empty
from .config import HelperConfig
from .data.accessor import NestedAccessor
from .data.values import MISSING, to_text
from .escaping.escapers import DEFAULT_ESCAPERS, Escapers
from .escaping.facade import EscapingMixin
from .media.host import ImageHost, ImageSize
from .render.images import ImageRenderer

Attributes = Union[str, Dict[str, Any], None]


class TemplateHelper(NestedAccessor, EscapingMixin):
    """
    Data bag wrapper with escaping and markup helpers.

    Pure helpers (``class_list``, ``style_string``, ``attributes_string``,
    ``maybe_anchor``, ``join_non_empty``) are static and can be called on
    the class or on an instance.
    """

    class_list = staticmethod(classes.class_list)
    style_string = staticmethod(classes.style_string)
    attributes_string = staticmethod(classes.attributes_string)
    maybe_anchor = staticmethod(elements.maybe_anchor)
    join_non_empty = staticmethod(join_non_empty)

    def __init__(self, data: Optional[Dict[str, Any]] = None, *,
                 config: Optional[HelperConfig] = None,
                 escapers: Optional[Escapers] = None,
                 image_host: Optional[ImageHost] = None,
                 out: Optional[TextIO] = None,
                 id_prefix: Optional[str] = None):
        """
        Initialize helper.

        Args:
            data: Data bag
            config: Helper configuration
            escapers: Escaping functions (defaults to the built-in set)
            image_host: Attachment lookups for image rendering
            out: Output sink for the ``echo_*`` methods
            id_prefix: Prefix for ``element_id``; random when omitted
        """
        super().__init__(data)
        self.config = config or HelperConfig()
        self.separator = self.config.separator
        self.escapers = escapers or DEFAULT_ESCAPERS
        self.out = out if out is not None else sys.stdout
        self.images = ImageRenderer(image_host, self.escapers, self.config)

        if id_prefix is None:
            self.regenerate_id_prefix()
        else:
            self.id_prefix = id_prefix

    @classmethod
    def from_object(cls, obj: Any, **kwargs) -> "TemplateHelper":
        """Build a helper from an object's attributes (or a mapping)."""
        if isinstance(obj, Mapping):
            return cls(dict(obj), **kwargs)
        return cls(dict(vars(obj)), **kwargs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(keys={list(self._data)!r})"

    # ------------------------------------------------------------------
    # Element ids
    # ------------------------------------------------------------------
    def regenerate_id_prefix(self) -> None:
        """Replace the id prefix with a new random one."""
        self.id_prefix = uuid.uuid4().hex[: self.config.id_prefix_length] + "-"

    def element_id(self, name: str) -> str:
        """Attribute-escaped id scoped to this helper instance."""
        return self.escapers.attr(self.id_prefix + name)

    def echo_id(self, name: str) -> None:
        self.echo(self.element_id(name))

    # ------------------------------------------------------------------
    # Markup
    # ------------------------------------------------------------------
    def heading(self, tag: str, path: str, attributes: Attributes = None) -> str:
        """Wrap the value at ``path`` in ``tag`` (unescaped)."""
        return elements.heading(tag, self.get(path), attributes, self.config.heading_tags, self.escapers)

    def echo_heading(self, tag: str, path: str, attributes: Attributes = None) -> None:
        self.echo(self.heading(tag, path, attributes))

    def wrapper(self, path: str, attributes: Attributes = "",
                fallback_tag: Optional[str] = None) -> elements.Element:
        """``maybe_anchor`` for the link stored at ``path``."""
        return elements.maybe_anchor(
            self.get(path), attributes, fallback_tag or self.config.fallback_tag, self.escapers
        )

    def link(self, path: str, text: Optional[str] = None, attributes: Attributes = "") -> str:
        """
        Render a link stored at ``path``.

        A string value needs ``text``. A mapping value provides ``url``,
        ``title`` (falls back to ``text``) and ``target`` (default ``_self``).
        """
        value = self.get_nested(path)

        if isinstance(value, str):
            if text is None or not value:
                return ""
            return f'<a href="{self.escapers.url(value)}">{text}</a>'

        if not isinstance(value, Mapping):
            return ""

        url = value.get("url")
        title = value.get("title")
        label = text if title is None else title
        if not url or label is None:
            return ""

        target = value.get("target")
        if target is None:
            target = "_self"

        parts = [
            f'href="{self.escapers.url(to_text(url))}"',
            f'target="{self.escapers.attr(to_text(target))}"',
        ]
        if isinstance(attributes, Mapping):
            extra = classes.attributes_string(attributes, self.escapers.attr)
        else:
            extra = (attributes or "").strip()
        if extra:
            parts.append(extra)

        return f"<a {' '.join(parts)}>{to_text(label)}</a>"

    def echo_link(self, path: str, text: Optional[str] = None, attributes: Attributes = "") -> None:
        self.echo(self.link(path, text, attributes))

    def with_line_breaks(self, lines: Iterable[Any], separator: Optional[str] = None) -> str:
        """Join the non-empty lines with ``<br/>`` (or ``separator``)."""
        if separator is None:
            separator = self.config.line_separator
        return join_non_empty(lines, separator)

    def echo_with_line_breaks(self, lines: Iterable[Any], separator: Optional[str] = None) -> None:
        self.echo(self.with_line_breaks(lines, separator))

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------
    def img(self, path: str, size: Optional[ImageSize] = None, attributes: Attributes = "") -> str:
        """Render the image descriptor at ``path`` as ``<img>``."""
        return self.images.render_img(self.get_nested(path), size, attributes)

    def echo_img(self, path: str, size: Optional[ImageSize] = None, attributes: Attributes = "") -> None:
        self.echo(self.img(path, size, attributes))

    def responsive_img(self, path: str) -> str:
        """
        Render the responsive image group at ``path`` as ``<picture>``.

        Expected structure::

            {
                "base_img": 12 | "https://..." | {"url": "...", "alt": "..."},
                "sources": [{"img_id": 34, "media_query": "(min-width: 768px)"}],
            }
        """
        return self.images.render_responsive(self.get_nested(path))

    def echo_responsive_img(self, path: str) -> None:
        self.echo(self.responsive_img(path))

    def advanced_img(self, path: str) -> str:
        """
        Render the advanced image group at ``path``.

        Besides the responsive image keys the group may hold ``sizing``,
        ``custom_width``, ``custom_height``, ``focal_x``, ``focal_y``,
        ``object_fit`` (``cover``/``contain``) and ``display``
        (``block``/``inline-block``).
        """
        return self.images.render_advanced(self.get_nested(path))

    def echo_advanced_img(self, path: str) -> None:
        self.echo(self.advanced_img(path))

    def advanced_img_css(self) -> str:
        return self.images.advanced_css()

    # ------------------------------------------------------------------
    # Debugging
    # ------------------------------------------------------------------
    def dump(self, path: Optional[str] = None) -> None:
        """Write a readable view of the data bag (or one value) to the sink."""
        if not path:
            self.echo(pformat(self._data) + "\n")
            return

        value = self.get_nested(path)
        self.echo(("MISSING" if value is MISSING else pformat(value)) + "\n")
