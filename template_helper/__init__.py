"""
Template helper - escaping, class composition and image markup for templates.

This package wraps a nested data bag and provides what server-side templates
need to print it safely:

- Dotted-path lookups (``get``, ``has``, ``empty``, ``not_empty``)
- Escaping per output context (attribute, URL, HTML, post HTML, JS, XML)
- Class list, inline style and attribute string composition
- Anchor-or-fallback wrapper elements and headings
- Image markup: plain ``<img>``, responsive ``<picture>``, advanced container

Quick Start:
    from template_helper import TemplateHelper, MediaLibrary

    library = MediaLibrary()
    library.add(12, "https://cdn.example/hero.jpg", 1600, 900, alt="Hero")

    helper = TemplateHelper({"hero": {"base_img": 12, "sizing": "width-full-height-auto"}},
                            image_host=library)
    html = helper.advanced_img("hero")
"""

from .version import __version__, __version_info__

from .exceptions import (
    TemplateHelperError,
    UnsupportedOperationError,
    ConfigurationError,
    MediaError,
)

from .config import HelperConfig
from .data import MISSING, NestedAccessor, is_empty, is_numeric, to_text
from .escaping import DEFAULT_ESCAPERS, Escapers
from .compose import (
    AnchorElement,
    TagElement,
    attributes_string,
    class_list,
    heading,
    join_non_empty,
    maybe_anchor,
    style_string,
)
from .media import ImageHost, ImageSource, MediaLibrary, NullImageHost
from .render import ADVANCED_IMG_CSS, ImageRenderer, ImageSizing
from .helper import TemplateHelper

__all__ = [
    "__version__",
    "__version_info__",
    "TemplateHelperError",
    "UnsupportedOperationError",
    "ConfigurationError",
    "MediaError",
    "HelperConfig",
    "MISSING",
    "NestedAccessor",
    "is_empty",
    "is_numeric",
    "to_text",
    "DEFAULT_ESCAPERS",
    "Escapers",
    "AnchorElement",
    "TagElement",
    "attributes_string",
    "class_list",
    "heading",
    "join_non_empty",
    "maybe_anchor",
    "style_string",
    "ImageHost",
    "ImageSource",
    "MediaLibrary",
    "NullImageHost",
    "ADVANCED_IMG_CSS",
    "ImageRenderer",
    "ImageSizing",
    "TemplateHelper",
]
