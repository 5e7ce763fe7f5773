"""
Image rendering.

Three presentation modes, each building on the previous one:

- plain image: a single ``<img>`` from an attachment id, a URL or a
  ``{url, alt}`` record;
- responsive image: a ``<picture>`` with one ``<source>`` per breakpoint and
  the plain image as fallback;
- advanced image: the responsive image inside a styled container carrying
  sizing, object-fit, display and focal point settings.

Missing or malformed data never raises; the affected fragment is empty.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ..compose.classes import attributes_string, class_list, style_string
from ..config import HelperConfig
from ..data.values import MISSING, is_empty, is_numeric, to_text
from ..escaping.escapers import DEFAULT_ESCAPERS, Escapers
from ..media.host import ImageHost, ImageSize, NullImageHost

logger = logging.getLogger(__name__)

MEDIA_PREFIX = "@media "
DEFAULT_FOCAL_POINT = "50%"


class ImageSizing(str, Enum):
    """Sizing options of the advanced image."""

    NATURAL = "width-auto-height-auto"
    FULL_WIDTH = "width-full-height-auto"
    FULL_HEIGHT = "width-auto-height-full"
    FULL_BOTH = "width-full-height-full"

    @classmethod
    def parse(cls, value: Any) -> "ImageSizing":
        """Accept stored values and short aliases; anything else is natural."""
        if isinstance(value, cls):
            return value
        text = to_text(value).strip().lower()
        aliases = {
            "natural": cls.NATURAL,
            "full-width": cls.FULL_WIDTH,
            "full-height": cls.FULL_HEIGHT,
            "full-both": cls.FULL_BOTH,
        }
        if text in aliases:
            return aliases[text]
        try:
            return cls(text)
        except ValueError:
            return cls.NATURAL

    def modifiers(self) -> List[str]:
        return {
            ImageSizing.NATURAL: [],
            ImageSizing.FULL_WIDTH: ["full-width"],
            ImageSizing.FULL_HEIGHT: ["full-height"],
            ImageSizing.FULL_BOTH: ["full-width", "full-height"],
        }[self]


@dataclass
class ResponsiveImageData:
    """Base image descriptor plus the rendered ``<source>`` tags."""

    base_img: Any = None
    source_tags: List[str] = field(default_factory=list)


@dataclass
class AdvancedImageData:
    """Container settings around a responsive image."""

    container_classes: str
    container_styles: str
    picture: ResponsiveImageData
    container_id: str = ""


def _focal_value(group: Mapping, key: str) -> str:
    value = group.get(key, MISSING)
    if value is MISSING or value is None:
        return DEFAULT_FOCAL_POINT
    if is_numeric(value):
        return f"{to_text(value).strip()}%"
    return to_text(value)


class ImageRenderer:
    """
    Renders image markup from descriptors and image configuration groups.

    Attachment lookups go through the injected ``ImageHost``.
    """

    def __init__(self, host: Optional[ImageHost] = None,
                 escapers: Optional[Escapers] = None,
                 config: Optional[HelperConfig] = None):
        self.host = host or NullImageHost()
        self.escapers = escapers or DEFAULT_ESCAPERS
        self.config = config or HelperConfig()

    # ------------------------------------------------------------------
    # Plain image
    # ------------------------------------------------------------------
    def render_img(self, descriptor: Any, size: Optional[ImageSize] = None,
                   attributes: Union[str, Dict[str, Any], None] = "") -> str:
        """
        Render a single ``<img>``.

        Args:
            descriptor: Attachment id, URL or ``{"url": ..., "alt": ...}``
            size: Host size name (ids only)
            attributes: Attribute string or mapping; a mapping ``alt`` is
                used when the descriptor has none

        Returns:
            Image markup or ``""``
        """
        if is_empty(descriptor):
            return ""

        size = size or self.config.default_image_size

        if is_numeric(descriptor):
            return self.host.render_attachment(descriptor, size, attributes)

        fallback_alt = attributes.get("alt", "") if isinstance(attributes, Mapping) else ""

        if isinstance(descriptor, Mapping):
            url = descriptor.get("url")
            alt = descriptor.get("alt")
            if alt is None:
                alt = fallback_alt
        elif isinstance(descriptor, str):
            url = descriptor
            alt = fallback_alt
        else:
            logger.debug(f"Unsupported image descriptor: {type(descriptor).__name__}")
            return ""

        if not isinstance(url, str) or not url:
            return ""

        parts = [
            f'src="{self.escapers.url(url)}"',
            f'alt="{self.escapers.attr(to_text(alt))}"',
        ]

        if isinstance(attributes, Mapping):
            extra = attributes_string(
                {name: value for name, value in attributes.items() if name != "alt"},
                self.escapers.attr,
            )
        elif isinstance(attributes, str):
            extra = attributes.strip()
        else:
            extra = ""

        if extra:
            parts.append(extra)

        return f"<img {' '.join(parts)}>"

    # ------------------------------------------------------------------
    # Responsive image
    # ------------------------------------------------------------------
    def source_tag(self, attachment_id: Any, media_query: Any = "") -> str:
        """Render a ``<source>`` for an attachment, or ``""`` if it cannot be resolved."""
        if is_empty(attachment_id):
            return ""

        image = self.host.get_image_src(attachment_id, "full")
        if not image:
            logger.debug(f"No image source for attachment {attachment_id}")
            return ""

        metadata = self.host.get_metadata(attachment_id)
        size_array = (abs(int(image.width or 0)), abs(int(image.height or 0)))

        srcset = self.host.calculate_srcset(size_array, image.src, metadata, attachment_id)
        sizes = self.host.calculate_sizes(size_array, image.src, metadata, attachment_id)
        hwstring = self.host.hwstring(image.width, image.height)

        media = to_text(media_query)
        if media.startswith(MEDIA_PREFIX):
            media = media[len(MEDIA_PREFIX):]

        parts = [
            f'media="{self.escapers.attr(media)}"',
            f'srcset="{self.escapers.attr(srcset or image.src)}"',
        ]
        if sizes:
            parts.append(f'sizes="{self.escapers.attr(sizes)}"')
        if hwstring:
            parts.append(hwstring)

        return f"<source {' '.join(parts)}>"

    def responsive_data(self, group: Mapping) -> ResponsiveImageData:
        """Collect the base image and render the source tags of a group."""
        sources = group.get("sources") or []
        if not isinstance(sources, (list, tuple)):
            sources = []

        tags = []
        for source in sources:
            if not isinstance(source, Mapping):
                continue
            tag = self.source_tag(source.get("img_id"), source.get("media_query") or "")
            if tag:
                tags.append(tag)

        return ResponsiveImageData(base_img=group.get("base_img"), source_tags=tags)

    def render_picture(self, data: ResponsiveImageData) -> str:
        parts = ["<picture>", *data.source_tags]
        img = self.render_img(data.base_img)
        if img:
            parts.append(img)
        parts.append("</picture>")
        return "\n".join(parts)

    def render_responsive(self, group: Any) -> str:
        """
        Render a ``<picture>`` for a responsive image group.

        A non-empty value without a ``base_img`` is rendered as a plain image.
        """
        base_img = group.get("base_img") if isinstance(group, Mapping) else None

        if is_empty(base_img) and not is_empty(group):
            return self.render_img(group)

        if is_empty(group):
            return ""

        return self.render_picture(self.responsive_data(group))

    # ------------------------------------------------------------------
    # Advanced image
    # ------------------------------------------------------------------
    def advanced_data(self, group: Mapping) -> AdvancedImageData:
        """Derive container classes and styles from an advanced image group."""
        prefix = self.config.image_class_prefix
        sizing = ImageSizing.parse(group.get("sizing"))

        custom_width = group.get("custom_width")
        custom_height = group.get("custom_height")
        object_fit = group.get("object_fit")
        display = group.get("display")

        styles = {
            "--width": to_text(custom_width) if not is_empty(custom_width) else "",
            "--height": to_text(custom_height) if not is_empty(custom_height) else "",
            "--focal-x": _focal_value(group, "focal_x"),
            "--focal-y": _focal_value(group, "focal_y"),
        }

        modifiers = {
            f"{prefix}--constrained": not is_empty(custom_width) or not is_empty(custom_height),
            f"{prefix}--cover": object_fit == "cover",
            f"{prefix}--contain": object_fit == "contain",
            f"{prefix}--block": display == "block",
            f"{prefix}--inline-block": display == "inline-block",
            f"{prefix}--has-focal": "focal_x" in group or "focal_y" in group,
        }

        classes = class_list([
            prefix,
            [f"{prefix}--{name}" for name in sizing.modifiers()],
            modifiers,
        ])

        return AdvancedImageData(
            container_classes=classes,
            container_styles=style_string(styles, self.escapers.attr),
            picture=self.responsive_data(group),
            container_id=to_text(group.get("id")),
        )

    def render_container(self, data: AdvancedImageData, content: Optional[str] = None) -> str:
        """Wrap ``content`` (the rendered picture by default) in the styled container."""
        if content is None:
            content = self.render_picture(data.picture)

        attrs = []
        if data.container_id:
            attrs.append(f'id="{self.escapers.attr(data.container_id)}"')
        attrs.append(f'class="{self.escapers.attr(data.container_classes)}"')
        attrs.append(f'style="{data.container_styles}"')

        return "\n".join([
            f"<div {' '.join(attrs)}>",
            content,
            "</div>",
        ])

    def render_advanced(self, group: Any) -> str:
        """
        Render an advanced image group inside its styled container.

        Like ``render_responsive``, a value without a ``base_img`` (a bare
        URL, an id or a ``{url, alt}`` record) is rendered as a plain image.
        Bare values get a container with the default settings.
        """
        if is_empty(group):
            return ""

        settings = group if isinstance(group, Mapping) else {}
        data = self.advanced_data(settings)

        if is_empty(settings.get("base_img")):
            content = self.render_img(group)
            if not content:
                logger.debug(f"Nothing to render for advanced image: {type(group).__name__}")
                return ""
            return self.render_container(data, content)

        return self.render_container(data)

    def advanced_css(self) -> str:
        """Stylesheet for the classes emitted by ``render_advanced``."""
        prefix = self.config.image_class_prefix
        if prefix == "lx-img":
            return ADVANCED_IMG_CSS
        return ADVANCED_IMG_CSS.replace("lx-img", prefix)


ADVANCED_IMG_CSS = """\
.lx-img {
    --width: auto;
    --height: auto;
    --focal-x: 50%;
    --focal-y: 50%;
    position: relative;
    display: inline-block;
}

.lx-img img {
    max-width: 100%;
    height: auto;
}

.lx-img.lx-img--full-width,
.lx-img.lx-img--full-width img {
    width: 100%;
}

.lx-img.lx-img--full-height,
.lx-img.lx-img--full-height img {
    height: 100%;
}

.lx-img.lx-img--constrained {
    width: var(--width, auto);
    height: var(--height, auto);
}

.lx-img.lx-img--constrained img {
    width: 100%;
    height: 100%;
}

.lx-img.lx-img--cover img {
    object-fit: cover;
}

.lx-img.lx-img--contain img {
    object-fit: contain;
}

.lx-img.lx-img--has-focal img {
    object-position: var(--focal-x, 50%) var(--focal-y, 50%);
}

.lx-img.lx-img--block {
    display: block;
}

.lx-img.lx-img--inline-block {
    display: inline-block;
}

.lx-img picture {
    display: block;
    width: 100%;
    height: 100%;
}

.lx-img source {
    width: 100%;
    height: 100%;
}
"""
