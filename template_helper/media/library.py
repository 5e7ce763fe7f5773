"""
In-memory media library.

Implements ``ImageHost`` over a registry of attachments, each with its full
size file and any number of named, generated sizes. Useful for rendering
outside the host platform (previews, the CLI, tests).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

from ..compose.classes import attributes_string
from ..data.values import is_numeric, to_text
from ..exceptions import MediaError
from .host import ImageHost, ImageSize, ImageSource

logger = logging.getLogger(__name__)

MAX_SRCSET_WIDTH = 2048


def _positive_int(value: Any) -> Optional[int]:
    """Return ``value`` as a positive integer, or None if it is not a finite whole number above 0."""
    if not is_numeric(value):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    number = float(value)
    if not math.isfinite(number) or not number.is_integer() or number <= 0:
        return None
    return int(number)


@dataclass(frozen=True)
class AttachmentSize:
    """One generated size of an attachment."""

    url: str
    width: int
    height: int


@dataclass
class Attachment:
    """Registered image with its generated sizes."""

    id: int
    url: str
    width: int
    height: int
    alt: str = ""
    sizes: Dict[str, AttachmentSize] = field(default_factory=dict)

    def size(self, name: ImageSize) -> AttachmentSize:
        """
        Pick the file for a size name or ``(width, height)`` pair.

        Unknown names resolve to the full size. For a pair, the smallest
        generated size at least as wide as requested wins.
        """
        full = AttachmentSize(self.url, self.width, self.height)
        if isinstance(name, str):
            return self.sizes.get(name, full)

        try:
            wanted = int(name[0])
        except (TypeError, ValueError, OverflowError, IndexError):
            return full

        candidates = sorted(
            (s for s in self.sizes.values() if s.width >= wanted),
            key=lambda s: s.width,
        )
        return candidates[0] if candidates else full


def _matches_ratio(width_a: int, height_a: int, width_b: int, height_b: int) -> bool:
    # The smaller image is scaled up to the larger one's width; allow 1px rounding error.
    if width_a > width_b:
        width_a, height_a, width_b, height_b = width_b, height_b, width_a, height_a
    if not width_a or not height_b:
        return False
    constrained_height = round(height_a * width_b / width_a)
    return abs(constrained_height - height_b) <= 1


class MediaLibrary(ImageHost):
    """
    Registry of attachments answering host image calls.

    Example:
        library = MediaLibrary()
        library.add(12, "https://cdn.example/hero.jpg", 1600, 900, alt="Hero",
                    sizes={"medium": ("https://cdn.example/hero-800.jpg", 800, 450)})
        library.get_image_src(12, "medium")
    """

    def __init__(self, attachments: Optional[Sequence[Attachment]] = None):
        self.attachments: Dict[int, Attachment] = {}
        for attachment in attachments or []:
            self.attachments[attachment.id] = attachment

        logger.debug("MediaLibrary initialized")

    @classmethod
    def from_dict(cls, data: Mapping) -> "MediaLibrary":
        """
        Build a library from ``{"attachments": [...]}`` as loaded from JSON.

        Each attachment has ``id``, ``url``, ``width``, ``height``, optional
        ``alt`` and optional ``sizes`` (``{name: {url, width, height}}``).
        """
        library = cls()
        for entry in data.get("attachments", []):
            sizes = {
                name: (size.get("url"), size.get("width"), size.get("height"))
                for name, size in (entry.get("sizes") or {}).items()
            }
            library.add(
                entry.get("id"),
                entry.get("url"),
                entry.get("width"),
                entry.get("height"),
                alt=entry.get("alt") or "",
                sizes=sizes,
            )
        return library

    def add(self, attachment_id: Any, url: str, width: Any, height: Any, alt: str = "",
            sizes: Optional[Mapping[str, Sequence[Any]]] = None) -> Attachment:
        """
        Register an attachment.

        Args:
            attachment_id: Positive integer id (numeric strings accepted)
            url: URL of the full size file
            width: Full width in pixels
            height: Full height in pixels
            alt: Alternative text
            sizes: ``{name: (url, width, height)}`` for generated sizes

        Returns:
            The registered attachment

        Raises:
            MediaError: if the id, url or any dimension is invalid
        """
        normalized_id = _positive_int(attachment_id)
        if normalized_id is None:
            raise MediaError("Attachment id must be a positive integer", repr(attachment_id))
        if not url or not isinstance(url, str):
            raise MediaError("Attachment url must be a non-empty string", f"id={attachment_id}")

        attachment = Attachment(
            id=normalized_id,
            url=url,
            width=self._dimension(width, attachment_id),
            height=self._dimension(height, attachment_id),
            alt=alt,
        )

        for name, (size_url, size_width, size_height) in (sizes or {}).items():
            if not size_url:
                raise MediaError(f"Size '{name}' has no url", f"id={attachment_id}")
            attachment.sizes[name] = AttachmentSize(
                size_url,
                self._dimension(size_width, attachment_id),
                self._dimension(size_height, attachment_id),
            )

        self.attachments[attachment.id] = attachment
        logger.debug(f"Attachment registered: {attachment.id}, sizes={len(attachment.sizes)}")
        return attachment

    @staticmethod
    def _dimension(value: Any, attachment_id: Any) -> int:
        dimension = _positive_int(value)
        if dimension is None:
            raise MediaError("Image dimensions must be positive integers", f"id={attachment_id}, value={value!r}")
        return dimension

    def get(self, attachment_id: Any) -> Optional[Attachment]:
        """Look up an attachment; unknown or malformed ids return None."""
        normalized_id = _positive_int(attachment_id)
        if normalized_id is None:
            return None
        attachment = self.attachments.get(normalized_id)
        if attachment is None:
            logger.debug(f"Attachment not found: {attachment_id}")
        return attachment

    def get_image_src(self, attachment_id: Any, size: ImageSize = "full") -> Optional[ImageSource]:
        attachment = self.get(attachment_id)
        if attachment is None:
            return None
        chosen = attachment.size(size)
        return ImageSource(chosen.url, chosen.width, chosen.height)

    def get_metadata(self, attachment_id: Any) -> Optional[Dict[str, Any]]:
        attachment = self.get(attachment_id)
        if attachment is None:
            return None
        return {
            "width": attachment.width,
            "height": attachment.height,
            "file": attachment.url,
            "sizes": {
                name: {"url": size.url, "width": size.width, "height": size.height}
                for name, size in attachment.sizes.items()
            },
        }

    def calculate_srcset(self, size_array: Sequence[int], src: str,
                         metadata: Optional[Dict[str, Any]], attachment_id: Any) -> str:
        """
        Build ``url 300w, url 800w, ...`` from same-ratio sizes.

        Returns ``""`` when fewer than two candidates remain.
        """
        if not metadata or len(size_array) < 2:
            return ""

        width, height = int(size_array[0]), int(size_array[1])
        if not width or not height:
            return ""

        candidates: List[AttachmentSize] = [
            AttachmentSize(metadata.get("file", src), metadata.get("width", 0), metadata.get("height", 0))
        ]
        for size in (metadata.get("sizes") or {}).values():
            candidates.append(AttachmentSize(size.get("url"), size.get("width", 0), size.get("height", 0)))

        by_width: Dict[int, str] = {}
        for candidate in candidates:
            if not candidate.url or candidate.width > MAX_SRCSET_WIDTH:
                continue
            if not _matches_ratio(width, height, candidate.width, candidate.height):
                continue
            by_width.setdefault(candidate.width, candidate.url)

        if len(by_width) < 2:
            return ""

        return ", ".join(f"{url} {w}w" for w, url in sorted(by_width.items()))

    def calculate_sizes(self, size_array: Sequence[int], src: str,
                        metadata: Optional[Dict[str, Any]], attachment_id: Any) -> str:
        if not size_array or not size_array[0]:
            return ""
        width = int(size_array[0])
        return f"(max-width: {width}px) 100vw, {width}px"

    def render_attachment(self, attachment_id: Any, size: ImageSize = "full",
                          attributes: Union[str, Dict[str, Any], None] = None) -> str:
        """
        Render ``<img>`` markup with srcset and sizes for an attachment.

        Mapping attributes override the defaults (``class``, ``alt``, ...);
        a pre-serialized attribute string is appended.
        """
        image = self.get_image_src(attachment_id, size)
        if image is None:
            return ""

        attachment = self.get(attachment_id)
        size_name = size if isinstance(size, str) else "x".join(to_text(v) for v in size)
        size_array = (image.width, image.height)
        metadata = self.get_metadata(attachment_id)

        attrs: Dict[str, Any] = {
            "src": image.src,
            "class": f"attachment-{size_name} size-{size_name}",
            "alt": attachment.alt,
        }
        srcset = self.calculate_srcset(size_array, image.src, metadata, attachment_id)
        if srcset:
            attrs["srcset"] = srcset
            attrs["sizes"] = self.calculate_sizes(size_array, image.src, metadata, attachment_id)

        extra = ""
        if isinstance(attributes, Mapping):
            attrs.update(attributes)
        elif isinstance(attributes, str):
            extra = attributes.strip()

        parts = [self.hwstring(image.width, image.height), attributes_string(attrs)]
        if extra:
            parts.append(extra)
        return f"<img {' '.join(parts)}>"
