"""
Image host interface.

The helper never resolves attachments itself. Id to URL resolution, srcset
and sizes calculation, and attachment markup are delegated to an
``ImageHost`` supplied by the surrounding platform.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, NamedTuple, Optional, Sequence, Union

ImageSize = Union[str, Sequence[int]]


class ImageSource(NamedTuple):
    """Resolved image file for an attachment and size."""

    src: str
    width: int
    height: int


class ImageHost(ABC):
    """Attachment lookups and responsive-image calculations."""

    @abstractmethod
    def render_attachment(self, attachment_id: Any, size: ImageSize = "full",
                          attributes: Union[str, Dict[str, Any], None] = None) -> str:
        """Return complete ``<img>`` markup for an attachment, or ``""``."""

    @abstractmethod
    def get_image_src(self, attachment_id: Any, size: ImageSize = "full") -> Optional[ImageSource]:
        """Return the file for ``size``, or None when the attachment is unknown."""

    @abstractmethod
    def get_metadata(self, attachment_id: Any) -> Optional[Dict[str, Any]]:
        """Return attachment metadata (dimensions and generated sizes)."""

    @abstractmethod
    def calculate_sizes(self, size_array: Sequence[int], src: str,
                        metadata: Optional[Dict[str, Any]], attachment_id: Any) -> str:
        """Return the value of a ``sizes`` attribute."""

    @abstractmethod
    def calculate_srcset(self, size_array: Sequence[int], src: str,
                         metadata: Optional[Dict[str, Any]], attachment_id: Any) -> str:
        """Return the value of a ``srcset`` attribute."""

    def hwstring(self, width: Any, height: Any) -> str:
        """Return ``width="…" height="…"`` for the non-empty dimensions."""
        parts = []
        if width:
            parts.append(f'width="{int(width)}"')
        if height:
            parts.append(f'height="{int(height)}"')
        return " ".join(parts)


class NullImageHost(ImageHost):
    """Host without attachments: every lookup fails and renders nothing."""

    def render_attachment(self, attachment_id, size="full", attributes=None) -> str:
        return ""

    def get_image_src(self, attachment_id, size="full") -> Optional[ImageSource]:
        return None

    def get_metadata(self, attachment_id) -> Optional[Dict[str, Any]]:
        return None

    def calculate_sizes(self, size_array, src, metadata, attachment_id) -> str:
        return ""

    def calculate_srcset(self, size_array, src, metadata, attachment_id) -> str:
        return ""
