"""Image markup rendering."""

from .images import (
    ADVANCED_IMG_CSS,
    AdvancedImageData,
    ImageRenderer,
    ImageSizing,
    ResponsiveImageData,
)

__all__ = [
    "ADVANCED_IMG_CSS",
    "AdvancedImageData",
    "ImageRenderer",
    "ImageSizing",
    "ResponsiveImageData",
]
