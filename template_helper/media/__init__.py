"""Image host interface and the in-memory media library."""

from .host import ImageHost, ImageSize, ImageSource, NullImageHost
from .library import Attachment, AttachmentSize, MediaLibrary

__all__ = [
    "ImageHost",
    "ImageSize",
    "ImageSource",
    "NullImageHost",
    "Attachment",
    "AttachmentSize",
    "MediaLibrary",
]
