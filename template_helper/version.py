"""Version information for template_helper."""

__version__ = "1.2.0"
__version_info__ = tuple(int(part) for part in __version__.split("."))
