"""Context-specific escaping."""

from .escapers import (
    ALLOWED_PROTOCOLS,
    DEFAULT_ESCAPERS,
    Escapers,
    esc_attr,
    esc_html,
    esc_js,
    esc_url,
    esc_xml,
    sanitize_html,
)
from .facade import EscapingMixin

__all__ = [
    "ALLOWED_PROTOCOLS",
    "DEFAULT_ESCAPERS",
    "Escapers",
    "EscapingMixin",
    "esc_attr",
    "esc_html",
    "esc_js",
    "esc_url",
    "esc_xml",
    "sanitize_html",
]
