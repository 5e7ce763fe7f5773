"""
Escaping primitives.

Each escaper is a pure ``str -> str`` function. ``Escapers`` bundles one per
output context so a host can inject its own implementations; the defaults
below follow the conventions of the host platform's escaping API.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from html import escape
from html.entities import html5 as HTML5_ENTITIES
from typing import Callable, FrozenSet, Iterable, Optional
from urllib.parse import urlsplit

import bleach

EscapeFunc = Callable[[str], str]

ALLOWED_PROTOCOLS: FrozenSet[str] = frozenset({
    "http", "https", "ftp", "ftps", "mailto", "news", "irc", "irc6", "ircs",
    "gopher", "nntp", "feed", "telnet", "mms", "rtsp", "sms", "svn", "tel",
    "fax", "xmpp", "webcal", "urn",
})

# Tags and attributes allowed in post content
SAFE_HTML_TAGS: FrozenSet[str] = frozenset({
    "a", "abbr", "address", "b", "bdo", "blockquote", "br", "caption", "cite",
    "code", "col", "colgroup", "dd", "del", "details", "dfn", "div", "dl",
    "dt", "em", "figcaption", "figure", "h1", "h2", "h3", "h4", "h5", "h6",
    "hr", "i", "img", "ins", "kbd", "li", "mark", "ol", "p", "picture", "pre",
    "q", "s", "samp", "section", "small", "source", "span", "strike", "strong",
    "sub", "summary", "sup", "table", "tbody", "td", "tfoot", "th", "thead",
    "time", "tr", "u", "ul", "var",
})

SAFE_HTML_ATTRIBUTES = {
    "*": ["class", "id", "title", "lang", "dir", "role", "aria-label", "aria-hidden"],
    "a": ["href", "target", "rel", "name", "download", "hreflang"],
    "img": ["src", "alt", "width", "height", "srcset", "sizes", "loading", "decoding"],
    "source": ["srcset", "sizes", "media", "type", "width", "height"],
    "td": ["colspan", "rowspan", "headers"],
    "th": ["colspan", "rowspan", "headers", "scope"],
    "time": ["datetime"],
    "ol": ["start", "reversed", "type"],
    "blockquote": ["cite"],
    "q": ["cite"],
    "del": ["datetime", "cite"],
    "ins": ["datetime", "cite"],
}

_URL_INVALID_CHARS = re.compile(r"[^a-z0-9\-~+_.?#=!&;,/:%@$|*'()\[\]\x80-\uffff]", re.IGNORECASE)
_PHP_FILE = re.compile(r"^[a-z0-9-]+?\.php", re.IGNORECASE)
_ESCAPED_ENTITY = re.compile(r"&amp;(#[0-9]+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")


def _restore_entity(match: re.Match) -> str:
    name = match.group(1)
    if name.startswith("#") or name + ";" in HTML5_ENTITIES:
        return f"&{name};"
    return match.group(0)


def _specialchars(text: str) -> str:
    # Entities already present in the text are kept as they are
    return _ESCAPED_ENTITY.sub(_restore_entity, escape(text, quote=True))


def esc_attr(text: str) -> str:
    """Escape for use inside a double- or single-quoted HTML attribute."""
    return _specialchars(text)


def esc_html(text: str) -> str:
    """Escape for use as HTML text content."""
    return _specialchars(text)


def esc_url(text: str, protocols: Optional[Iterable[str]] = None) -> str:
    """
    Sanitize a URL for display in markup.

    Strips characters that cannot appear in a URL, prefixes scheme-less
    hosts with ``http://`` and rejects disallowed protocols.

    Args:
        text: Raw URL
        protocols: Allowed schemes (defaults to ``ALLOWED_PROTOCOLS``)

    Returns:
        Sanitized URL, or ``""`` if the URL is rejected
    """
    url = text.strip()
    if not url:
        return ""

    url = url.replace(" ", "%20")
    url = _URL_INVALID_CHARS.sub("", url)
    if not url:
        return ""

    if ":" not in url and url[0] not in "/#?" and not _PHP_FILE.match(url):
        url = "http://" + url

    allowed = ALLOWED_PROTOCOLS if protocols is None else frozenset(protocols)
    head = re.split(r"[/?#]", url, maxsplit=1)[0]
    if ":" in head:
        scheme = urlsplit(url).scheme.lower()
        if scheme not in allowed:
            return ""

    url = url.replace("&amp;", "&").replace("&", "&#038;")
    return url.replace("'", "&#039;")


def sanitize_html(text: str) -> str:
    """Keep only the tags and attributes allowed in post content."""
    return bleach.clean(
        text,
        tags=SAFE_HTML_TAGS,
        attributes=SAFE_HTML_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
    )


def esc_js(text: str) -> str:
    """Escape for use inside a quoted inline JavaScript string."""
    safe = escape(text, quote=False).replace('"', "&quot;")
    safe = safe.replace("\\", "\\\\").replace("'", "\\'")
    safe = safe.replace("\r", "")
    return safe.replace("\n", "\\n")


def esc_xml(text: str) -> str:
    """Escape for use in XML text or attributes."""
    return escape(text, quote=True).replace("&#x27;", "&apos;")


@dataclass(frozen=True)
class Escapers:
    """One escaping function per output context."""

    attr: EscapeFunc = esc_attr
    url: EscapeFunc = esc_url
    html: EscapeFunc = esc_html
    safe_html: EscapeFunc = sanitize_html
    js: EscapeFunc = esc_js
    xml: EscapeFunc = esc_xml


DEFAULT_ESCAPERS = Escapers()
