"""
Escape-and-echo accessors.

Every context has a pair of methods: ``attr(path)`` returns the escaped
value, ``echo_attr(path)`` writes it to the output sink. Values are resolved
through the data bag and stringified before escaping; absent values become
``""``.
"""

from __future__ import annotations

import re
from typing import Any, Callable, TextIO, Union

from ..data.values import to_text
from .escapers import Escapers

_LEADING_NUMBER = re.compile(r"\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def _leading_number(text: str) -> Union[int, float]:
    # Numeric prefix of a string, 0 when there is none
    match = _LEADING_NUMBER.match(text)
    if not match:
        return 0
    number = match.group(0).strip()
    if match.group(2) is None and match.group(3) is None and "." not in number:
        return int(number)
    return float(number)


class EscapingMixin:
    """Escaping facade over a ``NestedAccessor``."""

    escapers: Escapers
    out: TextIO

    # Provided by NestedAccessor
    get_nested: Callable[..., Any]

    def echo(self, fragment: str) -> None:
        """Write a fragment to the output sink."""
        self.out.write(fragment)

    def _text(self, path: str) -> str:
        return to_text(self.get_nested(path))

    def attr(self, path: str) -> str:
        return self.escapers.attr(self._text(path))

    def echo_attr(self, path: str) -> None:
        self.echo(self.attr(path))

    def url(self, path: str) -> str:
        return self.escapers.url(self._text(path))

    def echo_url(self, path: str) -> None:
        self.echo(self.url(path))

    def html(self, path: str) -> str:
        return self.escapers.html(self._text(path))

    def echo_html(self, path: str) -> None:
        self.echo(self.html(path))

    def safe_html(self, path: str) -> str:
        """Value with only the allowed post-content tags kept."""
        return self.escapers.safe_html(self._text(path))

    def echo_safe_html(self, path: str) -> None:
        self.echo(self.safe_html(path))

    def js(self, path: str) -> str:
        return self.escapers.js(self._text(path))

    def echo_js(self, path: str) -> None:
        self.echo(self.js(path))

    def xml(self, path: str) -> str:
        return self.escapers.xml(self._text(path))

    def echo_xml(self, path: str) -> None:
        self.echo(self.xml(path))

    def raw(self, path: str) -> str:
        """Unescaped string form of the value."""
        return self._text(path)

    def echo_raw(self, path: str) -> None:
        self.echo(self.raw(path))

    def sprintf(self, template: str, path: str) -> str:
        """
        Format ``template`` printf-style with the value at ``path``.

        A template without a conversion ignores the value. Numeric
        conversions given text use the text's numeric prefix (``0`` when it
        has none).

        Example:
            helper.sprintf("Price: %s EUR", "product.price")

        Raises:
            TypeError: if the template needs more than one value
        """
        value = self.get_nested(path)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            value = to_text(value)

        try:
            return template % (value,)
        except TypeError:
            pass

        try:
            return template % ()
        except TypeError:
            return template % (_leading_number(to_text(value)),)

    def printf(self, template: str, path: str) -> None:
        self.echo(self.sprintf(template, path))

    def __call__(self, path: str) -> None:
        self.echo_html(path)
