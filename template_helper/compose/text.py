"""Line joining for address blocks and similar multi-line fields."""

from typing import Any, Iterable

from ..data.values import is_empty, to_text


def join_non_empty(lines: Iterable[Any], separator: str = "<br/>") -> str:
    """Drop empty lines and join the rest with ``separator``, keeping their order."""
    return separator.join(to_text(line) for line in lines if not is_empty(line))
