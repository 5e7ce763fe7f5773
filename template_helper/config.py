"""
Configuration for the template helper.

Defaults match the markup conventions of the host templates; every value
can be overridden per instance or through ``TEMPLATE_HELPER_*`` environment
variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Tuple

from .exceptions import ConfigurationError

ENV_PREFIX = "TEMPLATE_HELPER_"

DEFAULT_HEADING_TAGS: Tuple[str, ...] = ("h1", "h2", "h3", "h4", "h5", "h6", "div", "span")


@dataclass(frozen=True)
class HelperConfig:
    """
    Settings shared by accessors and renderers.

    Attributes:
        separator: Segment separator for dotted paths.
        line_separator: Default separator used by ``with_line_breaks``.
        default_image_size: Host image size name used when none is given.
        fallback_tag: Tag used by ``maybe_anchor`` when there is no link.
        id_prefix_length: Number of random hex characters in generated id prefixes.
        image_class_prefix: Block class of the advanced image container.
        heading_tags: Tags accepted by ``heading``; anything else becomes ``div``.
    """

    separator: str = "."
    line_separator: str = "<br/>"
    default_image_size: str = "full"
    fallback_tag: str = "div"
    id_prefix_length: int = 5
    image_class_prefix: str = "lx-img"
    heading_tags: Tuple[str, ...] = field(default=DEFAULT_HEADING_TAGS)

    def __post_init__(self) -> None:
        if not self.separator:
            raise ConfigurationError("Separator must be a non-empty string")
        if not self.fallback_tag:
            raise ConfigurationError("Fallback tag must be a non-empty string")
        if not 1 <= self.id_prefix_length <= 32:
            raise ConfigurationError(
                "Invalid id prefix length", f"expected 1-32, got {self.id_prefix_length}"
            )
        if not self.image_class_prefix:
            raise ConfigurationError("Image class prefix must be a non-empty string")

    def with_overrides(self, **overrides) -> "HelperConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "HelperConfig":
        """
        Build a config from ``TEMPLATE_HELPER_*`` environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Returns:
            Config with recognised variables applied over the defaults
        """
        environ = os.environ if environ is None else environ
        values = {}

        for name in ("separator", "line_separator", "default_image_size",
                     "fallback_tag", "image_class_prefix"):
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is not None:
                values[name] = raw

        raw_length = environ.get(ENV_PREFIX + "ID_PREFIX_LENGTH")
        if raw_length is not None:
            try:
                values["id_prefix_length"] = int(raw_length)
            except ValueError:
                raise ConfigurationError("Invalid id prefix length", raw_length) from None

        raw_tags = environ.get(ENV_PREFIX + "HEADING_TAGS")
        if raw_tags is not None:
            values["heading_tags"] = tuple(t.strip() for t in raw_tags.split(",") if t.strip())

        return cls(**values)
