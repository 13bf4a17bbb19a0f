"""
Token addressing: dotted token paths and theme variants.

Every token is addressed by a `TokenPath`, an ordered sequence of segments.
All string-to-path conversion goes through `TokenPath.parse` so that the rest
of the package can dispatch on segment tuples instead of string prefixes.
"""

from __future__ import annotations

import re
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import InvalidTokenPathError

_SEGMENT_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class ThemeVariant(StrEnum):
    """Named value-sets a token can carry simultaneously."""

    LIGHT = "light"
    DARK = "dark"
    AUTO = "auto"


def is_valid_segment(segment: str) -> bool:
    return bool(_SEGMENT_RE.match(segment))


def looks_like_path(text: str) -> bool:
    """Check whether text is a syntactically valid dotted path."""
    if not text:
        return False
    return all(is_valid_segment(s) for s in text.split("."))


class TokenPath(BaseModel):
    """
    Ordered, non-empty sequence of path segments.

    Example:
        TokenPath.parse("component.button.primary.hover.background")
    """

    segments: tuple[str, ...] = Field(description="Path segments")

    model_config = ConfigDict(frozen=True)

    @field_validator("segments")
    @classmethod
    def _check_segments(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("token path must have at least one segment")
        for segment in value:
            if not is_valid_segment(segment):
                raise ValueError(f"invalid path segment {segment!r}")
        return value

    @classmethod
    def parse(cls, raw: str) -> TokenPath:
        """Tokenize a dotted string into a path.

        Raises:
            InvalidTokenPathError: If the path is empty or a segment is malformed.
        """
        if not isinstance(raw, str) or not raw.strip():
            raise InvalidTokenPathError(str(raw), "empty token path")
        segments = tuple(raw.strip().split("."))
        for segment in segments:
            if not segment:
                raise InvalidTokenPathError(raw, "empty path segment")
            if not is_valid_segment(segment):
                raise InvalidTokenPathError(raw, f"illegal characters in segment {segment!r}")
        return cls(segments=segments)

    @classmethod
    def from_segments(cls, *segments: str) -> TokenPath:
        return cls.parse(".".join(segments))

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def dotted(self) -> str:
        return ".".join(self.segments)

    @property
    def head(self) -> str:
        """Leading segment (namespace)."""
        return self.segments[0]

    @property
    def name(self) -> str:
        """Trailing segment."""
        return self.segments[-1]

    def parent(self) -> TokenPath | None:
        if len(self.segments) > 1:
            return TokenPath(segments=self.segments[:-1])
        return None

    def child(self, segment: str) -> TokenPath:
        return TokenPath.from_segments(*self.segments, segment)

    def startswith(self, prefix: TokenPath | tuple[str, ...]) -> bool:
        """Segment-wise prefix check (``color.primary`` is not a prefix of ``color.primaryx``)."""
        prefix_segments = prefix.segments if isinstance(prefix, TokenPath) else prefix
        return self.segments[: len(prefix_segments)] == tuple(prefix_segments)

    def css_name(self, prefix: str | None = None) -> str:
        """CSS custom property name: dots become dashes under an optional prefix."""
        body = "-".join(self.segments)
        if prefix:
            return f"--{prefix}-{body}"
        return f"--{body}"

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        return self.dotted

    def __repr__(self) -> str:
        return f"TokenPath({self.dotted!r})"

    def __lt__(self, other: TokenPath) -> bool:
        return self.segments < other.segments


def as_path(value: TokenPath | str) -> TokenPath:
    """Accept either a parsed path or a dotted string."""
    if isinstance(value, TokenPath):
        return value
    return TokenPath.parse(value)
