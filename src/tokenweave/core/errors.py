"""
Error types for tokenweave token storage, resolution, and CSS generation.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .paths import TokenPath


class ErrorKind(StrEnum):
    """Machine-readable error kinds, so callers can branch without parsing messages."""

    TOKEN_NOT_FOUND = "token_not_found"
    CIRCULAR_REFERENCE = "circular_reference"
    TYPE_MISMATCH = "type_mismatch"
    INVALID_TRANSFORM = "invalid_transform"
    INVALID_TOKEN_PATH = "invalid_token_path"
    INVALID_TOKEN_VALUE = "invalid_token_value"
    SERIALIZATION = "serialization"
    CONFIG = "config"


class TokenError(Exception):
    """Base exception for all tokenweave errors."""

    kind: ErrorKind = ErrorKind.INVALID_TOKEN_VALUE

    def __init__(self, message: str, path: TokenPath | None = None):
        self.message = message
        self.path = path
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with the offending path if available."""
        if self.path is not None:
            return f"{self.path}: {self.message}"
        return self.message


class TokenNotFoundError(TokenError):
    """
    Raised when a path has no value under the requested theme.

    Examples:
    - Resolving a path that was never set
    - A reference pointing at a missing token
    - Generating component classes for an unknown component
    """

    kind = ErrorKind.TOKEN_NOT_FOUND

    def __init__(self, path: TokenPath, message: str | None = None):
        super().__init__(message or "token not found", path)


class CircularReferenceError(TokenError):
    """Raised when a reference chain revisits a path it is already resolving."""

    kind = ErrorKind.CIRCULAR_REFERENCE

    def __init__(self, chain: list[TokenPath]):
        self.chain = list(chain)
        rendered = " -> ".join(str(p) for p in self.chain)
        super().__init__(f"circular reference: {rendered}", self.chain[0] if self.chain else None)


class TypeMismatchError(TokenError):
    """Raised when a transform or operation receives a value of the wrong kind."""

    kind = ErrorKind.TYPE_MISMATCH

    def __init__(self, expected: str, actual: str, path: TokenPath | None = None):
        self.expected = expected
        self.actual = actual
        super().__init__(f"type mismatch: expected {expected}, got {actual}", path)


class InvalidTransformError(TokenError):
    """Raised when a transform cannot be applied (bad factor, division by zero)."""

    kind = ErrorKind.INVALID_TRANSFORM


class InvalidTokenPathError(TokenError):
    """Raised when a dotted path is empty or contains illegal segments."""

    kind = ErrorKind.INVALID_TOKEN_PATH

    def __init__(self, raw: str, reason: str = "invalid token path"):
        self.raw = raw
        super().__init__(f"{reason}: {raw!r}")


class InvalidTokenValueError(TokenError):
    """Raised when raw data cannot be turned into a token value."""

    kind = ErrorKind.INVALID_TOKEN_VALUE


class SerializationError(TokenError):
    """Raised when tokens cannot be serialized or loaded from disk."""

    kind = ErrorKind.SERIALIZATION


class ConfigError(TokenError):
    """Error loading or validating a token system configuration."""

    kind = ErrorKind.CONFIG
