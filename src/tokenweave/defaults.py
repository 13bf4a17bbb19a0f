"""
Bundled default token set.

The canonical defaults live in ``data/default_tokens.yaml``; this module
flattens that file into path/value pairs once and seeds stores from the
cached result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from tokenweave.core.errors import SerializationError, TokenError
from tokenweave.core.paths import ThemeVariant, TokenPath
from tokenweave.core.store import TokenStore
from tokenweave.core.values import TokenMetadata, TokenValue, to_token_value

logger = logging.getLogger(__name__)

DEFAULT_TOKENS_FILE = "default_tokens.yaml"


@dataclass(frozen=True)
class TokenSet:
    """Flattened token data: light values, dark overrides and metadata."""

    light: tuple[tuple[TokenPath, TokenValue], ...]
    dark: tuple[tuple[TokenPath, TokenValue], ...]
    metadata: tuple[tuple[TokenPath, TokenMetadata], ...] = ()

    def __len__(self) -> int:
        return len(self.light)


def get_data_dir() -> Path:
    """Directory holding bundled data files."""
    return Path(__file__).parent / "data"


def _is_leaf(node: Any) -> bool:
    if isinstance(node, dict):
        return any(str(key).startswith("$") for key in node)
    return True


def flatten_tokens(
    tree: dict[str, Any], parents: tuple[str, ...] = ()
) -> list[tuple[TokenPath, TokenValue]]:
    """Turn a nested namespace mapping into ``(path, value)`` pairs in document order."""
    pairs: list[tuple[TokenPath, TokenValue]] = []
    for key, node in tree.items():
        segments = (*parents, str(key))
        if _is_leaf(node):
            pairs.append((TokenPath.from_segments(*segments), to_token_value(node)))
        else:
            pairs.extend(flatten_tokens(node, segments))
    return pairs


def parse_token_document(data: dict[str, Any]) -> TokenSet:
    """Build a TokenSet from a parsed ``{light, dark, metadata}`` document.

    Raises:
        SerializationError: If a section has the wrong shape or holds invalid tokens.
    """
    for section in ("light", "dark", "metadata"):
        if not isinstance(data.get(section) or {}, dict):
            raise SerializationError(f"'{section}' section must be a mapping")
    try:
        light = flatten_tokens(data.get("light") or {})
        dark = flatten_tokens(data.get("dark") or {})
        metadata = [
            (TokenPath.parse(str(path)), TokenMetadata(**(info or {})))
            for path, info in (data.get("metadata") or {}).items()
        ]
    except (TokenError, ValidationError, TypeError) as e:
        raise SerializationError(f"Invalid token document: {e}") from e
    return TokenSet(light=tuple(light), dark=tuple(dark), metadata=tuple(metadata))


def load_token_file(path: Path) -> TokenSet:
    """Load a token document from YAML.

    Raises:
        SerializationError: If the file is unreadable or invalid.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SerializationError(f"Cannot read token file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise SerializationError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise SerializationError(f"Expected a mapping in {path}")
    return parse_token_document(data)


# Module-level cache for the bundled defaults
_default_cache: TokenSet | None = None


def load_default_tokens() -> TokenSet:
    """Load (once) the bundled default token set."""
    global _default_cache
    if _default_cache is None:
        _default_cache = load_token_file(get_data_dir() / DEFAULT_TOKENS_FILE)
        logger.debug(
            f"Loaded {len(_default_cache.light)} default tokens "
            f"({len(_default_cache.dark)} dark overrides)"
        )
    return _default_cache


def seed_store(store: TokenStore, tokens: TokenSet | None = None) -> int:
    """Populate a store: light values, then a dark copy with overrides applied.

    Returns:
        Number of light tokens written.
    """
    token_set = tokens if tokens is not None else load_default_tokens()
    count = store.set_batch(dict(token_set.light), ThemeVariant.LIGHT)
    store.copy_theme(ThemeVariant.LIGHT, ThemeVariant.DARK)
    store.set_batch(dict(token_set.dark), ThemeVariant.DARK)
    for path, metadata in token_set.metadata:
        store.set_metadata(path, metadata)
    return count
