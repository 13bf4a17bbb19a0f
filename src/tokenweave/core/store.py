"""
In-memory token storage.

Maps ``(TokenPath, ThemeVariant)`` to exactly one TokenValue, plus a
theme-independent ``TokenPath -> TokenMetadata`` table. Setting a pair
replaces its value wholesale; composites are never merged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from .paths import ThemeVariant, TokenPath, as_path
from .values import TokenMetadata, TokenValue, to_token_value

logger = logging.getLogger(__name__)

ChangeListener = Callable[[], None]


class TokenStore:
    """Keyed storage of token values per theme variant."""

    def __init__(self) -> None:
        self._values: dict[tuple[TokenPath, ThemeVariant], TokenValue] = {}
        self._metadata: dict[TokenPath, TokenMetadata] = {}
        self._listeners: list[ChangeListener] = []
        self.revision = 0

    # -------------------------------------------------------------------------
    # Change notification
    # -------------------------------------------------------------------------

    def add_listener(self, listener: ChangeListener) -> None:
        """Register a callback invoked after every mutation."""
        self._listeners.append(listener)

    def _changed(self) -> None:
        self.revision += 1
        for listener in self._listeners:
            listener()

    # -------------------------------------------------------------------------
    # Single-entry access
    # -------------------------------------------------------------------------

    def get(self, path: TokenPath | str, theme: ThemeVariant) -> TokenValue | None:
        return self._values.get((as_path(path), theme))

    def set(self, path: TokenPath | str, theme: ThemeVariant, value: Any) -> None:
        key = (as_path(path), theme)
        self._values[key] = to_token_value(value)
        self._changed()

    def has_token(self, path: TokenPath | str, theme: ThemeVariant) -> bool:
        return (as_path(path), theme) in self._values

    def remove(self, path: TokenPath | str, theme: ThemeVariant) -> bool:
        """Remove one entry. Returns True if something was removed."""
        removed = self._values.pop((as_path(path), theme), None) is not None
        if removed:
            self._changed()
        return removed

    # -------------------------------------------------------------------------
    # Bulk operations
    # -------------------------------------------------------------------------

    def set_batch(self, mapping: Mapping[TokenPath | str, Any], theme: ThemeVariant) -> int:
        """Set many entries for one theme. All values are validated before any is stored."""
        prepared = [(as_path(p), to_token_value(v)) for p, v in mapping.items()]
        for path, value in prepared:
            self._values[(path, theme)] = value
        if prepared:
            self._changed()
        return len(prepared)

    def list_paths(self, theme: ThemeVariant) -> list[TokenPath]:
        """Paths with an entry for ``theme``, in insertion order."""
        return [path for (path, entry_theme) in self._values if entry_theme == theme]

    def items(self, theme: ThemeVariant) -> Iterable[tuple[TokenPath, TokenValue]]:
        for (path, entry_theme), value in self._values.items():
            if entry_theme == theme:
                yield path, value

    def copy_theme(self, source: ThemeVariant, target: ThemeVariant) -> int:
        """Duplicate every ``source`` entry into ``target``, overwriting same-path entries."""
        entries = [(path, value) for path, value in self.items(source)]
        for path, value in entries:
            self._values[(path, target)] = value
        logger.debug(f"Copied {len(entries)} tokens from {source} to {target}")
        if entries:
            self._changed()
        return len(entries)

    def clear_theme(self, theme: ThemeVariant) -> int:
        """Remove every entry for ``theme`` only."""
        keys = [key for key in self._values if key[1] == theme]
        for key in keys:
            del self._values[key]
        logger.debug(f"Cleared {len(keys)} tokens from {theme}")
        if keys:
            self._changed()
        return len(keys)

    def clear(self) -> None:
        """Remove every entry and all metadata."""
        count = len(self._values)
        self._values.clear()
        self._metadata.clear()
        logger.debug(f"Cleared all {count} tokens")
        self._changed()

    def get_supported_themes(self) -> list[ThemeVariant]:
        """Distinct themes present in storage, in ThemeVariant order."""
        present = {theme for (_, theme) in self._values}
        return [theme for theme in ThemeVariant if theme in present]

    # -------------------------------------------------------------------------
    # Metadata
    # -------------------------------------------------------------------------

    def set_metadata(self, path: TokenPath | str, metadata: TokenMetadata) -> None:
        self._metadata[as_path(path)] = metadata

    def get_metadata(self, path: TokenPath | str) -> TokenMetadata | None:
        return self._metadata.get(as_path(path))

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"TokenStore(entries={len(self._values)}, themes={self.get_supported_themes()})"
