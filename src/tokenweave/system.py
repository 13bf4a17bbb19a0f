"""
DesignTokenSystem facade.

Composes a TokenStore, TokenResolver and CssGenerator behind one object that
owns the active theme and configuration. Every public operation runs under a
re-entrant lock, so a theme switch never interleaves with a resolution or an
export.

A process-wide instance is available through `get_shared_system()` for
callers that cannot thread an instance through; it is created lazily under a
module lock.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from tokenweave.config import TokenSystemConfig
from tokenweave.core.errors import SerializationError, TokenError, TokenNotFoundError
from tokenweave.core.paths import ThemeVariant, TokenPath, as_path
from tokenweave.core.resolver import TokenResolver
from tokenweave.core.store import TokenStore
from tokenweave.core.values import TokenMetadata, TokenValue
from tokenweave.css.generator import CssGenerator
from tokenweave.defaults import load_token_file, parse_token_document, seed_store
from tokenweave.dtcg_export import generate_dtcg_tokens

logger = logging.getLogger(__name__)


class DesignTokenSystem:
    """
    Token store, resolver and CSS generator bound to an active theme.

    Example:
        system = DesignTokenSystem.with_defaults()
        system.set_token("color_palette.blue.6", "#1677ff")
        css = system.generate_theme_css()
    """

    def __init__(self, config: TokenSystemConfig | None = None, store: TokenStore | None = None):
        self.config = config or TokenSystemConfig()
        self.store = store if store is not None else TokenStore()
        if store is None and self.config.load_defaults:
            seed_store(self.store)
        self.resolver = TokenResolver(self.store)
        self.generator = CssGenerator(self.resolver, self.config)
        self._active_theme = ThemeVariant.LIGHT
        self._lock = threading.RLock()

    @classmethod
    def with_defaults(cls, config: TokenSystemConfig | None = None) -> DesignTokenSystem:
        """Create a system seeded with the bundled default tokens."""
        base = config or TokenSystemConfig()
        return cls(base.with_overrides(load_defaults=True))

    # -------------------------------------------------------------------------
    # Theme state
    # -------------------------------------------------------------------------

    @property
    def active_theme(self) -> ThemeVariant:
        return self._active_theme

    def switch_theme(self, theme: ThemeVariant | str) -> None:
        """Make ``theme`` active and drop every cached resolution."""
        with self._lock:
            new_theme = ThemeVariant(theme)
            if new_theme != self._active_theme:
                logger.info(f"Switching theme {self._active_theme} -> {new_theme}")
            self._active_theme = new_theme
            self.resolver.clear_cache()

    def create_theme_variant(
        self,
        base: ThemeVariant | str,
        new: ThemeVariant | str,
        overrides: Mapping[TokenPath | str, Any] | None = None,
    ) -> int:
        """Copy ``base`` into ``new`` and apply ``overrides`` to ``new``.

        The active theme is left unchanged.

        Returns:
            Number of tokens copied from ``base``.
        """
        with self._lock:
            target = ThemeVariant(new)
            copied = self.store.copy_theme(ThemeVariant(base), target)
            if overrides:
                self.store.set_batch(overrides, target)
            return copied

    # -------------------------------------------------------------------------
    # Token access (active theme)
    # -------------------------------------------------------------------------

    def get_token(self, path: TokenPath | str) -> TokenValue | None:
        """Resolved value, or None when the path (or something it references) is missing.

        Other resolution failures (cycles, type mismatches) still raise.
        """
        try:
            return self.resolve_token(path)
        except TokenNotFoundError:
            return None

    def resolve_token(self, path: TokenPath | str) -> TokenValue:
        with self._lock:
            return self.resolver.resolve(path, self._active_theme)

    def get_raw_token(self, path: TokenPath | str) -> TokenValue | None:
        """Stored value without resolving references."""
        with self._lock:
            return self.resolver.lookup(as_path(path), self._active_theme)

    def set_token(self, path: TokenPath | str, value: Any) -> None:
        with self._lock:
            self.store.set(path, self._active_theme, value)

    def set_batch(self, mapping: Mapping[TokenPath | str, Any]) -> int:
        with self._lock:
            return self.store.set_batch(mapping, self._active_theme)

    def has_token(self, path: TokenPath | str) -> bool:
        with self._lock:
            return self.resolver.lookup(as_path(path), self._active_theme) is not None

    def list_tokens(self) -> list[TokenPath]:
        """Every path visible under the active theme."""
        with self._lock:
            return self.resolver.known_paths(self._active_theme)

    def search_tokens(self, query: str) -> list[TokenPath]:
        """Paths whose dotted form contains ``query`` (case-insensitive)."""
        needle = query.lower()
        return [path for path in self.list_tokens() if needle in path.dotted.lower()]

    def get_css_var_name(self, path: TokenPath | str) -> str:
        return self.generator.css_var_name(path)

    def set_metadata(self, path: TokenPath | str, metadata: TokenMetadata) -> None:
        with self._lock:
            self.store.set_metadata(path, metadata)

    def get_metadata(self, path: TokenPath | str) -> TokenMetadata | None:
        with self._lock:
            return self.store.get_metadata(path)

    def find_references_to(self, path: TokenPath | str) -> list[TokenPath]:
        with self._lock:
            return self.resolver.find_references_to(path, self._active_theme)

    def compute(self, expression: str) -> TokenValue:
        with self._lock:
            return self.resolver.compute(expression, self._active_theme)

    def validate_tokens(self) -> list[TokenError]:
        """Resolve every token in every theme, returning all failures."""
        with self._lock:
            return self.resolver.validate()

    # -------------------------------------------------------------------------
    # Import and reset
    # -------------------------------------------------------------------------

    def import_tokens(self, source: Path | str | Mapping[str, Any]) -> int:
        """Load a token document (``light``/``dark``/``metadata`` sections).

        ``source`` is a YAML/JSON file path or an already-parsed mapping. Light
        values go to the light theme and dark values to the dark theme. Every
        value is validated before anything is stored.

        Returns:
            Number of entries written across both themes.

        Raises:
            SerializationError: The file or document is malformed.
        """
        if isinstance(source, Mapping):
            token_set = parse_token_document(dict(source))
        else:
            token_set = load_token_file(Path(source))
        with self._lock:
            count = self.store.set_batch(dict(token_set.light), ThemeVariant.LIGHT)
            count += self.store.set_batch(dict(token_set.dark), ThemeVariant.DARK)
            for path, metadata in token_set.metadata:
                self.store.set_metadata(path, metadata)
        logger.info(f"Imported {count} tokens")
        return count

    def reset_to_defaults(self) -> int:
        """Discard every token and reload the bundled defaults.

        Returns:
            Number of default light tokens seeded.
        """
        with self._lock:
            self.store.clear()
            count = seed_store(self.store)
            self.resolver.clear_cache()
        logger.info(f"Reset token store to {count} default tokens")
        return count

    # -------------------------------------------------------------------------
    # CSS export (active theme)
    # -------------------------------------------------------------------------

    def export_css_variables(self) -> str:
        """``:root`` variables for the active theme plus the dark media block."""
        with self._lock:
            return self.generator.export_variables(self._active_theme)

    def generate_theme_css(self) -> str:
        with self._lock:
            return self.generator.generate_theme_css(self._active_theme)

    def generate_component_css(self, component: str) -> str:
        with self._lock:
            return self.generator.generate_component_classes(component, self._active_theme)

    def generate_utility_css(self) -> str:
        with self._lock:
            return self.generator.generate_utility_classes(self._active_theme)

    def export_dtcg(self) -> dict[str, Any]:
        """W3C design-tokens document for the active theme."""
        with self._lock:
            return generate_dtcg_tokens(self, self._active_theme)

    def write_css(self, output_path: Path | str) -> Path:
        """Write the full theme stylesheet to ``output_path``."""
        path = Path(output_path)
        css = self.generate_theme_css()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(css, encoding="utf-8")
        except OSError as e:
            raise SerializationError(f"Cannot write CSS to {path}: {e}") from e
        logger.info(f"Wrote theme CSS to {path}")
        return path

    def __repr__(self) -> str:
        return (
            f"DesignTokenSystem(theme={self._active_theme}, prefix={self.config.prefix!r}, "
            f"tokens={len(self.store)})"
        )


# =============================================================================
# Shared instance
# =============================================================================

_shared: DesignTokenSystem | None = None
_shared_lock = threading.Lock()


def get_shared_system() -> DesignTokenSystem:
    """Get or create the process-wide DesignTokenSystem."""
    global _shared
    if _shared is None:
        with _shared_lock:
            if _shared is None:
                _shared = DesignTokenSystem()
    return _shared


def configure_shared_system(config: TokenSystemConfig | None = None) -> DesignTokenSystem:
    """Replace the shared instance with a fresh one.  Returns the new instance."""
    global _shared
    with _shared_lock:
        _shared = DesignTokenSystem(config)
    return _shared
