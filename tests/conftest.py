"""Shared pytest fixtures for tokenweave tests."""

from __future__ import annotations

import pytest

from tokenweave.config import TokenSystemConfig
from tokenweave.core.paths import ThemeVariant
from tokenweave.core.resolver import TokenResolver
from tokenweave.core.store import TokenStore
from tokenweave.core.values import ColorValue
from tokenweave.css.generator import CssGenerator
from tokenweave.system import DesignTokenSystem


@pytest.fixture
def store() -> TokenStore:
    """Return an empty token store."""
    return TokenStore()


@pytest.fixture
def resolver(store: TokenStore) -> TokenResolver:
    """Return a resolver over the empty store."""
    return TokenResolver(store)


@pytest.fixture
def generator(resolver: TokenResolver) -> CssGenerator:
    """Return a CSS generator with default settings."""
    return CssGenerator(resolver, TokenSystemConfig(load_defaults=False))


@pytest.fixture
def empty_system() -> DesignTokenSystem:
    """Return a token system with no default tokens."""
    return DesignTokenSystem(TokenSystemConfig(load_defaults=False))


@pytest.fixture
def default_system() -> DesignTokenSystem:
    """Return a token system seeded with the bundled defaults."""
    return DesignTokenSystem.with_defaults()


@pytest.fixture
def tiered_store(store: TokenStore) -> TokenStore:
    """Store holding a small global -> alias -> component chain in light and dark."""
    store.set("color_palette.blue.6", ThemeVariant.LIGHT, ColorValue.parse("#1890ff"))
    store.set("color_palette.blue.5", ThemeVariant.LIGHT, ColorValue.parse("#40a9ff"))
    store.set("semantic_colors.primary", ThemeVariant.LIGHT, "{color_palette.blue.6}")
    store.set(
        "component.button.primary.background", ThemeVariant.LIGHT, "{semantic_colors.primary}"
    )
    store.copy_theme(ThemeVariant.LIGHT, ThemeVariant.DARK)
    store.set("semantic_colors.primary", ThemeVariant.DARK, "{color_palette.blue.5}")
    return store
