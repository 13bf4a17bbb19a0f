"""
tokenweave - design token resolution and CSS generation.

Stores design tokens per theme, resolves references through the
global/alias/component tiers, and renders the result as CSS custom
properties, component classes and utility classes.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

from .config import TokenSystemConfig, load_config
from .core import ThemeVariant, TokenError, TokenPath, TokenResolver, TokenStore
from .css import CssGenerator, minify_css
from .system import DesignTokenSystem, configure_shared_system, get_shared_system


def _get_version() -> str:
    try:
        return _metadata_version("tokenweave")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "DesignTokenSystem",
    "TokenSystemConfig",
    "load_config",
    "get_shared_system",
    "configure_shared_system",
    "TokenStore",
    "TokenResolver",
    "CssGenerator",
    "TokenPath",
    "ThemeVariant",
    "TokenError",
    "minify_css",
]
