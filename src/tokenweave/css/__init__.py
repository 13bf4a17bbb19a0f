"""CSS generation and minification for resolved tokens."""

from .generator import CssGenerator
from .minify import minify_css

__all__ = ["CssGenerator", "minify_css"]
