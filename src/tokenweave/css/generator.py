"""
CSS generator for tokenweave token sets.

Renders resolved tokens as CSS custom properties, including a dark-mode
override block driven by ``prefers-color-scheme`` and a ``.theme-dark``
class, plus component and utility class rules built from the same tokens.
Output is deterministic for a given store: paths are emitted in insertion
order inside fixed category groups.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from tokenweave.config import TokenSystemConfig
from tokenweave.core.errors import TokenNotFoundError
from tokenweave.core.paths import ThemeVariant, TokenPath, as_path
from tokenweave.core.resolver import TokenResolver
from tokenweave.core.tiers import (
    CATEGORY_TITLES,
    TokenCategory,
    category_of,
    component_path,
    is_private,
    split_component_path,
)
from tokenweave.core.values import (
    ArrayValue,
    BooleanValue,
    ColorValue,
    DimensionValue,
    NullValue,
    NumberValue,
    ObjectValue,
    Reference,
    ShadowValue,
    StringValue,
    TokenReference,
    TokenValue,
    TypographyValue,
    format_number,
    reference_target,
)

from .minify import minify_css

logger = logging.getLogger(__name__)

HEADER = "/* tokenweave design tokens - auto-generated, do not edit */"

BREAKPOINTS: dict[str, str] = {
    "sm": "576px",
    "md": "768px",
    "lg": "992px",
    "xl": "1200px",
}

TRANSITION_RULE = (
    "*, *::before, *::after {\n"
    "  transition: color 0.2s ease, background-color 0.2s ease, "
    "border-color 0.2s ease, box-shadow 0.2s ease;\n"
    "}"
)

# Font family keywords that must stay unquoted
_GENERIC_FAMILIES = frozenset(
    {"serif", "sans-serif", "monospace", "cursive", "fantasy", "system-ui", "inherit", "initial"}
)

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])([A-Z])")

_SPACING_UTILITIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("m", ("margin",)),
    ("p", ("padding",)),
    ("mx", ("margin-left", "margin-right")),
    ("my", ("margin-top", "margin-bottom")),
    ("px", ("padding-left", "padding-right")),
    ("py", ("padding-top", "padding-bottom")),
)


def css_property_name(segments: Iterable[str]) -> str:
    """Join property segments with dashes, converting camelCase to kebab-case.

    >>> css_property_name(["borderColor"])
    'border-color'
    """
    return "-".join(_CAMEL_RE.sub(r"-\1", segment).lower() for segment in segments)


def _quote_family(family: str) -> str:
    names = []
    for name in (part.strip() for part in family.split(",")):
        if not name:
            continue
        if name in _GENERIC_FAMILIES or name[0] in "\"'":
            names.append(name)
        else:
            names.append(f'"{name}"')
    return ", ".join(names)


class CssGenerator:
    """
    Serializes resolved tokens into CSS text.

    Args:
        resolver: Resolver over the token store to render
        config: Prefix/minify/dark-theme settings; defaults when omitted
    """

    def __init__(self, resolver: TokenResolver, config: TokenSystemConfig | None = None):
        self.resolver = resolver
        self.config = config or TokenSystemConfig()

    @property
    def prefix(self) -> str:
        return self.config.prefix

    # -------------------------------------------------------------------------
    # Values
    # -------------------------------------------------------------------------

    def css_var_name(self, path: TokenPath | str) -> str:
        """``color.primary.500`` -> ``--ant-color-primary-500``."""
        return as_path(path).css_name(self.prefix)

    def value_to_css(self, value: TokenValue) -> str:
        """Render a single value as a CSS literal."""
        if isinstance(value, ColorValue | DimensionValue | ShadowValue):
            return value.to_css()
        if isinstance(value, StringValue):
            return value.value
        if isinstance(value, NumberValue):
            return format_number(value.value)
        if isinstance(value, BooleanValue):
            return "1" if value.value else "0"
        if isinstance(value, NullValue):
            return "initial"
        if isinstance(value, TypographyValue):
            return _quote_family(value.font_family) if value.font_family else "initial"
        if isinstance(value, ArrayValue):
            return ", ".join(self.value_to_css(item) for item in value.items)
        if isinstance(value, ObjectValue):
            return ""
        if isinstance(value, Reference | TokenReference):
            target = reference_target(value)
            return f"var({self.css_var_name(target)})"
        raise TypeError(f"Unsupported token value: {value!r}")

    def _resolved_css(self, path: TokenPath, theme: ThemeVariant) -> str:
        try:
            value = self.resolver.resolve(path, theme)
        except TokenNotFoundError as e:
            # Dangling reference: defer to whatever the page defines for the target
            if e.path is not None and e.path != path:
                logger.warning(f"{path} references missing token {e.path}; emitting var()")
                return f"var({self.css_var_name(e.path)})"
            raise
        return self.value_to_css(value)

    def _finish(self, css: str) -> str:
        if self.config.minify:
            return minify_css(css)
        return css

    # -------------------------------------------------------------------------
    # Variables
    # -------------------------------------------------------------------------

    def _visible_paths(self, theme: ThemeVariant) -> list[TokenPath]:
        return [path for path in self.resolver.known_paths(theme) if not is_private(path)]

    def _variable_lines(
        self, theme: ThemeVariant, indent: int, paths: list[TokenPath] | None = None
    ) -> list[str]:
        if paths is None:
            paths = self._visible_paths(theme)
        pad = " " * indent

        groups: dict[TokenCategory, list[TokenPath]] = {category: [] for category in TokenCategory}
        for path in paths:
            groups[category_of(path)].append(path)

        lines: list[str] = []
        for category, members in groups.items():
            if not members:
                continue
            if not self.config.minify:
                lines.append(f"{pad}/* {CATEGORY_TITLES[category]} */")
            for path in members:
                lines.append(f"{pad}{self.css_var_name(path)}: {self._resolved_css(path, theme)};")
        return lines

    def generate_variables(self, theme: ThemeVariant) -> str:
        """Custom property declarations for every visible token, without a selector."""
        return self._finish("\n".join(self._variable_lines(theme, indent=0)))

    def _root_block(self, theme: ThemeVariant) -> str:
        lines = [":root {", *self._variable_lines(theme, indent=2), "}"]
        return "\n".join(lines)

    def generate_root_block(self, theme: ThemeVariant) -> str:
        return self._finish(self._root_block(theme))

    def _dark_paths(self) -> list[TokenPath]:
        if not self.config.enable_dark_theme:
            return []
        store = self.resolver.store
        return [path for path in store.list_paths(ThemeVariant.DARK) if not is_private(path)]

    def _dark_media_block(self) -> str:
        paths = self._dark_paths()
        if not paths:
            return ""
        lines = [
            "@media (prefers-color-scheme: dark) {",
            "  :root {",
            *self._variable_lines(ThemeVariant.DARK, indent=4, paths=paths),
            "  }",
            "}",
        ]
        return "\n".join(lines)

    def generate_dark_media_block(self) -> str:
        """Dark overrides under ``prefers-color-scheme``; empty when there are none."""
        return self._finish(self._dark_media_block())

    def _dark_class_block(self) -> str:
        paths = self._dark_paths()
        if not paths:
            return ""
        lines = [
            ".theme-dark {",
            *self._variable_lines(ThemeVariant.DARK, indent=2, paths=paths),
            "}",
        ]
        return "\n".join(lines)

    def export_variables(self, theme: ThemeVariant) -> str:
        """``:root`` block for ``theme`` followed by the dark media block."""
        blocks = [HEADER, self._root_block(theme), self._dark_media_block()]
        return self._finish(_join_blocks(blocks))

    def generate_theme_css(self, base_theme: ThemeVariant = ThemeVariant.LIGHT) -> str:
        """
        Full theme stylesheet.

        Contains the ``:root`` variables for ``base_theme``, dark overrides as
        both a media block and a ``.theme-dark`` class, and a transition rule
        so switching themes animates color changes.
        """
        blocks = [
            HEADER,
            self._root_block(base_theme),
            self._dark_media_block(),
            self._dark_class_block(),
            TRANSITION_RULE,
        ]
        return self._finish(_join_blocks(blocks))

    # -------------------------------------------------------------------------
    # Component classes
    # -------------------------------------------------------------------------

    def generate_component_classes(self, component: str, theme: ThemeVariant) -> str:
        """Class rules for ``component.<component>.*`` tokens.

        Raises:
            TokenNotFoundError: If no tokens exist for the component.
        """
        rules: dict[str, list[str]] = {}
        for path in self.resolver.known_paths(theme):
            slot = split_component_path(path)
            if slot is None or slot.component != component:
                continue
            selector = _component_selector(slot.component, slot.variant, slot.state)
            declaration = f"{css_property_name(slot.prop)}: {self._resolved_css(path, theme)};"
            rules.setdefault(selector, []).append(declaration)

        if not rules:
            raise TokenNotFoundError(
                component_path(component),
                f"no tokens defined for component '{component}'",
            )
        return self._finish("\n\n".join(_rule(sel, decls) for sel, decls in rules.items()))

    # -------------------------------------------------------------------------
    # Utility classes
    # -------------------------------------------------------------------------

    def generate_utility_classes(self, theme: ThemeVariant) -> str:
        """Color, spacing, font-size and responsive visibility utilities."""
        rules: list[str] = []
        rules.extend(self._color_utilities(theme))
        rules.extend(self._spacing_utilities(theme))
        rules.extend(self._typography_utilities(theme))
        rules.extend(_visibility_utilities())
        return self._finish("\n\n".join(rules))

    def _namespace(self, head: str, theme: ThemeVariant) -> list[tuple[TokenPath, TokenValue]]:
        resolved = []
        for path in self.resolver.known_paths(theme):
            if path.head == head and len(path) > 1:
                resolved.append((path, self.resolver.resolve(path, theme)))
        return resolved

    def _color_utilities(self, theme: ThemeVariant) -> list[str]:
        rules = []
        for path, value in self._namespace("color", theme):
            if not isinstance(value, ColorValue):
                continue
            name = "-".join(path.segments[1:])
            css = value.to_css()
            rules.append(_rule(f".text-{name}", [f"color: {css};"]))
            rules.append(_rule(f".bg-{name}", [f"background-color: {css};"]))
            rules.append(_rule(f".border-{name}", [f"border-color: {css};"]))
        return rules

    def _spacing_utilities(self, theme: ThemeVariant) -> list[str]:
        rules = []
        for path, value in self._namespace("spacing", theme):
            css = _length_css(value)
            if css is None:
                continue
            name = "-".join(path.segments[1:])
            for short, properties in _SPACING_UTILITIES:
                rules.append(_rule(f".{short}-{name}", [f"{prop}: {css};" for prop in properties]))
        return rules

    def _typography_utilities(self, theme: ThemeVariant) -> list[str]:
        rules = []
        for path, value in self._namespace("typography", theme):
            if not any("size" in segment for segment in path.segments[1:]):
                continue
            css = _length_css(value)
            if css is None:
                continue
            name_segments = [s for s in path.segments[1:] if "size" not in s] or [path.name]
            rules.append(_rule(f".text-{'-'.join(name_segments)}", [f"font-size: {css};"]))
        return rules


# =============================================================================
# Helpers
# =============================================================================


def _join_blocks(blocks: list[str]) -> str:
    return "\n\n".join(block for block in blocks if block) + "\n"


def _rule(selector: str, declarations: list[str]) -> str:
    body = "\n".join(f"  {declaration}" for declaration in declarations)
    return f"{selector} {{\n{body}\n}}"


def _component_selector(component: str, variant: str | None, state: str | None) -> str:
    base = f".{component}-{variant}" if variant else f".{component}"
    if state is None:
        return base
    if state == "disabled":
        return f"{base}.disabled, {base}[disabled]"
    return f"{base}:{state}"


def _length_css(value: TokenValue) -> str | None:
    """Lengths for utilities; bare numbers are treated as pixels."""
    if isinstance(value, DimensionValue):
        return value.to_css()
    if isinstance(value, NumberValue):
        return f"{format_number(value.value)}px"
    return None


def _visibility_utilities() -> list[str]:
    rules = []
    for name, width in BREAKPOINTS.items():
        rules.append(
            f"@media (max-width: {width}) {{\n"
            f"  .hidden-{name}-down {{\n    display: none !important;\n  }}\n}}"
        )
        rules.append(
            f"@media (min-width: {width}) {{\n"
            f"  .hidden-{name}-up {{\n    display: none !important;\n  }}\n}}"
        )
    return rules
