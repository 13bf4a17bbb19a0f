"""
Three-tier token convention.

Global tokens hold raw design decisions, alias tokens give them semantic
names, and component tokens bind those names to a component's variants and
states. The tier of a path is decided by its leading segment through a single
lookup table; nothing else in the package inspects path prefixes by hand.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .paths import TokenPath


class TokenTier(StrEnum):
    GLOBAL = "global"
    ALIAS = "alias"
    COMPONENT = "component"
    CUSTOM = "custom"


class TokenCategory(StrEnum):
    """Grouping used for generated-CSS section comments."""

    COLORS = "colors"
    SPACING = "spacing"
    TYPOGRAPHY = "typography"
    OTHER = "other"


TIER_PREFIXES: dict[str, TokenTier] = {
    "color_palette": TokenTier.GLOBAL,
    "font_system": TokenTier.GLOBAL,
    "spacing_system": TokenTier.GLOBAL,
    "border_system": TokenTier.GLOBAL,
    "shadow_system": TokenTier.GLOBAL,
    "motion_system": TokenTier.GLOBAL,
    "sizing_system": TokenTier.GLOBAL,
    "semantic_colors": TokenTier.ALIAS,
    "semantic_typography": TokenTier.ALIAS,
    "semantic_spacing": TokenTier.ALIAS,
    "semantic_sizing": TokenTier.ALIAS,
    "component": TokenTier.COMPONENT,
}

CATEGORY_PREFIXES: dict[str, TokenCategory] = {
    "color": TokenCategory.COLORS,
    "color_palette": TokenCategory.COLORS,
    "semantic_colors": TokenCategory.COLORS,
    "spacing": TokenCategory.SPACING,
    "spacing_system": TokenCategory.SPACING,
    "semantic_spacing": TokenCategory.SPACING,
    "typography": TokenCategory.TYPOGRAPHY,
    "font_system": TokenCategory.TYPOGRAPHY,
    "semantic_typography": TokenCategory.TYPOGRAPHY,
}

CATEGORY_TITLES: dict[TokenCategory, str] = {
    TokenCategory.COLORS: "Colors",
    TokenCategory.SPACING: "Spacing",
    TokenCategory.TYPOGRAPHY: "Typography",
    TokenCategory.OTHER: "Other",
}

# Leading segments that never reach generated CSS
PRIVATE_NAMESPACES = frozenset({"internal", "private"})

COMPONENT_STATES = ("default", "hover", "active", "focus", "disabled")
# States that produce a selector suffix; "default" maps to the bare selector
PSEUDO_STATES = frozenset({"hover", "active", "focus", "disabled"})
BUTTON_VARIANTS = ("primary", "secondary", "ghost", "link", "text")


def tier_of(path: TokenPath) -> TokenTier:
    return TIER_PREFIXES.get(path.head, TokenTier.CUSTOM)


def category_of(path: TokenPath) -> TokenCategory:
    return CATEGORY_PREFIXES.get(path.head, TokenCategory.OTHER)


def is_private(path: TokenPath) -> bool:
    return path.head.startswith("_") or path.head in PRIVATE_NAMESPACES


def component_path(component: str, *rest: str) -> TokenPath:
    """Build ``component.<name>.<variant-or-state>...<property>``."""
    return TokenPath.from_segments("component", component, *rest)


# =============================================================================
# Component path anatomy
# =============================================================================


@dataclass(frozen=True)
class ComponentSlot:
    """
    Where a component token lands in generated CSS.

    Attributes:
        component: Component name (``button``)
        variant: Variant name, None for base/state tokens
        state: State keyword, None for the default state
        prop: CSS property path segments (``("border", "color")``)
    """

    component: str
    variant: str | None
    state: str | None
    prop: tuple[str, ...]


def split_component_path(path: TokenPath) -> ComponentSlot | None:
    """Decompose a component path into component/variant/state/property.

    - ``component.button.background`` -> base
    - ``component.button.hover.background`` -> state
    - ``component.button.primary.background`` -> variant
    - ``component.button.primary.hover.background`` -> variant + state

    Returns None for paths outside the component tier or too short to carry a property.
    """
    segments = path.segments
    if tier_of(path) != TokenTier.COMPONENT or len(segments) < 3:
        return None
    component = segments[1]
    if len(segments) == 3:
        return ComponentSlot(component, None, None, (segments[2],))

    third = segments[2]
    if third in COMPONENT_STATES:
        state = third if third in PSEUDO_STATES else None
        return ComponentSlot(component, None, state, segments[3:])

    variant = third
    rest = segments[3:]
    if len(rest) > 1 and rest[0] in COMPONENT_STATES:
        state = rest[0] if rest[0] in PSEUDO_STATES else None
        return ComponentSlot(component, variant, state, rest[1:])
    return ComponentSlot(component, variant, None, rest)
