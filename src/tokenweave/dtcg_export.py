"""
W3C Design Token Community Group (DTCG) tokens.json export.

Generates a DTCG-style token tree from a DesignTokenSystem: every path
becomes nested groups ending in a ``{"$type", "$value"}`` token. Plain
references export as ``"{dotted.path}"`` aliases; transformed references
export their resolved value with the source alias under ``$extensions``.
See: https://design-tokens.github.io/community-group/format/
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from tokenweave.core.errors import SerializationError, TokenError
from tokenweave.core.paths import ThemeVariant, TokenPath
from tokenweave.core.tiers import is_private
from tokenweave.core.values import (
    ArrayValue,
    BooleanValue,
    ColorValue,
    DimensionUnit,
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
    reference_target,
)

if TYPE_CHECKING:
    from tokenweave.system import DesignTokenSystem

logger = logging.getLogger(__name__)

EXTENSION_KEY = "tokenweave"

_DURATION_UNITS = frozenset({DimensionUnit.MS, DimensionUnit.S})


def dtcg_type(value: TokenValue) -> str | None:
    """DTCG ``$type`` for a concrete value, None when the format has no equivalent."""
    if isinstance(value, ColorValue):
        return "color"
    if isinstance(value, DimensionValue):
        return "duration" if value.unit in _DURATION_UNITS else "dimension"
    if isinstance(value, NumberValue):
        return "number"
    if isinstance(value, TypographyValue):
        return "typography"
    if isinstance(value, ShadowValue):
        return "shadow"
    if isinstance(value, BooleanValue):
        return "boolean"
    if isinstance(value, StringValue):
        return "string"
    return None


def dtcg_value(value: TokenValue) -> Any:
    """JSON-serializable ``$value`` for a value."""
    if isinstance(value, Reference | TokenReference):
        return f"{{{reference_target(value)}}}"
    if isinstance(value, ColorValue | DimensionValue):
        return value.to_css()
    if isinstance(value, NumberValue):
        return int(value.value) if float(value.value).is_integer() else value.value
    if isinstance(value, BooleanValue | StringValue):
        return value.value
    if isinstance(value, NullValue):
        return None
    if isinstance(value, TypographyValue):
        fields = {
            "fontFamily": value.font_family,
            "fontSize": value.font_size,
            "fontWeight": value.font_weight,
            "lineHeight": value.line_height,
            "letterSpacing": value.letter_spacing,
        }
        return {key: item for key, item in fields.items() if item is not None}
    if isinstance(value, ShadowValue):
        shadow: dict[str, Any] = {
            "offsetX": value.offset_x,
            "offsetY": value.offset_y,
            "blur": value.blur,
            "spread": value.spread,
        }
        if value.color:
            shadow["color"] = value.color
        if value.inset:
            shadow["inset"] = True
        return shadow
    if isinstance(value, ArrayValue):
        return [dtcg_value(item) for item in value.items]
    if isinstance(value, ObjectValue):
        return {key: dtcg_value(item) for key, item in value.entries.items()}
    raise SerializationError(f"Cannot export value {value!r}")


def _token_entry(
    system: DesignTokenSystem, path: TokenPath, theme: ThemeVariant
) -> dict[str, Any]:
    raw = system.resolver.lookup(path, theme)
    if raw is None:
        raise SerializationError(f"No value for {path} in {theme}")

    resolved: TokenValue | None
    try:
        resolved = system.resolver.resolve(path, theme)
    except TokenError as e:
        logger.warning(f"Exporting {path} unresolved: {e}")
        resolved = None

    entry: dict[str, Any] = {}
    token_type = dtcg_type(resolved) if resolved is not None else None
    if token_type:
        entry["$type"] = token_type

    if isinstance(raw, TokenReference) and raw.transform is not None and resolved is not None:
        entry["$value"] = dtcg_value(resolved)
        entry["$extensions"] = {
            EXTENSION_KEY: {
                "reference": raw.reference,
                "transform": raw.transform.model_dump(mode="json"),
            }
        }
    else:
        entry["$value"] = dtcg_value(raw)

    metadata = system.store.get_metadata(path)
    if metadata is not None:
        if metadata.description:
            entry["$description"] = metadata.description
        if metadata.deprecated:
            entry["$deprecated"] = True
    return entry


def generate_dtcg_tokens(
    system: DesignTokenSystem, theme: ThemeVariant | None = None
) -> dict[str, Any]:
    """Generate a DTCG token tree for one theme.

    Args:
        system: Token system to export.
        theme: Theme to export; defaults to the system's active theme.

    Returns:
        Nested dict suitable for writing as tokens.json.
    """
    export_theme = theme or system.active_theme
    dtcg: dict[str, Any] = {}

    for path in system.resolver.known_paths(export_theme):
        if is_private(path):
            continue
        group = dtcg
        for segment in path.segments[:-1]:
            group = group.setdefault(segment, {})
        # A path that is also a group prefix keeps its children next to $value
        group.setdefault(path.name, {}).update(_token_entry(system, path, export_theme))

    return dtcg


def export_dtcg_file(
    system: DesignTokenSystem, output_path: Path, theme: ThemeVariant | None = None
) -> Path:
    """Generate DTCG tokens and write to a JSON file.

    Args:
        system: Token system to export.
        output_path: Path to write tokens.json.
        theme: Theme to export; defaults to the active theme.

    Returns:
        Path to the written file.
    """
    tokens = generate_dtcg_tokens(system, theme)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(tokens, indent=2),
        encoding="utf-8",
    )
    logger.info(f"Wrote DTCG tokens to {output_path}")

    return output_path


def format_dtcg_summary(tokens: dict[str, Any]) -> str:
    """One-line count of exported tokens, e.g. ``"42 tokens in 6 groups"``."""
    count = _count_tokens(tokens)
    return f"{count} tokens in {len(tokens)} groups"


def _count_tokens(node: dict[str, Any]) -> int:
    total = 1 if "$value" in node else 0
    for key, child in node.items():
        if not key.startswith("$") and isinstance(child, dict):
            total += _count_tokens(child)
    return total
