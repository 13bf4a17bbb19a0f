"""
Token value types.

Defines the tagged union of values a token can hold (scalars, composites and
references) and the transforms a reference may apply to the value it points at.

Raw Python/YAML data is coerced with `to_token_value`:

- ``"#1890ff"`` -> ColorValue, ``"16px"`` -> DimensionValue, ``4`` -> NumberValue
- ``"{color_palette.blue.6}"`` -> Reference (DTCG alias syntax)
- ``{"$ref": "color_palette.blue.6", "transform": {"alpha": 0.5}}`` -> TokenReference
- ``{"$typography": {...}}`` / ``{"$shadow": {...}}`` -> composites
- lists -> ArrayValue, other mappings -> ObjectValue
"""

from __future__ import annotations

import re
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .color import (
    RGBA,
    adjust_lightness,
    adjust_saturation,
    format_rgba,
    parse_color,
    to_hex,
    with_alpha,
)
from .errors import InvalidTokenValueError

_DIMENSION_RE = re.compile(r"^(-?(?:\d+\.?\d*|\.\d+))(px|rem|em|%|vh|vw|ms|s|deg)$")
_NUMBER_RE = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)$")
_ALIAS_RE = re.compile(r"^\{([A-Za-z0-9_.-]+)\}$")


def format_number(value: float) -> str:
    """Render a number without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


# =============================================================================
# Scalars
# =============================================================================


class StringValue(BaseModel):
    """Free-form string (font names, keywords, raw CSS)."""

    kind: Literal["string"] = "string"
    value: str

    model_config = ConfigDict(frozen=True)


class NumberValue(BaseModel):
    """Unitless number (font weights, line heights, z-indexes)."""

    kind: Literal["number"] = "number"
    value: float

    model_config = ConfigDict(frozen=True)


class BooleanValue(BaseModel):
    kind: Literal["boolean"] = "boolean"
    value: bool

    model_config = ConfigDict(frozen=True)


class NullValue(BaseModel):
    kind: Literal["null"] = "null"

    model_config = ConfigDict(frozen=True)


class ColorValue(BaseModel):
    """
    Normalized color: lowercase ``#rrggbb`` plus a separate alpha channel.

    Example:
        ColorValue(hex="#1890FF")              -> hex="#1890ff", alpha=1.0
        ColorValue(hex="rgba(0, 0, 0, 0.45)")  -> hex="#000000", alpha=0.45
    """

    kind: Literal["color"] = "color"
    hex: str = Field(description="Normalized #rrggbb")
    alpha: float = Field(default=1.0, ge=0.0, le=1.0, description="Opacity 0-1")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if isinstance(data, str):
            data = {"hex": data}
        if isinstance(data, dict) and isinstance(data.get("hex"), str):
            r, g, b, alpha = parse_color(data["hex"])
            data = {**data, "hex": to_hex(r, g, b)}
            data.setdefault("alpha", alpha)
        return data

    @classmethod
    def parse(cls, text: str) -> ColorValue:
        return cls(hex=text)

    @classmethod
    def from_rgba(cls, rgba: RGBA) -> ColorValue:
        r, g, b, alpha = rgba
        return cls(hex=to_hex(r, g, b), alpha=alpha)

    @property
    def rgba(self) -> RGBA:
        r, g, b, _ = parse_color(self.hex)
        return (r, g, b, self.alpha)

    def lighten(self, amount: float) -> ColorValue:
        return ColorValue.from_rgba(adjust_lightness(self.rgba, amount))

    def darken(self, amount: float) -> ColorValue:
        return ColorValue.from_rgba(adjust_lightness(self.rgba, -amount))

    def saturate(self, amount: float) -> ColorValue:
        return ColorValue.from_rgba(adjust_saturation(self.rgba, amount))

    def desaturate(self, amount: float) -> ColorValue:
        return ColorValue.from_rgba(adjust_saturation(self.rgba, -amount))

    def fade(self, alpha: float) -> ColorValue:
        return ColorValue.from_rgba(with_alpha(self.rgba, alpha))

    def to_css(self) -> str:
        return format_rgba(self.rgba)


class DimensionUnit(StrEnum):
    PX = "px"
    REM = "rem"
    EM = "em"
    PERCENT = "%"
    VH = "vh"
    VW = "vw"
    MS = "ms"
    S = "s"
    DEG = "deg"


class DimensionValue(BaseModel):
    """Numeric magnitude with a CSS unit."""

    kind: Literal["dimension"] = "dimension"
    value: float
    unit: DimensionUnit = DimensionUnit.PX

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, text: str) -> DimensionValue:
        match = _DIMENSION_RE.match(text.strip())
        if not match:
            raise InvalidTokenValueError(f"Invalid dimension: {text!r}")
        return cls(value=float(match.group(1)), unit=DimensionUnit(match.group(2)))

    def with_value(self, value: float) -> DimensionValue:
        return DimensionValue(value=value, unit=self.unit)

    def to_css(self) -> str:
        return f"{format_number(self.value)}{self.unit.value}"


# =============================================================================
# Composites
# =============================================================================


class TypographyValue(BaseModel):
    """
    Composite text style.

    Example:
        TypographyValue(font_family="Inter, sans-serif", font_size="14px", font_weight="400")
    """

    kind: Literal["typography"] = "typography"
    font_family: str | None = Field(default=None, description="Font family")
    font_size: str | None = Field(default=None, description="Font size (px, rem, em)")
    font_weight: str | None = Field(default=None, description="Font weight")
    line_height: str | None = Field(default=None, description="Line height")
    letter_spacing: str | None = Field(default=None, description="Letter spacing")

    model_config = ConfigDict(frozen=True, extra="forbid")


class ShadowValue(BaseModel):
    """Single box shadow layer."""

    kind: Literal["shadow"] = "shadow"
    offset_x: str = "0"
    offset_y: str = "0"
    blur: str = "0"
    spread: str = "0"
    color: str | None = None
    inset: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_css(self) -> str:
        parts = ["inset"] if self.inset else []
        parts.extend([self.offset_x, self.offset_y, self.blur, self.spread])
        if self.color:
            parts.append(self.color)
        return " ".join(parts)


class ArrayValue(BaseModel):
    """Ordered list of values (font stacks, layered shadows)."""

    kind: Literal["array"] = "array"
    items: tuple[TokenValue, ...] = ()

    model_config = ConfigDict(frozen=True)


class ObjectValue(BaseModel):
    """String-keyed mapping of values with no direct CSS form."""

    kind: Literal["object"] = "object"
    entries: dict[str, TokenValue] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


# =============================================================================
# Transforms
# =============================================================================


class Alpha(BaseModel):
    """Replace the alpha channel of a color."""

    kind: Literal["alpha"] = "alpha"
    factor: float

    model_config = ConfigDict(frozen=True)


class Lighten(BaseModel):
    kind: Literal["lighten"] = "lighten"
    factor: float

    model_config = ConfigDict(frozen=True)


class Darken(BaseModel):
    kind: Literal["darken"] = "darken"
    factor: float

    model_config = ConfigDict(frozen=True)


class Saturate(BaseModel):
    kind: Literal["saturate"] = "saturate"
    factor: float

    model_config = ConfigDict(frozen=True)


class Desaturate(BaseModel):
    kind: Literal["desaturate"] = "desaturate"
    factor: float

    model_config = ConfigDict(frozen=True)


class MathOp(StrEnum):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"


class MathTransform(BaseModel):
    """Arithmetic on a number or dimension magnitude; the unit is kept."""

    kind: Literal["math"] = "math"
    op: MathOp
    operand: float

    model_config = ConfigDict(frozen=True)


class Scale(BaseModel):
    """Multiply a number or dimension by a factor."""

    kind: Literal["scale"] = "scale"
    factor: float

    model_config = ConfigDict(frozen=True)


Transform = Annotated[
    Alpha | Lighten | Darken | Saturate | Desaturate | MathTransform | Scale,
    Field(discriminator="kind"),
]

COLOR_TRANSFORM_KINDS = frozenset({"alpha", "lighten", "darken", "saturate", "desaturate"})


# =============================================================================
# References
# =============================================================================


class Reference(BaseModel):
    """Bare pointer to another token path."""

    kind: Literal["reference"] = "reference"
    path: str

    model_config = ConfigDict(frozen=True)


class TokenReference(BaseModel):
    """Pointer to another token path with an optional transform."""

    kind: Literal["token_reference"] = "token_reference"
    reference: str
    transform: Transform | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def path(self) -> str:
        return self.reference


# =============================================================================
# Union type
# =============================================================================

TokenValue = Annotated[
    StringValue
    | NumberValue
    | BooleanValue
    | ColorValue
    | DimensionValue
    | TypographyValue
    | ShadowValue
    | ArrayValue
    | ObjectValue
    | Reference
    | TokenReference
    | NullValue,
    Field(discriminator="kind"),
]

# Rebuild models for recursive forward references
ArrayValue.model_rebuild()
ObjectValue.model_rebuild()

TOKEN_VALUE_TYPES: tuple[type[BaseModel], ...] = (
    StringValue,
    NumberValue,
    BooleanValue,
    ColorValue,
    DimensionValue,
    TypographyValue,
    ShadowValue,
    ArrayValue,
    ObjectValue,
    Reference,
    TokenReference,
    NullValue,
)


def is_token_value(value: Any) -> bool:
    return isinstance(value, TOKEN_VALUE_TYPES)


def is_reference(value: Any) -> bool:
    return isinstance(value, Reference | TokenReference)


def reference_target(value: Reference | TokenReference) -> str:
    return value.path if isinstance(value, Reference) else value.reference


class TokenMetadata(BaseModel):
    """Free-form, theme-independent information about a token."""

    description: str | None = None
    token_type: str = "unknown"
    deprecated: bool = False
    aliases: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    version: str | None = None

    model_config = ConfigDict(frozen=True)


# =============================================================================
# Coercion from raw data
# =============================================================================


def parse_literal(text: str) -> TokenValue:
    """Interpret a CSS-ish literal as the most specific value type."""
    raw = text.strip()
    lowered = raw.lower()
    if lowered in ("true", "false"):
        return BooleanValue(value=lowered == "true")
    if lowered == "null":
        return NullValue()
    if _NUMBER_RE.match(raw):
        return NumberValue(value=float(raw))
    if _DIMENSION_RE.match(raw):
        return DimensionValue.parse(raw)
    try:
        return ColorValue.parse(raw)
    except (ValueError, ValidationError):
        pass
    return StringValue(value=text)


_TRANSFORM_TYPES: dict[str, type[BaseModel]] = {
    "alpha": Alpha,
    "lighten": Lighten,
    "darken": Darken,
    "saturate": Saturate,
    "desaturate": Desaturate,
    "scale": Scale,
}


def to_transform(raw: Any) -> Transform:
    """Coerce ``{"alpha": 0.5}`` / ``{"math": {"op": "add", "operand": 4}}`` into a transform."""
    if isinstance(raw, Alpha | Lighten | Darken | Saturate | Desaturate | MathTransform | Scale):
        return raw
    if not isinstance(raw, dict) or len(raw) != 1:
        raise InvalidTokenValueError(f"Invalid transform: {raw!r}")
    name, arg = next(iter(raw.items()))
    try:
        if name == "math":
            return MathTransform(**arg)
        if name in _TRANSFORM_TYPES:
            return _TRANSFORM_TYPES[name](factor=arg)
    except (TypeError, ValidationError) as e:
        raise InvalidTokenValueError(f"Invalid {name} transform: {e}") from e
    raise InvalidTokenValueError(f"Unknown transform: {name!r}")


def to_token_value(raw: Any) -> TokenValue:
    """Coerce plain Python / YAML data into a token value.

    Raises:
        InvalidTokenValueError: If the data has no token value interpretation.
    """
    if is_token_value(raw):
        return raw
    try:
        return _coerce(raw)
    except ValidationError as e:
        raise InvalidTokenValueError(f"Invalid token value {raw!r}: {e}") from e


def _coerce(raw: Any) -> TokenValue:
    if is_token_value(raw):
        return raw
    if raw is None:
        return NullValue()
    if isinstance(raw, bool):
        return BooleanValue(value=raw)
    if isinstance(raw, int | float):
        return NumberValue(value=raw)
    if isinstance(raw, str):
        alias = _ALIAS_RE.match(raw.strip())
        if alias:
            return Reference(path=alias.group(1))
        return parse_literal(raw)
    if isinstance(raw, list | tuple):
        return ArrayValue(items=tuple(_coerce(item) for item in raw))
    if isinstance(raw, dict):
        if "$ref" in raw:
            transform = raw.get("transform")
            return TokenReference(
                reference=str(raw["$ref"]),
                transform=to_transform(transform) if transform is not None else None,
            )
        if "$color" in raw:
            return ColorValue.parse(str(raw["$color"]))
        if "$typography" in raw:
            fields = _composite_fields(raw, "$typography")
            return TypographyValue(**{str(k): str(v) for k, v in fields.items()})
        if "$shadow" in raw:
            fields = _composite_fields(raw, "$shadow")
            return ShadowValue(
                **{str(k): v if isinstance(v, bool) else str(v) for k, v in fields.items()}
            )
        if "$string" in raw:
            return StringValue(value=str(raw["$string"]))
        return ObjectValue(entries={str(k): _coerce(v) for k, v in raw.items()})
    raise InvalidTokenValueError(f"Unsupported token value type: {type(raw).__name__}")


def _composite_fields(raw: dict[str, Any], key: str) -> dict[str, Any]:
    fields = raw[key]
    if not isinstance(fields, dict):
        raise InvalidTokenValueError(
            f"{key} expects a mapping of fields, got {type(fields).__name__}"
        )
    return fields
