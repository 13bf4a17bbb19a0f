"""
Pure-Python color parsing and HSL adjustments.

Colors are handled as ``(r, g, b, alpha)`` tuples with integer channels
0-255 and alpha 0-1. Adjustments follow the additive, clamped convention:
``lighten(0.1)`` adds 10 points of HSL lightness.
"""

from __future__ import annotations

import colorsys
import re

RGBA = tuple[int, int, int, float]

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FUNC_RE = re.compile(r"^(rgba?|hsla?)\((.*)\)$", re.IGNORECASE)

# Small named set; anything else must be spelled as hex or a color function.
NAMED_COLORS: dict[str, RGBA] = {
    "black": (0, 0, 0, 1.0),
    "white": (255, 255, 255, 1.0),
    "red": (255, 0, 0, 1.0),
    "green": (0, 128, 0, 1.0),
    "blue": (0, 0, 255, 1.0),
    "gray": (128, 128, 128, 1.0),
    "grey": (128, 128, 128, 1.0),
    "transparent": (0, 0, 0, 0.0),
}


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _parse_channel(raw: str) -> int:
    raw = raw.strip()
    if raw.endswith("%"):
        return round(_clamp(float(raw[:-1]) / 100.0) * 255)
    return int(round(_clamp(float(raw), 0.0, 255.0)))


def _parse_alpha(raw: str) -> float:
    raw = raw.strip()
    if raw.endswith("%"):
        return _clamp(float(raw[:-1]) / 100.0)
    return _clamp(float(raw))


def _split_args(body: str) -> tuple[list[str], str | None]:
    """Split ``r, g, b`` / ``r g b / a`` argument lists."""
    alpha: str | None = None
    if "/" in body:
        body, alpha = body.split("/", 1)
    parts = [p for p in re.split(r"[\s,]+", body.strip()) if p]
    return parts, alpha


def parse_color(text: str) -> RGBA:
    """Parse a CSS color literal.

    Supports ``#rgb``, ``#rgba``, ``#rrggbb``, ``#rrggbbaa``, ``rgb()``,
    ``rgba()``, ``hsl()``, ``hsla()`` and a handful of named colors.

    Raises:
        ValueError: If the text is not a recognised color.
    """
    value = text.strip()
    lowered = value.lower()
    if lowered in NAMED_COLORS:
        return NAMED_COLORS[lowered]

    hex_match = _HEX_RE.match(value)
    if hex_match:
        digits = hex_match.group(1).lower()
        if len(digits) in (3, 4):
            digits = "".join(ch * 2 for ch in digits)
        r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
        alpha = 1.0
        if len(digits) == 8:
            alpha = round(int(digits[6:8], 16) / 255, 3)
        return (r, g, b, alpha)

    func_match = _FUNC_RE.match(value)
    if func_match:
        func = func_match.group(1).lower()
        parts, alpha_raw = _split_args(func_match.group(2))
        if len(parts) == 4 and alpha_raw is None:
            alpha_raw = parts.pop()
        if len(parts) != 3:
            raise ValueError(f"Invalid color function: {text!r}")
        alpha = _parse_alpha(alpha_raw) if alpha_raw is not None else 1.0
        if func.startswith("rgb"):
            r, g, b = (_parse_channel(p) for p in parts)
            return (r, g, b, alpha)
        hue = float(parts[0].removesuffix("deg")) % 360
        sat = _clamp(float(parts[1].rstrip("%")) / 100.0)
        light = _clamp(float(parts[2].rstrip("%")) / 100.0)
        r, g, b = hsl_to_rgb(hue, sat, light)
        return (r, g, b, alpha)

    raise ValueError(f"Invalid color: {text!r}")


def is_color(text: str) -> bool:
    try:
        parse_color(text)
    except ValueError:
        return False
    return True


def to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02x}{g:02x}{b:02x}"


def rgb_to_hsl(r: int, g: int, b: int) -> tuple[float, float, float]:
    """Convert 0-255 RGB to (hue degrees, saturation 0-1, lightness 0-1)."""
    h, light, s = colorsys.rgb_to_hls(r / 255, g / 255, b / 255)
    return (h * 360.0, s, light)


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> tuple[int, int, int]:
    r, g, b = colorsys.hls_to_rgb((hue % 360) / 360.0, lightness, saturation)
    return (round(r * 255), round(g * 255), round(b * 255))


# =============================================================================
# Adjustments
# =============================================================================


def adjust_lightness(rgba: RGBA, amount: float) -> RGBA:
    r, g, b, alpha = rgba
    hue, sat, light = rgb_to_hsl(r, g, b)
    nr, ng, nb = hsl_to_rgb(hue, sat, _clamp(light + amount))
    return (nr, ng, nb, alpha)


def adjust_saturation(rgba: RGBA, amount: float) -> RGBA:
    r, g, b, alpha = rgba
    hue, sat, light = rgb_to_hsl(r, g, b)
    nr, ng, nb = hsl_to_rgb(hue, _clamp(sat + amount), light)
    return (nr, ng, nb, alpha)


def with_alpha(rgba: RGBA, alpha: float) -> RGBA:
    r, g, b, _ = rgba
    return (r, g, b, _clamp(alpha))


def format_rgba(rgba: RGBA) -> str:
    """CSS text for a color: hex when opaque, ``rgba()`` otherwise."""
    r, g, b, alpha = rgba
    if alpha >= 1.0:
        return to_hex(r, g, b)
    return f"rgba({r}, {g}, {b}, {alpha:g})"
