"""
Transform application.

Transforms run on the terminal value of a fully resolved reference. Color
transforms need a ColorValue; math and scale transforms need a NumberValue or
DimensionValue and keep the dimension's unit.
"""

from __future__ import annotations

from .errors import InvalidTransformError, TypeMismatchError
from .paths import TokenPath
from .values import (
    Alpha,
    ColorValue,
    Darken,
    Desaturate,
    DimensionValue,
    Lighten,
    MathOp,
    MathTransform,
    NumberValue,
    Saturate,
    Scale,
    Transform,
    TokenValue,
)


def _check_fraction(transform: Transform) -> float:
    factor = transform.factor  # type: ignore[union-attr]
    if not 0.0 <= factor <= 1.0:
        raise InvalidTransformError(
            f"{transform.kind} factor must be between 0 and 1, got {factor}"
        )
    return factor


def _apply_color(value: TokenValue, transform: Transform, path: TokenPath | None) -> ColorValue:
    if not isinstance(value, ColorValue):
        raise TypeMismatchError("color", value.kind, path)
    factor = _check_fraction(transform)
    if isinstance(transform, Alpha):
        return value.fade(factor)
    if isinstance(transform, Lighten):
        return value.lighten(factor)
    if isinstance(transform, Darken):
        return value.darken(factor)
    if isinstance(transform, Saturate):
        return value.saturate(factor)
    if isinstance(transform, Desaturate):
        return value.desaturate(factor)
    raise InvalidTransformError(f"Unknown color transform: {transform.kind}")


def _compute(magnitude: float, op: MathOp, operand: float) -> float:
    if op == MathOp.ADD:
        return magnitude + operand
    if op == MathOp.SUBTRACT:
        return magnitude - operand
    if op == MathOp.MULTIPLY:
        return magnitude * operand
    if op == MathOp.DIVIDE:
        if operand == 0:
            raise InvalidTransformError("Division by zero")
        return magnitude / operand
    raise InvalidTransformError(f"Unknown math operation: {op}")


def apply_math(
    value: TokenValue, op: MathOp, operand: float, path: TokenPath | None
) -> NumberValue | DimensionValue:
    if isinstance(value, DimensionValue):
        return value.with_value(_compute(value.value, op, operand))
    if isinstance(value, NumberValue):
        return NumberValue(value=_compute(value.value, op, operand))
    raise TypeMismatchError("number or dimension", value.kind, path)


def apply_transform(
    value: TokenValue, transform: Transform, path: TokenPath | None = None
) -> TokenValue:
    """Apply a transform to a resolved value.

    Args:
        value: Terminal (non-reference) value.
        transform: Transform to apply.
        path: Path being resolved, used in error messages.

    Returns:
        New value; the input is never modified.

    Raises:
        TypeMismatchError: Color transform on a non-color, or math on a non-number.
        InvalidTransformError: Factor out of range or division by zero.
    """
    if isinstance(transform, MathTransform):
        return apply_math(value, transform.op, transform.operand, path)
    if isinstance(transform, Scale):
        return apply_math(value, MathOp.MULTIPLY, transform.factor, path)
    return _apply_color(value, transform, path)
