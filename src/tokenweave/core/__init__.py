"""Core token model: paths, values, storage, tiers and resolution."""

from .errors import (
    CircularReferenceError,
    ConfigError,
    ErrorKind,
    InvalidTokenPathError,
    InvalidTokenValueError,
    InvalidTransformError,
    SerializationError,
    TokenError,
    TokenNotFoundError,
    TypeMismatchError,
)
from .paths import ThemeVariant, TokenPath
from .resolver import TokenResolver
from .store import TokenStore
from .tiers import TokenCategory, TokenTier, category_of, tier_of
from .values import (
    Alpha,
    ArrayValue,
    BooleanValue,
    ColorValue,
    Darken,
    Desaturate,
    DimensionUnit,
    DimensionValue,
    Lighten,
    MathOp,
    MathTransform,
    NullValue,
    NumberValue,
    ObjectValue,
    Reference,
    Saturate,
    Scale,
    ShadowValue,
    StringValue,
    TokenMetadata,
    TokenReference,
    TokenValue,
    Transform,
    TypographyValue,
    parse_literal,
    to_token_value,
)

__all__ = [
    "ErrorKind",
    "TokenError",
    "TokenNotFoundError",
    "CircularReferenceError",
    "TypeMismatchError",
    "InvalidTransformError",
    "InvalidTokenPathError",
    "InvalidTokenValueError",
    "SerializationError",
    "ConfigError",
    "ThemeVariant",
    "TokenPath",
    "TokenStore",
    "TokenResolver",
    "TokenTier",
    "TokenCategory",
    "tier_of",
    "category_of",
    "TokenValue",
    "StringValue",
    "NumberValue",
    "BooleanValue",
    "NullValue",
    "ColorValue",
    "DimensionUnit",
    "DimensionValue",
    "TypographyValue",
    "ShadowValue",
    "ArrayValue",
    "ObjectValue",
    "Reference",
    "TokenReference",
    "TokenMetadata",
    "Transform",
    "Alpha",
    "Lighten",
    "Darken",
    "Saturate",
    "Desaturate",
    "MathOp",
    "MathTransform",
    "Scale",
    "parse_literal",
    "to_token_value",
]
