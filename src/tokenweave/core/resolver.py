"""
Token reference resolution.

Walks Reference/TokenReference chains to a concrete value for a path and
theme, applying transforms on the way back out. Results are memoized per
``(path, theme)``; the whole cache is dropped whenever the store changes.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from .color import is_color
from .errors import (
    CircularReferenceError,
    InvalidTokenValueError,
    TokenError,
    TokenNotFoundError,
    TypeMismatchError,
)
from .paths import ThemeVariant, TokenPath, as_path, looks_like_path
from .store import TokenStore
from .transforms import apply_math, apply_transform
from .values import (
    ArrayValue,
    DimensionValue,
    MathOp,
    NumberValue,
    ObjectValue,
    Reference,
    StringValue,
    TokenReference,
    TokenValue,
    Transform,
    is_reference,
    parse_literal,
    reference_target,
)

logger = logging.getLogger(__name__)

_EXPRESSION_RE = re.compile(r"^\s*(\S+)\s+([-+*/])\s+(\S+)\s*$")
_OPERATORS: dict[str, MathOp] = {
    "+": MathOp.ADD,
    "-": MathOp.SUBTRACT,
    "*": MathOp.MULTIPLY,
    "/": MathOp.DIVIDE,
}
_CSS_KEYWORDS = frozenset({"none", "auto", "inherit", "initial", "unset", "revert", "currentcolor"})


class TokenResolver:
    """Resolves token paths against a TokenStore with a theme-aware cache."""

    def __init__(self, store: TokenStore):
        self.store = store
        self._cache: dict[tuple[TokenPath, ThemeVariant], TokenValue] = {}
        store.add_listener(self.clear_cache)

    # -------------------------------------------------------------------------
    # Cache
    # -------------------------------------------------------------------------

    def clear_cache(self) -> None:
        if self._cache:
            logger.debug(f"Dropping {len(self._cache)} cached resolutions")
        self._cache.clear()

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def lookup(self, path: TokenPath, theme: ThemeVariant) -> TokenValue | None:
        """Raw stored value, with ``auto`` falling back to ``light``."""
        value = self.store.get(path, theme)
        if value is None and theme == ThemeVariant.AUTO:
            value = self.store.get(path, ThemeVariant.LIGHT)
        return value

    def known_paths(self, theme: ThemeVariant) -> list[TokenPath]:
        """Paths visible under ``theme``, including ``light`` fallbacks for ``auto``."""
        paths = self.store.list_paths(theme)
        if theme == ThemeVariant.AUTO:
            seen = set(paths)
            paths.extend(p for p in self.store.list_paths(ThemeVariant.LIGHT) if p not in seen)
        return paths

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def resolve(self, path: TokenPath | str, theme: ThemeVariant) -> TokenValue:
        """Resolve a path to a concrete (non-reference) value.

        Raises:
            TokenNotFoundError: Path or a referenced path has no value.
            CircularReferenceError: The reference chain loops.
            TypeMismatchError: A transform was applied to the wrong kind of value.
            InvalidTransformError: A transform factor is unusable.
            InvalidTokenValueError: Composite values nest too deeply to resolve.
        """
        token_path = as_path(path)
        try:
            return self._resolve_path(token_path, theme, [])
        except RecursionError as e:
            raise InvalidTokenValueError(
                "composite references nest too deeply to resolve", token_path
            ) from e

    def _resolve_path(
        self, path: TokenPath, theme: ThemeVariant, chain: list[TokenPath]
    ) -> TokenValue:
        # Reference hops are followed in a loop; transforms apply in reverse once the chain ends
        steps: list[tuple[TokenPath, Transform | None]] = []
        visiting = list(chain)
        seen = set(chain)
        current = path

        while True:
            cached = self._cache.get((current, theme))
            if cached is not None:
                value = cached
                break

            if current in seen:
                raise CircularReferenceError([*visiting, current])

            raw = self.lookup(current, theme)
            if raw is None:
                if visiting:
                    raise TokenNotFoundError(
                        current, f"referenced from {visiting[-1]} but not found"
                    )
                raise TokenNotFoundError(current)

            visiting.append(current)
            seen.add(current)

            if not isinstance(raw, Reference | TokenReference):
                steps.append((current, None))
                value = self._resolve_members(raw, theme, visiting)
                break

            steps.append((current, raw.transform if isinstance(raw, TokenReference) else None))
            text = reference_target(raw)
            target = self._target_path(text, theme)
            if target is None:
                value = parse_literal(text)
                break
            current = target

        for step, transform in reversed(steps):
            if transform is not None:
                value = apply_transform(value, transform, step)
            self._cache[(step, theme)] = value
        return value

    def _target_path(self, text: str, theme: ThemeVariant) -> TokenPath | None:
        """Path a reference points at, or None when its text is an inline literal."""
        # Reference text that cannot be a path is an inline literal ("#40a9ff", "12px")
        if not looks_like_path(text) or _is_literal_text(text):
            return None
        target = TokenPath.parse(text)
        # A bare keyword or named color ("transparent", "inherit") is a literal unless defined
        if _is_keyword_text(text) and self.lookup(target, theme) is None:
            return None
        return target

    def _resolve_members(
        self, value: TokenValue, theme: ThemeVariant, chain: list[TokenPath]
    ) -> TokenValue:
        if isinstance(value, ArrayValue) and any(_contains_reference(v) for v in value.items):
            items = tuple(self._resolve_member(v, theme, chain) for v in value.items)
            return ArrayValue(items=items)
        if isinstance(value, ObjectValue) and any(
            _contains_reference(v) for v in value.entries.values()
        ):
            return ObjectValue(
                entries={k: self._resolve_member(v, theme, chain) for k, v in value.entries.items()}
            )
        return value

    def _resolve_member(
        self, value: TokenValue, theme: ThemeVariant, chain: list[TokenPath]
    ) -> TokenValue:
        if not isinstance(value, Reference | TokenReference):
            return self._resolve_members(value, theme, chain)
        text = reference_target(value)
        target = self._target_path(text, theme)
        if target is None:
            resolved = parse_literal(text)
        else:
            resolved = self._resolve_path(target, theme, chain)
        if isinstance(value, TokenReference) and value.transform is not None:
            return apply_transform(resolved, value.transform, chain[-1])
        return resolved

    def resolve_many(
        self, paths: Iterable[TokenPath | str], theme: ThemeVariant
    ) -> dict[TokenPath, TokenValue | TokenError]:
        """Resolve several paths, returning each value or the error it raised."""
        results: dict[TokenPath, TokenValue | TokenError] = {}
        for raw_path in paths:
            path = as_path(raw_path)
            try:
                results[path] = self.resolve(path, theme)
            except TokenError as e:
                results[path] = e
        return results

    # -------------------------------------------------------------------------
    # Graph queries
    # -------------------------------------------------------------------------

    def validate(self, themes: Iterable[ThemeVariant] | None = None) -> list[TokenError]:
        """Resolve every known path for every theme, collecting all failures."""
        errors: list[TokenError] = []
        for theme in themes if themes is not None else self.store.get_supported_themes():
            for path in self.known_paths(theme):
                try:
                    self.resolve(path, theme)
                except TokenError as e:
                    errors.append(e)
        if errors:
            logger.warning(f"Token validation found {len(errors)} problem(s)")
        return errors

    def find_references_to(self, target: TokenPath | str, theme: ThemeVariant) -> list[TokenPath]:
        """Paths whose stored value directly references ``target``."""
        target_path = as_path(target)
        return [
            path
            for path in self.known_paths(theme)
            if _references(self.lookup(path, theme), target_path)
        ]

    def compute(self, expression: str, theme: ThemeVariant) -> TokenValue:
        """Evaluate ``<operand> <op> <operand>``, e.g. ``spacing_system.base * 2``.

        Operands are numbers, dimensions or token paths. A dimension may be
        combined with a number, or with a dimension of the same unit.
        """
        match = _EXPRESSION_RE.match(expression)
        if not match:
            return self.resolve(expression.strip(), theme)
        left_raw, op_symbol, right_raw = match.groups()
        left = self._operand(left_raw, theme)
        right = self._operand(right_raw, theme)
        op = _OPERATORS[op_symbol]

        if isinstance(right, DimensionValue):
            if isinstance(left, DimensionValue):
                if left.unit != right.unit:
                    raise TypeMismatchError(f"dimension in {left.unit.value}", right.unit.value)
                right = NumberValue(value=right.value)
            elif op in (MathOp.ADD, MathOp.MULTIPLY) and isinstance(left, NumberValue):
                left, right = right, left
        if not isinstance(right, NumberValue):
            raise TypeMismatchError("number or dimension", right.kind)

        return apply_math(left, op, right.value, None)

    def _operand(self, raw: str, theme: ThemeVariant) -> TokenValue:
        value = parse_literal(raw)
        if isinstance(value, NumberValue | DimensionValue):
            return value
        if isinstance(value, StringValue) and looks_like_path(raw):
            return self.resolve(raw, theme)
        raise InvalidTokenValueError(f"Invalid operand: {raw!r}")


def _is_literal_text(text: str) -> bool:
    return isinstance(parse_literal(text), NumberValue | DimensionValue)


def _is_keyword_text(text: str) -> bool:
    return text.lower() in _CSS_KEYWORDS or is_color(text)


def _contains_reference(value: TokenValue) -> bool:
    if is_reference(value):
        return True
    if isinstance(value, ArrayValue):
        return any(_contains_reference(v) for v in value.items)
    if isinstance(value, ObjectValue):
        return any(_contains_reference(v) for v in value.entries.values())
    return False


def _references(value: TokenValue | None, target: TokenPath) -> bool:
    if value is None:
        return False
    if isinstance(value, Reference | TokenReference):
        text = reference_target(value)
        return looks_like_path(text) and TokenPath.parse(text) == target
    if isinstance(value, ArrayValue):
        return any(_references(v, target) for v in value.items)
    if isinstance(value, ObjectValue):
        return any(_references(v, target) for v in value.entries.values())
    return False
