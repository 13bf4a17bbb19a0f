"""Tests for token path parsing and addressing."""

from __future__ import annotations

import pytest

from tokenweave.core.errors import ErrorKind, InvalidTokenPathError
from tokenweave.core.paths import ThemeVariant, TokenPath, as_path, looks_like_path


class TestTokenPathParse:
    """Test the dotted-path tokenizer."""

    def test_parse_segments(self):
        path = TokenPath.parse("color.primary.500")
        assert path.segments == ("color", "primary", "500")
        assert len(path) == 3

    def test_parse_strips_surrounding_whitespace(self):
        assert TokenPath.parse("  spacing.md ").dotted == "spacing.md"

    @pytest.mark.parametrize("raw", ["", "   ", "a..b", ".a", "a.", "a.b c", "color.#fff"])
    def test_invalid_paths_raise(self, raw):
        with pytest.raises(InvalidTokenPathError) as exc_info:
            TokenPath.parse(raw)
        assert exc_info.value.kind == ErrorKind.INVALID_TOKEN_PATH
        assert exc_info.value.raw == raw

    def test_dashes_and_underscores_allowed(self):
        path = TokenPath.parse("component.button.border-color")
        assert path.name == "border-color"
        assert TokenPath.parse("semantic_colors.text").head == "semantic_colors"

    def test_from_segments_matches_parse(self):
        assert TokenPath.from_segments("a", "b", "c") == TokenPath.parse("a.b.c")

    def test_as_path_accepts_both(self):
        path = TokenPath.parse("x.y")
        assert as_path(path) is path
        assert as_path("x.y") == path


class TestTokenPathBehaviour:
    """Test path helpers and value semantics."""

    def test_equality_and_hash(self):
        a = TokenPath.parse("color.primary")
        b = TokenPath.from_segments("color", "primary")
        assert a == b
        assert len({a, b}) == 1
        assert a != TokenPath.parse("color.primary.500")

    def test_css_name(self):
        path = TokenPath.parse("color.primary.500")
        assert path.css_name("ant") == "--ant-color-primary-500"
        assert path.css_name() == "--color-primary-500"

    def test_parent_and_child(self):
        path = TokenPath.parse("a.b.c")
        assert path.parent() == TokenPath.parse("a.b")
        assert TokenPath.parse("a").parent() is None
        assert path.parent().child("c") == path

    def test_startswith_is_segment_wise(self):
        path = TokenPath.parse("color.primaryx.500")
        assert not path.startswith(TokenPath.parse("color.primary"))
        assert path.startswith(TokenPath.parse("color.primaryx"))
        assert path.startswith(("color",))

    def test_str_and_repr(self):
        path = TokenPath.parse("spacing.md")
        assert str(path) == "spacing.md"
        assert repr(path) == "TokenPath('spacing.md')"

    def test_sorting(self):
        paths = [TokenPath.parse("b.a"), TokenPath.parse("a.z"), TokenPath.parse("a.b")]
        assert [p.dotted for p in sorted(paths)] == ["a.b", "a.z", "b.a"]

    def test_looks_like_path(self):
        assert looks_like_path("color_palette.blue.6")
        assert not looks_like_path("#40a9ff")
        assert not looks_like_path("")
        assert not looks_like_path("a..b")


class TestThemeVariant:
    """Test theme variant values."""

    def test_values(self):
        assert [t.value for t in ThemeVariant] == ["light", "dark", "auto"]
        assert ThemeVariant("dark") is ThemeVariant.DARK
