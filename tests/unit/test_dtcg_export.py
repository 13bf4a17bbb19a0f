"""Tests for DTCG tokens.json export."""

from __future__ import annotations

import json

import pytest

from tokenweave.core.paths import ThemeVariant
from tokenweave.core.values import (
    Alpha,
    BooleanValue,
    ColorValue,
    DimensionValue,
    NumberValue,
    Reference,
    ShadowValue,
    StringValue,
    TokenMetadata,
    TokenReference,
    TypographyValue,
)
from tokenweave.dtcg_export import (
    EXTENSION_KEY,
    dtcg_type,
    dtcg_value,
    export_dtcg_file,
    format_dtcg_summary,
    generate_dtcg_tokens,
)


class TestTypesAndValues:
    """Test per-value DTCG mapping."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (ColorValue.parse("#fff"), "color"),
            (DimensionValue.parse("16px"), "dimension"),
            (DimensionValue.parse("200ms"), "duration"),
            (NumberValue(value=1.5), "number"),
            (BooleanValue(value=True), "boolean"),
            (StringValue(value="solid"), "string"),
            (TypographyValue(font_size="14px"), "typography"),
            (ShadowValue(blur="4px"), "shadow"),
        ],
    )
    def test_dtcg_type(self, value, expected):
        assert dtcg_type(value) == expected

    def test_reference_becomes_alias(self):
        assert dtcg_value(Reference(path="color.primary")) == "{color.primary}"

    def test_integral_numbers(self):
        assert dtcg_value(NumberValue(value=400)) == 400
        assert dtcg_value(NumberValue(value=1.5)) == 1.5

    def test_typography_keys(self):
        value = TypographyValue(font_family="Inter", font_size="14px")
        assert dtcg_value(value) == {"fontFamily": "Inter", "fontSize": "14px"}

    def test_shadow_keys(self):
        value = ShadowValue(offset_y="2px", blur="8px", color="rgba(0, 0, 0, 0.15)")
        assert dtcg_value(value) == {
            "offsetX": "0",
            "offsetY": "2px",
            "blur": "8px",
            "spread": "0",
            "color": "rgba(0, 0, 0, 0.15)",
        }


class TestGenerateTokens:
    """Test whole-tree generation."""

    def test_nested_groups(self, empty_system):
        empty_system.set_batch({"color.primary": "#1890ff", "color.link": "{color.primary}"})
        tokens = generate_dtcg_tokens(empty_system)
        assert tokens == {
            "color": {
                "primary": {"$type": "color", "$value": "#1890ff"},
                "link": {"$type": "color", "$value": "{color.primary}"},
            }
        }

    def test_transformed_reference(self, empty_system):
        empty_system.set_batch(
            {
                "color.base": "#000000",
                "color.faded": TokenReference(reference="color.base", transform=Alpha(factor=0.5)),
            }
        )
        entry = generate_dtcg_tokens(empty_system)["color"]["faded"]
        assert entry["$value"] == "rgba(0, 0, 0, 0.5)"
        assert entry["$extensions"][EXTENSION_KEY] == {
            "reference": "color.base",
            "transform": {"kind": "alpha", "factor": 0.5},
        }

    def test_metadata_fields(self, empty_system):
        empty_system.set_token("color.old", "#ff0000")
        empty_system.set_metadata(
            "color.old", TokenMetadata(description="Legacy red", deprecated=True)
        )
        entry = generate_dtcg_tokens(empty_system)["color"]["old"]
        assert entry["$description"] == "Legacy red"
        assert entry["$deprecated"] is True

    def test_private_paths_skipped(self, empty_system):
        empty_system.set_batch({"_scratch.x": 1, "internal.y": 2, "color.z": "#fff"})
        assert list(generate_dtcg_tokens(empty_system)) == ["color"]

    def test_dangling_reference_exported_as_alias(self, empty_system):
        empty_system.set_token("alias.x", "{global.gone}")
        entry = generate_dtcg_tokens(empty_system)["alias"]["x"]
        assert entry == {"$value": "{global.gone}"}

    def test_explicit_theme(self, tiered_store):
        from tokenweave.system import DesignTokenSystem

        system = DesignTokenSystem(store=tiered_store)
        tokens = generate_dtcg_tokens(system, ThemeVariant.DARK)
        assert tokens["semantic_colors"]["primary"]["$value"] == "{color_palette.blue.5}"
        assert system.active_theme == ThemeVariant.LIGHT


class TestExportFile:
    """Test writing tokens.json."""

    def test_export_file(self, empty_system, tmp_path):
        empty_system.set_batch({"spacing.sm": "8px", "spacing.md": "16px"})
        output = export_dtcg_file(empty_system, tmp_path / "build" / "tokens.json")
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["spacing"]["md"] == {"$type": "dimension", "$value": "16px"}

    def test_summary(self, empty_system):
        empty_system.set_batch({"spacing.sm": "8px", "color.primary": "#fff", "ratio": 2})
        summary = format_dtcg_summary(generate_dtcg_tokens(empty_system))
        assert summary == "3 tokens in 3 groups"
