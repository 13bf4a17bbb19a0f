"""Tests for the DesignTokenSystem facade and the shared instance."""

from __future__ import annotations

import threading

import pytest

from tokenweave import system as system_module
from tokenweave.config import TokenSystemConfig
from tokenweave.core.errors import CircularReferenceError, SerializationError
from tokenweave.core.paths import ThemeVariant, TokenPath
from tokenweave.core.values import ColorValue, DimensionValue, Reference, TokenMetadata
from tokenweave.system import DesignTokenSystem, configure_shared_system, get_shared_system


@pytest.fixture
def reset_shared(monkeypatch):
    """Start each test without a shared instance."""
    monkeypatch.setattr(system_module, "_shared", None)


class TestConstruction:
    """Test seeding and configuration."""

    def test_empty_system(self, empty_system):
        assert len(empty_system.store) == 0
        assert empty_system.active_theme == ThemeVariant.LIGHT

    def test_defaults_seeded(self, default_system):
        assert default_system.has_token("color_palette.blue.6")
        assert default_system.get_token("semantic_colors.primary").hex == "#1890ff"

    def test_with_defaults_keeps_other_settings(self):
        system = DesignTokenSystem.with_defaults(
            TokenSystemConfig(prefix="ds", load_defaults=False)
        )
        assert system.config.load_defaults is True
        assert system.get_css_var_name("color.primary") == "--ds-color-primary"

    def test_explicit_store_is_not_seeded(self, store):
        system = DesignTokenSystem(store=store)
        assert system.store is store
        assert len(store) == 0

    def test_repr(self, empty_system):
        assert repr(empty_system) == "DesignTokenSystem(theme=light, prefix='ant', tokens=0)"


class TestTokenAccess:
    """Test get/set through the active theme."""

    def test_set_and_get(self, empty_system):
        empty_system.set_token("spacing.md", "16px")
        assert empty_system.get_token("spacing.md") == DimensionValue.parse("16px")

    def test_get_token_missing_is_none(self, empty_system):
        assert empty_system.get_token("nothing.here") is None

    def test_get_token_dangling_is_none(self, empty_system):
        empty_system.set_token("alias.x", Reference(path="global.gone"))
        assert empty_system.get_token("alias.x") is None

    def test_get_token_cycle_raises(self, empty_system):
        empty_system.set_batch({"a": "{b}", "b": "{a}"})
        with pytest.raises(CircularReferenceError):
            empty_system.get_token("a")

    def test_raw_token_keeps_reference(self, empty_system):
        empty_system.set_batch({"global.y": "#000000", "alias.x": "{global.y}"})
        assert empty_system.get_raw_token("alias.x") == Reference(path="global.y")
        assert empty_system.resolve_token("alias.x") == ColorValue.parse("#000000")

    def test_set_token_targets_active_theme(self, empty_system):
        empty_system.switch_theme(ThemeVariant.DARK)
        empty_system.set_token("color.bg", "#141414")
        assert empty_system.store.has_token("color.bg", ThemeVariant.DARK)
        assert not empty_system.store.has_token("color.bg", ThemeVariant.LIGHT)

    def test_search_is_case_insensitive(self, default_system):
        results = default_system.search_tokens("BLUE.6")
        assert TokenPath.parse("color_palette.blue.6") in results
        assert all("blue.6" in p.dotted for p in results)

    def test_metadata(self, empty_system):
        empty_system.set_metadata("color.primary", TokenMetadata(description="Brand"))
        assert empty_system.get_metadata("color.primary").description == "Brand"

    def test_find_references_and_compute(self, default_system):
        refs = default_system.find_references_to("semantic_colors.primary")
        assert TokenPath.parse("component.button.primary.background") in refs
        assert default_system.compute("spacing_system.base * 4") == DimensionValue.parse("16px")


class TestThemes:
    """Test theme switching and variants."""

    def test_switch_theme_changes_resolution(self, default_system):
        default_system.switch_theme("dark")
        assert default_system.active_theme == ThemeVariant.DARK
        assert default_system.get_token("semantic_colors.primary").hex == "#40a9ff"

    def test_round_trip_reproduces_export(self, default_system):
        before = default_system.export_css_variables()
        default_system.switch_theme(ThemeVariant.DARK)
        default_system.export_css_variables()
        default_system.switch_theme(ThemeVariant.LIGHT)
        assert default_system.export_css_variables() == before

    def test_export_is_idempotent(self, default_system):
        assert default_system.generate_theme_css() == default_system.generate_theme_css()

    def test_create_theme_variant(self, empty_system):
        empty_system.set_batch({"color.primary": "#1890ff", "spacing.md": "16px"})

        copied = empty_system.create_theme_variant(
            ThemeVariant.LIGHT, ThemeVariant.AUTO, {"color.primary": "#ff0000"}
        )

        assert copied == 2
        assert empty_system.active_theme == ThemeVariant.LIGHT
        assert empty_system.get_token("color.primary").hex == "#1890ff"
        auto = empty_system.store.get("color.primary", ThemeVariant.AUTO)
        assert auto.hex == "#ff0000"


class TestOutputs:
    """Test CSS and DTCG outputs through the facade."""

    def test_default_theme_css(self, default_system):
        css = default_system.generate_theme_css()
        assert "  --ant-semantic_colors-primary: #1890ff;" in css
        assert "    --ant-semantic_colors-primary: #40a9ff;" in css
        assert ".theme-dark {" in css

    def test_default_component_css(self, default_system):
        css = default_system.generate_component_css("button")
        assert ".button {" in css
        assert ".button-primary:hover {" in css
        assert ".button.disabled, .button[disabled] {" in css

    def test_default_utility_css(self, default_system):
        css = default_system.generate_utility_css()
        assert ".text-primary {\n  color: #1890ff;\n}" in css
        assert ".m-md {\n  margin: 16px;\n}" in css
        assert ".text-lg {\n  font-size: 16px;\n}" in css

    def test_defaults_validate_cleanly(self, default_system):
        assert default_system.validate_tokens() == []

    def test_export_dtcg(self, default_system):
        tokens = default_system.export_dtcg()
        assert tokens["color_palette"]["blue"]["6"] == {"$type": "color", "$value": "#1890ff"}

    def test_write_css(self, default_system, tmp_path):
        target = tmp_path / "out" / "theme.css"
        written = default_system.write_css(target)
        assert written == target
        assert target.read_text(encoding="utf-8") == default_system.generate_theme_css()

    def test_write_css_failure(self, empty_system, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(SerializationError):
            empty_system.write_css(blocker / "theme.css")


class TestImportAndReset:
    """Test token document import and resetting to the bundled defaults."""

    def test_import_mapping(self, empty_system):
        count = empty_system.import_tokens(
            {
                "light": {"color": {"bg": "#ffffff", "text": "{color.fg}", "fg": "#000000"}},
                "dark": {"color": {"bg": "#141414"}},
                "metadata": {"color.bg": {"description": "Page background"}},
            }
        )

        assert count == 4
        assert empty_system.get_token("color.text").hex == "#000000"
        empty_system.switch_theme(ThemeVariant.DARK)
        assert empty_system.get_token("color.bg").hex == "#141414"
        assert empty_system.get_metadata("color.bg").description == "Page background"

    def test_import_file(self, empty_system, tmp_path):
        path = tmp_path / "brand.yaml"
        path.write_text("light:\n  spacing:\n    md: 20px\n", encoding="utf-8")
        assert empty_system.import_tokens(path) == 1
        assert empty_system.get_token("spacing.md") == DimensionValue.parse("20px")

    def test_import_json_file(self, empty_system, tmp_path):
        path = tmp_path / "brand.json"
        path.write_text('{"light": {"color": {"accent": "#722ed1"}}}', encoding="utf-8")
        empty_system.import_tokens(str(path))
        assert empty_system.get_token("color.accent").hex == "#722ed1"

    def test_import_overrides_defaults(self, default_system):
        default_system.import_tokens({"light": {"color_palette": {"blue": {"6": "#1677ff"}}}})
        assert default_system.get_token("semantic_colors.primary").hex == "#1677ff"

    def test_invalid_import_stores_nothing(self, empty_system):
        with pytest.raises(SerializationError):
            empty_system.import_tokens(
                {"light": {"ok": 1, "font": {"body": {"$typography": "Inter"}}}}
            )
        assert len(empty_system.store) == 0

    def test_import_missing_file(self, empty_system, tmp_path):
        with pytest.raises(SerializationError, match="Cannot read"):
            empty_system.import_tokens(tmp_path / "missing.yaml")

    def test_reset_to_defaults(self, default_system):
        pristine = default_system.generate_theme_css()
        default_system.set_token("color_palette.blue.6", "#000000")
        default_system.set_token("custom.token", "4px")
        default_system.set_metadata("custom.token", TokenMetadata(description="scratch"))

        default_system.reset_to_defaults()

        assert not default_system.has_token("custom.token")
        assert default_system.get_metadata("custom.token") is None
        assert default_system.get_token("semantic_colors.primary").hex == "#1890ff"
        assert default_system.generate_theme_css() == pristine

    def test_reset_seeds_empty_system(self, empty_system):
        count = empty_system.reset_to_defaults()
        assert count > 0
        assert empty_system.has_token("color_palette.blue.6")
        assert empty_system.validate_tokens() == []


class TestSharedSystem:
    """Test the process-wide instance."""

    def test_lazily_created_once(self, reset_shared):
        first = get_shared_system()
        assert get_shared_system() is first

    def test_configure_replaces(self, reset_shared):
        first = get_shared_system()
        replaced = configure_shared_system(TokenSystemConfig(prefix="ds", load_defaults=False))
        assert replaced is not first
        assert get_shared_system() is replaced
        assert replaced.config.prefix == "ds"

    def test_concurrent_access_yields_one_instance(self, reset_shared):
        results = []

        def worker():
            results.append(get_shared_system())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len({id(instance) for instance in results}) == 1
