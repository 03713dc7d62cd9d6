"""Tests for the configuration loader and YAML helper."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from icon_variants.configs import loader
from icon_variants.configs.loader import ConfigError, PluginConfig, load_config
from icon_variants.errors import IconVariantsError
from icon_variants.utils.fs import load_yaml
from icon_variants.variants.models import VariantConfig


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def raw_defaults() -> dict:
    """The shipped defaults.yaml as a plain dict."""
    return load_yaml(Path(loader.__file__).parent / "defaults.yaml")


def write_config(tmp_path: Path, data: dict) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(data))
    return path


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_loads(self, config: PluginConfig) -> None:
        assert isinstance(config, PluginConfig)

    def test_ui_size(self, config: PluginConfig) -> None:
        assert (config.ui.width, config.ui.height) == (340, 460)

    def test_selection(self, config: PluginConfig) -> None:
        assert config.selection.max_nodes == 100
        assert config.selection.square_tolerance == pytest.approx(0.01)

    def test_layout(self, config: PluginConfig) -> None:
        assert config.layout.set_offset_x == 48
        assert config.layout.set_gap_y == 40

    def test_set_style(self, config: PluginConfig) -> None:
        style = config.set_style
        assert style.stroke_color == (0.6, 0.4, 0.9)
        assert style.dash_pattern == (8.0, 4.0)
        assert style.corner_radius == 8
        assert style.item_spacing == 40
        assert style.padding == 20

    def test_variant_table(self, config: PluginConfig) -> None:
        assert config.variants.custom_stroke is False
        assert config.variants.defaults[0] == VariantConfig(12, 1.0)
        sizes = [v.size_px for v in config.variants.defaults]
        assert sizes == sorted(set(sizes))

    def test_frozen(self, config: PluginConfig) -> None:
        with pytest.raises(AttributeError):
            config.ui = None  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    def test_explicit_path(self, tmp_path: Path, raw_defaults: dict) -> None:
        raw_defaults["layout"]["set_gap_y"] = 12
        cfg = load_config(write_config(tmp_path, raw_defaults))
        assert cfg.layout.set_gap_y == 12

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(ConfigError, match="Empty"):
            load_config(path)

    def test_missing_section(self, tmp_path: Path, raw_defaults: dict) -> None:
        del raw_defaults["layout"]
        with pytest.raises(ConfigError, match="Missing required config key"):
            load_config(write_config(tmp_path, raw_defaults))

    def test_negative_value(self, tmp_path: Path, raw_defaults: dict) -> None:
        raw_defaults["set_style"]["padding"] = -1
        with pytest.raises(ConfigError, match="set_style.padding"):
            load_config(write_config(tmp_path, raw_defaults))

    def test_zero_max_nodes(self, tmp_path: Path, raw_defaults: dict) -> None:
        raw_defaults["selection"]["max_nodes"] = 0
        with pytest.raises(ConfigError, match="selection.max_nodes"):
            load_config(write_config(tmp_path, raw_defaults))

    def test_bad_color(self, tmp_path: Path, raw_defaults: dict) -> None:
        raw_defaults["set_style"]["stroke_color"] = [1, 2]
        with pytest.raises(ConfigError, match="stroke_color"):
            load_config(write_config(tmp_path, raw_defaults))

    def test_bad_variant_row(self, tmp_path: Path, raw_defaults: dict) -> None:
        raw_defaults["variants"]["defaults"].append({"size_px": 0, "stroke_weight": 1})
        with pytest.raises(ConfigError, match=r"variants.defaults\[6\]"):
            load_config(write_config(tmp_path, raw_defaults))

    def test_duplicate_variant_sizes(self, tmp_path: Path, raw_defaults: dict) -> None:
        raw_defaults["variants"]["defaults"].append({"size_px": 12, "stroke_weight": 2})
        with pytest.raises(ConfigError, match="duplicate"):
            load_config(write_config(tmp_path, raw_defaults))

    def test_config_error_is_package_error(self) -> None:
        assert issubclass(ConfigError, IconVariantsError)


class TestLoadYaml:
    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_yaml(tmp_path / "missing.yaml")

    def test_parse_error(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("a: [1, 2\n")
        with pytest.raises(yaml.YAMLError, match="Invalid YAML"):
            load_yaml(path)
