"""Tests for panel configuration and slot metadata loading."""
import dataclasses

import pytest

from nodepanel.core.config import PanelConfig, default_panel_config
from nodepanel.core.exceptions import ConfigError
from nodepanel.core.network import FieldMetadata, load_node_metadata
from nodepanel.core.tagged_value import ValueTag
from nodepanel.core.types import ConcreteType
from nodepanel.ui.shared.composite_builders import fill_properties


@pytest.fixture
def write_yaml(tmp_path):
    def write(text, name="config.yaml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return write


class TestPanelConfig:
    """Defaults and immutability."""

    def test_defaults_register_builtin_builders(self):
        config = default_panel_config()
        assert config.node_override("Fill") is fill_properties
        assert config.widget_override("Text", 1) is not None
        assert config.widget_override(None, 1) is None
        assert config.resolution_minimum == 64.0
        assert config.footprint_resolution_max == 4000

    def test_default_is_shared(self):
        assert default_panel_config() is default_panel_config()

    def test_registries_are_read_only(self):
        with pytest.raises(TypeError):
            default_panel_config().node_overrides["Fill"] = None

    def test_disabled_override(self):
        config = dataclasses.replace(default_panel_config(), disabled_node_overrides={"Fill"})
        assert config.node_override("Fill") is None
        assert isinstance(config.disabled_node_overrides, frozenset)

    def test_footprint_maximum_must_be_positive(self):
        with pytest.raises(ConfigError):
            PanelConfig(footprint_resolution_max=0)


class TestFromYaml:
    """Scalar settings loaded on top of a base config."""

    def test_values_are_applied_and_builders_kept(self, write_yaml):
        path = write_yaml(
            "resolution_minimum: 32\n"
            "fallback_node_name: Subgraph\n"
            "disabled_node_overrides: [Grid, Math]\n"
        )
        config = PanelConfig.from_yaml(path)
        assert config.resolution_minimum == 32.0
        assert config.fallback_node_name == "Subgraph"
        assert config.disabled_node_overrides == frozenset({"Grid", "Math"})
        assert config.node_override("Fill") is fill_properties
        assert config.node_override("Grid") is None

    def test_empty_file_returns_base(self, write_yaml):
        base = PanelConfig()
        assert PanelConfig.from_yaml(write_yaml(""), base=base) is base

    @pytest.mark.parametrize("text", [
        "unknown_setting: 1\n",
        "resolution_minimum: wide\n",
        "footprint_resolution_max: 0\n",
        "disabled_node_overrides: Grid\n",
        "- just\n- a list\n",
        "resolution_minimum: [unclosed\n",
    ])
    def test_invalid_files(self, write_yaml, text):
        with pytest.raises(ConfigError):
            PanelConfig.from_yaml(write_yaml(text))


class TestNodeMetadata:
    """Slot metadata registries loaded from YAML."""

    def test_parse(self, write_yaml):
        path = write_yaml(
            "math::AddNode:\n"
            "  1:\n"
            "    min: 0\n"
            "    range: [0, 10]\n"
            "  2:\n"
            "    default_type: {type: f64, alias: Angle}\n"
            "  3:\n",
            name="metadata.yaml",
        )
        registry = load_node_metadata(path)
        assert registry[("math::AddNode", 1)] == FieldMetadata(number_min=0, number_mode_range=(0.0, 10.0))
        assert registry[("math::AddNode", 2)].default_type == ConcreteType.of(ValueTag.F64, alias="Angle")
        assert registry[("math::AddNode", 3)] == FieldMetadata()

    def test_empty_file(self, write_yaml):
        assert load_node_metadata(write_yaml("", name="metadata.yaml")) == {}

    @pytest.mark.parametrize("text", [
        "math::AddNode: 3\n",
        "math::AddNode:\n  1: {step: 2}\n",
        "math::AddNode:\n  1: {range: [1, 2, 3]}\n",
        "math::AddNode:\n  1: {default_type: Widget}\n",
        "math::AddNode:\n  1: 3\n",
        "math::AddNode:\n  1: {range: [a, 2]}\n",
        "math::AddNode:\n  1: {range: 5}\n",
        "math::AddNode:\n  one: {}\n",
    ])
    def test_invalid_entries(self, write_yaml, text):
        with pytest.raises(ConfigError):
            load_node_metadata(write_yaml(text, name="metadata.yaml"))
