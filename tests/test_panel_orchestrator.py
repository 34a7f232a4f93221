"""Tests for assembling a node's properties section."""
import dataclasses

import nodepanel
from nodepanel.constants.constants import GridType
from nodepanel.core.config import default_panel_config
from nodepanel.core.context import NodePropertiesContext
from nodepanel.core.tagged_value import TaggedValue, ValueTag
from nodepanel.core.types import ConcreteType
from nodepanel.ui.shared.panel_orchestrator import generate_node_properties, slot_rows
from nodepanel.ui.shared.widget_descriptors import (
    NumberInput, ParameterExposeButton, Section, TextLabel, WidgetRow,
)
from tests.helpers import f64, make_node, only, slot, widgets_of


def labels(section: Section):
    return [widget.text for widget in widgets_of(section.rows, TextLabel)]


def add_grid(store):
    store.add_node("grid", make_node(
        slot("Grid Type", TaggedValue.of_enum(GridType.RECTANGULAR)),
        slot("Spacing", TaggedValue(ValueTag.DVEC2, (10.0, 10.0))),
        slot("Angles", TaggedValue(ValueTag.DVEC2, (30.0, 30.0))),
        slot("Rows", TaggedValue(ValueTag.U32, 10)),
        slot("Columns", TaggedValue(ValueTag.U32, 10)),
        reference="Grid",
    ))


class TestSections:
    """Section header fields and fallbacks."""

    def test_header_fields_are_carried(self, store, context):
        store.add_node("n", make_node(
            slot("Amount", f64(1.0)), reference="Blur", description="Blurs the image", visible=False, pinned=True,
        ))
        section = generate_node_properties("n", context)
        assert (section.name, section.description, section.visible, section.pinned, section.node_id) == (
            "Blur", "Blurs the image", False, True, "n",
        )

    def test_name_falls_back_to_proto_name(self, store, context):
        store.add_node("n", make_node(slot("Amount", f64(1.0)), proto="graphene::ops::AddNode"))
        assert generate_node_properties("n", context).name == "AddNode"

    def test_nested_network_uses_placeholder_name(self, store, context):
        store.add_node("n", make_node(slot("Amount", f64(1.0)), proto=None))
        assert generate_node_properties("n", context).name == "Custom Node"

    def test_placeholder_name_is_configurable(self, store):
        config = dataclasses.replace(default_panel_config(), fallback_node_name="Subgraph")
        store.add_node("n", make_node(proto=None))
        assert generate_node_properties("n", NodePropertiesContext(store, config)).name == "Subgraph"

    def test_node_without_properties(self, store, context):
        store.add_node("n", make_node())
        assert labels(generate_node_properties("n", context)) == ["Node has no properties"]

    def test_layer_without_properties(self, store, context):
        store.add_node("n", make_node(is_layer=True))
        assert labels(generate_node_properties("n", context)) == ["Layer has no properties"]

    def test_missing_node(self, context, caplog):
        section = generate_node_properties("ghost", context)
        assert section.name == "Custom Node"
        assert section.rows == (WidgetRow([TextLabel("Node has no properties")]),)
        assert "ghost" in caplog.text

    def test_package_entry_point(self, store, context):
        store.add_node("n", make_node(slot("Amount", f64(1.0)), reference="Blur"))
        assert nodepanel.generate_node_properties("n", context) == generate_node_properties("n", context)


class TestSlots:
    """Per-slot rows from the catalog."""

    def test_primary_input_is_hidden(self, store, context):
        store.add_node("n", make_node(slot("Amount", f64(1.0)), slot("Seed", TaggedValue(ValueTag.U32, 3))))
        section = generate_node_properties("n", context)
        assert len(section.rows) == 2
        assert "Primary" not in labels(section)
        assert [button.on_update.input_index for button in widgets_of(section.rows, ParameterExposeButton)] == [1, 2]

    def test_unsupported_type_still_shows_its_row(self, store, context):
        store.add_node("n", make_node(slot("Artboard", None, ConcreteType("Artboard"))))
        section = generate_node_properties("n", context)
        label = widgets_of(section.rows, TextLabel)[-1]
        assert label.text == "-"
        assert label.tooltip.endswith("\nArtboard")

    def test_unresolvable_slot_is_skipped(self, store, context):
        store.register_overload("nodes::TestNode", [ConcreteType.of(ValueTag.VECTOR_DATA), ConcreteType("Artboard")])
        store.register_overload("nodes::TestNode", [ConcreteType.of(ValueTag.VECTOR_DATA), ConcreteType("Table")])
        store.add_node("n", make_node(slot("Thing", f64(1.0))))
        assert slot_rows("n", 1, context) == []
        assert labels(generate_node_properties("n", context)) == ["Node has no properties"]


class TestOverrides:
    """Whole-node and per-slot builders."""

    def test_node_override_replaces_slots(self, store, context):
        add_grid(store)
        section = generate_node_properties("grid", context)
        assert section.name == "Grid"
        assert len(section.rows) == 4
        assert "Angles" not in labels(section)

    def test_disabled_node_override_falls_back_to_slots(self, store):
        add_grid(store)
        config = dataclasses.replace(default_panel_config(), disabled_node_overrides=frozenset({"Grid"}))
        section = generate_node_properties("grid", NodePropertiesContext(store, config))
        assert "Angles" in labels(section)

    def test_custom_widget_override(self, store):
        def read_only(node_id, index, context):
            return [WidgetRow([TextLabel(f"locked {index}")])]

        config = dataclasses.replace(default_panel_config(), widget_overrides={("Blur", 2): read_only})
        store.add_node("n", make_node(slot("Amount", f64(1.0)), slot("Radius", f64(4.0)), reference="Blur"))
        section = generate_node_properties("n", NodePropertiesContext(store, config))
        assert len(section.rows) == 2
        assert "locked 2" in labels(section)
        assert only(section.rows, NumberInput).value == 1.0
