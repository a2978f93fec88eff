#!/usr/bin/env python3
"""Unit tests for architecture-graph schema validation."""

import pytest

from graphml_api.services.domain.graphml.errors import (
    DanglingReference,
    InvalidEnum,
    InvalidValue,
    MissingField,
)
from graphml_api.services.domain.graphml.model import (
    Criticality,
    EdgeKind,
    NodeType,
    RawAttribute,
    RawEdge,
    RawNode,
)
from graphml_api.services.domain.graphml.validator import find_attribute, validate_and_build


def raw_node(node_id, label="Label", type_="service", **extra):
    attrs = []
    if label is not None:
        attrs.append(RawAttribute("n_label", label))
    if type_ is not None:
        attrs.append(RawAttribute("n_type", type_))
    attrs.extend(RawAttribute(f"n_{key}", value) for key, value in extra.items())
    return RawNode(id=node_id, attributes=tuple(attrs))


def raw_edge(edge_id, source, target, kind="sync", crit="low", label=None, **extra):
    attrs = []
    if label is not None:
        attrs.append(RawAttribute("e_label", label))
    if kind is not None:
        attrs.append(RawAttribute("e_kind", kind))
    if crit is not None:
        attrs.append(RawAttribute("e_crit", crit))
    attrs.extend(RawAttribute(f"e_{key}", value) for key, value in extra.items())
    return RawEdge(id=edge_id, source=source, target=target, attributes=tuple(attrs))


@pytest.fixture
def two_nodes():
    return [raw_node("A", "Service A", "service"), raw_node("B", "Database B", "db")]


@pytest.mark.unit
class TestValidGraphs:
    """Documents that satisfy the schema."""

    def test_simple_graph(self, two_nodes):
        graph = validate_and_build(two_nodes, [raw_edge("e1", "A", "B", kind="sync", crit="high")])

        assert [(n.id, n.label, n.type) for n in graph.nodes] == [
            ("A", "Service A", NodeType.SERVICE),
            ("B", "Database B", NodeType.DB),
        ]
        assert len(graph.edges) == 1
        edge = graph.edges[0]
        assert edge.pair == "A -> B"
        assert edge.kind is EdgeKind.SYNC
        assert edge.criticality is Criticality.HIGH

    @pytest.mark.parametrize("type_", ["service", "db", "cache", "queue", "external"])
    def test_every_node_type_is_accepted(self, type_):
        graph = validate_and_build([raw_node("A", type_=type_)], [])

        assert graph.nodes[0].type.value == type_

    def test_edge_label_defaults_to_id(self, two_nodes):
        graph = validate_and_build(two_nodes, [raw_edge("e1", "A", "B")])

        assert graph.edges[0].label == "e1"

    def test_empty_edge_label_defaults_to_id(self, two_nodes):
        graph = validate_and_build(two_nodes, [raw_edge("e1", "A", "B", label="")])

        assert graph.edges[0].label == "e1"

    def test_edge_label_is_kept(self, two_nodes):
        graph = validate_and_build(two_nodes, [raw_edge("e1", "A", "B", label="calls")])

        assert graph.edges[0].label == "calls"

    def test_first_matching_key_wins(self):
        node = RawNode(id="A", attributes=(
            RawAttribute("n_label", "first"),
            RawAttribute("n_type", "cache"),
            RawAttribute("n_label", "second"),
            RawAttribute("n_type", "bogus"),
        ))

        graph = validate_and_build([node], [])

        assert graph.nodes[0].label == "first"
        assert graph.nodes[0].type is NodeType.CACHE

    def test_unknown_keys_are_ignored(self):
        node = RawNode(id="A", attributes=(
            RawAttribute("d0", "yEd payload"),
            RawAttribute("n_label", "A"),
            RawAttribute("n_type", "queue"),
        ))

        graph = validate_and_build([node], [])

        assert graph.nodes[0].type is NodeType.QUEUE

    def test_order_is_preserved(self):
        nodes = [raw_node(node_id) for node_id in ["C", "A", "B"]]
        edges = [raw_edge("e2", "A", "B"), raw_edge("e1", "C", "A")]

        graph = validate_and_build(nodes, edges)

        assert [n.id for n in graph.nodes] == ["C", "A", "B"]
        assert [e.id for e in graph.edges] == ["e2", "e1"]

    def test_duplicate_node_ids_are_both_kept(self):
        nodes = [raw_node("A", "first"), raw_node("A", "second", "db")]

        graph = validate_and_build(nodes, [raw_edge("e1", "A", "A")])

        assert [n.label for n in graph.nodes] == ["first", "second"]
        assert graph.edges[0].pair == "A -> A"

    def test_repeated_calls_are_deterministic(self, two_nodes):
        edges = [raw_edge("e1", "A", "B", label="calls"), raw_edge("e2", "B", "A", kind="async")]

        first = validate_and_build(two_nodes, edges)
        second = validate_and_build(two_nodes, edges)

        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_accepts_generators(self):
        graph = validate_and_build(
            (raw_node(i) for i in ["A", "B"]),
            (raw_edge(i, "A", "B") for i in ["e1"]),
        )

        assert len(graph.nodes) == 2
        assert len(graph.edges) == 1

    def test_empty_input(self):
        graph = validate_and_build([], [])

        assert graph.nodes == ()
        assert graph.edges == ()


@pytest.mark.unit
class TestNodeErrors:
    """Node-level schema violations."""

    def test_missing_label(self):
        with pytest.raises(MissingField) as exc_info:
            validate_and_build([raw_node("A", label=None)], [])

        err = exc_info.value
        assert err.element_kind == "node"
        assert err.element_id == "A"
        assert err.field == "label"

    def test_empty_label_counts_as_missing(self):
        with pytest.raises(MissingField) as exc_info:
            validate_and_build([raw_node("A", label="")], [])

        assert exc_info.value.field == "label"

    def test_missing_label_reported_regardless_of_what_follows(self):
        nodes = [raw_node("A"), raw_node("B", label=None), raw_node("C", type_="bogus")]

        with pytest.raises(MissingField) as exc_info:
            validate_and_build(nodes, [raw_edge("e1", "X", "Y")])

        assert exc_info.value.element_id == "B"

    def test_missing_type(self):
        with pytest.raises(MissingField) as exc_info:
            validate_and_build([raw_node("A", type_=None)], [])

        assert exc_info.value.field == "type"

    def test_label_checked_before_type(self):
        with pytest.raises(MissingField) as exc_info:
            validate_and_build([raw_node("A", label=None, type_=None)], [])

        assert exc_info.value.field == "label"

    def test_invalid_type_lists_allowed_values(self):
        with pytest.raises(InvalidEnum) as exc_info:
            validate_and_build([raw_node("A", type_="database")], [])

        err = exc_info.value
        assert err.element_id == "A"
        assert err.field == "type"
        assert err.value == "database"
        assert err.allowed == ("service", "db", "cache", "queue", "external")
        assert "service, db, cache, queue, external" in err.message

    def test_type_is_case_sensitive(self):
        with pytest.raises(InvalidEnum):
            validate_and_build([raw_node("A", type_="Service")], [])

    def test_empty_type_is_invalid_not_missing(self):
        with pytest.raises(InvalidEnum) as exc_info:
            validate_and_build([raw_node("A", type_="")], [])

        assert exc_info.value.value == ""


@pytest.mark.unit
class TestEdgeErrors:
    """Edge-level schema violations."""

    def test_dangling_source(self, two_nodes):
        with pytest.raises(DanglingReference) as exc_info:
            validate_and_build(two_nodes, [raw_edge("e1", "X", "B")])

        err = exc_info.value
        assert err.element_id == "e1"
        assert err.field == "source"
        assert err.reference == "X"
        assert '"X"' in err.message

    def test_dangling_target(self, two_nodes):
        with pytest.raises(DanglingReference) as exc_info:
            validate_and_build(two_nodes, [raw_edge("e1", "A", "Y")])

        assert exc_info.value.field == "target"
        assert exc_info.value.reference == "Y"

    def test_source_checked_before_target(self, two_nodes):
        with pytest.raises(DanglingReference) as exc_info:
            validate_and_build(two_nodes, [raw_edge("e1", "X", "Y")])

        assert exc_info.value.field == "source"

    def test_references_checked_before_attributes(self, two_nodes):
        with pytest.raises(DanglingReference):
            validate_and_build(two_nodes, [raw_edge("e1", "X", "B", kind=None, crit=None)])

    def test_missing_kind(self, two_nodes):
        with pytest.raises(MissingField) as exc_info:
            validate_and_build(two_nodes, [raw_edge("e1", "A", "B", kind=None)])

        assert exc_info.value.element_kind == "edge"
        assert exc_info.value.field == "kind"

    def test_missing_criticality(self, two_nodes):
        with pytest.raises(MissingField) as exc_info:
            validate_and_build(two_nodes, [raw_edge("e1", "A", "B", crit=None)])

        assert exc_info.value.field == "criticality"

    def test_missing_criticality_reported_before_invalid_kind(self, two_nodes):
        with pytest.raises(MissingField) as exc_info:
            validate_and_build(two_nodes, [raw_edge("e1", "A", "B", kind="rpc", crit=None)])

        assert exc_info.value.field == "criticality"

    def test_invalid_kind(self, two_nodes):
        with pytest.raises(InvalidEnum) as exc_info:
            validate_and_build(two_nodes, [raw_edge("e1", "A", "B", kind="rpc")])

        assert exc_info.value.field == "kind"
        assert exc_info.value.allowed == ("sync", "async", "stream")

    def test_invalid_criticality(self, two_nodes):
        with pytest.raises(InvalidEnum) as exc_info:
            validate_and_build(two_nodes, [raw_edge("e1", "A", "B", crit="urgent")])

        assert exc_info.value.field == "criticality"
        assert exc_info.value.allowed == ("low", "medium", "high")

    def test_first_failing_edge_is_reported(self, two_nodes):
        edges = [raw_edge("e1", "A", "B"), raw_edge("e2", "A", "B", kind="rpc"), raw_edge("e3", "X", "B")]

        with pytest.raises(InvalidEnum) as exc_info:
            validate_and_build(two_nodes, edges)

        assert exc_info.value.element_id == "e2"

    def test_node_errors_reported_before_edge_errors(self):
        nodes = [raw_node("A"), raw_node("B", type_="database")]

        with pytest.raises(InvalidEnum):
            validate_and_build(nodes, [raw_edge("e1", "X", "Y")])


@pytest.mark.unit
class TestOptionalAttributes:
    """Optional presentation attributes on nodes and edges."""

    def test_node_optional_fields(self):
        node = raw_node("A", x="10.5", y="-3", env="prod", tags="edge, public,,")

        result = validate_and_build([node], []).nodes[0]

        assert result.x == 10.5
        assert result.y == -3.0
        assert result.env == "prod"
        assert result.tags == ("edge", "public")

    def test_absent_optional_fields_are_none(self):
        result = validate_and_build([raw_node("A")], []).nodes[0]

        assert result.x is None
        assert result.env is None
        assert result.tags is None
        assert result.to_dict() == {"id": "A", "label": "Label", "type": "service"}

    def test_edge_optional_fields(self, two_nodes):
        edge = raw_edge("e1", "A", "B", weight="2.5", env="staging", tags="critical-path")

        result = validate_and_build(two_nodes, [edge]).edges[0]

        assert result.weight == 2.5
        assert result.env == "staging"
        assert result.tags == ("critical-path",)

    def test_non_numeric_coordinate(self):
        with pytest.raises(InvalidValue) as exc_info:
            validate_and_build([raw_node("A", x="left")], [])

        assert exc_info.value.field == "x"
        assert exc_info.value.value == "left"

    @pytest.mark.parametrize("weight", ["heavy", "nan", "inf"])
    def test_invalid_weight(self, two_nodes, weight):
        with pytest.raises(InvalidValue) as exc_info:
            validate_and_build(two_nodes, [raw_edge("e1", "A", "B", weight=weight)])

        assert exc_info.value.field == "weight"

    def test_blank_tags_are_absent(self):
        result = validate_and_build([raw_node("A", tags=" , ")], []).nodes[0]

        assert result.tags is None


@pytest.mark.unit
class TestFindAttribute:

    def test_returns_none_when_absent(self):
        assert find_attribute([RawAttribute("a", "1")], "b") is None

    def test_returns_first_match(self):
        attrs = [RawAttribute("a", "1"), RawAttribute("a", "2")]

        assert find_attribute(attrs, "a") == "1"
