#!/usr/bin/env python3
"""Schema validation and graph building for architecture GraphML.

The schema is fixed:

Nodes
    n_label   required, non-empty
    n_type    required, one of NodeType
    n_x, n_y  optional numbers
    n_env     optional string
    n_tags    optional comma-separated list

Edges
    source/target  must name a node accepted earlier in the document
    e_kind         required, one of EdgeKind
    e_crit         required, one of Criticality
    e_label        optional, defaults to the edge id
    e_weight       optional number
    e_env, e_tags  as for nodes

Validation is fail-fast: the first violation in document order is raised and
nothing is returned. Nodes are all processed before edges, so an edge can only
reference nodes that were accepted before it.
"""

import math
from collections.abc import Iterable
from enum import Enum
from typing import Optional

from .errors import DanglingReference, InvalidEnum, InvalidValue, MissingField
from .model import (
    Criticality,
    EdgeKind,
    NodeType,
    RawAttribute,
    RawEdge,
    RawNode,
    ValidatedEdge,
    ValidatedGraph,
    ValidatedNode,
    allowed_values,
)

# GraphML data keys
NODE_LABEL_KEY = "n_label"
NODE_TYPE_KEY = "n_type"
NODE_X_KEY = "n_x"
NODE_Y_KEY = "n_y"
NODE_ENV_KEY = "n_env"
NODE_TAGS_KEY = "n_tags"

EDGE_LABEL_KEY = "e_label"
EDGE_KIND_KEY = "e_kind"
EDGE_CRIT_KEY = "e_crit"
EDGE_WEIGHT_KEY = "e_weight"
EDGE_ENV_KEY = "e_env"
EDGE_TAGS_KEY = "e_tags"

TAG_SEPARATOR = ","


def find_attribute(attributes: Iterable[RawAttribute], key: str) -> Optional[str]:
    """Return the value of the first attribute with the given key, or None."""
    for attr in attributes:
        if attr.key == key:
            return attr.value
    return None


def _parse_enum(enum_cls: type[Enum], value: str, element_kind: str, element_id: str, field: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidEnum(element_kind, element_id, field, value, allowed_values(enum_cls)) from None


def _optional_str(attributes: Iterable[RawAttribute], key: str) -> Optional[str]:
    value = find_attribute(attributes, key)
    return value if value else None


def _optional_number(
    attributes: Iterable[RawAttribute], key: str, element_kind: str, element_id: str, field: str
) -> Optional[float]:
    value = find_attribute(attributes, key)
    if not value:
        return None
    try:
        number = float(value)
    except ValueError:
        raise InvalidValue(element_kind, element_id, field, value, "not a number") from None
    if not math.isfinite(number):
        raise InvalidValue(element_kind, element_id, field, value, "not a finite number")
    return number


def _optional_tags(attributes: Iterable[RawAttribute], key: str) -> Optional[tuple[str, ...]]:
    value = find_attribute(attributes, key)
    if not value:
        return None
    tags = tuple(tag.strip() for tag in value.split(TAG_SEPARATOR) if tag.strip())
    return tags or None


def validate_node(raw: RawNode) -> ValidatedNode:
    """Validate a single node.

    Raises:
        MissingField: n_label or n_type is absent (an empty label counts as absent)
        InvalidEnum: n_type is not a NodeType value
        InvalidValue: n_x or n_y is not a finite number
    """
    label = find_attribute(raw.attributes, NODE_LABEL_KEY)
    if not label:
        raise MissingField("node", raw.id, "label")

    type_value = find_attribute(raw.attributes, NODE_TYPE_KEY)
    if type_value is None:
        raise MissingField("node", raw.id, "type")
    node_type = _parse_enum(NodeType, type_value, "node", raw.id, "type")

    return ValidatedNode(
        id=raw.id,
        label=label,
        type=node_type,
        x=_optional_number(raw.attributes, NODE_X_KEY, "node", raw.id, "x"),
        y=_optional_number(raw.attributes, NODE_Y_KEY, "node", raw.id, "y"),
        env=_optional_str(raw.attributes, NODE_ENV_KEY),
        tags=_optional_tags(raw.attributes, NODE_TAGS_KEY),
    )


def validate_edge(raw: RawEdge, known_nodes: set[str]) -> ValidatedEdge:
    """Validate a single edge against the ids of already accepted nodes.

    Endpoints are checked before any attribute, then presence of kind and
    criticality, then their values.
    """
    if raw.source not in known_nodes:
        raise DanglingReference(raw.id, "source", raw.source)
    if raw.target not in known_nodes:
        raise DanglingReference(raw.id, "target", raw.target)

    kind_value = find_attribute(raw.attributes, EDGE_KIND_KEY)
    if kind_value is None:
        raise MissingField("edge", raw.id, "kind")

    crit_value = find_attribute(raw.attributes, EDGE_CRIT_KEY)
    if crit_value is None:
        raise MissingField("edge", raw.id, "criticality")

    kind = _parse_enum(EdgeKind, kind_value, "edge", raw.id, "kind")
    criticality = _parse_enum(Criticality, crit_value, "edge", raw.id, "criticality")

    return ValidatedEdge(
        id=raw.id,
        label=find_attribute(raw.attributes, EDGE_LABEL_KEY) or raw.id,
        source=raw.source,
        target=raw.target,
        kind=kind,
        criticality=criticality,
        weight=_optional_number(raw.attributes, EDGE_WEIGHT_KEY, "edge", raw.id, "weight"),
        env=_optional_str(raw.attributes, EDGE_ENV_KEY),
        tags=_optional_tags(raw.attributes, EDGE_TAGS_KEY),
    )


def validate_and_build(raw_nodes: Iterable[RawNode], raw_edges: Iterable[RawEdge]) -> ValidatedGraph:
    """Validate decoded nodes and edges and assemble the typed graph.

    Args:
        raw_nodes: Nodes in document order
        raw_edges: Edges in document order

    Returns:
        ValidatedGraph preserving document order

    Raises:
        GraphValidationError: The first schema violation encountered
    """
    nodes: list[ValidatedNode] = []
    known_nodes: set[str] = set()

    for raw_node in raw_nodes:
        nodes.append(validate_node(raw_node))
        # Duplicate ids are kept in the output; the set just sees the id again
        known_nodes.add(raw_node.id)

    edges = [validate_edge(raw_edge, known_nodes) for raw_edge in raw_edges]

    return ValidatedGraph(nodes=tuple(nodes), edges=tuple(edges))
