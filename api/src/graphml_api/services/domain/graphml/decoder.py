#!/usr/bin/env python3
"""GraphML decoder.

Turns a GraphML XML document into the generic RawGraph form: node and edge
ids plus the ordered <data key="...">value</data> pairs attached to each.
No schema knowledge lives here; see validator.py for that.
"""

import logging
from typing import IO, Union

# Use defusedxml for secure XML parsing (prevents XXE and entity expansion)
import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

# Import Element type from standard library for type hints
from xml.etree.ElementTree import Element

from .errors import DecodeError
from .model import RawAttribute, RawEdge, RawGraph, RawNode

logger = logging.getLogger(__name__)


def _split_tag(tag: str) -> tuple[str, str]:
    """Split "{ns}local" into (ns, local); un-namespaced tags get ns ""."""
    if tag.startswith("{"):
        ns, _, local = tag[1:].partition("}")
        return ns, local
    return "", tag


def _qualify(ns: str, local: str) -> str:
    return f"{{{ns}}}{local}" if ns else local


def _require_attr(elem: Element, name: str, what: str) -> str:
    value = elem.get(name)
    if value is None:
        raise DecodeError(f"{what} element missing required '{name}' attribute")
    return value


def _decode_attributes(elem: Element, ns: str, owner: str) -> tuple[RawAttribute, ...]:
    """Collect the direct <data> children of a node or edge in document order."""
    attributes = []
    for data in elem.findall(_qualify(ns, "data")):
        key = data.get("key")
        if key is None:
            raise DecodeError(f"data element on {owner} missing required 'key' attribute")
        # Pretty-printed documents wrap values in whitespace
        attributes.append(RawAttribute(key=key, value=(data.text or "").strip()))
    return tuple(attributes)


def _decode_root(root: Element) -> RawGraph:
    ns, local = _split_tag(root.tag)
    if local != "graphml":
        raise DecodeError(f"Root element is not graphml: {root.tag}")

    graphs = list(root.iter(_qualify(ns, "graph")))
    if not graphs:
        raise DecodeError("GraphML document contains no graph element")

    nodes: list[RawNode] = []
    edges: list[RawEdge] = []

    # Multi-graph documents are flattened; graph origin is not kept
    for graph in graphs:
        for node in graph.findall(_qualify(ns, "node")):
            node_id = _require_attr(node, "id", "node")
            nodes.append(RawNode(id=node_id, attributes=_decode_attributes(node, ns, f'node "{node_id}"')))

        for edge in graph.findall(_qualify(ns, "edge")):
            edge_id = _require_attr(edge, "id", "edge")
            what = f'edge "{edge_id}"'
            edges.append(RawEdge(
                id=edge_id,
                source=_require_attr(edge, "source", what),
                target=_require_attr(edge, "target", what),
                attributes=_decode_attributes(edge, ns, what),
            ))

    logger.debug(f"Decoded {len(graphs)} graph(s): {len(nodes)} nodes, {len(edges)} edges")
    return RawGraph(nodes=tuple(nodes), edges=tuple(edges))


def decode_graphml(content: Union[str, bytes]) -> RawGraph:
    """Decode a complete GraphML document.

    Args:
        content: GraphML XML as str or bytes

    Returns:
        RawGraph with nodes and edges of every graph element in document order

    Raises:
        DecodeError: If the XML is malformed, uses forbidden constructs
            (DTD entities, external references) or lacks GraphML structure
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise DecodeError(f"Invalid XML: {str(e)}") from e
    except DefusedXmlException as e:
        raise DecodeError(f"Forbidden XML construct: {str(e)}") from e

    return _decode_root(root)


def decode_graphml_stream(stream: IO) -> RawGraph:
    """Decode a GraphML document from a readable file-like object."""
    try:
        tree = ET.parse(stream)
    except ET.ParseError as e:
        raise DecodeError(f"Invalid XML: {str(e)}") from e
    except DefusedXmlException as e:
        raise DecodeError(f"Forbidden XML construct: {str(e)}") from e

    return _decode_root(tree.getroot())
