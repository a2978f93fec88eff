#!/usr/bin/env python3
"""GraphML parse service.

Glues the decoder and the validator together and provides the
command-line entry point. Errors propagate as GraphMLError subclasses;
presenting them is up to the caller.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Union

from .domain.graphml import (
    GraphMLError,
    ValidatedGraph,
    decode_graphml,
    decode_graphml_stream,
    validate_and_build,
)

logger = logging.getLogger(__name__)


def parse_graphml(content: Union[str, bytes]) -> ValidatedGraph:
    """Decode and validate a complete GraphML document.

    Args:
        content: GraphML XML as str or bytes

    Returns:
        The validated graph

    Raises:
        DecodeError: If the document is not well-formed GraphML
        GraphValidationError: If the document violates the schema
    """
    raw = decode_graphml(content)
    graph = validate_and_build(raw.nodes, raw.edges)
    logger.info(f"Validated GraphML document: {len(graph.nodes)} nodes, {len(graph.edges)} edges")
    return graph


def load_graphml_file(path: Path) -> ValidatedGraph:
    """Decode and validate a GraphML file from disk.

    Raises:
        OSError: If the file cannot be read
        GraphMLError: If the document is invalid
    """
    with open(path, "rb") as f:
        raw = decode_graphml_stream(f)
    graph = validate_and_build(raw.nodes, raw.edges)
    logger.info(f"Loaded {path}: {len(graph.nodes)} nodes, {len(graph.edges)} edges")
    return graph


def format_summary(graph: ValidatedGraph) -> str:
    """Human-readable listing of nodes and edges."""
    lines = ["=== NODES ===", f"Total nodes: {len(graph.nodes)}", ""]
    for i, node in enumerate(graph.nodes, start=1):
        lines.append(f"{i}. ID: {node.id}, Label: {node.label}, Type: {node.type.value}")

    lines += ["", "=== EDGES ===", f"Total edges: {len(graph.edges)}", ""]
    for i, edge in enumerate(graph.edges, start=1):
        lines.append(
            f"{i}. ID: {edge.id}, Label: {edge.label}, Pair: {edge.pair}, "
            f"Kind: {edge.kind.value}, Criticality: {edge.criticality.value}"
        )
    return "\n".join(lines)


def main(argv=None) -> int:
    """Command-line interface for the GraphML parser."""
    parser = argparse.ArgumentParser(
        description="Parse and validate an architecture GraphML document"
    )
    parser.add_argument("graphml", help="Path to the .graphml file")
    parser.add_argument("--out", help="Write the validated graph as JSON to this file")
    args = parser.parse_args(argv)

    try:
        graph = load_graphml_file(Path(args.graphml))
    except GraphMLError as e:
        print(f"Invalid GraphML: {e.message}", file=sys.stderr)  # noqa: T201
        return 1
    except OSError as e:
        print(f"Cannot read {args.graphml}: {e}", file=sys.stderr)  # noqa: T201
        return 1

    json_output = json.dumps(graph.to_dict(), indent=2)
    print(format_summary(graph))  # noqa: T201

    if args.out:
        Path(args.out).write_text(json_output, encoding="utf-8")
        print(f"\nOK: wrote JSON to {args.out}")  # noqa: T201
    else:
        print("\n=== JSON OUTPUT ===")  # noqa: T201
        print(json_output)  # noqa: T201
    return 0


if __name__ == "__main__":
    sys.exit(main())
