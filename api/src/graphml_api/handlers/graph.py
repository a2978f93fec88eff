#!/usr/bin/env python3
"""
Handlers for GraphML parse and graph read operations.

Parsing is delegated to the graphml service; GraphMLError is left to
propagate so the application-level exception handler can render it.
"""

import logging

from fastapi import HTTPException

from ..models.models import (
    EdgeInfo,
    EdgeListResponse,
    ErrorResponse,
    GraphResponse,
    NodeInfo,
    NodeListResponse,
    ParseRequest,
)
from ..services.domain.graphml import GraphMLError, GraphValidationError, ValidatedGraph
from ..services.graphml_service import parse_graphml

logger = logging.getLogger(__name__)

# Keys of GraphMLError.to_dict() that have dedicated ErrorResponse fields
_ERROR_FIELDS = {"error", "error_type", "element_kind", "element_id", "field"}


def build_graph_response(graph: ValidatedGraph) -> GraphResponse:
    """Convert a validated graph to the API response model."""
    data = graph.to_dict()
    return GraphResponse(
        nodes=[NodeInfo(**node) for node in data["nodes"]],
        edges=[EdgeInfo(**edge) for edge in data["edges"]],
    )


def build_error_response(error: GraphMLError) -> ErrorResponse:
    """Convert a GraphML error to the API error model."""
    data = error.to_dict()
    return ErrorResponse(
        error=data["error"],
        error_type=data["error_type"],
        element_kind=data.get("element_kind"),
        element_id=data.get("element_id"),
        field=data.get("field"),
        details={key: value for key, value in data.items() if key not in _ERROR_FIELDS},
    )


async def handle_parse(request: ParseRequest, max_document_bytes: int) -> GraphResponse:
    """Parse and validate a GraphML document posted by a client.

    Args:
        request: Request body carrying the document text
        max_document_bytes: Size limit for the UTF-8 encoded document

    Returns:
        GraphResponse with validated nodes and edges

    Raises:
        HTTPException: 413 if the document is too large
        GraphMLError: If the document is invalid (an empty one included)
    """
    # Size is measured on the UTF-8 encoding, but the parser gets the text itself:
    # bytes would make expat trust the document's own encoding declaration
    size = len(request.graphml.encode("utf-8"))

    if size > max_document_bytes:
        logger.warning(f"Rejected GraphML document of {size} bytes (limit {max_document_bytes})")
        raise HTTPException(
            status_code=413,
            detail=f"GraphML document exceeds {max_document_bytes} bytes"
        )

    graph = parse_graphml(request.graphml)
    return build_graph_response(graph)


def log_rejection(error: GraphMLError) -> None:
    """Log a rejected document at warning level."""
    if isinstance(error, GraphValidationError):
        logger.warning(
            f"GraphML validation failed ({error.error_type}) on "
            f"{error.element_kind} {error.element_id}: {error.message}"
        )
    else:
        logger.warning(f"GraphML decoding failed: {error.message}")


def handle_get_graph(graph: ValidatedGraph) -> GraphResponse:
    """Return the full preloaded graph."""
    return build_graph_response(graph)


def handle_get_nodes(graph: ValidatedGraph) -> NodeListResponse:
    """Return only the nodes of the preloaded graph."""
    nodes = build_graph_response(graph).nodes
    return NodeListResponse(nodes=nodes, count=len(nodes))


def handle_get_edges(graph: ValidatedGraph) -> EdgeListResponse:
    """Return only the edges of the preloaded graph."""
    edges = build_graph_response(graph).edges
    return EdgeListResponse(edges=edges, count=len(edges))
