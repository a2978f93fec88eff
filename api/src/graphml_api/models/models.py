#!/usr/bin/env python3

from typing import Any

from pydantic import BaseModel

# Pydantic Models


class ParseRequest(BaseModel):
    graphml: str  # Complete GraphML document text


class NodeInfo(BaseModel):
    id: str
    label: str
    type: str  # 'service', 'db', 'cache', 'queue', 'external'
    x: float | None = None
    y: float | None = None
    env: str | None = None
    tags: list[str] | None = None


class EdgeInfo(BaseModel):
    id: str
    label: str  # Falls back to the edge id
    source: str
    target: str
    kind: str  # 'sync', 'async', 'stream'
    criticality: str  # 'low', 'medium', 'high'
    pair: str  # "<source> -> <target>"
    weight: float | None = None
    env: str | None = None
    tags: list[str] | None = None


class GraphResponse(BaseModel):
    nodes: list[NodeInfo] = []
    edges: list[EdgeInfo] = []


class NodeListResponse(BaseModel):
    nodes: list[NodeInfo] = []
    count: int = 0


class EdgeListResponse(BaseModel):
    edges: list[EdgeInfo] = []
    count: int = 0


class ErrorResponse(BaseModel):
    """Body returned for a rejected GraphML document."""
    error: str  # Human-readable message
    error_type: str  # 'decode_error', 'missing_field', 'invalid_enum', ...
    element_kind: str | None = None  # 'node' or 'edge'
    element_id: str | None = None
    field: str | None = None
    details: dict[str, Any] = {}  # value/allowed/reference depending on error_type
