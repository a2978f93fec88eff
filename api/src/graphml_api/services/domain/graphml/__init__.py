"""
GraphML Domain

Decodes GraphML documents and validates them against the fixed
architecture-graph schema.
"""

from .decoder import decode_graphml, decode_graphml_stream
from .errors import (
    DanglingReference,
    DecodeError,
    GraphMLError,
    GraphValidationError,
    InvalidEnum,
    InvalidValue,
    MissingField,
)
from .model import (
    Criticality,
    EdgeKind,
    NodeType,
    RawAttribute,
    RawEdge,
    RawGraph,
    RawNode,
    ValidatedEdge,
    ValidatedGraph,
    ValidatedNode,
)
from .validator import validate_and_build

__all__ = [
    "decode_graphml",
    "decode_graphml_stream",
    "validate_and_build",
    "GraphMLError",
    "DecodeError",
    "GraphValidationError",
    "MissingField",
    "InvalidEnum",
    "DanglingReference",
    "InvalidValue",
    "NodeType",
    "EdgeKind",
    "Criticality",
    "RawAttribute",
    "RawNode",
    "RawEdge",
    "RawGraph",
    "ValidatedNode",
    "ValidatedEdge",
    "ValidatedGraph",
]
