#!/usr/bin/env python3
"""Data model for GraphML architecture graphs.

Raw* classes are the decoder's generic output: ids plus ordered key/value
pairs taken verbatim from <data> elements. Validated* classes are only built
by the validator and always satisfy the schema.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class NodeType(str, Enum):
    """Kinds of architecture components."""
    SERVICE = "service"
    DB = "db"
    CACHE = "cache"
    QUEUE = "queue"
    EXTERNAL = "external"


class EdgeKind(str, Enum):
    """Communication style of a relationship."""
    SYNC = "sync"
    ASYNC = "async"
    STREAM = "stream"


class Criticality(str, Enum):
    """Business criticality of a relationship."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def allowed_values(enum_cls: type[Enum]) -> tuple[str, ...]:
    """Return the allowed string values of an enum in declaration order."""
    return tuple(member.value for member in enum_cls)


@dataclass(frozen=True)
class RawAttribute:
    """A <data key="...">value</data> pair."""
    key: str
    value: str


@dataclass(frozen=True)
class RawNode:
    id: str
    attributes: tuple[RawAttribute, ...] = ()


@dataclass(frozen=True)
class RawEdge:
    id: str
    source: str
    target: str
    attributes: tuple[RawAttribute, ...] = ()


@dataclass(frozen=True)
class RawGraph:
    """Decoder output: every graph in the document flattened in document order."""
    nodes: tuple[RawNode, ...] = ()
    edges: tuple[RawEdge, ...] = ()


def _optional_fields(**fields: Any) -> dict[str, Any]:
    result = {}
    for key, value in fields.items():
        if value is None:
            continue
        result[key] = list(value) if isinstance(value, tuple) else value
    return result


@dataclass(frozen=True)
class ValidatedNode:
    id: str
    label: str
    type: NodeType
    x: Optional[float] = None
    y: Optional[float] = None
    env: Optional[str] = None
    tags: Optional[tuple[str, ...]] = None

    def to_dict(self) -> dict[str, Any]:
        data = {"id": self.id, "label": self.label, "type": self.type.value}
        data.update(_optional_fields(x=self.x, y=self.y, env=self.env, tags=self.tags))
        return data


@dataclass(frozen=True)
class ValidatedEdge:
    id: str
    label: str
    source: str
    target: str
    kind: EdgeKind
    criticality: Criticality
    weight: Optional[float] = None
    env: Optional[str] = None
    tags: Optional[tuple[str, ...]] = None
    pair: str = field(init=False)

    def __post_init__(self):
        # frozen dataclass: derived field has to bypass __setattr__
        object.__setattr__(self, "pair", f"{self.source} -> {self.target}")

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": self.id,
            "label": self.label,
            "source": self.source,
            "target": self.target,
            "kind": self.kind.value,
            "criticality": self.criticality.value,
            "pair": self.pair,
        }
        data.update(_optional_fields(weight=self.weight, env=self.env, tags=self.tags))
        return data


@dataclass(frozen=True)
class ValidatedGraph:
    nodes: tuple[ValidatedNode, ...] = ()
    edges: tuple[ValidatedEdge, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize as {"nodes": [...], "edges": [...]} preserving document order."""
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }
