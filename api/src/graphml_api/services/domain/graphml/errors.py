#!/usr/bin/env python3
"""Errors raised while decoding and validating GraphML documents.

Every error here describes a problem with the submitted document, never an
internal failure. Callers map GraphMLError to a client error response.
"""

from typing import Any


class GraphMLError(Exception):
    """Base class for all GraphML client-input errors."""

    error_type = "graphml_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for an API response body."""
        return {"error": self.message, "error_type": self.error_type}


class DecodeError(GraphMLError):
    """Raised when the document is not well-formed XML or not GraphML."""

    error_type = "decode_error"


class GraphValidationError(GraphMLError):
    """Base class for schema violations on a single node or edge."""

    error_type = "validation_error"

    def __init__(self, element_kind: str, element_id: str, field: str, message: str):
        super().__init__(message)
        self.element_kind = element_kind
        self.element_id = element_id
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update({
            "element_kind": self.element_kind,
            "element_id": self.element_id,
            "field": self.field,
        })
        return data


class MissingField(GraphValidationError):
    """A required attribute is absent on a node or edge."""

    error_type = "missing_field"

    def __init__(self, element_kind: str, element_id: str, field: str):
        super().__init__(
            element_kind,
            element_id,
            field,
            f'{element_kind} "{element_id}": missing required field "{field}"',
        )


class InvalidEnum(GraphValidationError):
    """An attribute value lies outside its closed set of allowed values."""

    error_type = "invalid_enum"

    def __init__(self, element_kind: str, element_id: str, field: str, value: str, allowed: tuple[str, ...]):
        super().__init__(
            element_kind,
            element_id,
            field,
            f'{element_kind} "{element_id}": invalid {field} "{value}" '
            f'(allowed: {", ".join(allowed)})',
        )
        self.value = value
        self.allowed = tuple(allowed)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update({"value": self.value, "allowed": list(self.allowed)})
        return data


class DanglingReference(GraphValidationError):
    """An edge endpoint does not match any accepted node id."""

    error_type = "dangling_reference"

    def __init__(self, element_id: str, field: str, reference: str):
        super().__init__(
            "edge",
            element_id,
            field,
            f'edge "{element_id}": {field} references unknown node "{reference}"',
        )
        self.reference = reference

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["reference"] = self.reference
        return data


class InvalidValue(GraphValidationError):
    """An optional attribute is present but cannot be interpreted."""

    error_type = "invalid_value"

    def __init__(self, element_kind: str, element_id: str, field: str, value: str, reason: str):
        super().__init__(
            element_kind,
            element_id,
            field,
            f'{element_kind} "{element_id}": invalid {field} "{value}" ({reason})',
        )
        self.value = value
        self.reason = reason

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update({"value": self.value, "reason": self.reason})
        return data
