"""
Domain Layer

This package contains business logic organized by domain area.
Domain services implement core algorithms but should not handle
transport or process concerns (use handlers and main for that).

Domains:
- graphml: GraphML decoding and architecture-graph schema validation
"""
