#!/usr/bin/env python3

import logging

from fastapi import HTTPException

from ..services.domain.graphml import ValidatedGraph
from ..services.graphml_service import load_graphml_file
from .config import ParserConfig, parser_config

logger = logging.getLogger(__name__)

# Graph loaded from GRAPHML_PATH at startup, immutable afterwards
_preloaded_graph = None


def get_config() -> ParserConfig:
    """Get service configuration"""
    return parser_config


def load_preloaded_graph(config: ParserConfig) -> ValidatedGraph | None:
    """Load the configured GraphML file into the global slot.

    Raises:
        OSError: If the file cannot be read
        GraphMLError: If the document is invalid
    """
    global _preloaded_graph
    if not config.has_preload():
        logger.info("GRAPHML_PATH not set - no graph preloaded")
        _preloaded_graph = None
        return None

    _preloaded_graph = load_graphml_file(config.GRAPHML_PATH)
    return _preloaded_graph


def get_preloaded_graph() -> ValidatedGraph:
    """Get the preloaded graph, or 404 if none was loaded"""
    if _preloaded_graph is None:
        raise HTTPException(status_code=404, detail="No GraphML document loaded. Set GRAPHML_PATH or POST /parse")
    return _preloaded_graph


def clear_preloaded_graph():
    """Drop the preloaded graph on application shutdown"""
    global _preloaded_graph
    _preloaded_graph = None
