#!/usr/bin/env python3
"""
Configuration for the GraphML parsing service.

All values can be overridden via environment variables. Defaults target a
local development setup with the frontend dev server on port 3000 or 5173.
"""

import logging
from pathlib import Path
from typing import Optional

from .env_utils import getenv_clean, getenv_int, getenv_list

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]


class ParserConfig:
    """Service configuration read from the environment.

    Attributes are resolved when the instance is created, so tests can patch
    os.environ and build a fresh ParserConfig to pick up overrides.
    """

    def __init__(self):
        # Document preloaded at startup and served by GET /graph, /nodes, /edges
        graphml_path = getenv_clean("GRAPHML_PATH", None)
        self.GRAPHML_PATH: Optional[Path] = Path(graphml_path) if graphml_path else None

        # Upper bound for documents posted to /parse (bytes, UTF-8 encoded)
        self.MAX_DOCUMENT_BYTES = getenv_int("MAX_DOCUMENT_BYTES", 5 * 1024 * 1024)

        # Upper bound for the whole /parse request body, checked from Content-Length
        # before the body is read; JSON escaping can inflate the document
        self.MAX_REQUEST_BYTES = getenv_int("MAX_REQUEST_BYTES", 2 * self.MAX_DOCUMENT_BYTES)

        self.CORS_ORIGINS = getenv_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
        self.LOG_LEVEL = (getenv_clean("LOG_LEVEL", "INFO") or "INFO").upper()

        self.APP_VERSION = getenv_clean("APP_VERSION", "unknown")
        self.API_HOST = getenv_clean("API_HOST", "0.0.0.0")  # nosec B104
        self.API_PORT = getenv_int("API_PORT", 8080)

    def has_preload(self) -> bool:
        """Return True if a GraphML document should be loaded at startup."""
        return self.GRAPHML_PATH is not None


# Singleton instance
parser_config = ParserConfig()
