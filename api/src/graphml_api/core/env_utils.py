#!/usr/bin/env python3
"""
Helpers for reading environment variables.

Values are cleaned of stray whitespace and CRLF line endings, which show up
when .env files are edited on Windows and mounted into containers.
"""

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)


def getenv_clean(key: str, default: str = None, strip: bool = True) -> Optional[str]:
    """Get environment variable with line endings and whitespace removed.

    Args:
        key: Environment variable name
        default: Default value if variable is not set
        strip: If True, strip whitespace and line endings (default: True)

    Returns:
        Cleaned environment variable value, or default if not set

    Example:
        >>> # .env file has: GRAPHML_PATH=/data/sample.graphml\r\n
        >>> getenv_clean("GRAPHML_PATH")
        '/data/sample.graphml'
    """
    raw_value = os.getenv(key, default)

    if raw_value is None:
        return None

    if not strip:
        return raw_value

    cleaned = raw_value.strip().rstrip("\r\n")

    if raw_value != cleaned:
        logger.warning(
            f"Environment variable {key} had trailing whitespace/line endings: "
            f"raw={repr(raw_value)}, cleaned={repr(cleaned)}"
        )

    return cleaned


def getenv_int(key: str, default: int) -> int:
    """Get environment variable as integer, falling back to default when invalid.

    Args:
        key: Environment variable name
        default: Default integer value if variable is not set or invalid

    Returns:
        Integer value
    """
    raw_value = getenv_clean(key, None)

    if raw_value is None or raw_value == "":
        return default

    try:
        return int(raw_value)
    except ValueError:
        logger.warning(
            f"Environment variable {key} is not a valid integer: {repr(raw_value)}. "
            f"Using default: {default}"
        )
        return default


def getenv_list(key: str, default: list[str] = None, separator: str = ",") -> list[str]:
    """Get environment variable as a list of cleaned, non-empty items.

    Example:
        >>> # .env file has: CORS_ORIGINS=http://localhost:3000,http://localhost:5173\r\n
        >>> getenv_list("CORS_ORIGINS")
        ['http://localhost:3000', 'http://localhost:5173']
    """
    if default is None:
        default = []

    raw_value = getenv_clean(key, None)

    if raw_value is None or raw_value == "":
        return list(default)

    items = [item.strip() for item in raw_value.split(separator) if item.strip()]
    return items if items else list(default)
