"""
Startup configuration checks - fail fast before the server binds.
"""

import logging
from urllib.parse import urlparse

from mcp_use_guide.errors import ConfigurationError

logger = logging.getLogger(__name__)

VALID_TRANSPORTS = ("http", "stdio")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def validate_config(config) -> None:
    """
    Validate settings that would otherwise fail late or silently.

    Raises:
        ConfigurationError: listing every problem found
    """
    errors = []

    port = config.get("server.port")
    if isinstance(port, bool) or not isinstance(port, int) or not 1 <= port <= 65535:
        errors.append(f"server.port must be an integer between 1 and 65535 (got {port!r})")

    base_url = config.get("server.base_url", "")
    parsed = urlparse(str(base_url))
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        errors.append(f"server.base_url must be an http(s) URL (got {base_url!r})")

    transport = config.get("server.transport")
    if transport not in VALID_TRANSPORTS:
        errors.append(f"server.transport must be one of {', '.join(VALID_TRANSPORTS)} (got {transport!r})")

    level = str(config.get("logging.level", "")).upper()
    if level not in VALID_LOG_LEVELS:
        errors.append(f"logging.level must be one of {', '.join(VALID_LOG_LEVELS)} (got {level!r})")

    if errors:
        for error in errors:
            logger.error(f"❌ Config: {error}")
        raise ConfigurationError("Invalid configuration: " + "; ".join(errors))

    logger.debug("Configuration valid")
