"""
Configuration
=============
Settings are resolved in three layers:

1. Built-in defaults (below)
2. YAML file - ``MCP_CONFIG_PATH`` or ``config/settings.yaml`` if present
3. Environment overrides (``MCP_URL``, ``MCP_HOST``, ``MCP_PORT``, ...)

Values are read with dotted keys: ``config.get('server.port', 3000)``.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from mcp_use_guide.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config") / "settings.yaml"

DEFAULTS: Dict[str, Any] = {
    "mcp": {
        "name": "mcp-use",
        "description": (
            "Helps agents build MCP servers by providing tools and prompts for "
            "common patterns and best practices."
        ),
    },
    "server": {
        "version": "1.0.0",
        "host": "0.0.0.0",
        "port": 3000,
        "base_url": "http://localhost:3000",
        "transport": "http",
        "auto_discover": True,
        "cors_origins": ["*"],
    },
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    },
}

# env var -> (dotted key, converter)
ENV_OVERRIDES = {
    "MCP_URL": ("server.base_url", str),
    "MCP_HOST": ("server.host", str),
    "MCP_PORT": ("server.port", int),
    "MCP_TRANSPORT": ("server.transport", str),
    "AUTO_DISCOVER": ("server.auto_discover", lambda v: v.lower() in ("1", "true", "yes", "on")),
    "LOG_LEVEL": ("logging.level", str),
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Read-only view over the merged settings tree"""

    def __init__(self, data: Optional[Dict[str, Any]] = None, source: Optional[str] = None):
        self._data = _deep_merge(DEFAULTS, data or {})
        self.source = source

    @classmethod
    def load(cls, path: Optional[str] = None, environ: Optional[Dict[str, str]] = None) -> "Config":
        """
        Load configuration from YAML and the environment.

        Args:
            path: explicit settings file; falls back to MCP_CONFIG_PATH, then
                config/settings.yaml when it exists
            environ: environment mapping (defaults to os.environ)
        """
        environ = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        source = None

        explicit = path or environ.get("MCP_CONFIG_PATH")
        settings_path = Path(explicit) if explicit else DEFAULT_CONFIG_PATH

        if settings_path.exists():
            try:
                with open(settings_path, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {settings_path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigurationError(f"{settings_path} must contain a mapping at the top level")
            source = str(settings_path)
        elif explicit:
            raise ConfigurationError(f"Config file not found: {settings_path}")

        config = cls(data, source=source)

        for env_var, (key, convert) in ENV_OVERRIDES.items():
            raw = environ.get(env_var)
            if raw is None or raw == "":
                continue
            try:
                config.set(key, convert(raw))
            except ValueError as e:
                raise ConfigurationError(f"Invalid value for {env_var}: {raw!r}") from e

        return config

    def get(self, key: str, default: Any = None) -> Any:
        value: Any = self._data
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
                if value is None:
                    return default
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        parts = key.split(".")
        node = self._data
        for part in parts[:-1]:
            node = node.setdefault(part, {})
        node[parts[-1]] = value

    # Convenience accessors used by server.py

    @property
    def name(self) -> str:
        return self.get("mcp.name", "mcp-use")

    @property
    def version(self) -> str:
        return str(self.get("server.version", "1.0.0"))

    @property
    def port(self) -> int:
        return self.get("server.port", 3000)

    @property
    def base_url(self) -> str:
        return self.get("server.base_url", "http://localhost:3000").rstrip("/")

    @property
    def mcp_endpoint(self) -> str:
        return f"{self.base_url}/mcp"


_config: Optional[Config] = None


def get_config() -> Config:
    """Return the process-wide configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = Config.load()
        if _config.source:
            logger.info(f"Loaded configuration from {_config.source}")
    return _config


def reset_config() -> None:
    """Forget the cached configuration (tests and reloads)."""
    global _config
    _config = None
