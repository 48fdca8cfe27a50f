"""
Exceptions raised by the mcp-use guide server.
"""


class GuideServerError(Exception):
    """Base class for errors raised by this package."""
    pass


class ConfigurationError(GuideServerError):
    """
    Raised when a value falls outside its validated domain.

    Used both for invalid settings at startup and for composer/guide
    parameters that the MCP schema layer should have rejected.
    """
    pass
