"""
mcp-use guide server: an MCP server that teaches agents how to build,
run and deploy MCP servers with mcp-use.
"""

__version__ = "1.0.0"
