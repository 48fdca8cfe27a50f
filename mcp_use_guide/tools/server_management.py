"""
Server Management Tools
=======================
Describe how to run and deploy an mcp-use server. Both tools return
instructions as text; nothing is executed.
"""

import logging
from typing import Annotated

from pydantic import Field

from mcp_use_guide.errors import ConfigurationError
from mcp_use_guide.mcp_app import ToolDescriptor
from mcp_use_guide.services.composer import DEFAULT_PORT, ComposeKind, Platform, compose

logger = logging.getLogger(__name__)


def run_server(
    useYarn: Annotated[bool, Field(description="Use yarn instead of npm (default: true)")] = True,  # noqa: N803 - MCP arg name compatibility
    port: Annotated[int, Field(description="Port to run on (default: 3000)", gt=0)] = DEFAULT_PORT,
) -> str:
    """
    Instructions for running an MCP server locally

    Args:
        useYarn: use yarn commands (npm otherwise)
        port: port the server should listen on

    Returns:
        Markdown instructions, or an error message for out-of-range input
    """
    logger.info(f"run-server requested (useYarn={useYarn}, port={port})")
    try:
        return compose(ComposeKind.RUN, {"useYarn": useYarn, "port": port})
    except ConfigurationError as e:
        logger.warning(f"run-server rejected input: {e}")
        return f"Error: {e}"


def deploy_server(
    useYarn: Annotated[bool, Field(description="Use yarn instead of npm (default: true)")] = True,  # noqa: N803 - MCP arg name compatibility
    platform: Annotated[Platform, Field(description="Deployment platform")] = Platform.MCP_USE_CLOUD,
) -> str:
    """
    Instructions for deploying an MCP server to the chosen platform

    Returns:
        Markdown instructions, or an error message for out-of-range input
    """
    logger.info(f"deploy-server requested (useYarn={useYarn}, platform={getattr(platform, 'value', platform)})")
    try:
        return compose(ComposeKind.DEPLOY, {"useYarn": useYarn, "platform": platform})
    except ConfigurationError as e:
        logger.warning(f"deploy-server rejected input: {e}")
        return f"Error: {e}"


TOOLS = (
    ToolDescriptor(
        name="run-server",
        description="Run an MCP server locally for development and testing",
        handler=run_server,
    ),
    ToolDescriptor(
        name="deploy-server",
        description=(
            "Deploy an MCP server to production. "
            "Run 'npx mcp-use login' first if you get auth errors."
        ),
        handler=deploy_server,
    ),
)
