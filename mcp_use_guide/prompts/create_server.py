"""Step-by-step guide prompt for building an MCP server with mcp-use."""

from typing import Annotated, Literal

from pydantic import Field

from mcp_use_guide.mcp_app import PromptDescriptor
from mcp_use_guide.services.guide import GuideRequest, render_guide


def how_to_create_mcp_server(
    package_manager: Annotated[
        Literal["yarn", "npm"], Field(description="Package manager used in the commands (default: yarn)")
    ] = "yarn",
    template: Annotated[
        Literal["starter", "apps-sdk", "mcp-ui"],
        Field(description="create-mcp-use-app template to bootstrap with (default: apps-sdk)"),
    ] = "apps-sdk",
) -> str:
    """
    Returns the full guide as a single user message: bootstrap, project
    layout, tools, resources, prompts, local run, tunnelling and deployment.
    """
    return render_guide(GuideRequest(use_yarn=package_manager == "yarn", template=template))


PROMPTS = (
    PromptDescriptor(
        name="how-to-create-mcp-server",
        description="Comprehensive step-by-step guide for creating an MCP server with mcp-use",
        handler=how_to_create_mcp_server,
    ),
)
