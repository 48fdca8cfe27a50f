"""
Server info resource - JSON summary of this server and what it exposes.
"""

import json
from typing import Any, Callable, Dict

from mcp_use_guide.config import Config
from mcp_use_guide.mcp_app import DescriptorSet, ResourceDescriptor, registered_names
from mcp_use_guide.services.knowledge_base import list_documents

SERVER_INFO_URI = "mcp-use://server/info"


def build_server_info(config: Config, descriptors: DescriptorSet) -> Dict[str, Any]:
    tools, resources, prompts = registered_names(descriptors)
    return {
        "name": config.name,
        "version": config.version,
        "description": config.get("mcp.description"),
        "base_url": config.base_url,
        "mcp_endpoint": config.mcp_endpoint,
        "tools": tools,
        "resources": resources,
        "prompts": prompts,
        "documents": list_documents(),
    }


def make_server_info_handler(config: Config, descriptors: DescriptorSet) -> Callable[[], str]:
    """Bind the resource to the config and descriptors the server was built with."""

    def server_info() -> str:
        """Name, version, endpoint and registered primitives of this server"""
        return json.dumps(build_server_info(config, descriptors), indent=2)

    return server_info


RESOURCES = (
    ResourceDescriptor(
        uri=SERVER_INFO_URI,
        name="Server Info",
        description="Name, version, endpoint and registered primitives of this MCP server",
        mime_type="application/json",
        factory=make_server_info_handler,
    ),
)
