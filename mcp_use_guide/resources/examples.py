"""
Example resources - one markdown document per MCP primitive plus a
complete server walkthrough.
"""

from typing import Callable

from mcp_use_guide.mcp_app import ResourceDescriptor
from mcp_use_guide.services.knowledge_base import EXAMPLE_CATALOG, ExampleDocument, read_document


def _make_reader(document: ExampleDocument) -> Callable[[], str]:
    def read_example() -> str:
        return read_document(document.uri)

    # FastMCP uses the function name as a fallback key
    read_example.__name__ = f"read_{document.filename.rsplit('.', 1)[0]}"
    read_example.__doc__ = document.description
    return read_example


RESOURCES = tuple(
    ResourceDescriptor(
        uri=document.uri,
        name=document.name,
        description=document.description,
        mime_type=document.mime_type,
        handler=_make_reader(document),
    )
    for document in EXAMPLE_CATALOG
)
