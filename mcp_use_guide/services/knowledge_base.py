"""
Knowledge Base
==============
Catalog of the markdown example documents shipped with the package and
helpers to read them.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)

# Directory holding the markdown documents and the guide template
KNOWLEDGE_BASE_DIR = Path(__file__).parent.parent / "knowledge_base"


@dataclass(frozen=True)
class ExampleDocument:
    uri: str
    name: str
    description: str
    filename: str
    mime_type: str = "text/markdown"

    @property
    def path(self) -> Path:
        return KNOWLEDGE_BASE_DIR / self.filename

    def as_metadata(self) -> Dict[str, str]:
        return {
            "uri": self.uri,
            "name": self.name,
            "description": self.description,
            "mimeType": self.mime_type,
        }


EXAMPLE_CATALOG: Tuple[ExampleDocument, ...] = (
    ExampleDocument(
        uri="mcp-use://examples/tools",
        name="Tools Example",
        description="Complete example of defining tools in an MCP server",
        filename="tools.md",
    ),
    ExampleDocument(
        uri="mcp-use://examples/resources",
        name="Resources Example",
        description="Complete example of defining resources in an MCP server",
        filename="resources.md",
    ),
    ExampleDocument(
        uri="mcp-use://examples/prompts",
        name="Prompts Example",
        description="Complete example of defining prompts in an MCP server",
        filename="prompts.md",
    ),
    ExampleDocument(
        uri="mcp-use://examples/widgets",
        name="Widgets Example",
        description="Complete example of creating widgets with OpenAI Apps SDK",
        filename="widgets.md",
    ),
    ExampleDocument(
        uri="mcp-use://examples/complete-server",
        name="Complete Server Example",
        description="Full working example combining all MCP primitives",
        filename="complete_server.md",
    ),
)

_BY_URI: Dict[str, ExampleDocument] = {doc.uri: doc for doc in EXAMPLE_CATALOG}


def get_document(uri: str) -> ExampleDocument:
    """Look up a catalogued document; raises KeyError for unknown URIs."""
    if uri not in _BY_URI:
        raise KeyError(uri)
    return _BY_URI[uri]


def read_document(uri: str) -> str:
    """
    Read the markdown body of a catalogued document.

    Raises:
        KeyError: if the URI is not in the catalog
        FileNotFoundError: if the document file is missing from the package
    """
    document = get_document(uri)
    if not document.path.exists():
        logger.error(f"❌ Knowledge base file missing: {document.path}")
        raise FileNotFoundError(str(document.path))
    return document.path.read_text(encoding="utf-8")


def list_documents() -> List[Dict[str, str]]:
    return [doc.as_metadata() for doc in EXAMPLE_CATALOG]
