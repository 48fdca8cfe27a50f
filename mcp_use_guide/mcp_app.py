"""
FastMCP application factory
===========================
Tools, resources and prompts are declared as descriptors in the ``tools``,
``resources`` and ``prompts`` sub-packages (module-level ``TOOLS``,
``RESOURCES`` and ``PROMPTS`` tuples). ``create_mcp`` collects them and
registers each one exactly once on a fresh FastMCP instance.
"""

import importlib
import logging
import pkgutil
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Optional, Tuple

from fastmcp import FastMCP

from mcp_use_guide.config import Config, get_config
from mcp_use_guide.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    handler: Callable[..., Any]


@dataclass(frozen=True)
class ResourceDescriptor:
    """
    A resource to register.

    Set ``handler`` for static content. Resources that describe the running
    server set ``factory`` instead; it is called with the active config and
    descriptor set and returns the handler.
    """
    uri: str
    name: str
    description: str
    handler: Optional[Callable[[], Any]] = None
    mime_type: str = "text/markdown"
    factory: Optional[Callable[[Config, "DescriptorSet"], Callable[[], Any]]] = None

    def bind(self, config: Config, descriptors: "DescriptorSet") -> Callable[[], Any]:
        if self.factory is not None:
            return self.factory(config, descriptors)
        if self.handler is None:
            raise ConfigurationError(f"Resource {self.uri} has neither a handler nor a factory")
        return self.handler


@dataclass(frozen=True)
class PromptDescriptor:
    name: str
    description: str
    handler: Callable[..., Any]


@dataclass
class DescriptorSet:
    tools: List[ToolDescriptor] = field(default_factory=list)
    resources: List[ResourceDescriptor] = field(default_factory=list)
    prompts: List[PromptDescriptor] = field(default_factory=list)

    def extend_from(self, module) -> None:
        self.tools.extend(getattr(module, "TOOLS", ()))
        self.resources.extend(getattr(module, "RESOURCES", ()))
        self.prompts.extend(getattr(module, "PROMPTS", ()))

    def validate(self) -> None:
        """Reject duplicate tool names, resource URIs and prompt names."""
        for kind, keys in (
            ("tool", [t.name for t in self.tools]),
            ("resource", [r.uri for r in self.resources]),
            ("prompt", [p.name for p in self.prompts]),
        ):
            seen = set()
            for key in keys:
                if key in seen:
                    raise ConfigurationError(f"Duplicate {kind} registration: {key}")
                seen.add(key)

    def summary(self) -> str:
        return f"{len(self.tools)} tools, {len(self.resources)} resources, {len(self.prompts)} prompts"


# ========================================
# DISCOVERY
# ========================================
DESCRIPTOR_PACKAGES = ("tools", "resources", "prompts")

# Used when auto-discovery is disabled
STATIC_MODULES = (
    "mcp_use_guide.tools.server_management",
    "mcp_use_guide.resources.examples",
    "mcp_use_guide.resources.server_info",
    "mcp_use_guide.prompts.create_server",
)


def _iter_submodules(pkg_name: str) -> Iterable[str]:
    """Yield the public submodules of a descriptor package."""
    pkg = importlib.import_module(pkg_name)
    for _, modname, ispkg in pkgutil.iter_modules(pkg.__path__):
        if not ispkg and not modname.startswith("_"):
            yield f"{pkg_name}.{modname}"


def collect_descriptors(auto_discover: bool = True) -> DescriptorSet:
    """
    Gather descriptors from the tools/resources/prompts packages.

    Args:
        auto_discover: scan the packages with pkgutil; when False only the
            modules in STATIC_MODULES are loaded

    Raises:
        ConfigurationError: on duplicate names or URIs
    """
    if auto_discover:
        module_names: List[str] = []
        for pkg in DESCRIPTOR_PACKAGES:
            module_names.extend(sorted(_iter_submodules(f"{__package__}.{pkg}")))
    else:
        module_names = list(STATIC_MODULES)

    descriptors = DescriptorSet()
    for name in module_names:
        try:
            module = importlib.import_module(name)
        except Exception as e:
            logger.exception(f"❌ Failed to load {name}: {e}")
            raise
        descriptors.extend_from(module)
        logger.debug(f"✅ Loaded: {name}")

    descriptors.validate()
    return descriptors


# ========================================
# FACTORY
# ========================================
def create_mcp(
    config: Optional[Config] = None,
    descriptors: Optional[DescriptorSet] = None,
) -> FastMCP:
    """
    Build the FastMCP server and register every descriptor on it.

    Args:
        config: settings (defaults to get_config())
        descriptors: pre-collected descriptors (defaults to collect_descriptors())
    """
    cfg = config or get_config()
    if descriptors is None:
        descriptors = collect_descriptors(auto_discover=cfg.get("server.auto_discover", True))
    else:
        descriptors.validate()

    mcp = FastMCP(name=cfg.name, instructions=cfg.get("mcp.description"))

    for tool in descriptors.tools:
        mcp.tool(name=tool.name, description=tool.description)(tool.handler)

    for resource in descriptors.resources:
        mcp.resource(
            resource.uri,
            name=resource.name,
            description=resource.description,
            mime_type=resource.mime_type,
        )(resource.bind(cfg, descriptors))

    for prompt in descriptors.prompts:
        mcp.prompt(name=prompt.name, description=prompt.description)(prompt.handler)

    logger.info(f"📡 MCP server '{cfg.name}' registered {descriptors.summary()}")
    return mcp


def registered_names(descriptors: DescriptorSet) -> Tuple[List[str], List[str], List[str]]:
    """Tool names, resource URIs and prompt names, in registration order."""
    return (
        [t.name for t in descriptors.tools],
        [r.uri for r in descriptors.resources],
        [p.name for p in descriptors.prompts],
    )
