"""
Guide renderer for the how-to-create-mcp-server prompt.

The guide lives in ``knowledge_base/create_mcp_server.md.j2``; only the
package manager commands and the bootstrap template are parameterized.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from mcp_use_guide.errors import ConfigurationError
from mcp_use_guide.services.composer import resolve_package_manager
from mcp_use_guide.services.knowledge_base import KNOWLEDGE_BASE_DIR

logger = logging.getLogger(__name__)

GUIDE_TEMPLATE = "create_mcp_server.md.j2"

# Markdown output: no autoescaping, keep the file's own whitespace
jinja_env = Environment(
    loader=FileSystemLoader(str(KNOWLEDGE_BASE_DIR)),
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=False,
)


class ProjectTemplate(str, Enum):
    """create-mcp-use-app scaffolding templates"""
    STARTER = "starter"
    APPS_SDK = "apps-sdk"
    MCP_UI = "mcp-ui"


@dataclass(frozen=True)
class GuideRequest:
    use_yarn: bool = True
    template: ProjectTemplate = ProjectTemplate.APPS_SDK

    def __post_init__(self):
        if not isinstance(self.use_yarn, bool):
            raise ConfigurationError(f"use_yarn must be a boolean, got {type(self.use_yarn).__name__}")
        try:
            template = ProjectTemplate(self.template)
        except ValueError:
            allowed = ", ".join(t.value for t in ProjectTemplate)
            raise ConfigurationError(
                f"Unknown template '{self.template}'. Expected one of: {allowed}"
            ) from None
        object.__setattr__(self, "template", template)

    @property
    def package_manager(self) -> str:
        return resolve_package_manager(self.use_yarn)

    @property
    def script_runner(self) -> str:
        # yarn runs package scripts directly, npm needs "run" for anything but start/test
        return "yarn" if self.use_yarn else "npm run"


def render_guide(request: Optional[GuideRequest] = None) -> str:
    """Render the step-by-step MCP server guide."""
    request = request or GuideRequest()
    template = jinja_env.get_template(GUIDE_TEMPLATE)
    logger.debug(f"Rendering guide: {request}")
    return template.render(
        package_manager=request.package_manager,
        script_runner=request.script_runner,
        template=request.template.value,
    )
