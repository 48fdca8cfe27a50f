"""
Instruction Composer
====================
Builds the "how to run" and "how to deploy" instructions returned by the
run-server and deploy-server tools.

Every variant is a fixed prose block; the only inputs are the package manager
token (derived from ``use_yarn``), the port and the deployment platform.
Nothing here executes commands, it only describes them.
"""

import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Tuple, Type, Union

from mcp_use_guide.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000


class ComposeKind(str, Enum):
    """Which instruction document to build"""
    RUN = "run"
    DEPLOY = "deploy"


class Platform(str, Enum):
    """Deployment targets understood by deploy-server"""
    MCP_USE_CLOUD = "mcp-use-cloud"
    SUPABASE = "supabase"
    OTHER = "other"


def resolve_package_manager(use_yarn: bool) -> str:
    """Return the CLI token for the chosen package manager."""
    return "yarn" if use_yarn else "npm"


def _check_use_yarn(value: Any) -> None:
    if not isinstance(value, bool):
        raise ConfigurationError(f"useYarn must be a boolean, got {type(value).__name__}")


@dataclass(frozen=True)
class RunRequest:
    """Parameters of the run-server tool"""
    use_yarn: bool = True
    port: int = DEFAULT_PORT

    def __post_init__(self):
        _check_use_yarn(self.use_yarn)
        # bool is an int subclass; True is not a port
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise ConfigurationError(f"port must be an integer, got {type(self.port).__name__}")
        if self.port < 1:
            raise ConfigurationError(f"port must be a positive integer (got {self.port})")

    @property
    def package_manager(self) -> str:
        return resolve_package_manager(self.use_yarn)


@dataclass(frozen=True)
class DeployRequest:
    """Parameters of the deploy-server tool"""
    use_yarn: bool = True
    platform: Platform = Platform.MCP_USE_CLOUD

    def __post_init__(self):
        _check_use_yarn(self.use_yarn)
        try:
            platform = Platform(self.platform)
        except ValueError:
            allowed = ", ".join(p.value for p in Platform)
            raise ConfigurationError(
                f"Unknown platform '{self.platform}'. Expected one of: {allowed}"
            ) from None
        object.__setattr__(self, "platform", platform)

    @property
    def package_manager(self) -> str:
        return resolve_package_manager(self.use_yarn)


# MCP clients send camelCase argument names
WIRE_NAMES = {"useYarn": "use_yarn"}

ComposeParams = Union[RunRequest, DeployRequest, Mapping[str, Any], None]


# ========================================
# RUN
# ========================================

def _render_run(request: RunRequest) -> str:
    pm = request.package_manager
    port = request.port
    return f"""To run your MCP server locally:

**Development mode (with hot reload):**
```bash
{pm} run dev
```

**Production mode:**
```bash
# First build
{pm} run build

# Then start
{pm} start
```

**With custom port:**
```bash
PORT={port} {pm} start
```

**Test with tunneling (before deployment):**
```bash
# Option 1: Auto-tunnel
mcp-use start --port {port} --tunnel

# Option 2: Separate tunnel
{pm} start  # Terminal 1
npx @mcp-use/tunnel {port}  # Terminal 2
```

Your server will be available at:
- 🌐 MCP endpoint: http://localhost:{port}/mcp
- 🔍 Inspector UI: http://localhost:{port}/inspector
- 🔒 Tunnel URL: https://[subdomain].local.mcp-use.run/mcp (when using tunnel)

**Tunnel details:**
- Expires after 24 hours
- Closes after 1 hour of inactivity
- Use to test with ChatGPT before deploying

Learn more: https://mcp-use.com/docs/tunneling"""


# ========================================
# DEPLOY
# ========================================

DEPLOY_HEADER = "# Deploy Your MCP Server\n\n"


def _deploy_mcp_use_cloud(pm: str) -> str:
    return f"""## Deploy to mcp-use Cloud (Recommended)

**Step 1: Login (if not already logged in)**
```bash
npx mcp-use login
```

**Step 2: Deploy**
```bash
{pm} run deploy
```

**If deployment fails with authentication error:**
```bash
# Run login command
npx mcp-use login

# Then try deploy again
{pm} run deploy
```

**After successful deployment:**
- ✅ You'll receive a public URL for your MCP server
- ✅ The server is automatically scaled and monitored
- ✅ HTTPS is enabled by default
- ✅ Zero-downtime deployments

**Deployment URL format:**
`https://your-server-name.mcp-use.com/mcp`

Use this URL to connect from ChatGPT, Claude, or other MCP clients."""


def _deploy_supabase(pm: str) -> str:
    # Supabase CLI is installed globally through npm whatever the project uses
    return """## Deploy to Supabase

**Step 1: Install Supabase CLI**
```bash
npm install -g supabase
```

**Step 2: Initialize Supabase**
```bash
supabase init
```

**Step 3: Deploy as Edge Function**
```bash
supabase functions deploy mcp-server
```

See full guide: https://docs.mcp-use.com/typescript/server/deployment/supabase"""


def _deploy_other(pm: str) -> str:
    return """## Deploy to Custom Platform

For other deployment platforms:
- **Vercel**: Use `vercel deploy`
- **Netlify**: Use `netlify deploy`
- **Railway**: Use `railway up`
- **Docker**: Build and deploy container

See deployment docs: https://docs.mcp-use.com/typescript/server/deployment"""


# Exactly one section per Platform member
DEPLOY_SECTIONS: Dict[Platform, Callable[[str], str]] = {
    Platform.MCP_USE_CLOUD: _deploy_mcp_use_cloud,
    Platform.SUPABASE: _deploy_supabase,
    Platform.OTHER: _deploy_other,
}


def _render_deploy(request: DeployRequest) -> str:
    section = DEPLOY_SECTIONS[request.platform]
    return DEPLOY_HEADER + section(request.package_manager)


COMPOSERS: Dict[ComposeKind, Tuple[Type, Callable[[Any], str]]] = {
    ComposeKind.RUN: (RunRequest, _render_run),
    ComposeKind.DEPLOY: (DeployRequest, _render_deploy),
}


# ========================================
# PUBLIC API
# ========================================

def _build_request(request_cls: Type, params: ComposeParams):
    if params is None:
        return request_cls()

    if isinstance(params, request_cls):
        return params

    if not isinstance(params, Mapping):
        raise ConfigurationError(
            f"Expected {request_cls.__name__} or a mapping, got {type(params).__name__}"
        )

    known = {f.name for f in fields(request_cls)}
    kwargs = {}
    for key, value in params.items():
        name = WIRE_NAMES.get(key, key)
        if name not in known:
            raise ConfigurationError(f"Unexpected parameter '{key}' for {request_cls.__name__}")
        # Omitted and null both mean "use the default"
        if value is not None:
            kwargs[name] = value

    return request_cls(**kwargs)


def compose(kind: Union[ComposeKind, str], params: ComposeParams = None) -> str:
    """
    Build the instruction text for ``kind``.

    Args:
        kind: ``run`` or ``deploy`` (enum member or its value)
        params: a RunRequest/DeployRequest, a mapping of parameter names
            (camelCase wire names or snake_case field names), or None for
            all defaults

    Returns:
        Markdown-formatted instructions

    Raises:
        ConfigurationError: if kind or any parameter is outside its domain
    """
    try:
        compose_kind = ComposeKind(kind)
    except ValueError:
        raise ConfigurationError(f"Unknown instruction kind '{kind}'") from None

    request_cls, render = COMPOSERS[compose_kind]
    request = _build_request(request_cls, params)

    logger.debug(f"Composing {compose_kind.value} instructions: {request}")
    return render(request)

