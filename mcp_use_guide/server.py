"""
mcp-use Guide Server - Starlette Application
============================================
Serves the FastMCP app over streamable HTTP (at /mcp) next to a few plain
HTTP endpoints for health checks and version info. ``main()`` starts it with
uvicorn, or over stdio when ``server.transport`` is ``stdio``.
"""

import logging
import os
import signal
import sys
import warnings
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse, PlainTextResponse

from mcp_use_guide.config import Config, get_config
from mcp_use_guide.mcp_app import DescriptorSet, collect_descriptors, create_mcp, registered_names
from mcp_use_guide.services.knowledge_base import EXAMPLE_CATALOG
from mcp_use_guide.utils.config_validator import validate_config
from mcp_use_guide.utils.request_logging import RequestLoggingMiddleware

logger = logging.getLogger(__name__)


# ========================================
# LOGGING
# ========================================
def configure_logging(config: Config) -> None:
    logging.basicConfig(
        level=str(config.get("logging.level", "INFO")).upper(),
        format=config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
    )


# ========================================
# STARTUP BANNER
# ========================================
def log_banner(config: Config, descriptors: DescriptorSet) -> None:
    tools, resources, prompts = registered_names(descriptors)
    logger.info("=" * 80)
    logger.info("🚀 mcp-use Guide Server - Starting Up")
    logger.info("=" * 80)
    logger.info(f"📦 Version: {config.version}")
    logger.info(f"🌐 Port: {config.port}")
    logger.info(f"🔗 MCP endpoint: {config.mcp_endpoint}")
    logger.info("-" * 80)
    logger.info(f"📖 Prompts: {', '.join(prompts)}")
    logger.info(f"📚 Resources: {len(resources)} ({', '.join(resources)})")
    logger.info(f"🛠️  Tools: {', '.join(tools)}")
    logger.info("-" * 80)
    logger.info("📡 MCP Server: Ready")
    logger.info("=" * 80)


# ========================================
# SIMPLE ENDPOINTS
# ========================================
async def health_check(request):
    """Health check endpoint"""
    return PlainTextResponse("OK")


async def version_info(request):
    """Version information endpoint"""
    config = request.app.state.config
    return JSONResponse({
        "name": config.name,
        "version": config.version,
        "base_url": config.base_url,
        "status": "running",
    })


async def deep_health_check(request):
    """
    Deep health check - verifies the packaged knowledge base is readable

    Returns 200 if all checks pass, 503 otherwise
    """
    health = {
        "status": "healthy",
        "checks": {
            "server": "ok",
        },
    }

    missing = [doc.filename for doc in EXAMPLE_CATALOG if not doc.path.exists()]
    if missing:
        health["checks"]["knowledge_base"] = f"missing: {', '.join(missing)}"
        health["status"] = "unhealthy"
    else:
        health["checks"]["knowledge_base"] = "ok"

    status_code = 200 if health["status"] == "healthy" else 503
    return JSONResponse(health, status_code=status_code)


# ========================================
# BUILD ASGI APP
# ========================================
def create_app(config: Optional[Config] = None, descriptors: Optional[DescriptorSet] = None) -> Starlette:
    """
    Build the Starlette app with the FastMCP HTTP app mounted at /.

    Args:
        config: settings (defaults to get_config())
        descriptors: pre-collected descriptors (defaults to collect_descriptors())
    """
    config = config or get_config()
    validate_config(config)

    if descriptors is None:
        descriptors = collect_descriptors(auto_discover=config.get("server.auto_discover", True))

    mcp = create_mcp(config, descriptors)
    mcp_http_app = mcp.http_app()

    @asynccontextmanager
    async def lifespan(app):
        # FastMCP's session manager only runs inside its own lifespan
        async with mcp_http_app.lifespan(app):
            logger.info("✅ FastMCP session manager started")
            yield
        logger.info("🛑 FastMCP session manager stopped")

    app = Starlette(lifespan=lifespan)
    app.state.config = config
    app.state.mcp = mcp

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.get("server.cors_origins", ["*"]),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ========================================
    # ROUTES
    # ========================================
    app.add_route("/healthz", health_check, methods=["GET"])
    app.add_route("/health", health_check, methods=["GET"])
    app.add_route("/health/deep", deep_health_check, methods=["GET"])
    app.add_route("/version", version_info, methods=["GET"])

    # Mount FastMCP at root; its MCP endpoint is /mcp
    app.mount("/", mcp_http_app)

    log_banner(config, descriptors)
    return app


# ========================================
# GRACEFUL SHUTDOWN
# ========================================
def _graceful_shutdown(*_):
    logger.info("🛑 Received shutdown signal, stopping gracefully...")
    sys.exit(0)


# ========================================
# MAIN
# ========================================
def main() -> None:
    config = get_config()
    # must precede configure_logging: basicConfig raises ValueError on unknown levels
    validate_config(config)
    configure_logging(config)

    os.environ["PYTHONUNBUFFERED"] = "1"
    warnings.filterwarnings("ignore", category=DeprecationWarning)

    if config.get("server.transport") == "stdio":
        # stdout carries the protocol; logs already go to stderr
        create_mcp(config).run()
        return

    for sig in (signal.SIGINT, signal.SIGTERM):
        signal.signal(sig, _graceful_shutdown)

    app = create_app(config)
    uvicorn.run(
        app,
        host=config.get("server.host", "0.0.0.0"),
        port=config.port,
        log_level=str(config.get("logging.level", "INFO")).lower(),
    )


if __name__ == "__main__":
    main()
