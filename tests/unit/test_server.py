"""
Unit Tests for the Starlette Application
========================================
Plain HTTP endpoints; the lifespan is not started so no MCP sessions run.
"""

import logging

import pytest
from starlette.testclient import TestClient

from mcp_use_guide import server
from mcp_use_guide.config import Config
from mcp_use_guide.errors import ConfigurationError
from mcp_use_guide.server import create_app
from mcp_use_guide.services import knowledge_base


@pytest.fixture
def client(test_config, descriptors):
    return TestClient(create_app(test_config, descriptors))


@pytest.mark.http
class TestHTTPEndpoints:
    """Test health and version routes"""

    @pytest.mark.parametrize("path", ["/health", "/healthz"])
    def test_health(self, client, path):
        response = client.get(path)

        assert response.status_code == 200
        assert response.text == "OK"

    def test_version(self, client):
        response = client.get("/version")

        assert response.status_code == 200
        assert response.json() == {
            "name": "mcp-use-test",
            "version": "9.9.9",
            "base_url": "http://testserver:3111",
            "status": "running",
        }

    def test_deep_health_ok(self, client):
        response = client.get("/health/deep")

        assert response.status_code == 200
        assert response.json()["checks"] == {"server": "ok", "knowledge_base": "ok"}

    def test_deep_health_reports_missing_documents(self, client, monkeypatch, tmp_path):
        monkeypatch.setattr(knowledge_base, "KNOWLEDGE_BASE_DIR", tmp_path)

        response = client.get("/health/deep")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "unhealthy"
        assert "tools.md" in body["checks"]["knowledge_base"]

    def test_cors_headers(self, client):
        response = client.get("/version", headers={"Origin": "http://example.com"})

        assert response.headers.get("access-control-allow-origin") in ("*", "http://example.com")

    def test_request_is_logged(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="mcp_use_guide.utils.request_logging"):
            client.get("/version")

        messages = [r.getMessage() for r in caplog.records]
        assert any(m.startswith("GET /version -> 200 (") and "ms) from " in m for m in messages)

    def test_app_state(self, test_config, descriptors):
        app = create_app(test_config, descriptors)

        assert app.state.config is test_config
        assert app.state.mcp.name == "mcp-use-test"

    def test_invalid_config_fails_fast(self, descriptors):
        with pytest.raises(ConfigurationError):
            create_app(Config({"server": {"port": 0}}), descriptors)


@pytest.mark.http
class TestMain:
    """Test startup through main() without binding a socket"""

    @pytest.fixture(autouse=True)
    def no_serving(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        calls = []
        monkeypatch.setattr(server.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))
        return calls

    def test_unknown_log_level_is_config_error(self, monkeypatch, no_serving):
        """Test LOG_LEVEL outside the logging levels fails as a configuration error"""
        monkeypatch.setenv("LOG_LEVEL", "VERBOSE")

        with pytest.raises(ConfigurationError, match="logging.level"):
            server.main()
        assert no_serving == []

    def test_stdio_transport_validates_before_running(self, monkeypatch, no_serving):
        monkeypatch.setenv("MCP_TRANSPORT", "stdio")
        monkeypatch.setenv("MCP_PORT", "0")
        monkeypatch.setattr(server, "create_mcp", lambda *args, **kwargs: pytest.fail("server started"))

        with pytest.raises(ConfigurationError, match="server.port"):
            server.main()
