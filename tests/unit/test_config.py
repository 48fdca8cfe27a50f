"""
Unit Tests for Configuration Loading and Validation
===================================================
"""

import pytest

from mcp_use_guide.config import Config, get_config
from mcp_use_guide.errors import ConfigurationError
from mcp_use_guide.utils.config_validator import validate_config


@pytest.mark.unit
class TestConfig:
    """Test Config layering"""

    def test_defaults(self):
        config = Config()

        assert config.name == "mcp-use"
        assert config.version == "1.0.0"
        assert config.port == 3000
        assert config.base_url == "http://localhost:3000"
        assert config.mcp_endpoint == "http://localhost:3000/mcp"
        assert config.get("server.transport") == "http"
        assert config.get("server.auto_discover") is True

    def test_dotted_get_with_default(self):
        config = Config()

        assert config.get("server.missing", "fallback") == "fallback"
        assert config.get("server.port.nested", 1) == 1
        assert config.get("nothing.here") is None

    def test_yaml_file_merges_over_defaults(self, settings_file):
        path = settings_file(
            "server:\n"
            "  port: 8080\n"
            "  base_url: https://guide.example.com/\n"
            "logging:\n"
            "  level: DEBUG\n"
        )
        config = Config.load(path=str(path), environ={})

        assert config.port == 8080
        assert config.base_url == "https://guide.example.com"
        assert config.get("logging.level") == "DEBUG"
        # untouched defaults survive the merge
        assert config.get("server.transport") == "http"
        assert config.source == str(path)

    def test_env_overrides_yaml(self, settings_file):
        path = settings_file("server:\n  port: 8080\n")
        config = Config.load(
            path=str(path),
            environ={
                "MCP_URL": "https://mcp.example.com",
                "MCP_PORT": "9000",
                "AUTO_DISCOVER": "false",
                "LOG_LEVEL": "warning",
            },
        )

        assert config.port == 9000
        assert config.base_url == "https://mcp.example.com"
        assert config.get("server.auto_discover") is False
        assert config.get("logging.level") == "warning"

    def test_config_path_from_environment(self, settings_file):
        path = settings_file("mcp:\n  name: from-env-path\n")
        config = Config.load(environ={"MCP_CONFIG_PATH": str(path)})

        assert config.name == "from-env-path"

    def test_missing_explicit_file_rejected(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            Config.load(path=str(tmp_path / "nope.yaml"), environ={})

    def test_invalid_yaml_rejected(self, settings_file):
        path = settings_file("server: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            Config.load(path=str(path), environ={})

    def test_non_mapping_yaml_rejected(self, settings_file):
        path = settings_file("- just\n- a list\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            Config.load(path=str(path), environ={})

    def test_invalid_port_env_rejected(self):
        with pytest.raises(ConfigurationError, match="MCP_PORT"):
            Config.load(environ={"MCP_PORT": "http"})

    def test_get_config_is_cached(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)

        assert get_config() is get_config()


@pytest.mark.unit
class TestConfigValidator:
    """Test validate_config"""

    def test_defaults_are_valid(self):
        validate_config(Config())

    @pytest.mark.parametrize("port", [0, 70000, "3000", True])
    def test_invalid_port(self, port):
        with pytest.raises(ConfigurationError, match="server.port"):
            validate_config(Config({"server": {"port": port}}))

    @pytest.mark.parametrize("url", ["localhost:3000", "ftp://example.com", "http://"])
    def test_invalid_base_url(self, url):
        with pytest.raises(ConfigurationError, match="server.base_url"):
            validate_config(Config({"server": {"base_url": url}}))

    def test_invalid_transport(self):
        with pytest.raises(ConfigurationError, match="server.transport"):
            validate_config(Config({"server": {"transport": "sse"}}))

    def test_invalid_log_level(self):
        with pytest.raises(ConfigurationError, match="logging.level"):
            validate_config(Config({"logging": {"level": "LOUD"}}))

    def test_all_errors_reported_together(self):
        config = Config({"server": {"port": 0, "transport": "sse"}})

        with pytest.raises(ConfigurationError) as exc_info:
            validate_config(config)

        assert "server.port" in str(exc_info.value)
        assert "server.transport" in str(exc_info.value)
