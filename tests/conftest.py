"""
Pytest Configuration and Fixtures
===================================
Shared fixtures and configuration for all tests
"""

import pytest

from mcp_use_guide import config as config_module
from mcp_use_guide.config import ENV_OVERRIDES, Config


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep the process environment and cached config out of every test"""
    for env_var in list(ENV_OVERRIDES) + ["MCP_CONFIG_PATH"]:
        monkeypatch.delenv(env_var, raising=False)
    config_module.reset_config()
    yield
    config_module.reset_config()


@pytest.fixture
def test_config():
    """Configuration for testing, independent of config/settings.yaml"""
    return Config({
        'mcp': {
            'name': 'mcp-use-test',
            'description': 'Test instance of the mcp-use guide server',
        },
        'server': {
            'version': '9.9.9',
            'port': 3111,
            'base_url': 'http://testserver:3111/',
            'auto_discover': True,
        },
    })


@pytest.fixture
def descriptors():
    """Descriptors collected through auto-discovery"""
    from mcp_use_guide.mcp_app import collect_descriptors
    return collect_descriptors(auto_discover=True)


@pytest.fixture
def mcp_server(test_config, descriptors):
    """FastMCP server with every descriptor registered"""
    from mcp_use_guide.mcp_app import create_mcp
    return create_mcp(test_config, descriptors)


@pytest.fixture
def settings_file(tmp_path):
    """Write a settings.yaml and return its path"""
    def _write(content: str):
        path = tmp_path / "settings.yaml"
        path.write_text(content, encoding="utf-8")
        return path
    return _write
