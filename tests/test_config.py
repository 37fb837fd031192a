from jenkins_mcp.config import JenkinsMCPServerConfig
from jenkins_mcp.config_utils import env_bool, env_int, env_optional_float


def test_defaults():
    cfg = JenkinsMCPServerConfig.from_env()

    assert cfg.base_url == "http://localhost:8080"
    assert cfg.username is None
    assert cfg.password is None
    assert cfg.verify_ssl is False
    assert cfg.timeout_seconds is None
    assert cfg.mcp_client_token is None
    assert cfg.mcp_transport == "stdio"
    assert cfg.mcp_port == 8000


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("JENKINS_URL", "https://ci.example.com/")
    monkeypatch.setenv("JENKINS_USERNAME", " alice ")
    monkeypatch.setenv("JENKINS_PASSWORD", "p@ss ")
    monkeypatch.setenv("JENKINS_VERIFY_SSL", "yes")
    monkeypatch.setenv("JENKINS_TIMEOUT_SECONDS", "12.5")
    monkeypatch.setenv("JENKINS_MCP_TRANSPORT", "HTTP")
    monkeypatch.setenv("JENKINS_MCP_PORT", "9001")

    cfg = JenkinsMCPServerConfig.from_env()

    assert cfg.base_url == "https://ci.example.com"
    assert cfg.username == "alice"
    assert cfg.password == "p@ss "
    assert cfg.verify_ssl is True
    assert cfg.timeout_seconds == 12.5
    assert cfg.mcp_transport == "http"
    assert cfg.mcp_port == 9001


def test_to_env_overrides_round_trips_through_from_env(monkeypatch):
    monkeypatch.setenv("JENKINS_URL", "https://ci.example.com")
    monkeypatch.setenv("JENKINS_MCP_CLIENT_TOKEN", "abc")
    overrides = JenkinsMCPServerConfig.from_env().to_env_overrides()

    assert overrides["JENKINS_URL"] == "https://ci.example.com"
    assert overrides["JENKINS_VERIFY_SSL"] == "false"
    assert overrides["JENKINS_MCP_CLIENT_TOKEN"] == "abc"
    assert "JENKINS_TIMEOUT_SECONDS" not in overrides


def test_env_helpers_fall_back_on_garbage(monkeypatch):
    monkeypatch.setenv("X_BOOL", "maybe")
    monkeypatch.setenv("X_INT", "ten")
    monkeypatch.setenv("X_FLOAT", "0")

    assert env_bool("X_BOOL", True) is True
    assert env_int("X_INT", 3) == 3
    assert env_optional_float("X_FLOAT") is None
