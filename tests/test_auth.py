from jenkins_mcp.utils.auth import UNAUTHORIZED_TEXT, auth_or_error


def test_open_when_token_not_configured():
    assert auth_or_error(None) is None
    assert auth_or_error("anything") is None


def test_matching_token_passes(monkeypatch):
    monkeypatch.setenv("JENKINS_MCP_CLIENT_TOKEN", "t0ken")
    assert auth_or_error("t0ken") is None


def test_missing_or_wrong_token_rejected(monkeypatch):
    monkeypatch.setenv("JENKINS_MCP_CLIENT_TOKEN", "t0ken")
    assert auth_or_error(None) == UNAUTHORIZED_TEXT
    assert auth_or_error("nope") == UNAUTHORIZED_TEXT
