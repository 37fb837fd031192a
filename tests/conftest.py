import json
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest
import requests

from jenkins_mcp import handlers
from jenkins_mcp.mcp_log.config import reset_config
from jenkins_mcp.mcp_log.db import dispose_engine
from jenkins_mcp.mcp_log.interceptor import reset_initialised
from jenkins_mcp.utils.client import JenkinsAuthConfig, JenkinsClient

BASE_URL = "http://jenkins.local"

_ENV_VARS = (
    "JENKINS_URL",
    "JENKINS_USERNAME",
    "JENKINS_PASSWORD",
    "JENKINS_VERIFY_SSL",
    "JENKINS_TIMEOUT_SECONDS",
    "JENKINS_MCP_CLIENT_TOKEN",
    "JENKINS_MCP_DEBUG",
    "JENKINS_MCP_TRANSPORT",
    "JENKINS_MCP_HOST",
    "JENKINS_MCP_PORT",
    "MCP_LOG_ENABLED",
    "MCP_LOG_DATABASE_URL",
    "MCP_LOG_RETENTION_DAYS",
    "DATABASE_URL",
    "MCP_TRANSPORT",
    "MCP_HOST",
    "MCP_PORT",
)

_REASONS = {
    200: "OK",
    201: "Created",
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    500: "Internal Server Error",
}


def make_response(status: int = 200, body: Any = None, *, text: Optional[str] = None, url: str = BASE_URL) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp.reason = _REASONS.get(status, "")
    resp.url = url
    if text is not None:
        resp._content = text.encode("utf-8")
        resp.headers["Content-Type"] = "text/plain"
    elif body is not None:
        resp._content = json.dumps(body).encode("utf-8")
        resp.headers["Content-Type"] = "application/json"
    else:
        resp._content = b""
    return resp


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    handlers.set_client(None)
    reset_config()
    reset_initialised()
    yield
    handlers.set_client(None)
    reset_config()
    reset_initialised()
    dispose_engine()


@pytest.fixture
def session():
    s = MagicMock(spec=requests.Session)
    s.request.return_value = make_response(200, {})
    return s


@pytest.fixture
def client(session):
    c = JenkinsClient(
        JenkinsAuthConfig(base_url=BASE_URL, username="bob", password="s3cret"),
        session=session,
    )
    handlers.set_client(c)
    return c


def requested(session) -> tuple:
    """(method, url, params) of the last request made through ``session``."""
    call = session.request.call_args
    return call.args[0], call.args[1], call.kwargs.get("params")
