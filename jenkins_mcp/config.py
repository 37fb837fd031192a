from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .config_utils import env_bool, env_int, env_optional_float, env_optional_str, env_str


@dataclass(frozen=True)
class JenkinsMCPServerConfig:
    """Runtime configuration for the Jenkins MCP server.

    Reads from environment variables first; falls back to local-dev defaults.

    Env vars:
    - JENKINS_URL
    - JENKINS_USERNAME
    - JENKINS_PASSWORD
    - JENKINS_VERIFY_SSL (TLS verification is off unless set)
    - JENKINS_TIMEOUT_SECONDS (unset means requests wait indefinitely)
    - JENKINS_MCP_CLIENT_TOKEN
    - JENKINS_MCP_DEBUG

    MCP transport selection:
    - JENKINS_MCP_TRANSPORT: stdio|http|sse
    - JENKINS_MCP_HOST
    - JENKINS_MCP_PORT
    """

    base_url: str
    username: Optional[str]
    password: Optional[str]
    verify_ssl: bool
    timeout_seconds: Optional[float]
    mcp_client_token: Optional[str]
    debug: bool
    mcp_transport: str
    mcp_host: str
    mcp_port: int

    DEFAULT_BASE_URL: str = "http://localhost:8080"
    DEFAULT_VERIFY_SSL: bool = False
    DEFAULT_MCP_TRANSPORT: str = "stdio"
    DEFAULT_MCP_HOST: str = "0.0.0.0"
    DEFAULT_MCP_PORT: int = 8000

    @classmethod
    def from_env(cls) -> "JenkinsMCPServerConfig":
        transport = env_str("JENKINS_MCP_TRANSPORT", cls.DEFAULT_MCP_TRANSPORT).lower()
        return cls(
            base_url=env_str("JENKINS_URL", cls.DEFAULT_BASE_URL).rstrip("/"),
            username=env_optional_str("JENKINS_USERNAME"),
            password=env_optional_str("JENKINS_PASSWORD", strip=False),
            verify_ssl=env_bool("JENKINS_VERIFY_SSL", cls.DEFAULT_VERIFY_SSL),
            timeout_seconds=env_optional_float("JENKINS_TIMEOUT_SECONDS"),
            mcp_client_token=env_optional_str("JENKINS_MCP_CLIENT_TOKEN"),
            debug=env_bool("JENKINS_MCP_DEBUG", False),
            mcp_transport=transport,
            mcp_host=env_str("JENKINS_MCP_HOST", cls.DEFAULT_MCP_HOST),
            mcp_port=env_int("JENKINS_MCP_PORT", cls.DEFAULT_MCP_PORT),
        )

    def to_env_overrides(self) -> Dict[str, str]:
        """Environment overrides suitable for launching the server as a subprocess."""

        env = {
            "JENKINS_URL": self.base_url,
            "JENKINS_VERIFY_SSL": "true" if self.verify_ssl else "false",
            "JENKINS_MCP_DEBUG": "true" if self.debug else "false",
            "JENKINS_MCP_TRANSPORT": self.mcp_transport,
            "JENKINS_MCP_HOST": self.mcp_host,
            "JENKINS_MCP_PORT": str(self.mcp_port),
        }
        if self.timeout_seconds is not None:
            env["JENKINS_TIMEOUT_SECONDS"] = str(self.timeout_seconds)
        if self.mcp_client_token:
            env["JENKINS_MCP_CLIENT_TOKEN"] = self.mcp_client_token
        return env
