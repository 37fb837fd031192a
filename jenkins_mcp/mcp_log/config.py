"""MCP Log database configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config_utils import env_bool, env_int, env_optional_str


@dataclass(frozen=True)
class MCPLogConfig:
    """Configuration for tool-call logging.

    Environment variables:
    - MCP_LOG_ENABLED: Enable/disable logging (default: false)
    - MCP_LOG_DATABASE_URL: SQLAlchemy database URL
    - DATABASE_URL: Fallback database URL
    - MCP_LOG_RETENTION_DAYS: Number of days to keep logs (default: 30)

    Defaults to a SQLite file in the working directory.
    """

    database_url: str
    retention_days: int
    enabled: bool

    DEFAULT_DATABASE_URL: str = "sqlite:///jenkins_mcp_log.db"

    @classmethod
    def from_env(cls) -> "MCPLogConfig":
        database_url = (
            env_optional_str("MCP_LOG_DATABASE_URL")
            or env_optional_str("DATABASE_URL")
            or cls.DEFAULT_DATABASE_URL
        )
        return cls(
            database_url=database_url,
            retention_days=env_int("MCP_LOG_RETENTION_DAYS", 30),
            enabled=env_bool("MCP_LOG_ENABLED", False),
        )


_config: Optional[MCPLogConfig] = None


def get_config() -> MCPLogConfig:
    """Get the MCP log configuration (cached)."""
    global _config
    if _config is None:
        _config = MCPLogConfig.from_env()
    return _config


def reset_config() -> None:
    global _config
    _config = None
