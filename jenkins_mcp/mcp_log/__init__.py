"""MCP Log - records every Jenkins tool call.

This module provides:
- Database model for storing tool call logs
- Repository functions for writing and querying them
- The ``logged_tool`` decorator applied to each tool handler
- Support for SQLite (default) and PostgreSQL
"""

from .repo import (
    init_db,
    log_tool_call,
    get_tool_calls,
    get_recent_errors,
    get_tool_call_stats,
    cleanup_old_logs,
)

from .interceptor import logged_tool

__all__ = [
    "init_db",
    "log_tool_call",
    "get_tool_calls",
    "get_recent_errors",
    "get_tool_call_stats",
    "cleanup_old_logs",
    "logged_tool",
]
