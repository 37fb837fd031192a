"""MCP Log repository functions."""

from __future__ import annotations

import hashlib
import json
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, desc, func
from sqlalchemy.exc import SQLAlchemyError

from .config import get_config
from .db import get_engine, get_session
from .models import Base, MCPToolCall

_SENSITIVE_KEYS = {
    "password", "token", "secret", "credential", "_client_token",
    "auth", "authorization", "api_key", "apikey",
}


def init_db(database_url: Optional[str] = None) -> None:
    """Create the log tables if they don't exist. Safe to call multiple times."""
    Base.metadata.create_all(get_engine(database_url))


def _hash_args(args: Dict[str, Any]) -> str:
    serialized = json.dumps(args, sort_keys=True, default=str)
    return hashlib.sha256(serialized.encode()).hexdigest()[:16]


def redact_sensitive(args: Dict[str, Any]) -> Dict[str, Any]:
    """Mask values whose key looks like a credential, recursing into dicts.

    Build parameters routinely carry secrets (``DEPLOY_TOKEN``), so nested
    ``params`` dicts are scanned too.
    """
    redacted: Dict[str, Any] = {}
    for k, v in args.items():
        key_lower = k.lower()
        if any(sens in key_lower for sens in _SENSITIVE_KEYS):
            redacted[k] = "***REDACTED***"
        elif isinstance(v, dict):
            redacted[k] = redact_sensitive(v)
        else:
            redacted[k] = v
    return redacted


def log_tool_call(
    server_name: str,
    tool_name: str,
    args: Optional[Dict[str, Any]] = None,
    success: bool = False,
    result_preview: Optional[str] = None,
    error_message: Optional[str] = None,
    error_type: Optional[str] = None,
    error_kind: Optional[str] = None,
    started_at: Optional[datetime] = None,
    finished_at: Optional[datetime] = None,
    duration_ms: Optional[float] = None,
    request_id: Optional[str] = None,
    database_url: Optional[str] = None,
) -> Optional[str]:
    """Log a tool call to the database.

    Args:
        server_name: Name of the MCP server
        tool_name: Name of the tool called
        args: Tool arguments (sensitive data will be redacted)
        success: Whether the call succeeded
        result_preview: Truncated result for debugging
        error_message: Error message if failed
        error_type: Exception class name if the tool raised
        error_kind: Jenkins error category if the tool reported a failure
        started_at: When the call started
        finished_at: When the call finished
        duration_ms: Duration in milliseconds
        request_id: Request correlation ID
        database_url: Optional database URL override

    Returns:
        The ID of the created log entry, or None if logging is disabled or failed.
    """
    if not get_config().enabled:
        return None

    args_json = None
    args_hash = None
    if args:
        args_json = json.dumps(redact_sensitive(args), default=str)[:10000]
        args_hash = _hash_args(args)

    if result_preview and len(result_preview) > 5000:
        result_preview = result_preview[:5000] + "...[truncated]"

    try:
        entry = MCPToolCall(
            server_name=server_name,
            tool_name=tool_name,
            args_json=args_json,
            args_hash=args_hash,
            success=success,
            result_preview=result_preview,
            error_message=error_message[:2000] if error_message else None,
            error_type=error_type,
            error_kind=error_kind,
            started_at=started_at or datetime.utcnow(),
            finished_at=finished_at,
            duration_ms=duration_ms,
            request_id=request_id,
        )

        with get_session(database_url) as session:
            session.add(entry)
            session.commit()
            return entry.id

    except SQLAlchemyError:
        return None


def get_tool_calls(
    tool_name: Optional[str] = None,
    success: Optional[bool] = None,
    since: Optional[datetime] = None,
    limit: int = 100,
    offset: int = 0,
    database_url: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Query tool call logs, newest first."""
    try:
        with get_session(database_url) as session:
            query = session.query(MCPToolCall)

            if tool_name:
                query = query.filter(MCPToolCall.tool_name == tool_name)
            if success is not None:
                query = query.filter(MCPToolCall.success == success)
            if since:
                query = query.filter(MCPToolCall.started_at >= since)

            query = query.order_by(desc(MCPToolCall.started_at)).limit(limit).offset(offset)
            return [row.to_dict() for row in query.all()]

    except SQLAlchemyError:
        return []


def get_recent_errors(
    limit: int = 20,
    since: Optional[datetime] = None,
    database_url: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Get recent failed tool calls (default window: one day)."""
    if since is None:
        since = datetime.utcnow() - timedelta(days=1)
    return get_tool_calls(success=False, since=since, limit=limit, database_url=database_url)


def get_tool_call_stats(
    since: Optional[datetime] = None,
    database_url: Optional[str] = None,
) -> Dict[str, Any]:
    """Aggregate counts per tool and per error kind (default window: seven days)."""
    if since is None:
        since = datetime.utcnow() - timedelta(days=7)

    stats: Dict[str, Any] = {
        "total_calls": 0,
        "failed_calls": 0,
        "avg_duration_ms": None,
        "by_tool": {},
        "by_error_kind": {},
        "since": since.isoformat(),
    }

    window = MCPToolCall.started_at >= since

    try:
        with get_session(database_url) as session:
            stats["total_calls"] = session.query(func.count(MCPToolCall.id)).filter(window).scalar() or 0
            stats["failed_calls"] = session.query(func.count(MCPToolCall.id)).filter(
                and_(window, MCPToolCall.success.is_(False))
            ).scalar() or 0

            avg_duration = session.query(func.avg(MCPToolCall.duration_ms)).filter(
                and_(window, MCPToolCall.duration_ms.isnot(None))
            ).scalar()
            stats["avg_duration_ms"] = round(avg_duration, 2) if avg_duration else None

            for name, count in session.query(MCPToolCall.tool_name, func.count(MCPToolCall.id)).filter(
                window
            ).group_by(MCPToolCall.tool_name):
                stats["by_tool"][name] = count

            for kind, count in session.query(MCPToolCall.error_kind, func.count(MCPToolCall.id)).filter(
                and_(window, MCPToolCall.error_kind.isnot(None))
            ).group_by(MCPToolCall.error_kind):
                stats["by_error_kind"][kind] = count

        return stats

    except SQLAlchemyError:
        return stats


def cleanup_old_logs(
    retention_days: Optional[int] = None,
    database_url: Optional[str] = None,
) -> int:
    """Delete logs older than the retention period. Returns the number removed."""
    if retention_days is None:
        retention_days = get_config().retention_days

    cutoff = datetime.utcnow() - timedelta(days=retention_days)

    try:
        with get_session(database_url) as session:
            deleted = session.query(MCPToolCall).filter(
                MCPToolCall.created_at < cutoff
            ).delete(synchronize_session=False)
            session.commit()
            return deleted

    except SQLAlchemyError:
        return 0
