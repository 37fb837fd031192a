"""MCP Log database models."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Float, Index, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _generate_id() -> str:
    return str(uuid.uuid4())


class MCPToolCall(Base):
    """One Jenkins tool invocation as seen by the MCP server."""

    __tablename__ = "mcp_tool_calls"

    id = Column(String(36), primary_key=True, default=_generate_id)
    request_id = Column(String(64), nullable=True, index=True)

    server_name = Column(String(64), nullable=False, index=True)
    tool_name = Column(String(128), nullable=False, index=True)

    args_json = Column(Text, nullable=True)  # secrets redacted
    args_hash = Column(String(64), nullable=True)

    success = Column(Boolean, nullable=False, default=False, index=True)
    result_preview = Column(Text, nullable=True)
    error_message = Column(Text, nullable=True)
    error_type = Column(String(128), nullable=True)
    error_kind = Column(String(32), nullable=True, index=True)  # JenkinsErrorKind value

    started_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    finished_at = Column(DateTime, nullable=True)
    duration_ms = Column(Float, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        Index("ix_mcp_tool_calls_server_tool", "server_name", "tool_name"),
        Index("ix_mcp_tool_calls_started_success", "started_at", "success"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "request_id": self.request_id,
            "server_name": self.server_name,
            "tool_name": self.tool_name,
            "args_json": self.args_json,
            "success": self.success,
            "result_preview": self.result_preview,
            "error_message": self.error_message,
            "error_type": self.error_type,
            "error_kind": self.error_kind,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "duration_ms": self.duration_ms,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
