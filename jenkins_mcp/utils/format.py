from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, Optional


def format_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def format_raw(data: Any) -> str:
    """Single-line JSON encoding; plain text comes back quoted."""

    return json.dumps(data, ensure_ascii=False, default=str)


def format_params(params: Optional[Dict[str, Any]]) -> str:
    if not params:
        return ""
    output = "⚙️  **Parameters:**\n"
    for key, value in params.items():
        output += f"   • {key}: {value}\n"
    return output


def status_icon(color: Optional[str], *, with_yellow: bool = True, with_grey: bool = False) -> str:
    """Map a Jenkins ball color (``blue``, ``red_anime``, ...) to an icon."""

    if not color:
        return "📋"
    if "blue" in color:
        return "✅"
    if "red" in color:
        return "❌"
    if with_yellow and "yellow" in color:
        return "⚠️"
    if with_grey and "grey" in color:
        return "⚫"
    return "⚪"


def health_icon(score: int) -> str:
    if score >= 80:
        return "💚"
    if score >= 60:
        return "💛"
    if score >= 40:
        return "🧡"
    return "❤️"


def format_timestamp(timestamp_ms: Any) -> str:
    try:
        return datetime.fromtimestamp(float(timestamp_ms) / 1000).strftime("%Y-%m-%d %H:%M:%S")
    except (TypeError, ValueError, OverflowError, OSError):
        return str(timestamp_ms)
