from __future__ import annotations

import os
from typing import Optional

UNAUTHORIZED_TEXT = (
    "🔒 **Unauthorized Jenkins MCP client.**\n\n"
    "Missing/invalid client_token."
)


def auth_or_error(client_token: Optional[str]) -> Optional[str]:
    """Enforce a second auth layer between MCP clients and the Jenkins MCP server.

    Server-side configuration:
    - JENKINS_MCP_CLIENT_TOKEN

    If the variable is not configured, tools are open (useful for local dev).
    When set, client calls must pass the same value as the tool arg
    `client_token`. Returns the text to send back on rejection.
    """

    expected = (os.environ.get("JENKINS_MCP_CLIENT_TOKEN") or "").strip()
    if not expected:
        return None
    if client_token != expected:
        return UNAUTHORIZED_TEXT
    return None
