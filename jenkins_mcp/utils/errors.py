"""Classification of failed Jenkins calls into user-facing error records.

A failed request is mapped onto one of a handful of kinds. Connection
failures come first, then the HTTP status (401, 404, 403) when there is a
response, then substrings of the lowercased reason phrase or, without a
response, of the error text. Anything unmatched is unknown.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

import requests


class JenkinsErrorKind(str, Enum):
    CONNECTION = "CONNECTION"
    AUTHENTICATION = "AUTHENTICATION"
    NOT_FOUND = "NOT_FOUND"
    PERMISSION = "PERMISSION"
    INVALID_PARAMS = "INVALID_PARAMS"
    UNKNOWN = "UNKNOWN"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ", 1).lower()


@dataclass
class JenkinsError:
    kind: JenkinsErrorKind
    message: str
    suggestions: List[str] = field(default_factory=list)
    cause: Any = None


_MESSAGES = {
    JenkinsErrorKind.CONNECTION: "Cannot connect to Jenkins server",
    JenkinsErrorKind.AUTHENTICATION: "Authentication failed",
    JenkinsErrorKind.NOT_FOUND: "Jenkins job or resource not found",
    JenkinsErrorKind.PERMISSION: "Insufficient permissions",
    JenkinsErrorKind.INVALID_PARAMS: "Invalid parameters provided",
    JenkinsErrorKind.UNKNOWN: "An unexpected error occurred",
}

_SUGGESTIONS = {
    JenkinsErrorKind.CONNECTION: (
        "Verify JENKINS_URL environment variable is correct",
        "Check if Jenkins server is running",
        "Confirm network connectivity to Jenkins server",
        "Check if firewall is blocking the connection",
    ),
    JenkinsErrorKind.AUTHENTICATION: (
        "Verify JENKINS_USERNAME and JENKINS_PASSWORD environment variables",
        "Check if the Jenkins user account is active",
        "Ensure the user has necessary permissions",
        "Try generating a new API token if using token-based auth",
    ),
    JenkinsErrorKind.NOT_FOUND: (
        "Verify the folder name, repository name, and branch name are correct",
        "Check if the job exists in Jenkins",
        "Ensure proper case sensitivity in job names",
        "Use the search-jobs tool to find available jobs",
    ),
    JenkinsErrorKind.PERMISSION: (
        "Check if the user has permission to access this job",
        "Verify build permissions for this project",
        "Contact Jenkins admin to grant necessary permissions",
        "Ensure the user is in the correct Jenkins groups",
    ),
    JenkinsErrorKind.INVALID_PARAMS: (
        "Check parameter names and values",
        "Verify required parameters are provided",
        "Ensure parameter values match expected formats",
        "Use get-job-info tool to see available parameters",
    ),
    JenkinsErrorKind.UNKNOWN: (
        "Check Jenkins server logs for more details",
        "Verify Jenkins server is functioning properly",
        "Try the sanity-check tool to test basic connectivity",
        "Contact Jenkins administrator if the issue persists",
    ),
}


def _status_of(error: BaseException) -> Optional[int]:
    response = getattr(error, "response", None)
    if response is None:
        return None
    return getattr(response, "status_code", None)


def _text_of(error: BaseException) -> str:
    # HTTPError text embeds the request URL, and job names must not steer
    # the classification. Only the reason phrase is matched.
    response = getattr(error, "response", None)
    if response is not None:
        return str(getattr(response, "reason", None) or "").lower()
    return str(error).lower()


def _kind_of(error: BaseException) -> JenkinsErrorKind:
    text = _text_of(error)
    status = _status_of(error)

    if isinstance(error, requests.ConnectionError) or "econnrefused" in text or "connection refused" in text:
        return JenkinsErrorKind.CONNECTION
    if status == 401:
        return JenkinsErrorKind.AUTHENTICATION
    if status == 404:
        return JenkinsErrorKind.NOT_FOUND
    if status == 403:
        return JenkinsErrorKind.PERMISSION
    if "unauthorized" in text:
        return JenkinsErrorKind.AUTHENTICATION
    if "not found" in text:
        return JenkinsErrorKind.NOT_FOUND
    if "forbidden" in text:
        return JenkinsErrorKind.PERMISSION
    if "invalid" in text or "bad request" in text:
        return JenkinsErrorKind.INVALID_PARAMS
    return JenkinsErrorKind.UNKNOWN


def categorize_error(error: BaseException) -> JenkinsError:
    """Build a fresh error record; callers may mutate its suggestion list."""

    kind = _kind_of(error)
    return JenkinsError(
        kind=kind,
        message=_MESSAGES[kind],
        suggestions=list(_SUGGESTIONS[kind]),
        cause=error,
    )


def format_error(error: JenkinsError, debug: bool = False) -> str:
    output = f"❌ **{error.message}** ({error.kind.label} error)\n\n"
    output += "💡 **Suggestions to resolve this issue:**\n"
    for index, suggestion in enumerate(error.suggestions, start=1):
        output += f"{index}. {suggestion}\n"

    if debug and error.cause is not None:
        output += f"\n🔍 **Technical details:** {error.cause}"

    return output


def kind_from_text(text: str) -> Optional[JenkinsErrorKind]:
    """Recover the kind from text produced by :func:`format_error`."""

    if not text.startswith("❌ **"):
        return None
    for kind, message in _MESSAGES.items():
        if text.startswith(f"❌ **{message}** ({kind.label} error)"):
            return kind
    return None
