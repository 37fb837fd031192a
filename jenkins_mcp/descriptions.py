"""Tool ids and the descriptions advertised for them.

``TOOL_DESCRIPTIONS`` holds the generic text. ``TAILORED_DESCRIPTIONS`` is
where a deployment adds its own conventions (folder layout, naming rules,
which jobs are safe to trigger); empty entries add nothing.
"""

from __future__ import annotations

from typing import Dict, List, Union

Description = Union[str, List[str]]

SANITY_CHECK = "sanity-check"
SEARCH_JOBS = "search-jobs"
LIST_BUILDS = "list-builds"
LIST_JOBS = "list-jobs"
BUILD_WITH_PARAMETERS = "build-with-parameters"
FETCH_FROM_JENKINS = "fetch-from-jenkins"
INVOKE_REQUEST = "invoke-request"
GET_JOB_INFO = "get-job-info"
GET_JOB_LOGS = "get-job-logs"

_LIST_DESCRIPTION = (
    "List all jobs within a specific Jenkins folder and repository structure. "
    "Use this to browse the hierarchical organization of your Jenkins jobs. "
    "Optionally specify a branch to see branch-specific jobs."
)

TOOL_DESCRIPTIONS: Dict[str, Description] = {
    SANITY_CHECK: (
        "Test connectivity and authentication with your Jenkins server. "
        "This verifies that the server is reachable and your credentials are working correctly."
    ),
    SEARCH_JOBS: (
        "Search for Jenkins jobs by keyword or pattern. This helps you discover available jobs "
        "when you don't know the exact job name. Returns matching jobs with their paths and types."
    ),
    LIST_BUILDS: _LIST_DESCRIPTION,
    LIST_JOBS: _LIST_DESCRIPTION,
    BUILD_WITH_PARAMETERS: (
        "Trigger a Jenkins build with custom parameters. This starts a new build job with the "
        "specified configuration. Supports environment variables, version numbers, deployment "
        "targets, and other custom parameters defined in the job."
    ),
    FETCH_FROM_JENKINS: (
        "Retrieve raw data from any Jenkins API endpoint. This is a powerful generic tool for "
        "accessing Jenkins data that isn't covered by other specific tools. Useful for custom "
        "integrations and advanced Jenkins API usage."
    ),
    INVOKE_REQUEST: (
        "Execute any HTTP request to Jenkins with full control over method and parameters. "
        "This is the most flexible tool for advanced Jenkins operations like creating jobs, "
        "updating configurations, or performing administrative tasks."
    ),
    GET_JOB_INFO: [
        "Get detailed information about a specific Jenkins job.",
        "This provides comprehensive job details including status, recent builds, health "
        "reports, parameters, and configuration information.",
    ],
    GET_JOB_LOGS: [
        "Get the console log for a specific Jenkins job build. This is useful for debugging "
        "and viewing the output of a completed or in-progress build.",
        "To get logs for a build, provide the full job path in the 'fullname' parameter, "
        "including any folders or branches. For example: 'MyProject/WebApp/develop'. "
        "Job names with spaces are handled automatically.",
        "It's recommended to use 'search-jobs' to find the exact job path and then "
        "'get-job-info' to confirm build numbers before fetching logs.",
        "The logs might be very long, so use the ntail parameter to get the last X lines; "
        "if data appears to be truncated, raise ntail to get more lines.",
    ],
}

TAILORED_DESCRIPTIONS: Dict[str, Description] = {tool_id: "" for tool_id in TOOL_DESCRIPTIONS}


def join_description(description: Description) -> str:
    if isinstance(description, list):
        return "\n\n".join(description)
    return description


def extend_description(tool_id: str, base_description: str) -> str:
    extra = join_description(TAILORED_DESCRIPTIONS.get(tool_id) or "")
    if not extra:
        return base_description
    return f"{base_description}\n\n{extra}"


def tool_description(tool_id: str) -> str:
    return extend_description(tool_id, join_description(TOOL_DESCRIPTIONS[tool_id]))
