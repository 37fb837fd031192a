"""Tool handlers.

Each handler issues a single Jenkins request and returns a Markdown text
block. Failures never propagate: they are classified, decorated with
call-specific hints and rendered as a suggestion list instead.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .config import JenkinsMCPServerConfig
from .config_utils import env_bool
from .utils.client import JenkinsAuthConfig, JenkinsClient
from .utils.errors import JenkinsError, categorize_error, format_error
from .utils.format import format_json, format_params, format_raw, format_timestamp, health_icon, status_icon
from .utils.paths import job_location, job_path_from_fullname, job_url, join_base

_CLIENT: Optional[JenkinsClient] = None


def get_client() -> JenkinsClient:
    global _CLIENT
    if _CLIENT is not None:
        return _CLIENT

    cfg = JenkinsMCPServerConfig.from_env()
    _CLIENT = JenkinsClient(
        JenkinsAuthConfig(
            base_url=cfg.base_url,
            username=cfg.username,
            password=cfg.password,
            verify_ssl=cfg.verify_ssl,
            timeout_seconds=cfg.timeout_seconds,
        )
    )
    return _CLIENT


def set_client(client: Optional[JenkinsClient]) -> None:
    """Replace (or with ``None`` drop) the cached client."""

    global _CLIENT
    _CLIENT = client


def _error_text(error: JenkinsError) -> str:
    return format_error(error, debug=env_bool("JENKINS_MCP_DEBUG", False))


def handle_sanity_check() -> str:
    client = get_client()
    try:
        resp = client.do_fetch(client.base_url)
        return (
            "✅ **Jenkins Server Status: Healthy**\n\n"
            f"🔗 **Server URL:** {client.base_url}\n"
            f"📡 **Response Code:** {resp.status}\n"
            "🔑 **Authentication:** Working\n\n"
            "Your Jenkins server is accessible and ready for use!"
        )
    except Exception as exc:  # noqa: BLE001
        return _error_text(categorize_error(exc))


def handle_search_jobs(search_term: str, raw_json: bool = False) -> str:
    client = get_client()
    try:
        data = client.do_fetch(f"{client.base_url}/search/suggest", {"query": search_term}).data
        suggestions = data.get("suggestions") if isinstance(data, dict) else None

        if not suggestions:
            return (
                f'🔍 **No jobs found matching "{search_term}"**\n\n'
                "💡 **Try:**\n"
                "• Using partial job names or keywords\n"
                "• Checking spelling and case sensitivity\n"
                "• Using broader search terms\n"
                "• Contact your Jenkins admin to verify job availability"
            )

        if raw_json:
            return format_json(data)

        output = f'🔍 **Found {len(suggestions)} jobs matching "{search_term}":**\n\n'
        for index, job in enumerate(suggestions, start=1):
            icon = status_icon(job.get("icon"), with_yellow=False)
            output += f"{index}. {icon} **{job.get('name')}**\n"
            output += f"   📍 {job.get('url')}\n"
            if job.get("type"):
                output += f"   🏷️  Type: {job['type']}\n"
            output += "\n"
        return output
    except Exception as exc:  # noqa: BLE001
        return _error_text(categorize_error(exc))


def handle_list_builds(
    folder_name: str,
    repo_name: str,
    branch_name: Optional[str] = None,
    raw_json: bool = False,
) -> str:
    client = get_client()
    location = job_location(folder_name, repo_name, branch_name)
    try:
        url = job_url(client.base_url, folder_name, repo_name, branch_name)
        data = client.fetch_json_data(url).data
        builds = data.get("builds") if isinstance(data, dict) else None

        if not builds:
            return (
                f"📂 **No jobs found in {location} for {url}**\n\n"
                "💡 **This could mean:**\n"
                "• The folder/repo/branch path doesn't exist\n"
                "• No jobs are configured in this location\n"
                "• You may not have permission to view jobs here\n\n"
                "🔍 **Try using search-jobs to find available jobs**"
            )

        if raw_json:
            return format_json(data)

        output = f"📂 **Builds in {location}** ({len(builds)} found):\n\n"
        for index, build in enumerate(builds, start=1):
            output += f"{index}. {status_icon(build.get('color'))} **{build.get('number')}**\n"
            output += f"   🔗 {build.get('url')}\n"
            if build.get("description"):
                output += f"   📝 {build['description']}\n"
            last_build = build.get("lastBuild")
            if last_build:
                when = format_timestamp(last_build.get("timestamp"))
                output += f"   🏗️  Last Build: #{last_build.get('number')} ({when})\n"
            output += "\n"
        return output
    except Exception as exc:  # noqa: BLE001
        error = categorize_error(exc)
        error.suggestions.insert(0, f"Verify the path {location} exists in Jenkins")
        return _error_text(error)


def handle_build_with_parameters(
    folder_name: str,
    repo_name: str,
    branch_name: Optional[str] = None,
    params: Optional[Dict[str, str]] = None,
    raw_json: bool = False,
) -> str:
    client = get_client()
    location = job_location(folder_name, repo_name, branch_name)
    try:
        url = job_url(client.base_url, folder_name, repo_name, branch_name)
        resp = client.do_request(f"{url}/buildWithParameters", "POST", params)

        if raw_json:
            return format_json(resp.data)

        output = "🚀 **Build Triggered Successfully!**\n\n"
        output += f"📂 **Job:** {location}\n"
        output += f"📡 **Status Code:** {resp.status}\n"
        output += format_params(params)
        output += "\n💡 **Next Steps:**\n"
        output += "• Check Jenkins UI for build progress\n"
        output += "• Monitor build logs for any issues\n"
        output += "• Build will appear in the job's build history\n"
        return output
    except Exception as exc:  # noqa: BLE001
        error = categorize_error(exc)
        error.suggestions.insert(0, f"Verify the job {location} exists and supports parameterized builds")
        if params:
            error.suggestions.append("Check if the provided parameters match the job's parameter definitions")
        return _error_text(error)


def handle_fetch_from_jenkins(jenkins_url: str, get_json: bool) -> str:
    client = get_client()
    url = join_base(client.base_url, jenkins_url)
    fetch = client.fetch_json_data if get_json else client.do_fetch
    try:
        data = fetch(url).data

        output = "📊 **Data Retrieved Successfully**\n\n"
        output += f"🔗 **URL:** {jenkins_url}\n"
        output += f"📄 **Format:** {'JSON' if get_json else 'Raw'}\n\n"
        output += "📋 **Response:**\n"
        if get_json and isinstance(data, (dict, list)):
            output += "```json\n" + format_json(data) + "\n```"
        else:
            output += "```\n" + format_raw(data) + "\n```"
        return output
    except Exception as exc:  # noqa: BLE001
        error = categorize_error(exc)
        error.suggestions.insert(0, f"Verify the URL {jenkins_url} is correct and accessible")
        error.suggestions.append("Check if the endpoint requires specific permissions")
        return _error_text(error)


def handle_invoke_request(
    jenkins_url: str,
    method: str,
    params: Optional[Dict[str, str]] = None,
    raw_json: bool = False,
) -> str:
    client = get_client()
    method = method.upper()
    try:
        resp = client.do_request(jenkins_url, method, params)

        if raw_json:
            return format_json(resp.data)

        output = "🔧 **Request Executed Successfully**\n\n"
        output += f"🔗 **URL:** {jenkins_url}\n"
        output += f"📡 **Method:** {method}\n"
        output += f"📊 **Status:** {resp.status}\n"
        output += format_params(params)
        output += "\n📋 **Response:**\n"
        output += "```json\n" + format_json(resp.data) + "\n```"
        return output
    except Exception as exc:  # noqa: BLE001
        error = categorize_error(exc)
        error.suggestions.insert(0, f"Verify the URL {jenkins_url} supports {method} requests")
        error.suggestions.append("Check if the operation requires specific Jenkins permissions")
        if method in ("POST", "PUT"):
            error.suggestions.append(f"Ensure required parameters are provided for {method} operations")
        return _error_text(error)


def handle_get_job_info(fullname: str, raw_json: bool = False) -> str:
    client = get_client()
    api_url = f"{client.base_url}{job_path_from_fullname(fullname)}/api/json?depth=1"
    try:
        data = client.do_fetch(api_url).data

        if not isinstance(data, dict) or not data.get("name"):
            return (
                f"📂 **Job not found: {fullname}**\n\n"
                "💡 **This could mean:**\n"
                "• The job path doesn't exist\n"
                "• You may not have permission to view this job\n"
                "• The job name format is incorrect\n\n"
                "🔍 **Try using search-jobs to find available jobs**\n"
                f"🌐 **Attempted URL:** {api_url}"
            )

        if raw_json:
            return format_json(data)

        return _render_job_info(fullname, data)
    except Exception as exc:  # noqa: BLE001
        error = categorize_error(exc)
        error.suggestions[0:0] = [
            f"Verify the job path '{fullname}' exists in Jenkins",
            "Check if you have permission to view this job",
            "Ensure the job name format is correct (use / to separate folder levels)",
            f"Constructed URL: {api_url}",
            "Try using the search-jobs tool first to find the correct job path",
        ]
        if " " in fullname:
            error.suggestions.extend(
                [
                    "Job name contains spaces - URL encoding is applied automatically",
                    "Try searching for the job first to get the exact path",
                ]
            )
        return _error_text(error)


def _render_job_info(fullname: str, data: Dict[str, Any]) -> str:
    output = f"📋 **Job Information: {fullname}**\n\n"
    output += f"🏷️  **Name:** {data['name']}\n"
    output += f"🔗 **URL:** {data.get('url')}\n"
    output += f"📂 **Full Name:** {data.get('fullName') or fullname}\n"
    if data.get("description"):
        output += f"📝 **Description:** {data['description']}\n"

    color = data.get("color")
    if color:
        output += f"🎯 **Status:** {status_icon(color, with_grey=True)} {color}\n"
    if data.get("buildable") is not None:
        output += f"🔨 **Buildable:** {'Yes' if data['buildable'] else 'No'}\n"

    for key, title in (
        ("lastBuild", "🏗️  **Last Build:**"),
        ("lastSuccessfulBuild", "✅ **Last Successful Build:**"),
        ("lastFailedBuild", "❌ **Last Failed Build:**"),
    ):
        build = data.get(key)
        if build:
            output += f"\n{title}\n"
            output += f"   • Number: #{build.get('number')}\n"
            output += f"   • URL: {build.get('url')}\n"

    builds = data.get("builds") or []
    if builds:
        output += f"\n📊 **Recent Builds** ({len(builds)} shown):\n"
        for index, build in enumerate(builds[:5], start=1):
            output += f"   {index}. #{build.get('number')} - {build.get('url')}\n"
        if len(builds) > 5:
            output += f"   ... and {len(builds) - 5} more builds\n"

    properties = data.get("property") or []
    if properties:
        output += f"\n⚙️  **Properties:** {len(properties)} configured\n"

    for key, title in (("downstreamProjects", "⬇️  **Downstream Projects:**"), ("upstreamProjects", "⬆️  **Upstream Projects:**")):
        projects = data.get(key) or []
        if projects:
            output += f"\n{title}\n"
            for project in projects:
                output += f"   • {project.get('name')} ({project.get('url')})\n"

    reports = data.get("healthReport") or []
    if reports:
        output += "\n🏥 **Health Reports:**\n"
        for report in reports:
            score = report.get("score") or 0
            output += f"   {health_icon(score)} {report.get('description')} (Score: {score}%)\n"

    parameter_actions = [
        action
        for action in (data.get("actions") or [])
        if isinstance(action, dict) and "ParametersDefinitionProperty" in (action.get("_class") or "")
    ]
    if parameter_actions:
        output += "\n🔧 **Build Parameters:**\n"
        for action in parameter_actions:
            for param in action.get("parameterDefinitions") or []:
                output += f"   • {param.get('name')}: {param.get('type') or 'String'}"
                default = param.get("defaultParameterValue")
                if default:
                    output += f" (default: {default.get('value')})"
                output += "\n"
                if param.get("description"):
                    output += f"     {param['description']}\n"

    return output


def handle_get_job_logs(fullname: str, build_number: str, ntail: Optional[int] = None) -> str:
    client = get_client()
    log_path = f"{job_path_from_fullname(fullname)}/{build_number}/consoleText"
    url = join_base(client.base_url, log_path)
    try:
        data = client.do_fetch(url).text

        if ntail:
            data = "\n".join(data.split("\n")[-ntail:])

        output = f"📜 **Console Log for {fullname} #{build_number}**"
        if ntail:
            output += f" (last {ntail} lines)"
        output += "\n\n"
        output += "```\n" + data + "\n```"
        return output
    except Exception as exc:  # noqa: BLE001
        error = categorize_error(exc)
        error.suggestions[0:0] = [
            f"Verify the job '{fullname}' and build number '{build_number}' exist in Jenkins",
            "Verify the folder name, repository name, and branch name are correct",
            "Check if the job exists in Jenkins",
            "Ensure proper case sensitivity in job names",
            "Use the search-jobs tool to find available jobs",
            f"Attempted path: {log_path}",
            f"Constructed URL: {client.base_url}{log_path}",
        ]
        return _error_text(error)
