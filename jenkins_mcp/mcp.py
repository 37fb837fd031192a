from __future__ import annotations

import inspect
import os
from typing import Annotated, Any, Callable, Dict, Literal, Optional

from fastmcp import FastMCP
from pydantic import Field

from . import descriptions as tools
from . import handlers
from .config import JenkinsMCPServerConfig
from .mcp_log import logged_tool
from .utils.auth import auth_or_error

mcp = FastMCP("jenkins-mcp")

RawJson = Annotated[
    Optional[bool],
    Field(description="Whether to parse the response as JSON (false) or return raw json (true)"),
]
ClientToken = Annotated[
    Optional[str],
    Field(description="Client token, required when the server sets JENKINS_MCP_CLIENT_TOKEN"),
]
FolderName = Annotated[str, Field(description="The Jenkins folder name (top-level organization)")]
RepoName = Annotated[str, Field(description="The repository or project name within the folder")]
BranchName = Annotated[Optional[str], Field(description="Optional: specific branch name to list jobs for")]
FullName = Annotated[str, Field(description="The full name/path of the Jenkins job (use / to separate folder levels)")]

_HANDLERS: Dict[str, Callable[..., str]] = {
    tools.SANITY_CHECK: logged_tool(tools.SANITY_CHECK)(handlers.handle_sanity_check),
    tools.SEARCH_JOBS: logged_tool(tools.SEARCH_JOBS)(handlers.handle_search_jobs),
    tools.LIST_BUILDS: logged_tool(tools.LIST_BUILDS)(handlers.handle_list_builds),
    tools.LIST_JOBS: logged_tool(tools.LIST_JOBS)(handlers.handle_list_builds),
    tools.BUILD_WITH_PARAMETERS: logged_tool(tools.BUILD_WITH_PARAMETERS)(handlers.handle_build_with_parameters),
    tools.FETCH_FROM_JENKINS: logged_tool(tools.FETCH_FROM_JENKINS)(handlers.handle_fetch_from_jenkins),
    tools.INVOKE_REQUEST: logged_tool(tools.INVOKE_REQUEST)(handlers.handle_invoke_request),
    tools.GET_JOB_INFO: logged_tool(tools.GET_JOB_INFO)(handlers.handle_get_job_info),
    tools.GET_JOB_LOGS: logged_tool(tools.GET_JOB_LOGS)(handlers.handle_get_job_logs),
}


def _call(tool_id: str, client_token: Optional[str], **kwargs: Any) -> str:
    err = auth_or_error(client_token)
    if err:
        return err
    return _HANDLERS[tool_id](**kwargs)


def sanity_check(client_token: ClientToken = None) -> str:
    return _call(tools.SANITY_CHECK, client_token)


def search_jobs(
    searchTerm: Annotated[str, Field(description="Keyword or pattern to search for in job names")],
    rawJson: RawJson = None,
    client_token: ClientToken = None,
) -> str:
    return _call(tools.SEARCH_JOBS, client_token, search_term=searchTerm, raw_json=bool(rawJson))


def list_builds(
    folderName: FolderName,
    repoName: RepoName,
    branchName: BranchName = None,
    rawJson: RawJson = None,
    client_token: ClientToken = None,
) -> str:
    return _call(
        tools.LIST_BUILDS,
        client_token,
        folder_name=folderName,
        repo_name=repoName,
        branch_name=branchName,
        raw_json=bool(rawJson),
    )


def list_jobs(
    folderName: FolderName,
    repoName: RepoName,
    branchName: BranchName = None,
    rawJson: RawJson = None,
    client_token: ClientToken = None,
) -> str:
    return _call(
        tools.LIST_JOBS,
        client_token,
        folder_name=folderName,
        repo_name=repoName,
        branch_name=branchName,
        raw_json=bool(rawJson),
    )


def build_with_parameters(
    folderName: FolderName,
    repoName: RepoName,
    params: Annotated[Dict[str, str], Field(description="Parameters to pass to the build job")],
    branchName: BranchName = None,
    rawJson: RawJson = None,
    client_token: ClientToken = None,
) -> str:
    return _call(
        tools.BUILD_WITH_PARAMETERS,
        client_token,
        folder_name=folderName,
        repo_name=repoName,
        branch_name=branchName,
        params=params,
        raw_json=bool(rawJson),
    )


def fetch_from_jenkins(
    jenkinsUrl: Annotated[str, Field(description="The Jenkins API URL to fetch from")],
    getJson: Annotated[bool, Field(description="Whether to append /api/json and pretty-print the JSON response")],
    client_token: ClientToken = None,
) -> str:
    return _call(tools.FETCH_FROM_JENKINS, client_token, jenkins_url=jenkinsUrl, get_json=getJson)


def invoke_request(
    jenkinsUrl: Annotated[str, Field(description="The Jenkins API URL to invoke the request on")],
    method: Annotated[Literal["GET", "POST", "PUT", "DELETE"], Field(description="HTTP method to use for the request")],
    params: Annotated[Dict[str, str], Field(description="Parameters to pass to the request")],
    rawJson: RawJson = None,
    client_token: ClientToken = None,
) -> str:
    return _call(
        tools.INVOKE_REQUEST,
        client_token,
        jenkins_url=jenkinsUrl,
        method=method,
        params=params,
        raw_json=bool(rawJson),
    )


def get_job_info(
    fullname: FullName,
    rawJson: RawJson = None,
    client_token: ClientToken = None,
) -> str:
    return _call(tools.GET_JOB_INFO, client_token, fullname=fullname, raw_json=bool(rawJson))


def get_job_logs(
    fullname: FullName,
    buildNumber: Annotated[
        str,
        Field(description="The build number to get the logs for. You can use 'lastBuild' to get the latest build."),
    ],
    ntail: Annotated[Optional[int], Field(description="The number of lines to get from the end of the logs")] = None,
    client_token: ClientToken = None,
) -> str:
    return _call(tools.GET_JOB_LOGS, client_token, fullname=fullname, build_number=buildNumber, ntail=ntail)


TOOL_FUNCTIONS: Dict[str, Callable[..., str]] = {
    tools.SANITY_CHECK: sanity_check,
    tools.SEARCH_JOBS: search_jobs,
    tools.LIST_BUILDS: list_builds,
    tools.LIST_JOBS: list_jobs,
    tools.BUILD_WITH_PARAMETERS: build_with_parameters,
    tools.FETCH_FROM_JENKINS: fetch_from_jenkins,
    tools.INVOKE_REQUEST: invoke_request,
    tools.GET_JOB_INFO: get_job_info,
    tools.GET_JOB_LOGS: get_job_logs,
}

for _tool_id, _fn in TOOL_FUNCTIONS.items():
    mcp.tool(_fn, name=_tool_id, description=tools.tool_description(_tool_id))


def run_stdio() -> None:
    """Run the Jenkins MCP server.

    stdio is the default; JENKINS_MCP_TRANSPORT=http|sse serves over the
    network on JENKINS_MCP_HOST:JENKINS_MCP_PORT.
    """

    cfg = JenkinsMCPServerConfig.from_env()
    transport = (os.environ.get("MCP_TRANSPORT") or cfg.mcp_transport or "stdio").lower().strip()

    if transport == "stdio":
        mcp.run(transport="stdio")
        return

    host = os.environ.get("MCP_HOST") or cfg.mcp_host
    port_raw = os.environ.get("MCP_PORT")
    try:
        port = int(port_raw) if port_raw else int(cfg.mcp_port)
    except ValueError:
        port = int(cfg.mcp_port)

    # Only pass kwargs that this fastmcp version's `run()` accepts.
    params = inspect.signature(mcp.run).parameters
    forwards_kwargs = any(p.kind is inspect.Parameter.VAR_KEYWORD for p in params.values())
    kwargs: Dict[str, Any] = {"transport": transport}
    if "host" in params or forwards_kwargs:
        kwargs["host"] = host
    if "port" in params or forwards_kwargs:
        kwargs["port"] = port

    mcp.run(**kwargs)


if __name__ == "__main__":
    run_stdio()
