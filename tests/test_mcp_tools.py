import asyncio

from fastmcp import Client

from jenkins_mcp import mcp as server
from jenkins_mcp.utils.auth import UNAUTHORIZED_TEXT

from .conftest import BASE_URL, make_response, requested

EXPECTED_TOOLS = {
    "sanity-check",
    "search-jobs",
    "list-builds",
    "list-jobs",
    "build-with-parameters",
    "fetch-from-jenkins",
    "invoke-request",
    "get-job-info",
    "get-job-logs",
}


def _list_tools():
    async def _run():
        async with Client(server.mcp) as c:
            return await c.list_tools()

    return asyncio.run(_run())


def test_all_tools_are_registered():
    assert {t.name for t in _list_tools()} == EXPECTED_TOOLS


def test_tool_schemas_use_camel_case_arguments():
    schemas = {t.name: t.inputSchema for t in _list_tools()}

    build = schemas["build-with-parameters"]
    assert set(build["required"]) == {"folderName", "repoName", "params"}
    assert "branchName" in build["properties"]
    assert schemas["search-jobs"]["required"] == ["searchTerm"]
    assert set(schemas["fetch-from-jenkins"]["required"]) == {"jenkinsUrl", "getJson"}


def test_call_tool_over_protocol(client, session):
    async def _run():
        async with Client(server.mcp) as c:
            return await c.call_tool("sanity-check", {})

    result = asyncio.run(_run())

    assert "Jenkins Server Status: Healthy" in result.content[0].text


def test_tool_function_maps_arguments(client, session):
    session.request.return_value = make_response(201)

    text = server.build_with_parameters(folderName="team", repoName="api", params={"A": "1"}, branchName="dev")

    assert requested(session) == ("POST", f"{BASE_URL}/job/team/job/api/job/dev/buildWithParameters", {"A": "1"})
    assert "Build Triggered Successfully" in text


def test_list_jobs_is_an_alias_of_list_builds(client, session):
    session.request.return_value = make_response(200, {"builds": [{"number": 1, "url": "u"}]})

    assert server.list_jobs("team", "api") == server.list_builds("team", "api")


def test_client_token_is_enforced(client, session, monkeypatch):
    monkeypatch.setenv("JENKINS_MCP_CLIENT_TOKEN", "secret")

    assert server.sanity_check() == UNAUTHORIZED_TEXT
    session.request.assert_not_called()

    assert "Healthy" in server.sanity_check(client_token="secret")


def test_run_stdio_defaults_to_stdio(monkeypatch):
    calls = []
    monkeypatch.setattr(server.mcp, "run", lambda **kwargs: calls.append(kwargs))

    server.run_stdio()

    assert calls == [{"transport": "stdio"}]


def test_run_network_transport_passes_host_and_port(monkeypatch):
    calls = []

    def fake_run(transport=None, **kwargs):
        calls.append({"transport": transport, **kwargs})

    monkeypatch.setattr(server.mcp, "run", fake_run)
    monkeypatch.setenv("JENKINS_MCP_TRANSPORT", "http")
    monkeypatch.setenv("JENKINS_MCP_PORT", "9100")

    server.run_stdio()

    assert calls == [{"transport": "http", "host": "0.0.0.0", "port": 9100}]
