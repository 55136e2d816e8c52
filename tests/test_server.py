import pytest
from mcp import types

from mcp_server_github.core.handlers import CallToolHandler
from mcp_server_github.server import SERVER_NAME, create_server


@pytest.fixture
def server(anonymous_github_context):
    return create_server(CallToolHandler(anonymous_github_context))


def test_server_name(server):
    assert server.name == SERVER_NAME == "github-control"


def test_tool_endpoints_registered(server):
    assert types.ListToolsRequest in server.request_handlers
    assert types.CallToolRequest in server.request_handlers


@pytest.mark.asyncio
async def test_list_tools_endpoint(server):
    handler = server.request_handlers[types.ListToolsRequest]

    result = await handler(types.ListToolsRequest(method="tools/list"))

    names = [tool.name for tool in result.root.tools]
    assert names == [
        "clone-repository",
        "repository-status",
        "commit-changes",
        "push-changes",
        "create-repository",
        "list-repositories",
        "repository-info",
        "search-repositories",
    ]


@pytest.mark.asyncio
async def test_call_tool_endpoint(server, mock_github):
    handler = server.request_handlers[types.CallToolRequest]
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name="list-repositories", arguments={}),
    )

    result = await handler(request)

    assert not result.root.isError
    assert result.root.content[0].text.startswith("GitHub token not configured.")
    mock_github.get.assert_not_awaited()


@pytest.mark.asyncio
async def test_unknown_tool_is_error_result(server):
    handler = server.request_handlers[types.CallToolRequest]
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name="drop-database", arguments={}),
    )

    result = await handler(request)

    assert result.root.isError
    assert "drop-database" in result.root.content[0].text
