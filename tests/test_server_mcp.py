# Copyright Thales 2025
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
End-to-end checks of the MCP surface: tool and resource registration, tool
calls going through the services, and errors surfacing as tool errors.
"""

import json

import httpx
import pytest
from mcp.server.fastmcp.exceptions import ToolError

from searxng_mcp.application_context import ApplicationContext
from searxng_mcp.server_mcp import build_server
from tests.conftest import RecordingHandler


def respond(request: httpx.Request) -> httpx.Response:
    if request.url.host == "searxng.test":
        return httpx.Response(200, json={"results": [{"title": "Hit", "url": "https://hit.test", "content": "snippet"}]})
    return httpx.Response(200, text="<h1>Page</h1><p>one</p><p>two</p>")


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler(respond)


@pytest.fixture
def context(configuration, handler):
    ctx = ApplicationContext(configuration, transport=handler.transport)
    yield ctx
    ctx.shutdown()


@pytest.fixture
def server(context):
    return build_server(context)


def text_of(result) -> str:
    # newer SDKs return (content, structured_content)
    if isinstance(result, tuple):
        result = result[0]
    return result[0].text


@pytest.mark.asyncio
async def test_tools_are_registered_with_wire_parameter_names(server):
    tools = {tool.name: tool for tool in await server.list_tools()}

    assert set(tools) == {"searxng_web_search", "web_url_read"}
    read_params = set(tools["web_url_read"].inputSchema["properties"])
    assert read_params == {"url", "startChar", "maxLength", "section", "paragraphRange", "readHeadings"}
    assert tools["web_url_read"].inputSchema["required"] == ["url"]
    assert tools["searxng_web_search"].inputSchema["required"] == ["query"]


@pytest.mark.asyncio
async def test_web_url_read_tool(server):
    result = await server.call_tool("web_url_read", {"url": "https://page.test/", "paragraphRange": "2-"})
    assert text_of(result) == "one\n\ntwo"


@pytest.mark.asyncio
async def test_web_url_read_rejects_unsupported_scheme(server, handler):
    with pytest.raises(ToolError, match="URL must use http or https scheme"):
        await server.call_tool("web_url_read", {"url": "ftp://page.test/"})
    assert handler.requests == []


@pytest.mark.asyncio
async def test_search_tool(server):
    result = await server.call_tool("searxng_web_search", {"query": "mcp"})
    output = text_of(result)
    assert output.startswith('# Search Results for "mcp"')
    assert "## 1. Hit" in output


@pytest.mark.asyncio
async def test_config_resource_reflects_cache(server, context):
    await server.call_tool("web_url_read", {"url": "https://page.test/"})

    contents = list(await server.read_resource("config://mcp-searxng"))
    payload = json.loads(contents[0].content)

    assert payload["cache"] == {"enabled": True, "ttl": 60, "size": 1}
    assert payload["searxng_url"] == "http://searxng.test"


@pytest.mark.asyncio
async def test_help_resource(server):
    contents = list(await server.read_resource("help://mcp-searxng"))
    assert contents[0].mime_type == "text/markdown"
    assert "web_url_read" in contents[0].content
