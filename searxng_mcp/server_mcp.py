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
searxng_mcp/server_mcp.py
---------------------------------
MCP server exposing SearXNG web search and URL reading.

Tools implemented:
  - searxng_web_search(query, pageno, time_range, language, safesearch)
  - web_url_read(url, startChar, maxLength, section, paragraphRange, readHeadings)

Resources:
  - config://mcp-searxng  current configuration and cache diagnostics
  - help://mcp-searxng    usage guide
"""

import logging
from typing import Annotated, Literal, Optional

from mcp.server import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from searxng_mcp.application_context import ApplicationContext
from searxng_mcp.features.resources.service import (
    CONFIG_RESOURCE_URI,
    HELP_RESOURCE_URI,
    build_config_resource,
    build_help_resource,
)
from searxng_mcp.features.search.service import SearchError
from searxng_mcp.features.url_reader.service import UrlReadError
from searxng_mcp.features.url_reader.structures import UrlReadRequest

logger = logging.getLogger(__name__)


def build_server(context: ApplicationContext) -> FastMCP:
    app_config = context.get_config().app
    server = FastMCP(name=app_config.name, host=app_config.address, port=app_config.port)

    @server.tool(
        name="searxng_web_search",
        description=(
            "Performs a web search using the SearXNG API, ideal for general queries, news, articles, and online content."
        ),
    )
    async def searxng_web_search(
        query: Annotated[str, Field(description="The search query")],
        pageno: Annotated[int, Field(description="Search page number (starts at 1)", ge=1)] = 1,
        time_range: Annotated[Optional[Literal["day", "month", "year"]], Field(description="Time range of search")] = None,
        language: Annotated[str, Field(description="Language code for search results (e.g., 'en', 'fr', 'de')")] = "all",
        safesearch: Annotated[
            Literal["0", "1", "2"], Field(description="Safe search filter level (0: None, 1: Moderate, 2: Strict)")
        ] = "0",
    ) -> str:
        try:
            return await context.get_search_service().web_search(query, pageno, time_range, language, safesearch)
        except SearchError as e:
            raise ToolError(str(e)) from e

    @server.tool(
        name="web_url_read",
        description="Read the content from a URL. Use this for further information retrieving.",
    )
    async def web_url_read(
        url: Annotated[str, Field(description="URL to read")],
        startChar: Annotated[int, Field(description="Starting character position for content extraction (default: 0)", ge=0)] = 0,  # noqa: N803
        maxLength: Annotated[Optional[int], Field(description="Maximum number of characters to return", ge=0)] = None,  # noqa: N803
        section: Annotated[Optional[str], Field(description="Extract content under a specific heading")] = None,
        paragraphRange: Annotated[  # noqa: N803
            Optional[str], Field(description="Return specific paragraph ranges (e.g., '1-5', '3', '10-')")
        ] = None,
        readHeadings: Annotated[bool, Field(description="Return only a list of headings instead of full content")] = False,  # noqa: N803
    ) -> str:
        request = UrlReadRequest(
            url=url,
            start_char=startChar,
            max_length=maxLength,
            section=section,
            paragraph_range=paragraphRange,
            read_headings=readHeadings,
        )
        try:
            return await context.get_url_reader().read_url(request)
        except UrlReadError as e:
            raise ToolError(str(e)) from e

    @server.resource(
        CONFIG_RESOURCE_URI,
        name="Server Configuration",
        description="Current server configuration",
        mime_type="application/json",
    )
    def config_resource() -> str:
        return build_config_resource(context.get_config(), context.get_cache().stats())

    @server.resource(
        HELP_RESOURCE_URI,
        name="Usage Guide",
        description="MCP SearXNG usage guide",
        mime_type="text/markdown",
    )
    def help_resource() -> str:
        return build_help_resource(context.get_config().cache.ttl_seconds)

    logger.info(f"MCP server '{app_config.name}' ready with 2 tools and 2 resources.")
    return server
