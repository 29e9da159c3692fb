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

import logging
import time
from typing import Dict, Optional

import httpx
from pydantic import ValidationError

from searxng_mcp.common.structures import ProxyConfig, SearxngConfig
from searxng_mcp.common.utils import build_proxy_mounts
from searxng_mcp.features.search.structures import SearxngResponse

logger = logging.getLogger(__name__)

TIME_RANGES = ("day", "month", "year")
SAFESEARCH_LEVELS = ("0", "1", "2")

# --- Domain Exceptions ---


class SearchError(Exception):
    pass


class SearxngClient:
    """Thin async client for the SearXNG JSON search API."""

    def __init__(
        self,
        config: SearxngConfig,
        proxy: Optional[ProxyConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.proxy = proxy
        self._transport = transport

    def _new_client(self) -> httpx.AsyncClient:
        config = self.config
        auth = httpx.BasicAuth(config.username, config.password) if config.has_basic_auth() else None
        return httpx.AsyncClient(
            timeout=httpx.Timeout(config.timeout_seconds),
            auth=auth,
            headers={
                # SearXNG's bot detection rejects requests without these.
                "X-Forwarded-For": "127.0.0.1",
                "X-Real-IP": "127.0.0.1",
                "User-Agent": config.user_agent,
            },
            mounts=build_proxy_mounts(self.proxy) if self.proxy else None,
            transport=self._transport,
        )

    @staticmethod
    def build_params(
        query: str,
        pageno: int = 1,
        time_range: Optional[str] = None,
        language: Optional[str] = "all",
        safesearch: Optional[str] = "0",
    ) -> Dict[str, str]:
        params = {"q": query, "format": "json", "pageno": str(pageno)}
        if time_range in TIME_RANGES:
            params["time_range"] = time_range
        if language and language != "all":
            params["language"] = language
        if safesearch in SAFESEARCH_LEVELS:
            params["safesearch"] = safesearch
        return params

    async def search(
        self,
        query: str,
        pageno: int = 1,
        time_range: Optional[str] = None,
        language: Optional[str] = "all",
        safesearch: Optional[str] = "0",
    ) -> SearxngResponse:
        if not self.config.url:
            raise SearchError("SearXNG URL is not configured")
        search_url = f"{self.config.url.rstrip('/')}/search"
        params = self.build_params(query, pageno, time_range, language, safesearch)

        try:
            async with self._new_client() as client:
                response = await client.get(search_url, params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise SearchError(f"search request failed: {e}") from e

        if response.status_code != 200:
            raise SearchError(f"SearXNG returned status {response.status_code}: {response.text}")

        try:
            return SearxngResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise SearchError(f"failed to parse response: {e}") from e


def format_search_results(query: str, response: SearxngResponse, pageno: int, duration_ms: int) -> str:
    if not response.results:
        return (
            "# No Results Found\n\n"
            f'No results found for query: "{query}"\n\n'
            "Try:\n- Different keywords\n- Broader search terms\n- Checking spelling"
        )

    parts = [
        f'# Search Results for "{query}"\n\n',
        f"Found {len(response.results)} results (page {pageno}) in {duration_ms}ms\n\n",
    ]
    for i, result in enumerate(response.results, start=1):
        parts.append(f"## {i}. {result.title}\n\n")
        parts.append(f"**URL:** {result.url}\n\n")
        parts.append(f"{result.content or ''}\n\n")
        parts.append("---\n\n")
    return "".join(parts)


class SearchService:
    def __init__(self, client: SearxngClient):
        self.client = client

    async def web_search(
        self,
        query: str,
        pageno: int = 1,
        time_range: Optional[str] = None,
        language: Optional[str] = "all",
        safesearch: Optional[str] = "0",
    ) -> str:
        if not query or not query.strip():
            raise SearchError("query parameter is required")

        started = time.perf_counter()
        try:
            response = await self.client.search(query, pageno, time_range, language, safesearch)
        except SearchError as e:
            logger.warning(f"[Search] '{query}' failed: {e}")
            raise SearchError(f"Search failed: {e}") from e
        duration_ms = int((time.perf_counter() - started) * 1000)

        logger.info(f"[Search] '{query}' page {pageno}: {len(response.results)} results in {duration_ms}ms")
        return format_search_results(query, response, pageno, duration_ms)
