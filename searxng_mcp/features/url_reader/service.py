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

import asyncio
import logging
from typing import List, Optional
from urllib.parse import urlparse

import httpx

from searxng_mcp.common.structures import ProxyConfig, UrlReaderConfig
from searxng_mcp.common.ttl_cache import ThreadSafeTTLCache
from searxng_mcp.common.utils import build_proxy_mounts
from searxng_mcp.features.url_reader.markdown import html_to_markdown
from searxng_mcp.features.url_reader.selection import select_content
from searxng_mcp.features.url_reader.structures import UrlReadRequest

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http", "https")

# --- Domain Exceptions ---


class InvalidUrlError(ValueError):
    pass


class UrlFetchError(Exception):
    pass


class UrlReadError(Exception):
    """Raised at the read boundary. The message is meant for the end user."""

    pass


class UrlReaderService:
    """
    Fetch a page, flatten it to Markdown and slice it.

    Converted pages are cached by URL. Only fully fetched and converted pages
    are stored: failed, timed out or cancelled fetches leave the cache as is.
    """

    def __init__(
        self,
        cache: ThreadSafeTTLCache[str, str],
        config: Optional[UrlReaderConfig] = None,
        proxy: Optional[ProxyConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.cache = cache
        self.config = config or UrlReaderConfig()
        self.proxy = proxy
        self._transport = transport

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.timeout_seconds),
            follow_redirects=True,
            headers={"User-Agent": self.config.user_agent},
            mounts=build_proxy_mounts(self.proxy) if self.proxy else None,
            transport=self._transport,
        )

    @staticmethod
    def validate_url(url: str) -> None:
        if not url or not url.strip():
            raise InvalidUrlError("url parameter is required")
        try:
            parsed = urlparse(url)
        except ValueError as e:
            raise InvalidUrlError(f"invalid URL: {e}") from e
        if parsed.scheme.lower() not in ALLOWED_SCHEMES:
            raise InvalidUrlError("URL must use http or https scheme")
        if not parsed.netloc:
            raise InvalidUrlError("invalid URL: missing host")

    async def fetch_and_convert(self, url: str) -> str:
        self.validate_url(url)

        cached = self.cache.get(url)
        if cached is not None:
            logger.debug(f"[UrlReader] cache hit for {url}")
            return cached

        logger.info(f"[UrlReader] fetching {url}")
        try:
            markdown = await asyncio.wait_for(self._download_and_convert(url), timeout=self.config.timeout_seconds)
        except asyncio.TimeoutError as e:
            raise UrlFetchError(f"request timed out after {self.config.timeout_seconds:g}s") from e

        self.cache.set(url, markdown)
        return markdown

    async def read_url(self, request: UrlReadRequest) -> str:
        """
        Fetch (or reuse) the converted page and apply the selection options.
        Every failure comes out as a UrlReadError with a short message.
        """
        try:
            content = await self.fetch_and_convert(request.url)
            return select_content(content, request)
        except InvalidUrlError as e:
            logger.info(f"[UrlReader] rejected {request.url!r}: {e}")
            raise UrlReadError(str(e)) from e
        except UrlFetchError as e:
            logger.warning(f"[UrlReader] failed to read {request.url}: {e}")
            raise UrlReadError(f"Failed to read URL: {e}") from e
        except Exception as e:
            logger.exception(f"[UrlReader] unexpected error while reading {request.url}")
            raise UrlReadError(f"Internal error: {e}") from e

    async def _download_and_convert(self, url: str) -> str:
        html = await self._download(url)
        # conversion is CPU bound, keep it off the event loop
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, html_to_markdown, html)

    async def _download(self, url: str) -> str:
        try:
            async with self._new_client() as client, client.stream("GET", url) as response:
                if response.status_code != 200:
                    raise UrlFetchError(f"HTTP {response.status_code}: {response.reason_phrase}")
                body = await self._read_limited(response)
                encoding = response.charset_encoding or "utf-8"
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise UrlFetchError(f"failed to fetch URL: {e}") from e

        try:
            return body.decode(encoding, errors="replace")
        except LookupError:
            return body.decode("utf-8", errors="replace")

    async def _read_limited(self, response: httpx.Response) -> bytes:
        """
        Read at most `max_body_bytes`. Anything beyond is dropped without an
        error; the DEBUG log line is the only trace of the truncation.
        """
        limit = self.config.max_body_bytes
        chunks: List[bytes] = []
        received = 0
        async for chunk in response.aiter_bytes():
            remaining = limit - received
            if len(chunk) > remaining:
                chunks.append(chunk[:remaining])
                logger.debug(f"[UrlReader] body of {response.url} truncated at {limit} bytes")
                break
            chunks.append(chunk)
            received += len(chunk)
        return b"".join(chunks)
