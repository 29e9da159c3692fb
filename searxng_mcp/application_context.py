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
from typing import Optional

import httpx

from searxng_mcp.common.structures import Configuration
from searxng_mcp.common.ttl_cache import ThreadSafeTTLCache
from searxng_mcp.features.search.service import SearchService, SearxngClient
from searxng_mcp.features.url_reader.service import UrlReaderService

logger = logging.getLogger(__name__)


class ApplicationContext:
    """
    Process-wide owner of the configuration, the page cache and the
    services built on them. Created once at startup, torn down once by `shutdown`.
    """

    _instance: Optional["ApplicationContext"] = None

    def __init__(self, config: Configuration, transport: Optional[httpx.AsyncBaseTransport] = None):
        if ApplicationContext._instance is not None:
            return

        self.config = config
        self.cache: ThreadSafeTTLCache[str, str] = ThreadSafeTTLCache(
            ttl_seconds=config.cache.ttl_seconds,
            sweep_interval_seconds=config.cache.sweep_interval_seconds,
        )
        self.url_reader = UrlReaderService(self.cache, config.url_reader, config.proxy, transport=transport)
        self.search_service = SearchService(SearxngClient(config.searxng, config.proxy, transport=transport))
        self._closed = False

        ApplicationContext._instance = self
        self._log_config_summary()

    @classmethod
    def get_instance(cls) -> "ApplicationContext":
        """
        Raises:
            RuntimeError: If the ApplicationContext is not initialized.
        """
        if cls._instance is None:
            raise RuntimeError("ApplicationContext is not initialized yet.")
        return cls._instance

    @classmethod
    def reset_instance(cls):
        """Reset the singleton instance (used in tests)."""
        cls._instance = None

    def get_config(self) -> Configuration:
        return self.config

    def get_cache(self) -> ThreadSafeTTLCache[str, str]:
        return self.cache

    def get_url_reader(self) -> UrlReaderService:
        return self.url_reader

    def get_search_service(self) -> SearchService:
        return self.search_service

    def shutdown(self) -> None:
        """Stop the cache sweep and drop cached pages. Runs at most once."""
        if self._closed:
            return
        self._closed = True
        self.cache.destroy()
        logger.info("Application context shut down.")

    def _log_config_summary(self):
        logger.info("Application configuration summary:")
        logger.info("--------------------------------------------------")
        logger.info(f"  SearXNG URL: {self.config.searxng.url or '<unset>'}")
        logger.info(f"  Basic auth: {'enabled' if self.config.searxng.has_basic_auth() else 'disabled'}")
        logger.info(f"  Proxy: {'enabled' if self.config.proxy.is_enabled() else 'disabled'}")
        logger.info(f"  Cache TTL: {self.config.cache.ttl_seconds:g}s (sweep every {self.config.cache.sweep_interval_seconds:g}s)")
        logger.info(f"  Fetch limits: {self.config.url_reader.max_body_bytes} bytes, {self.config.url_reader.timeout_seconds:g}s")
        logger.info("--------------------------------------------------")
