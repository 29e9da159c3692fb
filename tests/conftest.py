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

from typing import Callable, List

import httpx
import pytest

from searxng_mcp.application_context import ApplicationContext
from searxng_mcp.common.structures import (
    CacheConfig,
    Configuration,
    ProxyConfig,
    SearxngConfig,
    UrlReaderConfig,
)
from searxng_mcp.common.ttl_cache import ThreadSafeTTLCache


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingHandler:
    """httpx.MockTransport handler that records every request it serves."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self.respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock):
    c: ThreadSafeTTLCache[str, str] = ThreadSafeTTLCache(ttl_seconds=60, clock=clock, autostart=False)
    yield c
    c.destroy()


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    for name in ("SEARXNG_URL", "AUTH_USERNAME", "AUTH_PASSWORD", "HTTP_PROXY", "HTTPS_PROXY", "CONFIG_FILE", "ENV_FILE"):
        monkeypatch.delenv(name, raising=False)
    ApplicationContext.reset_instance()
    yield
    ApplicationContext.reset_instance()


@pytest.fixture
def configuration() -> Configuration:
    return Configuration(
        searxng=SearxngConfig(url="http://searxng.test", username=None, password=None),
        url_reader=UrlReaderConfig(timeout_seconds=5, max_body_bytes=1024),
        cache=CacheConfig(ttl_seconds=60, sweep_interval_seconds=30),
        proxy=ProxyConfig(http=None, https=None),
    )
