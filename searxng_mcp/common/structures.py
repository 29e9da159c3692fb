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

import os
from typing import Literal, Optional

from pydantic import BaseModel, Field

VERSION = "0.7.0"

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; MCP-SearXNG-Py/1.0)"


def _env(name: str) -> Optional[str]:
    return os.getenv(name) or None


class AppConfig(BaseModel):
    name: str = "mcp-searxng"
    version: str = VERSION
    log_level: str = "info"
    transport: Literal["stdio", "streamable-http"] = "stdio"
    address: str = "127.0.0.1"
    port: int = 9797


class SearxngConfig(BaseModel):
    url: Optional[str] = Field(default_factory=lambda: _env("SEARXNG_URL"), description="Base URL of the SearXNG instance")
    timeout_seconds: float = Field(default=30.0, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
    username: Optional[str] = Field(default_factory=lambda: _env("AUTH_USERNAME"), description="Basic auth username from env")
    password: Optional[str] = Field(default_factory=lambda: _env("AUTH_PASSWORD"), description="Basic auth password from env")

    def has_basic_auth(self) -> bool:
        return bool(self.username and self.password)


class UrlReaderConfig(BaseModel):
    timeout_seconds: float = Field(default=30.0, gt=0)
    max_body_bytes: int = Field(default=10 * 1024 * 1024, gt=0, description="Response bodies are silently truncated past this size")
    user_agent: str = DEFAULT_USER_AGENT


class CacheConfig(BaseModel):
    ttl_seconds: float = Field(default=60.0, gt=0)
    sweep_interval_seconds: float = Field(default=30.0, gt=0)


class ProxyConfig(BaseModel):
    http: Optional[str] = Field(default_factory=lambda: _env("HTTP_PROXY"))
    https: Optional[str] = Field(default_factory=lambda: _env("HTTPS_PROXY"))

    def is_enabled(self) -> bool:
        return bool(self.http or self.https)


class Configuration(BaseModel):
    app: AppConfig = Field(default_factory=AppConfig)
    searxng: SearxngConfig = Field(default_factory=SearxngConfig)
    url_reader: UrlReaderConfig = Field(default_factory=UrlReaderConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    proxy: ProxyConfig = Field(default_factory=ProxyConfig)
