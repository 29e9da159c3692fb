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

from searxng_mcp.common.structures import VERSION
from searxng_mcp.common.ttl_cache import CacheStats, ThreadSafeTTLCache
from searxng_mcp.features.url_reader.markdown import html_to_markdown
from searxng_mcp.features.url_reader.selection import select_content
from searxng_mcp.features.url_reader.structures import SelectionRequest, UrlReadRequest

__version__ = VERSION

__all__ = [
    "CacheStats",
    "SelectionRequest",
    "ThreadSafeTTLCache",
    "UrlReadRequest",
    "html_to_markdown",
    "select_content",
]
