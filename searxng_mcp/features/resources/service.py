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

import json

from searxng_mcp.common.structures import Configuration
from searxng_mcp.common.ttl_cache import CacheStats

CONFIG_RESOURCE_URI = "config://mcp-searxng"
HELP_RESOURCE_URI = "help://mcp-searxng"


def build_config_resource(configuration: Configuration, cache_stats: CacheStats) -> str:
    # never expose searxng credentials
    config = {
        "version": configuration.app.version,
        "searxng_url": configuration.searxng.url or "",
        "proxy": {
            "http": configuration.proxy.http or "",
            "https": configuration.proxy.https or "",
        },
        "cache": {
            "enabled": True,
            "ttl": cache_stats.ttl_seconds,
            "size": cache_stats.size,
        },
    }
    return json.dumps(config, indent=2)


_HELP = """# MCP SearXNG Server - Usage Guide

## Overview

This MCP server provides web search capabilities through SearXNG and URL content extraction.

## Available Tools

### 1. searxng_web_search

Performs web searches using the SearXNG metasearch engine.

**Parameters:**
- `query` (required): Search query string
- `pageno` (optional): Page number (default: 1)
- `time_range` (optional): Filter by time ("day", "month", "year")
- `language` (optional): Language code (e.g., "en", "fr", "de")
- `safesearch` (optional): Safe search level ("0", "1", "2")

**Example:**
```
query: "TypeScript best practices 2024"
pageno: 1
language: "en"
```

### 2. web_url_read

Reads and converts web page content to Markdown format.

**Parameters:**
- `url` (required): URL to read
- `startChar` (optional): Starting character position
- `maxLength` (optional): Maximum characters to return
- `section` (optional): Extract specific heading section
- `paragraphRange` (optional): Paragraph range (e.g., "1-5", "3", "10-")
- `readHeadings` (optional): Return only headings (boolean)

Options apply in this order: `readHeadings` (exclusive), `section`,
`paragraphRange`, then `startChar`/`maxLength`.

**Example:**
```
url: "https://example.com/article"
maxLength: 5000
```

## Configuration

The server reads `$CONFIG_FILE` (default `./config/configuration.yaml`) and the
following environment variables:

- `SEARXNG_URL`: SearXNG instance URL (required)
- `AUTH_USERNAME`: Basic auth username (optional)
- `AUTH_PASSWORD`: Basic auth password (optional)
- `HTTP_PROXY`: HTTP proxy URL (optional)
- `HTTPS_PROXY`: HTTPS proxy URL (optional)

## Features

- **Caching**: URL content is cached for {ttl} seconds to reduce load
- **Proxy Support**: HTTP and HTTPS proxies from configuration or environment
- **Privacy**: All searches go through your own SearXNG instance
- **Markdown Conversion**: HTML content is automatically converted to Markdown
"""


def build_help_resource(ttl_seconds: float = 60) -> str:
    return _HELP.replace("{ttl}", f"{ttl_seconds:g}")
