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

#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Entrypoint for the SearXNG MCP server.
"""

import logging
import sys

from searxng_mcp.application_context import ApplicationContext
from searxng_mcp.common.log_setup import log_setup
from searxng_mcp.common.structures import Configuration
from searxng_mcp.common.utils import load_configuration, load_environment
from searxng_mcp.server_mcp import build_server

logger = logging.getLogger(__name__)


def validate_configuration(configuration: Configuration) -> None:
    if not configuration.searxng.url:
        raise ValueError("SEARXNG_URL environment variable is required")


def main() -> None:
    load_environment()
    configuration = load_configuration()
    log_setup(service_name=configuration.app.name, log_level=configuration.app.log_level)

    try:
        validate_configuration(configuration)
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    context = ApplicationContext(configuration)
    server = build_server(context)
    logger.info(f"Starting {configuration.app.name} {configuration.app.version} over {configuration.app.transport}")
    try:
        server.run(transport=configuration.app.transport)
    finally:
        context.shutdown()


if __name__ == "__main__":
    main()
