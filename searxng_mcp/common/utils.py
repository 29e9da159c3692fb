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
import os
import sys
from typing import Dict, Optional

import httpx
import yaml
from dotenv import load_dotenv

from searxng_mcp.common.structures import Configuration, ProxyConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "./config/configuration.yaml"
DEFAULT_ENV_FILE = "./config/.env"


def load_environment(dotenv_path: Optional[str] = None) -> None:
    dotenv_path = dotenv_path or os.getenv("ENV_FILE", DEFAULT_ENV_FILE)
    if load_dotenv(dotenv_path):
        logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug(f"No .env file found at: {dotenv_path}")


def parse_server_configuration(configuration_path: str) -> Configuration:
    """
    Parses the server configuration from a YAML file.

    Args:
        configuration_path (str): The path to the configuration YAML file.

    Returns:
        Configuration: The parsed configuration object.
    """
    with open(configuration_path, "r") as f:
        try:
            config: Optional[Dict] = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Error while parsing configuration file {configuration_path}: {e}")
            sys.exit(1)
    return Configuration(**(config or {}))


def load_configuration(configuration_path: Optional[str] = None) -> Configuration:
    """
    Resolve the configuration file from $CONFIG_FILE and fall back to the
    built-in defaults (plus environment variables) when it does not exist.
    """
    configuration_path = configuration_path or os.getenv("CONFIG_FILE", DEFAULT_CONFIG_FILE)
    if os.path.isfile(configuration_path):
        return parse_server_configuration(configuration_path)
    logger.debug(f"No configuration file at {configuration_path}, using defaults")
    return Configuration()


def build_proxy_mounts(proxy: ProxyConfig) -> Optional[Dict[str, httpx.AsyncBaseTransport]]:
    """
    Route http:// and https:// requests through their configured proxy.
    Returns None when no proxy is configured so httpx keeps its default transport.
    """
    if not proxy.is_enabled():
        return None
    mounts: Dict[str, httpx.AsyncBaseTransport] = {}
    if proxy.http:
        mounts["http://"] = httpx.AsyncHTTPTransport(proxy=proxy.http)
    if proxy.https:
        mounts["https://"] = httpx.AsyncHTTPTransport(proxy=proxy.https)
    return mounts
