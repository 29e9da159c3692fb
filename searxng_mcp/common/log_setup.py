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

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler


class TaskNameFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        """Adds the current asyncio Task name to the log record."""
        try:
            current_task: Optional[asyncio.Task[Any]] = asyncio.current_task()
            if current_task is not None:
                record.task_name = current_task.get_name() or str(id(current_task))
            else:
                record.task_name = "Main"
        except RuntimeError:
            # not inside an event loop (startup, sweep thread)
            record.task_name = "Sync"
        return True


def log_setup(*, service_name: str, log_level: str = "INFO") -> None:
    """
    Configure the root logger once per process.

    The console handler writes to stderr: with the stdio transport, stdout
    carries the MCP protocol stream and must stay clean.
    """
    root = logging.getLogger()
    marker = f"_searxng_handlers_{service_name}"
    if getattr(root, marker, False):
        root.setLevel(log_level.upper())
        return

    root.setLevel(log_level.upper())
    for h in list(root.handlers):
        root.removeHandler(h)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | [%(threadName)s/%(task_name)s] | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=False,
        show_time=False,
        show_level=True,
        show_path=True,
    )
    console.setFormatter(formatter)
    console.addFilter(TaskNameFilter())
    console.setLevel(log_level.upper())
    root.addHandler(console)

    # Client libraries log every request at INFO.
    for noisy in ("httpx", "httpcore", "mcp"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    setattr(root, marker, True)
    logging.getLogger(__name__).info(f"Logging configured for {service_name} at {log_level.upper()} level.")
