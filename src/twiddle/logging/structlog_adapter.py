# Copyright 2026 Firefly Software Solutions Inc.
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
"""structlog setup for Twiddle.

The engine logs through ``structlog.get_logger("twiddle....")`` and emits
debug events only (weaving, detach, rollback). :func:`configure_logging`
routes them through stdlib logging using the ``twiddle.logging``
section of a :class:`Config`::

    twiddle:
      logging:
        format: json            # or console
        level:
          root: INFO
          twiddle.interception: DEBUG
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from twiddle.core.config import Config

_FORMATS = ("console", "json")


def _renderer(fmt: str) -> structlog.types.Processor:
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


class StructlogAdapter:
    """Applies a ``twiddle.logging`` section to structlog and stdlib logging."""

    def __init__(self) -> None:
        self.root_level = "INFO"
        self.format = "console"
        self.logger_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        levels = {k: str(v).upper() for k, v in config.get_section("twiddle.logging.level").items()}
        self.root_level = levels.pop("root", "INFO")
        self.logger_levels = levels
        fmt = str(config.get("twiddle.logging.format", "console")).lower()
        self.format = fmt if fmt in _FORMATS else "console"

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.UnicodeDecoder(),
                _renderer(self.format),
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(format="%(message)s", stream=sys.stdout, level=_level(self.root_level), force=True)
        for name, level in self.logger_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(_level(level))


def configure_logging(config: Config | None = None) -> StructlogAdapter:
    """Configure structlog for Twiddle from *config* (packaged defaults when omitted)."""
    adapter = StructlogAdapter()
    adapter.configure(config if config is not None else Config.defaults())
    return adapter
