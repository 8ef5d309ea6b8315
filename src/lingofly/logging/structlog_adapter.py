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
"""Structlog-backed :class:`~lingofly.logging.port.LoggingPort`.

Settings live under ``lingofly.logging``::

    lingofly:
      logging:
        format: json          # or console
        level:
          root: WARNING
          lingofly.i18n: DEBUG

Every Lingofly module logs through ``structlog.get_logger("lingofly.<area>")``,
so per-logger levels apply to negotiation, bundle loading and the web filter
alike.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from lingofly.core.config import Config
from lingofly.kernel.exceptions import ConfigurationException

LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
RENDERERS = ("console", "json")


def _level_number(name: str, level: Any) -> int:
    normalized = str(level).strip().upper()
    if normalized not in LEVELS:
        raise ConfigurationException(
            f"unknown log level {level!r} for {name!r}",
            context={"logger": name, "allowed": list(LEVELS)},
        )
    return logging.getLevelNamesMapping()[normalized]


class StructlogAdapter:
    """Routes structlog through stdlib ``logging`` with a console or JSON renderer."""

    def __init__(self) -> None:
        self.root_level = "INFO"
        self.renderer = "console"
        self.logger_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        """Apply ``lingofly.logging.*`` from *config*.

        Raises:
            ConfigurationException: On an unknown level or renderer name.
        """
        levels = {str(k): str(v).upper() for k, v in config.get_section("lingofly.logging.level").items()}
        root = levels.pop("root", "INFO")
        _level_number("root", root)
        renderer = str(config.get("lingofly.logging.format", "console")).strip().lower()
        if renderer not in RENDERERS:
            raise ConfigurationException(
                f"unknown log format {renderer!r}",
                context={"allowed": list(RENDERERS)},
            )

        self.root_level, self.renderer, self.logger_levels = root, renderer, levels
        self._install()
        for name, level in levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(_level_number(name, level))

    def _install(self) -> None:
        renderer: structlog.types.Processor
        if self.renderer == "json":
            renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
        else:
            renderer = structlog.dev.ConsoleRenderer()

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso", utc=True),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                renderer,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            # module-level proxies must keep seeing later reconfiguration
            cache_logger_on_first_use=False,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=_level_number("root", self.root_level),
            force=True,
        )
