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
"""The seam through which Lingofly sets up logging at startup.

:meth:`lingofly.i18n.plugin.I18n.from_config` hands the loaded
:class:`~lingofly.core.config.Config` to a ``LoggingPort`` before it builds
anything else, so bundle loading and negotiation already log with the
configured levels.  :class:`~lingofly.logging.structlog_adapter.StructlogAdapter`
is the default; applications that own their logging setup pass their own.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from lingofly.core.config import Config


@runtime_checkable
class LoggingPort(Protocol):
    def configure(self, config: Config) -> None:
        """Apply the ``lingofly.logging`` section of *config*."""
        ...

    def get_logger(self, name: str) -> Any: ...

    def set_level(self, name: str, level: str) -> None:
        """Change the level of the logger called *name*."""
        ...
