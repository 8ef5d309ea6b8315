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
"""FormatCache: shared, thread-safe cache of compiled message formats."""

from __future__ import annotations

import threading
from collections import OrderedDict
from collections.abc import Callable

import structlog

from lingofly.i18n.formatting import MessageFormat
from lingofly.i18n.types import Locale

logger = structlog.get_logger("lingofly.i18n")

FormatFactory = Callable[[str, Locale], MessageFormat]


class FormatCache:
    """Memoizes ``(template, locale) -> MessageFormat`` compilation.

    Lookups and first-time insertions are serialized by a lock, so a pair is
    compiled exactly once even when many threads ask for it at the same
    time, and no caller ever observes a partially built format.

    By default entries live as long as the cache.  With *max_size* set, the
    least recently used entry is evicted once the cache is full.
    """

    def __init__(self, factory: FormatFactory = MessageFormat, max_size: int | None = None) -> None:
        if max_size is not None and max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self._factory = factory
        self._max_size = max_size
        self._entries: OrderedDict[tuple[str, Locale], MessageFormat] = OrderedDict()
        self._lock = threading.Lock()
        self._compile_count = 0

    def get_or_compile(self, template: str, locale: Locale) -> MessageFormat:
        key = (template, locale)
        with self._lock:
            compiled = self._entries.get(key)
            if compiled is not None:
                if self._max_size is not None:
                    self._entries.move_to_end(key)
                return compiled

            # compiled under the lock, once per key; the first key of a locale
            # also reads that locale's CLDR data from disk
            compiled = self._factory(template, locale)
            self._compile_count += 1
            self._entries[key] = compiled
            if self._max_size is not None and len(self._entries) > self._max_size:
                self._entries.popitem(last=False)

        logger.debug("format_compiled", locale=str(locale), template=template)
        return compiled

    @property
    def compile_count(self) -> int:
        """Number of formats compiled since creation."""
        return self._compile_count

    @property
    def max_size(self) -> int | None:
        return self._max_size

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
