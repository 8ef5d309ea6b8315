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
"""Outbound ports: message templates in, formatted messages out."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from lingofly.i18n.keys import KeyGenerator
from lingofly.i18n.types import Locale


@runtime_checkable
class BundleProvider(Protocol):
    """Source of raw message templates, one bundle per locale.

    Storage is up to the implementation (resource files, in-memory maps,
    remote configuration, ...).  Providers should cache loaded bundles so
    repeated lookups are cheap; the first lookup for a locale may block on
    I/O.
    """

    def lookup(self, locale: Locale, key: str) -> str | None:
        """Return the raw template for *key* in *locale*, or ``None`` if absent.

        Raises:
            BundleUnavailableException: If no bundle exists for *locale* at all.
        """
        ...


@runtime_checkable
class MessageResolver(Protocol):
    """Strategy for resolving and formatting a message for a locale.

    *keys* are tried in order; the first key with a template wins.  The
    extra *args* are used for formatting, with semantics defined by the
    implementation.
    """

    def t(self, locale: Locale, keys: KeyGenerator, *args: Any) -> str:
        """Resolve the first available key in *keys* and format it with *args*.

        Raises:
            MessageNotFoundException: If none of the keys resolve.
        """
        ...
