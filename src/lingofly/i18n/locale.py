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
"""Locale resolution: protocol and built-in resolvers."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from lingofly.i18n.negotiation import LocaleConfig, LocaleNegotiator
from lingofly.i18n.types import Locale


@runtime_checkable
class LocaleResolver(Protocol):
    """Port for determining the locale from an incoming request."""

    def resolve_locale(self, request: Any) -> Locale: ...


class AcceptHeaderLocaleResolver:
    """Negotiates the ``Accept-Language`` header against the supported locales.

    Uses RFC 4647 extended filtering, then lookup.  When no header is
    present, or it cannot be parsed, the configured default locale is
    returned.  Path prefixes and cookies are ignored; see
    :class:`~lingofly.i18n.context.LocaleContext` for full negotiation.
    """

    def __init__(self, config: LocaleConfig) -> None:
        self._negotiator = LocaleNegotiator(config)

    def resolve_locale(self, request: Any) -> Locale:
        header: str = getattr(request, "accept_language", "") or ""
        if not header:
            headers = getattr(request, "headers", None)
            if headers is not None:
                header = headers.get("accept-language", "")
        return self._negotiator.negotiate_header(header)


class FixedLocaleResolver:
    """Always returns a pre-configured locale, ignoring the request."""

    def __init__(self, locale: Locale | str = "en") -> None:
        self._locale = Locale.of(locale)

    def resolve_locale(self, request: Any) -> Locale:  # noqa: ARG002
        return self._locale
