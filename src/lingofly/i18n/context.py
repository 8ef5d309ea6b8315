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
"""Request-scoped locale context.

Framework-agnostic: reads ``request.url.path``, ``request.cookies`` and
``request.headers`` via attribute protocol, so no Starlette import is
needed.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from lingofly.i18n.keys import KeyGenerator
from lingofly.i18n.negotiation import (
    CookieWrite,
    LocaleNegotiator,
    NegotiationResult,
    RequestSignals,
    path_segments,
)
from lingofly.i18n.ports.outbound import MessageResolver
from lingofly.i18n.types import Locale
from lingofly.kernel.exceptions import LingoflyException

LOCALE_CONTEXT_ATTR = "lingofly_locale_context"


@runtime_checkable
class SignalSource(Protocol):
    """Reads the raw negotiation inputs of one request."""

    def read_path_prefix(self) -> str | None: ...
    def read_cookie(self, name: str) -> str | None: ...
    def read_header(self, name: str) -> str | None: ...


class RequestSignalSource:
    """:class:`SignalSource` over an ASGI-style request object."""

    def __init__(self, request: Any) -> None:
        self._request = request

    def read_path_prefix(self) -> str | None:
        return path_segments(self._request.url.path)[0] or None

    def read_cookie(self, name: str) -> str | None:
        return self._request.cookies.get(name)

    def read_header(self, name: str) -> str | None:
        return self._request.headers.get(name)


def read_signals(source: SignalSource, cookie_name: str) -> RequestSignals:
    return RequestSignals(
        path_prefix=source.read_path_prefix(),
        cookie=source.read_cookie(cookie_name),
        accept_language=source.read_header("Accept-Language"),
    )


class LocaleContext:
    """Holds the negotiated locale of a single request.

    Negotiation runs lazily on first access of :attr:`locale` and is
    memoized; later reads return the same value without recomputation.  A
    cookie write requested by negotiation stays pending until the web layer
    takes it with :meth:`take_cookie`.
    """

    def __init__(
        self,
        negotiator: LocaleNegotiator,
        source: SignalSource,
        resolver: MessageResolver | None = None,
    ) -> None:
        self._negotiator = negotiator
        self._source = source
        self._resolver = resolver
        self._result: NegotiationResult | None = None
        self._cookie_taken = False

    @property
    def result(self) -> NegotiationResult:
        if self._result is None:
            signals = read_signals(self._source, self._negotiator.config.cookie_name)
            self._result = self._negotiator.negotiate(signals)
        return self._result

    @property
    def locale(self) -> Locale:
        return self.result.locale

    @property
    def is_resolved(self) -> bool:
        return self._result is not None

    def take_cookie(self) -> CookieWrite | None:
        """Return the pending cookie write once; ``None`` afterwards."""
        if self._result is None or self._cookie_taken:
            return None
        self._cookie_taken = True
        return self._result.cookie

    def t(self, keys: KeyGenerator, *args: Any) -> str:
        """Resolve a message in this request's locale."""
        if self._resolver is None:
            raise LingoflyException("No message resolver bound to this locale context", code="I18N_NO_RESOLVER")
        return self._resolver.t(self.locale, keys, *args)


def locale_context(request: Any) -> LocaleContext:
    """The :class:`LocaleContext` attached to *request* by the locale filter.

    Raises:
        LingoflyException: If the locale filter did not run for *request*.
    """
    ctx = getattr(getattr(request, "state", None), LOCALE_CONTEXT_ATTR, None)
    if ctx is None:
        raise LingoflyException(
            "No locale context on this request; is the LocaleFilter installed?",
            code="I18N_NOT_INSTALLED",
        )
    return ctx


def get_locale(request: Any) -> Locale:
    """The negotiated locale of *request*."""
    return locale_context(request).locale


def t(request: Any, keys: KeyGenerator, *args: Any) -> str:
    """Resolve a message using the locale of *request*."""
    return locale_context(request).t(keys, *args)
