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
"""LocaleFilter: attaches a lazily negotiated locale to each request.

Also runs the redirection gate and persists the negotiated locale into the
locale cookie when negotiation asks for it.
"""

from __future__ import annotations

from typing import Any

import structlog
from starlette.responses import RedirectResponse

from lingofly.container.ordering import HIGHEST_PRECEDENCE, order
from lingofly.i18n.context import LOCALE_CONTEXT_ATTR, LocaleContext, RequestSignalSource
from lingofly.i18n.negotiation import LocaleNegotiator, redirect_target
from lingofly.i18n.ports.outbound import MessageResolver
from lingofly.web.filters import OncePerRequestFilter
from lingofly.web.ports.filter import CallNext

logger = structlog.get_logger("lingofly.web")


@order(HIGHEST_PRECEDENCE + 100)
class LocaleFilter(OncePerRequestFilter):
    """Stores a :class:`LocaleContext` on ``request.state``.

    With redirection enabled, requests whose first path segment is not a
    supported language are answered with a ``302`` to the language-prefixed
    path (query string kept) and the handler is not invoked.
    """

    def __init__(self, negotiator: LocaleNegotiator, resolver: MessageResolver | None = None) -> None:
        self._negotiator = negotiator
        self._resolver = resolver

    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        ctx = LocaleContext(self._negotiator, RequestSignalSource(request), self._resolver)
        setattr(request.state, LOCALE_CONTEXT_ATTR, ctx)

        config = self._negotiator.config
        target = None
        if config.use_of_redirection:
            target = redirect_target(request.url.path, ctx.locale, config, request)

        if target is not None:
            if request.url.query:
                target = f"{target}?{request.url.query}"
            logger.info("locale_redirect", path=request.url.path, location=target, locale=str(ctx.locale))
            response: Any = RedirectResponse(target, status_code=302)
        else:
            response = await call_next(request)

        cookie = ctx.take_cookie()
        if cookie is not None:
            response.set_cookie(cookie.name, cookie.value, max_age=cookie.max_age, path="/")
        return response
