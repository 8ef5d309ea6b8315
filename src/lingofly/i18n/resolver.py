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
"""Message resolution: key fallback over a bundle provider plus formatting."""

from __future__ import annotations

from typing import Any

import structlog

from lingofly.i18n.format_cache import FormatCache
from lingofly.i18n.keys import KeyGenerator
from lingofly.i18n.ports.outbound import BundleProvider
from lingofly.i18n.types import Locale
from lingofly.kernel.exceptions import EmptyKeyGeneratorException, MessageNotFoundException

logger = structlog.get_logger("lingofly.i18n")


class BundleMessageResolver:
    """A :class:`MessageResolver` backed by a :class:`BundleProvider`.

    For each key produced by the key generator the template is looked up in
    the provider; the first key that resolves wins.  A missing key moves on
    to the next candidate, while any provider error (such as
    ``BundleUnavailableException``) propagates immediately.

    Templates are formatted with :class:`MessageFormat` only when arguments
    are given; without arguments the raw template is returned untouched.
    Compiled formats are shared through *format_cache*.
    """

    def __init__(self, provider: BundleProvider, format_cache: FormatCache | None = None) -> None:
        self._provider = provider
        self._formats = format_cache if format_cache is not None else FormatCache()

    @property
    def provider(self) -> BundleProvider:
        return self._provider

    @property
    def format_cache(self) -> FormatCache:
        return self._formats

    def t(self, locale: Locale | str, keys: KeyGenerator, *args: Any) -> str:
        """Resolve the first available key in *keys* for *locale*.

        Raises:
            EmptyKeyGeneratorException: If *keys* yields nothing.
            MessageNotFoundException: If no key resolves; reports the first
                attempted key.
        """
        locale = Locale.of(locale)
        first_missing: str | None = None

        for key in keys:
            template = self._provider.lookup(locale, key)
            if template is not None:
                return self._format(template, locale, args)
            if first_missing is None:
                first_missing = key

        if first_missing is None:
            raise EmptyKeyGeneratorException()
        logger.debug("message_not_found", locale=str(locale), key=first_missing)
        raise MessageNotFoundException(locale, first_missing)

    def get_message_or_default(self, locale: Locale | str, keys: KeyGenerator, default: str, *args: Any) -> str:
        """Like :meth:`t`, returning *default* (formatted with *args*) on a miss."""
        try:
            return self.t(locale, keys, *args)
        except MessageNotFoundException:
            return self._format(default, Locale.of(locale), args)

    def _format(self, template: str, locale: Locale, args: tuple[Any, ...]) -> str:
        if not args:
            return template
        return self._formats.get_or_compile(template, locale).format(args)
