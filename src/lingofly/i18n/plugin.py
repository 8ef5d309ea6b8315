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
"""I18n facade: validated settings, message resolution and app installation."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import structlog

from lingofly.core.config import Config
from lingofly.i18n.adapters.resource_bundle import DEFAULT_BASE_NAME, ResourceBundleProvider
from lingofly.i18n.context import LocaleContext, locale_context
from lingofly.i18n.format_cache import FormatCache
from lingofly.i18n.keys import KeyGenerator
from lingofly.i18n.negotiation import ExcludePredicate, LocaleConfig, LocaleNegotiator
from lingofly.i18n.ports.outbound import BundleProvider
from lingofly.i18n.properties import I18nProperties
from lingofly.i18n.resolver import BundleMessageResolver
from lingofly.i18n.types import Locale
from lingofly.logging.port import LoggingPort
from lingofly.logging.structlog_adapter import StructlogAdapter

if TYPE_CHECKING:
    from lingofly.web.adapters.starlette.filters.locale_filter import LocaleFilter

logger = structlog.get_logger("lingofly.i18n")


class I18n:
    """Entry point tying a :class:`LocaleConfig` to a message resolver.

    Usage::

        i18n = I18n.from_config(Config.from_sources("."))
        i18n.install(app)

        async def home(request):
            return PlainTextResponse(t(request, R("greeting"), "Ayman"))
    """

    def __init__(
        self,
        config: LocaleConfig,
        provider: BundleProvider | None = None,
        format_cache: FormatCache | None = None,
    ) -> None:
        self._config = config
        self._negotiator = LocaleNegotiator(config)
        if provider is None:
            provider = ResourceBundleProvider(DEFAULT_BASE_NAME, fallback_locale=config.fallback_locale)
        self._resolver = BundleMessageResolver(provider, format_cache)

    @classmethod
    def from_config(
        cls,
        config: Config,
        provider: BundleProvider | None = None,
        exclude: Sequence[ExcludePredicate] = (),
        logging_port: LoggingPort | None = None,
    ) -> I18n:
        """Build from ``lingofly.i18n.*`` settings.

        Logging is configured first from ``lingofly.logging.*`` through
        *logging_port*, a :class:`StructlogAdapter` unless given.

        Raises:
            ConfigurationException: If the settings are invalid.
        """
        (logging_port or StructlogAdapter()).configure(config)
        props = I18nProperties.from_config(config)
        locale_config = props.to_locale_config(exclude)
        if provider is None:
            provider = ResourceBundleProvider(
                props.base_name,
                base_path=props.base_path,
                fallback_locale=locale_config.fallback_locale,
            )
        logger.info(
            "i18n_configured",
            supported_locales=[str(loc) for loc in locale_config.supported_locales],
            default_locale=str(locale_config.fallback_locale),
            use_of_cookie=locale_config.use_of_cookie,
            use_of_redirection=locale_config.use_of_redirection,
        )
        return cls(locale_config, provider, FormatCache(max_size=props.format_cache_size))

    @property
    def config(self) -> LocaleConfig:
        return self._config

    @property
    def negotiator(self) -> LocaleNegotiator:
        return self._negotiator

    @property
    def resolver(self) -> BundleMessageResolver:
        return self._resolver

    @property
    def supported_locales(self) -> tuple[Locale, ...]:
        return self._config.supported_locales

    @property
    def default_locale(self) -> Locale:
        return self._config.fallback_locale

    def t(self, locale: Locale | str, keys: KeyGenerator, *args: Any) -> str:
        return self._resolver.t(locale, keys, *args)

    def get_message_or_default(self, locale: Locale | str, keys: KeyGenerator, default: str, *args: Any) -> str:
        return self._resolver.get_message_or_default(locale, keys, default, *args)

    def create_filter(self) -> LocaleFilter:
        from lingofly.web.adapters.starlette.filters.locale_filter import LocaleFilter

        return LocaleFilter(self._negotiator, self._resolver)

    def install(self, app: Any, filters: Sequence[Any] = ()) -> None:
        """Add the locale filter, plus any extra *filters*, to a Starlette *app*."""
        from lingofly.web.adapters.starlette.filter_chain import WebFilterChainMiddleware

        app.add_middleware(WebFilterChainMiddleware, filters=[self.create_filter(), *filters])

    @staticmethod
    def locale_context(request: Any) -> LocaleContext:
        return locale_context(request)
