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
"""Locale negotiation: picks the locale of a request from its signals.

Precedence, first applicable wins:

1. Path prefix (``/ar/...``) when redirection is enabled.
2. The locale cookie when cookies are enabled.
3. ``Accept-Language``: RFC 4647 extended filtering, then lookup.
4. The configured default locale.

The negotiator never touches a request or response.  Side effects such as
persisting the locale into a cookie are returned as requests in the
:class:`NegotiationResult` and carried out by the web layer.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

import structlog

from lingofly.i18n.language_range import filter_locales, lookup_locale, parse_accept_language
from lingofly.i18n.types import Locale
from lingofly.kernel.exceptions import ConfigurationException

logger = structlog.get_logger("lingofly.i18n")

DEFAULT_COOKIE_NAME = "locale"
DEFAULT_COOKIE_MAX_AGE = 60 * 60

ExcludePredicate = Callable[[Any], bool]


@dataclass(frozen=True)
class LocaleConfig:
    """Validated, immutable locale settings, built once at startup.

    Raises:
        ConfigurationException: If ``supported_locales`` is missing, empty or
            holds an invalid tag, or if ``default_locale`` is not one of them.
    """

    supported_locales: tuple[Locale, ...]
    default_locale: Locale | None = None
    use_of_cookie: bool = False
    cookie_name: str = DEFAULT_COOKIE_NAME
    cookie_max_age: int = DEFAULT_COOKIE_MAX_AGE
    use_of_redirection: bool = False
    exclude_predicates: tuple[ExcludePredicate, ...] = field(default=())
    validate_cookie: bool = False

    def __post_init__(self) -> None:
        if self.supported_locales is None:
            raise ConfigurationException("supported locales must be initialized")
        if isinstance(self.supported_locales, str):
            raise ConfigurationException("supported locales must be a sequence of locale tags")
        supported = tuple(_to_locale(v, "supported locale") for v in self.supported_locales)
        if not supported:
            raise ConfigurationException("supported locales must not be empty")

        default = supported[0] if self.default_locale is None else _to_locale(self.default_locale, "default locale")
        if default not in supported:
            raise ConfigurationException(
                "default locale must be one of the supported locales",
                context={"default_locale": str(default), "supported_locales": [str(s) for s in supported]},
            )
        if not self.cookie_name:
            raise ConfigurationException("cookie name must not be empty")
        if self.cookie_max_age <= 0:
            raise ConfigurationException(f"cookie max age must be positive, got {self.cookie_max_age}")

        object.__setattr__(self, "supported_locales", supported)
        object.__setattr__(self, "default_locale", default)
        object.__setattr__(self, "exclude_predicates", tuple(self.exclude_predicates))

    @property
    def fallback_locale(self) -> Locale:
        """``default_locale``, typed as always present after validation."""
        assert self.default_locale is not None
        return self.default_locale

    @property
    def supported_path_prefixes(self) -> tuple[str, ...]:
        """Distinct language subtags of the supported locales, in order."""
        return tuple(dict.fromkeys(locale.language for locale in self.supported_locales))

    def is_supported(self, locale: Locale) -> bool:
        return locale in self.supported_locales

    def locale_for_language(self, language: str) -> Locale | None:
        """The first supported locale whose language subtag is *language*."""
        return next((loc for loc in self.supported_locales if loc.language == language), None)


def _to_locale(value: Locale | str, what: str) -> Locale:
    try:
        return Locale.of(value)
    except (ValueError, AttributeError) as exc:
        raise ConfigurationException(f"invalid {what}: {value!r}") from exc


@dataclass(frozen=True)
class RequestSignals:
    """The per-request inputs to negotiation."""

    path_prefix: str | None = None
    cookie: str | None = None
    accept_language: str | None = None


@dataclass(frozen=True)
class CookieWrite:
    """A request to persist the locale into a cookie."""

    name: str
    value: str
    max_age: int


@dataclass(frozen=True)
class NegotiationResult:
    locale: Locale
    source: str
    cookie: CookieWrite | None = None


class LocaleNegotiator:
    """Stateless negotiation of a request locale against a :class:`LocaleConfig`.

    Safe to share between concurrent requests.
    """

    def __init__(self, config: LocaleConfig) -> None:
        self._config = config

    @property
    def config(self) -> LocaleConfig:
        return self._config

    def negotiate(self, signals: RequestSignals) -> NegotiationResult:
        config = self._config

        if config.use_of_redirection and signals.path_prefix in config.supported_path_prefixes:
            locale = config.locale_for_language(signals.path_prefix)  # type: ignore[arg-type]
            assert locale is not None
            cookie = None
            if config.use_of_cookie and signals.cookie != str(locale):
                cookie = self._cookie_write(locale)
            return self._result(locale, "path", cookie)

        if config.use_of_cookie and signals.cookie:
            locale = self._cookie_locale(signals.cookie)
            if locale is not None:
                return self._result(locale, "cookie", None)

        locale = self.negotiate_header(signals.accept_language)
        cookie = self._cookie_write(locale) if config.use_of_cookie else None
        return self._result(locale, "header", cookie)

    def negotiate_header(self, accept_language: str | None) -> Locale:
        """Pick a supported locale for an ``Accept-Language`` value.

        Malformed or absent headers fall back to the default locale.
        """
        ranges = parse_accept_language(accept_language)
        supported = self._config.supported_locales
        matches = filter_locales(ranges, supported)
        if matches:
            return matches[0]
        return lookup_locale(ranges, supported) or self._config.fallback_locale

    def _cookie_locale(self, value: str) -> Locale | None:
        try:
            locale = Locale.parse(value)
        except ValueError:
            logger.warning("invalid_locale_cookie", cookie=value)
            return None
        # unsupported cookie values are trusted unless validation is enabled
        if self._config.validate_cookie and not self._config.is_supported(locale):
            logger.info("unsupported_locale_cookie", cookie=value)
            return None
        return locale

    def _cookie_write(self, locale: Locale) -> CookieWrite:
        return CookieWrite(self._config.cookie_name, str(locale), self._config.cookie_max_age)

    @staticmethod
    def _result(locale: Locale, source: str, cookie: CookieWrite | None) -> NegotiationResult:
        logger.debug("locale_negotiated", locale=str(locale), source=source)
        return NegotiationResult(locale=locale, source=source, cookie=cookie)


# ---------------------------------------------------------------------------
# Redirection gate
# ---------------------------------------------------------------------------


def path_segments(path: str) -> list[str]:
    return path.strip("/").split("/")


def redirect_target(path: str, locale: Locale, config: LocaleConfig, request: Any = None) -> str | None:
    """Return the language-prefixed path to redirect to, or ``None``.

    A redirect is due when redirection is enabled, the first segment of
    *path* is not a supported language subtag, and no exclusion predicate
    matches *request*.  ``/about/`` with locale ``ar`` becomes ``/ar/about``.
    A locale whose language is not supported (say a trusted ``fr`` cookie)
    is sent to the default locale's language instead.
    """
    if not config.use_of_redirection:
        return None
    segments = path_segments(path)
    if segments[0] in config.supported_path_prefixes:
        return None
    if any(predicate(request) for predicate in config.exclude_predicates):
        return None
    # the prefix must be one the gate accepts on the next request
    language = locale.language
    if language not in config.supported_path_prefixes:
        language = config.fallback_locale.language
    return "/" + "/".join([language, *segments]).rstrip("/")


def exclude_prefixes(*prefixes: str) -> list[ExcludePredicate]:
    """Predicates exempting requests whose path starts with any of *prefixes*."""
    return [_prefix_predicate(prefix) for prefix in prefixes]


def _prefix_predicate(prefix: str) -> ExcludePredicate:
    def predicate(request: Any) -> bool:
        return bool(request is not None and request.url.path.startswith(prefix))

    return predicate


def build_config(
    supported_locales: Sequence[Locale | str],
    default_locale: Locale | str | None = None,
    **options: Any,
) -> LocaleConfig:
    """Convenience constructor accepting plain tag strings."""
    return LocaleConfig(
        supported_locales=tuple(supported_locales),  # type: ignore[arg-type]
        default_locale=default_locale,  # type: ignore[arg-type]
        **options,
    )
