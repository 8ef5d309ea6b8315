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
"""Lingofly I18n: locale negotiation and message resolution.

Import concrete adapter types from the adapter package::

    from lingofly.i18n.adapters.resource_bundle import ResourceBundleProvider
"""

from lingofly.i18n.context import LocaleContext, get_locale, locale_context, t
from lingofly.i18n.format_cache import FormatCache
from lingofly.i18n.formatting import MessageFormat
from lingofly.i18n.keys import DelimitedKeyGenerator, KeyGenerator, R, keys_of
from lingofly.i18n.language_range import LanguageRange, filter_locales, lookup_locale
from lingofly.i18n.locale import (
    AcceptHeaderLocaleResolver,
    FixedLocaleResolver,
    LocaleResolver,
)
from lingofly.i18n.negotiation import (
    LocaleConfig,
    LocaleNegotiator,
    NegotiationResult,
    RequestSignals,
    build_config,
    exclude_prefixes,
)
from lingofly.i18n.plugin import I18n
from lingofly.i18n.ports.outbound import BundleProvider, MessageResolver
from lingofly.i18n.properties import I18nProperties
from lingofly.i18n.resolver import BundleMessageResolver
from lingofly.i18n.types import Locale

__all__ = [
    "AcceptHeaderLocaleResolver",
    "BundleMessageResolver",
    "BundleProvider",
    "DelimitedKeyGenerator",
    "FixedLocaleResolver",
    "FormatCache",
    "I18n",
    "I18nProperties",
    "KeyGenerator",
    "LanguageRange",
    "Locale",
    "LocaleConfig",
    "LocaleContext",
    "LocaleNegotiator",
    "LocaleResolver",
    "MessageFormat",
    "MessageResolver",
    "NegotiationResult",
    "R",
    "RequestSignals",
    "build_config",
    "exclude_prefixes",
    "filter_locales",
    "get_locale",
    "keys_of",
    "locale_context",
    "lookup_locale",
    "t",
]
