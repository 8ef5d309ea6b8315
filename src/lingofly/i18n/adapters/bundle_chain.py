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
"""Shared parent-chain lookup for bundle providers."""

from __future__ import annotations

import abc
from collections.abc import Mapping

import structlog

from lingofly.i18n.types import Locale
from lingofly.kernel.exceptions import BundleUnavailableException

logger = structlog.get_logger("lingofly.i18n")

Bundle = Mapping[str, str]


def candidate_suffixes(locale: Locale) -> list[str]:
    """Bundle suffixes for *locale*, most specific first, base bundle excluded.

    ``zh-Hant-TW`` yields ``zh_Hant_TW``, ``zh_Hant``, ``zh_TW``, ``zh``.
    """
    lang, script, region, variant = locale.language, locale.script, locale.region, locale.variant
    candidates: list[tuple[str, ...]] = []
    if script:
        candidates += [(lang, script, region, variant), (lang, script, region), (lang, script)]
    candidates += [(lang, region, variant), (lang, region), (lang,)]

    suffixes: list[str] = []
    for parts in candidates:
        suffix = "_".join(p for p in parts if p)
        if suffix not in suffixes:
            suffixes.append(suffix)
    return suffixes


class BundleChainProvider(abc.ABC):
    """Base class for :class:`BundleProvider` implementations.

    Resolves a key by walking the bundle chain of a locale (most specific
    bundle first, base bundle last).  When the locale has no bundle of its
    own, the chain of *fallback_locale* is used before the base bundle.
    Subclasses only need to implement ``_bundle()``.
    """

    def __init__(self, base_name: str, fallback_locale: Locale | None = None) -> None:
        self.base_name = base_name
        self.fallback_locale = fallback_locale

    @abc.abstractmethod
    def _bundle(self, suffix: str) -> Bundle | None:
        """Return the bundle for *suffix* (``""`` is the base bundle), or ``None``."""
        ...

    def bundle_chain(self, locale: Locale) -> list[Bundle]:
        """Existing bundles consulted for *locale*, in lookup order.

        Raises:
            BundleUnavailableException: If the chain is empty.
        """
        chain = [b for b in (self._bundle(s) for s in candidate_suffixes(locale)) if b is not None]
        if not chain and self.fallback_locale is not None and self.fallback_locale != locale:
            chain = [b for b in (self._bundle(s) for s in candidate_suffixes(self.fallback_locale)) if b is not None]

        base = self._bundle("")
        if base is not None:
            chain.append(base)

        if not chain:
            logger.warning("bundle_unavailable", base_name=self.base_name, locale=str(locale))
            raise BundleUnavailableException(locale, self.base_name)
        return chain

    def lookup(self, locale: Locale, key: str) -> str | None:
        for bundle in self.bundle_chain(locale):
            template = bundle.get(key)
            if template is not None:
                return template
        return None
