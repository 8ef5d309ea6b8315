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
"""In-memory bundle provider: templates held in plain dicts."""

from __future__ import annotations

from collections.abc import Mapping

from lingofly.i18n.adapters.bundle_chain import Bundle, BundleChainProvider
from lingofly.i18n.types import Locale


class InMemoryBundleProvider(BundleChainProvider):
    """Bundle provider over ``{locale tag: {key: template}}``.

    Locale tags may use ``-`` or ``_``; the empty tag ``""`` is the base
    bundle.  Useful for tests and for templates embedded in code.

    Usage::

        provider = InMemoryBundleProvider({
            "": {"greeting": "Hello, {0}!"},
            "fr": {"greeting": "Bonjour, {0} !"},
        })
    """

    def __init__(
        self,
        bundles: Mapping[str, Mapping[str, str]],
        base_name: str = "memory",
        fallback_locale: Locale | None = None,
    ) -> None:
        super().__init__(base_name=base_name, fallback_locale=fallback_locale)
        self._bundles: dict[str, dict[str, str]] = {
            _suffix(tag): dict(messages) for tag, messages in bundles.items()
        }

    def _bundle(self, suffix: str) -> Bundle | None:
        return self._bundles.get(suffix)


def _suffix(tag: str) -> str:
    if not tag:
        return ""
    return "_".join(Locale.parse(tag).subtags())
