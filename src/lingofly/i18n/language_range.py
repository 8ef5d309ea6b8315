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
"""RFC 4647 language ranges: parsing, extended filtering and lookup.

A client's ``Accept-Language`` header is parsed into weighted
:class:`LanguageRange` objects ordered by preference.  Two matching schemes
select among the locales an application supports:

* :func:`filter_locales` (RFC 4647 §3.3.2, *extended filtering*) returns every
  locale that structurally matches a range, in the client's preference order.
  ``de-DE`` matches ``de-DE``, ``de-Latn-DE`` and ``de-DE-1996``; ``*`` matches
  anything.
* :func:`lookup_locale` (RFC 4647 §3.4, *lookup*) progressively truncates each
  range (``zh-Hant-CN-x-private`` → ``zh-Hant-CN`` → ``zh-Hant`` → ``zh``)
  until a locale matches exactly.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from lingofly.i18n.types import Locale

WILDCARD = "*"

_RANGE_RE = re.compile(r"^(?:[a-z]{1,8}|\*)(?:-(?:[a-z0-9]{1,8}|\*))*$")
_WEIGHT_RE = re.compile(r"^q\s*=\s*(\d+(?:\.\d*)?)$")


@dataclass(frozen=True)
class LanguageRange:
    """A single weighted language range such as ``en-US;q=0.8``."""

    range: str
    weight: float = 1.0

    def __post_init__(self) -> None:
        normalized = self.range.strip().lower()
        if not _RANGE_RE.match(normalized):
            raise ValueError(f"Invalid language range: {self.range!r}")
        if not 0.0 <= self.weight <= 1.0:
            raise ValueError(f"Weight out of range [0, 1]: {self.weight}")
        object.__setattr__(self, "range", normalized)

    @property
    def subtags(self) -> list[str]:
        return self.range.split("-")

    @classmethod
    def parse(cls, header: str) -> list[LanguageRange]:
        """Parse an ``Accept-Language`` style list into ranges.

        Entries are returned by descending weight; entries with equal weight
        keep their header order.  ``q=0`` entries mean "not acceptable" and
        are dropped, as are repeated ranges.

        Raises:
            ValueError: If any entry is malformed.
        """
        parsed: list[LanguageRange] = []
        seen: set[str] = set()

        for entry in header.split(","):
            entry = entry.strip()
            if not entry:
                continue

            tag, _, params = entry.partition(";")
            weight = 1.0
            if params:
                match = _WEIGHT_RE.match(params.strip().lower())
                if match is None:
                    raise ValueError(f"Invalid weight in language range: {entry!r}")
                weight = float(match.group(1))

            language_range = cls(tag, weight)
            if language_range.weight == 0.0 or language_range.range in seen:
                continue
            seen.add(language_range.range)
            parsed.append(language_range)

        # sorted() is stable, so equal weights keep header order
        return sorted(parsed, key=lambda r: r.weight, reverse=True)


def parse_accept_language(header: str | None) -> list[LanguageRange]:
    """Lenient :meth:`LanguageRange.parse`: absent or malformed input yields ``[]``."""
    if not header or not header.strip():
        return []
    try:
        return LanguageRange.parse(header)
    except ValueError:
        return []


def matches_extended(language_range: LanguageRange | str, locale: Locale) -> bool:
    """RFC 4647 §3.3.2 extended filtering of a single tag against a single range."""
    range_subtags = (
        language_range.subtags if isinstance(language_range, LanguageRange) else language_range.lower().split("-")
    )
    tag_subtags = [s.lower() for s in locale.subtags()]

    if range_subtags[0] != WILDCARD and range_subtags[0] != tag_subtags[0]:
        return False

    r, t = 1, 1
    while r < len(range_subtags):
        if range_subtags[r] == WILDCARD:
            r += 1
        elif t >= len(tag_subtags):
            return False
        elif range_subtags[r] == tag_subtags[t]:
            r += 1
            t += 1
        elif len(tag_subtags[t]) == 1:
            # singletons (extensions, private use) are never skipped over
            return False
        else:
            t += 1
    return True


def filter_locales(ranges: Sequence[LanguageRange], locales: Iterable[Locale]) -> list[Locale]:
    """All *locales* matching any of *ranges*, ordered by range preference."""
    candidates = list(locales)
    result: list[Locale] = []
    for language_range in ranges:
        for locale in candidates:
            if locale not in result and matches_extended(language_range, locale):
                result.append(locale)
    return result


def lookup_locale(ranges: Sequence[LanguageRange], locales: Iterable[Locale]) -> Locale | None:
    """RFC 4647 §3.4 lookup: the best single exact match after truncation.

    The wildcard range ``*`` is ignored; a ``*`` subtag inside a range
    matches any single subtag.
    """
    candidates = [(locale, [s.lower() for s in locale.subtags()]) for locale in locales]

    for language_range in ranges:
        if language_range.range == WILDCARD:
            continue

        subtags = language_range.subtags
        while subtags:
            for locale, tag_subtags in candidates:
                if _matches_exactly(subtags, tag_subtags):
                    return locale
            subtags = subtags[:-1]
            if subtags and len(subtags[-1]) == 1:
                subtags = subtags[:-1]
    return None


def _matches_exactly(range_subtags: list[str], tag_subtags: list[str]) -> bool:
    if len(range_subtags) != len(tag_subtags):
        return False
    return all(r == WILDCARD or r == t for r, t in zip(range_subtags, tag_subtags))
