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
"""Locale value type."""

from __future__ import annotations

import re
from dataclasses import dataclass

_LANGUAGE_RE = re.compile(r"^[A-Za-z]{2,8}$")
_SCRIPT_RE = re.compile(r"^[A-Za-z]{4}$")
_REGION_RE = re.compile(r"^(?:[A-Za-z]{2}|[0-9]{3})$")
_VARIANT_RE = re.compile(r"^(?:[A-Za-z0-9]{5,8}|[0-9][A-Za-z0-9]{3})$")


@dataclass(frozen=True, order=True)
class Locale:
    """A language tag split into its normalized subtags.

    Uses IETF BCP 47 case conventions: language lower-case, script
    title-case, region upper-case.  ``str(locale)`` renders the tag with
    ``-`` separators (``en-US``, ``zh-Hant-TW``).
    """

    language: str
    script: str = ""
    region: str = ""
    variant: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "language", self.language.lower())
        object.__setattr__(self, "script", self.script.title())
        object.__setattr__(self, "region", self.region.upper())
        object.__setattr__(self, "variant", self.variant.lower())

    @classmethod
    def parse(cls, tag: str) -> Locale:
        """Parse a BCP 47 (``en-US``) or POSIX-style (``en_US``) tag.

        Raises:
            ValueError: If *tag* is not a well-formed language tag.
        """
        parts = tag.strip().replace("_", "-").split("-")
        if not parts or not _LANGUAGE_RE.match(parts[0]):
            raise ValueError(f"Invalid locale tag: {tag!r}")

        language, rest = parts[0], parts[1:]
        script = region = variant = ""

        if rest and _SCRIPT_RE.match(rest[0]):
            script = rest.pop(0)
        if rest and _REGION_RE.match(rest[0]):
            region = rest.pop(0)
        if rest and _VARIANT_RE.match(rest[0]):
            variant = rest.pop(0)
        if rest:
            raise ValueError(f"Invalid locale tag: {tag!r}")

        return cls(language=language, script=script, region=region, variant=variant)

    @classmethod
    def of(cls, value: Locale | str) -> Locale:
        """Return *value* as a Locale, parsing strings."""
        return value if isinstance(value, Locale) else cls.parse(value)

    @property
    def tag(self) -> str:
        return "-".join(p for p in (self.language, self.script, self.region, self.variant) if p)

    def subtags(self) -> list[str]:
        """Non-empty subtags, most significant first."""
        return [p for p in (self.language, self.script, self.region, self.variant) if p]

    def __str__(self) -> str:
        return self.tag
