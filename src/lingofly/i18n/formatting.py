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
"""MessageFormat: compiled, locale-aware message templates.

Template syntax::

    Hello, {0}!                      plain positional argument
    {0,number}  {0,number,integer}   locale decimal / integer
    {0,number,percent}               locale percent
    {0,number,currency}              locale currency (needs a region)
    {0,number,#,##0.00}              custom number pattern
    {0,date}  {0,date,long}          date, short|medium|long|full|<pattern>
    {0,time}  {0,time,short}         time, short|medium|long|full|<pattern>

A single quote starts quoted literal text (``'{0}'`` renders ``{0}``) and
``''`` renders one quote.  Numbers and dates follow the conventions of the
format's locale, via Babel.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from babel import Locale as BabelLocale
from babel import dates, numbers
from babel.core import UnknownLocaleError

from lingofly.i18n.types import Locale

_DATE_STYLES = ("short", "medium", "long", "full")


@dataclass(frozen=True)
class _Argument:
    index: int
    type: str | None = None
    style: str | None = None


def to_babel_locale(locale: Locale) -> BabelLocale:
    """Map *locale* to Babel, dropping subtags CLDR does not know, then to ``en``.

    Babel may answer an unknown region with another territory's data, so a
    candidate only counts when its territory and script are the requested ones.
    """
    language, script, region = locale.language, locale.script, locale.region
    candidates = dict.fromkeys(
        [(script, region), (script, ""), ("", region), ("", "")],
    )
    for cand_script, cand_region in candidates:
        identifier = "_".join(part for part in (language, cand_script, cand_region) if part)
        try:
            parsed = BabelLocale.parse(identifier)
        except (UnknownLocaleError, ValueError):
            continue
        if cand_region and parsed.territory != cand_region:
            continue
        if cand_script and parsed.script != cand_script:
            continue
        return parsed
    return BabelLocale("en")


class MessageFormat:
    """A template compiled once for one locale and formatted many times.

    Instances are immutable after construction and safe to share between
    threads.

    Raises:
        ValueError: At construction, if the template is malformed.
    """

    def __init__(self, pattern: str, locale: Locale | str) -> None:
        self._pattern = pattern
        self._locale = Locale.of(locale)
        self._babel_locale = to_babel_locale(self._locale)
        self._segments: tuple[str | _Argument, ...] = tuple(_compile(pattern))
        for segment in self._segments:
            if isinstance(segment, _Argument):
                self._check_argument(segment)

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def locale(self) -> Locale:
        return self._locale

    def format(self, args: Sequence[Any]) -> str:
        """Substitute *args*; unused trailing arguments are ignored.

        A placeholder without a matching argument is rendered as-is.
        """
        out: list[str] = []
        for segment in self._segments:
            if isinstance(segment, str):
                out.append(segment)
            elif segment.index >= len(args):
                out.append(f"{{{segment.index}}}")
            else:
                out.append(self._format_value(segment, args[segment.index]))
        return "".join(out)

    def __repr__(self) -> str:
        return f"MessageFormat({self._pattern!r}, {str(self._locale)!r})"

    def _check_argument(self, arg: _Argument) -> None:
        if arg.type is None:
            return
        if arg.type not in ("number", "date", "time"):
            raise ValueError(f"Unknown format type {arg.type!r} in {self._pattern!r}")
        if arg.type == "number" and arg.style == "currency" and not self._babel_locale.territory:
            raise ValueError(f"Currency format requires a locale with a region, got {self._locale}")

    def _format_value(self, arg: _Argument, value: Any) -> str:
        loc = self._babel_locale

        if arg.type == "number":
            if arg.style is None:
                return numbers.format_decimal(value, locale=loc)
            if arg.style == "integer":
                return numbers.format_decimal(value, format="#,##0", locale=loc)
            if arg.style == "percent":
                return numbers.format_percent(value, locale=loc)
            if arg.style == "currency":
                currency = numbers.get_territory_currencies(loc.territory)[0]
                return numbers.format_currency(value, currency, locale=loc)
            return numbers.format_decimal(value, format=arg.style, locale=loc)

        if arg.type == "date":
            return dates.format_date(value, format=arg.style or "medium", locale=loc)

        if arg.type == "time":
            return dates.format_time(value, format=arg.style or "medium", locale=loc)

        # untyped: pick a sensible default from the runtime type
        if isinstance(value, bool):
            return str(value)
        if isinstance(value, (int, float, Decimal)):
            return numbers.format_decimal(value, locale=loc)
        if isinstance(value, dt.datetime):
            return dates.format_datetime(value, format="short", locale=loc)
        if isinstance(value, dt.date):
            return dates.format_date(value, format="short", locale=loc)
        if isinstance(value, dt.time):
            return dates.format_time(value, format="short", locale=loc)
        return str(value)


def _compile(pattern: str) -> list[str | _Argument]:
    """Split *pattern* into literal text and argument placeholders."""
    segments: list[str | _Argument] = []
    literal: list[str] = []
    i, n = 0, len(pattern)
    quoted = False

    while i < n:
        ch = pattern[i]
        if ch == "'":
            if i + 1 < n and pattern[i + 1] == "'":
                literal.append("'")
                i += 2
                continue
            quoted = not quoted
            i += 1
            continue
        if quoted or ch != "{":
            literal.append(ch)
            i += 1
            continue

        end = _find_closing_brace(pattern, i)
        if literal:
            segments.append("".join(literal))
            literal = []
        segments.append(_parse_argument(pattern[i + 1 : end], pattern))
        i = end + 1

    if literal:
        segments.append("".join(literal))
    return segments


def _find_closing_brace(pattern: str, start: int) -> int:
    depth = 0
    quoted = False
    for i in range(start, len(pattern)):
        ch = pattern[i]
        if ch == "'":
            quoted = not quoted
        elif quoted:
            continue
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    raise ValueError(f"Unmatched braces in the pattern: {pattern!r}")


def _parse_argument(body: str, pattern: str) -> _Argument:
    index_part, _, rest = body.partition(",")
    index_part = index_part.strip()
    if not index_part.isdigit():
        raise ValueError(f"Can't parse argument number {index_part!r} in {pattern!r}")

    if not rest:
        return _Argument(int(index_part))

    type_part, _, style = rest.partition(",")
    type_part = type_part.strip().lower()
    style = style.strip()
    if type_part in ("date", "time") and style.lower() in _DATE_STYLES:
        style = style.lower()
    return _Argument(int(index_part), type_part or None, style or None)
