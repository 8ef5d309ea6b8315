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
"""Resource-bundle provider: loads templates from locale-suffixed UTF-8 files.

File naming convention for the base name ``i18n.Messages``::

    {base_path}/i18n/Messages_{suffix}.properties   (preferred)
    {base_path}/i18n/Messages_{suffix}.yaml / .yml
    {base_path}/i18n/Messages_{suffix}.json
    {base_path}/i18n/Messages.properties            (base bundle)

where ``suffix`` is built from the locale's subtags joined by ``_``
(``en_US``, ``zh_Hant_TW``).  A lookup for ``en-US`` walks the bundles
``Messages_en_US`` → ``Messages_en`` → ``Messages`` and returns the first
hit, so a regional bundle only needs to hold the keys it overrides.

Nested YAML/JSON keys are flattened with dots, so::

    greeting:
      hello: "Hello, {0}!"

is looked up as ``greeting.hello``.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
import yaml  # type: ignore[import-untyped]

from lingofly.i18n.adapters.bundle_chain import Bundle, BundleChainProvider
from lingofly.i18n.types import Locale

logger = structlog.get_logger("lingofly.i18n")

DEFAULT_BASE_NAME = "i18n.Messages"

_EXTENSIONS = (".properties", ".yaml", ".yml", ".json")

_MISSING: dict[str, str] = {}


class ResourceBundleProvider(BundleChainProvider):
    """Bundle provider reading ``.properties``, YAML or JSON files from disk.

    Loaded bundles are cached for the lifetime of the provider; a bundle
    file is read at most once even under concurrent first access.

    Args:
        base_name: Dotted base resource identifier; dots map to directories.
        base_path: Directory the base name is resolved against.
        fallback_locale: Locale whose bundles are used when the requested
            locale has none of its own (the base bundle still comes last).
    """

    def __init__(
        self,
        base_name: str = DEFAULT_BASE_NAME,
        base_path: str | Path = ".",
        fallback_locale: Locale | None = None,
    ) -> None:
        super().__init__(base_name=base_name, fallback_locale=fallback_locale)
        self._base_path = Path(base_path)
        self._cache: dict[str, dict[str, str]] = {}
        self._lock = threading.Lock()

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _bundle(self, suffix: str) -> Bundle | None:
        with self._lock:
            messages = self._cache.get(suffix)
            if messages is None:
                messages = self._load(suffix)
                self._cache[suffix] = messages
        return messages if messages is not _MISSING else None

    def _load(self, suffix: str) -> dict[str, str]:
        stem = self._base_path.joinpath(*self.base_name.split("."))
        name = f"{stem.name}_{suffix}" if suffix else stem.name

        for ext in _EXTENSIONS:
            path = stem.with_name(name + ext)
            if path.is_file():
                messages = _load_file(path)
                logger.debug("bundle_loaded", path=str(path), size=len(messages))
                return messages
        return _MISSING

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()


def _load_file(path: Path) -> dict[str, str]:
    text = path.read_text(encoding="utf-8")
    if path.suffix == ".properties":
        return parse_properties(text)
    if path.suffix == ".json":
        return flatten(json.loads(text) or {})
    return flatten(yaml.safe_load(text) or {})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def flatten(data: dict[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten a nested dict into dot-separated keys with string values."""
    items: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            items.update(flatten(value, full_key))
        else:
            items[full_key] = str(value)
    return items


_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def parse_properties(text: str) -> dict[str, str]:
    """Parse ``.properties`` content (read as UTF-8).

    Supports ``=``, ``:`` and whitespace key/value separators, ``#`` and
    ``!`` comment lines, backslash line continuations and the ``\\t``,
    ``\\n``, ``\\r``, ``\\f`` and ``\\uXXXX`` escapes.
    """
    result: dict[str, str] = {}
    for line in _logical_lines(text.splitlines()):
        key, value = _split_entry(line)
        result[_unescape(key)] = _unescape(value)
    return result


def _logical_lines(lines: Iterable[str]) -> Iterable[str]:
    buffer = ""
    for raw in lines:
        line = raw.lstrip(" \t\f")
        if not buffer and (not line or line[0] in "#!"):
            continue
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            buffer += line[:-1]
            continue
        yield buffer + line
        buffer = ""
    if buffer:
        yield buffer


def _split_entry(line: str) -> tuple[str, str]:
    i, n = 0, len(line)
    while i < n:
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in "=: \t\f":
            break
        i += 1

    key = line[:i]
    rest = line[i:].lstrip(" \t\f")
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(" \t\f")
    return key, rest


def _unescape(value: str) -> str:
    if "\\" not in value:
        return value
    out: list[str] = []
    i, n = 0, len(value)
    while i < n:
        ch = value[i]
        if ch != "\\" or i + 1 >= n:
            out.append(ch)
            i += 1
            continue
        nxt = value[i + 1]
        if nxt == "u" and i + 6 <= n:
            out.append(chr(int(value[i + 2 : i + 6], 16)))
            i += 6
            continue
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)
