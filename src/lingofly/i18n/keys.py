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
"""Key generators: ordered, most-specific-first candidate message keys.

Any re-iterable of strings is a valid key generator; a plain list works::

    i18n.t(locale, ["errors.payment.declined", "errors.payment"])

:class:`DelimitedKeyGenerator` builds the sequence from components, dropping
the last component on each step::

    DelimitedKeyGenerator("key1", "key2", "key3")
    # -> "key1.key2.key3", "key1.key2", "key1"
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from lingofly.kernel.exceptions import EmptyKeyGeneratorException

KeyGenerator = Iterable[str]

DEFAULT_DELIMITER = "."


class DelimitedKeyGenerator:
    """Generates keys by joining a shrinking prefix of *components*.

    ``None`` components are dropped before generation.  Iteration is lazy
    and restartable: every ``iter()`` starts again from the full key.

    Raises:
        EmptyKeyGeneratorException: If no component is present.
    """

    def __init__(self, *components: str | None, delimiter: str = DEFAULT_DELIMITER) -> None:
        self._components: tuple[str, ...] = tuple(c for c in components if c is not None)
        self._delimiter = delimiter
        if not self._components:
            raise EmptyKeyGeneratorException("at least one key component must be present")

    @property
    def components(self) -> tuple[str, ...]:
        return self._components

    def __iter__(self) -> Iterator[str]:
        for count in range(len(self._components), 0, -1):
            yield self._delimiter.join(self._components[:count])

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class R(DelimitedKeyGenerator):
    """The default key generator: a base key plus an optional count.

    ``R("cart.items", 3)`` yields ``cart.items.3`` then ``cart.items``, so a
    bundle can provide a dedicated text for a specific count and a general
    one for everything else.
    """

    def __init__(self, base_key: str, count: int | None = None) -> None:
        super().__init__(base_key, None if count is None else str(count))


def keys_of(*keys: str) -> KeyGenerator:
    """An explicit key list, tried in the given order."""
    return tuple(keys)
