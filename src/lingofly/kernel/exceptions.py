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
"""Unified exception hierarchy for Lingofly.

All library exceptions inherit from LingoflyException, enabling unified
error handling across modules.

Categories:
- ConfigurationException: invalid startup configuration (fatal)
- EmptyKeyGeneratorException: a key generator produced no keys (programmer error)
- MessageNotFoundException: no candidate key resolved for a locale
- BundleUnavailableException: no resource bundle exists for a locale at all
"""

from __future__ import annotations

from typing import Any


# =============================================================================
# Base Exception
# =============================================================================


class LingoflyException(Exception):
    """Base exception for all Lingofly errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "I18N_MESSAGE_NOT_FOUND").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Startup Exceptions
# =============================================================================


class ConfigurationException(LingoflyException):
    """Invalid configuration detected while building the i18n setup.

    Raised eagerly at construction time so that a misconfigured
    application fails to start instead of failing per request.
    """

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="I18N_CONFIGURATION", context=context)


class EmptyKeyGeneratorException(LingoflyException):
    """A key generator yielded no keys."""

    def __init__(self, message: str = "at least one key must be present") -> None:
        super().__init__(message, code="I18N_EMPTY_KEY_GENERATOR")


# =============================================================================
# Resolution Exceptions
# =============================================================================


class MessageNotFoundException(LingoflyException):
    """No candidate key resolved in the bundle chain of a locale.

    ``locale`` and ``key`` describe the *first* lookup that was attempted,
    i.e. the most specific key of the generator.
    """

    def __init__(self, locale: Any, key: str) -> None:
        super().__init__(
            f"Can't find resource for key '{key}' in locale '{locale}'",
            code="I18N_MESSAGE_NOT_FOUND",
            context={"locale": str(locale), "key": key},
        )
        self.locale = locale
        self.key = key


class BundleUnavailableException(LingoflyException):
    """No resource bundle could be located for a locale."""

    def __init__(self, locale: Any, base_name: str) -> None:
        super().__init__(
            f"Can't find bundle for base name '{base_name}', locale '{locale}'",
            code="I18N_BUNDLE_UNAVAILABLE",
            context={"locale": str(locale), "base_name": base_name},
        )
        self.locale = locale
        self.base_name = base_name
