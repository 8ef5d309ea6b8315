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
"""I18n configuration properties bound from ``lingofly.i18n.*``."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from lingofly.core.config import Config, config_properties
from lingofly.i18n.adapters.resource_bundle import DEFAULT_BASE_NAME
from lingofly.i18n.negotiation import (
    DEFAULT_COOKIE_MAX_AGE,
    DEFAULT_COOKIE_NAME,
    ExcludePredicate,
    LocaleConfig,
    exclude_prefixes,
)
from lingofly.kernel.exceptions import ConfigurationException

PREFIX = "lingofly.i18n"


def _kebab(name: str) -> str:
    return name.replace("_", "-")


@config_properties(prefix=PREFIX)
class I18nProperties(BaseModel):
    """Raw i18n settings as written in ``lingofly.yaml``.

    Keys use kebab-case in files (``supported-locales``) and may be
    overridden by environment variables (``LINGOFLY_I18N_SUPPORTED_LOCALES=en,ar``).
    """

    model_config = ConfigDict(alias_generator=_kebab, populate_by_name=True, extra="ignore")

    supported_locales: list[str] = Field(default_factory=list)
    default_locale: str | None = None
    use_of_cookie: bool = False
    cookie_name: str = DEFAULT_COOKIE_NAME
    cookie_max_age: int = DEFAULT_COOKIE_MAX_AGE
    use_of_redirection: bool = False
    exclude_prefixes: list[str] = Field(default_factory=list)
    validate_cookie: bool = False
    base_name: str = DEFAULT_BASE_NAME
    base_path: str = "."
    format_cache_size: int | None = Field(default=None, gt=0)

    @field_validator("supported_locales", "exclude_prefixes", mode="before")
    @classmethod
    def _split_csv(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @field_validator("default_locale", "format_cache_size", mode="before")
    @classmethod
    def _blank_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_config(cls, config: Config) -> I18nProperties:
        """Read every property through :meth:`Config.get`, honouring env overrides.

        Raises:
            ConfigurationException: If a value has the wrong type.
        """
        raw: dict[str, Any] = {}
        for name in cls.model_fields:
            value = config.get(f"{PREFIX}.{_kebab(name)}")
            if value is not None:
                raw[name] = value
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise ConfigurationException(f"Invalid i18n configuration:\n{exc}") from exc

    def to_locale_config(self, extra_predicates: Sequence[ExcludePredicate] = ()) -> LocaleConfig:
        """Validate into a :class:`LocaleConfig`.

        Raises:
            ConfigurationException: On empty or inconsistent locales.
        """
        return LocaleConfig(
            supported_locales=tuple(self.supported_locales),  # type: ignore[arg-type]
            default_locale=self.default_locale,  # type: ignore[arg-type]
            use_of_cookie=self.use_of_cookie,
            cookie_name=self.cookie_name,
            cookie_max_age=self.cookie_max_age,
            use_of_redirection=self.use_of_redirection,
            exclude_predicates=(*exclude_prefixes(*self.exclude_prefixes), *extra_predicates),
            validate_cookie=self.validate_cookie,
        )
