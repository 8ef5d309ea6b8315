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
"""Tests for I18nProperties binding and the I18n facade."""

import logging
from pathlib import Path
from typing import Any

import pytest
import structlog

from lingofly.core.config import Config
from lingofly.i18n.adapters.in_memory import InMemoryBundleProvider
from lingofly.i18n.adapters.resource_bundle import ResourceBundleProvider
from lingofly.i18n.keys import R
from lingofly.i18n.negotiation import build_config
from lingofly.i18n.plugin import I18n
from lingofly.i18n.properties import I18nProperties
from lingofly.i18n.types import Locale
from lingofly.kernel.exceptions import ConfigurationException
from lingofly.logging.port import LoggingPort

EN = Locale("en")
AR = Locale("ar")


class RecordingLogging:
    def __init__(self) -> None:
        self.configured: list[Config] = []

    def configure(self, config: Config) -> None:
        self.configured.append(config)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        pass


@pytest.fixture
def _restore_logging():
    yield
    structlog.reset_defaults()
    logging.getLogger().setLevel(logging.WARNING)
    logging.getLogger("lingofly.i18n").setLevel(logging.NOTSET)


def _config(**i18n) -> Config:
    return Config({"lingofly": {"i18n": i18n}})


class TestI18nProperties:
    def test_kebab_case_keys(self):
        props = I18nProperties.from_config(
            _config(**{"supported-locales": ["en", "ar"], "use-of-cookie": True, "cookie-max-age": 60})
        )
        assert props.supported_locales == ["en", "ar"]
        assert props.use_of_cookie is True
        assert props.cookie_max_age == 60

    def test_defaults(self):
        props = I18nProperties.from_config(Config.from_sources("/nonexistent"))
        assert props.supported_locales == []
        assert props.default_locale is None
        assert props.cookie_name == "locale"
        assert props.base_name == "i18n.Messages"
        assert props.format_cache_size is None

    def test_bind_via_config(self):
        props = _config(**{"supported-locales": ["en"], "validate-cookie": True}).bind(I18nProperties)
        assert props.validate_cookie is True

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("LINGOFLY_I18N_SUPPORTED_LOCALES", "en, ar ,de")
        monkeypatch.setenv("LINGOFLY_I18N_USE_OF_REDIRECTION", "true")
        monkeypatch.setenv("LINGOFLY_I18N_FORMAT_CACHE_SIZE", "128")
        props = I18nProperties.from_config(_config(**{"supported-locales": ["fr"]}))
        assert props.supported_locales == ["en", "ar", "de"]
        assert props.use_of_redirection is True
        assert props.format_cache_size == 128

    def test_wrong_type_raises_configuration_exception(self):
        with pytest.raises(ConfigurationException):
            I18nProperties.from_config(_config(**{"cookie-max-age": "an hour"}))

    def test_to_locale_config(self):
        props = I18nProperties(supported_locales=["en", "ar"], default_locale="ar", exclude_prefixes=["/static"])
        config = props.to_locale_config()
        assert config.supported_locales == (EN, AR)
        assert config.default_locale == AR
        assert len(config.exclude_predicates) == 1

    def test_empty_supported_locales_rejected(self):
        with pytest.raises(ConfigurationException):
            I18nProperties().to_locale_config()


class TestI18nFacade:
    def test_default_locale_defaults_to_first_supported(self):
        i18n = I18n(build_config(["en", "ar"]), InMemoryBundleProvider({"en": {}}))
        assert i18n.default_locale == EN
        assert i18n.supported_locales == (EN, AR)

    def test_translates(self):
        provider = InMemoryBundleProvider({"en": {"hello": "Hello, {0}!", "bye": "Bye"}})
        i18n = I18n(build_config(["en"]), provider)
        assert i18n.t(EN, R("hello"), "Ayman") == "Hello, Ayman!"
        assert i18n.t("en", ["bye"]) == "Bye"
        assert i18n.get_message_or_default(EN, ["nope"], "default") == "default"

    def test_default_provider_is_resource_bundle(self):
        i18n = I18n(build_config(["en", "ar"], "ar"))
        assert isinstance(i18n.resolver.provider, ResourceBundleProvider)
        assert i18n.resolver.provider.fallback_locale == AR

    def test_from_config(self, bundle_dir: Path):
        logs = RecordingLogging()
        config = _config(
            **{
                "supported-locales": ["en", "ar"],
                "default-locale": "en",
                "base-name": "i18n.TestBundle",
                "base-path": str(bundle_dir),
                "format-cache-size": 10,
            }
        )
        i18n = I18n.from_config(config, logging_port=logs)
        assert logs.configured == [config]
        assert i18n.t(AR, ["test"]) == "رسالة اختبار"
        assert i18n.t(Locale("fr"), ["defaultKey"]) == "default key"
        assert i18n.resolver.format_cache.max_size == 10

    def test_from_config_without_locales(self):
        with pytest.raises(ConfigurationException, match="must not be empty"):
            I18n.from_config(Config.from_sources("/nonexistent"), logging_port=RecordingLogging())

    def test_from_config_default_not_supported(self):
        with pytest.raises(ConfigurationException):
            I18n.from_config(
                _config(**{"supported-locales": ["en", "de"], "default-locale": "ar"}),
                logging_port=RecordingLogging(),
            )

    @pytest.mark.parametrize("size", [0, -5])
    def test_from_config_rejects_non_positive_cache_size(self, size: int):
        config = _config(**{"supported-locales": ["en"], "format-cache-size": size})
        with pytest.raises(ConfigurationException, match="format_cache_size|format-cache-size"):
            I18n.from_config(config, logging_port=RecordingLogging())

    def test_cache_size_from_env_must_be_positive(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("LINGOFLY_I18N_FORMAT_CACHE_SIZE", "0")
        with pytest.raises(ConfigurationException):
            I18nProperties.from_config(_config(**{"supported-locales": ["en"]}))


class TestI18nLoggingSetup:
    def test_recording_port_conforms(self):
        assert isinstance(RecordingLogging(), LoggingPort)

    @pytest.mark.usefixtures("_restore_logging")
    def test_from_config_applies_logging_levels(self):
        config = Config(
            {
                "lingofly": {
                    "logging": {"level": {"root": "WARNING", "lingofly.i18n": "DEBUG"}},
                    "i18n": {"supported-locales": ["en"]},
                }
            }
        )
        I18n.from_config(config, provider=InMemoryBundleProvider({"en": {}}))
        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger("lingofly.i18n").level == logging.DEBUG

    @pytest.mark.usefixtures("_restore_logging")
    def test_invalid_logging_settings_fail_startup(self):
        config = Config({"lingofly": {"logging": {"format": "xml"}, "i18n": {"supported-locales": ["en"]}}})
        with pytest.raises(ConfigurationException, match="log format"):
            I18n.from_config(config, provider=InMemoryBundleProvider({"en": {}}))
