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
"""Tests for StructlogAdapter."""

import logging

import pytest
import structlog

from lingofly.core.config import Config
from lingofly.kernel.exceptions import ConfigurationException
from lingofly.logging.structlog_adapter import StructlogAdapter


def _logging(**section) -> Config:
    return Config({"lingofly": {"logging": section}})


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
    logging.getLogger().setLevel(logging.WARNING)
    for name in ("lingofly.i18n", "lingofly.web", "lingofly.other"):
        logging.getLogger(name).setLevel(logging.NOTSET)


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter.root_level == "INFO"
        assert adapter.renderer == "console"

    def test_configure_reads_packaged_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config.from_sources("/nonexistent"))
        assert adapter.root_level == "INFO"
        assert adapter.renderer == "console"
        assert adapter.logger_levels == {}

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter()
        adapter.configure(_logging(level={"root": "debug"}))
        assert adapter.root_level == "DEBUG"
        assert logging.getLogger().level == logging.DEBUG

    def test_configure_reads_json_format(self):
        adapter = StructlogAdapter()
        adapter.configure(_logging(format="JSON"))
        assert adapter.renderer == "json"

    def test_configure_applies_per_logger_levels(self):
        adapter = StructlogAdapter()
        adapter.configure(_logging(level={"root": "INFO", "lingofly.i18n": "DEBUG"}))
        assert adapter.logger_levels == {"lingofly.i18n": "DEBUG"}
        assert logging.getLogger("lingofly.i18n").level == logging.DEBUG

    def test_unknown_format_rejected(self):
        with pytest.raises(ConfigurationException, match="log format"):
            StructlogAdapter().configure(_logging(format="xml"))

    def test_unknown_root_level_rejected(self):
        with pytest.raises(ConfigurationException, match="log level"):
            StructlogAdapter().configure(_logging(level={"root": "CHATTY"}))

    def test_failed_configure_keeps_previous_settings(self):
        adapter = StructlogAdapter()
        adapter.configure(_logging(format="json"))
        with pytest.raises(ConfigurationException):
            adapter.configure(_logging(format="xml"))
        assert adapter.renderer == "json"


class TestStructlogAdapterLoggers:
    def test_get_logger_has_log_methods(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        logger = adapter.get_logger("lingofly.test")
        assert callable(getattr(logger, "info", None))
        assert callable(getattr(logger, "debug", None))

    def test_set_level(self):
        adapter = StructlogAdapter()
        adapter.set_level("lingofly.web", "warning")
        assert logging.getLogger("lingofly.web").level == logging.WARNING

    def test_unknown_level_rejected(self):
        with pytest.raises(ConfigurationException):
            StructlogAdapter().set_level("lingofly.other", "CHATTY")
        assert logging.getLogger("lingofly.other").level == logging.NOTSET
