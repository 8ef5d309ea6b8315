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
"""Shared fixtures for i18n tests."""

from pathlib import Path

import pytest

from lingofly.i18n.adapters.in_memory import InMemoryBundleProvider
from lingofly.i18n.types import Locale

MESSAGES = {
    "": {
        "defaultKey": "default key",
        "bundleName": "test bundle",
    },
    "en": {
        "test": "test message",
        "testKey1": "test key 1",
        "testKey2": "test key 2",
        "formatKey": "this {0} is correctly {1}",
        "noPlaceholders": "plain text",
    },
    "ar": {"test": "رسالة اختبار"},
    "de": {"test": "test nachricht"},
}


@pytest.fixture
def provider() -> InMemoryBundleProvider:
    return InMemoryBundleProvider(MESSAGES, fallback_locale=Locale("en"))


@pytest.fixture
def bundle_dir(tmp_path: Path) -> Path:
    """A directory holding ``i18n/TestBundle*`` files in several formats."""
    root = tmp_path / "i18n"
    root.mkdir()
    (root / "TestBundle.properties").write_text(
        "# base bundle\ndefaultKey = default key\nbundleName=test bundle\n",
        encoding="utf-8",
    )
    (root / "TestBundle_en.properties").write_text(
        "test=test message\n"
        "testKey1=test key 1\n"
        "testKey2: test key 2\n"
        "formatKey=this {0} is correctly {1}\n",
        encoding="utf-8",
    )
    (root / "TestBundle_ar.properties").write_text("test=رسالة اختبار\n", encoding="utf-8")
    (root / "TestBundle_de.yaml").write_text("test: test nachricht\nnested:\n  key: verschachtelt\n", encoding="utf-8")
    (root / "TestBundle_en_GB.json").write_text('{"testKey2": "test key two", "colour": {"name": "colour"}}')
    return tmp_path
