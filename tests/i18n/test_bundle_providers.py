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
"""Tests for bundle providers: resource files, in-memory bundles and the parent chain."""

from pathlib import Path

import pytest

from lingofly.i18n.adapters.bundle_chain import candidate_suffixes
from lingofly.i18n.adapters.in_memory import InMemoryBundleProvider
from lingofly.i18n.adapters.resource_bundle import ResourceBundleProvider, flatten, parse_properties
from lingofly.i18n.ports.outbound import BundleProvider
from lingofly.i18n.types import Locale
from lingofly.kernel.exceptions import BundleUnavailableException

EN = Locale("en")


class TestCandidateSuffixes:
    def test_language_only(self):
        assert candidate_suffixes(EN) == ["en"]

    def test_region(self):
        assert candidate_suffixes(Locale.parse("en-GB")) == ["en_GB", "en"]

    def test_script_and_region(self):
        assert candidate_suffixes(Locale.parse("zh-Hant-TW")) == ["zh_Hant_TW", "zh_Hant", "zh_TW", "zh"]

    def test_variant(self):
        assert candidate_suffixes(Locale.parse("de-DE-1996")) == ["de_DE_1996", "de_DE", "de"]


class TestResourceBundleProvider:
    def _provider(self, root: Path, fallback: Locale | None = EN) -> ResourceBundleProvider:
        return ResourceBundleProvider("i18n.TestBundle", base_path=root, fallback_locale=fallback)

    def test_conforms_to_port(self, bundle_dir: Path):
        assert isinstance(self._provider(bundle_dir), BundleProvider)

    def test_reads_utf8_properties(self, bundle_dir: Path):
        assert self._provider(bundle_dir).lookup(Locale("ar"), "test") == "رسالة اختبار"

    def test_resolves_per_locale(self, bundle_dir: Path):
        provider = self._provider(bundle_dir)
        assert provider.lookup(EN, "test") == "test message"
        assert provider.lookup(Locale("de"), "test") == "test nachricht"

    def test_yaml_keys_are_flattened(self, bundle_dir: Path):
        assert self._provider(bundle_dir).lookup(Locale("de"), "nested.key") == "verschachtelt"

    def test_regional_bundle_overrides_language_bundle(self, bundle_dir: Path):
        provider = self._provider(bundle_dir)
        en_gb = Locale.parse("en-GB")
        assert provider.lookup(en_gb, "testKey2") == "test key two"
        assert provider.lookup(en_gb, "testKey1") == "test key 1"
        assert provider.lookup(en_gb, "colour.name") == "colour"

    def test_base_bundle_is_last(self, bundle_dir: Path):
        assert self._provider(bundle_dir).lookup(Locale("ar"), "bundleName") == "test bundle"

    def test_missing_locale_uses_fallback_bundles(self, bundle_dir: Path):
        provider = self._provider(bundle_dir)
        fr = Locale("fr")
        assert provider.lookup(fr, "defaultKey") == "default key"
        assert provider.lookup(fr, "testKey1") == "test key 1"

    def test_missing_key_returns_none(self, bundle_dir: Path):
        assert self._provider(bundle_dir).lookup(EN, "missingKey") is None

    def test_no_bundle_at_all_raises(self, tmp_path: Path):
        provider = ResourceBundleProvider("i18n.Nothing", base_path=tmp_path)
        with pytest.raises(BundleUnavailableException) as exc_info:
            provider.lookup(EN, "anything")
        assert exc_info.value.base_name == "i18n.Nothing"

    def test_bundles_are_cached(self, bundle_dir: Path):
        provider = self._provider(bundle_dir)
        assert provider.lookup(Locale("ar"), "test") == "رسالة اختبار"
        (bundle_dir / "i18n" / "TestBundle_ar.properties").write_text("test=changed\n", encoding="utf-8")
        assert provider.lookup(Locale("ar"), "test") == "رسالة اختبار"
        provider.clear_cache()
        assert provider.lookup(Locale("ar"), "test") == "changed"


class TestInMemoryBundleProvider:
    def test_lookup_and_chain(self):
        provider = InMemoryBundleProvider(
            {"": {"base": "base"}, "en_US": {"k": "us"}, "en": {"k": "en", "only": "en only"}},
        )
        en_us = Locale.parse("en-US")
        assert provider.lookup(en_us, "k") == "us"
        assert provider.lookup(en_us, "only") == "en only"
        assert provider.lookup(en_us, "base") == "base"

    def test_fallback_locale(self):
        provider = InMemoryBundleProvider({"en": {"k": "en"}}, fallback_locale=EN)
        assert provider.lookup(Locale("ja"), "k") == "en"

    def test_without_fallback_raises(self):
        provider = InMemoryBundleProvider({"en": {"k": "en"}})
        with pytest.raises(BundleUnavailableException):
            provider.lookup(Locale("ja"), "k")

    def test_invalid_tag_rejected(self):
        with pytest.raises(ValueError):
            InMemoryBundleProvider({"not a tag": {}})


class TestParseProperties:
    def test_separators_and_comments(self):
        text = "# comment\n! also comment\na=1\nb: 2\nc 3\n  d = 4  \n"
        assert parse_properties(text) == {"a": "1", "b": "2", "c": "3", "d": "4  "}

    def test_line_continuation(self):
        assert parse_properties("long = first \\\n    second\n") == {"long": "first second"}

    def test_escapes(self):
        text = "tab=a\\tb\nunicode=\\u0645\\u0631\\u062d\\u0628\\u0627\nescaped\\ key=v\n"
        assert parse_properties(text) == {"tab": "a\tb", "unicode": "مرحبا", "escaped key": "v"}

    def test_empty_value(self):
        assert parse_properties("empty=\n") == {"empty": ""}

    def test_message_format_quotes_preserved(self):
        assert parse_properties("q=it''s {0}\n") == {"q": "it''s {0}"}


class TestFlatten:
    def test_nested(self):
        assert flatten({"a": {"b": {"c": 1}}, "d": True}) == {"a.b.c": "1", "d": "True"}
