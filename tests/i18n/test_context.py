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
"""Tests for the request-scoped LocaleContext."""

from types import SimpleNamespace

import pytest

from lingofly.i18n.context import (
    LOCALE_CONTEXT_ATTR,
    LocaleContext,
    RequestSignalSource,
    SignalSource,
    get_locale,
    locale_context,
    read_signals,
    t,
)
from lingofly.i18n.negotiation import CookieWrite, LocaleNegotiator, RequestSignals, build_config
from lingofly.i18n.resolver import BundleMessageResolver
from lingofly.i18n.types import Locale
from lingofly.kernel.exceptions import LingoflyException


class StubSource:
    def __init__(self, path_prefix=None, cookie=None, header=None) -> None:
        self.path_prefix = path_prefix
        self.cookie = cookie
        self.header = header
        self.reads = 0

    def read_path_prefix(self):
        self.reads += 1
        return self.path_prefix

    def read_cookie(self, name):
        return self.cookie

    def read_header(self, name):
        return self.header


class CountingNegotiator(LocaleNegotiator):
    def __init__(self, config) -> None:
        super().__init__(config)
        self.calls = 0

    def negotiate(self, signals: RequestSignals):
        self.calls += 1
        return super().negotiate(signals)


def _fake_request(path="/", cookies=None, headers=None, ctx=None) -> SimpleNamespace:
    state = SimpleNamespace()
    if ctx is not None:
        setattr(state, LOCALE_CONTEXT_ATTR, ctx)
    return SimpleNamespace(url=SimpleNamespace(path=path), cookies=cookies or {}, headers=headers or {}, state=state)


class TestRequestSignalSource:
    def test_reads_request(self):
        request = _fake_request("/ar/about", {"locale": "de"}, {"Accept-Language": "en"})
        source = RequestSignalSource(request)
        assert isinstance(source, SignalSource)
        assert read_signals(source, "locale") == RequestSignals(path_prefix="ar", cookie="de", accept_language="en")

    def test_root_path_has_no_prefix(self):
        assert RequestSignalSource(_fake_request("/")).read_path_prefix() is None


class TestLocaleContext:
    def test_negotiates_once(self):
        negotiator = CountingNegotiator(build_config(["en", "ar"]))
        source = StubSource(header="ar")
        ctx = LocaleContext(negotiator, source)
        assert not ctx.is_resolved
        assert ctx.locale == Locale("ar")
        assert ctx.locale == Locale("ar")
        assert ctx.is_resolved
        assert negotiator.calls == 1
        assert source.reads == 1

    def test_take_cookie_once(self):
        negotiator = LocaleNegotiator(build_config(["en", "ar"], use_of_cookie=True))
        ctx = LocaleContext(negotiator, StubSource(header="ar"))
        assert ctx.take_cookie() is None
        _ = ctx.locale
        assert ctx.take_cookie() == CookieWrite("locale", "ar", 3600)
        assert ctx.take_cookie() is None

    def test_t_uses_request_locale(self, provider):
        negotiator = LocaleNegotiator(build_config(["en", "ar"]))
        ctx = LocaleContext(negotiator, StubSource(header="ar"), BundleMessageResolver(provider))
        assert ctx.t(["test"]) == "رسالة اختبار"

    def test_t_without_resolver(self):
        ctx = LocaleContext(LocaleNegotiator(build_config(["en"])), StubSource())
        with pytest.raises(LingoflyException) as exc_info:
            ctx.t(["test"])
        assert exc_info.value.code == "I18N_NO_RESOLVER"


class TestRequestHelpers:
    def test_get_locale_and_t(self, provider):
        negotiator = LocaleNegotiator(build_config(["en", "de"]))
        ctx = LocaleContext(negotiator, StubSource(header="de"), BundleMessageResolver(provider))
        request = _fake_request(ctx=ctx)
        assert locale_context(request) is ctx
        assert get_locale(request) == Locale("de")
        assert t(request, ["test"]) == "test nachricht"

    def test_not_installed(self):
        with pytest.raises(LingoflyException) as exc_info:
            get_locale(_fake_request())
        assert exc_info.value.code == "I18N_NOT_INSTALLED"
