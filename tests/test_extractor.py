"""Tests for strategy routing, quality gating and fallbacks."""

import pytest

from article_extractor.browser import BrowserStrategy
from article_extractor.config import ExtractConfig
from article_extractor.errors import FetchError, InvalidURL
from article_extractor.extractor import Extractor
from article_extractor.fallback import FALLBACK_EXCERPT
from article_extractor.models import ExtractionResult
from article_extractor.static import StaticStrategy
from article_extractor.utils import parse_article_url

from .conftest import FakePage, FakePlaywright, FakeResponse, FakeSession

ZHIHU_URL = "https://zhuanlan.zhihu.com/p/very-long-article-slug-here"


class RecordingStrategy:
    def __init__(self, name, outcome=None, ok=True, error=None, self_assessed=False, handles=True):
        self.name = name
        self.outcome = outcome
        self.ok = ok
        self.error = error
        self.self_assessed = self_assessed
        self._handles = handles
        self.calls = []

    def handles(self, url):
        return self._handles

    async def attempt(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.outcome or ExtractionResult(url=url), self.ok


def _good(url, title="Good Title"):
    return ExtractionResult(url=url, title=title, content="Readable article body text. " * 10)


def _html(words, title="Test"):
    return f"<title>{title}</title><body><article>{' '.join(words)}</article></body>"


class TestInvalidUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "",
            "   ",
            "example.com/article",
            "/relative/path",
            "ftp://example.com/file",
            "http://",
            "http://[::1",
            "http://exa mple.com/a",
            "http://exa<mple.com/",
            "http://a..b/",
        ],
    )
    async def test_rejected_without_network(self, url):
        static = RecordingStrategy("static")
        browser = RecordingStrategy("browser")
        with pytest.raises(InvalidURL):
            await Extractor(static=static, browser=browser).extract(url)
        assert static.calls == [] and browser.calls == []

    @pytest.mark.parametrize(
        "url",
        ["https://例子.测试/文章", "http://[::1]:8080/a", "https://Example.COM/Post"],
    )
    def test_unusual_but_valid_hosts_accepted(self, url):
        assert parse_article_url(url).hostname


class TestRouting:
    async def test_plain_host_skips_browser(self):
        url = "https://example.com/post"
        static = RecordingStrategy("static", _good(url))
        browser = RecordingStrategy("browser", handles=False)
        result = await Extractor(static=static, browser=browser).extract(url)
        assert result.title == "Good Title"
        assert browser.calls == []

    async def test_browser_success_returns_immediately(self):
        browser = RecordingStrategy("browser", _good(ZHIHU_URL, "From Browser"), self_assessed=True)
        static = RecordingStrategy("static")
        result = await Extractor(static=static, browser=browser).extract(ZHIHU_URL)
        assert result.title == "From Browser"
        assert static.calls == []

    async def test_browser_failure_falls_through_to_static(self):
        browser = RecordingStrategy("browser", ok=False, self_assessed=True)
        static = RecordingStrategy("static", _good(ZHIHU_URL, "From Static"))
        result = await Extractor(static=static, browser=browser).extract(ZHIHU_URL)
        assert result.title == "From Static"
        assert browser.calls == [ZHIHU_URL] and static.calls == [ZHIHU_URL]


class TestQualityGate:
    async def test_low_quality_static_result_replaced(self):
        url = "https://example.com/very-long-article-slug-here"
        poor = ExtractionResult(url=url, title="Hi", content="Loading...")
        static = RecordingStrategy("static", poor)
        result = await Extractor(static=static, browser=RecordingStrategy("browser", handles=False)).extract(url)
        assert result is not poor
        assert result.title == "Very Long Article Slug Here"
        assert result.excerpt == FALLBACK_EXCERPT

    async def test_fetch_error_surfaces_without_browser_attempt(self):
        static = RecordingStrategy("static", error=FetchError("boom"))
        extractor = Extractor(static=static, browser=RecordingStrategy("browser", handles=False))
        with pytest.raises(FetchError):
            await extractor.extract("https://example.com/post")

    async def test_fetch_error_after_browser_attempt_degrades(self):
        browser = RecordingStrategy("browser", ok=False, self_assessed=True)
        static = RecordingStrategy("static", error=FetchError("boom"))
        result = await Extractor(static=static, browser=browser).extract(ZHIHU_URL)
        assert result.title == "Very Long Article Slug Here"


class TestEndToEnd:
    async def test_static_page(self, article_words):
        config = ExtractConfig()
        static = StaticStrategy(config, session=FakeSession(FakeResponse(_html(article_words))))
        result = await Extractor(config, static=static).extract("https://example.com/post")
        assert result.title == "Test"
        assert "juliet" in result.content

    async def test_browser_timeout_falls_through_to_static(self, article_words):
        config = ExtractConfig(browser_timeout=0.05, settle_delay=0, content_wait=0, extra_wait=0)
        playwright = FakePlaywright(FakePage(goto_delay=1.0))
        browser = BrowserStrategy(config, playwright_factory=playwright)
        static = StaticStrategy(config, session=FakeSession(FakeResponse(_html(article_words))))
        result = await Extractor(config, static=static, browser=browser).extract(ZHIHU_URL)
        assert result.title == "Test"
        assert "alpha" in result.content
        assert playwright.browser.closed is True

    async def test_browser_timeout_then_poor_static_page(self):
        config = ExtractConfig(browser_timeout=0.05, settle_delay=0, content_wait=0, extra_wait=0)
        browser = BrowserStrategy(config, playwright_factory=FakePlaywright(FakePage(goto_delay=1.0)))
        html = "<title>知乎</title><body><p>当前环境异常，完成验证后即可继续访问。</p></body>"
        static = StaticStrategy(config, session=FakeSession(FakeResponse(html)))
        result = await Extractor(config, static=static, browser=browser).extract(ZHIHU_URL)
        assert result.title == "Very Long Article Slug Here"
        assert ZHIHU_URL in result.content
