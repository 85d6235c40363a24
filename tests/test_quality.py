"""Tests for the low-quality gate."""

from article_extractor.models import ExtractionResult
from article_extractor.quality import is_low_quality


def _result(title="A Proper Title", content=""):
    return ExtractionResult(url="https://example.com/a", title=title, content=content)


class TestIsLowQuality:
    def test_short_title(self):
        assert is_low_quality(_result(title=" ab ", content="x" * 500)) is True

    def test_short_content(self):
        assert is_low_quality(_result(content="  too short  ")) is True

    def test_good_article(self):
        content = "This is a perfectly ordinary paragraph of article text. " * 5
        assert is_low_quality(_result(content=content)) is False

    def test_loading_marker_on_short_page(self):
        content = "Loading the article for you, please wait a few moments while we prepare"
        assert is_low_quality(_result(content=content)) is True

    def test_chinese_verification_marker(self):
        content = "当前环境异常，完成验证后即可继续访问。" + "请" * 40
        assert is_low_quality(_result(content=content)) is True

    def test_marker_ignored_on_long_article(self):
        content = ("A long essay about HTTP status codes such as 404 and 403. " * 10).strip()
        assert len(content) >= 200
        assert is_low_quality(_result(content=content)) is False

    def test_marker_is_case_insensitive(self):
        content = "ACCESS DENIED for this resource, contact the site administrator please."
        assert is_low_quality(_result(content=content)) is True
