"""Tests for site profile classification."""

from article_extractor.sites import (
    GENERIC,
    WECHAT,
    ZHIHU,
    classify_site,
    needs_browser,
)


class TestClassifySite:
    def test_wechat(self):
        assert classify_site("https://mp.weixin.qq.com/s/abc123") is WECHAT

    def test_zhihu_column(self):
        assert classify_site("https://zhuanlan.zhihu.com/p/123456") is ZHIHU

    def test_zhihu_question(self):
        assert classify_site("https://www.zhihu.com/question/1/answer/2") is ZHIHU

    def test_generic(self):
        assert classify_site("https://example.com/blog/post") is GENERIC
        assert needs_browser(GENERIC) is False

    def test_host_only_not_path(self):
        assert classify_site("https://example.com/zhihu.com/copy") is GENERIC

    def test_extra_browser_domain(self):
        profile = classify_site("https://medium.com/@x/post", extra_domains=["Medium.com"])
        assert profile.name == "browser"
        assert profile.candidate_selectors == GENERIC.candidate_selectors
        assert needs_browser(profile) is True


class TestSiteProfile:
    def test_ranked_wait_selectors(self):
        ranked = ZHIHU.ranked_wait_selectors
        assert ranked[0] == ".Post-RichTextContainer"
        assert ranked[-5:] == ("article", "main", ".content", ".article-content", "h1")

    def test_generic_wait_selectors_not_duplicated(self):
        assert GENERIC.ranked_wait_selectors == GENERIC.wait_selectors

    def test_script_args(self):
        args = WECHAT.script_args()
        assert args["selectors"][0] == ".rich_media_content"
        assert ".rich_media_tool" in args["strip"]
        assert args["minLength"] == 100
        assert args["bodyFallback"] is False
        assert GENERIC.script_args()["bodyFallback"] is True
