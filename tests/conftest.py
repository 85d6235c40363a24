"""Shared fakes for the HTTP session and the Playwright browser."""

from __future__ import annotations

import asyncio

import pytest
import requests


class FakeResponse:
    def __init__(self, text="", status_code=200, url=None, encoding="utf-8",
                 content=None, headers=None):
        self.text = text
        self.status_code = status_code
        self.url = url
        self.encoding = encoding
        self.apparent_encoding = "utf-8"
        self.content = content if content is not None else text.encode("utf-8")
        self.headers = headers or {}

    @property
    def ok(self):
        return self.status_code < 400


class FakeSession:
    """Records every GET and answers with a canned response or exception."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers or {}, "timeout": timeout})
        if self.error is not None:
            raise self.error
        response = self.response or FakeResponse()
        if response.url is None:
            response.url = url
        return response

    def close(self):
        self.closed = True


class FakeLocator:
    def __init__(self, visible):
        self._visible = visible

    @property
    def first(self):
        return self

    async def is_visible(self):
        return self._visible


class FakePage:
    def __init__(self, payload=None, visible=(), goto_delay=0.0, goto_error=None):
        self.payload = payload if payload is not None else {}
        self.visible = set(visible)
        self.goto_delay = goto_delay
        self.goto_error = goto_error
        self.visited = []
        self.waits = []
        self.eval_args = None
        self.navigation_timeout = None

    def set_default_navigation_timeout(self, timeout):
        self.navigation_timeout = timeout

    async def goto(self, url, wait_until=None):
        self.visited.append(url)
        if self.goto_delay:
            await asyncio.sleep(self.goto_delay)
        if self.goto_error is not None:
            raise self.goto_error

    async def wait_for_timeout(self, timeout):
        self.waits.append(timeout)

    def locator(self, selector):
        return FakeLocator(selector in self.visible)

    async def evaluate(self, script, arg=None):
        self.eval_args = arg
        return self.payload


class FakeBrowserContext:
    def __init__(self, page):
        self.page = page

    async def new_page(self):
        return self.page


class FakeChromiumBrowser:
    def __init__(self, page):
        self.page = page
        self.closed = False
        self.user_agent = None

    async def new_context(self, user_agent=None):
        self.user_agent = user_agent
        return FakeBrowserContext(self.page)

    async def close(self):
        self.closed = True


class FakeChromium:
    def __init__(self, browser, launch_error=None):
        self.browser = browser
        self.launch_error = launch_error
        self.launch_kwargs = None
        self.launches = 0

    async def launch(self, **kwargs):
        self.launches += 1
        self.launch_kwargs = kwargs
        if self.launch_error is not None:
            raise self.launch_error
        return self.browser


class FakePlaywright:
    """Stands in for ``async_playwright`` as an async context manager factory."""

    def __init__(self, page=None, launch_error=None):
        self.page = page or FakePage()
        self.browser = FakeChromiumBrowser(self.page)
        self.chromium = FakeChromium(self.browser, launch_error=launch_error)

    def __call__(self):
        return self

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


@pytest.fixture
def article_words():
    base = "alpha bravo charlie delta echo foxtrot golf hotel india juliet kilo lima".split()
    return base * 5


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")
