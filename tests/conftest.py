"""测试共用的构造函数与假调度器。"""

from __future__ import annotations

from typing import Callable, Optional

import httpx
import pytest

from news_grid_cli.config import Settings
from news_grid_cli.types import Article


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """避免开发机上的 NEWS_* 环境变量或 .env 干扰测试。"""
    for key in (
        "NEWS_PROVIDER",
        "NEWS_ENDPOINT",
        "NEWS_API_KEY",
        "NEWS_DEFAULT_QUERY",
        "NEWS_DEBOUNCE_MS",
        "NEWS_RESULT_LIMIT",
        "NEWS_LANGUAGE",
        "NEWS_REQUEST_TIMEOUT",
        "NEWS_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def make_settings(**overrides) -> Settings:
    base = {"api_key": "test-key"}
    base.update(overrides)
    return Settings.load(overrides=base)


def make_article(n: int, **overrides) -> Article:
    fields = {
        "title": f"Title {n}",
        "description": f"Description {n}",
        "url": f"https://example.com/{n}",
        "image": f"https://img.example.com/{n}.jpg",
    }
    fields.update(overrides)
    return Article(**fields)


def gnews_record(n: int, **overrides) -> dict:
    record = {
        "title": f"Title {n}",
        "description": f"Description {n}",
        "url": f"https://example.com/{n}",
        "image": f"https://img.example.com/{n}.jpg",
        "publishedAt": "2024-06-01T10:00:00Z",
        "source": {"name": "Example News", "url": "https://example.com"},
    }
    record.update(overrides)
    return record


def json_transport(payload, status_code: int = 200, seen: Optional[list] = None) -> httpx.MockTransport:
    """返回固定 JSON 响应的 MockTransport，并把收到的请求记入 seen。"""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=payload)

    return httpx.MockTransport(handler)


class FakeTimer:
    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """手动触发的调度器，用来精确控制防抖定时器。"""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def fire(self) -> None:
        for timer in self.pending:
            timer.fired = True
            timer.callback()
