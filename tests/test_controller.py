"""QueryController 防抖、错误保留与过期响应丢弃的单元测试。"""

from __future__ import annotations

import asyncio
from typing import Dict, List

from conftest import FakeScheduler, make_article
from news_grid_cli.errors import FetchError
from news_grid_cli.services.controller import QueryController
from news_grid_cli.types import Article, SearchState


class RecordingFetcher:
    """记录每次调用的查询，并按预设返回结果或抛出错误。"""

    def __init__(self, results: Dict[str, object] | None = None):
        self.calls: List[str] = []
        self.results = results or {}

    async def __call__(self, query: str) -> List[Article]:
        self.calls.append(query)
        outcome = self.results.get(query, [make_article(len(self.calls))])
        if isinstance(outcome, Exception):
            raise outcome
        return list(outcome)  # type: ignore[arg-type]


def _controller(fetcher, scheduler=None, **kwargs) -> QueryController:
    return QueryController(fetcher, default_query="soccer", debounce_seconds=0.5, scheduler=scheduler, **kwargs)


def test_start_fetches_default_query_once() -> None:
    async def scenario() -> None:
        fetcher = RecordingFetcher()
        scheduler = FakeScheduler()
        controller = _controller(fetcher, scheduler)

        controller.start()
        assert controller.loading is True
        await controller.wait_idle()

        assert fetcher.calls == ["soccer"]
        assert controller.loading is False
        assert controller.state.active_query == "soccer"
        assert len(controller.articles) == 1
        # 用户输入之前不会再有请求
        assert scheduler.pending == []

    asyncio.run(scenario())


def test_query_change_fires_exactly_one_fetch_after_quiet_period() -> None:
    async def scenario() -> None:
        fetcher = RecordingFetcher()
        scheduler = FakeScheduler()
        controller = _controller(fetcher, scheduler)

        controller.set_query("climate")
        assert fetcher.calls == []
        assert [t.delay for t in scheduler.pending] == [0.5]

        scheduler.fire()
        await controller.wait_idle()
        assert fetcher.calls == ["climate"]
        assert controller.timer_pending is False

    asyncio.run(scenario())


def test_rapid_edits_coalesce_into_final_value() -> None:
    async def scenario() -> None:
        fetcher = RecordingFetcher()
        scheduler = FakeScheduler()
        controller = _controller(fetcher, scheduler)

        for value in ("f", "fo", "foo", "foot"):
            controller.set_query(value)

        assert len(scheduler.timers) == 4
        assert len(scheduler.pending) == 1
        assert all(t.cancelled for t in scheduler.timers[:-1])

        scheduler.fire()
        await controller.wait_idle()
        assert fetcher.calls == ["foot"]

    asyncio.run(scenario())


def test_clearing_query_cancels_pending_timer_without_fetching() -> None:
    async def scenario() -> None:
        fetcher = RecordingFetcher()
        scheduler = FakeScheduler()
        controller = _controller(fetcher, scheduler)

        controller.set_query("abc")
        controller.set_query("")
        assert scheduler.pending == []
        controller.set_query("   ")
        assert scheduler.pending == []
        await controller.wait_idle()
        assert fetcher.calls == []
        assert controller.query == "   "

    asyncio.run(scenario())


def test_same_value_is_noop() -> None:
    fetcher = RecordingFetcher()
    scheduler = FakeScheduler()
    controller = _controller(fetcher, scheduler)
    states: List[SearchState] = []
    controller.subscribe(states.append)

    controller.set_query("abc")
    controller.set_query("abc")

    assert len(scheduler.timers) == 1
    assert len(states) == 1


def test_failure_sets_error_and_keeps_previous_articles() -> None:
    async def scenario() -> None:
        fetcher = RecordingFetcher({"broken": FetchError("network", "ConnectError")})
        scheduler = FakeScheduler()
        controller = _controller(fetcher, scheduler)

        controller.start()
        await controller.wait_idle()
        previous = controller.articles
        assert previous

        controller.set_query("broken")
        scheduler.fire()
        await controller.wait_idle()

        assert controller.error == "Failed to fetch news. Check your connection."
        assert controller.loading is False
        assert controller.articles == previous

        # 下一次成功拉取清除错误
        controller.set_query("fixed")
        scheduler.fire()
        await controller.wait_idle()
        assert controller.error is None
        assert controller.articles != previous

    asyncio.run(scenario())


def test_slow_superseded_response_is_discarded() -> None:
    """"a" 先发出但晚于 "ab" 返回时，最终展示 "ab" 的结果。"""

    async def scenario() -> None:
        gates = {"a": asyncio.Event(), "ab": asyncio.Event()}
        results = {"a": [make_article(1)], "ab": [make_article(2)]}
        calls: List[str] = []

        async def fetcher(query: str) -> List[Article]:
            calls.append(query)
            await gates[query].wait()
            return results[query]

        scheduler = FakeScheduler()
        controller = _controller(fetcher, scheduler)

        controller.set_query("a")
        scheduler.fire()
        await asyncio.sleep(0)
        controller.set_query("ab")
        scheduler.fire()
        await asyncio.sleep(0)
        assert calls == ["a", "ab"]

        gates["ab"].set()
        await asyncio.sleep(0.01)
        assert controller.articles == tuple(results["ab"])
        assert controller.loading is False

        gates["a"].set()
        await controller.wait_idle()
        assert controller.articles == tuple(results["ab"])
        assert controller.state.active_query == "ab"

    asyncio.run(scenario())


def test_superseded_failure_does_not_raise_banner() -> None:
    async def scenario() -> None:
        gate = asyncio.Event()

        async def fetcher(query: str) -> List[Article]:
            if query == "slow":
                await gate.wait()
                raise FetchError("network", "ReadTimeout")
            return [make_article(7)]

        scheduler = FakeScheduler()
        controller = _controller(fetcher, scheduler)
        controller.submit("slow")
        await asyncio.sleep(0)
        controller.submit("fast")
        await asyncio.sleep(0.01)
        gate.set()
        await controller.wait_idle()

        assert controller.error is None
        assert [a.url for a in controller.articles] == ["https://example.com/7"]

    asyncio.run(scenario())


def test_refresh_and_submit_skip_debounce() -> None:
    async def scenario() -> None:
        fetcher = RecordingFetcher()
        scheduler = FakeScheduler()
        controller = _controller(fetcher, scheduler)

        controller.set_query("pending")
        controller.submit("now")
        assert scheduler.pending == []
        await controller.wait_idle()

        controller.set_query("")
        controller.refresh()
        await controller.wait_idle()
        assert fetcher.calls == ["now", "soccer"]

    asyncio.run(scenario())


def test_listeners_receive_snapshots_until_unsubscribed() -> None:
    async def scenario() -> None:
        controller = _controller(RecordingFetcher(), FakeScheduler())
        states: List[SearchState] = []
        unsubscribe = controller.subscribe(states.append)

        controller.start()
        await controller.wait_idle()
        assert [s.loading for s in states] == [True, False]

        unsubscribe()
        controller.set_query("x")
        assert len(states) == 2

    asyncio.run(scenario())


def test_real_event_loop_timer_debounces() -> None:
    async def scenario() -> None:
        fetcher = RecordingFetcher()
        controller = QueryController(fetcher, default_query="soccer", debounce_seconds=0.02)

        controller.set_query("a")
        await asyncio.sleep(0.005)
        controller.set_query("ab")
        await asyncio.sleep(0.1)
        await controller.wait_idle()

        assert fetcher.calls == ["ab"]
        await controller.aclose()

    asyncio.run(scenario())


def test_aclose_cancels_pending_work() -> None:
    async def scenario() -> None:
        gate = asyncio.Event()

        async def fetcher(query: str) -> List[Article]:
            await gate.wait()
            return []

        scheduler = FakeScheduler()
        controller = _controller(fetcher, scheduler)
        controller.start()
        controller.set_query("later")
        await controller.aclose()

        assert scheduler.pending == []
        assert controller.timer_pending is False
        await controller.wait_idle()

    asyncio.run(scenario())
