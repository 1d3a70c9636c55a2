"""查询控制器：防抖调度与过期响应丢弃。

控制器持有 ``{query, loading, error, articles}`` 四元状态，决定何时发起拉取：

- 启动时立即用默认查询拉取一次；
- 查询变更后等待一个静默期（默认 500ms），期间的新输入会取消并替换定时器，
  到期后只用最新的查询值拉取一次；
- 每次拉取带有单调递增的代号，完成时若已不是最新一代则整体丢弃，
  避免慢响应覆盖新结果；
- 拉取失败时设置错误提示、清除 loading，保留上一批文章。

所有状态变更都发生在同一个 asyncio 事件循环中，无需加锁。
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Protocol, Sequence

from ..errors import FetchError
from ..types import Article, SearchState

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[Sequence[Article]]]
Listener = Callable[[SearchState], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


def loop_scheduler(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """默认调度器：基于当前事件循环的 ``call_later``。"""
    return asyncio.get_running_loop().call_later(delay, callback)


class QueryController:
    """Owns the search state and decides when to hit the news pipeline."""

    def __init__(
        self,
        fetcher: Fetcher,
        *,
        default_query: str,
        debounce_seconds: float = 0.5,
        scheduler: Optional[Scheduler] = None,
    ):
        self._fetcher = fetcher
        self.default_query = default_query
        self.debounce_seconds = debounce_seconds
        self._schedule = scheduler or loop_scheduler
        self._state = SearchState()
        self._timer: Optional[TimerHandle] = None
        self._generation = 0
        self._tasks: set[asyncio.Task] = set()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def query(self) -> str:
        return self._state.query

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    @property
    def articles(self) -> tuple[Article, ...]:
        return self._state.articles

    @property
    def timer_pending(self) -> bool:
        return self._timer is not None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """注册状态监听器，返回取消订阅函数。"""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def start(self) -> asyncio.Task:
        """立即以默认查询拉取一次（不经过防抖）。"""
        return self._dispatch(self.default_query)

    def set_query(self, value: str) -> None:
        """更新查询字符串并重新布置防抖定时器。

        值未变化时不做任何事；变为空白时只取消待定的定时器，不发起拉取。
        """
        value = value or ""
        if value == self._state.query:
            return
        self._cancel_timer()
        self._update(query=value)
        if not value.strip():
            return
        self._timer = self._schedule(self.debounce_seconds, self._on_timer)

    def submit(self, value: str) -> asyncio.Task:
        """设置查询并立即拉取（回车提交或一次性搜索）。"""
        self._cancel_timer()
        if value != self._state.query:
            self._update(query=value)
        return self._dispatch(value.strip() or self.default_query)

    def refresh(self) -> asyncio.Task:
        """跳过防抖，立即用当前查询（为空时用默认查询）重新拉取。"""
        self._cancel_timer()
        return self._dispatch(self._state.query.strip() or self.default_query)

    async def wait_idle(self) -> None:
        """等待所有已发出的拉取结束。"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        self._cancel_timer()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def _on_timer(self) -> None:
        self._timer = None
        query = self._state.query.strip()
        if query:
            self._dispatch(query)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _dispatch(self, query: str) -> asyncio.Task:
        self._generation += 1
        generation = self._generation
        logger.debug("dispatch #%d for %r", generation, query)
        self._update(active_query=query, loading=True)
        task = asyncio.get_running_loop().create_task(self._run(query, generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, query: str, generation: int) -> None:
        try:
            articles = await self._fetcher(query)
        except FetchError as exc:
            if generation != self._generation:
                logger.debug("dropping superseded failure #%d for %r", generation, query)
                return
            logger.warning("fetch for %r failed: %s", query, exc)
            # 保留上一批结果，只展示错误提示
            self._update(loading=False, error=exc.user_message)
            return

        if generation != self._generation:
            logger.debug("dropping superseded response #%d for %r", generation, query)
            return
        self._update(loading=False, error=None, articles=tuple(articles))

    def _update(self, **changes) -> None:
        self._state = self._state.evolve(**changes)
        for listener in list(self._listeners):
            listener(self._state)
