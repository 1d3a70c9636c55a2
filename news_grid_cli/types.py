from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional


class ProviderName(str, Enum):
    GNEWS = "gnews"
    NEWSAPI = "newsapi"


@dataclass(frozen=True)
class Article:
    """归一化后的单条新闻记录。

    Attributes:
        title: 标题。
        description: 摘要文本。
        url: 原文链接，同时作为展示用的唯一键。
        image: 配图地址（GNews 的 ``image`` 或 NewsAPI 的 ``urlToImage``）。
        source: 来源媒体名称（如有）。
        published_at: 发布时间，保留 provider 给出的 ISO8601 字符串。
    """

    title: str
    description: str
    url: str
    image: Optional[str] = None
    source: Optional[str] = None
    published_at: Optional[str] = None


@dataclass(frozen=True)
class SearchState:
    """QueryController 对外暴露的不可变状态快照。

    Attributes:
        query: 当前输入框中的查询字符串。
        active_query: 最近一次发出请求所使用的查询。
        loading: 是否有最新一代请求仍在进行。
        error: 面向用户的错误提示，成功拉取后清空。
        articles: 当前展示的文章，按 provider 返回顺序排列。
    """

    query: str = ""
    active_query: Optional[str] = None
    loading: bool = False
    error: Optional[str] = None
    articles: tuple[Article, ...] = field(default_factory=tuple)

    @property
    def has_error(self) -> bool:
        return self.error is not None

    def evolve(self, **changes) -> "SearchState":
        return replace(self, **changes)
