"""展示层：把搜索状态映射为视图模型并渲染为 Rich 卡片网格。

`build_view` 是纯函数，只依赖 `SearchState`；`render_view` 负责把视图模型
画成 Rich renderable，供 CLI 直接打印或嵌入 Textual 组件。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.spinner import Spinner
from rich.text import Text

from ..types import SearchState

LOADING_TEXT = "Searching for latest news..."
SEARCH_PLACEHOLDER = "What news are you curious about today?"
EMPTY_START_TEXT = "Search for news to get started"
EMPTY_RESULT_TEXT = "No articles found. Try different keywords."
READ_MORE = "Read More"
CARD_WIDTH = 44


@dataclass(frozen=True)
class ArticleCard:
    title: str
    description: str
    url: str
    image: Optional[str] = None
    source: Optional[str] = None


@dataclass(frozen=True)
class NewsView:
    """一次渲染所需的全部信息。

    Attributes:
        loading: 是否显示加载动画。
        banner: 错误提示文本，为空表示无错误。
        cards: 文章卡片，顺序与状态中的文章一致。
        placeholder: 无卡片时的提示语，区分“尚未搜索”与“无结果”。
    """

    loading: bool
    banner: Optional[str]
    cards: tuple[ArticleCard, ...]
    placeholder: Optional[str]

    @property
    def status(self) -> str:
        if self.loading:
            return "loading"
        return "cards" if self.cards else "empty"


def truncate(text: str, max_chars: int) -> str:
    """按字符数截断，尽量在单词边界处断开并追加省略号。"""
    text = " ".join(text.split())
    if len(text) <= max_chars:
        return text
    cut = text[: max_chars - 1]
    if " " in cut:
        cut = cut.rsplit(" ", 1)[0]
    return cut.rstrip(" ,.;:") + "…"


def build_view(state: SearchState, max_description: int = 180) -> NewsView:
    cards = tuple(
        ArticleCard(
            title=article.title,
            description=truncate(article.description, max_description),
            url=article.url,
            image=article.image,
            source=article.source,
        )
        for article in state.articles
    )
    placeholder: Optional[str] = None
    if not cards:
        placeholder = EMPTY_RESULT_TEXT if state.query.strip() else EMPTY_START_TEXT
    return NewsView(loading=state.loading, banner=state.error, cards=cards, placeholder=placeholder)


def render_card(card: ArticleCard) -> Panel:
    body = Text()
    if card.image:
        body.append("🖼  image", style=f"dim link {card.image}")
        body.append("\n")
    body.append(card.description, style="grey50")
    body.append("\n\n")
    body.append(f"{READ_MORE} ↗", style=f"bold medium_purple link {card.url}")
    return Panel(
        body,
        title=Text(card.title, style="bold"),
        title_align="left",
        subtitle=escape(card.source) if card.source else None,
        subtitle_align="right",
        border_style="medium_purple",
        width=CARD_WIDTH,
    )


def render_view(view: NewsView, loading_style: str = "spinner") -> RenderableType:
    """把视图模型渲染为 Rich renderable。

    Args:
        view: `build_view` 的输出。
        loading_style: 加载提示样式，``spinner`` 为动态 spinner，``text`` 为静态文字，
            ``none`` 表示由外层组件自行展示。

    Returns:
        可直接交给 console 或 Textual ``Static`` 的 renderable。
    """
    parts: list[RenderableType] = []
    if view.loading:
        if loading_style == "spinner":
            parts.append(Spinner("dots", text=Text(LOADING_TEXT, style="grey50"), style="medium_purple"))
        elif loading_style == "text":
            parts.append(Text(f"… {LOADING_TEXT}", style="grey50"))
    if view.banner:
        parts.append(Text(f"⚠  {view.banner}", style="bold red"))
    if view.cards:
        parts.append(Columns([render_card(card) for card in view.cards], equal=True, expand=False))
    elif view.placeholder and not view.loading:
        parts.append(Text(view.placeholder, style="grey50", justify="center"))
    return Group(*parts)
