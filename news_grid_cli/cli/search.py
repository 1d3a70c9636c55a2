"""一次性搜索与 provider 列表子命令。"""

from __future__ import annotations

import asyncio
from typing import Optional

import click
from rich.table import Table

from ..config import Settings
from ..connectors.news import NewsConnector
from ..providers import ADAPTERS
from ..services.controller import QueryController
from ..types import ProviderName, SearchState
from ..ui.view import build_view, render_view
from . import main
from .common import console, load_settings, print_json_lines


async def _search_once(settings: Settings, query: str) -> SearchState:
    """通过控制器执行一次立即搜索，返回最终状态。

    Args:
        settings: 全局配置。
        query: 查询字符串，为空时使用默认查询。

    Returns:
        拉取结束后的 `SearchState`。
    """
    async with NewsConnector(settings) as connector:
        controller = QueryController(
            connector.fetch,
            default_query=settings.resolved_default_query(),
            debounce_seconds=settings.debounce_seconds,
        )
        controller.submit(query)
        await controller.wait_idle()
        return controller.state


@main.command("search")
@click.argument("query", type=str, default="")
@click.option(
    "--provider",
    type=click.Choice([p.value for p in ProviderName], case_sensitive=False),
    default=None,
    help="Override NEWS_PROVIDER.",
)
@click.option("--limit", type=int, default=None, help="Override NEWS_RESULT_LIMIT.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print one JSON object per article.")
@click.pass_context
def search(ctx: click.Context, query: str, provider: Optional[str], limit: Optional[int], as_json: bool) -> None:
    """Fetch articles for QUERY once and print them as a card grid."""
    settings = load_settings(ctx, provider=provider, result_limit=limit)
    state = asyncio.run(_search_once(settings, query))

    if as_json:
        print_json_lines(state.articles)
        if state.has_error:
            click.echo(state.error, err=True)
    else:
        view = build_view(state, max_description=settings.description_max_chars)
        console.print(render_view(view, loading_style="none"))
    if state.has_error:
        ctx.exit(1)


@main.command("providers")
def providers() -> None:
    """List the supported news providers."""
    table = Table(title="News Providers", header_style="bold cyan")
    table.add_column("Name", style="magenta")
    table.add_column("Default endpoint", overflow="fold")
    table.add_column("Default query")
    table.add_column("Image field")
    for name, adapter_cls in ADAPTERS.items():
        table.add_row(name.value, adapter_cls.default_endpoint, adapter_cls.default_query, adapter_cls.image_field)
    console.print(table)


__all__ = ["search", "providers"]
