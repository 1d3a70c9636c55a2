"""TUI 子命令。"""

from __future__ import annotations

from typing import Optional

import click

from ..types import ProviderName
from ..ui.app import run_app
from . import main
from .common import load_settings


@main.command("tui")
@click.option(
    "--provider",
    type=click.Choice([p.value for p in ProviderName], case_sensitive=False),
    default=None,
    help="Override NEWS_PROVIDER.",
)
@click.option("--query", default="", help="Pre-fill the search field.")
@click.pass_context
def tui(ctx: click.Context, provider: Optional[str], query: str) -> None:
    """启动基于 Textual 的新闻搜索界面。"""
    settings = load_settings(ctx, tui=True, provider=provider)
    run_app(settings=settings, initial_query=query)


__all__ = ["tui"]
