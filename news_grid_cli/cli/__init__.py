"""news-grid CLI 顶层入口。

本模块仅负责定义 Click 命令组与全局选项并导入各子命令模块，
实际逻辑拆分在 `news_grid_cli.cli.*` 子模块中。
"""

from __future__ import annotations

from typing import Optional

import click


@click.group()
@click.option("--env-file", type=click.Path(dir_okay=False), default=None, help="Alternative .env file to load settings from.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override NEWS_LOG_LEVEL.",
)
@click.pass_context
def main(ctx: click.Context, env_file: Optional[str], log_level: Optional[str]) -> None:
    """Search a news provider and browse results as cards."""
    ctx.ensure_object(dict)
    ctx.obj["env_file"] = env_file
    ctx.obj["log_level"] = log_level


# 导入子模块以注册子命令（装饰器在导入时执行）
from . import search as _search  # noqa: F401,E402
from . import tui as _tui  # noqa: F401,E402


__all__ = ["main"]
