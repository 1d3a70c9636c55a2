"""CLI 通用工具与共享对象。

本模块提供：

- 统一的 Rich `console` 实例；
- 从命令行上下文加载配置并初始化日志；
- 文章列表的 JSON 输出辅助函数。
"""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Iterable, Optional

import click
from pydantic import ValidationError
from rich.console import Console

from ..config import Settings
from ..log import configure_logging
from ..types import Article

console = Console()


def load_settings(ctx: click.Context, tui: bool = False, **overrides: Any) -> Settings:
    """根据全局选项与子命令覆盖项加载配置，并按配置初始化日志。

    Args:
        ctx: 当前 click 上下文，携带 ``--env-file`` 与 ``--log-level``。
        tui: 是否为 TUI 模式（决定日志 handler）。
        **overrides: 子命令给出的配置覆盖，值为 None 的项会被忽略。

    Returns:
        校验后的 `Settings`。

    Raises:
        click.UsageError: 配置校验失败时抛出，退出码为 2。
    """
    obj = ctx.find_root().obj or {}
    if obj.get("log_level"):
        overrides["log_level"] = obj["log_level"]
    try:
        settings = Settings.load(env_file=obj.get("env_file"), overrides=overrides)
    except ValidationError as exc:
        raise click.UsageError(f"Invalid configuration:\n{exc}")
    configure_logging(settings.log_level, console=Console(stderr=True), tui=tui)
    return settings


def article_to_json(article: Article) -> str:
    return json.dumps(asdict(article), ensure_ascii=False)


def print_json_lines(articles: Iterable[Article], out: Optional[Console] = None) -> None:
    """逐行输出 JSON，便于管道处理。"""
    target = out or console
    for article in articles:
        target.print(article_to_json(article), markup=False, highlight=False, soft_wrap=True)


__all__ = ["console", "load_settings", "article_to_json", "print_json_lines"]
