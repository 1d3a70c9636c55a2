"""日志初始化。

CLI 模式下通过 Rich 的 ``RichHandler`` 输出到共享 console；
TUI 模式下改用 Textual 的 ``TextualHandler``，避免日志打乱界面。
"""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "news_grid_cli"


def configure_logging(level: str = "WARNING", console: Optional[Console] = None, tui: bool = False) -> logging.Logger:
    """为包内 logger 安装唯一的 handler 并设置级别。

    Args:
        level: 日志级别名称，如 ``INFO``。
        console: 复用的 Rich console；为空时 RichHandler 自建。
        tui: 是否运行在 Textual 界面中。

    Returns:
        包级 logger。
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler: logging.Handler
    if tui:
        from textual.logging import TextualHandler

        handler = TextualHandler()
    else:
        handler = RichHandler(console=console, show_path=False, rich_tracebacks=True, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger.addHandler(handler)
    logger.setLevel(level.upper())
    logger.propagate = False
    return logger
