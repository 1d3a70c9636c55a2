from __future__ import annotations

from typing import Optional

DEFAULT_FETCH_ERROR_MESSAGE = "Failed to fetch news. Check your connection."


class FetchError(RuntimeError):
    """新闻拉取失败的唯一错误类型。

    网络异常、非 2xx 状态码、响应体格式不符以及缺少凭证
    都统一转换为该异常，由 QueryController 捕获并转成 UI 错误提示。

    Attributes:
        reason: 失败类别，``network`` / ``status`` / ``malformed`` / ``config``，仅用于日志。
        user_message: 面向用户展示的简短提示。
    """

    def __init__(self, reason: str, detail: str = "", user_message: Optional[str] = None):
        self.reason = reason
        self.detail = detail
        self.user_message = user_message or DEFAULT_FETCH_ERROR_MESSAGE
        super().__init__(f"{reason}: {detail}" if detail else reason)
