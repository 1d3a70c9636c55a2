from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import httpx
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .types import ProviderName


class Settings(BaseSettings):
    """运行时配置模型，从环境变量（``NEWS_`` 前缀）或 .env 加载。

    集中管理新闻检索所需的外部依赖配置：provider 选择、API 端点、
    凭证、默认查询、防抖间隔、结果数量上限以及日志级别等。
    凭证只从环境注入，不写入源码。
    """

    provider: ProviderName = ProviderName.GNEWS

    # 留空时使用 provider 自带的默认端点 / 默认查询
    endpoint: Optional[str] = None
    api_key: Optional[str] = None
    default_query: Optional[str] = None

    debounce_ms: int = Field(default=500, ge=0)
    result_limit: int = Field(default=10, ge=1)
    language: str = "en"
    request_timeout: float = Field(default=10.0, gt=0)  # 秒，限制单次请求的最长等待

    description_max_chars: int = Field(default=180, ge=1)
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="NEWS_", extra="ignore")

    @field_validator("endpoint")
    @classmethod
    def _check_endpoint(cls, value: Optional[str]) -> Optional[str]:
        """端点必须是 httpx 可解析、带 http(s) scheme 与 host 的 URL。"""
        if value is None or not value.strip():
            return None
        value = value.strip()
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as exc:
            raise ValueError(f"invalid endpoint URL: {exc}") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError("endpoint must be an absolute http(s) URL with a host")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def load(cls, env_file: Optional[str | Path] = None, overrides: Optional[dict[str, Any]] = None) -> "Settings":
        """Load settings, allowing an optional .env override and programmatic overrides."""
        kwargs: dict[str, Any] = {}
        if env_file:
            kwargs["_env_file"] = env_file
        if overrides:
            kwargs.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**kwargs)

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0

    def resolved_endpoint(self) -> str:
        """返回实际请求的端点：显式配置优先，否则取 provider 默认值。"""
        from .providers import get_adapter  # local import to avoid cycles

        return self.endpoint or get_adapter(self.provider).default_endpoint

    def resolved_default_query(self) -> str:
        """返回启动时使用的默认查询（GNews 为 ``soccer``，NewsAPI 为 ``latest soccer``）。"""
        from .providers import get_adapter  # local import to avoid cycles

        query = (self.default_query or "").strip()
        return query or get_adapter(self.provider).default_query
