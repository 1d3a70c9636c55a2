"""新闻拉取与过滤管道。

`NewsConnector` 对配置的新闻端点发起一次 GET 请求，解析 JSON，
经 provider 适配器归一化后剔除不完整记录，返回保持原顺序的文章列表。
任何失败（网络、状态码、响应体结构、缺少凭证）都统一抛出 `FetchError`，
不做重试，也不返回部分结果。
"""

from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from ..config import Settings
from ..errors import FetchError
from ..providers import ProviderAdapter, get_adapter
from ..services.filtering import filter_articles
from ..types import Article

logger = logging.getLogger(__name__)

REDACTED = "***"


class NewsConnector:
    """Fetch/filter pipeline over a single provider endpoint."""

    def __init__(
        self,
        settings: Settings,
        adapter: Optional[ProviderAdapter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.adapter = adapter or get_adapter(settings.provider)
        if adapter is None:
            self.endpoint = settings.resolved_endpoint()
        else:
            self.endpoint = settings.endpoint or adapter.default_endpoint
        self._http = httpx.AsyncClient(timeout=settings.request_timeout, transport=transport)

    async def fetch(self, query: str) -> List[Article]:
        """拉取并过滤与查询匹配的文章。

        Args:
            query: 自由文本查询；为空时回退到默认查询。

        Returns:
            通过完整性过滤的文章列表，保持 provider 返回顺序。

        Raises:
            FetchError: 请求或解析的任一环节失败。
        """
        if not self.settings.api_key:
            raise FetchError("config", "no API key configured (set NEWS_API_KEY)")

        text = (query or "").strip() or self.settings.resolved_default_query()
        params = self.adapter.build_params(
            text,
            api_key=self.settings.api_key,
            language=self.settings.language,
            limit=self.settings.result_limit,
        )
        logger.debug("GET %s params=%s", self.endpoint, _redact(params, self.settings.api_key))

        try:
            resp = await self._http.get(self.endpoint, params=params)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning("news provider returned HTTP %s for %r", exc.response.status_code, text)
            raise FetchError("status", f"HTTP {exc.response.status_code}") from exc
        except httpx.InvalidURL as exc:
            logger.warning("news endpoint %r is not a valid URL: %s", self.endpoint, exc)
            raise FetchError("config", f"invalid endpoint: {exc}") from exc
        except httpx.HTTPError as exc:
            logger.warning("news request for %r failed: %s", text, exc.__class__.__name__)
            raise FetchError("network", exc.__class__.__name__) from exc

        try:
            payload = resp.json()
        except ValueError as exc:
            logger.warning("news provider sent a non-JSON body for %r", text)
            raise FetchError("malformed", "response body is not JSON") from exc

        records = self.adapter.extract_records(payload)
        articles = filter_articles(self.adapter.normalize(record) for record in records)
        logger.info("query %r: %d of %d articles kept", text, len(articles), len(records))
        return articles

    async def close(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "NewsConnector":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


def _redact(params: dict[str, str | int], secret: str) -> dict[str, str | int]:
    return {key: (REDACTED if value == secret else value) for key, value in params.items()}
