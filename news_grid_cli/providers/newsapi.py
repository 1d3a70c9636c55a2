from __future__ import annotations

from .base import ProviderAdapter


class NewsApiAdapter(ProviderAdapter):
    """NewsAPI ``/v2/everything``。

    图片字段为 ``urlToImage``；被撤稿的条目以 ``[Removed]`` 占位，
    由基类的哨兵过滤剔除。
    """

    name = "newsapi"
    default_endpoint = "https://newsapi.org/v2/everything"
    default_query = "latest soccer"
    image_field = "urlToImage"

    def build_params(self, query: str, *, api_key: str, language: str, limit: int) -> dict[str, str | int]:
        return {
            "q": query,
            "apiKey": api_key,
            "language": language,
            "pageSize": self.clamp_limit(limit),
        }
