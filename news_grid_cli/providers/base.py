"""Provider 适配器基类。

每个新闻 provider 的请求参数与字段命名各不相同（``image`` 与
``urlToImage``、``token`` 与 ``apiKey`` 等），适配器负责把原始记录
映射为统一的 `Article`，其余流程因此与 provider 无关。
"""

from __future__ import annotations

from typing import Any, ClassVar, Optional

from ..errors import FetchError
from ..types import Article

# provider 用来占位被撤稿内容的哨兵值，按缺失处理
SENTINEL_VALUES = frozenset({"[removed]"})


def clean_field(value: Any) -> Optional[str]:
    """把 provider 字段规整为非空字符串；空值与哨兵值返回 None。"""
    if value is None or not isinstance(value, str):
        return None
    text = value.strip()
    if not text or text.lower() in SENTINEL_VALUES:
        return None
    return text


class ProviderAdapter:
    """单个 provider 的请求/响应适配策略。

    子类需给出默认端点、默认查询、图片字段名，并实现 `build_params`。
    """

    name: ClassVar[str]
    default_endpoint: ClassVar[str]
    default_query: ClassVar[str]
    image_field: ClassVar[str]
    articles_field: ClassVar[str] = "articles"
    max_results: ClassVar[int] = 100

    def build_params(self, query: str, *, api_key: str, language: str, limit: int) -> dict[str, str | int]:
        raise NotImplementedError

    def extract_records(self, payload: Any) -> list[dict]:
        """从响应体中取出文章列表；结构不符时抛出 `FetchError`。

        Args:
            payload: 已解析的 JSON 响应体。

        Returns:
            原始文章字典列表，保持 provider 顺序。
        """
        if not isinstance(payload, dict):
            raise FetchError("malformed", "response body is not a JSON object")
        records = payload.get(self.articles_field)
        if not isinstance(records, list):
            raise FetchError("malformed", f"response has no '{self.articles_field}' list")
        if not all(isinstance(item, dict) for item in records):
            raise FetchError("malformed", "article records must be JSON objects")
        return records

    def normalize(self, record: dict) -> Optional[Article]:
        """把原始记录转换为 `Article`；缺少任一必填字段时返回 None。"""
        title = clean_field(record.get("title"))
        description = clean_field(record.get("description"))
        url = clean_field(record.get("url"))
        image = clean_field(record.get(self.image_field))
        if not (title and description and url and image):
            return None

        source = record.get("source")
        source_name = clean_field(source.get("name")) if isinstance(source, dict) else None
        return Article(
            title=title,
            description=description,
            url=url,
            image=image,
            source=source_name,
            published_at=clean_field(record.get("publishedAt")),
        )

    def clamp_limit(self, limit: int) -> int:
        return max(1, min(limit, self.max_results))
