"""News provider adapters, selected by configuration."""

from __future__ import annotations

from ..types import ProviderName
from .base import SENTINEL_VALUES, ProviderAdapter, clean_field
from .gnews import GNewsAdapter
from .newsapi import NewsApiAdapter

ADAPTERS: dict[ProviderName, type[ProviderAdapter]] = {
    ProviderName.GNEWS: GNewsAdapter,
    ProviderName.NEWSAPI: NewsApiAdapter,
}


def get_adapter(provider: ProviderName | str) -> ProviderAdapter:
    """按名称构建 provider 适配器。

    Raises:
        ValueError: provider 名称未知时抛出。
    """
    try:
        key = ProviderName(provider)
    except ValueError:
        raise ValueError(f"Unknown provider: {provider}. Choose one of: {', '.join(p.value for p in ProviderName)}")
    return ADAPTERS[key]()


__all__ = [
    "ADAPTERS",
    "SENTINEL_VALUES",
    "ProviderAdapter",
    "GNewsAdapter",
    "NewsApiAdapter",
    "clean_field",
    "get_adapter",
]
