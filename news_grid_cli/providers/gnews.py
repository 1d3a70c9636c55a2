from __future__ import annotations

from .base import ProviderAdapter


class GNewsAdapter(ProviderAdapter):
    """GNews v4 search endpoint; images live under ``image``."""

    name = "gnews"
    default_endpoint = "https://gnews.io/api/v4/search"
    default_query = "soccer"
    image_field = "image"

    def build_params(self, query: str, *, api_key: str, language: str, limit: int) -> dict[str, str | int]:
        return {
            "q": query,
            "token": api_key,
            "lang": language,
            "max": self.clamp_limit(limit),
        }
