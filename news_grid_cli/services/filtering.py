from __future__ import annotations

from typing import Iterable, List, Optional

from ..providers.base import clean_field
from ..types import Article


def is_complete(article: Optional[Article]) -> bool:
    """Return True if every display field is present and not a sentinel placeholder."""
    if article is None:
        return False
    return all(clean_field(value) for value in (article.title, article.description, article.url, article.image))


def filter_articles(articles: Iterable[Optional[Article]]) -> List[Article]:
    """
    Keep only displayable articles, preserving provider order.
    - drops None / incomplete / sentinel-bearing entries
    - url is the display key, so repeated urls keep the first occurrence
    Re-filtering an already filtered list returns an equal list.
    """
    seen_urls: set[str] = set()
    results: List[Article] = []
    for article in articles:
        if article is None or not is_complete(article):
            continue
        if article.url in seen_urls:
            continue
        seen_urls.add(article.url)
        results.append(article)
    return results
