"""Search a news provider and browse the results as a card grid."""

from .config import Settings
from .connectors.news import NewsConnector
from .errors import FetchError
from .services.controller import QueryController
from .types import Article, ProviderName, SearchState

__version__ = "0.1.0"

__all__ = [
    "Article",
    "FetchError",
    "NewsConnector",
    "ProviderName",
    "QueryController",
    "SearchState",
    "Settings",
]
