"""External data connectors (news provider endpoint)."""

from .news import NewsConnector

__all__ = ["NewsConnector"]
