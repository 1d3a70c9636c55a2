"""Business logic services: filtering and query control."""

from .controller import QueryController, loop_scheduler
from .filtering import filter_articles, is_complete

__all__ = ["QueryController", "loop_scheduler", "filter_articles", "is_complete"]
