"""Presentation layer: view model, Rich rendering and the Textual app."""

from .view import ArticleCard, NewsView, build_view, render_view

__all__ = ["ArticleCard", "NewsView", "build_view", "render_view"]
