from __future__ import annotations

from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Footer, Header, Input, LoadingIndicator, Static

from ..config import Settings
from ..connectors.news import NewsConnector
from ..services.controller import QueryController
from ..types import SearchState
from .view import SEARCH_PLACEHOLDER, build_view, render_view


class NewsSearchApp(App):
    """Textual TUI: a search field driving a debounced news card grid."""

    TITLE = "News Grid"
    CSS = """
    #search { margin: 1 4; }
    #spinner { height: 3; display: none; }
    #body { padding: 0 2; }
    """
    BINDINGS = [
        Binding("ctrl+r", "refresh", "Refresh", priority=True),
        Binding("escape", "clear_query", "Clear", priority=True),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, settings: Settings, connector: Optional[NewsConnector] = None, initial_query: str = ""):
        super().__init__()
        self.settings = settings
        self.connector = connector or NewsConnector(settings)
        self.initial_query = initial_query
        self.controller = QueryController(
            self.connector.fetch,
            default_query=settings.resolved_default_query(),
            debounce_seconds=settings.debounce_seconds,
        )
        self.body: Optional[Static] = None
        self.spinner: Optional[LoadingIndicator] = None

    def compose(self) -> ComposeResult:
        self.spinner = LoadingIndicator(id="spinner")
        self.body = Static(id="body")
        yield Header()
        yield Input(value=self.initial_query, placeholder=SEARCH_PLACEHOLDER, id="search")
        yield self.spinner
        yield VerticalScroll(self.body)
        yield Footer()

    async def on_mount(self) -> None:
        self.controller.subscribe(self._render_state)
        self._render_state(self.controller.state)
        self.controller.start()
        if self.initial_query:
            self.controller.set_query(self.initial_query)

    async def on_unmount(self) -> None:
        await self.controller.aclose()
        await self.connector.close()

    def on_input_changed(self, event: Input.Changed) -> None:
        self.controller.set_query(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.controller.submit(event.value)

    def action_refresh(self) -> None:
        self.controller.refresh()

    def action_clear_query(self) -> None:
        self.query_one("#search", Input).value = ""

    def _render_state(self, state: SearchState) -> None:
        view = build_view(state, max_description=self.settings.description_max_chars)
        self.sub_title = f"{state.active_query} · {view.status}" if state.active_query else ""
        if self.spinner is not None:
            self.spinner.display = view.status == "loading"
        if self.body is not None:
            self.body.update(render_view(view, loading_style="none"))


def run_app(settings: Settings, initial_query: str = "") -> None:
    app = NewsSearchApp(settings=settings, initial_query=initial_query)
    app.run()
