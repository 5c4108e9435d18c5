"""Textual TUI for tabjump."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.text import Text as RichText
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from .dispatch import (
    CloseOverlay,
    Command,
    Event,
    KeyPressed,
    Outcome,
    SwitchTab,
    TabsUpdated,
    dispatch,
)
from .host import HostError
from .models import Tab
from .render import render_prompt, render_tabs
from .state import SwitcherState

if TYPE_CHECKING:
    from .host import TmuxHost

logger = logging.getLogger(__name__)

# Seconds between tab-list polls
POLL_INTERVAL = 0.5

# CSS Styles
CSS = """
Screen {
    layout: vertical;
    padding: 0 1;
}
"""


class PromptLine(Static):
    """The ``> filter`` line."""

    DEFAULT_CSS = """
    PromptLine {
        height: 1;
        margin-bottom: 1;
    }
    """

    def update_prompt(self, state: SwitcherState) -> None:
        self.update(render_prompt(state))


class TabListView(Static):
    """Ranked tabs, one per line."""

    DEFAULT_CSS = """
    TabListView {
        height: auto;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.lines: list[RichText] = []

    def update_tabs(self, state: SwitcherState) -> None:
        self.lines = render_tabs(state)
        if self.lines:
            self.update(RichText("\n").join(self.lines))
        else:
            self.update(RichText("No matching tabs", style="dim"))


class TabJumpApp(App):
    """Fuzzy tab switcher overlay."""

    CSS = CSS
    ENABLE_COMMAND_PALETTE = False

    # Priority so these reach the switcher before any built-in binding.
    # Printable characters arrive through on_key.
    BINDINGS = [
        Binding("escape", "forward_key('escape')", "Cancel", show=False, priority=True),
        Binding("ctrl+c", "forward_key('ctrl+c')", "Cancel", show=False, priority=True),
        Binding("down", "forward_key('down')", "Down", show=False, priority=True),
        Binding("ctrl+n", "forward_key('ctrl+n')", "Down", show=False, priority=True),
        Binding("up", "forward_key('up')", "Up", show=False, priority=True),
        Binding("ctrl+p", "forward_key('ctrl+p')", "Up", show=False, priority=True),
        Binding("enter", "forward_key('enter')", "Switch", show=False, priority=True),
        Binding("backspace", "forward_key('backspace')", "Delete", show=False, priority=True),
    ]

    def __init__(
        self,
        host: "TmuxHost",
        ignore_case: bool = True,
        poll_interval: float | None = POLL_INTERVAL,
    ) -> None:
        super().__init__()
        self.host = host
        self.state = SwitcherState(ignore_case=ignore_case)
        self._poll_interval = poll_interval
        self._last_snapshot: list[Tab] | None = None
        self.error: HostError | None = None  # Last failed switch, reported by the CLI on exit

    def compose(self) -> ComposeResult:
        yield PromptLine(id="prompt")
        yield TabListView(id="tab-list")

    def on_mount(self) -> None:
        """Load the first snapshot and start polling the host."""
        self._poll_tabs()
        self._redraw()
        if self._poll_interval:
            self.set_interval(self._poll_interval, self._poll_tabs)

    def _poll_tabs(self) -> None:
        """Fetch the host's tab list; dispatch only when it changed."""
        try:
            tabs = self.host.list_tabs()
        except HostError as exc:
            logger.warning(f"Failed to list tabs, keeping previous snapshot: {exc}")
            return
        if tabs == self._last_snapshot:
            return
        self._last_snapshot = tabs
        self.handle_event(TabsUpdated(tuple(tabs)))

    def handle_event(self, event: Event) -> Outcome:
        """Dispatch one event, run its host commands, redraw if needed."""
        outcome = dispatch(self.state, event)
        for command in outcome.commands:
            self._run_command(command)
        if outcome.redraw:
            self._redraw()
        return outcome

    def _run_command(self, command: Command) -> None:
        if isinstance(command, CloseOverlay):
            self.exit()
        elif isinstance(command, SwitchTab):
            try:
                self.host.switch_tab(command.index)
            except HostError as exc:
                # The overlay is already closing; the CLI reports self.error on exit
                logger.error(f"Failed to switch to tab {command.index}: {exc}")
                self.error = exc

    def _redraw(self) -> None:
        self.query_one("#prompt", PromptLine).update_prompt(self.state)
        self.query_one("#tab-list", TabListView).update_tabs(self.state)

    def action_forward_key(self, key: str) -> None:
        """Route a bound key into the dispatcher."""
        self.handle_event(KeyPressed(key))

    def on_key(self, event: events.Key) -> None:
        """Everything not bound above: filter characters and the confirm key."""
        outcome = self.handle_event(KeyPressed(event.key, event.character))
        if outcome.redraw or outcome.commands:
            event.prevent_default()
            event.stop()
