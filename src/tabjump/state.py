"""Switcher state: tab snapshot, filter text and the highlighted tab."""

import logging
from dataclasses import dataclass, field

from .filtering import Scorer, fuzzy_score, viewable_tabs
from .models import Tab, find_active, find_by_position

logger = logging.getLogger(__name__)


@dataclass
class SwitcherState:
    """Everything the overlay knows, owned by one overlay session.

    ``selected`` holds a tab position, never a list index: the ranked view is
    recomputed on each move, so a stale or reshuffled selection is repaired
    by wrapping instead of pointing at the wrong tab.
    """

    tabs: list[Tab] = field(default_factory=list)
    filter_text: str = ""
    selected: int | None = None
    ignore_case: bool = True
    scorer: Scorer = fuzzy_score

    def viewable_tabs(self) -> list[Tab]:
        return viewable_tabs(
            self.tabs, self.filter_text, scorer=self.scorer, ignore_case=self.ignore_case
        )

    def selected_tab(self) -> Tab | None:
        """The snapshot tab under the selection, if it still exists."""
        return find_by_position(self.tabs, self.selected)

    def reset_selection(self) -> None:
        """Select the top-ranked tab, or nothing when no tab matches."""
        tabs = self.viewable_tabs()
        self.selected = tabs[0].position if tabs else None

    def select_down(self) -> None:
        """Move to the next ranked tab, wrapping to the first."""
        self._step(self.viewable_tabs())

    def select_up(self) -> None:
        """Move to the previous ranked tab, wrapping to the last."""
        self._step(list(reversed(self.viewable_tabs())))

    def _step(self, ordered: list[Tab]) -> None:
        if not ordered:
            return
        positions = [tab.position for tab in ordered]
        if self.selected in positions:
            i = positions.index(self.selected) + 1
            if i < len(positions):
                self.selected = positions[i]
                return
        # Empty, stale or at the end
        self.selected = positions[0]

    def push_char(self, character: str) -> None:
        """Append to the filter text and re-rank."""
        self.filter_text += character
        self.reset_selection()

    def pop_char(self) -> None:
        """Drop the last filter character; no-op on an empty filter."""
        if not self.filter_text:
            return
        self.filter_text = self.filter_text[:-1]
        self.reset_selection()

    def replace_tabs(self, tabs: list[Tab]) -> None:
        """Install a new snapshot from the host.

        The host-active tab becomes the selection when it is viewable under
        the current filter; otherwise the top-ranked tab is selected.
        """
        self.tabs = list(tabs)
        active = find_active(self.tabs)
        if active is not None and active in self.viewable_tabs():
            self.selected = active.position
        else:
            self.reset_selection()
        logger.debug(
            "Snapshot replaced: %d tabs, active=%s, selected=%s",
            len(self.tabs),
            active.position if active else None,
            self.selected,
        )
