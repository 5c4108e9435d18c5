"""Map host events onto switcher state changes and host commands."""

import logging
from dataclasses import dataclass, field

from .models import Tab
from .state import SwitcherState

logger = logging.getLogger(__name__)

# Typing this character confirms, like Enter. It can't be used in a filter.
CONFIRM_CHARACTER = "Y"


# --- Events -----------------------------------------------------------------


@dataclass(frozen=True)
class TabsUpdated:
    """The host's tab list changed; ``tabs`` is the full new snapshot."""

    tabs: tuple[Tab, ...]


@dataclass(frozen=True)
class KeyPressed:
    """Raw key input, named the way Textual names keys ("ctrl+n", "enter")."""

    key: str
    character: str | None = None


@dataclass(frozen=True)
class Unknown:
    """Any other host event."""

    kind: str = ""


Event = TabsUpdated | KeyPressed | Unknown


# --- Commands ---------------------------------------------------------------


@dataclass(frozen=True)
class CloseOverlay:
    """Dismiss the switcher."""


@dataclass(frozen=True)
class SwitchTab:
    """Focus the host tab at a 1-based index."""

    index: int


Command = CloseOverlay | SwitchTab


@dataclass
class Outcome:
    """Result of dispatching one event."""

    commands: list[Command] = field(default_factory=list)
    redraw: bool = False


def dispatch(state: SwitcherState, event: Event) -> Outcome:
    """Apply one event to the state, returning host commands and redraw flag."""
    logger.debug("Dispatching %r", event)

    match event:
        case TabsUpdated(tabs=tabs):
            state.replace_tabs(list(tabs))
            return Outcome(redraw=True)

        case KeyPressed(key="escape" | "ctrl+c"):
            return Outcome(commands=[CloseOverlay()])

        case KeyPressed(key="down" | "ctrl+n"):
            state.select_down()
            return Outcome(redraw=True)

        case KeyPressed(key="up" | "ctrl+p"):
            state.select_up()
            return Outcome(redraw=True)

        case KeyPressed(key=key, character=character) if (
            key == "enter" or character == CONFIRM_CHARACTER
        ):
            tab = state.selected_tab()
            if tab is None:
                logger.debug("Confirm ignored: nothing selected (selected=%s)", state.selected)
                return Outcome()
            return Outcome(commands=[CloseOverlay(), SwitchTab(tab.index)])

        case KeyPressed(key="backspace"):
            state.pop_char()
            return Outcome(redraw=True)

        case KeyPressed(character=str(character)) if character and character.isprintable():
            state.push_char(character)
            return Outcome(redraw=True)

        case _:
            return Outcome()
