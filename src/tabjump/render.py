"""Project switcher state onto styled display lines."""

from rich.style import Style
from rich.text import Text

from .models import Tab
from .state import SwitcherState

PLACEHOLDER = "(filter by index or name)"

PROMPT_STYLE = Style(color="cyan", bold=True)
FILTER_STYLE = Style(dim=True, italic=True)
ACTIVE_STYLE = Style(color="red", bold=True)
SELECTED_STYLE = Style(bgcolor="cyan", bold=True)


def render_prompt(state: SwitcherState) -> Text:
    """The ``> filter`` line; shows the placeholder while the filter is empty."""
    line = Text()
    line.append(">", style=PROMPT_STYLE)
    line.append(" ")
    line.append(state.filter_text or PLACEHOLDER, style=FILTER_STYLE)
    return line


def render_tab(tab: Tab, selected: bool) -> Text:
    """One ``{index}:{name}`` row.

    Styles are combined rather than replaced, so the active tab keeps its
    red foreground when the selection background lands on it.
    """
    style = Style()
    if tab.active:
        style += ACTIVE_STYLE
    if selected:
        style += SELECTED_STYLE
    return Text(f"{tab.index}:{tab.name}", style=style)


def render_tabs(state: SwitcherState) -> list[Text]:
    return [render_tab(tab, tab.position == state.selected) for tab in state.viewable_tabs()]


def render_lines(state: SwitcherState) -> list[Text]:
    """Prompt line followed by the ranked tab list."""
    return [render_prompt(state), *render_tabs(state)]
