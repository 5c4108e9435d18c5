"""Data models for tabjump."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Tab:
    """A host tab (a tmux window) as seen in one snapshot.

    ``position`` is zero-based and unique within a snapshot, but the host
    may renumber tabs between snapshots.
    """

    position: int
    name: str
    active: bool = False

    @property
    def index(self) -> int:
        """1-based index as shown to the user and passed back to the host."""
        return self.position + 1


def find_active(tabs: list[Tab]) -> Tab | None:
    """Return the host-marked active tab, if the snapshot has one."""
    for tab in tabs:
        if tab.active:
            return tab
    return None


def find_by_position(tabs: list[Tab], position: int | None) -> Tab | None:
    """Return the tab at ``position``, or None if it is not in the snapshot."""
    if position is None:
        return None
    for tab in tabs:
        if tab.position == position:
            return tab
    return None
