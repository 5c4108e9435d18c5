"""tmux as the tab host: windows are tabs.

PUBLIC API:
  - TmuxHost: list windows, focus a window, open the switcher popup
  - HostError and subclasses
"""

import logging
import os
import subprocess

from .models import Tab

logger = logging.getLogger(__name__)

# window_id is stable for the life of a window; window_index is not
LIST_FORMAT = "#{window_id}\t#{window_active}\t#{window_name}"
COMMAND_TIMEOUT = 5


class HostError(Exception):
    """Base class for failures talking to the host multiplexer."""


class HostNotFoundError(HostError):
    """Raised when the tmux executable is not found on PATH."""


class NotInsideHostError(HostError):
    """Raised when not running inside a tmux client."""


class HostCommandError(HostError):
    """Raised when a tmux command fails to run or exits non-zero."""


class TmuxHost:
    """Talks to the tmux server the overlay was launched from.

    Positions handed out by ``list_tabs`` are ordinals in the last listing;
    ``switch_tab`` maps them back to window ids from that same listing.
    """

    def __init__(self, executable: str = "tmux") -> None:
        self.executable = executable
        self._window_ids: list[str] = []

    def run(self, args: list[str], timeout: float | None = COMMAND_TIMEOUT) -> str:
        """Run a tmux command and return its stdout.

        ``timeout=None`` waits indefinitely (popups block until closed).

        Raises:
            HostNotFoundError: If tmux is not installed.
            HostCommandError: On timeout, OS error or non-zero exit.
        """
        cmd = [self.executable] + args
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except FileNotFoundError:
            raise HostNotFoundError(f"{self.executable} is not installed or not on PATH")
        except (subprocess.TimeoutExpired, OSError) as exc:
            raise HostCommandError(f"failed to run {self.executable}: {exc}")

        if result.returncode != 0:
            stderr = result.stderr.strip()
            raise HostCommandError(stderr or f"{' '.join(cmd)} exited with {result.returncode}")
        return result.stdout

    def check_available(self) -> None:
        """Make sure we can read and change the window list.

        Raises:
            NotInsideHostError: If $TMUX is not set.
            HostNotFoundError: If tmux is not installed.
            HostCommandError: If the server does not answer.
        """
        if not os.environ.get("TMUX"):
            raise NotInsideHostError("not running inside a tmux session ($TMUX is unset)")
        self.run(["display-message", "-p", "#{session_name}"])

    def list_tabs(self) -> list[Tab]:
        """Windows of the current session, in tmux order."""
        out = self.run(["list-windows", "-F", LIST_FORMAT])
        tabs: list[Tab] = []
        window_ids: list[str] = []
        for line in out.splitlines():
            if not line.strip():
                continue
            parts = line.split("\t", 2)
            if len(parts) != 3:
                logger.debug("Skipping malformed list-windows line: %r", line)
                continue
            window_id, active, name = parts
            tabs.append(Tab(position=len(tabs), name=name, active=active == "1"))
            window_ids.append(window_id)
        self._window_ids = window_ids
        return tabs

    def switch_tab(self, index: int) -> None:
        """Focus the window at a 1-based index from the last listing."""
        if not 1 <= index <= len(self._window_ids):
            raise HostCommandError(f"no window at index {index}")
        window_id = self._window_ids[index - 1]
        logger.debug("Switching to window %s (index %d)", window_id, index)
        self.run(["select-window", "-t", window_id])

    def open_popup(self, command: str, width: str = "40%", height: str = "50%") -> None:
        """Run ``command`` in a tmux popup that closes when it exits."""
        self.run(["display-popup", "-E", "-w", width, "-h", height, command], timeout=None)
