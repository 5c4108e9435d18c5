"""CLI entry point for tabjump."""

import logging
import os
import shlex
from logging.handlers import RotatingFileHandler
from pathlib import Path

import click
from rich.console import Console

from . import __version__
from .config import CONFIG_FILE, IGNORE_CASE_ENV, Config, config_from_mapping, load_config, save_config
from .host import HostError, HostNotFoundError, NotInsideHostError, TmuxHost
from .tui_textual import TabJumpApp

console = Console()

LOG_FILE = Path.home() / ".cache" / "tabjump" / "debug.log"


def configure_logging(debug_logging: bool) -> None:
    """Debug logging goes to a rotating file; otherwise warnings only."""
    if debug_logging:
        LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            LOG_FILE,
            maxBytes=1024 * 1024,  # 1MB
            backupCount=2,
        )
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            handlers=[handler],
        )
        logging.info("tabjump starting (debug logging enabled)")
    else:
        # Default: only warn+ so the overlay stays clean
        logging.basicConfig(
            level=logging.WARNING,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )


def parse_options(options: tuple[str, ...]) -> dict[str, str]:
    """Turn repeated ``KEY=VALUE`` options into a string-keyed map."""
    mapping: dict[str, str] = {}
    for option in options:
        key, sep, value = option.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected KEY=VALUE, got {option!r}", param_hint="--option")
        mapping[key.strip()] = value.strip()
    return mapping


@click.group(invoke_without_command=True)
@click.option("--ignore-case/--no-ignore-case", default=None, help="Case-insensitive filtering (default: on)")
@click.option("--option", "-o", "options", multiple=True, metavar="KEY=VALUE", help="Set a configuration option for this run")
@click.option("--debug-logging", is_flag=True, help=f"Write debug logs to {LOG_FILE}")
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def main(ctx: click.Context, ignore_case: bool | None, options: tuple[str, ...], debug_logging: bool, version: bool) -> None:
    """tabjump - fuzzy-search and jump between tmux windows.

    Type to filter by window index or name, Up/Down (or Ctrl-P/Ctrl-N) to
    move, Enter to switch, Esc to cancel.
    """
    if version:
        console.print(f"tabjump v{__version__}")
        return

    # If no subcommand, run the switcher
    if ctx.invoked_subcommand is None:
        config = config_from_mapping(parse_options(options), base=load_config())
        # Apply CLI overrides (not saved to config file)
        if ignore_case is not None:
            config.ignore_case = ignore_case
        configure_logging(debug_logging)
        run_switcher(config)


def run_switcher(config: Config, host: TmuxHost | None = None) -> None:
    """Run the switcher overlay against the current tmux session."""
    if host is None:
        host = TmuxHost()

    try:
        host.check_available()
    except NotInsideHostError:
        console.print("[red]Error:[/red] tabjump must be run inside a tmux session")
        raise SystemExit(1)
    except HostNotFoundError:
        console.print("[red]Error:[/red] tmux is not installed or not on PATH")
        raise SystemExit(1)
    except HostError as exc:
        console.print(f"[red]Error:[/red] tmux is not responding: {exc}")
        raise SystemExit(1)

    app = TabJumpApp(host, ignore_case=config.ignore_case)
    try:
        app.run()
    except KeyboardInterrupt:
        pass

    if app.error is not None:
        console.print(f"[red]Error:[/red] could not switch tab: {app.error}")
        raise SystemExit(1)


@main.command()
@click.option("--width", "-w", default="40%", show_default=True, help="Popup width (cells or percentage)")
@click.option("--height", "-h", default="50%", show_default=True, help="Popup height (cells or percentage)")
@click.option("--ignore-case/--no-ignore-case", default=None, help="Case-insensitive filtering for this run")
@click.option("--option", "-o", "options", multiple=True, metavar="KEY=VALUE", help="Set a configuration option for this run")
@click.option("--debug-logging", is_flag=True, help=f"Write debug logs to {LOG_FILE}")
def popup(width: str, height: str, ignore_case: bool | None, options: tuple[str, ...], debug_logging: bool) -> None:
    """Open the switcher in a tmux popup.

    Switcher options given here are passed on to the relaunched tabjump.

    To bind it directly in ~/.tmux.conf instead:
      bind-key w display-popup -E -w 40% -h 50% tabjump
    """
    parse_options(options)

    host = TmuxHost()
    argv = ["tabjump"]
    if ignore_case is not None:
        argv.append("--ignore-case" if ignore_case else "--no-ignore-case")
    for option in options:
        argv.extend(["-o", option])
    if debug_logging:
        argv.append("--debug-logging")
    command = shlex.join(argv)

    try:
        host.check_available()
        host.open_popup(command, width=width, height=height)
    except NotInsideHostError:
        console.print("[red]Error:[/red] tabjump popup must be run inside a tmux session")
        raise SystemExit(1)
    except HostError as exc:
        console.print(f"[red]Error:[/red] failed to open popup: {exc}")
        raise SystemExit(1)


@main.command()
@click.option("--ignore-case/--no-ignore-case", default=None, help="Case-insensitive filtering")
@click.option("--show", is_flag=True, help="Show current configuration")
def config(ignore_case: bool | None, show: bool) -> None:
    """Configure tabjump settings.

    Examples:
      tabjump config --no-ignore-case    # Case-sensitive filtering
      tabjump config --show              # Show current config
    """
    if show:
        current_config = load_config()

        console.print("\n[bold]Current Configuration:[/bold]")
        console.print(f"  Ignore Case: [cyan]{current_config.ignore_case}[/cyan]")
        console.print(f"\nConfig file: [dim]{CONFIG_FILE}[/dim]")

        if os.getenv(IGNORE_CASE_ENV):
            console.print(f"\n[yellow]Note:[/yellow] {IGNORE_CASE_ENV} is set: {os.getenv(IGNORE_CASE_ENV)}")
        return

    if ignore_case is None:
        console.print("Use --ignore-case/--no-ignore-case to change filtering.")
        console.print("Use --show to view current configuration.")
        return

    new_config = Config(ignore_case=ignore_case)
    save_config(new_config)

    console.print("\n[green]Configuration saved![/green]")
    console.print(f"  Ignore Case: [cyan]{new_config.ignore_case}[/cyan]")
    console.print(f"\nSaved to: [dim]{CONFIG_FILE}[/dim]")


if __name__ == "__main__":
    main()
