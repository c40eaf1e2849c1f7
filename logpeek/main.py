"""
CLI Interface for logpeek.

Provides the interactive viewer over a JSON log stream, a demo log
generator to try it with, and a configuration check.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional, TextIO

import typer
from rich.console import Console

from .demo import run_demo
from .ui.app import LogViewerApp
from .utils.config import Config, get_config
from .utils.log_setup import setup_logging


# Initialize CLI app
app = typer.Typer(
    name="logpeek",
    help="Interactive terminal viewer for structured (JSON) log streams"
)
console = Console(stderr=True)
logger = logging.getLogger(__name__)


def check_config() -> Config:
    """Check configuration and display any issues."""
    config = get_config()
    missing = config.validate()

    if missing:
        console.print("\n[bold red]⚠️ Configuration Issues:[/bold red]")
        for item in missing:
            console.print(f"  [yellow]• {item}[/yellow]")
        console.print()

    return config


def open_log_input(log_file: Optional[Path]) -> TextIO:
    """
    Open the stream records are read from.

    With no file, stdin must be a pipe. The pipe is moved to a private
    descriptor and the controlling terminal is put back on fd 0 so the UI
    can still read keystrokes.

    Raises:
        OSError: If the file cannot be opened or there is no terminal
        ValueError: If stdin is a terminal and no file was given
    """
    if log_file is not None:
        stream = log_file.open("r", encoding="utf-8", errors="replace")
        if not sys.stdin.isatty():
            _attach_terminal()
        return stream

    if sys.stdin.isatty():
        raise ValueError("no input: pipe JSON logs into logpeek or pass a log file")

    data_fd = os.dup(sys.stdin.fileno())
    _attach_terminal()
    return os.fdopen(data_fd, "r", encoding="utf-8", errors="replace")


def _attach_terminal() -> None:
    tty_fd = os.open("/dev/tty", os.O_RDONLY)
    os.dup2(tty_fd, 0)
    os.close(tty_fd)
    sys.stdin = open(0, "r")


@app.command()
def view(
    log_file: Optional[Path] = typer.Argument(
        None,
        help="Path to a JSON log file (reads stdin when omitted)",
        exists=True,
        dir_okay=False,
    ),
):
    """
    View a JSON log stream interactively.

    Keys: k/j move, ? search, Enter zoom, Esc back, q quit.

    Example:
        my-service | logpeek view
        logpeek view service.log
    """
    config = check_config()
    if config.validate():
        raise typer.Exit(code=1)

    setup_logging(config)
    logger.info("Starting viewer (input: %s)", log_file or "stdin")

    try:
        stream = open_log_input(log_file)
    except (OSError, ValueError) as e:
        logger.error("Cannot open input: %s", e)
        console.print(f"[red]Cannot start viewer: {e}[/red]")
        raise typer.Exit(code=1)

    viewer = LogViewerApp(stream, config)
    viewer.run()

    code = viewer.return_code or 0
    logger.info("Viewer exited with code %d", code)
    raise typer.Exit(code=code)


@app.command()
def demo(
    interval: float = typer.Option(
        0.5,
        "--interval", "-i",
        help="Seconds between log lines"
    ),
    count: Optional[int] = typer.Option(
        None,
        "--count", "-n",
        help="Stop after this many lines (default: run forever)"
    ),
    error_ratio: float = typer.Option(
        0.2,
        "--error-ratio", "-e",
        min=0.0,
        max=1.0,
        help="Share of lines logged at error level"
    ),
):
    """
    Emit demo JSON log lines to stdout.

    Example:
        logpeek demo | logpeek view
    """
    try:
        run_demo(sys.stdout, interval=interval, count=count, error_ratio=error_ratio)
    except (BrokenPipeError, KeyboardInterrupt):
        # Reader went away
        raise typer.Exit(code=0)


@app.command()
def config():
    """Show current configuration status."""
    cfg = get_config()
    console.print("\n[bold]Current Configuration:[/bold]\n")
    console.print(str(cfg))

    problems = cfg.validate()
    if problems:
        console.print("\n[bold red]Configuration Problems:[/bold red]")
        for item in problems:
            console.print(f"  [yellow]• {item}[/yellow]")
        raise typer.Exit(code=1)

    console.print("\n[bold green]✅ All configuration is valid![/bold green]")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
