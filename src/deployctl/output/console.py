"""Rich Console factory and theme for deployctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DEPLOY_THEME = Theme(
    {
        "deploy.ok": "bold green",
        "deploy.error": "bold red",
        "deploy.warning": "bold yellow",
        "deploy.op": "bold cyan",
        "deploy.key": "dim",
        "deploy.id": "bold blue",
        "deploy.org": "bold magenta",
        "deploy.project": "green",
        "deploy.service": "bold",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=DEPLOY_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
