"""Subcommand modules for deployctl.

register_commands() imports command modules lazily so ``deployctl --help``
stays fast as the command set grows.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups on the root CLI group."""
    from deployctl.commands.services import services

    cli.add_command(services)
