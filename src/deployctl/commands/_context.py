"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Owns the settings, opens the registry client for
the duration of an async operation, and emits results with the right
stream and exit code.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

import click

from deployctl.config.logging import configure_logging
from deployctl.infrastructure.api.client import open_registry_client
from deployctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from deployctl.config.settings import DeployctlSettings
    from deployctl.infrastructure.api import ApiClient
    from deployctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    No network client exists until :meth:`run_with_api` is called, so
    ``--help`` and ``--version`` never touch the registry.
    """

    def __init__(self, settings: DeployctlSettings) -> None:
        self.settings = settings

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from deployctl.services.telemetry import enable_telemetry

            enable_telemetry()

    def run_with_api(
        self,
        operation: Callable[[ApiClient], Awaitable[ServiceResult]],
    ) -> ServiceResult:
        """Open a registry client, await *operation* with it, and close it.

        The client is opened and closed inside the same event loop.
        """

        async def _main() -> ServiceResult:
            async with open_registry_client(self.settings.api) as api:
                return await operation(api)

        return asyncio.run(_main())

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
