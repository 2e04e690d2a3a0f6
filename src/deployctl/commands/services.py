"""Command group: services within an organization's projects."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from deployctl.commands._base import DeployGroup
from deployctl.domain.options import ListServicesOptions, validate_list_options
from deployctl.services.result import ServiceError, ServiceResult
from deployctl.services.service_list import ServiceListService

if TYPE_CHECKING:
    from deployctl.commands._context import AppContext
    from deployctl.infrastructure.api import ApiClient

_SERVICES_EXAMPLES = """\
  deployctl services list --org my-org --project api
  deployctl services list --org my-org --all
  deployctl --json services list -p api"""

ORG_REQUIRED_MESSAGE = "--org is required."


@click.group(cls=DeployGroup, examples=_SERVICES_EXAMPLES)
def services() -> None:
    """List and inspect services."""


@services.command(
    name="list",
    examples="""\
  deployctl services list --org my-org --project api
  deployctl services list --org my-org --all
  deployctl -q services list --all
  DEPLOYCTL_CONTEXT__ORG=my-org deployctl services list -p api""",
)
@click.option("-o", "--org", default=None, help="Organization to list services in.")
@click.option("-p", "--project", default=None, help="Only services in this project.")
@click.option("-a", "--all", "all_projects", is_flag=True, help="Services in every project.")
@click.pass_obj
def list_services(
    app: AppContext,
    org: str | None,
    project: str | None,
    all_projects: bool,
) -> None:
    """List services in one project, or in every project with --all.

    --org and --project default to the [context] section of deployctl.toml.
    """
    context = app.settings.context
    if project is None and not all_projects:
        project = context.project
    options = ListServicesOptions(project=project, all_projects=all_projects)

    # Flag rules are reported before a missing org.
    check = validate_list_options(options)
    if not check.valid:
        error = ServiceError(code=check.code, message="; ".join(check.errors))
        app.emit(ServiceResult.failure("list_services", error))
        return

    org_name = org or context.org
    if not org_name:
        error = ServiceError(code="MISSING_ORG", message=ORG_REQUIRED_MESSAGE)
        app.emit(ServiceResult.failure("list_services", error))
        return

    async def _list(api: ApiClient) -> ServiceResult:
        return await ServiceListService(api).list_services(org_name, options)

    app.emit(app.run_with_api(_list))
