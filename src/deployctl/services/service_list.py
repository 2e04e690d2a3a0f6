"""ServiceListService — resolution pipeline behind ``services list``.

Four stages, awaited strictly in order; the first failure ends the run:

1. validate flags      — no network access
2. resolve org         — ``orgs.get(name=...)``
3. resolve project(s)  — ``projects.get(org_id=..., [name=...])``
4. fetch + filter      — one ``services.get(org_id=...)``, narrowed by project id

Each stage returns either its value or a ServiceError; registry rejections
are carried through with their ``type`` as the error code.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from deployctl.domain.options import ListServicesOptions, validate_list_options
from deployctl.domain.records import Organization, Project, Service
from deployctl.infrastructure.api import ApiError
from deployctl.infrastructure.api.errors import NOT_FOUND
from deployctl.services.base import BaseService
from deployctl.services.contracts import ListServicesResultData, dump_validated
from deployctl.services.result import ServiceError, ServiceResult
from deployctl.services.telemetry import trace_span, traced

log = structlog.get_logger(__name__)

_OP = "list_services"


@dataclass(frozen=True)
class ServiceListing:
    """Resolved projects paired with their services."""

    projects: list[Project]
    services: list[Service]


class ServiceListService(BaseService):
    """Resolves an org and project scope, then lists the services in it."""

    @traced
    async def list_services(
        self,
        org_name: str,
        options: ListServicesOptions,
    ) -> ServiceResult:
        """Run the full pipeline for *org_name* and *options*.

        Returns exactly one of a ``{projects, services}`` payload or a
        single error; never a partial result.
        """
        warnings: list[str] = []

        with trace_span("validate_flags"):
            check = validate_list_options(options)
        if not check.valid:
            log.debug("services.list.invalid_flags", code=check.code)
            return ServiceResult.failure(
                _OP, ServiceError(code=check.code, message="; ".join(check.errors))
            )

        with trace_span("resolve_org"):
            org = await self.resolve_org(org_name, warnings)
        if isinstance(org, ServiceError):
            return ServiceResult.failure(_OP, org)

        with trace_span("resolve_projects") as span:
            projects = await self.resolve_projects(org, options)
            if span is not None and not isinstance(projects, ServiceError):
                span.annotate("count", len(projects))
        if isinstance(projects, ServiceError):
            return ServiceResult.failure(_OP, projects)

        with trace_span("fetch_services") as span:
            listing = await self.fetch_services(org, projects)
            if span is not None and not isinstance(listing, ServiceError):
                span.annotate("count", len(listing.services))
        if isinstance(listing, ServiceError):
            return ServiceResult.failure(_OP, listing)

        data = dump_validated(
            ListServicesResultData,
            {
                "projects": [p.to_envelope() for p in listing.projects],
                "services": [s.to_envelope() for s in listing.services],
            },
        )
        return ServiceResult(
            ok=True,
            op=_OP,
            data=data,
            warnings=warnings,
            meta={"org": org.name, "all": options.all_projects},
        )

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    async def resolve_org(
        self,
        org_name: str,
        warnings: list[str],
    ) -> Organization | ServiceError:
        """Look up *org_name*; the first match is taken as the org.

        Extra matches are reported in *warnings* rather than failing the run.
        """
        try:
            orgs = await self._api.orgs.get(name=org_name)
        except ApiError as exc:
            log.debug("services.list.org_lookup_failed", org=org_name, type=exc.type)
            return self._upstream_error(exc)

        if not orgs:
            return ServiceError(
                code=NOT_FOUND,
                message=f"org not found: {org_name}",
                detail={"org": org_name},
            )
        if len(orgs) > 1:
            log.warning("services.list.ambiguous_org", org=org_name, count=len(orgs))
            warnings.append(f"multiple orgs named {org_name}; using {orgs[0].id}")
        log.debug("services.list.org_resolved", org=org_name, org_id=orgs[0].id)
        return orgs[0]

    async def resolve_projects(
        self,
        org: Organization,
        options: ListServicesOptions,
    ) -> list[Project] | ServiceError:
        """Return every project in *org*, or the one named by ``options.project``."""
        try:
            if options.all_projects:
                projects = await self._api.projects.get(org_id=org.id)
                log.debug("services.list.projects_resolved", count=len(projects))
                return projects
            name = options.project or ""
            candidates = await self._api.projects.get(org_id=org.id, name=name)
        except ApiError as exc:
            log.debug("services.list.project_lookup_failed", org_id=org.id, type=exc.type)
            return self._upstream_error(exc)

        # The registry may ignore the name filter.
        matches = [p for p in candidates if p.name == name]
        if not matches:
            return ServiceError(
                code="PROJECT_NOT_FOUND",
                message=f"project not found: {name}",
                detail={"project": name},
            )
        if len(matches) > 1:
            log.warning(
                "services.list.ambiguous_project",
                org=org.name,
                project=name,
                count=len(matches),
            )
            return ServiceError(
                code="AMBIGUOUS_PROJECT",
                message=f"multiple projects named {name} in org {org.name}",
                detail={"project": name, "project_ids": [p.id for p in matches]},
            )
        log.debug("services.list.projects_resolved", count=1)
        return matches

    async def fetch_services(
        self,
        org: Organization,
        projects: list[Project],
    ) -> ServiceListing | ServiceError:
        """Fetch the org's services once and keep those in *projects*."""
        try:
            services = await self._api.services.get(org_id=org.id)
        except ApiError as exc:
            log.debug("services.list.service_lookup_failed", org_id=org.id, type=exc.type)
            return self._upstream_error(exc)

        project_ids = {p.id for p in projects}
        in_scope = [s for s in services if s.body.project_id in project_ids]
        log.debug("services.list.services_filtered", fetched=len(services), kept=len(in_scope))
        return ServiceListing(projects=projects, services=in_scope)
