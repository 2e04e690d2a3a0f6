"""Registry record models — the ``{id, version, body}`` envelope per kind.

All records are frozen pydantic models. The pipeline only reads them;
unknown body attributes are kept so payloads pass through unmodified.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OrgBody(BaseModel):
    """Organization attributes."""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str


class ProjectBody(BaseModel):
    """Project attributes. ``name`` is unique within its organization."""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str
    org_id: str


class ServiceBody(BaseModel):
    """Service attributes. ``name`` is not assumed unique."""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str
    org_id: str
    project_id: str


class _Envelope(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    version: int = Field(ge=1)

    @property
    def name(self) -> str:
        return self.body.name  # type: ignore[attr-defined]

    def to_envelope(self) -> dict[str, Any]:
        """Dump as a plain ``{id, version, body}`` dict."""
        return self.model_dump(mode="json")


class Organization(_Envelope):
    """Top-level tenant scope owning projects and services."""

    body: OrgBody


class Project(_Envelope):
    """Named grouping of services within an organization."""

    body: ProjectBody


class Service(_Envelope):
    """A deployable unit belonging to exactly one project."""

    body: ServiceBody
