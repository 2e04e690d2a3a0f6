"""Typed payload contracts for service and adapter boundaries.

These models validate operation payload shapes before they leave the
service layer, so a renamed key fails in tests rather than in a
downstream renderer or script.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="json")


class EnvelopeItem(BaseModel):
    """One record as returned by the registry: ``{id, version, body}``."""

    model_config = ConfigDict(extra="forbid")

    id: str
    version: int
    body: dict[str, Any]


class ListServicesResultData(BaseModel):
    """Payload contract for ``ServiceListService.list_services``."""

    model_config = ConfigDict(extra="forbid")

    projects: list[EnvelopeItem]
    services: list[EnvelopeItem]
