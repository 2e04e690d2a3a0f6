"""Protocols for the registry API consumed by the service layer.

Services depend only on these contracts, never on the httpx adapter,
so tests can substitute an in-memory client.
"""

from __future__ import annotations

from typing import Protocol

from deployctl.domain.records import Organization, Project, Service


class RecordEndpoint[T](Protocol):
    """One record kind's query endpoint."""

    async def get(self, **filters: str) -> list[T]:
        """Return the records matching *filters*, in registry order.

        Zero matches is an empty list, not an error.

        Raises:
            ApiError: When the registry rejects the call.
        """
        ...  # pragma: no cover


class ApiClient(Protocol):
    """Registry client exposing one endpoint per record kind."""

    @property
    def orgs(self) -> RecordEndpoint[Organization]: ...  # pragma: no cover

    @property
    def projects(self) -> RecordEndpoint[Project]: ...  # pragma: no cover

    @property
    def services(self) -> RecordEndpoint[Service]: ...  # pragma: no cover
