"""httpx adapter for the registry API.

Responsibilities:
- Issue ``GET /orgs``, ``GET /projects``, ``GET /services`` with query filters.
- Parse envelope arrays into record models.
- Map every HTTP or transport failure to :class:`ApiError` with a ``type``.

No retries and no pagination happen here; a failed call surfaces at once.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from deployctl import __version__
from deployctl.domain.records import Organization, Project, Service
from deployctl.infrastructure.api.errors import (
    INTERNAL_SERVER,
    NOT_FOUND,
    UNREACHABLE,
    ApiError,
)

if TYPE_CHECKING:
    from deployctl.config.models import ApiConfig

log = structlog.get_logger(__name__)


class RecordClient[T: BaseModel]:
    """Query one registry collection and parse its envelopes as *model*."""

    def __init__(self, http: httpx.AsyncClient, path: str, model: type[T]) -> None:
        self._http = http
        self._path = path
        self._model = model

    async def get(self, **filters: str) -> list[T]:
        params = {k: v for k, v in filters.items() if v is not None}
        log.debug("api.request", path=self._path, params=params)
        try:
            r = await self._http.get(self._path, params=params)
        except httpx.TransportError as exc:
            raise ApiError(f"could not reach registry: {exc}", type=UNREACHABLE) from exc

        if r.is_error:
            raise _error_from_response(r)

        try:
            payload = r.json()
            return [self._model.model_validate(item) for item in payload]
        except (ValueError, TypeError, ValidationError) as exc:
            raise ApiError(
                f"invalid {self._path.strip('/')} payload from registry",
                type=INTERNAL_SERVER,
                status_code=r.status_code,
            ) from exc


class RegistryClient:
    """Registry API client satisfying :class:`~deployctl.infrastructure.api.ApiClient`."""

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._orgs = RecordClient(http, "/orgs", Organization)
        self._projects = RecordClient(http, "/projects", Project)
        self._services = RecordClient(http, "/services", Service)

    @property
    def orgs(self) -> RecordClient[Organization]:
        return self._orgs

    @property
    def projects(self) -> RecordClient[Project]:
        return self._projects

    @property
    def services(self) -> RecordClient[Service]:
        return self._services


def _error_from_response(r: httpx.Response) -> ApiError:
    """Build an ApiError from a registry error response.

    The registry replies ``{"type": ..., "error": [...]}``; fall back to the
    status code when the body is not in that shape.
    """
    body: Any = None
    try:
        body = r.json()
    except ValueError:
        pass

    err_type = NOT_FOUND if r.status_code == httpx.codes.NOT_FOUND else INTERNAL_SERVER
    message = f"registry returned {r.status_code}"
    if isinstance(body, dict):
        err_type = str(body.get("type") or err_type)
        detail = body.get("error")
        if isinstance(detail, list) and detail:
            message = "\n".join(str(d) for d in detail)
        elif isinstance(detail, str) and detail:
            message = detail
    return ApiError(message, type=err_type, status_code=r.status_code)


@asynccontextmanager
async def open_registry_client(
    config: ApiConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[RegistryClient]:
    """Open an httpx-backed RegistryClient for the lifetime of the block."""
    headers = {
        "Accept": "application/json",
        "User-Agent": f"deployctl/{__version__}",
    }
    if config.token:
        headers["Authorization"] = f"Bearer {config.token}"
    async with httpx.AsyncClient(
        base_url=config.base_url,
        headers=headers,
        timeout=config.timeout,
        transport=transport,
    ) as http:
        yield RegistryClient(http)
