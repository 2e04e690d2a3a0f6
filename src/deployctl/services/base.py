"""BaseService — foundation for registry-backed services.

Every service receives an :class:`~deployctl.infrastructure.api.ApiClient`
at construction time and reads records only through it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from deployctl.services.result import ServiceError

if TYPE_CHECKING:
    from deployctl.infrastructure.api import ApiClient, ApiError


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class ServiceListService(BaseService):
            async def list_services(self, org_name, options) -> ServiceResult:
                orgs = await self._api.orgs.get(name=org_name)
                ...
    """

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    @staticmethod
    def _upstream_error(exc: ApiError) -> ServiceError:
        """Carry a registry rejection through unchanged.

        The registry's ``type`` becomes the error code and its message is
        kept verbatim, so callers can branch on the original classification.
        """
        detail: dict[str, object] = {"upstream": True}
        if exc.status_code is not None:
            detail["status_code"] = exc.status_code
        return ServiceError(code=exc.type, message=exc.message, detail=detail)
