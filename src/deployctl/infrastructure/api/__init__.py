"""Registry API boundary: client protocol, error type, and httpx adapter."""

from deployctl.infrastructure.api.errors import ApiError
from deployctl.infrastructure.api.protocols import ApiClient, RecordEndpoint

__all__ = ["ApiClient", "ApiError", "RecordEndpoint"]
