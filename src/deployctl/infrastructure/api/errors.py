"""Errors raised by the registry API boundary."""

from __future__ import annotations

from deployctl.errors import DeployctlError

NOT_FOUND = "not_found"
INTERNAL_SERVER = "internal_server"
UNREACHABLE = "unreachable"


class ApiError(DeployctlError):
    """A rejected registry call.

    ``type`` carries the registry's classification of the failure
    (e.g. ``"not_found"``) so callers can branch on it.
    """

    def __init__(self, message: str, *, type: str, status_code: int | None = None) -> None:  # noqa: A002
        super().__init__(message)
        self.type = type
        self.status_code = status_code

    @property
    def message(self) -> str:
        return str(self)

    def __repr__(self) -> str:
        return f"ApiError({self.message!r}, type={self.type!r})"
