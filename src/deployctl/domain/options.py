"""Typed options for ``services list`` and the flag validation rules.

Rules are checked in order and run before any API call:

1. ``--project`` together with ``--all`` is a conflict.
2. Neither flag given means the scope is under-specified.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

PROJECT_WITH_ALL_MESSAGE = "project flag cannot be used with --all"
PROJECT_REQUIRED_MESSAGE = "--project is required."


class ListServicesOptions(BaseModel):
    """Flags accepted by ``services list``.

    ``all_projects`` is also populated from the ``all`` key, matching the
    flag name on the command line.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    project: str | None = None
    all_projects: bool = Field(default=False, alias="all")


@dataclass(frozen=True)
class ValidationResult:
    """Result of a flag validation check."""

    valid: bool
    code: str = ""
    errors: list[str] = field(default_factory=list)


def validate_list_options(options: ListServicesOptions) -> ValidationResult:
    """Check *options* against the flag rules; first violation wins.

    Pure: no I/O. An empty project name counts as unset.
    """
    if options.project and options.all_projects:
        return ValidationResult(
            valid=False, code="FLAG_CONFLICT", errors=[PROJECT_WITH_ALL_MESSAGE]
        )
    if not options.project and not options.all_projects:
        return ValidationResult(
            valid=False, code="MISSING_FLAG", errors=[PROJECT_REQUIRED_MESSAGE]
        )
    return ValidationResult(valid=True)
