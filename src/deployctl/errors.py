"""Exception hierarchy for deployctl.

Service-layer operations report failures as ``ServiceResult`` values.
Exceptions are reserved for adapter boundaries and programming errors.

Hierarchy
---------
DeployctlError
└── ApiError
"""

from __future__ import annotations


class DeployctlError(Exception):
    """Base exception for all deployctl errors."""
