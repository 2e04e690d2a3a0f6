"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, deployctl.toml only contains
overrides. A project checkout usually needs only ``[context] org``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "https://registry.deployctl.dev/v1"


class ApiConfig(BaseModel):
    """[api] section."""

    model_config = {"frozen": True}

    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0
    token: str | None = Field(default=None, repr=False)


class ContextConfig(BaseModel):
    """[context] section — directory preferences for org and project."""

    model_config = {"frozen": True}

    org: str | None = None
    project: str | None = None
