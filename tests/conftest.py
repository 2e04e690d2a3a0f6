"""Shared pytest fixtures and test helpers for deployctl tests."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from deployctl.domain.records import Organization, Project, Service
from deployctl.services.telemetry import disable_telemetry

# Fixed IDs: this module is imported both as `conftest` and `tests.conftest`.
ORG = Organization.model_validate(
    {"id": "org_0000000000000001", "version": 1, "body": {"name": "my-org"}}
)

PROJECTS = [
    Project.model_validate(
        {
            "id": f"prj_000000000000000{n}",
            "version": 1,
            "body": {"name": f"api-{n}", "org_id": ORG.id},
        }
    )
    for n in (1, 2)
]

SERVICES = [
    Service.model_validate(
        {
            "id": f"svc_000000000000000{i}",
            "version": 1,
            "body": {"name": name, "org_id": ORG.id, "project_id": project.id},
        }
    )
    for i, (name, project) in enumerate(
        (
            ("api-1", PROJECTS[0]),
            ("api-2", PROJECTS[1]),
            ("api-2-1", PROJECTS[1]),
        ),
        start=1,
    )
]


class FakeEndpoint:
    """In-memory RecordEndpoint returning a canned response.

    ``result`` is either a list of records or an exception to raise.
    Every call's filters are recorded in ``calls``.
    """

    def __init__(self, result: list[Any] | Exception) -> None:
        self.result = result
        self.calls: list[dict[str, str]] = []

    async def get(self, **filters: str) -> list[Any]:
        self.calls.append(filters)
        if isinstance(self.result, Exception):
            raise self.result
        return list(self.result)


class FakeApi:
    """In-memory ApiClient seeded with the sample org, projects, and services."""

    def __init__(self) -> None:
        self.orgs = FakeEndpoint([ORG])
        self.projects = FakeEndpoint(list(PROJECTS))
        self.services = FakeEndpoint(list(SERVICES))

    @property
    def call_count(self) -> int:
        return len(self.orgs.calls) + len(self.projects.calls) + len(self.services.calls)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real preferences files and DEPLOYCTL_* env vars out of tests."""
    for var in ("DEPLOYCTL_CONFIG", "DEPLOYCTL_CONTEXT__ORG", "DEPLOYCTL_CONTEXT__PROJECT"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def patch_registry(monkeypatch: pytest.MonkeyPatch, fake_api: FakeApi) -> FakeApi:
    """Route the CLI's registry client to *fake_api*."""

    @asynccontextmanager
    async def _open(_config: Any) -> AsyncIterator[FakeApi]:
        yield fake_api

    monkeypatch.setattr("deployctl.commands._context.open_registry_client", _open)
    return fake_api


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Iterator[None]:
    """``-v`` enables telemetry in the calling context; switch it back off."""
    yield
    disable_telemetry()


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Drop handlers the CLI installs on the root logger during a test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("deployctl").setLevel(logging.NOTSET)
    structlog.reset_defaults()
