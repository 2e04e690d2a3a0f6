"""Tests for the httpx registry adapter."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from deployctl.config.models import ApiConfig
from deployctl.domain.records import Organization, Service
from deployctl.infrastructure.api import ApiError
from deployctl.infrastructure.api.client import open_registry_client
from tests.conftest import ORG, SERVICES

Handler = Callable[[httpx.Request], httpx.Response]


def _call(handler: Handler, kind: str, *, config: ApiConfig | None = None, **filters: str) -> Any:
    async def _main() -> Any:
        cfg = config or ApiConfig(base_url="http://registry.test/v1")
        async with open_registry_client(cfg, transport=httpx.MockTransport(handler)) as api:
            return await getattr(api, kind).get(**filters)

    return asyncio.run(_main())


class TestQueries:
    def test_orgs_by_name(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[ORG.to_envelope()])

        orgs = _call(handler, "orgs", name="my-org")
        assert orgs == [ORG]
        assert isinstance(orgs[0], Organization)
        assert seen[0].url.path == "/v1/orgs"
        assert seen[0].url.params["name"] == "my-org"

    def test_services_parsed_in_order(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/v1/services"
            assert request.url.params["org_id"] == ORG.id
            return httpx.Response(200, json=[s.to_envelope() for s in SERVICES])

        services = _call(handler, "services", org_id=ORG.id)
        assert services == SERVICES
        assert all(isinstance(s, Service) for s in services)

    def test_empty_list_is_not_an_error(self) -> None:
        assert _call(lambda _r: httpx.Response(200, json=[]), "projects", org_id="org_x") == []

    def test_headers(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        config = ApiConfig(base_url="http://registry.test/v1", token="tok")
        _call(handler, "orgs", config=config, name="x")
        assert seen[0].headers["Authorization"] == "Bearer tok"
        assert seen[0].headers["User-Agent"].startswith("deployctl/")

    def test_no_auth_header_without_token(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        _call(handler, "orgs", name="x")
        assert "Authorization" not in seen[0].headers


class TestErrors:
    def test_typed_error_body(self) -> None:
        def handler(_request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"type": "not_found", "error": ["org not found"]})

        with pytest.raises(ApiError) as excinfo:
            _call(handler, "orgs", name="nope")
        assert excinfo.value.type == "not_found"
        assert excinfo.value.message == "org not found"
        assert excinfo.value.status_code == 404

    def test_bare_404_is_not_found(self) -> None:
        with pytest.raises(ApiError) as excinfo:
            _call(lambda _r: httpx.Response(404, text="gone"), "services", org_id="org_x")
        assert excinfo.value.type == "not_found"
        assert excinfo.value.message == "registry returned 404"

    def test_server_error(self) -> None:
        with pytest.raises(ApiError) as excinfo:
            _call(lambda _r: httpx.Response(502), "projects", org_id="org_x")
        assert excinfo.value.type == "internal_server"

    def test_body_type_wins_over_status(self) -> None:
        def handler(_request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"type": "unauthorized", "error": "log in first"})

        with pytest.raises(ApiError) as excinfo:
            _call(handler, "orgs", name="x")
        assert excinfo.value.type == "unauthorized"
        assert excinfo.value.message == "log in first"

    def test_transport_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ApiError) as excinfo:
            _call(handler, "orgs", name="x")
        assert excinfo.value.type == "unreachable"

    def test_malformed_payload(self) -> None:
        def handler(_request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[{"id": "org_1"}])

        with pytest.raises(ApiError) as excinfo:
            _call(handler, "orgs", name="x")
        assert excinfo.value.type == "internal_server"
