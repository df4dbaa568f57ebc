"""
Tests unitarios para los clientes HTTP de APIs de buques.

Se usa httpx.MockTransport: no hay red.
"""
from __future__ import annotations

import json
import random
from datetime import date

import httpx
import pytest

from portlink.infrastructure.external.vessel_apis.factory import build_mawani_client, build_org_client
from portlink.infrastructure.external.vessel_apis.mawani_client import MawaniClient
from portlink.infrastructure.external.vessel_apis.mock_data import MockVesselData
from portlink.infrastructure.external.vessel_apis.org_api_client import OrganizationAPIClient
from portlink.infrastructure.external.vessel_apis.types import IntegrationConfig, VesselApiError

VESSELS_PAYLOAD = {
    "vessels": [{"vessel_name": "MSC Gulsun", "arrival_date": "2026-02-16"}],
    "timestamp": "2026-02-15T08:00:00Z",
    "port_status": "NORMAL",
}


def _config(**overrides) -> IntegrationConfig:
    data = {
        "id": "int-1",
        "organization_id": "org-smsa",
        "api_endpoint": "https://smsa.test/api/vessels",
        "api_key": "org-key",
    }
    data.update(overrides)
    return IntegrationConfig(**data)


class TestMawaniClient:

    @pytest.mark.asyncio
    async def test_requests_upcoming_vessels_with_bearer(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=VESSELS_PAYLOAD)

        client = MawaniClient(
            "https://mawani.test/ports/dammam/",
            "secret-key",
            transport=httpx.MockTransport(handler),
        )
        vessels = await client.get_upcoming_vessels(days=3)

        assert vessels == VESSELS_PAYLOAD["vessels"]
        assert len(seen) == 1
        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/ports/dammam/vessels/upcoming"
        assert request.url.params["days"] == "3"
        assert request.headers["Authorization"] == "Bearer secret-key"

    @pytest.mark.asyncio
    async def test_no_authorization_header_without_key(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=VESSELS_PAYLOAD)

        client = MawaniClient("https://mawani.test", transport=httpx.MockTransport(handler))
        await client.get_upcoming_vessels()

        assert "Authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_server_error_without_retries_raises(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        client = MawaniClient("https://mawani.test", transport=httpx.MockTransport(handler))
        with pytest.raises(VesselApiError) as exc_info:
            await client.get_upcoming_vessels()

        assert exc_info.value.status_code == 503
        assert str(exc_info.value) == "HTTP 503: Service Unavailable"
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_retries_server_errors_with_backoff(self):
        responses = iter([httpx.Response(503), httpx.Response(429), httpx.Response(200, json=VESSELS_PAYLOAD)])

        def handler(request: httpx.Request) -> httpx.Response:
            return next(responses)

        client = MawaniClient(
            "https://mawani.test",
            transport=httpx.MockTransport(handler),
            max_retries=2,
            min_backoff_s=0.0,
            max_backoff_s=0.0,
        )
        vessels = await client.get_upcoming_vessels()

        assert len(vessels) == 1

    @pytest.mark.asyncio
    async def test_client_errors_are_not_retried(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(404)

        client = MawaniClient(
            "https://mawani.test",
            transport=httpx.MockTransport(handler),
            max_retries=3,
            min_backoff_s=0.0,
        )
        with pytest.raises(VesselApiError):
            await client.get_upcoming_vessels()
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_payload_without_vessels_list_raises(self):
        client = MawaniClient(
            "https://mawani.test",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"data": []})),
        )
        with pytest.raises(VesselApiError, match="vessels"):
            await client.get_upcoming_vessels()

    @pytest.mark.asyncio
    async def test_mock_mode_does_not_touch_network(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no deberia haber requests en modo mock")

        mock = MockVesselData(rng=random.Random(7), today=date(2026, 2, 15))
        client = MawaniClient("https://mawani.test", mock=mock, transport=httpx.MockTransport(handler))
        vessels = await client.get_upcoming_vessels(days=3)

        assert 3 <= len(vessels) <= 6
        assert all(v["vessel_id"].startswith("MAWANI-2026-") for v in vessels)
        assert {v["arrival_date"] for v in vessels} <= {"2026-02-15", "2026-02-16", "2026-02-17"}


class TestOrganizationAPIClient:

    @pytest.mark.asyncio
    async def test_fetch_vessels_uses_configured_endpoint_and_key(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=VESSELS_PAYLOAD)

        client = OrganizationAPIClient(_config(), transport=httpx.MockTransport(handler))
        vessels = await client.fetch_vessels()

        assert len(vessels) == 1
        assert str(seen[0].url) == "https://smsa.test/api/vessels"
        assert seen[0].headers["Authorization"] == "Bearer org-key"

    @pytest.mark.asyncio
    async def test_test_connection_success(self):
        client = OrganizationAPIClient(
            _config(),
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=VESSELS_PAYLOAD)),
        )
        result = await client.test_connection()

        assert result.success is True
        assert result.vessels_found == 1
        assert result.response_time_ms is not None
        assert result.to_dict()["vessels_found"] == 1

    @pytest.mark.asyncio
    async def test_test_connection_failure_never_raises(self):
        client = OrganizationAPIClient(
            _config(),
            transport=httpx.MockTransport(lambda request: httpx.Response(401)),
        )
        result = await client.test_connection()

        assert result.success is False
        assert result.error == "HTTP 401: Unauthorized"
        assert "vessels_found" not in result.to_dict()

    @pytest.mark.asyncio
    async def test_network_error_is_reported(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = OrganizationAPIClient(_config(), transport=httpx.MockTransport(handler))
        result = await client.test_connection()

        assert result.success is False
        assert "connection refused" in result.error

    @pytest.mark.asyncio
    async def test_unexpected_error_is_reported_not_raised(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.DecodingError("invalid gzip stream", request=request)

        client = OrganizationAPIClient(_config(), transport=httpx.MockTransport(handler))
        result = await client.test_connection()

        assert result.success is False
        assert result.error == "invalid gzip stream"
        assert result.to_dict()["success"] is False

    @pytest.mark.asyncio
    async def test_mock_mode_uses_org_prefix(self):
        mock = MockVesselData(rng=random.Random(3), today=date(2026, 2, 15))
        client = OrganizationAPIClient(_config(), mock=mock)
        vessels = await client.fetch_vessels()

        assert 2 <= len(vessels) <= 4
        for vessel in vessels:
            assert vessel["total_trucks"] == sum(s["estimated_trucks"] for s in vessel["shipments"])
            assert all(s["shipment_number"].startswith("SMSA-") for s in vessel["shipments"])


class TestFactory:

    def test_mawani_client_in_mock_mode(self, test_settings):
        settings = test_settings.model_copy(update={"VESSEL_API_MOCK_MODE": True, "VESSEL_API_MOCK_SEED": 1})
        client = build_mawani_client(settings)
        assert client._mock is not None

    def test_seeded_mock_is_reproducible(self, test_settings):
        settings = test_settings.model_copy(update={"VESSEL_API_MOCK_MODE": True, "VESSEL_API_MOCK_SEED": 42})
        first = build_org_client(_config(), settings)._mock.organization_vessels("org-naqel")
        second = build_org_client(_config(), settings)._mock.organization_vessels("org-naqel")
        assert json.dumps(first) == json.dumps(second)

    def test_org_client_uses_http_settings(self, test_settings):
        settings = test_settings.model_copy(update={"VESSEL_API_MAX_RETRIES": 4, "VESSEL_API_TIMEOUT_S": 5.0})
        client = build_org_client(_config(), settings)
        assert client._mock is None
        assert client._max_retries == 4
        assert client._timeout_s == 5.0
