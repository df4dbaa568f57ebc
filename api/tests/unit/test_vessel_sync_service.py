"""
Tests del servicio de sincronizacion de buques contra SQLite.

Los clientes HTTP se reemplazan por fakes; la base de datos es real
(archivo SQLite por test) para cubrir UPSERT y SAVEPOINT.
"""
from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from sqlalchemy import func, select

from portlink.application.services.vessel_sync_service import VesselSyncService
from portlink.domain.entities.sync_result import SyncErr, SyncOk
from portlink.infrastructure.database.models import (
    APIIntegrationModel,
    APISyncLogModel,
    OrganizationModel,
    OrganizationVesselTrackingModel,
    VesselScheduleModel,
)
from portlink.infrastructure.external.vessel_apis.types import VesselApiError
from portlink.shared.constants.logistics_constants import SyncType


def _mawani_vessels(trucks: int = 520):
    return [
        {"vessel_id": "MAWANI-2026-001", "vessel_name": "MSC Gulsun", "arrival_date": "2026-02-16",
         "arrival_time": "08:30", "berth": "B3", "estimated_trucks": trucks, "status": "SCHEDULED"},
        {"vessel_id": "MAWANI-2026-002", "vessel_name": "Ever Given", "arrival_date": "2026-02-17",
         "arrival_time": "10:00", "estimated_trucks": 300},
        {"vessel_id": "MAWANI-2026-003", "arrival_date": "2026-02-17"},
    ]


def _org_vessels():
    return [
        {"vessel_name": "MSC Gulsun", "arrival_date": "2026-02-16", "total_trucks": 3,
         "shipments": [{"shipment_number": "SMSA-2026-0001", "containers": ["SMSA1", "SMSA2"],
                        "cargo_type": "MEDICAL", "priority": "EMERGENCY"}]},
        {"vessel_name": "Ever Given", "arrival_date": "2026-02-17", "total_trucks": 1, "shipments": []},
    ]


class FakeMawaniClient:

    def __init__(self, vessels=None, error: Exception | None = None):
        self.vessels = vessels or []
        self.error = error
        self.calls = []

    async def get_upcoming_vessels(self, days: int = 7):
        self.calls.append(days)
        if self.error:
            raise self.error
        return self.vessels


class FakeOrgClient:

    def __init__(self, vessels=None, error: Exception | None = None):
        self.vessels = vessels or []
        self.error = error

    async def fetch_vessels(self):
        if self.error:
            raise self.error
        return self.vessels


async def _add_integration(session, org_id: str, created_at: datetime, *, is_active: bool = True):
    session.add(OrganizationModel(id=org_id, name=org_id.upper(), email=f"{org_id}@example.com"))
    integration = APIIntegrationModel(
        id=f"int-{org_id}",
        organization_id=org_id,
        api_type="VESSEL_TRACKING",
        api_endpoint=f"https://{org_id}.test/vessels",
        api_key="k",
        is_active=is_active,
        created_at=created_at,
    )
    session.add(integration)
    await session.commit()
    return integration


async def _count(session, model) -> int:
    return (await session.execute(select(func.count()).select_from(model))).scalar_one()


class TestMawaniSync:

    @pytest.mark.asyncio
    async def test_upserts_and_counts_bad_records(self, session_factory, test_settings):
        client = FakeMawaniClient(_mawani_vessels())
        service = VesselSyncService(session_factory, test_settings, mawani_client=client)

        result = await service.sync_mawani_vessels()

        assert isinstance(result, SyncOk)
        assert result.records_synced == 2
        assert result.records_failed == 1
        assert result.errors == ("unknown vessel: missing vessel_name",)
        assert client.calls == [test_settings.MAWANI_SYNC_DAYS]

        async with session_factory() as session:
            assert await _count(session, VesselScheduleModel) == 2
            log = (await session.execute(select(APISyncLogModel))).scalars().one()
            assert log.sync_type == "POLL"
            assert log.status == "PARTIAL"
            assert log.records_synced == 2
            assert log.errors == ["unknown vessel: missing vessel_name"]

    @pytest.mark.asyncio
    async def test_second_run_updates_instead_of_duplicating(self, session_factory, test_settings):
        client = FakeMawaniClient(_mawani_vessels(trucks=520))
        service = VesselSyncService(session_factory, test_settings, mawani_client=client)
        await service.sync_mawani_vessels()

        client.vessels = _mawani_vessels(trucks=610)
        result = await service.sync_mawani_vessels()

        assert result.records_synced == 2
        async with session_factory() as session:
            assert await _count(session, VesselScheduleModel) == 2
            trucks = (await session.execute(
                select(VesselScheduleModel.estimated_trucks)
                .where(VesselScheduleModel.vessel_name == "MSC Gulsun")
            )).scalar_one()
            assert trucks == 610
            assert await _count(session, APISyncLogModel) == 2

    @pytest.mark.asyncio
    async def test_api_failure_returns_err_and_logs_failed_run(self, session_factory, test_settings):
        client = FakeMawaniClient(error=VesselApiError("HTTP 503: Service Unavailable", status_code=503))
        service = VesselSyncService(session_factory, test_settings, mawani_client=client)

        result = await service.sync_mawani_vessels()

        assert isinstance(result, SyncErr)
        assert result.errors == ("HTTP 503: Service Unavailable",)
        async with session_factory() as session:
            assert await _count(session, VesselScheduleModel) == 0
            log = (await session.execute(select(APISyncLogModel))).scalars().one()
            assert log.status == "FAILED"
            assert log.errors == ["HTTP 503: Service Unavailable"]

    @pytest.mark.asyncio
    async def test_unhashable_status_is_a_record_failure(self, session_factory, test_settings):
        vessels = _mawani_vessels()[:2]
        vessels[1] = {**vessels[1], "status": ["ARRIVED"]}
        service = VesselSyncService(session_factory, test_settings, mawani_client=FakeMawaniClient(vessels))

        result = await service.sync_mawani_vessels()

        assert result.records_synced == 1
        assert result.records_failed == 1
        assert result.errors[0].startswith("Ever Given: ")

    @pytest.mark.asyncio
    async def test_empty_response_is_success(self, session_factory, test_settings):
        service = VesselSyncService(session_factory, test_settings, mawani_client=FakeMawaniClient([]))

        result = await service.sync_mawani_vessels()

        assert result.success is True
        assert result.records_synced == 0


class TestOrganizationSync:

    @pytest.mark.asyncio
    async def test_missing_integration_returns_err(self, session_factory, test_settings):
        service = VesselSyncService(
            session_factory, test_settings,
            mawani_client=FakeMawaniClient(),
            org_client_factory=lambda config: FakeOrgClient(),
        )

        result = await service.sync_organization_vessels("org-ghost")

        assert isinstance(result, SyncErr)
        assert result.reason == "No active API integration found for org: org-ghost"

    @pytest.mark.asyncio
    async def test_sync_writes_tracking_and_marks_integration(self, session_factory, test_settings):
        async with session_factory() as session:
            await _add_integration(session, "org-smsa", datetime(2026, 1, 1, tzinfo=timezone.utc))

        seen_configs = []

        def factory(config):
            seen_configs.append(config)
            return FakeOrgClient(_org_vessels())

        service = VesselSyncService(
            session_factory, test_settings,
            mawani_client=FakeMawaniClient(),
            org_client_factory=factory,
        )
        result = await service.sync_organization_vessels("org-smsa", SyncType.MANUAL)

        assert result.success is True
        assert result.records_synced == 2
        assert seen_configs[0].api_endpoint == "https://org-smsa.test/vessels"

        async with session_factory() as session:
            rows = (await session.execute(
                select(OrganizationVesselTrackingModel).order_by(OrganizationVesselTrackingModel.arrival_date)
            )).scalars().all()
            assert [r.vessel_name for r in rows] == ["MSC Gulsun", "Ever Given"]
            assert rows[0].container_numbers == ["SMSA1", "SMSA2"]
            assert rows[0].priority_breakdown == {"EMERGENCY": 1}
            assert rows[0].api_integration_id == "int-org-smsa"

            integration = await session.get(APIIntegrationModel, "int-org-smsa")
            assert integration.last_sync_status == "SUCCESS"
            assert integration.last_sync_error is None
            assert integration.last_sync_at is not None

            log = (await session.execute(select(APISyncLogModel))).scalars().one()
            assert log.sync_type == "MANUAL"
            assert log.api_integration_id == "int-org-smsa"

    @pytest.mark.asyncio
    async def test_api_error_marks_integration_failed(self, session_factory, test_settings):
        async with session_factory() as session:
            await _add_integration(session, "org-naqel", datetime(2026, 1, 1, tzinfo=timezone.utc))

        service = VesselSyncService(
            session_factory, test_settings,
            mawani_client=FakeMawaniClient(),
            org_client_factory=lambda config: FakeOrgClient(
                error=VesselApiError("HTTP 500: Internal Server Error", status_code=500)
            ),
        )
        result = await service.sync_organization_vessels("org-naqel")

        assert isinstance(result, SyncErr)
        assert result.reason == "API sync failed: HTTP 500: Internal Server Error"
        async with session_factory() as session:
            integration = await session.get(APIIntegrationModel, "int-org-naqel")
            assert integration.last_sync_status == "FAILED"
            assert integration.last_sync_error == "API sync failed: HTTP 500: Internal Server Error"

    @pytest.mark.asyncio
    async def test_sync_all_preserves_order_and_isolates_failures(self, session_factory, test_settings):
        async with session_factory() as session:
            await _add_integration(session, "org-a", datetime(2026, 1, 1, tzinfo=timezone.utc))
            await _add_integration(session, "org-b", datetime(2026, 1, 2, tzinfo=timezone.utc))
            await _add_integration(session, "org-off", datetime(2026, 1, 3, tzinfo=timezone.utc), is_active=False)

        def factory(config):
            if config.organization_id == "org-b":
                return FakeOrgClient(error=VesselApiError("HTTP 500: Internal Server Error", status_code=500))
            return FakeOrgClient(_org_vessels())

        service = VesselSyncService(
            session_factory, test_settings,
            mawani_client=FakeMawaniClient(),
            org_client_factory=factory,
        )
        results = await service.sync_all_organizations()

        assert len(results) == 2
        assert isinstance(results[0], SyncOk)
        assert results[0].records_synced == 2
        assert isinstance(results[1], SyncErr)
        assert results[1].reason == "API sync failed: HTTP 500: Internal Server Error"

    @pytest.mark.asyncio
    async def test_sync_all_survives_malformed_organization_payload(self, session_factory, test_settings):
        async with session_factory() as session:
            await _add_integration(session, "org-a", datetime(2026, 1, 1, tzinfo=timezone.utc))
            await _add_integration(session, "org-b", datetime(2026, 1, 2, tzinfo=timezone.utc))

        malformed = [
            {"vessel_name": "Bad Containers", "arrival_date": "2026-02-16",
             "shipments": [{"shipment_number": "B-1", "containers": 5}]},
            {"vessel_name": "Bad Cargo", "arrival_date": "2026-02-16",
             "shipments": [{"shipment_number": "B-2", "cargo_type": ["MEDICAL"]}]},
            {"vessel_name": "Good One", "arrival_date": "2026-02-18", "shipments": []},
        ]

        def factory(config):
            if config.organization_id == "org-b":
                return FakeOrgClient(malformed)
            return FakeOrgClient(_org_vessels())

        service = VesselSyncService(
            session_factory, test_settings,
            mawani_client=FakeMawaniClient(),
            org_client_factory=factory,
        )
        results = await service.sync_all_organizations()

        assert len(results) == 2
        assert results[0].success is True
        assert results[0].records_synced == 2
        assert isinstance(results[1], SyncOk)
        assert results[1].records_synced == 1
        assert results[1].records_failed == 2
        assert results[1].errors[0] == "Bad Containers: shipment containers must be a list"
        assert results[1].errors[1].startswith("Bad Cargo: ")

        async with session_factory() as session:
            integration = await session.get(APIIntegrationModel, "int-org-b")
            assert integration.last_sync_status == "PARTIAL"

    @pytest.mark.asyncio
    async def test_unexpected_client_error_becomes_err(self, session_factory, test_settings):
        async with session_factory() as session:
            await _add_integration(session, "org-a", datetime(2026, 1, 1, tzinfo=timezone.utc))
            await _add_integration(session, "org-b", datetime(2026, 1, 2, tzinfo=timezone.utc))

        def factory(config):
            if config.organization_id == "org-a":
                return FakeOrgClient(error=httpx.DecodingError("invalid gzip stream"))
            return FakeOrgClient(_org_vessels())

        service = VesselSyncService(
            session_factory, test_settings,
            mawani_client=FakeMawaniClient(),
            org_client_factory=factory,
        )
        results = await service.sync_all_organizations()

        assert isinstance(results[0], SyncErr)
        assert results[0].reason == "API sync failed: invalid gzip stream"
        assert results[1].success is True
        async with session_factory() as session:
            integration = await session.get(APIIntegrationModel, "int-org-a")
            assert integration.last_sync_status == "FAILED"

    @pytest.mark.asyncio
    async def test_sync_all_times_out_slow_organization(self, session_factory, test_settings):
        async with session_factory() as session:
            await _add_integration(session, "org-fast", datetime(2026, 1, 1, tzinfo=timezone.utc))
            await _add_integration(session, "org-slow", datetime(2026, 1, 2, tzinfo=timezone.utc))

        settings = test_settings.model_copy(update={"ORG_SYNC_TIMEOUT_S": 0.05, "ORG_SYNC_CONCURRENCY": 2})
        service = VesselSyncService(session_factory, settings, mawani_client=FakeMawaniClient())

        async def fake_sync(organization_id, sync_type=SyncType.POLL):
            if organization_id == "org-slow":
                await asyncio.sleep(1)
            return SyncOk(records_synced=1)

        with patch.object(service, "sync_organization_vessels", side_effect=fake_sync):
            results = await service.sync_all_organizations()

        assert isinstance(results[0], SyncOk)
        assert isinstance(results[1], SyncErr)
        assert results[1].reason == "Sync timed out after 0.05s for org: org-slow"

        async with session_factory() as session:
            log = (await session.execute(select(APISyncLogModel))).scalars().one()
            assert log.status == "FAILED"
            assert log.api_integration_id == "int-org-slow"
            assert log.errors == ["Sync timed out after 0.05s for org: org-slow"]

            integration = await session.get(APIIntegrationModel, "int-org-slow")
            assert integration.last_sync_status == "FAILED"
            assert integration.last_sync_error == "Sync timed out after 0.05s for org: org-slow"

            fast = await session.get(APIIntegrationModel, "int-org-fast")
            assert fast.last_sync_status == "PENDING"

    @pytest.mark.asyncio
    async def test_sync_all_without_integrations(self, session_factory, test_settings):
        service = VesselSyncService(session_factory, test_settings, mawani_client=FakeMawaniClient())
        service.sync_organization_vessels = AsyncMock()

        assert await service.sync_all_organizations() == []
        service.sync_organization_vessels.assert_not_called()
