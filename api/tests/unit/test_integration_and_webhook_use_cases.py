"""
Tests de los casos de uso de integraciones API y de los webhooks de Mawani
y de organizaciones.
"""
from __future__ import annotations

from datetime import date, time
from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy import select

from portlink.application.dto.integration_dto import APIIntegrationUpsertDTO
from portlink.application.dto.webhook_dto import MawaniWebhookDTO, OrganizationWebhookDTO
from portlink.application.use_cases.integration_use_cases import APIIntegrationUseCases
from portlink.application.use_cases.webhook_use_cases import (
    MawaniWebhookUseCases,
    OrganizationWebhookUseCases,
)
from portlink.core.security import SecurityService
from portlink.domain.entities.sync_result import SyncErr, SyncOk
from portlink.infrastructure.database.models import (
    APIIntegrationModel,
    APISyncLogModel,
    OrganizationModel,
    OrganizationVesselTrackingModel,
    VesselScheduleModel,
)
from portlink.infrastructure.external.vessel_apis.types import ConnectionTestResult
from portlink.shared.constants.logistics_constants import SyncType
from portlink.shared.exceptions.auth import InvalidSignatureException
from portlink.shared.exceptions.domain import EntityNotFoundException, ValidationException


def _integration_dto(**overrides) -> APIIntegrationUpsertDTO:
    data = {
        "api_type": "VESSEL_TRACKING",
        "api_endpoint": "https://smsa.test/api/vessels",
        "api_key": "secret",
    }
    data.update(overrides)
    return APIIntegrationUpsertDTO(**data)


@pytest.fixture
def sync_service() -> AsyncMock:
    service = AsyncMock()
    service.sync_organization_vessels = AsyncMock(return_value=SyncOk(records_synced=4))
    return service


class TestAPIIntegrationUseCases:

    @pytest.mark.asyncio
    async def test_save_replaces_integration_of_same_type(self, db_session, sync_service):
        use_cases = APIIntegrationUseCases(db_session, sync_service, Mock())

        first = await use_cases.save_integration("org-smsa", _integration_dto())
        second = await use_cases.save_integration(
            "org-smsa", _integration_dto(api_endpoint="https://smsa.test/v2/vessels", api_key=None)
        )

        assert second.id == first.id
        assert second.api_endpoint == "https://smsa.test/v2/vessels"
        assert second.has_api_key is False
        assert second.last_sync_status == "PENDING"
        rows = (await db_session.execute(select(APIIntegrationModel))).scalars().all()
        assert len(rows) == 1

    @pytest.mark.asyncio
    async def test_response_never_exposes_secrets(self, db_session, sync_service):
        use_cases = APIIntegrationUseCases(db_session, sync_service, Mock())

        saved = await use_cases.save_integration("org-smsa", _integration_dto(webhook_secret="whsec"))

        data = saved.model_dump()
        assert data["has_api_key"] is True
        assert "api_key" not in data
        assert "webhook_secret" not in data

    @pytest.mark.asyncio
    async def test_delete_requires_id(self, db_session, sync_service):
        use_cases = APIIntegrationUseCases(db_session, sync_service, Mock())
        with pytest.raises(ValidationException, match="Integration ID required"):
            await use_cases.delete_integration("org-smsa", None)

    @pytest.mark.asyncio
    async def test_delete_only_affects_own_organization(self, db_session, sync_service):
        use_cases = APIIntegrationUseCases(db_session, sync_service, Mock())
        saved = await use_cases.save_integration("org-smsa", _integration_dto())

        await use_cases.delete_integration("org-other", saved.id)
        assert len(await use_cases.list_integrations("org-smsa")) == 1

        await use_cases.delete_integration("org-smsa", saved.id)
        assert await use_cases.list_integrations("org-smsa") == []

    @pytest.mark.asyncio
    async def test_trigger_sync_of_foreign_integration_is_404(self, db_session, sync_service):
        use_cases = APIIntegrationUseCases(db_session, sync_service, Mock())
        saved = await use_cases.save_integration("org-smsa", _integration_dto())

        with pytest.raises(EntityNotFoundException) as exc_info:
            await use_cases.trigger_sync("org-other", saved.id)
        assert exc_info.value.status_code == 404
        sync_service.sync_organization_vessels.assert_not_called()

    @pytest.mark.asyncio
    async def test_trigger_sync_runs_manual_sync(self, db_session, sync_service):
        use_cases = APIIntegrationUseCases(db_session, sync_service, Mock())
        saved = await use_cases.save_integration("org-smsa", _integration_dto())

        result = await use_cases.trigger_sync("org-smsa", saved.id)

        sync_service.sync_organization_vessels.assert_awaited_once_with("org-smsa", SyncType.MANUAL)
        assert result["success"] is True
        assert result["records_synced"] == 4
        assert result["message"] == "Synced 4 vessels successfully"

    @pytest.mark.asyncio
    async def test_trigger_sync_failure_message(self, db_session, sync_service):
        sync_service.sync_organization_vessels.return_value = SyncErr(reason="API sync failed: HTTP 500")
        use_cases = APIIntegrationUseCases(db_session, sync_service, Mock())
        saved = await use_cases.save_integration("org-smsa", _integration_dto())

        result = await use_cases.trigger_sync("org-smsa", saved.id)

        assert result["success"] is False
        assert result["message"] == "Sync failed: API sync failed: HTTP 500"

    @pytest.mark.asyncio
    async def test_test_connection_reports_result(self, db_session, sync_service):
        client = Mock()
        client.test_connection = AsyncMock(
            return_value=ConnectionTestResult(success=False, error="HTTP 401: Unauthorized", response_time_ms=12)
        )
        factory = Mock(return_value=client)
        use_cases = APIIntegrationUseCases(db_session, sync_service, factory)
        saved = await use_cases.save_integration("org-smsa", _integration_dto())

        result = await use_cases.test_connection("org-smsa", saved.id)

        config = factory.call_args[0][0]
        assert config.api_endpoint == "https://smsa.test/api/vessels"
        assert config.api_key == "secret"
        assert result == {
            "success": False,
            "error": "HTTP 401: Unauthorized",
            "response_time_ms": 12,
            "message": "Connection failed: HTTP 401: Unauthorized",
        }


class TestMawaniWebhookUseCases:

    @staticmethod
    async def _seed_vessel(session) -> None:
        session.add(VesselScheduleModel(
            id="v-1",
            vessel_name="MSC Gulsun",
            arrival_date=date(2026, 2, 16),
            arrival_time=time(8, 30),
            berth="B3",
            estimated_trucks=520,
            source="MAWANI_API",
            external_vessel_id="MAWANI-2026-001",
        ))
        await session.commit()
        session.expunge_all()

    @staticmethod
    async def _vessel(session) -> VesselScheduleModel:
        result = await session.execute(
            select(VesselScheduleModel).execution_options(populate_existing=True)
        )
        return result.scalars().one()

    @pytest.mark.asyncio
    async def test_arrival_update(self, db_session):
        await self._seed_vessel(db_session)
        payload = MawaniWebhookDTO(
            vessel_id="MAWANI-2026-001",
            event_type="VESSEL_ARRIVAL_UPDATED",
            data={"arrival_date": "2026-02-17", "arrival_time": "14:00", "estimated_trucks": 600},
        )

        result = await MawaniWebhookUseCases(db_session).handle(payload)

        assert result == {"received": True, "records_updated": 1}
        vessel = await self._vessel(db_session)
        assert vessel.arrival_date == date(2026, 2, 17)
        assert vessel.arrival_time == time(14, 0)
        assert vessel.estimated_trucks == 600
        assert vessel.berth == "B3"
        assert vessel.synced_at is not None

        log = (await db_session.execute(select(APISyncLogModel))).scalars().one()
        assert log.sync_type == "WEBHOOK"
        assert log.status == "SUCCESS"
        assert log.records_synced == 1

    @pytest.mark.asyncio
    async def test_departed_and_berth_changed(self, db_session):
        await self._seed_vessel(db_session)
        use_cases = MawaniWebhookUseCases(db_session)

        await use_cases.handle(MawaniWebhookDTO(vessel_id="MAWANI-2026-001", event_type="BERTH_CHANGED",
                                                data={"berth": "B7"}))
        await use_cases.handle(MawaniWebhookDTO(vessel_id="MAWANI-2026-001", event_type="VESSEL_DEPARTED"))

        vessel = await self._vessel(db_session)
        assert vessel.berth == "B7"
        assert vessel.status == "DEPARTED"

    @pytest.mark.asyncio
    async def test_unknown_event_is_acknowledged(self, db_session):
        await self._seed_vessel(db_session)

        result = await MawaniWebhookUseCases(db_session).handle(
            MawaniWebhookDTO(vessel_id="MAWANI-2026-001", event_type="VESSEL_RENAMED")
        )

        assert result["records_updated"] == 0

    @pytest.mark.asyncio
    async def test_congestion_alert_without_vessel(self, db_session):
        result = await MawaniWebhookUseCases(db_session).handle(
            MawaniWebhookDTO(event_type="CONGESTION_ALERT")
        )
        assert result == {"received": True, "records_updated": 0}

    @pytest.mark.asyncio
    async def test_missing_vessel_id_logs_failure(self, db_session):
        with pytest.raises(ValidationException, match="vessel_id is required"):
            await MawaniWebhookUseCases(db_session).handle(
                MawaniWebhookDTO(event_type="VESSEL_DEPARTED")
            )

        log = (await db_session.execute(select(APISyncLogModel))).scalars().one()
        assert log.status == "FAILED"
        assert log.errors == ["vessel_id is required"]


def _org_event(event_type: str, **data) -> OrganizationWebhookDTO:
    return OrganizationWebhookDTO(event_type=event_type, data=data, timestamp="2026-02-16T06:00:00Z")


SHIPMENTS = [
    {"shipment_number": "SHP-1", "containers": ["MSCU1", "MSCU2"], "cargo_type": "MEDICAL",
     "priority": "EMERGENCY", "estimated_trucks": 2},
    {"shipment_number": "SHP-2", "containers": ["MSCU3"], "cargo_type": "STANDARD",
     "priority": "NORMAL", "estimated_trucks": 1},
]


class TestOrganizationWebhookUseCases:

    @staticmethod
    async def _seed(session, webhook_secret=None) -> None:
        session.add(OrganizationModel(id="org-smsa", name="SMSA", email="ops@smsa.test"))
        session.add(APIIntegrationModel(
            id="int-1", organization_id="org-smsa", api_type="VESSEL_TRACKING",
            api_endpoint="https://smsa.test/api/vessels", webhook_secret=webhook_secret,
        ))
        await session.commit()
        session.expunge_all()

    @staticmethod
    async def _tracking(session):
        result = await session.execute(
            select(OrganizationVesselTrackingModel).execution_options(populate_existing=True)
        )
        return result.scalars().all()

    @pytest.mark.asyncio
    async def test_unknown_organization_is_404(self, db_session):
        with pytest.raises(EntityNotFoundException):
            await OrganizationWebhookUseCases(db_session).authenticate("org-x", b"{}", None)

    @pytest.mark.asyncio
    async def test_signature_required_when_secret_configured(self, db_session):
        await self._seed(db_session, webhook_secret="org-secret")
        use_cases = OrganizationWebhookUseCases(db_session)
        body = b'{"event_type":"VESSEL_ADDED"}'

        with pytest.raises(InvalidSignatureException):
            await use_cases.authenticate("org-smsa", body, "deadbeef")
        integration = await use_cases.authenticate(
            "org-smsa", body, SecurityService.sign_payload(body, "org-secret")
        )
        assert integration.id == "int-1"

    @pytest.mark.asyncio
    async def test_without_secret_signature_is_not_checked(self, db_session):
        await self._seed(db_session)

        integration = await OrganizationWebhookUseCases(db_session).authenticate("org-smsa", b"{}", None)

        assert integration.id == "int-1"

    @pytest.mark.asyncio
    async def test_vessel_added_creates_tracking_row(self, db_session):
        await self._seed(db_session)
        use_cases = OrganizationWebhookUseCases(db_session)
        integration = await use_cases.authenticate("org-smsa", b"{}", None)

        result = await use_cases.handle(
            "org-smsa", _org_event("VESSEL_ADDED", vessel_name="MSC Gulsun", shipments=SHIPMENTS), integration
        )

        assert result == {"received": True, "event_type": "VESSEL_ADDED", "records_updated": 1}
        row = (await self._tracking(db_session))[0]
        assert row.arrival_date == date(2026, 2, 16)
        assert row.estimated_trucks == 3
        assert row.container_numbers == ["MSCU1", "MSCU2", "MSCU3"]
        assert row.priority_breakdown == {"EMERGENCY": 1, "NORMAL": 1}
        assert row.source == "API"
        assert row.api_integration_id == "int-1"

        log = (await db_session.execute(select(APISyncLogModel))).scalars().one()
        assert log.sync_type == SyncType.WEBHOOK.value
        assert log.status == "SUCCESS"
        assert log.api_integration_id == "int-1"

    @pytest.mark.asyncio
    async def test_shipment_update_replaces_row_and_cancel_removes_it(self, db_session):
        await self._seed(db_session)
        use_cases = OrganizationWebhookUseCases(db_session)
        await use_cases.handle("org-smsa", _org_event("VESSEL_ADDED", vessel_name="MSC Gulsun", shipments=SHIPMENTS))

        await use_cases.handle(
            "org-smsa",
            _org_event("SHIPMENT_UPDATED", vessel_name="MSC Gulsun", arrival_date="2026-02-16",
                       total_trucks=9, shipments=SHIPMENTS[:1]),
        )
        rows = await self._tracking(db_session)
        assert len(rows) == 1
        assert rows[0].shipment_numbers == ["SHP-1"]
        assert rows[0].estimated_trucks == 9

        result = await use_cases.handle("org-smsa", _org_event("VESSEL_CANCELLED", vessel_name="MSC Gulsun"))
        assert result["records_updated"] == 1
        assert await self._tracking(db_session) == []

    @pytest.mark.asyncio
    async def test_shipment_update_without_shipments_is_only_logged(self, db_session):
        await self._seed(db_session)

        result = await OrganizationWebhookUseCases(db_session).handle(
            "org-smsa", _org_event("SHIPMENT_UPDATED", vessel_name="MSC Gulsun")
        )

        assert result["records_updated"] == 0
        assert await self._tracking(db_session) == []

    @pytest.mark.asyncio
    async def test_unknown_event_is_acknowledged(self, db_session):
        await self._seed(db_session)

        result = await OrganizationWebhookUseCases(db_session).handle("org-smsa", _org_event("VESSEL_RENAMED"))

        assert result["records_updated"] == 0

    @pytest.mark.asyncio
    async def test_malformed_shipments_log_failure(self, db_session):
        await self._seed(db_session)
        event = _org_event("VESSEL_ADDED", vessel_name="MSC Gulsun",
                           shipments=[{"shipment_number": "SHP-1", "containers": "MSCU1"}])

        with pytest.raises(ValidationException, match="shipment containers must be a list"):
            await OrganizationWebhookUseCases(db_session).handle("org-smsa", event)

        log = (await db_session.execute(select(APISyncLogModel))).scalars().one()
        assert log.status == "FAILED"
        assert log.errors == ["MSC Gulsun: shipment containers must be a list"]
        assert await self._tracking(db_session) == []
