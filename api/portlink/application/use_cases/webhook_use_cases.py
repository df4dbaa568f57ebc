"""
Procesamiento de webhooks entrantes.

Los eventos de Mawani se aplican sobre vessel_schedules (por
external_vessel_id); los de una organizacion, sobre su
organization_vessel_tracking. Todos quedan en api_sync_logs como WEBHOOK.
"""
import time
from typing import Any, Dict, Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portlink.application.dto.webhook_dto import MawaniWebhookDTO, OrganizationWebhookDTO
from portlink.core.security import SecurityService
from portlink.infrastructure.database.models import APIIntegrationModel
from portlink.infrastructure.external.vessel_apis.mappings import (
    VesselMappingError,
    map_org_vessel_to_row,
    sum_shipment_trucks,
)
from portlink.infrastructure.repositories.api_integration_repository import APIIntegrationRepository
from portlink.infrastructure.repositories.organization_repository import OrganizationRepository
from portlink.infrastructure.repositories.sync_log_repository import SyncLogRepository
from portlink.infrastructure.repositories.vessel_repository import VesselRepository
from portlink.shared.constants.logistics_constants import (
    MawaniWebhookEvent,
    OrganizationWebhookEvent,
    SyncLogStatus,
    SyncType,
    VesselStatus,
)
from portlink.shared.exceptions.auth import InvalidSignatureException
from portlink.shared.exceptions.domain import EntityNotFoundException, ValidationException
from portlink.shared.utils.datetime_utils import DateTimeUtils


class MawaniWebhookUseCases:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.vessels = VesselRepository(db)
        self.logs = SyncLogRepository(db)

    async def handle(self, payload: MawaniWebhookDTO) -> Dict[str, Any]:
        """
        Aplica el evento y deja constancia en la bitacora.

        Raises:
            ValidationException: evento sin vessel_id o con datos invalidos
        """
        start = time.perf_counter()
        logger.info(f"[Webhook] Evento Mawani {payload.event_type} para buque {payload.vessel_id}")
        try:
            updated = await self._apply(payload)
        except (ValidationException, SQLAlchemyError) as e:
            await self.db.rollback()
            await self.logs.add(
                sync_type=SyncType.WEBHOOK,
                status=SyncLogStatus.FAILED,
                records_synced=0,
                errors=[str(e)],
                duration_ms=int((time.perf_counter() - start) * 1000),
            )
            await self.db.commit()
            raise

        await self.logs.add(
            sync_type=SyncType.WEBHOOK,
            status=SyncLogStatus.SUCCESS,
            records_synced=updated,
            duration_ms=int((time.perf_counter() - start) * 1000),
        )
        await self.db.commit()
        return {"received": True, "records_updated": updated}

    async def _apply(self, payload: MawaniWebhookDTO) -> int:
        event = payload.event_type
        if event == MawaniWebhookEvent.CONGESTION_ALERT.value:
            logger.warning("[Webhook] Alerta de congestion recibida desde Mawani")
            return 0
        if event not in MawaniWebhookEvent.__members__:
            logger.warning(f"[Webhook] Tipo de evento desconocido: {event}")
            return 0
        if not payload.vessel_id:
            raise ValidationException("vessel_id is required", field="vessel_id")

        data = payload.data
        if event == MawaniWebhookEvent.VESSEL_ARRIVAL_UPDATED.value:
            try:
                arrival_time = DateTimeUtils.parse_clock_time(data.arrival_time)
            except ValueError:
                raise ValidationException("Invalid arrival_time", field="data.arrival_time")
            values = {
                "arrival_date": data.arrival_date,
                "arrival_time": arrival_time,
                "estimated_trucks": data.estimated_trucks,
            }
        elif event == MawaniWebhookEvent.VESSEL_DEPARTED.value:
            values = {"status": VesselStatus.DEPARTED.value}
        else:
            values = {"berth": data.berth}

        values["synced_at"] = DateTimeUtils.now_utc()
        updated = await self.vessels.update_by_external_id(payload.vessel_id, values)
        if updated == 0:
            logger.warning(f"[Webhook] Ningun buque con external_vessel_id={payload.vessel_id}")
        return updated


class OrganizationWebhookUseCases:
    """Eventos de buques y embarques enviados por la API de una organizacion."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.vessels = VesselRepository(db)
        self.logs = SyncLogRepository(db)
        self.integrations = APIIntegrationRepository(db)

    async def authenticate(
        self, organization_id: str, body: bytes, signature: Optional[str]
    ) -> Optional[APIIntegrationModel]:
        """
        Comprueba la organizacion y, si su integracion tiene webhook_secret,
        la firma `x-organization-signature` (HMAC-SHA256 del cuerpo crudo).

        Raises:
            EntityNotFoundException: organizacion inexistente
            InvalidSignatureException: firma ausente o incorrecta
        """
        if await OrganizationRepository(self.db).get_by_id(organization_id) is None:
            raise EntityNotFoundException("Organization", organization_id)

        integration = await self.integrations.get_active_for_org(organization_id)
        secret = integration.webhook_secret if integration else None
        if secret and not SecurityService.verify_webhook_signature(body, signature, secret):
            logger.warning(f"[Webhook] Firma invalida para org {organization_id}")
            raise InvalidSignatureException()
        return integration

    async def handle(
        self,
        organization_id: str,
        payload: OrganizationWebhookDTO,
        integration: Optional[APIIntegrationModel] = None,
    ) -> Dict[str, Any]:
        start = time.perf_counter()
        integration_id = integration.id if integration else None
        logger.info(f"[Webhook] Evento {payload.event_type} de org {organization_id}")
        try:
            affected = await self._apply(organization_id, payload, integration_id)
        except (ValidationException, SQLAlchemyError) as e:
            await self.db.rollback()
            await self.logs.add(
                sync_type=SyncType.WEBHOOK,
                status=SyncLogStatus.FAILED,
                records_synced=0,
                errors=[str(e)],
                duration_ms=int((time.perf_counter() - start) * 1000),
                api_integration_id=integration_id,
            )
            await self.db.commit()
            raise

        await self.logs.add(
            sync_type=SyncType.WEBHOOK,
            status=SyncLogStatus.SUCCESS,
            records_synced=affected,
            duration_ms=int((time.perf_counter() - start) * 1000),
            api_integration_id=integration_id,
        )
        await self.db.commit()
        return {"received": True, "event_type": payload.event_type, "records_updated": affected}

    async def _apply(
        self, organization_id: str, payload: OrganizationWebhookDTO, integration_id: Optional[str]
    ) -> int:
        event = payload.event_type
        data = payload.data
        if event not in OrganizationWebhookEvent.__members__:
            logger.warning(f"[Webhook] Tipo de evento desconocido: {event}")
            return 0
        if not data.vessel_name:
            raise ValidationException("data.vessel_name is required", field="data.vessel_name")

        if event == OrganizationWebhookEvent.VESSEL_CANCELLED.value:
            removed = await self.vessels.delete_org_tracking(organization_id, data.vessel_name)
            logger.info(f"[Webhook] Org {organization_id} cancelo {data.vessel_name} ({removed} filas)")
            return removed

        if event == OrganizationWebhookEvent.SHIPMENT_UPDATED.value and data.shipments is None:
            logger.info(f"[Webhook] Embarque actualizado en {data.vessel_name} sin detalle de embarques")
            return 0

        # Sin arrival_date explicito se usa la fecha del timestamp del evento
        raw = {
            "vessel_name": data.vessel_name,
            "arrival_date": data.arrival_date or (payload.timestamp or "")[:10],
            "shipments": data.shipments or [],
        }
        try:
            raw["total_trucks"] = (
                data.total_trucks if data.total_trucks is not None
                else sum_shipment_trucks(raw["shipments"])
            )
            row = map_org_vessel_to_row(
                raw,
                organization_id=organization_id,
                integration_id=integration_id,
                synced_at=DateTimeUtils.now_utc(),
            )
        except VesselMappingError as e:
            raise ValidationException(f"{data.vessel_name}: {e}", field="data")

        await self.vessels.upsert_org_tracking(row)
        return 1
