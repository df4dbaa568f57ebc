"""
Casos de uso de integraciones API de una organizacion: CRUD, sync manual
y prueba de conexion.
"""
from typing import Any, Callable, Dict, List

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from portlink.application.dto.integration_dto import (
    APIIntegrationResponseDTO,
    APIIntegrationUpsertDTO,
)
from portlink.application.dto.vessel_dto import OrganizationVesselDTO
from portlink.application.services.vessel_sync_service import VesselSyncService
from portlink.domain.entities.sync_result import result_to_dict
from portlink.infrastructure.external.vessel_apis.types import IntegrationConfig
from portlink.infrastructure.repositories.api_integration_repository import APIIntegrationRepository
from portlink.infrastructure.repositories.vessel_repository import VesselRepository
from portlink.shared.constants.logistics_constants import SyncType
from portlink.shared.exceptions.domain import EntityNotFoundException, ValidationException


class APIIntegrationUseCases:
    """
    Operaciones sobre las integraciones de la organizacion de la sesion.
    Una integracion de otra organizacion se trata igual que una inexistente.
    """

    def __init__(
        self,
        db: AsyncSession,
        sync_service: VesselSyncService,
        org_client_factory: Callable[[IntegrationConfig], Any],
    ):
        self.db = db
        self.repository = APIIntegrationRepository(db)
        self.sync_service = sync_service
        self.org_client_factory = org_client_factory

    async def list_integrations(self, organization_id: str) -> List[APIIntegrationResponseDTO]:
        integrations = await self.repository.list_for_org(organization_id)
        return [APIIntegrationResponseDTO.from_model(i) for i in integrations]

    async def save_integration(
        self,
        organization_id: str,
        dto: APIIntegrationUpsertDTO,
    ) -> APIIntegrationResponseDTO:
        data = dto.model_dump()
        data["api_type"] = dto.api_type.value
        integration = await self.repository.upsert(organization_id, data)
        await self.db.commit()
        return APIIntegrationResponseDTO.from_model(integration)

    async def delete_integration(self, organization_id: str, integration_id: str) -> None:
        """
        Raises:
            ValidationException: si no se envio el id
        """
        if not integration_id:
            raise ValidationException("Integration ID required", field="id")
        deleted = await self.repository.delete_for_org(integration_id, organization_id)
        await self.db.commit()
        logger.info(f"Integracion {integration_id} eliminada por org {organization_id} ({deleted} filas)")

    async def trigger_sync(self, organization_id: str, integration_id: str) -> Dict[str, Any]:
        """
        Sync manual de la organizacion.

        Raises:
            EntityNotFoundException: si la integracion no es de la organizacion
        """
        await self._get_owned(organization_id, integration_id)
        logger.info(f"[Manual Sync] Iniciando sync para org {organization_id}")
        result = await self.sync_service.sync_organization_vessels(organization_id, SyncType.MANUAL)
        message = (
            f"Synced {result.records_synced} vessels successfully"
            if result.success
            else f"Sync failed: {', '.join(result.errors)}"
        )
        return {**result_to_dict(result), "message": message}

    async def test_connection(self, organization_id: str, integration_id: str) -> Dict[str, Any]:
        """
        Prueba la API configurada sin escribir nada.

        Raises:
            EntityNotFoundException: si la integracion no es de la organizacion
        """
        integration = await self._get_owned(organization_id, integration_id)
        logger.info(f"[API Test] Probando conexion de la integracion {integration_id}")
        client = self.org_client_factory(IntegrationConfig.from_model(integration))
        result = await client.test_connection()
        message = (
            f"Connected successfully! Found {result.vessels_found} vessels"
            if result.success
            else f"Connection failed: {result.error}"
        )
        return {**result.to_dict(), "message": message}

    async def list_tracked_vessels(self, organization_id: str) -> List[OrganizationVesselDTO]:
        rows = await VesselRepository(self.db).list_org_tracking(organization_id)
        return [OrganizationVesselDTO.model_validate(r) for r in rows]

    async def _get_owned(self, organization_id: str, integration_id: str):
        integration = await self.repository.get_for_org(integration_id, organization_id)
        if integration is None:
            raise EntityNotFoundException("API integration", integration_id)
        return integration
