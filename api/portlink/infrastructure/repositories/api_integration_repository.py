"""
Repositorio de integraciones API por organizacion.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from portlink.infrastructure.database.models import APIIntegrationModel
from portlink.infrastructure.repositories.upsert import build_upsert
from portlink.shared.constants.logistics_constants import ApiType


class APIIntegrationRepository:
    """Gestiona la tabla api_integrations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_active_for_org(
        self,
        organization_id: str,
        api_type: ApiType = ApiType.VESSEL_TRACKING,
    ) -> Optional[APIIntegrationModel]:
        """Integracion activa de un tipo para la organizacion."""
        result = await self.db.execute(
            select(APIIntegrationModel).where(
                APIIntegrationModel.organization_id == organization_id,
                APIIntegrationModel.is_active.is_(True),
                APIIntegrationModel.api_type == api_type.value,
            )
        )
        return result.scalars().first()

    async def get_for_org(self, integration_id: str, organization_id: str) -> Optional[APIIntegrationModel]:
        """Obtiene una integracion solo si pertenece a la organizacion."""
        result = await self.db.execute(
            select(APIIntegrationModel).where(
                APIIntegrationModel.id == integration_id,
                APIIntegrationModel.organization_id == organization_id,
            )
        )
        return result.scalars().first()

    async def list_for_org(self, organization_id: str) -> List[APIIntegrationModel]:
        """Integraciones de la organizacion, mas recientes primero."""
        result = await self.db.execute(
            select(APIIntegrationModel)
            .where(APIIntegrationModel.organization_id == organization_id)
            .order_by(APIIntegrationModel.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_active_organization_ids(
        self,
        api_type: ApiType = ApiType.VESSEL_TRACKING,
    ) -> List[str]:
        """
        IDs de organizaciones con integracion activa, en orden de creacion.
        Este orden es el que se preserva en los resultados del sync.
        """
        result = await self.db.execute(
            select(APIIntegrationModel.organization_id)
            .where(
                APIIntegrationModel.is_active.is_(True),
                APIIntegrationModel.api_type == api_type.value,
            )
            .order_by(APIIntegrationModel.created_at, APIIntegrationModel.id)
        )
        return list(result.scalars().all())

    async def upsert(self, organization_id: str, data: Dict[str, Any]) -> APIIntegrationModel:
        """
        Crea o actualiza la integracion (clave: organization_id + api_type).
        Deja last_sync_status en PENDING.
        """
        row = {"organization_id": organization_id, **data, "last_sync_status": "PENDING"}
        stmt = build_upsert(self.db, APIIntegrationModel, row, ("organization_id", "api_type"))
        await self.db.execute(stmt)

        result = await self.db.execute(
            select(APIIntegrationModel)
            .where(
                APIIntegrationModel.organization_id == organization_id,
                APIIntegrationModel.api_type == row["api_type"],
            )
            .execution_options(populate_existing=True)
        )
        integration = result.scalars().one()
        logger.info(f"Integracion {integration.api_type} guardada para org {organization_id}")
        return integration

    async def delete_for_org(self, integration_id: str, organization_id: str) -> int:
        """Elimina una integracion de la organizacion. Retorna filas borradas."""
        result = await self.db.execute(
            delete(APIIntegrationModel).where(
                APIIntegrationModel.id == integration_id,
                APIIntegrationModel.organization_id == organization_id,
            )
        )
        return result.rowcount or 0

    async def mark_sync(
        self,
        integration_id: str,
        *,
        status: str,
        error: Optional[str],
        synced_at: datetime,
    ) -> None:
        """Persiste el resultado de la ultima corrida en la integracion."""
        await self.db.execute(
            update(APIIntegrationModel)
            .where(APIIntegrationModel.id == integration_id)
            .values(
                last_sync_at=synced_at,
                last_sync_status=status,
                last_sync_error=error[:2000] if error else None,
            )
        )
