"""
Repositorio de buques: itinerario global (vessel_schedules) y
seguimiento por organizacion (organization_vessel_tracking).
"""
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from portlink.infrastructure.database.models import (
    OrganizationVesselTrackingModel,
    VesselScheduleModel,
)
from portlink.infrastructure.repositories.upsert import build_upsert

SCHEDULE_CONFLICT_COLUMNS = ("vessel_name", "arrival_date")
TRACKING_CONFLICT_COLUMNS = ("organization_id", "vessel_name", "arrival_date")


class VesselRepository:
    """Repositorio para gestionar buques en la base de datos."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def upsert_schedule(self, row: Dict[str, Any]) -> None:
        """
        UPSERT de un buque por (vessel_name, arrival_date).
        Se ejecuta dentro de un SAVEPOINT: si falla, solo se pierde esta fila.
        """
        stmt = build_upsert(self.db, VesselScheduleModel, row, SCHEDULE_CONFLICT_COLUMNS)
        async with self.db.begin_nested():
            await self.db.execute(stmt)

    async def upsert_org_tracking(self, row: Dict[str, Any]) -> None:
        """UPSERT de seguimiento por (organization_id, vessel_name, arrival_date)."""
        stmt = build_upsert(
            self.db, OrganizationVesselTrackingModel, row, TRACKING_CONFLICT_COLUMNS
        )
        async with self.db.begin_nested():
            await self.db.execute(stmt)

    async def delete_org_tracking(self, organization_id: str, vessel_name: str) -> int:
        """Borra todas las llegadas del buque para la organizacion."""
        result = await self.db.execute(
            delete(OrganizationVesselTrackingModel).where(
                OrganizationVesselTrackingModel.organization_id == organization_id,
                OrganizationVesselTrackingModel.vessel_name == vessel_name,
            )
        )
        return result.rowcount or 0

    async def update_by_external_id(self, external_vessel_id: str, values: Dict[str, Any]) -> int:
        """
        Actualiza los buques que tienen el ID externo de Mawani.

        Returns:
            int: Numero de filas afectadas
        """
        clean = {k: v for k, v in values.items() if v is not None}
        if not clean:
            return 0
        result = await self.db.execute(
            update(VesselScheduleModel)
            .where(VesselScheduleModel.external_vessel_id == external_vessel_id)
            .values(**clean)
        )
        return result.rowcount or 0

    async def list_schedules(
        self,
        from_date: Optional[date] = None,
        limit: int = 100,
    ) -> List[VesselScheduleModel]:
        """Lista itinerarios ordenados por llegada."""
        query = select(VesselScheduleModel)
        if from_date:
            query = query.where(VesselScheduleModel.arrival_date >= from_date)
        query = query.order_by(
            VesselScheduleModel.arrival_date, VesselScheduleModel.arrival_time
        ).limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_schedule(self, vessel_name: str, arrival_date: date) -> Optional[VesselScheduleModel]:
        result = await self.db.execute(
            select(VesselScheduleModel).where(
                VesselScheduleModel.vessel_name == vessel_name,
                VesselScheduleModel.arrival_date == arrival_date,
            )
        )
        return result.scalars().first()

    async def list_org_tracking(self, organization_id: str) -> List[OrganizationVesselTrackingModel]:
        """Buques seguidos por una organizacion, ordenados por llegada."""
        result = await self.db.execute(
            select(OrganizationVesselTrackingModel)
            .where(OrganizationVesselTrackingModel.organization_id == organization_id)
            .order_by(OrganizationVesselTrackingModel.arrival_date)
        )
        return list(result.scalars().all())

    async def get_schedules_by_ids(self, schedule_ids: List[str]) -> List[VesselScheduleModel]:
        if not schedule_ids:
            return []
        result = await self.db.execute(
            select(VesselScheduleModel).where(VesselScheduleModel.id.in_(schedule_ids))
        )
        return list(result.scalars().all())
