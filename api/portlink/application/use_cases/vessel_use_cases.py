"""
Consulta del itinerario global de buques.
"""
from datetime import date
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from portlink.application.dto.vessel_dto import VesselScheduleDTO
from portlink.infrastructure.repositories.vessel_repository import VesselRepository


class VesselUseCases:

    def __init__(self, db: AsyncSession):
        self.repository = VesselRepository(db)

    async def list_upcoming(self, from_date: Optional[date] = None, limit: int = 100) -> List[VesselScheduleDTO]:
        """Buques desde `from_date` (por defecto hoy), ordenados por llegada."""
        schedules = await self.repository.list_schedules(from_date or date.today(), limit)
        return [VesselScheduleDTO.model_validate(s) for s in schedules]
