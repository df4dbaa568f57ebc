"""
Casos de uso de lecturas de trafico.

Con trafico CONGESTED se detienen los permisos NORMAL y LOW; EMERGENCY y
ESSENTIAL quedan protegidos.
"""
from typing import Any, Dict, List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from portlink.application.dto.traffic_dto import TrafficUpdateCreateDTO, TrafficUpdateDTO
from portlink.infrastructure.repositories.permit_repository import PermitRepository
from portlink.infrastructure.repositories.traffic_repository import TrafficRepository
from portlink.shared.constants.logistics_constants import PriorityLevel, TrafficStatus
from portlink.shared.utils.datetime_utils import DateTimeUtils

HALTED_ON_CONGESTION = [PriorityLevel.NORMAL, PriorityLevel.LOW]


class TrafficUseCases:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = TrafficRepository(db)

    async def record_update(self, dto: TrafficUpdateCreateDTO) -> Dict[str, Any]:
        data = dto.model_dump()
        data["status"] = dto.status.value
        data["timestamp"] = DateTimeUtils.ensure_utc(dto.timestamp)
        update = await self.repository.add(data)

        halted, protected = 0, 0
        if dto.status == TrafficStatus.CONGESTED:
            halted, protected = await PermitRepository(self.db).halt_by_priority(HALTED_ON_CONGESTION)
            logger.warning(
                f"[TRAFFIC ALERT] {dto.status.value} camara={dto.camera_id} "
                f"vehiculos={dto.vehicle_count} camiones={dto.truck_count} "
                f"detenidos={halted} protegidos={protected}"
            )
        await self.db.commit()
        return {
            "update_id": update.id,
            "permits_affected": halted,
            "permits_protected": protected,
        }

    async def list_updates(self, camera_id: Optional[str] = None, limit: int = 50) -> List[TrafficUpdateDTO]:
        updates = await self.repository.list_latest(camera_id, limit)
        return [TrafficUpdateDTO.model_validate(u) for u in updates]
