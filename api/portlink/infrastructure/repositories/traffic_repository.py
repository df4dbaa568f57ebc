"""
Repositorio de lecturas de trafico.
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portlink.infrastructure.database.models import TrafficUpdateModel


class TrafficRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, data: Dict[str, Any]) -> TrafficUpdateModel:
        update = TrafficUpdateModel(**data, processed=False)
        self.db.add(update)
        await self.db.flush()
        await self.db.refresh(update)
        return update

    async def list_latest(self, camera_id: Optional[str] = None, limit: int = 50) -> List[TrafficUpdateModel]:
        query = select(TrafficUpdateModel)
        if camera_id:
            query = query.where(TrafficUpdateModel.camera_id == camera_id)
        result = await self.db.execute(
            query.order_by(TrafficUpdateModel.timestamp.desc()).limit(limit)
        )
        return list(result.scalars().all())
