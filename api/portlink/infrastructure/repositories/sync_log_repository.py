"""
Repositorio de la bitacora de sincronizaciones (api_sync_logs).
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portlink.infrastructure.database.models import APISyncLogModel
from portlink.shared.constants.logistics_constants import SyncLogStatus, SyncType


class SyncLogRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(
        self,
        *,
        sync_type: SyncType,
        status: SyncLogStatus,
        records_synced: int,
        errors: Optional[List[str]] = None,
        duration_ms: Optional[int] = None,
        api_integration_id: Optional[str] = None,
    ) -> APISyncLogModel:
        log = APISyncLogModel(
            api_integration_id=api_integration_id,
            sync_type=sync_type.value,
            status=status.value,
            records_synced=records_synced,
            errors=errors or None,
            duration_ms=duration_ms,
        )
        self.db.add(log)
        await self.db.flush()
        return log

    async def list_recent(
        self,
        api_integration_id: Optional[str] = None,
        limit: int = 20,
    ) -> List[APISyncLogModel]:
        query = select(APISyncLogModel)
        if api_integration_id:
            query = query.where(APISyncLogModel.api_integration_id == api_integration_id)
        result = await self.db.execute(
            query.order_by(APISyncLogModel.id.desc()).limit(limit)
        )
        return list(result.scalars().all())
