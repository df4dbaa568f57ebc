"""
Repositorio de trabajos de transporte por organizacion.
"""
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portlink.infrastructure.database.models import JobModel


class JobRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_for_org(self, job_id: str, organization_id: str) -> Optional[JobModel]:
        """Obtiene el trabajo solo si pertenece a la organizacion."""
        result = await self.db.execute(
            select(JobModel).where(
                JobModel.id == job_id,
                JobModel.organization_id == organization_id,
            )
        )
        return result.scalars().first()

    async def list_for_org(
        self,
        organization_id: str,
        *,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        preferred_date: Optional[date] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[JobModel], int]:
        """
        Trabajos de la organizacion, mas recientes primero.

        Returns:
            Tuple con la pagina y el total sin paginar
        """
        filters = [JobModel.organization_id == organization_id]
        if status:
            filters.append(JobModel.status == status)
        if priority:
            filters.append(JobModel.priority == priority)
        if preferred_date:
            filters.append(JobModel.preferred_date == preferred_date)

        total = (
            await self.db.execute(select(func.count()).select_from(JobModel).where(*filters))
        ).scalar_one()
        result = await self.db.execute(
            select(JobModel)
            .where(*filters)
            .order_by(JobModel.created_at.desc(), JobModel.job_number.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def create(self, data: Dict[str, Any]) -> JobModel:
        job = JobModel(**data)
        self.db.add(job)
        await self.db.flush()
        await self.db.refresh(job)
        return job

    async def update(self, job: JobModel, values: Dict[str, Any]) -> JobModel:
        for field, value in values.items():
            setattr(job, field, value)
        await self.db.flush()
        await self.db.refresh(job)
        return job

    async def delete(self, job_id: str) -> int:
        result = await self.db.execute(delete(JobModel).where(JobModel.id == job_id))
        return result.rowcount or 0
