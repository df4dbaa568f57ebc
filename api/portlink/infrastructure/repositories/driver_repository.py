"""
Implementación del repositorio de conductores.
Maneja las operaciones de base de datos para la entidad DriverModel.
"""
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from portlink.infrastructure.database.models import DriverModel


class DriverRepository:
    """Repositorio para gestionar conductores en la base de datos."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def search(
        self,
        *,
        search: str = "",
        is_active: Optional[bool] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[DriverModel], int]:
        """
        Busca conductores por telefono, nombre o placa (case-insensitive).

        Returns:
            Tuple con la pagina de conductores y el total sin paginar
        """
        filters = []
        if is_active is not None:
            filters.append(DriverModel.is_active.is_(is_active))
        if search:
            pattern = f"%{search}%"
            filters.append(
                or_(
                    DriverModel.phone.ilike(pattern),
                    DriverModel.name.ilike(pattern),
                    DriverModel.vehicle_plate.ilike(pattern),
                )
            )

        count_result = await self.db.execute(
            select(func.count()).select_from(DriverModel).where(*filters)
        )
        total = count_result.scalar_one()

        result = await self.db.execute(
            select(DriverModel)
            .where(*filters)
            .order_by(DriverModel.created_at.desc(), DriverModel.id)
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def get_by_id_or_phone(self, driver_id: str, phone: str) -> Optional[DriverModel]:
        result = await self.db.execute(
            select(DriverModel).where(
                or_(DriverModel.id == driver_id, DriverModel.phone == phone)
            )
        )
        return result.scalars().first()

    async def create(self, data: Dict[str, Any]) -> DriverModel:
        driver = DriverModel(**data)
        self.db.add(driver)
        await self.db.flush()
        await self.db.refresh(driver)
        return driver

    async def get_by_ids(self, driver_ids: List[str]) -> List[DriverModel]:
        if not driver_ids:
            return []
        result = await self.db.execute(select(DriverModel).where(DriverModel.id.in_(driver_ids)))
        return list(result.scalars().all())

    async def get_by_id(self, driver_id: str) -> Optional[DriverModel]:
        return await self.db.get(DriverModel, driver_id)

    async def get_for_org(self, driver_id: str, organization_id: str) -> Optional[DriverModel]:
        """Conductor solo si pertenece a la organizacion."""
        result = await self.db.execute(
            select(DriverModel).where(
                DriverModel.id == driver_id,
                DriverModel.organization_id == organization_id,
            )
        )
        return result.scalars().first()

    async def update(self, driver: DriverModel, values: Dict[str, Any]) -> DriverModel:
        for field, value in values.items():
            setattr(driver, field, value)
        await self.db.flush()
        await self.db.refresh(driver)
        return driver
