"""
Repositorio de permisos y reglas de prioridad.
"""
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import case, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from portlink.infrastructure.database.models import PermitModel, PriorityRuleModel
from portlink.shared.constants.logistics_constants import PRIORITY_ORDER, PermitStatus, PriorityLevel
from portlink.shared.utils.datetime_utils import DateTimeUtils


class PermitRepository:
    """Repositorio para permisos. Los cambios de estado no se validan aqui."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, permit_id: str) -> Optional[PermitModel]:
        return await self.db.get(PermitModel, permit_id)

    async def list_for_driver(
        self,
        driver_id: str,
        status: Optional[PermitStatus] = None,
    ) -> List[PermitModel]:
        """Permisos de un conductor, mas recientes primero."""
        query = select(PermitModel).where(PermitModel.driver_id == driver_id)
        if status:
            query = query.where(PermitModel.status == status.value)
        result = await self.db.execute(query.order_by(PermitModel.created_at.desc()))
        return list(result.scalars().all())

    async def create(self, data: Dict[str, Any]) -> PermitModel:
        permit = PermitModel(**data)
        self.db.add(permit)
        await self.db.flush()
        await self.db.refresh(permit)
        return permit

    async def set_status(self, permit: PermitModel, status: PermitStatus) -> PermitModel:
        permit.status = status.value
        permit.updated_at = DateTimeUtils.now_utc()
        await self.db.flush()
        return permit

    async def halt_by_priority(self, halted_levels: List[PriorityLevel]) -> Tuple[int, int]:
        """
        Detiene los permisos vigentes (PENDING/APPROVED) de las prioridades
        indicadas.

        Returns:
            Tuple (permisos detenidos, permisos protegidos por prioridad)
        """
        active = [PermitStatus.PENDING.value, PermitStatus.APPROVED.value]
        levels = [level.value for level in halted_levels]
        now = DateTimeUtils.now_utc()

        halted = await self.db.execute(
            update(PermitModel)
            .where(PermitModel.status.in_(active), PermitModel.priority.in_(levels))
            .values(status=PermitStatus.HALTED.value, halted_at=now, updated_at=now)
        )
        protected = await self.db.execute(
            select(func.count())
            .select_from(PermitModel)
            .where(PermitModel.status.in_(active), PermitModel.priority.notin_(levels))
        )
        return halted.rowcount or 0, protected.scalar_one()


class PriorityRuleRepository:
    """Reglas de prioridad por tipo de carga."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_ordered(self) -> List[PriorityRuleModel]:
        """Reglas ordenadas de EMERGENCY a LOW."""
        level_rank = case(
            {level.value: rank for rank, level in enumerate(PRIORITY_ORDER)},
            value=PriorityRuleModel.priority_level,
            else_=len(PRIORITY_ORDER),
        )
        result = await self.db.execute(
            select(PriorityRuleModel).order_by(level_rank, PriorityRuleModel.cargo_type)
        )
        return list(result.scalars().all())

    async def level_for_cargo(self, cargo_type: Optional[str]) -> Optional[str]:
        """Nivel de prioridad configurado para el tipo de carga, si existe."""
        if not cargo_type:
            return None
        result = await self.db.execute(
            select(PriorityRuleModel.priority_level).where(PriorityRuleModel.cargo_type == cargo_type)
        )
        return result.scalar_one_or_none()
