"""
Casos de uso de permisos y reglas de prioridad.
"""
import secrets
from datetime import timedelta
from typing import Any, Dict, List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from portlink.application.dto.permit_dto import (
    BookPermitDTO,
    PermitDTO,
    PermitDriverDTO,
    PermitVesselDTO,
    PriorityRuleDTO,
)
from portlink.infrastructure.repositories.driver_repository import DriverRepository
from portlink.infrastructure.repositories.permit_repository import (
    PermitRepository,
    PriorityRuleRepository,
)
from portlink.infrastructure.repositories.vessel_repository import VesselRepository
from portlink.shared.constants.logistics_constants import PermitStatus, PriorityLevel
from portlink.shared.exceptions.domain import EntityNotFoundException, ValidationException
from portlink.shared.utils.datetime_utils import DateTimeUtils

PERMIT_VALIDITY = timedelta(hours=24)


def generate_qr_code(prefix: str = "PERMIT") -> str:
    """Codigo unico del permiso: PERMIT-<epoch ms>-<sufijo aleatorio>."""
    return f"{prefix}-{DateTimeUtils.now_epoch_ms()}-{secrets.token_hex(4).upper()}"


class PermitUseCases:
    """
    Consulta y cancelacion de permisos.

    Nota: el estado se sobrescribe sin validar la transicion (un permiso
    COMPLETED puede pasar a CANCELLED).
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.permits = PermitRepository(db)
        self.rules = PriorityRuleRepository(db)

    async def list_permits(self, driver_id: str, status: Optional[PermitStatus] = None) -> Dict[str, Any]:
        """
        Permisos del conductor con su conductor y buque, mas las reglas de
        prioridad para la leyenda de la app.
        """
        permits = await self.permits.list_for_driver(driver_id, status)
        rules = await self.priority_rules()

        drivers = await DriverRepository(self.db).get_by_ids(list({p.driver_id for p in permits}))
        vessels = await VesselRepository(self.db).get_schedules_by_ids(
            list({p.vessel_id for p in permits if p.vessel_id})
        )
        driver_map = {d.id: PermitDriverDTO.model_validate(d) for d in drivers}
        vessel_map = {v.id: PermitVesselDTO.model_validate(v) for v in vessels}

        enriched = [
            PermitDTO.model_validate(p).model_copy(
                update={
                    "driver": driver_map.get(p.driver_id),
                    "vessel": vessel_map.get(p.vessel_id) if p.vessel_id else None,
                }
            )
            for p in permits
        ]
        return {"permits": enriched, "priority_rules": rules, "count": len(enriched)}

    async def cancel(self, permit_id: Optional[str]) -> PermitDTO:
        """
        Raises:
            ValidationException: si falta permit_id
            EntityNotFoundException: si el permiso no existe
        """
        if not permit_id:
            raise ValidationException("permit_id is required", field="permit_id")
        permit = await self.permits.get_by_id(permit_id)
        if permit is None:
            raise EntityNotFoundException("Permit", permit_id)

        previous = permit.status
        await self.permits.set_status(permit, PermitStatus.CANCELLED)
        await self.db.commit()
        logger.info(f"Permiso {permit_id} cancelado (estado previo {previous})")
        return PermitDTO.model_validate(permit)

    async def book(self, dto: BookPermitDTO) -> PermitDTO:
        """
        Crea un permiso APPROVED para el conductor.

        La prioridad sale de la regla del tipo de carga (NORMAL si no hay
        regla) y el permiso vence 24 horas despues de aprobado.

        Raises:
            EntityNotFoundException: si el conductor no existe
        """
        driver_id = str(dto.driver_id)
        driver = await DriverRepository(self.db).get_by_id(driver_id)
        if driver is None:
            raise EntityNotFoundException("Driver", driver_id)

        priority = await self.rules.level_for_cargo(dto.cargo_type)
        if priority is None:
            logger.warning(f"Sin regla de prioridad para {dto.cargo_type}; se usa NORMAL")
            priority = PriorityLevel.NORMAL.value

        now = DateTimeUtils.now_utc()
        permit = await self.permits.create({
            "driver_id": driver_id,
            "slot_id": dto.slot_id,
            "vessel_id": dto.vessel_id,
            "qr_code": generate_qr_code(),
            "cargo_type": dto.cargo_type,
            "priority": priority,
            "status": PermitStatus.APPROVED.value,
            "approved_at": now,
            "expires_at": now + PERMIT_VALIDITY,
            "notes": dto.notes,
        })
        await self.db.commit()
        logger.info(f"[PERMIT CREATED] {permit.id} - {priority} ({driver.name}, {dto.cargo_type})")
        return PermitDTO.model_validate(permit)

    async def priority_rules(self) -> List[PriorityRuleDTO]:
        rules = await self.rules.list_ordered()
        return [PriorityRuleDTO.model_validate(r) for r in rules]
