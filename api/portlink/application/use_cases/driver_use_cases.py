"""
Casos de uso relacionados con conductores.
"""
from typing import Any, Dict, Optional, Tuple
from uuid import UUID

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from portlink.application.dto.driver_dto import DriverDTO, DriverRegisterDTO, DriverUpdateDTO
from portlink.infrastructure.repositories.driver_repository import DriverRepository
from portlink.shared.exceptions.domain import (
    EntityAlreadyExistsException,
    EntityNotFoundException,
    ValidationException,
)

# Filtro ?status= -> is_active
_STATUS_FILTERS = {"active": True, "inactive": False, "all": None}


class DriverUseCases:
    """
    Casos de uso para el roster de conductores.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = DriverRepository(db)

    async def list_drivers(
        self,
        *,
        search: str = "",
        status: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Dict[str, Any]:
        """
        Busca conductores para el dashboard.

        Args:
            search: Texto a buscar en telefono, nombre o placa
            status: active | inactive | all (cualquier otro valor = all)
            limit: Tamaño de pagina
            offset: Desplazamiento

        Returns:
            Dict con drivers, count (total sin paginar), limit y offset
        """
        drivers, total = await self.repository.search(
            search=search.strip(),
            is_active=_STATUS_FILTERS.get(status or "all"),
            limit=limit,
            offset=offset,
        )
        return {
            "drivers": [DriverDTO.model_validate(d) for d in drivers],
            "count": total,
            "limit": limit,
            "offset": offset,
        }

    async def register(self, dto: DriverRegisterDTO) -> Tuple[DriverDTO, bool]:
        """
        Registra un conductor. Si ya existe (mismo id o telefono) lo devuelve
        sin modificarlo.

        Returns:
            Tuple (conductor, creado)

        Raises:
            EntityAlreadyExistsException: si otro registro gano la carrera
        """
        driver_id = str(dto.id)
        existing = await self.repository.get_by_id_or_phone(driver_id, dto.phone)
        if existing:
            logger.info(f"[DRIVER EXISTS] {existing.id} - {existing.name}")
            return DriverDTO.model_validate(existing), False

        try:
            async with self.db.begin_nested():
                driver = await self.repository.create({
                    "id": driver_id,
                    "phone": dto.phone,
                    "name": dto.name,
                    "vehicle_plate": dto.vehicle_plate,
                    "vehicle_type": dto.vehicle_type.value,
                    "push_token": dto.push_token,
                    "is_active": True,
                })
        except IntegrityError:
            raise EntityAlreadyExistsException("Driver", "phone or ID", dto.phone)
        await self.db.commit()

        logger.info(
            f"[DRIVER REGISTERED] {driver.id} - {driver.name} "
            f"({driver.vehicle_type} {driver.vehicle_plate})"
        )
        return DriverDTO.model_validate(driver), True

    async def get_driver(self, driver_id: str) -> DriverDTO:
        """
        Raises:
            ValidationException: si el id no es un UUID
            EntityNotFoundException: si no existe
        """
        driver = await self._load(driver_id)
        return DriverDTO.model_validate(driver)

    async def update_driver(self, driver_id: str, dto: DriverUpdateDTO) -> DriverDTO:
        """Actualiza solo los campos enviados (nombre, placa, tipo, activo, push token)."""
        # push_token admite null para desregistrar el dispositivo
        values = {
            field: value
            for field, value in dto.model_dump(exclude_unset=True, mode="json").items()
            if value is not None or field == "push_token"
        }
        if not values:
            raise ValidationException("No valid fields to update")

        driver = await self._load(driver_id)
        driver = await self.repository.update(driver, values)
        await self.db.commit()
        logger.info(f"[DRIVER UPDATED] {driver.id} - {driver.name}")
        return DriverDTO.model_validate(driver)

    async def _load(self, driver_id: str):
        try:
            UUID(driver_id)
        except ValueError:
            raise ValidationException("Invalid driver ID format", field="id")
        driver = await self.repository.get_by_id(driver_id)
        if driver is None:
            raise EntityNotFoundException("Driver", driver_id)
        return driver
