"""
DTOs relacionados con conductores.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from portlink.shared.constants.logistics_constants import VehicleType
from portlink.shared.utils.plate_utils import (
    format_saudi_truck_plate,
    is_valid_saudi_truck_plate,
)


def _normalize_plate(value: str) -> str:
    formatted = format_saudi_truck_plate(value)
    if not is_valid_saudi_truck_plate(formatted):
        raise ValueError("Vehicle plate must be 4 digits and 3 letters (e.g. 7653 TNJ)")
    return formatted


class DriverRegisterDTO(BaseModel):
    """
    Registro desde la app movil. El id lo genera el dispositivo, por eso
    reintentar el registro es idempotente.
    """
    id: UUID
    phone: str = Field(..., pattern=r"^\+966[0-9]{9}$")
    name: str = Field(..., min_length=2)
    vehicle_plate: str = Field(..., min_length=1)
    vehicle_type: VehicleType
    push_token: Optional[str] = None

    @field_validator("vehicle_plate")
    @classmethod
    def plate_must_be_saudi_truck_plate(cls, v: str) -> str:
        return _normalize_plate(v)


class DriverUpdateDTO(BaseModel):
    """Campos editables desde el dashboard. Solo se aplican los enviados."""
    name: Optional[str] = Field(None, min_length=2)
    vehicle_plate: Optional[str] = None
    vehicle_type: Optional[VehicleType] = None
    is_active: Optional[bool] = None
    push_token: Optional[str] = None

    @field_validator("vehicle_plate")
    @classmethod
    def plate_must_be_saudi_truck_plate(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _normalize_plate(v)


class DriverDTO(BaseModel):
    id: str
    phone: str
    name: str
    vehicle_plate: str
    vehicle_type: str
    company: Optional[str] = None
    organization_id: Optional[str] = None
    is_active: bool
    verified: bool = False
    push_token: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
