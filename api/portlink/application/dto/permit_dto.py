"""
DTOs de permisos y reglas de prioridad.
"""
from datetime import date, datetime, time
from typing import Optional

from uuid import UUID

from pydantic import BaseModel, Field


class CancelPermitDTO(BaseModel):
    # Opcional para responder "permit_id is required" con el mismo envelope
    permit_id: Optional[str] = None


class BookPermitDTO(BaseModel):
    """Reserva de un permiso para un conductor."""
    driver_id: UUID
    cargo_type: str = Field(..., min_length=1)
    slot_id: Optional[str] = None
    vessel_id: Optional[str] = None
    notes: Optional[str] = None


class PriorityRuleDTO(BaseModel):
    cargo_type: str
    priority_level: str
    max_delay_minutes: int = 0
    can_be_halted: bool = True
    description: Optional[str] = None
    color_code: Optional[str] = None

    class Config:
        from_attributes = True


class PermitDriverDTO(BaseModel):
    id: str
    name: str
    phone: str
    vehicle_plate: str
    vehicle_type: str

    class Config:
        from_attributes = True


class PermitVesselDTO(BaseModel):
    id: str
    vessel_name: str
    arrival_date: date
    arrival_time: Optional[time] = None
    estimated_trucks: int = 0

    class Config:
        from_attributes = True


class PermitDTO(BaseModel):
    id: str
    qr_code: Optional[str] = None
    status: str
    priority: str
    cargo_type: Optional[str] = None
    slot_id: Optional[str] = None
    rescheduled_count: int = 0
    created_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    halted_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None
    driver: Optional[PermitDriverDTO] = None
    vessel: Optional[PermitVesselDTO] = None

    class Config:
        from_attributes = True
