"""
DTOs de trabajos de transporte.
"""
from datetime import date, datetime, time
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from portlink.application.dto.permit_dto import PermitDriverDTO
from portlink.shared.constants.logistics_constants import CargoType


class JobCreateDTO(BaseModel):
    customer_name: str = Field(..., min_length=1)
    container_number: Optional[str] = None
    container_count: int = Field(1, ge=1)
    cargo_type: CargoType
    pickup_location: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    preferred_date: date
    preferred_time: time
    notes: Optional[str] = None


class JobAssignDTO(BaseModel):
    driver_id: UUID


class JobDTO(BaseModel):
    id: str
    job_number: str
    customer_name: Optional[str] = None
    container_number: Optional[str] = None
    container_count: int = 1
    cargo_type: Optional[str] = None
    priority: str
    status: str
    pickup_location: Optional[str] = None
    destination: Optional[str] = None
    preferred_date: Optional[date] = None
    preferred_time: Optional[time] = None
    notes: Optional[str] = None
    permit_id: Optional[str] = None
    assigned_driver_id: Optional[str] = None
    assigned_driver: Optional[PermitDriverDTO] = None
    created_at: Optional[datetime] = None
    assigned_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True
