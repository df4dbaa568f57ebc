"""
DTOs de lecturas de trafico (camaras con deteccion de vehiculos).
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from portlink.shared.constants.logistics_constants import TrafficStatus


class TrafficUpdateCreateDTO(BaseModel):
    camera_id: str = Field(..., min_length=1)
    timestamp: datetime
    status: TrafficStatus
    vehicle_count: int = Field(..., ge=0)
    truck_count: int = Field(..., ge=0)
    car_count: Optional[int] = Field(None, ge=0)
    density_score: Optional[float] = None
    recommendation: Optional[str] = None


class TrafficUpdateDTO(BaseModel):
    id: int
    camera_id: str
    timestamp: datetime
    status: str
    vehicle_count: int
    truck_count: int
    car_count: Optional[int] = None
    density_score: Optional[float] = None
    recommendation: Optional[str] = None
    processed: bool

    class Config:
        from_attributes = True
