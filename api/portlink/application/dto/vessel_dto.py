"""
DTOs de buques: itinerario global y seguimiento por organizacion.
"""
from datetime import date, datetime, time
from typing import Dict, List, Optional

from pydantic import BaseModel


class VesselScheduleDTO(BaseModel):
    id: str
    vessel_name: str
    arrival_date: date
    arrival_time: Optional[time] = None
    berth: Optional[str] = None
    estimated_trucks: int = 0
    estimated_containers: Optional[int] = None
    cargo_types: Optional[List[str]] = None
    status: str
    source: str
    external_vessel_id: Optional[str] = None
    synced_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class OrganizationVesselDTO(BaseModel):
    id: str
    vessel_name: str
    arrival_date: date
    arrival_time: Optional[time] = None
    estimated_containers: int = 0
    estimated_trucks: int = 0
    shipment_numbers: List[str] = []
    container_numbers: List[str] = []
    cargo_types: List[str] = []
    priority_breakdown: Dict[str, int] = {}
    source: str
    synced_at: Optional[datetime] = None

    class Config:
        from_attributes = True
