"""
Payload de los webhooks de Mawani.
"""
from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class MawaniVesselPatchDTO(BaseModel):
    """Campos parciales del buque que acompañan al evento."""
    arrival_date: Optional[date] = None
    arrival_time: Optional[str] = None
    estimated_trucks: Optional[int] = None
    berth: Optional[str] = None
    status: Optional[str] = None


class MawaniWebhookDTO(BaseModel):
    vessel_id: Optional[str] = None
    event_type: str
    data: MawaniVesselPatchDTO = Field(default_factory=MawaniVesselPatchDTO)
    timestamp: Optional[str] = None


class OrganizationVesselEventDTO(BaseModel):
    """Datos del evento; los embarques se validan al mapear la fila."""
    vessel_name: Optional[str] = None
    arrival_date: Optional[str] = None
    total_trucks: Optional[int] = None
    shipments: Optional[List[Dict[str, Any]]] = None


class OrganizationWebhookDTO(BaseModel):
    organization_id: Optional[str] = None
    event_type: str
    data: OrganizationVesselEventDTO = Field(default_factory=OrganizationVesselEventDTO)
    timestamp: Optional[str] = None
