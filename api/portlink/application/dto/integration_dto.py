"""
DTOs de integraciones API por organizacion.
"""
from datetime import datetime
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

from portlink.shared.constants.logistics_constants import ApiType


class APIIntegrationUpsertDTO(BaseModel):
    """Configuracion enviada por la organizacion (crea o reemplaza)."""
    api_type: ApiType
    api_endpoint: str = Field(..., description="URL http(s) de la API de la organizacion")
    api_key: Optional[str] = None
    webhook_secret: Optional[str] = None
    is_active: bool = True
    sync_frequency_minutes: int = Field(60, ge=15, le=1440)

    @field_validator("api_endpoint")
    @classmethod
    def endpoint_must_be_http_url(cls, v: str) -> str:
        parsed = urlparse(v.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Must be a valid URL")
        return v.strip()


class APIIntegrationResponseDTO(BaseModel):
    """Integracion tal como se devuelve al dashboard (sin secretos)."""
    id: str
    organization_id: str
    api_type: str
    api_endpoint: str
    has_api_key: bool = False
    is_active: bool
    sync_frequency_minutes: int
    last_sync_at: Optional[datetime] = None
    last_sync_status: Optional[str] = None
    last_sync_error: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, model) -> "APIIntegrationResponseDTO":
        return cls(
            id=model.id,
            organization_id=model.organization_id,
            api_type=model.api_type,
            api_endpoint=model.api_endpoint,
            has_api_key=bool(model.api_key),
            is_active=model.is_active,
            sync_frequency_minutes=model.sync_frequency_minutes,
            last_sync_at=model.last_sync_at,
            last_sync_status=model.last_sync_status,
            last_sync_error=model.last_sync_error,
            created_at=model.created_at,
        )
