"""
Tipos compartidos por los clientes de APIs de buques.

Se mantienen libres de I/O para poder testearlos fácilmente.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class VesselApiError(RuntimeError):
    """Error de integración con una API de buques (HTTP, red o payload)."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class IntegrationConfig:
    """Datos mínimos de una integración para hablar con la API de la organización."""

    id: str
    organization_id: str
    api_endpoint: str
    api_key: Optional[str] = None

    @classmethod
    def from_model(cls, model: Any) -> "IntegrationConfig":
        return cls(
            id=model.id,
            organization_id=model.organization_id,
            api_endpoint=model.api_endpoint,
            api_key=model.api_key,
        )


@dataclass(frozen=True)
class ConnectionTestResult:
    """Resultado de probar la conexión con la API de una organización."""

    success: bool
    vessels_found: Optional[int] = None
    error: Optional[str] = None
    response_time_ms: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"success": self.success, "response_time_ms": self.response_time_ms}
        if self.vessels_found is not None:
            data["vessels_found"] = self.vessels_found
        if self.error is not None:
            data["error"] = self.error
        return data


def extract_vessels(payload: Any, source: str) -> list[dict[str, Any]]:
    """
    Extrae la lista `vessels` de la respuesta de una API.

    Raises:
        VesselApiError: si el payload no trae una lista de buques
    """
    if not isinstance(payload, dict):
        raise VesselApiError(f"{source}: respuesta inesperada (se esperaba un objeto JSON)")
    vessels = payload.get("vessels")
    if not isinstance(vessels, list):
        raise VesselApiError(f"{source}: la respuesta no contiene la lista 'vessels'")
    return vessels
