"""
Mapeos API externa -> filas de base de datos.

Cada funcion recibe el registro crudo de la API y devuelve el dict listo
para el UPSERT. Un registro sin nombre de buque o con fechas invalidas
lanza VesselMappingError; el servicio de sync lo cuenta como fallo de ese
registro y sigue con el resto.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from portlink.shared.constants.logistics_constants import (
    SOURCE_MAWANI_API,
    SOURCE_ORG_API,
    VesselStatus,
)
from portlink.shared.utils.datetime_utils import DateTimeUtils


class VesselMappingError(ValueError):
    """Registro externo que no se puede mapear a una fila."""


def vessel_label(raw: Any) -> str:
    """Nombre del buque para los mensajes de error ("<buque>: <motivo>")."""
    if isinstance(raw, dict) and raw.get("vessel_name"):
        return str(raw["vessel_name"])
    return "unknown vessel"


def _require_name(raw: Any) -> str:
    if not isinstance(raw, dict):
        raise VesselMappingError("record is not an object")
    name = raw.get("vessel_name")
    if not isinstance(name, str) or not name.strip():
        raise VesselMappingError("missing vessel_name")
    return name.strip()


def _arrival_date(raw: dict[str, Any]):
    value = raw.get("arrival_date")
    if value in (None, ""):
        raise VesselMappingError("missing arrival_date")
    try:
        return DateTimeUtils.parse_iso_date(value)
    except ValueError as e:
        raise VesselMappingError(f"invalid arrival_date {value!r}") from e


def _arrival_time(raw: dict[str, Any]):
    value = raw.get("arrival_time")
    try:
        return DateTimeUtils.parse_clock_time(value)
    except ValueError as e:
        raise VesselMappingError(f"invalid arrival_time {value!r}") from e


def _as_int(value: Any, default: Optional[int] = 0) -> Optional[int]:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise VesselMappingError(f"invalid number {value!r}") from e


def map_mawani_vessel_to_row(raw: Any, synced_at: datetime) -> dict[str, Any]:
    """Buque de Mawani -> fila de vessel_schedules (source MAWANI_API)."""
    name = _require_name(raw)
    status = raw.get("status") or VesselStatus.SCHEDULED.value
    if status not in VesselStatus.__members__:
        raise VesselMappingError(f"unknown status {status!r}")

    cargo_types = raw.get("cargo_types")
    return {
        "vessel_name": name,
        "arrival_date": _arrival_date(raw),
        "arrival_time": _arrival_time(raw),
        "berth": raw.get("berth"),
        "estimated_trucks": _as_int(raw.get("estimated_trucks")),
        "estimated_containers": _as_int(raw.get("estimated_containers"), default=None),
        "cargo_types": list(cargo_types) if cargo_types else None,
        "status": status,
        "source": SOURCE_MAWANI_API,
        "external_vessel_id": raw.get("vessel_id"),
        "synced_at": synced_at,
    }


def calculate_priority_breakdown(shipments: list[dict[str, Any]]) -> dict[str, int]:
    """Cuenta embarques por prioridad: {"EMERGENCY": 2, "NORMAL": 1, ...}."""
    breakdown: dict[str, int] = {}
    for shipment in shipments:
        priority = shipment.get("priority")
        if priority:
            breakdown[priority] = breakdown.get(priority, 0) + 1
    return breakdown


def sum_shipment_trucks(shipments: Any) -> int:
    """Camiones estimados sumando los embarques (webhooks sin total_trucks)."""
    if not isinstance(shipments, list):
        return 0
    return sum(_as_int(s.get("estimated_trucks")) for s in shipments if isinstance(s, dict))


def map_org_vessel_to_row(
    raw: Any,
    *,
    organization_id: str,
    integration_id: Optional[str],
    synced_at: datetime,
) -> dict[str, Any]:
    """Buque de la API de la organizacion -> fila de organization_vessel_tracking."""
    name = _require_name(raw)
    shipments = raw.get("shipments") or []
    if not isinstance(shipments, list) or not all(isinstance(s, dict) for s in shipments):
        raise VesselMappingError("shipments must be a list of objects")
    if any(not isinstance(s.get("containers") or [], list) for s in shipments):
        raise VesselMappingError("shipment containers must be a list")

    container_numbers = [c for s in shipments for c in (s.get("containers") or [])]
    # Tipos de carga sin repetir, en orden de aparicion
    cargo_types = list(dict.fromkeys(s["cargo_type"] for s in shipments if s.get("cargo_type")))

    return {
        "organization_id": organization_id,
        "vessel_name": name,
        "arrival_date": _arrival_date(raw),
        "estimated_trucks": _as_int(raw.get("total_trucks")),
        "estimated_containers": len(container_numbers),
        "shipment_numbers": [s["shipment_number"] for s in shipments if s.get("shipment_number")],
        "container_numbers": container_numbers,
        "cargo_types": cargo_types,
        "priority_breakdown": calculate_priority_breakdown(shipments),
        "source": SOURCE_ORG_API,
        "api_integration_id": integration_id,
        "synced_at": synced_at,
    }
