"""
Datos de demostracion para las APIs de buques (VESSEL_API_MOCK_MODE).

Genera payloads con la misma forma que las APIs reales, de modo que el
mapeo y el UPSERT se ejercitan igual que en produccion.
"""

from __future__ import annotations

import random
from datetime import date, timedelta
from typing import Any, Optional

VESSEL_NAMES = [
    "MSC TOKYO",
    "MAERSK DUBAI",
    "CMA CGM RIYADH",
    "COSCO SHANGHAI",
    "EVERGREEN PEARL",
    "HAPAG LLOYD EXPRESS",
    "ONE HARMONY",
    "YANG MING TRIUMPH",
]
BERTHS = ["3A", "3B", "4A", "4B", "5A"]
CARGO_TYPE_OPTIONS = [
    ["CONTAINER"],
    ["CONTAINER", "BULK"],
    ["BULK"],
    ["CONTAINER", "REFRIGERATED"],
]

# Tipo de carga de la organizacion -> prioridad
CARGO_PRIORITY = {
    "MEDICAL": "EMERGENCY",
    "PERISHABLE": "EMERGENCY",
    "TIME_SENSITIVE": "ESSENTIAL",
    "STANDARD": "NORMAL",
    "BULK": "LOW",
}
DESTINATIONS = ["Riyadh", "Jeddah", "Mecca", "Medina", "Tabuk", "Dammam", "Khobar"]


class MockVesselData:
    """Generador de buques y embarques de demostracion."""

    def __init__(self, rng: Optional[random.Random] = None, today: Optional[date] = None) -> None:
        self._rng = rng or random.Random()
        self._today = today or date.today()

    def upcoming_vessels(self, days: int = 7) -> list[dict[str, Any]]:
        """1-2 buques por dia durante los proximos `days` dias."""
        rng = self._rng
        vessels: list[dict[str, Any]] = []
        for day_offset in range(days):
            per_day = 2 if rng.random() > 0.3 else 1
            for _ in range(per_day):
                containers = 200 + rng.randrange(400)
                vessels.append({
                    "vessel_id": f"MAWANI-{self._today.year}-{len(vessels) + 1:03d}",
                    "vessel_name": rng.choice(VESSEL_NAMES),
                    "arrival_date": (self._today + timedelta(days=day_offset)).isoformat(),
                    "arrival_time": f"{6 + rng.randrange(6):02d}:{rng.choice(['00', '30'])}",
                    "berth": rng.choice(BERTHS),
                    "estimated_containers": containers,
                    # ~1.3 camiones por contenedor
                    "estimated_trucks": int(containers * 1.3),
                    "cargo_types": rng.choice(CARGO_TYPE_OPTIONS),
                    "status": "ARRIVED" if day_offset == 0 and rng.random() > 0.7 else "SCHEDULED",
                })
        return vessels

    def organization_vessels(self, organization_id: str, days: int = 7) -> list[dict[str, Any]]:
        """Entre 2 y 4 buques del puerto con embarques de la organizacion."""
        port_vessels = self.upcoming_vessels(days)
        count = min(len(port_vessels), self._rng.randint(2, 4))
        selected = self._rng.sample(port_vessels, count)
        prefix = self._org_prefix(organization_id)

        result = []
        for vessel in selected:
            shipments = self._shipments(prefix)
            result.append({
                "vessel_name": vessel["vessel_name"],
                "arrival_date": vessel["arrival_date"],
                "shipments": shipments,
                "total_trucks": sum(s["estimated_trucks"] for s in shipments),
            })
        return result

    def _shipments(self, prefix: str) -> list[dict[str, Any]]:
        rng = self._rng
        shipments = []
        for i in range(3 + rng.randrange(5)):
            cargo_type = rng.choice(list(CARGO_PRIORITY))
            container_count = 1 + rng.randrange(3)
            shipments.append({
                "shipment_number": f"{prefix}-{self._today.year}-{i + 1:04d}",
                "containers": [
                    f"{prefix}{rng.randint(1_000_000, 9_999_999)}" for _ in range(container_count)
                ],
                "cargo_type": cargo_type,
                "priority": CARGO_PRIORITY[cargo_type],
                "estimated_trucks": container_count,
                "destination": rng.choice(DESTINATIONS),
            })
        return shipments

    @staticmethod
    def _org_prefix(organization_id: str) -> str:
        lowered = organization_id.lower()
        if "smsa" in lowered:
            return "SMSA"
        if "aramex" in lowered:
            return "ARX"
        if "naqel" in lowered:
            return "NQL"
        return "ORG"
