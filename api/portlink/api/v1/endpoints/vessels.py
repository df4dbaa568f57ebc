from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from portlink.api.v1.dependencies.use_case_deps import get_vessel_use_cases
from portlink.application.use_cases.vessel_use_cases import VesselUseCases

router = APIRouter(prefix="/vessels", tags=["Vessels"])


@router.get("")
async def list_vessels(
    from_date: Optional[date] = None,
    limit: int = Query(100, ge=1, le=500),
    use_cases: VesselUseCases = Depends(get_vessel_use_cases),
):
    """Itinerario de buques desde `from_date` (hoy por defecto)."""
    vessels = await use_cases.list_upcoming(from_date, limit)
    return {"success": True, "vessels": vessels, "count": len(vessels)}
