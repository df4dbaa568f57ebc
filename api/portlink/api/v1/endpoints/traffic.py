"""
Endpoints de trafico: lecturas enviadas por las camaras.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from portlink.api.v1.dependencies.use_case_deps import get_traffic_use_cases
from portlink.application.dto.traffic_dto import TrafficUpdateCreateDTO
from portlink.application.use_cases.traffic_use_cases import TrafficUseCases

router = APIRouter(prefix="/traffic", tags=["Traffic"])


@router.post("")
async def record_traffic_update(
    dto: TrafficUpdateCreateDTO,
    use_cases: TrafficUseCases = Depends(get_traffic_use_cases),
):
    """Registra la lectura; con CONGESTED detiene permisos NORMAL y LOW."""
    result = await use_cases.record_update(dto)
    return {"success": True, **result}


@router.get("")
async def list_traffic_updates(
    camera_id: Optional[str] = None,
    limit: int = Query(50, ge=1, le=500),
    use_cases: TrafficUseCases = Depends(get_traffic_use_cases),
):
    updates = await use_cases.list_updates(camera_id, limit)
    return {"success": True, "updates": updates, "count": len(updates)}
