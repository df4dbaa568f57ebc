"""
Endpoints de permisos, cancelacion y reglas de prioridad.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status as http_status

from portlink.api.v1.dependencies.use_case_deps import get_permit_use_cases
from portlink.application.dto.permit_dto import BookPermitDTO, CancelPermitDTO
from portlink.application.use_cases.permit_use_cases import PermitUseCases
from portlink.shared.constants.logistics_constants import PermitStatus
from portlink.shared.exceptions.domain import ValidationException

router = APIRouter(tags=["Permits"])


@router.get("/permits")
async def list_permits(
    driver_id: Optional[str] = Query(None),
    status: Optional[PermitStatus] = Query(None),
    use_cases: PermitUseCases = Depends(get_permit_use_cases),
):
    if not driver_id:
        raise ValidationException("Missing required parameter: driver_id", field="driver_id")
    result = await use_cases.list_permits(driver_id, status)
    return {"success": True, **result}


@router.post("/book", status_code=http_status.HTTP_201_CREATED)
async def book_permit(
    dto: BookPermitDTO,
    use_cases: PermitUseCases = Depends(get_permit_use_cases),
):
    permit = await use_cases.book(dto)
    return {"success": True, "permit": permit, "message": "Permit booked successfully"}


@router.post("/cancel")
async def cancel_permit(
    dto: CancelPermitDTO,
    use_cases: PermitUseCases = Depends(get_permit_use_cases),
):
    permit = await use_cases.cancel(dto.permit_id)
    return {"success": True, "permit": permit}


@router.get("/priority-rules")
async def list_priority_rules(
    use_cases: PermitUseCases = Depends(get_permit_use_cases),
):
    """Reglas de EMERGENCY a LOW."""
    rules = await use_cases.priority_rules()
    return {"success": True, "rules": rules}
