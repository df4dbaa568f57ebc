from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from portlink.api.v1.dependencies.auth_deps import get_org_session
from portlink.api.v1.dependencies.use_case_deps import get_job_use_cases
from portlink.application.dto.job_dto import JobAssignDTO, JobCreateDTO
from portlink.application.use_cases.job_use_cases import JobUseCases
from portlink.core.security import OrgSession
from portlink.shared.constants.logistics_constants import JobStatus, PriorityLevel

router = APIRouter(prefix="/org/jobs", tags=["Organization jobs"])


@router.get("")
async def list_jobs(
    job_status: Optional[JobStatus] = Query(None, alias="status"),
    priority: Optional[PriorityLevel] = Query(None),
    preferred_date: Optional[date] = Query(None, alias="date"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    session: OrgSession = Depends(get_org_session),
    use_cases: JobUseCases = Depends(get_job_use_cases),
):
    """Trabajos de la organizacion de la sesion, mas recientes primero."""
    result = await use_cases.list_jobs(
        session.organization_id,
        status=job_status,
        priority=priority,
        preferred_date=preferred_date,
        limit=limit,
        offset=offset,
    )
    return {"success": True, **result}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_job(
    dto: JobCreateDTO,
    session: OrgSession = Depends(get_org_session),
    use_cases: JobUseCases = Depends(get_job_use_cases),
):
    """
    Crea un trabajo PENDING.
    Responde 403 si la prioridad del tipo de carga no esta autorizada.
    """
    result = await use_cases.create_job(session.organization_id, dto)
    return {"success": True, "message": "Job created successfully", **result}


@router.post("/{job_id}/assign")
async def assign_job(
    job_id: str,
    dto: JobAssignDTO,
    session: OrgSession = Depends(get_org_session),
    use_cases: JobUseCases = Depends(get_job_use_cases),
):
    result = await use_cases.assign_job(session.organization_id, job_id, dto)
    return {"success": True, "message": "Driver assigned successfully", **result}


@router.delete("/{job_id}")
async def delete_job(
    job_id: str,
    session: OrgSession = Depends(get_org_session),
    use_cases: JobUseCases = Depends(get_job_use_cases),
):
    """
    Elimina un trabajo de la organizacion.
    Un trabajo de otra organizacion responde 404.
    """
    result = await use_cases.delete_job(session.organization_id, job_id)
    return {"success": True, "message": "Job deleted successfully", **result}
