"""
Casos de uso de trabajos de una organizacion.
"""
import secrets
from datetime import date
from typing import Any, Dict, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from portlink.application.dto.job_dto import JobAssignDTO, JobCreateDTO, JobDTO
from portlink.application.dto.permit_dto import PermitDriverDTO
from portlink.application.use_cases.permit_use_cases import generate_qr_code
from portlink.infrastructure.repositories.driver_repository import DriverRepository
from portlink.infrastructure.repositories.job_repository import JobRepository
from portlink.infrastructure.repositories.organization_repository import OrganizationRepository
from portlink.infrastructure.repositories.permit_repository import (
    PermitRepository,
    PriorityRuleRepository,
)
from portlink.shared.constants.logistics_constants import JobStatus, PermitStatus, PriorityLevel
from portlink.shared.exceptions.auth import ForbiddenException
from portlink.shared.exceptions.domain import EntityNotFoundException, ValidationException
from portlink.shared.utils.datetime_utils import DateTimeUtils


def generate_job_number(today: Optional[date] = None) -> str:
    """JOB-YYYYMMDD-NNN con sufijo aleatorio de tres digitos."""
    today = today or DateTimeUtils.now_utc().date()
    return f"JOB-{today:%Y%m%d}-{secrets.randbelow(1000):03d}"


class JobUseCases:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = JobRepository(db)

    async def list_jobs(
        self,
        organization_id: str,
        *,
        status: Optional[JobStatus] = None,
        priority: Optional[PriorityLevel] = None,
        preferred_date: Optional[date] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Dict[str, Any]:
        """Trabajos de la organizacion con el conductor asignado."""
        jobs, total = await self.repository.list_for_org(
            organization_id,
            status=status.value if status else None,
            priority=priority.value if priority else None,
            preferred_date=preferred_date,
            limit=limit,
            offset=offset,
        )
        drivers = await DriverRepository(self.db).get_by_ids(
            list({j.assigned_driver_id for j in jobs if j.assigned_driver_id})
        )
        driver_map = {d.id: PermitDriverDTO.model_validate(d) for d in drivers}

        items = [
            JobDTO.model_validate(j).model_copy(
                update={"assigned_driver": driver_map.get(j.assigned_driver_id)}
            )
            for j in jobs
        ]
        return {"jobs": items, "count": total, "limit": limit, "offset": offset}

    async def create_job(self, organization_id: str, dto: JobCreateDTO) -> Dict[str, Any]:
        """
        Crea un trabajo PENDING.

        La prioridad sale de la regla del tipo de carga (NORMAL si no hay
        regla). Si la organizacion tiene prioridades autorizadas, la
        prioridad resultante debe estar entre ellas.

        Raises:
            ForbiddenException: si la prioridad no esta autorizada
        """
        cargo_type = dto.cargo_type.value
        priority = await PriorityRuleRepository(self.db).level_for_cargo(cargo_type)
        if priority is None:
            priority = PriorityLevel.NORMAL.value

        authorized = await OrganizationRepository(self.db).authorized_priorities(organization_id)
        if authorized is not None and priority not in authorized:
            logger.warning(f"[CREATE JOB] Org {organization_id} sin autorizacion para {priority}")
            raise ForbiddenException(
                f"Your organization is not authorized to create {priority} priority jobs. "
                "Contact admin to upgrade authorization.",
                details={"authorized_priorities": authorized},
            )

        job = await self.repository.create({
            "organization_id": organization_id,
            "job_number": generate_job_number(),
            "status": JobStatus.PENDING.value,
            "priority": priority,
            **dto.model_dump(mode="python", exclude={"cargo_type"}),
            "cargo_type": cargo_type,
        })
        await self.db.commit()
        logger.info(f"[CREATE JOB] {job.job_number} ({priority}) creado por org {organization_id}")
        return {"job_id": job.id, "job_number": job.job_number, "priority": priority}

    async def assign_job(self, organization_id: str, job_id: str, dto: JobAssignDTO) -> Dict[str, Any]:
        """
        Asigna un conductor de la organizacion a un trabajo PENDING y emite
        el permiso APPROVED correspondiente.

        Raises:
            EntityNotFoundException: trabajo o conductor inexistente o de otra organizacion
            ValidationException: si el trabajo ya no esta PENDING
        """
        job = await self.repository.get_for_org(job_id, organization_id)
        if job is None:
            raise EntityNotFoundException("Job", job_id)
        if job.status != JobStatus.PENDING.value:
            raise ValidationException(f"Job already {job.status.lower()}", field="status")

        driver_id = str(dto.driver_id)
        driver = await DriverRepository(self.db).get_for_org(driver_id, organization_id)
        if driver is None:
            raise EntityNotFoundException("Driver", driver_id)

        now = DateTimeUtils.now_utc()
        permit = await PermitRepository(self.db).create({
            "driver_id": driver.id,
            "qr_code": generate_qr_code(),
            "cargo_type": job.cargo_type,
            "priority": job.priority,
            "status": PermitStatus.APPROVED.value,
            "approved_at": now,
            "notes": f"Job {job.job_number}",
        })
        await self.repository.update(job, {
            "status": JobStatus.ASSIGNED.value,
            "assigned_driver_id": driver.id,
            "permit_id": permit.id,
            "assigned_at": now,
        })
        await self.db.commit()
        logger.info(f"[ASSIGN JOB] {job.job_number} -> {driver.name} (permiso {permit.id})")
        return {"job_number": job.job_number, "permit_id": permit.id, "qr_code": permit.qr_code}

    async def delete_job(self, organization_id: str, job_id: str) -> Dict[str, Any]:
        """
        Elimina un trabajo de la organizacion.

        Raises:
            EntityNotFoundException: si no existe o es de otra organizacion
        """
        job = await self.repository.get_for_org(job_id, organization_id)
        if job is None:
            raise EntityNotFoundException("Job", job_id)

        job_number = job.job_number
        await self.repository.delete(job_id)
        await self.db.commit()
        logger.info(f"[DELETE JOB] Trabajo {job_number} eliminado por org {organization_id}")
        return {"job_number": job_number}
