"""
Endpoints de conductores: roster del dashboard y registro desde la app.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from portlink.api.v1.dependencies.use_case_deps import get_driver_use_cases
from portlink.application.dto.driver_dto import DriverRegisterDTO, DriverUpdateDTO
from portlink.application.use_cases.driver_use_cases import DriverUseCases

router = APIRouter(prefix="/drivers", tags=["Drivers"])


@router.get("")
async def list_drivers(
    search: str = "",
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    use_cases: DriverUseCases = Depends(get_driver_use_cases),
):
    """Busca por telefono, nombre o placa. status: active | inactive | all."""
    result = await use_cases.list_drivers(
        search=search, status=status_filter, limit=limit, offset=offset
    )
    return {"success": True, **result}


@router.post("/register")
async def register_driver(
    dto: DriverRegisterDTO,
    response: Response,
    use_cases: DriverUseCases = Depends(get_driver_use_cases),
):
    """
    Registro idempotente: 201 si se creo, 200 si ya existia (mismo id o telefono).
    """
    driver, created = await use_cases.register(dto)
    if created:
        response.status_code = status.HTTP_201_CREATED
        message = "Driver registered successfully"
    else:
        message = "Driver already registered"
    return {"success": True, "driver": driver, "message": message}


@router.get("/{driver_id}")
async def get_driver(
    driver_id: str,
    use_cases: DriverUseCases = Depends(get_driver_use_cases),
):
    driver = await use_cases.get_driver(driver_id)
    return {"success": True, "driver": driver}


@router.patch("/{driver_id}")
async def update_driver(
    driver_id: str,
    dto: DriverUpdateDTO,
    use_cases: DriverUseCases = Depends(get_driver_use_cases),
):
    """Edicion desde el dashboard de administracion."""
    driver = await use_cases.update_driver(driver_id, dto)
    return {"success": True, "driver": driver, "message": "Driver updated successfully"}
