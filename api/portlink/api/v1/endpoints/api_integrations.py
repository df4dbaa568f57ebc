"""
Endpoints de integraciones API de la organizacion autenticada.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from portlink.api.v1.dependencies.auth_deps import get_org_session
from portlink.api.v1.dependencies.use_case_deps import get_integration_use_cases
from portlink.application.dto.integration_dto import APIIntegrationUpsertDTO
from portlink.application.use_cases.integration_use_cases import APIIntegrationUseCases
from portlink.core.security import OrgSession

router = APIRouter(prefix="/org", tags=["Organization API integrations"])


@router.get("/api-integration")
async def list_integrations(
    session: OrgSession = Depends(get_org_session),
    use_cases: APIIntegrationUseCases = Depends(get_integration_use_cases),
):
    integrations = await use_cases.list_integrations(session.organization_id)
    return {"success": True, "integrations": integrations}


@router.post("/api-integration")
async def save_integration(
    dto: APIIntegrationUpsertDTO,
    session: OrgSession = Depends(get_org_session),
    use_cases: APIIntegrationUseCases = Depends(get_integration_use_cases),
):
    """Crea o reemplaza la integracion (una por tipo de API)."""
    integration = await use_cases.save_integration(session.organization_id, dto)
    return {
        "success": True,
        "integration": integration,
        "message": "API integration configured successfully",
    }


@router.delete("/api-integration")
async def delete_integration(
    integration_id: Optional[str] = Query(None, alias="id"),
    session: OrgSession = Depends(get_org_session),
    use_cases: APIIntegrationUseCases = Depends(get_integration_use_cases),
):
    await use_cases.delete_integration(session.organization_id, integration_id)
    return {"success": True, "message": "API integration deleted successfully"}


@router.post("/api-integration/{integration_id}/sync")
async def trigger_sync(
    integration_id: str,
    session: OrgSession = Depends(get_org_session),
    use_cases: APIIntegrationUseCases = Depends(get_integration_use_cases),
):
    """Sync manual, fuera del calendario del cron."""
    return await use_cases.trigger_sync(session.organization_id, integration_id)


@router.post("/api-integration/{integration_id}/test")
async def test_connection(
    integration_id: str,
    session: OrgSession = Depends(get_org_session),
    use_cases: APIIntegrationUseCases = Depends(get_integration_use_cases),
):
    """Prueba la conexion con la API configurada."""
    return await use_cases.test_connection(session.organization_id, integration_id)


@router.get("/vessels")
async def list_tracked_vessels(
    session: OrgSession = Depends(get_org_session),
    use_cases: APIIntegrationUseCases = Depends(get_integration_use_cases),
):
    vessels = await use_cases.list_tracked_vessels(session.organization_id)
    return {"success": True, "vessels": vessels, "count": len(vessels)}
