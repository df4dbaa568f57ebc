"""
Endpoints de cron para la sincronizacion de buques.

GET y POST hacen lo mismo (POST para disparos manuales). Protegidos con
`Authorization: Bearer <CRON_SECRET>`.
"""
from fastapi import APIRouter, Depends

from portlink.api.v1.dependencies.auth_deps import require_cron_secret
from portlink.api.v1.dependencies.use_case_deps import get_vessel_sync_use_cases
from portlink.application.use_cases.sync_use_cases import VesselSyncUseCases

router = APIRouter(
    prefix="/cron",
    tags=["Cron"],
    dependencies=[Depends(require_cron_secret)],
)


@router.api_route("/sync-mawani-vessels", methods=["GET", "POST"])
async def sync_mawani_vessels(
    use_cases: VesselSyncUseCases = Depends(get_vessel_sync_use_cases),
):
    """Sincroniza el itinerario de buques de Mawani (cada 6 horas)."""
    return await use_cases.sync_mawani()


@router.api_route("/sync-organization-vessels", methods=["GET", "POST"])
async def sync_organization_vessels(
    use_cases: VesselSyncUseCases = Depends(get_vessel_sync_use_cases),
):
    """Sincroniza los buques de todas las organizaciones con integracion activa (cada hora)."""
    return await use_cases.sync_organizations()
