"""
Casos de uso de sincronizacion de buques disparados por cron.
"""
from typing import Any, Dict

from loguru import logger

from portlink.application.services.vessel_sync_service import VesselSyncService
from portlink.domain.entities.sync_result import result_to_dict, summarize_results


class VesselSyncUseCases:
    """Envuelve el servicio de sync y arma las respuestas de los endpoints de cron."""

    def __init__(self, service: VesselSyncService):
        self.service = service

    async def sync_mawani(self) -> Dict[str, Any]:
        logger.info("[Cron] Iniciando sync de buques Mawani...")
        result = await self.service.sync_mawani_vessels()
        logger.info(
            f"[Cron] Sync Mawani completado: {result.records_synced} sincronizados, "
            f"{result.records_failed} fallidos"
        )
        return {
            "message": f"Synced {result.records_synced} vessels from Mawani API",
            **result_to_dict(result),
        }

    async def sync_organizations(self) -> Dict[str, Any]:
        """
        Sincroniza todas las organizaciones y agrega los totales.

        Raises:
            SQLAlchemyError: si no se pudo leer la lista de integraciones
        """
        logger.info("[Cron] Iniciando sync de buques por organizacion...")
        results = await self.service.sync_all_organizations()
        summary = summarize_results(results)
        logger.info(
            f"[Cron] Sync de organizaciones completado: {summary.organizations_processed} "
            f"organizaciones, {summary.total_synced} sincronizados, {summary.total_failed} fallidos"
        )
        return {
            "success": summary.success,
            "message": (
                f"Processed {summary.organizations_processed} organizations, "
                f"synced {summary.total_synced} vessels"
            ),
            "organizations_processed": summary.organizations_processed,
            "total_synced": summary.total_synced,
            "total_failed": summary.total_failed,
            "errors": summary.errors,
            "results": [result_to_dict(r) for r in results],
        }
