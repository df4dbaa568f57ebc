"""
CLI: sincronizacion de buques fuera del proceso web.

Uso recomendado:
  - Ejecutar como job (cron/systemd timer) cuando no se quiere exponer
    los endpoints /api/v1/cron/*.

Ejecucion:
  python scripts/run_vessel_sync.py               # Mawani + organizaciones
  python scripts/run_vessel_sync.py --mawani
  python scripts/run_vessel_sync.py --organizations

Codigo de salida 1 si alguna corrida termino con fallos.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger
from dotenv import load_dotenv

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

load_dotenv(_API_ROOT / ".env", override=False)

from portlink.application.services import VesselSyncService
from portlink.core.config import get_settings
from portlink.domain.entities.sync_result import summarize_results
from portlink.infrastructure.database.session import AsyncSessionLocal, close_db


async def _run(run_mawani: bool, run_organizations: bool) -> bool:
    service = VesselSyncService(AsyncSessionLocal, get_settings())
    ok = True
    try:
        if run_mawani:
            logger.info("Sync Mawani: iniciando...")
            result = await service.sync_mawani_vessels()
            logger.info(
                f"Sync Mawani: synced={result.records_synced} failed={result.records_failed}"
            )
            for error in result.errors:
                logger.warning(f"  {error}")
            ok = ok and result.success

        if run_organizations:
            logger.info("Sync organizaciones: iniciando...")
            summary = summarize_results(await service.sync_all_organizations())
            logger.info(
                f"Sync organizaciones: orgs={summary.organizations_processed} "
                f"synced={summary.total_synced} failed={summary.total_failed}"
            )
            for error in summary.errors:
                logger.warning(f"  {error}")
            ok = ok and summary.success
    finally:
        await close_db()
    return ok


def main() -> int:
    parser = argparse.ArgumentParser(description="Sincroniza buques desde Mawani y las APIs de organizaciones")
    parser.add_argument("--mawani", action="store_true", help="Solo el itinerario global de Mawani")
    parser.add_argument("--organizations", action="store_true", help="Solo las integraciones activas de organizaciones")
    args = parser.parse_args()

    both = not args.mawani and not args.organizations
    ok = asyncio.run(_run(args.mawani or both, args.organizations or both))
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
