"""
Eventos de ciclo de vida: log a archivo, tablas, scheduler de buques.
"""
from typing import Awaitable, Callable, List, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from fastapi import FastAPI
from loguru import logger

from portlink.application.services.vessel_sync_service import VesselSyncService
from portlink.core.config import Settings, settings
from portlink.infrastructure.database.session import AsyncSessionLocal, close_db, init_db

MAWANI_SYNC_JOB_ID = "mawani_vessel_sync"
ORG_SYNC_JOB_ID = "organization_vessel_sync"


def config_warnings(config: Settings) -> List[str]:
    """Avisos sobre secretos o credenciales sin configurar."""
    warnings = []
    if not config.CRON_SECRET:
        warnings.append("CRON_SECRET vacio: los endpoints de cron quedan abiertos")
    if not config.MAWANI_WEBHOOK_SECRET:
        warnings.append("MAWANI_WEBHOOK_SECRET vacio: no se valida la firma del webhook")
    if not config.MAWANI_API_KEY and not config.VESSEL_API_MOCK_MODE:
        warnings.append("MAWANI_API_KEY vacia: la API de Mawani puede rechazar el sync")
    return warnings


def build_scheduler(config: Settings) -> Optional[AsyncIOScheduler]:
    """
    Scheduler interno para los syncs de buques.
    Desactivado por defecto: el disparo normal viene de un cron externo.
    """
    if not config.VESSEL_SYNC_SCHEDULER_ENABLED:
        return None

    service = VesselSyncService(AsyncSessionLocal, config)
    jobs = (
        (MAWANI_SYNC_JOB_ID, service.sync_mawani_vessels, IntervalTrigger(hours=config.MAWANI_SYNC_INTERVAL_HOURS)),
        (ORG_SYNC_JOB_ID, service.sync_all_organizations, IntervalTrigger(minutes=config.ORG_SYNC_INTERVAL_MINUTES)),
    )
    scheduler = AsyncIOScheduler(timezone="UTC")
    for job_id, func, trigger in jobs:
        scheduler.add_job(func, trigger=trigger, id=job_id, max_instances=1, coalesce=True)
    return scheduler


def startup_handler(app: FastAPI) -> Callable[[], Awaitable[None]]:
    async def startup() -> None:
        logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION} ({settings.ENVIRONMENT})")
        for warning in config_warnings(settings):
            logger.warning(f"CONFIG: {warning}")

        logger.add(settings.LOG_FILE, rotation="500 MB", retention="10 days", level=settings.LOG_LEVEL)

        try:
            await init_db()
        except Exception:
            logger.exception("No se pudo inicializar la base de datos")
            raise
        logger.info("Base de datos inicializada")

        app.state.scheduler = build_scheduler(settings)
        if app.state.scheduler is not None:
            app.state.scheduler.start()
            logger.info("Scheduler de sync de buques iniciado")

        logger.success("Aplicacion iniciada")

    return startup


def shutdown_handler(app: FastAPI) -> Callable[[], Awaitable[None]]:
    async def shutdown() -> None:
        scheduler = getattr(app.state, "scheduler", None)
        if scheduler is not None:
            scheduler.shutdown(wait=False)
            logger.info("Scheduler detenido")

        await close_db()
        logger.success("Conexiones cerradas, aplicacion detenida")

    return shutdown
