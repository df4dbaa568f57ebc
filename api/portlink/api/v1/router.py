"""
Router principal de la API v1.
Agrupa todos los endpoints de la version 1.
"""
from fastapi import APIRouter

from portlink.api.v1.endpoints import (
    api_integrations,
    cron,
    drivers,
    jobs,
    permits,
    traffic,
    vessels,
    webhooks,
)


# Router principal de la API v1
api_router = APIRouter(prefix="/v1")

# Incluir routers de endpoints especificos
api_router.include_router(cron.router)
api_router.include_router(api_integrations.router)
api_router.include_router(jobs.router)
api_router.include_router(drivers.router)
api_router.include_router(permits.router)
api_router.include_router(vessels.router)
api_router.include_router(traffic.router)
api_router.include_router(webhooks.router)
