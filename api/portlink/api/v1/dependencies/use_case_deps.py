"""
Dependencias para inyeccion de casos de uso.
"""
from typing import Any, Callable

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portlink.application.services.vessel_sync_service import VesselSyncService
from portlink.application.use_cases.driver_use_cases import DriverUseCases
from portlink.application.use_cases.integration_use_cases import APIIntegrationUseCases
from portlink.application.use_cases.job_use_cases import JobUseCases
from portlink.application.use_cases.permit_use_cases import PermitUseCases
from portlink.application.use_cases.sync_use_cases import VesselSyncUseCases
from portlink.application.use_cases.traffic_use_cases import TrafficUseCases
from portlink.application.use_cases.vessel_use_cases import VesselUseCases
from portlink.application.use_cases.webhook_use_cases import (
    MawaniWebhookUseCases,
    OrganizationWebhookUseCases,
)
from portlink.core.config import Settings, get_settings
from portlink.infrastructure.database.session import get_db, get_session_factory
from portlink.infrastructure.external.vessel_apis.factory import build_org_client
from portlink.infrastructure.external.vessel_apis.types import IntegrationConfig


def get_vessel_sync_service(
    settings: Settings = Depends(get_settings),
    session_factory: async_sessionmaker = Depends(get_session_factory),
) -> VesselSyncService:
    """
    Servicio de sync ligado a la configuracion del request.
    Usa la session factory (no la sesion del request): cada organizacion
    abre su propia sesion.
    """
    return VesselSyncService(session_factory, settings)


def get_org_client_factory(
    settings: Settings = Depends(get_settings),
) -> Callable[[IntegrationConfig], Any]:
    """Fabrica de clientes para las APIs de organizaciones."""
    return lambda config: build_org_client(config, settings)


def get_vessel_sync_use_cases(
    service: VesselSyncService = Depends(get_vessel_sync_service),
) -> VesselSyncUseCases:
    return VesselSyncUseCases(service)


def get_integration_use_cases(
    db: AsyncSession = Depends(get_db),
    service: VesselSyncService = Depends(get_vessel_sync_service),
    org_client_factory: Callable[[IntegrationConfig], Any] = Depends(get_org_client_factory),
) -> APIIntegrationUseCases:
    return APIIntegrationUseCases(db, service, org_client_factory)


def get_driver_use_cases(db: AsyncSession = Depends(get_db)) -> DriverUseCases:
    return DriverUseCases(db)


def get_permit_use_cases(db: AsyncSession = Depends(get_db)) -> PermitUseCases:
    return PermitUseCases(db)


def get_job_use_cases(db: AsyncSession = Depends(get_db)) -> JobUseCases:
    return JobUseCases(db)


def get_traffic_use_cases(db: AsyncSession = Depends(get_db)) -> TrafficUseCases:
    return TrafficUseCases(db)


def get_vessel_use_cases(db: AsyncSession = Depends(get_db)) -> VesselUseCases:
    return VesselUseCases(db)


def get_webhook_use_cases(db: AsyncSession = Depends(get_db)) -> MawaniWebhookUseCases:
    return MawaniWebhookUseCases(db)


def get_org_webhook_use_cases(db: AsyncSession = Depends(get_db)) -> OrganizationWebhookUseCases:
    return OrganizationWebhookUseCases(db)
