"""
Casos de uso de la aplicacion.
"""
from .driver_use_cases import DriverUseCases
from .integration_use_cases import APIIntegrationUseCases
from .permit_use_cases import PermitUseCases
from .sync_use_cases import VesselSyncUseCases

__all__ = ["DriverUseCases", "APIIntegrationUseCases", "PermitUseCases", "VesselSyncUseCases"]
