"""
Servicios de aplicacion compartidos por endpoints, scheduler y scripts.
"""
from portlink.application.services.vessel_sync_service import VesselSyncService

__all__ = ["VesselSyncService"]
