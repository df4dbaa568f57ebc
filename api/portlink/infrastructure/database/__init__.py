"""
Configuración de base de datos.

Importa todos los modelos para que se registren con Base
antes de crear las tablas.
"""
from portlink.infrastructure.database.models import (
    OrganizationModel,
    DriverModel,
    PermitModel,
    JobModel,
    PriorityRuleModel,
    VesselScheduleModel,
    OrganizationVesselTrackingModel,
    APIIntegrationModel,
    APISyncLogModel,
    TrafficUpdateModel,
)
