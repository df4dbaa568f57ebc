"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .driver_dto import DriverDTO, DriverRegisterDTO
from .job_dto import JobAssignDTO, JobCreateDTO, JobDTO
from .integration_dto import APIIntegrationResponseDTO, APIIntegrationUpsertDTO
from .permit_dto import CancelPermitDTO, PermitDTO, PriorityRuleDTO
from .traffic_dto import TrafficUpdateCreateDTO, TrafficUpdateDTO
from .vessel_dto import OrganizationVesselDTO, VesselScheduleDTO
from .webhook_dto import MawaniWebhookDTO, OrganizationWebhookDTO

__all__ = [
    "DriverDTO",
    "DriverRegisterDTO",
    "JobAssignDTO",
    "JobCreateDTO",
    "JobDTO",
    "APIIntegrationResponseDTO",
    "APIIntegrationUpsertDTO",
    "CancelPermitDTO",
    "PermitDTO",
    "PriorityRuleDTO",
    "TrafficUpdateCreateDTO",
    "TrafficUpdateDTO",
    "OrganizationVesselDTO",
    "VesselScheduleDTO",
    "MawaniWebhookDTO",
    "OrganizationWebhookDTO",
]
