"""
Constantes del dominio logistico: permisos, prioridades, buques e integraciones.
"""
from enum import Enum


class PermitStatus(str, Enum):
    """Estados de un permiso de camion. Las transiciones no se validan."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    HALTED = "HALTED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"
    COMPLETED = "COMPLETED"


class PriorityLevel(str, Enum):
    """Niveles de prioridad de carga."""
    EMERGENCY = "EMERGENCY"
    ESSENTIAL = "ESSENTIAL"
    NORMAL = "NORMAL"
    LOW = "LOW"


# Orden de mayor a menor prioridad
PRIORITY_ORDER = [
    PriorityLevel.EMERGENCY,
    PriorityLevel.ESSENTIAL,
    PriorityLevel.NORMAL,
    PriorityLevel.LOW,
]


class JobStatus(str, Enum):
    """Estados de un trabajo de transporte."""
    PENDING = "PENDING"
    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class CargoType(str, Enum):
    """Tipos de carga aceptados al crear un trabajo."""
    PERISHABLE = "PERISHABLE"
    MEDICAL = "MEDICAL"
    TIME_SENSITIVE = "TIME_SENSITIVE"
    STANDARD = "STANDARD"
    BULK = "BULK"


class VehicleType(str, Enum):
    """Tipos de vehiculo admitidos en el registro de conductores."""
    TRUCK = "TRUCK"
    CONTAINER = "CONTAINER"
    TANKER = "TANKER"
    FLATBED = "FLATBED"


class VesselStatus(str, Enum):
    """Estados de un buque reportados por el puerto."""
    SCHEDULED = "SCHEDULED"
    ARRIVED = "ARRIVED"
    DEPARTED = "DEPARTED"
    DELAYED = "DELAYED"


class ApiType(str, Enum):
    """Tipos de integracion externa por organizacion."""
    VESSEL_TRACKING = "VESSEL_TRACKING"
    SHIPMENT_DATA = "SHIPMENT_DATA"
    CONTAINER_STATUS = "CONTAINER_STATUS"


class SyncType(str, Enum):
    """Origen de una corrida de sincronizacion."""
    POLL = "POLL"
    WEBHOOK = "WEBHOOK"
    MANUAL = "MANUAL"


class SyncLogStatus(str, Enum):
    """Resultado registrado en api_sync_logs."""
    SUCCESS = "SUCCESS"
    PARTIAL = "PARTIAL"
    FAILED = "FAILED"
    PENDING = "PENDING"


class TrafficStatus(str, Enum):
    """Estado de trafico reportado por las camaras."""
    NORMAL = "NORMAL"
    MODERATE = "MODERATE"
    CONGESTED = "CONGESTED"


class MawaniWebhookEvent(str, Enum):
    """Eventos que Mawani envia por webhook."""
    VESSEL_ARRIVAL_UPDATED = "VESSEL_ARRIVAL_UPDATED"
    VESSEL_DEPARTED = "VESSEL_DEPARTED"
    BERTH_CHANGED = "BERTH_CHANGED"
    CONGESTION_ALERT = "CONGESTION_ALERT"


class OrganizationWebhookEvent(str, Enum):
    """Eventos que la API de una organizacion envia por webhook."""
    VESSEL_ADDED = "VESSEL_ADDED"
    SHIPMENT_UPDATED = "SHIPMENT_UPDATED"
    VESSEL_CANCELLED = "VESSEL_CANCELLED"


# Valores de la columna source
SOURCE_MAWANI_API = "MAWANI_API"
SOURCE_ORG_API = "API"
SOURCE_MANUAL = "MANUAL"
