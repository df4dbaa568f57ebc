"""
Modelos de base de datos (ORM).

Los estados se guardan como texto (valores de los Enum en
shared/constants/logistics_constants.py) para no atar el esquema a un
tipo ENUM de PostgreSQL.
"""
import uuid

from sqlalchemy import (
    Column, String, Integer, Float, DateTime, Date, Time, Text, JSON, Boolean,
    ForeignKey, UniqueConstraint,
)
from sqlalchemy.sql import func

from portlink.infrastructure.database.session import Base
from portlink.shared.constants.logistics_constants import (
    ApiType,
    JobStatus,
    PermitStatus,
    PriorityLevel,
    SyncLogStatus,
    VesselStatus,
    SOURCE_MANUAL,
)


def _uuid() -> str:
    return str(uuid.uuid4())


class OrganizationModel(Base):
    """Organizacion (tenant): agrupa conductores, trabajos e integraciones."""

    __tablename__ = "organizations"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    contact_person = Column(String(255), nullable=True)
    phone = Column(String(32), nullable=True)
    authorized_priorities = Column(JSON, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Organization(id={self.id}, name={self.name})>"


class DriverModel(Base):
    """Conductor registrado con su vehiculo."""

    __tablename__ = "drivers"

    id = Column(String(36), primary_key=True, default=_uuid)
    organization_id = Column(String(36), ForeignKey("organizations.id"), nullable=True, index=True)
    phone = Column(String(32), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    vehicle_plate = Column(String(16), nullable=False, index=True)
    vehicle_type = Column(String(20), nullable=False)
    company = Column(String(255), nullable=True)
    push_token = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    verified = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Driver(id={self.id}, name={self.name}, plate={self.vehicle_plate})>"


class PermitModel(Base):
    """
    Permiso de movimiento de un camion.

    El estado lo fija quien llama; no hay maquina de estados.
    """

    __tablename__ = "permits"

    id = Column(String(36), primary_key=True, default=_uuid)
    driver_id = Column(String(36), ForeignKey("drivers.id"), nullable=False, index=True)
    slot_id = Column(String(36), nullable=True)
    vessel_id = Column(String(36), nullable=True)
    qr_code = Column(String(255), nullable=True)
    status = Column(String(20), default=PermitStatus.PENDING.value, nullable=False, index=True)
    priority = Column(String(20), default=PriorityLevel.NORMAL.value, nullable=False)
    cargo_type = Column(String(50), nullable=True)
    rescheduled_count = Column(Integer, default=0, nullable=False)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    halted_at = Column(DateTime(timezone=True), nullable=True)
    expires_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Permit(id={self.id}, status={self.status}, priority={self.priority})>"


class JobModel(Base):
    """Trabajo de transporte creado por una organizacion."""

    __tablename__ = "jobs"

    id = Column(String(36), primary_key=True, default=_uuid)
    organization_id = Column(String(36), ForeignKey("organizations.id"), nullable=False, index=True)
    job_number = Column(String(64), nullable=False)
    status = Column(String(20), default=JobStatus.PENDING.value, nullable=False, index=True)
    customer_name = Column(String(255), nullable=True)
    container_number = Column(String(32), nullable=True)
    container_count = Column(Integer, default=1, nullable=False)
    cargo_type = Column(String(50), nullable=True)
    pickup_location = Column(String(255), nullable=True)
    destination = Column(String(255), nullable=True)
    preferred_date = Column(Date, nullable=True, index=True)
    preferred_time = Column(Time, nullable=True)
    notes = Column(Text, nullable=True)
    assigned_driver_id = Column(String(36), ForeignKey("drivers.id"), nullable=True)
    permit_id = Column(String(36), nullable=True)
    vessel_name = Column(String(255), nullable=True)
    priority = Column(String(20), default=PriorityLevel.NORMAL.value, nullable=False)
    assigned_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Job(id={self.id}, job_number={self.job_number}, status={self.status})>"


class PriorityRuleModel(Base):
    """Regla de prioridad por tipo de carga."""

    __tablename__ = "priority_rules"

    id = Column(Integer, primary_key=True, autoincrement=True)
    cargo_type = Column(String(50), nullable=False, unique=True)
    priority_level = Column(String(20), nullable=False)
    max_delay_minutes = Column(Integer, default=0, nullable=False)
    can_be_halted = Column(Boolean, default=True, nullable=False)
    description = Column(Text, nullable=True)
    color_code = Column(String(16), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class VesselScheduleModel(Base):
    """
    Itinerario global de buques (fuente Mawani o carga manual).
    Clave natural: (vessel_name, arrival_date).
    """

    __tablename__ = "vessel_schedules"
    __table_args__ = (
        UniqueConstraint("vessel_name", "arrival_date", name="uq_vessel_schedules_name_date"),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    vessel_name = Column(String(255), nullable=False, index=True)
    arrival_date = Column(Date, nullable=False, index=True)
    arrival_time = Column(Time, nullable=True)
    berth = Column(String(16), nullable=True)
    estimated_trucks = Column(Integer, default=0, nullable=False)
    estimated_containers = Column(Integer, nullable=True)
    actual_trucks = Column(Integer, default=0, nullable=False)
    cargo_types = Column(JSON, nullable=True)
    status = Column(String(20), default=VesselStatus.SCHEDULED.value, nullable=False)
    source = Column(String(20), default=SOURCE_MANUAL, nullable=False)
    external_vessel_id = Column(String(64), nullable=True, index=True)
    synced_at = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<VesselSchedule(vessel={self.vessel_name}, arrival={self.arrival_date})>"


class OrganizationVesselTrackingModel(Base):
    """
    Embarques de una organizacion por buque.
    Clave natural: (organization_id, vessel_name, arrival_date).
    """

    __tablename__ = "organization_vessel_tracking"
    __table_args__ = (
        UniqueConstraint(
            "organization_id", "vessel_name", "arrival_date",
            name="uq_org_vessel_tracking_org_name_date",
        ),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    organization_id = Column(String(36), ForeignKey("organizations.id"), nullable=False, index=True)
    vessel_name = Column(String(255), nullable=False)
    vessel_id = Column(String(36), nullable=True)
    arrival_date = Column(Date, nullable=False)
    arrival_time = Column(Time, nullable=True)
    estimated_containers = Column(Integer, default=0, nullable=False)
    estimated_trucks = Column(Integer, default=0, nullable=False)
    shipment_numbers = Column(JSON, nullable=False, default=list)
    container_numbers = Column(JSON, nullable=False, default=list)
    cargo_types = Column(JSON, nullable=False, default=list)
    priority_breakdown = Column(JSON, nullable=False, default=dict)
    source = Column(String(20), default=SOURCE_MANUAL, nullable=False)
    api_integration_id = Column(String(36), ForeignKey("api_integrations.id"), nullable=True)
    synced_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class APIIntegrationModel(Base):
    """Configuracion de la API externa de una organizacion."""

    __tablename__ = "api_integrations"
    __table_args__ = (
        UniqueConstraint("organization_id", "api_type", name="uq_api_integrations_org_type"),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    organization_id = Column(String(36), ForeignKey("organizations.id"), nullable=False, index=True)
    api_type = Column(String(32), default=ApiType.VESSEL_TRACKING.value, nullable=False)
    api_endpoint = Column(Text, nullable=False)
    api_key = Column(Text, nullable=True)
    webhook_secret = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    sync_frequency_minutes = Column(Integer, default=60, nullable=False)
    last_sync_at = Column(DateTime(timezone=True), nullable=True)
    last_sync_status = Column(String(20), default=SyncLogStatus.PENDING.value, nullable=True)
    last_sync_error = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<APIIntegration(id={self.id}, org={self.organization_id}, type={self.api_type})>"


class APISyncLogModel(Base):
    """Registro de cada corrida de sync (poll, manual o webhook)."""

    __tablename__ = "api_sync_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    api_integration_id = Column(String(36), ForeignKey("api_integrations.id", ondelete="SET NULL"), nullable=True)
    sync_type = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False)
    records_synced = Column(Integer, default=0, nullable=False)
    errors = Column(JSON, nullable=True)
    duration_ms = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class TrafficUpdateModel(Base):
    """Lectura de trafico enviada por las camaras."""

    __tablename__ = "traffic_updates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    camera_id = Column(String(64), nullable=False, index=True)
    timestamp = Column(DateTime(timezone=True), nullable=False)
    vehicle_count = Column(Integer, default=0, nullable=False)
    truck_count = Column(Integer, default=0, nullable=False)
    car_count = Column(Integer, nullable=True)
    status = Column(String(20), nullable=False)
    density_score = Column(Float, nullable=True)
    recommendation = Column(Text, nullable=True)
    processed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
