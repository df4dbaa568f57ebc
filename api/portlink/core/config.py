"""
Settings de PortLink, leidos de variables de entorno y del archivo .env.

ENVIRONMENT=development habilita comportamiento de desarrollo; cualquier
otro valor se trata como produccion.
"""
import json
from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field, computed_field


class Settings(BaseSettings):
    """
    Variables de entorno de la API.

    Secretos compartidos:
    - CRON_SECRET: si esta vacio los endpoints de cron quedan abiertos
    - MAWANI_WEBHOOK_SECRET: si esta vacio no se valida la firma del webhook

    Sync de buques:
    - VESSEL_API_MAX_RETRIES=0 desactiva los reintentos (comportamiento por defecto)
    - ORG_SYNC_CONCURRENCY=1 procesa las organizaciones en secuencia
    """

    # App
    APP_NAME: str = Field(default="PortLink Logistics API")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")

    # Uvicorn
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    # PostgreSQL por partes
    DATABASE_HOST: str = Field(default="localhost")
    DATABASE_PORT: int = Field(default=5432)
    DATABASE_USER: str = Field(default="portlink_user")
    DATABASE_PASSWORD: str = Field(default="portlink_pass")
    DATABASE_NAME: str = Field(default="portlink_db")

    # URL completa; tiene prioridad sobre las partes
    DATABASE_URL: str = Field(default="")
    DB_POOL_SIZE: int = Field(default=5)
    DB_MAX_OVERFLOW: int = Field(default=10)

    # "*", lista JSON o lista separada por comas
    CORS_ORIGINS: str = Field(default="*")

    # Secretos y sesion
    CRON_SECRET: str = Field(default="")
    ORG_SESSION_COOKIE: str = Field(default="org_session")

    # Mawani (autoridad portuaria)
    MAWANI_API_URL: str = Field(default="https://api.mawani.sa/ports/dammam")
    MAWANI_API_KEY: str = Field(default="")
    MAWANI_SYNC_DAYS: int = Field(default=7)
    MAWANI_WEBHOOK_SECRET: str = Field(default="")

    # Clientes HTTP de APIs de buques
    VESSEL_API_MOCK_MODE: bool = Field(default=False)
    VESSEL_API_MOCK_SEED: Optional[int] = Field(default=None)
    VESSEL_API_TIMEOUT_S: float = Field(default=30.0)
    VESSEL_API_MAX_RETRIES: int = Field(default=0)
    VESSEL_API_MIN_BACKOFF_S: float = Field(default=0.8)
    VESSEL_API_MAX_BACKOFF_S: float = Field(default=20.0)

    # Sync por organizacion
    ORG_SYNC_CONCURRENCY: int = Field(default=1)
    ORG_SYNC_TIMEOUT_S: float = Field(default=0.0)

    # Scheduler interno (por defecto el disparo viene de un cron externo)
    VESSEL_SYNC_SCHEDULER_ENABLED: bool = Field(default=False)
    MAWANI_SYNC_INTERVAL_HOURS: float = Field(default=6.0)
    ORG_SYNC_INTERVAL_MINUTES: float = Field(default=60.0)

    # loguru
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/app.log")

    @computed_field
    @property
    def effective_database_url(self) -> str:
        """DATABASE_URL si viene definida; si no, la URL asyncpg armada por partes."""
        return self.DATABASE_URL or (
            f"postgresql+asyncpg://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    @computed_field
    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.strip().lower() == "development"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


def get_cors_origins(raw: str) -> List[str]:
    """Origenes CORS: "*", lista JSON o valores separados por comas."""
    raw = raw.strip()
    if raw == "*":
        return ["*"]
    if raw.startswith("["):
        return [str(origin) for origin in json.loads(raw)]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Dependencia FastAPI que entrega la configuracion.
    Los tests la reemplazan con app.dependency_overrides.
    """
    return Settings()


# Instancia usada por el arranque (engine, logging, uvicorn)
settings = get_settings()
