"""
Utilidades para manejo de fechas y horas.
"""
import time
from datetime import date, datetime, time as dt_time, timezone
from typing import Optional


class DateTimeUtils:
    """Clase de utilidades para operaciones con fechas y horas."""

    @staticmethod
    def now_utc() -> datetime:
        """
        Obtiene la fecha y hora actual en UTC.

        Returns:
            datetime: Fecha y hora actual en UTC
        """
        return datetime.now(timezone.utc)

    @staticmethod
    def now_epoch_ms() -> int:
        """Milisegundos desde epoch (formato de expires_at en la sesion)."""
        return int(time.time() * 1000)

    @staticmethod
    def ensure_utc(dt: datetime) -> datetime:
        """Normaliza un datetime a UTC (aware)."""
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    @staticmethod
    def parse_iso_date(value) -> date:
        """
        Convierte "2026-02-15" (o un ISO datetime) a date.

        Raises:
            ValueError: si el valor no es una fecha valida
        """
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"Fecha invalida: {value!r}")
        raw = value.strip()
        if "T" in raw:
            return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
        return date.fromisoformat(raw)

    @staticmethod
    def parse_clock_time(value) -> Optional[dt_time]:
        """Convierte "08:30" a time. None o vacio retorna None."""
        if value is None or value == "":
            return None
        if isinstance(value, dt_time):
            return value
        return dt_time.fromisoformat(str(value).strip())
