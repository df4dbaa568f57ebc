"""
Entidad de dominio: resultado de una corrida de sincronizacion de buques.

Un resultado es SyncOk (la corrida llego a escribir; puede tener fallos
parciales por registro) o SyncErr (la corrida se aborto antes de escribir).
Ambos exponen la misma vista plana {success, records_synced, records_failed,
errors} que consumen los endpoints.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Sequence, Tuple, Union

from portlink.shared.utils.datetime_utils import DateTimeUtils


@dataclass(frozen=True)
class SyncOk:
    """Corrida completada. success solo si no hubo registros fallidos."""

    records_synced: int
    records_failed: int = 0
    errors: Tuple[str, ...] = ()
    duration_ms: int = 0
    timestamp: datetime = field(default_factory=DateTimeUtils.now_utc)

    @property
    def success(self) -> bool:
        return self.records_failed == 0


@dataclass(frozen=True)
class SyncErr:
    """Corrida abortada (API caida, integracion inexistente, timeout...)."""

    reason: str
    duration_ms: int = 0
    timestamp: datetime = field(default_factory=DateTimeUtils.now_utc)

    success = False
    records_synced = 0
    records_failed = 1

    @property
    def errors(self) -> Tuple[str, ...]:
        return (self.reason,)


SyncResult = Union[SyncOk, SyncErr]


def result_to_dict(result: SyncResult) -> Dict[str, Any]:
    """Serializa un resultado al formato de respuesta de la API."""
    return {
        "success": result.success,
        "records_synced": result.records_synced,
        "records_failed": result.records_failed,
        "errors": list(result.errors),
        "duration_ms": result.duration_ms,
        "timestamp": result.timestamp.isoformat(),
    }


@dataclass(frozen=True)
class SyncSummary:
    """Agregado de varias corridas (una por organizacion)."""

    organizations_processed: int
    total_synced: int
    total_failed: int
    errors: List[str]

    @property
    def success(self) -> bool:
        return self.total_failed == 0


def summarize_results(results: Sequence[SyncResult]) -> SyncSummary:
    """Suma los contadores de cada resultado preservando el orden de los errores."""
    return SyncSummary(
        organizations_processed=len(results),
        total_synced=sum(r.records_synced for r in results),
        total_failed=sum(r.records_failed for r in results),
        errors=[e for r in results for e in r.errors],
    )
