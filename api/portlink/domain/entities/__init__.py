"""
Entidades del dominio.
"""
from portlink.domain.entities.sync_result import (
    SyncErr,
    SyncOk,
    SyncResult,
    SyncSummary,
    result_to_dict,
    summarize_results,
)

__all__ = [
    "SyncErr",
    "SyncOk",
    "SyncResult",
    "SyncSummary",
    "result_to_dict",
    "summarize_results",
]
