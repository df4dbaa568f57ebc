"""
Servicio de sincronizacion de buques.

Diseño (resumen):
- Mawani -> vessel_schedules (UPSERT por vessel_name + arrival_date)
- API de cada organizacion -> organization_vessel_tracking
  (UPSERT por organization_id + vessel_name + arrival_date)
- Cada fila se escribe en su propio SAVEPOINT: un registro malo cuenta como
  fallo "<buque>: <motivo>" y el resto del lote sigue.
- Cada corrida deja una fila en api_sync_logs.
- Un error fatal (API caida, integracion inexistente, timeout, excepcion
  inesperada del cliente o del mapeo) nunca sale del
  servicio: se devuelve como SyncErr.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Tuple

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portlink.core.config import Settings
from portlink.domain.entities.sync_result import SyncErr, SyncOk, SyncResult
from portlink.infrastructure.external.vessel_apis.factory import build_mawani_client, build_org_client
from portlink.infrastructure.external.vessel_apis.mappings import (
    VesselMappingError,
    map_mawani_vessel_to_row,
    map_org_vessel_to_row,
    vessel_label,
)
from portlink.infrastructure.external.vessel_apis.mawani_client import MawaniClient
from portlink.infrastructure.external.vessel_apis.types import IntegrationConfig, VesselApiError
from portlink.infrastructure.repositories.api_integration_repository import APIIntegrationRepository
from portlink.infrastructure.repositories.sync_log_repository import SyncLogRepository
from portlink.infrastructure.repositories.vessel_repository import VesselRepository
from portlink.shared.constants.logistics_constants import SyncLogStatus, SyncType
from portlink.shared.utils.datetime_utils import DateTimeUtils


class _FatalSyncError(Exception):
    """Aborta una corrida; el mensaje va tal cual al SyncErr."""


def sync_log_status(failed: int, total: int) -> SyncLogStatus:
    """SUCCESS sin fallos, PARTIAL si fallo solo una parte, FAILED si fallo todo."""
    if failed == 0:
        return SyncLogStatus.SUCCESS
    if failed < total:
        return SyncLogStatus.PARTIAL
    return SyncLogStatus.FAILED


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _describe(exc: BaseException) -> str:
    """Mensaje legible aun para excepciones sin texto."""
    return str(exc) or type(exc).__name__


class VesselSyncService:
    """
    Orquestador de las corridas de sync.

    Recibe una fabrica de sesiones (no una sesion): cada organizacion se
    sincroniza en su propia sesion para que un fallo no contamine a otra.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        settings: Settings,
        *,
        mawani_client: Optional[MawaniClient] = None,
        org_client_factory: Optional[Callable[[IntegrationConfig], Any]] = None,
    ) -> None:
        self._session_factory = session_factory
        self._settings = settings
        self._mawani = mawani_client or build_mawani_client(settings)
        self._org_client_factory = org_client_factory or (
            lambda config: build_org_client(config, settings)
        )

    # ------------------------------------------------------------------
    # Mawani
    # ------------------------------------------------------------------
    async def sync_mawani_vessels(self, sync_type: SyncType = SyncType.POLL) -> SyncResult:
        """Descarga los buques de los proximos MAWANI_SYNC_DAYS dias y los guarda."""
        start = time.perf_counter()
        logger.info("[Mawani Sync] Iniciando sync de buques...")

        async with self._session_factory() as session:
            try:
                try:
                    vessels = await self._mawani.get_upcoming_vessels(self._settings.MAWANI_SYNC_DAYS)
                except VesselApiError as e:
                    raise _FatalSyncError(str(e)) from e
                except Exception as e:
                    raise _FatalSyncError(f"Mawani API error: {e}") from e
                logger.info(f"[Mawani Sync] {len(vessels)} buques recibidos")

                repo = VesselRepository(session)
                synced_at = DateTimeUtils.now_utc()
                synced, errors = await self._upsert_each(
                    vessels,
                    lambda raw: map_mawani_vessel_to_row(raw, synced_at),
                    repo.upsert_schedule,
                )
                duration_ms = _elapsed_ms(start)

                await SyncLogRepository(session).add(
                    sync_type=sync_type,
                    status=sync_log_status(len(errors), len(vessels)),
                    records_synced=synced,
                    errors=errors,
                    duration_ms=duration_ms,
                )
                await session.commit()
            except _FatalSyncError as e:
                return await self._fail(session, "[Mawani Sync]", str(e), start, sync_type)
            except Exception as e:
                logger.opt(exception=e).error("[Mawani Sync] Error inesperado")
                return await self._fail(session, "[Mawani Sync]", _describe(e), start, sync_type)

        logger.info(
            f"[Mawani Sync] Completado: {synced} ok, {len(errors)} fallidos en {duration_ms}ms"
        )
        return SyncOk(
            records_synced=synced,
            records_failed=len(errors),
            errors=tuple(errors),
            duration_ms=duration_ms,
        )

    # ------------------------------------------------------------------
    # Organizaciones
    # ------------------------------------------------------------------
    async def sync_organization_vessels(
        self,
        organization_id: str,
        sync_type: SyncType = SyncType.POLL,
    ) -> SyncResult:
        """Sincroniza los buques de la integracion activa de la organizacion."""
        start = time.perf_counter()
        tag = f"[Org Sync {organization_id}]"
        logger.info(f"{tag} Iniciando sync")

        async with self._session_factory() as session:
            integrations = APIIntegrationRepository(session)
            integration_id: Optional[str] = None
            try:
                integration = await integrations.get_active_for_org(organization_id)
                if integration is None:
                    raise _FatalSyncError(f"No active API integration found for org: {organization_id}")
                integration_id = integration.id

                client = self._org_client_factory(IntegrationConfig.from_model(integration))
                try:
                    vessels = await client.fetch_vessels()
                except Exception as e:
                    raise _FatalSyncError(f"API sync failed: {e}") from e

                repo = VesselRepository(session)
                synced_at = DateTimeUtils.now_utc()
                synced, errors = await self._upsert_each(
                    vessels,
                    lambda raw: map_org_vessel_to_row(
                        raw,
                        organization_id=organization_id,
                        integration_id=integration_id,
                        synced_at=synced_at,
                    ),
                    repo.upsert_org_tracking,
                )
                duration_ms = _elapsed_ms(start)
                status = sync_log_status(len(errors), len(vessels))

                await integrations.mark_sync(
                    integration_id,
                    status=status.value,
                    error="; ".join(errors) if errors else None,
                    synced_at=synced_at,
                )
                await SyncLogRepository(session).add(
                    sync_type=sync_type,
                    status=status,
                    records_synced=synced,
                    errors=errors,
                    duration_ms=duration_ms,
                    api_integration_id=integration_id,
                )
                await session.commit()
            except _FatalSyncError as e:
                return await self._fail(
                    session, tag, str(e), start, sync_type, integration_id=integration_id
                )
            except Exception as e:
                logger.opt(exception=e).error(f"{tag} Error inesperado")
                return await self._fail(
                    session, tag, _describe(e), start, sync_type, integration_id=integration_id
                )

        logger.info(f"{tag} Completado: {synced} ok, {len(errors)} fallidos en {duration_ms}ms")
        return SyncOk(
            records_synced=synced,
            records_failed=len(errors),
            errors=tuple(errors),
            duration_ms=duration_ms,
        )

    async def sync_all_organizations(self) -> List[SyncResult]:
        """
        Sincroniza todas las organizaciones con integracion activa.

        - Pool acotado por ORG_SYNC_CONCURRENCY (1 = en secuencia).
        - ORG_SYNC_TIMEOUT_S > 0 corta la organizacion lenta con un SyncErr.
        - El resultado conserva el orden de enumeracion.

        Un error leyendo la lista de integraciones se propaga al llamador.
        """
        async with self._session_factory() as session:
            org_ids = await APIIntegrationRepository(session).list_active_organization_ids()

        logger.info(f"[Org Sync] Sincronizando {len(org_ids)} organizaciones")
        semaphore = asyncio.Semaphore(max(1, self._settings.ORG_SYNC_CONCURRENCY))
        timeout_s = self._settings.ORG_SYNC_TIMEOUT_S

        async def run_one(organization_id: str) -> SyncResult:
            async with semaphore:
                if timeout_s <= 0:
                    return await self.sync_organization_vessels(organization_id)
                try:
                    return await asyncio.wait_for(
                        self.sync_organization_vessels(organization_id), timeout=timeout_s
                    )
                except asyncio.TimeoutError:
                    return await self._record_timeout(organization_id, timeout_s)

        return list(await asyncio.gather(*(run_one(org_id) for org_id in org_ids)))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    async def _upsert_each(
        records: Iterable[Any],
        map_row: Callable[[Any], dict],
        upsert: Callable[[dict], Awaitable[None]],
    ) -> Tuple[int, List[str]]:
        """Mapea y guarda registro por registro. Retorna (ok, errores)."""
        synced = 0
        errors: List[str] = []
        for raw in records:
            try:
                await upsert(map_row(raw))
            except VesselMappingError as e:
                errors.append(f"{vessel_label(raw)}: {e}")
            except SQLAlchemyError as e:
                # El SAVEPOINT ya se revirtio; la transaccion externa sigue viva
                errors.append(f"{vessel_label(raw)}: {getattr(e, 'orig', None) or e}")
            except Exception as e:
                logger.warning(f"Registro descartado {vessel_label(raw)}: {_describe(e)}")
                errors.append(f"{vessel_label(raw)}: {_describe(e)}")
            else:
                synced += 1
        return synced, errors

    async def _fail(
        self,
        session: AsyncSession,
        tag: str,
        reason: str,
        start: float,
        sync_type: SyncType,
        *,
        integration_id: Optional[str] = None,
    ) -> SyncErr:
        """Registra la corrida fallida y construye el SyncErr."""
        duration_ms = _elapsed_ms(start)
        logger.error(f"{tag} Error fatal: {reason}")
        await session.rollback()
        try:
            if integration_id:
                await APIIntegrationRepository(session).mark_sync(
                    integration_id,
                    status=SyncLogStatus.FAILED.value,
                    error=reason,
                    synced_at=DateTimeUtils.now_utc(),
                )
            await SyncLogRepository(session).add(
                sync_type=sync_type,
                status=SyncLogStatus.FAILED,
                records_synced=0,
                errors=[reason],
                duration_ms=duration_ms,
                api_integration_id=integration_id,
            )
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error(f"{tag} No se pudo registrar la corrida fallida: {_describe(e)}")
        return SyncErr(reason=reason, duration_ms=duration_ms)

    async def _record_timeout(self, organization_id: str, timeout_s: float) -> SyncErr:
        """
        La corrida cancelada por timeout no llega a su propio _fail: el log
        FAILED y el estado de la integracion se escriben en una sesion nueva.
        """
        tag = f"[Org Sync {organization_id}]"
        reason = f"Sync timed out after {timeout_s:g}s for org: {organization_id}"
        logger.error(f"{tag} Timeout tras {timeout_s}s")

        async with self._session_factory() as session:
            try:
                integration = await APIIntegrationRepository(session).get_active_for_org(organization_id)
            except Exception as e:
                logger.error(f"{tag} No se pudo leer la integracion: {_describe(e)}")
                integration = None
            return await self._fail(
                session,
                tag,
                reason,
                time.perf_counter() - timeout_s,
                SyncType.POLL,
                integration_id=integration.id if integration else None,
            )
