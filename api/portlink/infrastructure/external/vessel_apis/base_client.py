"""
Cliente HTTP JSON con backoff, base de los clientes de buques.

Requisitos cubiertos:
- httpx (async)
- Authorization: Bearer <api_key>
- rate-limit/backoff (429, 5xx, errores de red), desactivado con max_retries=0
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import httpx
from loguru import logger

from .types import VesselApiError


class JsonApiClient:
    """
    Hace requests GET/HEAD y devuelve JSON.

    Importante:
    - No interpreta el contenido: eso lo hacen los clientes concretos.
    - `transport` permite inyectar httpx.MockTransport en tests.
    """

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        timeout_s: float = 30.0,
        max_retries: int = 0,
        min_backoff_s: float = 0.8,
        max_backoff_s: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._timeout_s = timeout_s
        self._max_retries = max(0, max_retries)
        self._min_backoff_s = min_backoff_s
        self._max_backoff_s = max_backoff_s
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def _backoff_seconds(self, attempt: int, retry_after: Optional[str]) -> float:
        if retry_after:
            try:
                return float(retry_after)
            except ValueError:
                return self._min_backoff_s
        # Exponencial simple + jitter proporcional
        base = min(self._max_backoff_s, self._min_backoff_s * (2**attempt))
        return base + (0.15 * base)

    async def _request_json(
        self,
        method: str,
        url: str,
        *,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """
        Request HTTP con backoff para 429/5xx.

        Estrategia:
        - 429: respeta Retry-After si existe, si no exponencial con jitter simple.
        - 5xx y errores de red: exponencial con jitter.
        - 4xx (no 429): error inmediato (config/auth mal).
        """
        async with httpx.AsyncClient(timeout=self._timeout_s, transport=self._transport) as client:
            for attempt in range(self._max_retries + 1):
                try:
                    resp = await client.request(method, url, params=params, headers=self._headers())
                except httpx.TransportError as e:
                    if attempt >= self._max_retries:
                        raise VesselApiError(f"Error de red contra {url}: {e}") from e
                    sleep_s = self._backoff_seconds(attempt, None)
                    logger.warning(f"Error de red contra {url} ({e}); reintento en {sleep_s:.1f}s")
                    await asyncio.sleep(sleep_s)
                    continue

                if 200 <= resp.status_code < 300:
                    try:
                        return resp.json()
                    except ValueError as e:
                        raise VesselApiError(f"Respuesta no JSON desde {url}") from e

                # Errores recuperables
                if resp.status_code == 429 or 500 <= resp.status_code < 600:
                    if attempt >= self._max_retries:
                        raise VesselApiError(
                            f"HTTP {resp.status_code}: {resp.reason_phrase}",
                            status_code=resp.status_code,
                        )
                    sleep_s = self._backoff_seconds(attempt, resp.headers.get("Retry-After"))
                    logger.warning(f"{url} respondio {resp.status_code}; reintento en {sleep_s:.1f}s")
                    await asyncio.sleep(sleep_s)
                    continue

                # Errores no recuperables
                raise VesselApiError(
                    f"HTTP {resp.status_code}: {resp.reason_phrase}",
                    status_code=resp.status_code,
                )

        raise VesselApiError(f"Sin respuesta desde {url}")
