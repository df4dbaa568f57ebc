"""
Cliente generico para las APIs de organizaciones.

Cada organizacion configura un endpoint que responde:
{"vessels": [{"vessel_name", "arrival_date", "shipments": [...], "total_trucks"}]}
"""

from __future__ import annotations

import time
from typing import Any, Optional

import httpx
from loguru import logger

from .base_client import JsonApiClient
from .mock_data import MockVesselData
from .types import ConnectionTestResult, IntegrationConfig, VesselApiError, extract_vessels


class OrganizationAPIClient(JsonApiClient):
    """Cliente HTTP ligado a una integracion concreta."""

    def __init__(
        self,
        config: IntegrationConfig,
        *,
        mock: Optional[MockVesselData] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **http_options: Any,
    ) -> None:
        super().__init__(api_key=config.api_key, transport=transport, **http_options)
        self.config = config
        self._mock = mock

    async def fetch_vessels(self) -> list[dict[str, Any]]:
        """
        Descarga los buques de la organizacion, sin transformar.

        Raises:
            VesselApiError: error HTTP, de red o payload invalido
        """
        if self._mock is not None:
            return self._mock.organization_vessels(self.config.organization_id)

        payload = await self._request_json("GET", self.config.api_endpoint)
        return extract_vessels(payload, "Organization API")

    async def test_connection(self) -> ConnectionTestResult:
        """
        Prueba ligera de conectividad. Nunca lanza: los errores se reportan
        en el resultado junto con el tiempo de respuesta.
        """
        start = time.perf_counter()
        try:
            vessels = await self.fetch_vessels()
        except Exception as e:
            if not isinstance(e, VesselApiError):
                logger.warning(f"[Org API {self.config.organization_id}] Error inesperado en test: {e!r}")
            return ConnectionTestResult(
                success=False,
                error=str(e) or type(e).__name__,
                response_time_ms=_elapsed_ms(start),
            )
        return ConnectionTestResult(
            success=True,
            vessels_found=len(vessels),
            response_time_ms=_elapsed_ms(start),
        )


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)
