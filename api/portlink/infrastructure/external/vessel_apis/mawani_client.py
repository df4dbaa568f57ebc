"""
Cliente de la API de Mawani (autoridad portuaria).

Endpoint: GET {base_url}/vessels/upcoming?days=N
Respuesta: {"vessels": [...], "timestamp": "...", "port_status": "NORMAL"}
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from .base_client import JsonApiClient
from .mock_data import MockVesselData
from .types import extract_vessels


class MawaniClient(JsonApiClient):
    """Cliente del itinerario de buques de Mawani."""

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        *,
        mock: Optional[MockVesselData] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **http_options: Any,
    ) -> None:
        super().__init__(api_key=api_key, transport=transport, **http_options)
        self._base_url = base_url.rstrip("/")
        self._mock = mock

    async def get_upcoming_vessels(self, days: int = 7) -> list[dict[str, Any]]:
        """
        Buques con llegada en los proximos `days` dias, sin transformar.

        Raises:
            VesselApiError: error HTTP, de red o payload invalido
        """
        if self._mock is not None:
            return self._mock.upcoming_vessels(days)

        payload = await self._request_json(
            "GET", f"{self._base_url}/vessels/upcoming", params={"days": days}
        )
        return extract_vessels(payload, "Mawani API")
