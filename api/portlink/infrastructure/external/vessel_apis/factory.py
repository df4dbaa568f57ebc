"""
Construccion de clientes a partir de Settings.
"""

from __future__ import annotations

import random
from typing import Any, Optional

from portlink.core.config import Settings

from .mawani_client import MawaniClient
from .mock_data import MockVesselData
from .org_api_client import OrganizationAPIClient
from .types import IntegrationConfig


def _http_options(settings: Settings) -> dict[str, Any]:
    return {
        "timeout_s": settings.VESSEL_API_TIMEOUT_S,
        "max_retries": settings.VESSEL_API_MAX_RETRIES,
        "min_backoff_s": settings.VESSEL_API_MIN_BACKOFF_S,
        "max_backoff_s": settings.VESSEL_API_MAX_BACKOFF_S,
    }


def _mock(settings: Settings) -> Optional[MockVesselData]:
    if not settings.VESSEL_API_MOCK_MODE:
        return None
    return MockVesselData(rng=random.Random(settings.VESSEL_API_MOCK_SEED))


def build_mawani_client(settings: Settings) -> MawaniClient:
    return MawaniClient(
        settings.MAWANI_API_URL,
        settings.MAWANI_API_KEY or None,
        mock=_mock(settings),
        **_http_options(settings),
    )


def build_org_client(config: IntegrationConfig, settings: Settings) -> OrganizationAPIClient:
    return OrganizationAPIClient(config, mock=_mock(settings), **_http_options(settings))
