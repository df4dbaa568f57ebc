"""
Tests unitarios para los resultados de sincronizacion.
"""
from unittest.mock import AsyncMock

import pytest

from portlink.application.services.vessel_sync_service import sync_log_status
from portlink.application.use_cases.sync_use_cases import VesselSyncUseCases
from portlink.domain.entities.sync_result import (
    SyncErr,
    SyncOk,
    result_to_dict,
    summarize_results,
)
from portlink.shared.constants.logistics_constants import SyncLogStatus


class TestSyncResult:

    def test_ok_without_failures_is_success(self):
        result = SyncOk(records_synced=3)
        assert result.success is True
        assert result.errors == ()

    def test_ok_with_failures_is_not_success(self):
        result = SyncOk(records_synced=2, records_failed=1, errors=("X: boom",))
        assert result.success is False

    def test_err_counts_as_one_failure(self):
        result = SyncErr(reason="API sync failed: HTTP 500: Internal Server Error")
        assert result.success is False
        assert result.records_synced == 0
        assert result.records_failed == 1
        assert result.errors == ("API sync failed: HTTP 500: Internal Server Error",)

    def test_result_to_dict_shape(self):
        data = result_to_dict(SyncOk(records_synced=5, duration_ms=12))
        assert data["success"] is True
        assert data["records_synced"] == 5
        assert data["records_failed"] == 0
        assert data["errors"] == []
        assert data["duration_ms"] == 12
        assert "T" in data["timestamp"]


class TestSummarizeResults:

    def test_sums_counters_and_keeps_error_order(self):
        summary = summarize_results([
            SyncOk(records_synced=3),
            SyncErr(reason="org-b failed"),
            SyncOk(records_synced=1, records_failed=1, errors=("Vessel C: bad date",)),
        ])
        assert summary.organizations_processed == 3
        assert summary.total_synced == 4
        assert summary.total_failed == 2
        assert summary.errors == ["org-b failed", "Vessel C: bad date"]
        assert summary.success is False

    def test_empty(self):
        summary = summarize_results([])
        assert summary.organizations_processed == 0
        assert summary.total_synced == 0
        assert summary.success is True


class TestSyncLogStatus:

    def test_no_failures(self):
        assert sync_log_status(0, 4) == SyncLogStatus.SUCCESS

    def test_empty_batch_is_success(self):
        assert sync_log_status(0, 0) == SyncLogStatus.SUCCESS

    def test_some_failures(self):
        assert sync_log_status(1, 4) == SyncLogStatus.PARTIAL

    def test_all_failed(self):
        assert sync_log_status(4, 4) == SyncLogStatus.FAILED


class TestVesselSyncUseCases:

    @pytest.mark.asyncio
    async def test_sync_mawani_response(self):
        service = AsyncMock()
        service.sync_mawani_vessels.return_value = SyncOk(records_synced=3)

        response = await VesselSyncUseCases(service).sync_mawani()

        assert response["message"] == "Synced 3 vessels from Mawani API"
        assert response["success"] is True

    @pytest.mark.asyncio
    async def test_sync_organizations_aggregates(self):
        service = AsyncMock()
        service.sync_all_organizations.return_value = [
            SyncOk(records_synced=3),
            SyncErr(reason="No active API integration found for org: org-b"),
        ]

        response = await VesselSyncUseCases(service).sync_organizations()

        assert response["success"] is False
        assert response["message"] == "Processed 2 organizations, synced 3 vessels"
        assert response["total_failed"] == 1
        assert response["errors"] == ["No active API integration found for org: org-b"]
        assert [r["success"] for r in response["results"]] == [True, False]
