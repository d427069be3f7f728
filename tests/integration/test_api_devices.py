"""
Integration tests for device API endpoints.

TestAPIErrorMapping uses TestClient with mocked use cases (no real DB);
TestDeviceAPILifecycle runs the real use cases over the in-memory store.
Note: Runs full app lifespan (slower). Use: pytest tests/unit/ for fast unit-only runs.
"""
import logging
import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

pytestmark = pytest.mark.integration
from fastapi.testclient import TestClient

from app.application.dto.device_dto import DeviceResponse
from app.application.result import OperationResult
from app.application.use_cases.device import (
    CreateDeviceUseCase,
    DeleteDeviceUseCase,
    GetDeviceUseCase,
    PatchDeviceUseCase,
    ReplaceDeviceUseCase,
)
from app.core.config import reset_settings
from app.di.container import reset_container
from app.domain.errors import DeviceErrorKind, DeviceStoreError
from app.domain.models.device import DeviceState

DEVICES = "/api/v1/devices"


@pytest.fixture
def memory_backend():
    """Run the app against a fresh in-memory store."""
    with patch.dict(os.environ, {"DEVICE_STORE_BACKEND": "memory"}):
        reset_settings()
        reset_container()
        yield
    reset_settings()
    reset_container()


@pytest.fixture
def use_cases():
    return {
        CreateDeviceUseCase: AsyncMock(spec=CreateDeviceUseCase),
        GetDeviceUseCase: AsyncMock(spec=GetDeviceUseCase),
        ReplaceDeviceUseCase: AsyncMock(spec=ReplaceDeviceUseCase),
        PatchDeviceUseCase: AsyncMock(spec=PatchDeviceUseCase),
        DeleteDeviceUseCase: AsyncMock(spec=DeleteDeviceUseCase),
    }


@pytest.fixture
def mock_container(use_cases):
    container = MagicMock()
    container.get.side_effect = lambda cls: use_cases.get(cls, None)
    return container


@pytest.fixture
def mocked_client(memory_backend, mock_container):
    """Create test client with mocked container."""
    from app.main import app

    with patch("app.api.v1.device_controller.get_container", return_value=mock_container):
        with TestClient(app) as c:
            yield c


@pytest.fixture
def client(memory_backend):
    """Create test client over the real container with the in-memory store."""
    from app.main import app

    with TestClient(app) as c:
        yield c


class TestAPIErrorMapping:
    """Tests for status codes chosen per failure kind"""

    def test_create_returns_200(self, mocked_client, use_cases):
        use_cases[CreateDeviceUseCase].execute.return_value = OperationResult.success(
            DeviceResponse(
                id="1",
                name="iPhone 16",
                brand="Apple",
                state=DeviceState.AVAILABLE,
                creation_time=datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc),
            )
        )
        response = mocked_client.post(
            DEVICES, json={"name": "iPhone 16", "brand": "Apple", "state": "AVAILABLE"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "1"
        assert data["creationTime"].startswith("2025-01-15T12:00:00")
        assert "version" not in data

    def test_get_not_found_returns_404(self, mocked_client, use_cases):
        use_cases[GetDeviceUseCase].execute.return_value = OperationResult.fail(
            DeviceErrorKind.NOT_FOUND, "Device not found with id: 9"
        )
        response = mocked_client.get(f"{DEVICES}/9")
        assert response.status_code == 404
        body = response.json()
        assert body["message"] == "Device not found with id: 9"
        assert body["path"] == f"{DEVICES}/9"
        assert body["error"] == "Not Found"

    def test_in_use_conflict_returns_400(self, mocked_client, use_cases):
        use_cases[ReplaceDeviceUseCase].execute.return_value = OperationResult.fail(
            DeviceErrorKind.IN_USE_CONFLICT, "Cannot update name when device is in use"
        )
        response = mocked_client.put(
            f"{DEVICES}/1", json={"name": "A", "brand": "B", "state": "IN_USE"}
        )
        assert response.status_code == 400
        assert "in use" in response.json()["message"]

    def test_concurrent_modification_returns_409(self, mocked_client, use_cases):
        use_cases[PatchDeviceUseCase].execute.return_value = OperationResult.fail(
            DeviceErrorKind.CONCURRENT_MODIFICATION, "modified concurrently"
        )
        response = mocked_client.patch(f"{DEVICES}/1", json={"name": "A"})
        assert response.status_code == 409

    def test_store_failure_hides_details(self, mocked_client, use_cases, caplog):
        error = DeviceStoreError("Error deleting device: mongo-1:27017 refused")
        use_cases[DeleteDeviceUseCase].execute.return_value = OperationResult.fail(
            DeviceErrorKind.STORE_FAILURE, str(error), error=error
        )
        with caplog.at_level(logging.ERROR, logger="app.api.v1.device_controller"):
            response = mocked_client.delete(f"{DEVICES}/1")
        assert response.status_code == 500
        assert response.json()["message"] == "Internal server error"
        assert "mongo-1" not in response.text
        record = next(r for r in caplog.records if "Store failure during delete" in r.getMessage())
        assert record.exc_info[1] is error

    def test_patch_passes_presence_to_use_case(self, mocked_client, use_cases):
        use_cases[PatchDeviceUseCase].execute.return_value = OperationResult.fail(
            DeviceErrorKind.NOT_FOUND, "Device not found with id: 1"
        )
        mocked_client.patch(f"{DEVICES}/1", json={"state": "INACTIVE"})
        patch_arg = use_cases[PatchDeviceUseCase].execute.call_args.kwargs["patch"]
        assert patch_arg.state is DeviceState.INACTIVE
        assert patch_arg.frozen_fields_touched() == []

    def test_invalid_state_returns_400(self, mocked_client, use_cases):
        response = mocked_client.post(
            DEVICES, json={"name": "iPhone 16", "brand": "Apple", "state": "BROKEN"}
        )
        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed"
        assert body["field_errors"][0]["field"] == "state"
        use_cases[CreateDeviceUseCase].execute.assert_not_called()


class TestDeviceAPILifecycle:
    """Tests for /api/v1/devices over the in-memory store"""

    def test_lifecycle(self, client):
        created = client.post(
            DEVICES,
            json={
                "name": "iPhone 16",
                "brand": "Apple",
                "state": "AVAILABLE",
                "id": "999",
                "creationTime": "2000-01-01T00:00:00Z",
            },
        )
        assert created.status_code == 200
        device = created.json()
        device_id = device["id"]
        assert device_id != "999"
        assert not device["creationTime"].startswith("2000")

        replaced = client.put(
            f"{DEVICES}/{device_id}",
            json={"name": "iPhone 16 Pro", "brand": "Apple", "state": "IN_USE"},
        )
        assert replaced.status_code == 200
        assert replaced.json()["state"] == "IN_USE"
        assert replaced.json()["creationTime"] == device["creationTime"]

        rejected = client.patch(f"{DEVICES}/{device_id}", json={"name": "X"})
        assert rejected.status_code == 400
        assert client.get(f"{DEVICES}/{device_id}").json()["name"] == "iPhone 16 Pro"

        assert client.delete(f"{DEVICES}/{device_id}").status_code == 400

        released = client.patch(f"{DEVICES}/{device_id}", json={"state": "AVAILABLE"})
        assert released.status_code == 200

        assert client.delete(f"{DEVICES}/{device_id}").status_code == 204
        assert client.get(f"{DEVICES}/{device_id}").status_code == 404

    def test_patch_creation_time_returns_400(self, client):
        device_id = client.post(
            DEVICES, json={"name": "Pixel 9", "brand": "Google", "state": "AVAILABLE"}
        ).json()["id"]
        response = client.patch(f"{DEVICES}/{device_id}", json={"creationTime": None})
        assert response.status_code == 400
        assert response.json()["message"] == "creationTime cannot be updated"

    def test_patch_creation_time_on_missing_device_returns_404(self, client):
        response = client.patch(
            f"{DEVICES}/424242", json={"creationTime": "2020-01-01T00:00:00"}
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Device not found with id: 424242"

    def test_filters_and_paging(self, client):
        for name, brand, state in [
            ("iPhone 16", "Apple", "IN_USE"),
            ("Pixel 9", "Google", "AVAILABLE"),
            ("iPad Air", "Apple", "INACTIVE"),
        ]:
            client.post(DEVICES, json={"name": name, "brand": brand, "state": state})

        by_brand = client.get(f"{DEVICES}/brand/Apple").json()
        by_state = client.get(f"{DEVICES}/state/IN_USE").json()
        page = client.get(DEVICES, params={"size": 2, "sort": "name,asc"}).json()

        assert [device["name"] for device in by_brand] == ["iPhone 16", "iPad Air"]
        assert [device["name"] for device in by_state] == ["iPhone 16"]
        assert page["totalElements"] == 3
        assert page["totalPages"] == 2
        assert [device["name"] for device in page["content"]] == ["Pixel 9", "iPad Air"]

    def test_unknown_state_filter_returns_400(self, client):
        assert client.get(f"{DEVICES}/state/BROKEN").status_code == 400

    def test_bad_sort_returns_400(self, client):
        response = client.get(DEVICES, params={"sort": "colour,asc"})
        assert response.status_code == 400
        assert "colour" in response.json()["message"]

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}
