"""
Shared pytest fixtures for device inventory tests.
"""
import os
from unittest.mock import MagicMock, patch

import pytest

from app.infrastructure.memory import InMemoryDeviceRepository


@pytest.fixture
def mock_env():
    """Fixture to set common test environment variables."""
    env_vars = {
        "MONGO_URI": "mongodb://localhost:27017",
        "MONGO_DB_NAME": "test_device_inventory",
        "DEVICE_STORE_BACKEND": "memory",
        "LOCAL_TIMEZONE": "UTC",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def mock_settings():
    """Fixture to mock get_settings for tests. Patches all modules that use it."""
    mock = MagicMock()
    mock.mongo_uri = "mongodb://localhost:27017"
    mock.mongo_database_name = "test_db"
    mock.mongo_device_collection = "devices"
    mock.device_store_backend = "memory"
    mock.default_page_size = 20
    mock.max_page_size = 100
    mock.local_timezone = "UTC"
    mock.log_level = "INFO"

    # Patch at source and at use sites (modules import get_settings at load time)
    with patch("app.core.config.get_settings", return_value=mock), patch(
        "app.utils.datetime_utils.get_settings", return_value=mock
    ), patch("app.api.v1.device_controller.get_settings", return_value=mock):
        yield mock


@pytest.fixture
def memory_repo():
    """Fresh in-memory device store."""
    return InMemoryDeviceRepository()
