"""
Unit tests for MongoDeviceRepository against a mocked Motor collection.
"""
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import ServerSelectionTimeoutError

from app.domain.errors import DeviceStoreError, VersionConflictError
from app.domain.models.device import Device, DeviceState
from app.domain.repositories.device_repository import SortDirection
from app.infrastructure.db.mongo_device_repository import MongoDeviceRepository

OID = ObjectId("65a5171f2f8fb814b56fa181")
CREATED_AT = datetime(2025, 1, 15, 12, 0, 0)


class _FakeCursor:
    """Chainable async cursor standing in for AsyncIOMotorCursor"""

    def __init__(self, documents):
        self.documents = list(documents)
        self.sort_spec = None
        self.skipped = None
        self.limited = None

    def sort(self, spec):
        self.sort_spec = spec
        return self

    def skip(self, count):
        self.skipped = count
        return self

    def limit(self, count):
        self.limited = count
        return self

    def __aiter__(self):
        self._iterator = iter(self.documents)
        return self

    async def __anext__(self):
        try:
            return next(self._iterator)
        except StopIteration:
            raise StopAsyncIteration


def _document(name="iPhone 16", state="AVAILABLE", version=0):
    return {
        "_id": OID,
        "name": name,
        "brand": "Apple",
        "state": state,
        "creation_time": CREATED_AT,
        "version": version,
    }


@pytest.fixture
def collection():
    mock = MagicMock()
    mock.find_one = AsyncMock()
    mock.insert_one = AsyncMock()
    mock.find_one_and_update = AsyncMock()
    mock.delete_one = AsyncMock()
    mock.count_documents = AsyncMock()
    mock.create_index = AsyncMock()
    return mock


@pytest.fixture
def repository(collection):
    return MongoDeviceRepository(device_collection=collection)


class TestMongoDeviceRepository:
    """Tests for MongoDeviceRepository"""

    @pytest.mark.asyncio
    async def test_insert_sets_initial_version(self, repository, collection):
        collection.insert_one.return_value = MagicMock(inserted_id=OID)
        collection.find_one.return_value = _document()
        device = Device(
            id=None,
            name="iPhone 16",
            brand="Apple",
            state=DeviceState.AVAILABLE,
            creation_time=CREATED_AT.replace(tzinfo=timezone.utc),
        )

        stored = await repository.insert(device)

        inserted = collection.insert_one.call_args.args[0]
        assert inserted["version"] == 0
        assert inserted["state"] == "AVAILABLE"
        assert "_id" not in inserted
        assert stored.id == str(OID)
        assert stored.creation_time.tzinfo == timezone.utc

    @pytest.mark.asyncio
    async def test_find_by_invalid_id_returns_none(self, repository, collection):
        assert await repository.find_by_id("not-an-object-id") is None
        collection.find_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_find_by_id(self, repository, collection):
        collection.find_one.return_value = _document(state="IN_USE", version=3)
        device = await repository.find_by_id(str(OID))
        assert device.state is DeviceState.IN_USE
        assert device.version == 3
        collection.find_one.assert_called_once_with({"_id": OID})

    @pytest.mark.asyncio
    async def test_replace_is_conditional_on_version(self, repository, collection):
        collection.find_one_and_update.return_value = _document(name="iPhone 16 Pro", version=3)
        device = Device(id=str(OID), name="iPhone 16 Pro", brand="Apple", state=DeviceState.AVAILABLE, version=2)

        updated = await repository.replace(device)

        query, update = collection.find_one_and_update.call_args.args
        assert query == {"_id": OID, "version": 2}
        assert update["$inc"] == {"version": 1}
        assert "creation_time" not in update["$set"]
        assert updated.version == 3

    @pytest.mark.asyncio
    async def test_replace_conflict(self, repository, collection):
        collection.find_one_and_update.return_value = None
        collection.find_one.return_value = {"_id": OID, "version": 5}
        device = Device(id=str(OID), name="A", brand="B", state=DeviceState.AVAILABLE, version=2)
        with pytest.raises(VersionConflictError):
            await repository.replace(device)

    @pytest.mark.asyncio
    async def test_replace_missing_returns_none(self, repository, collection):
        collection.find_one_and_update.return_value = None
        collection.find_one.return_value = None
        device = Device(id=str(OID), name="A", brand="B", state=DeviceState.AVAILABLE)
        assert await repository.replace(device) is None

    @pytest.mark.asyncio
    async def test_delete(self, repository, collection):
        collection.delete_one.return_value = MagicMock(deleted_count=1)
        assert await repository.delete_by_id(str(OID)) is True
        collection.delete_one.return_value = MagicMock(deleted_count=0)
        assert await repository.delete_by_id(str(OID)) is False

    @pytest.mark.asyncio
    async def test_find_by_state_queries_enum_value(self, repository, collection):
        collection.find.return_value = _FakeCursor([_document(state="INACTIVE")])
        devices = await repository.find_by_state(DeviceState.INACTIVE)
        assert len(devices) == 1
        collection.find.assert_called_once_with({"state": "INACTIVE"})

    @pytest.mark.asyncio
    async def test_find_page_translates_sort(self, repository, collection):
        cursor = _FakeCursor([_document()])
        collection.find.return_value = cursor

        devices = await repository.find_page(40, 20, [("creationTime", SortDirection.DESC)])

        assert len(devices) == 1
        assert cursor.sort_spec == [("creation_time", DESCENDING), ("_id", ASCENDING)]
        assert cursor.skipped == 40
        assert cursor.limited == 20

    @pytest.mark.asyncio
    async def test_driver_errors_become_store_errors(self, repository, collection):
        collection.count_documents.side_effect = ServerSelectionTimeoutError("no servers")
        with pytest.raises(DeviceStoreError, match="counting"):
            await repository.count()

    @pytest.mark.asyncio
    async def test_ensure_indexes(self, repository, collection):
        await repository.ensure_indexes()
        assert collection.create_index.await_count == 2
