# Standard library imports
import logging
from typing import Optional, List, Dict, Any

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

# Local application imports
from ...domain.repositories.device_repository import DeviceRepository, SortDirection, SortOrder
from ...domain.models.device import Device, DeviceState
from ...domain.constants import DeviceFields
from ...domain.errors import DeviceStoreError, VersionConflictError
from ...utils.datetime_utils import ensure_utc
from .mongo_connection import get_device_collection

logger = logging.getLogger(__name__)


def _to_object_id(device_id: Optional[str]) -> Optional[ObjectId]:
    if not device_id:
        return None
    try:
        return ObjectId(device_id)
    except (InvalidId, TypeError):
        return None


class MongoDeviceRepository(DeviceRepository):
    """MongoDB implementation of DeviceRepository"""
    
    def __init__(self, device_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.device_collection = device_collection if device_collection is not None else get_device_collection()
    
    async def ensure_indexes(self) -> None:
        """Create the secondary indexes used by the brand and state filters"""
        try:
            await self.device_collection.create_index([(DeviceFields.BRAND, ASCENDING)])
            await self.device_collection.create_index([(DeviceFields.STATE, ASCENDING)])
        except PyMongoError as e:
            raise DeviceStoreError(f"Error creating device indexes: {str(e)}") from e
    
    async def insert(self, device: Device) -> Device:
        """Insert a new device; the ObjectId becomes its ID"""
        if not device:
            raise ValueError("Device cannot be None")
        
        try:
            device_dict = self._device_to_dict(device)
            device_dict[DeviceFields.VERSION] = 0
            
            result = await self.device_collection.insert_one(device_dict)
            new_document = await self.device_collection.find_one({DeviceFields.MONGO_ID: result.inserted_id})
            if new_document is None:
                raise DeviceStoreError("Device was created but could not be retrieved")
            
            return self._document_to_device(new_document)
        except PyMongoError as e:
            raise DeviceStoreError(f"Error inserting device: {str(e)}") from e
    
    async def find_by_id(self, device_id: str) -> Optional[Device]:
        """Find device by ID"""
        object_id = _to_object_id(device_id)
        if object_id is None:
            return None
        
        try:
            document = await self.device_collection.find_one({DeviceFields.MONGO_ID: object_id})
        except PyMongoError as e:
            raise DeviceStoreError(f"Error finding device by ID: {str(e)}") from e
        
        if document is None:
            return None
        return self._document_to_device(document)
    
    async def replace(self, device: Device) -> Optional[Device]:
        """Overwrite name, brand and state if the stored version still matches"""
        object_id = _to_object_id(device.id)
        if object_id is None:
            return None
        
        try:
            updated_document = await self.device_collection.find_one_and_update(
                {DeviceFields.MONGO_ID: object_id, DeviceFields.VERSION: device.version},
                {
                    "$set": {
                        DeviceFields.NAME: device.name,
                        DeviceFields.BRAND: device.brand,
                        DeviceFields.STATE: device.state.value,
                    },
                    "$inc": {DeviceFields.VERSION: 1},
                },
                return_document=ReturnDocument.AFTER,
            )
            if updated_document is not None:
                return self._document_to_device(updated_document)
            
            # No match: either the device is gone or someone else wrote first
            current = await self.device_collection.find_one(
                {DeviceFields.MONGO_ID: object_id},
                {DeviceFields.VERSION: 1},
            )
        except PyMongoError as e:
            raise DeviceStoreError(f"Error replacing device: {str(e)}") from e
        
        if current is None:
            return None
        logger.debug(
            f"Version mismatch for device {device.id}: expected {device.version}, "
            f"stored {current.get(DeviceFields.VERSION)}"
        )
        raise VersionConflictError(device.id, device.version)
    
    async def delete_by_id(self, device_id: str) -> bool:
        """Delete device by ID"""
        object_id = _to_object_id(device_id)
        if object_id is None:
            return False
        
        try:
            result = await self.device_collection.delete_one({DeviceFields.MONGO_ID: object_id})
        except PyMongoError as e:
            raise DeviceStoreError(f"Error deleting device: {str(e)}") from e
        return result.deleted_count > 0
    
    async def find_by_brand(self, brand: str) -> List[Device]:
        """Find all devices of a brand"""
        return await self._find_all({DeviceFields.BRAND: brand}, "brand")
    
    async def find_by_state(self, state: DeviceState) -> List[Device]:
        """Find all devices in a state"""
        return await self._find_all({DeviceFields.STATE: DeviceState(state).value}, "state")
    
    async def find_page(self, offset: int, limit: int, sort: SortOrder) -> List[Device]:
        """Return one page of devices"""
        mongo_sort = [
            (
                DeviceFields.SORTABLE[field],
                DESCENDING if direction == SortDirection.DESC else ASCENDING,
            )
            for field, direction in sort
        ]
        if not any(key == DeviceFields.MONGO_ID for key, _ in mongo_sort):
            mongo_sort.append((DeviceFields.MONGO_ID, ASCENDING))
        
        try:
            cursor = (
                self.device_collection.find({})
                .sort(mongo_sort)
                .skip(max(0, int(offset)))
                .limit(max(1, int(limit)))
            )
            devices = []
            async for document in cursor:
                devices.append(self._document_to_device(document))
            return devices
        except PyMongoError as e:
            raise DeviceStoreError(f"Error listing device page: {str(e)}") from e
    
    async def count(self) -> int:
        """Total number of stored devices"""
        try:
            return await self.device_collection.count_documents({})
        except PyMongoError as e:
            raise DeviceStoreError(f"Error counting devices: {str(e)}") from e
    
    async def _find_all(self, query: Dict[str, Any], label: str) -> List[Device]:
        try:
            cursor = self.device_collection.find(query).sort(
                [(DeviceFields.CREATION_TIME, ASCENDING), (DeviceFields.MONGO_ID, ASCENDING)]
            )
            devices = []
            async for document in cursor:
                devices.append(self._document_to_device(document))
            return devices
        except PyMongoError as e:
            raise DeviceStoreError(f"Error listing devices by {label}: {str(e)}") from e
    
    def _document_to_device(self, document: Dict[str, Any]) -> Device:
        """Convert MongoDB document to Device domain model"""
        if not document:
            raise ValueError("Invalid document: document is None or empty")
        
        return Device(
            id=str(document[DeviceFields.MONGO_ID]),
            name=document.get(DeviceFields.NAME, ""),
            brand=document.get(DeviceFields.BRAND, ""),
            state=DeviceState(document.get(DeviceFields.STATE)),
            creation_time=ensure_utc(document.get(DeviceFields.CREATION_TIME)),
            version=int(document.get(DeviceFields.VERSION, 0)),
        )
    
    def _device_to_dict(self, device: Device) -> Dict[str, Any]:
        """Convert Device domain model to MongoDB document (without _id)"""
        if not device:
            raise ValueError("Device cannot be None")
        
        return {
            DeviceFields.NAME: device.name,
            DeviceFields.BRAND: device.brand,
            DeviceFields.STATE: device.state.value,
            DeviceFields.CREATION_TIME: device.creation_time,
        }
