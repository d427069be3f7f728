from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..models.device import Device, DeviceState


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


# (wire field name, direction), e.g. ("name", SortDirection.ASC)
SortOrder = Sequence[Tuple[str, SortDirection]]


class DeviceRepository(ABC):
    """Repository interface - defines contract for device data access"""

    @abstractmethod
    async def insert(self, device: Device) -> Device:
        """Persist a new device, assigning its ID and initial version"""
        pass

    @abstractmethod
    async def find_by_id(self, device_id: str) -> Optional[Device]:
        """Find device by ID"""
        pass

    @abstractmethod
    async def replace(self, device: Device) -> Optional[Device]:
        """
        Overwrite the stored device if its version still equals device.version.

        Returns the stored device with the bumped version, or None if the
        device no longer exists. Raises VersionConflictError if it exists
        with another version.
        """
        pass

    @abstractmethod
    async def delete_by_id(self, device_id: str) -> bool:
        """Delete device by ID, returning whether a device was removed"""
        pass

    @abstractmethod
    async def find_by_brand(self, brand: str) -> List[Device]:
        """Find all devices of a brand"""
        pass

    @abstractmethod
    async def find_by_state(self, state: DeviceState) -> List[Device]:
        """Find all devices in a state"""
        pass

    @abstractmethod
    async def find_page(self, offset: int, limit: int, sort: SortOrder) -> List[Device]:
        """Return at most `limit` devices after skipping `offset`, in `sort` order"""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Total number of stored devices"""
        pass
