"""
In-memory device store.

A dict keyed by device ID, guarded by a lock so replace keeps its
compare-version-then-write step atomic across worker threads. Used for
local runs (DEVICE_STORE_BACKEND=memory) and tests.
"""
# Standard library imports
import itertools
import threading
import dataclasses
from typing import Callable, Dict, List, Optional

# Local application imports
from ...domain.repositories.device_repository import DeviceRepository, SortDirection, SortOrder
from ...domain.models.device import Device, DeviceState
from ...domain.errors import VersionConflictError


def _sort_key(field: str) -> Callable[[Device], object]:
    if field == "id":
        return lambda device: int(device.id)
    if field == "creationTime":
        return lambda device: device.creation_time
    if field == "state":
        return lambda device: device.state.value
    return lambda device: getattr(device, field)


class InMemoryDeviceRepository(DeviceRepository):
    """Process-local implementation of DeviceRepository"""

    def __init__(self) -> None:
        self._devices: Dict[str, Device] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    async def insert(self, device: Device) -> Device:
        with self._lock:
            stored = dataclasses.replace(device, id=str(next(self._ids)), version=0)
            self._devices[stored.id] = stored
            return dataclasses.replace(stored)

    async def find_by_id(self, device_id: str) -> Optional[Device]:
        with self._lock:
            device = self._devices.get(device_id)
            return dataclasses.replace(device) if device else None

    async def replace(self, device: Device) -> Optional[Device]:
        with self._lock:
            current = self._devices.get(device.id)
            if current is None:
                return None
            if current.version != device.version:
                raise VersionConflictError(device.id, device.version)
            stored = dataclasses.replace(
                current,
                name=device.name,
                brand=device.brand,
                state=device.state,
                version=current.version + 1,
            )
            self._devices[stored.id] = stored
            return dataclasses.replace(stored)

    async def delete_by_id(self, device_id: str) -> bool:
        with self._lock:
            return self._devices.pop(device_id, None) is not None

    async def find_by_brand(self, brand: str) -> List[Device]:
        return self._select(lambda device: device.brand == brand)

    async def find_by_state(self, state: DeviceState) -> List[Device]:
        return self._select(lambda device: device.state == state)

    async def find_page(self, offset: int, limit: int, sort: SortOrder) -> List[Device]:
        devices = self._select(lambda device: True)
        # Stable sorts applied from the least significant key
        for field, direction in reversed(list(sort)):
            devices.sort(key=_sort_key(field), reverse=direction == SortDirection.DESC)
        start = max(0, offset)
        return devices[start:start + max(1, limit)]

    async def count(self) -> int:
        with self._lock:
            return len(self._devices)

    def _select(self, predicate: Callable[[Device], bool]) -> List[Device]:
        with self._lock:
            matches = [dataclasses.replace(device) for device in self._devices.values() if predicate(device)]
        matches.sort(key=lambda device: int(device.id))
        return matches
