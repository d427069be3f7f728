from typing import TYPE_CHECKING
from ...core.config import Settings
from ...domain.repositories.device_repository import DeviceRepository
from ...infrastructure.db.mongo_device_repository import MongoDeviceRepository
from ...infrastructure.memory.in_memory_device_repository import InMemoryDeviceRepository

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class RepositoryProvider:
    """Repository registration provider - wires domain interfaces to infrastructure implementations"""
    
    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the device repository for the configured store backend.
        
        Raises:
            ValueError: If DEVICE_STORE_BACKEND names an unknown backend
        """
        backend = container.get(Settings).device_store_backend
        
        if backend == "mongo":
            repository = MongoDeviceRepository(device_collection=container.get("device_collection"))
        elif backend == "memory":
            repository = InMemoryDeviceRepository()
        else:
            raise ValueError(f"Unknown device store backend: {backend}")
        
        # Domain interface -> Infrastructure implementation
        container.register_singleton(DeviceRepository, repository)
