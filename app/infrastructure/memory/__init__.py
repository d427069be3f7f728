from .in_memory_device_repository import InMemoryDeviceRepository

__all__ = ["InMemoryDeviceRepository"]
