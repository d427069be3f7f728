from .device_repository import DeviceRepository, SortDirection, SortOrder

__all__ = ["DeviceRepository", "SortDirection", "SortOrder"]
