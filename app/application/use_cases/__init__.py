from .device import (
    CreateDeviceUseCase,
    GetDeviceUseCase,
    ReplaceDeviceUseCase,
    PatchDeviceUseCase,
    DeleteDeviceUseCase,
    ListDevicesUseCase,
    ListDevicesByBrandUseCase,
    ListDevicesByStateUseCase,
)

__all__ = [
    "CreateDeviceUseCase",
    "GetDeviceUseCase",
    "ReplaceDeviceUseCase",
    "PatchDeviceUseCase",
    "DeleteDeviceUseCase",
    "ListDevicesUseCase",
    "ListDevicesByBrandUseCase",
    "ListDevicesByStateUseCase",
]
