from .create_device import CreateDeviceUseCase
from .get_device import GetDeviceUseCase
from .replace_device import ReplaceDeviceUseCase
from .patch_device import PatchDeviceUseCase
from .delete_device import DeleteDeviceUseCase
from .list_devices import ListDevicesUseCase, ListDevicesByBrandUseCase, ListDevicesByStateUseCase

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
