from typing import TYPE_CHECKING
from ...core.config import Settings
from ...domain.repositories.device_repository import DeviceRepository
from ...application.use_cases.device.create_device import CreateDeviceUseCase
from ...application.use_cases.device.get_device import GetDeviceUseCase
from ...application.use_cases.device.replace_device import ReplaceDeviceUseCase
from ...application.use_cases.device.patch_device import PatchDeviceUseCase
from ...application.use_cases.device.delete_device import DeleteDeviceUseCase
from ...application.use_cases.device.list_devices import (
    ListDevicesUseCase,
    ListDevicesByBrandUseCase,
    ListDevicesByStateUseCase,
)

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class DeviceProvider:
    """Device use case provider - registers all device-related use cases"""
    
    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all device use cases.
        Use cases are created on-demand via factories.
        """
        for use_case in (
            CreateDeviceUseCase,
            GetDeviceUseCase,
            ReplaceDeviceUseCase,
            PatchDeviceUseCase,
            DeleteDeviceUseCase,
            ListDevicesByBrandUseCase,
            ListDevicesByStateUseCase,
        ):
            container.register_factory(
                use_case,
                lambda use_case=use_case: use_case(device_repository=container.get(DeviceRepository)),
            )
        
        # Register ListDevicesUseCase
        container.register_factory(
            ListDevicesUseCase,
            lambda: ListDevicesUseCase(
                device_repository=container.get(DeviceRepository),
                max_page_size=container.get(Settings).max_page_size,
            )
        )
