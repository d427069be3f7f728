# Standard library imports
import logging

# Local application imports
from ....domain.repositories.device_repository import DeviceRepository
from ....domain.models.device import Device, DeviceState, has_text
from ....domain.errors import DeviceErrorKind, DeviceStoreError
from ....utils.datetime_utils import utc_now
from ...dto.device_dto import DeviceCreateRequest, DeviceResponse, to_device_response
from ...result import OperationResult

logger = logging.getLogger(__name__)


class CreateDeviceUseCase:
    """Use case for creating a new device"""
    
    def __init__(
        self,
        device_repository: DeviceRepository,
    ) -> None:
        self.device_repository = device_repository
    
    async def execute(
        self,
        request: DeviceCreateRequest,
    ) -> OperationResult[DeviceResponse]:
        """
        Create a new device
        
        The creation time is always stamped here; any identifier or timestamp
        the caller may have sent is never read.
        
        Args:
            request: Device creation request
            
        Returns:
            Result holding the stored device, or INVALID_REQUEST / STORE_FAILURE
        """
        # Request DTOs are validated by the API layer, but the use case does not rely on it
        if not has_text(request.name):
            return OperationResult.fail(DeviceErrorKind.INVALID_REQUEST, "Device name is required")
        if not has_text(request.brand):
            return OperationResult.fail(DeviceErrorKind.INVALID_REQUEST, "Device brand is required")
        state = DeviceState.parse(request.state)
        if state is None:
            return OperationResult.fail(
                DeviceErrorKind.INVALID_REQUEST, f"Unknown device state: {request.state}"
            )
        
        logger.info(f"Creating device with name: {request.name}")
        new_device = Device(
            id=None,
            name=request.name,
            brand=request.brand,
            state=state,
            creation_time=utc_now(),
        )
        
        try:
            saved_device = await self.device_repository.insert(new_device)
        except DeviceStoreError as e:
            return OperationResult.fail(DeviceErrorKind.STORE_FAILURE, str(e), error=e)
        
        logger.info(f"Device created successfully with id: {saved_device.id}")
        return OperationResult.success(to_device_response(saved_device))
