# Standard library imports
import logging

# Local application imports
from ....domain.repositories.device_repository import DeviceRepository
from ....domain.errors import DeviceErrorKind, DeviceStoreError
from ...dto.device_dto import DeviceResponse, to_device_response
from ...result import OperationResult

logger = logging.getLogger(__name__)


class GetDeviceUseCase:
    """Use case for getting a device by ID"""
    
    def __init__(
        self,
        device_repository: DeviceRepository,
    ) -> None:
        self.device_repository = device_repository
    
    async def execute(
        self,
        device_id: str,
    ) -> OperationResult[DeviceResponse]:
        """
        Get a device by ID
        
        Args:
            device_id: ID of the device
            
        Returns:
            Result holding the device, or NOT_FOUND
        """
        logger.debug(f"Fetching device with id: {device_id}")
        try:
            device = await self.device_repository.find_by_id(device_id)
        except DeviceStoreError as e:
            return OperationResult.fail(DeviceErrorKind.STORE_FAILURE, str(e), error=e)
        
        if not device:
            logger.warning(f"Device not found with id: {device_id}")
            return OperationResult.fail(DeviceErrorKind.NOT_FOUND, f"Device not found with id: {device_id}")
        
        return OperationResult.success(to_device_response(device))
