# Standard library imports
import logging

# Local application imports
from ....domain.repositories.device_repository import DeviceRepository
from ....domain.errors import DeviceErrorKind, DeviceStoreError
from ...result import OperationResult

logger = logging.getLogger(__name__)


class DeleteDeviceUseCase:
    """Use case for deleting a device that is not in use"""
    
    def __init__(
        self,
        device_repository: DeviceRepository,
    ) -> None:
        self.device_repository = device_repository
    
    async def execute(
        self,
        device_id: str,
    ) -> OperationResult[None]:
        """
        Delete a device
        
        Args:
            device_id: ID of the device
            
        Returns:
            Empty success, or NOT_FOUND / IN_USE_CONFLICT / STORE_FAILURE
        """
        logger.info(f"Deleting device with id: {device_id}")
        try:
            device = await self.device_repository.find_by_id(device_id)
            if not device:
                logger.warning(f"Device not found with id: {device_id} for deletion")
                return OperationResult.fail(DeviceErrorKind.NOT_FOUND, f"Device not found with id: {device_id}")
            
            if device.in_use:
                logger.warning(f"Attempted to delete in-use device with id: {device_id}")
                return OperationResult.fail(DeviceErrorKind.IN_USE_CONFLICT, "Cannot delete device in use")
            
            deleted = await self.device_repository.delete_by_id(device_id)
        except DeviceStoreError as e:
            return OperationResult.fail(DeviceErrorKind.STORE_FAILURE, str(e), error=e)
        
        if not deleted:
            logger.warning(f"Device {device_id} was already removed")
            return OperationResult.fail(DeviceErrorKind.NOT_FOUND, f"Device not found with id: {device_id}")
        
        logger.info(f"Device deleted successfully with id: {device_id}")
        return OperationResult.success()
