# Standard library imports
import logging

# Local application imports
from ....domain.repositories.device_repository import DeviceRepository
from ....domain.models.device import DeviceReplacement, DeviceState, has_text
from ....domain.errors import DeviceErrorKind, DeviceStoreError
from ...dto.device_dto import DeviceResponse
from ...result import OperationResult
from .versioned_write import write_with_version_check

logger = logging.getLogger(__name__)


class ReplaceDeviceUseCase:
    """Use case for a full update of a device"""
    
    def __init__(
        self,
        device_repository: DeviceRepository,
    ) -> None:
        self.device_repository = device_repository
    
    async def execute(
        self,
        device_id: str,
        replacement: DeviceReplacement,
    ) -> OperationResult[DeviceResponse]:
        """
        Replace name, brand and state of a device
        
        While the stored device is IN_USE, supplying a name or brand at all
        (even the current value) is refused and nothing is written. The stored
        ID and creation time are always kept.
        
        Args:
            device_id: ID of the device
            replacement: New field values
            
        Returns:
            Result holding the updated device, or NOT_FOUND / IN_USE_CONFLICT /
            INVALID_REQUEST / CONCURRENT_MODIFICATION / STORE_FAILURE
        """
        logger.info(f"Updating device with id: {device_id}")
        
        if replacement.state is None:
            return OperationResult.fail(DeviceErrorKind.INVALID_REQUEST, "Device state is required")
        state = DeviceState.parse(replacement.state)
        if state is None:
            return OperationResult.fail(
                DeviceErrorKind.INVALID_REQUEST, f"Unknown device state: {replacement.state}"
            )
        
        try:
            existing = await self.device_repository.find_by_id(device_id)
        except DeviceStoreError as e:
            return OperationResult.fail(DeviceErrorKind.STORE_FAILURE, str(e), error=e)
        
        if not existing:
            logger.warning(f"Device not found with id: {device_id} for update")
            return OperationResult.fail(DeviceErrorKind.NOT_FOUND, f"Device not found with id: {device_id}")
        
        if existing.in_use:
            touched = replacement.frozen_fields_touched()
            if touched:
                logger.warning(f"Attempted to update {touched[0]} of in-use device with id: {device_id}")
                return OperationResult.fail(
                    DeviceErrorKind.IN_USE_CONFLICT,
                    f"Cannot update {touched[0]} when device is in use",
                )
        else:
            if not has_text(replacement.name):
                return OperationResult.fail(DeviceErrorKind.INVALID_REQUEST, "Device name is required")
            if not has_text(replacement.brand):
                return OperationResult.fail(DeviceErrorKind.INVALID_REQUEST, "Device brand is required")
        
        updated = existing.with_changes(
            name=replacement.name,
            brand=replacement.brand,
            state=state,
        )
        
        result = await write_with_version_check(self.device_repository, updated)
        if result.ok:
            logger.info(f"Device updated successfully with id: {device_id}")
        return result
