# Standard library imports
import logging

# Local application imports
from ....domain.repositories.device_repository import DeviceRepository
from ....domain.models.device import DevicePatch, DeviceState, has_text
from ....domain.errors import DeviceErrorKind, DeviceStoreError
from ...dto.device_dto import DeviceResponse
from ...result import OperationResult
from .versioned_write import write_with_version_check

logger = logging.getLogger(__name__)


class PatchDeviceUseCase:
    """Use case for merging a partial update into a device"""
    
    def __init__(
        self,
        device_repository: DeviceRepository,
    ) -> None:
        self.device_repository = device_repository
    
    async def execute(
        self,
        device_id: str,
        patch: DevicePatch,
    ) -> OperationResult[DeviceResponse]:
        """
        Apply the fields present in a patch
        
        Name and brand are frozen while the *current* state is IN_USE; a state
        change is always applied, so a device can be released and edited in
        two separate calls. Fields absent from the patch are left untouched.
        
        Args:
            device_id: ID of the device
            patch: Presence-aware partial update
            
        Returns:
            Result holding the merged device, or NOT_FOUND / IN_USE_CONFLICT /
            INVALID_REQUEST / CONCURRENT_MODIFICATION / STORE_FAILURE
        """
        logger.info(f"Partially updating device with id: {device_id}")
        
        state = None
        if patch.touches("state"):
            state = DeviceState.parse(patch.state)
            if state is None:
                return OperationResult.fail(
                    DeviceErrorKind.INVALID_REQUEST, f"Unknown device state: {patch.state}"
                )
        
        try:
            existing = await self.device_repository.find_by_id(device_id)
        except DeviceStoreError as e:
            return OperationResult.fail(DeviceErrorKind.STORE_FAILURE, str(e), error=e)
        
        if not existing:
            logger.warning(f"Device not found with id: {device_id} for partial update")
            return OperationResult.fail(DeviceErrorKind.NOT_FOUND, f"Device not found with id: {device_id}")
        
        if patch.targets_creation_time:
            logger.warning(f"Attempted to update creationTime of device with id: {device_id}")
            return OperationResult.fail(DeviceErrorKind.INVALID_REQUEST, "creationTime cannot be updated")
        
        touched = patch.frozen_fields_touched()
        if existing.in_use and touched:
            logger.warning(f"Attempted to update {touched[0]} of in-use device with id: {device_id}")
            return OperationResult.fail(
                DeviceErrorKind.IN_USE_CONFLICT,
                f"Cannot update {touched[0]} when device is in use",
            )
        for field in touched:
            if not has_text(getattr(patch, field)):
                return OperationResult.fail(DeviceErrorKind.INVALID_REQUEST, f"Device {field} must not be blank")
        
        merged = existing.with_changes(
            name=patch.name if patch.touches("name") else None,
            brand=patch.brand if patch.touches("brand") else None,
            state=state,
        )
        
        result = await write_with_version_check(self.device_repository, merged)
        if result.ok:
            logger.info(f"Device partially updated successfully with id: {device_id}")
        return result
