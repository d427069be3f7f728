# Standard library imports
import logging

# Local application imports
from ....domain.repositories.device_repository import DeviceRepository
from ....domain.models.device import Device
from ....domain.errors import DeviceErrorKind, DeviceStoreError, VersionConflictError
from ...dto.device_dto import DeviceResponse, to_device_response
from ...result import OperationResult

logger = logging.getLogger(__name__)


async def write_with_version_check(
    device_repository: DeviceRepository,
    device: Device,
) -> OperationResult[DeviceResponse]:
    """
    Replace a device using the version captured when it was read.
    
    Shared by the full and partial update use cases. A lost race is reported
    as CONCURRENT_MODIFICATION and left to the caller to retry.
    """
    try:
        saved_device = await device_repository.replace(device)
    except VersionConflictError as e:
        logger.warning(f"Concurrent modification of device {device.id}: {e}")
        return OperationResult.fail(DeviceErrorKind.CONCURRENT_MODIFICATION, str(e))
    except DeviceStoreError as e:
        return OperationResult.fail(DeviceErrorKind.STORE_FAILURE, str(e), error=e)
    
    if saved_device is None:
        logger.warning(f"Device {device.id} disappeared before it could be updated")
        return OperationResult.fail(DeviceErrorKind.NOT_FOUND, f"Device not found with id: {device.id}")
    
    return OperationResult.success(to_device_response(saved_device))
