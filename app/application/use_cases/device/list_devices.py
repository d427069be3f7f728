# Standard library imports
import logging
import math
from typing import List, Optional, Tuple

# Local application imports
from ....domain.repositories.device_repository import DeviceRepository, SortDirection
from ....domain.models.device import DeviceState
from ....domain.constants import DeviceFields
from ....domain.errors import DeviceErrorKind, DeviceStoreError
from ...dto.device_dto import DevicePageResponse, DeviceResponse, to_device_response
from ...result import OperationResult

logger = logging.getLogger(__name__)


def parse_sort(sort: Optional[List[str]]) -> List[Tuple[str, SortDirection]]:
    """
    Parse sort expressions such as ["name,asc", "creationTime,desc"].
    
    Raises:
        ValueError: If a field is not sortable or a direction is unknown
    """
    order: List[Tuple[str, SortDirection]] = []
    for expression in sort or []:
        field, _, direction = expression.partition(",")
        field = field.strip()
        if field not in DeviceFields.SORTABLE:
            raise ValueError(f"Cannot sort by '{field}'")
        try:
            order.append((field, SortDirection((direction.strip() or "asc").lower())))
        except ValueError:
            raise ValueError(f"Unknown sort direction '{direction.strip()}'") from None
    return order


class ListDevicesUseCase:
    """Use case for listing devices one page at a time"""
    
    def __init__(
        self,
        device_repository: DeviceRepository,
        max_page_size: int = 100,
    ) -> None:
        self.device_repository = device_repository
        self.max_page_size = max_page_size
    
    async def execute(
        self,
        page: int,
        size: int,
        sort: Optional[List[str]] = None,
    ) -> OperationResult[DevicePageResponse]:
        """
        List a page of devices
        
        Args:
            page: Zero-based page index
            size: Page size, between 1 and max_page_size
            sort: Sort expressions, "field" or "field,asc|desc"
            
        Returns:
            Result holding the page, or INVALID_REQUEST / STORE_FAILURE
        """
        if page < 0:
            return OperationResult.fail(DeviceErrorKind.INVALID_REQUEST, "Page index must not be negative")
        if size < 1 or size > self.max_page_size:
            return OperationResult.fail(
                DeviceErrorKind.INVALID_REQUEST, f"Page size must be between 1 and {self.max_page_size}"
            )
        try:
            order = parse_sort(sort)
        except ValueError as exception:
            return OperationResult.fail(DeviceErrorKind.INVALID_REQUEST, str(exception))
        
        logger.debug(f"Fetching paged devices: page={page} size={size} sort={order}")
        try:
            total = await self.device_repository.count()
            devices = await self.device_repository.find_page(page * size, size, order)
        except DeviceStoreError as e:
            return OperationResult.fail(DeviceErrorKind.STORE_FAILURE, str(e), error=e)
        
        return OperationResult.success(
            DevicePageResponse(
                content=[to_device_response(device) for device in devices],
                page=page,
                size=size,
                total_elements=total,
                total_pages=math.ceil(total / size),
            )
        )


class ListDevicesByBrandUseCase:
    """Use case for listing all devices of a brand"""
    
    def __init__(
        self,
        device_repository: DeviceRepository,
    ) -> None:
        self.device_repository = device_repository
    
    async def execute(
        self,
        brand: str,
    ) -> OperationResult[List[DeviceResponse]]:
        logger.debug(f"Fetching devices by brand: {brand}")
        try:
            devices = await self.device_repository.find_by_brand(brand)
        except DeviceStoreError as e:
            return OperationResult.fail(DeviceErrorKind.STORE_FAILURE, str(e), error=e)
        return OperationResult.success([to_device_response(device) for device in devices])


class ListDevicesByStateUseCase:
    """Use case for listing all devices in a state"""
    
    def __init__(
        self,
        device_repository: DeviceRepository,
    ) -> None:
        self.device_repository = device_repository
    
    async def execute(
        self,
        state: DeviceState,
    ) -> OperationResult[List[DeviceResponse]]:
        parsed = DeviceState.parse(state)
        if parsed is None:
            return OperationResult.fail(DeviceErrorKind.INVALID_REQUEST, f"Unknown device state: {state}")
        
        logger.debug(f"Fetching devices by state: {parsed.value}")
        try:
            devices = await self.device_repository.find_by_state(parsed)
        except DeviceStoreError as e:
            return OperationResult.fail(DeviceErrorKind.STORE_FAILURE, str(e), error=e)
        return OperationResult.success([to_device_response(device) for device in devices])
