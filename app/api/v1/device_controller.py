# Standard library imports
import logging
from typing import Dict, List, NoReturn, Optional

# External package imports
from fastapi import APIRouter, HTTPException, Query, Response, status

# Local application imports
from ...application.dto.device_dto import (
    DeviceCreateRequest,
    DevicePageResponse,
    DevicePatchRequest,
    DeviceReplaceRequest,
    DeviceResponse,
)
from ...application.result import DeviceFailure
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
from ...core.config import get_settings
from ...di.container import get_container
from ...domain.errors import DeviceErrorKind
from ...domain.models.device import DeviceState

logger = logging.getLogger(__name__)

router = APIRouter(tags=["devices"])


STATUS_BY_ERROR_KIND: Dict[DeviceErrorKind, int] = {
    DeviceErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    DeviceErrorKind.IN_USE_CONFLICT: status.HTTP_400_BAD_REQUEST,
    DeviceErrorKind.INVALID_REQUEST: status.HTTP_400_BAD_REQUEST,
    DeviceErrorKind.CONCURRENT_MODIFICATION: status.HTTP_409_CONFLICT,
    DeviceErrorKind.STORE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _raise_for_failure(failure: DeviceFailure, operation: str) -> NoReturn:
    """Translate a use case failure into an HTTP error"""
    if failure.kind == DeviceErrorKind.STORE_FAILURE:
        # Full detail goes to the log only
        logger.error(f"Store failure during {operation}: {failure.message}", exc_info=failure.error)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
    raise HTTPException(
        status_code=STATUS_BY_ERROR_KIND[failure.kind],
        detail=failure.message,
    )


@router.post("", response_model=DeviceResponse, status_code=status.HTTP_200_OK)
async def create_device(request: DeviceCreateRequest) -> DeviceResponse:
    """
    Create a new device
    
    Args:
        request: Device creation request (name, brand, state)
        
    Returns:
        DeviceResponse with the stored device, including ID and creation time
    """
    container = get_container()
    create_device_use_case = container.get(CreateDeviceUseCase)
    
    result = await create_device_use_case.execute(request=request)
    if not result.ok:
        _raise_for_failure(result.failure, "create")
    return result.value


@router.get("", response_model=DevicePageResponse)
async def list_devices(
    page: int = Query(0, description="Page index (0..)"),
    size: Optional[int] = Query(None, description="Page size"),
    sort: Optional[List[str]] = Query(None, description="Sort, e.g. name,asc"),
) -> DevicePageResponse:
    """
    List devices one page at a time
    
    Args:
        page: Zero-based page index
        size: Page size (defaults to DEFAULT_PAGE_SIZE)
        sort: Repeatable sort expressions
        
    Returns:
        DevicePageResponse for the requested page
    """
    container = get_container()
    list_devices_use_case = container.get(ListDevicesUseCase)
    
    result = await list_devices_use_case.execute(
        page=page,
        size=size if size is not None else get_settings().default_page_size,
        sort=sort,
    )
    if not result.ok:
        _raise_for_failure(result.failure, "list")
    return result.value


@router.get("/brand/{brand}", response_model=List[DeviceResponse])
async def list_devices_by_brand(brand: str) -> List[DeviceResponse]:
    """List all devices of a brand"""
    container = get_container()
    list_by_brand_use_case = container.get(ListDevicesByBrandUseCase)
    
    result = await list_by_brand_use_case.execute(brand=brand)
    if not result.ok:
        _raise_for_failure(result.failure, "list by brand")
    return result.value


@router.get("/state/{state}", response_model=List[DeviceResponse])
async def list_devices_by_state(state: DeviceState) -> List[DeviceResponse]:
    """List all devices in a state"""
    container = get_container()
    list_by_state_use_case = container.get(ListDevicesByStateUseCase)
    
    result = await list_by_state_use_case.execute(state=state)
    if not result.ok:
        _raise_for_failure(result.failure, "list by state")
    return result.value


@router.get("/{device_id}", response_model=DeviceResponse)
async def get_device(device_id: str) -> DeviceResponse:
    """
    Get a device by ID
    
    Args:
        device_id: ID of the device
        
    Returns:
        DeviceResponse with device information
    """
    container = get_container()
    get_device_use_case = container.get(GetDeviceUseCase)
    
    result = await get_device_use_case.execute(device_id=device_id)
    if not result.ok:
        _raise_for_failure(result.failure, "get")
    return result.value


@router.put("/{device_id}", response_model=DeviceResponse)
async def replace_device(device_id: str, request: DeviceReplaceRequest) -> DeviceResponse:
    """
    Fully update a device
    
    Name and brand cannot be sent while the device is IN_USE. A creationTime
    in the body is ignored.
    
    Args:
        device_id: ID of the device
        request: New name, brand and state
        
    Returns:
        DeviceResponse with the updated device
    """
    container = get_container()
    replace_device_use_case = container.get(ReplaceDeviceUseCase)
    
    result = await replace_device_use_case.execute(
        device_id=device_id,
        replacement=request.to_domain(),
    )
    if not result.ok:
        _raise_for_failure(result.failure, "replace")
    return result.value


@router.patch("/{device_id}", response_model=DeviceResponse)
async def patch_device(device_id: str, request: DevicePatchRequest) -> DeviceResponse:
    """
    Partially update a device
    
    Only include fields to change, e.g. {"name": "New name"}. Sending
    creationTime is rejected.
    
    Args:
        device_id: ID of the device
        request: Partial device payload
        
    Returns:
        DeviceResponse with the merged device
    """
    container = get_container()
    patch_device_use_case = container.get(PatchDeviceUseCase)
    
    result = await patch_device_use_case.execute(
        device_id=device_id,
        patch=request.to_domain(),
    )
    if not result.ok:
        _raise_for_failure(result.failure, "partial update")
    return result.value


@router.delete("/{device_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_device(device_id: str) -> Response:
    """Delete a device if it is not in use"""
    container = get_container()
    delete_device_use_case = container.get(DeleteDeviceUseCase)
    
    result = await delete_device_use_case.execute(device_id=device_id)
    if not result.ok:
        _raise_for_failure(result.failure, "delete")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
