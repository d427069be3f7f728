from .device_dto import (
    DeviceCreateRequest,
    DeviceReplaceRequest,
    DevicePatchRequest,
    DeviceResponse,
    DevicePageResponse,
    ErrorResponse,
    FieldErrorItem,
    to_device_response,
)

__all__ = [
    "DeviceCreateRequest",
    "DeviceReplaceRequest",
    "DevicePatchRequest",
    "DeviceResponse",
    "DevicePageResponse",
    "ErrorResponse",
    "FieldErrorItem",
    "to_device_response",
]
