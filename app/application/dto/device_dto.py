from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ...domain.models.device import Device, DevicePatch, DeviceReplacement, DeviceState, UNSET


class DeviceCreateRequest(BaseModel):
    """DTO for device creation request. Client-sent id/creationTime are dropped."""
    name: str = Field(min_length=1, max_length=200, pattern=r"\S")
    brand: str = Field(min_length=1, max_length=200, pattern=r"\S")
    state: DeviceState


class DeviceReplaceRequest(BaseModel):
    """DTO for full device update. Client-sent id/creationTime are dropped."""
    name: str = Field(min_length=1, max_length=200, pattern=r"\S")
    brand: str = Field(min_length=1, max_length=200, pattern=r"\S")
    state: DeviceState

    def to_domain(self) -> DeviceReplacement:
        return DeviceReplacement(name=self.name, brand=self.brand, state=self.state)


class DevicePatchRequest(BaseModel):
    """
    DTO for partial device update.

    Only fields present in the JSON body are applied; pydantic's
    model_fields_set tells an omitted field from one sent as null.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, max_length=200)
    brand: Optional[str] = Field(default=None, max_length=200)
    state: Optional[DeviceState] = None
    creation_time: Optional[Any] = Field(default=None, alias="creationTime")

    def to_domain(self) -> DevicePatch:
        sent = self.model_fields_set
        return DevicePatch(
            name=self.name if "name" in sent else UNSET,
            brand=self.brand if "brand" in sent else UNSET,
            state=self.state if "state" in sent else UNSET,
            creation_time=self.creation_time if "creation_time" in sent else UNSET,
        )


class DeviceResponse(BaseModel):
    """DTO for device response"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    brand: str
    state: DeviceState
    creation_time: Optional[datetime] = Field(default=None, alias="creationTime")


class DevicePageResponse(BaseModel):
    """One page of devices"""
    model_config = ConfigDict(populate_by_name=True)

    content: List[DeviceResponse] = Field(default_factory=list)
    page: int
    size: int
    total_elements: int = Field(alias="totalElements")
    total_pages: int = Field(alias="totalPages")


class FieldErrorItem(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Error body returned for every failed request"""
    timestamp: str
    status: int
    error: str
    message: str
    path: str
    field_errors: Optional[List[FieldErrorItem]] = None


def to_device_response(device: Device) -> DeviceResponse:
    """Map a stored device to its API shape; version stays internal"""
    return DeviceResponse(
        id=device.id or "",
        name=device.name,
        brand=device.brand,
        state=device.state,
        creation_time=device.creation_time,
    )
