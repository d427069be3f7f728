"""
Device error taxonomy.

Business rule violations travel as a DeviceErrorKind inside an
OperationResult so the transport can pick a status code per kind.
Store problems are raised by repositories and converted by the use cases.
"""
# Standard library imports
from enum import Enum


class DeviceErrorKind(str, Enum):
    """Failure kinds a device operation can report"""
    NOT_FOUND = "NOT_FOUND"
    IN_USE_CONFLICT = "IN_USE_CONFLICT"
    INVALID_REQUEST = "INVALID_REQUEST"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"
    STORE_FAILURE = "STORE_FAILURE"


class DeviceStoreError(RuntimeError):
    """Raised by a device repository when the backing store fails."""


class VersionConflictError(DeviceStoreError):
    """Raised by replace when the stored version no longer matches the one read."""

    def __init__(self, device_id: str, expected_version: int) -> None:
        super().__init__(
            f"Device {device_id} was modified concurrently (expected version {expected_version})"
        )
        self.device_id = device_id
        self.expected_version = expected_version
