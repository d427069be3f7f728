# Standard library imports
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional


class DeviceState(str, Enum):
    """Operational state of a device. Only IN_USE carries business rules."""
    AVAILABLE = "AVAILABLE"
    IN_USE = "IN_USE"
    INACTIVE = "INACTIVE"

    @classmethod
    def parse(cls, value: Any) -> Optional["DeviceState"]:
        """Return the matching state, or None when value is outside the closed set"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


# Fields frozen while a device is IN_USE
FROZEN_WHILE_IN_USE = ("name", "brand")


class _Unset:
    """Marker for a patch field the caller did not send"""
    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


def is_set(value: Any) -> bool:
    return value is not UNSET


def has_text(value: Optional[str]) -> bool:
    return value is not None and len(value.strip()) > 0


@dataclass
class Device:
    """
    Pure domain model for Device entity.

    A physical device tracked in the inventory. The store assigns `id` on
    insert and bumps `version` on every successful replace; `creation_time`
    is set once when the device is created.
    """
    id: Optional[str]
    name: str
    brand: str
    state: DeviceState
    creation_time: Optional[datetime] = None
    version: int = 0

    def __post_init__(self) -> None:
        """Business validations"""
        if not has_text(self.name):
            raise ValueError("Device name is required")
        if not has_text(self.brand):
            raise ValueError("Device brand is required")
        state = DeviceState.parse(self.state)
        if state is None:
            raise ValueError(f"Unknown device state: {self.state}")
        self.state = state

    @property
    def in_use(self) -> bool:
        return self.state == DeviceState.IN_USE

    def with_changes(
        self,
        name: Optional[str] = None,
        brand: Optional[str] = None,
        state: Optional[DeviceState] = None,
    ) -> "Device":
        """Copy of this device with the given mutable fields replaced; id, creation time and version are kept"""
        return replace(
            self,
            name=self.name if name is None else name,
            brand=self.brand if brand is None else brand,
            state=self.state if state is None else state,
        )


@dataclass(frozen=True)
class DeviceReplacement:
    """Candidate values for a full replace. Identity and creation time are not part of it."""
    name: Optional[str]
    brand: Optional[str]
    state: Optional[DeviceState]

    def frozen_fields_touched(self) -> List[str]:
        """A field counts as touched when it is supplied at all, even if equal to the current value"""
        return [field for field in FROZEN_WHILE_IN_USE if getattr(self, field) is not None]


@dataclass(frozen=True)
class DevicePatch:
    """
    Partial update of a device.

    Every field is presence-aware: UNSET means the caller omitted it, any other
    value (including None) means the caller sent it. A name or brand sent as
    None is treated like an omitted field. `creation_time` is only tracked so an
    explicit attempt to overwrite it can be refused.
    """
    name: Any = UNSET
    brand: Any = UNSET
    state: Any = UNSET
    creation_time: Any = UNSET

    def touches(self, field: str) -> bool:
        value = getattr(self, field)
        return is_set(value) and value is not None

    def frozen_fields_touched(self) -> List[str]:
        return [field for field in FROZEN_WHILE_IN_USE if self.touches(field)]

    @property
    def targets_creation_time(self) -> bool:
        return is_set(self.creation_time)
