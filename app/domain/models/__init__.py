from .device import Device, DevicePatch, DeviceReplacement, DeviceState, UNSET

__all__ = ["Device", "DevicePatch", "DeviceReplacement", "DeviceState", "UNSET"]
