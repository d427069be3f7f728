"""
API layer for the Device Inventory Backend.

Exposes the device HTTP endpoints under /api/v1/devices.
"""
