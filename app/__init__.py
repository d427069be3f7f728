"""
Device Inventory Backend root package.

This package contains the FastAPI app entry point (main.py), the device API
routes, the device lifecycle use cases, the domain model and the record
stores (MongoDB and in-memory).
"""
