"""Utility modules for the device inventory backend."""
