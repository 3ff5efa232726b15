# src/ngo_registry/models/ngo/__init__.py
from .ngo_info import NgoInfo
from .zone_info import InterventionZone

__all__ = ["NgoInfo", "InterventionZone"]
