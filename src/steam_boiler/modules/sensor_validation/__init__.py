"""
Sensor Validation Module - Transmission and range checks on inbound readings

Components:
- model.py: SensorValidator predicates bound to a boiler configuration
"""

from steam_boiler.modules.sensor_validation.model import SensorValidator

__all__ = [
    "SensorValidator",
]
