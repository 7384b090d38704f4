"""
Failure Detection Module - Pump and pump-controller consistency checks

Components:
- model.py: FailureDetector (pure finders and reporting checks)
"""

from steam_boiler.modules.failure_detection.model import FailureDetector

__all__ = [
    "FailureDetector",
]
