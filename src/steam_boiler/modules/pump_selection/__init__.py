"""
Pump Selection Module - Predictive choice of the number of running pumps

Components:
- model.py: LevelPredictor (one-cycle level band)
- controller.py: PumpSelector (best-centred pump count)
"""

from steam_boiler.modules.pump_selection.model import CYCLE_DURATION, LevelBand, LevelPredictor
from steam_boiler.modules.pump_selection.controller import PumpSelector

__all__ = [
    "CYCLE_DURATION",
    "LevelBand",
    "LevelPredictor",
    "PumpSelector",
]
