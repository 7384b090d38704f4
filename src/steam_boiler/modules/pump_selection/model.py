"""
Level Prediction Model - Water level reachable by the next cycle boundary

For a candidate number of open pumps, the level after one cycle lies in a
band bounded by two steam-consumption assumptions:
- high: steam keeps leaving at the currently observed rate
- low: steam leaves at the maximal rate

Author: Steam Boiler Control Project
Date: 2026-10-19
"""

from typing import NamedTuple, Tuple

import numpy as np

# Duration of one control cycle [s]; pump and steam rates are per second.
CYCLE_DURATION = 5.0


class LevelBand(NamedTuple):
    """Predicted (low, high) water level after one cycle [L]."""
    low: float
    high: float

    @property
    def midpoint(self) -> float:
        return (self.high + self.low) / 2


class LevelPredictor:
    """
    Projects water level one cycle ahead.

    Pure arithmetic, no state.
    """

    @staticmethod
    def _project(pump_count, level, per_pump_capacity, steam_rate, pessimistic_steam_rate):
        """
        Band formula shared by every prediction.

        ``pump_count`` may be an int or an array of counts; the bounds
        follow its shape.

        Returns:
            Tuple of (low, high)
        """
        inflow = CYCLE_DURATION * per_pump_capacity * pump_count
        high = level + inflow - CYCLE_DURATION * steam_rate
        low = level + inflow - CYCLE_DURATION * pessimistic_steam_rate
        return low, high

    @staticmethod
    def predict_band(
        pump_count: int,
        level: float,
        per_pump_capacity: float,
        max_steam_rate: float,
        steam_rate: float,
    ) -> LevelBand:
        """
        Predict the level band with ``pump_count`` pumps open.

        Args:
            pump_count: Number of open pumps
            level: Current water level [L]
            per_pump_capacity: Throughput of one pump [L/s]
            max_steam_rate: Maximal steam rate [L/s]
            steam_rate: Observed steam rate [L/s]

        Returns:
            LevelBand(low, high)
        """
        low, high = LevelPredictor._project(pump_count, level, per_pump_capacity, steam_rate, max_steam_rate)
        return LevelBand(low=low, high=high)

    @staticmethod
    def predict_init(
        pump_count: int,
        level: float,
        per_pump_capacity: float,
        steam_rate: float,
    ) -> LevelBand:
        """
        Band used while the boiler is still being filled.

        No steam is produced yet, so the pessimistic bound assumes zero
        consumption instead of the maximal rate.
        """
        low, high = LevelPredictor._project(pump_count, level, per_pump_capacity, steam_rate, 0.0)
        return LevelBand(low=low, high=high)

    @staticmethod
    def predict_bands(
        max_pumps: int,
        level: float,
        per_pump_capacity: float,
        max_steam_rate: float,
        steam_rate: float,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Bands for every pump count 0..max_pumps at once.

        Element i equals ``predict_band(i, ...)`` exactly.

        Returns:
            Tuple of (lows, highs) arrays of length max_pumps + 1
        """
        counts = np.arange(max_pumps + 1)
        return LevelPredictor._project(counts, level, per_pump_capacity, steam_rate, max_steam_rate)

    @staticmethod
    def predict_init_bands(
        max_pumps: int,
        level: float,
        per_pump_capacity: float,
        steam_rate: float,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Vectorised ``predict_init`` for every pump count 0..max_pumps."""
        counts = np.arange(max_pumps + 1)
        return LevelPredictor._project(counts, level, per_pump_capacity, steam_rate, 0.0)
