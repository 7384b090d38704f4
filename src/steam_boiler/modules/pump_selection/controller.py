"""
Pump Selection Controller - Chooses how many pumps to run next cycle

Evaluates every pump count from 0 to the number of pumps and keeps the one
whose predicted band is centred closest to the middle of the normal range.

Author: Steam Boiler Control Project
Date: 2026-10-19
"""

import numpy as np

from steam_boiler.modules.pump_selection.model import LevelPredictor


class PumpSelector:
    """
    Controller for pump count selection.

    Attributes:
        number_of_pumps: Highest pump count that may be selected
        model: Underlying level predictor
    """

    def __init__(self, number_of_pumps: int):
        """
        Args:
            number_of_pumps: Number of pumps fitted to the boiler

        Raises:
            ValueError: If number_of_pumps is negative
        """
        if number_of_pumps < 0:
            raise ValueError(f"Number of pumps must be non-negative, got {number_of_pumps}")
        self.number_of_pumps = number_of_pumps
        self.model = LevelPredictor()

    def select_pump_count(
        self,
        level: float,
        per_pump_capacity: float,
        max_steam_rate: float,
        steam_rate: float,
        normal_min: float,
        normal_max: float,
    ) -> int:
        """
        Select the pump count for the next cycle.

        Args:
            level: Current water level [L]
            per_pump_capacity: Throughput of one pump [L/s]
            max_steam_rate: Maximal steam rate [L/s]
            steam_rate: Observed steam rate [L/s]
            normal_min: Lower bound of the normal band [L]
            normal_max: Upper bound of the normal band [L]

        Returns:
            Pump count in [0, number_of_pumps]

        Raises:
            ValueError: If the capacity is negative or the normal band inverted
        """
        self._validate(per_pump_capacity, normal_min, normal_max)
        lows, highs = self.model.predict_bands(
            self.number_of_pumps, level, per_pump_capacity, max_steam_rate, steam_rate,
        )
        return self._closest_to_centre(lows, highs, normal_min, normal_max)

    def select_init_pump_count(
        self,
        level: float,
        per_pump_capacity: float,
        steam_rate: float,
        normal_min: float,
        normal_max: float,
    ) -> int:
        """Same selection rule using the initialisation band (no steam demand)."""
        self._validate(per_pump_capacity, normal_min, normal_max)
        lows, highs = self.model.predict_init_bands(
            self.number_of_pumps, level, per_pump_capacity, steam_rate,
        )
        return self._closest_to_centre(lows, highs, normal_min, normal_max)

    @staticmethod
    def _validate(per_pump_capacity: float, normal_min: float, normal_max: float) -> None:
        if per_pump_capacity < 0:
            raise ValueError(f"Pump capacity must be non-negative, got {per_pump_capacity}")
        if normal_min > normal_max:
            raise ValueError(
                f"Normal band is inverted: normal_min={normal_min} > normal_max={normal_max}"
            )

    @staticmethod
    def _closest_to_centre(
        lows: np.ndarray,
        highs: np.ndarray,
        normal_min: float,
        normal_max: float,
    ) -> int:
        midpoints = (highs + lows) / 2
        target = (normal_min + normal_max) / 2
        distances = np.abs(midpoints - target)
        # Ties go to the higher pump count.
        return int(np.flatnonzero(distances == distances.min())[-1])
