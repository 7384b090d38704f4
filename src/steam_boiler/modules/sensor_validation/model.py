"""
Sensor Validation Model - Trust checks on an inbound batch

Separates two kinds of bad input:
- transmission failures: the batch itself is incomplete or inconsistent
- out-of-range readings: a well-formed reading that cannot be physically true

Author: Steam Boiler Control Project
Date: 2026-10-19
"""

import logging
from typing import Iterable, Optional, Sequence

from steam_boiler.core.configuration import BoilerConfiguration
from steam_boiler.core.extractor import PumpControlStatus, PumpStatus
from steam_boiler.core.mailbox import Message

logger = logging.getLogger(__name__)


class SensorValidator:
    """
    Validation predicates bound to one boiler configuration.

    All methods are side-effect free.
    """

    def __init__(self, configuration: BoilerConfiguration):
        self.configuration = configuration

    def is_transmission_failure(
        self,
        level: Optional[float],
        steam: Optional[float],
        pump_statuses: Sequence[PumpStatus],
        pump_control_statuses: Sequence[PumpControlStatus],
    ) -> bool:
        """
        Check whether the batch is too incomplete to act on.

        Args:
            level: Unique level reading, None if missing or duplicated
            steam: Unique steam reading, None if missing or duplicated
            pump_statuses: All PUMP_STATE reports of the batch
            pump_control_statuses: All PUMP_CONTROL_STATE reports of the batch

        Returns:
            True if the batch must be treated as a transmission failure
        """
        n = self.configuration.number_of_pumps

        if steam is None:
            logger.debug("Transmission failure: steam reading missing or duplicated")
            return True
        if level is None:
            logger.debug("Transmission failure: level reading missing or duplicated")
            return True
        if len(pump_statuses) != n:
            logger.debug("Transmission failure: %d pump states for %d pumps", len(pump_statuses), n)
            return True
        if len(pump_control_statuses) != n:
            logger.debug(
                "Transmission failure: %d pump control states for %d pumps",
                len(pump_control_statuses), n,
            )
            return True
        if not self._covers_every_pump([s.index for s in pump_statuses]):
            logger.debug("Transmission failure: pump state indices %s", [s.index for s in pump_statuses])
            return True
        if not self._covers_every_pump([s.index for s in pump_control_statuses]):
            logger.debug(
                "Transmission failure: pump control indices %s",
                [s.index for s in pump_control_statuses],
            )
            return True
        return False

    def _covers_every_pump(self, indices: Sequence[int]) -> bool:
        # Count already matches, so a full cover means no duplicate and no stray index.
        return sorted(indices) == list(range(self.configuration.number_of_pumps))

    def has_invalid_index(self, batch: Iterable[Message]) -> bool:
        """True if any pump-addressed message names a pump that does not exist."""
        n = self.configuration.number_of_pumps
        for message in batch:
            if message.kind.has_index and not 0 <= message.index < n:
                logger.debug("Pump index out of range in %s", message)
                return True
        return False

    def is_steam_rate_invalid(self, steam_rate: float) -> bool:
        return steam_rate < 0 or steam_rate > self.configuration.max_steam_rate

    def is_water_level_invalid(self, level: float) -> bool:
        return level < 0 or level > self.configuration.capacity

    def is_outside_limits(self, level: float) -> bool:
        """True if the level has left the [minimal limit, maximal limit] safety band."""
        cfg = self.configuration
        return level < cfg.minimal_limit_level or level > cfg.maximal_limit_level
