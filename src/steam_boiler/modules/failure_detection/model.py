"""
Failure Detection Model - Pump and pump-controller disagreement checks

Two independent checks on the reported pump states:
- controller mismatch: a pump and its controller report different states
- pump mismatch: a pump is not in the state the controller last commanded

Each check stops at the first disagreement found, so at most one failure of
each kind is reported per cycle.

Author: Steam Boiler Control Project
Date: 2026-10-19
"""

import logging
from typing import Iterable, Optional

import numpy as np

from steam_boiler.core.extractor import extract_pump_control_statuses, extract_pump_statuses
from steam_boiler.core.mailbox import Mailbox, Message, MessageKind

logger = logging.getLogger(__name__)


class FailureDetector:
    """
    Cross-checks pump reports against each other and against the
    controller's own command record.
    """

    @staticmethod
    def find_pump_control_failure(incoming: Iterable[Message]) -> Optional[int]:
        """
        Find the first pump whose controller disagrees with the pump.

        Pump reports are scanned in batch order, and for each the controller
        reports with the same index, also in batch order.

        Returns:
            Index of the first disagreeing pump, or None
        """
        incoming = list(incoming)
        controls = extract_pump_control_statuses(incoming)
        for pump in extract_pump_statuses(incoming):
            for control in controls:
                if pump.index == control.index and pump.physically_on != control.controller_says_on:
                    return control.index
        return None

    @staticmethod
    def find_pump_failure(incoming: Iterable[Message], commanded: np.ndarray) -> Optional[int]:
        """
        Find the first pump whose reported state differs from the last command.

        Args:
            incoming: Inbound batch
            commanded: Controller's record of which pumps it told to open

        Returns:
            Index of the first mismatching pump, or None
        """
        for pump in extract_pump_statuses(incoming):
            if bool(commanded[pump.index]) != pump.physically_on:
                return pump.index
        return None

    def check_pump_controllers(self, incoming: Iterable[Message], outgoing: Mailbox) -> bool:
        """
        Report a pump-control failure if any controller disagrees with its pump.

        Returns:
            True if a PUMP_CONTROL_FAILURE_DETECTION was sent
        """
        index = self.find_pump_control_failure(incoming)
        if index is None:
            return False
        logger.warning("Pump controller %d disagrees with its pump", index)
        outgoing.send(Message.for_pump(MessageKind.PUMP_CONTROL_FAILURE_DETECTION, index))
        return True

    def check_pumps(self, incoming: Iterable[Message], outgoing: Mailbox, commanded: np.ndarray) -> bool:
        """
        Report a pump failure if a pump ignored its last command.

        The failed pump is marked as commanded off in ``commanded``.

        Returns:
            True if a PUMP_FAILURE_DETECTION was sent
        """
        index = self.find_pump_failure(incoming, commanded)
        if index is None:
            return False
        logger.warning(
            "Pump %d reports %s but was commanded %s",
            index,
            "off" if commanded[index] else "on",
            "on" if commanded[index] else "off",
        )
        commanded[index] = False
        outgoing.send(Message.for_pump(MessageKind.PUMP_FAILURE_DETECTION, index))
        return True
