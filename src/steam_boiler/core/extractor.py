"""
Message extraction - typed readings pulled out of an inbound batch

Author: Steam Boiler Control Project
Date: 2026-10-19
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from steam_boiler.core.mailbox import Message, MessageKind


@dataclass(frozen=True)
class Reading:
    """
    Level and steam readings of one cycle.

    A field is None when its message was missing or duplicated.
    """
    level: Optional[float]
    steam_rate: Optional[float]


@dataclass(frozen=True)
class PumpStatus:
    index: int
    physically_on: bool


@dataclass(frozen=True)
class PumpControlStatus:
    index: int
    controller_says_on: bool


def extract_unique(kind: MessageKind, batch: Iterable[Message]) -> Optional[Message]:
    """
    Find the only message of a given kind.

    Args:
        kind: Kind to look for
        batch: Messages to search

    Returns:
        The matching message, or None when there is no match or more than one
    """
    match = None
    for message in batch:
        if message.kind is kind:
            if match is not None:
                return None
            match = message
    return match


def extract_all(kind: MessageKind, batch: Iterable[Message]) -> List[Message]:
    """All messages of a given kind, in batch order (possibly empty)."""
    return [message for message in batch if message.kind is kind]


def extract_reading(batch: Iterable[Message]) -> Reading:
    batch = list(batch)
    level = extract_unique(MessageKind.LEVEL, batch)
    steam = extract_unique(MessageKind.STEAM, batch)
    return Reading(
        level=level.value if level is not None else None,
        steam_rate=steam.value if steam is not None else None,
    )


def extract_pump_statuses(batch: Iterable[Message]) -> List[PumpStatus]:
    return [
        PumpStatus(index=m.index, physically_on=m.state)
        for m in extract_all(MessageKind.PUMP_STATE, batch)
    ]


def extract_pump_control_statuses(batch: Iterable[Message]) -> List[PumpControlStatus]:
    return [
        PumpControlStatus(index=m.index, controller_says_on=m.state)
        for m in extract_all(MessageKind.PUMP_CONTROL_STATE, batch)
    ]
