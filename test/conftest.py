"""
Shared fixtures for the steam boiler test suite

Author: Steam Boiler Control Project
Date: 2026-10-19
"""

import pytest

from steam_boiler.core.configuration import BoilerConfiguration
from steam_boiler.core.mailbox import Mailbox, Message


@pytest.fixture
def configuration():
    """
    Two-pump boiler with a wide normal band.

    Limits 100/900, normal band 200/800, 1000 L tank.
    """
    return BoilerConfiguration(
        number_of_pumps=2,
        pump_capacities=(10.0, 10.0),
        max_steam_rate=10.0,
        capacity=1000.0,
        minimal_limit_level=100.0,
        maximal_limit_level=900.0,
        minimal_normal_level=200.0,
        maximal_normal_level=800.0,
    )


@pytest.fixture
def make_batch():
    """
    Factory for well-formed inbound batches.

    Pump controllers agree with their pumps unless ``controls`` is given.
    Extra messages are appended after the readings.
    """
    def _make(level=500.0, steam=0.0, pumps=(False, False), controls=None, extra=()):
        if controls is None:
            controls = pumps
        messages = [Message.level(level), Message.steam(steam)]
        messages += [Message.pump_state(i, on) for i, on in enumerate(pumps)]
        messages += [Message.pump_control_state(i, on) for i, on in enumerate(controls)]
        messages += list(extra)
        return Mailbox(messages)

    return _make
