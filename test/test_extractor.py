"""
Unit tests for message extraction

Author: Steam Boiler Control Project
Date: 2026-10-19
"""

from steam_boiler.core.extractor import (
    PumpControlStatus,
    PumpStatus,
    extract_all,
    extract_pump_control_statuses,
    extract_pump_statuses,
    extract_reading,
    extract_unique,
)
from steam_boiler.core.mailbox import Mailbox, Message, MessageKind


class TestExtractUnique:
    """Test single-message extraction."""

    def test_single_match(self):
        batch = Mailbox([Message.steam(3.0), Message.level(400.0)])
        assert extract_unique(MessageKind.LEVEL, batch) == Message.level(400.0)

    def test_missing(self):
        batch = Mailbox([Message.steam(3.0)])
        assert extract_unique(MessageKind.LEVEL, batch) is None

    def test_duplicate_is_absent(self):
        """Two readings of the same kind: neither is trusted."""
        batch = Mailbox([Message.level(400.0), Message.level(410.0)])
        assert extract_unique(MessageKind.LEVEL, batch) is None


class TestExtractAll:
    """Test multi-message extraction."""

    def test_batch_order_kept(self):
        batch = Mailbox([
            Message.pump_state(1, True),
            Message.level(400.0),
            Message.pump_state(0, False),
        ])
        assert extract_all(MessageKind.PUMP_STATE, batch) == [
            Message.pump_state(1, True),
            Message.pump_state(0, False),
        ]

    def test_empty(self):
        assert extract_all(MessageKind.PUMP_REPAIRED, Mailbox()) == []


class TestTypedExtraction:
    """Test typed views over a batch."""

    def test_reading(self, make_batch):
        reading = extract_reading(make_batch(level=420.0, steam=4.5))
        assert reading.level == 420.0
        assert reading.steam_rate == 4.5

    def test_reading_with_duplicate_steam(self):
        batch = Mailbox([Message.level(420.0), Message.steam(1.0), Message.steam(2.0)])
        reading = extract_reading(batch)
        assert reading.level == 420.0
        assert reading.steam_rate is None

    def test_pump_statuses(self, make_batch):
        batch = make_batch(pumps=(True, False), controls=(False, False))
        assert extract_pump_statuses(batch) == [PumpStatus(0, True), PumpStatus(1, False)]
        assert extract_pump_control_statuses(batch) == [
            PumpControlStatus(0, False),
            PumpControlStatus(1, False),
        ]
