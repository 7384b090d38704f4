"""
Unit tests for the SensorValidator

Tests transmission failure detection and reading range checks.

Author: Steam Boiler Control Project
Date: 2026-10-19
"""

import pytest
from steam_boiler.core.extractor import PumpControlStatus, PumpStatus
from steam_boiler.core.mailbox import Message, MessageKind
from steam_boiler.modules.sensor_validation import SensorValidator


@pytest.fixture
def validator(configuration):
    """Fixture providing a validator for the two-pump boiler."""
    return SensorValidator(configuration)


PUMPS = [PumpStatus(0, False), PumpStatus(1, True)]
CONTROLS = [PumpControlStatus(0, False), PumpControlStatus(1, True)]


class TestTransmissionFailure:
    """Test batch completeness checks."""

    def test_complete_batch(self, validator):
        assert not validator.is_transmission_failure(500.0, 4.0, PUMPS, CONTROLS)

    def test_missing_steam(self, validator):
        assert validator.is_transmission_failure(500.0, None, PUMPS, CONTROLS)

    def test_missing_level(self, validator):
        assert validator.is_transmission_failure(None, 4.0, PUMPS, CONTROLS)

    def test_zero_readings_are_present(self, validator):
        """0.0 is a reading, not an absent one."""
        assert not validator.is_transmission_failure(0.0, 0.0, PUMPS, CONTROLS)

    def test_too_few_pump_states(self, validator):
        assert validator.is_transmission_failure(500.0, 4.0, PUMPS[:1], CONTROLS)

    def test_too_many_pump_control_states(self, validator):
        controls = CONTROLS + [PumpControlStatus(1, True)]
        assert validator.is_transmission_failure(500.0, 4.0, PUMPS, controls)

    def test_duplicate_pump_index(self, validator):
        """Right count, but pump 1 never reported."""
        pumps = [PumpStatus(0, False), PumpStatus(0, False)]
        assert validator.is_transmission_failure(500.0, 4.0, pumps, CONTROLS)

    def test_pump_index_out_of_range(self, validator):
        controls = [PumpControlStatus(0, False), PumpControlStatus(2, True)]
        assert validator.is_transmission_failure(500.0, 4.0, PUMPS, controls)

    def test_repair_notice_for_unknown_pump(self, validator):
        batch = [Message.for_pump(MessageKind.PUMP_REPAIRED, 5)]
        assert validator.has_invalid_index(batch)

    def test_negative_index(self, validator):
        batch = [Message.pump_state(-1, True)]
        assert validator.has_invalid_index(batch)

    def test_valid_indices(self, validator, make_batch):
        assert not validator.has_invalid_index(make_batch())


class TestRangeChecks:
    """Test physical plausibility of readings."""

    @pytest.mark.parametrize("steam, invalid", [
        (-0.1, True),
        (0.0, False),
        (10.0, False),
        (10.01, True),
    ])
    def test_steam_rate(self, validator, steam, invalid):
        assert validator.is_steam_rate_invalid(steam) is invalid

    @pytest.mark.parametrize("level, invalid", [
        (-1.0, True),
        (0.0, False),
        (1000.0, False),
        (1000.5, True),
    ])
    def test_water_level(self, validator, level, invalid):
        assert validator.is_water_level_invalid(level) is invalid

    @pytest.mark.parametrize("level, outside", [
        (99.9, True),
        (100.0, False),
        (900.0, False),
        (900.1, True),
    ])
    def test_limits(self, validator, level, outside):
        assert validator.is_outside_limits(level) is outside
