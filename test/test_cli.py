"""
Integration tests for scenario replay

Author: Steam Boiler Control Project
Date: 2026-10-19
"""

import json
from pathlib import Path

import pytest
from steam_boiler.cli import build_parser, load_scenario, main, replay
from steam_boiler.core.configuration import BoilerConfiguration
from steam_boiler.modules.boiler_control import Mode, SteamBoilerController

STARTUP = Path(__file__).resolve().parent.parent / "scenarios" / "startup.json"


@pytest.fixture
def startup():
    """Fixture providing the bundled start-up scenario."""
    return load_scenario(STARTUP)


class TestReplay:
    """Test driving a controller through recorded batches."""

    def test_startup_modes(self, startup, capsys):
        configuration = BoilerConfiguration.from_dict(startup["configuration"])
        controller = SteamBoilerController(configuration)

        results = replay(controller, startup["cycles"], verbose=False)

        assert [r.mode for r in results] == [
            Mode.WAITING,
            Mode.READY,
            Mode.NORMAL,
            Mode.NORMAL,
            Mode.DEGRADED,
            Mode.NORMAL,
        ]
        assert results[3].pump_count == 2
        assert "[  6] NORMAL" in capsys.readouterr().out

    def test_verbose_output(self, startup, capsys):
        controller = SteamBoilerController(BoilerConfiguration.from_dict(startup["configuration"]))
        replay(controller, startup["cycles"][:1])

        out = capsys.readouterr().out
        assert "CYCLE 1: WAITING -> WAITING" in out
        assert "OPEN_PUMP(0)" in out
        assert "Diagnostic Flags:" in out


class TestMain:
    """Test the command line entry point."""

    def test_startup_scenario(self, capsys):
        assert main([str(STARTUP), "--summary"]) == 0
        assert "6 cycles replayed, final mode: NORMAL" in capsys.readouterr().out

    def test_config_file_overrides_scenario(self, tmp_path, capsys):
        """Narrow normal band: the first batch is already inside it."""
        config = BoilerConfiguration.default().to_dict()
        config.update(number_of_pumps=2, pump_capacities=[10.0, 10.0],
                      minimal_normal_level=250.0, maximal_normal_level=350.0)
        config_path = tmp_path / "boiler.json"
        config_path.write_text(json.dumps(config))

        assert main([str(STARTUP), "--config", str(config_path), "--summary"]) == 0
        out = capsys.readouterr().out
        assert "PROGRAM_READY" in out.splitlines()[0]

    def test_malformed_scenario(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text(json.dumps({"cycles": [[{"kind": "LEVEL"}]]}))
        assert main([str(path)]) == 2

    def test_missing_cycles(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("{}")
        with pytest.raises(ValueError, match="'cycles' list"):
            load_scenario(path)

    def test_cycle_not_a_list(self, tmp_path):
        path = tmp_path / "flat.json"
        path.write_text(json.dumps({"cycles": [5]}))

        with pytest.raises(ValueError, match="cycle 0 must be a list"):
            load_scenario(path)
        assert main([str(path)]) == 2

    def test_unhashable_kind(self, tmp_path):
        path = tmp_path / "odd.json"
        path.write_text(json.dumps({"cycles": [[{"kind": ["LEVEL"], "value": 3.0}]]}))
        assert main([str(path)]) == 2

    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / "nope.json")]) == 2

    def test_default_configuration(self, tmp_path, capsys):
        path = tmp_path / "scenario.json"
        path.write_text(json.dumps({"cycles": [[]]}))

        assert main([str(path), "--summary"]) == 0
        assert "final mode: EMERGENCY_STOP" in capsys.readouterr().out

    def test_parser_defaults(self):
        args = build_parser().parse_args(["run.json"])
        assert args.log_level == "WARNING"
        assert args.config is None
        assert not args.summary
