"""
Scenario replay - Drive the controller from recorded inbound batches

A scenario is a JSON file:

    {
        "configuration": {"number_of_pumps": 2, "pump_capacity": 10.0, ...},
        "cycles": [
            [{"kind": "LEVEL", "value": 120.0}, {"kind": "STEAM", "value": 0.0}, ...],
            ...
        ]
    }

The configuration may instead come from a separate file (--config), or be
omitted to use the default boiler.

Usage:
    python -m steam_boiler scenario.json [--summary] [--log-level DEBUG]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from steam_boiler.core.configuration import BoilerConfiguration, load_configuration
from steam_boiler.core.mailbox import Mailbox, Message
from steam_boiler.modules.boiler_control import BoilerView, CycleResult, SteamBoilerController

logger = logging.getLogger(__name__)


def load_scenario(path: Path) -> Dict[str, Any]:
    """
    Read a scenario file.

    Raises:
        ValueError: If the file is not a JSON object with a "cycles" list of
            message lists
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Scenario {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict) or not isinstance(data.get("cycles"), list):
        raise ValueError(f"Scenario {path} must be an object with a 'cycles' list")
    for i, batch in enumerate(data["cycles"]):
        if not isinstance(batch, list):
            raise ValueError(f"Scenario {path}: cycle {i} must be a list of messages, got {batch!r}")
    return data


def replay(
    controller: SteamBoilerController,
    cycles: List[List[Dict[str, Any]]],
    verbose: bool = True,
) -> List[CycleResult]:
    """
    Run every inbound batch through the controller and display each cycle.

    Returns:
        One CycleResult per batch
    """
    results = []
    for batch in cycles:
        incoming = Mailbox(Message.from_dict(m) for m in batch)
        outgoing = Mailbox()
        result = controller.clock(incoming, outgoing)
        if verbose:
            BoilerView.display_cycle(result, incoming, outgoing)
        else:
            BoilerView.display_summary(result, outgoing)
        results.append(result)
    return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="steam-boiler",
        description="Replay recorded message batches through the steam boiler controller.",
    )
    parser.add_argument("scenario", type=Path, help="JSON scenario file")
    parser.add_argument(
        "--config", type=Path, default=None,
        help="JSON configuration file (overrides the scenario's configuration)",
    )
    parser.add_argument("--summary", action="store_true", help="one line per cycle")
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level (default: WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        scenario = load_scenario(args.scenario)
        if args.config is not None:
            configuration = load_configuration(args.config)
        elif "configuration" in scenario:
            configuration = BoilerConfiguration.from_dict(scenario["configuration"])
        else:
            configuration = BoilerConfiguration.default()

        controller = SteamBoilerController(configuration)
        results = replay(controller, scenario["cycles"], verbose=not args.summary)
    except (OSError, ValueError) as e:
        logger.error("Replay failed: %s", e)
        return 2

    print(f"\n{len(results)} cycles replayed, final mode: {controller.get_status_message()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
