"""
BoilerConfiguration - Static characteristics of the steam boiler

Read-only description of the plant: pumps, their capacities, the steam-rate
bound, water capacity and the four level thresholds. Supplied once when the
controller is built and never changed during a run.

Author: Steam Boiler Control Project
Date: 2026-10-19
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoilerConfiguration:
    """
    Immutable boiler characteristics.

    Levels are in litres, rates in litres per second.

    Attributes:
        number_of_pumps: Number of feed pumps
        pump_capacities: Throughput of each pump [L/s]
        max_steam_rate: Maximal steam output [L/s]
        capacity: Total water capacity [L]
        minimal_limit_level: Level below which the boiler is in danger [L]
        maximal_limit_level: Level above which the boiler is in danger [L]
        minimal_normal_level: Lower bound of the normal operating band [L]
        maximal_normal_level: Upper bound of the normal operating band [L]
    """
    number_of_pumps: int
    pump_capacities: Tuple[float, ...]
    max_steam_rate: float
    capacity: float
    minimal_limit_level: float
    maximal_limit_level: float
    minimal_normal_level: float
    maximal_normal_level: float
    name: str = field(default="boiler", compare=False)

    def __post_init__(self):
        object.__setattr__(self, "pump_capacities", tuple(float(c) for c in self.pump_capacities))
        self._validate_pumps()
        self._validate_rates()
        self._validate_levels()

    def _validate_pumps(self) -> None:
        """
        Raises:
            ValueError: If the pump count or a capacity is invalid
        """
        if isinstance(self.number_of_pumps, bool) or not isinstance(self.number_of_pumps, int):
            self._fail(f"number_of_pumps must be an integer, got {self.number_of_pumps!r}")
        if self.number_of_pumps < 1:
            self._fail(f"number_of_pumps must be at least 1, got {self.number_of_pumps}")
        if len(self.pump_capacities) != self.number_of_pumps:
            self._fail(
                f"Expected {self.number_of_pumps} pump capacities, "
                f"got {len(self.pump_capacities)}"
            )
        for i, c in enumerate(self.pump_capacities):
            if c <= 0:
                self._fail(f"Pump {i} capacity must be positive, got {c}")

    def _validate_rates(self) -> None:
        if self.max_steam_rate <= 0:
            self._fail(f"max_steam_rate must be positive, got {self.max_steam_rate}")
        if self.capacity <= 0:
            self._fail(f"capacity must be positive, got {self.capacity}")

    def _validate_levels(self) -> None:
        """
        Thresholds must be ordered inside the tank:
        0 <= M1 <= N1 <= N2 <= M2 <= capacity.

        Raises:
            ValueError: If the thresholds are out of order
        """
        ordered = [
            ("0", 0.0),
            ("minimal_limit_level", self.minimal_limit_level),
            ("minimal_normal_level", self.minimal_normal_level),
            ("maximal_normal_level", self.maximal_normal_level),
            ("maximal_limit_level", self.maximal_limit_level),
            ("capacity", self.capacity),
        ]
        for (lo_name, lo), (hi_name, hi) in zip(ordered, ordered[1:]):
            if lo > hi:
                self._fail(f"Level thresholds out of order: {lo_name}={lo} > {hi_name}={hi}")

    @staticmethod
    def _fail(msg: str) -> None:
        logger.error("Invalid boiler configuration: %s", msg)
        raise ValueError(msg)

    def pump_capacity(self, i: int) -> float:
        """
        Capacity of pump i.

        Raises:
            ValueError: If i is not a valid pump index
        """
        if not 0 <= i < self.number_of_pumps:
            raise ValueError(f"Pump index must be in [0, {self.number_of_pumps}), got {i}")
        return self.pump_capacities[i]

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["pump_capacities"] = list(self.pump_capacities)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoilerConfiguration":
        """
        Build a configuration from a plain mapping.

        ``pump_capacity`` may be given as a single number shared by every
        pump instead of a ``pump_capacities`` list.

        Raises:
            ValueError: If a key is missing or a value is invalid
        """
        values = dict(data)
        if "pump_capacity" in values:
            shared = values.pop("pump_capacity")
            if isinstance(shared, (list, tuple)):
                values["pump_capacities"] = shared
            else:
                values["pump_capacities"] = [shared] * int(values.get("number_of_pumps", 0))
        try:
            return cls(**values)
        except TypeError as e:
            logger.error("Invalid boiler configuration keys: %s", e)
            raise ValueError(f"Invalid boiler configuration: {e}") from e

    @classmethod
    def default(cls) -> "BoilerConfiguration":
        """Four-pump, 1000 L reference boiler."""
        return cls(
            number_of_pumps=4,
            pump_capacities=(10.0, 10.0, 10.0, 10.0),
            max_steam_rate=10.0,
            capacity=1000.0,
            minimal_limit_level=100.0,
            maximal_limit_level=900.0,
            minimal_normal_level=400.0,
            maximal_normal_level=600.0,
            name="default",
        )


def load_configuration(path: Union[str, Path]) -> BoilerConfiguration:
    """
    Load a configuration from a JSON file.

    Args:
        path: JSON file holding the configuration mapping

    Returns:
        Validated BoilerConfiguration

    Raises:
        ValueError: If the file is not valid JSON or the values are invalid
        OSError: If the file cannot be read
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        error_msg = f"Configuration file {path} is not valid JSON: {e}"
        logger.error(error_msg)
        raise ValueError(error_msg) from e
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must hold a JSON object")
    return BoilerConfiguration.from_dict(data)
