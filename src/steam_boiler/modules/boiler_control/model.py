"""
Boiler Control Model - Operating mode state machine

Consumes one inbound batch per cycle and writes the outbound batch. The cycle
runs in a fixed order:

    1. emergency stop is terminal
    2. transmission check            -> EMERGENCY_STOP
    3. steam / level range checks    -> EMERGENCY_STOP outside NORMAL
    4. pump controller cross-check   -> DEGRADED
    5. initialisation or normal-mode handling (pump selection)
    6. rescue or degraded-mode handling (repair acknowledgements)
    7. one mode announcement

All mode changes go through the TRANSITIONS table.

Author: Steam Boiler Control Project
Date: 2026-10-19
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from steam_boiler.core.configuration import BoilerConfiguration
from steam_boiler.core.extractor import (
    extract_all,
    extract_pump_control_statuses,
    extract_pump_statuses,
    extract_reading,
    extract_unique,
)
from steam_boiler.core.mailbox import Mailbox, Message, MessageKind, OperatingMode
from steam_boiler.modules.failure_detection import FailureDetector
from steam_boiler.modules.pump_selection import PumpSelector
from steam_boiler.modules.sensor_validation import SensorValidator

logger = logging.getLogger(__name__)


class Mode(Enum):
    """Controller operating modes."""
    WAITING = auto()         # Waiting for the boiler to report ready to fill
    READY = auto()           # Level in the normal band, program ready sent
    NORMAL = auto()          # All units trusted
    DEGRADED = auto()        # A pump or steam failure awaits repair
    RESCUE = auto()          # Level unit suspected faulty
    EMERGENCY_STOP = auto()  # Terminal

    @property
    def operating_mode(self) -> OperatingMode:
        """Mode as announced on the link."""
        if self in (Mode.WAITING, Mode.READY):
            return OperatingMode.INITIALISATION
        return OperatingMode[self.name]


class ModeEvent(Enum):
    """Conditions that may change the mode."""
    TRANSMISSION_FAILURE = auto()
    STEAM_OUT_OF_RANGE = auto()
    LEVEL_OUT_OF_RANGE = auto()
    LEVEL_OUTSIDE_LIMITS = auto()
    PUMP_CONTROL_FAILURE = auto()
    PUMP_FAILURE = auto()
    BOILER_STEAMING = auto()   # Boiler waiting but steam already measured
    PROGRAM_READY = auto()
    UNITS_READY = auto()
    REPAIRED = auto()


_W, _R, _N, _D, _X, _E = (
    Mode.WAITING, Mode.READY, Mode.NORMAL, Mode.DEGRADED, Mode.RESCUE, Mode.EMERGENCY_STOP,
)

# (mode, event) -> next mode. Pairs not listed leave the mode unchanged.
TRANSITIONS: Dict[Tuple[Mode, ModeEvent], Mode] = {
    (_W, ModeEvent.TRANSMISSION_FAILURE): _E,
    (_R, ModeEvent.TRANSMISSION_FAILURE): _E,
    (_N, ModeEvent.TRANSMISSION_FAILURE): _E,
    (_D, ModeEvent.TRANSMISSION_FAILURE): _E,
    (_X, ModeEvent.TRANSMISSION_FAILURE): _E,

    (_W, ModeEvent.STEAM_OUT_OF_RANGE): _E,
    (_R, ModeEvent.STEAM_OUT_OF_RANGE): _E,
    (_N, ModeEvent.STEAM_OUT_OF_RANGE): _D,
    (_D, ModeEvent.STEAM_OUT_OF_RANGE): _E,
    (_X, ModeEvent.STEAM_OUT_OF_RANGE): _E,

    (_W, ModeEvent.LEVEL_OUT_OF_RANGE): _E,
    (_R, ModeEvent.LEVEL_OUT_OF_RANGE): _E,
    (_N, ModeEvent.LEVEL_OUT_OF_RANGE): _X,
    (_D, ModeEvent.LEVEL_OUT_OF_RANGE): _E,
    (_X, ModeEvent.LEVEL_OUT_OF_RANGE): _E,

    (_N, ModeEvent.LEVEL_OUTSIDE_LIMITS): _E,

    (_W, ModeEvent.PUMP_CONTROL_FAILURE): _D,
    (_R, ModeEvent.PUMP_CONTROL_FAILURE): _D,
    (_N, ModeEvent.PUMP_CONTROL_FAILURE): _D,
    (_X, ModeEvent.PUMP_CONTROL_FAILURE): _D,

    (_N, ModeEvent.PUMP_FAILURE): _D,

    (_W, ModeEvent.BOILER_STEAMING): _E,
    (_R, ModeEvent.BOILER_STEAMING): _E,

    (_W, ModeEvent.PROGRAM_READY): _R,

    (_W, ModeEvent.UNITS_READY): _N,
    (_R, ModeEvent.UNITS_READY): _N,

    (_D, ModeEvent.REPAIRED): _N,
    (_X, ModeEvent.REPAIRED): _N,
}


def transition(mode: Mode, event: ModeEvent) -> Mode:
    """Next mode for an event. EMERGENCY_STOP absorbs every event."""
    if mode is Mode.EMERGENCY_STOP:
        return mode
    return TRANSITIONS.get((mode, event), mode)


@dataclass
class ControllerState:
    """
    State carried between cycles.

    Attributes:
        commanded_pump_on: Last command sent to each pump (True = open)
        mode: Current operating mode
        valve_open: Whether the controller has toggled the drain valve open
        cycle: Number of cycles processed
    """
    commanded_pump_on: np.ndarray
    mode: Mode = Mode.WAITING
    valve_open: bool = False
    cycle: int = 0

    @classmethod
    def initial(cls, number_of_pumps: int) -> "ControllerState":
        """Startup state: WAITING, every pump off, valve closed."""
        return cls(commanded_pump_on=np.zeros(number_of_pumps, dtype=bool))


@dataclass
class CycleResult:
    """
    Outcome of one cycle.

    Attributes:
        cycle: Cycle number (1-based)
        entry_mode: Mode when the cycle started
        mode: Mode when the cycle ended
        pump_count: Pumps selected to run, None if no selection was made
        events: Mode events raised during the cycle, in order
        flags: Diagnostic flags dictionary
    """
    cycle: int
    entry_mode: Mode
    mode: Mode
    pump_count: Optional[int] = None
    events: List[ModeEvent] = field(default_factory=list)
    flags: Dict[str, bool] = field(default_factory=lambda: {
        "transmission_failure": False,
        "steam_out_of_range": False,
        "level_out_of_range": False,
        "outside_limits": False,
        "pump_control_failure": False,
        "pump_failure": False,
    })


class BoilerControlModel:
    """
    Mode state machine for one boiler configuration.

    Holds no cycle state of its own: everything that survives a cycle lives
    in the ControllerState passed to clock().
    """

    def __init__(self, configuration: BoilerConfiguration):
        self.configuration = configuration
        self.validator = SensorValidator(configuration)
        self.detector = FailureDetector()
        self.selector = PumpSelector(configuration.number_of_pumps)

    def clock(self, state: ControllerState, incoming: Mailbox, outgoing: Mailbox) -> CycleResult:
        """
        Process one cycle.

        Args:
            state: Controller state, updated in place
            incoming: Messages received from the physical units
            outgoing: Messages to send back, appended in order

        Returns:
            CycleResult describing what happened
        """
        state.cycle += 1
        result = CycleResult(cycle=state.cycle, entry_mode=state.mode, mode=state.mode)
        logger.debug("Cycle %d in %s: %d inbound messages", state.cycle, state.mode.name, len(incoming))

        self._run_cycle(state, list(incoming), outgoing, result)

        result.mode = state.mode
        outgoing.send(Message.mode_message(state.mode.operating_mode))
        return result

    def _run_cycle(
        self,
        state: ControllerState,
        incoming: Sequence[Message],
        outgoing: Mailbox,
        result: CycleResult,
    ) -> None:
        if state.mode is Mode.EMERGENCY_STOP:
            return

        flags = result.flags
        reading = extract_reading(incoming)
        flags["transmission_failure"] = (
            self.validator.is_transmission_failure(
                reading.level,
                reading.steam_rate,
                extract_pump_statuses(incoming),
                extract_pump_control_statuses(incoming),
            )
            or self.validator.has_invalid_index(incoming)
        )
        if flags["transmission_failure"]:
            self._fire(state, ModeEvent.TRANSMISSION_FAILURE, result)
            return

        level, steam = reading.level, reading.steam_rate
        flags["steam_out_of_range"] = self.validator.is_steam_rate_invalid(steam)
        flags["level_out_of_range"] = self.validator.is_water_level_invalid(level)

        # Outside NORMAL an implausible reading cannot be compensated for.
        if flags["steam_out_of_range"] and state.mode is not Mode.NORMAL:
            if self._fire(state, ModeEvent.STEAM_OUT_OF_RANGE, result) is Mode.EMERGENCY_STOP:
                return
        if flags["level_out_of_range"] and state.mode is not Mode.NORMAL:
            if self._fire(state, ModeEvent.LEVEL_OUT_OF_RANGE, result) is Mode.EMERGENCY_STOP:
                return

        flags["pump_control_failure"] = self.detector.check_pump_controllers(incoming, outgoing)
        if flags["pump_control_failure"]:
            self._fire(state, ModeEvent.PUMP_CONTROL_FAILURE, result)

        if state.mode in (Mode.WAITING, Mode.READY):
            self._handle_initialisation(state, incoming, outgoing, result, level, steam)
        elif result.entry_mode is Mode.NORMAL:
            # Also runs when the cross-check just demoted the boiler.
            self._handle_normal(state, incoming, outgoing, result, level, steam)

        if state.mode is Mode.RESCUE:
            self._handle_rescue(state, incoming, outgoing, result)
        elif state.mode is Mode.DEGRADED:
            self._handle_degraded(state, incoming, outgoing, result)

    def _fire(self, state: ControllerState, event: ModeEvent, result: CycleResult) -> Mode:
        """Apply an event to the state and return the new mode."""
        result.events.append(event)
        new_mode = transition(state.mode, event)
        if new_mode is not state.mode:
            log = logger.error if new_mode is Mode.EMERGENCY_STOP else logger.info
            log("Cycle %d: %s -> %s (%s)", state.cycle, state.mode.name, new_mode.name, event.name)
            state.mode = new_mode
        return new_mode

    # ========== Mode handlers ==========

    def _handle_initialisation(
        self,
        state: ControllerState,
        incoming: Sequence[Message],
        outgoing: Mailbox,
        result: CycleResult,
        level: float,
        steam: float,
    ) -> None:
        """Bring the level into the normal band, then wait for the units."""
        if extract_unique(MessageKind.PHYSICAL_UNITS_READY, incoming) is not None:
            self._fire(state, ModeEvent.UNITS_READY, result)
            return
        if extract_unique(MessageKind.STEAM_BOILER_WAITING, incoming) is None:
            return
        if steam != 0:
            self._fire(state, ModeEvent.BOILER_STEAMING, result)
            return

        cfg = self.configuration
        if cfg.minimal_normal_level <= level <= cfg.maximal_normal_level:
            if state.valve_open:
                self._toggle_valve(state, outgoing)
            self.close_all_pumps(state, outgoing)
            outgoing.send(Message.signal(MessageKind.PROGRAM_READY))
            self._fire(state, ModeEvent.PROGRAM_READY, result)
        elif level > cfg.maximal_normal_level:
            if state.commanded_pump_on.any():
                self.close_all_pumps(state, outgoing)
            if not state.valve_open:
                self._toggle_valve(state, outgoing)
        else:
            # Below the normal band.
            if state.valve_open:
                self._toggle_valve(state, outgoing)
            self.fill_boiler(state, outgoing)

    def _handle_normal(
        self,
        state: ControllerState,
        incoming: Sequence[Message],
        outgoing: Mailbox,
        result: CycleResult,
        level: float,
        steam: float,
    ) -> None:
        flags = result.flags
        if flags["pump_control_failure"]:
            # Already DEGRADED; the mismatch overrides the re-checks below.
            pass
        elif flags["level_out_of_range"]:
            self._fire(state, ModeEvent.LEVEL_OUT_OF_RANGE, result)
        elif self.validator.is_outside_limits(level):
            flags["outside_limits"] = True
            self._fire(state, ModeEvent.LEVEL_OUTSIDE_LIMITS, result)
        elif flags["steam_out_of_range"]:
            logger.warning("Cycle %d: steam reading %.2f out of range", state.cycle, steam)
            outgoing.send(Message.signal(MessageKind.STEAM_FAILURE_DETECTION))
            self._fire(state, ModeEvent.STEAM_OUT_OF_RANGE, result)
        elif self.detector.check_pumps(incoming, outgoing, state.commanded_pump_on):
            flags["pump_failure"] = True
            self._fire(state, ModeEvent.PUMP_FAILURE, result)

        if state.mode is Mode.EMERGENCY_STOP:
            return

        cfg = self.configuration
        count = self.selector.select_pump_count(
            level,
            cfg.pump_capacity(0),
            cfg.max_steam_rate,
            steam,
            cfg.minimal_normal_level,
            cfg.maximal_normal_level,
        )
        logger.debug("Cycle %d: level=%.2f steam=%.2f -> %d pumps", state.cycle, level, steam, count)
        result.pump_count = count
        self.open_pumps(state, count, outgoing)

    def _handle_rescue(
        self,
        state: ControllerState,
        incoming: Sequence[Message],
        outgoing: Mailbox,
        result: CycleResult,
    ) -> None:
        """Report the level failure every cycle until the unit is repaired."""
        if extract_all(MessageKind.LEVEL_REPAIRED, incoming):
            outgoing.send(Message.signal(MessageKind.LEVEL_REPAIRED_ACKNOWLEDGEMENT))
            self._fire(state, ModeEvent.REPAIRED, result)
            return
        logger.warning("Cycle %d: level unit failure outstanding", state.cycle)
        outgoing.send(Message.signal(MessageKind.LEVEL_FAILURE_DETECTION))

    def _handle_degraded(
        self,
        state: ControllerState,
        incoming: Sequence[Message],
        outgoing: Mailbox,
        result: CycleResult,
    ) -> None:
        """Acknowledge every repair notice in the batch, in order."""
        for message in incoming:
            if message.kind is MessageKind.STEAM_REPAIRED:
                outgoing.send(Message.signal(MessageKind.STEAM_REPAIRED_ACKNOWLEDGEMENT))
            elif message.kind is MessageKind.PUMP_CONTROL_REPAIRED:
                outgoing.send(Message.for_pump(
                    MessageKind.PUMP_CONTROL_REPAIRED_ACKNOWLEDGEMENT, message.index,
                ))
            elif message.kind is MessageKind.PUMP_REPAIRED:
                outgoing.send(Message.for_pump(MessageKind.PUMP_REPAIRED_ACKNOWLEDGEMENT, message.index))
                self._command_pump(state, message.index, False, outgoing)
            else:
                continue
            logger.info("Cycle %d: acknowledged %s", state.cycle, message)
            self._fire(state, ModeEvent.REPAIRED, result)

    # ========== Actuation ==========

    def open_pumps(self, state: ControllerState, count: int, outgoing: Mailbox) -> None:
        """
        Open pumps 0..count-1 and close the others.

        Raises:
            ValueError: If count is not in [0, number_of_pumps]
        """
        n = self.configuration.number_of_pumps
        if not 0 <= count <= n:
            raise ValueError(f"Pump count must be in [0, {n}], got {count}")
        for i in range(n):
            self._command_pump(state, i, i < count, outgoing)

    def close_all_pumps(self, state: ControllerState, outgoing: Mailbox) -> None:
        for i in range(self.configuration.number_of_pumps):
            self._command_pump(state, i, False, outgoing)

    def fill_boiler(self, state: ControllerState, outgoing: Mailbox) -> None:
        """Open every pump."""
        for i in range(self.configuration.number_of_pumps):
            self._command_pump(state, i, True, outgoing)

    @staticmethod
    def _command_pump(state: ControllerState, index: int, on: bool, outgoing: Mailbox) -> None:
        kind = MessageKind.OPEN_PUMP if on else MessageKind.CLOSE_PUMP
        outgoing.send(Message.for_pump(kind, index))
        state.commanded_pump_on[index] = on

    @staticmethod
    def _toggle_valve(state: ControllerState, outgoing: Mailbox) -> None:
        outgoing.send(Message.signal(MessageKind.VALVE))
        state.valve_open = not state.valve_open
        logger.info("Cycle %d: drain valve %s", state.cycle, "opened" if state.valve_open else "closed")
