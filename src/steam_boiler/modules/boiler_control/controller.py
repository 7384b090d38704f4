"""
Boiler Control Controller - Orchestration layer

Owns the controller state for one run and drives the mode state machine
once per clock cycle.

Author: Steam Boiler Control Project
Date: 2026-10-19
"""

from typing import Optional

from steam_boiler.core.configuration import BoilerConfiguration
from steam_boiler.core.mailbox import Mailbox
from steam_boiler.modules.boiler_control.model import (
    BoilerControlModel,
    ControllerState,
    CycleResult,
    Mode,
)


class SteamBoilerController:
    """
    Controller for a steam boiler.

    Created once per run; state starts in WAITING with every pump off.

    Attributes:
        configuration: Boiler characteristics
        model: Mode state machine
        state: State carried between cycles
        last_result: Result of the most recent cycle
    """

    def __init__(self, configuration: BoilerConfiguration):
        """
        Args:
            configuration: Boiler characteristics for this run

        Raises:
            ValueError: If configuration is not a BoilerConfiguration
        """
        if not isinstance(configuration, BoilerConfiguration):
            raise ValueError(
                f"Expected a BoilerConfiguration, got {type(configuration).__name__}"
            )
        self.configuration = configuration
        self.model = BoilerControlModel(configuration)
        self.state = ControllerState.initial(configuration.number_of_pumps)
        self.last_result: Optional[CycleResult] = None

    @property
    def mode(self) -> Mode:
        return self.state.mode

    def clock(self, incoming: Mailbox, outgoing: Mailbox) -> CycleResult:
        """
        Process one clock cycle.

        Args:
            incoming: Messages received from the physical units this cycle
            outgoing: Mailbox that receives the controller's answers

        Returns:
            CycleResult for the cycle
        """
        self.last_result = self.model.clock(self.state, incoming, outgoing)
        return self.last_result

    def get_status_message(self) -> str:
        """Current mode name, for display only."""
        return self.state.mode.name

    def get_last_result(self) -> Optional[CycleResult]:
        return self.last_result
