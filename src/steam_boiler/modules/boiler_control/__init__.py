"""
Boiler Control Module - Operating mode state machine of the steam boiler

Architecture: MVC (Model-View-Controller)

Components:
- model.py: Modes, transition table, controller state and the cycle logic
- controller.py: SteamBoilerController owning the state for one run
- view.py: Console output of cycle results

Author: Steam Boiler Control Project
Date: 2026-10-19
"""

from steam_boiler.modules.boiler_control.model import (
    TRANSITIONS,
    BoilerControlModel,
    ControllerState,
    CycleResult,
    Mode,
    ModeEvent,
    transition,
)
from steam_boiler.modules.boiler_control.controller import SteamBoilerController
from steam_boiler.modules.boiler_control.view import BoilerView

__all__ = [
    "TRANSITIONS",
    "BoilerControlModel",
    "ControllerState",
    "CycleResult",
    "Mode",
    "ModeEvent",
    "transition",
    "SteamBoilerController",
    "BoilerView",
]
