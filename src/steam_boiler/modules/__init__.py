"""Modules package - Components of the steam boiler controller"""

from steam_boiler.modules.boiler_control import (
    BoilerView,
    CycleResult,
    Mode,
    SteamBoilerController,
)

__all__ = [
    "BoilerView",
    "CycleResult",
    "Mode",
    "SteamBoilerController",
]
