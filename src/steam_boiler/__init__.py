"""
steam_boiler - Steam boiler control core

Per-cycle decision logic of a steam boiler: reads the level, steam and pump
reports of each cycle and answers with pump commands, failure reports and
the operating mode.

Author: Steam Boiler Control Project
Date: 2026-10-19
"""

__version__ = "0.1.0"
__author__ = "Steam Boiler Control Project"

from steam_boiler.core.configuration import BoilerConfiguration
from steam_boiler.core.mailbox import Mailbox, Message, MessageKind, OperatingMode
from steam_boiler.modules.boiler_control import Mode, SteamBoilerController

__all__ = [
    "BoilerConfiguration",
    "Mailbox",
    "Message",
    "MessageKind",
    "OperatingMode",
    "Mode",
    "SteamBoilerController",
]
