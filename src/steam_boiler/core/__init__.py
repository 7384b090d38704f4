"""Core data types for the steam boiler controller"""

from steam_boiler.core.configuration import BoilerConfiguration, load_configuration
from steam_boiler.core.mailbox import Mailbox, Message, MessageKind, OperatingMode
from steam_boiler.core.extractor import (
    PumpControlStatus,
    PumpStatus,
    Reading,
    extract_all,
    extract_unique,
)

__all__ = [
    "BoilerConfiguration",
    "load_configuration",
    "Mailbox",
    "Message",
    "MessageKind",
    "OperatingMode",
    "PumpControlStatus",
    "PumpStatus",
    "Reading",
    "extract_all",
    "extract_unique",
]
