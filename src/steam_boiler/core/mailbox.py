"""
Mailbox - Tagged messages exchanged with the physical units

Each clock cycle the physical units deliver one batch of messages and the
controller answers with one batch. A message carries a kind tag and the
payload that kind requires (pump index, reading value, on/off state or
operating mode).

Author: Steam Boiler Control Project
Date: 2026-10-19
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple


class OperatingMode(Enum):
    """Operating mode as announced to the physical units."""
    INITIALISATION = "INITIALISATION"
    NORMAL = "NORMAL"
    DEGRADED = "DEGRADED"
    RESCUE = "RESCUE"
    EMERGENCY_STOP = "EMERGENCY_STOP"


class MessageKind(Enum):
    """
    Message kinds understood on the boiler link.

    The value is the payload signature: a tuple naming the payload fields
    the kind requires, drawn from ``index``, ``value``, ``state``, ``mode``.
    """
    # Inbound (physical units -> controller)
    LEVEL = ("value",)
    STEAM = ("value",)
    PUMP_STATE = ("index", "state")
    PUMP_CONTROL_STATE = ("index", "state")
    PHYSICAL_UNITS_READY = ()
    STEAM_BOILER_WAITING = ()
    STEAM_REPAIRED = ()
    PUMP_CONTROL_REPAIRED = ("index",)
    PUMP_REPAIRED = ("index",)
    LEVEL_REPAIRED = ()

    # Outbound (controller -> physical units)
    MODE = ("mode",)
    OPEN_PUMP = ("index",)
    CLOSE_PUMP = ("index",)
    VALVE = ()
    PROGRAM_READY = ()
    PUMP_FAILURE_DETECTION = ("index",)
    PUMP_CONTROL_FAILURE_DETECTION = ("index",)
    STEAM_FAILURE_DETECTION = ()
    LEVEL_FAILURE_DETECTION = ()
    STEAM_REPAIRED_ACKNOWLEDGEMENT = ()
    PUMP_CONTROL_REPAIRED_ACKNOWLEDGEMENT = ("index",)
    PUMP_REPAIRED_ACKNOWLEDGEMENT = ("index",)
    LEVEL_REPAIRED_ACKNOWLEDGEMENT = ()

    def __new__(cls, *fields: str) -> "MessageKind":
        # Several kinds share a signature, so the member name is the value.
        obj = object.__new__(cls)
        obj._value_ = len(cls.__members__)
        obj.fields = tuple(fields)
        return obj

    @property
    def has_index(self) -> bool:
        return "index" in self.fields


_PAYLOAD_FIELDS: Tuple[str, ...] = ("index", "value", "state", "mode")


@dataclass(frozen=True)
class Message:
    """
    A single tagged message.

    Attributes:
        kind: Message kind tag
        index: Pump index, for kinds addressing one pump
        value: Reading value, for LEVEL and STEAM
        state: On/off state, for PUMP_STATE and PUMP_CONTROL_STATE
        mode: Announced operating mode, for MODE
    """
    kind: MessageKind
    index: Optional[int] = None
    value: Optional[float] = None
    state: Optional[bool] = None
    mode: Optional[OperatingMode] = None

    def __post_init__(self):
        """Check that the payload matches the kind exactly."""
        for name in _PAYLOAD_FIELDS:
            present = getattr(self, name) is not None
            required = name in self.kind.fields
            if present != required:
                if required:
                    raise ValueError(f"{self.kind.name} requires a '{name}' payload")
                raise ValueError(f"{self.kind.name} takes no '{name}' payload")

        if self.index is not None and (isinstance(self.index, bool) or not isinstance(self.index, int)):
            raise ValueError(f"Pump index must be an integer, got {self.index!r}")
        if self.value is not None:
            if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
                raise ValueError(f"Reading value must be a number, got {self.value!r}")
            if not math.isfinite(self.value):
                raise ValueError(f"Reading value must be finite, got {self.value!r}")
            object.__setattr__(self, "value", float(self.value))
        if self.state is not None and not isinstance(self.state, bool):
            raise ValueError(f"Pump state must be a boolean, got {self.state!r}")
        if self.mode is not None and not isinstance(self.mode, OperatingMode):
            raise ValueError(f"Mode must be an OperatingMode, got {self.mode!r}")

    def __str__(self) -> str:
        payloads = [getattr(self, name) for name in self.kind.fields]
        args = [p.name if isinstance(p, OperatingMode) else str(p) for p in payloads]
        return f"{self.kind.name}({', '.join(args)})" if args else self.kind.name

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to the JSON form used by replay scenarios."""
        data: Dict[str, Any] = {"kind": self.kind.name}
        for name in self.kind.fields:
            payload = getattr(self, name)
            data[name] = payload.name if name == "mode" else payload
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        """
        Build a message from its JSON form.

        Args:
            data: Mapping with a ``kind`` key and the payload keys of that kind

        Returns:
            Validated Message

        Raises:
            ValueError: If the kind is unknown or the payload does not match
        """
        if not isinstance(data, dict):
            raise ValueError(f"Message must be a JSON object, got {data!r}")
        try:
            kind = MessageKind[data["kind"]]
        except (KeyError, TypeError) as e:
            raise ValueError(f"Unknown or missing message kind in {data!r}") from e

        payload = {name: data.get(name) for name in _PAYLOAD_FIELDS}
        if payload["mode"] is not None:
            try:
                payload["mode"] = OperatingMode[payload["mode"]]
            except (KeyError, TypeError) as e:
                raise ValueError(f"Unknown operating mode {payload['mode']!r}") from e
        return cls(kind=kind, **payload)

    # ========== Constructors for common messages ==========

    @classmethod
    def level(cls, value: float) -> "Message":
        return cls(MessageKind.LEVEL, value=value)

    @classmethod
    def steam(cls, value: float) -> "Message":
        return cls(MessageKind.STEAM, value=value)

    @classmethod
    def pump_state(cls, index: int, on: bool) -> "Message":
        return cls(MessageKind.PUMP_STATE, index=index, state=on)

    @classmethod
    def pump_control_state(cls, index: int, on: bool) -> "Message":
        return cls(MessageKind.PUMP_CONTROL_STATE, index=index, state=on)

    @classmethod
    def mode_message(cls, mode: OperatingMode) -> "Message":
        return cls(MessageKind.MODE, mode=mode)

    @classmethod
    def signal(cls, kind: MessageKind) -> "Message":
        """Payload-free message (PROGRAM_READY, VALVE, ...)."""
        return cls(kind)

    @classmethod
    def for_pump(cls, kind: MessageKind, index: int) -> "Message":
        """Message addressing a single pump (OPEN_PUMP, CLOSE_PUMP, ...)."""
        return cls(kind, index=index)


class Mailbox:
    """
    FIFO batch of messages for one clock cycle.

    Messages are read back in the order they were sent.
    """

    def __init__(self, messages: Optional[Iterable[Message]] = None):
        self._messages: List[Message] = list(messages or [])

    def send(self, message: Message) -> None:
        """Append a message to the batch."""
        if not isinstance(message, Message):
            raise ValueError(f"Mailbox accepts Message objects only, got {type(message).__name__}")
        self._messages.append(message)

    def read(self, i: int) -> Message:
        """Return the i-th message of the batch."""
        return self._messages[i]

    def size(self) -> int:
        return len(self._messages)

    def kinds(self) -> List[MessageKind]:
        """Kinds of all messages, in batch order."""
        return [m.kind for m in self._messages]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    def __contains__(self, message: object) -> bool:
        return message in self._messages

    def __repr__(self) -> str:
        return f"Mailbox([{', '.join(str(m) for m in self._messages)}])"
