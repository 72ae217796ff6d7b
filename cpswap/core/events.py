"""
Event records for completed pool operations, and the sinks that receive them.

Records are write-once reports, not state. Operations hand them to an injected
`EventSink`; the default sink writes them to the `cpswap.events` logger.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Dict, List, Optional, Protocol, Union


@unique
class SwapDirection(Enum):
    A_TO_B = "a_to_b"
    B_TO_A = "b_to_a"


@unique
class LiquidityAction(Enum):
    INIT = "init"
    ADD = "add"
    REMOVE = "remove"


@dataclass(frozen=True)
class SwapEvent:
    pool_id: str
    sender: str
    direction: SwapDirection
    amount_in: int
    amount_out: int

    @property
    def kind(self) -> str:
        return "swap"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "pool_id": self.pool_id,
            "sender": self.sender,
            "direction": self.direction.value,
            "amount_in": self.amount_in,
            "amount_out": self.amount_out,
        }


@dataclass(frozen=True)
class LiquidityEvent:
    pool_id: str
    sender: str
    action: LiquidityAction
    lp_amount: int

    @property
    def kind(self) -> str:
        return "liquidity"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "pool_id": self.pool_id,
            "sender": self.sender,
            "action": self.action.value,
            "lp_amount": self.lp_amount,
        }


PoolEvent = Union[SwapEvent, LiquidityEvent]


class EventSink(Protocol):
    def emit(self, event: PoolEvent) -> None:
        ...


class NullEventSink:
    """Drops every event."""

    def emit(self, event: PoolEvent) -> None:
        return None


class RecordingEventSink:
    """Keeps every event in memory, in emission order."""

    def __init__(self) -> None:
        self._events: List[PoolEvent] = []
        self._lock = threading.Lock()

    def emit(self, event: PoolEvent) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> List[PoolEvent]:
        with self._lock:
            return list(self._events)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


class LoggingEventSink:
    """Writes each event as one log line."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO) -> None:
        self._logger = logger if logger is not None else logging.getLogger("cpswap.events")
        self._level = level

    def emit(self, event: PoolEvent) -> None:
        if isinstance(event, SwapEvent):
            self._logger.log(
                self._level,
                "swap pool=%s sender=%s direction=%s amount_in=%d amount_out=%d",
                event.pool_id[:18],
                event.sender[:18],
                event.direction.value,
                event.amount_in,
                event.amount_out,
            )
        else:
            self._logger.log(
                self._level,
                "liquidity pool=%s sender=%s action=%s lp_amount=%d",
                event.pool_id[:18],
                event.sender[:18],
                event.action.value,
                event.lp_amount,
            )


DEFAULT_SINK: EventSink = LoggingEventSink()
