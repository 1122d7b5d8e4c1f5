"""Drag session state machine shared by project items and project lists."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List, Protocol

logger = logging.getLogger(__name__)

PLAIN_TEXT = "text/plain"


class DragStateError(RuntimeError):
    """Raised when a drag event arrives in a phase that cannot accept it."""


class DragPhase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    HOVERING_VALID = "hovering_valid"
    HOVERING_INVALID = "hovering_invalid"
    DROPPED = "dropped"
    CANCELLED = "cancelled"


TERMINAL_PHASES = {DragPhase.DROPPED, DragPhase.CANCELLED}
IN_FLIGHT_PHASES = {DragPhase.DRAGGING, DragPhase.HOVERING_VALID, DragPhase.HOVERING_INVALID}


class DataTransfer:
    """Payload carried by a drag, keyed by media type in insertion order."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}
        self.effect_allowed = "uninitialized"

    @property
    def types(self) -> List[str]:
        return list(self._data)

    def set_data(self, media_type: str, data: str) -> None:
        self._data[media_type] = str(data)

    def get_data(self, media_type: str) -> str:
        return self._data.get(media_type, "")

    def clear_data(self) -> None:
        self._data.clear()


class DragSession:
    """One drag interaction, from drag-start to drop or cancel.

    Phases move ``IDLE -> DRAGGING -> HOVERING_VALID | HOVERING_INVALID`` and
    end in ``DROPPED`` or ``CANCELLED``. A drop is only legal while hovering a
    target that accepted the payload.
    """

    def __init__(self) -> None:
        self.data_transfer = DataTransfer()
        self._phase = DragPhase.IDLE

    @property
    def phase(self) -> DragPhase:
        return self._phase

    @property
    def is_active(self) -> bool:
        return self._phase in IN_FLIGHT_PHASES

    @property
    def is_finished(self) -> bool:
        return self._phase in TERMINAL_PHASES

    def payload(self, media_type: str = PLAIN_TEXT) -> str:
        return self.data_transfer.get_data(media_type)

    def begin(self, project_id: str, *, media_type: str = PLAIN_TEXT, effect: str = "move") -> None:
        self._require({DragPhase.IDLE}, "begin")
        self.data_transfer.clear_data()
        self.data_transfer.set_data(media_type, project_id)
        self.data_transfer.effect_allowed = effect
        self._move_to(DragPhase.DRAGGING)

    def hover(self, accepted: bool) -> None:
        self._require(IN_FLIGHT_PHASES, "hover")
        self._move_to(DragPhase.HOVERING_VALID if accepted else DragPhase.HOVERING_INVALID)

    def leave(self) -> None:
        self._require(IN_FLIGHT_PHASES, "leave")
        self._move_to(DragPhase.DRAGGING)

    def mark_dropped(self) -> None:
        self._require({DragPhase.HOVERING_VALID}, "drop")
        self._move_to(DragPhase.DROPPED)

    def end(self) -> DragPhase:
        if self._phase is DragPhase.DROPPED:
            return self._phase
        self._require(IN_FLIGHT_PHASES | {DragPhase.IDLE}, "end")
        self._move_to(DragPhase.CANCELLED)
        return self._phase

    def _require(self, allowed: set[DragPhase], event: str) -> None:
        if self._phase not in allowed:
            raise DragStateError(f"Cannot {event} a drag session in phase '{self._phase.value}'.")

    def _move_to(self, phase: DragPhase) -> None:
        if phase is not self._phase:
            logger.debug("Drag session %s -> %s", self._phase.value, phase.value)
        self._phase = phase


class DragSource(Protocol):
    def drag_start(self, session: DragSession) -> None:  # pragma: no cover - interface
        ...

    def drag_end(self, session: DragSession) -> None:  # pragma: no cover - interface
        ...


class DropTarget(Protocol):
    def drag_over(self, session: DragSession) -> bool:  # pragma: no cover - interface
        ...

    def drag_leave(self, session: DragSession) -> None:  # pragma: no cover - interface
        ...

    def drop(self, session: DragSession) -> bool:  # pragma: no cover - interface
        ...


__all__ = [
    "PLAIN_TEXT",
    "DataTransfer",
    "DragPhase",
    "DragSession",
    "DragSource",
    "DragStateError",
    "DropTarget",
]
