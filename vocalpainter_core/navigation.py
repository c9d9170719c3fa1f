"""Explicit screen flow of the memory studio."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


class Screen(Enum):
    HOME = "home"
    CREATE = "create"
    OPTIONS = "options"


class FlowEvent(Enum):
    CREATE_MEMORY = "create_memory"
    START_OVER = "start_over"
    ORDER_PRINT = "order_print"
    BACK_TO_MEMORY = "back_to_memory"
    CONFIRM_SEND = "confirm_send"


TRANSITIONS: Dict[Tuple[Screen, FlowEvent], Screen] = {
    (Screen.HOME, FlowEvent.CREATE_MEMORY): Screen.CREATE,
    (Screen.CREATE, FlowEvent.START_OVER): Screen.HOME,
    (Screen.CREATE, FlowEvent.ORDER_PRINT): Screen.OPTIONS,
    (Screen.OPTIONS, FlowEvent.BACK_TO_MEMORY): Screen.CREATE,
    (Screen.OPTIONS, FlowEvent.CONFIRM_SEND): Screen.HOME,
}


class ScreenFlow:
    """Current screen plus the transition table that moves it."""

    def __init__(self, initial: Screen = Screen.HOME) -> None:
        self._screen = initial
        self._listeners: List[Callable[[Screen], None]] = []

    @property
    def screen(self) -> Screen:
        return self._screen

    def add_listener(self, callback: Callable[[Screen], None]) -> None:
        self._listeners.append(callback)

    def can_dispatch(self, event: FlowEvent) -> bool:
        return (self._screen, event) in TRANSITIONS

    def dispatch(self, event: FlowEvent) -> Screen:
        target: Optional[Screen] = TRANSITIONS.get((self._screen, event))
        if target is None:
            raise ValueError(f"Event {event.value} is not valid on screen {self._screen.value}")
        logger.debug("Screen %s -> %s via %s", self._screen.value, target.value, event.value)
        self._screen = target
        for callback in list(self._listeners):
            callback(target)
        return target

    def reset(self) -> Screen:
        self._screen = Screen.HOME
        for callback in list(self._listeners):
            callback(self._screen)
        return self._screen


__all__ = ["Screen", "FlowEvent", "ScreenFlow", "TRANSITIONS"]
