"""Built-in emotion to color mappings.

The table is fixed; only the current selection changes.  Colors are the
hex strings used to paint the cymatic pattern.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_EMOTION = "sorrow"


@dataclass(frozen=True)
class EmotionChoice:
    """One selectable feeling."""

    key: str
    color: str
    display_name: str


EMOTION_COLORS: Dict[str, EmotionChoice] = {
    choice.key: choice
    for choice in (
        EmotionChoice("sorrow", "#1e3a8a", "Deep Blue"),
        EmotionChoice("joy", "#eab308", "Gold"),
        EmotionChoice("silence", "#6b7280", "Silver"),
        EmotionChoice("fragility", "#fce7f3", "Pale Pink"),
        EmotionChoice("love", "#d97706", "Warm Amber"),
        EmotionChoice("passion", "#dc2626", "Red"),
        EmotionChoice("calm", "#2563eb", "Blue"),
        EmotionChoice("hope", "#eab308", "Yellow"),
        EmotionChoice("absence", "#000000", "Black"),
        EmotionChoice("stillness", "#ffffff", "White"),
    )
}


class EmotionPalette:
    """Lookup table plus the single current-selection slot."""

    def __init__(
        self,
        default_key: str = DEFAULT_EMOTION,
        on_select: Optional[Callable[[EmotionChoice], None]] = None,
    ) -> None:
        if default_key not in EMOTION_COLORS:
            raise KeyError(f"Unknown emotion: {default_key}")
        self._current = EMOTION_COLORS[default_key]
        self._on_select = on_select

    def set_select_callback(self, callback: Optional[Callable[[EmotionChoice], None]]) -> None:
        self._on_select = callback

    @property
    def current(self) -> EmotionChoice:
        return self._current

    def choices(self) -> List[EmotionChoice]:
        return list(EMOTION_COLORS.values())

    def lookup(self, key: str) -> EmotionChoice:
        choice = EMOTION_COLORS.get(key)
        if choice is None:
            raise KeyError(f"Unknown emotion: {key}")
        return choice

    def select(self, key: str) -> str:
        """Make ``key`` current and return its color.

        The select callback fires even when ``key`` is already selected.
        """
        choice = self.lookup(key)
        self._current = choice
        logger.debug("Selected emotion %s (%s)", choice.key, choice.color)
        if self._on_select is not None:
            self._on_select(choice)
        return choice.color


__all__ = ["EmotionChoice", "EmotionPalette", "EMOTION_COLORS", "DEFAULT_EMOTION"]
