"""Scannable-code stand-in linking a memory back to its voice clip."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from vocalpainter.audio.capture import AudioSession
from vocalpainter.errors import PreconditionError

from .renderer import AggRenderer, Renderer

logger = logging.getLogger(__name__)

CODE_SIZE = 100
CELL_SIZE = 10

# Top-left corners of the dark cells in the placeholder grid
PLACEHOLDER_CELLS = (
    (10, 10), (30, 10), (50, 10), (70, 10),
    (10, 30), (50, 30),
    (10, 50), (30, 50), (70, 50),
    (10, 70), (30, 70), (50, 70), (70, 70),
)


@dataclass(frozen=True)
class VoiceLinkToken:
    """Opaque pointer to a captured clip."""

    value: str

    @classmethod
    def from_session(cls, session: AudioSession) -> "VoiceLinkToken":
        if not session.is_captured or not session.reference:
            raise PreconditionError("No captured voice clip to link to")
        return cls(session.reference)


def _default_renderer() -> Renderer:
    return AggRenderer(CODE_SIZE, CODE_SIZE, background="#ffffff")


class VoiceLinkEncoder:
    """Render a token as a scannable-code image.

    The image is a fixed placeholder grid; the token value does not change it.
    """

    def __init__(self, renderer_factory: Optional[Callable[[], Renderer]] = None) -> None:
        self._renderer_factory = renderer_factory or _default_renderer

    def encode(self, token: Optional[VoiceLinkToken]) -> Optional[bytes]:
        if token is None:
            logger.debug("encode() skipped: no voice link token")
            return None
        renderer = self._renderer_factory()
        renderer.begin_path()
        for x, y in PLACEHOLDER_CELLS:
            renderer.move_to(x, y)
            renderer.line_to(x + CELL_SIZE, y)
            renderer.line_to(x + CELL_SIZE, y + CELL_SIZE)
            renderer.line_to(x, y + CELL_SIZE)
            renderer.close_path()
        renderer.fill("#000000", 1.0)
        renderer.draw_text(CODE_SIZE / 2, 95, "SCAN", size=8)
        return renderer.to_png()


__all__ = ["VoiceLinkEncoder", "VoiceLinkToken", "PLACEHOLDER_CELLS", "CODE_SIZE"]
