"""High level memory studio wiring capture, palette and pattern generation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from vocalpainter.audio.capture import (
    AudioCaptureController,
    AudioInputSource,
    AudioSession,
    SessionState,
    TimerFactory,
)
from vocalpainter.emotions import EmotionChoice, EmotionPalette
from vocalpainter.errors import PreconditionError
from vocalpainter.utils.memory_file import MemoryArtifactExporter
from vocalpainter.utils.settings_file import StudioSettings
from vocalpainter.visuals.cymatics import CymaticPatternGenerator, PatternRaster
from vocalpainter.visuals.voice_link import VoiceLinkEncoder, VoiceLinkToken

from .navigation import FlowEvent, Screen, ScreenFlow

logger = logging.getLogger(__name__)


class MemoryStudio:
    """One person's recording-to-memory session.

    Holds the single current raster.  The raster is replaced whole whenever a
    capture completes or an emotion is selected after capture.
    """

    def __init__(
        self,
        source: AudioInputSource,
        *,
        settings: Optional[StudioSettings] = None,
        timer_factory: Optional[TimerFactory] = None,
        generator: Optional[CymaticPatternGenerator] = None,
        exporter: Optional[MemoryArtifactExporter] = None,
        encoder: Optional[VoiceLinkEncoder] = None,
    ) -> None:
        self.settings = settings or StudioSettings()
        self.palette = EmotionPalette(self.settings.default_emotion, on_select=self._on_emotion_selected)
        self.capture = AudioCaptureController(
            source,
            cap_ms=self.settings.max_recording_ms,
            timer_factory=timer_factory,
            on_captured=self._on_captured,
        )
        self.generator = generator or CymaticPatternGenerator()
        self.exporter = exporter or MemoryArtifactExporter(
            self.settings.export_directory, self.settings.export_filename
        )
        self.encoder = encoder or VoiceLinkEncoder()
        self.flow = ScreenFlow()
        self._raster: Optional[PatternRaster] = None
        self._generation_count = 0
        self._restarting = False

    @property
    def session(self) -> AudioSession:
        return self.capture.session

    @property
    def raster(self) -> Optional[PatternRaster]:
        return self._raster

    @property
    def generation_count(self) -> int:
        return self._generation_count

    def is_stale(self) -> bool:
        return self._raster is not None and self._raster.source_color != self.palette.current.color

    def record(self) -> AudioSession:
        """Start a new recording, discarding a previous capture."""
        if self.capture.state in (SessionState.CAPTURED, SessionState.FAILED):
            self.capture.reset()
            self._raster = None
        return self.capture.start()

    def stop(self) -> AudioSession:
        return self.capture.stop()

    def select_emotion(self, key: str) -> Optional[PatternRaster]:
        self.palette.select(key)
        return self._raster

    def regenerate(self) -> PatternRaster:
        color = self.palette.current.color
        self._raster = self.generator.generate(color)
        self._generation_count += 1
        logger.debug("Generated pattern #%d in %s", self._generation_count, color)
        return self._raster

    def export(self, directory: Optional[Union[str, Path]] = None) -> Optional[Path]:
        """Save the current pattern; returns ``None`` when nothing was generated."""
        if self._raster is None:
            return self.exporter.export(None, directory)
        if self.is_stale():
            self.regenerate()
        return self.exporter.export(self._raster, directory)

    def voice_link(self) -> Optional[bytes]:
        """Scannable-code image for the captured clip, or ``None`` before capture."""
        try:
            token = VoiceLinkToken.from_session(self.session)
        except PreconditionError as exc:
            logger.debug("voice_link() skipped: %s", exc)
            return None
        return self.encoder.encode(token)

    def open_memory(self) -> Screen:
        if not self.session.is_captured:
            raise ValueError("Record your voice before creating a memory")
        return self.flow.dispatch(FlowEvent.CREATE_MEMORY)

    def restart(self) -> Screen:
        """Drop the session and pattern and go back to the start screen."""
        # Stopping a live recording here must not paint a pattern.
        self._restarting = True
        try:
            self.capture.reset()
        finally:
            self._restarting = False
        self._raster = None
        return self.flow.reset()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _on_captured(self, session: AudioSession) -> None:
        if self._restarting:
            return
        self.regenerate()

    def _on_emotion_selected(self, choice: EmotionChoice) -> None:
        if self.session.is_captured:
            self.regenerate()


__all__ = ["MemoryStudio"]
