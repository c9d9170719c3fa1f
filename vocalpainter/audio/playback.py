"""Playback of the captured voice clip through Qt Multimedia."""

from __future__ import annotations

import io
import logging
from typing import Callable, Optional

import numpy as np
import soundfile as sf
from PyQt5.QtCore import QBuffer, QIODevice, QObject
from PyQt5.QtMultimedia import QAudio, QAudioFormat, QAudioOutput

logger = logging.getLogger(__name__)

_INT16_MAX = np.int16(32767).item()


class VoicePlayer(QObject):  # type: ignore[misc]
    """Play a WAV clip held in memory, with a play/pause toggle."""

    def __init__(
        self,
        wav_bytes: bytes,
        parent: Optional[QObject] = None,  # type: ignore[override]
        *,
        audio_output_factory: Optional[Callable[[QAudioFormat, Optional[QObject]], object]] = None,
    ) -> None:
        super().__init__(parent)  # type: ignore[misc]
        audio, sample_rate = sf.read(io.BytesIO(wav_bytes), dtype="float32", always_2d=True)
        self._sample_rate = int(sample_rate)
        self._channels = int(audio.shape[1]) if audio.ndim == 2 else 1
        self._pcm = self._float_to_pcm(audio)
        self._audio_output_factory = audio_output_factory or QAudioOutput

        self._audio_output = None
        self._device: Optional[QBuffer] = None
        self._playing = False
        self._finished_callback: Optional[Callable[[], None]] = None

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def duration(self) -> float:
        frames = len(self._pcm) // (2 * self._channels)
        return frames / float(self._sample_rate or 1)

    def set_finished_callback(self, callback: Optional[Callable[[], None]]) -> None:
        self._finished_callback = callback

    def play(self) -> None:
        if self._audio_output is None:
            self._device = QBuffer()
            self._device.setData(self._pcm)
            self._device.open(QIODevice.ReadOnly)
            self._audio_output = self._audio_output_factory(self._build_format(), self)
            if hasattr(self._audio_output, "stateChanged"):
                self._audio_output.stateChanged.connect(self._handle_state_change)
            self._audio_output.start(self._device)
        else:
            self._audio_output.resume()
        self._playing = True

    def pause(self) -> None:
        if self._audio_output is not None:
            self._audio_output.suspend()
        self._playing = False

    def toggle(self) -> bool:
        """Flip between playing and paused; return the new playing state."""
        if self._playing:
            self.pause()
        else:
            self.play()
        return self._playing

    def stop(self) -> None:
        if self._audio_output is not None:
            self._audio_output.stop()
            self._audio_output = None
        if self._device is not None:
            self._device.close()
            self._device = None
        self._playing = False

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _float_to_pcm(self, audio: np.ndarray) -> bytes:
        if audio.size == 0:
            return b""
        clipped = np.clip(audio, -1.0, 1.0)
        pcm = np.asarray((clipped * _INT16_MAX).round(), dtype="<i2")
        return pcm.tobytes()

    def _build_format(self) -> QAudioFormat:
        fmt = QAudioFormat()
        fmt.setCodec("audio/pcm")
        fmt.setSampleRate(self._sample_rate)
        fmt.setSampleSize(16)
        fmt.setChannelCount(self._channels)
        fmt.setByteOrder(QAudioFormat.LittleEndian)
        fmt.setSampleType(QAudioFormat.SignedInt)
        return fmt

    def _handle_state_change(self, state: int) -> None:
        if state == QAudio.IdleState and self._playing:
            logger.debug("Voice playback finished")
            self.stop()
            if self._finished_callback is not None:
                self._finished_callback()


__all__ = ["VoicePlayer"]
