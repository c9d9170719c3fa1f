"""Qt Multimedia microphone source and event-loop cap timer."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
import soundfile as sf
from PyQt5.QtCore import QBuffer, QIODevice, QObject, QTimer
from PyQt5.QtMultimedia import QAudio, QAudioDeviceInfo, QAudioFormat, QAudioInput

from vocalpainter.errors import DeviceAccessError

from .capture import AudioInputSource

logger = logging.getLogger(__name__)

_BYTES_PER_SAMPLE = 2  # 16-bit


@dataclass
class _QtStream:
    audio_input: object
    buffer: QBuffer


class QtAudioInputSource(AudioInputSource):
    """Record 16-bit PCM from the default input device into memory.

    ``finalize`` wraps the captured PCM in a WAV container.
    """

    def __init__(
        self,
        sample_rate: int = 44100,
        channels: int = 1,
        parent: Optional[QObject] = None,
        *,
        audio_input_factory: Optional[Callable[[QAudioDeviceInfo, QAudioFormat, Optional[QObject]], object]] = None,
        device_info_provider: Optional[Callable[[], QAudioDeviceInfo]] = None,
    ) -> None:
        self._sample_rate = int(sample_rate)
        self._channels = int(channels)
        self._parent = parent
        self._audio_input_factory = audio_input_factory or QAudioInput
        self._device_info_provider = device_info_provider or QAudioDeviceInfo.defaultInputDevice
        self._device_info: Optional[QAudioDeviceInfo] = None

    def request_access(self) -> bool:
        info = self._device_info_provider()
        if info.isNull():
            logger.warning("No audio input device available")
            return False
        if not info.isFormatSupported(self._build_format()):  # pragma: no cover - hardware dependent
            logger.warning("Input device %s does not support 16-bit PCM", info.deviceName())
            return False
        self._device_info = info
        return True

    def open_stream(self) -> _QtStream:
        if self._device_info is None:
            raise DeviceAccessError("Audio input was opened before access was granted")
        buffer = QBuffer()
        buffer.open(QIODevice.WriteOnly)
        audio_input = self._audio_input_factory(self._device_info, self._build_format(), self._parent)
        audio_input.start(buffer)
        if audio_input.error() != QAudio.NoError:
            buffer.close()
            raise DeviceAccessError(f"Audio input failed to start (error {int(audio_input.error())})")
        return _QtStream(audio_input=audio_input, buffer=buffer)

    def finalize(self, stream: _QtStream) -> bytes:
        stream.audio_input.stop()
        pcm = bytes(stream.buffer.data())
        stream.buffer.close()
        self._device_info = None
        return self._pcm_to_wav(pcm)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _build_format(self) -> QAudioFormat:
        fmt = QAudioFormat()
        fmt.setCodec("audio/pcm")
        fmt.setSampleRate(self._sample_rate)
        fmt.setSampleSize(16)
        fmt.setChannelCount(self._channels)
        fmt.setByteOrder(QAudioFormat.LittleEndian)
        fmt.setSampleType(QAudioFormat.SignedInt)
        return fmt

    def _pcm_to_wav(self, pcm: bytes) -> bytes:
        frame_bytes = _BYTES_PER_SAMPLE * self._channels
        usable = len(pcm) - (len(pcm) % frame_bytes)
        samples = np.frombuffer(pcm[:usable], dtype="<i2").reshape(-1, self._channels)
        out = io.BytesIO()
        sf.write(out, samples, self._sample_rate, format="WAV", subtype="PCM_16")
        return out.getvalue()


class QtCapTimer:
    """Single-shot cap timer that fires on the Qt event loop."""

    def __init__(self, seconds: float, callback: Callable[[], None], parent: Optional[QObject] = None) -> None:
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.setInterval(int(round(seconds * 1000)))
        self._timer.timeout.connect(callback)

    def start(self) -> None:
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()


__all__ = ["QtAudioInputSource", "QtCapTimer"]
