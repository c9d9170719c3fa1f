"""Standalone-friendly voice memory capture and pattern API."""

from vocalpainter.audio.capture import (
    AudioCaptureController,
    AudioInputSource,
    AudioSession,
    SessionState,
)
from vocalpainter.emotions import EMOTION_COLORS, EmotionChoice, EmotionPalette
from vocalpainter.errors import DeviceAccessError, PreconditionError
from vocalpainter.visuals.cymatics import CymaticPatternGenerator, PatternRaster

from .navigation import FlowEvent, Screen, ScreenFlow
from .studio import MemoryStudio

__all__ = [
    "AudioCaptureController",
    "AudioInputSource",
    "AudioSession",
    "SessionState",
    "EMOTION_COLORS",
    "EmotionChoice",
    "EmotionPalette",
    "DeviceAccessError",
    "PreconditionError",
    "CymaticPatternGenerator",
    "PatternRaster",
    "FlowEvent",
    "Screen",
    "ScreenFlow",
    "MemoryStudio",
]
