"""Voice capture session structures and helpers.

Qt-backed input and playback live in :mod:`.qt_input` and :mod:`.playback`
and are imported on demand so the capture state machine works headless.
"""

from .capture import (
    AudioCaptureController,
    AudioInputSource,
    AudioSession,
    SessionState,
)

__all__ = [
    "AudioCaptureController",
    "AudioInputSource",
    "AudioSession",
    "SessionState",
]
