"""Helper for saving and loading studio settings."""

import json
from dataclasses import dataclass, asdict
from pathlib import Path

from vocalpainter.emotions import DEFAULT_EMOTION, EMOTION_COLORS

# Default file extension for settings files
SETTINGS_FILE_EXTENSION = ".json"

from vocalpainter.audio.capture import MAX_RECORDING_MS


@dataclass
class StudioSettings:
    """Tunable values for a recording studio session."""
    max_recording_ms: int = MAX_RECORDING_MS
    sample_rate: int = 44100
    channels: int = 1
    default_emotion: str = DEFAULT_EMOTION
    export_filename: str = "voice-memory.png"
    export_directory: str = "."
    theme: str = "Night"


def save_settings(settings: StudioSettings, filepath: str) -> None:
    """Save ``settings`` to ``filepath`` as JSON."""
    path = Path(filepath)
    if path.suffix != SETTINGS_FILE_EXTENSION:
        path = path.with_suffix(SETTINGS_FILE_EXTENSION)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(settings), f, indent=2)


def load_settings(filepath: str) -> StudioSettings:
    """Load settings from ``filepath`` and return a :class:`StudioSettings`."""
    path = Path(filepath)
    if not path.is_file():
        raise FileNotFoundError(f"Settings file not found: {filepath}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    settings = StudioSettings()
    for k, v in data.items():
        if hasattr(settings, k):
            setattr(settings, k, v)

    if settings.default_emotion not in EMOTION_COLORS:
        settings.default_emotion = DEFAULT_EMOTION
    settings.max_recording_ms = min(int(settings.max_recording_ms), MAX_RECORDING_MS)
    return settings


__all__ = ["StudioSettings", "save_settings", "load_settings", "SETTINGS_FILE_EXTENSION", "MAX_RECORDING_MS"]
