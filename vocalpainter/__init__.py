"""VocalPainter: turn a short voice recording into an emotion-colored memory."""

__version__ = "0.1.0"
