"""Pattern and scannable-code rendering."""

from .cymatics import CymaticPatternGenerator, PatternRaster
from .renderer import AggRenderer, Renderer
from .voice_link import VoiceLinkEncoder, VoiceLinkToken

__all__ = [
    "CymaticPatternGenerator",
    "PatternRaster",
    "AggRenderer",
    "Renderer",
    "VoiceLinkEncoder",
    "VoiceLinkToken",
]
