"""Writing rendered memory patterns to image files."""

import io
import logging
from pathlib import Path
from typing import Optional, Union

from matplotlib import image as mpimg

from vocalpainter.visuals.cymatics import PatternRaster

logger = logging.getLogger(__name__)

# Default file name for exported memories
MEMORY_FILE_NAME = "voice-memory.png"


def to_png_bytes(raster: PatternRaster) -> bytes:
    """Encode ``raster`` as PNG and return the bytes."""
    buffer = io.BytesIO()
    mpimg.imsave(buffer, raster.pixels, format="png")
    return buffer.getvalue()


class MemoryArtifactExporter:
    """Save the current pattern as a PNG file."""

    def __init__(self, directory: Union[str, Path] = ".", filename: str = MEMORY_FILE_NAME) -> None:
        self.directory = Path(directory)
        self.filename = filename

    def target_path(self, directory: Optional[Union[str, Path]] = None) -> Path:
        path = Path(directory) if directory is not None else self.directory
        name = Path(self.filename)
        if name.suffix.lower() != ".png":
            name = name.with_suffix(".png")
        return path / name

    def export(self, raster: Optional[PatternRaster], directory: Optional[Union[str, Path]] = None) -> Optional[Path]:
        """Write ``raster`` and return the file path; ``None`` when there is no raster."""
        if raster is None:
            logger.debug("export() skipped: no pattern generated yet")
            return None
        path = self.target_path(directory)
        path.parent.mkdir(parents=True, exist_ok=True)
        mpimg.imsave(path, raster.pixels, format="png")
        logger.info("Exported memory to %s", path)
        return path


__all__ = ["MemoryArtifactExporter", "to_png_bytes", "MEMORY_FILE_NAME"]
