"""Immediate-mode 2D drawing used by the pattern and code generators."""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import PathPatch
from matplotlib.path import Path as MplPath

_DPI = 100


class Renderer(ABC):
    """Canvas-style drawing surface with a top-left origin and y pointing down."""

    @abstractmethod
    def begin_path(self) -> None:
        ...

    @abstractmethod
    def move_to(self, x: float, y: float) -> None:
        ...

    @abstractmethod
    def line_to(self, x: float, y: float) -> None:
        ...

    @abstractmethod
    def arc(self, cx: float, cy: float, radius: float) -> None:
        """Add a full circle to the current path."""

    @abstractmethod
    def close_path(self) -> None:
        ...

    @abstractmethod
    def fill(self, color: str, alpha: float = 1.0) -> None:
        """Fill every subpath of the current path."""

    @abstractmethod
    def draw_text(self, x: float, y: float, text: str, size: float = 8.0, color: str = "#000000") -> None:
        """Draw ``text`` centered horizontally on ``x`` with its baseline at ``y``."""

    @abstractmethod
    def to_array(self) -> np.ndarray:
        """Return the canvas as an ``(height, width, 4)`` ``uint8`` RGBA array."""

    @abstractmethod
    def to_png(self) -> bytes:
        ...


class AggRenderer(Renderer):
    """:class:`Renderer` backed by matplotlib's Agg rasterizer.

    Filled paths are added as patches on a frameless axes whose data limits
    match the pixel grid, so coordinates are canvas pixels.
    """

    def __init__(self, width: int, height: int, background: Optional[str] = None) -> None:
        self.width = int(width)
        self.height = int(height)
        self._figure = Figure(figsize=(self.width / _DPI, self.height / _DPI), dpi=_DPI)
        self._canvas = FigureCanvasAgg(self._figure)
        if background is None:
            self._figure.patch.set_alpha(0.0)
        else:
            self._figure.patch.set_facecolor(background)
        self._axes = self._figure.add_axes([0.0, 0.0, 1.0, 1.0])
        self._axes.set_xlim(0, self.width)
        self._axes.set_ylim(self.height, 0)
        self._axes.set_axis_off()
        self._axes.patch.set_alpha(0.0)

        self._subpaths: List[MplPath] = []
        self._points: List[Tuple[float, float]] = []

    def begin_path(self) -> None:
        self._subpaths = []
        self._points = []

    def move_to(self, x: float, y: float) -> None:
        self._flush_open_points(closed=False)
        self._points = [(float(x), float(y))]

    def line_to(self, x: float, y: float) -> None:
        if not self._points:
            self._points = [(float(x), float(y))]
            return
        self._points.append((float(x), float(y)))

    def arc(self, cx: float, cy: float, radius: float) -> None:
        self._flush_open_points(closed=False)
        self._subpaths.append(MplPath.circle((float(cx), float(cy)), float(radius)))

    def close_path(self) -> None:
        self._flush_open_points(closed=True)

    def fill(self, color: str, alpha: float = 1.0) -> None:
        # Canvas fill closes any open subpath implicitly.
        self._flush_open_points(closed=True)
        for subpath in self._subpaths:
            patch = PathPatch(
                subpath,
                facecolor=color,
                edgecolor="none",
                alpha=min(max(float(alpha), 0.0), 1.0),
                antialiased=True,
            )
            self._axes.add_patch(patch)

    def draw_text(self, x: float, y: float, text: str, size: float = 8.0, color: str = "#000000") -> None:
        self._axes.text(
            x,
            y,
            text,
            fontsize=size * 72.0 / _DPI,
            color=color,
            ha="center",
            va="baseline",
        )

    def to_array(self) -> np.ndarray:
        self._canvas.draw()
        return np.asarray(self._canvas.buffer_rgba(), dtype=np.uint8).copy()

    def to_png(self) -> bytes:
        buffer = io.BytesIO()
        self._canvas.print_png(buffer)
        return buffer.getvalue()

    def _flush_open_points(self, closed: bool) -> None:
        if len(self._points) >= 2:
            vertices = list(self._points)
            codes = [MplPath.MOVETO] + [MplPath.LINETO] * (len(vertices) - 1)
            if closed:
                vertices.append(vertices[0])
                codes.append(MplPath.CLOSEPOLY)
            self._subpaths.append(MplPath(vertices, codes))
        self._points = []


__all__ = ["Renderer", "AggRenderer"]
