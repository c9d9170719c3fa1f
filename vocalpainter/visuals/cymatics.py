"""Cymatic pattern synthesis.

A pattern is a stack of concentric closed polygons whose radii are perturbed
by two harmonics.  Inner rings carry larger perturbations, outer rings are
painted later and more opaquely, and a solid resonance point marks the
center.  The result depends only on the fill color.

Geometry
--------
For ring ``r`` in ``1..RING_COUNT``::

    radius    = r / RING_COUNT * MAX_RADIUS
    amplitude = 20 / r
    theta_i   = i / ANGULAR_SAMPLES * pi          for i in 0..2 * ANGULAR_SAMPLES
    p         = sin(3 theta) * amplitude + cos(5 theta) * amplitude * 0.5
    vertex    = center + (cos theta, sin theta) * (radius + p)

and the polygon is filled at alpha ``0.1 + 0.1 * r``.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

import numpy as np

from .renderer import AggRenderer, Renderer

CANVAS_WIDTH = 400
CANVAS_HEIGHT = 400
CENTER_X = CANVAS_WIDTH / 2
CENTER_Y = CANVAS_HEIGHT / 2
RING_COUNT = 8
ANGULAR_SAMPLES = 12
MAX_RADIUS = 150.0
BASE_AMPLITUDE = 20.0
RESONANCE_RADIUS = 5.0


@dataclass(frozen=True)
class RingLayer:
    index: int
    vertices: np.ndarray
    alpha: float


@dataclass
class PatternRaster:
    """A rendered memory pattern.

    ``pixels`` is an ``(height, width, 4)`` RGBA ``uint8`` array.
    """

    pixels: np.ndarray
    source_color: str
    generated_at: float
    layers: Tuple[RingLayer, ...] = field(default_factory=tuple)
    width: int = CANVAS_WIDTH
    height: int = CANVAS_HEIGHT


def ring_radius(ring: int) -> float:
    return (ring / RING_COUNT) * MAX_RADIUS


def ring_amplitude(ring: int) -> float:
    return BASE_AMPLITUDE / ring


def ring_alpha(ring: int) -> float:
    return 0.1 + 0.1 * ring


def ring_angles() -> np.ndarray:
    """Sample angles sweeping ``[0, 2*pi]`` in steps of ``pi / ANGULAR_SAMPLES``."""
    indices = np.arange(2 * ANGULAR_SAMPLES + 1, dtype=np.float64)
    return (indices / ANGULAR_SAMPLES) * np.pi


def ring_vertices(ring: int) -> np.ndarray:
    """Return the ``(2 * ANGULAR_SAMPLES + 1, 2)`` vertex array of ``ring``."""
    radius = ring_radius(ring)
    amplitude = ring_amplitude(ring)
    angles = ring_angles()
    variation = np.sin(angles * 3) * amplitude + np.cos(angles * 5) * amplitude * 0.5
    x = CENTER_X + np.cos(angles) * (radius + variation)
    y = CENTER_Y + np.sin(angles) * (radius + variation)
    return np.column_stack((x, y))


def build_layers() -> List[RingLayer]:
    return [
        RingLayer(index=ring, vertices=ring_vertices(ring), alpha=ring_alpha(ring))
        for ring in range(1, RING_COUNT + 1)
    ]


def paint_pattern(renderer: Renderer, color: str, layers: List[RingLayer]) -> None:
    """Draw ``layers`` and the resonance point onto ``renderer``."""
    for layer in layers:
        renderer.begin_path()
        for i, (x, y) in enumerate(layer.vertices):
            if i == 0:
                renderer.move_to(x, y)
            else:
                renderer.line_to(x, y)
        renderer.close_path()
        renderer.fill(color, layer.alpha)

    renderer.begin_path()
    renderer.arc(CENTER_X, CENTER_Y, RESONANCE_RADIUS)
    renderer.fill(color, 1.0)


def _default_renderer() -> Renderer:
    return AggRenderer(CANVAS_WIDTH, CANVAS_HEIGHT)


class CymaticPatternGenerator:
    """Turn a color into a :class:`PatternRaster`.

    Every call starts from a fresh renderer; nothing carries over between
    calls.
    """

    def __init__(
        self,
        renderer_factory: Optional[Callable[[], Renderer]] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._renderer_factory = renderer_factory or _default_renderer
        self._clock = clock

    def generate(self, color: str) -> PatternRaster:
        layers = build_layers()
        renderer = self._renderer_factory()
        paint_pattern(renderer, color, layers)
        return PatternRaster(
            pixels=renderer.to_array(),
            source_color=color,
            generated_at=self._clock(),
            layers=tuple(layers),
        )


__all__ = [
    "CymaticPatternGenerator",
    "PatternRaster",
    "RingLayer",
    "build_layers",
    "paint_pattern",
    "ring_alpha",
    "ring_amplitude",
    "ring_angles",
    "ring_radius",
    "ring_vertices",
    "RING_COUNT",
    "ANGULAR_SAMPLES",
    "MAX_RADIUS",
    "CANVAS_WIDTH",
    "CANVAS_HEIGHT",
]
