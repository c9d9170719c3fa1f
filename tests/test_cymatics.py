from pathlib import Path
import sys
import math

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from vocalpainter.visuals.cymatics import (
    ANGULAR_SAMPLES,
    RING_COUNT,
    CymaticPatternGenerator,
    build_layers,
    ring_alpha,
    ring_amplitude,
    ring_radius,
    ring_vertices,
)
from vocalpainter.visuals.renderer import Renderer


class RecordingRenderer(Renderer):
    def __init__(self):
        self.calls = []

    def begin_path(self):
        self.calls.append(("begin_path",))

    def move_to(self, x, y):
        self.calls.append(("move_to", x, y))

    def line_to(self, x, y):
        self.calls.append(("line_to", x, y))

    def arc(self, cx, cy, radius):
        self.calls.append(("arc", cx, cy, radius))

    def close_path(self):
        self.calls.append(("close_path",))

    def fill(self, color, alpha=1.0):
        self.calls.append(("fill", color, alpha))

    def draw_text(self, x, y, text, size=8.0, color="#000000"):
        self.calls.append(("draw_text", x, y, text))

    def to_array(self):
        return np.zeros((400, 400, 4), dtype=np.uint8)

    def to_png(self):
        return b""


def test_first_vertex_of_first_ring():
    assert ring_radius(1) == 18.75
    assert ring_amplitude(1) == 20.0
    x, y = ring_vertices(1)[0]
    assert x == 228.75
    assert y == 200.0


def test_ring_geometry_matches_formula():
    ring = 3
    vertices = ring_vertices(ring)
    assert vertices.shape == (2 * ANGULAR_SAMPLES + 1, 2)
    for i, (x, y) in enumerate(vertices):
        angle = (i / ANGULAR_SAMPLES) * math.pi
        amplitude = 20 / ring
        variation = math.sin(angle * 3) * amplitude + math.cos(angle * 5) * amplitude * 0.5
        radius = ring / RING_COUNT * 150
        assert x == pytest.approx(200 + math.cos(angle) * (radius + variation), abs=1e-9)
        assert y == pytest.approx(200 + math.sin(angle) * (radius + variation), abs=1e-9)


def test_last_sample_closes_the_sweep():
    vertices = ring_vertices(5)
    assert np.allclose(vertices[0], vertices[-1])


def test_alpha_grows_with_ring_index():
    alphas = [layer.alpha for layer in build_layers()]
    assert alphas == pytest.approx([0.1 + 0.1 * r for r in range(1, RING_COUNT + 1)])
    assert ring_alpha(8) == pytest.approx(0.9)


def test_draw_sequence_paints_rings_then_resonance_point():
    renderer = RecordingRenderer()
    generator = CymaticPatternGenerator(renderer_factory=lambda: renderer, clock=lambda: 42.0)
    raster = generator.generate("#dc2626")

    fills = [call for call in renderer.calls if call[0] == "fill"]
    assert len(fills) == RING_COUNT + 1
    assert [call[2] for call in fills[:-1]] == pytest.approx([0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9])
    assert fills[-1] == ("fill", "#dc2626", 1.0)
    assert all(call[1] == "#dc2626" for call in fills)

    assert renderer.calls[1] == ("move_to", 228.75, 200.0)
    assert ("arc", 200.0, 200.0, 5.0) in renderer.calls
    line_tos = [call for call in renderer.calls if call[0] == "line_to"]
    assert len(line_tos) == RING_COUNT * 2 * ANGULAR_SAMPLES

    assert raster.source_color == "#dc2626"
    assert raster.generated_at == 42.0
    assert raster.width == 400 and raster.height == 400


def test_generation_is_deterministic():
    generator = CymaticPatternGenerator()
    first = generator.generate("#1e3a8a")
    second = generator.generate("#1e3a8a")

    for a, b in zip(first.layers, second.layers):
        assert np.array_equal(a.vertices, b.vertices)
        assert a.alpha == b.alpha
    assert np.array_equal(first.pixels, second.pixels)


def test_rasterized_pattern_colors():
    raster = CymaticPatternGenerator().generate("#dc2626")

    assert raster.pixels.shape == (400, 400, 4)
    assert raster.pixels.dtype == np.uint8
    assert tuple(raster.pixels[200, 200]) == (220, 38, 38, 255)
    # Corners stay transparent.
    assert raster.pixels[0, 0, 3] == 0
    assert raster.pixels[399, 399, 3] == 0
    # Inside the outer ring but outside the resonance point is translucent.
    assert 0 < raster.pixels[200, 330, 3] < 255


def test_different_colors_share_geometry():
    generator = CymaticPatternGenerator()
    blue = generator.generate("#1e3a8a")
    gold = generator.generate("#eab308")

    assert not np.array_equal(blue.pixels, gold.pixels)
    assert np.array_equal(blue.pixels[..., 3], gold.pixels[..., 3])


def test_renderer_without_text_support_cannot_be_built():
    class ShapesOnly(Renderer):
        begin_path = RecordingRenderer.begin_path
        move_to = RecordingRenderer.move_to
        line_to = RecordingRenderer.line_to
        arc = RecordingRenderer.arc
        close_path = RecordingRenderer.close_path
        fill = RecordingRenderer.fill
        to_array = RecordingRenderer.to_array
        to_png = RecordingRenderer.to_png

    with pytest.raises(TypeError):
        ShapesOnly()
