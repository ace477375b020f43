"""Pytest configuration for acoustic-flow test suite.

Forces the non-interactive Agg backend before pyplot can be imported and
provides a recording DrawingSurface for renderer tests.
"""

import matplotlib
import pytest

matplotlib.use("Agg")

from acoustic_flow.render.surface import DrawingSurface  # noqa: E402


class RecordingSurface(DrawingSurface):
    """DrawingSurface that records every call instead of drawing.

    Each call is stored as ``(operation, kwargs)`` in ``calls``. The
    logical size can be changed between frames to simulate a resize.
    """

    def __init__(self, width=800, height=450):
        self.size = (width, height)
        self.calls = []
        self._buffer_size = None

    def logical_size(self):
        return self.size

    @property
    def buffer_size(self):
        return self._buffer_size

    def resize_buffer(self, width, height):
        self._buffer_size = (width, height)
        self.calls.append(("resize_buffer", {"width": width, "height": height}))

    def clear(self, color):
        self.calls.append(("clear", {"color": color}))

    def draw_lines(self, segments, color, width=1.0, alpha=1.0):
        self.calls.append(("draw_lines", {"segments": segments, "color": color}))

    def stroke_circle(self, center, radius, color, width, alpha):
        self.calls.append(
            ("stroke_circle", {"center": center, "radius": radius, "color": color, "alpha": alpha})
        )

    def stroke_arc(self, center, radius, theta1, theta2, color, width, alpha):
        self.calls.append(
            (
                "stroke_arc",
                {
                    "center": center,
                    "radius": radius,
                    "theta1": theta1,
                    "theta2": theta2,
                    "color": color,
                    "alpha": alpha,
                },
            )
        )

    def fill_polygon(self, points, color, alpha=1.0):
        self.calls.append(("fill_polygon", {"points": points, "color": color, "alpha": alpha}))

    def fill_rect(self, x, y, width, height, color, alpha=1.0):
        self.calls.append(
            ("fill_rect", {"x": x, "y": y, "width": width, "height": height, "color": color})
        )

    def fill_circle(self, center, radius, color, alpha=1.0):
        self.calls.append(("fill_circle", {"center": center, "radius": radius, "color": color}))

    def draw_text(self, position, text, color, size):
        self.calls.append(("draw_text", {"position": position, "text": text}))

    def present(self):
        self.calls.append(("present", {}))

    # Helpers for assertions

    def ops(self):
        return [op for op, _ in self.calls]

    def of(self, op):
        return [kwargs for name, kwargs in self.calls if name == op]

    def reset(self):
        self.calls.clear()


@pytest.fixture
def surface():
    """Recording surface of 800 x 450 pixels."""
    return RecordingSurface(800, 450)
