"""
Drawing surfaces for the wavefield renderer.

The renderer only talks to the small :class:`DrawingSurface` interface:
pixel coordinates, origin at the top-left, y pointing down. Opacity is
passed explicitly on every call.

Classes:
    DrawingSurface: Abstract 2D surface
    MatplotlibSurface: Surface backed by a matplotlib Figure

Example:
    >>> surface = MatplotlibSurface(size=(640, 360))
    >>> surface.logical_size()
    (640, 360)
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np
from matplotlib.collections import LineCollection
from matplotlib.figure import Figure
from matplotlib.patches import Arc, Circle, Polygon, Rectangle
from matplotlib.text import Text
from numpy.typing import ArrayLike

Point = tuple[float, float]


class DrawingSurface(ABC):
    """A 2D raster target of externally determined size.

    ``logical_size`` is what the host window currently offers; the backing
    buffer is what the surface was last sized to. The renderer calls
    :meth:`resize_buffer` whenever the two disagree, before drawing.
    """

    @abstractmethod
    def logical_size(self) -> tuple[int, int]:
        """Current (width, height) in pixels; (0, 0) when not attached."""

    @property
    @abstractmethod
    def buffer_size(self) -> tuple[int, int] | None:
        """(width, height) of the backing buffer, None before the first resize."""

    @abstractmethod
    def resize_buffer(self, width: int, height: int) -> None:
        """Resize the backing buffer to the given pixel size."""

    @abstractmethod
    def clear(self, color: str) -> None:
        """Discard the previous frame and fill the buffer with a color."""

    @abstractmethod
    def draw_lines(
        self, segments: ArrayLike, color: str, width: float = 1.0, alpha: float = 1.0
    ) -> None:
        """Stroke a batch of line segments, shape (N, 2, 2)."""

    @abstractmethod
    def stroke_circle(
        self, center: Point, radius: float, color: str, width: float, alpha: float
    ) -> None:
        """Stroke a full circle."""

    @abstractmethod
    def stroke_arc(
        self,
        center: Point,
        radius: float,
        theta1: float,
        theta2: float,
        color: str,
        width: float,
        alpha: float,
    ) -> None:
        """Stroke a circular arc from theta1 to theta2 (degrees)."""

    @abstractmethod
    def fill_polygon(self, points: ArrayLike, color: str, alpha: float = 1.0) -> None:
        """Fill a closed polygon given as (N, 2) vertices."""

    @abstractmethod
    def fill_rect(
        self, x: float, y: float, width: float, height: float, color: str, alpha: float = 1.0
    ) -> None:
        """Fill an axis-aligned rectangle with top-left corner (x, y)."""

    @abstractmethod
    def fill_circle(self, center: Point, radius: float, color: str, alpha: float = 1.0) -> None:
        """Fill a disk."""

    @abstractmethod
    def draw_text(self, position: Point, text: str, color: str, size: float) -> None:
        """Draw text with its baseline starting at position."""

    @abstractmethod
    def present(self) -> None:
        """Hand the finished frame to the host."""


class MatplotlibSurface(DrawingSurface):
    """DrawingSurface that draws patches onto a matplotlib Figure.

    The figure gets a single axes covering its full area with the data
    limits set to the buffer size in pixels, so one data unit is one pixel.
    Sizes given in pixels (line widths, font sizes) are converted to points
    using the figure dpi.

    Args:
        figure: Figure to draw on. A new off-screen figure is created when
            omitted.
        size: Pixel size of the off-screen figure (ignored if figure is given)
        dpi: Resolution of the off-screen figure
    """

    def __init__(
        self,
        figure: Figure | None = None,
        size: tuple[int, int] = (800, 450),
        dpi: float = 100.0,
    ):
        if figure is None:
            figure = Figure(figsize=(size[0] / dpi, size[1] / dpi), dpi=dpi)
        self.figure = figure
        self.axes = figure.add_axes((0.0, 0.0, 1.0, 1.0))
        self.axes.set_axis_off()
        self._artists: list = []
        self._buffer_size: tuple[int, int] | None = None
        self._zorder = 0

    def logical_size(self) -> tuple[int, int]:
        canvas = self.figure.canvas
        if canvas is None:
            return (0, 0)
        width, height = canvas.get_width_height()
        return (int(width), int(height))

    @property
    def buffer_size(self) -> tuple[int, int] | None:
        return self._buffer_size

    def resize_buffer(self, width: int, height: int) -> None:
        self.axes.set_xlim(0, width)
        self.axes.set_ylim(height, 0)
        self._buffer_size = (width, height)

    @property
    def num_artists(self) -> int:
        """Number of artists in the current frame."""
        return len(self._artists)

    def _px_to_pt(self, pixels: float) -> float:
        return pixels * 72.0 / self.figure.dpi

    def _add(self, artist):
        # Painter's order: later calls draw on top of earlier ones
        self._zorder += 1
        artist.set_zorder(self._zorder)
        if isinstance(artist, LineCollection):
            self.axes.add_collection(artist, autolim=False)
        else:
            self.axes.add_artist(artist)
        self._artists.append(artist)
        return artist

    def clear(self, color: str) -> None:
        for artist in self._artists:
            artist.remove()
        self._artists.clear()
        self._zorder = 0
        self.figure.set_facecolor(color)
        width, height = self._buffer_size or self.logical_size()
        self.fill_rect(0, 0, width, height, color)

    def draw_lines(
        self, segments: ArrayLike, color: str, width: float = 1.0, alpha: float = 1.0
    ) -> None:
        segments = np.asarray(segments, dtype=np.float64)
        if segments.size == 0:
            return
        self._add(
            LineCollection(
                segments, colors=color, linewidths=self._px_to_pt(width), alpha=alpha
            )
        )

    def stroke_circle(
        self, center: Point, radius: float, color: str, width: float, alpha: float
    ) -> None:
        self._add(
            Circle(
                center,
                radius,
                fill=False,
                edgecolor=color,
                linewidth=self._px_to_pt(width),
                alpha=alpha,
            )
        )

    def stroke_arc(
        self,
        center: Point,
        radius: float,
        theta1: float,
        theta2: float,
        color: str,
        width: float,
        alpha: float,
    ) -> None:
        self._add(
            Arc(
                center,
                2 * radius,
                2 * radius,
                theta1=theta1,
                theta2=theta2,
                edgecolor=color,
                linewidth=self._px_to_pt(width),
                alpha=alpha,
            )
        )

    def fill_polygon(self, points: ArrayLike, color: str, alpha: float = 1.0) -> None:
        self._add(
            Polygon(
                np.asarray(points, dtype=np.float64),
                closed=True,
                facecolor=color,
                edgecolor="none",
                alpha=alpha,
            )
        )

    def fill_rect(
        self, x: float, y: float, width: float, height: float, color: str, alpha: float = 1.0
    ) -> None:
        self._add(
            Rectangle((x, y), width, height, facecolor=color, edgecolor="none", alpha=alpha)
        )

    def fill_circle(self, center: Point, radius: float, color: str, alpha: float = 1.0) -> None:
        self._add(Circle(center, radius, facecolor=color, edgecolor="none", alpha=alpha))

    def draw_text(self, position: Point, text: str, color: str, size: float) -> None:
        x, y = position
        self._add(
            Text(
                x,
                y,
                text,
                color=color,
                fontsize=self._px_to_pt(size),
                ha="left",
                va="baseline",
                clip_on=True,
            )
        )

    def present(self) -> None:
        self.figure.canvas.draw_idle()

