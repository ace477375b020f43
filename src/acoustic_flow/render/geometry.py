"""
View-space geometry of the wavefield scene.

Everything here is a pure function of the surface size, the current
parameters and metrics, and the animation tick. Coordinates are pixels with
the origin at the top-left corner and y pointing down.

Functions:
    pixels_per_meter: View scale for a surface height
    compute_viewport: Source point and obstacle rectangle for one frame
    diffraction_factor: Continuous shadow suppression from the size ratio
    wavefront_radii: Radii of the outward-traveling incident rings
    reflected_wavefronts: Radii and opacities of the reflected arcs
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from acoustic_flow.render.config import RendererConfig

@dataclass(frozen=True)
class ViewportGeometry:
    """Pixel geometry of one frame.

    Attributes:
        width, height: Surface size in pixels
        scale: Pixels per meter
        source: Source point (x, y)
        obstacle_x: Horizontal centerline of the obstacle
        obstacle_height: Obstacle height in pixels
        obstacle_thickness: Obstacle thickness in pixels
    """

    width: float
    height: float
    scale: float
    source: tuple[float, float]
    obstacle_x: float
    obstacle_height: float
    obstacle_thickness: float

    @property
    def center_y(self) -> float:
        return self.height / 2

    @property
    def diagonal(self) -> float:
        return math.hypot(self.width, self.height)

    @property
    def obstacle_top(self) -> float:
        return self.center_y - self.obstacle_height / 2

    @property
    def obstacle_bottom(self) -> float:
        return self.center_y + self.obstacle_height / 2

    @property
    def near_face_x(self) -> float:
        """Source-facing edge of the obstacle."""
        return self.obstacle_x - self.obstacle_thickness / 2

    @property
    def far_face_x(self) -> float:
        """Edge of the obstacle facing away from the source."""
        return self.obstacle_x + self.obstacle_thickness / 2

    @property
    def obstacle_rect(self) -> tuple[float, float, float, float]:
        """Obstacle as (left, top, width, height)."""
        return (
            self.near_face_x,
            self.obstacle_top,
            self.obstacle_thickness,
            self.obstacle_height,
        )

    @property
    def source_to_obstacle(self) -> float:
        """Horizontal distance from the source to the obstacle's near face."""
        return self.near_face_x - self.source[0]


def pixels_per_meter(height: float, config: RendererConfig) -> float:
    """View scale so that ``config.meters_visible`` fits vertically.

    Capped at ``config.max_pixels_per_meter`` so tall surfaces do not blow
    the scene up.
    """
    return min(config.max_pixels_per_meter, height / config.meters_visible)


def compute_viewport(
    width: float, height: float, obstacle_size_m: float, config: RendererConfig
) -> ViewportGeometry:
    """Derive the frame geometry from surface size and obstacle size.

    Args:
        width: Surface width in pixels
        height: Surface height in pixels
        obstacle_size_m: Obstacle height in meters
        config: Renderer constants

    Returns:
        ViewportGeometry for this frame
    """
    scale = pixels_per_meter(height, config)
    return ViewportGeometry(
        width=float(width),
        height=float(height),
        scale=scale,
        source=(width * config.source_x_fraction, height / 2),
        obstacle_x=width / 2,
        obstacle_height=obstacle_size_m * scale,
        obstacle_thickness=config.obstacle_thickness_px,
    )


def grid_lines(width: float, height: float, spacing: float) -> NDArray[np.float64]:
    """Segments of a reference grid with the given spacing.

    Returns:
        Array of shape (N, 2, 2): N segments of two (x, y) points
    """
    if spacing <= 0:
        return np.empty((0, 2, 2))

    xs = np.arange(0.0, width, spacing)
    ys = np.arange(0.0, height, spacing)
    vertical = [((x, 0.0), (x, height)) for x in xs]
    horizontal = [((0.0, y), (width, y)) for y in ys]
    return np.array(vertical + horizontal, dtype=np.float64).reshape(-1, 2, 2)


def diffraction_factor(size_ratio: float, config: RendererConfig | None = None) -> float:
    """How much the wave passes the obstacle, in [0, 1].

    ``clip(1.5 - size_ratio, 0, 1)``: 0 at a ratio of 1.5 and above (full
    shadow), 1 at 0.5 and below (no shadow), linear in between.
    """
    full = (config or RendererConfig()).diffraction_full_ratio
    return float(np.clip(full - size_ratio, 0.0, 1.0))


def reflection_opacity(size_ratio: float, config: RendererConfig | None = None) -> float:
    """Opacity scale of reflected wavefronts, ``clip(size_ratio - 0.6, 0, 1)``."""
    offset = (config or RendererConfig()).reflection_offset
    return float(np.clip(size_ratio - offset, 0.0, 1.0))


def wavelength_pixels(wavelength_m: float, scale: float) -> float | None:
    """Wavelength in pixels, or None if it cannot be drawn this frame."""
    wavelength_px = wavelength_m * scale
    if not math.isfinite(wavelength_px) or wavelength_px <= 0:
        return None
    return wavelength_px


def phase_offset(tick: int, wavelength_px: float, wave_speed_px: float) -> float:
    """Radius of the innermost ring at a given tick."""
    return (tick * wave_speed_px) % wavelength_px


def wavefront_radii(
    tick: int,
    wavelength_px: float,
    max_radius: float,
    wave_speed_px: float,
    max_count: int = 512,
) -> NDArray[np.float64]:
    """Radii of incident rings: ``phase, phase + λ, phase + 2λ, ...`` below max_radius.

    At most ``max_count`` rings are returned, innermost first, so a
    wavelength far below one pixel still draws a bounded number of rings.
    """
    start = phase_offset(tick, wavelength_px, wave_speed_px)
    rings = max(max_radius - start, 0.0) / wavelength_px
    count = max_count if not rings < max_count else math.ceil(rings)
    radii = start + wavelength_px * np.arange(count, dtype=np.float64)
    return radii[radii < max_radius]


def incident_intensity(
    radii: NDArray[np.float64], max_radius: float, fade: float
) -> NDArray[np.float64]:
    """Stroke opacity of incident rings, fading linearly to 0 at ``fade * max_radius``."""
    return np.clip(1.0 - radii / (max_radius * fade), 0.0, 1.0)


def reflected_wavefronts(
    radii: NDArray[np.float64],
    distance: float,
    width: float,
    size_ratio: float,
    config: RendererConfig,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Reflected arcs for every incident ring that has passed the obstacle.

    Args:
        radii: Incident ring radii
        distance: Distance from the source to the obstacle face
        width: Surface width in pixels
        size_ratio: Obstacle size over wavelength
        config: Renderer constants

    Returns:
        (reflected_radii, intensities). Empty when ``size_ratio`` does not
        exceed the reflection threshold.
    """
    if not size_ratio > config.reflection_threshold:
        return np.empty(0), np.empty(0)

    reflected = radii[radii > distance] - distance
    reflected = reflected[reflected > 0]
    falloff = np.clip(1.0 - reflected / (width * config.reflected_fade), 0.0, None)
    intensity = falloff * reflection_opacity(size_ratio, config) * config.reflected_alpha
    return reflected, intensity


def shadow_polygon(geometry: ViewportGeometry, spread: float) -> NDArray[np.float64]:
    """Quadrilateral spreading from the obstacle's far face to the right boundary.

    Returns:
        Array of shape (4, 2) with vertices in drawing order
    """
    start = geometry.far_face_x
    run = max(geometry.width - start, 0.0)
    return np.array(
        [
            (start, geometry.obstacle_top),
            (geometry.width, geometry.obstacle_top - run * spread),
            (geometry.width, geometry.obstacle_bottom + run * spread),
            (start, geometry.obstacle_bottom),
        ],
        dtype=np.float64,
    )
