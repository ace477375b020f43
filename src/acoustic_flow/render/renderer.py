"""
Real-time wavefield renderer.

Draws a stylized 2D picture of a point source and a rectangular obstacle:
outward-traveling incident rings, a shadow zone whose opacity encodes how
strongly the obstacle blocks sound, and reflected arcs that fade in as the
obstacle grows relative to the wavelength. This is a visual approximation,
not a wave-equation solver.

Classes:
    RenderState: Animation clock and resize bookkeeping of one surface
    WavefieldRenderer: Render loop bound to a FrameScheduler

Functions:
    render_frame: Draw a single frame

Example:
    >>> from acoustic_flow import ParameterState, WavefieldRenderer
    >>> from acoustic_flow.render import ManualScheduler, MatplotlibSurface
    >>> state = ParameterState()
    >>> scheduler = ManualScheduler()
    >>> renderer = WavefieldRenderer(scheduler=scheduler)
    >>> renderer.start(MatplotlibSurface(size=(800, 450)), state)
    >>> scheduler.run(60)
    60
    >>> snapshot = state.update(frequency_hz=1000.0)  # visible on the next frame
    >>> renderer.stop()
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from acoustic_flow.core.metrics import SceneSnapshot
from acoustic_flow.render.config import RendererConfig
from acoustic_flow.render.geometry import (
    ViewportGeometry,
    compute_viewport,
    diffraction_factor,
    grid_lines,
    incident_intensity,
    reflected_wavefronts,
    shadow_polygon,
    wavefront_radii,
    wavelength_pixels,
)
from acoustic_flow.render.scheduler import FrameScheduler, ManualScheduler
from acoustic_flow.render.surface import DrawingSurface

ParamsProvider = Callable[[], SceneSnapshot]


@dataclass
class RenderState:
    """Mutable per-surface state of the render loop.

    Attributes:
        tick: Animation clock, advanced once per drawn frame
        last_size: Surface size the buffer was last sized to
        frames_drawn: Number of frames actually drawn
    """

    tick: int = 0
    last_size: tuple[int, int] | None = None
    frames_drawn: int = 0


def render_frame(
    state: RenderState,
    surface: DrawingSurface,
    snapshot: SceneSnapshot,
    config: RendererConfig | None = None,
) -> bool:
    """Draw one frame of the wavefield.

    Args:
        state: Render state, updated in place
        surface: Target surface
        snapshot: Current parameters and metrics
        config: Renderer constants

    Returns:
        True if a frame was drawn, False if the surface had no area
    """
    config = config or RendererConfig()

    width, height = surface.logical_size()
    if width <= 0 or height <= 0:
        return False

    # Resize before drawing, otherwise the frame comes out stretched
    if state.last_size != (width, height) or surface.buffer_size != (width, height):
        surface.resize_buffer(width, height)
        state.last_size = (width, height)

    params, metrics = snapshot.params, snapshot.metrics
    geometry = compute_viewport(width, height, params.obstacle_size_m, config)

    surface.clear(config.background_color)
    surface.draw_lines(grid_lines(width, height, geometry.scale), config.grid_color)

    wavelength_px = wavelength_pixels(metrics.wavelength_m, geometry.scale)
    ratio = metrics.size_ratio

    if wavelength_px is not None:
        radii = wavefront_radii(
            state.tick,
            wavelength_px,
            geometry.diagonal,
            config.wave_speed_px,
            config.max_wavefronts,
        )
        _draw_incident(surface, geometry, radii, config)
    else:
        radii = None

    if math.isfinite(ratio):
        alpha = 1.0 - diffraction_factor(ratio, config)
        if alpha > 0:
            surface.fill_polygon(
                shadow_polygon(geometry, config.shadow_spread), config.background_color, alpha
            )

    if radii is not None:
        _draw_reflected(surface, geometry, radii, ratio, config)

    _draw_glyphs(surface, geometry, snapshot, config)

    surface.present()
    state.tick += 1
    state.frames_drawn += 1
    return True


def _draw_incident(surface, geometry: ViewportGeometry, radii, config: RendererConfig):
    intensities = incident_intensity(radii, geometry.diagonal, config.incident_fade)
    for radius, alpha in zip(radii, intensities):
        if radius <= 0 or alpha <= 0:
            continue
        surface.stroke_circle(
            geometry.source, float(radius), config.incident_color, config.line_width, float(alpha)
        )


def _draw_reflected(surface, geometry: ViewportGeometry, radii, ratio, config: RendererConfig):
    reflected, intensities = reflected_wavefronts(
        radii, geometry.source_to_obstacle, geometry.width, ratio, config
    )
    center = (geometry.near_face_x, geometry.center_y)
    for radius, alpha in zip(reflected, intensities):
        if alpha <= 0:
            continue
        # Source-facing half circle
        surface.stroke_arc(
            center,
            float(radius),
            90.0,
            270.0,
            config.reflected_color,
            config.line_width,
            float(alpha),
        )


def _draw_glyphs(surface, geometry: ViewportGeometry, snapshot: SceneSnapshot, config):
    left, top, thickness, obstacle_height = geometry.obstacle_rect
    surface.fill_rect(
        left, top, thickness, obstacle_height, config.obstacle_color(snapshot.metrics.behavior)
    )
    surface.fill_circle(geometry.source, config.source_radius_px, config.source_color)

    if config.show_labels:
        sx, sy = geometry.source
        surface.draw_text((sx - 20, sy - 15), "Source", config.label_color, config.font_size)
        surface.draw_text(
            (geometry.obstacle_x - 20, top - 10), "Obstacle", config.label_color, config.font_size
        )

    if config.show_legend:
        entries = [(config.incident_color, "Direct sound"), (config.reflected_color, "Reflection")]
        x = geometry.width - 120
        y = geometry.height - 16 - 18 * (len(entries) - 1)
        for color, label in entries:
            surface.fill_circle((x, y - 4), 5, color)
            surface.draw_text((x + 12, y), label, config.label_color, config.font_size)
            y += 18


class WavefieldRenderer:
    """Continuous render loop for one surface.

    The parameter provider is called on every tick, so changes made between
    frames show up on the very next frame without restarting. The animation
    clock belongs to the surface: restarting on the same surface keeps the
    phase, starting on a new surface resets it.

    Args:
        config: Renderer constants
        scheduler: Host scheduler; a ManualScheduler is used when omitted
    """

    def __init__(
        self,
        config: RendererConfig | None = None,
        scheduler: FrameScheduler | None = None,
    ):
        self.config = config or RendererConfig()
        self.scheduler = scheduler or ManualScheduler()
        self.state = RenderState()
        self._surface: DrawingSurface | None = None
        self._provider: ParamsProvider | None = None
        self._handle = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def surface(self) -> DrawingSurface | None:
        return self._surface

    def start(self, surface: DrawingSurface, params_provider: ParamsProvider) -> None:
        """Begin rendering frames onto surface.

        If the provider or a frame raises, the error propagates to the
        scheduler and the loop stops; :attr:`running` turns False and the
        renderer can be started again.

        Raises:
            RuntimeError: If the renderer is already running
        """
        if self._running:
            raise RuntimeError("Renderer is already running; call stop() first")

        if surface is not self._surface:
            self.state = RenderState()
        self._surface = surface
        self._provider = params_provider
        self._running = True
        self._handle = self.scheduler.request_frame(self._on_frame)

    def stop(self) -> None:
        """Stop the loop. No frame is drawn after this returns."""
        self._running = False
        if self._handle is not None:
            self.scheduler.cancel_frame(self._handle)
            self._handle = None

    def _on_frame(self) -> None:
        self._handle = None
        if not self._running:
            return

        try:
            snapshot = self._provider()
            # The provider may have stopped the loop
            if not self._running:
                return
            render_frame(self.state, self._surface, snapshot, self.config)
        except Exception:
            # No frame is pending any more, so the loop is over
            self._running = False
            raise

        # stop() may have been called while drawing
        if self._running:
            self._handle = self.scheduler.request_frame(self._on_frame)
