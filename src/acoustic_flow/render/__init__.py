"""Wavefield rendering: geometry, surfaces, schedulers and the render loop."""

from acoustic_flow.render.config import OBSTACLE_COLORS, RendererConfig
from acoustic_flow.render.geometry import (
    ViewportGeometry,
    compute_viewport,
    diffraction_factor,
    pixels_per_meter,
    reflection_opacity,
    wavefront_radii,
)
from acoustic_flow.render.renderer import RenderState, WavefieldRenderer, render_frame
from acoustic_flow.render.scheduler import (
    FrameScheduler,
    ManualScheduler,
    MatplotlibTimerScheduler,
)
from acoustic_flow.render.surface import DrawingSurface, MatplotlibSurface

__all__ = [
    "RendererConfig",
    "OBSTACLE_COLORS",
    "ViewportGeometry",
    "compute_viewport",
    "pixels_per_meter",
    "diffraction_factor",
    "reflection_opacity",
    "wavefront_radii",
    "RenderState",
    "WavefieldRenderer",
    "render_frame",
    "FrameScheduler",
    "ManualScheduler",
    "MatplotlibTimerScheduler",
    "DrawingSurface",
    "MatplotlibSurface",
]
