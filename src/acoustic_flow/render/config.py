"""Visual constants for the wavefield renderer."""

from __future__ import annotations

from dataclasses import dataclass

from acoustic_flow.core.metrics import OBSTACLE_SIZE_RANGE_M, Behavior


@dataclass(frozen=True)
class RendererConfig:
    """Tunable constants of the wavefield rendering.

    The thresholds (reflection_threshold, reflection_offset,
    diffraction_full_ratio) are tuned for visual plausibility, not derived
    from physics.

    Args:
        max_pixels_per_meter: Upper bound on the view scale
        meters_visible: Vertical extent that must fit on the surface
        wave_speed_px: Ring advance per tick in pixels
        max_wavefronts: Upper bound on incident rings per frame; a wavelength
            below one pixel still draws, limited to this many rings
        obstacle_thickness_px: Drawn obstacle thickness
        source_radius_px: Radius of the source dot
        source_x_fraction: Horizontal source position as fraction of width
        incident_fade: Rings are transparent beyond this fraction of the diagonal
        reflected_fade: Reflected arcs are transparent beyond this fraction of the width
        reflected_alpha: Peak opacity of reflected arcs
        shadow_spread: Vertical spread of the shadow per pixel of run
        reflection_threshold: Size ratio above which reflections are drawn
        reflection_offset: Size ratio subtracted before scaling reflection opacity
        diffraction_full_ratio: Size ratio at which the shadow vanishes entirely
        line_width: Stroke width of incident and reflected waves
        frame_interval_ms: Target interval between frames for timer schedulers
    """

    max_pixels_per_meter: float = 100.0
    meters_visible: float = OBSTACLE_SIZE_RANGE_M[1] + 1.0
    wave_speed_px: float = 2.0
    max_wavefronts: int = 512
    obstacle_thickness_px: float = 20.0
    source_radius_px: float = 6.0
    source_x_fraction: float = 0.15
    incident_fade: float = 0.8
    reflected_fade: float = 0.5
    reflected_alpha: float = 0.5
    shadow_spread: float = 0.2
    reflection_threshold: float = 0.8
    reflection_offset: float = 0.6
    diffraction_full_ratio: float = 1.5
    line_width: float = 2.0
    frame_interval_ms: int = 16

    background_color: str = "#09090b"
    grid_color: str = "#18181b"
    incident_color: str = "#38bdf8"
    reflected_color: str = "#f87171"
    source_color: str = "#38bdf8"
    label_color: str = "#ffffff"
    font_size: float = 12.0
    show_labels: bool = True
    show_legend: bool = True

    def obstacle_color(self, behavior: Behavior) -> str:
        """Tint of the obstacle for a behavior class."""
        return OBSTACLE_COLORS[behavior]


OBSTACLE_COLORS = {
    Behavior.REFLECTING: "#f87171",
    Behavior.TRANSITIONAL: "#fbbf24",
    Behavior.DIFFRACTING: "#4ade80",
}
