"""
AcousticFlow - reflection vs. diffraction of sound at an obstacle.

Main exports:
- SimulationParameters: Frequency, obstacle size and temperature
- compute_metrics: Speed of sound, wavelength, size ratio and behavior
- Behavior: Reflecting / Diffracting / Transitional
- ParameterState: Parameters plus metrics, recomputed on every change
- WavefieldRenderer: Animated wavefield render loop
- MatplotlibSurface: matplotlib-backed drawing surface
"""

from acoustic_flow.analysis import explanation_prompt, scene_summary
from acoustic_flow.core.metrics import (
    AcousticMetrics,
    Behavior,
    ParameterState,
    SceneSnapshot,
    SimulationParameters,
    classify,
    compute_metrics,
    speed_of_sound,
    validate_parameters,
)
from acoustic_flow.render import (
    ManualScheduler,
    MatplotlibSurface,
    MatplotlibTimerScheduler,
    RendererConfig,
    WavefieldRenderer,
    render_frame,
)

# Submodules for more specific imports
from . import analysis, core, render

__version__ = "0.1.0"

__all__ = [
    # Model
    "SimulationParameters",
    "AcousticMetrics",
    "Behavior",
    "SceneSnapshot",
    "ParameterState",
    "compute_metrics",
    "classify",
    "speed_of_sound",
    "validate_parameters",
    # Rendering
    "WavefieldRenderer",
    "RendererConfig",
    "render_frame",
    "MatplotlibSurface",
    "ManualScheduler",
    "MatplotlibTimerScheduler",
    # Analysis
    "scene_summary",
    "explanation_prompt",
    # Submodules
    "core",
    "render",
    "analysis",
]
