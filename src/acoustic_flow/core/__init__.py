"""Core acoustic model."""

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

__all__ = [
    "SimulationParameters",
    "AcousticMetrics",
    "Behavior",
    "SceneSnapshot",
    "ParameterState",
    "compute_metrics",
    "classify",
    "speed_of_sound",
    "validate_parameters",
]
