"""
Acoustic metrics for a point source and a rectangular obstacle.

This module converts the user-facing simulation parameters (frequency,
obstacle size, air temperature) into the quantities the wavefield renderer
and downstream consumers need: speed of sound, wavelength, the
obstacle-size-to-wavelength ratio and a qualitative behavior class.

Classes:
    SimulationParameters: Input parameters (immutable)
    AcousticMetrics: Derived metrics (immutable)
    Behavior: Reflecting / Diffracting / Transitional regime
    ParameterState: Mutable holder that recomputes metrics on every change

Example:
    >>> from acoustic_flow import SimulationParameters, compute_metrics
    >>> metrics = compute_metrics(SimulationParameters(frequency_hz=343.0))
    >>> round(metrics.wavelength_m, 4)
    1.0012
    >>> metrics.behavior
    <Behavior.TRANSITIONAL: 'transitional'>
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass, replace
from enum import Enum

import numpy as np

# Linear approximation of the speed of sound in dry air
SPEED_AT_ZERO_C = 331.4  # m/s
SPEED_PER_DEGREE_C = 0.6  # m/s per °C

# Classification thresholds on obstacle size / wavelength
REFLECTING_RATIO = 1.0
DIFFRACTING_RATIO = 0.5

# Recommended input domains (min, max)
FREQUENCY_RANGE_HZ = (50.0, 2000.0)
OBSTACLE_SIZE_RANGE_M = (0.1, 5.0)
TEMPERATURE_RANGE_C = (-20.0, 40.0)


class Behavior(Enum):
    """Qualitative interaction regime between the wave and the obstacle.

    REFLECTING: Obstacle larger than the wavelength, it blocks the wave and
        casts an acoustic shadow.
    DIFFRACTING: Obstacle much smaller than the wavelength, the wave bends
        around it almost unaffected.
    TRANSITIONAL: Mixed scattering between the two regimes.
    """

    REFLECTING = "reflecting"
    DIFFRACTING = "diffracting"
    TRANSITIONAL = "transitional"

    @property
    def label(self) -> str:
        """Short display label."""
        return _BEHAVIOR_TEXT[self][0]

    @property
    def description(self) -> str:
        """One-line explanation of what the listener experiences."""
        return _BEHAVIOR_TEXT[self][1]


_BEHAVIOR_TEXT = {
    Behavior.REFLECTING: ("Reflection", "Obstacle > wave. A shadow forms."),
    Behavior.DIFFRACTING: ("Diffraction", "Obstacle < wave. Sound flows around it."),
    Behavior.TRANSITIONAL: ("Transition", "Complex scattering."),
}


@dataclass(frozen=True)
class SimulationParameters:
    """Parameters of the scene, owned by the control surface.

    Args:
        frequency_hz: Source frequency in Hz (must be > 0)
        obstacle_size_m: Obstacle height in meters (must be > 0)
        temperature_c: Air temperature in °C
    """

    frequency_hz: float = 343.0
    obstacle_size_m: float = 1.0
    temperature_c: float = 20.0

    def with_changes(self, **changes: float) -> SimulationParameters:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


@dataclass(frozen=True)
class AcousticMetrics:
    """Metrics derived from a SimulationParameters instance.

    Attributes:
        speed_of_sound_mps: Speed of sound in m/s
        wavelength_m: Wavelength in meters
        size_ratio: Obstacle size divided by wavelength (dimensionless)
        behavior: Regime classified from size_ratio
    """

    speed_of_sound_mps: float
    wavelength_m: float
    size_ratio: float
    behavior: Behavior


@dataclass(frozen=True)
class SceneSnapshot:
    """Parameters and the metrics computed from them, read as one unit."""

    params: SimulationParameters
    metrics: AcousticMetrics


def speed_of_sound(temperature_c: float) -> float:
    """Speed of sound in air, c = 331.4 + 0.6 * T.

    Args:
        temperature_c: Air temperature in °C

    Returns:
        Speed of sound in m/s
    """
    return SPEED_AT_ZERO_C + SPEED_PER_DEGREE_C * temperature_c


def classify(size_ratio: float) -> Behavior:
    """Classify the interaction regime from the size ratio.

    Predicates are evaluated in order: ``> 1.0`` is reflecting, then
    ``< 0.5`` is diffracting, anything else is transitional. Both boundary
    values (exactly 1.0 and exactly 0.5) are therefore transitional.
    """
    if size_ratio > REFLECTING_RATIO:
        return Behavior.REFLECTING
    if size_ratio < DIFFRACTING_RATIO:
        return Behavior.DIFFRACTING
    return Behavior.TRANSITIONAL


def compute_metrics(params: SimulationParameters) -> AcousticMetrics:
    """Compute acoustic metrics from simulation parameters.

    Pure function: identical inputs give bit-identical outputs. No
    validation or clamping is applied. A zero frequency yields an infinite
    wavelength instead of raising, callers are expected to validate the
    input domain with :func:`validate_parameters`.

    Args:
        params: Simulation parameters

    Returns:
        AcousticMetrics for the given parameters
    """
    speed = speed_of_sound(params.temperature_c)
    with np.errstate(divide="ignore", invalid="ignore"):
        wavelength = float(np.divide(speed, np.float64(params.frequency_hz)))
        ratio = float(np.divide(params.obstacle_size_m, np.float64(wavelength)))

    return AcousticMetrics(
        speed_of_sound_mps=speed,
        wavelength_m=wavelength,
        size_ratio=ratio,
        behavior=classify(ratio),
    )


def validate_parameters(
    params: SimulationParameters, stacklevel: int = 2
) -> SimulationParameters:
    """Check parameters before they reach the model.

    Args:
        params: Parameters to check
        stacklevel: Passed to warnings.warn; callers that wrap this function
            add one per wrapping frame

    Returns:
        The same parameters, for chaining

    Raises:
        ValueError: If a value is not finite, or frequency or obstacle size
            is not strictly positive

    Warns:
        UserWarning: If a value lies outside its recommended range
    """
    for name in ("frequency_hz", "obstacle_size_m", "temperature_c"):
        value = getattr(params, name)
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value}")

    if params.frequency_hz <= 0:
        raise ValueError(f"frequency_hz must be > 0, got {params.frequency_hz}")
    if params.obstacle_size_m <= 0:
        raise ValueError(f"obstacle_size_m must be > 0, got {params.obstacle_size_m}")

    checks = [
        ("frequency_hz", params.frequency_hz, FREQUENCY_RANGE_HZ, "Hz"),
        ("obstacle_size_m", params.obstacle_size_m, OBSTACLE_SIZE_RANGE_M, "m"),
        ("temperature_c", params.temperature_c, TEMPERATURE_RANGE_C, "°C"),
    ]
    for name, value, (low, high), unit in checks:
        if not low <= value <= high:
            warnings.warn(
                f"{name}={value} is outside the recommended range "
                f"{low}-{high} {unit}; the visualization may be hard to read.",
                UserWarning,
                stacklevel=stacklevel,
            )

    return params


class ParameterState:
    """Current scene parameters with their metrics.

    The control surface writes through :meth:`update`; each accepted change
    recomputes the metrics in full. Calling the instance returns the
    current :class:`SceneSnapshot`, so it can be passed directly as the
    renderer's parameter provider.

    Example:
        >>> state = ParameterState()
        >>> state.update(frequency_hz=2000.0, obstacle_size_m=5.0)
        >>> state().metrics.behavior
        <Behavior.REFLECTING: 'reflecting'>
    """

    def __init__(self, params: SimulationParameters | None = None):
        params = validate_parameters(params or SimulationParameters(), stacklevel=3)
        self._snapshot = SceneSnapshot(params, compute_metrics(params))

    @property
    def params(self) -> SimulationParameters:
        return self._snapshot.params

    @property
    def metrics(self) -> AcousticMetrics:
        return self._snapshot.metrics

    def update(self, **changes: float) -> SceneSnapshot:
        """Replace some parameters and recompute the metrics.

        Raises:
            ValueError: If the new parameters are invalid. The previous
                state is kept.
        """
        params = validate_parameters(
            self._snapshot.params.with_changes(**changes), stacklevel=3
        )
        self._snapshot = SceneSnapshot(params, compute_metrics(params))
        return self._snapshot

    def __call__(self) -> SceneSnapshot:
        return self._snapshot
