"""
Read-only views of the scene for downstream consumers.

The AI explanation feature lives outside this package; it only needs the
metrics interpolated into a text prompt. This module builds that record and
that prompt so consumers never reach into renderer or model internals.

Typical usage:
    >>> state = ParameterState()
    >>> summary = scene_summary(state.params, state.metrics)
    >>> prompt = explanation_prompt(state.params, state.metrics)
"""

from __future__ import annotations

from typing import Any

from acoustic_flow.core.metrics import AcousticMetrics, SimulationParameters

PROMPT_WORD_LIMIT = 150


def scene_summary(params: SimulationParameters, metrics: AcousticMetrics) -> dict[str, Any]:
    """Full metrics plus the raw inputs as a plain, JSON-serializable dict."""
    return {
        "frequency_hz": params.frequency_hz,
        "obstacle_size_m": params.obstacle_size_m,
        "temperature_c": params.temperature_c,
        "speed_of_sound_mps": metrics.speed_of_sound_mps,
        "wavelength_m": metrics.wavelength_m,
        "size_ratio": metrics.size_ratio,
        "behavior": metrics.behavior.value,
    }


def explanation_prompt(params: SimulationParameters, metrics: AcousticMetrics) -> str:
    """Prompt asking a text model to explain the current scene.

    Args:
        params: Current parameters
        metrics: Metrics computed from params

    Returns:
        Prompt text with frequency, wavelength, obstacle size and ratio filled in
    """
    lines = [
        "I am an audio-visual media designer.",
        f"I am simulating a sound wave with frequency {params.frequency_hz:g} Hz.",
        f"The calculated wavelength is approximately {metrics.wavelength_m:.2f} meters.",
        f"There is an obstacle with a dimension of {params.obstacle_size_m:.2f} meters.",
        f"The ratio (obstacle size / wavelength) is {metrics.size_ratio:.2f}.",
        "",
        "Explain to me simply:",
        "1. Will the sound reflect off this object or diffract (bend) around it?",
        "2. Why does this happen based on the physics of wavelength vs object size?",
        "3. What is a practical real-world example of this specific frequency "
        "behavior (e.g. a pillar in a concert hall vs a wall)?",
        "",
        f"Keep it concise, under {PROMPT_WORD_LIMIT} words. "
        "Use professional but accessible language.",
    ]
    return "\n".join(lines)
