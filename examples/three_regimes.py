"""
Example: Three Regimes - Diffraction, Transition, Reflection
=============================================================
Renders one still frame for each interaction regime and saves them side by
side as PNG files.

Output: regime_diffracting.png, regime_transitional.png, regime_reflecting.png

Learning objectives:
- Computing metrics from simulation parameters
- Rendering single frames off-screen
- Seeing how the shadow and reflections follow the size ratio
"""

from acoustic_flow import (
    MatplotlibSurface,
    ParameterState,
    SimulationParameters,
    render_frame,
)
from acoustic_flow.render import RenderState

SCENES = [
    SimulationParameters(frequency_hz=50.0, obstacle_size_m=0.5),
    SimulationParameters(frequency_hz=343.0, obstacle_size_m=1.0),
    SimulationParameters(frequency_hz=1500.0, obstacle_size_m=3.0),
]

print("=" * 60)
print("AcousticFlow: three interaction regimes")
print("=" * 60)

for params in SCENES:
    state = ParameterState(params)
    metrics = state.metrics

    surface = MatplotlibSurface(size=(800, 450))
    render_state = RenderState(tick=40)  # advance the phase a little
    render_frame(render_state, surface, state())

    filename = f"regime_{metrics.behavior.value}.png"
    surface.figure.savefig(filename, facecolor=surface.figure.get_facecolor())

    print(
        f"{params.frequency_hz:6.0f} Hz, {params.obstacle_size_m:.1f} m obstacle: "
        f"λ = {metrics.wavelength_m:.2f} m, ratio = {metrics.size_ratio:.2f} "
        f"-> {metrics.behavior.label} ({filename})"
    )
