"""
Example: Frequency Sweep - From Diffraction to Reflection
=========================================================
Sweeps the source frequency from 50 Hz to 2 kHz while the render loop is
running. The parameter state is updated between frames, and the renderer
picks up each change on the very next frame without restarting.

Output: frequency_sweep.gif

Learning objectives:
- Driving WavefieldRenderer with a ManualScheduler
- Changing parameters while the loop runs
- Exporting frames with matplotlib's PillowWriter
"""

import numpy as np
from matplotlib.animation import PillowWriter

from acoustic_flow import (
    ManualScheduler,
    MatplotlibSurface,
    ParameterState,
    SimulationParameters,
    WavefieldRenderer,
)

NUM_FRAMES = 240
FPS = 30

state = ParameterState(SimulationParameters(frequency_hz=50.0, obstacle_size_m=1.5))
surface = MatplotlibSurface(size=(800, 450))
scheduler = ManualScheduler()
renderer = WavefieldRenderer(scheduler=scheduler)

# Logarithmic sweep: equal time per octave
frequencies = np.geomspace(50.0, 2000.0, NUM_FRAMES)

writer = PillowWriter(fps=FPS)
renderer.start(surface, state)
with writer.saving(surface.figure, "frequency_sweep.gif", dpi=100):
    for i, frequency in enumerate(frequencies):
        state.update(frequency_hz=float(frequency))
        scheduler.run_pending()
        writer.grab_frame()

        if i % 60 == 0:
            m = state.metrics
            print(f"frame {i:3d}: {frequency:7.1f} Hz, ratio {m.size_ratio:5.2f}, {m.behavior.label}")
renderer.stop()

print(f"Wrote frequency_sweep.gif ({renderer.state.frames_drawn} frames)")
