"""Command-line interface for acoustic-flow.

The acoustic-flow tool computes scene metrics, exports animated wavefields
to GIF/PNG, and opens an interactive matplotlib window.
"""

from __future__ import annotations

import sys
import time
import warnings
from pathlib import Path

import click
from matplotlib.animation import PillowWriter
from rich.console import Console

from acoustic_flow import __version__
from acoustic_flow.analysis import explanation_prompt, scene_summary
from acoustic_flow.core.metrics import ParameterState, SimulationParameters
from acoustic_flow.render import (
    ManualScheduler,
    MatplotlibSurface,
    MatplotlibTimerScheduler,
    RendererConfig,
    WavefieldRenderer,
)

from .progress import RenderProgress, format_bytes, format_time, print_scene_info

console = Console()

_DEFAULTS = SimulationParameters()


def scene_options(func):
    """Attach the three scene parameters as options."""
    func = click.option(
        "--temperature",
        "-T",
        type=float,
        default=_DEFAULTS.temperature_c,
        show_default=True,
        help="Air temperature in °C",
    )(func)
    func = click.option(
        "--size",
        "-s",
        type=float,
        default=_DEFAULTS.obstacle_size_m,
        show_default=True,
        help="Obstacle height in meters",
    )(func)
    func = click.option(
        "--frequency",
        "-f",
        type=float,
        default=_DEFAULTS.frequency_hz,
        show_default=True,
        help="Source frequency in Hz",
    )(func)
    return func


def load_state(
    ctx: click.Context, frequency: float, size: float, temperature: float
) -> ParameterState:
    """Validate the scene options, printing warnings; exit with status 1 if invalid."""
    params = SimulationParameters(
        frequency_hz=frequency, obstacle_size_m=size, temperature_c=temperature
    )
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            state = ParameterState(params)
        except ValueError as e:
            console.print(f"\n[bold red]Invalid parameters:[/bold red] {e}")
            ctx.exit(1)

    for warning in caught:
        console.print(f"[yellow]Warning:[/yellow] {warning.message}")
    return state


@click.group()
@click.version_option(version=__version__, prog_name="acoustic-flow")
def main():
    """Visualize reflection and diffraction of sound at an obstacle."""


@main.command()
@scene_options
@click.option("--json", "as_json", is_flag=True, help="Print metrics as JSON")
@click.option("--prompt", is_flag=True, help="Print the explanation prompt for the scene")
@click.pass_context
def metrics(ctx, frequency, size, temperature, as_json, prompt):
    """Compute speed of sound, wavelength, size ratio and behavior."""
    state = load_state(ctx, frequency, size, temperature)
    snapshot = state()

    if as_json:
        console.print_json(data=scene_summary(snapshot.params, snapshot.metrics))
    else:
        print_scene_info(console, snapshot)

    if prompt:
        click.echo(explanation_prompt(snapshot.params, snapshot.metrics))


@main.command()
@scene_options
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output file, .gif or .png (default: wavefield_{frequency}hz.gif)",
)
@click.option("--frames", "-n", type=click.IntRange(min=1), default=120, show_default=True)
@click.option("--fps", type=click.IntRange(min=1), default=30, show_default=True)
@click.option("--width", type=click.IntRange(min=1), default=800, show_default=True)
@click.option("--height", type=click.IntRange(min=1), default=450, show_default=True)
@click.option("--dpi", type=click.IntRange(min=1), default=100, show_default=True)
@click.option("--no-legend", is_flag=True, help="Hide the legend")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output with debug info")
@click.pass_context
def render(
    ctx, frequency, size, temperature, output, frames, fps, width, height, dpi, no_legend, verbose
):
    """Render the animated wavefield off-screen.

    A .gif output receives every frame; a .png output receives only the
    last one.
    """
    state = load_state(ctx, frequency, size, temperature)

    if output is None:
        output = Path(f"wavefield_{frequency:g}hz.gif")
    suffix = output.suffix.lower()
    if suffix not in (".gif", ".png"):
        console.print(f"\n[bold red]Error:[/bold red] unsupported output format '{suffix}'")
        ctx.exit(1)

    console.print(f"\n[bold]Wavefield render:[/bold] {output.name}", style="blue")
    console.print("─" * 60)
    print_scene_info(
        console, state(), {"Frames": f"{frames} @ {fps} fps", "Size": f"{width} × {height} px"}
    )

    config = RendererConfig(show_legend=not no_legend)
    surface = MatplotlibSurface(size=(width, height), dpi=dpi)
    scheduler = ManualScheduler()
    renderer = WavefieldRenderer(config, scheduler)

    start_time = time.time()
    progress = RenderProgress(console, frames)
    renderer.start(surface, state)
    try:
        if suffix == ".gif":
            writer = PillowWriter(fps=fps)
            with writer.saving(surface.figure, str(output), dpi):
                for _ in range(frames):
                    scheduler.run_pending()
                    writer.grab_frame()
                    progress.update(renderer.state.frames_drawn)
        else:
            for _ in range(frames):
                scheduler.run_pending()
                progress.update(renderer.state.frames_drawn)
            surface.figure.savefig(output, dpi=dpi, facecolor=surface.figure.get_facecolor())
    except KeyboardInterrupt:
        progress.finish()
        console.print("\n[yellow]Interrupted by user[/yellow]")
        ctx.exit(130)
    except Exception as e:
        progress.finish()
        console.print(f"\n[bold red]Render Error:[/bold red] {e}")
        if verbose:
            console.print_exception()
        ctx.exit(1)
    finally:
        renderer.stop()
        progress.finish()

    runtime = time.time() - start_time

    console.print("─" * 60)
    console.print("✓ [bold green]Render complete![/bold green]")
    if output.exists():
        console.print(f"  Output: {output} ({format_bytes(output.stat().st_size)})")
    else:
        console.print(f"  Output: {output}")
    console.print(f"  Runtime: {format_time(runtime)}")


@main.command()
@scene_options
@click.option("--width", type=click.IntRange(min=1), default=960, show_default=True)
@click.option("--height", type=click.IntRange(min=1), default=540, show_default=True)
@click.option("--dpi", type=click.IntRange(min=1), default=100, show_default=True)
@click.pass_context
def show(ctx, frequency, size, temperature, width, height, dpi):
    """Open an interactive window with the live wavefield."""
    import matplotlib.pyplot as plt

    state = load_state(ctx, frequency, size, temperature)
    print_scene_info(console, state())

    config = RendererConfig()
    figure = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    if figure.canvas.manager is not None:
        figure.canvas.manager.set_window_title("AcousticFlow")

    surface = MatplotlibSurface(figure=figure)
    renderer = WavefieldRenderer(
        config, MatplotlibTimerScheduler(figure.canvas, config.frame_interval_ms)
    )
    figure.canvas.mpl_connect("close_event", lambda event: renderer.stop())

    renderer.start(surface, state)
    try:
        plt.show()
    finally:
        renderer.stop()


if __name__ == "__main__":
    sys.exit(main())
