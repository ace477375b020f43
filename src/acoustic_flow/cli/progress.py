"""Terminal display for the acoustic-flow CLI.

Provides rich terminal output for:
- Scene parameter and metrics tables
- Frame export progress with elapsed time, ETA and memory usage
"""

from __future__ import annotations

import time

import psutil
from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)
from rich.table import Table

from acoustic_flow.core.metrics import Behavior, SceneSnapshot

BEHAVIOR_STYLES = {
    Behavior.REFLECTING: "red",
    Behavior.TRANSITIONAL: "yellow",
    Behavior.DIFFRACTING: "green",
}


def format_time(seconds: float) -> str:
    """Format time duration for display.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string like "1m 23s" or "2h 15m"
    """
    if seconds < 60:
        return f"{seconds:.0f}s"
    elif seconds < 3600:
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs:02d}s"
    else:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        return f"{hours}h {minutes:02d}m"


def format_bytes(num_bytes: float) -> str:
    """Format byte count for display, e.g. "1.5 GB" or "256.0 KB"."""
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if abs(num_bytes) < 1024.0:
            return f"{num_bytes:.1f} {unit}"
        num_bytes /= 1024.0
    return f"{num_bytes:.1f} PB"


class RenderProgress:
    """Progress bar for headless frame export.

    Shows frames rendered, elapsed time, ETA, frame rate and peak memory.

    Example:
        >>> with RenderProgress(console, num_frames=120) as progress:
        ...     for _ in range(120):
        ...         scheduler.run_pending()
        ...         progress.update(renderer.state.frames_drawn)
    """

    def __init__(self, console: Console, num_frames: int, update_interval: float = 0.1):
        """Initialize progress display.

        Args:
            console: Rich console instance
            num_frames: Total number of frames to render
            update_interval: Minimum time between stats updates (seconds)
        """
        self.console = console
        self.num_frames = num_frames
        self.update_interval = update_interval

        self.start_time = time.time()
        self.last_update = 0.0
        self.peak_memory = 0
        self._finished = False

        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            TextColumn("•"),
            TimeRemainingColumn(),
            TextColumn("{task.fields[stats]}", style="dim"),
            console=console,
        )
        self.task = self.progress.add_task("Rendering", total=num_frames, stats="")
        self.progress.start()

    def update(self, frames_done: int):
        """Advance the bar to ``frames_done`` frames.

        Statistics are rate-limited to ``update_interval``; the bar itself
        always moves.
        """
        self.progress.update(self.task, completed=frames_done)

        current_time = time.time()
        if current_time - self.last_update < self.update_interval:
            return

        elapsed = current_time - self.start_time
        fps = frames_done / elapsed if elapsed > 0 else 0.0

        memory = psutil.Process().memory_info().rss
        self.peak_memory = max(self.peak_memory, memory)

        stats = f"{fps:.1f} fps | peak {format_bytes(self.peak_memory)}"
        self.progress.update(self.task, stats=stats)
        self.last_update = current_time

    def finish(self):
        """Stop the progress display. Safe to call more than once."""
        if self._finished:
            return
        self._finished = True
        self.progress.stop()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.finish()


def print_scene_info(console: Console, snapshot: SceneSnapshot, extra: dict | None = None):
    """Print parameters and metrics as a two-column table.

    Args:
        console: Rich console instance
        snapshot: Parameters and metrics to show
        extra: Additional rows (label -> value) appended at the end
    """
    params, metrics = snapshot.params, snapshot.metrics

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Frequency", f"{params.frequency_hz:g} Hz")
    table.add_row("Obstacle", f"{params.obstacle_size_m:.2f} m")
    table.add_row("Temperature", f"{params.temperature_c:g} °C")
    table.add_row("Speed of sound", f"{metrics.speed_of_sound_mps:.1f} m/s")
    table.add_row("Wavelength λ", f"{metrics.wavelength_m:.2f} m")
    table.add_row("Ratio", f"{metrics.size_ratio:.2f}")

    style = BEHAVIOR_STYLES[metrics.behavior]
    behavior = metrics.behavior
    table.add_row(
        "Behavior", f"[bold {style}]{behavior.label.upper()}[/] - {behavior.description}"
    )

    for label, value in (extra or {}).items():
        table.add_row(label, str(value))

    console.print(table)
    console.print()
