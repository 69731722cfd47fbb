"""Visualization module for freefall runs.

Provides plotting functions for:
- Energy vs time (GPE, KE and heat dissipated by drag)
- Speed vs time
- Altitude vs time
- Launch trajectory (height vs downrange distance)

Every chart accepts an optional comparison series, drawn dashed, so a drag
run can be overlaid on its drag-free twin. Figures are rebuilt from the
series on every call; nothing is cached between calls.

Example:
    >>> from freefall.plotting import plot_dashboard
    >>> from freefall.simulation import SimConfig, simulate_comparison
    >>>
    >>> pair = simulate_comparison(SimConfig(drag=True))
    >>> fig = plot_dashboard(pair.primary.series, pair.no_drag.series)
    >>> fig.savefig("dashboard.png")
"""

import matplotlib.pyplot as plt
from beartype import beartype
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.ticker import FuncFormatter

from freefall.formatting import format_engineering
from freefall.simulation.results import TimeSeries

# =============================================================================
# Plot Style Configuration
# =============================================================================

COLORS = {
    "gpe": "#38bdf8",  # Sky
    "ke": "#22c55e",  # Green
    "dissipated": "#f59e0b",  # Amber
    "trajectory": "#A23B72",  # Berry
    "grid": "#CCCCCC",
    "text": "#333333",
}

COMPARISON_LINESTYLE = (0, (6, 4))

DEFAULT_FIGSIZE = (10.0, 6.0)

_ENG_FORMATTER = FuncFormatter(lambda value, _pos: format_engineering(float(value)))


def _setup_style() -> None:
    """Configure matplotlib style for consistent appearance."""
    plt.rcParams.update(
        {
            "font.family": "sans-serif",
            "font.sans-serif": ["Helvetica", "Arial", "DejaVu Sans"],
            "font.size": 11,
            "axes.titlesize": 14,
            "axes.labelsize": 12,
            "axes.linewidth": 1.2,
            "axes.edgecolor": COLORS["text"],
            "axes.labelcolor": COLORS["text"],
            "xtick.labelsize": 10,
            "ytick.labelsize": 10,
            "legend.fontsize": 10,
            "grid.alpha": 0.5,
            "grid.linewidth": 0.8,
        }
    )


# =============================================================================
# Axis Drawing
# =============================================================================


def _draw_energy(ax: Axes, series: TimeSeries, comparison: TimeSeries | None) -> None:
    ax.plot(series.time, series.gpe, color=COLORS["gpe"], linewidth=2, label="GPE")
    ax.plot(series.time, series.ke, color=COLORS["ke"], linewidth=2, label="KE")
    ax.plot(
        series.time, series.dissipated,
        color=COLORS["dissipated"], linewidth=2, label="Energy dissipated (drag)",
    )
    if comparison is not None:
        for values, key in (
            (comparison.gpe, "gpe"),
            (comparison.ke, "ke"),
            (comparison.dissipated, "dissipated"),
        ):
            ax.plot(
                comparison.time, values,
                color=COLORS[key], linewidth=2, linestyle=COMPARISON_LINESTYLE,
            )
        # One legend entry for all dashed lines
        ax.plot([], [], color="#9ca3af", linestyle=COMPARISON_LINESTYLE, label="Dashed = no drag")

    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Energy (J)")
    ax.set_title("Energy vs Time")
    ax.yaxis.set_major_formatter(_ENG_FORMATTER)
    ax.set_ylim(bottom=0)
    ax.grid(True, alpha=0.3)
    ax.legend()


def _draw_single(
    ax: Axes,
    series: TimeSeries,
    comparison: TimeSeries | None,
    field: str,
    color: str,
    ylabel: str,
    title: str,
    engineering: bool = False,
) -> None:
    ax.plot(series.time, getattr(series, field), color=color, linewidth=2, label="With settings")
    if comparison is not None:
        ax.plot(
            comparison.time, getattr(comparison, field),
            color=color, linewidth=2, linestyle=COMPARISON_LINESTYLE, label="No drag",
        )
        ax.legend()

    ax.set_xlabel("Time (s)")
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    if engineering:
        ax.yaxis.set_major_formatter(_ENG_FORMATTER)
    ax.set_ylim(bottom=0)
    ax.grid(True, alpha=0.3)


def _draw_trajectory(ax: Axes, series: TimeSeries, comparison: TimeSeries | None) -> None:
    ax.plot(series.horizontal, series.altitude, color=COLORS["trajectory"], linewidth=2)
    if comparison is not None and comparison.horizontal is not None:
        ax.plot(
            comparison.horizontal, comparison.altitude,
            color=COLORS["trajectory"], linewidth=2, linestyle=COMPARISON_LINESTYLE,
            label="No drag",
        )
        ax.legend()
    ax.set_xlabel("Downrange (m)")
    ax.set_ylabel("Height (m)")
    ax.set_title("Trajectory")
    ax.set_ylim(bottom=0)
    ax.grid(True, alpha=0.3)


# =============================================================================
# Public Charts
# =============================================================================


@beartype
def plot_energy(
    series: TimeSeries,
    comparison: TimeSeries | None = None,
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
) -> Figure:
    """Plot GPE, KE and dissipated energy vs time.

    Args:
        series: Time series to plot
        comparison: Optional drag-free series, drawn dashed
        figsize: Figure size (width, height) in inches

    Returns:
        matplotlib Figure
    """
    _setup_style()
    fig, ax = plt.subplots(figsize=figsize)
    _draw_energy(ax, series, comparison)
    fig.tight_layout()
    return fig


@beartype
def plot_speed(
    series: TimeSeries,
    comparison: TimeSeries | None = None,
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
) -> Figure:
    """Plot speed vs time."""
    _setup_style()
    fig, ax = plt.subplots(figsize=figsize)
    _draw_single(ax, series, comparison, "speed", COLORS["ke"], "Speed (m/s)", "Speed vs Time")
    fig.tight_layout()
    return fig


@beartype
def plot_altitude(
    series: TimeSeries,
    comparison: TimeSeries | None = None,
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
) -> Figure:
    """Plot altitude vs time."""
    _setup_style()
    fig, ax = plt.subplots(figsize=figsize)
    _draw_single(
        ax, series, comparison, "altitude", COLORS["gpe"],
        "Altitude (m)", "Altitude vs Time", engineering=True,
    )
    fig.tight_layout()
    return fig


@beartype
def plot_dashboard(
    series: TimeSeries,
    comparison: TimeSeries | None = None,
    figsize: tuple[float, float] = (14.0, 10.0),
    title: str | None = None,
) -> Figure:
    """Plot all charts for a run on one figure.

    Creates a 2x2 grid with energy, speed and altitude vs time. The fourth
    panel shows the trajectory for launch runs and is hidden otherwise.

    Args:
        series: Time series to plot
        comparison: Optional drag-free series, drawn dashed
        figsize: Figure size (width, height) in inches
        title: Optional figure title

    Returns:
        matplotlib Figure
    """
    _setup_style()
    fig, axes = plt.subplots(2, 2, figsize=figsize)

    _draw_energy(axes[0, 0], series, comparison)
    _draw_single(
        axes[0, 1], series, comparison, "speed", COLORS["ke"], "Speed (m/s)", "Speed vs Time",
    )
    _draw_single(
        axes[1, 0], series, comparison, "altitude", COLORS["gpe"],
        "Altitude (m)", "Altitude vs Time", engineering=True,
    )
    if series.horizontal is not None:
        _draw_trajectory(axes[1, 1], series, comparison)
    else:
        axes[1, 1].set_visible(False)

    if title:
        fig.suptitle(title, fontsize=16)
    fig.tight_layout()
    return fig
