"""Human-readable numbers and run reports."""

import math

from beartype import beartype

from freefall.energy import elastic_potential_energy, launch_speed
from freefall.simulation.config import Scenario, SimConfig
from freefall.simulation.driver import initial_potential_energy
from freefall.simulation.results import RunSummary

MISSING = "—"


@beartype
def format_quantity(value: float, unit: str = "") -> str:
    """Format a value with k/M/G prefixes and two decimals.

    Example:
        >>> format_quantity(46073100.0, "J")
        '46.07 MJ'
        >>> format_quantity(float("nan"), "J")
        '—'
    """
    if not math.isfinite(value):
        return MISSING
    magnitude = abs(value)
    if magnitude >= 1e9:
        text = f"{value / 1e9:.2f} G"
    elif magnitude >= 1e6:
        text = f"{value / 1e6:.2f} M"
    elif magnitude >= 1e3:
        text = f"{value / 1e3:.2f} k"
    else:
        text = f"{value:.2f} "
    return f"{text}{unit}".strip()


@beartype
def format_engineering(value: float) -> str:
    """Format an axis tick value, e.g. 39045 -> '39.05e3'."""
    if value == 0:
        return "0"
    magnitude = abs(value)
    if magnitude >= 1e9:
        return f"{value / 1e9:.2f}e9"
    if magnitude >= 1e6:
        return f"{value / 1e6:.2f}e6"
    if magnitude >= 1e3:
        return f"{value / 1e3:.2f}e3"
    return f"{value:.0f}"


@beartype
def format_run_summary(summary: RunSummary, config: SimConfig) -> str:
    """Format a run as a text report.

    Args:
        summary: Result of `simulate`
        config: Configuration the run was made with

    Returns:
        Multi-line report
    """
    h0 = 0.0 if config.scenario == Scenario.LAUNCH else config.initial_altitude
    gpe0 = initial_potential_energy(config.mass, h0, config.gravity_model)

    lines = [
        "=" * 50,
        f"{config.scenario.value.upper()} RUN",
        "=" * 50,
        f"Gravity model:        {config.gravity_model.value}",
        f"Drag:                 {'on' if config.drag else 'off'}",
        f"Initial GPE:          {format_quantity(gpe0, 'J')}",
    ]

    if config.scenario == Scenario.LAUNCH:
        epe = elastic_potential_energy(config.spring_constant, config.spring_compression)
        v0 = launch_speed(epe, config.mass)
        lines.append(f"Spring energy:        {format_quantity(epe, 'J')}")
        lines.append(f"Launch speed:         {format_quantity(v0, 'm/s') if v0 > 0 else MISSING}")

    dissipated = (
        format_quantity(summary.energy_dissipated, "J") if config.drag else "0 J (no drag)"
    )
    lines += [
        "-" * 50,
        f"Max KE:               {format_quantity(summary.max_kinetic_energy, 'J')}",
        f"Energy dissipated:    {dissipated}",
        f"Max speed:            {format_quantity(summary.max_speed, 'm/s')}",
        f"Time to end:          {format_quantity(summary.end_time, 's')}",
        f"Final speed:          {format_quantity(abs(summary.end_speed), 'm/s')}",
        f"Ended by:             {summary.termination.value}",
        "=" * 50,
    ]
    return "\n".join(lines)
