"""Freefall - Energy simulation of falling and spring-launched bodies.

This package integrates the motion of a body dropped from altitude (or fired
from the ground by a spring) under constant or altitude-dependent gravity,
with optional quadratic drag in an exponential atmosphere, and tracks how
potential energy turns into kinetic energy and heat.

Example:
    >>> from freefall import SimConfig, simulate, initial_potential_energy
    >>>
    >>> config = SimConfig(mass=118.0, initial_altitude=39045.0, drag=True)
    >>> summary = simulate(config)
    >>> print(f"Max speed: {summary.max_speed:.0f} m/s")
    >>> print(f"Heat from drag: {summary.energy_dissipated / 1e6:.1f} MJ")
"""

__version__ = "0.1.0"

# Energy calculus
from freefall.energy import (
    drag_force,
    drag_power,
    elastic_potential_energy,
    kinetic_energy,
    launch_speed,
    potential_energy,
)

# Environment models
from freefall.environment import (
    GravityModel,
    air_density,
    density_profile,
    gravity,
)

# Reports
from freefall.formatting import (
    format_engineering,
    format_quantity,
    format_run_summary,
)

# Visualization
from freefall.plotting import (
    plot_altitude,
    plot_dashboard,
    plot_energy,
    plot_speed,
)

# Body presets
from freefall.presets import (
    BodyPreset,
    apply_preset,
    get_preset,
    list_presets,
)

# Simulation
from freefall.simulation import (
    ComparisonResult,
    RunSummary,
    Scenario,
    SimConfig,
    TerminalCondition,
    TimeSeries,
    check_config,
    initial_potential_energy,
    simulate,
    simulate_comparison,
)

__all__ = [
    # Version
    "__version__",
    # Environment
    "GravityModel",
    "air_density",
    "density_profile",
    "gravity",
    # Energy
    "potential_energy",
    "kinetic_energy",
    "drag_force",
    "drag_power",
    "elastic_potential_energy",
    "launch_speed",
    # Simulation
    "SimConfig",
    "Scenario",
    "check_config",
    "simulate",
    "simulate_comparison",
    "initial_potential_energy",
    "RunSummary",
    "TimeSeries",
    "ComparisonResult",
    "TerminalCondition",
    # Presets
    "BodyPreset",
    "apply_preset",
    "get_preset",
    "list_presets",
    # Reports
    "format_quantity",
    "format_engineering",
    "format_run_summary",
    # Plotting
    "plot_energy",
    "plot_speed",
    "plot_altitude",
    "plot_dashboard",
]
