"""Simulation module for freefall and spring-launch runs.

Provides the run configuration, the per-scenario integrators and the
driver functions that return immutable results.

Example:
    >>> from freefall.simulation import SimConfig, simulate
    >>>
    >>> summary = simulate(SimConfig(mass=118.0, initial_altitude=39045.0))
    >>> summary.termination
    <TerminalCondition.GROUND: 'ground'>
    >>> df = summary.series.to_dataframe()
"""

from freefall.simulation.config import (
    HARD_STOP,
    MAX_STEPS,
    TIME_LIMIT,
    Scenario,
    SimConfig,
    check_config,
)
from freefall.simulation.driver import (
    INITIAL_GPE_SUBINTERVALS,
    initial_potential_energy,
    integrator_for,
    prepare,
    simulate,
    simulate_comparison,
)
from freefall.simulation.integrators import (
    SPEED_EPSILON,
    FreefallIntegrator,
    Integrator,
    LaunchIntegrator,
)
from freefall.simulation.results import (
    ComparisonResult,
    RunSummary,
    TerminalCondition,
    TimeSeries,
)
from freefall.simulation.state import FreefallState, LaunchState

__all__ = [
    # Configuration
    "SimConfig",
    "Scenario",
    "check_config",
    "TIME_LIMIT",
    "HARD_STOP",
    "MAX_STEPS",
    # Integrators
    "Integrator",
    "FreefallIntegrator",
    "LaunchIntegrator",
    "FreefallState",
    "LaunchState",
    "SPEED_EPSILON",
    # Results
    "TimeSeries",
    "RunSummary",
    "ComparisonResult",
    "TerminalCondition",
    # Driver
    "simulate",
    "simulate_comparison",
    "initial_potential_energy",
    "integrator_for",
    "prepare",
    "INITIAL_GPE_SUBINTERVALS",
]
