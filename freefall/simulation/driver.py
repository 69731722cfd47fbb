"""Entry points that turn a configuration into results.

Example:
    >>> from freefall.simulation import SimConfig, simulate, simulate_comparison
    >>>
    >>> summary = simulate(SimConfig(drag=True))
    >>> print(f"Landed after {summary.end_time:.0f} s at {summary.end_speed:.0f} m/s")
    >>>
    >>> pair = simulate_comparison(SimConfig(drag=True))
    >>> pair.no_drag.max_speed > pair.primary.max_speed
    True
"""

import logging

import numpy as np
from beartype import beartype

from freefall.environment.gravity import G0, G_SIMPLIFIED, R_EARTH, GravityModel
from freefall.simulation.config import Scenario, SimConfig, check_config
from freefall.simulation.integrators import (
    FreefallIntegrator,
    Integrator,
    LaunchIntegrator,
)
from freefall.simulation.results import ComparisonResult, RunSummary

logger = logging.getLogger(__name__)

INITIAL_GPE_SUBINTERVALS = 200  # Midpoint sum resolution for realistic gravity

_INTEGRATORS: dict[Scenario, type[Integrator]] = {
    Scenario.FREEFALL: FreefallIntegrator,
    Scenario.LAUNCH: LaunchIntegrator,
}


@beartype
def integrator_for(config: SimConfig) -> Integrator:
    """Create the integrator matching the configured scenario."""
    try:
        cls = _INTEGRATORS[config.scenario]
    except KeyError:
        raise ValueError(f"Unknown scenario: {config.scenario}") from None
    return cls(config)


@beartype
def prepare(config: SimConfig) -> SimConfig:
    """Normalize a configuration before integration.

    Logs advisory warnings and pins the launch scenario to the ground.
    """
    for message in check_config(config):
        logger.warning(message)
    if config.scenario == Scenario.LAUNCH and config.initial_altitude != 0.0:
        config = config.replace(initial_altitude=0.0)
    return config


@beartype
def simulate(config: SimConfig) -> RunSummary:
    """Run one scenario to completion.

    Deterministic: the same configuration always yields the same series.

    Args:
        config: Run configuration

    Returns:
        RunSummary with the full time series
    """
    return integrator_for(prepare(config)).run()


@beartype
def simulate_comparison(config: SimConfig) -> ComparisonResult:
    """Run a scenario and its drag-free twin for overlay charts.

    The two runs share no state.
    """
    primary = simulate(config)
    no_drag = simulate(config.replace(drag=False))
    return ComparisonResult(primary=primary, no_drag=no_drag)


@beartype
def initial_potential_energy(
    mass: float | int,
    initial_altitude: float | int,
    gravity_model: GravityModel = GravityModel.SIMPLIFIED,
) -> float:
    """Potential energy available at the drop altitude [J].

    With simplified gravity this is m * 10 * h0. With realistic gravity g is
    averaged over [0, h0] using a fixed midpoint sum, independent of the
    time step of any run.

    Args:
        mass: Body mass [kg]
        initial_altitude: Drop altitude [m]
        gravity_model: Gravity model

    Returns:
        Potential energy [J]
    """
    if gravity_model == GravityModel.SIMPLIFIED:
        return float(mass * G_SIMPLIFIED * initial_altitude)

    n = INITIAL_GPE_SUBINTERVALS
    dh = initial_altitude / n
    midpoints = (np.arange(n) + 0.5) * dh
    g = G0 * (R_EARTH / (R_EARTH + np.maximum(midpoints, 0.0))) ** 2
    g_avg = float(np.sum(g) / n)
    return float(mass * g_avg * initial_altitude)
