"""Unit tests for the scenario integrators and the simulation driver.

Tests the integrators for physical correctness (energy bookkeeping,
closed-form trajectories) and for guaranteed termination.
"""

import logging
import time

import numpy as np
import pytest
from numpy.testing import assert_allclose

from freefall.environment import G0, R_EARTH, GravityModel
from freefall.simulation import (
    FreefallIntegrator,
    LaunchIntegrator,
    Scenario,
    SimConfig,
    TerminalCondition,
    initial_potential_energy,
    integrator_for,
    prepare,
    simulate,
    simulate_comparison,
)
from freefall.simulation.integrators import _sign

SERIES_FIELDS = ("time", "gpe", "ke", "dissipated", "speed", "altitude")


def launch_config(**changes) -> SimConfig:
    """1 kg body launched at 50 m/s and 45 degrees."""
    config = SimConfig(
        scenario=Scenario.LAUNCH,
        mass=1.0,
        dt=0.001,
        spring_constant=2500.0,
        spring_compression=1.0,
        launch_angle=45.0,
        drag_coefficient=0.47,
        reference_area=0.01,
    )
    return config.replace(**changes)


# =============================================================================
# Freefall Tests
# =============================================================================


class TestFreefall:
    """Test the vertical drop integrator."""

    def test_stratos_jump_reaches_ground(self):
        """No drag, constant g: final speed matches sqrt(2 g h0)."""
        config = SimConfig(mass=118.0, initial_altitude=39045.0, dt=0.05)
        summary = simulate(config)

        assert summary.termination == TerminalCondition.GROUND
        assert summary.reached_ground
        assert_allclose(summary.end_speed, np.sqrt(2 * 10.0 * 39045.0), atol=10.0 * 0.05)
        assert abs(summary.end_time - np.sqrt(2 * 39045.0 / 10.0)) <= 2 * 0.05
        assert summary.series.altitude[-1] == 0.0

    def test_energy_conserved_without_drag(self):
        """KE + GPE stays at m g h0 up to the final ground-clamped step."""
        m, h0, dt = 118.0, 39045.0, 0.05
        summary = simulate(SimConfig(mass=m, initial_altitude=h0, dt=dt))
        series = summary.series

        e0 = m * 10.0 * h0
        tolerance = m * 10.0 * summary.max_speed * dt + 1e-9 * e0
        assert np.all(np.abs(series.mechanical_energy - e0) <= tolerance)
        # Every sample before ground contact is conserved to rounding
        assert_allclose(series.mechanical_energy[:-1], e0, rtol=1e-9)

    def test_energy_conserved_realistic_gravity(self):
        """Realistic gravity keeps KE + GPE within the local-g bound."""
        m, h0, dt = 118.0, 1000.0, 0.05
        config = SimConfig(
            mass=m, initial_altitude=h0, dt=dt, gravity_model=GravityModel.REALISTIC,
        )
        summary = simulate(config)
        series = summary.series

        e0 = m * G0 * (R_EARTH / (R_EARTH + h0)) ** 2 * h0
        tolerance = m * G0 * summary.max_speed * dt + 2 * m * G0 * h0**2 / R_EARTH
        assert summary.reached_ground
        assert np.all(np.abs(series.mechanical_energy - e0) <= tolerance)

    def test_energy_conserved_with_drag(self):
        """KE + GPE + dissipated heat stays at m g h0."""
        m, h0, dt = 80.0, 3000.0, 0.01
        config = SimConfig(
            mass=m, initial_altitude=h0, dt=dt, drag=True,
            drag_coefficient=1.0, reference_area=0.8,
        )
        summary = simulate(config)
        series = summary.series

        e0 = m * 10.0 * h0
        tolerance = 3 * m * 10.0 * summary.max_speed * dt
        assert summary.reached_ground
        assert np.all(np.abs(series.total_energy - e0) <= tolerance)
        assert summary.energy_dissipated > 0.5 * e0

    def test_dissipated_energy_nondecreasing(self):
        """Heat from drag only accumulates."""
        summary = simulate(SimConfig(initial_altitude=5000.0, drag=True))
        assert np.all(np.diff(summary.series.dissipated) >= 0)
        assert summary.energy_dissipated == summary.series.dissipated[-1]

    def test_no_drag_dissipates_nothing(self):
        """Without drag no energy is lost to heat."""
        summary = simulate(SimConfig(initial_altitude=5000.0))
        assert np.all(summary.series.dissipated == 0.0)
        assert summary.energy_dissipated == 0.0

    def test_drag_approaches_terminal_velocity(self):
        """A long fall through dense air settles near terminal velocity."""
        m, cd, area, rho0 = 80.0, 1.0, 0.8, 1.225
        config = SimConfig(
            mass=m, initial_altitude=2000.0, dt=0.01, drag=True,
            drag_coefficient=cd, reference_area=area,
            sea_level_density=rho0, scale_height=1e9,
        )
        summary = simulate(config)

        v_terminal = np.sqrt(2 * m * 10.0 / (rho0 * cd * area))
        assert_allclose(summary.end_speed, v_terminal, rtol=1e-3)
        assert summary.max_speed <= v_terminal * (1 + 1e-5)

    def test_series_invariants(self):
        """Equal lengths, increasing time, non-negative altitude."""
        summary = simulate(SimConfig(initial_altitude=2000.0, drag=True))
        series = summary.series

        lengths = {len(getattr(series, name)) for name in SERIES_FIELDS}
        assert lengths == {len(series)}
        assert len(series) == summary.steps
        assert np.all(np.diff(series.time) > 0)
        assert np.all(series.altitude >= 0)
        assert series.horizontal is None

    def test_zero_altitude_empty_series(self):
        """A drop from the ground ends immediately."""
        summary = simulate(SimConfig(initial_altitude=0.0))

        assert summary.termination == TerminalCondition.GROUND
        assert summary.series.is_empty
        assert summary.end_time == 0.0
        assert summary.end_speed == 0.0

    def test_zero_mass_propagates_nan(self, caplog):
        """Zero mass is not rejected; it yields non-finite samples."""
        with caplog.at_level(logging.WARNING):
            summary = simulate(SimConfig(mass=0.0, initial_altitude=100.0))

        assert "Mass must be positive" in caplog.text
        assert len(summary.series) >= 1
        assert not np.all(np.isfinite(summary.series.ke))

    def test_drag_direction_sign_of_numpy_scalars(self):
        """Direction sign works for the numpy scalars the step produces."""
        assert _sign(np.float64(3.5)) == 1
        assert _sign(np.float64(-0.1)) == -1
        assert _sign(np.float64(0.0)) == 0
        assert _sign(2.0) == 1

    def test_multistep_fall_with_drag_completes(self):
        """A fall lasting many steps runs to the ground."""
        integrator = FreefallIntegrator(SimConfig(initial_altitude=200.0, drag=True))
        summary = integrator.run()

        assert summary.termination == TerminalCondition.GROUND
        assert summary.steps > 2
        assert isinstance(summary.end_speed, float)

    def test_summary_maxima(self):
        """Summary maxima agree with the series."""
        summary = simulate(SimConfig(initial_altitude=3000.0, drag=True))
        assert summary.max_speed == pytest.approx(summary.series.speed.max())
        assert summary.max_kinetic_energy == pytest.approx(summary.series.ke.max())


# =============================================================================
# Launch Tests
# =============================================================================


class TestLaunch:
    """Test the spring launch integrator."""

    def test_no_spring_energy_single_sample(self):
        """k = 0 or x = 0 gives v0 = 0 and a single sample."""
        for config in (
            launch_config(spring_constant=0.0),
            launch_config(spring_compression=0.0),
        ):
            integrator = LaunchIntegrator(config)
            assert integrator.initial_speed == 0.0

            summary = integrator.run()
            assert len(summary.series) == 1
            assert summary.termination == TerminalCondition.GROUND

    def test_launch_speed_from_spring(self):
        """0.5 k x^2 = 0.5 m v0^2."""
        integrator = LaunchIntegrator(launch_config())
        assert integrator.elastic_energy == pytest.approx(1250.0)
        assert integrator.initial_speed == pytest.approx(50.0)
        assert integrator.state.vx == pytest.approx(50.0 / np.sqrt(2))
        assert integrator.state.vy == pytest.approx(50.0 / np.sqrt(2))

    def test_projectile_closed_form(self):
        """No drag, constant g: height and range match projectile formulas."""
        v0, g, dt = 50.0, 10.0, 0.001
        summary = simulate(launch_config())
        series = summary.series

        angle = np.radians(45.0)
        h_max = v0**2 * np.sin(angle) ** 2 / (2 * g)
        x_range = v0**2 * np.sin(2 * angle) / g

        assert summary.termination == TerminalCondition.GROUND
        assert_allclose(series.altitude.max(), h_max, atol=2 * v0 * dt)
        assert_allclose(series.horizontal[-1], x_range, atol=2 * v0 * dt)
        assert series.altitude[-1] == 0.0

    def test_drag_shortens_flight(self):
        """Drag lowers the apex, shortens the range and produces heat."""
        vacuum = simulate(launch_config())
        dragged = simulate(launch_config(drag=True))

        assert dragged.series.altitude.max() < vacuum.series.altitude.max()
        assert dragged.series.horizontal[-1] < vacuum.series.horizontal[-1]
        assert dragged.energy_dissipated > 0
        assert np.all(np.diff(dragged.series.dissipated) >= 0)

    def test_drag_opposes_velocity(self):
        """Horizontal speed only decays under drag."""
        summary = simulate(launch_config(drag=True, drag_coefficient=1.0, reference_area=0.1))
        vx = np.diff(summary.series.horizontal) / 0.001
        assert np.all(np.diff(vx) <= 1e-9)
        assert np.all(vx > 0)

    def test_series_invariants(self):
        """Launch series include horizontal position with equal length."""
        series = simulate(launch_config(drag=True)).series

        assert series.horizontal is not None
        assert len(series.horizontal) == len(series)
        assert np.all(np.diff(series.time) > 0)
        assert np.all(series.altitude >= 0)

    def test_launch_ignores_initial_altitude(self):
        """The driver pins launches to the ground."""
        config = launch_config(initial_altitude=500.0)
        assert prepare(config).initial_altitude == 0.0
        assert simulate(config).series.altitude.max() < 100.0


# =============================================================================
# Loop Guard Tests
# =============================================================================


class TestLoopGuards:
    """Every run must terminate."""

    def test_freefall_time_limit(self):
        """A short time ceiling stops a long fall."""
        summary = simulate(SimConfig(time_limit=5.0))

        assert summary.termination == TerminalCondition.TIME_LIMIT
        assert 5.0 <= summary.end_time < 5.0 + 2 * 0.05
        assert summary.series.altitude[-1] > 0

    def test_freefall_hard_stop(self):
        """The freefall hard stop applies even with a larger time ceiling."""
        summary = simulate(SimConfig(time_limit=10000.0, hard_stop=5.0))

        assert summary.termination == TerminalCondition.TIME_LIMIT
        assert 5.0 < summary.end_time <= 5.0 + 2 * 0.05

    def test_launch_time_limit(self):
        """A launch that would fly for minutes stops at the ceiling."""
        config = launch_config(
            spring_constant=1e6, spring_compression=10.0, launch_angle=90.0,
            dt=0.01, time_limit=10.0,
        )
        summary = simulate(config)

        assert summary.termination == TerminalCondition.TIME_LIMIT
        assert summary.end_time >= 10.0

    def test_pathological_dt_bounded(self):
        """A tiny time step is cut off by the step ceiling."""
        max_steps = 10_000
        config = SimConfig(dt=1e-6, max_steps=max_steps)

        start = time.perf_counter()
        summary = simulate(config)
        elapsed = time.perf_counter() - start

        assert summary.termination == TerminalCondition.STEP_LIMIT
        assert summary.steps == max_steps
        assert len(summary.series) == max_steps
        assert elapsed < 30.0

    def test_pathological_dt_launch_bounded(self):
        """The step ceiling also bounds launches."""
        summary = simulate(launch_config(dt=1e-6, max_steps=5_000))

        assert summary.termination == TerminalCondition.STEP_LIMIT
        assert summary.steps == 5_000

    def test_ceiling_is_logged(self, caplog):
        """Hitting a ceiling is reported as a warning, not raised."""
        with caplog.at_level(logging.WARNING, logger="freefall.simulation.integrators"):
            simulate(SimConfig(time_limit=1.0))
        assert "time_limit" in caplog.text


# =============================================================================
# Driver Tests
# =============================================================================


class TestDriver:
    """Test the simulation entry points."""

    def test_integrator_selection(self):
        """The scenario picks the integrator once."""
        assert isinstance(integrator_for(SimConfig()), FreefallIntegrator)
        assert isinstance(integrator_for(launch_config()), LaunchIntegrator)

    def test_manual_stepping_matches_simulate(self):
        """Driving step/is_terminal by hand gives the same run."""
        config = SimConfig(initial_altitude=500.0, drag=True)
        integrator = integrator_for(config)
        while not integrator.is_terminal():
            integrator.step()
        manual = integrator.summarize()
        auto = simulate(config)

        assert manual.termination == auto.termination
        for name in SERIES_FIELDS:
            assert np.array_equal(getattr(manual.series, name), getattr(auto.series, name))

    def test_deterministic(self):
        """Identical configurations give identical series."""
        config = SimConfig(
            initial_altitude=3000.0, drag=True, gravity_model=GravityModel.REALISTIC,
        )
        first = simulate(config)
        second = simulate(config)

        for name in SERIES_FIELDS:
            assert np.array_equal(getattr(first.series, name), getattr(second.series, name))
        assert first.end_time == second.end_time

    def test_comparison_pair(self):
        """The comparison twin is the same run with drag off."""
        config = SimConfig(initial_altitude=3000.0, drag=True)
        pair = simulate_comparison(config)
        again = simulate_comparison(config)
        alone = simulate(config.replace(drag=False))

        assert pair.no_drag.energy_dissipated == 0.0
        assert pair.primary.energy_dissipated > 0.0
        assert pair.no_drag.max_speed > pair.primary.max_speed
        assert pair.no_drag.end_time < pair.primary.end_time
        for name in SERIES_FIELDS:
            assert np.array_equal(getattr(pair.no_drag.series, name), getattr(alone.series, name))
            assert np.array_equal(getattr(pair.primary.series, name), getattr(again.primary.series, name))

    def test_comparison_launch(self):
        """Comparison mode works for launches too."""
        pair = simulate_comparison(launch_config(drag=True))
        assert pair.no_drag.series.horizontal[-1] > pair.primary.series.horizontal[-1]


# =============================================================================
# Initial Potential Energy Tests
# =============================================================================


class TestInitialPotentialEnergy:
    """Test the standalone GPE helper."""

    def test_simplified(self):
        """m * 10 * h0."""
        assert initial_potential_energy(118.0, 39045.0, GravityModel.SIMPLIFIED) == pytest.approx(
            46073100.0
        )

    def test_realistic_matches_integral(self):
        """Midpoint average of g matches the exact integral of g(h)."""
        m, h0 = 118.0, 39045.0
        exact = m * G0 * R_EARTH * h0 / (R_EARTH + h0)
        assert_allclose(
            initial_potential_energy(m, h0, GravityModel.REALISTIC), exact, rtol=1e-6,
        )

    def test_realistic_below_simplified(self):
        """Realistic gravity stores less energy than g = 10."""
        realistic = initial_potential_energy(118.0, 39045.0, GravityModel.REALISTIC)
        simplified = initial_potential_energy(118.0, 39045.0, GravityModel.SIMPLIFIED)
        assert realistic < simplified

    def test_integer_inputs(self):
        """Integer mass and altitude are accepted."""
        assert initial_potential_energy(118, 39045) == pytest.approx(46073100.0)
        assert isinstance(initial_potential_energy(118, 39045), float)
        assert initial_potential_energy(118, 1000, GravityModel.REALISTIC) == pytest.approx(
            initial_potential_energy(118.0, 1000.0, GravityModel.REALISTIC)
        )

    def test_ground(self):
        """No altitude, no potential energy."""
        assert initial_potential_energy(118.0, 0.0, GravityModel.REALISTIC) == 0.0
        assert initial_potential_energy(118.0, 0.0, GravityModel.SIMPLIFIED) == 0.0
