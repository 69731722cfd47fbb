"""Fixed-step integrators for the freefall and launch scenarios.

Both scenarios share the environment and energy models but step differently:

- Freefall: semi-implicit Euler. Velocity is advanced first and the altitude
  update uses the average of the old and new speed. With constant gravity
  and no drag this reproduces the exact constant-acceleration trajectory.
- Launch: explicit Euler on a planar projectile. Velocity first, then
  position with the updated velocity.

Drag power is integrated with the speed at the start of each step (left
rectangle rule), which matches the drag force used for that step's
acceleration.

Every run is bounded by the simulated time ceiling and the iteration
ceiling from `SimConfig`; a run that hits one of them is labelled, not
raised. The integrators do not validate their inputs: a zero mass yields
non-finite samples rather than an error.

Example:
    >>> from freefall.simulation import FreefallIntegrator, SimConfig
    >>>
    >>> integrator = FreefallIntegrator(SimConfig(initial_altitude=1000.0))
    >>> while not integrator.is_terminal():
    ...     integrator.step()
    >>> summary = integrator.summarize()
"""

import logging
import math
from abc import ABC, abstractmethod

import numpy as np
from beartype import beartype

from freefall.energy import (
    drag_force,
    drag_power,
    elastic_potential_energy,
    kinetic_energy,
    launch_speed,
    potential_energy,
)
from freefall.environment.atmosphere import air_density
from freefall.environment.gravity import gravity
from freefall.simulation.config import Scenario, SimConfig
from freefall.simulation.results import RunSummary, TerminalCondition, TimeSeries
from freefall.simulation.state import FreefallState, LaunchState

logger = logging.getLogger(__name__)

SPEED_EPSILON = 1e-8  # Floor on speed in the drag direction divisor [m/s]


def _sign(value: float) -> int:
    return int(value > 0) - int(value < 0)


# =============================================================================
# Integrator Base
# =============================================================================


class Integrator(ABC):
    """One integration run of a scenario.

    Subclasses own their state and implement `step`, `is_terminal` and
    `termination`. The base class records samples and builds the summary.
    """

    scenario: Scenario

    def __init__(self, config: SimConfig) -> None:
        self.config = config
        self.steps = 0
        # numpy scalar so a zero mass gives inf/nan instead of ZeroDivisionError
        self._mass = np.float64(config.mass)
        self._dissipated = 0.0
        self._max_speed = 0.0
        self._max_ke = 0.0
        self._time: list[float] = []
        self._gpe: list[float] = []
        self._ke: list[float] = []
        self._diss: list[float] = []
        self._speed: list[float] = []
        self._altitude: list[float] = []
        self._horizontal: list[float] | None = None

    @abstractmethod
    def step(self) -> None:
        """Advance the state by one time step and record one sample."""

    @abstractmethod
    def is_terminal(self) -> bool:
        """True once the run must stop."""

    @abstractmethod
    def termination(self) -> TerminalCondition:
        """Reason the run stopped, by priority."""

    @property
    @abstractmethod
    def end_speed(self) -> float:
        """Speed reported for the end of the run [m/s]."""

    @property
    @abstractmethod
    def time(self) -> float:
        """Elapsed simulated time [s]."""

    def _record(
        self,
        time: float,
        gpe: float,
        ke: float,
        speed: float,
        altitude: float,
        horizontal: float | None = None,
    ) -> None:
        self._time.append(time)
        self._gpe.append(gpe)
        self._ke.append(ke)
        self._diss.append(self._dissipated)
        self._speed.append(speed)
        self._altitude.append(altitude)
        if horizontal is not None:
            if self._horizontal is None:
                self._horizontal = []
            self._horizontal.append(horizontal)

    def _steps_exhausted(self) -> bool:
        return self.steps >= self.config.max_steps

    def run(self) -> RunSummary:
        """Step until a terminal condition and summarize."""
        logger.debug(
            "Starting %s run: dt=%s, drag=%s, gravity=%s",
            self.scenario.value, self.config.dt, self.config.drag,
            self.config.gravity_model.value,
        )
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            while not self.is_terminal():
                self.step()
        return self.summarize()

    def summarize(self) -> RunSummary:
        """Freeze the recorded samples into a RunSummary."""
        termination = self.termination()
        if termination == TerminalCondition.GROUND:
            logger.debug(
                "%s run reached the ground at t=%.3f s after %d steps",
                self.scenario.value, self.time, self.steps,
            )
        else:
            logger.warning(
                "%s run stopped by %s at t=%.3f s after %d steps",
                self.scenario.value, termination.value, self.time, self.steps,
            )

        series = TimeSeries.from_samples(
            time=self._time,
            gpe=self._gpe,
            ke=self._ke,
            dissipated=self._diss,
            speed=self._speed,
            altitude=self._altitude,
            horizontal=self._horizontal,
        )

        return RunSummary(
            end_time=float(self.time),
            end_speed=float(self.end_speed),
            max_kinetic_energy=float(self._max_ke),
            max_speed=float(self._max_speed),
            energy_dissipated=float(self._dissipated),
            series=series,
            termination=termination,
            scenario=self.scenario,
            steps=self.steps,
        )


# =============================================================================
# Vertical Freefall
# =============================================================================


@beartype
class FreefallIntegrator(Integrator):
    """Vertical drop from rest, speed positive downward."""

    scenario = Scenario.FREEFALL

    def __init__(self, config: SimConfig) -> None:
        super().__init__(config)
        self.state = FreefallState(time=0.0, altitude=config.initial_altitude, speed=0.0)

    @property
    def time(self) -> float:
        return self.state.time

    @property
    def end_speed(self) -> float:
        return abs(self.state.speed)

    def _on_ground(self) -> bool:
        # NaN altitude counts as grounded
        return not self.state.altitude > 0

    def _out_of_time(self) -> bool:
        t = self.state.time
        return not t < self.config.time_limit or t > self.config.hard_stop

    def is_terminal(self) -> bool:
        return self._on_ground() or self._out_of_time() or self._steps_exhausted()

    def termination(self) -> TerminalCondition:
        if self._on_ground():
            return TerminalCondition.GROUND
        if self._out_of_time():
            return TerminalCondition.TIME_LIMIT
        return TerminalCondition.STEP_LIMIT

    def step(self) -> None:
        cfg = self.config
        s = self.state
        m = self._mass
        v = s.speed
        h = s.altitude

        g = gravity(h, cfg.gravity_model)
        rho = air_density(h, cfg.sea_level_density, cfg.scale_height)

        # Forces along the vertical, down positive
        weight = m * g
        drag = drag_force(rho, cfg.drag_coefficient, cfg.reference_area, v) if cfg.drag else 0.0
        a = (weight - drag * _sign(v)) / m

        v_next = v + a * cfg.dt
        h_next = max(0.0, h - ((v + v_next) / 2) * cfg.dt)

        ke = kinetic_energy(m, v_next)
        if cfg.drag:
            self._dissipated += drag_power(drag, v) * cfg.dt
        gpe = potential_energy(m, g, h_next)

        self._max_ke = max(self._max_ke, ke)
        self._max_speed = max(self._max_speed, abs(v_next))
        self._record(s.time, gpe, ke, abs(v_next), h_next)

        s.time += cfg.dt
        s.speed = v_next
        s.altitude = h_next
        self.steps += 1


# =============================================================================
# Spring Launch
# =============================================================================


@beartype
class LaunchIntegrator(Integrator):
    """Planar projectile fired from the ground by a compressed spring."""

    scenario = Scenario.LAUNCH

    def __init__(self, config: SimConfig) -> None:
        super().__init__(config)
        self.elastic_energy = elastic_potential_energy(
            config.spring_constant, config.spring_compression,
        )
        self.initial_speed = launch_speed(self.elastic_energy, config.mass)
        angle = math.radians(config.launch_angle)
        self.state = LaunchState(
            time=0.0,
            x=0.0,
            y=0.0,
            vx=self.initial_speed * math.cos(angle),
            vy=self.initial_speed * math.sin(angle),
        )
        self._impact = False
        self._horizontal = []

    @property
    def time(self) -> float:
        return self.state.time

    @property
    def end_speed(self) -> float:
        return self._speed[-1] if self._speed else 0.0

    def _out_of_time(self) -> bool:
        return not self.state.time < self.config.time_limit

    def is_terminal(self) -> bool:
        return (
            self._impact
            or not self.state.y >= 0
            or self._out_of_time()
            or self._steps_exhausted()
        )

    def termination(self) -> TerminalCondition:
        if self._impact or not self.state.y >= 0:
            return TerminalCondition.GROUND
        if self._out_of_time():
            return TerminalCondition.TIME_LIMIT
        return TerminalCondition.STEP_LIMIT

    def step(self) -> None:
        cfg = self.config
        s = self.state
        m = self._mass
        dt = cfg.dt

        g = gravity(s.y, cfg.gravity_model)
        rho = air_density(s.y, cfg.sea_level_density, cfg.scale_height)
        speed = max(SPEED_EPSILON, s.speed)

        # Drag acts along the reversed velocity direction
        fd = drag_force(rho, cfg.drag_coefficient, cfg.reference_area, speed) if cfg.drag else 0.0
        if fd > 0.0:
            ax = -(fd / m) * (s.vx / speed)
            ay = -g - (fd / m) * (s.vy / speed)
        else:
            ax = 0.0
            ay = -g

        s.vx += ax * dt
        s.vy += ay * dt
        s.x += s.vx * dt
        s.y = max(0.0, s.y + s.vy * dt)

        ke = kinetic_energy(m, s.speed)
        gpe = potential_energy(m, g, s.y)
        self._dissipated += drag_power(fd, speed) * dt

        self._max_speed = max(self._max_speed, speed)
        self._max_ke = max(self._max_ke, ke)
        self._record(s.time, gpe, ke, speed, s.y, s.x)

        s.time += dt
        self.steps += 1
        if s.y == 0 and s.vy < 0:
            self._impact = True
