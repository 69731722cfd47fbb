"""Energy bookkeeping for a point mass.

Pure functions for the quantities tracked in every time series:

- Gravitational potential energy: GPE = m * g * h
- Kinetic energy: KE = 0.5 * m * v^2
- Quadratic drag: F_d = 0.5 * rho * Cd * A * v^2, acting against the velocity
- Drag power: P = F_d * |v|, the rate at which mechanical energy becomes heat
- Elastic energy of the launch spring: EPE = 0.5 * k * x^2

Example:
    >>> from freefall.energy import kinetic_energy, potential_energy
    >>>
    >>> potential_energy(118.0, 10.0, 39045.0)  # J
    46073100.0
    >>> kinetic_energy(118.0, 10.0)  # J
    5900.0
"""

import numpy as np
from beartype import beartype


@beartype
def potential_energy(mass: float, gravity_accel: float, altitude: float) -> float:
    """Gravitational potential energy relative to the ground [J]."""
    return mass * gravity_accel * altitude


@beartype
def kinetic_energy(mass: float, speed: float) -> float:
    """Kinetic energy [J].

    Args:
        mass: Body mass [kg]
        speed: Magnitude of the velocity in any number of dimensions [m/s]
    """
    return 0.5 * mass * speed * speed


@beartype
def drag_force(
    density: float,
    drag_coefficient: float,
    area: float,
    speed: float,
) -> float:
    """Magnitude of the quadratic drag force.

    The force always acts along the reversed velocity direction; callers
    resolve it into components.

    Args:
        density: Air density [kg/m^3]
        drag_coefficient: Drag coefficient Cd [-]
        area: Reference area [m^2]
        speed: Speed relative to the air [m/s]

    Returns:
        Drag force magnitude [N]
    """
    return 0.5 * density * drag_coefficient * area * speed * speed


@beartype
def drag_power(force: float, speed: float) -> float:
    """Instantaneous power dissipated to heat by drag [W]."""
    return force * abs(speed)


@beartype
def elastic_potential_energy(spring_constant: float, compression: float) -> float:
    """Energy stored in an ideal compressed spring [J]."""
    return 0.5 * spring_constant * compression * compression


@beartype
def launch_speed(elastic_energy: float, mass: float) -> float:
    """Speed at which the spring releases the body [m/s].

    All stored elastic energy becomes kinetic energy. Returns 0 when there is
    no stored energy or the mass is not positive.
    """
    if elastic_energy <= 0 or mass <= 0:
        return 0.0
    return float(np.sqrt(2.0 * elastic_energy / mass))
