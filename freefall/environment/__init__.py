"""Environment models for freefall simulation.

Provides the exponential atmosphere and the two selectable gravity models.

Example:
    >>> from freefall.environment import GravityModel, air_density, gravity
    >>>
    >>> rho = air_density(10000.0, rho0=1.225, scale_height=8500.0)  # kg/m^3
    >>> g = gravity(39045.0, GravityModel.REALISTIC)  # m/s^2
"""

from freefall.environment.atmosphere import (
    RHO0,
    SCALE_HEIGHT,
    air_density,
    density_profile,
)
from freefall.environment.gravity import (
    G0,
    G_SIMPLIFIED,
    R_EARTH,
    GravityModel,
    gravity,
)

__all__ = [
    "G0",
    "G_SIMPLIFIED",
    "GravityModel",
    "RHO0",
    "R_EARTH",
    "SCALE_HEIGHT",
    "air_density",
    "density_profile",
    "gravity",
]
