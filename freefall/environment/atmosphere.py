"""Isothermal exponential atmosphere.

Density falls off with altitude as

    rho(h) = rho0 * exp(-h / H)

where H is the atmospheric scale height. Negative altitudes are treated as
sea level, so the model never returns a density above rho0.

Example:
    >>> from freefall.environment import air_density
    >>>
    >>> air_density(0.0, 1.225, 8500.0)
    1.225
    >>> air_density(8500.0, 1.225, 8500.0)  # rho0 / e
    0.4506...
"""

import numpy as np
from beartype import beartype
from numba import njit
from numpy.typing import NDArray

# =============================================================================
# Constants
# =============================================================================

RHO0 = 1.225  # Sea level density [kg/m^3]
SCALE_HEIGHT = 8500.0  # Scale height [m]


# =============================================================================
# Numba-Optimized Core Functions
# =============================================================================


@njit(cache=True)
def _exponential_density(altitude: float, rho0: float, scale_height: float) -> float:
    """Numba-optimized exponential density with sea level clamp."""
    h = altitude if altitude > 0.0 else 0.0
    return rho0 * np.exp(-h / scale_height)


# =============================================================================
# Public API
# =============================================================================


@beartype
def air_density(
    altitude: float,
    rho0: float = RHO0,
    scale_height: float = SCALE_HEIGHT,
) -> float:
    """Get air density at altitude.

    Args:
        altitude: Geometric altitude [m]
        rho0: Sea level density [kg/m^3]
        scale_height: Atmospheric scale height [m]

    Returns:
        Density [kg/m^3]
    """
    return float(_exponential_density(altitude, rho0, scale_height))


@beartype
def density_profile(
    altitudes: NDArray[np.float64] | list[float],
    rho0: float = RHO0,
    scale_height: float = SCALE_HEIGHT,
) -> NDArray[np.float64]:
    """Get density over a range of altitudes.

    Args:
        altitudes: Array of altitudes [m]
        rho0: Sea level density [kg/m^3]
        scale_height: Atmospheric scale height [m]

    Returns:
        Array of densities [kg/m^3]
    """
    altitudes = np.asarray(altitudes, dtype=np.float64)
    return rho0 * np.exp(-np.maximum(altitudes, 0.0) / scale_height)
