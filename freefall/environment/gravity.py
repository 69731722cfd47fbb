"""Gravity models for freefall simulation.

Models available:
- Simplified: constant g = 10 m/s^2. A classroom rounding of 9.81 that keeps
  the mental arithmetic easy; it is intentionally not the standard value.
- Realistic: inverse-square falloff from standard gravity at the surface,
  g(h) = g0 * (R / (R + h))^2

Example:
    >>> from freefall.environment import GravityModel, gravity
    >>>
    >>> gravity(0.0, GravityModel.SIMPLIFIED)
    10.0
    >>> gravity(0.0, GravityModel.REALISTIC)
    9.80665
"""

from enum import Enum

from beartype import beartype
from numba import njit

# =============================================================================
# Constants
# =============================================================================

G0: float = 9.80665  # Standard gravity [m/s^2]
R_EARTH: float = 6_371_000.0  # Mean Earth radius [m]
G_SIMPLIFIED: float = 10.0  # Classroom gravity [m/s^2]


# =============================================================================
# Gravity Model Enum
# =============================================================================


class GravityModel(Enum):
    """Available gravity models."""

    SIMPLIFIED = "simplified"  # Constant 10 m/s^2
    REALISTIC = "realistic"    # Inverse-square with altitude


# =============================================================================
# Numba-Optimized Core Functions
# =============================================================================


@njit(cache=True)
def _inverse_square_gravity(altitude: float, g0: float = G0, r: float = R_EARTH) -> float:
    """Numba-optimized inverse-square gravity magnitude."""
    h = altitude if altitude > 0.0 else 0.0
    ratio = r / (r + h)
    return g0 * ratio * ratio


# =============================================================================
# Public API
# =============================================================================


@beartype
def gravity(altitude: float, model: GravityModel = GravityModel.SIMPLIFIED) -> float:
    """Get gravitational acceleration magnitude at altitude.

    Args:
        altitude: Altitude above the surface [m]
        model: Gravity model

    Returns:
        Gravity magnitude [m/s^2]
    """
    if model == GravityModel.SIMPLIFIED:
        return G_SIMPLIFIED
    if model == GravityModel.REALISTIC:
        return float(_inverse_square_gravity(altitude, G0, R_EARTH))
    raise ValueError(f"Unknown gravity model: {model}")
