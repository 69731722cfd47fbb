"""Mutable integration state for a single run.

Each integrator owns exactly one state object, advances it in place, and
discards it once the run is summarized.

Sign conventions:
- Freefall: altitude above ground, speed positive downward
- Launch: x downrange, y height above ground, vy positive upward
"""

from dataclasses import dataclass


@dataclass
class FreefallState:
    """Vertical drop state.

    Attributes:
        time: Elapsed time [s]
        altitude: Height above ground [m]
        speed: Downward speed [m/s]
    """
    time: float
    altitude: float
    speed: float = 0.0


@dataclass
class LaunchState:
    """Planar projectile state.

    Attributes:
        time: Elapsed time [s]
        x: Horizontal position [m]
        y: Height above ground [m]
        vx: Horizontal velocity [m/s]
        vy: Vertical velocity, positive up [m/s]
    """
    time: float
    x: float
    y: float
    vx: float
    vy: float

    @property
    def speed(self) -> float:
        """Velocity magnitude [m/s]."""
        return (self.vx * self.vx + self.vy * self.vy) ** 0.5
