"""Time series and run summaries returned by the integrators.

Both are immutable once built: the series arrays are flagged read-only so a
chart or playback consumer can index them freely without copying.

Example:
    >>> summary = simulate(SimConfig())
    >>> series = summary.series
    >>> len(series), series.time[-1]
    >>> df = series.to_dataframe()
    >>> i = series.index_at_fraction(0.5)  # Sample shown halfway through playback
"""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import numpy as np
import polars as pl
from beartype import beartype
from numpy.typing import NDArray

from freefall.simulation.config import Scenario

# =============================================================================
# Terminal Conditions
# =============================================================================


class TerminalCondition(Enum):
    """Why an integration run stopped."""

    GROUND = "ground"          # Body reached the ground
    TIME_LIMIT = "time_limit"  # Simulated time ceiling reached
    STEP_LIMIT = "step_limit"  # Iteration ceiling reached


# =============================================================================
# Time Series
# =============================================================================


def _frozen(values: list[float] | NDArray[np.float64]) -> NDArray[np.float64]:
    arr = np.array(values, dtype=np.float64)
    arr.setflags(write=False)
    return arr


@beartype
@dataclass(frozen=True, eq=False)
class TimeSeries:
    """Sampled history of one run.

    All arrays share one length. `time` is strictly increasing, `dissipated`
    never decreases and `altitude` is never negative.

    Attributes:
        time: Sample times [s]
        gpe: Gravitational potential energy [J]
        ke: Kinetic energy [J]
        dissipated: Cumulative energy lost to drag [J]
        speed: Speed [m/s]
        altitude: Height above ground [m]
        horizontal: Downrange position [m] (launch only)
    """
    time: NDArray[np.float64]
    gpe: NDArray[np.float64]
    ke: NDArray[np.float64]
    dissipated: NDArray[np.float64]
    speed: NDArray[np.float64]
    altitude: NDArray[np.float64]
    horizontal: NDArray[np.float64] | None = None

    @classmethod
    def from_samples(
        cls,
        time: list[float],
        gpe: list[float],
        ke: list[float],
        dissipated: list[float],
        speed: list[float],
        altitude: list[float],
        horizontal: list[float] | None = None,
    ) -> "TimeSeries":
        """Build a read-only series from per-step sample lists."""
        n = len(time)
        columns = [gpe, ke, dissipated, speed, altitude]
        if horizontal is not None:
            columns.append(horizontal)
        if any(len(c) != n for c in columns):
            raise ValueError("All sample lists must have the same length")

        return cls(
            time=_frozen(time),
            gpe=_frozen(gpe),
            ke=_frozen(ke),
            dissipated=_frozen(dissipated),
            speed=_frozen(speed),
            altitude=_frozen(altitude),
            horizontal=_frozen(horizontal) if horizontal is not None else None,
        )

    def __len__(self) -> int:
        return len(self.time)

    @property
    def is_empty(self) -> bool:
        """True if the run ended before recording any sample."""
        return len(self.time) == 0

    @property
    def duration(self) -> float:
        """Time of the last sample [s]."""
        return float(self.time[-1]) if len(self.time) else 0.0

    @property
    def mechanical_energy(self) -> NDArray[np.float64]:
        """KE + GPE at each sample [J]."""
        return self.ke + self.gpe

    @property
    def total_energy(self) -> NDArray[np.float64]:
        """KE + GPE + dissipated heat at each sample [J]."""
        return self.ke + self.gpe + self.dissipated

    def index_at(self, sim_time: float) -> int:
        """Index of the sample to display at a simulated time.

        Returns the last sample strictly before `sim_time` (the first sample
        for earlier times), clamped to the series.

        Raises:
            ValueError: If the series is empty
        """
        if self.is_empty:
            raise ValueError("Cannot index an empty time series")
        i = int(np.searchsorted(self.time, sim_time, side="left")) - 1
        return min(max(i, 0), len(self.time) - 1)

    def index_at_fraction(self, fraction: float) -> int:
        """Index of the sample to display at a playback fraction in [0, 1]."""
        u = min(max(fraction, 0.0), 1.0)
        duration = self.duration or 1.0
        return self.index_at(u * duration)

    def to_dataframe(self) -> pl.DataFrame:
        """Convert to Polars DataFrame."""
        data = {
            "time": self.time,
            "gpe": self.gpe,
            "ke": self.ke,
            "dissipated": self.dissipated,
            "speed": self.speed,
            "altitude": self.altitude,
        }
        if self.horizontal is not None:
            data["horizontal"] = self.horizontal
        return pl.DataFrame(data)

    def save_csv(self, path: str | Path) -> Path:
        """Write the series to a CSV file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.to_dataframe().write_csv(path)
        return path

    def to_dict(self) -> dict[str, list[float]]:
        """Serialize to plain lists."""
        data = {
            "time": self.time.tolist(),
            "gpe": self.gpe.tolist(),
            "ke": self.ke.tolist(),
            "dissipated": self.dissipated.tolist(),
            "speed": self.speed.tolist(),
            "altitude": self.altitude.tolist(),
        }
        if self.horizontal is not None:
            data["horizontal"] = self.horizontal.tolist()
        return data


# =============================================================================
# Run Summary
# =============================================================================


@beartype
@dataclass(frozen=True, eq=False)
class RunSummary:
    """Results from a completed run.

    Attributes:
        end_time: Elapsed time when the run stopped [s]
        end_speed: Speed at the last sample [m/s]
        max_kinetic_energy: Largest kinetic energy observed [J]
        max_speed: Largest speed observed [m/s]
        energy_dissipated: Total energy lost to drag [J]
        series: Full time series
        termination: Why the run stopped
        scenario: Scenario that produced the run
        steps: Number of integration steps taken
    """
    end_time: float
    end_speed: float
    max_kinetic_energy: float
    max_speed: float
    energy_dissipated: float
    series: TimeSeries
    termination: TerminalCondition
    scenario: Scenario
    steps: int

    @property
    def reached_ground(self) -> bool:
        """True if the run ended on ground contact."""
        return self.termination == TerminalCondition.GROUND

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain Python types."""
        return {
            "scenario": self.scenario.value,
            "termination": self.termination.value,
            "steps": self.steps,
            "end_time": self.end_time,
            "end_speed": self.end_speed,
            "max_kinetic_energy": self.max_kinetic_energy,
            "max_speed": self.max_speed,
            "energy_dissipated": self.energy_dissipated,
            "series": self.series.to_dict(),
        }

    def save_json(self, path: str | Path) -> Path:
        """Write the summary and series to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f)
        return path


@beartype
@dataclass(frozen=True, eq=False)
class ComparisonResult:
    """A run paired with the same run with drag switched off.

    Attributes:
        primary: Run with the configuration as given
        no_drag: Identical run without drag, for overlay charts
    """
    primary: RunSummary
    no_drag: RunSummary
