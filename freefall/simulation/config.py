"""Run configuration for freefall and launch simulations.

A `SimConfig` is immutable and fully describes one run. Values can come
straight from Python, from a loose mapping of form values (strings allowed),
or from JSON.

Example:
    >>> from freefall.simulation import SimConfig, Scenario
    >>>
    >>> config = SimConfig(mass=118.0, initial_altitude=39045.0, drag=True)
    >>> launch = config.replace(
    ...     scenario=Scenario.LAUNCH,
    ...     spring_constant=2500.0,
    ...     spring_compression=1.0,
    ... )
    >>> SimConfig.from_mapping({"mass": "80", "gravity_model": "realistic"})
"""

import dataclasses
import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from beartype import beartype

from freefall.environment.atmosphere import RHO0, SCALE_HEIGHT
from freefall.environment.gravity import GravityModel

# =============================================================================
# Loop Guards
# =============================================================================

TIME_LIMIT = 2000.0  # Simulated time ceiling for both scenarios [s]
HARD_STOP = 3600.0  # Additional freefall stop [s]
MAX_STEPS = 2_000_000  # Iteration ceiling, bounds runs with tiny dt


# =============================================================================
# Scenario Enum
# =============================================================================


class Scenario(Enum):
    """Available simulation scenarios."""

    FREEFALL = "freefall"  # Vertical drop from rest
    LAUNCH = "launch"      # 2D projectile fired by a spring from the ground


# =============================================================================
# Configuration
# =============================================================================


@beartype
@dataclass(frozen=True)
class SimConfig:
    """Simulation configuration.

    Defaults reproduce the 2012 Red Bull Stratos jump in the classroom
    setting: simplified gravity, no drag.

    Attributes:
        mass: Body mass [kg]
        initial_altitude: Drop altitude [m] (ignored for launch)
        dt: Time step [s]
        drag: Whether to model air drag
        gravity_model: Gravity model
        drag_coefficient: Drag coefficient Cd [-]
        reference_area: Frontal area [m^2]
        sea_level_density: Air density at sea level [kg/m^3]
        scale_height: Atmospheric scale height [m]
        scenario: Freefall drop or spring launch
        spring_constant: Launch spring constant k [N/m]
        spring_compression: Launch spring compression x [m]
        launch_angle: Launch elevation above horizontal [degrees]
        time_limit: Simulated time ceiling [s]
        hard_stop: Additional freefall stop [s]
        max_steps: Iteration ceiling
    """
    mass: float | int = 118.0
    initial_altitude: float | int = 39045.0
    dt: float | int = 0.05
    drag: bool = False
    gravity_model: GravityModel = GravityModel.SIMPLIFIED
    drag_coefficient: float | int = 1.0
    reference_area: float | int = 0.8
    sea_level_density: float | int = RHO0
    scale_height: float | int = SCALE_HEIGHT
    scenario: Scenario = Scenario.FREEFALL
    spring_constant: float | int = 0.0
    spring_compression: float | int = 0.0
    launch_angle: float | int = 45.0
    time_limit: float | int = TIME_LIMIT
    hard_stop: float | int = HARD_STOP
    max_steps: int = MAX_STEPS

    def __post_init__(self) -> None:
        # Integer inputs are stored as floats
        for f in dataclasses.fields(self):
            if isinstance(f.default, float):
                object.__setattr__(self, f.name, float(getattr(self, f.name)))

    def replace(self, **changes: Any) -> "SimConfig":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain Python types."""
        data = dataclasses.asdict(self)
        data["gravity_model"] = self.gravity_model.value
        data["scenario"] = self.scenario.value
        return data

    def to_json(self) -> str:
        """Serialize to JSON."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> "SimConfig":
        """Deserialize from JSON."""
        return cls.from_mapping(json.loads(json_str))

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "SimConfig":
        """Build a configuration from loosely typed values.

        Numbers may be given as strings (as read from a form), booleans as
        "true"/"false"/"on"/"off", and enums by their string value. Missing
        keys keep their defaults.

        Raises:
            ValueError: If a key is not a configuration field or a value
                cannot be converted.
        """
        fields = {f.name: f for f in dataclasses.fields(cls)}
        unknown = sorted(set(values) - set(fields))
        if unknown:
            raise ValueError(f"Unknown configuration keys {unknown}. Available: {sorted(fields)}")

        kwargs: dict[str, Any] = {}
        for name, raw in values.items():
            default = fields[name].default
            kwargs[name] = _coerce(name, raw, default)
        return cls(**kwargs)


def _coerce(name: str, raw: Any, default: Any) -> Any:
    """Convert a raw value to the type of the field default."""
    if isinstance(default, Enum):
        enum_cls = type(default)
        if isinstance(raw, enum_cls):
            return raw
        try:
            return enum_cls(str(raw).strip().lower())
        except ValueError:
            available = [m.value for m in enum_cls]
            raise ValueError(f"Unknown {name} '{raw}'. Available: {available}") from None
    if isinstance(default, bool):
        if isinstance(raw, bool):
            return raw
        text = str(raw).strip().lower()
        if text in ("true", "on", "yes", "1"):
            return True
        if text in ("false", "off", "no", "0", ""):
            return False
        raise ValueError(f"Cannot interpret {name}={raw!r} as a boolean")
    try:
        if isinstance(default, int):
            return int(float(raw))
        return float(raw)
    except (TypeError, ValueError):
        raise ValueError(f"Cannot interpret {name}={raw!r} as a number") from None


# =============================================================================
# Advisory Checks
# =============================================================================


@beartype
def check_config(config: SimConfig) -> list[str]:
    """List physically meaningless values in a configuration.

    The integrators do not validate their inputs; a zero mass, for example,
    produces NaN samples rather than an error. This helper lets callers warn
    the user before running.

    Returns:
        Warning messages, empty if the configuration looks sensible
    """
    warnings: list[str] = []

    if config.mass <= 0:
        warnings.append(f"Mass must be positive, got {config.mass} kg")
    if config.dt <= 0:
        warnings.append(f"Time step must be positive, got {config.dt} s")
    if config.scale_height <= 0:
        warnings.append(f"Scale height must be positive, got {config.scale_height} m")
    if config.sea_level_density <= 0:
        warnings.append(f"Sea level density must be positive, got {config.sea_level_density} kg/m^3")
    if config.initial_altitude < 0:
        warnings.append(f"Initial altitude is negative ({config.initial_altitude} m)")
    if config.drag_coefficient < 0:
        warnings.append(f"Drag coefficient is negative ({config.drag_coefficient})")
    if config.reference_area < 0:
        warnings.append(f"Reference area is negative ({config.reference_area} m^2)")

    if config.scenario == Scenario.LAUNCH:
        if config.spring_constant < 0:
            warnings.append(f"Spring constant is negative ({config.spring_constant} N/m)")
        if config.spring_compression < 0:
            warnings.append(f"Spring compression is negative ({config.spring_compression} m)")
        if not 0 <= config.launch_angle <= 90:
            warnings.append(f"Launch angle {config.launch_angle} deg is outside 0-90 deg")

    if config.dt > 0 and config.time_limit / config.dt > config.max_steps:
        warnings.append(
            f"Time step {config.dt} s needs more than {config.max_steps} steps "
            f"to reach the {config.time_limit} s ceiling; the step ceiling may end the run"
        )

    return warnings
