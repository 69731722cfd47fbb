"""Body position presets for skydiver drag.

A skydiver changes Cd and frontal area by changing posture. The presets are
typical classroom values, not measurements.

Example:
    >>> from freefall.presets import apply_preset
    >>> from freefall.simulation import SimConfig
    >>>
    >>> config = apply_preset(SimConfig(drag=True), "headfirst")
    >>> config.drag_coefficient, config.reference_area
    (0.7, 0.6)
"""

from dataclasses import dataclass

from beartype import beartype

from freefall.simulation.config import SimConfig


@beartype
@dataclass(frozen=True)
class BodyPreset:
    """Drag parameters for one body position.

    Attributes:
        name: Preset identifier
        drag_coefficient: Drag coefficient Cd [-]
        reference_area: Frontal area [m^2]
        description: Human-readable description
    """
    name: str
    drag_coefficient: float
    reference_area: float
    description: str = ""


PRESETS: dict[str, BodyPreset] = {
    "tucked": BodyPreset("tucked", 0.9, 0.7, "Knees pulled in, compact"),
    "spread": BodyPreset("spread", 1.2, 1.0, "Belly to earth, arms and legs spread"),
    "headfirst": BodyPreset("headfirst", 0.7, 0.6, "Head down dive"),
}


@beartype
def get_preset(name: str) -> BodyPreset:
    """Look up a body position preset by name.

    Raises:
        ValueError: If the preset is not defined
    """
    key = name.strip().lower()
    if key not in PRESETS:
        available = ", ".join(sorted(PRESETS))
        raise ValueError(f"Unknown preset '{name}'. Available: {available}")
    return PRESETS[key]


@beartype
def list_presets() -> list[str]:
    """List available preset names."""
    return sorted(PRESETS)


@beartype
def apply_preset(config: SimConfig, name: str) -> SimConfig:
    """Return a copy of `config` with the preset's Cd and area."""
    preset = get_preset(name)
    return config.replace(
        drag_coefficient=preset.drag_coefficient,
        reference_area=preset.reference_area,
    )
