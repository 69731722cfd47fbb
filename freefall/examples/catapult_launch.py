#!/usr/bin/env python
"""Spring catapult launch example.

Fires a 2 kg ball from a compressed spring at several launch angles and
compares flight height and range with and without air drag.
"""

from pathlib import Path

import matplotlib.pyplot as plt

from freefall import (
    Scenario,
    SimConfig,
    elastic_potential_energy,
    launch_speed,
    plot_dashboard,
    simulate,
    simulate_comparison,
)


def main() -> None:
    """Run the catapult example."""

    print("=" * 60)
    print("SPRING CATAPULT")
    print("=" * 60)

    base = SimConfig(
        scenario=Scenario.LAUNCH,
        mass=2.0,
        dt=0.001,
        spring_constant=5000.0,
        spring_compression=0.4,
        drag_coefficient=0.47,
        reference_area=0.01,
    )

    epe = elastic_potential_energy(base.spring_constant, base.spring_compression)
    v0 = launch_speed(epe, base.mass)
    print(f"\n   Spring energy:  {epe:.1f} J")
    print(f"   Launch speed:   {v0:.2f} m/s")

    # =========================================================================
    # Angle sweep
    # =========================================================================
    print("\n   Angle    Height (m)    Range (m)    Range w/ drag (m)")
    print("   " + "-" * 52)
    for angle in (15.0, 30.0, 45.0, 60.0, 75.0):
        config = base.replace(launch_angle=angle)
        vacuum = simulate(config)
        dragged = simulate(config.replace(drag=True))
        print(
            f"   {angle:5.0f}    {vacuum.series.altitude.max():10.2f}    "
            f"{vacuum.series.horizontal[-1]:9.2f}    {dragged.series.horizontal[-1]:17.2f}"
        )

    # =========================================================================
    # Save results
    # =========================================================================
    output_dir = Path("outputs/catapult_launch")
    output_dir.mkdir(parents=True, exist_ok=True)

    pair = simulate_comparison(base.replace(drag=True))
    fig = plot_dashboard(pair.primary.series, pair.no_drag.series, title="Catapult at 45 deg")
    fig.savefig(output_dir / "dashboard.png", dpi=100)
    plt.close(fig)
    pair.primary.save_json(output_dir / "run.json")
    print(f"\n   Outputs saved to {output_dir}/")


if __name__ == "__main__":
    main()
