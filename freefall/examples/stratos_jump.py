#!/usr/bin/env python
"""Stratosphere jump energy example.

Drops a 118 kg jumper from 39,045 m, the altitude of the 2012 Red Bull
Stratos jump, and follows the energy from potential to kinetic to heat:
1. Vacuum-like fall with simplified gravity (closed form check)
2. Fall with drag in an exponential atmosphere and realistic gravity
3. Save charts and data
"""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from freefall import (
    GravityModel,
    SimConfig,
    apply_preset,
    format_run_summary,
    initial_potential_energy,
    plot_dashboard,
    simulate,
)


def main() -> None:
    """Run the stratosphere jump example."""

    print("=" * 60)
    print("STRATOSPHERE JUMP")
    print("=" * 60)

    # =========================================================================
    # 1. No drag, simplified gravity
    # =========================================================================
    print("\n1. Fall without drag (g = 10 m/s^2)...")

    config = SimConfig(mass=118.0, initial_altitude=39045.0, dt=0.05)
    summary = simulate(config)

    v_closed = np.sqrt(2 * 10.0 * config.initial_altitude)
    print(f"   Final speed:     {summary.end_speed:.1f} m/s")
    print(f"   Closed form:     {v_closed:.1f} m/s")
    print(f"   Fall time:       {summary.end_time:.1f} s")

    # =========================================================================
    # 2. Drag and realistic gravity
    # =========================================================================
    print("\n2. Fall with drag (spread position, realistic gravity)...")

    drag_config = apply_preset(
        config.replace(drag=True, gravity_model=GravityModel.REALISTIC),
        "spread",
    )
    drag_summary = simulate(drag_config)
    print(format_run_summary(drag_summary, drag_config))

    gpe0 = initial_potential_energy(
        drag_config.mass, drag_config.initial_altitude, drag_config.gravity_model,
    )
    heat_fraction = drag_summary.energy_dissipated / gpe0
    print(f"   Share of GPE lost as heat: {heat_fraction:.1%}")

    # =========================================================================
    # 3. Save results
    # =========================================================================
    print("\n3. Saving results...")

    output_dir = Path("outputs/stratos_jump")
    output_dir.mkdir(parents=True, exist_ok=True)

    fig = plot_dashboard(
        drag_summary.series, summary.series, title="Stratosphere jump: drag vs no drag",
    )
    fig.savefig(output_dir / "dashboard.png", dpi=100)
    plt.close(fig)
    print(f"   Plot saved: {output_dir}/dashboard.png")

    drag_summary.series.save_csv(output_dir / "series.csv")
    print(f"   Data saved: {output_dir}/series.csv")

    print("\n" + "=" * 60)
    print("SIMULATION COMPLETE")
    print("=" * 60)


if __name__ == "__main__":
    main()
