"""
Earth and Moon: two-body orbit with logging.

Demonstrates:
- Planet components in a Universe
- Fixed-step integration with CSV logging
- Reading the log back with pandas
"""
import time
from pathlib import Path
import sys

import numpy as np

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from loft import units
from loft.components import Planet
from loft.constants import (
    EARTH_AXIAL_TILT,
    EARTH_MASS,
    EARTH_RADIUS,
    MOON_MASS,
    MOON_PERIOD,
    MOON_RADIUS,
)
from loft.core import Universe
from loft.dynamics.vector import M1, V0, Vx, Vy, rot
from loft.utils import body_columns, load_simulation_log


def main():
    """Run one lunar month."""
    print("=" * 60)
    print("Earth and Moon")
    print("=" * 60)

    universe = Universe(simulation_name="earth_moon")

    earth = Planet(EARTH_MASS, EARTH_RADIUS, V0, V0,
                   rot(M1, EARTH_AXIAL_TILT * Vy), units.day(1.0), name="earth")
    # Released at apogee with the apogee speed.
    moon = Planet(MOON_MASS, MOON_RADIUS, 4.054e8 * Vx, 0.97e3 * Vy, M1,
                  MOON_PERIOD, name="moon")
    universe.add_component(earth)
    universe.add_component(moon)

    print("\nInitial Conditions:")
    print(f"  Separation: {4.054e8:.4e} m")
    print(f"  Moon speed: {0.97e3:.1f} m/s")

    print("\nRunning simulation...")
    start = time.time()
    universe.run(duration=units.day(27.32), dt=units.day(1.0) / 200.0,
                 log_interval=units.day(1.0))
    elapsed = time.time() - start
    universe.disable_logging()

    df = load_simulation_log(universe.output_path / "logs" / "simulation.csv")
    r_me = body_columns(df, "moon", "r") - body_columns(df, "earth", "r")
    distance = np.linalg.norm(r_me.to_numpy(), axis=1)

    print("\nResults:")
    print(f"  Simulation time: {universe.t / units.day(1.0):.2f} days")
    print(f"  Wall clock time: {elapsed:.3f} s")
    print(f"  Perigee: {distance.min():.4e} m")
    print(f"  Apogee: {distance.max():.4e} m")

    p, L = universe.momentum()
    print("\nFinal Momentum:")
    print(f"  Linear: {np.linalg.norm(p):.6e} kg·m/s")
    print(f"  Angular: {np.linalg.norm(L):.6e} kg·m²/s")

    print(f"\nOutput saved to: {universe.output_path}")
    print("=" * 60)


if __name__ == "__main__":
    main()
