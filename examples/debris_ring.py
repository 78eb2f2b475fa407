"""
Debris ring: a cloud of equal-mass fragments in orbit.

Demonstrates:
- Many free bodies with collisions disabled
- Equal masses feeling the planet's gravity but not each other's
- Logging a restricted set of fields
"""
from pathlib import Path
import sys

import numpy as np

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from loft import units
from loft.components import Planet
from loft.constants import EARTH_AXIAL_TILT, EARTH_MASS, EARTH_RADIUS, G
from loft.core import Universe
from loft.dynamics.body import Body
from loft.dynamics.vector import M1, V0, Vx, Vy, Vz, rot
from loft.logger import CSVLogger

N_FRAGMENTS = 50


def main():
    print("=" * 60)
    print("Debris Ring")
    print("=" * 60)

    universe = Universe(collisions=False)
    earth = Planet(EARTH_MASS, EARTH_RADIUS, V0, V0,
                   rot(M1, EARTH_AXIAL_TILT * Vy), units.day(1.0), name="earth")
    universe.add_component(earth)

    r0 = 4.0 * EARTH_RADIUS
    v0 = np.sqrt(G * EARTH_MASS / r0)
    dv = 0.05 * v0
    for i in range(N_FRAGMENTS):
        kick = rot(M1, i * 2.0 * np.pi / N_FRAGMENTS * Vz) @ (dv * Vy)
        universe.add(Body(1e20, M1, position=r0 * Vx, velocity=v0 * Vy + kick,
                          name=f"fragment{i}"))

    path = Path("output") / "debris_ring.csv"
    with CSVLogger(path, fields=["cm"]) as logger:
        for _ in range(int(units.day(1.0) / 60.0)):
            universe.step(60.0)
            logger.log(universe)

    radii = [np.linalg.norm(b.absolute_center_of_mass()) for b in universe.free_bodies()[1:]]
    print(f"\nAfter {universe.t / 3600.0:.1f} h:")
    print(f"  Fragment radii: {min(radii) / EARTH_RADIUS:.2f} - {max(radii) / EARTH_RADIUS:.2f} R_earth")
    print(f"\nOutput saved to: {path}")
    print("=" * 60)


if __name__ == "__main__":
    main()
