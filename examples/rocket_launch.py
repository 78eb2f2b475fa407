"""
Rocket launch from the Earth's surface.

Demonstrates:
- Placing a body on a planet with locate()
- A Rocket component burning fuel under gravity
- Reading latitude, longitude and altitude back with location()
"""
from pathlib import Path
import sys

import numpy as np

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from loft import units
from loft.components import Planet, Rocket
from loft.constants import EARTH_AXIAL_TILT, EARTH_MASS, EARTH_RADIUS
from loft.core import Universe
from loft.dynamics.vector import M1, V0, Vy, rot


def main():
    print("=" * 60)
    print("Rocket Launch")
    print("=" * 60)

    # Collisions off: the rocket starts inside the Earth's sphere.
    universe = Universe(collisions=False)
    earth = Planet(EARTH_MASS, EARTH_RADIUS, V0, V0,
                   rot(M1, EARTH_AXIAL_TILT * Vy), units.day(1.0), name="earth")
    universe.add_component(earth)

    lat, lon = units.deg(28.5), units.deg(-80.6)
    position, orientation = earth.locate(lat, lon, 10.0)
    rocket = Rocket(
        shell_mass=2.0e4,
        engine_mass=5.0e3,
        radius=1.8,
        length=40.0,
        fuel_density=1.1e3,
        specific_impulse=3.0e3,
        fuel_rate=2.0,
        position=position,
        orientation=orientation,
    )
    universe.add_component(rocket)

    print(f"\nLift-off mass: {rocket.mass():.4e} kg")
    print(f"Fuel: {rocket.fuel_volume():.1f} m³")

    rocket.throttle(1.0)
    universe.run(duration=120.0, dt=0.1, log_interval=10.0)

    lat, lon, alt = earth.location(rocket.body.absolute_position())
    print("\nResults:")
    print(f"  Latitude: {np.degrees(lat):.3f}°, Longitude: {np.degrees(lon):.3f}°")
    print(f"  Altitude: {alt:.1f} m")
    print(f"  Speed: {np.linalg.norm(rocket.velocity_of_cm()):.1f} m/s")
    print(f"  Fuel left: {rocket.fuel_volume():.1f} m³")
    print("=" * 60)


if __name__ == "__main__":
    main()
