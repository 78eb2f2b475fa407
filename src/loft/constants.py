"""
Physical constants and numerical guards (SI units: m, kg, s, rad).

Values are module-level and read-only by convention. A Universe may be
constructed with its own gravitational constant; nothing here is mutated at
runtime.
"""
from __future__ import annotations

import numpy as np

# =============================================================================
# FUNDAMENTAL CONSTANTS
# =============================================================================
G = 6.67430e-11                 # m^3 / (kg * s^2)
SIDEREAL_DAY = 86164.1          # s

# =============================================================================
# EARTH / MOON
# =============================================================================
EARTH_MASS = 5.972e24           # kg
EARTH_RADIUS = 6.371e6          # m
EARTH_AXIAL_TILT = np.deg2rad(23.44)  # rad

MOON_MASS = 7.342e22            # kg
MOON_RADIUS = 1.737e6           # m
MOON_PERIOD = 27.32 * SIDEREAL_DAY  # s

# =============================================================================
# NUMERICAL GUARDS
# =============================================================================
MASS_EPSILON = 1e-10            # kg; below this a subtree has no meaningful CM
MIN_SEPARATION = 1e-9           # m; closer bodies exert no gravity on each other
MASS_EQUALITY_RTOL = 1e-12      # relative tolerance for the equal-mass gravity skip

# Direction returned when normalizing the zero vector.
FALLBACK_DIRECTION = np.array([1.0, 0.0, 0.0], dtype=np.float64)
FALLBACK_DIRECTION.flags.writeable = False
