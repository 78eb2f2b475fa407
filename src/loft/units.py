"""
Conversions to internal units and closed-form properties of simple solids.

Function names give the unit converted from. Internal units are m, kg, s, rad.
"""
from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from loft.constants import SIDEREAL_DAY


def deg(degrees: float) -> float:
    """Angle in degrees -> radians."""
    return degrees * np.pi / 180.0


def day(days: float) -> float:
    """Span of sidereal Earth days -> seconds."""
    return days * SIDEREAL_DAY


def V_cylinder(r: float, l: float) -> float:
    """Volume of a solid cylinder of radius r and length l [m³]."""
    return np.pi * r * r * l


def I_cylinder_shell(m: float, r: float, l: float) -> NDArray[np.float64]:
    """
    Inertia tensor of a thin cylindrical shell about its center.

    The symmetry axis is body z.
    """
    side = m * (6.0 * r * r + l * l) / 12.0
    return np.diag([side, side, m * r * r])


def I_cylinder_solid(m: float, r: float, l: float) -> NDArray[np.float64]:
    """
    Inertia tensor of a solid cylinder about its center.

    The symmetry axis is body z.
    """
    side = m * (3.0 * r * r + l * l) / 12.0
    return np.diag([side, side, m * r * r / 2.0])


def I_sphere_solid(m: float, r: float) -> NDArray[np.float64]:
    """Inertia tensor of a uniform solid sphere about its center."""
    return 0.4 * m * r * r * np.eye(3)
