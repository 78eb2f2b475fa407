"""
Large spherical bodies: planets and moons.
"""
from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

from loft.dynamics.body import Body
from loft.dynamics.shapes import Sphere
from loft.dynamics.vector import M0, M1, Vx, Vy, Vz, mag, rot
from loft.utils.validation import validate_orientation

from .base import Component


class Planet(Component):
    """
    Spinning sphere with a surface coordinate system.

    The body carries no own inertia; the spin is a kinematic rotation about
    the body z-axis, so the north pole is along ``orientation @ z``.

    Parameters
    ----------
    mass : float
        Planet mass [kg]
    radius : float
        Mean radius [m]
    position : array-like
        Absolute position of the center [m]
    velocity : array-like
        Absolute velocity [m/s]
    orientation : array-like
        Orientation matrix; body z is the spin axis
    period : float
        Sidereal rotation period [s]. ``units.day`` converts from days.

    Examples
    --------
    >>> from loft import units
    >>> from loft.constants import EARTH_MASS, EARTH_RADIUS
    >>> earth = Planet(EARTH_MASS, EARTH_RADIUS, [0, 0, 0], [0, 0, 0],
    ...                np.eye(3), units.day(1.0), name="earth")
    >>> r, m = earth.locate(units.deg(45.0), 0.0, 100.0)
    """

    def __init__(
        self,
        mass: float,
        radius: float,
        position: ArrayLike,
        velocity: ArrayLike,
        orientation: ArrayLike,
        period: float,
        name: str = "planet",
    ) -> None:
        if period <= 0:
            raise ValueError(f"Rotation period must be positive, got {period}")
        o = validate_orientation(orientation)
        body = Body(
            mass,
            M0,
            position=position,
            velocity=velocity,
            orientation=o,
            angular_velocity=o @ ((2.0 * np.pi / period) * Vz),
            name=name,
            shape=Sphere(radius),
        )
        super().__init__(name, body)
        self.period = float(period)

    @property
    def radius(self) -> float:
        return self.body.shape.radius

    def update_state(self, t: float, dt: float) -> None:
        pass

    def locate(
        self, lat: float, lon: float, alt: float
    ) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """
        Absolute pose of a point above the surface.

        Parameters
        ----------
        lat, lon : float
            Latitude and longitude [rad]. Zero longitude is along body +y.
        alt : float
            Altitude above the surface [m]

        Returns
        -------
        tuple[NDArray[np.float64], NDArray[np.float64]]
            ``(position, orientation)``. The orientation has z up (normal to
            the surface), y north and x east.
        """
        up = rot(rot(M1, lon * Vz), lat * Vx) @ ((self.radius + alt) * Vy)
        r = self.body.transform_out(up)
        m = rot(rot(rot(M1, lon * Vz), (lat - np.pi / 2.0) * Vx), np.pi * Vz)
        return r, self.body.absolute_orientation() @ m

    def location(self, position: ArrayLike) -> tuple[float, float, float]:
        """
        Latitude, longitude [rad] and altitude [m] of an absolute position.

        Inverse of ``locate`` for the position part.
        """
        r_in = self.body.transform_in(position)
        r_xy = math.hypot(r_in[0], r_in[1])
        return (
            math.atan2(r_in[2], r_xy),
            math.atan2(-r_in[0], r_in[1]),
            mag(r_in) - self.radius,
        )
