"""
Physical extent of a body, used only for collision detection.

A Body carries one Shape. Kinematics never depend on it; the Universe asks
``body.intersects(other)`` and the shapes answer.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from loft.dynamics.vector import mag

if TYPE_CHECKING:
    from loft.dynamics.body import Body


class Shape(Protocol):
    """Extent predicate attached to a Body."""

    radius: float

    def intersects(self, body: Body, other: Body) -> bool: ...


class Point:
    """No extent. Point bodies never intersect anything on their own."""

    radius = 0.0

    def intersects(self, body: Body, other: Body) -> bool:
        return False

    def __repr__(self) -> str:
        return "Point()"


class Sphere:
    """
    Ball of fixed radius centred on the body's origin.

    Parameters
    ----------
    radius : float
        Sphere radius [m]. Must be non-negative.
    """

    def __init__(self, radius: float) -> None:
        if radius < 0:
            raise ValueError(f"Radius must be non-negative, got {radius}")
        self.radius = float(radius)

    def intersects(self, body: Body, other: Body) -> bool:
        """True if ``other`` is inside this sphere (grown by ``other``'s radius)."""
        separation = mag(other.absolute_position() - body.absolute_position())
        return separation < self.radius + other.shape.radius

    def __repr__(self) -> str:
        return f"Sphere(radius={self.radius})"
