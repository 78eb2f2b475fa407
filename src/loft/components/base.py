"""
Base component abstraction.

Components wrap a Body with domain-specific behavior. Uses composition:
a Component HAS-A Body, it is not one. The Body's kinematics (capture,
release, stepping, transforms) stay non-virtual; a component acts on its body
only through the public Body interface.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import NDArray

from loft.dynamics.body import Body


class Component(ABC):
    """
    Base class for simulation components.

    Parameters
    ----------
    name : str
        Component identifier
    body : Body
        Underlying rigid body

    Examples
    --------
    >>> class Beacon(Component):
    ...     def update_state(self, t: float, dt: float) -> None:
    ...         pass  # custom logic here
    """

    def __init__(self, name: str, body: Body):
        self.name = name
        self.body = body

    @abstractmethod
    def update_state(self, t: float, dt: float) -> None:
        """
        Update component-specific state.

        Called by the Universe after the gravity pass and before the body is
        stepped. Impulses applied here act on this step's motion.

        Parameters
        ----------
        t : float
            Current simulation time [s]
        dt : float
            Time step [s]
        """

    def step(self, dt: float, t: float = 0.0) -> None:
        """Update state, then advance the body. For use outside a Universe."""
        self.update_state(t, dt)
        self.body.step(dt)

    # -------------------------------------------------------------------------
    # Convenience accessors - delegate to body
    # -------------------------------------------------------------------------

    def mass(self) -> float:
        """Total mass [kg]."""
        return self.body.mass()

    def center_of_mass(self) -> NDArray[np.float64]:
        """Absolute center of mass [m]."""
        return self.body.absolute_center_of_mass()

    def velocity_of_cm(self) -> NDArray[np.float64]:
        """Center-of-mass velocity [m/s]."""
        return self.body.velocity_of_cm()

    def orientation(self) -> NDArray[np.float64]:
        """Orientation matrix relative to the parent frame."""
        return self.body.orientation()

    def angular_velocity(self) -> NDArray[np.float64]:
        """Angular velocity [rad/s]."""
        return self.body.angular_velocity()

    def is_free(self) -> bool:
        return self.body.is_free()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', body='{self.body.name}')"
