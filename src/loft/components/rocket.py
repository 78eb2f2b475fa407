"""
Liquid-fueled rocket with a steerable, throttleable engine.

The rocket is an aggregate of three bodies: a cylindrical shell, an engine at
the bottom of the shell, and a slug of fuel resting at the bottom of the tank.
Burning fuel changes the fuel body's mass, inertia and position directly,
which bypasses momentum bookkeeping; thrust is applied as an impulse at the
engine.
"""
from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from loft import units
from loft.dynamics.body import Body
from loft.dynamics.vector import M1, Vz, rot

from .base import Component


class FuelTank:
    """
    Cylindrical volume of fuel.

    The fuel is a solid slug that stays at the bottom (minimum z) of the tank.

    Parameters
    ----------
    radius : float
        Inner radius of the tank [m]
    depth : float
        Initial depth of fuel [m]
    density : float
        Fuel density [kg/m³]
    specific_impulse : float
        Impulse attainable from burning one kilogram of fuel [N·s/kg]
    """

    def __init__(
        self,
        radius: float,
        depth: float,
        density: float,
        specific_impulse: float,
    ) -> None:
        self.radius = float(radius)
        self.density = float(density)
        self.specific_impulse = float(specific_impulse)
        self.area = np.pi * self.radius**2
        self.full_depth = float(depth)
        self.depth = float(depth)

        mass = self.density * units.V_cylinder(self.radius, self.depth)
        self.body = Body(
            mass,
            units.I_cylinder_solid(mass, self.radius, self.depth),
            name="fuel",
        )

    def volume(self) -> float:
        """Volume of fuel left [m³]."""
        return self.depth * self.area

    def draw(self, volume: float) -> float:
        """
        Burn fuel and report the impulse it yields.

        Parameters
        ----------
        volume : float
            Requested volume [m³]. Only what is left in the tank is consumed.

        Returns
        -------
        float
            Impulse magnitude from the fuel actually consumed [N·s]
        """
        V = self.volume()
        dV = min(V, volume)
        V -= dV
        self.depth = V / self.area

        mass = V * self.density
        self.body.set_mass(mass)
        self.body.set_position((self.depth - self.full_depth) / 2.0 * Vz)
        self.body.set_inertia(units.I_cylinder_solid(mass, self.radius, self.depth))
        return self.specific_impulse * self.density * dV


class Engine:
    """
    Rocket engine producing thrust along its own z-axis.

    Parameters
    ----------
    mass : float
        Engine mass [kg]
    fuel_rate : float
        Volume rate of fuel use at full throttle [m³/s]
    efficiency : float
        Fraction of the available impulse converted to thrust [-]
    """

    def __init__(self, mass: float, fuel_rate: float, efficiency: float = 1.0) -> None:
        self.fuel_rate = float(fuel_rate)
        self.efficiency = float(efficiency)
        self.level = 0.0
        self.body = Body(mass, M1, name="engine")

    def throttle(self, frac: float) -> None:
        """Set the fraction of full throttle."""
        self.level = float(frac)

    def orient(self, v: ArrayLike) -> None:
        """Turn the thrust from the rocket's z-axis by |v| radians about ``v``."""
        self.body.set_orientation(rot(M1, np.asarray(v, dtype=np.float64)))

    def consumed(self, dt: float) -> float:
        """Volume of fuel burned in ``dt`` seconds [m³]."""
        return self.level * self.fuel_rate * dt

    def thrust_impulse(self, max_impulse: float) -> NDArray[np.float64]:
        """Absolute impulse vector from ``max_impulse`` worth of burned fuel."""
        return max_impulse * self.efficiency * self.body.rotate_out(Vz)


class Rocket(Component):
    """
    Cylindrical rocket: shell, engine and fuel.

    Parameters
    ----------
    shell_mass : float
        Mass of the rocket without fuel or engine [kg]
    engine_mass : float
        Mass of the engine [kg]
    radius : float
        Radius of the cylindrical shell [m]
    length : float
        Length of the cylindrical shell [m]. The tank fills it when full.
    fuel_density : float
        Fuel density [kg/m³]
    specific_impulse : float
        Impulse attainable per kilogram of fuel burned [N·s/kg]
    fuel_rate : float
        Maximum volume rate of fuel use [m³/s]
    position : array-like | None
        Absolute position of the shell's center [m]
    orientation : array-like | None
        Orientation of the shell; thrust acts along its z-axis

    Examples
    --------
    >>> rocket = Rocket(10, 50, 0.5, 10, 1.5, 1e3, 0.01, position=[0, 0, 0])
    >>> rocket.throttle(0.5)
    >>> rocket.step(10.0)
    """

    def __init__(
        self,
        shell_mass: float,
        engine_mass: float,
        radius: float,
        length: float,
        fuel_density: float,
        specific_impulse: float,
        fuel_rate: float,
        position: ArrayLike | None = None,
        orientation: ArrayLike | None = None,
        name: str = "rocket",
    ) -> None:
        shell = Body(
            shell_mass,
            units.I_cylinder_shell(shell_mass, radius, length),
            position=position,
            name=name,
        )
        super().__init__(name, shell)

        self.engine = Engine(engine_mass, fuel_rate)
        self.fuel = FuelTank(radius, length, fuel_density, specific_impulse)
        shell.capture(self.engine.body)
        shell.capture(self.fuel.body)
        # Place the engine relative to the shell after capture.
        self.engine.body.set_position(-length / 2.0 * Vz)
        if orientation is not None:
            shell.set_orientation(orientation)

    def throttle(self, frac: float) -> None:
        """Set the engine throttle as a fraction of full."""
        self.engine.throttle(frac)

    def orient_thrust(self, v: ArrayLike) -> None:
        """
        Steer the engine.

        Rotates thrust away from the rocket's z-axis about the rocket-frame
        axis ``v`` by ``|v|`` radians. A zero vector restores thrust along z.
        """
        self.engine.orient(v)

    def fuel_volume(self) -> float:
        """Volume of fuel left in the tank [m³]."""
        return self.fuel.volume()

    def update_state(self, t: float, dt: float) -> None:
        """Burn fuel for ``dt`` and apply the thrust impulse at the engine."""
        if not self.body.is_free():
            return
        max_impulse = self.fuel.draw(self.engine.consumed(dt))
        imp = self.engine.thrust_impulse(max_impulse)
        self.body.impulse(imp, self.body.transform_out(self.engine.body.center_of_mass()))
