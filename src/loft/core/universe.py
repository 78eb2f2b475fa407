"""
Universe orchestrator for gravitating, colliding rigid-body aggregates.

Holds a flat collection of bodies, advances them under pairwise gravity and
resolves collisions by capture, with optional logging and automatic output
organization.
"""
from __future__ import annotations

import math
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from loft import constants
from loft.components.base import Component
from loft.dynamics.body import Body
from loft.dynamics.vector import cross, dot, square, unit
from loft.logger import CSVLogger
from loft.utils.validation import validate_timestep

# Default output directory
DEFAULT_OUTPUT_DIR = Path("output")


class Universe:
    """
    Container and orchestrator for free rigid-body aggregates.

    Parameters
    ----------
    collisions : bool
        If True, intersecting free bodies that approach each other are merged
        by capture at the end of each step.
    G : float
        Gravitational constant [m³/(kg·s²)]
    simulation_name : str | None
        Name for this simulation. Used to organize output files. If None,
        logging is disabled by default. Use enable_logging() to activate.
    output_dir : Path | str | None
        Base directory for all simulation outputs. Defaults to "./output".
    auto_timestamp : bool
        If True, append timestamp to simulation folder name to prevent overwrites.

    Attributes
    ----------
    bodies : list[Body]
        Every registered body, free or captured, in registration order
    components : list[Component]
        Registered components, updated before each integration pass
    t : float
        Current simulation time [s]
    logger : CSVLogger | None
        Data logger instance, or None if logging disabled
    output_path : Path | None
        Path to simulation output directory

    Notes
    -----
    **Step Order:**
    Gravity, component updates, integration, clock, collisions, logging.
    This is a fixed split; reordering changes trajectories.

    Only free bodies take part in gravity and collisions. A registered body
    that has been captured keeps its index but moves with its root.

    Examples
    --------
    >>> universe = Universe(collisions=True)
    >>> universe.add(Body(2.0, np.eye(3), position=[0, 0, 0]))
    0
    >>> universe.run(duration=10.0, dt=0.1)
    """

    def __init__(
        self,
        collisions: bool = True,
        G: float = constants.G,
        simulation_name: str | None = None,
        output_dir: Path | str | None = None,
        auto_timestamp: bool = True,
    ) -> None:
        self.bodies: list[Body] = []
        self.components: list[Component] = []
        self.collisions = bool(collisions)
        self.G = float(G)
        self.t = 0.0

        # Output configuration
        self._simulation_name = simulation_name
        self._output_dir = Path(output_dir) if output_dir else DEFAULT_OUTPUT_DIR
        self._auto_timestamp = auto_timestamp
        self.output_path: Path | None = None
        self.logger: CSVLogger | None = None

        if simulation_name is not None:
            self.enable_logging(simulation_name)

    def enable_logging(self, name: str | None = None) -> Path:
        """
        Enable data logging with automatic output organization.

        Creates ``output_dir/name_timestamp/logs/simulation.csv``.

        Returns
        -------
        Path
            Path to the created output directory

        Raises
        ------
        ValueError
            If no simulation name available
        """
        if name is not None:
            self._simulation_name = name

        if self._simulation_name is None:
            raise ValueError(
                "Simulation name required for logging. "
                "Either pass name to __init__ or to enable_logging()."
            )

        if self._auto_timestamp:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            folder_name = f"{self._simulation_name}_{timestamp}"
        else:
            folder_name = self._simulation_name

        self.output_path = self._output_dir / folder_name
        logs_dir = self.output_path / "logs"
        logs_dir.mkdir(parents=True, exist_ok=True)

        self.logger = CSVLogger(logs_dir / "simulation.csv")

        print(f"[Universe] Logging enabled: {self.output_path}")
        print(f"           Logs: {logs_dir}")

        return self.output_path

    def disable_logging(self) -> None:
        """Disable logging and close any open log file."""
        if self.logger is not None:
            self.logger.close()
            self.logger = None
            print("[Universe] Logging disabled")

    # --- Registration ---

    def add(self, body: Body) -> int:
        """
        Register a body.

        Returns
        -------
        int
            Index of the body in ``bodies``
        """
        self.bodies.append(body)
        return len(self.bodies) - 1

    def add_component(self, component: Component) -> int:
        """
        Register a component and its body.

        Returns
        -------
        int
            Index of the component's body in ``bodies``
        """
        self.components.append(component)
        return self.add(component.body)

    def time(self) -> float:
        """Elapsed simulated time [s]."""
        return self.t

    def free_bodies(self) -> list[Body]:
        """Registered bodies that have not been captured, in registration order."""
        return [b for b in self.bodies if b.is_free()]

    def _free_pairs(self) -> Iterator[tuple[Body, Body]]:
        # Free status is re-read per pair: a capture earlier in the pass
        # removes a body from the rest of it.
        for i, b1 in enumerate(self.bodies):
            if not b1.is_free():
                continue
            for b2 in self.bodies[i + 1:]:
                if b1.is_free() and b2.is_free():
                    yield b1, b2

    # --- Physics ---

    def gravity(self, b1: Body, b2: Body) -> NDArray[np.float64]:
        """
        Gravitational force on ``b1`` due to ``b2`` [N].

        Zero when the centers of mass are closer than ``MIN_SEPARATION``.
        """
        r = b2.absolute_center_of_mass() - b1.absolute_center_of_mass()
        r2 = square(r)
        if r2 < constants.MIN_SEPARATION**2:
            return np.zeros(3)
        return unit(r) * (self.G * b1.mass() * b2.mass() / r2)

    def step(self, dt: float) -> None:
        """
        Advance the simulation by ``dt`` seconds.

        Raises
        ------
        ValueError
            If ``dt`` is negative or not finite
        """
        validate_timestep(dt)

        # 1) Gravity impulses between free pairs
        for b1, b2 in self._free_pairs():
            # Pairs of equal mass are skipped.
            if math.isclose(b1.mass(), b2.mass(), rel_tol=constants.MASS_EQUALITY_RTOL):
                continue
            imp = self.gravity(b1, b2) * dt
            b1.impulse(imp)
            b2.impulse(-imp)

        # 2) Component state (thrust, fuel burn, ...)
        for c in self.components:
            c.update_state(self.t, dt)

        # 3) Integrate
        for b in self.free_bodies():
            b.step(dt)
        self.t += dt

        # 4) Collisions
        if self.collisions:
            for b1, b2 in self._free_pairs():
                if b1.intersects(b2) and dot(b1.velocity_of_cm(), b2.velocity_of_cm()) < 0.0:
                    b1.capture(b2)

        # 5) Log state
        if self.logger is not None:
            self.logger.log(self)

    def run(self, duration: float, dt: float, log_interval: float = 1.0) -> None:
        """
        Run fixed-step simulation for specified duration.

        Parameters
        ----------
        duration : float
            Simulation duration [s]
        dt : float
            Fixed time step [s]. Must be positive.
        log_interval : float
            Interval [s] for printing progress to terminal. Set to <= 0 to disable.
        """
        validate_timestep(dt)
        if dt == 0.0:
            raise ValueError("Timestep must be positive to run for a duration")

        t_end = self.t + float(duration)
        last_log_time = self.t

        if self.logger is not None:
            self.logger.log(self)

        print(f"[Universe] Starting simulation: {duration}s duration, dt={dt}s")

        try:
            while self.t < t_end:
                self.step(dt)

                if log_interval > 0 and (self.t - last_log_time) >= log_interval:
                    p, _ = self.momentum()
                    print(
                        f"[Universe] t={self.t:10.2f}s | "
                        f"free bodies={len(self.free_bodies())}, |p|={np.linalg.norm(p):.6e}"
                    )
                    last_log_time = self.t
        finally:
            if self.logger:
                self.logger.flush()

    # --- Diagnostics ---

    def momentum(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """
        Total momentum of the free bodies.

        Returns
        -------
        tuple[NDArray[np.float64], NDArray[np.float64]]
            ``(linear, angular)``; angular momentum is about the absolute
            origin: Σ(I·ω + m·(r_cm × v_cm)).
        """
        p = np.zeros(3)
        L = np.zeros(3)
        for b in self.free_bodies():
            m = b.mass()
            v = b.velocity_of_cm()
            p = p + m * v
            L = L + b.inertia() @ b.angular_velocity() + m * cross(b.center_of_mass(), v)
        return p, L

    def kinetic_energy(self) -> float:
        """Total kinetic energy of the free bodies [J] (diagnostic)."""
        return sum(b.kinetic_energy() for b in self.free_bodies())
