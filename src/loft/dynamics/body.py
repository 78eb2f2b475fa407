"""
Rigid bodies that can be composed into aggregates.

A Body has physical properties (mass, inertia, extent) and state (position,
orientation, center-of-mass velocity, angular velocity). A body may capture
another free body; the captured body becomes fixed relative to its captor and
the aggregate's properties become those of the whole tree. Capture and release
conserve linear and angular momentum.

All physical quantities use SI units:
- Position: meters [m]
- Velocity: meters per second [m/s]
- Angular velocity: radians per second [rad/s]
- Mass: kilograms [kg]
- Inertia: kilogram-meter-squared [kg·m²]

Accumulation order
------------------
Aggregate queries (``mass``, ``inertia_about``, ``center_of_mass``) sum in tree
pre-order: the node's own contribution first, then each sub-body in capture
order. Results are bit-for-bit reproducible for a given tree.
"""
from __future__ import annotations

import weakref
from collections.abc import Iterator

import numpy as np
from numpy.typing import ArrayLike, NDArray

from loft.constants import MASS_EPSILON
from loft.dynamics.shapes import Point, Shape
from loft.dynamics.vector import M1, cross, det, inv, outer, rot, square
from loft.utils.validation import (
    validate_inertia_tensor,
    validate_non_negative,
    validate_orientation,
    validate_vector,
)


class CompositionError(ValueError):
    """A capture or release was requested that would corrupt the body tree."""


class AlreadyCapturedError(CompositionError):
    """The body to capture already belongs to a tree it cannot leave this way."""


class NotASubBodyError(CompositionError):
    """The body to release is not a direct sub-body of the releasing body."""


class Body:
    """
    Node of a rigid-body tree.

    Frames
    ------
    - Absolute frame: inertial reference frame (fixed)
    - Parent frame: the frame of the capturing body, or absolute for a free body
    - Body frame: axes attached to this body

    State
    -----
    - position : NDArray[np.float64]
        Origin of this body in the parent frame [m] (3,). For a free body this
        is absolute and generally not the center of mass.
    - orientation : NDArray[np.float64]
        Matrix mapping body-frame vectors into the parent frame (3, 3)
    - velocity_of_cm : NDArray[np.float64]
        Absolute velocity of the aggregate's center of mass [m/s] (3,)
    - angular_velocity : NDArray[np.float64]
        Absolute angular velocity [rad/s] (3,)

    Only free bodies carry velocity and angular velocity. Both are zeroed on
    capture; the motion of a captured body is that of its root.

    Properties
    ----------
    - own_mass : float
        Mass of this node alone [kg]
    - own_inertia : NDArray[np.float64]
        Inertia of this node alone about its origin, in its own frame [kg·m²]

    Parameters
    ----------
    mass : float
        Own mass [kg]. Must be non-negative.
    inertia : array-like
        Own inertia tensor (3, 3) about the body origin [kg·m²]
    position : array-like | None
        Initial absolute position [m] (3,). Defaults to the origin.
    velocity : array-like | None
        Initial center-of-mass velocity [m/s] (3,). Defaults to zero.
    orientation : array-like | None
        Initial orientation matrix (3, 3). Defaults to identity.
    angular_velocity : array-like | None
        Initial angular velocity [rad/s] (3,). Defaults to zero.
    name : str
        Identifier used in logs and reprs
    shape : Shape | None
        Extent used for collision detection. Defaults to ``Point()``.

    Raises
    ------
    ValueError
        If mass is negative, a vector or matrix has the wrong shape, or the
        inertia tensor has a negative principal moment.
    """
    __slots__ = (
        "name", "shape",
        "_mass", "_inertia",
        "_r", "_orientation", "_v_cm", "_omega",
        "_parent", "_subs",
        "__weakref__",
    )

    def __init__(
        self,
        mass: float,
        inertia: ArrayLike,
        position: ArrayLike | None = None,
        velocity: ArrayLike | None = None,
        orientation: ArrayLike | None = None,
        angular_velocity: ArrayLike | None = None,
        name: str = "body",
        shape: Shape | None = None,
    ) -> None:
        validate_non_negative(mass, "Mass")

        self.name = name
        self.shape: Shape = shape if shape is not None else Point()

        self._mass = float(mass)
        self._inertia = validate_inertia_tensor(inertia)

        self._r = (np.zeros(3) if position is None
                   else validate_vector(position, "Position"))
        self._v_cm = (np.zeros(3) if velocity is None
                      else validate_vector(velocity, "Velocity"))
        self._orientation = (np.eye(3) if orientation is None
                             else validate_orientation(orientation))
        self._omega = (np.zeros(3) if angular_velocity is None
                       else validate_vector(angular_velocity, "Angular velocity"))

        self._parent: weakref.ref[Body] | None = None
        self._subs: list[Body] = []

    # -------------------------------------------------------------------------
    # Tree structure
    # -------------------------------------------------------------------------

    @property
    def parent(self) -> Body | None:
        """The capturing body, or None for a free body."""
        return self._parent() if self._parent is not None else None

    @property
    def subs(self) -> tuple[Body, ...]:
        """Captured sub-bodies in capture order."""
        return tuple(self._subs)

    def is_free(self) -> bool:
        """True if this body has not been captured."""
        return self.parent is None

    def root(self) -> Body:
        """The free body at the top of this body's tree."""
        parent = self.parent
        return self if parent is None else parent.root()

    def walk(self) -> Iterator[Body]:
        """Iterate over this body and all descendants in pre-order."""
        yield self
        for b in self._subs:
            yield from b.walk()

    # -------------------------------------------------------------------------
    # Capture and release
    # -------------------------------------------------------------------------

    def capture(self, part: Body) -> None:
        """
        Attach a free body at its current position, conserving momentum.

        The aggregate's center-of-mass velocity and angular velocity are
        updated at the root of this body's tree. ``part`` then becomes fixed
        in position and orientation relative to this body.

        Parameters
        ----------
        part : Body
            Free body to attach

        Raises
        ------
        AlreadyCapturedError
            If ``part`` has a parent, or is the root of this body's tree
            (capturing it would create a cycle). Nothing is modified.
        """
        if not part.is_free():
            raise AlreadyCapturedError(
                f"Cannot capture '{part.name}': already captured by "
                f"'{part.parent.name}'"
            )
        if part is self.root():
            raise AlreadyCapturedError(
                f"Cannot capture '{part.name}' into '{self.name}': "
                f"'{part.name}' is the root of that tree"
            )

        self.root()._add_momentum(part)

        r_absolute = part._r
        self._subs.append(part)
        part._parent = weakref.ref(self)

        # Express the part's pose in this body's frame.
        part._r = self.transform_in(r_absolute)
        part._orientation = self.absolute_orientation().T @ part._orientation
        part._v_cm = np.zeros(3)
        part._omega = np.zeros(3)

    def release(self, part: Body) -> None:
        """
        Detach a sub-body, conserving momentum.

        At the instant of separation the aggregate is treated as one rigid
        rotor: ``part`` leaves with the velocity of its center of mass under
        that rotation and with the aggregate's angular velocity. The
        remaining aggregate's center-of-mass velocity is corrected the same
        way.

        Parameters
        ----------
        part : Body
            Direct sub-body of this body

        Raises
        ------
        NotASubBodyError
            If ``part`` is not a direct sub-body. Nothing is modified.
        """
        if not any(b is part for b in self._subs):
            raise NotASubBodyError(
                f"Cannot release '{part.name}': not a sub-body of '{self.name}'"
            )

        head = self.root()
        cm = head.center_of_mass()
        v_cm = head._v_cm
        omega = head._omega
        orientation = self.absolute_orientation()

        part._r = self.transform_out(part._r)
        part._orientation = orientation @ part._orientation
        self._subs = [b for b in self._subs if b is not part]
        part._parent = None

        part._v_cm = v_cm + cross(omega, part.center_of_mass() - cm)
        head._v_cm = v_cm + cross(omega, head.center_of_mass() - cm)
        part._omega = np.array(omega)

    def _add_momentum(self, part: Body) -> None:
        """
        Set this root's velocity and angular velocity for capturing ``part``.

        1. New v_cm is the mass-weighted average of both v_cms.
        2. New CM is the mass-weighted average of both CMs.
        3. Angular momentum of each side about the new CM is spin plus orbit.
        4. New omega solves the combined inertia about the new CM for that
           total. A singular combined tensor leaves omega as it was.
        """
        head_m = self.mass()
        part_m = part.mass()
        total_m = head_m + part_m
        if total_m < MASS_EPSILON:
            # Massless on both sides: nothing carries momentum.
            return
        v_head = self._v_cm
        v_part = part._v_cm

        cm_head = self.center_of_mass()
        cm_part = part.center_of_mass()
        new_cm = (head_m * cm_head + part_m * cm_part) / total_m

        L_spin_head = self.inertia() @ self._omega
        L_orbit_head = head_m * cross(cm_head - new_cm, v_head)
        L_spin_part = part.inertia() @ part._omega
        L_orbit_part = part_m * cross(cm_part - new_cm, v_part)

        self._v_cm = (head_m * v_head + part_m * v_part) / total_m

        # TODO: a singular combined tensor (two point masses, say) skips the
        # angular momentum update; solve within the tensor's range instead.
        I_total = self.inertia_about(new_cm) + part.inertia_about(new_cm)
        if det(I_total) != 0.0:
            self._omega = inv(I_total) @ (
                L_spin_head + L_orbit_head + L_spin_part + L_orbit_part
            )

    # -------------------------------------------------------------------------
    # Aggregate properties
    # -------------------------------------------------------------------------

    def mass(self) -> float:
        """Total mass of this body and its sub-bodies [kg]."""
        m = self._mass
        for b in self._subs:
            m += b.mass()
        return m

    def inertia_about(self, center: ArrayLike) -> NDArray[np.float64]:
        """
        Total inertia tensor about an absolute point [kg·m²].

        Each node contributes its own tensor moved to ``center`` with the
        parallel-axis theorem: ``I + m(|r|²·1 - r⊗r)``, where ``r`` is the
        node's absolute origin minus ``center``.
        """
        r = self.absolute_position() - center
        I = self._inertia + self._mass * (square(r) * M1 - outer(r, r))
        for b in self._subs:
            I = I + b.inertia_about(center)
        return I

    def inertia(self) -> NDArray[np.float64]:
        """Total inertia tensor about the aggregate's center of mass [kg·m²]."""
        return self.inertia_about(self.absolute_center_of_mass())

    def center_of_mass(self) -> NDArray[np.float64]:
        """
        Center of mass of this body and its sub-bodies, in the parent frame.

        For a free body this is absolute. Returns the body's own position when
        the total mass is below ``MASS_EPSILON``.
        """
        m = self.mass()
        if m < MASS_EPSILON:
            return self._r.copy()
        moment = np.zeros(3)
        for b in self._subs:
            moment = moment + b.center_of_mass() * b.mass()
        return self._r + (self._orientation @ moment) / m

    def absolute_center_of_mass(self) -> NDArray[np.float64]:
        """Center of mass of this body and its sub-bodies, in the absolute frame."""
        parent = self.parent
        cm = self.center_of_mass()
        return cm if parent is None else parent.transform_out(cm)

    # -------------------------------------------------------------------------
    # State accessors
    # -------------------------------------------------------------------------

    def position(self) -> NDArray[np.float64]:
        """Origin relative to the parent if captured, else absolute [m]."""
        return self._r.copy()

    def absolute_position(self) -> NDArray[np.float64]:
        """Origin in the absolute frame [m]."""
        parent = self.parent
        return self._r.copy() if parent is None else parent.transform_out(self._r)

    def orientation(self) -> NDArray[np.float64]:
        """Matrix rotating body-frame vectors into the parent frame."""
        return self._orientation.copy()

    def absolute_orientation(self) -> NDArray[np.float64]:
        """Matrix rotating body-frame vectors into the absolute frame."""
        parent = self.parent
        if parent is None:
            return self._orientation.copy()
        return parent.absolute_orientation() @ self._orientation

    def velocity_of_cm(self) -> NDArray[np.float64]:
        """Absolute center-of-mass velocity [m/s]; zero for a captured body."""
        return self._v_cm.copy()

    def angular_velocity(self) -> NDArray[np.float64]:
        """Absolute angular velocity [rad/s]; zero for a captured body."""
        return self._omega.copy()

    @property
    def own_mass(self) -> float:
        """Mass of this node alone, excluding sub-bodies [kg]."""
        return self._mass

    @property
    def own_inertia(self) -> NDArray[np.float64]:
        """Inertia of this node alone about its origin, in its frame [kg·m²]."""
        return self._inertia.copy()

    def intersects(self, other: Body) -> bool:
        """True if either body's shape reports that they overlap."""
        return self.shape.intersects(self, other) or other.shape.intersects(other, self)

    # -------------------------------------------------------------------------
    # Momentum and energy
    # -------------------------------------------------------------------------

    def linear_momentum(self) -> NDArray[np.float64]:
        """Linear momentum of the aggregate [kg·m/s]."""
        return self.mass() * self._v_cm

    def angular_momentum(self, about: ArrayLike | None = None) -> NDArray[np.float64]:
        """
        Angular momentum of the aggregate about an absolute point [kg·m²/s].

        Spin about the center of mass plus the orbital term of the center of
        mass. ``about`` defaults to the absolute origin.
        """
        point = np.zeros(3) if about is None else np.asarray(about, dtype=np.float64)
        arm = self.absolute_center_of_mass() - point
        return self.inertia() @ self._omega + self.mass() * cross(arm, self._v_cm)

    def kinetic_energy(self) -> float:
        """
        Total kinetic energy [J].

        0.5 * m * |v|² + 0.5 * ω·I·ω, with I about the center of mass.
        """
        T_trans = 0.5 * self.mass() * square(self._v_cm)
        T_rot = 0.5 * float(self._omega @ self.inertia() @ self._omega)
        return T_trans + T_rot

    # -------------------------------------------------------------------------
    # Impulses and time stepping
    # -------------------------------------------------------------------------

    def impulse(self, imp: ArrayLike, at: ArrayLike | None = None) -> None:
        """
        Impart an impulse.

        Parameters
        ----------
        imp : array-like
            Absolute impulse vector [N·s] (3,)
        at : array-like | None
            Absolute point of application [m] (3,). If None the impulse acts
            at the center of mass and changes linear momentum only.

        A massless body takes no linear velocity change.
        """
        imp = np.asarray(imp, dtype=np.float64)
        m = self.mass()
        if m >= MASS_EPSILON:
            self._v_cm = self._v_cm + imp / m
        if at is not None:
            arm = np.asarray(at, dtype=np.float64) - self.absolute_center_of_mass()
            self._omega = self._omega + inv(self.inertia()) @ cross(arm, imp)

    def step(self, dt: float) -> None:
        """
        Advance the body and its sub-bodies by ``dt`` seconds.

        Notes
        -----
        The origin is generally not at the center of mass. The CM moves in a
        straight line at ``v_cm``; the body turns about it by ``ω·dt`` (an
        exact rotation, not a linearized update), and the origin is recovered
        from the rotated CM offset. Captured bodies keep their pose relative
        to the parent.
        """
        if self.is_free():
            cm = self.center_of_mass()
            dr = self._orientation.T @ (cm - self._r)
            self._orientation = rot(self._orientation, (self._orientation.T @ self._omega) * dt)
            self._r = cm + self._v_cm * dt - self._orientation @ dr

        for b in self._subs:
            b.step(dt)

    # -------------------------------------------------------------------------
    # Frame transforms
    # -------------------------------------------------------------------------

    def rotate_in(self, v: ArrayLike) -> NDArray[np.float64]:
        """Rotate an absolute vector into this body's frame."""
        parent = self.parent
        v = np.asarray(v, dtype=np.float64)
        v_parent = v if parent is None else parent.rotate_in(v)
        return self._orientation.T @ v_parent

    def transform_in(self, v: ArrayLike) -> NDArray[np.float64]:
        """Transform an absolute position into this body's frame."""
        parent = self.parent
        v = np.asarray(v, dtype=np.float64)
        v_parent = v if parent is None else parent.transform_in(v)
        return self._orientation.T @ (v_parent - self._r)

    def rotate_out(self, v: ArrayLike) -> NDArray[np.float64]:
        """Rotate a vector in this body's frame into the absolute frame."""
        parent = self.parent
        v_out = self._orientation @ np.asarray(v, dtype=np.float64)
        return v_out if parent is None else parent.rotate_out(v_out)

    def transform_out(self, v: ArrayLike) -> NDArray[np.float64]:
        """Transform a position in this body's frame into the absolute frame."""
        parent = self.parent
        v_out = self._r + self._orientation @ np.asarray(v, dtype=np.float64)
        return v_out if parent is None else parent.transform_out(v_out)

    # -------------------------------------------------------------------------
    # Direct manipulation
    #
    # For construction and for collaborators whose properties change, e.g. as
    # fuel is consumed. These bypass momentum bookkeeping: the caller is
    # responsible for physical consistency (and for any compensating impulse).
    # -------------------------------------------------------------------------

    def set_position(self, r: ArrayLike) -> None:
        """Set the origin, in the parent frame if captured."""
        self._r = np.array(r, dtype=np.float64)

    def set_orientation(self, o: ArrayLike) -> None:
        """Set the orientation relative to the parent frame if captured."""
        self._orientation = np.array(o, dtype=np.float64)

    def set_mass(self, mass: float) -> None:
        """Set this node's own mass. Negative values are not rejected."""
        self._mass = float(mass)

    def set_inertia(self, inertia: ArrayLike) -> None:
        """Set this node's own inertia tensor about its origin."""
        self._inertia = np.array(inertia, dtype=np.float64)

    def __repr__(self) -> str:
        return (
            f"Body(name='{self.name}', mass={self.mass():.6g}, "
            f"free={self.is_free()}, subs={len(self._subs)})"
        )
