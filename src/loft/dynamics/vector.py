"""
Three-vector and 3x3 matrix algebra on numpy arrays.

Vectors are float64 arrays of shape (3,); matrices are float64 arrays of
shape (3, 3) in row-major semantics, so ``m @ v`` applies ``m`` as a linear
map to ``v``. The helpers here are thin wrappers over numpy and
``scipy.spatial.transform.Rotation`` that fix the return types and the
degenerate cases the body code relies on.

Rotation convention
-------------------
An orientation matrix maps a body's axes into its parent's frame: a vector
``v`` in the body frame is ``orientation @ v`` in the parent frame.
``rot(m, a)`` composes ``m`` on the right with the rotation by ``|a|``
radians about ``a``, so ``a`` is expressed in the frame ``m`` maps from.
"""
from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.spatial.transform import Rotation as R

from loft.constants import FALLBACK_DIRECTION


def _frozen(a: ArrayLike) -> NDArray[np.float64]:
    arr = np.array(a, dtype=np.float64)
    arr.flags.writeable = False
    return arr


V0 = _frozen([0.0, 0.0, 0.0])
Vx = _frozen([1.0, 0.0, 0.0])
Vy = _frozen([0.0, 1.0, 0.0])
Vz = _frozen([0.0, 0.0, 1.0])

M0 = _frozen(np.zeros((3, 3)))
M1 = _frozen(np.eye(3))


def vec(x: float, y: float, z: float) -> NDArray[np.float64]:
    """Build a vector from components."""
    return np.array([x, y, z], dtype=np.float64)


def dot(v1: NDArray[np.float64], v2: NDArray[np.float64]) -> float:
    return float(np.dot(v1, v2))


def square(v: NDArray[np.float64]) -> float:
    """Squared magnitude."""
    return dot(v, v)


def cross(v1: NDArray[np.float64], v2: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.cross(v1, v2).astype(np.float64)


def outer(v1: NDArray[np.float64], v2: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.outer(v1, v2).astype(np.float64)


def mag(v: NDArray[np.float64]) -> float:
    return float(np.linalg.norm(v))


def unit(v: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Return the unit vector parallel to ``v``.

    The zero vector has no direction; ``FALLBACK_DIRECTION`` (+x) is
    returned for it instead of dividing by zero.
    """
    n = mag(v)
    if n == 0.0:
        return np.array(FALLBACK_DIRECTION, dtype=np.float64)
    return np.asarray(v, dtype=np.float64) / n


def det(m: NDArray[np.float64]) -> float:
    return float(np.linalg.det(m))


def inv(m: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Inverse of a 3x3 matrix.

    Returns the zero matrix when the determinant is exactly zero. Callers
    that care about singularity must test ``det(m)`` themselves.
    """
    if det(m) == 0.0:
        return np.zeros((3, 3), dtype=np.float64)
    return np.linalg.inv(m)


def rot(m: NDArray[np.float64], a: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Compose ``m`` with the rotation of ``|a|`` radians about ``a``.

    Parameters
    ----------
    m : NDArray[np.float64]
        Matrix to rotate (3, 3)
    a : NDArray[np.float64]
        Rotation vector (3,); direction is the axis, magnitude the angle [rad]

    Returns
    -------
    NDArray[np.float64]
        ``m @ R(a)``. A zero ``a`` returns a copy of ``m``.
    """
    m = np.asarray(m, dtype=np.float64)
    if not np.any(a):
        return m.copy()
    return m @ R.from_rotvec(a).as_matrix()


def axis_angle(m: NDArray[np.float64]) -> tuple[NDArray[np.float64], float]:
    """
    Recover a rotation axis and angle from a rotation matrix.

    Parameters
    ----------
    m : NDArray[np.float64]
        Orthonormal rotation matrix (3, 3)

    Returns
    -------
    tuple[NDArray[np.float64], float]
        ``(axis, angle)``. ``axis`` is the vector part of the equivalent unit
        quaternion (parallel to the rotation axis, not normalized); ``angle``
        is in [0, π] radians.
    """
    x, y, z, w = R.from_matrix(m).as_quat()
    axis = vec(x, y, z)
    if w < 0.0:
        axis = -axis
        w = -w
    return axis, 2.0 * float(np.arctan2(mag(axis), w))


def close(actual: NDArray[np.float64], expected: NDArray[np.float64], tol: float) -> bool:
    """True if every component of ``actual`` is within ``tol`` of ``expected``."""
    return bool(np.max(np.abs(np.asarray(actual) - np.asarray(expected))) <= tol)
