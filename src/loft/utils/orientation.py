"""
Engineer-friendly orientation utilities.

Build orientation matrices for Body without composing rotations by hand.
Every builder returns a 3x3 matrix mapping body axes into the parent frame,
the form ``Body(orientation=...)`` and ``set_orientation`` expect.

Examples
--------
>>> from loft.utils.orientation import (
...     orientation_from_euler,
...     orientation_from_direction,
... )

# Tip the body 45° nose-down (pitch)
>>> m = orientation_from_euler(pitch=-45)

# Point the body's Z-axis (rocket thrust axis) toward +X global
>>> m = orientation_from_direction(body_axis='z', toward=[1, 0, 0])
"""
from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.spatial.transform import Rotation as R


def orientation_from_euler(
    roll: float = 0.0,
    pitch: float = 0.0,
    yaw: float = 0.0,
    degrees: bool = True,
    order: str = "xyz"
) -> NDArray[np.float64]:
    """
    Create an orientation matrix from Euler angles.

    Parameters
    ----------
    roll : float
        Rotation about X axis [degrees or radians]
    pitch : float
        Rotation about Y axis [degrees or radians]
    yaw : float
        Rotation about Z axis [degrees or radians]
    degrees : bool
        If True (default), angles are in degrees
    order : str
        Euler angle sequence for scipy. Lowercase is extrinsic.

    Returns
    -------
    NDArray[np.float64]
        Orientation matrix (3, 3)
    """
    return R.from_euler(order, [roll, pitch, yaw], degrees=degrees).as_matrix()


def orientation_from_axis_angle(
    axis: ArrayLike,
    angle: float,
    degrees: bool = True
) -> NDArray[np.float64]:
    """
    Rotation of ``angle`` about ``axis`` as a matrix.

    Raises
    ------
    ValueError
        If the axis is the zero vector
    """
    axis = np.asarray(axis, dtype=np.float64)
    n = np.linalg.norm(axis)
    if n == 0.0:
        raise ValueError("Rotation axis must be non-zero")
    if degrees:
        angle = np.deg2rad(angle)
    return R.from_rotvec(axis / n * angle).as_matrix()


def orientation_from_direction(
    body_axis: str = "z",
    toward: ArrayLike = (0, 0, 1),
) -> NDArray[np.float64]:
    """
    Smallest rotation that points a body axis in a global direction.

    Parameters
    ----------
    body_axis : str
        Which body axis to align: 'x', 'y', or 'z' (optionally signed, '-z')
    toward : array-like
        Target direction in the parent frame. Will be normalized.

    Returns
    -------
    NDArray[np.float64]
        Orientation matrix (3, 3)

    Examples
    --------
    >>> # Thrust axis along +X
    >>> m = orientation_from_direction('z', toward=[1, 0, 0])
    """
    axis = body_axis.lower().strip()
    sign = 1.0
    if axis.startswith('-'):
        sign = -1.0
        axis = axis[1:]
    elif axis.startswith('+'):
        axis = axis[1:]

    axis_map = {'x': 0, 'y': 1, 'z': 2}
    if axis not in axis_map:
        raise ValueError(f"body_axis must be 'x', 'y', or 'z', got '{body_axis}'")

    target = np.asarray(toward, dtype=np.float64)
    n = np.linalg.norm(target)
    if n == 0.0:
        raise ValueError("Target direction must be non-zero")
    target = target / n

    body_vec = np.zeros(3)
    body_vec[axis_map[axis]] = sign

    # align_vectors finds the rotation taking body_vec onto target.
    rot, _ = R.align_vectors([target], [body_vec])
    return rot.as_matrix()


def orientation_to_euler(
    m: ArrayLike,
    order: str = "xyz",
    degrees: bool = True
) -> tuple[float, float, float]:
    """Convert an orientation matrix to Euler angles for inspection."""
    angles = R.from_matrix(np.asarray(m, dtype=np.float64)).as_euler(order, degrees=degrees)
    return tuple(float(a) for a in angles)


def describe_orientation(m: ArrayLike) -> str:
    """
    Get human-readable description of an orientation.

    Examples
    --------
    >>> describe_orientation(orientation_from_euler(yaw=90))
    'Roll: 0.0°, Pitch: 0.0°, Yaw: 90.0°'
    """
    roll, pitch, yaw = orientation_to_euler(m, degrees=True)
    return f"Roll: {roll:.1f}°, Pitch: {pitch:.1f}°, Yaw: {yaw:.1f}°"
