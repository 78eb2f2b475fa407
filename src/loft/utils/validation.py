"""
Validation utilities for physical parameters and state variables.

Used when a Body is constructed. The direct setters on Body bypass these
checks on purpose; collaborators updating mass properties every step are
responsible for physical consistency.
"""
from __future__ import annotations

import math
import warnings

import numpy as np
from numpy.typing import ArrayLike, NDArray


def validate_non_negative(value: float, name: str) -> None:
    """Validate that a value is non-negative."""
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_vector(v: ArrayLike, name: str) -> NDArray[np.float64]:
    """
    Validate and copy a 3-vector.

    Parameters
    ----------
    v : array-like
        Vector to validate
    name : str
        Parameter name for error messages

    Returns
    -------
    NDArray[np.float64]
        Writable float64 copy, shape (3,)

    Raises
    ------
    ValueError
        If shape is not (3,) or a component is not finite
    """
    arr = np.array(v, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"{name} must have shape (3,), got {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} must be finite, got {arr}")
    return arr


def validate_inertia_tensor(I: ArrayLike, tol: float = 1e-9) -> NDArray[np.float64]:
    """
    Validate and copy an inertia tensor.

    Parameters
    ----------
    I : array-like
        Inertia tensor (3, 3)
    tol : float
        Tolerance for the symmetry and semi-definiteness checks

    Returns
    -------
    NDArray[np.float64]
        Writable float64 copy, shape (3, 3)

    Raises
    ------
    ValueError
        If shape is wrong or the tensor has a negative principal moment

    Notes
    -----
    Zero tensors are accepted: point masses and bodies whose rotational
    inertia comes entirely from their sub-bodies.
    """
    arr = np.array(I, dtype=np.float64)
    if arr.shape != (3, 3):
        raise ValueError(f"Inertia tensor must be 3x3, got shape {arr.shape}")

    scale = max(float(np.max(np.abs(arr))), 1.0)
    if not np.allclose(arr, arr.T, rtol=0.0, atol=tol * scale):
        warnings.warn(
            "Inertia tensor is not symmetric.",
            RuntimeWarning,
            stacklevel=3
        )

    eigenvalues = np.linalg.eigvalsh(0.5 * (arr + arr.T))
    if np.any(eigenvalues < -tol * scale):
        raise ValueError(
            f"Inertia tensor must be positive semi-definite. "
            f"Got eigenvalues: {eigenvalues}"
        )
    return arr


def validate_orientation(m: ArrayLike, tol: float = 1e-6) -> NDArray[np.float64]:
    """
    Validate and copy an orientation matrix.

    Raises
    ------
    ValueError
        If shape is not (3, 3)

    Notes
    -----
    A matrix that is not orthonormal only warns; frame transforms assume the
    transpose is the inverse, so results will be skewed.
    """
    arr = np.array(m, dtype=np.float64)
    if arr.shape != (3, 3):
        raise ValueError(f"Orientation must be 3x3, got shape {arr.shape}")
    if not np.allclose(arr @ arr.T, np.eye(3), rtol=0.0, atol=tol):
        warnings.warn(
            "Orientation matrix is not orthonormal.",
            RuntimeWarning,
            stacklevel=3
        )
    return arr


def validate_timestep(dt: float) -> None:
    """
    Validate a time step.

    Parameters
    ----------
    dt : float
        Time step [s]

    Raises
    ------
    ValueError
        If timestep is negative or not finite
    """
    if not math.isfinite(dt):
        raise ValueError(f"Timestep must be finite, got {dt}")
    if dt < 0:
        raise ValueError(f"Timestep must be non-negative, got {dt}")
