"""Utility functions for Loft simulations."""

from .io import body_columns, load_simulation_log
from .orientation import (
    describe_orientation,
    orientation_from_axis_angle,
    orientation_from_direction,
    orientation_from_euler,
    orientation_to_euler,
)
from .validation import (
    validate_inertia_tensor,
    validate_non_negative,
    validate_orientation,
    validate_timestep,
    validate_vector,
)

__all__ = [
    "load_simulation_log",
    "body_columns",
    "orientation_from_euler",
    "orientation_from_axis_angle",
    "orientation_from_direction",
    "orientation_to_euler",
    "describe_orientation",
    "validate_non_negative",
    "validate_vector",
    "validate_inertia_tensor",
    "validate_orientation",
    "validate_timestep",
]
