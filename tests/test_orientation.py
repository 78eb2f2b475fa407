"""
Tests for orientation builders.
"""
import numpy as np
import pytest

from loft.dynamics.body import Body
from loft.dynamics.vector import M1, Vx, Vy, Vz, close, rot
from loft.utils.orientation import (
    describe_orientation,
    orientation_from_axis_angle,
    orientation_from_direction,
    orientation_from_euler,
    orientation_to_euler,
)


def test_euler_identity():
    assert close(orientation_from_euler(), M1, 1e-15)


def test_euler_single_axes():
    assert close(orientation_from_euler(yaw=90) @ Vx, Vy, 1e-12)
    assert close(orientation_from_euler(pitch=90) @ Vz, Vx, 1e-12)
    assert close(orientation_from_euler(roll=90) @ Vy, Vz, 1e-12)
    assert close(orientation_from_euler(yaw=np.pi / 2, degrees=False), rot(M1, np.pi / 2 * Vz), 1e-12)


def test_euler_round_trip():
    m = orientation_from_euler(roll=10, pitch=-20, yaw=30)
    roll, pitch, yaw = orientation_to_euler(m)
    assert roll == pytest.approx(10)
    assert pitch == pytest.approx(-20)
    assert yaw == pytest.approx(30)
    assert all(isinstance(a, float) for a in (roll, pitch, yaw))


def test_axis_angle_matches_rot():
    axis = np.array([1.0, -2.0, 0.5])
    m = orientation_from_axis_angle(axis, 40.0)
    expected = rot(M1, np.deg2rad(40.0) * axis / np.linalg.norm(axis))
    assert close(m, expected, 1e-12)


def test_axis_angle_zero_axis():
    with pytest.raises(ValueError, match="non-zero"):
        orientation_from_axis_angle([0, 0, 0], 10.0)


@pytest.mark.parametrize("body_axis, toward", [
    ("z", [1, 0, 0]),
    ("x", [0, 0, 5]),
    ("y", [1, 1, 1]),
    ("-z", [0, 2, -1]),
    ("+x", [-3, 0, 4]),
])
def test_direction_aligns_axis(body_axis, toward):
    m = orientation_from_direction(body_axis, toward=toward)
    axis = {"x": Vx, "y": Vy, "z": Vz}[body_axis[-1]]
    if body_axis.startswith("-"):
        axis = -axis
    target = np.asarray(toward, dtype=float)
    assert close(m @ axis, target / np.linalg.norm(target), 1e-9)
    assert close(m @ m.T, M1, 1e-12)
    assert np.linalg.det(m) == pytest.approx(1.0)


def test_direction_invalid():
    with pytest.raises(ValueError, match="body_axis"):
        orientation_from_direction("w", toward=[1, 0, 0])
    with pytest.raises(ValueError, match="non-zero"):
        orientation_from_direction("z", toward=[0, 0, 0])


def test_orientation_accepted_by_body():
    m = orientation_from_direction("z", toward=[1, 0, 0])
    b = Body(1.0, M1, orientation=m)
    assert close(b.rotate_out(Vz), Vx, 1e-9)


def test_describe_orientation():
    text = describe_orientation(orientation_from_euler(roll=15, yaw=90))
    assert text.startswith("Roll: 15.0°, Pitch: ")
    assert text.endswith("Yaw: 90.0°")
