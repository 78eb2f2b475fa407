"""
Capture and release of two point-like bodies.

b1 (m=2) starts at 6z and b2 (m=6) at 2z, so the aggregate's center of mass
is at 3z and b2 sits 4 m along b1's x-axis once captured.
"""
import numpy as np
import pytest

from loft.dynamics.body import (
    AlreadyCapturedError,
    Body,
    CompositionError,
    NotASubBodyError,
)
from loft.dynamics.vector import M0, M1, V0, Vx, Vy, Vz, close, cross, rot, vec

W_ROTATE = 12.0 / 13.0
W_SPIN = 4.0 / 27.0


def momentum(bodies):
    """Linear and angular momentum about the origin of the free bodies."""
    p = np.zeros(3)
    L = np.zeros(3)
    for b in bodies:
        if b.is_free():
            p = p + b.linear_momentum()
            L = L + b.angular_momentum()
    return p, L


def assert_momentum(bodies, expected):
    p, L = momentum(bodies)
    assert close(p, expected[0], 1e-9)
    assert close(L, expected[1], 1e-9)


def r1_hat(w):
    return vec(np.sin(w), 0, np.cos(w))


def test_two_point_static(My, Mz, Myz):
    b1 = Body(2.0, M1, position=6 * Vz, orientation=My)
    b2 = Body(6.0, M1, position=2 * Vz, orientation=Myz)
    before = momentum([b1, b2])
    assert close(b1.orientation() @ Vz, Vx, 1e-9)
    assert close(b2.orientation() @ Vx, Vy, 1e-9)
    assert close(b2.orientation() @ Vy, Vz, 1e-9)

    def check_aggregate():
        assert b1.mass() == 8.0
        assert b2.mass() == 6.0
        # Orbit (Σmr² = 2*9 + 6) plus spin (ΣI = 1 + 1)
        assert close(b1.inertia(), np.diag([26.0, 26.0, 2.0]), 1e-9)
        assert np.array_equal(b2.inertia(), M1)
        assert close(b1.center_of_mass(), 3 * Vz, 1e-9)
        assert close(b2.center_of_mass(), 4 * Vx, 1e-9)
        assert np.array_equal(b1.velocity_of_cm(), V0)
        assert np.array_equal(b2.velocity_of_cm(), V0)
        assert close(b1.position(), 6 * Vz, 1e-9)
        assert close(b2.position(), 4 * Vx, 1e-9)
        assert np.array_equal(b1.orientation(), My)
        assert close(b2.orientation(), Mz, 1e-9)
        assert np.array_equal(b1.angular_velocity(), V0)
        assert np.array_equal(b2.angular_velocity(), V0)
        assert not b2.is_free()
        assert b2.parent is b1
        assert b2.root() is b1
        assert b1.subs == (b2,)

    b1.capture(b2)
    check_aggregate()
    assert_momentum([b1, b2], before)
    b1.step(1.0)
    check_aggregate()

    b1.release(b2)
    assert b1.mass() == 2.0
    assert np.array_equal(b1.inertia(), M1)
    assert close(b1.center_of_mass(), 6 * Vz, 1e-9)
    assert close(b2.center_of_mass(), 2 * Vz, 1e-9)
    assert close(b1.velocity_of_cm(), V0, 1e-12)
    assert close(b2.velocity_of_cm(), V0, 1e-12)
    assert close(b2.position(), 2 * Vz, 1e-9)
    assert np.array_equal(b1.orientation(), My)
    assert close(b2.orientation(), Myz, 1e-9)
    assert b2.is_free()
    assert b1.subs == ()
    assert_momentum([b1, b2], before)


def test_two_point_translate(My, Mz, Myz):
    b1 = Body(2.0, M1, position=6 * Vz, velocity=-4 * Vz, orientation=My)
    b2 = Body(6.0, M1, position=2 * Vz, orientation=Myz)
    before = momentum([b1, b2])

    b1.capture(b2)
    assert close(b1.inertia(), np.diag([26.0, 26.0, 2.0]), 1e-9)
    assert close(b1.center_of_mass(), 3 * Vz, 1e-9)
    assert np.array_equal(b1.velocity_of_cm(), -Vz)
    assert close(b1.angular_velocity(), V0, 1e-12)
    assert_momentum([b1, b2], before)

    b1.step(1.0)
    assert close(b1.position(), 5 * Vz, 1e-9)
    assert close(b1.center_of_mass(), 2 * Vz, 1e-9)
    assert np.array_equal(b1.orientation(), My)

    b1.release(b2)
    assert close(b1.position(), 5 * Vz, 1e-9)
    assert close(b2.position(), Vz, 1e-9)
    assert close(b1.velocity_of_cm(), -Vz, 1e-12)
    assert close(b2.velocity_of_cm(), -Vz, 1e-12)
    assert close(b2.orientation(), Myz, 1e-9)
    assert_momentum([b1, b2], before)


def test_two_point_rotate(My, Mz, Myz):
    b1 = Body(2.0, M1, position=6 * Vz, velocity=3 * Vx, orientation=My)
    b2 = Body(6.0, M1, position=2 * Vz, velocity=-Vx, orientation=Myz)
    before = momentum([b1, b2])
    w = W_ROTATE
    r1 = r1_hat(w)

    b1.capture(b2)
    assert close(b1.center_of_mass(), 3 * Vz, 1e-9)
    # Total linear momentum is zero.
    assert close(b1.velocity_of_cm(), V0, 1e-12)
    assert close(b1.angular_velocity(), w * Vy, 1e-12)
    assert_momentum([b1, b2], before)

    b1.step(1.0)
    assert close(b1.position(), 3 * Vz + 3 * r1, 1e-9)
    assert close(b1.center_of_mass(), 3 * Vz, 1e-9)
    assert close(b2.position(), 4 * Vx, 1e-9)
    assert close(b1.orientation() @ Vz, vec(np.cos(w), 0, -np.sin(w)), 1e-9)
    assert close(b2.orientation(), Mz, 1e-9)
    assert np.array_equal(b2.angular_velocity(), V0)

    b1.release(b2)
    assert close(b1.position(), 3 * Vz + 3 * r1, 1e-9)
    assert close(b2.position(), 3 * Vz - r1, 1e-9)
    assert close(b1.velocity_of_cm(), cross(w * Vy, 3 * r1), 1e-9)
    assert close(b2.velocity_of_cm(), cross(w * Vy, -r1), 1e-9)
    assert close(b2.orientation() @ Vx, Vy, 1e-9)
    assert close(b2.orientation() @ Vy, vec(np.sin(w), 0, np.cos(w)), 1e-9)
    assert close(b2.orientation() @ Vz, vec(np.cos(w), 0, -np.sin(w)), 1e-9)
    assert close(b1.angular_velocity(), w * Vy, 1e-12)
    assert close(b2.angular_velocity(), w * Vy, 1e-12)
    assert_momentum([b1, b2], before)


def test_two_point_spin(My, Mz, Myz):
    b1 = Body(2.0, 2 * M1, position=6 * Vz, orientation=My, angular_velocity=Vy)
    b2 = Body(6.0, M1, position=2 * Vz, orientation=Myz, angular_velocity=2 * Vy)
    before = momentum([b1, b2])
    w = W_SPIN
    r1 = r1_hat(w)

    b1.capture(b2)
    assert close(b1.angular_velocity(), w * Vy, 1e-12)
    assert close(b1.velocity_of_cm(), V0, 1e-12)
    assert_momentum([b1, b2], before)

    b1.step(1.0)
    assert close(b1.position(), 3 * Vz + 3 * r1, 1e-9)
    assert close(b1.center_of_mass(), 3 * Vz, 1e-9)

    b1.release(b2)
    assert close(b2.position(), 3 * Vz - r1, 1e-9)
    assert close(b1.velocity_of_cm(), cross(w * Vy, 3 * r1), 1e-9)
    assert close(b2.velocity_of_cm(), cross(w * Vy, -r1), 1e-9)
    assert close(b2.angular_velocity(), w * Vy, 1e-12)
    assert_momentum([b1, b2], before)


def test_two_point_rotate_and_translate(My, Mz, Myz):
    b1 = Body(2.0, M1, position=6 * Vz, velocity=6 * Vx, orientation=My)
    b2 = Body(6.0, M1, position=2 * Vz, velocity=2 * Vx, orientation=Myz)
    before = momentum([b1, b2])
    w = W_ROTATE
    r1 = r1_hat(w)

    b1.capture(b2)
    assert close(b1.velocity_of_cm(), 3 * Vx, 1e-12)
    assert close(b1.angular_velocity(), w * Vy, 1e-12)
    assert_momentum([b1, b2], before)

    b1.step(1.0)
    assert close(b1.position(), vec(3, 0, 3) + 3 * r1, 1e-9)
    assert close(b1.center_of_mass(), vec(3, 0, 3), 1e-9)

    b1.release(b2)
    assert close(b2.position(), vec(3, 0, 3) - r1, 1e-9)
    assert close(b1.velocity_of_cm(), 3 * Vx + cross(w * Vy, 3 * r1), 1e-9)
    assert close(b2.velocity_of_cm(), 3 * Vx + cross(w * Vy, -r1), 1e-9)
    assert_momentum([b1, b2], before)


def test_capture_then_release_restores_static_part():
    this = Body(3.0, np.diag([1.0, 2.0, 3.0]), position=vec(1, 2, 3),
                orientation=rot(M1, vec(0.3, 0.1, -0.2)))
    part = Body(1.5, M1, position=vec(-2, 4, 0.5), orientation=rot(M1, vec(1.0, 0.0, 0.4)))
    r, o = part.position(), part.orientation()
    this.capture(part)
    this.release(part)
    assert close(part.position(), r, 1e-9)
    assert close(part.orientation(), o, 1e-9)
    assert close(part.velocity_of_cm(), V0, 1e-12)
    assert close(part.angular_velocity(), V0, 1e-12)


def test_capture_at_depth_updates_root():
    root = Body(1.0, M1, velocity=Vx)
    mid = Body(1.0, M1, position=2 * Vx)
    root.capture(mid)
    late = Body(2.0, M1, position=4 * Vx, velocity=-Vx)
    before = momentum([root, late])

    mid.capture(late)
    assert late.parent is mid
    assert late.root() is root
    assert close(mid.velocity_of_cm(), V0, 0.0)
    assert close(root.velocity_of_cm(), -0.25 * Vx, 1e-12)
    assert_momentum([root, mid, late], before)


def test_capture_with_singular_combined_inertia_keeps_omega():
    # Two point masses on the x-axis have no moment about it.
    a = Body(2.0, M0, velocity=Vx, angular_velocity=Vz)
    b = Body(6.0, M0, position=4 * Vx, velocity=-Vx)
    a.capture(b)
    assert b.parent is a
    assert np.array_equal(a.angular_velocity(), Vz)
    assert close(a.velocity_of_cm(), -0.5 * Vx, 1e-15)
    assert np.array_equal(b.velocity_of_cm(), V0)


def test_capture_between_massless_bodies():
    a = Body(0.0, M0, velocity=Vx, angular_velocity=Vz)
    b = Body(0.0, M0, position=Vy, velocity=-Vy)
    a.capture(b)
    assert b.parent is a
    assert np.array_equal(a.velocity_of_cm(), Vx)
    assert np.array_equal(a.angular_velocity(), Vz)
    assert np.all(np.isfinite(a.velocity_of_cm()))
    # A captured part carries no velocity of its own.
    assert np.array_equal(b.velocity_of_cm(), V0)
    assert close(b.absolute_position(), Vy, 1e-15)


def test_capture_preconditions():
    a = Body(1.0, M1)
    b = Body(1.0, M1, position=Vx)
    c = Body(1.0, M1, position=Vy)
    a.capture(b)

    with pytest.raises(AlreadyCapturedError):
        c.capture(b)
    assert b.parent is a
    assert a.subs == (b,)

    # Capturing the root of one's own tree would make a cycle.
    with pytest.raises(AlreadyCapturedError):
        b.capture(a)
    assert a.is_free()

    with pytest.raises(AlreadyCapturedError):
        a.capture(a)


def test_release_preconditions():
    a = Body(1.0, M1)
    b = Body(1.0, M1, position=Vx)
    c = Body(1.0, M1, position=Vy)
    a.capture(b)
    b.capture(c)

    with pytest.raises(NotASubBodyError):
        a.release(c)  # grandchild, not a direct sub-body
    with pytest.raises(NotASubBodyError):
        c.release(a)
    assert c.parent is b
    assert [x for x in a.walk()] == [a, b, c]


def test_errors_are_value_errors():
    assert issubclass(AlreadyCapturedError, CompositionError)
    assert issubclass(NotASubBodyError, CompositionError)
    assert issubclass(CompositionError, ValueError)


def test_release_nested_part_conserves_momentum():
    a = Body(2.0, np.diag([1.0, 2.0, 3.0]), velocity=vec(0.5, -1.0, 0.0),
             angular_velocity=vec(0.1, 0.2, 0.3))
    b = Body(1.0, M1, position=vec(3, 0, 0), velocity=vec(0, 1, 0))
    c = Body(0.5, 2 * M1, position=vec(3, 2, 1), angular_velocity=vec(0, 0, 1))
    bodies = [a, b, c]
    before = momentum(bodies)

    a.capture(b)
    b.capture(c)
    assert_momentum(bodies, before)

    b.release(c)
    assert_momentum(bodies, before)
    a.release(b)
    assert_momentum(bodies, before)
