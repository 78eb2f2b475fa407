"""
Verification Test Suite for loft.

These tests compare simulation results against analytical solutions and
conservation laws to validate the composition engine.

Test Categories:
- Kinematic: Constant velocity, torque-free spin, two-body orbit
- Conservation: Momentum and energy through capture, release and gravity
"""

import numpy as np
import pytest

from loft.dynamics.body import Body


# -----------------------------------------------------------------------------
# Common Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def momentum():
    """Total linear and angular momentum (about the origin) of the free bodies."""
    def total(bodies):
        p = np.zeros(3)
        L = np.zeros(3)
        for b in bodies:
            if b.is_free():
                p = p + b.linear_momentum()
                L = L + b.angular_momentum()
        return p, L
    return total


@pytest.fixture
def kinetic_energy():
    """Total kinetic energy of the free bodies."""
    def total(bodies):
        return sum(b.kinetic_energy() for b in bodies if b.is_free())
    return total


@pytest.fixture
def parts():
    """Five moving, spinning bodies with distinct inertia tensors."""
    rng = np.random.default_rng(7)
    bodies = []
    for i in range(5):
        bodies.append(Body(
            mass=rng.uniform(0.5, 5.0),
            inertia=np.diag(rng.uniform(0.1, 2.0, size=3)),
            position=rng.uniform(-10.0, 10.0, size=3),
            velocity=rng.uniform(-2.0, 2.0, size=3),
            angular_velocity=rng.uniform(-1.0, 1.0, size=3),
            name=f"part{i}",
        ))
    return bodies

