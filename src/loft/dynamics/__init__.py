from .body import AlreadyCapturedError, Body, CompositionError, NotASubBodyError
from .shapes import Point, Shape, Sphere
from .vector import M0, M1, V0, Vx, Vy, Vz, axis_angle, close, rot
