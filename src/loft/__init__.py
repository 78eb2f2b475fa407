"""
Loft - Rigid-body composition and orbital mechanics.

Core Components
---------------
Universe : Gravity and collision orchestrator
Body : Rigid-body tree node with momentum-conserving capture and release

Component Architecture
----------------------
Component : Base class for bodies with behavior
Rocket : Shell, engine and fuel assembly
Planet : Spinning sphere with latitude/longitude mapping

Examples
--------
>>> from loft import Universe, Body
>>> from loft.components import Planet, Rocket
"""

__version__ = "0.1.0"

from loft.components import Component, Engine, FuelTank, Planet, Rocket
from loft.core.universe import Universe
from loft.dynamics.body import (
    AlreadyCapturedError,
    Body,
    CompositionError,
    NotASubBodyError,
)
from loft.dynamics.shapes import Point, Sphere

# Logging
from loft.logger import CSVLogger

__all__ = [
    # Version
    "__version__",
    # Core
    "Universe",
    "Body",
    "Point",
    "Sphere",
    # Errors
    "CompositionError",
    "AlreadyCapturedError",
    "NotASubBodyError",
    # Components
    "Component",
    "Rocket",
    "Engine",
    "FuelTank",
    "Planet",
    # Logging
    "CSVLogger",
]
