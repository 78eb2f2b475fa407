"""
Loft Component Architecture.

Components wrap a Body with domain-specific behavior using composition.
The Universe calls each component's ``update_state`` before integrating.

Example
-------
>>> from loft.components import Planet, Rocket
>>> from loft.core.universe import Universe
>>> universe = Universe()
>>> universe.add_component(Rocket(10, 50, 0.5, 10, 1.5, 1e3, 0.01))
"""

from .base import Component
from .planet import Planet
from .rocket import Engine, FuelTank, Rocket

__all__ = [
    "Component",
    "Planet",
    "Rocket",
    "Engine",
    "FuelTank",
]
