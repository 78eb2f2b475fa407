from .universe import Universe
