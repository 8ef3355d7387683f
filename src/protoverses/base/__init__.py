__all__ = ["BodyType", "DustBand", "DustCloud", "Planet", "Star", "System", "Universe"]

from .disk import DustBand, DustCloud
from .planet import BodyType, Planet
from .star import Star
from .system import System
from .universe import Universe
