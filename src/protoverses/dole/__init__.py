__all__ = ["DoleStar", "DoleSystem", "DoleUniverse", "create_universe"]

from .star import DoleStar
from .system import DoleSystem
from .universe import DoleUniverse, create_universe
