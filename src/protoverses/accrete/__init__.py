__all__ = [
    "Accretion",
    "accrete_dust",
    "check_planets",
    "coalesce_planetesimals",
    "collect_dust",
    "find_collision",
    "init_planet_list",
]

from .collide import (
    check_planets,
    coalesce_planetesimals,
    find_collision,
    init_planet_list,
)
from .inject import Accretion
from .sweep import accrete_dust, collect_dust
