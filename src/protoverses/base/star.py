import astropy.units as u
import numpy as np

from protoverses.util.constants import GREENHOUSE_EFFECT_CONST


class Star:
    """
    A star of a system. Mass and luminosity are stored as ratios to the
    Sun's, radius and orbit radius in AU and age in years.
    """

    def __init__(self, star_dict):
        self.name = star_dict.get("name", "")
        self.mass_ratio = star_dict["mass"]
        self.luminosity_ratio = star_dict.get("luminosity")
        self.radius = star_dict.get("radius")
        self.age = star_dict.get("age")
        # Distance from the primary, 0 for the primary itself
        self.orbit_radius = star_dict.get("orbit_radius", 0.0)
        self.main_seq_life = None
        self.r_ecosphere = None
        self.r_greenhouse = None
        if self.luminosity_ratio is not None:
            self.solve_dependent_params()

    def __repr__(self):
        return (
            f"{type(self).__name__} object\n{self.name}\t"
            f"M: {self.mass_ratio:.3g} Msun\tL: {self.luminosity_ratio:.3g} Lsun"
        )

    def solve_dependent_params(self):
        self.main_seq_life = max(1.1e10 * (self.mass_ratio / self.luminosity_ratio), 1e6)
        # Distance at which the insolation matches Earth's
        self.r_ecosphere = np.sqrt(self.luminosity_ratio)
        self.r_greenhouse = self.r_ecosphere * GREENHOUSE_EFFECT_CONST

    def dump_params(self):
        return {
            "name": self.name,
            "mass": self.mass_ratio * u.M_sun,
            "luminosity": self.luminosity_ratio * u.L_sun,
            "radius": self.radius * u.AU,
            "age": self.age * u.yr,
            "orbit_radius": self.orbit_radius * u.AU,
            "r_ecosphere": self.r_ecosphere * u.AU,
        }
