import logging

import numpy as np

from protoverses.base.star import Star
from protoverses.util.constants import AU_PER_SOLAR_RADIUS
from protoverses.util.errors import ConfigError

logger = logging.getLogger(__name__)

# (maximum mass in solar masses, percent of main-sequence stars between the
# previous entry and this one), from M9 up to O0. Bowers and Deeming,
# "Astrophysics I", p. 31.
MAIN_SEQUENCE_MASS_BINS = [
    (0.1, 0),
    (0.2, 35),
    (0.5, 36),
    (0.7, 7),
    (0.8, 7),
    (0.9, 3),
    (1.1, 3),
    (1.3, 2),
    (1.7, 1),
    (2.0, 1),
    (3.2, 1),
    (6.5, 1),
    (17.8, 1),
    (39.8, 1),
    (60.0, 1),
]


def main_sequence_luminosity(mass_ratio):
    """
    Luminosity in solar units, Bowers and Deeming eq. 3.52. Slightly
    overestimates the Sun's.
    """
    if mass_ratio <= 0.5:
        alpha, beta = 2.85, -0.15
    elif mass_ratio < 2.5:
        alpha, beta = 3.6, 0.073
    else:
        alpha, beta = 2.91, 0.479
    return 10.0 ** (beta + alpha * np.log10(mass_ratio))


def main_sequence_radius(mass_ratio):
    """Radius in AU"""
    log_mass = np.log10(mass_ratio)
    if mass_ratio <= 0.4:
        radius = 10.0 ** (log_mass + 0.1)
    else:
        radius = 10.0 ** (0.73 * log_mass)
    return radius * AU_PER_SOLAR_RADIUS


def star_age(lifetime, rng):
    """Random age in years for a star with the given main-sequence lifetime"""
    if lifetime >= 6e9:
        return rng.uniform(1e9, 6e9)
    elif lifetime > 1e9:
        return rng.uniform(1e9, lifetime)
    return rng.uniform(1e6, lifetime)


def rand_star_mass(rng):
    """Mass in solar masses of a random main-sequence star"""
    temp = int(rng.uniform(0.0, 100.0))
    percent = 0
    prev_mass = 0.0
    for max_mass, percentage in MAIN_SEQUENCE_MASS_BINS:
        percent += percentage
        if temp <= percent:
            return rng.uniform(prev_mass, max_mass)
        prev_mass = max_mass
    return 1.0


class DoleStar(Star):
    """
    Main-sequence star whose missing properties are derived from its mass.
    Values given in star_dict always win over derived ones; a star without
    a mass gets a random one.
    """

    def __init__(self, star_dict, rng):
        star_dict = dict(star_dict)
        if star_dict.get("mass") is None:
            star_dict["mass"] = rand_star_mass(rng)
        if star_dict["mass"] <= 0:
            raise ConfigError(f"Star mass must be positive, got {star_dict['mass']}")
        mass = star_dict["mass"]
        if star_dict.get("luminosity") is None:
            star_dict["luminosity"] = main_sequence_luminosity(mass)
        if star_dict.get("radius") is None:
            star_dict["radius"] = main_sequence_radius(mass)
        super().__init__(star_dict)
        if self.age is None:
            self.age = star_age(self.main_seq_life, rng)
        logger.debug(
            f"Star {self.name or '(unnamed)'}: M={self.mass_ratio:.3g}, "
            f"L={self.luminosity_ratio:.3g}, age={self.age:.3g} yr"
        )
