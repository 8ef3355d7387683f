"""
Protoplanet injection: seed bodies into the cloud around a star (or a
planet, for moons) until all the dust has been swept up.
"""

import logging

import numpy as np

from protoverses.accrete.collide import coalesce_planetesimals
from protoverses.accrete.sweep import (
    accrete_dust,
    cloud_mass,
    critical_limit,
    dust_density,
    inner_effect_limit,
    outer_effect_limit,
)
from protoverses.base.disk import DustCloud
from protoverses.base.planet import BodyType
from protoverses.util.constants import (
    KM_PER_AU,
    PROTOPLANET_MASS,
    SUN_MASS_IN_EARTH_MASSES,
)
from protoverses.util.errors import AccretionError

logger = logging.getLogger(__name__)


def stell_dust_limit(mass_ratio, dist_from_primary=0.0, central_type=BodyType.STAR):
    """
    Outer edge of the dust cloud in AU. Around a planet the cloud is 125
    times smaller and further shrunk by the primary's proximity.
    """
    norm_limit = 200.0 * mass_ratio ** (1.0 / 3.0)
    if central_type == BodyType.PLANET:
        norm_limit = norm_limit / 125.0
        primary_effect = dist_from_primary**2
        if primary_effect <= 1.0:
            return norm_limit * primary_effect
    return norm_limit


def nearest_body(mass_ratio):
    return 0.3 * mass_ratio ** (1.0 / 3.0)


def farthest_body(mass_ratio):
    return 50.0 * mass_ratio ** (1.0 / 3.0)


def roche_limit(diameter):
    """
    Distance in AU inside which a moon is torn apart by tides
    Args:
        diameter (float):
            Diameter of the planet in km
    """
    return 2.44 * diameter / KM_PER_AU


class Accretion:
    """
    State of one accretion run: the cloud, the growing body list and the
    central body's properties. Runs share nothing but the random source
    handed to them.

    Args:
        mass_ratio (float):
            Mass of the central body in solar masses
        stell_luminosity_ratio (float):
            Luminosity of the primary star in solar units
        rng (RandomSource):
            Source of every random draw of the run
        body_type (BodyType):
            PLANET to build planets around a star, MOON to build moons
            around a planet
        bodies (list or None):
            Bodies already orbiting, e.g. the system's STAR bodies
        stars (list or None):
            Star table the STAR bodies' star_index points into
        radius (float):
            Radius of the central planet in km, only used for moons
    """

    def __init__(
        self,
        mass_ratio,
        stell_luminosity_ratio,
        rng,
        body_type=BodyType.PLANET,
        bodies=None,
        stars=None,
        radius=0.0,
    ):
        self.mass_ratio = mass_ratio
        self.stell_luminosity_ratio = stell_luminosity_ratio
        self.rng = rng
        self.body_type = BodyType(body_type)
        self.bodies = [] if bodies is None else bodies
        self.stars = [] if stars is None else stars
        self.radius = radius
        self.cloud = None
        # Dust density at the latest injection site, reused by collisions
        self.dust_density = 0.0
        self.n_trials = 0
        self.n_injected = 0

    def __repr__(self):
        return (
            f"{type(self).__name__} ({self.body_type.name}, "
            f"M: {self.mass_ratio:.3g} Msun)\n"
            f"{len(self.bodies)} bodies, {self.n_injected}/{self.n_trials} "
            f"protoplanets injected"
        )

    def orbit_bounds(self):
        """
        Closest and farthest orbits a body can have around the central mass
        """
        if self.body_type == BodyType.MOON:
            inner = roche_limit(self.radius * 2.0)
        else:
            inner = nearest_body(self.mass_ratio)
        outer = farthest_body(self.mass_ratio)
        return inner, outer

    def dust_bounds(self, planet_inner_bound, planet_outer_bound):
        """
        Extent of the dust cloud. It can't reach closer to the primary than a
        circular protoplanet at the innermost orbit can sweep.
        """
        if self.body_type == BodyType.PLANET:
            dust_outer_bound = stell_dust_limit(self.mass_ratio, 0.0, BodyType.STAR)
        elif self.body_type == BodyType.MOON:
            dust_outer_bound = stell_dust_limit(
                self.mass_ratio, self.radius, BodyType.PLANET
            )
        else:
            msg = f"Bad body type {self.body_type.name} for building orbits"
            logger.critical(msg)
            raise AccretionError(msg)
        dust_inner_bound = inner_effect_limit(planet_inner_bound, 0.0, PROTOPLANET_MASS)
        dust_outer_bound = min(
            dust_outer_bound,
            outer_effect_limit(planet_outer_bound, 0.0, PROTOPLANET_MASS),
        )
        return dust_inner_bound, dust_outer_bound

    def dist_masses(self, dust_inner_bound=None, dust_outer_bound=None):
        """
        Inject protoplanets into the cloud until no dust is left. The cloud
        bounds can be given explicitly, otherwise they follow from the
        central mass.
        Returns:
            list:
                The bodies orbiting the central mass, sorted by semi-major
                axis
        """
        planet_inner_bound, planet_outer_bound = self.orbit_bounds()
        if planet_inner_bound > planet_outer_bound:
            msg = (
                f"Orbit bounds inverted ({planet_inner_bound:.4g} - "
                f"{planet_outer_bound:.4g} AU)"
            )
            logger.critical(msg)
            raise AccretionError(msg)
        default_inner, default_outer = self.dust_bounds(
            planet_inner_bound, planet_outer_bound
        )
        if dust_inner_bound is None:
            dust_inner_bound = default_inner
        if dust_outer_bound is None:
            dust_outer_bound = default_outer

        self.cloud = DustCloud(dust_inner_bound, dust_outer_bound)
        initial_mass = cloud_mass(
            dust_inner_bound,
            dust_outer_bound,
            self.mass_ratio,
            moon=self.body_type == BodyType.MOON,
        )
        logger.debug(
            f"Dust cloud ({dust_inner_bound:.4g} - {dust_outer_bound:.4g} AU) holds "
            f"{initial_mass * SUN_MASS_IN_EARTH_MASSES:.4g} Earth masses."
        )

        kind = "proto-moon" if self.body_type == BodyType.MOON else "proto-planet"
        dust_left = self.cloud.dust_left()
        while dust_left:
            self.n_trials += 1
            e = self.rng.eccentricity()
            mass = PROTOPLANET_MASS

            band = self.cloud.first_dust_band()
            if band is None:
                msg = "No dust band left to inject a protoplanet into"
                logger.critical(msg)
                raise AccretionError(msg)

            # Somewhere within the innermost band that still has dust
            bound1 = max(band.inner_edge, planet_inner_bound)
            bound2 = min(band.outer_edge, planet_outer_bound)
            a = self.rng.uniform(bound1, bound2)

            eff_inner_bound = inner_effect_limit(a, e, mass)
            eff_outer_bound = outer_effect_limit(a, e, mass)
            if not self.cloud.has_dust_in(eff_inner_bound, eff_outer_bound):
                logger.debug(f"Not enough dust at {a:.4g} AU.")
                continue

            logger.info(f"Injecting {kind} ({a:.2g} AU)")
            self.n_injected += 1
            self.dust_density = dust_density(
                self.mass_ratio, a, moon=self.body_type == BodyType.MOON
            )
            crit_mass = critical_limit(a, e, self.stell_luminosity_ratio)
            mass, dust_left = accrete_dust(
                self.cloud, mass, a, e, crit_mass, self.dust_density
            )
            if mass != 0.0 and mass != PROTOPLANET_MASS:
                coalesce_planetesimals(self, a, e, mass, crit_mass)
                # Collisions sweep the cloud again
                dust_left = self.cloud.dust_left()
            else:
                logger.debug(f"Neighbor too near ({a:.4g} AU).")

        total = sum(body.mass for body in self.bodies if body.body_type != BodyType.STAR)
        logger.debug(
            f"Cloud exhausted after {self.n_trials} trials, "
            f"{total * SUN_MASS_IN_EARTH_MASSES:.4g} Earth masses accreted."
        )
        return self.bodies
