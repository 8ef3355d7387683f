"""
Collision resolution between newly grown protoplanets and the bodies already
orbiting the primary.
"""

import logging

import numpy as np

from protoverses.accrete.sweep import accrete_dust, critical_limit, reduced_mass
from protoverses.base.planet import BodyType, Planet
from protoverses.enviro.physics import eff_temp
from protoverses.util.constants import (
    ROCKY_AIRLESS_ALBEDO,
    SUN_MASS_IN_EARTH_MASSES,
    TRIVIAL_MASS,
)
from protoverses.util.errors import AccretionError

logger = logging.getLogger(__name__)

# Above this airless effective temperature (K) a planet is vaporized
VAPORIZATION_TEMP = 2000.0


def find_collision(bodies, a, e):
    """
    Find the body whose orbit the protoplanet at (a, e) would cross
    Args:
        bodies (list):
            Planets sorted by semi-major axis
        a (float):
            Semi-major axis of the protoplanet in AU
        e (float):
            Eccentricity of the protoplanet
    Returns:
        Planet or None:
            The colliding body with the smallest separation, the innermost
            one on ties
    """
    closest_neighbor = None
    closest_approach = 0.0
    for node in bodies:
        separation = node.a - a
        # Both reaches use the existing body's reduced mass
        rm = reduced_mass(node.mass)
        if separation > 0.0:
            # Neighbour is farther from the primary than the protoplanet
            dist1 = (a * (1.0 + e) * (1.0 + rm)) - a
            dist2 = node.a - (node.a * (1.0 - node.e) * (1.0 - rm))
        else:
            dist1 = a - (a * (1.0 - e) * (1.0 - rm))
            dist2 = (node.a * (1.0 + node.e) * (1.0 + rm)) - node.a

        if abs(separation) <= abs(dist1) or abs(separation) <= abs(dist2):
            if closest_neighbor is None or abs(separation) < closest_approach:
                closest_neighbor = node
                closest_approach = abs(separation)
    return closest_neighbor


def merged_orbit(a1, e1, m1, a2, e2, m2):
    """
    Orbit of the body formed by a perfectly inelastic collision
    Returns:
        tuple:
            (new semi-major axis in AU, new eccentricity). When the angular
            momentum term falls outside [0, 1) the eccentricity is set to 0.
    """
    new_a = (m1 + m2) / ((m1 / a1) + (m2 / a2))

    # Symmetric in e1 and e2, Dole's code used sqrt(sqrt(1 - e2**2))
    temp = m1 * np.sqrt(a1) * np.sqrt(1.0 - e1**2)
    temp = temp + m2 * np.sqrt(a2) * np.sqrt(1.0 - e2**2)
    temp = temp / ((m1 + m2) * np.sqrt(new_a))
    temp = 1.0 - temp**2
    if temp < 0.0 or temp >= 1.0:
        logger.debug(
            f"Merged eccentricity term {temp:.4g} out of range, using a circular orbit."
        )
        temp = 0.0
    return new_a, np.sqrt(temp)


def collide_planets(accretion, node, a, e, mass):
    """
    Merge the protoplanet (a, e, mass) into node, which keeps its identity.
    The merged body sweeps the cloud again from its new orbit. A star that
    absorbs a protoplanet has its star table entry updated.
    """
    try:
        body_type = BodyType(node.body_type)
    except ValueError as err:
        msg = f"Collision with unknown body type {node.body_type}"
        logger.critical(msg)
        raise AccretionError(msg) from err

    new_a, new_e = merged_orbit(node.a, node.e, node.mass, a, e, mass)
    logger.info(
        f"Collision with a {body_type.name.lower().replace('_', ' ')}! "
        f"({a:.2g}, {node.a:.2g} -> {new_a:.2g})"
    )

    crit_mass = critical_limit(new_a, new_e, accretion.stell_luminosity_ratio)
    new_mass, _ = accrete_dust(
        accretion.cloud, node.mass + mass, new_a, new_e, crit_mass, accretion.dust_density
    )

    node.a = new_a
    node.e = new_e
    node.mass = new_mass

    if body_type == BodyType.STAR:
        star = accretion.stars[node.star_index]
        star.orbit_radius = node.a
        star.mass_ratio = node.mass


def insert_sorted(bodies, body):
    """
    Insert body before the first body strictly farther out, so bodies at
    equal distance keep their insertion order
    """
    for i, node in enumerate(bodies):
        if node.a > body.a:
            bodies.insert(i, body)
            return i
    bodies.append(body)
    return len(bodies) - 1


def coalesce_planetesimals(accretion, a, e, mass, crit_mass):
    """
    Add a grown protoplanet to the system, merging it with any body whose
    orbit it crosses
    """
    if mass <= TRIVIAL_MASS:
        logger.info(
            f"Trivial mass ({mass * SUN_MASS_IN_EARTH_MASSES:.3g} Earth masses) "
            "- not adding it."
        )
        return

    node = find_collision(accretion.bodies, a, e)
    if node is not None:
        collide_planets(accretion, node, a, e, mass)
    else:
        logger.debug("Creating a new planet.")
        body_type = BodyType.GAS_GIANT if mass >= crit_mass else accretion.body_type
        new_planet = Planet({"a": a, "e": e, "mass": mass, "body_type": body_type})
        insert_sorted(accretion.bodies, new_planet)


def init_planet_list(stars, rng):
    """
    One STAR body per star, sorted by distance from the primary
    """
    bodies = []
    for i, star in enumerate(stars):
        logger.debug("Creating a new planet node for a star.")
        body = Planet(
            {
                "a": star.orbit_radius,
                "e": rng.eccentricity(),
                "mass": star.mass_ratio,
                "body_type": BodyType.STAR,
                "star_index": i,
            },
            star=star,
        )
        insert_sorted(bodies, body)
    return bodies


def check_planets(bodies, stell_luminosity_ratio, star_radius):
    """
    Remove bodies that ended up inside the primary or close enough to be
    vaporized. The first body, the primary itself, is always kept.
    Returns:
        list:
            The surviving bodies
    """
    if not bodies:
        return bodies
    r_ecosphere = np.sqrt(stell_luminosity_ratio)
    survivors = [bodies[0]]
    for planet in bodies[1:]:
        if planet.body_type == BodyType.STAR:
            survivors.append(planet)
        elif planet.a <= star_radius:
            logger.info(f"Planet at {planet.a:.3g} AU absorbed by primary!")
        elif eff_temp(r_ecosphere, planet.a, ROCKY_AIRLESS_ALBEDO) >= VAPORIZATION_TEMP:
            logger.info(f"Planet at {planet.a:.3g} AU vaporized by primary!")
        else:
            survivors.append(planet)
    return survivors
