"""
Surface temperature of rocky bodies, found by iterating the coupled
temperature, cloud, ice and albedo relations to a fixed point.
"""

import logging
from dataclasses import dataclass

import numpy as np

from protoverses.enviro.physics import eff_temp
from protoverses.util.constants import (
    AIRLESS_ICE_ALBEDO,
    CLOUD_ALBEDO,
    CLOUD_COVERAGE_FACTOR,
    EARTH_ALBEDO,
    EARTH_CONVECTION_FACTOR,
    EARTH_SURF_PRES_IN_MILLIBARS,
    EARTH_WATER_MASS_PER_AREA,
    FREEZING_POINT_OF_WATER,
    ICE_ALBEDO,
    KM_EARTH_RADIUS,
    Q2_36,
    ROCKY_AIRLESS_ALBEDO,
    ROCKY_ALBEDO,
    TEMP_ITERATION_LIMIT,
    WATER_ALBEDO,
    WATER_VAPOR,
)

logger = logging.getLogger(__name__)

# Optical depth contribution by smallest retained molecular weight
OPACITY_BY_MOLEC_WEIGHT = [
    (0.0, 10.0, 3.0),
    (10.0, 20.0, 2.34),
    (20.0, 30.0, 1.0),
    (30.0, 45.0, 0.15),
    (45.0, 100.0, 0.05),
]

# Optical depth multiplier by surface pressure in Earth atmospheres
OPACITY_BY_PRESSURE = [(70.0, 8.333), (50.0, 6.666), (30.0, 3.333), (10.0, 2.0), (5.0, 1.5)]


@dataclass
class SurfaceState:
    surf_temp: float  # K
    albedo: float
    hydrosphere: float
    cloud_cover: float
    ice_cover: float
    iterations: int
    converged: bool


def _about(value, variation, rng):
    if rng is None:
        return value
    return rng.jitter(value, variation)


def hydro_fraction(volatile_gas_inventory, planet_radius):
    """
    Fraction of the surface covered with water, Fogg's eq. 22 with the
    Earth's 71% water coverage
    """
    temp = (0.71 * volatile_gas_inventory / 1000.0) * (
        KM_EARTH_RADIUS / planet_radius
    ) ** 2
    return min(temp, 1.0)


def cloud_fraction(surf_temp, smallest_MW_retained, equat_radius, hyd_fraction):
    """
    Fraction of the surface covered by clouds, Fogg's eq. 23 (Hart, Icarus
    vol 33, eq. 3)
    """
    if smallest_MW_retained > WATER_VAPOR:
        return 0.0
    surf_area = 4.0 * np.pi * equat_radius**2
    hydro_mass = hyd_fraction * surf_area * EARTH_WATER_MASS_PER_AREA
    water_vapor_in_kg = (1e-8 * hydro_mass) * np.exp(Q2_36 * (surf_temp - 288.0))
    fraction = CLOUD_COVERAGE_FACTOR * water_vapor_in_kg / surf_area
    return min(fraction, 1.0)


def ice_fraction(hyd_fraction, surf_temp):
    """
    Fraction of the surface covered by ice, Fogg's eq. 24 with the constant
    raised from 70 to 90 to match the Earth's ~1.6%
    """
    surf_temp = min(surf_temp, 328.0)
    temp = ((328.0 - surf_temp) / 90.0) ** 5
    temp = min(temp, 1.5 * hyd_fraction)
    return min(temp, 1.0)


def green_rise(optical_depth, effective_temp, surf_pressure):
    """Greenhouse temperature rise in K, Fogg's eq. 20"""
    convection_factor = (
        EARTH_CONVECTION_FACTOR * (surf_pressure / EARTH_SURF_PRES_IN_MILLIBARS) ** 0.25
    )
    return ((1.0 + 0.75 * optical_depth) ** 0.25 - 1.0) * effective_temp * convection_factor


def opacity(molecular_weight, surf_pressure):
    """Dimensionless optical depth of the atmosphere"""
    optical_depth = 0.0
    for low, high, depth in OPACITY_BY_MOLEC_WEIGHT:
        if low <= molecular_weight < high:
            optical_depth += depth
    for atmospheres, factor in OPACITY_BY_PRESSURE:
        if surf_pressure >= atmospheres * EARTH_SURF_PRES_IN_MILLIBARS:
            optical_depth *= factor
            break
    return optical_depth


def planet_albedo(water_fraction, cld_fraction, ice_frc, surf_pressure, rng=None):
    """
    Blend the albedo of clouds, rock, water and ice. Clouds hide an equal
    share of each surface component below them. With an rng every
    component albedo is jittered around its nominal value.
    """
    rock_fraction = 1.0 - water_fraction - ice_frc
    components = sum(frac > 0.0 for frac in (water_fraction, ice_frc, rock_fraction))
    cloud_adjustment = cld_fraction / components if components else 0.0

    rock_fraction = rock_fraction - cloud_adjustment if rock_fraction >= cloud_adjustment else 0.0
    water_fraction = water_fraction - cloud_adjustment if water_fraction > cloud_adjustment else 0.0
    ice_frc = ice_frc - cloud_adjustment if ice_frc > cloud_adjustment else 0.0

    if surf_pressure == 0.0:
        rock_albedo, rock_variation = ROCKY_AIRLESS_ALBEDO, 0.3
        ice_albedo, ice_variation = AIRLESS_ICE_ALBEDO, 0.4
    else:
        rock_albedo, rock_variation = ROCKY_ALBEDO, 0.1
        ice_albedo, ice_variation = ICE_ALBEDO, 0.1

    # Draw order is cloud, rock, water, ice
    cloud_part = cld_fraction * _about(CLOUD_ALBEDO, 0.2, rng)
    rock_part = rock_fraction * _about(rock_albedo, rock_variation, rng)
    water_part = water_fraction * _about(WATER_ALBEDO, 0.2, rng)
    ice_part = ice_frc * _about(ice_albedo, ice_variation, rng)
    return cloud_part + rock_part + water_part + ice_part


def iterate_surface_temp(planet, r_ecosphere, rng=None):
    """
    Iterate effective temperature, greenhouse rise, cloud and ice cover and
    albedo until the surface temperature moves by at most 1 K, or for at
    most TEMP_ITERATION_LIMIT rounds. Hitting the limit is accepted as a
    best-effort answer.

    Args:
        planet (Planet):
            Rocky body with a, radius, molec_weight, surf_pressure,
            volatile_gas_inventory and boil_point filled in
        r_ecosphere (float):
            Ecosphere radius of the primary in AU
        rng (RandomSource or None):
            Jitters the component albedos when given
    Returns:
        SurfaceState:
            Final values, also written onto the planet
    """
    albedo = EARTH_ALBEDO
    water = hydro_fraction(planet.volatile_gas_inventory, planet.radius)
    optical_depth = opacity(planet.molec_weight, planet.surf_pressure)
    max_temp = np.finfo(float).max

    new_temp = 0.0
    counter = 0
    while True:
        effective_temp = eff_temp(r_ecosphere, planet.a, albedo)
        previous_temp = effective_temp if counter == 0 else new_temp
        greenhs_rise = green_rise(optical_depth, effective_temp, planet.surf_pressure)
        new_temp = effective_temp + greenhs_rise
        if not np.isfinite(new_temp) or new_temp > max_temp:
            effective_temp = max_temp
            greenhs_rise = 0.0
            new_temp = max_temp

        clouds = cloud_fraction(new_temp, planet.molec_weight, planet.radius, water)
        ice = ice_fraction(water, new_temp)
        if new_temp >= planet.boil_point or new_temp <= FREEZING_POINT_OF_WATER:
            eff_water = 0.0
        else:
            eff_water = water
        albedo = planet_albedo(eff_water, clouds, ice, planet.surf_pressure, rng=rng)
        counter += 1

        converged = bool(abs(new_temp - previous_temp) <= 1.0)
        if converged or counter >= TEMP_ITERATION_LIMIT:
            break

    if not converged:
        logger.debug(
            f"Surface temperature at {planet.a:.4g} AU did not settle after "
            f"{counter} iterations, last change {new_temp - previous_temp:.3g} K."
        )

    state = SurfaceState(
        surf_temp=float(new_temp),
        albedo=float(albedo),
        hydrosphere=float(eff_water),
        cloud_cover=float(clouds),
        ice_cover=float(ice),
        iterations=counter,
        converged=converged,
    )
    planet.hydrosphere = state.hydrosphere
    planet.cloud_cover = state.cloud_cover
    planet.ice_cover = state.ice_cover
    planet.albedo = state.albedo
    planet.surf_temp = state.surf_temp
    return state
