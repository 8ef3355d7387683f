"""
Dust and gas sweeping, after Dole, "Formation of Planetary Systems by
Aggregation: a Computer Simulation", Rand Corporation P-4226 (1969).
"""

import logging

import numpy as np

from protoverses.base.disk import DustBand
from protoverses.util.constants import (
    ALPHA,
    B,
    CLOUD_ECCENTRICITY,
    DUST_DENSITY_COEFF,
    K,
    N,
)
from protoverses.util.errors import AccretionError

logger = logging.getLogger(__name__)


def reduced_mass(mass):
    """Scaling of a body's gravitational reach, (m / (1 + m))^(1/4)"""
    return (mass / (1.0 + mass)) ** 0.25


def inner_effect_limit(a, e, mass):
    return a * (1.0 - e) * (1.0 - mass) / (1.0 + CLOUD_ECCENTRICITY)


def outer_effect_limit(a, e, mass):
    return a * (1.0 + e) * (1.0 + mass) / (1.0 - CLOUD_ECCENTRICITY)


def critical_limit(orb_radius, eccentricity, stell_luminosity_ratio):
    """
    Mass at which a body starts to hold on to gas as well as dust
    Args:
        orb_radius (float):
            Semi-major axis in AU
        eccentricity (float):
            Orbital eccentricity
        stell_luminosity_ratio (float):
            Luminosity of the primary in solar units
    Returns:
        float:
            Critical mass in solar masses
    """
    perihelion_dist = orb_radius - orb_radius * eccentricity
    temp = perihelion_dist * np.sqrt(stell_luminosity_ratio)
    return B * temp**-0.75


def dust_density(stell_mass_ratio, orb_radius, moon=False):
    """
    Local dust density coefficient of the cloud at orb_radius. Dust is
    assumed to be ten times denser around planets than around stars.
    """
    density = (
        DUST_DENSITY_COEFF
        * np.sqrt(stell_mass_ratio)
        * np.exp(-ALPHA * orb_radius ** (1.0 / N))
    )
    if moon:
        density *= 10.0
    return density


def cloud_mass(inner, outer, stell_mass_ratio, moon=False, samples=4000):
    """
    Nominal dust plus gas mass of an untouched cloud, in solar masses.

    Integrates the gas-enriched density over spherical shells between the
    bounds. Accreted bodies can never hold more than this.
    """
    r = np.geomspace(inner, outer, samples)
    integrand = 4.0 * np.pi * r**2 * K * dust_density(stell_mass_ratio, r, moon=moon)
    return float(np.sum(0.5 * (integrand[1:] + integrand[:-1]) * np.diff(r)))


def _reachable(band, r_inner, r_outer, gas_giant):
    if not band.gas_present:
        return False
    if band.outer_edge <= r_inner or band.inner_edge >= r_outer:
        return False
    # Below critical mass only dust can be picked up
    return band.dust_present or gas_giant


def _protrusions(band, r_inner, r_outer):
    temp1 = max(r_outer - band.outer_edge, 0.0)
    temp2 = max(band.inner_edge - r_inner, 0.0)
    return temp1, temp2


def band_mass(band, mass, a, e, crit_mass, dust_density):
    """
    Mass a body would sweep from one band, ignoring every other band
    Args:
        band (DustBand):
            The band being swept
        mass (float):
            Current mass of the body in solar masses
        a (float):
            Semi-major axis in AU
        e (float):
            Eccentricity
        crit_mass (float):
            Critical mass for gas accretion at this orbit
        dust_density (float):
            Local dust density coefficient
    Returns:
        float:
            Swept mass in solar masses, 0 if the band is out of reach
    """
    rm = reduced_mass(mass)
    r_inner = inner_effect_limit(a, e, rm)
    r_outer = outer_effect_limit(a, e, rm)
    if not _reachable(band, r_inner, r_outer, mass >= crit_mass):
        return 0.0

    if mass < crit_mass:
        mass_density = dust_density
    else:
        mass_density = K * dust_density / (1.0 + np.sqrt(crit_mass / mass) * (K - 1.0))
    bandwidth = r_outer - r_inner
    temp1, temp2 = _protrusions(band, r_inner, r_outer)
    width = bandwidth - temp1 - temp2
    volume = (
        4.0 * np.pi * a**2 * rm * (1.0 - e * (temp1 - temp2) / bandwidth) * width
    )
    return volume * mass_density


def collect_dust(cloud, mass, a, e, crit_mass, dust_density):
    """
    Sweep up every band within the body's range of gravitational effect.
    Dust is always collected, gas only once mass reaches crit_mass. The cloud
    is updated in place: swept dust bands become gas-only bands and regions
    whose gas was also taken become inert.

    Returns:
        float:
            The body's new mass in solar masses
    """
    rm = reduced_mass(mass)
    r_inner = inner_effect_limit(a, e, rm)
    r_outer = outer_effect_limit(a, e, rm)
    if r_inner < 0.0:
        msg = f"Negative inner effect limit {r_inner:.4g} AU (a={a:.4g}, e={e:.4g})"
        logger.critical(msg)
        raise AccretionError(msg)
    gas_giant = mass >= crit_mass

    accumulated_mass = mass
    for band in cloud.bands:
        accumulated_mass += band_mass(band, mass, a, e, crit_mass, dust_density)

    # Second pass removes what was collected
    bands = cloud.bands
    i = 0
    while i < len(bands):
        band = bands[i]
        if not _reachable(band, r_inner, r_outer, gas_giant):
            i += 1
            continue
        temp1, temp2 = _protrusions(band, r_inner, r_outer)
        swept_gas = not gas_giant

        if temp1 == 0.0 and temp2 == 0.0:
            # Range of effect lies inside the band: split it
            pieces = [
                DustBand(band.inner_edge, r_inner, band.dust_present, band.gas_present),
                DustBand(r_inner, r_outer, False, swept_gas),
                DustBand(r_outer, band.outer_edge, band.dust_present, band.gas_present),
            ]
            logger.debug(
                f"Splitting band ({band.inner_edge:.4g} - {band.outer_edge:.4g}) "
                f"around ({r_inner:.4g} - {r_outer:.4g})."
            )
            i += cloud.replace(i, pieces)
        elif temp1 > 0.0 and temp2 > 0.0:
            # Range of effect covers the band
            band.dust_present = False
            band.gas_present = swept_gas
            logger.debug(
                f"{'Removing dust from' if swept_gas else 'Freeing'} band "
                f"({band.inner_edge:.4g} - {band.outer_edge:.4g})."
            )
            i += 1
        elif temp2 > 0.0:
            # Band lies further from the primary, its inner part is swept
            if swept_gas and i > 0 and bands[i - 1].gas_only:
                bands[i - 1].outer_edge = r_outer
                band.inner_edge = r_outer
                logger.debug(
                    f"Increasing gas band to {r_outer:.4g}, reducing dust band "
                    f"({band.inner_edge:.4g} - {band.outer_edge:.4g})."
                )
                i += 1
            else:
                pieces = [
                    DustBand(band.inner_edge, r_outer, False, swept_gas),
                    DustBand(r_outer, band.outer_edge, band.dust_present, band.gas_present),
                ]
                logger.debug(
                    f"Reducing band ({band.inner_edge:.4g} - {band.outer_edge:.4g}) "
                    f"to start at {r_outer:.4g}."
                )
                i += cloud.replace(i, pieces)
        else:
            # Band lies closer to the primary, its outer part is swept
            if swept_gas and i + 1 < len(bands) and bands[i + 1].gas_only:
                bands[i + 1].inner_edge = r_inner
                band.outer_edge = r_inner
                logger.debug(
                    f"Increasing gas band from {r_inner:.4g}, reducing dust band "
                    f"({band.inner_edge:.4g} - {band.outer_edge:.4g})."
                )
                i += 1
            else:
                pieces = [
                    DustBand(band.inner_edge, r_inner, band.dust_present, band.gas_present),
                    DustBand(r_inner, band.outer_edge, False, swept_gas),
                ]
                logger.debug(
                    f"Reducing band ({band.inner_edge:.4g} - {band.outer_edge:.4g}) "
                    f"to end at {r_inner:.4g}."
                )
                i += cloud.replace(i, pieces)
        # replace() rebinds slices of the same list object
        bands = cloud.bands

    cloud.normalize()
    return accumulated_mass


def accrete_dust(cloud, mass, a, e, crit_mass, dust_density):
    """
    Grow a body by sweeping the cloud until the mass gain per sweep drops
    below 0.1% of its mass.
    Returns:
        tuple:
            (new mass in solar masses, whether any dust is left in the cloud)
    """
    new_mass = mass
    while True:
        mass = new_mass
        new_mass = collect_dust(cloud, new_mass, a, e, crit_mass, dust_density)
        if not (new_mass - mass) > (0.001 * mass):
            break
    return new_mass, cloud.dust_left()
