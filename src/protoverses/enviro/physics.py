"""
Single-shot planetary physics, mostly after Fogg, "Extra-Solar Planetary
Systems: a Microcomputer Simulation", JBIS vol 38 (1985), pp. 501-514.

Masses are in solar masses, distances from the primary in AU, planetary
radii in km, velocities in cm/s and pressures in millibars unless noted.
"""

import logging

import numpy as np

from protoverses.base.planet import BodyType
from protoverses.util.constants import (
    A1_20,
    A2_20,
    BETA_20,
    CHANGE_IN_EARTH_ANG_VEL,
    CM_PER_KM,
    CM_PER_METER,
    DAYS_IN_A_YEAR,
    EARTH_ACCELERATION,
    EARTH_AXIAL_TILT,
    EARTH_DENSITY,
    EARTH_EFFECTIVE_TEMP,
    EARTH_EXOSPHERE_TEMP,
    EARTH_MASS_IN_GRAMS,
    EARTH_RADIUS,
    GAS_RETENTION_THRESHOLD,
    GRAV_CONSTANT,
    J,
    KM_EARTH_RADIUS,
    MILLIBARS_PER_BAR,
    MOLAR_GAS_CONST,
    SECONDS_PER_HOUR,
    SOLAR_MASS_IN_GRAMS,
    SUN_MASS_IN_EARTH_MASSES,
)
from protoverses.util.errors import AccretionError

logger = logging.getLogger(__name__)

# (atomic weight, atomic number) per orbit zone, rocky then gas giant
KOTHARI_COMPOSITION = {
    1: ((15.0, 8.0), (9.5, 4.5)),
    2: ((10.0, 5.0), (2.47, 2.0)),
    3: ((10.0, 5.0), (7.0, 4.0)),
}

# Volatile inventory proportionality constant per orbit zone
VOLATILE_PROPORTION = {1: 100000.0, 2: 75000.0, 3: 250.0}


def orb_zone(orb_radius, stell_luminosity_ratio):
    """
    Coarse orbit classification: 1 inside 4 ecosphere radii, 2 out to 15
    and 3 beyond
    """
    r_eco = np.sqrt(stell_luminosity_ratio)
    if orb_radius < 4.0 * r_eco:
        return 1
    elif orb_radius < 15.0 * r_eco:
        return 2
    else:
        return 3


def volume_radius(mass, density):
    """Radius in km of a sphere of the given mass and density (g/cc)"""
    volume = mass * SOLAR_MASS_IN_GRAMS / density
    return ((3.0 * volume) / (4.0 * np.pi)) ** (1.0 / 3.0) / CM_PER_KM


def kothari_radius(mass, body_type, zone):
    """
    Radius in km from Kothari, "The Internal Constitution of Planets",
    MNRAS vol 96 (1936), eq. 23
    """
    rocky, giant = KOTHARI_COMPOSITION[zone]
    atomic_weight, atomic_num = giant if body_type == BodyType.GAS_GIANT else rocky

    temp = atomic_weight * atomic_num
    temp = (2.0 * BETA_20 * SOLAR_MASS_IN_GRAMS ** (1.0 / 3.0)) / (
        A1_20 * temp ** (1.0 / 3.0)
    )
    temp2 = (
        A2_20 * atomic_weight ** (4.0 / 3.0) * SOLAR_MASS_IN_GRAMS ** (2.0 / 3.0)
    )
    temp2 = temp2 * mass ** (2.0 / 3.0)
    temp2 = temp2 / (A1_20 * atomic_num**2)
    temp2 = 1.0 + temp2
    temp = temp / temp2
    return (temp * mass ** (1.0 / 3.0)) / CM_PER_KM


def empirical_density(mass, orb_radius, body_type, stell_luminosity_ratio):
    """Density in g/cc"""
    temp = (mass * SUN_MASS_IN_EARTH_MASSES) ** (1.0 / 8.0)
    temp = temp * (np.sqrt(stell_luminosity_ratio) / orb_radius) ** 0.25
    if body_type == BodyType.GAS_GIANT:
        return temp * 1.2
    return temp * 5.5


def volume_density(mass, equat_radius):
    """Density in g/cc of a body of the given mass and radius (km)"""
    mass = mass * SOLAR_MASS_IN_GRAMS
    equat_radius = equat_radius * CM_PER_KM
    volume = (4.0 * np.pi * equat_radius**3) / 3.0
    return mass / volume


def period(separation, small_mass, large_mass):
    """Orbital period in days"""
    period_in_years = np.sqrt(separation**3 / (small_mass + large_mass))
    return period_in_years * DAYS_IN_A_YEAR


def day_length(
    mass,
    radius,
    eccentricity,
    density,
    orb_radius,
    orb_period,
    body_type,
    stell_mass_ratio,
    age,
):
    """
    Length of the day in hours. Base spin from Dole's "Habitable Planets for
    Man" (1964) slowed by the primary's tides as in Goldreich and Soter,
    "Q in the Solar System", Icarus vol 5 (1966).

    Returns:
        tuple:
            (day in hours, whether the spin is locked in a resonance)
    """
    k2 = 0.24 if body_type == BodyType.GAS_GIANT else 0.33
    planetary_mass_in_grams = mass * SOLAR_MASS_IN_GRAMS
    equatorial_radius_in_cm = radius * CM_PER_KM
    year_in_hours = orb_period * 24.0
    base_angular_velocity = np.sqrt(
        2.0 * J * planetary_mass_in_grams / (k2 * equatorial_radius_in_cm**2)
    )

    # Slowing of the rotation by the star
    change_in_angular_velocity = (
        CHANGE_IN_EARTH_ANG_VEL
        * (density / EARTH_DENSITY)
        * (equatorial_radius_in_cm / EARTH_RADIUS)
        * (EARTH_MASS_IN_GRAMS / planetary_mass_in_grams)
        * stell_mass_ratio**2
        * (1.0 / orb_radius**6)
    )
    ang_velocity = base_angular_velocity + change_in_angular_velocity * age

    stopped = ang_velocity <= 0.0
    if not stopped:
        day_in_hours = 2.0 * np.pi / (SECONDS_PER_HOUR * ang_velocity)
    if stopped or day_in_hours >= year_in_hours:
        if eccentricity > 0.1:
            spin_resonance_factor = (1.0 - eccentricity) / (1.0 + eccentricity)
            return spin_resonance_factor * year_in_hours, True
        return year_in_hours, False
    return day_in_hours, False


def inclination(orb_radius, rng=None):
    """Axial tilt in whole degrees"""
    tilt = EARTH_AXIAL_TILT if rng is None else rng.jitter(EARTH_AXIAL_TILT, 0.4)
    return int(orb_radius**0.2 * tilt) % 360


def escape_vel(mass, radius):
    mass_in_grams = mass * SOLAR_MASS_IN_GRAMS
    radius_in_cm = radius * CM_PER_KM
    return np.sqrt(2.0 * GRAV_CONSTANT * mass_in_grams / radius_in_cm)


def rms_vel(molecular_weight, orb_radius, stell_luminosity_ratio):
    """RMS velocity of a molecule in the exosphere, Fogg's eq. 16"""
    exospheric_temp = EARTH_EXOSPHERE_TEMP * (stell_luminosity_ratio / orb_radius**2)
    return (
        np.sqrt((3.0 * MOLAR_GAS_CONST * exospheric_temp) / molecular_weight)
        * CM_PER_METER
    )


def molecule_limit(mass, equat_radius):
    """Smallest molecular weight the body can retain"""
    esc_velocity = escape_vel(mass, equat_radius)
    return (
        3.0
        * (GAS_RETENTION_THRESHOLD * CM_PER_METER) ** 2
        * MOLAR_GAS_CONST
        * EARTH_EXOSPHERE_TEMP
    ) / esc_velocity**2


def accel(mass, radius):
    """Surface acceleration in cm/s^2"""
    return GRAV_CONSTANT * (mass * SOLAR_MASS_IN_GRAMS) / (radius * CM_PER_KM) ** 2


def gravity(acceleration):
    """Surface gravity in Earth gravities"""
    return acceleration / EARTH_ACCELERATION


def grnhouse(zone, orb_radius, r_greenhouse):
    return orb_radius < r_greenhouse and zone == 1


def vol_inventory(
    mass,
    esc_velocity,
    rms_velocity,
    stell_mass_ratio,
    zone,
    greenhouse_effect,
    rng=None,
):
    """
    Unitless measure of the gases locked up in the planet, Fogg's eq. 17.
    Without a greenhouse effect 99% of the volatiles end up in surface
    reservoirs.
    """
    velocity_ratio = esc_velocity / rms_velocity
    if velocity_ratio < GAS_RETENTION_THRESHOLD:
        return 0.0
    if zone not in VOLATILE_PROPORTION:
        msg = f"Orbit zone {zone} was not initialized correctly"
        logger.critical(msg)
        raise AccretionError(msg)
    earth_units = mass * SUN_MASS_IN_EARTH_MASSES
    temp1 = (VOLATILE_PROPORTION[zone] * earth_units) / stell_mass_ratio
    temp2 = temp1 if rng is None else rng.jitter(temp1, 0.2)
    if greenhouse_effect:
        return temp2
    return temp2 / 100.0


def pressure(volatile_gas_inventory, equat_radius, grav):
    """Surface pressure in millibars, Fogg's eq. 18"""
    equat_radius = KM_EARTH_RADIUS / equat_radius
    return volatile_gas_inventory * grav / equat_radius**2


def boiling_point(surf_pressure):
    """Boiling point of water in K at the given pressure, Fogg's eq. 21"""
    surface_pressure_in_bars = surf_pressure / MILLIBARS_PER_BAR
    return 1.0 / (np.log(surface_pressure_in_bars) / -5050.5 + 1.0 / 373.0)


def eff_temp(ecosphere_radius, orb_radius, albedo):
    """Effective temperature in K, Fogg's eq. 19"""
    return (
        np.sqrt(ecosphere_radius / orb_radius)
        * ((1.0 - albedo) / 0.7) ** 0.25
        * EARTH_EFFECTIVE_TEMP
    )
