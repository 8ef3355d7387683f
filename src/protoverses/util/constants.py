"""
Constants used by the accretion engine and the planetary environment code.

Physical constants and unit conversions come from astropy. The dimensionless
model coefficients are the ones from Dole's paper and Fogg's follow-up.
"""

import astropy.constants as const
import astropy.units as u

# Accretion model
ECCENTRICITY_COEFF = 0.077  # Dole's was 0.077
CLOUD_ECCENTRICITY = 0.2
PROTOPLANET_MASS = 1.0e-15  # solar masses
TRIVIAL_MASS = 1.0e-14  # solar masses
K = 50.0  # gas/dust ratio
B = 1.2e-5  # used in critical mass calc
DUST_DENSITY_COEFF = 6.0e-3  # A in Dole's paper
ALPHA = 5.0
N = 3.0

# Masses and sizes, cgs
SOLAR_MASS_IN_GRAMS = const.M_sun.cgs.value
EARTH_MASS_IN_GRAMS = const.M_earth.cgs.value
SUN_MASS_IN_EARTH_MASSES = (const.M_sun / const.M_earth).decompose().value
EARTH_RADIUS = const.R_earth.cgs.value  # cm
KM_EARTH_RADIUS = const.R_earth.to(u.km).value
EARTH_DENSITY = 5.52  # g/cc
EARTH_ACCELERATION = 981.0  # cm/s^2
GRAV_CONSTANT = const.G.cgs.value  # dyne cm^2 / g^2
MOLAR_GAS_CONST = const.R.to(u.g * u.m**2 / (u.s**2 * u.K * u.mol)).value

# Conversions
CM_PER_AU = const.au.cgs.value
CM_PER_KM = (1 * u.km).to(u.cm).value
KM_PER_AU = const.au.to(u.km).value
CM_PER_METER = (1 * u.m).to(u.cm).value
AU_PER_SOLAR_RADIUS = (const.R_sun / const.au).decompose().value
SECONDS_PER_HOUR = (1 * u.hour).to(u.s).value
DAYS_IN_A_YEAR = (1 * u.year).to(u.day).value
MILLIBARS_PER_BAR = 1000.0

# Rotation
CHANGE_IN_EARTH_ANG_VEL = -1.3e-15  # rad/s/yr
J = 1.46e-19  # cm^2/s^2 g, day-length calc
EARTH_AXIAL_TILT = 23.4  # deg

# Atmosphere and climate
EARTH_EXOSPHERE_TEMP = 1273.0  # K
EARTH_EFFECTIVE_TEMP = 255.0  # K
EARTH_ALBEDO = 0.3
EARTH_SURF_PRES_IN_MILLIBARS = 1000.0
EARTH_CONVECTION_FACTOR = 0.43  # Hart, eq.20
EARTH_WATER_MASS_PER_AREA = 3.83e15  # g/km^2
CLOUD_COVERAGE_FACTOR = 1.839e-8  # km^2/kg
FREEZING_POINT_OF_WATER = 273.0  # K
GAS_RETENTION_THRESHOLD = 6.0  # ratio of escape to RMS velocity
GREENHOUSE_EFFECT_CONST = 0.93
TEMP_ITERATION_LIMIT = 101
Q1_36 = 1.258e19  # g
Q2_36 = 0.0698  # 1/K

# Albedos
GAS_GIANT_ALBEDO = 0.5
CLOUD_ALBEDO = 0.52
ROCKY_AIRLESS_ALBEDO = 0.07
ROCKY_ALBEDO = 0.15
WATER_ALBEDO = 0.04
AIRLESS_ICE_ALBEDO = 0.5
ICE_ALBEDO = 0.7

# Kothari radius, cgs
A1_20 = 6.485e12
A2_20 = 4.0032e-8
BETA_20 = 5.71e12

# Molecular weights, Dole "Habitable Planets for Man" p.38
WATER_VAPOR = 18.0
MOL_NITROGEN = 28.0
