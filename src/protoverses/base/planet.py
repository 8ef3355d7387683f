from enum import IntEnum

import astropy.units as u
import pandas as pd

from protoverses.util.constants import (
    MILLIBARS_PER_BAR,
    SUN_MASS_IN_EARTH_MASSES,
)


class BodyType(IntEnum):
    STAR = 0
    PLANET = 1
    GAS_GIANT = 2
    MOON = 3


# Filled in by the system driver once accretion has finished
DERIVED_ATTS = [
    "orbit_zone",
    "radius",
    "density",
    "orb_period",
    "day",
    "resonant_period",
    "axial_tilt",
    "esc_velocity",
    "surf_accel",
    "surf_grav",
    "rms_velocity",
    "molec_weight",
    "volatile_gas_inventory",
    "surf_pressure",
    "greenhouse_effect",
    "boil_point",
    "albedo",
    "surf_temp",
    "hydrosphere",
    "cloud_cover",
    "ice_cover",
]


class Planet:
    """
    Class for a body of an accreted system. Planets, gas giants and moons
    all use it, as do the stars that take part in the accretion (body_type
    STAR, star_index pointing into the system's star table).
    """

    def __init__(self, planet_dict, star=None) -> None:
        self.body_type = BodyType.PLANET
        self.star_index = None
        self.moons = []
        for att in DERIVED_ATTS:
            setattr(self, att, None)
        for att, value in planet_dict.items():
            setattr(self, att, value)
        self.body_type = BodyType(self.body_type)
        self.star = star

    def __repr__(self):
        """
        Make dataframe with planet attributes
        """
        params = self.dump_params()
        res = {}
        for key, val in params.items():
            if type(val) == u.Quantity:
                res[key] = val.value
            else:
                res[key] = val

        # Create dataframe from res dictionary
        p_df = pd.DataFrame(res, index=[0])

        return f"{type(self).__name__} object\n{p_df}"

    @property
    def gas_giant(self):
        return self.body_type == BodyType.GAS_GIANT

    @property
    def is_star(self):
        return self.body_type == BodyType.STAR

    def dump_params(self):
        """
        Planet parameters with astropy units attached where they have one.
        Values the driver has not filled in yet stay None.
        """
        params = {
            "type": self.body_type.name,
            "a": self.a * u.AU,
            "e": self.e,
            "mass": (self.mass * SUN_MASS_IN_EARTH_MASSES) * u.M_earth,
            "radius": _quantity(self.radius, u.km),
            "density": _quantity(self.density, u.g / u.cm**3),
            "orb_period": _quantity(self.orb_period, u.d),
            "day": _quantity(self.day, u.h),
            "axial_tilt": _quantity(self.axial_tilt, u.deg),
            "esc_velocity": _quantity(self.esc_velocity, u.cm / u.s),
            "surf_grav": self.surf_grav,
            "surf_pressure": _quantity(
                None
                if self.surf_pressure is None
                else self.surf_pressure / MILLIBARS_PER_BAR,
                u.bar,
            ),
            "boil_point": _quantity(self.boil_point, u.K),
            "surf_temp": _quantity(self.surf_temp, u.K),
            "albedo": self.albedo,
            "hydrosphere": self.hydrosphere,
            "cloud_cover": self.cloud_cover,
            "ice_cover": self.ice_cover,
            "n_moons": len(self.moons),
        }
        return params


def _quantity(value, unit):
    if value is None:
        return None
    return value * unit
