import astropy.units as u
import numpy as np
import pandas as pd


class System:
    """
    Class for a single system. Must have a star and a list of planets.
    Companion stars, when present, sit in stars[1:].
    """

    def __init__(self, star=None, planets=None, disk=None, companions=None) -> None:
        self.star = star
        self.companions = [] if companions is None else companions
        self.planets = planets
        self.disk = disk
        if self.planets is not None:
            self.planet_cleanup()

        self.origin = "Base"

    def __repr__(self):
        return (
            f"{self.star.name}\tM:{self.star.mass_ratio:.3g}\t"
            f"L:{self.star.luminosity_ratio:.3g}\t"
            f"Stars:{len(self.stars)}\n\n"
            f"Planets:\n{self.get_p_df()}"
        )

    @property
    def stars(self):
        return [self.star] + self.companions

    def planet_cleanup(self):
        self.pInds = np.arange(len(self.planets))
        # Sort the planets in the system by semi-major axis, stable for ties
        a_vals = [planet.a for planet in self.planets]
        order = np.argsort(a_vals, kind="stable")
        self.planets = [self.planets[i] for i in order]
        self.pInds = self.pInds[order]

    def getpattr(self, attr):
        # Return array of all planet's attribute value, e.g. all semi-major
        # axis values
        vals = [planet.dump_params()[attr] for planet in self.planets]
        if type(vals[0]) == u.Quantity and all(val is not None for val in vals):
            return [val.value for val in vals] * vals[0].unit
        else:
            return vals

    def get_p_df(self):
        if not self.planets:
            return pd.DataFrame()
        patts = list(self.planets[0].dump_params().keys())
        p_df = pd.DataFrame()
        for att in patts:
            pattr = self.getpattr(att)
            if type(pattr) == u.Quantity:
                p_df[att] = pattr.value
            else:
                p_df[att] = [
                    val.value if type(val) == u.Quantity else val for val in pattr
                ]

        return p_df
