import logging

from protoverses.accrete.collide import check_planets, init_planet_list
from protoverses.accrete.inject import Accretion
from protoverses.base.planet import BodyType
from protoverses.base.system import System
from protoverses.dole.star import DoleStar
from protoverses.enviro import physics
from protoverses.enviro.surface import iterate_surface_temp
from protoverses.util.constants import GAS_GIANT_ALBEDO, MOL_NITROGEN

logger = logging.getLogger(__name__)

# Upper bounds of a d100 roll for systems of 1, 2 and 3 stars, 4 otherwise
STAR_COUNT_ROLLS = [(45, 1), (80, 2), (95, 3)]


class DoleSystem(System):
    """
    A star system built by dust accretion around its primary.

    Args:
        rng (RandomSource):
            Source of every random draw, the system is reproducible from it
        stars (list or None):
            Star dicts (mass, luminosity, radius, age, orbit_radius, name),
            primary first. Missing values are derived from the mass. When
            None the number of stars and their masses are random.
        moons (bool):
            Whether to build moons around each planet
        name (str):
            Name given to the primary when its dict has none
    """

    def __init__(self, rng, stars=None, moons=False, name="") -> None:
        self.rng = rng
        self.build_moons = moons
        if stars is None:
            stars = self.random_star_dicts()
        stars = self.place_stars(stars, name)
        star_objs = [DoleStar(star_dict, rng) for star_dict in stars]
        super().__init__(star=star_objs[0], companions=star_objs[1:])
        self.origin = "Dole"

        self.bodies = self.accrete()
        self.planets = [body for body in self.bodies if body.body_type != BodyType.STAR]
        self.planet_cleanup()
        for planet in self.planets:
            self.solve_planet(planet)

    def random_star_dicts(self):
        roll = int(self.rng.uniform(1.0, 100.0))
        n_stars = 4
        for max_roll, count in STAR_COUNT_ROLLS:
            if roll <= max_roll:
                n_stars = count
                break
        logger.info(f"Creating system with {n_stars} stars.")
        return [{"mass": None} for _ in range(n_stars)]

    def place_stars(self, stars, name):
        """
        The primary sits at the origin, companions without an orbit are put
        between 1 and 150 AU from it
        """
        placed = []
        for i, star_dict in enumerate(stars):
            star_dict = dict(star_dict)
            if i == 0:
                star_dict["orbit_radius"] = 0.0
                star_dict.setdefault("name", name)
            elif star_dict.get("orbit_radius") is None:
                star_dict["orbit_radius"] = self.rng.uniform(1.0, 150.0)
            star_dict.setdefault("name", f"{name} {chr(ord('A') + i)}".strip())
            placed.append(star_dict)
        return placed

    def accrete(self):
        """
        Seed the stars into the body list and accrete the primary's cloud
        Returns:
            list:
                Stars and planets, sorted by distance from the primary
        """
        logger.info("Begin building main planetary orbits.")
        bodies = init_planet_list(self.stars, self.rng)
        self.accretion = Accretion(
            self.star.mass_ratio,
            self.star.luminosity_ratio,
            self.rng,
            body_type=BodyType.PLANET,
            bodies=bodies,
            stars=self.stars,
        )
        bodies = self.accretion.dist_masses()
        bodies = check_planets(bodies, self.star.luminosity_ratio, self.star.radius)
        self.disk = self.accretion.cloud
        logger.info("Finished building planetary orbits.")
        return bodies

    def solve_planet(self, planet):
        """
        Fill in the physical properties of a planet from its mass and orbit
        """
        star = self.star
        planet.star = star
        planet.orbit_zone = physics.orb_zone(planet.a, star.luminosity_ratio)
        self.solve_size(planet, planet.a, planet.orbit_zone)

        if self.build_moons:
            self.solve_moons(planet)

        planet.orb_period = physics.period(planet.a, planet.mass, star.mass_ratio)
        planet.day, planet.resonant_period = physics.day_length(
            planet.mass,
            planet.radius,
            planet.e,
            planet.density,
            planet.a,
            planet.orb_period,
            planet.body_type,
            star.mass_ratio,
            star.age,
        )
        planet.axial_tilt = physics.inclination(planet.a, rng=self.rng)
        planet.esc_velocity = physics.escape_vel(planet.mass, planet.radius)
        planet.surf_accel = physics.accel(planet.mass, planet.radius)
        planet.rms_velocity = physics.rms_vel(
            MOL_NITROGEN, planet.a, star.luminosity_ratio
        )
        planet.molec_weight = physics.molecule_limit(planet.mass, planet.radius)

        if planet.gas_giant:
            planet.surf_grav = 0.0
            planet.greenhouse_effect = False
            planet.volatile_gas_inventory = 0.0
            planet.surf_pressure = 0.0
            planet.boil_point = 0.0
            planet.hydrosphere = 0.0
            planet.cloud_cover = 0.0
            planet.ice_cover = 0.0
            planet.albedo = self.rng.jitter(GAS_GIANT_ALBEDO, 0.1)
            planet.surf_temp = 0.0
            return

        planet.surf_grav = physics.gravity(planet.surf_accel)
        planet.greenhouse_effect = physics.grnhouse(
            planet.orbit_zone, planet.a, star.r_greenhouse
        )
        planet.volatile_gas_inventory = physics.vol_inventory(
            planet.mass,
            planet.esc_velocity,
            planet.rms_velocity,
            star.mass_ratio,
            planet.orbit_zone,
            planet.greenhouse_effect,
            rng=self.rng,
        )
        planet.surf_pressure = physics.pressure(
            planet.volatile_gas_inventory, planet.radius, planet.surf_grav
        )
        if planet.surf_pressure == 0.0:
            planet.boil_point = 0.0
        else:
            planet.boil_point = physics.boiling_point(planet.surf_pressure)
        iterate_surface_temp(planet, star.r_ecosphere, rng=self.rng)

    def solve_size(self, body, a, zone):
        """
        Radius and density. Gas giants use the empirical density law, rocky
        bodies Kothari's radius.
        """
        if body.gas_giant:
            body.density = physics.empirical_density(
                body.mass, a, body.body_type, self.star.luminosity_ratio
            )
            body.radius = physics.volume_radius(body.mass, body.density)
        else:
            body.radius = physics.kothari_radius(body.mass, body.body_type, zone)
            body.density = physics.volume_density(body.mass, body.radius)

    def solve_moons(self, planet):
        accretion = Accretion(
            planet.mass,
            self.star.luminosity_ratio,
            self.rng,
            body_type=BodyType.MOON,
            radius=planet.radius,
        )
        planet.moons = accretion.dist_masses()
        logger.info(f"Built {len(planet.moons)} moon orbits for a planet.")
        for moon in planet.moons:
            moon.star = self.star
            self.solve_size(moon, planet.a, planet.orbit_zone)
            moon.surf_accel = physics.accel(moon.mass, moon.radius)
            moon.surf_grav = physics.gravity(moon.surf_accel)
