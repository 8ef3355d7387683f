import numpy as np
import pandas as pd
import pytest

from protoverses.base.planet import BodyType, Planet
from protoverses.base.star import Star
from protoverses.base.system import System
from protoverses.dole.star import (
    DoleStar,
    main_sequence_luminosity,
    main_sequence_radius,
    rand_star_mass,
)
from protoverses.dole.system import DoleSystem
from protoverses.util.constants import AU_PER_SOLAR_RADIUS
from protoverses.util.errors import ConfigError
from protoverses.util.rng import RandomSource

SOL = {"name": "Sol", "mass": 1.0, "luminosity": 1.0, "radius": 0.00465, "age": 4.6e9}


@pytest.fixture(scope="module")
def sol_system():
    return DoleSystem(RandomSource(11), stars=[SOL])


class TestDoleStar:
    def test_derived_from_mass(self):
        star = DoleStar({"mass": 1.0}, RandomSource(0))
        assert star.luminosity_ratio == pytest.approx(main_sequence_luminosity(1.0))
        assert star.radius == pytest.approx(AU_PER_SOLAR_RADIUS)
        assert 1e9 <= star.age <= 6e9
        assert star.r_ecosphere == pytest.approx(np.sqrt(star.luminosity_ratio))

    def test_given_values_win(self):
        star = DoleStar(SOL, RandomSource(0))
        assert star.luminosity_ratio == 1.0
        assert star.radius == 0.00465
        assert star.age == 4.6e9

    def test_random_mass(self):
        rng = RandomSource(1)
        masses = [rand_star_mass(rng) for _ in range(200)]
        assert all(0.0 <= mass <= 60.0 for mass in masses)
        star = DoleStar({"mass": None}, RandomSource(2))
        assert star.mass_ratio > 0.0

    def test_bad_mass(self):
        with pytest.raises(ConfigError):
            DoleStar({"mass": -1.0}, RandomSource(0))

    def test_luminosity_grows_with_mass(self):
        masses = [0.2, 0.5, 1.0, 2.0, 5.0]
        lums = [main_sequence_luminosity(mass) for mass in masses]
        assert lums == sorted(lums)
        assert main_sequence_radius(0.2) < main_sequence_radius(1.0)


class TestSolSystem:
    def test_star(self, sol_system):
        assert sol_system.star.name == "Sol"
        assert sol_system.companions == []
        assert len(sol_system.stars) == 1

    def test_cloud_exhausted(self, sol_system):
        assert not sol_system.disk.dust_left()
        sol_system.disk.check_partition()

    def test_planets(self, sol_system):
        planets = sol_system.planets
        assert len(planets) > 0
        radii = [planet.a for planet in planets]
        assert radii == sorted(radii)
        assert all(not planet.is_star for planet in planets)
        for planet in planets:
            assert planet.orbit_zone in (1, 2, 3)
            assert planet.radius > 0.0
            assert planet.density > 0.0
            assert planet.orb_period > 0.0
            assert planet.day > 0.0
            assert 0 <= planet.axial_tilt < 360
            assert planet.star is sol_system.star
            assert planet.surf_temp is not None

    def test_rocky_planets_have_surfaces(self, sol_system):
        for planet in sol_system.planets:
            if planet.gas_giant:
                assert planet.surf_pressure == 0.0
                assert 0.45 <= planet.albedo <= 0.55
            else:
                assert planet.surf_temp > 0.0
                assert 0.0 <= planet.hydrosphere <= 1.0
                assert 0.0 <= planet.ice_cover <= 1.0

    def test_planet_table(self, sol_system):
        p_df = sol_system.get_p_df()
        assert isinstance(p_df, pd.DataFrame)
        assert len(p_df) == len(sol_system.planets)
        assert list(p_df["a"]) == [planet.a for planet in sol_system.planets]
        assert "Sol" in repr(sol_system)

    def test_getpattr_units(self, sol_system):
        a = sol_system.getpattr("a")
        assert a.unit == "AU"

    def test_reproducible(self, sol_system):
        again = DoleSystem(RandomSource(11), stars=[SOL])
        assert [p.a for p in again.planets] == [p.a for p in sol_system.planets]
        assert [p.mass for p in again.planets] == [p.mass for p in sol_system.planets]


class TestMultipleStars:
    def test_companion(self):
        system = DoleSystem(
            RandomSource(8),
            stars=[SOL, {"mass": 0.3, "orbit_radius": 80.0}],
            name="Pair",
        )
        assert len(system.stars) == 2
        companion = system.companions[0]
        assert companion.name == "Pair B"
        assert companion.orbit_radius > 0.0
        star_bodies = [body for body in system.bodies if body.is_star]
        assert len(star_bodies) == 2
        assert all(planet.body_type != BodyType.STAR for planet in system.planets)

    def test_random_stars(self):
        system = DoleSystem(RandomSource(21), name="R")
        assert 1 <= len(system.stars) <= 4
        assert system.star.orbit_radius == 0.0
        assert system.star.name == "R"


class TestMoons:
    def test_moons_are_built(self):
        system = DoleSystem(RandomSource(11), stars=[SOL], moons=True)
        for planet in system.planets:
            radii = [moon.a for moon in planet.moons]
            assert radii == sorted(radii)
            for moon in planet.moons:
                assert moon.radius > 0.0
                assert moon.surf_grav > 0.0
            assert planet.dump_params()["n_moons"] == len(planet.moons)


class TestBaseSystem:
    def test_sorts_planets(self):
        star = Star({"name": "S", "mass": 1.0, "luminosity": 1.0})
        planets = [
            Planet({"a": 2.0, "e": 0.0, "mass": 1e-6}),
            Planet({"a": 1.0, "e": 0.0, "mass": 1e-6}),
        ]
        system = System(star=star, planets=planets)
        assert [planet.a for planet in system.planets] == [1.0, 2.0]
        assert list(system.pInds) == [1, 0]

    def test_empty_table(self):
        star = Star({"name": "S", "mass": 1.0, "luminosity": 1.0})
        assert System(star=star, planets=[]).get_p_df().empty

    def test_planet_repr(self):
        planet = Planet({"a": 1.0, "e": 0.0, "mass": 3e-6})
        assert "Planet object" in repr(planet)
        assert planet.dump_params()["radius"] is None
