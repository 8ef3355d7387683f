import logging

import pytest

from protoverses.accrete.collide import (
    check_planets,
    coalesce_planetesimals,
    collide_planets,
    find_collision,
    init_planet_list,
    insert_sorted,
    merged_orbit,
)
from protoverses.accrete.inject import Accretion
from protoverses.accrete.sweep import dust_density
from protoverses.base.disk import DustCloud
from protoverses.base.planet import BodyType, Planet
from protoverses.base.star import Star
from protoverses.util.errors import AccretionError
from protoverses.util.rng import RandomSource


def body(a, mass=1e-9, e=0.0, body_type=BodyType.PLANET):
    return Planet({"a": a, "e": e, "mass": mass, "body_type": body_type})


@pytest.fixture
def accretion():
    acc = Accretion(1.0, 1.0, RandomSource(5))
    acc.cloud = DustCloud(0.3, 50.0)
    acc.dust_density = dust_density(1.0, 1.0)
    return acc


class TestFindCollision:
    def test_empty_list(self):
        assert find_collision([], 1.0, 0.1) is None

    def test_distant_bodies_do_not_collide(self):
        bodies = [body(1.0), body(5.0)]
        assert find_collision(bodies, 2.5, 0.0) is None

    def test_closest_neighbour_wins(self):
        bodies = [body(1.0, mass=1e-3), body(1.2, mass=1e-3)]
        hit = find_collision(bodies, 1.15, 0.0)
        assert hit is bodies[1]
        # Same inputs, same answer
        assert find_collision(bodies, 1.15, 0.0) is hit

    def test_tie_keeps_innermost(self):
        bodies = [body(1.0, mass=0.5), body(2.0, mass=0.5)]
        assert find_collision(bodies, 1.5, 0.0) is bodies[0]


class TestMergedOrbit:
    def test_identical_orbits(self):
        new_a, new_e = merged_orbit(1.0, 0.5, 1e-6, 1.0, 0.5, 2e-6)
        assert new_a == pytest.approx(1.0)
        assert new_e == pytest.approx(0.5)

    def test_harmonic_mean_axis(self):
        new_a, _ = merged_orbit(1.0, 0.0, 1.0, 3.0, 0.0, 1.0)
        assert new_a == pytest.approx(2.0 / (1.0 + 1.0 / 3.0))

    def test_eccentricity_clamp_fires(self, caplog):
        # Very unequal orbits push the angular momentum term past 1
        caplog.set_level(logging.DEBUG, logger="protoverses.accrete.collide")
        new_a, new_e = merged_orbit(1.0, 0.0, 1.0, 100.0, 0.0, 1.0)
        assert new_e == 0.0
        assert new_a == pytest.approx(2.0 / 1.01)
        assert "out of range" in caplog.text


class TestInsertSorted:
    def test_ties_keep_insertion_order(self):
        bodies = []
        first, second, third = body(1.0), body(2.0), body(1.0)
        insert_sorted(bodies, first)
        insert_sorted(bodies, second)
        assert insert_sorted(bodies, third) == 1
        assert bodies == [first, third, second]


class TestCoalesce:
    def test_trivial_mass_is_dropped(self, accretion):
        coalesce_planetesimals(accretion, 1.0, 0.0, 1e-15, 1e-5)
        assert accretion.bodies == []

    def test_list_stays_sorted(self, accretion):
        for a in [0.5, 3.0, 1.0, 10.0, 2.0]:
            coalesce_planetesimals(accretion, a, 0.0, 1e-9, 1e-5)
        assert [b.a for b in accretion.bodies] == [0.5, 1.0, 2.0, 3.0, 10.0]
        assert all(b.body_type == BodyType.PLANET for b in accretion.bodies)

    def test_gas_giant_above_critical_mass(self, accretion):
        coalesce_planetesimals(accretion, 30.0, 0.0, 1e-4, 1e-5)
        assert accretion.bodies[0].body_type == BodyType.GAS_GIANT

    def test_moon_kind_comes_from_accretion(self, accretion):
        accretion.body_type = BodyType.MOON
        coalesce_planetesimals(accretion, 1.0, 0.0, 1e-9, 1e-5)
        assert accretion.bodies[0].body_type == BodyType.MOON

    def test_collision_merges_into_existing_body(self, accretion):
        coalesce_planetesimals(accretion, 1.0, 0.0, 1e-9, 1e-5)
        existing = accretion.bodies[0]

        coalesce_planetesimals(accretion, 1.001, 0.0, 1e-9, 1e-5)

        assert accretion.bodies == [existing]
        assert existing.mass >= 2e-9
        assert 1.0 < existing.a < 1.001
        accretion.cloud.check_partition()


class TestCollidePlanets:
    def test_star_table_follows_merged_star(self):
        stars = [
            Star({"mass": 1.0, "luminosity": 1.0, "radius": 0.005}),
            Star({"mass": 0.5, "luminosity": 0.1, "radius": 0.003, "orbit_radius": 10.0}),
        ]
        bodies = init_planet_list(stars, RandomSource(2))
        acc = Accretion(1.0, 1.0, RandomSource(3), bodies=bodies, stars=stars)
        acc.cloud = DustCloud(0.3, 50.0)
        acc.dust_density = dust_density(1.0, 10.0)
        companion = bodies[1]

        collide_planets(acc, companion, 10.5, 0.0, 1e-8)

        assert companion.a != 10.0
        assert stars[1].orbit_radius == companion.a
        assert stars[1].mass_ratio == companion.mass
        assert companion.mass >= 0.5

    def test_unknown_body_type(self, accretion):
        node = body(1.0)
        node.body_type = 9
        with pytest.raises(AccretionError):
            collide_planets(accretion, node, 1.01, 0.0, 1e-9)


class TestPlanetList:
    def test_init_planet_list(self):
        stars = [
            Star({"mass": 1.0, "orbit_radius": 0.0}),
            Star({"mass": 0.3, "orbit_radius": 20.0}),
            Star({"mass": 0.2, "orbit_radius": 5.0}),
        ]
        bodies = init_planet_list(stars, RandomSource(1))
        assert [b.a for b in bodies] == [0.0, 5.0, 20.0]
        assert [b.star_index for b in bodies] == [0, 2, 1]
        assert all(b.body_type == BodyType.STAR for b in bodies)
        assert all(0.0 <= b.e < 1.0 for b in bodies)

    def test_check_planets(self):
        primary = body(0.0, mass=1.0, body_type=BodyType.STAR)
        inside = body(0.001)
        vaporized = body(0.01)
        survivor = body(1.0)
        kept = check_planets([primary, inside, vaporized, survivor], 1.0, 0.005)
        assert kept == [primary, survivor]

    def test_check_planets_keeps_companions(self):
        primary = body(0.0, mass=1.0, body_type=BodyType.STAR)
        companion = body(0.002, mass=0.1, body_type=BodyType.STAR)
        assert check_planets([primary, companion], 1.0, 0.005) == [primary, companion]
