import itertools

import numpy as np
import pytest

from protoverses.base.planet import Planet
from protoverses.enviro import surface
from protoverses.enviro.surface import (
    cloud_fraction,
    ice_fraction,
    iterate_surface_temp,
    opacity,
    planet_albedo,
)
from protoverses.util.constants import (
    CLOUD_ALBEDO,
    ICE_ALBEDO,
    ROCKY_AIRLESS_ALBEDO,
    ROCKY_ALBEDO,
    TEMP_ITERATION_LIMIT,
    WATER_ALBEDO,
)
from protoverses.util.rng import RandomSource


def rocky_planet(**kwargs):
    planet_dict = {
        "a": 1.0,
        "radius": 6378.0,
        "molec_weight": 28.0,
        "surf_pressure": 1000.0,
        "boil_point": 373.0,
        "volatile_gas_inventory": 1000.0,
    }
    planet_dict.update(kwargs)
    return Planet(planet_dict)


class TestComponents:
    def test_opacity(self):
        assert opacity(28.0, 1000.0) == pytest.approx(1.0)
        assert opacity(28.0, 100000.0) == pytest.approx(8.333)
        assert opacity(5.0, 1000.0) == pytest.approx(3.0)
        assert opacity(100.0, 1000.0) == 0.0

    def test_heavy_atmosphere_has_no_clouds(self):
        assert cloud_fraction(300.0, 28.0, 6378.0, 0.7) == 0.0
        assert cloud_fraction(300.0, 10.0, 6378.0, 0.7) > 0.0

    def test_ice_fraction(self):
        assert ice_fraction(1.0, 200.0) == 1.0
        assert ice_fraction(0.0, 200.0) == 0.0
        assert ice_fraction(1.0, 400.0) == 0.0

    def test_bare_rock_albedo(self):
        assert planet_albedo(0.0, 0.0, 0.0, 1000.0) == pytest.approx(ROCKY_ALBEDO)
        assert planet_albedo(0.0, 0.0, 0.0, 0.0) == pytest.approx(ROCKY_AIRLESS_ALBEDO)

    def test_clouds_hide_the_surface(self):
        assert planet_albedo(0.0, 1.0, 0.0, 1000.0) == pytest.approx(CLOUD_ALBEDO)

    def test_jitter_draw_order(self):
        draws = RandomSource(9)
        cloud = draws.jitter(CLOUD_ALBEDO, 0.2)
        rock = draws.jitter(ROCKY_ALBEDO, 0.1)
        water = draws.jitter(WATER_ALBEDO, 0.2)
        ice = draws.jitter(ICE_ALBEDO, 0.1)
        expected = 0.0 * cloud + 0.5 * rock + 0.3 * water + 0.2 * ice

        albedo = planet_albedo(0.3, 0.0, 0.2, 1000.0, rng=RandomSource(9))
        assert albedo == pytest.approx(expected, rel=1e-12)

    def test_jittered_albedo(self):
        albedo = planet_albedo(0.5, 0.2, 0.1, 1000.0, rng=RandomSource(1))
        assert 0.0 < albedo < 1.0


class TestIterateSurfaceTemp:
    def test_earth_like(self):
        planet = rocky_planet()
        state = iterate_surface_temp(planet, 1.0)

        assert state.converged
        assert state.iterations <= 10
        assert 280.0 < state.surf_temp < 300.0
        assert state.hydrosphere == pytest.approx(0.71, rel=0.01)
        assert state.cloud_cover == 0.0
        assert planet.surf_temp == state.surf_temp
        assert planet.albedo == state.albedo

    def test_airless_rock(self):
        planet = rocky_planet(
            surf_pressure=0.0,
            boil_point=0.0,
            molec_weight=100.0,
            volatile_gas_inventory=0.0,
        )
        state = iterate_surface_temp(planet, 1.0)

        assert state.iterations == 1
        assert state.converged
        assert state.surf_temp == pytest.approx(255.0)
        assert state.albedo == pytest.approx(ROCKY_AIRLESS_ALBEDO)
        assert state.hydrosphere == 0.0
        assert state.ice_cover == 0.0

    def test_frozen_water_does_not_count(self):
        planet = rocky_planet(a=3.0)
        state = iterate_surface_temp(planet, 1.0)
        assert state.surf_temp <= 273.0
        assert state.hydrosphere == 0.0
        assert state.ice_cover > 0.0

    def test_seeded_jitter_is_reproducible(self):
        first = iterate_surface_temp(rocky_planet(), 1.0, rng=RandomSource(4))
        second = iterate_surface_temp(rocky_planet(), 1.0, rng=RandomSource(4))
        assert first == second
        assert first.iterations <= 101

    def test_runaway_greenhouse_saturates(self, monkeypatch):
        monkeypatch.setattr(surface, "green_rise", lambda *args: np.inf)
        state = iterate_surface_temp(rocky_planet(), 1.0)

        assert state.surf_temp == np.finfo(float).max
        assert state.converged is True
        assert state.hydrosphere == 0.0

    def test_iteration_ceiling(self, monkeypatch):
        albedos = itertools.cycle([0.0, 0.9])
        monkeypatch.setattr(surface, "planet_albedo", lambda *args, **kwargs: next(albedos))
        planet = rocky_planet()
        state = iterate_surface_temp(planet, 1.0)

        assert state.iterations == TEMP_ITERATION_LIMIT == 101
        assert state.converged is False
        assert planet.surf_temp == state.surf_temp
