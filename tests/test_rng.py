import numpy as np

from protoverses.util.rng import RandomSource


def test_uniform_bounds():
    rng = RandomSource(0)
    draws = [rng.uniform(2.0, 3.0) for _ in range(200)]
    assert all(2.0 <= draw < 3.0 for draw in draws)
    # Bounds in either order
    assert all(2.0 <= rng.uniform(3.0, 2.0) <= 3.0 for _ in range(50))
    assert rng.uniform(1.5, 1.5) == 1.5


def test_jitter():
    rng = RandomSource(1)
    draws = [rng.jitter(10.0, 0.2) for _ in range(200)]
    assert all(8.0 <= draw <= 12.0 for draw in draws)


def test_eccentricity_range():
    rng = RandomSource(2)
    draws = [rng.eccentricity() for _ in range(1000)]
    assert all(0.0 <= e < 0.52 for e in draws)
    # Heavily weighted toward circular orbits
    assert np.median(draws) < 0.1


def test_same_seed_same_draws():
    first, second = RandomSource(3), RandomSource(3)
    assert [first.uniform(0, 1) for _ in range(10)] == [
        second.uniform(0, 1) for _ in range(10)
    ]


def test_spawn():
    children = RandomSource(4).spawn(3)
    again = RandomSource(4).spawn(3)
    assert len(children) == 3
    draws = [child.uniform(0, 1) for child in children]
    assert len(set(draws)) == 3
    assert draws == [child.uniform(0, 1) for child in again]


def test_spawn_from_child():
    child = RandomSource(5).spawn(1)[0]
    grandchildren = child.spawn(2)
    assert grandchildren[0].uniform(0, 1) != grandchildren[1].uniform(0, 1)
