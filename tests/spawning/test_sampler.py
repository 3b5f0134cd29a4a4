from evovac.spawning.sampler import SpatialSampler
from evovac.spawning.zones import box_zone, circle_zone
from evovac.utils.math import Vec3, horizontal_distance
from tests.test_utils import seeded, square_terrain


def make_sampler(zones=(), terrain=None, seed: int = 7) -> SpatialSampler:
    return SpatialSampler(
        terrain=terrain if terrain is not None else square_terrain(),
        hub=Vec3(),
        safe_radius=20.0,
        max_distance=200.0,
        zones=zones,
        rng=seeded(seed),
        height_offset=0.1,
    )


def test_sample_stays_on_terrain() -> None:
    sampler = make_sampler(terrain=square_terrain(50.0, height=3.0))
    for _ in range(200):
        point = sampler.sample()
        assert point is not None
        assert -50.0 <= point.x <= 50.0
        assert -50.0 <= point.z <= 50.0
        assert abs(point.y - 3.1) < 1e-9


def test_no_terrain_yields_nothing() -> None:
    sampler = SpatialSampler(None, Vec3(), 0.0, 10.0, (), seeded(), 0.0)
    assert sampler.sample() is None
    point, attempts = sampler.sample_valid(30)
    assert point is None
    assert attempts == 1


def test_validity_bounds_inclusive() -> None:
    sampler = make_sampler()
    assert sampler.is_valid(Vec3(20.0, 0.0, 0.0))
    assert sampler.is_valid(Vec3(0.0, 50.0, 200.0))
    assert not sampler.is_valid(Vec3(19.9, 0.0, 0.0))
    assert not sampler.is_valid(Vec3(200.1, 0.0, 0.0))


def test_valid_samples_respect_radii_and_zones() -> None:
    zones = (circle_zone("lake", Vec3(60.0, 0.0, 0.0), 30.0), box_zone("depot", Vec3(-80.0, 0.0, 0.0), 40.0, 40.0))
    sampler = make_sampler(zones=zones)
    found = 0
    for _ in range(500):
        point, _ = sampler.sample_valid(30)
        if point is None:
            continue
        found += 1
        assert 20.0 <= horizontal_distance(point, Vec3()) <= 200.0
        assert not any(zone.contains(point) for zone in zones)
    assert found > 450


def test_attempt_budget_is_bounded() -> None:
    # The whole terrain sits inside the safe radius, so nothing is valid.
    sampler = make_sampler(terrain=square_terrain(10.0))
    point, attempts = sampler.sample_valid(12)
    assert point is None
    assert attempts == 12
