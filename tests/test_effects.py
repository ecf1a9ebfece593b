import math

import pytest

from genetic_kingdom.effects import AreaAttackEffect, ProjectileEffect


def test_area_effect_starts_empty():
    effect = AreaAttackEffect((10.0, 20.0), 80.0)
    assert effect.current_radius == 0.0
    assert not effect.is_complete()
    assert effect.color[3] == 150


def test_area_effect_grows_with_time():
    effect = AreaAttackEffect((0.0, 0.0), 80.0)
    effect.update(0.25)
    assert effect.current_radius == pytest.approx(40.0)
    assert not effect.is_complete()
    assert 0 < effect.color[3] < 150


def test_area_effect_fades_monotonically():
    effect = AreaAttackEffect((0.0, 0.0), 50.0)
    alphas = []
    for _ in range(5):
        effect.update(0.1)
        alphas.append(effect.color[3])
    assert alphas == sorted(alphas, reverse=True)
    assert effect.color[:3] == (255, 100, 0)


def test_area_effect_completes_after_duration():
    effect = AreaAttackEffect((0.0, 0.0), 64.0)
    effect.update(0.5)
    assert effect.is_complete()
    assert effect.current_radius == pytest.approx(64.0)
    assert effect.color[3] == 0


def test_area_effect_alpha_never_negative():
    effect = AreaAttackEffect((0.0, 0.0), 64.0)
    effect.update(2.0)
    assert effect.is_complete()
    assert effect.color[3] == 0


def test_projectile_distance_and_angle():
    projectile = ProjectileEffect((0.0, 0.0), (30.0, 40.0), (1, 2, 3, 255))
    assert projectile.distance == pytest.approx(50.0)
    assert projectile.angle == pytest.approx(math.atan2(40.0, 30.0))
    assert not projectile.is_complete()
    assert not projectile.visible


def test_projectile_moves_along_line():
    projectile = ProjectileEffect((0.0, 0.0), (30.0, 40.0), (1, 2, 3, 255), speed=100.0)
    projectile.update(0.25)
    assert projectile.traveled == pytest.approx(25.0)
    assert projectile.current_position == pytest.approx((15.0, 20.0))
    assert projectile.visible


def test_projectile_stops_at_end():
    projectile = ProjectileEffect((5.0, 5.0), (25.0, 5.0), (0, 0, 0, 255), speed=1000.0)
    projectile.update(1.0)
    assert projectile.is_complete()
    assert projectile.current_position == pytest.approx((25.0, 5.0))
    assert projectile.traveled == pytest.approx(projectile.distance)
    assert not projectile.visible
    projectile.update(1.0)
    assert projectile.current_position == pytest.approx((25.0, 5.0))


def test_projectile_with_zero_distance_is_complete():
    projectile = ProjectileEffect((7.0, 7.0), (7.0, 7.0), (0, 0, 0, 255))
    assert projectile.is_complete()
    projectile.update(0.1)
    assert projectile.current_position == (7.0, 7.0)
    assert projectile.traveled == 0.0


def test_projectile_defaults():
    projectile = ProjectileEffect((0.0, 0.0), (1.0, 0.0), (9, 9, 9, 255))
    assert projectile.speed == 600.0
    assert projectile.width == 2.0
    assert projectile.length == 8.0