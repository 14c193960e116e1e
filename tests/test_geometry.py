import random
import pytest

from posture_engine.common.models import Landmark
from posture_engine.geometry.kernel import angle_degrees, distance, midpoint, is_visible, all_visible
from posture_engine.geometry.body import trunk_angle, head_neck_angle, vertical_up, absolute_pelvic_tilt

from conftest import build_landmarks, hips_with_pelvic_tilt

def lm(x, y, z=0.0, visibility=None):
    return Landmark(x=x, y=y, z=z, visibility=visibility)

def test_right_angle():
    assert angle_degrees(lm(1, 0), lm(0, 0), lm(0, 1)) == pytest.approx(90.0)

def test_straight_line_is_180():
    assert angle_degrees(lm(-1, 0), lm(0, 0), lm(1, 0)) == pytest.approx(180.0)

def test_z_is_ignored():
    assert angle_degrees(lm(1, 0, z=5), lm(0, 0), lm(0, 1, z=-3)) == pytest.approx(90.0)

def test_coincident_points_yield_zero():
    a, b = lm(0.3, 0.3), lm(0.5, 0.1)
    assert angle_degrees(b, b, a) == 0.0
    assert angle_degrees(a, b, b) == 0.0

def test_angle_bounds_on_random_triples():
    rng = random.Random(7)
    for _ in range(500):
        pts = [lm(rng.uniform(-2, 2), rng.uniform(-2, 2)) for _ in range(3)]
        assert 0.0 <= angle_degrees(*pts) <= 180.0

def test_nearly_collinear_does_not_overshoot_acos():
    # dot / (|a||b|) can round slightly past 1
    value = angle_degrees(lm(0.1, 0.3), lm(0.0, 0.0), lm(0.2, 0.6))
    assert value == pytest.approx(0.0, abs=1e-5)

def test_distance_is_planar():
    assert distance(lm(0, 0, z=10), lm(3, 4)) == pytest.approx(5.0)

def test_midpoint_averages_coordinates():
    m = midpoint(lm(0, 0, 0, 1.0), lm(1, 2, 4, 1.0))
    assert (m.x, m.y, m.z) == (0.5, 1.0, 2.0)

@pytest.mark.parametrize("va, vb, expected", [
    (0.9, 0.4, 0.4),
    (0.2, 0.8, 0.2),
    (None, 0.8, 0.0),
    (None, None, 0.0),
])
def test_midpoint_takes_weaker_visibility(va, vb, expected):
    assert midpoint(lm(0, 0, visibility=va), lm(1, 1, visibility=vb)).visibility == expected

def test_visibility_threshold():
    assert is_visible(lm(0, 0, visibility=0.3))
    assert not is_visible(lm(0, 0, visibility=0.2999))
    assert not is_visible(lm(0, 0))
    assert is_visible(lm(0, 0, visibility=0.5), threshold=0.5)
    assert all_visible(lm(0, 0, visibility=1.0), lm(0, 0, visibility=0.3))
    assert not all_visible(lm(0, 0, visibility=1.0), lm(0, 0, visibility=0.1))

def test_vertical_up_moves_towards_smaller_y():
    assert vertical_up(lm(0.5, 0.4)).y == pytest.approx(-0.6)

def test_trunk_angle_upright_and_leaning():
    assert trunk_angle(lm(0.5, 0.4), lm(0.5, 0.7)) == pytest.approx(0.0)
    # shoulders 0.3 forward over a 0.3 drop: 45 degrees
    assert trunk_angle(lm(0.8, 0.4), lm(0.5, 0.7)) == pytest.approx(45.0)

def test_head_neck_angle_from_vertical():
    assert head_neck_angle(lm(0.5, 0.4), lm(0.5, 0.2)) == pytest.approx(0.0)
    assert head_neck_angle(lm(0.5, 0.4), lm(0.7, 0.2)) == pytest.approx(45.0)

def test_absolute_pelvic_tilt_is_measured_against_origin():
    assert absolute_pelvic_tilt(build_landmarks(hips_with_pelvic_tilt(12.0))) == pytest.approx(12.0)
    shifted = hips_with_pelvic_tilt(12.0, left_hip=(0.3, 0.6))
    assert absolute_pelvic_tilt(build_landmarks(shifted)) == pytest.approx(12.0)
