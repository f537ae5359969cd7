import math

import pytest

from tank_drive.geometry import Pose2d, norm_angle, norm_delta


@pytest.mark.parametrize(
    "angle, expected",
    [
        (0.0, 0.0),
        (math.pi, math.pi),
        (-math.pi, math.pi),
        (6.0, 6.0 - 2 * math.pi),
        (-4.0, -4.0 + 2 * math.pi),
        (0.5 + 4 * math.pi, 0.5),
    ],
)
def test_norm_angle_wraps_into_half_open_interval(angle, expected):
    assert norm_angle(angle) == pytest.approx(expected)
    assert -math.pi < norm_angle(angle) <= math.pi


def test_sum_of_large_headings_is_wrapped():
    wrapped = norm_angle(3.0 + 3.0)
    assert wrapped != pytest.approx(6.0)
    assert wrapped == pytest.approx(6.0 - 2 * math.pi)


def test_norm_delta_takes_short_way_across_seam():
    # 179 deg -> -179 deg is a 2 deg left turn, not a 358 deg right turn
    delta = norm_delta(math.radians(-179) - math.radians(179))
    assert delta == pytest.approx(math.radians(2))


def test_pose_is_immutable():
    pose = Pose2d(1.0, 2.0, 0.3)
    with pytest.raises(AttributeError):
        pose.x = 5.0


def test_pose_arithmetic():
    a = Pose2d(1.0, 2.0, 0.5)
    b = Pose2d(0.5, -1.0, 0.25)
    assert a + b == Pose2d(1.5, 1.0, 0.75)
    assert a - b == Pose2d(0.5, 3.0, 0.25)
    assert 2 * b == Pose2d(1.0, -2.0, 0.5)
    assert a / 2 == Pose2d(0.5, 1.0, 0.25)
    assert -b == Pose2d(-0.5, 1.0, -0.25)


def test_rotated_turns_translation_only():
    rotated = Pose2d(1.0, 0.0, 0.7).rotated(math.pi / 2)
    assert rotated.x == pytest.approx(0.0, abs=1e-12)
    assert rotated.y == pytest.approx(1.0)
    assert rotated.heading == 0.7


def test_is_close_compares_headings_modulo_full_turn():
    assert Pose2d(0.0, 0.0, math.pi).is_close(Pose2d(0.0, 0.0, -math.pi))
    assert not Pose2d(0.0, 0.0, 0.1).is_close(Pose2d(0.0, 0.0, 0.2))


def test_is_finite():
    assert Pose2d(1.0, 2.0, 3.0).is_finite()
    assert not Pose2d(float("nan"), 0.0, 0.0).is_finite()
    assert not Pose2d(0.0, 0.0, float("inf")).is_finite()


def test_default_pose_is_origin():
    assert Pose2d().to_dict() == {"x": 0.0, "y": 0.0, "heading": 0.0}


@pytest.mark.parametrize("angle", [math.inf, -math.inf])
def test_norm_angle_passes_infinity_through(angle):
    assert norm_angle(angle) == angle


def test_norm_angle_passes_nan_through():
    assert math.isnan(norm_angle(math.nan))
