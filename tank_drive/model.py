"""
Differential (tank) drive kinematic model.

This module provides the forward and inverse kinematics for a tank drive,
converting robot-frame velocities into individual wheel velocities and wheel
deltas back into a robot-frame pose delta. It also holds the odometry
integration step and the linear feedforward actuation model.
"""

import logging
import math
from typing import List, Sequence

import numpy as np

from .config import FeedforwardCoefficients
from .errors import ConfigurationError, NonFiniteValueError, WheelPositionMismatchError
from .geometry import Pose2d, norm_angle

# Wheel ordering shared by every sequence in the package
LEFT = 0
RIGHT = 1
WHEEL_COUNT = 2


def check_wheel_count(values: Sequence[float], what: str) -> None:
    """Raise WheelPositionMismatchError unless ``values`` is [left, right]."""
    if len(values) != WHEEL_COUNT:
        raise WheelPositionMismatchError(
            f"{what} must be [left, right] ({WHEEL_COUNT} entries), got {len(values)}"
        )


class TankKinematics:
    """Tank drive kinematics for a fixed track width.

    For a differential drive robot, the relationship between the robot's
    forward velocity (v), angular velocity (omega) and the wheel velocities is:
        v_left = v - (T/2) * omega
        v_right = v + (T/2) * omega

    where T is the track width. The inverse is:
        v = (v_left + v_right) / 2
        omega = (v_right - v_left) / T

    Lateral motion cannot be produced by a tank drive, so the y component of
    a robot-frame pose is ignored going forward and always zero coming back.
    """

    def __init__(self, track_width: float):
        """Initialize the kinematic model.

        Args:
            track_width: Lateral distance between the wheel contact lines (m)

        Raises:
            ConfigurationError: If track_width is not a finite positive number.
        """
        if not math.isfinite(track_width) or track_width <= 0:
            raise ConfigurationError(f"track_width must be a finite value > 0, got {track_width}")
        self.track_width = float(track_width)

    def robot_to_wheel_velocities(self, robot_vel: Pose2d) -> List[float]:
        """
        Compute wheel velocities from a robot-frame velocity.

        Args:
            robot_vel: Robot velocity; x is forward (m/s), heading is the
                       angular rate (rad/s). Positive rate turns counter-clockwise.

        Returns:
            [v_left, v_right] wheel velocities in m/s

        Example:
            >>> TankKinematics(0.5).robot_to_wheel_velocities(Pose2d(1.0, 0.0, 0.5))
            [0.875, 1.125]
        """
        half_turn = robot_vel.heading * self.track_width / 2.0
        return [robot_vel.x - half_turn, robot_vel.x + half_turn]

    def robot_to_wheel_accelerations(self, robot_accel: Pose2d) -> List[float]:
        """Compute wheel accelerations from a robot-frame acceleration.

        The map is linear, so this is the velocity formula applied to
        (forward acceleration, angular acceleration).
        """
        return self.robot_to_wheel_velocities(robot_accel)

    def wheel_to_robot_velocities(self, wheel_velocities: Sequence[float]) -> Pose2d:
        """Compute the robot-frame velocity (or pose delta) from wheel values.

        Works equally on wheel velocities and on wheel position deltas; in the
        latter case the result is a robot-frame pose delta.

        Args:
            wheel_velocities: [left, right] wheel values

        Returns:
            Pose2d(forward, 0.0, angular)

        Raises:
            WheelPositionMismatchError: If the sequence is not [left, right].
        """
        check_wheel_count(wheel_velocities, "wheel velocities")
        left = wheel_velocities[LEFT]
        right = wheel_velocities[RIGHT]
        return Pose2d(
            (left + right) / 2.0,
            0.0,
            (right - left) / self.track_width,
        )


def relative_odometry_update(field_pose: Pose2d, robot_pose_delta: Pose2d) -> Pose2d:
    """Apply a robot-frame pose delta to a field-frame pose.

    The translation of the delta is rotated by the heading of ``field_pose``
    (the heading before the move) and added to its position. The heading
    delta is added and the result wrapped into (-pi, pi].

    Args:
        field_pose: Previous pose in the field frame
        robot_pose_delta: Displacement measured in the robot frame

    Returns:
        New field-frame pose
    """
    field_delta = robot_pose_delta.rotated(field_pose.heading)
    return Pose2d(
        field_pose.x + field_delta.x,
        field_pose.y + field_delta.y,
        norm_angle(field_pose.heading + robot_pose_delta.heading),
    )


def calculate_motor_feedforward(
    velocities: Sequence[float],
    accelerations: Sequence[float],
    coefficients: FeedforwardCoefficients,
) -> List[float]:
    """
    Compute normalized motor powers from wheel velocities and accelerations.

    Feedforward model per wheel:
        power = kV * v + kA * a + kStatic * sign(v)

    sign(0) is 0, so no static friction term is added to a wheel commanded
    to stay still.

    Args:
        velocities: Wheel velocities (m/s)
        accelerations: Wheel accelerations (m/s²), same ordering
        coefficients: Calibrated feedforward coefficients

    Returns:
        list[float]: Motor powers in the same wheel ordering

    Raises:
        WheelPositionMismatchError: If the sequences differ in length.
        NonFiniteValueError: If any resulting power is NaN or infinite.
    """
    if len(velocities) != len(accelerations):
        raise WheelPositionMismatchError(
            f"got {len(velocities)} wheel velocities but {len(accelerations)} accelerations"
        )

    v = np.asarray(velocities, dtype=float)
    a = np.asarray(accelerations, dtype=float)

    powers = coefficients.k_v * v + coefficients.k_a * a + coefficients.k_static * np.sign(v)

    if not np.all(np.isfinite(powers)):
        raise NonFiniteValueError(
            f"non-finite feedforward output {powers.tolist()} "
            f"(velocities={list(velocities)}, accelerations={list(accelerations)})"
        )

    logging.debug(f"Feedforward: v={v.tolist()} a={a.tolist()} -> powers={powers.tolist()}")
    return [float(p) for p in powers]
