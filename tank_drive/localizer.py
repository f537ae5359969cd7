"""Localization module for tank drive pose estimation.

This module provides dead-reckoning pose estimation from drive encoders,
optionally fused with an absolute heading sensor:
- Wheel position deltas give the robot-frame translation each cycle
- Heading comes from the external sensor when fusion is enabled, otherwise
  from the wheel deltas
- Deltas are integrated into a field-frame pose estimate
"""

import logging
import math
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .config import LocalizerConfig
from .errors import ConfigurationError, NonFiniteValueError, WheelPositionMismatchError
from .geometry import Pose2d, norm_angle, norm_delta
from .model import check_wheel_count, relative_odometry_update

if TYPE_CHECKING:
    from .drive import TankDrive


class TankLocalizer:
    """Pose estimator based on the drive encoders and (optionally) a heading sensor.

    The localizer has two logical states:
        - Unbaselined: no previous wheel reading. Entered at construction and
          on every reset_pose_estimate(). The next update() only records a
          baseline.
        - Tracking: a previous reading exists. Each update() integrates the
          delta since that reading.

    The caller is expected to run update() once per control cycle before
    reading the pose for that cycle.
    """

    def __init__(self, drive: "TankDrive", config: Optional[LocalizerConfig] = None):
        """Initialize the localizer.

        Args:
            drive: Drive providing wheel positions, kinematics and the
                   optional heading sensor.
            config: Localizer settings. If None, uses defaults from
                    tank_drive.config.

        Raises:
            ConfigurationError: If heading fusion is requested but the drive
                has no heading sensor.
        """
        if config is None:
            config = LocalizerConfig()

        if config.use_external_heading and not drive.has_external_heading:
            raise ConfigurationError(
                "use_external_heading is enabled but the drive has no heading sensor"
            )

        self.drive = drive
        self.use_external_heading = config.use_external_heading

        self._pose_estimate = Pose2d()
        self._last_wheel_positions: Optional[List[float]] = None
        self._last_external_heading: Optional[float] = None

        # Diagnostics
        self._last_wheel_deltas: List[float] = []
        self._last_heading_delta = 0.0
        self._update_count = 0

    @property
    def pose_estimate(self) -> Pose2d:
        """Current pose estimate (read-only)."""
        return self._pose_estimate

    @property
    def is_tracking(self) -> bool:
        """True once a baseline reading has been recorded."""
        return self._last_wheel_positions is not None

    def get_pose_estimate(self) -> Pose2d:
        """Return the current pose estimate. No side effects."""
        return self._pose_estimate

    def reset_pose_estimate(self, pose: Pose2d) -> None:
        """Overwrite the pose estimate.

        The heading of ``pose`` is wrapped into (-pi, pi] before it is stored.

        Side effects:
            - Clears the wheel and heading baselines, so the next update()
              only records a new baseline.
            - Writes the wrapped heading to the drive's heading sensor (when
              one is present) so the next fused heading delta starts from the
              newly assigned heading.

        Args:
            pose: New pose estimate

        Raises:
            NonFiniteValueError: If any component of ``pose`` is NaN or infinite.
        """
        if not pose.is_finite():
            raise NonFiniteValueError(f"cannot reset pose estimate to {pose.to_dict()}")
        pose = Pose2d(pose.x, pose.y, norm_angle(pose.heading))
        self._last_wheel_positions = None
        self._last_external_heading = None
        if self.drive.has_external_heading:
            self.drive.set_external_heading(pose.heading)
        self._pose_estimate = pose
        logging.info(f"Pose estimate reset to {pose}")

    def update(self) -> None:
        """Advance the pose estimate using the latest sensor readings.

        Raises:
            WheelPositionMismatchError: If the wheel reading is not
                [left, right], or its length differs from the baseline's.
            NonFiniteValueError: If a wheel delta or heading delta is NaN or
                infinite, or integration produced NaN or infinity.
        """
        wheel_positions = [float(p) for p in self.drive.get_wheel_positions()]
        external_heading = self.drive.external_heading if self.use_external_heading else None

        if self._last_wheel_positions is not None:
            if len(wheel_positions) != len(self._last_wheel_positions):
                raise WheelPositionMismatchError(
                    f"wheel reading has {len(wheel_positions)} entries, "
                    f"baseline has {len(self._last_wheel_positions)}"
                )

            wheel_deltas = [
                current - last
                for current, last in zip(wheel_positions, self._last_wheel_positions)
            ]
            robot_pose_delta = self.drive.kinematics.wheel_to_robot_velocities(wheel_deltas)

            if self.use_external_heading and self._last_external_heading is not None:
                heading_delta = external_heading - self._last_external_heading
            else:
                heading_delta = robot_pose_delta.heading

            if not all(math.isfinite(d) for d in wheel_deltas) or not math.isfinite(heading_delta):
                raise NonFiniteValueError(
                    f"non-finite odometry input: wheel deltas {wheel_deltas}, "
                    f"heading delta {heading_delta}"
                )
            heading_delta = norm_delta(heading_delta)

            new_pose = relative_odometry_update(
                self._pose_estimate,
                Pose2d(robot_pose_delta.x, robot_pose_delta.y, heading_delta),
            )
            if not new_pose.is_finite():
                raise NonFiniteValueError(
                    f"pose integration produced {new_pose.to_dict()} "
                    f"from {self._pose_estimate.to_dict()} with wheel deltas {wheel_deltas}"
                )

            self._pose_estimate = new_pose
            self._last_wheel_deltas = wheel_deltas
            self._last_heading_delta = heading_delta
            self._update_count += 1
            logging.debug(
                f"Localizer: deltas={wheel_deltas} dheading={heading_delta:.4f} pose={new_pose}"
            )
        else:
            check_wheel_count(wheel_positions, "wheel positions")
            logging.debug(f"Localizer baseline recorded: wheels={wheel_positions}")

        self._last_wheel_positions = wheel_positions
        self._last_external_heading = external_heading

    def get_diagnostics(self) -> Dict[str, Any]:
        """Get localizer diagnostic information for logging and monitoring.

        Returns:
            Dictionary containing:
                - tracking: Whether a baseline reading exists
                - heading_source: "external" or "wheels"
                - last_wheel_deltas: Wheel deltas of the last integrated update
                - last_heading_delta: Heading delta of the last integrated update (rad)
                - updates: Number of integrated (non-baseline) updates
        """
        return {
            "tracking": self.is_tracking,
            "heading_source": "external" if self.use_external_heading else "wheels",
            "last_wheel_deltas": list(self._last_wheel_deltas),
            "last_heading_delta": self._last_heading_delta,
            "updates": self._update_count,
        }
