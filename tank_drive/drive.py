"""Tank drive controller.

This module turns robot-frame motion commands into per-wheel motor powers
and owns the default localizer. Hardware access is injected through the
DriveHardware and HeadingSensor protocols; the controller itself performs
no I/O.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, runtime_checkable

from .config import MAX_MOTOR_POWER, DriveConfig
from .errors import ConfigurationError
from .geometry import Pose2d
from .localizer import TankLocalizer
from .model import TankKinematics, calculate_motor_feedforward


@runtime_checkable
class DriveHardware(Protocol):
    """Motor and encoder collaborator.

    Both methods use the same fixed [left, right] ordering.
    """

    def set_motor_powers(self, powers: Sequence[float]) -> None:
        """Apply normalized voltages, each on the interval [-1.0, 1.0]."""
        ...

    def get_wheel_positions(self) -> Sequence[float]:
        """Return wheel positions in linear distance units."""
        ...


@runtime_checkable
class HeadingSensor(Protocol):
    """Absolute heading sensor (IMU / gyroscope).

    Setting ``external_heading`` re-references the sensor so that it reads
    the assigned value at the current orientation.
    """

    external_heading: float


class Localizer(Protocol):
    """Pose estimator the drive delegates pose queries to."""

    def update(self) -> None:
        ...

    def get_pose_estimate(self) -> Pose2d:
        ...

    def reset_pose_estimate(self, pose: Pose2d) -> None:
        ...


@dataclass(frozen=True)
class DriveSignal:
    """Commanded robot-frame motion.

    Attributes:
        velocity: Forward velocity in x (m/s), angular rate in heading (rad/s)
        acceleration: Forward acceleration in x (m/s²), angular
                      acceleration in heading (rad/s²)
    """

    velocity: Pose2d = field(default_factory=Pose2d)
    acceleration: Pose2d = field(default_factory=Pose2d)


class TankDrive:
    """Tank drive with feedforward control and encoder-based localization.

    Command path:
        DriveSignal -> TankKinematics (forward) -> feedforward -> set_motor_powers

    Sensor path (through the owned localizer):
        get_wheel_positions / external_heading -> TankLocalizer -> pose estimate

    Attributes:
        hardware: Motor and encoder collaborator.
        heading_sensor: Optional absolute heading sensor.
        config: Drive configuration.
        kinematics: Kinematic model for the configured track width.
        localizer: Pose estimator; a TankLocalizer over this drive by default.
    """

    def __init__(
        self,
        hardware: DriveHardware,
        config: Optional[DriveConfig] = None,
        heading_sensor: Optional[HeadingSensor] = None,
    ) -> None:
        """Initialize the drive.

        Args:
            hardware: Motor/encoder collaborator.
            config: Drive configuration. If None, uses DriveConfig.default().
            heading_sensor: Absolute heading sensor. Required when the
                localizer configuration enables external heading.

        Raises:
            ConfigurationError: If the track width is invalid, or heading
                fusion is enabled without a heading sensor.
        """
        if config is None:
            config = DriveConfig.default()

        self.hardware = hardware
        self.heading_sensor = heading_sensor
        self.config = config
        self.kinematics = TankKinematics(config.track_width)
        self.localizer: Localizer = TankLocalizer(self, config.localizer)

        logging.info(f"Tank drive configured: {config}")

    # ------------------------------------------------------------------
    # Command path
    # ------------------------------------------------------------------

    def set_drive_signal(self, drive_signal: DriveSignal) -> None:
        """Command a robot-frame velocity/acceleration through the feedforward model.

        Args:
            drive_signal: Desired velocity and acceleration
        """
        velocities = self.kinematics.robot_to_wheel_velocities(drive_signal.velocity)
        accelerations = self.kinematics.robot_to_wheel_accelerations(drive_signal.acceleration)
        powers = calculate_motor_feedforward(velocities, accelerations, self.config.feedforward)
        self._dispatch(powers)

    def set_drive_power(self, drive_power: Pose2d) -> None:
        """Command raw normalized power without feedforward (teleop style).

        Args:
            drive_power: Forward power in x, turning power in heading
        """
        powers = self.kinematics.robot_to_wheel_velocities(drive_power)
        self._dispatch(powers)

    def _dispatch(self, powers: List[float]) -> None:
        if any(abs(p) > MAX_MOTOR_POWER for p in powers):
            logging.warning(
                f"Motor powers {[round(p, 3) for p in powers]} exceed ±{MAX_MOTOR_POWER}"
            )
        logging.debug(f"Set motor powers: left={powers[0]:.3f}, right={powers[1]:.3f}")
        self.hardware.set_motor_powers(powers)

    # ------------------------------------------------------------------
    # Sensor access
    # ------------------------------------------------------------------

    def get_wheel_positions(self) -> Sequence[float]:
        """Read [left, right] wheel positions from the hardware."""
        return self.hardware.get_wheel_positions()

    @property
    def has_external_heading(self) -> bool:
        return self.heading_sensor is not None

    @property
    def external_heading(self) -> float:
        """Absolute heading from the heading sensor (rad).

        Raises:
            ConfigurationError: If the drive has no heading sensor.
        """
        if self.heading_sensor is None:
            raise ConfigurationError("drive has no heading sensor")
        return self.heading_sensor.external_heading

    def set_external_heading(self, heading: float) -> None:
        """Re-reference the heading sensor so it reads ``heading`` now."""
        if self.heading_sensor is None:
            raise ConfigurationError("drive has no heading sensor")
        self.heading_sensor.external_heading = heading

    # ------------------------------------------------------------------
    # Pose estimate (delegates to the localizer)
    # ------------------------------------------------------------------

    def update_pose_estimate(self) -> None:
        """Run one localizer update. Call once per control cycle."""
        self.localizer.update()

    def get_pose_estimate(self) -> Pose2d:
        return self.localizer.get_pose_estimate()

    def reset_pose_estimate(self, pose: Pose2d) -> None:
        """Overwrite the pose estimate; see TankLocalizer.reset_pose_estimate."""
        self.localizer.reset_pose_estimate(pose)
