"""
In-memory tank drive collaborator.

SimulatedTankHardware implements both DriveHardware and HeadingSensor: it
turns commanded motor powers into wheel travel over a time step, tracks the
robot's true pose, and reports an absolute heading relative to a settable
reference.
"""

import argparse
import math
from typing import List, Sequence

from .config import SIM_DT, SIM_MAX_WHEEL_SPEED, TRACK_WIDTH
from .geometry import Pose2d, norm_angle


class SimulatedTankHardware:
    """Ideal (no-slip) differential drive driven by normalized motor powers.

    Attributes:
        track_width: Lateral wheel separation (m)
        max_wheel_speed: Wheel surface speed at full power (m/s)
        powers: Last commanded [left, right] powers
        wheel_positions: Accumulated [left, right] wheel travel (m)
        true_pose: Ground-truth pose in the field frame
    """

    def __init__(
        self,
        track_width: float = TRACK_WIDTH,
        max_wheel_speed: float = SIM_MAX_WHEEL_SPEED,
        start_pose: Pose2d = Pose2d(),
    ):
        self.track_width = track_width
        self.max_wheel_speed = max_wheel_speed
        self.powers: List[float] = [0.0, 0.0]
        self.wheel_positions: List[float] = [0.0, 0.0]
        self.true_pose = start_pose
        self._heading_offset = 0.0

    def set_motor_powers(self, powers: Sequence[float]) -> None:
        # Motors saturate at full power
        self.powers = [max(-1.0, min(1.0, float(p))) for p in powers]

    def get_wheel_positions(self) -> List[float]:
        return list(self.wheel_positions)

    @property
    def external_heading(self) -> float:
        """Sensor reading: true heading shifted by the current reference."""
        return norm_angle(self.true_pose.heading + self._heading_offset)

    @external_heading.setter
    def external_heading(self, heading: float) -> None:
        self._heading_offset = heading - self.true_pose.heading

    def step(self, dt: float = SIM_DT) -> Pose2d:
        """Advance the simulation by ``dt`` seconds under the current powers.

        Returns:
            Updated ground-truth pose
        """
        v_left = self.powers[0] * self.max_wheel_speed
        v_right = self.powers[1] * self.max_wheel_speed

        self.wheel_positions[0] += v_left * dt
        self.wheel_positions[1] += v_right * dt

        v = (v_left + v_right) / 2
        omega = (v_right - v_left) / self.track_width

        # Midpoint heading keeps arcs accurate at coarse time steps
        theta = self.true_pose.heading
        theta_mid = theta + 0.5 * omega * dt
        self.true_pose = Pose2d(
            self.true_pose.x + v * math.cos(theta_mid) * dt,
            self.true_pose.y + v * math.sin(theta_mid) * dt,
            norm_angle(theta + omega * dt),
        )
        return self.true_pose


if __name__ == "__main__":
    from .config import DriveConfig, FeedforwardCoefficients
    from .drive import DriveSignal, TankDrive
    from .log import setup_logging

    parser = argparse.ArgumentParser(description="Drive a simulated tank robot in a circle")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable per-cycle debug logging")
    parser.add_argument("--speed", type=float, default=0.8, help="Forward speed (m/s)")
    parser.add_argument("--turn-rate", type=float, default=0.6, help="Angular rate (rad/s)")
    parser.add_argument("--duration", type=float, default=5.0, help="Run time (s)")
    args = parser.parse_args()

    setup_logging(args.verbose)

    hardware = SimulatedTankHardware()
    config = DriveConfig(
        track_width=hardware.track_width,
        feedforward=FeedforwardCoefficients(k_v=1.0 / hardware.max_wheel_speed),
    )
    drive = TankDrive(hardware, config, heading_sensor=hardware)

    signal = DriveSignal(velocity=Pose2d(args.speed, 0.0, args.turn_rate))
    for _ in range(int(args.duration / SIM_DT)):
        drive.update_pose_estimate()
        drive.set_drive_signal(signal)
        hardware.step(SIM_DT)
    drive.update_pose_estimate()

    estimate = drive.get_pose_estimate()
    print(f"Estimated pose: {estimate}")
    print(f"True pose:      {hardware.true_pose}")
