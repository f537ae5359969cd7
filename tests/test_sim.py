"""Closed-loop checks against the simulated drive."""

import math

import pytest

from tank_drive.config import DriveConfig, FeedforwardCoefficients, LocalizerConfig
from tank_drive.drive import DriveSignal, TankDrive
from tank_drive.geometry import Pose2d
from tank_drive.sim import SimulatedTankHardware

DT = 0.05


def make_drive(use_external_heading=True):
    hardware = SimulatedTankHardware(track_width=0.5, max_wheel_speed=2.0)
    config = DriveConfig(
        track_width=0.5,
        feedforward=FeedforwardCoefficients(k_v=0.5),
        localizer=LocalizerConfig(use_external_heading=use_external_heading),
    )
    sensor = hardware if use_external_heading else None
    return TankDrive(hardware, config, heading_sensor=sensor), hardware


def run(drive, hardware, signal, steps):
    for _ in range(steps):
        drive.update_pose_estimate()
        drive.set_drive_signal(signal)
        hardware.step(DT)
    drive.update_pose_estimate()


def test_heading_sensor_reference_is_settable():
    hardware = SimulatedTankHardware(start_pose=Pose2d(0.0, 0.0, 1.0))
    assert hardware.external_heading == pytest.approx(1.0)
    hardware.external_heading = -0.5
    assert hardware.external_heading == pytest.approx(-0.5)
    assert hardware.true_pose.heading == 1.0


def test_powers_saturate():
    hardware = SimulatedTankHardware()
    hardware.set_motor_powers([3.0, -3.0])
    assert hardware.powers == [1.0, -1.0]


@pytest.mark.parametrize("use_external_heading", [True, False])
def test_straight_line_tracks_truth(use_external_heading):
    drive, hardware = make_drive(use_external_heading)
    run(drive, hardware, DriveSignal(velocity=Pose2d(1.0, 0.0, 0.0)), 40)

    estimate = drive.get_pose_estimate()
    assert hardware.true_pose.x == pytest.approx(2.0)
    assert estimate.is_close(hardware.true_pose, tol=1e-9)


@pytest.mark.parametrize("use_external_heading", [True, False])
def test_turn_in_place_tracks_truth(use_external_heading):
    drive, hardware = make_drive(use_external_heading)
    run(drive, hardware, DriveSignal(velocity=Pose2d(0.0, 0.0, 1.5)), 30)

    estimate = drive.get_pose_estimate()
    assert estimate.x == pytest.approx(0.0, abs=1e-9)
    assert estimate.y == pytest.approx(0.0, abs=1e-9)
    assert estimate.is_close(hardware.true_pose, tol=1e-9)
    assert -math.pi < estimate.heading <= math.pi


def test_arc_stays_close_to_truth():
    drive, hardware = make_drive()
    run(drive, hardware, DriveSignal(velocity=Pose2d(0.8, 0.0, 0.6)), 100)

    estimate = drive.get_pose_estimate()
    truth = hardware.true_pose
    assert math.hypot(estimate.x - truth.x, estimate.y - truth.y) < 0.1
    assert estimate.heading == pytest.approx(truth.heading, abs=1e-9)


def test_reset_mid_run_re_references_sensor():
    drive, hardware = make_drive()
    run(drive, hardware, DriveSignal(velocity=Pose2d(0.5, 0.0, 0.5)), 20)

    drive.reset_pose_estimate(Pose2d(0.0, 0.0, 0.0))
    assert hardware.external_heading == pytest.approx(0.0)

    run(drive, hardware, DriveSignal(velocity=Pose2d(1.0, 0.0, 0.0)), 10)
    estimate = drive.get_pose_estimate()
    assert estimate.x == pytest.approx(1.0 * 10 * DT)
    assert estimate.y == pytest.approx(0.0, abs=1e-9)
