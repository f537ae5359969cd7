"""Shared fixtures for tank drive tests."""

from typing import List, Sequence

import pytest

from tank_drive.config import DriveConfig, FeedforwardCoefficients, LocalizerConfig
from tank_drive.drive import TankDrive


class FakeHardware:
    """Scripted motor/encoder/heading collaborator.

    Tests set ``wheel_positions`` and ``external_heading`` directly and read
    back every power command in ``sent_powers``.
    """

    def __init__(self, wheel_positions=(0.0, 0.0), external_heading: float = 0.0):
        self.wheel_positions: List[float] = list(wheel_positions)
        self.external_heading = external_heading
        self.sent_powers: List[List[float]] = []

    def set_motor_powers(self, powers: Sequence[float]) -> None:
        self.sent_powers.append(list(powers))

    def get_wheel_positions(self) -> List[float]:
        return list(self.wheel_positions)


TRACK_WIDTH = 0.5


@pytest.fixture
def hardware():
    return FakeHardware()


@pytest.fixture
def fused_drive(hardware):
    """Drive fusing the fake heading sensor."""
    config = DriveConfig(
        track_width=TRACK_WIDTH,
        feedforward=FeedforwardCoefficients(k_v=0.5, k_a=0.1, k_static=0.05),
        localizer=LocalizerConfig(use_external_heading=True),
    )
    return TankDrive(hardware, config, heading_sensor=hardware)


@pytest.fixture
def wheel_drive(hardware):
    """Drive using wheel-derived heading only, no heading sensor."""
    config = DriveConfig(
        track_width=TRACK_WIDTH,
        feedforward=FeedforwardCoefficients(k_v=0.5, k_a=0.1, k_static=0.05),
        localizer=LocalizerConfig(use_external_heading=False),
    )
    return TankDrive(hardware, config)
