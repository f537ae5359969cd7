"""Tank Drive - Kinematics, Feedforward and Localization for Differential Drives

Converts between robot-frame motion commands and per-wheel motor commands for
a tank (differential) drive, and maintains a running pose estimate from wheel
encoders fused with an optional absolute heading sensor.

## Architecture Overview

### Kinematics (model.py)
Forward and inverse tank kinematics for a fixed track width.
- Forward: (v, omega) -> (v_left, v_right), lateral motion ignored
- Inverse: (d_left, d_right) -> robot-frame pose delta
- Odometry integration and linear feedforward (kV, kA, kStatic)

### Localization (localizer.py)
Dead reckoning from wheel position deltas.
- First reading after construction or reset only records a baseline
- Heading from an external sensor when fused, from the wheels otherwise
- Headings kept in (-pi, pi]

### Drive Control (drive.py)
Dispatches motor powers to an injected hardware collaborator.
- set_drive_signal: kinematics + feedforward
- set_drive_power: kinematics only (teleop)
- Owns the default localizer and exposes pose read/reset through it

## Modules

- `config.py` - Default parameters and configuration dataclasses
- `geometry.py` - Pose2d and angle normalization
- `model.py` - Tank kinematics, odometry update, feedforward
- `localizer.py` - Encoder/heading pose estimation
- `drive.py` - Drive controller and collaborator protocols
- `errors.py` - Exception hierarchy
- `sim.py` - In-memory simulated hardware
- `log.py` - Console logging setup

## Quick Start

```python
from tank_drive import DriveSignal, Pose2d, TankDrive
from tank_drive.sim import SimulatedTankHardware

hardware = SimulatedTankHardware()
drive = TankDrive(hardware, heading_sensor=hardware)

drive.update_pose_estimate()
drive.set_drive_signal(DriveSignal(velocity=Pose2d(0.5, 0.0, 0.2)))
```

Or run the simulated demo:
```bash
python -m tank_drive.sim --verbose
```
"""

__version__ = "0.1.0"

from .config import DriveConfig, FeedforwardCoefficients, LocalizerConfig
from .drive import DriveHardware, DriveSignal, HeadingSensor, TankDrive
from .errors import (
    ConfigurationError,
    NonFiniteValueError,
    TankDriveError,
    WheelPositionMismatchError,
)
from .geometry import Pose2d, norm_angle, norm_delta
from .localizer import TankLocalizer
from .model import TankKinematics, calculate_motor_feedforward, relative_odometry_update

__all__ = [
    "Pose2d",
    "norm_angle",
    "norm_delta",
    "TankKinematics",
    "relative_odometry_update",
    "calculate_motor_feedforward",
    "TankLocalizer",
    "TankDrive",
    "DriveSignal",
    "DriveHardware",
    "HeadingSensor",
    "DriveConfig",
    "FeedforwardCoefficients",
    "LocalizerConfig",
    "TankDriveError",
    "ConfigurationError",
    "WheelPositionMismatchError",
    "NonFiniteValueError",
]
