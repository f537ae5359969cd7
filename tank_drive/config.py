"""Configuration parameters for the tank drive core.

This module centralizes all configuration parameters including:
- Physical robot parameters
- Feedforward actuation model coefficients
- Localization (heading fusion) settings
- Simulation settings used by tank_drive.sim

The module-level constants are the defaults; the frozen dataclasses below
bundle them into the configuration objects passed to TankDrive and
TankLocalizer at construction time.
"""

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict

from .errors import ConfigurationError

# ============================================================================
# Physical Robot Parameters
# ============================================================================

TRACK_WIDTH = 0.5
"""Lateral distance between the left and right wheel contact lines (meters).
Fixed by robot hardware design. Must be > 0."""


# ============================================================================
# Feedforward Parameters
# ============================================================================

K_V = 0.5
"""Velocity feedforward gain (power per m/s).

Roughly 1 / (free wheel speed at full power). With a 2.0 m/s top wheel speed,
full power maps to 2.0 m/s, giving kV = 0.5.
"""

K_A = 0.0
"""Acceleration feedforward gain (power per m/s²).

Zero until characterized; a nonzero value anticipates the extra voltage
needed to accelerate the robot's mass.
"""

K_STATIC = 0.0
"""Static friction feedforward (power).

Added with the sign of the commanded wheel velocity. Never applied when the
commanded velocity is exactly zero.
"""

MAX_MOTOR_POWER = 1.0
"""Magnitude of the normalized power range accepted by motor collaborators.
Powers outside [-MAX_MOTOR_POWER, MAX_MOTOR_POWER] are logged as warnings."""


# ============================================================================
# Localization Parameters
# ============================================================================

USE_EXTERNAL_HEADING = True
"""Fuse an absolute heading sensor (IMU / gyroscope) into the pose estimate.

Wheel-derived heading accumulates unbounded error under wheel slip. An
absolute heading sensor is typically lower drift, so it is preferred when
present. Set to False to fall back to the kinematic heading estimate.
"""

POSE_TOLERANCE = 1e-9
"""Default tolerance for Pose2d.is_close comparisons."""


# ============================================================================
# Simulation Parameters
# ============================================================================

SIM_MAX_WHEEL_SPEED = 2.0
"""Wheel surface speed at full power in the simulated drive (m/s)."""

SIM_DT = 0.05
"""Default simulation time step (seconds). 20 Hz control loop."""


# ============================================================================
# Configuration Objects
# ============================================================================


def _require_finite(name: str, value: float) -> None:
    if not math.isfinite(value):
        raise ConfigurationError(f"{name} must be finite, got {value}")


@dataclass(frozen=True)
class FeedforwardCoefficients:
    """Linear feedforward model: power = kV*v + kA*a + kStatic*sign(v)."""

    k_v: float = K_V
    k_a: float = K_A
    k_static: float = K_STATIC

    def __post_init__(self):
        _require_finite("k_v", self.k_v)
        _require_finite("k_a", self.k_a)
        _require_finite("k_static", self.k_static)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary for logging."""
        return asdict(self)


@dataclass(frozen=True)
class LocalizerConfig:
    """Localizer settings.

    Attributes:
        use_external_heading: If True, the heading component of each pose
            update comes from the drive's absolute heading sensor. If False,
            the heading is derived from the wheel deltas.
    """

    use_external_heading: bool = USE_EXTERNAL_HEADING

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DriveConfig:
    """Complete tank drive configuration.

    Attributes:
        track_width: Lateral wheel separation (meters), > 0
        feedforward: Feedforward coefficients for set_drive_signal
        localizer: Settings for the default localizer
    """

    track_width: float = TRACK_WIDTH
    feedforward: FeedforwardCoefficients = field(default_factory=FeedforwardCoefficients)
    localizer: LocalizerConfig = field(default_factory=LocalizerConfig)

    def __post_init__(self):
        _require_finite("track_width", self.track_width)
        if self.track_width <= 0:
            raise ConfigurationError(f"track_width must be > 0, got {self.track_width}")

    @classmethod
    def default(cls) -> "DriveConfig":
        """Build a configuration from the module-level constants."""
        return cls(
            track_width=TRACK_WIDTH,
            feedforward=FeedforwardCoefficients(K_V, K_A, K_STATIC),
            localizer=LocalizerConfig(USE_EXTERNAL_HEADING),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a flat dictionary for logging."""
        return {
            "track_width": self.track_width,
            **self.feedforward.to_dict(),
            **self.localizer.to_dict(),
        }

    def __str__(self):
        """Human-readable description of the configuration."""
        heading = "external heading" if self.localizer.use_external_heading else "wheel heading"
        ff = self.feedforward
        return (
            f"track_width={self.track_width:.3f}m, "
            f"kV={ff.k_v:.3f} kA={ff.k_a:.3f} kStatic={ff.k_static:.3f}, {heading}"
        )
