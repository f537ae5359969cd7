"""Planar pose type and angle helpers.

Headings are in radians. Any heading that describes an orientation is kept in
the half-open interval (-pi, pi]. A Pose2d that carries a velocity (angular
rate in its heading slot) is left unwrapped.
"""

import math
from dataclasses import dataclass
from typing import Dict, Tuple

TAU = 2.0 * math.pi


def norm_angle(angle: float) -> float:
    """Wrap an angle into (-pi, pi].

    Args:
        angle: Angle in radians, any magnitude

    Returns:
        Equivalent angle in (-pi, pi]. NaN and infinity are returned
        unchanged so callers can detect them.
    """
    if not math.isfinite(angle):
        return angle
    wrapped = math.fmod(angle, TAU)
    if wrapped <= -math.pi:
        wrapped += TAU
    elif wrapped > math.pi:
        wrapped -= TAU
    return wrapped


def norm_delta(delta: float) -> float:
    """Shortest signed rotation equivalent to ``delta``, in (-pi, pi].

    Used for differences of absolute headings, where a jump across the
    +/-pi seam must read as a small turn rather than a full revolution.
    """
    return norm_angle(delta)


@dataclass(frozen=True)
class Pose2d:
    """Immutable planar pose (or velocity-like twist).

    Attributes:
        x: Forward / field x component
        y: Lateral / field y component
        heading: Orientation (rad), or angular rate for velocity poses
    """

    x: float = 0.0
    y: float = 0.0
    heading: float = 0.0

    def vec(self) -> Tuple[float, float]:
        """Translation component as an (x, y) tuple."""
        return self.x, self.y

    def rotated(self, angle: float) -> "Pose2d":
        """Rotate the translation by ``angle``; heading is untouched."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return Pose2d(
            self.x * cos_a - self.y * sin_a,
            self.x * sin_a + self.y * cos_a,
            self.heading,
        )

    def is_close(self, other: "Pose2d", tol: float = 1e-9) -> bool:
        """Component-wise comparison; headings compared modulo a full turn."""
        return (
            abs(self.x - other.x) <= tol
            and abs(self.y - other.y) <= tol
            and abs(norm_delta(self.heading - other.heading)) <= tol
        )

    def is_finite(self) -> bool:
        """True when no component is NaN or infinite."""
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.heading)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary for logging."""
        return {"x": self.x, "y": self.y, "heading": self.heading}

    def __add__(self, other: "Pose2d") -> "Pose2d":
        return Pose2d(self.x + other.x, self.y + other.y, self.heading + other.heading)

    def __sub__(self, other: "Pose2d") -> "Pose2d":
        return Pose2d(self.x - other.x, self.y - other.y, self.heading - other.heading)

    def __mul__(self, scalar: float) -> "Pose2d":
        return Pose2d(self.x * scalar, self.y * scalar, self.heading * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Pose2d":
        return Pose2d(self.x / scalar, self.y / scalar, self.heading / scalar)

    def __neg__(self) -> "Pose2d":
        return Pose2d(-self.x, -self.y, -self.heading)

    def __str__(self) -> str:
        return f"({self.x:.3f}, {self.y:.3f}, {math.degrees(self.heading):.2f}°)"
