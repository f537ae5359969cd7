"""Exceptions raised by the tank drive core."""


class TankDriveError(Exception):
    """Base class for all tank drive errors."""


class ConfigurationError(TankDriveError, ValueError):
    """Invalid physical constant or collaborator setup, detected at construction."""


class WheelPositionMismatchError(TankDriveError, ValueError):
    """A wheel reading does not line up with the expected [left, right] ordering."""


class NonFiniteValueError(TankDriveError, ArithmeticError):
    """A kinematic or feedforward computation produced NaN or infinity."""
