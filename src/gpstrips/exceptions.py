class GpsTripsError(Exception):
    """Base class for errors raised by gpstrips."""


class ConfigError(GpsTripsError, ValueError):
    """A configuration value is missing or out of range."""


class InputUnavailableError(GpsTripsError):
    """The input CSV is missing or cannot be read."""


class RejectLogError(GpsTripsError):
    """The reject log cannot be reset or written to."""
