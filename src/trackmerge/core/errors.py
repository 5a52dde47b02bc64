class TrackMergeError(ValueError):
    """Base class for errors raised by the point-processing pipeline."""


class MalformedPointError(TrackMergeError):
    """A raw point record lacks a mandatory field or carries unparsable coordinates."""


class EmptyInputError(TrackMergeError):
    """Day splitting was invoked on an empty point sequence."""


class InvalidConfigError(TrackMergeError):
    """A configuration value is outside its allowed range."""
