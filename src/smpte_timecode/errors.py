"""Exceptions raised by the timecode package."""


class TimecodeError(Exception):
    """Raised when an error occurred in timecode calculation."""


class UnsupportedRateError(TimecodeError, ValueError):
    """Raised for frame rates outside the broadcast set.

    Also raised when drop-frame counting is requested at a rate that does not
    define it (anything but the 29.97 and 59.94 families).
    """


class InvalidComponentError(TimecodeError, ValueError):
    """Raised when an hours, minutes, seconds or frames field is out of range.

    This includes the frame labels skipped by drop-frame counting, which do
    not exist at the start of a minute that is not a multiple of ten.
    """


class NegativeFrameCountError(TimecodeError, ValueError):
    """Raised when a negative frame index is given."""


class TimecodeUnderflowError(TimecodeError):
    """Raised when a subtraction would move a Timecode before frame zero."""


class IncompatibleRateError(TimecodeError):
    """Raised when combining Timecodes with a different rate or drop-frame flag."""


class TimecodeFormatError(TimecodeError, ValueError):
    """Raised when a string can not be read as a timecode."""
