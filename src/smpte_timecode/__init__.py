"""SMPTE timecode values and drop-frame aware frame arithmetic."""

from .converter import (
    drop_frame_count,
    frames_per_24_hours,
    to_frame_count,
    to_structured,
)
from .errors import (
    IncompatibleRateError,
    InvalidComponentError,
    NegativeFrameCountError,
    TimecodeError,
    TimecodeFormatError,
    TimecodeUnderflowError,
    UnsupportedRateError,
)
from .framerate import FrameRate, parse_rate
from .helpers import Timestamp
from .timecode import Timecode, TimecodeBuilder

__version__ = "1.0.0"

__all__ = [
    "FrameRate",
    "IncompatibleRateError",
    "InvalidComponentError",
    "NegativeFrameCountError",
    "Timecode",
    "TimecodeBuilder",
    "TimecodeError",
    "TimecodeFormatError",
    "TimecodeUnderflowError",
    "Timestamp",
    "UnsupportedRateError",
    "drop_frame_count",
    "frames_per_24_hours",
    "parse_rate",
    "to_frame_count",
    "to_structured",
]
