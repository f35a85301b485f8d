"""Conversion between linear frame counts and hh:mm:ss:ff fields.

Drop-frame counting skips the first ``rate.drop_frames`` frame labels (0 and 1
at 29.97, 0 to 3 at 59.94) at the start of every minute, except minutes that
are a multiple of ten. No actual frames are dropped, only their labels, which
keeps 29.97 timecode within a couple of frames of wall-clock time over a day.
"""

from __future__ import annotations

from .errors import (
    InvalidComponentError,
    NegativeFrameCountError,
    UnsupportedRateError,
)
from .framerate import FrameRate


def _check_drop_frame(rate: FrameRate, drop_frame: bool) -> None:
    if drop_frame and not rate.supports_drop_frame():
        raise UnsupportedRateError(
            f"Drop-frame timecode is not defined at {rate} fps."
        )


def drop_frame_count(rate: FrameRate, drop_frame: bool) -> int:
    """Return the number of frame labels skipped on each dropped minute.

    Args:
        rate (FrameRate): The frame rate.
        drop_frame (bool): If the timecode uses drop-frame counting.

    Returns:
        int: 0 for non drop-frame timecodes.
    """
    _check_drop_frame(rate, drop_frame)
    return rate.drop_frames if drop_frame else 0


def frames_per_24_hours(rate: FrameRate, drop_frame: bool = False) -> int:
    """Return the number of frames in one timecode day.

    Args:
        rate (FrameRate): The frame rate.
        drop_frame (bool): If the timecode uses drop-frame counting.

    Returns:
        int: The frame count at which the timecode rolls over to 00:00:00:00.
    """
    drop_frames = drop_frame_count(rate, drop_frame)
    # 144 ten-minute blocks a day, 9 dropped minutes per block
    return rate.nominal * 60 * 60 * 24 - 144 * 9 * drop_frames


def _check_component(name: str, value: int, upper: int | None) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidComponentError(
            f"{name} should be an integer, not a {value.__class__.__name__}"
        )
    if value < 0 or (upper is not None and value >= upper):
        limit = f"0-{upper - 1}" if upper is not None else ">= 0"
        raise InvalidComponentError(f"{name} should be {limit}, not {value}")


def to_frame_count(
    hours: int,
    minutes: int,
    seconds: int,
    frames: int,
    rate: FrameRate,
    drop_frame: bool = False,
    allow_over_24h: bool = False,
) -> int:
    """Convert timecode fields to the 0-based linear frame index.

    Args:
        hours (int): The hours field, 0-23 unless ``allow_over_24h`` is set.
        minutes (int): The minutes field, 0-59.
        seconds (int): The seconds field, 0-59.
        frames (int): The frames field, 0 to the nominal rate minus one.
        rate (FrameRate): The frame rate.
        drop_frame (bool): Use drop-frame counting.
        allow_over_24h (bool): If True, hours are not limited to one day.

    Raises:
        InvalidComponentError: If a field is out of range or names a frame
            label skipped by drop-frame counting.
        UnsupportedRateError: If drop-frame is requested at a rate that
            does not support it.

    Returns:
        int: The number of frames elapsed since 00:00:00:00.
    """
    drop_frames = drop_frame_count(rate, drop_frame)
    ifps = rate.nominal

    _check_component("hours", hours, None if allow_over_24h else 24)
    _check_component("minutes", minutes, 60)
    _check_component("seconds", seconds, 60)
    _check_component("frames", frames, ifps)

    if drop_frames and seconds == 0 and minutes % 10 and frames < drop_frames:
        raise InvalidComponentError(
            f"{hours:02d}:{minutes:02d}:{seconds:02d};{frames:02d} does not "
            f"exist in drop-frame timecode at {rate} fps"
        )

    # Total number of minutes
    total_minutes = (60 * hours) + minutes

    frame_number = ((total_minutes * 60) + seconds) * ifps + frames
    return frame_number - drop_frames * (total_minutes - (total_minutes // 10))


def to_structured(
    frame_count: int,
    rate: FrameRate,
    drop_frame: bool = False,
    rollover: bool = False,
) -> tuple[int, int, int, int]:
    """Convert a linear frame index back to timecode fields.

    Args:
        frame_count (int): 0-based frame index.
        rate (FrameRate): The frame rate.
        drop_frame (bool): Use drop-frame counting.
        rollover (bool): If True, the hours wrap around after 24 hours.
            Otherwise the hours count grows without bound.

    Raises:
        NegativeFrameCountError: If ``frame_count`` is negative.

    Returns:
        tuple: A tuple containing the hours, minutes, seconds and frames.
    """
    if frame_count < 0:
        raise NegativeFrameCountError(
            f"frame count should be zero or positive, not {frame_count}"
        )

    drop_frames = drop_frame_count(rate, drop_frame)
    ifps = rate.nominal

    if rollover:
        frame_count %= frames_per_24_hours(rate, drop_frame)

    if not drop_frames:
        total_seconds, frs = divmod(frame_count, ifps)
        total_minutes, secs = divmod(total_seconds, 60)
        hrs, mins = divmod(total_minutes, 60)
        return hrs, mins, secs, frs

    # The first minute of each ten keeps all its labels, the other nine
    # are short by drop_frames.
    frames_per_minute = ifps * 60
    frames_per_dropped_minute = frames_per_minute - drop_frames
    frames_per_10_minutes = frames_per_minute + 9 * frames_per_dropped_minute
    frames_per_hour = 6 * frames_per_10_minutes

    hrs, remainder = divmod(frame_count, frames_per_hour)
    tens, remainder = divmod(remainder, frames_per_10_minutes)

    if remainder < frames_per_minute:
        mins = tens * 10
    else:
        minute, remainder = divmod(
            remainder - frames_per_minute, frames_per_dropped_minute
        )
        mins = tens * 10 + 1 + minute
        remainder += drop_frames

    secs, frs = divmod(remainder, ifps)
    return hrs, mins, secs, frs
