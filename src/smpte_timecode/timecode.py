"""Timecode class for handling timecode calculations."""

# Standard Library Imports
from __future__ import annotations

import re
import sys
from fractions import Fraction

from .converter import (
    drop_frame_count,
    frames_per_24_hours,
    to_frame_count,
    to_structured,
)
from .errors import (
    IncompatibleRateError,
    NegativeFrameCountError,
    TimecodeFormatError,
    TimecodeUnderflowError,
)
from .framerate import FrameRate, parse_rate
from .helpers import Timestamp

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

_TIMECODE_PATTERN = re.compile(
    r"^(?P<hrs>\d+)(?P<sep1>[:;.])(?P<mins>\d{1,2})(?P<sep2>[:;.])"
    r"(?P<secs>\d{1,2})(?P<sep3>[:;.])(?P<frs>\d{1,2})$"
)

# (first two separators, frame separator) -> drop_frame
_SEPARATORS = {
    ("::", ":"): False,
    ("::", ";"): True,
    (";;", ";"): True,
    ("::", "."): True,
    ("..", "."): True,
}


#%%
class Timecode:
    """The main timecode class.

    Does all the calculation over frames, so the main data it holds is the
    0-based frame index, then when required it converts the frames to a
    timecode by using the frame rate setting. Timecode instances are
    immutable, every arithmetic operation returns a new instance with the same
    frame rate and drop-frame flag.

    Args:
        framerate (FrameRate | Fraction | str | int | float | tuple): The frame
            rate of the Timecode instance. If a str is given it should be one
            of ['23.976', '23.98', '24', '25', '29.97', '30', '50', '59.94',
            '60', 'NUMERATOR/DENOMINATOR'], optionally followed by 'df' or
            'ndf'. Can not be skipped.
        start_timecode (None | str | int | Timecode): The start timecode. A
            str like '01:00:00:00' or '01:00:00;00', a packed BCD integer like
            0x01000000, or another Timecode at the same rate. If skipped, the
            ``frames`` argument defines the timecode, and if it is also
            skipped '00:00:00:00' is used.
        frames (int): The 0-based frame index of the Timecode.
        drop_frame (None | bool): Use drop-frame counting. If None, the flag
            is taken from the framerate suffix, then from the ';' separator of
            ``start_timecode``, and is False otherwise.
    """

    __slots__ = ("_framerate", "_drop_frame", "_frames")

    def __init__(
        self,
        framerate: FrameRate | Fraction | str | int | float | tuple[int, int],
        start_timecode: str | int | Timecode | None = None,
        frames: int | None = None,
        drop_frame: bool | None = None,
    ) -> None:
        self._framerate, rate_drop_frame = parse_rate(framerate)
        if drop_frame is None:
            drop_frame = rate_drop_frame

        self._dispatch_set_frames(
            start_timecode=start_timecode, frames=frames, drop_frame=drop_frame
        )

    ####

    def _dispatch_set_frames(self, **kwargs) -> None:
        """Helper to dispatch the arguments to set the Timecode frame count.

        Args:
            kwargs (dict): dictionary of possible input values to set the frame
            count. The following order of priority applies:
                1. start_timecode: Timecode string, BCD int or Timecode object.
                2. frames: frames count of the Timecode.
        """
        drop_frame = kwargs.get("drop_frame")
        start_timecode = kwargs.get("start_timecode")

        if isinstance(start_timecode, Timecode):
            if drop_frame is None:
                self._drop_frame = start_timecode.drop_frame
            else:
                self._set_drop_frame(drop_frame)
            self._check_compatible(start_timecode)
            frames = start_timecode.frames
        elif start_timecode is not None:
            hrs, mins, secs, frs, tc_drop_frame = self.parse_timecode(
                start_timecode
            )
            if drop_frame is None:
                drop_frame = tc_drop_frame
            elif tc_drop_frame and not drop_frame:
                raise TimecodeFormatError(
                    f"{start_timecode!r} is a drop-frame timecode, but "
                    "drop_frame=False was given"
                )
            self._set_drop_frame(drop_frame)
            frames = to_frame_count(
                hrs, mins, secs, frs, self._framerate, self._drop_frame
            )
        else:
            self._set_drop_frame(drop_frame)
            frames = kwargs.get("frames")
            if frames is None:
                frames = 0

        self._set_frames(frames)

    def _set_drop_frame(self, drop_frame: bool | None) -> None:
        drop_frame = bool(drop_frame)
        # raises UnsupportedRateError for rates that do not drop
        drop_frame_count(self._framerate, drop_frame)
        self._drop_frame = drop_frame

    def _set_frames(self, frames: int) -> None:
        """Validate and store the frame index.

        Args:
            frames (int): A positive int or zero showing the number of frames
                elapsed since 00:00:00:00.
        """
        if isinstance(frames, bool) or not isinstance(frames, int):
            raise TypeError(
                f"{self.__class__.__name__}.frames should be a positive integer "
                f"or zero, not a {frames.__class__.__name__}"
            )

        if frames < 0:
            raise NegativeFrameCountError(
                f"{self.__class__.__name__}.frames should be a positive "
                f"integer or zero, not {frames}"
            )
        self._frames = frames

    def _new(self, frames: int) -> Self:
        return self.__class__(
            self._framerate, frames=frames, drop_frame=self._drop_frame
        )

    def _check_compatible(self, other: Timecode) -> None:
        if (
            self._framerate is not other.framerate
            or self._drop_frame != other.drop_frame
        ):
            raise IncompatibleRateError(
                f"Can not combine a {self._describe_rate()} Timecode with a "
                f"{other._describe_rate()} Timecode"
            )

    def _describe_rate(self) -> str:
        mode = "DF" if self._drop_frame else "NDF"
        return f"{self._framerate} fps {mode}"

    # Alternate constructors

    @classmethod
    def from_components(
        cls,
        hours: int,
        minutes: int,
        seconds: int,
        frames: int,
        framerate: FrameRate | Fraction | str | int | float | tuple[int, int],
        drop_frame: bool | None = None,
        allow_over_24h: bool = False,
    ) -> Self:
        """Create a Timecode from its hours, minutes, seconds and frames.

        Args:
            hours (int): The hours field.
            minutes (int): The minutes field.
            seconds (int): The seconds field.
            frames (int): The frames field.
            framerate: The frame rate, see :class:`Timecode`.
            drop_frame (None | bool): Use drop-frame counting.
            allow_over_24h (bool): Accept hours past 23.

        Raises:
            InvalidComponentError: If a field is out of range.

        Returns:
            Timecode: The new Timecode instance.
        """
        tc = cls(framerate, drop_frame=drop_frame)
        tc._set_frames(
            to_frame_count(
                hours,
                minutes,
                seconds,
                frames,
                tc.framerate,
                tc.drop_frame,
                allow_over_24h=allow_over_24h,
            )
        )
        return tc

    @classmethod
    def from_frame_count(
        cls,
        frames: int,
        framerate: FrameRate | Fraction | str | int | float | tuple[int, int],
        drop_frame: bool | None = None,
    ) -> Self:
        """Create a Timecode from a 0-based frame index.

        Raises:
            NegativeFrameCountError: If ``frames`` is negative.
        """
        return cls(framerate, frames=frames, drop_frame=drop_frame)

    @classmethod
    def from_string(
        cls,
        timecode: str,
        framerate: FrameRate | Fraction | str | int | float | tuple[int, int],
        drop_frame: bool | None = None,
    ) -> Self:
        """Create a Timecode by parsing a timecode string."""
        return cls(framerate, start_timecode=timecode, drop_frame=drop_frame)

    @classmethod
    def from_seconds(
        cls,
        seconds: float | Fraction | Timestamp,
        framerate: FrameRate | Fraction | str | int | float | tuple[int, int],
        drop_frame: bool | None = None,
    ) -> Self:
        """Create a Timecode from an elapsed real time.

        The frame shown at the given instant is used, so the seconds are
        multiplied by the exact frame rate and rounded down.

        Args:
            seconds (float | Fraction | Timestamp): Elapsed seconds since
                frame zero.
            framerate: The frame rate, see :class:`Timecode`.
            drop_frame (None | bool): Use drop-frame counting.

        Raises:
            NegativeFrameCountError: If ``seconds`` is negative.

        Returns:
            Timecode: The new Timecode instance.
        """
        if isinstance(seconds, Timestamp):
            seconds = seconds.exact()
        seconds = Fraction(seconds)
        if seconds < 0:
            raise NegativeFrameCountError(
                f"seconds should be a positive number or zero, not {seconds}"
            )
        tc = cls(framerate, drop_frame=drop_frame)
        tc._set_frames(int(seconds * tc.framerate.fps))
        return tc

    @classmethod
    def parse_timecode(
        cls, timecode: int | str
    ) -> tuple[int, int, int, int, bool | None]:
        """Parse the given timecode string.

        This uses the frame separator to decide if this is a NDF or DF
        Timecode. '00:00:00:00' will result in a NDF Timecode where
        '00:00:00;00', '00;00;00;00', '00:00:00.00' and '00.00.00.00' will
        result in a DF Timecode.

        Args:
            timecode (int | str): If an integer is given it is read as packed
                BCD, 0x01020304 being 01:02:03:04. If a str is given it should
                follow one of the SMPTE timecode formats.

        Raises:
            TimecodeFormatError: If the value is not a timecode.

        Returns:
            (int, int, int, int, bool | None): A tuple containing the hours,
                minutes, seconds and frames part of the Timecode and whether
                the separators denote drop-frame (None for BCD integers).
        """
        if isinstance(timecode, int) and not isinstance(timecode, bool):
            if not 0 <= timecode <= 0xFFFFFFFF:
                raise TimecodeFormatError(f"{timecode:#x} is not a BCD timecode")
            hex_repr = f"{timecode:08x}"
            try:
                hrs, mins, secs, frs = (
                    int(hex_repr[i : i + 2]) for i in range(0, 8, 2)
                )
            except ValueError as exc:
                raise TimecodeFormatError(
                    f"{timecode:#x} is not a BCD timecode"
                ) from exc
            return hrs, mins, secs, frs, None

        if not isinstance(timecode, str):
            raise TimecodeFormatError(
                f"Type {timecode.__class__.__name__} is not a timecode."
            )

        match = _TIMECODE_PATTERN.match(timecode.strip())
        if match is None:
            raise TimecodeFormatError(f"{timecode!r} is not a timecode")

        separators = (match["sep1"] + match["sep2"], match["sep3"])
        if separators not in _SEPARATORS:
            raise TimecodeFormatError(
                f"{timecode!r} mixes timecode separators"
            )

        return (
            int(match["hrs"]),
            int(match["mins"]),
            int(match["secs"]),
            int(match["frs"]),
            _SEPARATORS[separators],
        )

    # Attributes

    @property
    def framerate(self) -> FrameRate:
        """Return the frame rate of this Timecode."""
        return self._framerate

    @property
    def drop_frame(self) -> bool:
        """Return True if this Timecode uses drop-frame counting."""
        return self._drop_frame

    @property
    def frames(self) -> int:
        """Return the 0-based frame index of this Timecode.

        Returns:
            int: The number of frames elapsed since 00:00:00:00.
        """
        return self._frames

    @property
    def frame_delimiter(self) -> str:
        """Return correct frame delimiter symbol based on the drop-frame flag.

        Returns:
            str: ";" if this is a drop frame timecode, ":" otherwise.
        """
        return ";" if self._drop_frame else ":"

    @property
    def hrs(self) -> int:
        """Return the hours part of the timecode, rolled over at 24 hours."""
        hrs, _, _, _ = self.to_components_24h()
        return hrs

    @property
    def mins(self) -> int:
        """Return the minutes part of the timecode."""
        _, mins, _, _ = self.to_components()
        return mins

    @property
    def secs(self) -> int:
        """Return the seconds part of the timecode."""
        _, _, secs, _ = self.to_components()
        return secs

    @property
    def frs(self) -> int:
        """Return the frames part of the timecode."""
        _, _, _, frs = self.to_components()
        return frs

    # Conversions

    def to_components(self) -> tuple[int, int, int, int]:
        """Return the hours, minutes, seconds and frames of this Timecode.

        The hours are not rolled over, a Timecode 25 hours in gives 25.
        """
        return to_structured(self._frames, self._framerate, self._drop_frame)

    def to_components_24h(self) -> tuple[int, int, int, int]:
        """Return the hours, minutes, seconds and frames, rolled over at 24 hours."""
        return to_structured(
            self._frames, self._framerate, self._drop_frame, rollover=True
        )

    def rollover(self) -> Self:
        """Return the Timecode showing the same label within one 24 hour day.

        Returns:
            Timecode: A new Timecode with a frame index below one day.
        """
        return self._new(
            self._frames % frames_per_24_hours(self._framerate, self._drop_frame)
        )

    def as_real_time(self, usec_precision: bool = False) -> Timestamp:
        """Return the wall-clock time elapsed at this frame.

        The frame index is divided by the exact frame rate, so for 29.97 fps
        one hour of drop-frame timecode is 3599.9964 seconds.

        Args:
            usec_precision (bool): Print microseconds instead of milliseconds
                when the Timestamp is converted to str.

        Returns:
            Timestamp: The elapsed seconds as an exact fraction.
        """
        return Timestamp(
            Fraction(self._frames) / self._framerate.fps,
            usec_precision=usec_precision,
        )

    def to_string(self, rollover: bool = True) -> str:
        """Return the timecode as 'HH:MM:SS:FF', or 'HH:MM:SS;FF' for drop-frame.

        Args:
            rollover (bool): If True, the hours wrap around after 24 hours.
                Otherwise the hours field may be longer than two digits.
        """
        if rollover:
            return self.tc_to_string(*self.to_components_24h())
        return self.tc_to_string(*self.to_components())

    def tc_to_string(self, hrs: int, mins: int, secs: int, frs: int) -> str:
        """Return the string representation of a Timecode with given info.

        Args:
            hrs (int): The hours portion of the Timecode.
            mins (int): The minutes portion of the Timecode.
            secs (int): The seconds portion of the Timecode.
            frs (int): The frames portion of the Timecode.

        Returns:
            str: The string representation of this Timecode.
        """
        return f"{hrs:02d}:{mins:02d}:{secs:02d}{self.frame_delimiter}{frs:02d}"

    # Arithmetic

    def add(self, frames: int) -> Self:
        """Return a new Timecode the given number of frames later.

        Args:
            frames (int): The number of frames to add, may be negative.

        Raises:
            TimecodeUnderflowError: If the result would be before frame zero.

        Returns:
            Timecode: The resultant Timecode instance.
        """
        if isinstance(frames, bool) or not isinstance(frames, int):
            raise TypeError(
                f"Type {frames.__class__.__name__} not supported for arithmetic."
            )
        result = self._frames + frames
        if result < 0:
            raise TimecodeUnderflowError(
                f"{self} {'-' if frames < 0 else '+'} {abs(frames)} frames "
                "is before 00:00:00:00"
            )
        return self._new(result)

    def subtract(self, frames: int) -> Self:
        """Return a new Timecode the given number of frames earlier.

        Raises:
            TimecodeUnderflowError: If the result would be before frame zero.
        """
        if isinstance(frames, bool) or not isinstance(frames, int):
            raise TypeError(
                f"Type {frames.__class__.__name__} not supported for arithmetic."
            )
        return self.add(-frames)

    def add_timecode(self, other: Timecode) -> Self:
        """Return the sum of two Timecodes at the same rate.

        Raises:
            IncompatibleRateError: If the rates or drop-frame flags differ.
        """
        self._check_compatible(other)
        return self.add(other.frames)

    def subtract_timecode(self, other: Timecode) -> Self:
        """Return the difference of two Timecodes at the same rate.

        Raises:
            IncompatibleRateError: If the rates or drop-frame flags differ.
            TimecodeUnderflowError: If ``other`` is later than this Timecode.
        """
        self._check_compatible(other)
        return self.subtract(other.frames)

    def add_wrapping(self, frames: int) -> Self:
        """Add frames, wrapping around at 24 hours in both directions.

        Args:
            frames (int): The number of frames to add, may be negative.

        Returns:
            Timecode: The resultant Timecode, always within one day.
        """
        if isinstance(frames, bool) or not isinstance(frames, int):
            raise TypeError(
                f"Type {frames.__class__.__name__} not supported for arithmetic."
            )
        day = frames_per_24_hours(self._framerate, self._drop_frame)
        return self._new((self._frames + frames) % day)

    def next(self) -> Self:
        """Return the Timecode of the next frame."""
        return self.add(1)

    def back(self) -> Self:
        """Return the Timecode of the previous frame.

        Raises:
            TimecodeUnderflowError: If this is frame zero.
        """
        return self.subtract(1)

    def scale(self, factor: int) -> Self:
        """Multiply the frame index with the given number.

        Args:
            factor (int): A positive integer or zero.

        Returns:
            Timecode: The resultant Timecode instance.
        """
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(
                f"Type {factor.__class__.__name__} not supported for arithmetic."
            )
        if factor < 0:
            raise ValueError(f"Can not scale a Timecode by {factor}")
        return self._new(self._frames * factor)

    def compare(self, other: Timecode) -> int:
        """Order two Timecodes at the same rate.

        Args:
            other (Timecode): The Timecode to compare with.

        Raises:
            IncompatibleRateError: If the rates or drop-frame flags differ.

        Returns:
            int: -1, 0 or 1 if this Timecode is before, at or after ``other``.
        """
        self._check_compatible(other)
        return (self._frames > other.frames) - (self._frames < other.frames)

    def _coerce(self, other: object) -> Timecode | None:
        if isinstance(other, Timecode):
            return other
        if isinstance(other, str):
            return self.__class__(
                self._framerate, other, drop_frame=self._drop_frame
            )
        return None

    def __eq__(self, other: object) -> bool:
        """Override the equality operator.

        Only Timecodes compare equal to Timecodes, so equal values hash
        equal. Timecodes at different rates are never equal. Use the ordering
        operators or :attr:`frames` to compare with an int or a str.
        """
        if not isinstance(other, Timecode):
            return NotImplemented
        return (
            self._framerate is other.framerate
            and self._drop_frame == other.drop_frame
            and self._frames == other.frames
        )

    def __hash__(self) -> int:
        return hash((self._framerate, self._drop_frame, self._frames))

    def _order(self, other: object) -> int | None:
        if isinstance(other, int) and not isinstance(other, bool):
            return (self._frames > other) - (self._frames < other)
        tc = self._coerce(other)
        if tc is None:
            return None
        return self.compare(tc)

    def __lt__(self, other: int | str | Timecode) -> bool:
        order = self._order(other)
        return NotImplemented if order is None else order < 0

    def __le__(self, other: int | str | Timecode) -> bool:
        order = self._order(other)
        return NotImplemented if order is None else order <= 0

    def __gt__(self, other: int | str | Timecode) -> bool:
        order = self._order(other)
        return NotImplemented if order is None else order > 0

    def __ge__(self, other: int | str | Timecode) -> bool:
        order = self._order(other)
        return NotImplemented if order is None else order >= 0

    def __add__(self, other: int | Timecode) -> Self:
        """Return a new Timecode with the given timecode or frames added to this one.

        Args:
            other (int | Timecode): Either an int value or a Timecode in which
                the frames are used for the calculation.

        Returns:
            Timecode: The resultant Timecode instance.
        """
        if isinstance(other, Timecode):
            return self.add_timecode(other)
        if isinstance(other, int) and not isinstance(other, bool):
            return self.add(other)
        return NotImplemented

    def __radd__(self, other: int) -> Self:
        if isinstance(other, int) and not isinstance(other, bool):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other: int | Timecode) -> Self:
        """Return a new Timecode instance with subtracted value.

        Args:
            other (int | Timecode): The number to subtract, either an integer or
                another Timecode in which the number of frames is subtracted.

        Returns:
            Timecode: The resultant Timecode instance.
        """
        if isinstance(other, Timecode):
            return self.subtract_timecode(other)
        if isinstance(other, int) and not isinstance(other, bool):
            return self.subtract(other)
        return NotImplemented

    def __mul__(self, other: int) -> Self:
        if isinstance(other, int) and not isinstance(other, bool):
            return self.scale(other)
        return NotImplemented

    __rmul__ = __mul__

    def __floordiv__(self, other: int) -> Self:
        """Return a new Timecode with the frame index divided by ``other``."""
        if isinstance(other, bool) or not isinstance(other, int):
            return NotImplemented
        if other <= 0:
            raise ValueError(f"Can not divide a Timecode by {other}")
        return self._new(self._frames // other)

    def __int__(self) -> int:
        return self._frames

    def __float__(self) -> float:
        """Convert this Timecode instance to a float representation (seconds).

        Returns:
            float: The elapsed real time in seconds.
        """
        return float(self.as_real_time())

    def __str__(self) -> str:
        """Return the actual Timecode as a string.

        Returns:
            str: The string of this Timecode, rolled over at 24 hours.
        """
        return self.to_string()

    def __repr__(self) -> str:
        """Return the string representation of this Timecode instance.

        Returns:
            str: The string representation of this Timecode instance.
        """
        # use frames= as that is agnostic to the 24 hour rollover
        return (
            f"{self.__class__.__name__}('{self._framerate.fps}', "
            f"frames={self._frames}, drop_frame={self._drop_frame})"
        )
####

#%%
class TimecodeBuilder:
    """Helper class to pre-configure instantiation of Timecodes.

    The frame rate and drop-frame flag given to the builder are used when the
    builder instance is called to create new Timecodes, so a project can set
    them up once.

    Args:
        kwargs (dict): list of pre-configured arguments for the Timecodes
        instantiated by calling this builder. Refer to Timecode docu.
    """

    def __init__(self, **kwargs) -> None:
        self.kwargs = kwargs

    def __call__(self, start_timecode: str | int | Timecode | None = None,
                 **kwargs) -> Timecode:
        """Create a Timecode combining the preconfigured and user arguments.

        Returns:
            Timecode: timecode instance given the arguments.
        """
        kwargs = self.kwargs | kwargs
        return Timecode(start_timecode=start_timecode, **kwargs)

    def from_frame_count(self, frames: int) -> Timecode:
        """Create a Timecode from a frame index with the preconfigured settings."""
        return self(frames=frames)

    def from_components(self, hours: int, minutes: int, seconds: int,
                        frames: int, **kwargs) -> Timecode:
        """Create a Timecode from fields with the preconfigured settings."""
        kwargs = self.kwargs | kwargs
        return Timecode.from_components(hours, minutes, seconds, frames, **kwargs)
####
