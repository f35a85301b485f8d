"""The broadcast frame rates a Timecode can count at."""

from __future__ import annotations

import re
from enum import Enum
from fractions import Fraction

from .errors import UnsupportedRateError

_RATE_PATTERN = re.compile(
    r"^(?P<rate>[0-9]+(?:\.[0-9]+)?(?:/[0-9]+)?)\s*(?:fps)?\s*"
    r"(?P<mode>df|ndf|drop[-_ ]?frame|non[-_ ]?drop[-_ ]?frame)?$"
)


class FrameRate(Enum):
    """Closed set of supported frame rates.

    Each member's value is the exact rate as a ``(numerator, denominator)``
    pair, so NTSC rates never go through binary floating point.
    """

    FPS_23_976 = (24000, 1001)
    FPS_24 = (24, 1)
    FPS_25 = (25, 1)
    FPS_29_97 = (30000, 1001)
    FPS_30 = (30, 1)
    FPS_50 = (50, 1)
    FPS_59_94 = (60000, 1001)
    FPS_60 = (60, 1)

    @property
    def fps(self) -> Fraction:
        """Return the exact frames per second of this rate.

        Returns:
            Fraction: The rate as a fraction of two integers.
        """
        return Fraction(*self.value)

    @property
    def nominal(self) -> int:
        """Return the integer base used for the frames digits.

        29.97 counts frames 0-29 like 30, 23.976 counts like 24, and so on.

        Returns:
            int: The rounded frame rate.
        """
        return round(self.fps)

    @property
    def is_ntsc(self) -> bool:
        """Return True for the x1000/1001 rates."""
        return self.value[1] == 1001

    @property
    def drop_frame_capable(self) -> bool:
        """Return True if drop-frame counting is defined at this rate.

        Only the NTSC multiples of 30 (29.97 and 59.94) drop frames.
        """
        return self.is_ntsc and self.nominal % 30 == 0

    @property
    def drop_frames(self) -> int:
        """Return the number of frame labels skipped per dropped minute.

        Returns:
            int: 2 at 29.97, 4 at 59.94 and 0 for rates that do not drop.
        """
        if not self.drop_frame_capable:
            return 0
        return self.nominal // 15

    @property
    def label(self) -> str:
        """Return the conventional name of this rate, e.g. '29.97'."""
        return f"{float(self.fps):.3f}".rstrip("0").rstrip(".")

    def supports_drop_frame(self) -> bool:
        """Return True if a drop-frame Timecode can be built at this rate."""
        return self.drop_frame_capable

    def __str__(self) -> str:
        return self.label

    @classmethod
    def lookup(
        cls, identifier: FrameRate | Fraction | str | int | float | tuple[int, int]
    ) -> FrameRate:
        """Return the FrameRate matching the given identifier.

        Args:
            identifier (FrameRate | Fraction | str | int | float | tuple): See
                :func:`parse_rate` for the accepted forms.

        Raises:
            UnsupportedRateError: If the identifier does not name one of the
                supported rates.

        Returns:
            FrameRate: The matching member.
        """
        return parse_rate(identifier)[0]


def _check_ntsc_rate(fps: Fraction) -> tuple[bool, int]:
    """Check if framerate is NTSC (multiple of 24000/1001 or 30000/1001).

    Args:
        fps (Fraction): The framerate to check.

    Returns:
        tuple: (is_ntsc, int_framerate) where is_ntsc is True if this is an
            NTSC rate, and int_framerate is the rounded integer framerate.
    """
    int_fps = round(fps * 1001 / 1000)
    expected_ntsc = Fraction(int_fps * 1000, 1001)
    return abs(fps - expected_ntsc) < Fraction(5, 1000), int_fps


def _to_fraction(identifier: object) -> Fraction:
    if isinstance(identifier, bool):
        raise UnsupportedRateError(f"Invalid framerate {identifier!r}.")
    try:
        if isinstance(identifier, (tuple, list)):
            return Fraction(*map(int, identifier))
        if isinstance(identifier, (int, float, Fraction, str)):
            return Fraction(identifier)
    except (ValueError, TypeError, ZeroDivisionError, OverflowError) as exc:
        raise UnsupportedRateError(f"Invalid framerate {identifier!r}.") from exc
    raise UnsupportedRateError(
        f"Type {identifier.__class__.__name__} is not a framerate."
    )


def parse_rate(
    identifier: FrameRate | Fraction | str | int | float | tuple[int, int],
) -> tuple[FrameRate, bool | None]:
    """Resolve a rate identifier and the drop-frame mode it may carry.

    Accepted identifiers are a :class:`FrameRate` member, a string such as
    '23.976', '23.98', '25', '29.97', '30000/1001', optionally followed by a
    mode suffix ('29.97 drop-frame', '29.97df', '59.94 ndf'), or an int,
    float, Fraction or (numerator, denominator) tuple. Ambiguous spellings of
    NTSC rates like 23.98 or 29.97 resolve to the exact x1000/1001 rate.

    Args:
        identifier: The rate to look up.

    Raises:
        UnsupportedRateError: If the rate is not one of the broadcast rates,
            or a drop-frame suffix is given for a rate that can not drop.

    Returns:
        tuple: (framerate, drop_frame) where drop_frame is None when the
            identifier does not say.
    """
    if isinstance(identifier, FrameRate):
        return identifier, None

    drop_frame = None
    if isinstance(identifier, str):
        match = _RATE_PATTERN.match(identifier.strip().lower())
        if match is None:
            raise UnsupportedRateError(f"Invalid framerate {identifier!r}.")
        mode = match.group("mode")
        if mode is not None:
            drop_frame = not mode.startswith("n")
        fps = _to_fraction(match.group("rate"))
    else:
        fps = _to_fraction(identifier)

    if fps <= 0:
        raise UnsupportedRateError("Invalid framerate (zero or negative).")

    is_ntsc, int_fps = _check_ntsc_rate(fps)
    # Fix ambiguous values like 23976/1000 or 23.98.
    if is_ntsc:
        fps = Fraction(int_fps * 1000, 1001)

    for framerate in FrameRate:
        if framerate.fps == fps:
            break
    else:
        raise UnsupportedRateError(f"Unsupported framerate {identifier!r}.")

    if drop_frame and not framerate.supports_drop_frame():
        raise UnsupportedRateError(
            f"Drop-frame timecode is not defined at {framerate} fps."
        )
    return framerate, drop_frame
