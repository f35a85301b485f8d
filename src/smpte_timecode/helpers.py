"""Exact real-time values produced by Timecode conversions."""

from __future__ import annotations

from fractions import Fraction
from functools import total_ordering


@total_ordering
class Timestamp:
    """An elapsed duration in seconds, stored as an exact fraction.

    Args:
        ts (Fraction): The number of seconds, can not be negative.
        usec_precision (bool): If True, :meth:`__str__` prints microseconds
            instead of milliseconds.
    """

    __slots__ = ("_exact_ts", "usec_precision")

    def __init__(self, ts: Fraction | int, usec_precision: bool = False) -> None:
        ts = Fraction(ts)
        if ts < 0:
            raise ValueError(f"Timestamp cannot be negative, got {ts}.")
        self.usec_precision = usec_precision
        self._exact_ts = ts

    def __float__(self) -> float:
        return float(self._exact_ts)

    def total_seconds(self) -> float:
        """Return the time in seconds of this Timestamp instance as a float.

        Truncation is possible, it's not an exact representation.

        Returns:
            float: timestamp value in seconds of this instance
        """
        return float(self)

    def exact(self) -> Fraction:
        """Return the time in seconds of this Timestamp instance as a fraction.

        Returns:
            Fraction: exact timestamp value in seconds of this instance.
        """
        return self._exact_ts

    def _coerce(self, other: object) -> Fraction | float | None:
        if isinstance(other, Timestamp):
            return other._exact_ts
        if isinstance(other, (Fraction, int)):
            return Fraction(other)
        if isinstance(other, float):
            return other
        return None

    def __eq__(self, other: object) -> bool:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        if isinstance(value, float):
            return float(self) == value
        return self._exact_ts == value

    def __lt__(self, other: Timestamp | Fraction | float) -> bool:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        if isinstance(value, float):
            return float(self) < value
        return self._exact_ts < value

    def __hash__(self) -> int:
        return hash(self._exact_ts)

    def __str__(self) -> str:
        """Format as 'HH:MM:SS.mmm', or 'HH:MM:SS.uuuuuu' with usec_precision.

        The fractional part is rounded before splitting into fields, so
        0.9996 seconds prints as '00:00:01.000'.
        """
        scale = 1_000_000 if self.usec_precision else 1000
        digits = 6 if self.usec_precision else 3
        ticks = round(self._exact_ts * scale)
        whole_seconds, decimal_part = divmod(ticks, scale)
        hh, remainder = divmod(whole_seconds, 3600)
        mm, ss = divmod(remainder, 60)
        return f"{hh:02d}:{mm:02d}:{ss:02d}.{decimal_part:0{digits}d}"

    def __repr__(self) -> str:
        usec_part = ", usec_precision=True" if self.usec_precision else ""
        return f"{self.__class__.__name__}({self._exact_ts!r}{usec_part})"
