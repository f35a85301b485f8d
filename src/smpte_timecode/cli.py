"""
Command line front-end for timecode conversions.

Usage:
    smpte-timecode to-frames 00:01:00;02 --rate 29.97
    smpte-timecode to-timecode 1800 --rate 29.97 --drop-frame
    smpte-timecode add 01:00:00:00 00:00:10:00 --rate 25
    smpte-timecode realtime 01:00:00;00 --rate 29.97

The rate may also be given through the SMPTE_TIMECODE_RATE environment
variable, and SMPTE_TIMECODE_LOG_LEVEL sets the log level.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from .errors import TimecodeError
from .timecode import Timecode, TimecodeBuilder

logger = logging.getLogger(__name__)

RATE_ENV = "SMPTE_TIMECODE_RATE"
LOG_LEVEL_ENV = "SMPTE_TIMECODE_LOG_LEVEL"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging from the --verbose flag or the environment."""
    if verbose:
        log_level = logging.DEBUG
    else:
        env_level = os.environ.get(LOG_LEVEL_ENV, "WARNING")
        log_level = getattr(logging, env_level.upper(), logging.WARNING)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser of the smpte-timecode command.

    Every sub-command shares the --rate, --drop-frame, --non-drop-frame and
    --verbose options.

    Returns:
        argparse.ArgumentParser: The configured parser.
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--rate",
        default=os.environ.get(RATE_ENV),
        help=(
            "frame rate: 23.976, 24, 25, 29.97, 30, 50, 59.94 or 60, "
            f"optionally suffixed with df/ndf (default: ${RATE_ENV})"
        ),
    )
    mode = common.add_mutually_exclusive_group()
    mode.add_argument(
        "--drop-frame",
        dest="drop_frame",
        action="store_const",
        const=True,
        default=None,
        help="use drop-frame counting",
    )
    mode.add_argument(
        "--non-drop-frame",
        dest="drop_frame",
        action="store_const",
        const=False,
        help="use non drop-frame counting",
    )
    common.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging"
    )

    parser = argparse.ArgumentParser(
        prog="smpte-timecode",
        description="Convert and calculate SMPTE timecodes.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    to_frames = commands.add_parser(
        "to-frames", parents=[common], help="print the frame index of a timecode"
    )
    to_frames.add_argument("timecode")

    to_timecode = commands.add_parser(
        "to-timecode", parents=[common], help="print the timecode of a frame index"
    )
    to_timecode.add_argument("frames", type=int)
    to_timecode.add_argument(
        "--no-rollover",
        action="store_true",
        help="let the hours grow past 23 instead of wrapping around",
    )

    for name, help_text in (
        ("add", "add frames or a timecode duration to a timecode"),
        ("subtract", "subtract frames or a timecode duration from a timecode"),
    ):
        arithmetic = commands.add_parser(name, parents=[common], help=help_text)
        arithmetic.add_argument("timecode")
        arithmetic.add_argument(
            "operand", help="a number of frames or a timecode at the same rate"
        )

    realtime = commands.add_parser(
        "realtime", parents=[common], help="print the elapsed real time"
    )
    realtime.add_argument("timecode")
    realtime.add_argument(
        "--usec", action="store_true", help="print microseconds"
    )
    return parser


def _operand(builder: TimecodeBuilder, tc: Timecode, operand: str) -> int | Timecode:
    if operand.isdigit():
        return int(operand)
    return builder(operand, drop_frame=tc.drop_frame)


def run(args: argparse.Namespace) -> str:
    """Execute the parsed command and return the text to print."""
    if not args.rate:
        raise TimecodeError(f"a frame rate is required, use --rate or ${RATE_ENV}")

    builder = TimecodeBuilder(framerate=args.rate, drop_frame=args.drop_frame)

    if args.command == "to-timecode":
        tc = builder.from_frame_count(args.frames)
        logger.debug("Built %r", tc)
        return tc.to_string(rollover=not args.no_rollover)

    tc = builder(args.timecode)
    logger.debug("Parsed %r as %r", args.timecode, tc)

    if args.command == "to-frames":
        return str(tc.frames)
    if args.command == "realtime":
        timestamp = tc.as_real_time(usec_precision=args.usec)
        return f"{timestamp} ({timestamp.exact()} s)"

    operand = _operand(builder, tc, args.operand)
    logger.debug("%s %r", args.command, operand)
    if args.command == "add":
        return str(tc + operand)
    return str(tc - operand)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the smpte-timecode command.

    Args:
        argv (Sequence[str] | None): The command line arguments, sys.argv is
            used when None.

    Returns:
        int: The exit status, 0 on success and 1 on a timecode error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        print(run(args))
    except TimecodeError as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
