from fractions import Fraction

import pytest

from smpte_timecode import (
    FrameRate,
    IncompatibleRateError,
    InvalidComponentError,
    NegativeFrameCountError,
    Timecode,
    TimecodeBuilder,
    TimecodeFormatError,
    TimecodeUnderflowError,
    Timestamp,
    UnsupportedRateError,
)


def test_instance_creation_defaults():
    tc = Timecode("25")
    assert tc.framerate is FrameRate.FPS_25
    assert tc.drop_frame is False
    assert tc.frames == 0
    assert str(tc) == "00:00:00:00"


@pytest.mark.parametrize(
    "args,kwargs,frames,drop_frame",
    [
        (("29.97", "00:01:00;02"), {}, 1800, True),
        (("29.97", "00:01:00:02"), {}, 1802, False),
        (("29.97df", "00:01:00:02"), {}, 1800, True),
        (("29.97", "00:01:00:02"), {"drop_frame": True}, 1800, True),
        (("29.97", "00;01;00;02"), {}, 1800, True),
        (("29.97", "00:01:00.02"), {}, 1800, True),
        (("29.97", "00.01.00.02"), {}, 1800, True),
        (("29.97 ndf", "00:10:00:00"), {}, 18000, False),
        (("59.94", "00:01:00;04"), {}, 3600, True),
        (("25", "1:2:3:4"), {}, 93079, False),
        (("25", 0x01020304), {}, 93079, False),
        (("25",), {"frames": 90000}, 90000, False),
        ((FrameRate.FPS_29_97,), {"frames": 17982, "drop_frame": True}, 17982, True),
    ],
)
def test_instance_creation(args, kwargs, frames, drop_frame):
    tc = Timecode(*args, **kwargs)
    assert tc.frames == frames
    assert tc.drop_frame is drop_frame


def test_start_timecode_wins_over_frames():
    tc = Timecode("25", "00:00:01:00", frames=3)
    assert tc.frames == 25


def test_creation_from_another_timecode():
    tc = Timecode("29.97", "00:10:00;00")
    copy = Timecode("29.97", tc)
    assert copy == tc
    assert copy is not tc
    assert copy.drop_frame is True


def test_creation_from_another_timecode_at_a_different_rate():
    tc = Timecode("29.97", "00:10:00;00")
    with pytest.raises(IncompatibleRateError):
        Timecode("30", tc)
    with pytest.raises(IncompatibleRateError):
        Timecode("29.97", tc, drop_frame=False)


def test_creation_from_another_timecode_with_drop_frame_at_non_drop_rate():
    tc = Timecode("25", "00:00:10:00")
    with pytest.raises(UnsupportedRateError):
        Timecode(FrameRate.FPS_25, tc, drop_frame=True)


@pytest.mark.parametrize(
    "framerate,timecode",
    [("25", "00:00:00;00"), ("24", "00;00;00;00"), ("23.976", "00:00:00.00")],
)
def test_drop_frame_separator_at_non_drop_rate(framerate, timecode):
    with pytest.raises(UnsupportedRateError):
        Timecode(framerate, timecode)


def test_drop_frame_flag_at_non_drop_rate():
    with pytest.raises(UnsupportedRateError):
        Timecode("25", drop_frame=True)
    with pytest.raises(UnsupportedRateError):
        Timecode.from_frame_count(10, FrameRate.FPS_30, drop_frame=True)


def test_drop_frame_separator_with_drop_frame_false():
    with pytest.raises(TimecodeFormatError):
        Timecode("29.97", "00:00:01;00", drop_frame=False)


@pytest.mark.parametrize(
    "timecode",
    ["", "garbage", "00:00:00", "00:00:00:00:00", "00.00:00.00", "00;00:00;00",
     "00:00;00;00", "-01:00:00:00", "00:000:00:00", 0x0A000000, 3.5, None],
)
def test_parse_errors(timecode):
    with pytest.raises(TimecodeFormatError):
        Timecode.parse_timecode(timecode)


@pytest.mark.parametrize(
    "timecode,expected",
    [
        ("01:02:03:04", (1, 2, 3, 4, False)),
        ("01:02:03;04", (1, 2, 3, 4, True)),
        ("01;02;03;04", (1, 2, 3, 4, True)),
        ("01:02:03.04", (1, 2, 3, 4, True)),
        ("01.02.03.04", (1, 2, 3, 4, True)),
        (" 123:02:03:04 ", (123, 2, 3, 4, False)),
        (0x23595929, (23, 59, 59, 29, None)),
    ],
)
def test_parse_timecode(timecode, expected):
    assert Timecode.parse_timecode(timecode) == expected


def test_from_components():
    tc = Timecode.from_components(0, 1, 0, 2, "29.97", drop_frame=True)
    assert tc.frames == 1800
    assert tc.to_components() == (0, 1, 0, 2)

    tc = Timecode.from_components(1, 0, 0, 0, FrameRate.FPS_25)
    assert tc.frames == 90000
    assert Timecode.from_frame_count(90000, FrameRate.FPS_25).to_components() == (
        1, 0, 0, 0,
    )


def test_from_components_errors():
    with pytest.raises(InvalidComponentError):
        Timecode.from_components(0, 1, 0, 0, "29.97", drop_frame=True)
    with pytest.raises(InvalidComponentError):
        Timecode.from_components(24, 0, 0, 0, "25")
    assert Timecode.from_components(
        24, 0, 0, 0, "25", allow_over_24h=True
    ).frames == 2160000


def test_from_string_errors():
    with pytest.raises(InvalidComponentError):
        Timecode.from_string("00:01:00;01", "29.97")
    with pytest.raises(InvalidComponentError):
        Timecode.from_string("24:00:00:00", "25")
    with pytest.raises(InvalidComponentError):
        Timecode.from_string("00:00:00:25", "25")


def test_from_frame_count_errors():
    with pytest.raises(NegativeFrameCountError):
        Timecode.from_frame_count(-1, "25")
    with pytest.raises(TypeError):
        Timecode.from_frame_count(1.5, "25")
    with pytest.raises(TypeError):
        Timecode.from_frame_count(True, "25")


def test_from_seconds():
    assert Timecode.from_seconds(1, "25").frames == 25
    assert Timecode.from_seconds(Fraction(3003, 50), "29.97df").frames == 1800
    # the frame shown at 1 second at 29.97 is frame 29
    assert Timecode.from_seconds(1, "29.97").frames == 29
    assert Timecode.from_seconds(0.5, "50").frames == 25
    with pytest.raises(NegativeFrameCountError):
        Timecode.from_seconds(-0.1, "25")


def test_from_seconds_round_trip():
    for frames in (0, 1, 1799, 1800, 107892, 2589407):
        tc = Timecode.from_frame_count(frames, "29.97", drop_frame=True)
        assert Timecode.from_seconds(tc.as_real_time(), "29.97df") == tc


def test_immutable():
    tc = Timecode("25", frames=10)
    with pytest.raises(AttributeError):
        tc.frames = 20
    with pytest.raises(AttributeError):
        tc.drop_frame = True
    with pytest.raises(AttributeError):
        tc.some_attribute = 1
    tc.add(5)
    assert tc.frames == 10


def test_fields():
    tc = Timecode("29.97", "10:00:20;10")
    assert (tc.hrs, tc.mins, tc.secs, tc.frs) == (10, 0, 20, 10)


@pytest.mark.parametrize(
    "framerate,components,drop_frame,expected",
    [
        ("50", (10, 12, 6, 0), False, "10:12:06:00"),
        ("29.97", (10, 0, 20, 10), True, "10:00:20;10"),
        ("29.97", (10, 0, 20, 10), False, "10:00:20:10"),
        ("59.94", (0, 1, 0, 4), True, "00:01:00;04"),
        ("23.976", (23, 59, 59, 23), False, "23:59:59:23"),
    ],
)
def test_str(framerate, components, drop_frame, expected):
    tc = Timecode.from_components(*components, framerate, drop_frame=drop_frame)
    assert str(tc) == expected


def test_hours_policies():
    tc = Timecode.from_frame_count(25 * 3600 * 25, "25")
    assert tc.to_components() == (25, 0, 0, 0)
    assert tc.to_components_24h() == (1, 0, 0, 0)
    assert tc.hrs == 1
    assert str(tc) == "01:00:00:00"
    assert tc.to_string(rollover=False) == "25:00:00:00"
    assert tc.rollover() == Timecode("25", "01:00:00:00")

    tc = Timecode.from_frame_count(100 * 107892, "29.97", drop_frame=True)
    assert tc.to_string(rollover=False) == "100:00:00;00"
    assert str(tc) == "04:00:00;00"


def test_repr():
    tc = Timecode("29.97", frames=1800, drop_frame=True)
    assert repr(tc) == "Timecode('30000/1001', frames=1800, drop_frame=True)"
    assert repr(Timecode("25", frames=3)) == (
        "Timecode('25', frames=3, drop_frame=False)"
    )


def test_next_and_back():
    tc = Timecode("29.97", "00:00:59;29")
    assert str(tc.next()) == "00:01:00;02"
    assert str(tc.next().back()) == "00:00:59;29"
    assert str(Timecode("59.94", "00:09:59;59").next()) == "00:10:00;00"
    assert str(Timecode("59.94", "00:10:59;59").next()) == "00:11:00;04"
    with pytest.raises(TimecodeUnderflowError):
        Timecode("25").back()


@pytest.mark.parametrize(
    "framerate,start,frames,expected",
    [
        ("24", "00:00:00:00", 1, "00:00:00:01"),
        ("24", "00:00:00:00", 500, "00:00:20:20"),
        ("29.97", "10:00:00;00", 1000, "10:00:33;10"),
        ("29.97", "10:00:00;00", 1000000, "19:16:06;22"),
        ("24", "00:00:00:10", -1, "00:00:00:09"),
    ],
)
def test_add_frames(framerate, start, frames, expected):
    assert str(Timecode(framerate, start).add(frames)) == expected
    assert str(Timecode(framerate, start) + frames) == expected


@pytest.mark.parametrize(
    "framerate,start,frames,expected",
    [
        ("24", "00:00:00:10", 1, "00:00:00:09"),
        ("24", "00:00:20:20", 500, "00:00:00:00"),
        ("29.97", "00:01:00;02", 1, "00:00:59;29"),
    ],
)
def test_subtract_frames(framerate, start, frames, expected):
    assert str(Timecode(framerate, start).subtract(frames)) == expected
    assert str(Timecode(framerate, start) - frames) == expected


def test_underflow():
    tc = Timecode.from_frame_count(0, "25")
    with pytest.raises(TimecodeUnderflowError):
        tc.subtract(1)
    with pytest.raises(TimecodeUnderflowError):
        tc - 1
    with pytest.raises(TimecodeUnderflowError):
        tc.add(-1)
    with pytest.raises(TimecodeUnderflowError):
        Timecode("25", frames=5).subtract_timecode(Timecode("25", frames=6))


@pytest.mark.parametrize("k", [0, 1, 2, 17, 1799, 1800, 17982, 10 ** 7])
def test_arithmetic_identity(k):
    tc = Timecode("29.97", "00:10:00;00")
    assert tc.add(k).subtract(k) == tc
    if k <= tc.frames:
        assert tc.subtract(k).add(k) == tc


@pytest.mark.parametrize(
    "framerate,first,second,expected",
    [
        ("50", "00:00:00:00", "00:00:00:01", "00:00:00:01"),
        ("24", "00:00:00:10", "00:00:20:10", "00:00:20:20"),
        ("29.97", "10:00:00;00", "00:00:33;10", "10:00:33;10"),
        ("29.97", "10:00:00;00", "09:16:06;22", "19:16:06;22"),
    ],
)
def test_add_timecode(framerate, first, second, expected):
    tc1 = Timecode(framerate, first)
    tc2 = Timecode(framerate, second)
    assert tc1.add_timecode(tc2) == Timecode(framerate, expected)
    assert tc1 + tc2 == Timecode(framerate, expected)
    assert (tc1 + tc2).subtract_timecode(tc2) == tc1
    assert (tc1 + tc2) - tc1 == tc2


@pytest.mark.parametrize(
    "tc1,tc2",
    [
        (Timecode("25", frames=10), Timecode("30", frames=10)),
        (Timecode("29.97", frames=10), Timecode("29.97", frames=10, drop_frame=True)),
        (Timecode("59.94", frames=10, drop_frame=True), Timecode("60", frames=10)),
    ],
)
def test_incompatible_rates(tc1, tc2):
    with pytest.raises(IncompatibleRateError):
        tc1.add_timecode(tc2)
    with pytest.raises(IncompatibleRateError):
        tc1.subtract_timecode(tc2)
    with pytest.raises(IncompatibleRateError):
        tc1 + tc2
    with pytest.raises(IncompatibleRateError):
        tc1.compare(tc2)
    with pytest.raises(IncompatibleRateError):
        tc1 < tc2
    with pytest.raises(IncompatibleRateError):
        tc1 >= tc2
    assert tc1 != tc2
    assert not tc1 == tc2


@pytest.mark.parametrize(
    "framerate,drop_frame,start,frames,expected",
    [
        ("29.97", True, "00:00:10;00", -1000, "23:59:36;20"),
        ("59.94", True, "00:00:10;00", -1000, "23:59:53;20"),
        ("25", False, "23:59:59:24", 1, "00:00:00:00"),
        ("25", False, "00:00:00:00", 2160000 * 3 + 5, "00:00:00:05"),
    ],
)
def test_add_wrapping(framerate, drop_frame, start, frames, expected):
    tc = Timecode(framerate, start, drop_frame=drop_frame).add_wrapping(frames)
    assert str(tc) == expected
    assert tc.to_string(rollover=False) == expected


def test_scale_and_divide():
    tc = Timecode("25", frames=10)
    assert (tc * 3).frames == 30
    assert (3 * tc).frames == 30
    assert tc.scale(0).frames == 0
    assert (tc // 3).frames == 3
    with pytest.raises(ValueError):
        tc.scale(-1)
    with pytest.raises(ValueError):
        tc // 0
    with pytest.raises(TypeError):
        tc * 1.5


def test_unsupported_operand_types():
    tc = Timecode("25", frames=10)
    with pytest.raises(TypeError):
        tc + 1.5
    with pytest.raises(TypeError):
        tc - "00:00:00:01"
    with pytest.raises(TypeError):
        tc.add(1.0)
    with pytest.raises(TypeError):
        tc < 1.5


def test_compare():
    tc1 = Timecode("29.97", "00:01:00;02")
    tc2 = Timecode("29.97", "00:01:00;03")
    assert tc1.compare(tc2) == -1
    assert tc2.compare(tc1) == 1
    assert tc1.compare(Timecode("29.97", frames=1800, drop_frame=True)) == 0
    assert tc1 < tc2
    assert tc1 <= tc2
    assert tc2 > tc1
    assert tc2 >= tc1
    assert sorted([tc2, tc1]) == [tc1, tc2]


def test_compare_with_int_and_str():
    tc = Timecode("29.97", "00:01:00;02")
    assert tc > 1799
    assert tc <= 1800
    assert tc >= 1800
    assert tc > "00:00:59;29"
    assert tc <= "00:01:00:02"
    assert tc >= "00:01:00;02"
    assert Timecode("25", "00:00:01:00") < "00:00:01:01"


@pytest.mark.parametrize(
    "tc,other",
    [
        (Timecode("25", frames=5), 5),
        (Timecode("25", frames=5), "00:00:00:05"),
        (Timecode("29.97", "00:01:00;02"), "00:01:00;02"),
        (Timecode("29.97", "00:00:00:00"), "00:00:00;00"),
        (Timecode("25", "00:00:00:00"), "00:00:00;00"),
        (Timecode("25", "00:00:00:00"), "hello"),
        (Timecode("25", "00:00:00:00"), None),
    ],
)
def test_only_timecodes_are_equal_to_timecodes(tc, other):
    assert not tc == other
    assert tc != other
    assert other not in [tc]
    assert tc not in [other]


def test_monotonicity():
    previous = Timecode.from_frame_count(0, "29.97", drop_frame=True)
    for frames in range(1, 5000):
        tc = Timecode.from_frame_count(frames, "29.97", drop_frame=True)
        assert previous.compare(tc) < 0
        assert previous < tc
        previous = tc


def test_hash():
    tc1 = Timecode("29.97", "00:01:00;02")
    tc2 = Timecode.from_frame_count(1800, FrameRate.FPS_29_97, drop_frame=True)
    tc3 = Timecode.from_frame_count(1800, FrameRate.FPS_29_97)
    assert tc1 == tc2
    assert hash(tc1) == hash(tc2)
    assert len({tc1, tc2, tc3}) == 2
    assert {tc1: "a"}[tc2] == "a"
    assert len({Timecode("25", frames=5), 5}) == 2


def test_as_real_time():
    tc = Timecode("29.97", "00:01:00;02")
    assert tc.as_real_time() == Timestamp(Fraction(3003, 50))
    assert tc.as_real_time().exact() == Fraction(3003, 50)

    tc = Timecode("29.97", "01:00:00;00")
    assert tc.as_real_time().exact() == Fraction(107892 * 1001, 30000)
    assert str(tc.as_real_time()) == "00:59:59.996"
    assert float(tc) == pytest.approx(3599.9964)

    tc = Timecode("25", "01:00:00:00")
    assert tc.as_real_time() == 3600
    assert str(tc.as_real_time(usec_precision=True)) == "01:00:00.000000"


def test_int():
    assert int(Timecode("25", "00:00:01:00")) == 25


def test_builder():
    build = TimecodeBuilder(framerate="29.97", drop_frame=True)
    assert build("00:01:00;02").frames == 1800
    assert build("00:01:00:02").frames == 1800
    assert str(build.from_frame_count(17982)) == "00:10:00;00"
    assert build(frames=5).frames == 5
    assert build.from_components(0, 10, 0, 0).frames == 17982
    assert build("00:01:00:02", drop_frame=False).frames == 1802


def test_builder_presets_are_not_shared():
    build = TimecodeBuilder(framerate="25")
    build("00:00:01:00", drop_frame=False)
    assert build.kwargs == {"framerate": "25"}
