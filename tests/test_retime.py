"""Tests for shifting and piecewise-linear retiming"""

import pytest

from subrip.document import SubtitleDocument, parse_srt
from subrip.errors import TimecodeFormatError
from subrip.retime import TimeMap, build_control_points
from subrip.srt_parser import SubtitleEntry


def make_document():
    return SubtitleDocument(
        [
            SubtitleEntry(1, 1000, 2000, "Hello world"),
            SubtitleEntry(2, 3000, 4000, "Hello again"),
        ]
    )


def times(document):
    return [(e.appear, e.disappear) for e in document]


def test_shift_time_by_milliseconds():
    document = make_document()
    document.shift_time(500)
    assert times(document) == [(1500, 2500), (3500, 4500)]


def test_shift_time_by_timecode():
    document = make_document()
    document.shift_time("00:00:01,000")
    assert times(document) == [(2000, 3000), (4000, 5000)]


def test_shift_time_negative():
    document = make_document()
    document.shift_time(-2000)
    assert times(document) == [(-1000, 0), (1000, 2000)]

    document = make_document()
    document.shift_time("-00:00:00,500")
    assert times(document) == [(500, 1500), (2500, 3500)]


def test_shift_time_is_reversible():
    for offset in [0, 1, 250, -7000, 3600000]:
        document = make_document()
        document.shift_time(offset).shift_time(-offset)
        assert times(document) == times(make_document())


def test_shift_time_invalid_timecode():
    document = make_document()
    with pytest.raises(TimecodeFormatError):
        document.shift_time("later")
    assert times(document) == times(make_document())


def test_shifted_document_serializes_negative_times():
    document = parse_srt("1\n00:00:00,500 --> 00:00:02,000\nEarly\n")
    document.shift_time(-1000)
    assert document.to_srt() == "1\n-00:00:00,500 --> 00:00:01,000\nEarly\n"


def test_build_control_points():
    points = build_control_points({"00:00:06": 12000, 0: "0:00", "3000": "00:04"})
    assert points == [(0, 0), (3000, 4000), (6000, 12000)]


def test_build_control_points_from_pairs_deduplicates():
    points = build_control_points([(1000, 0), (0, 0), (1000, 500)])
    assert points == [(0, 0), (1000, 500)]


def test_map_time_without_points_is_identity():
    document = make_document()
    document.map_time({})
    assert times(document) == times(make_document())


def test_map_time_single_point_is_shift():
    mapped = make_document().map_time({"00:00:10,000": "00:00:12,500"})
    shifted = make_document().shift_time(2500)
    assert times(mapped) == times(shifted)


def test_map_time_two_points_scales():
    document = make_document()
    document.map_time({0: 0, 1000: 2000})
    assert times(document) == [(2000, 4000), (6000, 8000)]


def test_map_time_interpolates_and_extrapolates():
    document = SubtitleDocument(
        [
            SubtitleEntry(1, 5000, 9000, "inside, then beyond the last point"),
            SubtitleEntry(2, -3000, 1500, "before the first point, then inside"),
        ]
    )
    document.map_time({0: 0, 3000: 4000, 6000: 12000})

    first, second = document.entries
    assert first.appear == pytest.approx(9333.33, abs=0.01)
    assert first.disappear == pytest.approx(20000)
    assert second.appear == pytest.approx(-4000)
    assert second.disappear == pytest.approx(2000)


def test_map_time_hits_control_points_exactly():
    time_map = TimeMap(build_control_points({0: 0, 3000: 4000, 6000: 12000}))
    assert time_map(0) == pytest.approx(0)
    assert time_map(3000) == pytest.approx(4000)
    assert time_map(6000) == pytest.approx(12000)


def test_map_time_with_json_style_keys():
    """Digit-only keys are milliseconds, other keys are timecodes"""
    document = make_document()
    document.map_time({"0": "00:00:00,000", "00:00:04": 8000})
    assert times(document) == [(2000, 4000), (6000, 8000)]


def test_map_time_invalid_timecode():
    with pytest.raises(TimecodeFormatError):
        make_document().map_time({"nope": 0})


def test_mapped_document_serializes_truncated_millis():
    document = SubtitleDocument([SubtitleEntry(1, 5000, 6000, "Stretched")])
    document.map_time({0: 0, 3000: 4000, 6000: 12000})
    assert document.to_srt() == "1\n00:00:09,333 --> 00:00:12,000\nStretched\n"


def test_shift_time_rejects_digit_strings():
    document = make_document()
    with pytest.raises(TimecodeFormatError):
        document.shift_time("1500")
    assert times(document) == times(make_document())


def test_map_time_rejects_digit_string_targets():
    with pytest.raises(TimecodeFormatError):
        make_document().map_time({0: "1500"})


def test_map_time_keeps_whole_results_integral():
    document = make_document()
    document.map_time({0: 0, 1000: 2000})
    assert all(type(ms) is int for pair in times(document) for ms in pair)

    document = SubtitleDocument([SubtitleEntry(1, 5000, 6000, "Stretched")])
    document.map_time({0: 0, 3000: 4000, 6000: 12000})
    assert isinstance(document.entries[0].appear, float)
    assert type(document.entries[0].disappear) is int
