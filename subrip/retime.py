"""Piecewise-linear time remapping"""

import bisect
from typing import Iterable, List, Mapping, Tuple, Union

from .timecode import Millis, key_to_millis, to_millis

TimeValue = Union[Millis, str]
ControlPoints = List[Tuple[Millis, Millis]]


def build_control_points(
    mapping: Union[Mapping[TimeValue, TimeValue], Iterable[Tuple[TimeValue, TimeValue]]],
) -> ControlPoints:
    """
    Normalize a mapping of source -> target times into sorted control points.

    Either side may be milliseconds or timecode text, and source keys may
    also be strings of digits in milliseconds. Points sharing a source
    time collapse to the last one given.

    Raises:
        TimecodeFormatError: If a string is not a timecode
    """
    pairs = mapping.items() if isinstance(mapping, Mapping) else mapping
    points = {}
    for source, target in pairs:
        points[key_to_millis(source)] = to_millis(target)
    return sorted(points.items())


class TimeMap:
    """
    Piecewise-linear function defined by sorted control points.

    No points is the identity and one point is a constant offset. With two or
    more, times between points are interpolated on their segment, and times
    outside the span follow the slope of the nearest end segment.
    """

    def __init__(self, points: ControlPoints):
        self.points = points
        self.sources = [source for source, _ in points]

    def __call__(self, ms: Millis) -> Millis:
        if not self.points:
            return ms
        if len(self.points) == 1:
            source, target = self.points[0]
            return target + (ms - source)

        # clamp to the first/last segment for extrapolation
        upper = min(max(bisect.bisect_right(self.sources, ms), 1), len(self.points) - 1)
        (x0, y0), (x1, y1) = self.points[upper - 1], self.points[upper]
        mapped = y0 + (y1 - y0) * (ms - x0) / (x1 - x0)
        return int(mapped) if mapped.is_integer() else mapped
