"""Timecode codec: signed milliseconds <-> SRT time strings"""

import re
from typing import Union

from .errors import TimecodeFormatError

Millis = Union[int, float]

MS_PER_DAY = 86_400_000
MS_PER_HOUR = 3_600_000
MS_PER_MINUTE = 60_000
MS_PER_SECOND = 1000

# Accepted spellings: 01:46:13,612  01:46:13.612  -00:00:01,000  01:02:01  01:01
# and dd:hh:mm:ss,mmm. Only the rightmost four colon fields are used.
TIMECODE = re.compile(r"(?P<sign>[+-]?)(?P<fields>\d+(?::\d+)+)(?:[,.](?P<millis>\d+))?")

# Inside a cue a timecode has no day field
CUE_TIMECODE = re.compile(r"[+-]?\d+(?::\d+){1,2}(?:[,.]\d+)?")

DIGITS = re.compile(r"\d+")


def format_timecode(ms: Millis) -> str:
    """
    Format milliseconds as a canonical SRT timecode.

    Example: 5025678 -> 01:23:45,678, -1000 -> -00:00:01,000

    Hours are padded to two digits but are not capped at 99. Fractional
    milliseconds (from interpolated retiming) are truncated.
    """
    sign = "-" if ms < 0 else ""
    total = int(abs(ms))

    hours = total // MS_PER_HOUR
    minutes = (total % MS_PER_HOUR) // MS_PER_MINUTE
    seconds = (total % MS_PER_MINUTE) // MS_PER_SECOND
    millis = total % MS_PER_SECOND

    return f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d},{millis:03d}"


def parse_timecode(text: str) -> int:
    """
    Parse an SRT timecode to milliseconds.

    Fields are read right to left as seconds, minutes, hours and days, so
    "00:01" is one second and "01:00:00:00" is one day. The fraction after
    "," or "." is taken as a literal millisecond count: ",5" is 5 ms.

    Raises:
        TimecodeFormatError: If the text is not a timecode
    """
    match = TIMECODE.fullmatch(text.strip())
    if not match:
        raise TimecodeFormatError(f"Invalid timecode: '{text}'")

    fields = [int(field) for field in match.group("fields").split(":")][-4:]
    fields = [0] * (4 - len(fields)) + fields
    days, hours, minutes, seconds = fields

    total = (
        days * MS_PER_DAY
        + hours * MS_PER_HOUR
        + minutes * MS_PER_MINUTE
        + seconds * MS_PER_SECOND
        + int(match.group("millis") or 0)
    )
    return -total if match.group("sign") == "-" else total


def to_millis(value: Union[Millis, str]) -> Millis:
    """
    Coerce a retiming argument to milliseconds.

    Numbers pass through and strings must be timecodes.

    Raises:
        TimecodeFormatError: If a string is not a timecode
    """
    if isinstance(value, bool):
        raise TypeError(f"Expected milliseconds or a timecode, got {value!r}")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        return parse_timecode(value)
    raise TypeError(f"Expected milliseconds or a timecode, got {type(value).__name__}")


def key_to_millis(value: Union[Millis, str]) -> Millis:
    """
    Like to_millis, but a string of plain digits is read as milliseconds.

    Used for mapping keys and query parameters, which always arrive as
    strings from JSON and URLs.
    """
    if isinstance(value, str) and DIGITS.fullmatch(value.strip()):
        return int(value)
    return to_millis(value)
