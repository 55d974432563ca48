"""SRT cue grammar"""

import logging
import re
from dataclasses import dataclass

from .errors import SRTSyntaxError
from .timecode import CUE_TIMECODE, Millis, format_timecode, parse_timecode
from .walker import Cursor, PatternMatcher, SequenceMatcher

logger = logging.getLogger(__name__)

ENTRY_ID = re.compile(r"\d+")
LINE_BREAK = re.compile(r"[^\S\n]*\n[^\S\n]*")
DURATION_END = re.compile(r"[^\S\n]*\n")
ARROW = re.compile(r"[^\S\n]+-+>[^\S\n]+")
# a \r is only a line ending when followed by \n
TEXT_LINE = re.compile(r"[^\n]*\S[^\n]*?(?=\r?\n|\Z)")
LINE_END = re.compile(r"(?:\r?\n)?")

# 00:02:19,482 --> 00:02:21,609, also tolerating 00:02:19,482   ---->  00:02:21,609
DURATION = SequenceMatcher(
    (PatternMatcher(CUE_TIMECODE), PatternMatcher(ARROW), PatternMatcher(CUE_TIMECODE))
)


@dataclass
class SubtitleEntry:
    """
    A single subtitle cue.

    When several entries are visible at the same time they are ordered by id.
    Times are signed milliseconds and are not required to be ordered.
    """

    id: int = 0
    appear: Millis = 0
    disappear: Millis = 0
    text: str = ""

    def to_srt(self) -> str:
        """
        Render the entry as an SRT block, e.g.

        1
        00:03:20,476 --> 00:03:22,671
        There was no danger at all.
        """
        return (
            f"{self.id}\n"
            f"{format_timecode(self.appear)} --> {format_timecode(self.disappear)}\n"
            f"{self.text}\n"
        )


def parse_entry(cursor: Cursor) -> SubtitleEntry:
    """
    Parse one cue at the cursor and advance past it.

    The blank line after the cue body is left for the caller.

    Raises:
        SRTSyntaxError: If the id or the duration line is malformed
    """
    cursor.skip_whitespace()

    entry_id = cursor.match_pattern(ENTRY_ID)
    if entry_id is None:
        raise SRTSyntaxError("Invalid id", cursor)

    cursor.match_pattern(LINE_BREAK)

    duration = cursor.match(DURATION)
    if duration is None:
        raise SRTSyntaxError("Invalid duration", cursor)
    appear, _, disappear = duration

    cursor.match_pattern(DURATION_END)

    lines = []
    while True:
        line = cursor.match_pattern(TEXT_LINE)
        if line is None:
            break
        lines.append(line)
        cursor.match_pattern(LINE_END)

    entry = SubtitleEntry(
        id=int(entry_id),
        appear=parse_timecode(appear),
        disappear=parse_timecode(disappear),
        text="\n".join(lines),
    )
    logger.debug(f"Parsed entry {entry.id} ({appear} --> {disappear}, {len(lines)} lines)")
    return entry


def parse_entry_text(content: str) -> SubtitleEntry:
    """Parse a string holding a single cue"""
    return parse_entry(Cursor(content))
