"""SubRip document model: parse, serialize, query and retime"""

import logging
from typing import Iterator, List, Optional

from .retime import TimeMap, build_control_points
from .srt_parser import SubtitleEntry, parse_entry
from .timecode import to_millis
from .walker import Cursor

logger = logging.getLogger(__name__)


class SubtitleDocument:
    """
    An ordered collection of subtitle entries.

    Entries are kept in insertion order, which is also the serialization
    order. Ids are not used for ordering except to break ties when several
    entries are visible at the same time.
    """

    def __init__(self, entries: Optional[List[SubtitleEntry]] = None):
        self.entries: List[SubtitleEntry] = list(entries) if entries else []

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[SubtitleEntry]:
        return iter(self.entries)

    def __str__(self) -> str:
        return self.to_srt()

    def add(self, entry: SubtitleEntry) -> None:
        self.entries.append(entry)

    def remove(self, entry: SubtitleEntry) -> None:
        self.entries.remove(entry)

    def get_entries_at(self, time_ms) -> List[SubtitleEntry]:
        """Entries visible at time_ms (inclusive on both ends), sorted by id"""
        visible = [e for e in self.entries if e.appear <= time_ms <= e.disappear]
        return sorted(visible, key=lambda e: e.id)

    def shift_time(self, offset) -> "SubtitleDocument":
        """
        Shift every entry by offset.

        The offset is milliseconds or a timecode such as "-00:00:01,500".

        Raises:
            TimecodeFormatError: If offset is not a valid timecode
        """
        offset_ms = to_millis(offset)
        logger.debug(f"Shifting {len(self.entries)} entries by {offset_ms}ms")
        for entry in self.entries:
            entry.appear += offset_ms
            entry.disappear += offset_ms
        return self

    def map_time(self, mapping) -> "SubtitleDocument":
        """
        Retime every entry through a piecewise-linear function.

        mapping pairs source times with target times, either as a dict or as
        an iterable of pairs, e.g. {"00:00:00": 0, "00:10:00": "00:10:04,200"}
        to stretch a track that drifts by 4.2s over ten minutes.

        Raises:
            TimecodeFormatError: If a time is not a valid timecode
        """
        time_map = TimeMap(build_control_points(mapping))
        logger.debug(
            f"Mapping {len(self.entries)} entries through {len(time_map.points)} control points"
        )
        for entry in self.entries:
            entry.appear = time_map(entry.appear)
            entry.disappear = time_map(entry.disappear)
        return self

    def to_srt(self) -> str:
        return "\n".join(entry.to_srt() for entry in self.entries)

    @classmethod
    def from_text(cls, content: str) -> "SubtitleDocument":
        return parse_srt(content)

    @staticmethod
    def reformat(content: str) -> str:
        """Parse SRT text and write it back in canonical form"""
        return parse_srt(content).to_srt()


def parse_srt(content: str) -> SubtitleDocument:
    """
    Parse SRT content into a SubtitleDocument.

    SRT format:
    1
    00:00:01,000 --> 00:00:03,000
    First subtitle line
    Can be multiple lines

    2
    00:00:04,000 --> 00:00:06,000
    Second subtitle

    Empty content gives an empty document.

    Raises:
        SRTSyntaxError: On the first malformed entry; nothing is returned
    """
    document = SubtitleDocument()
    cursor = Cursor(content)

    cursor.skip_whitespace()
    while cursor.has_remaining():
        document.add(parse_entry(cursor))
        cursor.match_literal("\n")
        cursor.skip_whitespace()

    logger.debug(f"Parsed {len(document)} subtitle entries")
    return document


def serialize_srt(document: SubtitleDocument) -> str:
    return document.to_srt()
