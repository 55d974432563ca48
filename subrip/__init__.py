"""SubRip (SRT) subtitles

Parse, query, retime and serialize SRT documents.
"""

__version__ = "0.1.0"
__author__ = "subrip Contributors"

# Export main components
from . import config
from .config import MIME_TYPE
from .document import SubtitleDocument, parse_srt, serialize_srt
from .errors import SRTParseError, SRTSyntaxError, TimecodeFormatError
from .files import load_srt, reformat_file, save_srt
from .srt_parser import SubtitleEntry, parse_entry, parse_entry_text
from .timecode import format_timecode, parse_timecode
from .walker import Cursor

__all__ = [
    "SubtitleDocument",
    "SubtitleEntry",
    "parse_srt",
    "serialize_srt",
    "parse_entry",
    "parse_entry_text",
    "parse_timecode",
    "format_timecode",
    "load_srt",
    "save_srt",
    "reformat_file",
    "Cursor",
    "SRTParseError",
    "SRTSyntaxError",
    "TimecodeFormatError",
    "MIME_TYPE",
    "config",
    "__version__",
]
