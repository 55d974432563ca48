"""Reading and writing .srt files"""

import logging
from pathlib import Path
from typing import Optional, Union

from . import config
from .document import SubtitleDocument, parse_srt

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_srt(path: PathLike, encoding: Optional[str] = None) -> SubtitleDocument:
    """
    Read and parse an .srt file.

    A UTF-8 byte order mark is dropped when reading with the default encoding.

    Raises:
        FileNotFoundError: If the file does not exist
        SRTSyntaxError: If the file is malformed
    """
    path = Path(path)
    encoding = encoding or config.DEFAULT_ENCODING
    if encoding.lower().replace("_", "-") == "utf-8":
        encoding = "utf-8-sig"

    document = parse_srt(path.read_text(encoding=encoding))
    logger.info(f"Loaded {path.name}: {len(document)} subtitle entries")
    return document


def save_srt(document: SubtitleDocument, path: PathLike, encoding: Optional[str] = None) -> None:
    path = Path(path)
    path.write_text(document.to_srt(), encoding=encoding or config.DEFAULT_ENCODING)
    logger.info(f"Saved {len(document)} subtitle entries to {path.name}")


def reformat_file(path: PathLike, encoding: Optional[str] = None) -> None:
    """Rewrite an .srt file in canonical form"""
    save_srt(load_srt(path, encoding), path, encoding)
