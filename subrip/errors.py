"""Exceptions raised while reading SRT text"""

from .walker import Cursor


class SRTParseError(Exception):
    """Raised when SRT parsing fails"""

    pass


class TimecodeFormatError(SRTParseError, ValueError):
    """Raised when a timecode string does not match the timecode grammar"""

    pass


class SRTSyntaxError(SRTParseError):
    """
    Raised when a cue is structurally malformed.

    Keeps a snapshot of the cursor at the failure point so the message can
    show the offending source line with a caret under the column:

        Invalid duration
        00:02:16:612 --> 00:02:19,376
        ^
    """

    def __init__(self, info: str, cursor: Cursor):
        self.info = info
        self.cursor = cursor.clone()
        super().__init__(f"{info}\n{self.format()}")

    def __reduce__(self):
        return (self.__class__, (self.info, self.cursor))

    @property
    def position(self) -> int:
        return self.cursor.position

    def _locate(self):
        """Return (line_index, line, column) for the snapshot position"""
        lines = self.cursor.source.split("\n")
        offset = 0
        for index, line in enumerate(lines):
            # a position on the newline itself belongs to this line
            if offset + len(line) >= self.position:
                return index, line, self.position - offset
            offset += len(line) + 1
        return len(lines) - 1, lines[-1], len(lines[-1])

    @property
    def line_number(self) -> int:
        return self._locate()[0] + 1

    @property
    def column(self) -> int:
        return self._locate()[2]

    def format(self) -> str:
        _, line, column = self._locate()
        return f"{line}\n{' ' * column}^\n"
