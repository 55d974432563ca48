"""Backtracking text cursor used to build the SRT grammar"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

WHITESPACE = re.compile(r"\s*")


@dataclass(frozen=True)
class LiteralMatcher:
    """Matches an exact piece of text"""

    text: str


@dataclass(frozen=True)
class PatternMatcher:
    """Matches a compiled regex anchored at the cursor position"""

    regex: re.Pattern


@dataclass(frozen=True)
class SequenceMatcher:
    """Matches each sub-matcher in order, or nothing at all"""

    matchers: Tuple["Matcher", ...]


Matcher = Union[LiteralMatcher, PatternMatcher, SequenceMatcher]
MatchResult = Union[str, List["MatchResult"]]


class Cursor:
    """
    A position over a source string.

    Only the matching operations move the position, and they only move it
    forward on success. A failed match leaves the cursor where it was, which
    is what lets callers report errors at the start of the failed construct.
    """

    def __init__(self, source: str, position: int = 0):
        if not 0 <= position <= len(source):
            raise ValueError(f"Position {position} outside source of length {len(source)}")
        self.source = source
        self.position = position

    def __repr__(self) -> str:
        return f"Cursor(position={self.position}, length={len(self.source)})"

    def has_remaining(self) -> bool:
        return self.position < len(self.source)

    def remaining(self) -> str:
        return self.source[self.position :]

    def clone(self) -> "Cursor":
        return Cursor(self.source, self.position)

    def clone_remaining(self) -> "Cursor":
        """Fresh cursor over the unconsumed suffix, positioned at 0"""
        return Cursor(self.remaining())

    def peek(self, length: int) -> str:
        return self.source[self.position : self.position + length]

    def advance(self, length: int) -> None:
        if length < 0 or length > len(self.source) - self.position:
            raise ValueError(
                f"Cannot advance by {length} at position {self.position} "
                f"(remaining: {len(self.source) - self.position})"
            )
        self.position += length

    def match_literal(self, text: str) -> Optional[str]:
        if self.peek(len(text)) != text:
            return None
        self.advance(len(text))
        return text

    def match_pattern(self, regex: re.Pattern) -> Optional[str]:
        found = regex.match(self.source, self.position)
        if found is None:
            return None
        self.advance(found.end() - self.position)
        return found.group(0)

    def match_sequence(self, matchers: Iterable[Matcher]) -> Optional[List[MatchResult]]:
        """
        Match every matcher in order on a trial cursor.

        The real cursor only advances if all of them succeed.
        """
        trial = self.clone()
        results = []
        for matcher in matchers:
            result = trial.match(matcher)
            if result is None:
                return None
            results.append(result)
        self.advance(trial.position - self.position)
        return results

    def match(self, matcher: Matcher) -> Optional[MatchResult]:
        match matcher:
            case LiteralMatcher(text=text):
                return self.match_literal(text)
            case PatternMatcher(regex=regex):
                return self.match_pattern(regex)
            case SequenceMatcher(matchers=matchers):
                return self.match_sequence(matchers)
        raise TypeError(f"Unsupported matcher: {matcher!r}")

    def skip_whitespace(self) -> None:
        """Skip whitespace, newlines included"""
        self.match_pattern(WHITESPACE)
