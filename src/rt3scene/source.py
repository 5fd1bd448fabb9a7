"""
Source positions for scene diagnostics.

The markup reader reports the line an element starts on; columns are not
tracked by the reader, so element locations always point at column 1.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class SourceLocation:
    """Represents a position in a scene document."""
    line: int           # 1-indexed line number, 0 when unknown
    column: int = 1     # 1-indexed column number
    filename: Optional[str] = None

    def __str__(self) -> str:
        if self.filename:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class SourceSpan:
    """Represents a range in a scene document."""
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        if self.start.filename:
            return f"{self.start.filename}:{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
        return f"{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"


UNKNOWN_SPAN = SourceSpan(SourceLocation(0), SourceLocation(0))


def element_span(element, filename: Optional[str] = None) -> SourceSpan:
    """Build a span covering the opening line of a markup element."""
    line = getattr(element, "sourceline", None) or 0
    loc = SourceLocation(line, 1, filename)
    return SourceSpan(loc, loc)


def line_at(source_lines: Optional[List[str]], line: int) -> Optional[str]:
    """Return the 1-indexed source line, or None if unavailable."""
    if not source_lines or line < 1 or line > len(source_lines):
        return None
    return source_lines[line - 1]
