"""Source locations attached to terms and type errors."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    """A single point in a source file."""

    line: int
    column: int
    file: str | None = None

    def __str__(self) -> str:
        if self.file:
            return f"{self.file}:{self.line}:{self.column}"
        return f"line {self.line}, column {self.column}"


@dataclass(frozen=True)
class Span:
    """Source span from start to end location.

    Spans on one line render as ``line:col-col``; spans crossing lines
    render both end points.
    """

    start: Location
    end: Location

    @staticmethod
    def at(line: int, column: int, length: int = 1, file: str | None = None) -> "Span":
        """Build a single-line span starting at ``line:column``."""
        return Span(Location(line, column, file), Location(line, column + length, file))

    def merge(self, other: "Span") -> "Span":
        """Smallest span covering both ``self`` and ``other``."""
        start = min(self.start, other.start, key=lambda loc: (loc.line, loc.column))
        end = max(self.end, other.end, key=lambda loc: (loc.line, loc.column))
        return Span(start, end)

    def __str__(self) -> str:
        prefix = f"{self.start.file}:" if self.start.file else ""
        if self.start.line == self.end.line:
            return f"{prefix}{self.start.line}:{self.start.column}-{self.end.column}"
        return f"{prefix}{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
