"""Data model for a parsed unified diff."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Iterable, Optional, Tuple, TypeVar

T = TypeVar("T", str, bytes)

NO_NEWLINE_AT_EOF = "\\ No newline at end of file"


class LineKind(Enum):
    """Which side(s) of the diff a hunk line belongs to."""

    CONTEXT = " "
    DELETE = "-"
    INSERT = "+"


@dataclass(frozen=True)
class Line(Generic[T]):
    """One hunk body line: a kind tag plus the line text.

    ``text`` keeps its trailing newline unless the line was followed by a
    "No newline at end of file" marker.
    """

    kind: LineKind
    text: T

    @classmethod
    def context(cls, text: T) -> "Line[T]":
        return cls(LineKind.CONTEXT, text)

    @classmethod
    def delete(cls, text: T) -> "Line[T]":
        return cls(LineKind.DELETE, text)

    @classmethod
    def insert(cls, text: T) -> "Line[T]":
        return cls(LineKind.INSERT, text)

    @property
    def has_newline(self) -> bool:
        return self.text.endswith("\n" if isinstance(self.text, str) else b"\n")


@dataclass(frozen=True)
class HunkRange:
    """A (start, len) span of lines in the old or new file.

    ``start`` is 1-based; 0 marks an empty range before the first line.
    """

    start: int
    len: int

    def end(self) -> int:
        """Exclusive end line."""
        return self.start + self.len


@dataclass(frozen=True)
class Hunk(Generic[T]):
    old_range: HunkRange
    new_range: HunkRange
    function_context: Optional[T]
    lines: Tuple[Line[T], ...]


@dataclass(frozen=True)
class Patch(Generic[T]):
    """A single-file patch: both filenames and the ordered hunks."""

    old_filename: T
    new_filename: T
    hunks: Tuple[Hunk[T], ...]


def hunk_lines_count(lines: Iterable[Line]) -> Tuple[int, int]:
    """Return (old_count, new_count) for a sequence of hunk lines.

    Context lines count toward both sides, deletions only toward the old
    side, insertions only toward the new side.
    """
    old_count = 0
    new_count = 0
    for line in lines:
        if line.kind is LineKind.CONTEXT:
            old_count += 1
            new_count += 1
        elif line.kind is LineKind.DELETE:
            old_count += 1
        else:
            new_count += 1
    return old_count, new_count
