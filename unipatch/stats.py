"""Summary counts for parsed patches."""

from dataclasses import dataclass
from typing import List, Optional, Union

from .model import LineKind, Patch


def _display(name: Optional[Union[str, bytes]]) -> str:
    if name is None:
        return "?"
    if isinstance(name, bytes):
        return name.decode("utf-8", errors="backslashreplace")
    return name


@dataclass
class PatchStats:
    """Holds line and hunk counts for one patch (or several, via merge)."""

    old_filename: Optional[Union[str, bytes]] = None
    new_filename: Optional[Union[str, bytes]] = None

    hunks: int = 0

    # Line counts by kind
    context: int = 0
    deleted: int = 0
    inserted: int = 0

    # Lines whose text lacks a trailing newline
    no_newline: int = 0

    @classmethod
    def from_patch(cls, patch: Patch) -> "PatchStats":
        stats = cls(old_filename=patch.old_filename, new_filename=patch.new_filename)
        stats.hunks = len(patch.hunks)
        for hunk in patch.hunks:
            for line in hunk.lines:
                if line.kind is LineKind.CONTEXT:
                    stats.context += 1
                elif line.kind is LineKind.DELETE:
                    stats.deleted += 1
                else:
                    stats.inserted += 1
                if not line.has_newline:
                    stats.no_newline += 1
        return stats

    def merge(self, other: "PatchStats") -> None:
        """Add all counters from *other* into self (filenames are not merged)."""
        self.hunks += other.hunks
        self.context += other.context
        self.deleted += other.deleted
        self.inserted += other.inserted
        self.no_newline += other.no_newline

    @property
    def total_lines(self) -> int:
        return self.context + self.deleted + self.inserted

    def format_summary(self) -> List[str]:
        """Return a list of lines forming the human-readable summary."""
        lines = ["--- unipatch summary ---"]
        lines.append(f"old file: {_display(self.old_filename)}")
        lines.append(f"new file: {_display(self.new_filename)}")
        lines.append(f"hunks:              {self.hunks}")
        lines.append("lines:")
        lines.append(f"  context:          {self.context}")
        lines.append(f"  deleted:          {self.deleted}")
        lines.append(f"  inserted:         {self.inserted}")
        lines.append(f"  total:            {self.total_lines}")
        lines.append(f"no newline at EOF: {self.no_newline}")
        return lines
