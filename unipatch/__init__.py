"""Parse unified diffs into Patch / Hunk / Line objects."""

from .errors import ParsePatchError
from .model import Hunk, HunkRange, Line, LineKind, Patch, hunk_lines_count
from .parser import parse, parse_bytes, parse_str
from .stats import PatchStats

__all__ = [
    "Hunk",
    "HunkRange",
    "Line",
    "LineKind",
    "ParsePatchError",
    "Patch",
    "PatchStats",
    "hunk_lines_count",
    "parse",
    "parse_bytes",
    "parse_str",
]
