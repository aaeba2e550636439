"""Parse unified diff text into a Patch."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import AnyStr, Iterator, List, Optional, Sequence, Tuple, Union

from .errors import ParsePatchError
from .lines import LineCursor
from .model import (
    NO_NEWLINE_AT_EOF,
    Hunk,
    HunkRange,
    Line,
    LineKind,
    Patch,
    hunk_lines_count,
)
from .text import BYTES_TEXT, STR_TEXT, TextOps, text_for

logger = logging.getLogger(__name__)

# Bytes that must be written as a backslash escape inside a quoted filename.
ESCAPED_CHARS = b"\n\t\0\r\"\\"
# Bytes that force a filename to be quoted.
UNQUOTED_FORBIDDEN = ESCAPED_CHARS + b" "

_UNESCAPE = {
    ord("n"): ord("\n"),
    ord("t"): ord("\t"),
    ord("0"): 0,
    ord("r"): ord("\r"),
    ord('"'): ord('"'),
    ord("\\"): ord("\\"),
}


@contextmanager
def _at_line(lineno: int) -> Iterator[None]:
    """Attach *lineno* to any ParsePatchError raised without a position."""
    try:
        yield
    except ParsePatchError as exc:
        if exc.line is None:
            exc.line = lineno
        raise


# ---------------------------------------------------------------------------
# Filenames
# ---------------------------------------------------------------------------


def parse_filename(text: TextOps[AnyStr], prefix: str, line: AnyStr) -> AnyStr:
    """Extract the filename from a ``--- `` or ``+++ `` header line.

    The name ends at the first tab (timestamps and the like follow it) or,
    failing that, at the newline.  A name wrapped in double quotes is
    unescaped; a bare name must not contain any character needing quotes.
    """
    rest = text.strip_prefix(line, prefix)
    if rest is None:
        raise ParsePatchError("unable to parse filename")

    split = text.split_at_exclusive(rest, "\t")
    if split is None:
        split = text.split_at_exclusive(rest, "\n")
    if split is None:
        raise ParsePatchError("filename unterminated")
    filename = split[0]

    quoted = text.strip_prefix(filename, '"')
    if quoted is not None:
        quoted = text.strip_suffix(quoted, '"')
    if quoted is not None:
        return text.from_bytes(unescape_filename(text.as_bytes(quoted)))

    if any(b in UNQUOTED_FORBIDDEN for b in text.as_bytes(filename)):
        raise ParsePatchError("invalid char in unquoted filename")
    return filename


def unescape_filename(escaped: bytes) -> bytes:
    """Decode the body of a quoted filename (without its quotes)."""
    filename = bytearray()
    chars = iter(escaped)
    for c in chars:
        if c == ord("\\"):
            following = next(chars, None)
            if following is None:
                raise ParsePatchError("expected escaped character")
            if following not in _UNESCAPE:
                raise ParsePatchError("invalid escaped character")
            filename.append(_UNESCAPE[following])
        elif c in ESCAPED_CHARS:
            raise ParsePatchError("invalid unescaped character")
        else:
            filename.append(c)
    return bytes(filename)


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------


def skip_preamble(cursor: LineCursor) -> int:
    """Consume lines up to the first ``--- `` line; return how many were skipped."""
    skipped = 0
    while True:
        line = cursor.peek()
        if line is None or cursor.text.starts_with(line, "--- "):
            return skipped
        cursor.next()
        skipped += 1


def parse_header(cursor: LineCursor[AnyStr]) -> Tuple[AnyStr, AnyStr]:
    """Return (old_filename, new_filename), skipping any preamble first."""
    skipped = skip_preamble(cursor)
    if skipped:
        logger.debug("skipped %d preamble line(s)", skipped)
    lineno = cursor.line_number
    with _at_line(lineno):
        old_filename = parse_filename(cursor.text, "--- ", cursor.next())
    with _at_line(lineno + 1):
        new_filename = parse_filename(cursor.text, "+++ ", cursor.next())
    return old_filename, new_filename


# ---------------------------------------------------------------------------
# Hunk header
# ---------------------------------------------------------------------------


def parse_range(text: TextOps[AnyStr], s: AnyStr) -> HunkRange:
    """Parse ``start[,len]``; ``len`` defaults to 1."""
    split = text.split_at_exclusive(s, ",")
    if split is None:
        start, length = text.parse_uint(s), 1
    else:
        start, length = text.parse_uint(split[0]), text.parse_uint(split[1])
    if start is None or length is None:
        raise ParsePatchError("can't parse range")
    return HunkRange(start, length)


def parse_hunk_header(
    text: TextOps[AnyStr], line: AnyStr
) -> Tuple[HunkRange, HunkRange, Optional[AnyStr]]:
    """Parse ``@@ -old +new @@ context`` into two ranges and the context."""
    rest = text.strip_prefix(line, "@@ ")
    if rest is None:
        raise ParsePatchError("unable to parse hunk header")

    split = text.split_at_exclusive(rest, " @@")
    if split is None:
        raise ParsePatchError("hunk header unterminated")
    ranges, context = split

    stripped = text.strip_suffix(context, "\n")
    if stripped is not None:
        context = stripped
    stripped = text.strip_prefix(context, " ")
    if stripped is not None:
        context = stripped
    function_context = context if context else None

    split = text.split_at_exclusive(ranges, " ")
    if split is None:
        raise ParsePatchError("unable to parse hunk header")
    old, new = text.strip_prefix(split[0], "-"), text.strip_prefix(split[1], "+")
    if old is None or new is None:
        raise ParsePatchError("unable to parse hunk header")
    return parse_range(text, old), parse_range(text, new), function_context


# ---------------------------------------------------------------------------
# Hunk body
# ---------------------------------------------------------------------------


def parse_hunk_lines(cursor: LineCursor[AnyStr]) -> List[Line[AnyStr]]:
    """Classify body lines until the next ``@`` line or end of input.

    Each kind carries a flag that is set once a "No newline at end of file"
    marker has been applied to a line of that kind.  After the context flag
    is set nothing else may follow in the hunk; after the delete or insert
    flag is set no further line of that kind may follow.
    """
    text = cursor.text
    lines: List[Line[AnyStr]] = []
    no_newline = {kind: False for kind in LineKind}

    while True:
        line = cursor.peek()
        if line is None or text.starts_with(line, "@"):
            break
        lineno = cursor.line_number

        if no_newline[LineKind.CONTEXT]:
            raise ParsePatchError("expected end of hunk", lineno)

        body = text.strip_prefix(line, " ")
        if body is not None:
            parsed = Line.context(body)
        elif line == text.literal("\n"):
            parsed = Line.context(line)
        elif text.starts_with(line, "-"):
            if no_newline[LineKind.DELETE]:
                raise ParsePatchError("expected no more deleted lines", lineno)
            parsed = Line.delete(line[1:])
        elif text.starts_with(line, "+"):
            if no_newline[LineKind.INSERT]:
                raise ParsePatchError("expected no more inserted lines", lineno)
            parsed = Line.insert(line[1:])
        elif text.starts_with(line, NO_NEWLINE_AT_EOF):
            if not lines:
                raise ParsePatchError(
                    "unexpected 'No newline at end of file' line", lineno
                )
            previous = lines.pop()
            stripped = text.strip_suffix(previous.text, "\n")
            if stripped is None:
                raise ParsePatchError("missing newline", lineno)
            no_newline[previous.kind] = True
            parsed = Line(previous.kind, stripped)
        else:
            raise ParsePatchError("unexpected line in hunk body", lineno)

        lines.append(parsed)
        cursor.next()

    return lines


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------


def parse_hunk(cursor: LineCursor[AnyStr]) -> Hunk[AnyStr]:
    """Parse one hunk header and body, checking the declared line counts."""
    lineno = cursor.line_number
    with _at_line(lineno):
        old_range, new_range, function_context = parse_hunk_header(
            cursor.text, cursor.next()
        )
    lines = parse_hunk_lines(cursor)

    old_count, new_count = hunk_lines_count(lines)
    if old_count != old_range.len or new_count != new_range.len:
        raise ParsePatchError("Hunk header does not match hunk", lineno)

    logger.debug(
        "parsed hunk -%d,%d +%d,%d (%d lines)",
        old_range.start,
        old_range.len,
        new_range.start,
        new_range.len,
        len(lines),
    )
    return Hunk(old_range, new_range, function_context, tuple(lines))


def hunks_in_order(hunks: Sequence[Hunk]) -> bool:
    """True when every hunk ends strictly before the next begins, on both sides."""
    for earlier, later in zip(hunks, hunks[1:]):
        if (
            earlier.old_range.end() >= later.old_range.start
            or earlier.new_range.end() >= later.new_range.start
        ):
            return False
    return True


def parse_hunks(cursor: LineCursor[AnyStr]) -> List[Hunk[AnyStr]]:
    hunks: List[Hunk[AnyStr]] = []
    while cursor.has_more():
        hunks.append(parse_hunk(cursor))

    if not hunks_in_order(hunks):
        raise ParsePatchError("Hunks not in order or overlap")
    return hunks


def _parse(text: TextOps[AnyStr], source: AnyStr) -> Patch[AnyStr]:
    cursor = LineCursor(text, source)
    try:
        old_filename, new_filename = parse_header(cursor)
        hunks = parse_hunks(cursor)
    except ParsePatchError as exc:
        logger.debug("%s", exc)
        raise
    return Patch(old_filename, new_filename, tuple(hunks))


def parse(source: Union[str, bytes]) -> Patch:
    """Parse a single-file unified diff.

    Accepts either ``str`` or ``bytes``; the returned Patch holds values of
    the same type.  Raises ParsePatchError on the first malformed construct.
    """
    if isinstance(source, bytearray):
        source = bytes(source)
    return _parse(text_for(source), source)


def parse_str(source: str) -> Patch[str]:
    if not isinstance(source, str):
        raise TypeError(f"expected str, got {type(source).__name__}")
    return _parse(STR_TEXT, source)


def parse_bytes(source: bytes) -> Patch[bytes]:
    if not isinstance(source, (bytes, bytearray)):
        raise TypeError(f"expected bytes, got {type(source).__name__}")
    return _parse(BYTES_TEXT, bytes(source))
