"""Peekable cursor over the physical lines of a patch."""

from __future__ import annotations

from typing import AnyStr, Generic, Iterator, Optional

from .errors import ParsePatchError
from .text import TextOps

_END = object()


class LineCursor(Generic[AnyStr]):
    """Lookahead iterator used by every parsing step.

    ``peek()`` inspects the next line without consuming it; ``next()``
    consumes it and raises ParsePatchError when the input is exhausted.
    """

    def __init__(self, text: TextOps[AnyStr], source: AnyStr) -> None:
        self.text = text
        self._lines: Iterator[AnyStr] = text.lines(source)
        self._peeked: object = _END
        self._has_peeked = False
        # 1-based number of the line peek() returns
        self.line_number = 1

    def peek(self) -> Optional[AnyStr]:
        if not self._has_peeked:
            self._peeked = next(self._lines, _END)
            self._has_peeked = True
        if self._peeked is _END:
            return None
        return self._peeked  # type: ignore[return-value]

    def has_more(self) -> bool:
        return self.peek() is not None

    def next(self) -> AnyStr:
        line = self.peek()
        if line is None:
            raise ParsePatchError("unexpected EOF", self.line_number)
        self._has_peeked = False
        self.line_number += 1
        return line
