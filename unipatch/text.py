"""String operations shared by str and bytes patch input.

The parser is written once against ``TextOps``.  Literals are always given
as ``str`` and converted to the input type by the implementation, so the
same grammar applies to UTF-8 text and raw bytes.
"""

from __future__ import annotations

from typing import AnyStr, Generic, Iterator, Optional, Tuple, Union


class TextOps(Generic[AnyStr]):
    """Prefix/suffix/split/line operations over one text type."""

    def literal(self, s: str) -> AnyStr:
        raise NotImplementedError

    def as_bytes(self, s: AnyStr) -> bytes:
        raise NotImplementedError

    def from_bytes(self, b: bytes) -> AnyStr:
        raise NotImplementedError

    def starts_with(self, s: AnyStr, literal: str) -> bool:
        return s.startswith(self.literal(literal))

    def strip_prefix(self, s: AnyStr, literal: str) -> Optional[AnyStr]:
        """Return *s* without *literal* at the front, or None if it is absent."""
        prefix = self.literal(literal)
        if not s.startswith(prefix):
            return None
        return s[len(prefix):]

    def strip_suffix(self, s: AnyStr, literal: str) -> Optional[AnyStr]:
        """Return *s* without *literal* at the end, or None if it is absent."""
        suffix = self.literal(literal)
        if not s.endswith(suffix):
            return None
        return s[: len(s) - len(suffix)]

    def split_at_exclusive(
        self, s: AnyStr, delimiter: str
    ) -> Optional[Tuple[AnyStr, AnyStr]]:
        """Split *s* around the first *delimiter*, dropping the delimiter.

        Returns None when *delimiter* does not occur in *s*.
        """
        before, sep, after = s.partition(self.literal(delimiter))
        if not sep:
            return None
        return before, after

    def lines(self, s: AnyStr) -> Iterator[AnyStr]:
        """Yield physical lines of *s*, each keeping its own ``\\n``.

        A final line without a terminator is yielded as is.
        """
        newline = self.literal("\n")
        start = 0
        while start < len(s):
            end = s.find(newline, start)
            if end == -1:
                yield s[start:]
                return
            yield s[start : end + 1]
            start = end + 1

    def parse_uint(self, s: AnyStr) -> Optional[int]:
        """Parse an unsigned decimal integer made only of ASCII digits."""
        raw = self.as_bytes(s)
        if not raw or not raw.isdigit():
            return None
        return int(raw)


class StrText(TextOps[str]):
    def literal(self, s: str) -> str:
        return s

    def as_bytes(self, s: str) -> bytes:
        return s.encode("utf-8")

    def from_bytes(self, b: bytes) -> str:
        return b.decode("utf-8")


class BytesText(TextOps[bytes]):
    def literal(self, s: str) -> bytes:
        return s.encode("utf-8")

    def as_bytes(self, s: bytes) -> bytes:
        return s

    def from_bytes(self, b: bytes) -> bytes:
        return b


STR_TEXT = StrText()
BYTES_TEXT = BytesText()


def text_for(value: Union[str, bytes]) -> TextOps:
    """Return the TextOps implementation matching the type of *value*."""
    if isinstance(value, str):
        return STR_TEXT
    if isinstance(value, (bytes, bytearray)):
        return BYTES_TEXT
    raise TypeError(f"expected str or bytes, got {type(value).__name__}")
