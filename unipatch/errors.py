"""Unipatch-specific exceptions."""

from typing import Optional


class ParsePatchError(Exception):
    """Raised when patch text does not follow the unified diff grammar.

    ``message`` names the violated expectation.  ``line`` is the 1-based
    input line where parsing stopped, or None when the failure is not tied
    to a single line (e.g. hunks out of order).
    """

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        text = f"error parsing patch: {self.message}"
        if self.line is not None:
            text += f" (line {self.line})"
        return text
