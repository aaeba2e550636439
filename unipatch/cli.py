"""CLI entry point: reads a diff on stdin, prints its hunks and a summary."""

import logging
import sys
from typing import List, Union

from .config import UnipatchConfig, load_config
from .errors import ParsePatchError
from .model import Patch
from .parser import parse_bytes, parse_str
from .stats import PatchStats


def _as_text(value: Union[str, bytes]) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="backslashreplace")
    return value


def format_hunks(patch: Patch, config: UnipatchConfig) -> List[str]:
    """Return one ``@@ -a,b +c,d @@`` line per hunk."""
    lines = []
    for hunk in patch.hunks:
        old, new = hunk.old_range, hunk.new_range
        line = f"@@ -{old.start},{old.len} +{new.start},{new.len} @@"
        if config.show_function_context and hunk.function_context is not None:
            line += f" {_as_text(hunk.function_context)}"
        lines.append(line)
    return lines


def main() -> None:
    config = load_config()
    logging.basicConfig(level=config.log_level.upper())

    if config.binary:
        diff_data: Union[str, bytes] = sys.stdin.buffer.read()
    else:
        diff_data = sys.stdin.read()
    if not diff_data.strip():
        print("unipatch: no diff provided on stdin", file=sys.stderr)
        sys.exit(1)

    try:
        if isinstance(diff_data, bytes):
            patch = parse_bytes(diff_data)
        else:
            patch = parse_str(diff_data)
    except ParsePatchError as exc:
        print(f"unipatch: {exc}", file=sys.stderr)
        sys.exit(1)

    if config.show_hunks:
        for line in format_hunks(patch, config):
            print(line)
    for line in PatchStats.from_patch(patch).format_summary():
        print(line)
