from __future__ import annotations

import re

"""Line and field level CSV primitives.

Only the comma-delimited, double-quote-escaped dialect is supported. Lines are
split before fields are parsed, so a quoted field containing an embedded
newline is NOT supported: it ends up split across two records.
"""

__all__ = [
    "TRUTHY_VALUES",
    "parse_boolean",
    "parse_csv_line",
    "split_lines",
    "trim",
]

_LINE_BREAK = re.compile(r"\r?\n")

TRUTHY_VALUES = frozenset({"true", "yes", "1", "x", "completed", "complete"})

_BOM = "\ufeff"


def trim(value: str) -> str:
    """Strip surrounding whitespace, including a byte-order mark."""
    return value.strip().strip(_BOM).strip()


def split_lines(text: str) -> list[str]:
    """Split on CRLF / LF and drop empty or whitespace-only lines."""
    return [line for line in _LINE_BREAK.split(text) if trim(line)]


def parse_csv_line(line: str) -> list[str]:
    """Parse one CSV line into its ordered, trimmed fields.

    A ``"`` toggles the in-quotes state; ``""`` while inside quotes is an
    escaped literal quote. A comma outside quotes ends the current field.
    The last field is always emitted, so an empty line yields ``[""]``.

    >>> parse_csv_line('a, "Smith, ""Bob"" Jones" ,c')
    ['a', 'Smith, "Bob" Jones', 'c']
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(line)
    while i < n:
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < n and line[i + 1] == '"':
                current.append('"')
                i += 1  # skip the escaping quote
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append(trim("".join(current)))
            current = []
        else:
            current.append(char)
        i += 1
    fields.append(trim("".join(current)))
    return fields


def parse_boolean(value: str) -> bool:
    """Case-insensitive truthy check; anything unrecognised (incl. blank) is False."""
    return trim(value).lower() in TRUTHY_VALUES
