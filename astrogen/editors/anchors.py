"""Anchor location for text splicing.

Anchors are positional, not semantic: they rely on recognisable fences (an
``import`` line prefix, the ``window.addEventListener("load"`` call, the
brace that closes that call's block, a ``key:`` prefix followed by a bracket)
rather than on a syntax tree.  Bracket counting skips string literals and
``//`` / ``/* */`` comments.  Every function here is read-only and returns
``None`` (or ``-1`` for line indexes) when its anchor is absent.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

from .scanner import ACTIVATION_PATTERN


# ---------------------------------------------------------------------------
# Fences
# ---------------------------------------------------------------------------

IMPORT_LINE_PATTERN = re.compile(r"^import\s+")
IMPORT_SOURCE_PATTERN = re.compile(r"""(\bfrom\s*|^import\s*)["'][^"']*["']""")
LOAD_MARKER = 'window.addEventListener("load"'

_OPEN_TO_CLOSE = {"[": "]", "{": "}", "(": ")"}
_QUOTES = ('"', "'", "`")


# ---------------------------------------------------------------------------
# Code scanning
# ---------------------------------------------------------------------------

def _skip_string(text: str, index: int) -> int:
    """Index just past the string literal opening at *index*.

    Single- and double-quoted literals cannot span lines, so an unterminated
    one stops at the end of its line.
    """
    quote = text[index]
    index += 1
    while index < len(text):
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char == quote:
            return index + 1
        if char == "\n" and quote != "`":
            return index
        index += 1
    return len(text)


def code_positions(text: str, start: int = 0) -> Iterator[tuple[int, str]]:
    """Yield ``(index, char)`` for characters outside strings and comments."""
    index = start
    length = len(text)
    while index < length:
        char = text[index]
        if char in _QUOTES:
            index = _skip_string(text, index)
            continue
        if text.startswith("//", index):
            newline = text.find("\n", index)
            index = length if newline == -1 else newline
            continue
        if text.startswith("/*", index):
            close = text.find("*/", index + 2)
            index = length if close == -1 else close + 2
            continue
        yield index, char
        index += 1


def brace_delta(line: str) -> int:
    """Net count of ``{`` over ``}`` in the code part of *line*."""
    delta = 0
    for _, char in code_positions(line):
        if char == "{":
            delta += 1
        elif char == "}":
            delta -= 1
    return delta


# ---------------------------------------------------------------------------
# Line anchors
# ---------------------------------------------------------------------------

def _statement_end(lines: list[str], start: int) -> int:
    """Index of the line that ends the import statement opened at *start*."""
    for index in range(start, len(lines)):
        line = lines[index].rstrip()
        if line.endswith(";") or IMPORT_SOURCE_PATTERN.search(line):
            return index
    return start


def last_declaration_index(lines: list[str]) -> int:
    """Index of the line ending the last ``import`` statement, or ``-1``.

    A multi-line import (``import {`` ... ``} from "./x.ts";``) ends on its
    ``from`` line, so new declarations never land inside its braces.
    """
    for index in range(len(lines) - 1, -1, -1):
        if IMPORT_LINE_PATTERN.match(lines[index]):
            return _statement_end(lines, index)
    return -1


def find_marker_index(lines: list[str], marker: str = LOAD_MARKER) -> int:
    """Index of the first line containing *marker*, or ``-1``."""
    for index, line in enumerate(lines):
        if marker in line:
            return index
    return -1


def activation_insert_index(lines: list[str], marker: str = LOAD_MARKER) -> int | None:
    """Line index after which new activation calls belong.

    Walks the lifecycle block that starts at *marker* until the brace opened
    there is closed again (``});``, ``}, false);`` ...) and returns the last
    activation call inside it, or the marker line itself when the block holds
    none.  Returns ``None`` when the marker is absent.
    """
    start = find_marker_index(lines, marker)
    if start == -1:
        return None

    marker_line = lines[start]
    depth = brace_delta(marker_line[marker_line.index(marker):])
    opened = depth > 0
    last = start
    for index in range(start + 1, len(lines)):
        if opened and depth <= 0:
            break
        if ACTIVATION_PATTERN.search(lines[index]):
            last = index
        depth += brace_delta(lines[index])
        opened = opened or depth > 0
    return last


# ---------------------------------------------------------------------------
# Keyed spans
# ---------------------------------------------------------------------------

@dataclass(slots=True, frozen=True)
class Span:
    """Half-open character range ``[start, end)`` of a keyed value."""

    start: int
    value_start: int
    end: int
    balanced: bool = True

    def value(self, text: str) -> str:
        return text[self.value_start:self.end]


def key_pattern(key: str, opener: str) -> re.Pattern[str]:
    """Regex matching ``key:`` followed by *opener* (``[``, ``{`` or ``(``)."""
    return re.compile(rf"\b{re.escape(key)}:\s*{re.escape(opener)}")


def matching_close(text: str, open_index: int) -> int:
    """Index of the bracket closing the one at *open_index*, or ``-1``.

    Nested brackets of the same kind are counted; string literals and
    comments are skipped so brackets or apostrophes inside labels and notes
    do not disturb the depth.
    """
    opener = text[open_index]
    closer = _OPEN_TO_CLOSE[opener]
    depth = 0
    for index, char in code_positions(text, open_index):
        if char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return index
    return -1


def keyed_span(text: str, key: str, opener: str = "[") -> Span | None:
    """Locate ``key: <opener> ... <closer>`` in *text*.

    The value extends to the balanced closing bracket.  When the block is
    malformed and never balances, the span falls back to the first closing
    bracket after the opener and is flagged ``balanced=False``.
    """
    match = key_pattern(key, opener).search(text)
    if match is None:
        return None

    open_index = match.end() - 1
    close_index = matching_close(text, open_index)
    if close_index != -1:
        return Span(match.start(), open_index, close_index + 1)

    fallback = text.find(_OPEN_TO_CLOSE[opener], open_index + 1)
    if fallback == -1:
        return None
    return Span(match.start(), open_index, fallback + 1, balanced=False)
