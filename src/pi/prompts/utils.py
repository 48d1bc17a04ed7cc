"""Terminal text utilities: ANSI handling, width measurement, line breaking.

Provides functions for measuring visible terminal widths, stripping style
sequences, breaking lines at the terminal width with escape codes kept in
place, and querying the width of an output stream.
"""

from __future__ import annotations

import os
import re
import unicodedata
from typing import Any

import grapheme
import wcwidth as _wcwidth

DEFAULT_WIDTH = 80

# ---------------------------------------------------------------------------
# Regex patterns for ANSI / OSC / APC sequences
# ---------------------------------------------------------------------------

_STRIP_RE = re.compile(
    r"\x1b\[[0-9;?]*[@-~]"                 # CSI
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"  # OSC
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"   # APC
)

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------

def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Rules:
    1. Zero-width characters (control, combining marks, etc.) -> 0
    2. Emoji (contains VS16 U+FE0F, ZWJ, skin tones, flags) -> 2
    3. Otherwise delegate to wcwidth for the first codepoint.
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first_cp = ord(g[0])
    if first_cp >= 0x1F000 or 0x2600 <= first_cp <= 0x27BF:
        return 2

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(g[0]), 0)


def _char_width(ch: str) -> int:
    # Tabs count as 3 columns, matching visible_width
    if ch == "\t":
        return 3
    return _grapheme_width(ch)


# ---------------------------------------------------------------------------
# strip_ansi / visible_width
# ---------------------------------------------------------------------------

def strip_ansi(text: str) -> str:
    """Remove every style/control escape sequence from *text*."""
    if not text or "\x1b" not in text:
        return text
    return _STRIP_RE.sub("", text)


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*.

    * Strips ANSI escape sequences.
    * Treats tabs as 3 spaces.
    * Uses a fast ASCII path when possible.
    * Caches results for non-ASCII strings.
    """
    if not text:
        return 0

    stripped = strip_ansi(text)
    if not stripped:
        return 0

    stripped = stripped.replace("\t", "   ")

    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = 0
    for g in grapheme.graphemes(stripped):
        total += _grapheme_width(g)

    return _cache_width(stripped, total)


# ---------------------------------------------------------------------------
# extract_ansi_code
# ---------------------------------------------------------------------------

def extract_ansi_code(text: str, pos: int) -> tuple[str, int] | None:
    """Extract an ANSI escape sequence starting at *pos* in *text*.

    Returns ``(code, length)`` or ``None`` if there is no complete escape
    sequence at *pos*.
    """
    if pos >= len(text) or text[pos] != "\x1b":
        return None

    match = _STRIP_RE.match(text, pos)
    if match is None:
        return None
    code = match.group(0)
    return (code, len(code))


# ---------------------------------------------------------------------------
# Line breaking
# ---------------------------------------------------------------------------

def _break_line(line: str, width: int) -> list[str]:
    """Cut a single line (no embedded newlines) into chunks of *width* columns.

    Text between escape codes is walked one grapheme cluster at a time, so
    a cluster is never split across chunks and is measured the same way
    :func:`visible_width` measures it. Escape codes contribute no width and
    stay attached to the chunk in which they occur. A cluster wider than
    the remaining room starts a new chunk.
    """
    if width <= 0:
        return [line]

    chunks: list[str] = []
    current: list[str] = []
    current_width = 0
    i = 0

    while i < len(line):
        extracted = extract_ansi_code(line, i)
        if extracted is not None:
            code, length = extracted
            current.append(code)
            i += length
            continue

        end = line.find("\x1b", i + 1)
        if end == -1:
            end = len(line)

        for g in grapheme.graphemes(line[i:end]):
            w = _char_width(g)
            if current_width + w > width and current_width > 0:
                chunks.append("".join(current))
                current = []
                current_width = 0

            current.append(g)
            current_width += w
        i = end

    chunks.append("".join(current))
    return chunks


def break_lines(lines: list[str], width: int) -> list[list[str]]:
    """Break every line longer than *width* columns into chunks.

    Normalizes the natural line-return behavior across terminals: the
    returned chunks never exceed *width* so the terminal never autowraps.
    """
    return [_break_line(line, width) for line in lines]


def force_line_return(content: str, width: int) -> str:
    """Return *content* with explicit newlines wherever a line exceeds *width*."""
    return "\n".join(
        chunk for chunks in break_lines(content.split("\n"), width) for chunk in chunks
    )


def height(content: str) -> int:
    """Number of physical lines in *content*."""
    return len(content.split("\n"))


def last_line(content: str) -> str:
    return content.split("\n")[-1]


# ---------------------------------------------------------------------------
# Terminal width
# ---------------------------------------------------------------------------

def cli_width(output: Any = None, default: int = DEFAULT_WIDTH) -> int:
    """Return the column count of *output*, falling back to *default*.

    Consults, in order: the stream's ``columns`` attribute, the size of the
    terminal behind its file descriptor, and the ``CLI_WIDTH`` environment
    variable. Zero or invalid values are skipped.
    """
    columns = getattr(output, "columns", None) if output is not None else None
    if isinstance(columns, int) and columns > 0:
        return columns

    if output is not None and hasattr(output, "fileno"):
        try:
            size = os.get_terminal_size(output.fileno()).columns
        except (AttributeError, ValueError, OSError):
            size = 0
        if size > 0:
            return size

    env_width = os.environ.get("CLI_WIDTH", "")
    if env_width.isdigit() and int(env_width) > 0:
        return int(env_width)

    return default
