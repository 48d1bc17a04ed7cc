"""ANSI styling helpers and figures used by the built-in widgets."""

from __future__ import annotations

# ── ANSI helpers ─────────────────────────────────────────────────────

_BOLD = "\x1b[1m"
_DIM = "\x1b[2m"
_ITALIC = "\x1b[3m"
_RED = "\x1b[31m"
_GREEN = "\x1b[32m"
_CYAN = "\x1b[36m"
_RESET = "\x1b[0m"

POINTER = "❯"
RADIO_ON = "◉"
RADIO_OFF = "◯"
LINE = "─"


def _wrap(code: str, text: str) -> str:
    return f"{code}{text}{_RESET}"


def bold(text: str) -> str:
    return _wrap(_BOLD, text)


def dim(text: str) -> str:
    return _wrap(_DIM, text)


def italic(text: str) -> str:
    return _wrap(_ITALIC, text)


def red(text: str) -> str:
    return _wrap(_RED, text)


def green(text: str) -> str:
    return _wrap(_GREEN, text)


def cyan(text: str) -> str:
    return _wrap(_CYAN, text)


def reset(text: str = "") -> str:
    return f"{_RESET}{text}"
