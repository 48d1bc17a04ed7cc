"""Keyboard input parsing for the line editor.

Splits a chunk of raw terminal input into individual key sequences and
names each one with the identifiers widgets match against, such as
``"enter"``, ``"up"`` or ``"ctrl+c"``.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Legacy escape sequences
# ---------------------------------------------------------------------------

LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[7~": "home",
    "\x1b[8~": "end",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
    "\x1b[Z": "shift+tab",
}

LEGACY_CTRL_SEQUENCES: dict[str, str] = {
    "\x1b[1;5A": "up",
    "\x1b[1;5B": "down",
    "\x1b[1;5C": "right",
    "\x1b[1;5D": "left",
}

LEGACY_SHIFT_SEQUENCES: dict[str, str] = {
    "\x1b[1;2A": "up",
    "\x1b[1;2B": "down",
    "\x1b[1;2C": "right",
    "\x1b[1;2D": "left",
}


@dataclass(frozen=True)
class KeyPress:
    """A decoded key: its identifier plus the modifier flags."""

    name: str
    sequence: str
    ctrl: bool = False
    shift: bool = False
    meta: bool = False

    @property
    def printable(self) -> bool:
        return not (self.ctrl or self.meta) and len(self.sequence) == 1 and self.sequence.isprintable()


# ---------------------------------------------------------------------------
# Sequence splitting
# ---------------------------------------------------------------------------

def _csi_end(data: str, start: int) -> int:
    """Index just past a CSI/SS3 sequence whose introducer ends at *start*."""
    i = start
    while i < len(data):
        if "\x40" <= data[i] <= "\x7e":
            return i + 1
        i += 1
    return len(data)


def split_sequences(data: str) -> list[str]:
    """Split raw input into one string per key press.

    Escape sequences (``ESC [ ... final``, ``ESC O x``, ``ESC x``) stay
    together; every other character is its own key. ``\\r\\n`` counts as a
    single enter.
    """
    sequences: list[str] = []
    i = 0
    while i < len(data):
        ch = data[i]
        if ch == "\x1b" and i + 1 < len(data):
            nxt = data[i + 1]
            if nxt == "[":
                end = _csi_end(data, i + 2)
            elif nxt == "O" and i + 2 < len(data):
                end = i + 3
            else:
                end = i + 2
            sequences.append(data[i:end])
            i = end
            continue
        if ch == "\r" and data[i + 1 : i + 2] == "\n":
            sequences.append("\r")
            i += 2
            continue
        sequences.append(ch)
        i += 1
    return sequences


# ---------------------------------------------------------------------------
# parse_key
# ---------------------------------------------------------------------------

def parse_key(data: str) -> str | None:
    """Parse one raw key sequence and return its identifier, or ``None``.

    e.g. ``"a"``, ``"ctrl+a"``, ``"shift+up"``, ``"enter"``.
    """
    if not data:
        return None

    for seq_dict, mod_prefix in [
        (LEGACY_CTRL_SEQUENCES, "ctrl+"),
        (LEGACY_SHIFT_SEQUENCES, "shift+"),
        (LEGACY_KEY_SEQUENCES, ""),
    ]:
        if data in seq_dict:
            return mod_prefix + seq_dict[data]

    if data == "\x1b":
        return "escape"
    if data == "\r" or data == "\n":
        return "enter"
    if data == "\t":
        return "tab"
    if data == " ":
        return "space"
    if data == "\x7f" or data == "\x08":
        return "backspace"

    # Ctrl + letter (0x01 - 0x1a)
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # Alt + key (ESC prefix)
    if len(data) == 2 and data[0] == "\x1b":
        ch = data[1]
        if ch == "\r" or ch == "\n":
            return "alt+enter"
        if ch == "\x7f" or ch == "\x08":
            return "alt+backspace"
        if ch.isprintable():
            return "alt+" + ch.lower()

    if len(data) == 1 and data.isprintable():
        return data

    return None


def to_key_press(data: str) -> KeyPress:
    """Build a :class:`KeyPress` for *data*; unknown sequences keep the raw text as name."""
    key_id = parse_key(data) or data
    ctrl = key_id.startswith("ctrl+")
    shift = key_id.startswith("shift+") or (len(data) == 1 and data.isupper())
    meta = key_id.startswith("alt+")
    name = key_id
    if ctrl or meta or key_id.startswith("shift+"):
        name = key_id.split("+", 1)[1]
    elif len(name) == 1 and name.isalpha():
        name = name.lower()
    return KeyPress(name=name, sequence=data, ctrl=ctrl, shift=shift, meta=meta)
