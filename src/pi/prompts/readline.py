"""Line editor used by the prompt widgets.

``ReadLine`` owns the input side (raw-mode terminal reading, key decoding,
a single editable line) and a :class:`MuteStream` output that widgets
silence while they repaint the screen themselves.
"""

from __future__ import annotations

import asyncio
import codecs
import os
import sys
import termios
from dataclasses import dataclass
from typing import Any, Callable, TextIO

from pi.prompts.keys import KeyPress, split_sequences, to_key_press
from pi.prompts.utils import cli_width, visible_width

_CLEAR_LINE = "\x1b[2K\r"


@dataclass
class CursorPos:
    rows: int
    cols: int


# ---------------------------------------------------------------------------
# MuteStream
# ---------------------------------------------------------------------------


class MuteStream:
    """Output wrapper that can be muted and ended.

    Writes made while muted, or after :meth:`end`, are dropped. When the
    ``PI_PROMPTS_WRITE_LOG`` environment variable names a file, every write
    that reaches the stream is appended to it as well.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self.muted: bool = False
        self.ended: bool = False
        self._write_log_path: str = os.environ.get("PI_PROMPTS_WRITE_LOG", "")

    @property
    def stream(self) -> TextIO:
        return self._stream

    @property
    def columns(self) -> int | None:
        columns = getattr(self._stream, "columns", None)
        if isinstance(columns, int):
            return columns
        try:
            return os.get_terminal_size(self._stream.fileno()).columns
        except (AttributeError, ValueError, OSError):
            return None

    def isatty(self) -> bool:
        try:
            return self._stream.isatty()
        except (AttributeError, ValueError):
            return False

    def mute(self) -> None:
        self.muted = True

    def unmute(self) -> None:
        self.muted = False

    def write(self, data: str) -> None:
        if self.muted or self.ended or not data:
            return
        self._stream.write(data)
        flush = getattr(self._stream, "flush", None)
        if flush is not None:
            flush()

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                pass

    def end(self) -> None:
        """Finalize the stream; the wrapped stream itself is left open."""
        self.ended = True


# ---------------------------------------------------------------------------
# ReadLine
# ---------------------------------------------------------------------------


class ReadLine:
    """Single-line editor reading keys from *input* and echoing to *output*.

    Events (subscribe with :meth:`on`):

    * ``"line"`` -- the submitted line text. Submissions made while nobody
      listens are queued and handed to the next ``"line"`` subscriber.
    * ``"keypress"`` -- ``(sequence, KeyPress)`` for every non-enter key.
    * ``"SIGINT"`` -- ctrl+c was pressed.
    * ``"end"`` -- the input reached end of file.
    * ``"close"`` -- the editor was closed.
    """

    def __init__(self, input: TextIO | None = None, output: TextIO | MuteStream | None = None) -> None:
        self.input = input if input is not None else sys.stdin
        self.output = output if isinstance(output, MuteStream) else MuteStream(output)
        self.line: str = ""
        self.cursor: int = 0
        self.closed: bool = False
        self.paused: bool = False

        self._prompt: str = ""
        self._listeners: dict[str, list[Callable[..., Any]]] = {}
        self._pending_lines: list[str] = []
        self._fd: int | None = _input_fd(self.input)
        self._original_termios: list | None = None
        self._reader_active: bool = False
        # Multibyte characters can straddle two reads
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

        if self._fd is not None and os.isatty(self._fd):
            self._enter_raw_mode()
        self.resume()

    # -- events -------------------------------------------------------------

    def on(self, event: str, handler: Callable[..., Any]) -> Callable[[], None]:
        """Register *handler* for *event*; returns an unsubscribe function."""
        handlers = self._listeners.setdefault(event, [])
        handlers.append(handler)

        if event == "line" and self._pending_lines:
            _call_soon(self._flush_pending_lines)

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def emit(self, event: str, *args: Any) -> None:
        handlers = list(self._listeners.get(event, ()))
        if event == "line" and not handlers:
            self._pending_lines.append(args[0] if args else "")
            return
        for handler in handlers:
            handler(*args)

    def unshift_lines(self, lines: list[str]) -> None:
        """Put *lines* back at the front of the queue of unclaimed submissions."""
        self._pending_lines[:0] = lines
        if self._listeners.get("line"):
            _call_soon(self._flush_pending_lines)

    def _flush_pending_lines(self) -> None:
        while self._pending_lines and self._listeners.get("line"):
            self.emit("line", self._pending_lines.pop(0))

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    # -- prompt and cursor --------------------------------------------------

    def set_prompt(self, prompt: str) -> None:
        self._prompt = prompt

    def get_prompt(self) -> str:
        return self._prompt

    @property
    def columns(self) -> int:
        return cli_width(self.output)

    def get_cursor_pos(self) -> CursorPos:
        """Row/column of the cursor relative to the start of the prompt line."""
        columns = self.columns
        offset = visible_width(self._prompt + self.line[: self.cursor])
        return CursorPos(rows=offset // columns, cols=offset % columns)

    def write(self, data: str) -> None:
        """Type *data* into the line as if it came from the keyboard."""
        self.feed(data)

    # -- input --------------------------------------------------------------

    def feed(self, data: str) -> None:
        """Decode raw input and apply it to the line."""
        for sequence in split_sequences(data):
            self._handle_key(sequence, to_key_press(sequence))

    def _handle_key(self, sequence: str, key: KeyPress) -> None:
        if key.ctrl and key.name == "c":
            self.emit("SIGINT")
            return

        if key.name == "enter" and not key.meta:
            line = self.line
            self.line = ""
            self.cursor = 0
            self.output.write("\n")
            self.emit("line", line)
            return

        if key.printable or key.name == "space":
            self._insert(sequence)
        elif key.name == "backspace":
            if self.cursor > 0:
                self.line = self.line[: self.cursor - 1] + self.line[self.cursor :]
                self.cursor -= 1
        elif key.name == "delete":
            self.line = self.line[: self.cursor] + self.line[self.cursor + 1 :]
        elif key.name == "left":
            self.cursor = max(0, self.cursor - 1)
        elif key.name == "right":
            self.cursor = min(len(self.line), self.cursor + 1)
        elif key.name == "home" or (key.ctrl and key.name == "a"):
            self.cursor = 0
        elif key.name == "end" or (key.ctrl and key.name == "e"):
            self.cursor = len(self.line)
        elif key.ctrl and key.name == "u":
            self.line = self.line[self.cursor :]
            self.cursor = 0
        elif key.ctrl and key.name == "k":
            self.line = self.line[: self.cursor]

        self._refresh_line()
        self.emit("keypress", sequence, key)

    def _insert(self, text: str) -> None:
        self.line = self.line[: self.cursor] + text + self.line[self.cursor :]
        self.cursor += len(text)

    def _refresh_line(self) -> None:
        # Only visible when a widget has not muted the output
        self.output.write(_CLEAR_LINE + self._prompt + self.line)

    # -- lifecycle ----------------------------------------------------------

    def pause(self) -> None:
        self.paused = True
        self._remove_reader()

    def resume(self) -> None:
        if self.closed:
            return
        self.paused = False
        self._start_reader()

    def close(self) -> None:
        """Stop reading, restore the terminal, and emit ``"close"`` once."""
        if self.closed:
            return
        self.closed = True
        self._remove_reader()
        self._restore_terminal()
        self.emit("close")

    # -- private: terminal modes ---------------------------------------------

    def _enter_raw_mode(self) -> None:
        fd = self._fd
        self._original_termios = termios.tcgetattr(fd)
        attrs = termios.tcgetattr(fd)
        # Keep output post-processing so "\n" still returns the carriage
        attrs[0] &= ~(termios.ICRNL | termios.IXON)
        attrs[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        attrs[6][termios.VMIN] = 1
        attrs[6][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSADRAIN, attrs)

    def _restore_terminal(self) -> None:
        if self._original_termios is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._original_termios)
            self._original_termios = None

    # -- private: stdin reading ------------------------------------------------

    def _start_reader(self) -> None:
        if self._reader_active or self._fd is None:
            return
        try:
            loop = asyncio.get_running_loop()
            loop.add_reader(self._fd, self._on_readable)
            self._reader_active = True
        except (RuntimeError, NotImplementedError, ValueError, OSError):
            # No running event loop, or the descriptor cannot be polled
            pass

    def _remove_reader(self) -> None:
        if not self._reader_active:
            return
        try:
            asyncio.get_running_loop().remove_reader(self._fd)
        except (RuntimeError, ValueError):
            pass
        self._reader_active = False

    def _on_readable(self) -> None:
        try:
            raw = os.read(self._fd, 4096)
        except OSError:
            return

        if not raw:
            self._remove_reader()
            self.feed(self._decoder.decode(b"", final=True))
            self.emit("end")
            return

        self.feed(self._decoder.decode(raw))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _input_fd(stream: Any) -> int | None:
    try:
        return stream.fileno()
    except (AttributeError, ValueError, OSError):
        return None


def _call_soon(callback: Callable[[], None]) -> None:
    try:
        asyncio.get_running_loop().call_soon(callback)
    except RuntimeError:
        callback()
