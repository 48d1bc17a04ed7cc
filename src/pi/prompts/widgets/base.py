"""Base class shared by every widget.

A widget receives a question, the line editor and the answers gathered so
far; :meth:`BasePrompt.run` drives its render/edit/submit cycle and returns
the final value.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any, Callable

from pi.prompts.errors import PromptConfigError
from pi.prompts.keys import KeyPress
from pi.prompts.objects import Choices
from pi.prompts.resolvers import call_async
from pi.prompts.screen_manager import ScreenManager
from pi.prompts.style import bold, dim, green, italic, red, reset


def _always_valid(value: Any, answers: Any = None) -> bool:
    return True


def _identity(value: Any, answers: Any = None) -> Any:
    return value


class BasePrompt:
    """Common widget behavior: options, submission pipeline, question header."""

    # Show "[hidden]" instead of the default value in the header
    hide_default = False

    def __init__(self, question: Mapping[str, Any], rl: Any, answers: dict[str, Any] | None = None) -> None:
        self.answers = answers if answers is not None else {}
        self.status = "pending"

        # Private copy; the caller's question is never modified
        self.opt: dict[str, Any] = {
            "validate": _always_valid,
            "filter": _identity,
            "suffix": "",
            "prefix": green("?"),
            **question,
        }

        if not self.opt.get("name"):
            raise PromptConfigError("You must provide a `name` parameter")
        if not self.opt.get("message"):
            self.opt["message"] = f"{self.opt['name']}:"
        if isinstance(self.opt.get("choices"), list):
            self.opt["choices"] = Choices(self.opt["choices"], self.answers)

        self.rl = rl
        self.screen = ScreenManager(rl)

        self._result: asyncio.Future[Any] | None = None
        self._unsubscribers: list[Callable[[], None]] = []
        self._get_value: Callable[[str], Any] = lambda line: line
        self._queued_lines: list[str] = []
        self._submitting: asyncio.Task | None = None
        self.last_line = ""

    # -- lifecycle ----------------------------------------------------------

    async def run(self) -> Any:
        """Render the widget and wait for its final value."""
        self._result = asyncio.get_running_loop().create_future()
        self._listen("end", self._on_input_end)
        try:
            self._run()
            return await self._result
        finally:
            self._detach()
            if self._submitting is not None:
                self._submitting.cancel()

    def _run(self) -> None:
        raise NotImplementedError

    def close(self) -> None:
        self.screen.release_cursor()

    def _listen(self, event: str, handler: Callable[..., Any]) -> None:
        # Handler failures reject run() instead of escaping into the editor
        def guarded(*args: Any) -> None:
            try:
                handler(*args)
            except Exception as exc:
                self._reject(exc)

        self._unsubscribers.append(self.rl.on(event, guarded))

    def _detach(self) -> None:
        # Lines not consumed here belong to the next prompt
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        if self._queued_lines:
            self.rl.unshift_lines(self._queued_lines)
            self._queued_lines = []

    def _resolve(self, value: Any) -> None:
        if self._result is not None and not self._result.done():
            self._result.set_result(value)
            self._detach()

    def _reject(self, error: BaseException) -> None:
        if self._result is not None and not self._result.done():
            self._result.set_exception(error)
            self._detach()

    def _on_input_end(self) -> None:
        self._reject(EOFError("Input closed before the prompt was answered"))

    # -- submission ---------------------------------------------------------

    def _listen_for_submit(self, get_value: Callable[[str], Any]) -> None:
        """Run submitted lines through filter and validate, one at a time.

        Lines arriving while a submission is in flight wait their turn; the
        ones still waiting when the prompt settles go back to the editor.
        """
        self._get_value = get_value
        self._listen("line", self._on_line)

    def _on_line(self, line: str = "") -> None:
        self._queued_lines.append(line)
        if self._submitting is None:
            self._submit_next()

    def _submit_next(self) -> None:
        line = self._queued_lines.pop(0)
        self.last_line = line
        try:
            value = self._get_value(line)
        except Exception as exc:
            self._reject(exc)
            return
        self._submitting = asyncio.ensure_future(self._submit(value))
        self._submitting.add_done_callback(self._on_submitted)

    def _on_submitted(self, task: asyncio.Task) -> None:
        self._submitting = None
        if self._queued_lines and not self._result.done():
            self._submit_next()

    async def _submit(self, value: Any) -> None:
        try:
            filtered = await call_async(self.opt["filter"], value, self.answers)
            is_valid = await call_async(self.opt["validate"], filtered, self.answers)
            if is_valid is True:
                self._on_end(filtered)
            else:
                self._on_error(value, is_valid)
        except Exception as exc:
            self._reject(exc)

    def _on_end(self, value: Any) -> None:
        raise NotImplementedError

    def _on_error(self, value: Any, is_valid: Any) -> None:
        self.render(is_valid if isinstance(is_valid, str) else None)

    def _on_keypress(self, sequence: str, key: KeyPress) -> None:
        self.render()

    def render(self, error: str | None = None) -> None:
        raise NotImplementedError

    # -- rendering helpers --------------------------------------------------

    def get_question(self) -> str:
        """Header line: prefix, bold message, suffix and the default hint."""
        message = f"{self.opt['prefix']} {bold(self.opt['message'])}{self.opt['suffix']}{reset(' ')}"

        default = self.opt.get("default")
        if default is not None and self.status != "answered":
            if self.hide_default:
                message += italic(dim("[hidden] "))
            else:
                message += dim(f"({default}) ")

        return message

    @staticmethod
    def error_line(error: str | None) -> str:
        return f"{red('>>')} {error}" if error else ""
