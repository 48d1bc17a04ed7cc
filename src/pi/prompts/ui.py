"""Question orchestration.

``PromptUI`` walks a question source in order, resolves each question's
dynamic fields against the answers gathered so far, runs the matching
widget and stores its value at the question's dotted path.
"""

from __future__ import annotations

import logging
import os
import signal
import sys
from collections.abc import AsyncIterable, Iterable, Mapping
from typing import Any

from pi.prompts.answers import has_answer, set_answer
from pi.prompts.config import PromptModuleOptions
from pi.prompts.errors import PromptConfigError, TTYError, UnknownPromptTypeError
from pi.prompts.events import AnswerEvent, EventStream
from pi.prompts.readline import ReadLine
from pi.prompts.resolvers import resolve_value

logger = logging.getLogger(__name__)

# Fields resolved against the answers before the widget is built
DYNAMIC_FIELDS = ("message", "default", "choices")

QuestionSource = Mapping[str, Any] | Iterable[Mapping[str, Any]] | AsyncIterable[Mapping[str, Any]]


def check_question(question: Any, prompts: Mapping[str, Any]) -> None:
    """Raise if *question* cannot be dispatched to a widget."""
    if not isinstance(question, Mapping):
        raise PromptConfigError(f"Question must be a mapping, got {type(question).__name__}")
    if not question.get("name"):
        raise PromptConfigError("Question is missing its `name`")
    if not question.get("type"):
        raise PromptConfigError(f"Question {question['name']!r} is missing its `type`")
    if question["type"] not in prompts:
        raise UnknownPromptTypeError(question["type"])


async def iterate_questions(questions: QuestionSource):
    """Yield questions from a mapping, an iterable or an async iterable."""
    if isinstance(questions, Mapping):
        yield questions
    elif isinstance(questions, AsyncIterable):
        async for question in questions:
            yield question
    else:
        for question in questions:
            yield question


class BaseUI:
    """Owns the line editor of a session and its shutdown."""

    def __init__(self, options: PromptModuleOptions | None = None) -> None:
        options = options or PromptModuleOptions()

        if options.should_check_tty() and not _is_tty(options.input):
            raise TTYError()

        self.rl = ReadLine(input=options.input, output=options.output)
        self._closed = False
        self._unsubscribe_sigint = self.rl.on("SIGINT", self.on_force_close)

    def on_force_close(self) -> None:
        """Ctrl+C: restore the terminal, then interrupt the process."""
        self.close()
        self.rl.output.write("\n")
        os.kill(os.getpid(), signal.SIGINT)

    def close(self) -> None:
        """Release the terminal. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._unsubscribe_sigint()

        self.rl.output.unmute()
        active = getattr(self, "active_prompt", None)
        if active is not None:
            active.close()

        self.rl.output.end()
        self.rl.pause()
        self.rl.close()


class PromptUI(BaseUI):
    """Runs questions one at a time and collects the answers.

    ``process`` publishes an :class:`AnswerEvent` per stored answer and
    completes (or fails) with the session.
    """

    def __init__(self, prompts: Mapping[str, Any], options: PromptModuleOptions | None = None) -> None:
        super().__init__(options)
        self.prompts = prompts
        self.answers: dict[str, Any] = {}
        self.process: EventStream[AnswerEvent, dict[str, Any]] = EventStream()
        self.active_prompt: Any = None

    async def run(self, questions: QuestionSource, answers: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Ask every eligible question and return the answers."""
        if answers is not None:
            self.answers = dict(answers)

        try:
            async for question in iterate_questions(questions):
                event = await self.process_question(question)
                if event is not None:
                    self.process.push(event)
        except BaseException as exc:
            self.process.fail(exc)
            raise
        finally:
            self.close()

        self.process.end(self.answers)
        return self.answers

    async def process_question(self, question: Mapping[str, Any]) -> AnswerEvent | None:
        check_question(question, self.prompts)
        name = question["name"]

        if has_answer(self.answers, name) and not question.get("ask_answered"):
            logger.debug("Skipping question %r: already answered", name)
            return None

        when = question.get("when")
        if when is not None and not await resolve_value(when, self.answers):
            logger.debug("Skipping question %r: `when` is false", name)
            return None

        # Private copy; the caller's question keeps its callables
        resolved = dict(question)
        for field in DYNAMIC_FIELDS:
            if field in resolved:
                resolved[field] = await resolve_value(resolved[field], self.answers)

        logger.debug("Asking %r with %r prompt", name, resolved["type"])
        prompt_cls = self.prompts[resolved["type"]]
        self.active_prompt = prompt_cls(resolved, self.rl, self.answers)
        answer = await self.active_prompt.run()

        set_answer(self.answers, name, answer)
        return AnswerEvent(name=name, answer=answer)


def _is_tty(stream: Any) -> bool:
    stream = stream if stream is not None else sys.stdin
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError):
        return False
