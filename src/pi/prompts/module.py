"""Prompt modules: a widget registry plus the callable that starts sessions.

``prompt(questions)`` starts a session on the running event loop and
returns :class:`PendingAnswers` right away; awaiting it gives the answers.
Each call builds a fresh :class:`~pi.prompts.ui.PromptUI` and line editor.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable, Generator, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from pi.prompts.config import PromptModuleOptions
from pi.prompts.ui import PromptUI, QuestionSource, check_question
from pi.prompts.widgets import (
    CheckboxPrompt,
    ConfirmPrompt,
    InputPrompt,
    ListPrompt,
    NumberPrompt,
    PasswordPrompt,
)

logger = logging.getLogger(__name__)

DEFAULT_PROMPTS: Mapping[str, type] = MappingProxyType(
    {
        "list": ListPrompt,
        "input": InputPrompt,
        "number": NumberPrompt,
        "confirm": ConfirmPrompt,
        "checkbox": CheckboxPrompt,
        "password": PasswordPrompt,
    }
)


class PendingAnswers:
    """A running session: await it for the answers, or watch ``ui.process``."""

    def __init__(self, task: asyncio.Future[dict[str, Any]], ui: PromptUI) -> None:
        self.task = task
        self.ui = ui

    def __await__(self) -> Generator[Any, None, dict[str, Any]]:
        return self.task.__await__()

    def done(self) -> bool:
        return self.task.done()

    def result(self) -> dict[str, Any]:
        return self.task.result()

    def cancel(self) -> bool:
        return self.task.cancel()


class PromptModule:
    """Callable holding its own widget registry and stream options."""

    def __init__(self, options: PromptModuleOptions | None = None) -> None:
        self.options = options or PromptModuleOptions()
        self.prompts: dict[str, type] = dict(DEFAULT_PROMPTS)

    def __call__(self, questions: QuestionSource, answers: Mapping[str, Any] | None = None) -> PendingAnswers:
        """Start a session; configuration and TTY errors raise here."""
        if isinstance(questions, Mapping):
            check_question(questions, self.prompts)
        elif not isinstance(questions, (AsyncIterable, Iterator)):
            questions = list(questions)
            for question in questions:
                check_question(question, self.prompts)
        # Iterators are read lazily and checked per question, so a generator
        # sees the answers given so far

        ui = PromptUI(self.prompts, self.options)
        task = asyncio.ensure_future(ui.run(questions, answers))
        return PendingAnswers(task, ui)

    def register_prompt(self, name: str, prompt: type) -> PromptModule:
        """Add or replace the widget used for questions of type *name*."""
        logger.debug("Registering %r prompt: %s", name, getattr(prompt, "__name__", prompt))
        self.prompts[name] = prompt
        return self

    def restore_default_prompts(self) -> None:
        """Drop every registration and go back to the built-in widgets."""
        self.prompts.clear()
        self.prompts.update(DEFAULT_PROMPTS)


def create_prompt_module(options: PromptModuleOptions | None = None) -> PromptModule:
    return PromptModule(options)


# Shared module behind the top-level helpers
prompt = create_prompt_module()


def register_prompt(name: str, prompt_cls: type) -> PromptModule:
    return prompt.register_prompt(name, prompt_cls)


def restore_default_prompts() -> None:
    prompt.restore_default_prompts()
