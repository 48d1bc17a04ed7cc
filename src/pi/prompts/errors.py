"""Exceptions raised by prompt sessions."""

from __future__ import annotations


class PromptError(Exception):
    is_tty_error = False


class TTYError(PromptError):
    """The session was started against a non-interactive terminal."""

    is_tty_error = True

    def __init__(self, message: str = "Prompts can not be meaningfully rendered in non-TTY environments") -> None:
        super().__init__(message)


class PromptConfigError(PromptError):
    """A question is malformed."""


class UnknownPromptTypeError(PromptConfigError):
    def __init__(self, prompt_type: object) -> None:
        super().__init__(f"Prompt for type {prompt_type!r} not found")
        self.prompt_type = prompt_type
