"""pi-prompts: Interactive terminal prompts with in-place screen rendering."""

# Answer map helpers
from pi.prompts.answers import get_answer, has_answer, set_answer

# Configuration
from pi.prompts.config import PromptModuleOptions

# Errors
from pi.prompts.errors import PromptConfigError, PromptError, TTYError, UnknownPromptTypeError

# Event stream
from pi.prompts.events import AnswerEvent, EventStream

# Registry and entry points
from pi.prompts.module import (
    DEFAULT_PROMPTS,
    PendingAnswers,
    PromptModule,
    create_prompt_module,
    prompt,
    register_prompt,
    restore_default_prompts,
)

# Choices
from pi.prompts.objects import Choice, Choices, Separator

# Line editor
from pi.prompts.readline import MuteStream, ReadLine

# Screen rendering
from pi.prompts.screen_manager import RenderState, ScreenManager

# Orchestration
from pi.prompts.ui import BaseUI, PromptUI

# Utilities
from pi.prompts.utils import break_lines, cli_width, force_line_return, strip_ansi, visible_width

# Widgets
from pi.prompts.widgets import (
    BasePrompt,
    CheckboxPrompt,
    ConfirmPrompt,
    InputPrompt,
    ListPrompt,
    NumberPrompt,
    PasswordPrompt,
)

__all__ = [
    # Answers
    "get_answer",
    "has_answer",
    "set_answer",
    # Config
    "PromptModuleOptions",
    # Errors
    "PromptConfigError",
    "PromptError",
    "TTYError",
    "UnknownPromptTypeError",
    # Events
    "AnswerEvent",
    "EventStream",
    # Module
    "DEFAULT_PROMPTS",
    "PendingAnswers",
    "PromptModule",
    "create_prompt_module",
    "prompt",
    "register_prompt",
    "restore_default_prompts",
    # Objects
    "Choice",
    "Choices",
    "Separator",
    # Readline
    "MuteStream",
    "ReadLine",
    # Screen
    "RenderState",
    "ScreenManager",
    # UI
    "BaseUI",
    "PromptUI",
    # Utilities
    "break_lines",
    "cli_width",
    "force_line_return",
    "strip_ansi",
    "visible_width",
    # Widgets
    "BasePrompt",
    "CheckboxPrompt",
    "ConfirmPrompt",
    "InputPrompt",
    "ListPrompt",
    "NumberPrompt",
    "PasswordPrompt",
]
