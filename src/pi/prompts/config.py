"""Configuration for prompt modules."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TextIO


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes")


@dataclass
class PromptModuleOptions:
    """Where a prompt module reads and writes, and how strict it is.

    ``skip_tty_checks=None`` checks for a TTY unless a custom ``input`` was
    given or ``PI_PROMPTS_SKIP_TTY_CHECKS`` is set.
    """

    input: TextIO | None = None
    output: TextIO | None = None
    skip_tty_checks: bool | None = None

    def should_check_tty(self) -> bool:
        if self.skip_tty_checks is not None:
            return not self.skip_tty_checks
        if self.input is not None:
            return False
        return not _env_flag("PI_PROMPTS_SKIP_TTY_CHECKS")
