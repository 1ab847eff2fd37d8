# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

from dataclasses import dataclass
from enum import Enum

from commitment.core.exceptions import invalid_agent_name

_DISPLAY_NAMES = {
    "claude": "Claude",
    "codex": "Codex",
    "gemini": "Gemini",
}

_INSTALL_URLS = {
    "claude": "https://docs.anthropic.com/en/docs/claude-cli",
    "codex": "https://github.com/phughk/codex",
    "gemini": "https://github.com/google/generative-ai-cli",
}


class AgentName(str, Enum):
    """The external AI command line tools that can write a commit message."""

    CLAUDE = "claude"
    CODEX = "codex"
    GEMINI = "gemini"

    def __str__(self) -> str:
        return self.value

    @property
    def cli_name(self) -> str:
        return self.value

    @property
    def executable(self) -> str:
        """Name of the binary looked up on PATH."""
        return self.value

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self.value]

    @property
    def install_url(self) -> str:
        return _INSTALL_URLS[self.value]

    def default_signature(self) -> str:
        return f"🤖 Generated with {self.display_name} via commitment"

    @classmethod
    def choices(cls) -> list[str]:
        return [agent.value for agent in cls]

    @classmethod
    def parse(cls, value: "str | AgentName") -> "AgentName":
        """Parse an agent name case-insensitively."""
        if isinstance(value, AgentName):
            return value

        try:
            return cls(value.strip().lower())
        except ValueError:
            raise invalid_agent_name(value, cls.choices()) from None


@dataclass(frozen=True)
class StagedDiff:
    """
    One snapshot of the staged changes, as three independent text blocks.

    stat: output of `git diff --cached --stat`
    name_status: output of `git diff --cached --name-status`, one file per line
    diff: the full unified diff
    """

    stat: str
    name_status: str
    diff: str
