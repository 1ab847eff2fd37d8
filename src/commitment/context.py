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
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from commitment.core.agents import Agent, create_agent
from commitment.core.git.provider import GitProvider, SubprocessGitProvider
from commitment.core.types import AgentName


class GlobalConfig(BaseModel):
    agent: AgentName = Field(
        default=AgentName.CLAUDE,
        description="AI command line tool used to write the message (claude, codex, gemini)",
    )
    dry_run: bool = Field(
        default=False, description="Print the generated message without committing"
    )
    message_only: bool = Field(
        default=False,
        description="Print only the bare message on stdout (for git hooks)",
    )
    quiet: bool = Field(default=False, description="Suppress progress output")
    verbose: bool = Field(default=False, description="Enable verbose logging output")
    signature: bool = Field(
        default=True,
        description="Append a 'Generated with <agent>' signature to the message",
    )

    @field_validator("agent", mode="before")
    @classmethod
    def _parse_agent(cls, value):
        if isinstance(value, str):
            return AgentName.parse(value)
        return value


@dataclass(frozen=True)
class GlobalContext:
    repo_path: Path
    config: GlobalConfig
    git: GitProvider
    agent: Agent

    @property
    def signature(self) -> str | None:
        return self.agent.name.default_signature() if self.config.signature else None

    @property
    def silent(self) -> bool:
        return self.config.quiet or self.config.message_only

    @classmethod
    def from_global_config(cls, config: GlobalConfig, repo_path: Path):
        git = SubprocessGitProvider(repo_path)
        agent = create_agent(config.agent)

        return GlobalContext(repo_path, config, git, agent)
