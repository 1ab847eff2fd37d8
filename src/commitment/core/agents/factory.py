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

from commitment.core.agents.base import Agent
from commitment.core.agents.claude import ClaudeAgent
from commitment.core.agents.codex import CodexAgent
from commitment.core.agents.gemini import GeminiAgent
from commitment.core.agents.process import ProcessRunner
from commitment.core.types import AgentName


def create_agent(name: AgentName, runner: ProcessRunner | None = None) -> Agent:
    match name:
        case AgentName.CLAUDE:
            return ClaudeAgent(runner)
        case AgentName.CODEX:
            return CodexAgent(runner)
        case AgentName.GEMINI:
            return GeminiAgent(runner)

    raise ValueError(f"Unhandled agent: {name!r}")
