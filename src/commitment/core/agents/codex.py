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

from commitment.core.agents.base import Agent, AgentInvocation
from commitment.core.types import AgentName


class CodexAgent(Agent):
    """Codex CLI via `codex exec`, prompt on stdin."""

    name = AgentName.CODEX

    def build_invocation(self, prompt: str) -> AgentInvocation:
        # exec refuses to run outside a trusted git repo without the skip flag
        return AgentInvocation(
            args=[self.name.executable, "exec", "--skip-git-repo-check"],
            input_text=prompt,
        )
