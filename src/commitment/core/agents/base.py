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

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass

from loguru import logger

from commitment.constants import AGENT_TIMEOUT_SECS
from commitment.core.agents.process import AsyncioProcessRunner, ProcessRunner
from commitment.core.exceptions import (
    AgentError,
    AgentExecutionError,
    AgentNotFoundError,
    AgentTimeoutError,
)
from commitment.core.types import AgentName


@dataclass(frozen=True)
class AgentInvocation:
    """
    How one agent is called for a given prompt.

    input_text is written to stdin when set; otherwise the prompt travels in
    args and stdin is not connected.
    """

    args: list[str]
    input_text: str | None = None


class Agent(ABC):
    """
    Runs one external AI command line tool and returns its raw output.

    Subclasses only describe how the tool is invoked. Availability checks,
    the time bound and error classification are shared.
    """

    name: AgentName

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        timeout_secs: int = AGENT_TIMEOUT_SECS,
    ):
        self.runner = runner if runner is not None else AsyncioProcessRunner()
        self.timeout_secs = timeout_secs

    @abstractmethod
    def build_invocation(self, prompt: str) -> AgentInvocation:
        """Build the command line (and stdin payload) for a prompt."""

    async def execute(self, prompt: str) -> str:
        """
        Send the prompt to the agent and return its stdout verbatim.

        Raises:
            AgentNotFoundError: executable is not on PATH (nothing is spawned)
            AgentTimeoutError: the whole invocation exceeded timeout_secs
            AgentExecutionError: non-zero exit, or the process could not be run
        """
        executable = self.runner.which(self.name.executable)
        if executable is None:
            raise AgentNotFoundError(self.name)

        invocation = self.build_invocation(prompt)
        input_bytes = (
            invocation.input_text.encode("utf-8")
            if invocation.input_text is not None
            else None
        )

        logger.debug(
            "Running agent={agent} executable={path} argc={argc} stdin={stdin} timeout={timeout}s",
            agent=self.name,
            path=executable,
            argc=len(invocation.args),
            stdin=input_bytes is not None,
            timeout=self.timeout_secs,
        )

        try:
            result = await asyncio.wait_for(
                self.runner.run(invocation.args, input_bytes),
                timeout=self.timeout_secs,
            )
        except TimeoutError:
            raise AgentTimeoutError(self.name, self.timeout_secs) from None
        except AgentError:
            raise
        except Exception as e:
            raise AgentExecutionError(self.name, str(e)) from e

        stdout = result.stdout.decode("utf-8", errors="replace")
        stderr = result.stderr.decode("utf-8", errors="replace")

        logger.debug(
            "Agent {agent} exited with code={code} stdout={out_len} chars stderr={err_len} chars",
            agent=self.name,
            code=result.returncode,
            out_len=len(stdout),
            err_len=len(stderr),
        )

        if result.returncode != 0:
            raise AgentExecutionError(self.name, stderr)

        return stdout
