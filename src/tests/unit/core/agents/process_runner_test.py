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
import os
import sys
import time

import pytest

from commitment.core.agents.base import AgentInvocation
from commitment.core.agents.claude import ClaudeAgent
from commitment.core.agents.process import AsyncioProcessRunner
from commitment.core.exceptions import AgentExecutionError, AgentTimeoutError

pytestmark = pytest.mark.skipif(
    sys.platform == "win32", reason="uses POSIX process semantics"
)


def _python(code: str) -> list[str]:
    return [sys.executable, "-c", code]


@pytest.mark.asyncio
async def test_run_writes_stdin_and_collects_stdout():
    runner = AsyncioProcessRunner()
    result = await runner.run(
        _python("import sys; sys.stdout.write(sys.stdin.read().upper())"),
        b"hello",
    )

    assert result.returncode == 0
    assert result.stdout == b"HELLO"
    assert result.stderr == b""


@pytest.mark.asyncio
async def test_run_without_input_does_not_block_on_stdin():
    runner = AsyncioProcessRunner()
    result = await runner.run(_python("import sys; print(repr(sys.stdin.read()))"))

    assert result.stdout.strip() == b"''"


@pytest.mark.asyncio
async def test_run_reports_exit_code_and_stderr():
    runner = AsyncioProcessRunner()
    result = await runner.run(
        _python("import sys; sys.stderr.write('boom'); sys.exit(3)")
    )

    assert result.returncode == 3
    assert result.stderr == b"boom"


def test_which_missing_executable():
    assert AsyncioProcessRunner().which("commitment-no-such-binary-xyz") is None


@pytest.mark.asyncio
async def test_cancelled_run_kills_child(tmp_path):
    pid_file = tmp_path / "pid"
    code = (
        "import os, time\n"
        f"with open({str(pid_file)!r}, 'w') as f:\n"
        "    f.write(str(os.getpid()))\n"
        "time.sleep(30)\n"
    )

    runner = AsyncioProcessRunner()
    start = time.monotonic()
    with pytest.raises(TimeoutError):
        await asyncio.wait_for(runner.run(_python(code)), timeout=2.0)

    assert time.monotonic() - start < 10

    pid = int(pid_file.read_text())
    with pytest.raises(ProcessLookupError):
        os.kill(pid, 0)


class PythonAgent(ClaudeAgent):
    """Claude executor pointed at a python child process."""

    def __init__(self, code: str, timeout_secs: float):
        super().__init__(_ResolvingRunner(), timeout_secs)
        self.code = code

    def build_invocation(self, prompt: str) -> AgentInvocation:
        return AgentInvocation(args=_python(self.code), input_text=prompt)


class _ResolvingRunner(AsyncioProcessRunner):
    def which(self, executable):
        return sys.executable


@pytest.mark.asyncio
async def test_agent_end_to_end_with_real_process():
    agent = PythonAgent("import sys; print('feat: ' + sys.stdin.read())", 30)
    output = await agent.execute("add x")

    assert output.strip() == "feat: add x"


@pytest.mark.asyncio
async def test_agent_timeout_with_hung_process():
    agent = PythonAgent("import time; time.sleep(30)", 0.5)

    start = time.monotonic()
    with pytest.raises(AgentTimeoutError):
        await agent.execute("p")

    assert time.monotonic() - start < 10


@pytest.mark.asyncio
async def test_agent_timeout_with_grandchild_holding_pipes(tmp_path):
    pid_file = tmp_path / "grandchild"
    code = (
        "import subprocess, sys, time\n"
        "helper = subprocess.Popen([sys.executable, '-c', 'import time; time.sleep(20)'])\n"
        f"with open({str(pid_file)!r}, 'w') as f:\n"
        "    f.write(str(helper.pid))\n"
        "time.sleep(30)\n"
    )
    agent = PythonAgent(code, 1.5)

    start = time.monotonic()
    with pytest.raises(AgentTimeoutError):
        await agent.execute("p")

    # the helper inherited stdout/stderr; it must not keep the caller waiting
    assert time.monotonic() - start < 6
    assert pid_file.exists()


@pytest.mark.asyncio
async def test_agent_non_zero_exit_with_real_process():
    agent = PythonAgent(
        "import sys; sys.stdin.read(); sys.stderr.write('quota exceeded'); sys.exit(1)",
        30,
    )

    with pytest.raises(AgentExecutionError) as exc_info:
        await agent.execute("p")

    assert exc_info.value.stderr == "quota exceeded"
