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
import contextlib
import os
import shutil
import signal
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

# how long a killed agent may take to release its pipes before we stop waiting
_REAP_TIMEOUT_SECS = 1.0


@dataclass(frozen=True)
class ProcessResult:
    returncode: int
    stdout: bytes
    stderr: bytes


class ProcessRunner(ABC):
    """
    The operating system boundary used by agent executors.

    Agents never spawn processes themselves, so their timeout and error
    handling can be exercised with a fake runner.
    """

    @abstractmethod
    def which(self, executable: str) -> str | None:
        """Return the resolved path of an executable, or None if it is not on PATH."""

    @abstractmethod
    async def run(
        self, args: Sequence[str], input_bytes: bytes | None = None
    ) -> ProcessResult:
        """Run a process to completion and collect both output streams."""


class AsyncioProcessRunner(ProcessRunner):
    def which(self, executable: str) -> str | None:
        return shutil.which(executable)

    async def run(
        self, args: Sequence[str], input_bytes: bytes | None = None
    ) -> ProcessResult:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.PIPE
            if input_bytes is not None
            else asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            # own process group, so helpers the agent spawns can be killed with it
            start_new_session=os.name == "posix",
        )

        try:
            stdout, stderr = await process.communicate(input_bytes)
        except BaseException:
            # cancelled (timeout) or interrupted: never leave the child behind
            _kill_process_tree(process)

            # descendants that escaped the group may still hold the pipes open
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(process.wait(), timeout=_REAP_TIMEOUT_SECS)
            raise

        return ProcessResult(process.returncode, stdout, stderr)


def _kill_process_tree(process: asyncio.subprocess.Process) -> None:
    logger.debug(f"Killing process group of pid={process.pid}")

    if os.name == "posix":
        # the group outlives its leader while grandchildren are running
        with contextlib.suppress(ProcessLookupError, PermissionError):
            os.killpg(process.pid, signal.SIGKILL)
        return

    if process.returncode is None:
        with contextlib.suppress(ProcessLookupError):
            process.kill()
