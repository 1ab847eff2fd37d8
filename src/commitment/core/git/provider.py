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

import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from loguru import logger

from commitment.core.exceptions import (
    GitCommandError,
    GitIOError,
    WorktreeResolutionError,
)
from commitment.core.logging.utils import preview
from commitment.core.types import StagedDiff


class GitProvider(ABC):
    """Source of staged changes, and the place a validated message is committed."""

    @abstractmethod
    def has_staged_changes(self) -> bool:
        """Return True if the index differs from HEAD."""

    @abstractmethod
    def get_staged_diff(self) -> StagedDiff:
        """Return the stat, name-status and full diff of the staged changes."""

    @abstractmethod
    def commit(self, message: str) -> None:
        """Create a commit from the index with the given message."""


class SubprocessGitProvider(GitProvider):
    def __init__(self, repo_path: str | Path | None = None) -> None:
        if isinstance(repo_path, Path):
            self.repo_path = repo_path
        else:
            self.repo_path = Path(repo_path or ".")

    def run_git(
        self,
        args: list[str],
        input_text: str | None = None,
        ok_codes: tuple[int, ...] = (0,),
    ) -> subprocess.CompletedProcess[str]:
        cmd = ["git"] + args
        logger.debug(f"Running git command: {' '.join(cmd)} cwd={self.repo_path}")

        try:
            result = subprocess.run(
                cmd,
                input=input_text,
                text=True,
                encoding="utf-8",
                errors="replace",
                capture_output=True,
                cwd=str(self.repo_path),
            )
        except OSError as e:
            raise GitIOError(str(e)) from e

        if result.stdout:
            logger.debug(f"git stdout (text): {preview(result.stdout)}")
        if result.stderr:
            logger.debug(f"git stderr (text): {preview(result.stderr)}")
        logger.debug(f"git returncode: {result.returncode}")

        if result.returncode not in ok_codes:
            logger.warning(
                f"Git command failed: {' '.join(cmd)} code={result.returncode}"
            )
            raise GitCommandError(" ".join(cmd), result.stderr.strip())

        return result

    def has_staged_changes(self) -> bool:
        # --quiet exits 1 when there are differences
        result = self.run_git(["diff", "--cached", "--quiet"], ok_codes=(0, 1))
        return result.returncode == 1

    def get_staged_diff(self) -> StagedDiff:
        stat = self.run_git(["diff", "--cached", "--stat"]).stdout
        name_status = self.run_git(["diff", "--cached", "--name-status"]).stdout
        diff = self.run_git(["diff", "--cached"]).stdout
        return StagedDiff(stat=stat, name_status=name_status, diff=diff)

    def commit(self, message: str) -> None:
        self.run_git(["commit", "-F", "-"], input_text=message)


def resolve_git_dir(path: Path) -> Path:
    """
    Locate the git directory for a working tree.

    `.git` is either the directory itself or, for worktrees and submodules,
    a file containing `gitdir: <path>`. Relative gitdir paths are taken
    relative to the working tree.
    """
    dot_git = path / ".git"

    if dot_git.is_dir():
        return dot_git

    if dot_git.is_file():
        try:
            content = dot_git.read_text(encoding="utf-8")
        except OSError as e:
            raise GitIOError(str(e)) from e

        for line in content.splitlines():
            value = line.removeprefix("gitdir:").strip()
            if line.startswith("gitdir:") and value:
                gitdir = Path(value)
                return gitdir if gitdir.is_absolute() else path / gitdir

    raise WorktreeResolutionError(path)
