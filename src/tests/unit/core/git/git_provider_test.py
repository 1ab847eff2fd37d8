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

import shutil
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from commitment.core.exceptions import (
    GitCommandError,
    GitIOError,
    WorktreeResolutionError,
)
from commitment.core.git.provider import SubprocessGitProvider, resolve_git_dir

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True)


@pytest.fixture
def repo(tmp_path):
    _git(tmp_path, "init", "-q")
    _git(tmp_path, "config", "user.email", "dev@example.com")
    _git(tmp_path, "config", "user.name", "Dev")
    _git(tmp_path, "config", "commit.gpgsign", "false")
    return tmp_path


# -----------------------------------------------------------------------------
# SubprocessGitProvider against a real repository
# -----------------------------------------------------------------------------


@requires_git
def test_no_staged_changes_in_fresh_repo(repo):
    (repo / "untracked.txt").write_text("hello\n")

    assert SubprocessGitProvider(repo).has_staged_changes() is False


@requires_git
def test_staged_diff_has_all_three_parts(repo):
    (repo / "hello.txt").write_text("hello\nworld\n")
    _git(repo, "add", "hello.txt")

    provider = SubprocessGitProvider(repo)
    assert provider.has_staged_changes() is True

    diff = provider.get_staged_diff()
    assert "hello.txt" in diff.stat
    assert "2 insertions(+)" in diff.stat
    assert diff.name_status.strip() == "A\thello.txt"
    assert "+world" in diff.diff


@requires_git
def test_commit_uses_message_verbatim(repo):
    (repo / "a.txt").write_text("a\n")
    _git(repo, "add", "a.txt")

    message = "feat: add a\n\n🤖 Generated with Claude via commitment"
    provider = SubprocessGitProvider(repo)
    provider.commit(message)

    log = subprocess.run(
        ["git", "log", "-1", "--format=%B"],
        cwd=repo,
        capture_output=True,
        text=True,
        encoding="utf-8",
        check=True,
    ).stdout
    assert log.strip() == message
    assert provider.has_staged_changes() is False


@requires_git
def test_failing_command_raises_git_command_error(tmp_path):
    provider = SubprocessGitProvider(tmp_path)

    with pytest.raises(GitCommandError) as exc_info:
        provider.get_staged_diff()

    assert exc_info.value.command.startswith("git diff --cached")
    assert exc_info.value.stderr


# -----------------------------------------------------------------------------
# Mocked subprocess
# -----------------------------------------------------------------------------


def test_has_staged_changes_maps_exit_codes():
    provider = SubprocessGitProvider(Path("."))

    for code, expected in ((0, False), (1, True)):
        completed = subprocess.CompletedProcess(["git"], code, "", "")
        with patch("subprocess.run", return_value=completed):
            assert provider.has_staged_changes() is expected


def test_has_staged_changes_other_exit_code_is_error():
    provider = SubprocessGitProvider(Path("."))
    completed = subprocess.CompletedProcess(["git"], 128, "", "fatal: not a git repository\n")

    with patch("subprocess.run", return_value=completed):
        with pytest.raises(GitCommandError) as exc_info:
            provider.has_staged_changes()

    assert exc_info.value.stderr == "fatal: not a git repository"


def test_missing_git_binary_is_io_error():
    provider = SubprocessGitProvider(Path("."))

    with patch("subprocess.run", side_effect=FileNotFoundError("git")):
        with pytest.raises(GitIOError):
            provider.get_staged_diff()


def test_commit_sends_message_on_stdin():
    provider = SubprocessGitProvider("repo")
    completed = subprocess.CompletedProcess(["git"], 0, "", "")

    with patch("subprocess.run", return_value=completed) as mock_run:
        provider.commit("fix: typo")

    args, kwargs = mock_run.call_args
    assert args[0] == ["git", "commit", "-F", "-"]
    assert kwargs["input"] == "fix: typo"
    assert kwargs["cwd"] == "repo"


# -----------------------------------------------------------------------------
# resolve_git_dir
# -----------------------------------------------------------------------------


def test_resolve_git_dir_directory(tmp_path):
    (tmp_path / ".git").mkdir()

    assert resolve_git_dir(tmp_path) == tmp_path / ".git"


def test_resolve_git_dir_relative_worktree(tmp_path):
    (tmp_path / ".git").write_text("gitdir: ../.git/worktrees/test\n")

    resolved = resolve_git_dir(tmp_path)
    assert resolved == tmp_path / "../.git/worktrees/test"
    assert resolved.parts[-3:] == (".git", "worktrees", "test")


def test_resolve_git_dir_absolute_worktree(tmp_path):
    actual = tmp_path / "elsewhere"
    actual.mkdir()
    worktree = tmp_path / "wt"
    worktree.mkdir()
    (worktree / ".git").write_text(f"gitdir: {actual}")

    assert resolve_git_dir(worktree) == actual


def test_resolve_git_dir_missing(tmp_path):
    with pytest.raises(WorktreeResolutionError) as exc_info:
        resolve_git_dir(tmp_path)

    assert exc_info.value.path == tmp_path


def test_resolve_git_dir_file_without_gitdir(tmp_path):
    (tmp_path / ".git").write_text("garbage\n")

    with pytest.raises(WorktreeResolutionError):
        resolve_git_dir(tmp_path)
