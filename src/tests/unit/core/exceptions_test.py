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

import pytest
import typer

from commitment.core.exceptions import (
    AgentError,
    AgentExecutionError,
    AgentNotFoundError,
    AgentTimeoutError,
    CommitValidationError,
    CommitValidationFailedError,
    ConfigurationError,
    EmptyCommitMessageError,
    GenerationError,
    GitCommandError,
    GitDirResolutionError,
    GitError,
    GitIOError,
    HookConfigNotFoundError,
    HookError,
    InvalidAgentResponseError,
    InvalidCommitFormatError,
    NoStagedChangesError,
    WorktreeResolutionError,
    commitmentError,
    handle_commitment_exception,
    invalid_agent_name,
)
from commitment.core.types import AgentName


def test_exception_inheritance():
    assert issubclass(GenerationError, commitmentError)
    assert issubclass(AgentError, GenerationError)
    assert issubclass(AgentNotFoundError, AgentError)
    assert issubclass(AgentExecutionError, AgentError)
    assert issubclass(AgentTimeoutError, AgentError)
    assert issubclass(InvalidAgentResponseError, GenerationError)
    assert issubclass(GitError, GenerationError)
    assert issubclass(NoStagedChangesError, GitError)
    assert issubclass(GitCommandError, GitError)
    assert issubclass(WorktreeResolutionError, GitError)
    assert issubclass(GitIOError, GitError)
    assert issubclass(CommitValidationFailedError, GenerationError)
    assert issubclass(EmptyCommitMessageError, CommitValidationError)
    assert issubclass(InvalidCommitFormatError, CommitValidationError)
    assert not issubclass(CommitValidationError, GenerationError)
    assert issubclass(ConfigurationError, commitmentError)
    assert issubclass(HookConfigNotFoundError, HookError)
    assert issubclass(GitDirResolutionError, HookError)


def test_agent_not_found_keeps_agent():
    exc = AgentNotFoundError(AgentName.CLAUDE)
    assert exc.agent is AgentName.CLAUDE
    assert exc.message == "agent `claude` not found in PATH"
    assert AgentName.CLAUDE.install_url in exc.details


def test_agent_execution_failed_keeps_stderr():
    exc = AgentExecutionError(AgentName.CODEX, "auth required")
    assert exc.agent is AgentName.CODEX
    assert exc.stderr == "auth required"
    assert exc.message == "agent `codex` execution failed: auth required"


def test_agent_timeout_keeps_bound():
    exc = AgentTimeoutError(AgentName.GEMINI, 120)
    assert exc.timeout_secs == 120
    assert exc.message == "agent `gemini` timed out after 120s"


def test_git_errors():
    assert NoStagedChangesError().message == "no staged changes found"
    assert "git add" in NoStagedChangesError().details

    exc = GitCommandError("git diff --cached", "fatal: not a git repository")
    assert exc.command == "git diff --cached"
    assert exc.message == "git command `git diff --cached` failed: fatal: not a git repository"


def test_validation_errors():
    assert EmptyCommitMessageError().message == "commit message is empty"

    exc = InvalidCommitFormatError("FEAT: oops")
    assert exc.commit_message == "FEAT: oops"
    assert exc.message == (
        "invalid conventional commit format: 'FEAT: oops'\n"
        "Expected: <type>(<scope>): <description>"
    )

    wrapped = CommitValidationFailedError(exc.message, exc.commit_message)
    assert wrapped.reason == exc.message
    assert wrapped.commit_message == "FEAT: oops"
    assert wrapped.message.startswith("commit validation failed: ")


def test_invalid_agent_name():
    exc = invalid_agent_name("gpt", ["claude", "codex", "gemini"])
    assert isinstance(exc, ConfigurationError)
    assert exc.message == "invalid agent name 'gpt' (expected: claude, codex, gemini)"


def test_handle_exception_exits_on_commitment_error():
    with pytest.raises(typer.Exit) as exc_info:
        with handle_commitment_exception(exit_on_fail=True):
            raise NoStagedChangesError()

    assert exc_info.value.exit_code == 1


def test_handle_exception_swallows_without_exit():
    with handle_commitment_exception(exit_on_fail=False):
        raise ConfigurationError("bad")


def test_handle_exception_ignores_other_errors():
    with pytest.raises(KeyError):
        with handle_commitment_exception(exit_on_fail=True):
            raise KeyError("x")


def test_handle_exception_as_decorator():
    @handle_commitment_exception(exit_on_fail=True)
    def failing():
        raise GitIOError("git not installed")

    with pytest.raises(typer.Exit):
        failing()
