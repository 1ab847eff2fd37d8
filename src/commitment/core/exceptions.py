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

"""
Custom exception hierarchy for the commitment CLI application.

Errors are grouped by origin: the agent layer (external AI tools), the git
layer, commit message validation, configuration and hook installation.
Everything the generation pipeline can raise derives from GenerationError so
callers only need a single except clause, while each subclass keeps the
structured fields (agent, stderr, timeout, offending text) needed to render
a useful hint.
"""

import contextlib
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from loguru import logger

if TYPE_CHECKING:
    from commitment.core.types import AgentName


class commitmentError(Exception):
    """
    Base exception for all commitment-related errors.

    All commitment-specific exceptions should inherit from this class
    to enable consistent error handling throughout the application.
    """

    def __init__(self, message: str, details: str = None):
        """
        Initialize a commitmentError.

        Args:
            message: Main error message for the user
            details: Additional hint or technical details
        """
        self.message = message
        self.details = details
        super().__init__(message)


class GenerationError(commitmentError):
    """
    Any failure surfaced by the commit message generation pipeline.
    """

    pass


# -----------------------------------------------------------------------------
# Agent layer
# -----------------------------------------------------------------------------


class AgentError(GenerationError):
    """
    Errors raised while invoking an external AI tool.
    """

    def __init__(self, agent: "AgentName", message: str, details: str = None):
        self.agent = agent
        super().__init__(message, details)


class AgentNotFoundError(AgentError):
    """Raised when the agent executable cannot be found in PATH."""

    def __init__(self, agent: "AgentName"):
        super().__init__(
            agent,
            f"agent `{agent}` not found in PATH",
            f"Install {agent.display_name}: {agent.install_url}",
        )


class AgentExecutionError(AgentError):
    """Raised when the agent process fails or exits with a non-zero status."""

    def __init__(self, agent: "AgentName", stderr: str):
        self.stderr = stderr
        super().__init__(
            agent,
            f"agent `{agent}` execution failed: {stderr}",
            "Run with --verbose for the full agent invocation log",
        )


class AgentTimeoutError(AgentError):
    """Raised when the agent does not finish within the time bound."""

    def __init__(self, agent: "AgentName", timeout_secs: int):
        self.timeout_secs = timeout_secs
        super().__init__(
            agent,
            f"agent `{agent}` timed out after {timeout_secs}s",
            "The agent may be waiting for authentication or the diff may be too large",
        )


class InvalidAgentResponseError(GenerationError):
    """
    Raised when an agent response cannot be used at all.

    Reserved: the response cleaner never fails, so nothing raises this today.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"invalid response from agent: {reason}")


# -----------------------------------------------------------------------------
# Git layer
# -----------------------------------------------------------------------------


class GitError(GenerationError):
    """
    Errors related to git operations.

    Raised when git commands fail or when git repository
    state is invalid for the requested operation.
    """

    pass


class NoStagedChangesError(GitError):
    """Raised when there is nothing staged to describe."""

    def __init__(self):
        super().__init__(
            "no staged changes found",
            "Stage your changes first: git add <files> (or git add -A for everything)",
        )


class GitCommandError(GitError):
    """Raised when a git command exits unsuccessfully."""

    def __init__(self, command: str, stderr: str):
        self.command = command
        self.stderr = stderr
        super().__init__(f"git command `{command}` failed: {stderr}")


class WorktreeResolutionError(GitError):
    """Raised when a `.git` file does not point at a usable git directory."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"failed to resolve git worktree directory at: {path}")


class GitIOError(GitError):
    """Raised when git cannot be run at all."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            "I/O error during git operation",
            reason,
        )


# -----------------------------------------------------------------------------
# Validation layer
# -----------------------------------------------------------------------------


class CommitValidationError(commitmentError):
    """
    A commit message failed conventional commit validation.
    """

    pass


class EmptyCommitMessageError(CommitValidationError):
    """Raised when the message is empty after trimming."""

    def __init__(self):
        super().__init__("commit message is empty")


class InvalidCommitFormatError(CommitValidationError):
    """Raised when the message does not start with `<type>(<scope>): <description>`."""

    def __init__(self, message: str):
        self.commit_message = message
        super().__init__(
            f"invalid conventional commit format: '{message}'\n"
            "Expected: <type>(<scope>): <description>"
        )


class CommitValidationFailedError(GenerationError):
    """
    The generated text did not validate.

    Wraps the validator's error message so the pipeline only ever raises
    GenerationError subclasses. commit_message is the trimmed text that was
    rejected.
    """

    def __init__(self, reason: str, commit_message: str = ""):
        self.reason = reason
        self.commit_message = commit_message
        super().__init__(
            f"commit validation failed: {reason}",
            "Valid types: feat, fix, docs, style, refactor, test, chore, perf, build, ci, revert",
        )


# -----------------------------------------------------------------------------
# Configuration and hooks
# -----------------------------------------------------------------------------


class ConfigurationError(commitmentError):
    """
    Configuration-related errors.

    Raised when configuration files or option values are invalid.
    """

    pass


class HookError(commitmentError):
    """Errors raised while installing a prepare-commit-msg hook."""

    pass


class HookConfigNotFoundError(HookError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"hook manager config not found: {path}")


class HookConfigParseError(HookError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"failed to parse hook manager config: {reason}")


class HookConfigWriteError(HookError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"failed to write hook manager config: {reason}")


class HookScriptCreationError(HookError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"failed to create hook script at: {path}")


class HookChmodError(HookError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"failed to make hook script executable: {path}")


class GitDirResolutionError(HookError):
    def __init__(self):
        super().__init__(
            "failed to resolve git directory",
            "Run this command from inside a git repository",
        )


# Convenience functions for creating common errors
def invalid_agent_name(value: str, choices: list[str]) -> ConfigurationError:
    """Create a ConfigurationError for an unknown agent."""
    return ConfigurationError(
        f"invalid agent name '{value}' (expected: {', '.join(choices)})"
    )


def invalid_hook_manager(value: str, choices: list[str]) -> ConfigurationError:
    """Create a ConfigurationError for an unknown hook manager."""
    return ConfigurationError(
        f"invalid hook manager '{value}' (expected: {', '.join(choices)})"
    )


class handle_commitment_exception(contextlib.ContextDecorator):
    """
    Log commitment errors and optionally exit with status 1.

    Usable as a decorator or as a `with` block. Exceptions that are not
    commitmentError propagate untouched.
    """

    def __init__(self, exit_on_fail: bool = True):
        self.exit_on_fail = exit_on_fail

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc is None or not isinstance(exc, commitmentError):
            return False

        logger.error(f"[red]Error:[/red] {exc.message}")
        if exc.details:
            logger.info(f"[yellow]Hint:[/yellow] {exc.details}")
        logger.opt(exception=exc).debug(f"{type(exc).__name__} raised")

        if self.exit_on_fail:
            raise typer.Exit(1) from exc
        return True

