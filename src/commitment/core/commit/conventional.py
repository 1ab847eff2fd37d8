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
Conventional commit validation.

A message is accepted when its first line has the form

    type(scope): description

where type is one of the CommitType values (lowercase only), the optional
scope is lowercase alphanumerics and hyphens, and the description is any
non-empty text after a literal ": ". Lines after the first are not
constrained, so bodies, footers and signatures are kept as they are.
"""

import re
from enum import Enum

from commitment.core.exceptions import (
    EmptyCommitMessageError,
    InvalidCommitFormatError,
)


class CommitType(Enum):
    """Standard conventional commit types."""

    FEAT = "feat"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    TEST = "test"
    CHORE = "chore"
    PERF = "perf"
    BUILD = "build"
    CI = "ci"
    REVERT = "revert"

    @property
    def description(self) -> str:
        """Get human-readable description of commit type."""
        descriptions = {
            CommitType.FEAT: "A new feature",
            CommitType.FIX: "A bug fix",
            CommitType.DOCS: "Documentation only changes",
            CommitType.STYLE: "Changes that don't affect code meaning (formatting, etc.)",
            CommitType.REFACTOR: "Code change that neither fixes a bug nor adds a feature",
            CommitType.TEST: "Adding missing tests or correcting existing tests",
            CommitType.CHORE: "Changes to build process or auxiliary tools",
            CommitType.PERF: "A code change that improves performance",
            CommitType.BUILD: "Changes that affect the build system or dependencies",
            CommitType.CI: "Changes to CI/CD configuration files and scripts",
            CommitType.REVERT: "Reverts a previous commit",
        }
        return descriptions[self]


_TYPES = "|".join(t.value for t in CommitType)

CONVENTIONAL_COMMIT_PATTERN = re.compile(
    rf"^(?P<type>{_TYPES})(?:\((?P<scope>[a-z0-9\-]+)\))?: (?P<description>.+)"
)

_CONSTRUCT_TOKEN = object()


class ConventionalCommit:
    """
    A commit message known to match the conventional commit format.

    The only way to get one is ConventionalCommit.validate(); the wrapped
    text is the trimmed input, unchanged.
    """

    __slots__ = ("_text", "_match")

    def __init__(self, text: str, match: re.Match, _token: object = None):
        if _token is not _CONSTRUCT_TOKEN:
            raise TypeError(
                "ConventionalCommit cannot be constructed directly, use ConventionalCommit.validate()"
            )
        self._text = text
        self._match = match

    @classmethod
    def validate(cls, text: str) -> "ConventionalCommit":
        """
        Validate text as a conventional commit message.

        Raises:
            EmptyCommitMessageError: if the text is empty after trimming
            InvalidCommitFormatError: if the first line does not match the format
        """
        trimmed = text.strip()
        if not trimmed:
            raise EmptyCommitMessageError()

        match = CONVENTIONAL_COMMIT_PATTERN.match(trimmed)
        if match is None:
            raise InvalidCommitFormatError(trimmed)

        return cls(trimmed, match, _CONSTRUCT_TOKEN)

    def as_str(self) -> str:
        return self._text

    @property
    def commit_type(self) -> CommitType:
        return CommitType(self._match.group("type"))

    @property
    def scope(self) -> str | None:
        return self._match.group("scope")

    @property
    def description(self) -> str:
        """Remainder of the header line after `: `."""
        return self._match.group("description")

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"ConventionalCommit({self._text!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, ConventionalCommit):
            return NotImplemented
        return self._text == other._text

    def __hash__(self) -> int:
        return hash(self._text)


def validate_commit_message(text: str) -> ConventionalCommit:
    """Module level shortcut for ConventionalCommit.validate."""
    return ConventionalCommit.validate(text)
