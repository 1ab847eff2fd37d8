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

from commitment.core.commit.conventional import (
    CommitType,
    ConventionalCommit,
    validate_commit_message,
)
from commitment.core.exceptions import (
    EmptyCommitMessageError,
    InvalidCommitFormatError,
)

ALL_TYPES = [
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "test",
    "chore",
    "perf",
    "build",
    "ci",
    "revert",
]


def test_commit_type_enum_matches_accepted_types():
    assert [t.value for t in CommitType] == ALL_TYPES
    assert CommitType.FEAT.description == "A new feature"


@pytest.mark.parametrize("commit_type", ALL_TYPES)
def test_accepts_every_type(commit_type):
    commit = ConventionalCommit.validate(f"{commit_type}: do something")
    assert commit.commit_type is CommitType(commit_type)
    assert commit.scope is None
    assert commit.description == "do something"


@pytest.mark.parametrize("commit_type", ALL_TYPES)
def test_accepts_every_type_with_scope(commit_type):
    commit = ConventionalCommit.validate(f"{commit_type}(api-v2): do something")
    assert commit.scope == "api-v2"


@pytest.mark.parametrize(
    "text",
    [
        "FEAT: oops",
        "Feat: oops",
        "feat(API): uppercase scope",
        "feat(my_scope): underscore scope",
        "feat(): empty scope",
        "feature: not a type",
        "feat add missing colon",
        "feat:missing space",
        "feat: ",
        "feat:",
        "update readme",
        "feat!: breaking marker",
        "feat (api): space before scope",
    ],
)
def test_rejects_invalid_format(text):
    with pytest.raises(InvalidCommitFormatError) as exc_info:
        ConventionalCommit.validate(text)

    assert exc_info.value.commit_message == text.strip()


@pytest.mark.parametrize("text", ["", "   ", "\n\t\n"])
def test_rejects_empty(text):
    with pytest.raises(EmptyCommitMessageError):
        ConventionalCommit.validate(text)


def test_invalid_format_carries_trimmed_text():
    with pytest.raises(InvalidCommitFormatError) as exc_info:
        ConventionalCommit.validate("  FEAT: oops \n")

    assert exc_info.value.commit_message == "FEAT: oops"


@pytest.mark.parametrize(
    "text",
    [
        "feat: add feature",
        "  fix(parser): handle empty input  ",
        "\n\ndocs: update readme\n",
        "feat(cli): add flag\n\nLonger body explaining the flag.\n\nRefs: #12",
    ],
)
def test_validated_text_is_trimmed_input(text):
    commit = ConventionalCommit.validate(text)
    assert commit.as_str() == text.strip()
    assert str(commit) == text.strip()


def test_multiline_body_is_kept_unconstrained():
    text = "fix: handle crash\n\nThis body: has NO rules!\n\n🤖 Generated with Codex via commitment"
    commit = ConventionalCommit.validate(text)
    assert commit.as_str() == text
    assert commit.description == "handle crash"


def test_only_first_line_is_checked():
    with pytest.raises(InvalidCommitFormatError):
        ConventionalCommit.validate("Some intro\nfeat: add feature")


def test_cannot_construct_directly():
    with pytest.raises(TypeError):
        ConventionalCommit("feat: sneaky", None)


def test_equality_and_hash():
    a = ConventionalCommit.validate("feat: same")
    b = validate_commit_message("  feat: same\n")
    c = ConventionalCommit.validate("feat: other")

    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert len({a, b, c}) == 2
