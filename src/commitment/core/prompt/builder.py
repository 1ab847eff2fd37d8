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
Prompt construction for commit message generation.

The prompt is a fixed block of instructions followed by delimited sections
holding a derived change summary and the raw staged diff output. No code is
analysed here: understanding the change is left entirely to the agent.
"""

import re
from dataclasses import dataclass

from commitment.constants import (
    COMMIT_MESSAGE_END_MARKER,
    COMMIT_MESSAGE_START_MARKER,
    DIFF_TRUNCATION_MARKER,
    EMPTY_SECTION_PLACEHOLDER,
    LISTING_TRUNCATION_MARKER,
    MAX_DIFF_CHARS,
    MAX_LISTING_CHARS,
)
from commitment.core.types import StagedDiff

_INSERTIONS_PATTERN = re.compile(r"(\d+) insertions?\(\+\)")
_DELETIONS_PATTERN = re.compile(r"(\d+) deletions?\(-\)")

PROMPT_INSTRUCTIONS = f"""Generate a conventional commit message for the following git changes.

Format requirements:
- Start with type: feat, fix, docs, style, refactor, test, chore, perf, build, ci, or revert
- Optional scope in parentheses: type(scope): description
- Type and scope must be lowercase; scope may only contain letters, digits and hyphens
- Description: short summary in imperative mood
- Optional body: detailed explanation (separated by blank line)

Wrap your commit message with markers:
{COMMIT_MESSAGE_START_MARKER}
<your commit message here>
{COMMIT_MESSAGE_END_MARKER}

Example:
{COMMIT_MESSAGE_START_MARKER}
feat(parser): support quoted keys in config files

Quoted keys were previously rejected with a syntax error.
{COMMIT_MESSAGE_END_MARKER}
"""


@dataclass(frozen=True)
class ChangeSummary:
    files_changed: int
    insertions: int
    deletions: int


def summarize_changes(diff: StagedDiff) -> ChangeSummary:
    """
    Count changed files from the name-status listing and added/removed lines
    from the stat summary line. Missing counts default to zero.
    """
    files_changed = sum(1 for line in diff.name_status.splitlines() if line.strip())

    insertions = _INSERTIONS_PATTERN.search(diff.stat)
    deletions = _DELETIONS_PATTERN.search(diff.stat)

    return ChangeSummary(
        files_changed=files_changed,
        insertions=int(insertions.group(1)) if insertions else 0,
        deletions=int(deletions.group(1)) if deletions else 0,
    )


def _truncate(text: str, max_chars: int, marker: str) -> str:
    if len(text) <= max_chars:
        return text
    # str slicing is by code point so a character is never split
    return text[:max_chars] + marker


def truncate_diff(diff_text: str, max_chars: int = MAX_DIFF_CHARS) -> str:
    """Cut the diff to at most max_chars characters and mark the cut."""
    return _truncate(diff_text, max_chars, DIFF_TRUNCATION_MARKER)


def truncate_listing(text: str, max_chars: int = MAX_LISTING_CHARS) -> str:
    """Cut a stat or name-status listing to at most max_chars characters."""
    return _truncate(text, max_chars, LISTING_TRUNCATION_MARKER)


def _section(title: str, body: str) -> str:
    content = body.rstrip("\n") if body.strip() else EMPTY_SECTION_PLACEHOLDER
    return f"=== {title} ===\n{content}\n"


def build_prompt(diff: StagedDiff, max_diff_chars: int = MAX_DIFF_CHARS) -> str:
    """Build the agent prompt for one snapshot of staged changes."""
    summary = summarize_changes(diff)

    sections = [
        PROMPT_INSTRUCTIONS,
        "=== CHANGE SUMMARY ===\n"
        f"Files changed: {summary.files_changed}\n"
        f"Lines added: {summary.insertions}\n"
        f"Lines removed: {summary.deletions}\n",
        _section("FILE STATISTICS", truncate_listing(diff.stat)),
        _section("FILE STATUS", truncate_listing(diff.name_status)),
        _section("FULL DIFF", truncate_diff(diff.diff, max_diff_chars)),
    ]

    return "\n".join(sections)
