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

import re

from commitment.constants import COMMIT_MESSAGE_END_MARKER, COMMIT_MESSAGE_START_MARKER

_MARKED_PATTERN = re.compile(
    re.escape(COMMIT_MESSAGE_START_MARKER)
    + r"(.*?)"
    + re.escape(COMMIT_MESSAGE_END_MARKER),
    re.DOTALL,
)
_FENCE_PATTERN = re.compile(r"```[\w+-]*\n?(.*?)```", re.DOTALL)
_PREAMBLE_PATTERN = re.compile(
    r"\A\s*(?:here is|here's|the commit message|commit message)[^:\n]*:\s*",
    re.IGNORECASE,
)
_THINKING_PATTERN = re.compile(r"<thinking>.*?</thinking>", re.DOTALL)
_EXTRA_NEWLINES_PATTERN = re.compile(r"\n{3,}")


def _clean_pass(text: str) -> str:
    # agents are asked to wrap the answer in markers, so those win outright
    marked = _MARKED_PATTERN.search(text)
    if marked is not None:
        text = marked.group(1)

    text = _FENCE_PATTERN.sub(r"\1", text)
    text = _PREAMBLE_PATTERN.sub("", text, count=1)
    text = _THINKING_PATTERN.sub("", text)
    text = _EXTRA_NEWLINES_PATTERN.sub("\n\n", text)

    return text.strip()


def clean_ai_response(raw: str) -> str:
    """
    Strip AI response artifacts and return the bare commit message text.

    The stages run in a fixed order, each on the previous stage's output:
    marker extraction, code fence unwrapping, preamble stripping,
    <thinking> block removal, blank line collapsing, trimming.

    A later stage can expose an artifact an earlier one would have removed
    (a preamble behind a <thinking> block), so the stages are repeated until
    the text stops changing. Every stage only removes text, so this ends.
    Never fails: empty or whitespace-only input gives "".
    """
    text = raw
    while True:
        cleaned = _clean_pass(text)
        if cleaned == text:
            return cleaned
        text = cleaned
