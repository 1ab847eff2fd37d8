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

from loguru import logger

from commitment.core.agents.base import Agent
from commitment.core.agents.cleaner import clean_ai_response
from commitment.core.commit.conventional import ConventionalCommit
from commitment.core.exceptions import (
    CommitValidationError,
    CommitValidationFailedError,
    NoStagedChangesError,
)
from commitment.core.git.provider import GitProvider
from commitment.core.logging.utils import preview, time_block
from commitment.core.prompt.builder import build_prompt


def append_signature(message: str, signature: str | None) -> str:
    if not signature:
        return message
    # the blank line keeps the signature out of the header line
    return f"{message}\n\n{signature}"


async def generate_commit_message(
    git: GitProvider,
    agent: Agent,
    signature: str | None = None,
) -> ConventionalCommit:
    """
    Turn the staged changes into a validated conventional commit message.

    Steps run once, in order, and the first failure is raised as is:
    staged check, diff, prompt, agent call, cleaning, signature, validation.

    Raises:
        NoStagedChangesError: nothing is staged (no prompt is built, no agent runs)
        GitError: the provider failed
        AgentError: the agent is missing, failed or timed out
        CommitValidationFailedError: the cleaned text is not a conventional commit
    """
    if not git.has_staged_changes():
        raise NoStagedChangesError()

    with time_block("Reading staged diff"):
        diff = git.get_staged_diff()

    prompt = build_prompt(diff)
    logger.debug(f"Built prompt: {len(prompt)} chars")

    with time_block(f"Agent {agent.name}"):
        raw = await agent.execute(prompt)

    logger.debug(f"Raw agent response: {preview(raw)}")

    cleaned = clean_ai_response(raw)
    message = append_signature(cleaned, signature)

    try:
        commit = ConventionalCommit.validate(message)
    except CommitValidationError as e:
        raise CommitValidationFailedError(e.message, message.strip()) from e

    logger.debug(f"Validated commit type={commit.commit_type.value} scope={commit.scope}")
    return commit
