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

import typer
from colorama import Fore, Style
from loguru import logger
from rich.console import Console

from commitment.context import GlobalContext
from commitment.core.commit.conventional import CommitType
from commitment.core.exceptions import (
    AgentExecutionError,
    AgentNotFoundError,
    AgentTimeoutError,
    CommitValidationFailedError,
    GenerationError,
    GitCommandError,
    GitError,
    NoStagedChangesError,
)
from commitment.pipelines.generate_pipeline import generate_commit_message


def format_error(error: GenerationError) -> str:
    """Render a generation error with an actionable hint for the terminal."""
    lines = [f"{Fore.RED}Error:{Style.RESET_ALL} {error.message}"]

    match error:
        case AgentNotFoundError():
            lines.append(
                f"{Fore.YELLOW}Hint:{Style.RESET_ALL} install {error.agent.display_name} "
                f"from {error.agent.install_url}, or pick another agent with --agent"
            )
        case AgentExecutionError():
            lines.append(
                f"{Fore.YELLOW}Hint:{Style.RESET_ALL} check that `{error.agent.executable}` "
                "is logged in and works on its own, then retry with --verbose"
            )
        case AgentTimeoutError():
            lines.append(
                f"{Fore.YELLOW}Hint:{Style.RESET_ALL} no answer within {error.timeout_secs}s; "
                "try staging fewer changes or another agent"
            )
        case NoStagedChangesError():
            lines.append(
                f"{Fore.YELLOW}Hint:{Style.RESET_ALL} stage changes first:\n"
                "  git add <file>    stage specific files\n"
                "  git add -A        stage everything"
            )
        case CommitValidationFailedError():
            valid_types = ", ".join(t.value for t in CommitType)
            lines.append(
                f"{Fore.YELLOW}Hint:{Style.RESET_ALL} the agent did not answer with a "
                f"conventional commit. Valid types: {valid_types}"
            )
        case GitCommandError():
            lines.append(
                f"{Fore.YELLOW}Hint:{Style.RESET_ALL} make sure you are inside a git repository"
            )
        case GitError() if error.details:
            lines.append(f"{Fore.YELLOW}Hint:{Style.RESET_ALL} {error.details}")

    return "\n".join(lines)


def run_generate(global_context: GlobalContext) -> None:
    config = global_context.config
    agent = global_context.agent

    if global_context.silent:
        status = contextlib.nullcontext()
    else:
        status = Console(stderr=True).status(
            f"Generating commit message with {agent.name.display_name}..."
        )

    try:
        with status:
            commit = asyncio.run(
                generate_commit_message(
                    global_context.git, agent, global_context.signature
                )
            )
    except GenerationError as e:
        logger.debug(f"{type(e).__name__}: {e.message}")
        typer.echo(format_error(e), err=True)
        raise typer.Exit(1) from e

    message = commit.as_str()

    if config.message_only:
        typer.echo(message)
        return

    if config.dry_run:
        logger.info("[bold]Generated commit message (dry run, nothing committed):[/bold]")
        typer.echo(message)
        return

    try:
        global_context.git.commit(message)
    except GenerationError as e:
        typer.echo(format_error(e), err=True)
        raise typer.Exit(1) from e

    logger.success("Committed:")
    typer.echo(message)
