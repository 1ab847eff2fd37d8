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

from pathlib import Path

import typer
from loguru import logger

from commitment.core.exceptions import handle_commitment_exception
from commitment.core.hooks.hook_manager import (
    HookManager,
    detect_hook_manager,
    install_hook,
)
from commitment.core.logging.logging import setup_logger
from commitment.core.types import AgentName


def run_init(cwd: Path, hook_manager: str | None, agent: str) -> Path:
    agent_name = AgentName.parse(agent)

    if hook_manager is not None:
        manager = HookManager.parse(hook_manager)
    else:
        manager = detect_hook_manager(cwd)
        if manager is None:
            logger.debug("No hook manager detected, falling back to plain git hooks")
            manager = HookManager.PLAIN_GIT
        else:
            logger.info(f"Detected hook manager: [cyan]{manager}[/cyan]")

    path = install_hook(manager, cwd, agent_name)
    logger.success(
        f"Installed {manager} prepare-commit-msg hook ({agent_name}) in {path}"
    )
    return path


@handle_commitment_exception(exit_on_fail=True)
def main(
    hook_manager: str | None = typer.Option(
        None,
        "--hook-manager",
        help="lefthook, husky, simple-git-hooks or git (detected when omitted)",
    ),
    agent: str = typer.Option(
        "claude",
        "--agent",
        help="Agent the hook should run (claude, codex, gemini)",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging output"
    ),
) -> None:
    """
    Install a prepare-commit-msg hook that writes the commit message for you.

    Examples:
        # Detect the hook manager and use claude
        commitment init

        # Plain git hook running gemini
        commitment init --hook-manager git --agent gemini
    """
    setup_logger("init", debug=verbose)
    run_init(Path.cwd(), hook_manager, agent)
