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
from colorama import init
from dotenv import load_dotenv
from loguru import logger

from commitment.commands import init as init_command
from commitment.commands.generate import run_generate
from commitment.constants import APP_NAME
from commitment.context import GlobalConfig, GlobalContext
from commitment.core.config.config_loader import ConfigLoader
from commitment.core.exceptions import handle_commitment_exception
from commitment.core.logging.logging import setup_logger
from commitment.runtimeutil import (
    ensure_utf8_output,
    get_log_dir_callback,
    setup_signal_handlers,
    version_callback,
)

# Initialize colorama (colored output in terminal)
init(autoreset=True)

# main cli app
app = typer.Typer(
    help=f"{APP_NAME}: conventional commit messages for your staged changes, written by an AI CLI",
    pretty_exceptions_show_locals=False,
    pretty_exceptions_enable=False,
    add_completion=False,
)

app.command(name="init")(init_command.main)


def load_global_config(custom_config_path: str | None, **input_args):
    # input args are the "runtime overrides" for configs
    config_args = {}

    for key, item in input_args.items():
        if item is not None:
            config_args[key] = item

    return ConfigLoader.get_full_config(
        GlobalConfig,
        config_args,
        custom_config_path=Path(custom_config_path)
        if custom_config_path is not None
        else None,
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_path: bool = typer.Option(
        False,
        "--log-dir",
        "-LD",
        callback=get_log_dir_callback,
        is_eager=True,
        help="Show log path (where logs for commitment live) and exit",
    ),
    agent: str | None = typer.Option(
        None, "--agent", help="AI CLI to use: claude (default), codex or gemini"
    ),
    dry_run: bool | None = typer.Option(
        None, "--dry-run", help="Print the generated message without committing"
    ),
    message_only: bool | None = typer.Option(
        None,
        "--message-only",
        help="Print only the message on stdout (used by git hooks)",
    ),
    quiet: bool | None = typer.Option(
        None, "--quiet", "-q", help="Suppress progress output"
    ),
    verbose: bool | None = typer.Option(
        None, "--verbose", "-v", help="Enable verbose logging output"
    ),
    no_signature: bool = typer.Option(
        False, "--no-signature", help="Do not append the agent signature"
    ),
    cwd: str = typer.Option(".", "--cwd", help="Path to the git repository"),
    custom_config: str | None = typer.Option(
        None,
        "--custom-config",
        help="Path to a custom config file",
    ),
) -> None:
    """
    Generate a conventional commit message for the staged changes and commit it.

    Examples:
        # Generate with claude and commit
        commitment

        # Preview a codex message without committing
        commitment --agent codex --dry-run
    """
    if ctx.invoked_subcommand is not None:
        # subcommands set themselves up
        return

    with handle_commitment_exception(exit_on_fail=True):
        config, used_config_sources, _ = load_global_config(
            custom_config,
            agent=agent,
            dry_run=dry_run,
            message_only=message_only,
            quiet=quiet,
            verbose=verbose,
            signature=False if no_signature else None,
        )

        setup_logger(
            "generate",
            debug=config.verbose,
            silent=config.quiet or config.message_only,
        )
        logger.debug(f"Used {used_config_sources} to build global context.")

        global_context = GlobalContext.from_global_config(config, Path(cwd))
        setup_signal_handlers()

    run_generate(global_context)


def run_app():
    """Run the application with global exception handling."""
    # force stdout to be utf8
    ensure_utf8_output()
    # load any .env files (config values possibly set through env)
    load_dotenv()
    # launch cli
    app(prog_name=APP_NAME)


if __name__ == "__main__":
    run_app()
