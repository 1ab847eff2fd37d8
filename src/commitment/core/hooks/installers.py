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
prepare-commit-msg hook installers, one per hook manager.

Every installed hook runs `commitment --agent <name> --message-only` and
writes the result into the commit message file, but only for a plain
`git commit` (git passes no message source). If generation fails the file
is left alone and the commit continues with the usual editor.
"""

import json
import os
from pathlib import Path

import yaml
from loguru import logger

from commitment.constants import APP_NAME, HOOK_NAME
from commitment.core.exceptions import (
    GitDirResolutionError,
    GitError,
    HookChmodError,
    HookConfigNotFoundError,
    HookConfigParseError,
    HookConfigWriteError,
    HookScriptCreationError,
)
from commitment.core.git.provider import resolve_git_dir
from commitment.core.types import AgentName

LEFTHOOK_CONFIG_FILES = (
    "lefthook.yml",
    ".lefthook.yml",
    "lefthook.yaml",
    ".lefthook.yaml",
)


class _LefthookDumper(yaml.SafeDumper):
    pass


def _represent_str(dumper, data):
    # keep shell scripts readable and unwrapped as literal blocks
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_LefthookDumper.add_representer(str, _represent_str)


def hook_command(agent: AgentName) -> str:
    return f"{APP_NAME} --agent {agent} --message-only"


def hook_script(agent: AgentName) -> str:
    """Standalone sh script; git passes the message file as $1 and its source as $2."""
    return f"""#!/usr/bin/env sh
# {APP_NAME} hook

if [ -z "$2" ]; then
  msg=$({hook_command(agent)}) || exit 0
  printf '%s\\n' "$msg" > "$1"
fi
"""


def _write_executable(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError:
        raise HookScriptCreationError(path) from None

    try:
        os.chmod(path, 0o755)
    except OSError:
        raise HookChmodError(path) from None

    logger.debug(f"Wrote hook script {path}")


def find_lefthook_config(cwd: Path) -> Path | None:
    for name in LEFTHOOK_CONFIG_FILES:
        candidate = cwd / name
        if candidate.exists():
            return candidate
    return None


def install_lefthook(cwd: Path, agent: AgentName) -> Path:
    config_path = find_lefthook_config(cwd) or cwd / LEFTHOOK_CONFIG_FILES[0]

    config = {}
    if config_path.exists():
        content = config_path.read_text(encoding="utf-8")

        if f"{HOOK_NAME}:" in content:
            logger.warning(
                f"[yellow]Warning:[/yellow] {config_path.name} already has a {HOOK_NAME} hook, skipping installation"
            )
            logger.info(
                f"  -> To enable {APP_NAME}, add `{hook_command(agent)}` to your existing hook"
            )
            return config_path

        try:
            config = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise HookConfigParseError(str(e)) from e

        if not isinstance(config, dict):
            raise HookConfigParseError(f"{config_path.name} is not a mapping")

    # lefthook substitutes {1} with the message file and {2} with the source;
    # {2} stays unsubstituted (still contains a brace) for a plain commit
    run_script = f"""case "{{2}}" in
  *"{{"*)
    msg=$({hook_command(agent)}) || exit 0
    printf '%s\\n' "$msg" > "{{1}}"
    ;;
esac"""

    config[HOOK_NAME] = {
        "skip": ["merge", "rebase"],
        "commands": {
            APP_NAME: {
                "run": run_script,
                "interactive": True,
            }
        },
    }

    try:
        rendered = yaml.dump(
            config, Dumper=_LefthookDumper, sort_keys=False, allow_unicode=True
        )
        config_path.write_text(rendered, encoding="utf-8")
    except (yaml.YAMLError, OSError) as e:
        raise HookConfigWriteError(str(e)) from e

    return config_path


def install_husky(cwd: Path, agent: AgentName) -> Path:
    hook_path = cwd / ".husky" / HOOK_NAME
    _write_executable(hook_path, hook_script(agent))
    return hook_path


def install_simple_git_hooks(cwd: Path, agent: AgentName) -> Path:
    package_json = cwd / "package.json"

    if not package_json.exists():
        raise HookConfigNotFoundError(package_json)

    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise HookConfigParseError(str(e)) from e

    if not isinstance(data, dict):
        raise HookConfigParseError("package.json is not an object")

    hooks = data.setdefault("simple-git-hooks", {})
    if not isinstance(hooks, dict):
        raise HookConfigParseError("`simple-git-hooks` in package.json is not an object")

    # simple-git-hooks runs this line inside the generated hook, so $1/$2 are available
    hooks[HOOK_NAME] = (
        f'[ -n "$2" ] || {{ msg=$({hook_command(agent)}) && printf \'%s\\n\' "$msg" > "$1"; }} || true'
    )

    try:
        package_json.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        raise HookConfigWriteError(str(e)) from e

    logger.info("Run `npx simple-git-hooks` to apply the updated configuration")
    return package_json


def install_plain_git(cwd: Path, agent: AgentName) -> Path:
    try:
        git_dir = resolve_git_dir(cwd)
    except GitError:
        raise GitDirResolutionError() from None

    hook_path = git_dir / "hooks" / HOOK_NAME
    _write_executable(hook_path, hook_script(agent))
    return hook_path
