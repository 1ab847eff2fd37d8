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

import json
from enum import Enum
from pathlib import Path

from loguru import logger

from commitment.core.exceptions import invalid_hook_manager
from commitment.core.hooks import installers
from commitment.core.types import AgentName

_ALIASES = {
    "plain-git": "git",
    "plain": "git",
    "simple_git_hooks": "simple-git-hooks",
}


class HookManager(str, Enum):
    LEFTHOOK = "lefthook"
    HUSKY = "husky"
    SIMPLE_GIT_HOOKS = "simple-git-hooks"
    PLAIN_GIT = "git"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "HookManager":
        normalized = value.strip().lower()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            raise invalid_hook_manager(value, [m.value for m in cls]) from None


def detect_hook_manager(cwd: Path) -> HookManager | None:
    """Guess the hook manager in use from its marker files."""
    if installers.find_lefthook_config(cwd) is not None:
        return HookManager.LEFTHOOK

    if (cwd / ".husky").is_dir():
        return HookManager.HUSKY

    package_json = cwd / "package.json"
    if package_json.is_file():
        try:
            data = json.loads(package_json.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.debug(f"Could not read {package_json}: {e}")
            data = None

        if isinstance(data, dict) and "simple-git-hooks" in data:
            return HookManager.SIMPLE_GIT_HOOKS

    return None


def install_hook(manager: HookManager, cwd: Path, agent: AgentName) -> Path:
    """Install the prepare-commit-msg hook and return the file that was written."""
    logger.debug(f"Installing {manager} hook for agent={agent} in {cwd}")

    match manager:
        case HookManager.LEFTHOOK:
            return installers.install_lefthook(cwd, agent)
        case HookManager.HUSKY:
            return installers.install_husky(cwd, agent)
        case HookManager.SIMPLE_GIT_HOOKS:
            return installers.install_simple_git_hooks(cwd, agent)
        case HookManager.PLAIN_GIT:
            return installers.install_plain_git(cwd, agent)

    raise ValueError(f"Unhandled hook manager: {manager!r}")
