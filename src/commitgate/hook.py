"""Hook preconditions and installation.

A gate run requires two files: the hook script tracked in the repository
and the installed copy under .git/hooks. Both are made executable before
any check runs.
"""

import logging
import shutil
from pathlib import Path

from .common import GateConfig
from .errors import PreconditionError, hook_not_found, not_a_git_repo

log = logging.getLogger(__name__)

HOOK_CONTENT = """#!/usr/bin/env sh
# CommitGate pre-commit hook
exec commitgate run "$@"
"""


def make_executable(path: Path) -> None:
    """Add the executable bits to an existing file."""
    mode = path.stat().st_mode
    path.chmod(mode | 0o111)


def check_preconditions(config: GateConfig) -> None:
    """Verify that both hook files exist and make them executable.

    Args:
        config: Gate configuration.

    Raises:
        PreconditionError: If either file is missing.
    """
    required = [
        (config.hook_script_path, "Hook script"),
        (config.installed_hook_path, "Installed hook"),
    ]
    for path, role in required:
        if not path.is_file():
            raise PreconditionError(hook_not_found(str(path), role))
        make_executable(path)
        log.debug(f"{role} ready: {path}")


def install_hook(config: GateConfig, force: bool = False) -> list[Path]:
    """Install the hook script and copy it into .git/hooks.

    The tracked hook script is only written when absent (or with force),
    so local customizations survive a reinstall. The installed hook is
    always refreshed from it.

    Args:
        config: Gate configuration.
        force: Overwrite an existing hook script.

    Returns:
        Paths written.

    Raises:
        PreconditionError: If the repository has no .git/hooks directory.
    """
    hooks_dir = config.installed_hook_path.parent
    if not hooks_dir.is_dir():
        raise PreconditionError(not_a_git_repo(str(config.repo_root)))

    written = []
    script = config.hook_script_path
    if force or not script.exists():
        script.parent.mkdir(parents=True, exist_ok=True)
        script.write_text(HOOK_CONTENT, encoding="utf-8")
        written.append(script)
    make_executable(script)

    installed = config.installed_hook_path
    shutil.copyfile(script, installed)
    make_executable(installed)
    written.append(installed)

    log.info(f"Hook installed: {installed}")
    return written
