"""Staged file discovery and re-staging.

The staged set is read once before any check runs. Fixers rewrite files
in place, so after a successful run the staged paths are added to the
index again to pick up their changes.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .common import JAVASCRIPT_EXTENSIONS, PHP_EXTENSIONS
from .errors import GitError, git_command_failed
from .executor import CommandExecutor

log = logging.getLogger(__name__)

# -z keeps paths unquoted; R reports the new path of a rename
STAGED_FILES_COMMAND = [
    "git", "diff", "--cached", "--name-only", "-z", "--diff-filter=ACMR"
]


@dataclass
class StagedFileSet:
    """Staged paths partitioned by extension."""

    php: list[str] = field(default_factory=list)
    javascript: list[str] = field(default_factory=list)
    other: list[str] = field(default_factory=list)

    @classmethod
    def from_paths(cls, paths: list[str]) -> "StagedFileSet":
        """Partition paths, preserving their order."""
        staged = cls()
        for path in paths:
            lower = path.lower()
            if lower.endswith(PHP_EXTENSIONS):
                staged.php.append(path)
            elif lower.endswith(JAVASCRIPT_EXTENSIONS):
                staged.javascript.append(path)
            else:
                staged.other.append(path)
        return staged

    @property
    def restageable(self) -> list[str]:
        """Paths that fixers may have rewritten."""
        return self.php + self.javascript


def _git(executor: CommandExecutor, repo_root: Path, command: list[str]) -> str:
    result = executor.run(command, repo_root)
    if not result.ok:
        raise GitError(git_command_failed(command, result.returncode, result.output))
    return result.output


def read_staged_files(
    repo_root: Path, executor: Optional[CommandExecutor] = None
) -> StagedFileSet:
    """Read the staged file set from the git index.

    Args:
        repo_root: Repository root.
        executor: Command executor (default: CommandExecutor()).

    Returns:
        StagedFileSet of added, copied, modified and renamed paths.

    Raises:
        GitError: If git reports an error.
    """
    executor = executor or CommandExecutor()
    output = _git(executor, repo_root, STAGED_FILES_COMMAND)
    paths = [path for path in output.split("\0") if path]
    staged = StagedFileSet.from_paths(paths)
    log.debug(
        f"Staged: {len(staged.php)} php, {len(staged.javascript)} javascript, "
        f"{len(staged.other)} other"
    )
    return staged


def restage_files(
    repo_root: Path,
    paths: list[str],
    executor: Optional[CommandExecutor] = None,
) -> list[str]:
    """Add paths to the index again.

    Args:
        repo_root: Repository root.
        paths: Repository-relative paths.
        executor: Command executor (default: CommandExecutor()).

    Returns:
        The paths that were re-added.

    Raises:
        GitError: If git add fails.
    """
    if not paths:
        return []
    executor = executor or CommandExecutor()
    _git(executor, repo_root, ["git", "add", "--"] + list(paths))
    log.debug(f"Re-staged {len(paths)} files")
    return list(paths)
