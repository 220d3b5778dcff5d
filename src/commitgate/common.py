"""Common constants and configuration for CommitGate.

Configuration is read once from the environment into a GateConfig;
CLI flags override individual fields.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

# Sub-project directories, relative to the repository root
DEFAULT_BACKEND_DIR = "Backend"
DEFAULT_FRONTEND_DIR = "Frontend"

DEFAULT_PHPSTAN_MEMORY = "2G"

# Hook script tracked in the repository, and the installed git hook
DEFAULT_HOOK_SCRIPT = "pre-commit"
INSTALLED_HOOK_PATH = Path(".git") / "hooks" / "pre-commit"

DEFAULT_LOG_LEVEL = "WARNING"

# Extensions used to partition the staged file set
PHP_EXTENSIONS = (".php",)
JAVASCRIPT_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx", ".vue", ".mjs", ".cjs")


@dataclass(frozen=True)
class GateConfig:
    """Runtime configuration for a gate run."""

    repo_root: Path
    backend_dir: str = DEFAULT_BACKEND_DIR
    frontend_dir: str = DEFAULT_FRONTEND_DIR
    phpstan_memory: str = DEFAULT_PHPSTAN_MEMORY
    hook_script: str = DEFAULT_HOOK_SCRIPT
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def backend_path(self) -> Path:
        return self.repo_root / self.backend_dir

    @property
    def frontend_path(self) -> Path:
        return self.repo_root / self.frontend_dir

    @property
    def hook_script_path(self) -> Path:
        return self.repo_root / self.hook_script

    @property
    def installed_hook_path(self) -> Path:
        return self.repo_root / INSTALLED_HOOK_PATH

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GateConfig":
        """Build configuration from COMMITGATE_* environment variables.

        Args:
            environ: Mapping to read from (default: os.environ).

        Returns:
            GateConfig with defaults for unset variables.
        """
        if environ is None:
            environ = os.environ

        return cls(
            repo_root=Path(environ.get("COMMITGATE_REPO", ".")),
            backend_dir=environ.get("COMMITGATE_BACKEND_DIR", DEFAULT_BACKEND_DIR),
            frontend_dir=environ.get("COMMITGATE_FRONTEND_DIR", DEFAULT_FRONTEND_DIR),
            phpstan_memory=environ.get(
                "COMMITGATE_PHPSTAN_MEMORY", DEFAULT_PHPSTAN_MEMORY
            ),
            hook_script=environ.get("COMMITGATE_HOOK_SCRIPT", DEFAULT_HOOK_SCRIPT),
            log_level=environ.get("COMMITGATE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )

    def with_overrides(self, **overrides) -> "GateConfig":
        """Return a copy with the given non-None fields replaced."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "repo_root" in changes:
            changes["repo_root"] = Path(changes["repo_root"])
        return replace(self, **changes)
